"""
Operations Data Generator

A synthetic operations dataset generator supporting:
- Product, supplier, procurement, sales, expense, inventory and budget data
- Derived-field consistency and referential integrity across entities
- Rollup, cross-grain join and budget variance analytics
"""

__version__ = "1.0.0"
__author__ = "Ops DataGen"
