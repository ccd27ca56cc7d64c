"""
Validators for referential integrity, derived fields and business rules.
"""

from .business_rules import BusinessRuleValidator
from .dataset import DatasetValidator
from .foreign_key import ForeignKeyValidator

__all__ = [
    "BusinessRuleValidator",
    "DatasetValidator",
    "ForeignKeyValidator",
]
