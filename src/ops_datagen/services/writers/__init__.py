"""
Data format writers for dataset and rollup hand-off.
"""

from ops_datagen.services.writers.base_writer import BaseWriter
from ops_datagen.services.writers.csv_writer import CSVWriter

__all__ = [
    "BaseWriter",
    "CSVWriter",
]
