"""
Hand-off services: format writers and dataset export.
"""

from ops_datagen.services.export_service import DatasetExporter
from ops_datagen.services.writers import BaseWriter, CSVWriter

__all__ = ["BaseWriter", "CSVWriter", "DatasetExporter"]
