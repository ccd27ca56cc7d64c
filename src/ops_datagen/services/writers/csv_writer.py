"""
CSV format writer.
"""

import logging
from pathlib import Path

import pandas as pd

from ops_datagen.services.writers.base_writer import BaseWriter

logger = logging.getLogger(__name__)


class CSVWriter(BaseWriter):
    """
    Writes DataFrames to CSV with pandas.

    Date columns are written as ISO dates and undefined measures as empty
    fields.
    """

    extension = "csv"

    def __init__(self, index: bool = False, allow_empty: bool = True, **default_kwargs):
        """
        Initialize CSV writer.

        Args:
            index: Whether to write row indices (default: False)
            allow_empty: Write a header-only file for an empty DataFrame
            **default_kwargs: Default arguments passed to pandas to_csv()
        """
        self.index = index
        self.allow_empty = allow_empty
        self.default_kwargs = {"date_format": "%Y-%m-%d", **default_kwargs}

    def write(self, df: pd.DataFrame, output_path: Path, **kwargs) -> Path:
        if df.empty and not self.allow_empty:
            raise ValueError("Cannot write empty DataFrame")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        write_kwargs = {**self.default_kwargs, **kwargs}
        write_kwargs.setdefault("index", self.index)

        try:
            df.to_csv(output_path, **write_kwargs)
        except OSError as e:
            logger.error(f"Failed to write CSV to {output_path}: {e}")
            raise

        logger.info(f"Wrote {len(df):,} records to {output_path}")
        return output_path
