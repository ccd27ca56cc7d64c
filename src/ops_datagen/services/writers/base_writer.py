"""
Abstract base class for data format writers.
"""

from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd


class BaseWriter(ABC):
    """
    Interface every format writer implements.

    Writers take a DataFrame view of a table or rollup and persist it; they
    never change the data they are given.
    """

    extension: str = ""

    @abstractmethod
    def write(self, df: pd.DataFrame, output_path: Path, **kwargs) -> Path:
        """
        Write a DataFrame to a single file.

        Args:
            df: DataFrame to write
            output_path: Path where the file should be written
            **kwargs: Additional format-specific options

        Returns:
            Path of the written file

        Raises:
            ValueError: If DataFrame is empty and empty output is not allowed
            OSError: If file cannot be written
        """
