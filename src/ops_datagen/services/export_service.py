"""
Dataset export orchestrator.

Writes the generated tables and rollup results to files through a format
writer. Layout::

    <base_dir>/tables/<table>.csv
    <base_dir>/rollups/<rollup>.csv

Files written before a failure are removed again so an export is never left
half done.
"""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from ops_datagen.analytics.rollup_engine import RollupResult
from ops_datagen.shared.dataset import TABLE_NAMES, GeneratedDataset
from ops_datagen.services.writers import BaseWriter, CSVWriter

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


class DatasetExporter:
    """
    Writes a generated dataset and its rollups to disk.

    Attributes:
        base_dir: Root directory for all exported files
        writer: Format writer used for every file
    """

    def __init__(self, base_dir: Path, writer: BaseWriter | None = None):
        self.base_dir = Path(base_dir)
        self.writer = writer or CSVWriter(index=False)
        self._written: list[Path] = []
        logger.info(f"DatasetExporter initialized with base_dir: {self.base_dir}")

    def table_path(self, table: str) -> Path:
        return self.base_dir / "tables" / f"{table}.{self.writer.extension}"

    def rollup_path(self, name: str) -> Path:
        return self.base_dir / "rollups" / f"{name}.{self.writer.extension}"

    def export_tables(
        self,
        dataset: GeneratedDataset,
        tables: Iterable[str] | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> dict[str, Path]:
        """
        Export entity tables.

        Args:
            dataset: Dataset to export
            tables: Table names to export (all seven by default)
            progress_callback: Optional ``callback(message, current, total)``

        Returns:
            Mapping of table name to written file
        """
        names = list(tables or TABLE_NAMES)
        frames = dataset.to_frames()
        result: dict[str, Path] = {}

        try:
            for current, name in enumerate(names, start=1):
                if progress_callback:
                    progress_callback(f"Exporting {name}", current, len(names))
                result[name] = self._write(frames[name], self.table_path(name))
        except Exception as e:
            logger.error(f"Table export failed: {e}", exc_info=True)
            self.cleanup()
            raise

        self._written.clear()
        logger.info(f"Table export complete: {len(result)} tables")
        return result

    def export_rollups(self, results: Iterable[RollupResult]) -> dict[str, Path]:
        """Export rollup results, one file per result name."""
        result: dict[str, Path] = {}
        try:
            for rollup in results:
                result[rollup.name] = self._write(rollup.frame, self.rollup_path(rollup.name))
        except Exception as e:
            logger.error(f"Rollup export failed: {e}", exc_info=True)
            self.cleanup()
            raise

        self._written.clear()
        logger.info(f"Rollup export complete: {len(result)} rollups")
        return result

    def _write(self, df, path: Path) -> Path:
        written = self.writer.write(df, path)
        self._written.append(written)
        return written

    def cleanup(self) -> int:
        """Remove files written by the export in progress."""
        removed = 0
        for path in self._written:
            if path.exists():
                path.unlink()
                removed += 1
        self._written.clear()
        if removed:
            logger.info(f"Removed {removed} partially exported files")
        return removed
