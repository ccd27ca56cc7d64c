"""
Dataset generation orchestrator.

Runs the single-pass pipeline generate -> resolve for all seven entities.
Independent collections are generated in parallel; child collections wait
until their parents are fully materialized.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable

import numpy as np

from ops_datagen.config.models import GenerationConfig
from ops_datagen.shared.dataset import GeneratedDataset
from ops_datagen.shared.exceptions import ConfigurationError, ReferentialIntegrityError
from ops_datagen.shared.id_generator import SequentialIdAllocator
from ops_datagen.shared.logging_utils import get_structured_logger
from ops_datagen.shared.validators import DatasetValidator

from .entity_generators import (
    BudgetActualGenerator,
    ExpenseGenerator,
    InventorySnapshotGenerator,
    ProductGenerator,
    PurchaseOrderGenerator,
    SaleGenerator,
    SupplierGenerator,
)

logger = logging.getLogger(__name__)

# Fixed stream order: adding an entity must append, never reorder
STREAM_ORDER = (
    "products",
    "suppliers",
    "purchase_orders",
    "sales",
    "expenses",
    "inventory_snapshots",
    "budget_actuals",
)

# Entities with no foreign keys
INDEPENDENT_ENTITIES = ("products", "suppliers", "expenses", "budget_actuals")

# Entities whose parents must be materialized first
DEPENDENT_ENTITIES = ("purchase_orders", "sales", "inventory_snapshots")


class DatasetGenerator:
    """
    Main dataset generation engine.

    Each entity gets its own numpy random stream, spawned from the config seed
    in ``STREAM_ORDER``, and its own id allocator. Output is therefore the same
    for a given seed whatever the worker count.
    """

    def __init__(self, config: GenerationConfig):
        """
        Initialize dataset generator.

        Args:
            config: Generation configuration
        """
        self.config = config

        seeds = np.random.SeedSequence(config.seed).spawn(len(STREAM_ORDER))
        self._rngs = {
            name: np.random.default_rng(seed) for name, seed in zip(STREAM_ORDER, seeds)
        }
        self.id_allocators = {name: SequentialIdAllocator(name) for name in STREAM_ORDER}
        self._slog = get_structured_logger(__name__)

        self.products_generator = ProductGenerator(
            config, self._rngs["products"], self.id_allocators["products"]
        )
        self.suppliers_generator = SupplierGenerator(
            config, self._rngs["suppliers"], self.id_allocators["suppliers"]
        )
        self.purchase_orders_generator = PurchaseOrderGenerator(
            config, self._rngs["purchase_orders"], self.id_allocators["purchase_orders"]
        )
        self.sales_generator = SaleGenerator(
            config, self._rngs["sales"], self.id_allocators["sales"]
        )
        self.expenses_generator = ExpenseGenerator(
            config, self._rngs["expenses"], self.id_allocators["expenses"]
        )
        self.inventory_generator = InventorySnapshotGenerator(
            config, self._rngs["inventory_snapshots"], self.id_allocators["inventory_snapshots"]
        )
        self.budget_generator = BudgetActualGenerator(
            config, self._rngs["budget_actuals"], self.id_allocators["budget_actuals"]
        )

    def validate_config(self) -> None:
        """
        Fail fast on label sets and parent volumes the requested volumes depend on.

        Raises:
            ConfigurationError: If a needed label table is empty
            ReferentialIntegrityError: If a child entity is requested without parents
        """
        volume = self.config.volume
        labels = self.config.labels
        required = [
            ("product", "product_categories", labels.product_categories, volume.products),
            ("supplier", "supplier_locations", labels.supplier_locations, volume.suppliers),
            ("sale", "sales_regions", labels.sales_regions, volume.sales),
            ("expense", "departments", labels.departments, volume.expenses),
            ("expense", "expense_categories", labels.expense_categories, volume.expenses),
            ("expense", "expense_types", labels.expense_types, volume.expenses),
            ("budget_actual", "departments", labels.departments, 1),
        ]
        for entity, field, table, count in required:
            if count > 0 and not table:
                raise ConfigurationError(
                    "Weighted pick table is empty", entity=entity, field=field
                )

        parents = [
            ("purchase_order", volume.purchase_orders, "supplier", volume.suppliers),
            ("purchase_order", volume.purchase_orders, "product", volume.products),
            ("sale", volume.sales, "product", volume.products),
            ("inventory_snapshot", volume.inventory_snapshots, "product", volume.products),
        ]
        for entity, count, parent, parent_count in parents:
            if count > 0 and parent_count == 0:
                raise ReferentialIntegrityError(entity, parent)

    def generate(self, validate: bool = True) -> GeneratedDataset:
        """
        Generate the complete dataset.

        Args:
            validate: Run dataset validation and log any violations

        Returns:
            GeneratedDataset with all seven collections

        Raises:
            ConfigurationError: On invalid parameters, before any record exists
        """
        self.validate_config()
        with self._slog.run():
            return self._generate(validate)

    def _generate(self, validate: bool) -> GeneratedDataset:
        started = time.perf_counter()
        volume = self.config.volume
        self._slog.info(
            "Dataset generation started",
            seed=self.config.seed,
            period_start=self.config.period.start,
            period_end=self.config.period.end,
        )

        try:
            independent: dict[str, Callable[[], list]] = {
                "products": lambda: self.products_generator.generate(volume.products),
                "suppliers": lambda: self.suppliers_generator.generate(volume.suppliers),
                "expenses": lambda: self.expenses_generator.generate(volume.expenses),
                "budget_actuals": self.budget_generator.generate,
            }
            results = self._run_stage(independent)

            products = results["products"]
            suppliers = results["suppliers"]
            dependent: dict[str, Callable[[], list]] = {
                "purchase_orders": lambda: self.purchase_orders_generator.generate(
                    volume.purchase_orders, suppliers, products
                )
                if volume.purchase_orders
                else [],
                "sales": lambda: self.sales_generator.generate(volume.sales, products)
                if volume.sales
                else [],
                "inventory_snapshots": lambda: self.inventory_generator.generate(
                    volume.inventory_snapshots, products
                )
                if volume.inventory_snapshots
                else [],
            }
            results.update(self._run_stage(dependent))
        except Exception as e:
            self._slog.error("Dataset generation failed", error=str(e))
            raise

        dataset = GeneratedDataset(
            period_start=self.config.period.start,
            period_end=self.config.period.end,
            **results,
        )

        if validate:
            violations = DatasetValidator().validate(dataset)
            for violation in violations[:20]:
                logger.warning(f"Dataset validation: {violation}")
            if violations:
                self._slog.warning("Dataset validation found issues", count=len(violations))

        self._slog.info(
            "Dataset generation completed",
            counts=dataset.counts(),
            elapsed_seconds=round(time.perf_counter() - started, 3),
        )
        return dataset

    def _run_stage(self, tasks: dict[str, Callable[[], list]]) -> dict[str, list]:
        """Run one fork-join stage; serially when a single worker is configured."""
        max_workers = min(self.config.performance.get_max_workers(), len(tasks))
        if max_workers <= 1:
            return {name: task() for name, task in tasks.items()}

        results: dict[str, list] = {}
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_name = {executor.submit(task): name for name, task in tasks.items()}
            for future in as_completed(future_to_name):
                name = future_to_name[future]
                results[name] = future.result()
                logger.debug(f"Stage task '{name}' finished with {len(results[name]):,} rows")
        return results
