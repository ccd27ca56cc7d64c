"""
Inventory snapshot generation.
"""

from ops_datagen.generators.distributions import uniform_date, uniform_int
from ops_datagen.shared.models import InventorySnapshot, Product

from .base_generator import BaseEntityGenerator


class InventorySnapshotGenerator(BaseEntityGenerator):
    """Generates point-in-time stock levels for existing products."""

    entity = "inventory_snapshot"

    def generate(
        self, count: int, products: list[Product] | None
    ) -> list[InventorySnapshot]:
        """
        Generate ``count`` snapshots.

        Snapshots value stock at the product's standard unit cost.
        """
        self._check_count(count)
        self._require_parent("product", products)

        snapshots: list[InventorySnapshot] = []
        for _ in range(count):
            product = self._pick(products)
            snapshots.append(
                InventorySnapshot(
                    id=self.ids.allocate(),
                    product_id=product.id,
                    snapshot_date=uniform_date(self.rng, self.period.start, self.period.end),
                    stock_on_hand=uniform_int(self.rng, self.dist.stock_min, self.dist.stock_max),
                    reorder_level=uniform_int(
                        self.rng, self.dist.reorder_level_min, self.dist.reorder_level_max
                    ),
                    unit_cost=product.unit_cost,
                )
            )

        self._log_generated(snapshots)
        return snapshots
