"""
Sales fact generation.
"""

from ops_datagen.generators.distributions import (
    bernoulli_branch,
    uniform_date,
    uniform_int,
    weighted_choice,
)
from ops_datagen.shared.models import Product, Sale

from .base_generator import BaseEntityGenerator


class SaleGenerator(BaseEntityGenerator):
    """Generates sales transactions for existing products."""

    entity = "sale"

    def generate(self, count: int, products: list[Product] | None) -> list[Sale]:
        """
        Generate ``count`` sales.

        Basket size goes through a gate: with ``p_small_basket`` a small
        basket, otherwise a bulk basket. The unit price is the product's list
        price and revenue is derived from it.
        """
        self._check_count(count)
        self._require_parent("product", products)
        regions = self.config.labels.sales_regions
        self._require_labels("sales_regions", regions)

        sales: list[Sale] = []
        for _ in range(count):
            product = self._pick(products)
            sale = Sale(
                id=self.ids.allocate(),
                product_id=product.id,
                region=weighted_choice(self.rng, regions),
                sale_date=uniform_date(self.rng, self.period.start, self.period.end),
                quantity_sold=self._basket_quantity(),
                unit_price=product.unit_price,
            )
            sales.append(self.resolver.resolve(sale))

        self._log_generated(sales)
        return sales

    def _basket_quantity(self) -> int:
        return bernoulli_branch(
            self.rng,
            self.dist.p_small_basket,
            lambda: uniform_int(
                self.rng, self.dist.small_basket_min, self.dist.small_basket_max
            ),
            lambda: uniform_int(
                self.rng, self.dist.bulk_basket_min, self.dist.bulk_basket_max
            ),
        )
