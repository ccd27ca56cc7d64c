"""
Product dimension generation with categories and pricing.
"""

import logging
from datetime import timedelta
from decimal import Decimal

from ops_datagen.config.models import PricePolicy
from ops_datagen.generators.distributions import (
    cycled_choice,
    uniform_date,
    uniform_decimal,
    weighted_choice,
)
from ops_datagen.shared.models import Product
from ops_datagen.sourcedata.default import PRODUCT_NAME_ADJECTIVES, PRODUCT_NAME_WORDS

from .base_generator import BaseEntityGenerator

logger = logging.getLogger(__name__)

# Products launch up to this many days before the period starts
_LAUNCH_WINDOW_DAYS = 365


class ProductGenerator(BaseEntityGenerator):
    """Generates the product catalogue."""

    entity = "product"

    def generate(self, count: int) -> list[Product]:
        """
        Generate ``count`` products.

        Categories are cycled over the configured set so every category gets
        an equal share (within one). Pricing follows ``config.price_policy``:
        under ``independent`` cost and price are sampled separately and a
        product can be loss-making; under ``markup`` price always exceeds cost.
        """
        self._check_count(count)
        categories = self.config.labels.product_categories
        self._require_labels("product_categories", categories)

        products: list[Product] = []
        for index in range(count):
            product_id = self.ids.allocate()
            category = cycled_choice(index, categories)
            unit_cost, unit_price = self._sample_pricing()

            products.append(
                Product(
                    id=product_id,
                    code=f"PRD-{product_id:05d}",
                    name=self._product_name(category),
                    category=category,
                    unit_cost=unit_cost,
                    unit_price=unit_price,
                    created_at=uniform_date(
                        self.rng,
                        self.period.start - timedelta(days=_LAUNCH_WINDOW_DAYS),
                        self.period.start,
                    ),
                )
            )

        loss_making = sum(1 for p in products if p.is_loss_making)
        if loss_making:
            logger.warning(
                f"{loss_making} of {len(products)} products have unit_price <= unit_cost "
                f"(price_policy={self.config.price_policy.value})"
            )
        self._log_generated(products)
        return products

    def _sample_pricing(self) -> tuple[Decimal, Decimal]:
        unit_cost = uniform_decimal(self.rng, self.dist.unit_cost_min, self.dist.unit_cost_max)
        if self.config.price_policy == PricePolicy.MARKUP:
            markup = uniform_decimal(self.rng, self.dist.markup_min, self.dist.markup_max, places=4)
            unit_price = (unit_cost * markup).quantize(Decimal("0.01"))
            # Cent rounding on tiny costs can erase the markup
            if unit_price <= unit_cost:
                unit_price = unit_cost + Decimal("0.01")
        else:
            unit_price = uniform_decimal(
                self.rng, self.dist.unit_price_min, self.dist.unit_price_max
            )
        return unit_cost, unit_price

    def _product_name(self, category: str) -> str:
        adjective = weighted_choice(self.rng, PRODUCT_NAME_ADJECTIVES)
        words = PRODUCT_NAME_WORDS.get(category)
        noun = weighted_choice(self.rng, words) if words else f"{category} Item"
        return f"{adjective} {noun}"
