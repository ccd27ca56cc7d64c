"""
Purchase order fact generation with delivery timing.
"""

import logging
from datetime import date, timedelta

from ops_datagen.config.models import DeliveryPolicy
from ops_datagen.generators.distributions import (
    bernoulli_branch,
    uniform_date,
    uniform_int,
)
from ops_datagen.shared.models import Product, PurchaseOrder, Supplier

from .base_generator import BaseEntityGenerator

logger = logging.getLogger(__name__)


class PurchaseOrderGenerator(BaseEntityGenerator):
    """Generates purchase orders against existing suppliers and products."""

    entity = "purchase_order"

    def generate(
        self,
        count: int,
        suppliers: list[Supplier] | None,
        products: list[Product] | None,
    ) -> list[PurchaseOrder]:
        """
        Generate ``count`` purchase orders.

        Args:
            count: Number of orders
            suppliers: Materialized supplier collection
            products: Materialized product collection

        Returns:
            Resolved purchase orders (total_cost and delivery_delay_days set)

        Raises:
            ConfigurationError: If count is negative
            ReferentialIntegrityError: If a parent collection is empty or absent
        """
        self._check_count(count)
        self._require_parent("supplier", suppliers)
        self._require_parent("product", products)

        as_of = self.period.reporting_date
        orders: list[PurchaseOrder] = []
        in_transit = 0

        for _ in range(count):
            supplier = self._pick(suppliers)
            product = self._pick(products)
            order_date = uniform_date(self.rng, self.period.start, self.period.end)
            expected = order_date + timedelta(days=self._lead_days())
            actual = self._actual_delivery_date(expected)
            if actual is not None and actual > as_of:
                actual = None
                in_transit += 1

            order = PurchaseOrder(
                id=self.ids.allocate(),
                supplier_id=supplier.id,
                product_id=product.id,
                order_date=order_date,
                quantity_ordered=uniform_int(
                    self.rng, self.dist.order_quantity_min, self.dist.order_quantity_max
                ),
                unit_cost=product.unit_cost,
                expected_delivery_date=expected,
                actual_delivery_date=actual,
            )
            orders.append(self.resolver.resolve(order))

        logger.debug(f"{in_transit} purchase orders still in transit as of {as_of}")
        self._log_generated(orders)
        return orders

    def _lead_days(self) -> int:
        return uniform_int(self.rng, self.dist.lead_days_min, self.dist.lead_days_max)

    def _delay_days(self) -> int:
        return uniform_int(self.rng, self.dist.delay_days_min, self.dist.delay_days_max)

    def _actual_delivery_date(self, expected: date) -> date:
        """
        Sample the actual delivery date through the on-time gate.

        ``anchored``: on time lands on ``expected``; delayed adds the extra
        delay to ``expected``, so delayed orders are never early.

        ``resample``: both branches start from a freshly sampled order date
        and lead time, unrelated to this order's ``expected``. A "delayed"
        order can therefore arrive before its expected date.
        """
        if self.config.delivery_policy == DeliveryPolicy.RESAMPLE:
            return bernoulli_branch(
                self.rng,
                self.dist.p_ontime,
                self._resampled_schedule,
                lambda: self._resampled_schedule() + timedelta(days=self._delay_days()),
            )

        return bernoulli_branch(
            self.rng,
            self.dist.p_ontime,
            lambda: expected,
            lambda: expected + timedelta(days=self._delay_days()),
        )

    def _resampled_schedule(self) -> date:
        fresh_order_date = uniform_date(self.rng, self.period.start, self.period.end)
        return fresh_order_date + timedelta(days=self._lead_days())
