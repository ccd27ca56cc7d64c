"""
Derived-field resolution.

Derived columns are always recomputed from the base fields of the same record
and never sampled on their own. Resolution returns a new record, leaves the
input untouched, and is idempotent.
"""

from datetime import date
from decimal import Decimal
from typing import TypeVar

from ..shared.models import PurchaseOrder, Sale

R = TypeVar("R")


def compute_total_cost(quantity_ordered: int, unit_cost: Decimal) -> Decimal:
    return unit_cost * quantity_ordered


def compute_revenue(quantity_sold: int, unit_price: Decimal) -> Decimal:
    return unit_price * quantity_sold


def compute_delivery_delay_days(
    expected_delivery_date: date, actual_delivery_date: date | None
) -> int | None:
    """Signed day difference, or None while the order is undelivered."""
    if actual_delivery_date is None:
        return None
    return (actual_delivery_date - expected_delivery_date).days


def resolve_purchase_order(order: PurchaseOrder) -> PurchaseOrder:
    """Recompute total_cost and delivery_delay_days."""
    return order.model_copy(
        update={
            "total_cost": compute_total_cost(order.quantity_ordered, order.unit_cost),
            "delivery_delay_days": compute_delivery_delay_days(
                order.expected_delivery_date, order.actual_delivery_date
            ),
        }
    )


def resolve_sale(sale: Sale) -> Sale:
    """Recompute revenue."""
    return sale.model_copy(
        update={"revenue": compute_revenue(sale.quantity_sold, sale.unit_price)}
    )


class DerivedFieldResolver:
    """
    Stateless dispatcher applying the derived-field rules to any record.

    Records without derived fields are returned unchanged.
    """

    def resolve(self, record: R) -> R:
        if isinstance(record, PurchaseOrder):
            return resolve_purchase_order(record)
        if isinstance(record, Sale):
            return resolve_sale(record)
        return record

    def resolve_all(self, records: list[R]) -> list[R]:
        return [self.resolve(r) for r in records]

    @staticmethod
    def is_resolved(record: object) -> bool:
        """True when every derived field matches its base fields."""
        if isinstance(record, PurchaseOrder):
            return record.total_cost == compute_total_cost(
                record.quantity_ordered, record.unit_cost
            ) and record.delivery_delay_days == compute_delivery_delay_days(
                record.expected_delivery_date, record.actual_delivery_date
            )
        if isinstance(record, Sale):
            return record.revenue == compute_revenue(record.quantity_sold, record.unit_price)
        return True
