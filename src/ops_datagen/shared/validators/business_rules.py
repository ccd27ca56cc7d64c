"""
Business rule validator.

Validates derived-field identities and per-entity invariants.
"""

from datetime import date
from decimal import Decimal


class BusinessRuleValidator:
    """
    Validates business rules and data integrity constraints.

    Each rule recomputes the expected value from base fields and compares it
    with what the record carries.
    """

    @staticmethod
    def validate_total_cost(
        quantity_ordered: int, unit_cost: Decimal, total_cost: Decimal | None
    ) -> bool:
        """
        Validate that a purchase order's total cost is quantity times unit cost.

        Args:
            quantity_ordered: Units ordered
            unit_cost: Unit cost
            total_cost: Recorded total cost

        Returns:
            True if the identity holds exactly
        """
        return total_cost is not None and total_cost == unit_cost * quantity_ordered

    @staticmethod
    def validate_revenue(
        quantity_sold: int, unit_price: Decimal, revenue: Decimal | None
    ) -> bool:
        """Validate that a sale's revenue is quantity times unit price."""
        return revenue is not None and revenue == unit_price * quantity_sold

    @staticmethod
    def validate_delivery_delay(
        expected_delivery_date: date,
        actual_delivery_date: date | None,
        delivery_delay_days: int | None,
    ) -> bool:
        """
        Validate the delivery delay.

        The delay is NULL exactly when the actual delivery date is NULL;
        otherwise it is the signed day difference actual - expected.
        """
        if actual_delivery_date is None:
            return delivery_delay_days is None
        if delivery_delay_days is None:
            return False
        return delivery_delay_days == (actual_delivery_date - expected_delivery_date).days

    @staticmethod
    def validate_budget_grid(
        keys: list[tuple[str, date]], departments: int, months: int
    ) -> bool:
        """
        Validate that budget keys form a full department x month grid.

        Returns:
            True if there is exactly one row per (department, month)
        """
        return len(keys) == len(set(keys)) == departments * months
