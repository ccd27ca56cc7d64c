"""
Whole-dataset validator.

Runs referential-integrity and business-rule checks over a generated dataset
and reports every violation found.
"""

import logging

from ..dataset import GeneratedDataset
from .business_rules import BusinessRuleValidator
from .foreign_key import ForeignKeyValidator

logger = logging.getLogger(__name__)


class DatasetValidator:
    """Checks a GeneratedDataset for integrity and derived-field consistency."""

    def __init__(self) -> None:
        self.rules = BusinessRuleValidator()

    def validate(self, dataset: GeneratedDataset) -> list[str]:
        """
        Validate a dataset.

        Args:
            dataset: Generated dataset

        Returns:
            List of violation messages (empty when consistent)
        """
        fk = ForeignKeyValidator()
        fk.register_product_ids([p.id for p in dataset.products])
        fk.register_supplier_ids([s.id for s in dataset.suppliers])

        violations: list[str] = []
        violations.extend(self._check_unique_ids(dataset))
        violations.extend(self._check_unique_codes(dataset))

        for po in dataset.purchase_orders:
            if not fk.validate_supplier_fk(po.supplier_id):
                violations.append(f"purchase_order {po.id}: unknown supplier_id {po.supplier_id}")
            if not fk.validate_product_fk(po.product_id):
                violations.append(f"purchase_order {po.id}: unknown product_id {po.product_id}")
            if not self.rules.validate_total_cost(po.quantity_ordered, po.unit_cost, po.total_cost):
                violations.append(f"purchase_order {po.id}: total_cost mismatch")
            if not self.rules.validate_delivery_delay(
                po.expected_delivery_date, po.actual_delivery_date, po.delivery_delay_days
            ):
                violations.append(f"purchase_order {po.id}: delivery_delay_days mismatch")

        for sale in dataset.sales:
            if not fk.validate_product_fk(sale.product_id):
                violations.append(f"sale {sale.id}: unknown product_id {sale.product_id}")
            if not self.rules.validate_revenue(sale.quantity_sold, sale.unit_price, sale.revenue):
                violations.append(f"sale {sale.id}: revenue mismatch")

        for snapshot in dataset.inventory_snapshots:
            if not fk.validate_product_fk(snapshot.product_id):
                violations.append(
                    f"inventory_snapshot {snapshot.id}: unknown product_id {snapshot.product_id}"
                )

        budget_keys = [(b.department, b.month_start) for b in dataset.budget_actuals]
        departments = {d for d, _ in budget_keys}
        months = {m for _, m in budget_keys}
        if not self.rules.validate_budget_grid(budget_keys, len(departments), len(months)):
            violations.append("budget_actual: rows do not form one row per (department, month)")

        if violations:
            logger.debug(f"Dataset validation found {len(violations)} violations")
        return violations

    @staticmethod
    def _check_unique_ids(dataset: GeneratedDataset) -> list[str]:
        problems = []
        for name, count in dataset.counts().items():
            ids = [r.id for r in dataset.table(name)]
            if len(set(ids)) != count:
                problems.append(f"{name}: duplicate ids")
        return problems

    @staticmethod
    def _check_unique_codes(dataset: GeneratedDataset) -> list[str]:
        codes = [p.code for p in dataset.products]
        if len(codes) != len(set(codes)):
            return ["products: duplicate product codes"]
        return []
