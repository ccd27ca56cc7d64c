"""
Monthly budget vs. actual generation.
"""

import logging
from decimal import Decimal

from ops_datagen.generators.distributions import month_starts, uniform_decimal
from ops_datagen.shared.models import BudgetActual

from .base_generator import BaseEntityGenerator

logger = logging.getLogger(__name__)


class BudgetActualGenerator(BaseEntityGenerator):
    """
    Generates one budget row per (department, month) in the period.

    This is the only generator with a deterministic key set: the rows are the
    full cartesian product of configured departments and period months.
    """

    entity = "budget_actual"

    def generate(self) -> list[BudgetActual]:
        departments = self.config.labels.departments
        self._require_labels("departments", departments)
        months = month_starts(self.period.start, self.period.end)

        rows: list[BudgetActual] = []
        for month in months:
            for department in departments:
                budget = uniform_decimal(self.rng, self.dist.budget_min, self.dist.budget_max)
                ratio = uniform_decimal(
                    self.rng, self.dist.spend_ratio_min, self.dist.spend_ratio_max, places=4
                )
                rows.append(
                    BudgetActual(
                        id=self.ids.allocate(),
                        department=department,
                        month_start=month,
                        budget_amount=budget,
                        actual_amount=(budget * ratio).quantize(Decimal("0.01")),
                    )
                )

        logger.debug(f"{len(departments)} departments x {len(months)} months")
        self._log_generated(rows)
        return rows
