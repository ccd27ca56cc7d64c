"""
Operating expense fact generation.
"""

from ops_datagen.generators.distributions import (
    uniform_date,
    uniform_decimal,
    weighted_choice,
)
from ops_datagen.shared.models import Expense

from .base_generator import BaseEntityGenerator


class ExpenseGenerator(BaseEntityGenerator):
    """Generates expenses across departments and categories."""

    entity = "expense"

    def generate(self, count: int) -> list[Expense]:
        self._check_count(count)
        labels = self.config.labels
        self._require_labels("departments", labels.departments)
        self._require_labels("expense_categories", labels.expense_categories)
        self._require_labels("expense_types", labels.expense_types)

        expenses: list[Expense] = []
        for _ in range(count):
            expenses.append(
                Expense(
                    id=self.ids.allocate(),
                    expense_date=uniform_date(self.rng, self.period.start, self.period.end),
                    department=weighted_choice(self.rng, labels.departments),
                    category=weighted_choice(self.rng, labels.expense_categories),
                    expense_type=weighted_choice(self.rng, labels.expense_types),
                    amount=uniform_decimal(
                        self.rng, self.dist.expense_amount_min, self.dist.expense_amount_max
                    ),
                )
            )

        self._log_generated(expenses)
        return expenses
