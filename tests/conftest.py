"""
Pytest configuration and fixtures for operations data generator tests.

Provides generation configs, a hand-built dataset with known totals, and a
scripted randomness source for distribution tests.
"""

import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

# Ensure src/ is on sys.path for local test runs without installation
_SRC = Path(__file__).resolve().parents[1] / "src"
if _SRC.exists() and str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from ops_datagen.config.models import GenerationConfig  # noqa: E402
from ops_datagen.generators import DatasetGenerator  # noqa: E402
from ops_datagen.generators.derived_fields import DerivedFieldResolver  # noqa: E402
from ops_datagen.shared.dataset import GeneratedDataset  # noqa: E402
from ops_datagen.shared.models import (  # noqa: E402
    BudgetActual,
    Expense,
    InventorySnapshot,
    Product,
    PurchaseOrder,
    Sale,
    Supplier,
)


class ScriptedRandom:
    """Randomness source replaying fixed values for ``random()`` and ``integers()``."""

    def __init__(self, randoms=(), integers=()):
        self._randoms = list(randoms)
        self._integers = list(integers)

    def random(self) -> float:
        return self._randoms.pop(0)

    def integers(self, low: int, high: int) -> int:
        value = self._integers.pop(0)
        assert low <= value < high, f"scripted {value} outside [{low}, {high})"
        return value


@pytest.fixture
def scripted_rng():
    """Factory for scripted randomness sources."""
    return ScriptedRandom


@pytest.fixture
def small_config_dict():
    """Plain configuration mapping with small volumes over one year."""
    return {
        "seed": 7,
        "period": {"start": "2023-01-01", "end": "2023-12-31"},
        "volume": {
            "products": 12,
            "suppliers": 10,
            "purchase_orders": 120,
            "sales": 300,
            "expenses": 80,
            "inventory_snapshots": 40,
        },
        "performance": {"parallel": False},
    }


@pytest.fixture
def small_config(small_config_dict):
    return GenerationConfig.from_dict(small_config_dict)


@pytest.fixture
def generated_dataset(small_config):
    return DatasetGenerator(small_config).generate()


@pytest.fixture
def tiny_dataset():
    """
    Hand-built dataset with known totals.

    Sales: 2023-01 revenue 40, 2023-03 revenue 10, 2024-02 revenue 20.
    Expenses: 2023-01 Sales 100, 2023-03 IT 50.
    Purchase orders: 2023 spend 90, 2024 spend 20 (still in transit).
    Budgets: Sales 2023-02 has a zero budget.
    """
    resolver = DerivedFieldResolver()

    products = [
        Product(id=1, code="PRD-00001", name="Steel Bracket", category="A",
                unit_cost=Decimal("5.00"), unit_price=Decimal("10.00"),
                created_at=date(2022, 6, 1)),
        Product(id=2, code="PRD-00002", name="Copper Valve", category="B",
                unit_cost=Decimal("8.00"), unit_price=Decimal("20.00"),
                created_at=date(2022, 7, 1)),
        Product(id=3, code="PRD-00003", name="Nylon Washer", category="A",
                unit_cost=Decimal("2.00"), unit_price=Decimal("4.00"),
                created_at=date(2022, 8, 1)),
    ]
    suppliers = [
        Supplier(id=1, name="Apex Supply", country="Germany", region="Europe",
                 rating=Decimal("4.5"), lead_time_days=10, is_local=False),
        Supplier(id=2, name="Delta Trading", country="United States",
                 region="North America", rating=Decimal("3.0"), lead_time_days=5,
                 is_local=True),
    ]
    purchase_orders = resolver.resolve_all([
        PurchaseOrder(id=1, supplier_id=1, product_id=1, order_date=date(2023, 1, 3),
                      quantity_ordered=10, unit_cost=Decimal("5.00"),
                      expected_delivery_date=date(2023, 1, 10),
                      actual_delivery_date=date(2023, 1, 10)),
        PurchaseOrder(id=2, supplier_id=2, product_id=2, order_date=date(2023, 2, 1),
                      quantity_ordered=5, unit_cost=Decimal("8.00"),
                      expected_delivery_date=date(2023, 2, 10),
                      actual_delivery_date=date(2023, 2, 15)),
        PurchaseOrder(id=3, supplier_id=1, product_id=3, order_date=date(2024, 6, 1),
                      quantity_ordered=10, unit_cost=Decimal("2.00"),
                      expected_delivery_date=date(2024, 6, 20),
                      actual_delivery_date=None),
    ])
    sales = resolver.resolve_all([
        Sale(id=1, product_id=1, region="North", sale_date=date(2023, 1, 5),
             quantity_sold=2, unit_price=Decimal("10.00")),
        Sale(id=2, product_id=2, region="South", sale_date=date(2023, 1, 20),
             quantity_sold=1, unit_price=Decimal("20.00")),
        Sale(id=3, product_id=1, region="North", sale_date=date(2023, 3, 2),
             quantity_sold=1, unit_price=Decimal("10.00")),
        Sale(id=4, product_id=3, region="South", sale_date=date(2024, 2, 10),
             quantity_sold=5, unit_price=Decimal("4.00")),
    ])
    expenses = [
        Expense(id=1, expense_date=date(2023, 1, 10), department="Sales",
                category="Travel", expense_type="Operational", amount=Decimal("100.00")),
        Expense(id=2, expense_date=date(2023, 3, 15), department="IT",
                category="Software", expense_type="Operational", amount=Decimal("50.00")),
    ]
    inventory_snapshots = [
        InventorySnapshot(id=1, product_id=1, snapshot_date=date(2023, 1, 31),
                          stock_on_hand=5, reorder_level=10, unit_cost=Decimal("5.00")),
        InventorySnapshot(id=2, product_id=1, snapshot_date=date(2023, 2, 28),
                          stock_on_hand=50, reorder_level=10, unit_cost=Decimal("5.00")),
        InventorySnapshot(id=3, product_id=2, snapshot_date=date(2023, 2, 28),
                          stock_on_hand=3, reorder_level=20, unit_cost=Decimal("8.00")),
    ]
    budget_actuals = [
        BudgetActual(id=1, department="Sales", month_start=date(2023, 1, 1),
                     budget_amount=Decimal("1000.00"), actual_amount=Decimal("1100.00")),
        BudgetActual(id=2, department="IT", month_start=date(2023, 1, 1),
                     budget_amount=Decimal("200.00"), actual_amount=Decimal("150.00")),
        BudgetActual(id=3, department="Sales", month_start=date(2023, 2, 1),
                     budget_amount=Decimal("0.00"), actual_amount=Decimal("500.00")),
        BudgetActual(id=4, department="IT", month_start=date(2023, 2, 1),
                     budget_amount=Decimal("200.00"), actual_amount=Decimal("200.00")),
    ]

    return GeneratedDataset(
        products=products,
        suppliers=suppliers,
        purchase_orders=purchase_orders,
        sales=sales,
        expenses=expenses,
        inventory_snapshots=inventory_snapshots,
        budget_actuals=budget_actuals,
        period_start=date(2023, 1, 1),
        period_end=date(2024, 12, 31),
    )
