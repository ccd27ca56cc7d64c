"""
In-memory generated dataset and its tabular view.

The generation pipeline owns a ``GeneratedDataset``; analytics and writers
borrow it read-only through ``to_frames()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict

import pandas as pd

from .models import (
    ENTITY_MODELS,
    BudgetActual,
    Expense,
    InventorySnapshot,
    Product,
    PurchaseOrder,
    Sale,
    Supplier,
)

TABLE_NAMES = list(ENTITY_MODELS)

# Columns converted to datetime64 in the DataFrame view
DATE_COLUMNS: dict[str, list[str]] = {
    "products": ["created_at"],
    "suppliers": [],
    "purchase_orders": ["order_date", "expected_delivery_date", "actual_delivery_date"],
    "sales": ["sale_date"],
    "expenses": ["expense_date"],
    "inventory_snapshots": ["snapshot_date"],
    "budget_actuals": ["month_start"],
}


def records_to_frame(table: str, records: list) -> pd.DataFrame:
    """
    Convert a list of pydantic records into a DataFrame.

    Decimal money columns become float64 and date columns datetime64, so the
    frame is directly usable for grouping and arithmetic. Empty collections
    yield an empty frame that still carries the model's columns.
    """
    model = ENTITY_MODELS[table]
    columns = list(model.model_fields)
    df = pd.DataFrame.from_records(
        [r.model_dump() for r in records], columns=columns
    )

    for col in columns:
        if df[col].map(lambda v: isinstance(v, Decimal)).any():
            df[col] = df[col].map(lambda v: float(v) if v is not None else None)
            df[col] = df[col].astype("float64")

    for col in DATE_COLUMNS[table]:
        df[col] = pd.to_datetime(df[col])

    return df


@dataclass
class GeneratedDataset:
    """Seven typed record collections produced by one generation pass."""

    products: list[Product] = field(default_factory=list)
    suppliers: list[Supplier] = field(default_factory=list)
    purchase_orders: list[PurchaseOrder] = field(default_factory=list)
    sales: list[Sale] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)
    inventory_snapshots: list[InventorySnapshot] = field(default_factory=list)
    budget_actuals: list[BudgetActual] = field(default_factory=list)
    period_start: date | None = None
    period_end: date | None = None

    def table(self, name: str) -> list:
        """Return the record list for a table name."""
        if name not in ENTITY_MODELS:
            raise KeyError(name)
        return getattr(self, name)

    def counts(self) -> dict[str, int]:
        """Row count per table."""
        return {name: len(self.table(name)) for name in TABLE_NAMES}

    def to_frames(self) -> Dict[str, pd.DataFrame]:
        """Return one DataFrame per table."""
        return {name: records_to_frame(name, self.table(name)) for name in TABLE_NAMES}
