"""
Core data models for the operations data generator.

Dimension models (Product, Supplier), fact models (PurchaseOrder, Sale,
Expense, InventorySnapshot) and the monthly BudgetActual plan table.
Records are immutable once built; derived fields are filled in by the
derived-field resolver right after construction.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class _Record(BaseModel):
    """Base for generated records: frozen and strict about unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")


# ================================
# DIMENSION MODELS
# ================================


class Product(_Record):
    """Product dimension table."""

    id: int = Field(..., gt=0, description="Primary key")
    code: str = Field(..., min_length=1, description="Globally unique product code")
    name: str = Field(..., min_length=1, description="Product name")
    category: str = Field(..., min_length=1, description="Product category")
    unit_cost: Decimal = Field(..., gt=0, description="Standard unit cost")
    unit_price: Decimal = Field(..., gt=0, description="List unit price")
    created_at: date = Field(..., description="Date the product was introduced")

    @property
    def is_loss_making(self) -> bool:
        """True when the list price does not cover the unit cost."""
        return self.unit_price <= self.unit_cost


class Supplier(_Record):
    """Supplier dimension table."""

    id: int = Field(..., gt=0, description="Primary key")
    name: str = Field(..., min_length=1, description="Supplier name")
    country: str = Field(..., min_length=1, description="Supplier country")
    region: str = Field(..., min_length=1, description="World region of the country")
    rating: Decimal = Field(
        ..., ge=Decimal("1"), le=Decimal("5"), description="Quality rating (1-5)"
    )
    lead_time_days: int = Field(..., gt=0, description="Quoted lead time in days")
    is_local: bool = Field(..., description="Whether the supplier is a local vendor")


# ================================
# FACT MODELS
# ================================


class PurchaseOrder(_Record):
    """Purchase order fact table (transaction grain)."""

    id: int = Field(..., gt=0, description="Primary key")
    supplier_id: int = Field(..., gt=0, description="Foreign key to Supplier")
    product_id: int = Field(..., gt=0, description="Foreign key to Product")
    order_date: date = Field(..., description="Order placement date")
    quantity_ordered: int = Field(..., gt=0, description="Units ordered")
    unit_cost: Decimal = Field(..., gt=0, description="Unit cost at order time")
    total_cost: Decimal | None = Field(
        None, description="Derived: quantity_ordered * unit_cost"
    )
    expected_delivery_date: date = Field(..., description="Promised delivery date")
    actual_delivery_date: date | None = Field(
        None, description="Actual delivery date (NULL while in transit)"
    )
    delivery_delay_days: int | None = Field(
        None,
        description="Derived: actual - expected in days (NULL iff not delivered)",
    )

    @model_validator(mode="after")
    def validate_expected_after_order(self) -> "PurchaseOrder":
        """Expected delivery can never precede the order itself."""
        if self.expected_delivery_date < self.order_date:
            raise ValueError("expected_delivery_date must be on or after order_date")
        return self


class Sale(_Record):
    """Sales fact table (transaction grain)."""

    id: int = Field(..., gt=0, description="Primary key")
    product_id: int = Field(..., gt=0, description="Foreign key to Product")
    region: str = Field(..., min_length=1, description="Sales region")
    sale_date: date = Field(..., description="Date of sale")
    quantity_sold: int = Field(..., gt=0, description="Units sold")
    unit_price: Decimal = Field(..., gt=0, description="Unit selling price")
    revenue: Decimal | None = Field(
        None, description="Derived: quantity_sold * unit_price"
    )


class Expense(_Record):
    """Operating expense fact table (transaction grain)."""

    id: int = Field(..., gt=0, description="Primary key")
    expense_date: date = Field(..., description="Date the expense was booked")
    department: str = Field(..., min_length=1, description="Owning department")
    category: str = Field(..., min_length=1, description="Expense category")
    expense_type: str = Field(..., min_length=1, description="Expense type")
    amount: Decimal = Field(..., gt=0, description="Expense amount")


class InventorySnapshot(_Record):
    """Point-in-time stock level for a product."""

    id: int = Field(..., gt=0, description="Primary key")
    product_id: int = Field(..., gt=0, description="Foreign key to Product")
    snapshot_date: date = Field(..., description="Snapshot date")
    stock_on_hand: int = Field(..., ge=0, description="Units on hand")
    reorder_level: int = Field(..., ge=0, description="Reorder threshold")
    unit_cost: Decimal = Field(..., gt=0, description="Unit cost used for valuation")

    @property
    def below_reorder_level(self) -> bool:
        return self.stock_on_hand < self.reorder_level


class BudgetActual(_Record):
    """Monthly budget and actual spend per department (month grain)."""

    id: int = Field(..., gt=0, description="Primary key")
    department: str = Field(..., min_length=1, description="Department")
    month_start: date = Field(..., description="First day of the budget month")
    budget_amount: Decimal = Field(..., ge=0, description="Planned spend")
    actual_amount: Decimal = Field(..., ge=0, description="Actual spend")

    @field_validator("month_start")
    @classmethod
    def validate_first_of_month(cls, v: date) -> date:
        """month_start must be the first calendar day of a month."""
        if v.day != 1:
            raise ValueError("month_start must be the first day of a month")
        return v


ENTITY_MODELS: dict[str, type[_Record]] = {
    "products": Product,
    "suppliers": Supplier,
    "purchase_orders": PurchaseOrder,
    "sales": Sale,
    "expenses": Expense,
    "inventory_snapshots": InventorySnapshot,
    "budget_actuals": BudgetActual,
}
