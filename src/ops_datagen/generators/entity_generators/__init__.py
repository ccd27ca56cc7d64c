"""
Entity generators package.

One generator per entity type; child generators take their parent
collections explicitly.
"""

from .base_generator import BaseEntityGenerator
from .budget_generator import BudgetActualGenerator
from .expense_generator import ExpenseGenerator
from .inventory_generator import InventorySnapshotGenerator
from .product_generator import ProductGenerator
from .purchase_order_generator import PurchaseOrderGenerator
from .sale_generator import SaleGenerator
from .supplier_generator import SupplierGenerator

__all__ = [
    "BaseEntityGenerator",
    "BudgetActualGenerator",
    "ExpenseGenerator",
    "InventorySnapshotGenerator",
    "ProductGenerator",
    "PurchaseOrderGenerator",
    "SaleGenerator",
    "SupplierGenerator",
]
