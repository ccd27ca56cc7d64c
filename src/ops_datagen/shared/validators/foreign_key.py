"""
Foreign key validator.

Validates foreign key relationships between generated collections.
"""


class ForeignKeyValidator:
    """
    Validates foreign key relationships between tables.

    Parent ids are registered first; child references are then checked
    against the registered sets.
    """

    def __init__(self) -> None:
        """Initialize with empty reference collections."""
        self._product_ids: set[int] = set()
        self._supplier_ids: set[int] = set()

    def register_product_ids(self, product_ids: list[int]) -> None:
        """Register valid product IDs."""
        self._product_ids.update(product_ids)

    def register_supplier_ids(self, supplier_ids: list[int]) -> None:
        """Register valid supplier IDs."""
        self._supplier_ids.update(supplier_ids)

    def validate_product_fk(self, product_id: int) -> bool:
        """Validate product foreign key."""
        return product_id in self._product_ids

    def validate_supplier_fk(self, supplier_id: int) -> bool:
        """Validate supplier foreign key."""
        return supplier_id in self._supplier_ids
