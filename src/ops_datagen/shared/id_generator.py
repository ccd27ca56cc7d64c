"""
Sequential id allocation for generated entities.

Every entity type owns one allocator. Ids are positive integers handed out in
strictly increasing order and never reused, which keeps parallel generation
streams deterministic: each stream draws only from its own allocator.
"""

from threading import Lock


class SequentialIdAllocator:
    """
    Thread-safe monotonic id allocator for a single entity type.

    Attributes:
        entity: Entity name the ids belong to (used in error messages)
        start: First id handed out (default: 1)

    Thread Safety:
        This class uses a lock to ensure thread-safe counter increments.
    """

    def __init__(self, entity: str, start: int = 1) -> None:
        """
        Initialize the allocator.

        Args:
            entity: Entity name (e.g., "product", "sale")
            start: First id to allocate

        Raises:
            ValueError: If entity is empty or start is not positive
        """
        if not entity:
            raise ValueError("Entity cannot be empty")
        if start < 1:
            raise ValueError("start must be >= 1")

        self.entity = entity
        self.start = start
        self._next = start
        self._lock = Lock()

    def allocate(self) -> int:
        """Return the next id."""
        with self._lock:
            value = self._next
            self._next += 1
        return value

    @property
    def allocated(self) -> int:
        """Number of ids handed out so far."""
        with self._lock:
            return self._next - self.start
