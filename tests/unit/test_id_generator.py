"""
Unit tests for SequentialIdAllocator.

Tests id ordering, thread safety, and edge cases.
"""

from threading import Thread

import pytest

from ops_datagen.shared.id_generator import SequentialIdAllocator


class TestSequentialIdAllocatorInit:
    """Tests for allocator initialization."""

    def test_defaults(self):
        ids = SequentialIdAllocator("product")
        assert ids.entity == "product"
        assert ids.allocated == 0

    def test_empty_entity_raises_error(self):
        with pytest.raises(ValueError, match="Entity cannot be empty"):
            SequentialIdAllocator("")

    def test_non_positive_start_raises_error(self):
        with pytest.raises(ValueError, match="start must be >= 1"):
            SequentialIdAllocator("sale", start=0)


class TestSequentialIdAllocation:
    """Tests for id sequences."""

    def test_ids_strictly_increase(self):
        ids = SequentialIdAllocator("sale")
        assert [ids.allocate() for _ in range(5)] == [1, 2, 3, 4, 5]
        assert ids.allocated == 5

    def test_custom_start(self):
        ids = SequentialIdAllocator("sale", start=100)
        assert ids.allocate() == 100
        assert ids.allocate() == 101
        assert ids.allocated == 2


class TestSequentialIdThreadSafety:
    """Tests for concurrent allocation."""

    def test_concurrent_allocation_unique(self):
        ids = SequentialIdAllocator("purchase_order")
        results: list[int] = []

        def worker():
            values = [ids.allocate() for _ in range(200)]
            results.extend(values)

        threads = [Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 1600
        assert sorted(results) == list(range(1, 1601))
