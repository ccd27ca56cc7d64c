"""
Base generator infrastructure for entity generation.

Provides the shared plumbing every entity generator needs: its own
randomness stream, its own id allocator, argument checks and the
derived-field resolver.
"""

import logging
from typing import Any, Mapping, Sequence

from ops_datagen.config.models import GenerationConfig
from ops_datagen.generators.derived_fields import DerivedFieldResolver
from ops_datagen.generators.distributions import RandomSource
from ops_datagen.shared.exceptions import ConfigurationError, ReferentialIntegrityError
from ops_datagen.shared.id_generator import SequentialIdAllocator

logger = logging.getLogger(__name__)


class BaseEntityGenerator:
    """
    Base class for one entity type's generator.

    Subclasses set ``entity`` and implement ``generate``. Each instance owns
    its randomness stream and id allocator, so instances can run on separate
    threads without sharing mutable state.
    """

    entity: str = "entity"

    def __init__(
        self,
        config: GenerationConfig,
        rng: RandomSource,
        id_allocator: SequentialIdAllocator | None = None,
    ):
        """
        Initialize generator infrastructure.

        Args:
            config: Generation configuration
            rng: Randomness source owned by this generator
            id_allocator: Id allocator for this entity (a fresh one if omitted)
        """
        self.config = config
        self.rng = rng
        self.ids = id_allocator or SequentialIdAllocator(self.entity)
        self.resolver = DerivedFieldResolver()

    @property
    def dist(self):
        return self.config.distributions

    @property
    def period(self):
        return self.config.period

    def _check_count(self, count: int) -> None:
        """Reject negative row counts before anything is generated."""
        if count < 0:
            raise ConfigurationError(
                "Requested row count must be >= 0",
                entity=self.entity,
                field="count",
                value=count,
            )

    def _require_parent(self, parent: str, collection: Sequence[Any] | None) -> None:
        """Child entities need a materialized, non-empty parent collection."""
        if not collection:
            raise ReferentialIntegrityError(self.entity, parent)

    def _require_labels(self, field: str, table: Mapping | Sequence | None) -> None:
        """Weighted-pick tables must not be empty."""
        if not table:
            raise ConfigurationError(
                "Weighted pick table is empty", entity=self.entity, field=field
            )

    def _pick(self, collection: Sequence[Any]) -> Any:
        """Uniform pick with replacement from a parent collection."""
        return collection[int(self.rng.integers(0, len(collection)))]

    def _log_generated(self, records: list) -> None:
        logger.info(f"Generated {len(records):,} {self.entity} records")
