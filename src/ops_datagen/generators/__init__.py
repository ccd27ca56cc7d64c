"""
Data generators package.

Exposes the dataset orchestrator, the entity generators, the distribution
library and the derived-field resolver.
"""

from .dataset_generator import DatasetGenerator
from .derived_fields import DerivedFieldResolver

__all__ = ["DatasetGenerator", "DerivedFieldResolver"]
