"""Configuration models and loading helpers."""

from .models import (
    DeliveryPolicy,
    DistributionConfig,
    GenerationConfig,
    LabelsConfig,
    PerformanceConfig,
    PeriodConfig,
    PricePolicy,
    VolumeConfig,
)

__all__ = [
    "DeliveryPolicy",
    "DistributionConfig",
    "GenerationConfig",
    "LabelsConfig",
    "PerformanceConfig",
    "PeriodConfig",
    "PricePolicy",
    "VolumeConfig",
]
