"""
Analytics package: rollups, cross-grain joins, variance and summaries.
"""

from .executive_summary import ExecutiveSummaryComposer
from .rollup_engine import (
    Aggregation,
    JoinSide,
    Measure,
    RollupEngine,
    RollupResult,
    RollupSpec,
    TimeGrain,
    coarser_grain,
    variance_percent,
)

__all__ = [
    "Aggregation",
    "ExecutiveSummaryComposer",
    "JoinSide",
    "Measure",
    "RollupEngine",
    "RollupResult",
    "RollupSpec",
    "TimeGrain",
    "coarser_grain",
    "variance_percent",
]
