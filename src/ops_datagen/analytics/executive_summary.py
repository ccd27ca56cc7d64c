"""
Executive summary composed from rollup engine primitives.
"""

import logging

from .rollup_engine import Aggregation, Measure, RollupEngine, RollupResult, RollupSpec, TimeGrain

logger = logging.getLogger(__name__)


class ExecutiveSummaryComposer:
    """
    Builds the executive summary: sales by year x region x category, with the
    year's procurement spend and expense total attached to every row.

    The year-level measures are aggregated before they are joined, so a year's
    spend repeats on each region/category row while the sales rows themselves
    are never multiplied.
    """

    SALES_SPEC = RollupSpec(
        name="executive_summary",
        table="sales",
        group_by=("region", "category"),
        date_column="sale_date",
        grain=TimeGrain.YEAR,
        measures=(
            Measure("revenue", "revenue"),
            Measure("units_sold", "quantity_sold"),
            Measure("transactions", "id", Aggregation.COUNT),
        ),
    )

    def __init__(self, engine: RollupEngine):
        self.engine = engine

    def compose(self, missing: str = "zero") -> RollupResult:
        """
        Compose the summary.

        Args:
            missing: ``"zero"`` reports a year without purchase orders or
                expenses as 0, ``"null"`` reports it as undefined

        Returns:
            RollupResult keyed by (year, region, category)
        """
        sales = self.engine.rollup(self.SALES_SPEC, frame=self.engine.sales_with_products())
        summary = self.engine.enrich(
            "executive_summary",
            sales,
            [self.engine.procurement_spend_by_year(), self.engine.expenses_by_year()],
            on=("year",),
            missing=missing,
        )
        logger.info(f"Executive summary composed with {len(summary)} rows")
        return summary
