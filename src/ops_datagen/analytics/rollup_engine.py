"""
Multi-dimensional rollup and variance engine.

Works on the DataFrame view of a generated dataset (or any mapping of
equivalent frames) and returns new, independently owned aggregate results.

Grain handling:
- Each table has a native time grain: transaction tables are day grain,
  ``budget_actuals`` is month grain.
- Time-bucketed rollups derive the bucket key from the table's own date
  column. Empty buckets are absent unless ``dense=True``.
- Cross-grain joins aggregate each side independently at the coarser common
  grain and only then join on the bucket key, so no side can multiply the
  other's rows. A bucket missing on one side yields 0 (or NULL on request).
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Iterator, Mapping, Sequence

import numpy as np
import pandas as pd

from ops_datagen.shared.dataset import DATE_COLUMNS, GeneratedDataset
from ops_datagen.shared.exceptions import DivisionByZeroError, UnknownRollupError

logger = logging.getLogger(__name__)


class TimeGrain(str, Enum):
    """Time bucket granularity, finest to coarsest."""

    DAY = "day"
    MONTH = "month"
    YEAR = "year"

    @property
    def rank(self) -> int:
        return _GRAIN_RANK[self]

    @property
    def key_columns(self) -> list[str]:
        """Bucket key columns this grain adds to a rollup."""
        if self is TimeGrain.YEAR:
            return ["year"]
        if self is TimeGrain.MONTH:
            return ["year", "month"]
        return ["date"]


_GRAIN_RANK = {TimeGrain.DAY: 0, TimeGrain.MONTH: 1, TimeGrain.YEAR: 2}


def coarser_grain(*grains: TimeGrain | None) -> TimeGrain:
    """Coarsest of the given grains (``None`` entries are ignored)."""
    present = [g for g in grains if g is not None]
    if not present:
        raise ValueError("At least one grain is required")
    return max(present, key=lambda g: g.rank)


class Aggregation(str, Enum):
    """Aggregation applied to one measure column."""

    SUM = "sum"
    MEAN = "mean"
    COUNT = "count"
    MIN = "min"
    MAX = "max"

    @property
    def zero_fill(self) -> bool:
        """Whether an empty bucket has a defined value of zero."""
        return self in (Aggregation.SUM, Aggregation.COUNT)


# Date column each table is bucketed by unless a rollup says otherwise
DEFAULT_DATE_COLUMNS: dict[str, str] = {
    "products": "created_at",
    "purchase_orders": "order_date",
    "sales": "sale_date",
    "expenses": "expense_date",
    "inventory_snapshots": "snapshot_date",
    "budget_actuals": "month_start",
}

NATIVE_GRAINS: dict[str, TimeGrain] = {
    "products": TimeGrain.DAY,
    "purchase_orders": TimeGrain.DAY,
    "sales": TimeGrain.DAY,
    "expenses": TimeGrain.DAY,
    "inventory_snapshots": TimeGrain.DAY,
    "budget_actuals": TimeGrain.MONTH,
}

# Category reported for sales whose product is not in the products table
UNKNOWN_CATEGORY = "Unknown"


@dataclass(frozen=True)
class Measure:
    """One output measure: ``agg(column)`` exposed as ``name``."""

    name: str
    column: str
    agg: Aggregation = Aggregation.SUM


@dataclass(frozen=True)
class RollupSpec:
    """
    Declarative description of a rollup.

    Attributes:
        name: Result name
        table: Source table
        measures: Output measures
        group_by: Dimensional group keys
        date_column: Date column used for time buckets (table default if None)
        grain: Time grain; None for no time bucketing
        dense: Emit every bucket of the period, filling empty ones
        order_by: Measure/key columns to rank by instead of key order
        descending: Rank direction for ``order_by``
        tie_breaker: Column sorted ascending after ``order_by``
        top_n: Keep only the first ``top_n`` rows after ordering
    """

    name: str
    table: str
    measures: tuple[Measure, ...]
    group_by: tuple[str, ...] = ()
    date_column: str | None = None
    grain: TimeGrain | None = None
    dense: bool = False
    order_by: tuple[str, ...] = ()
    descending: bool = True
    tie_breaker: str | None = None
    top_n: int | None = None


@dataclass(frozen=True)
class JoinSide:
    """One input of a cross-entity join."""

    table: str
    measure: Measure
    date_column: str | None = None


def _to_python(value: Any) -> Any:
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


@dataclass
class RollupResult:
    """
    Ordered aggregate rows keyed by the group-by tuple.

    ``frame`` holds the rows as a DataFrame; ``to_records()`` returns plain
    Python values with undefined measures as ``None``.
    """

    name: str
    keys: list[str]
    measures: list[str]
    frame: pd.DataFrame

    def to_records(self) -> list[dict[str, Any]]:
        return [
            {column: _to_python(value) for column, value in row.items()}
            for row in self.frame.to_dict(orient="records")
        ]

    def key_tuples(self) -> list[tuple]:
        return [tuple(r[k] for k in self.keys) for r in self.to_records()]

    def total(self, measure: str) -> float:
        """Sum of one measure over all rows (undefined values skipped)."""
        return float(self.frame[measure].sum(skipna=True)) if len(self.frame) else 0.0

    def __len__(self) -> int:
        return len(self.frame)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self.to_records())


def variance_percent(variance: float, budget: float, key: tuple | None = None) -> float:
    """
    Variance as a percentage of budget.

    Raises:
        DivisionByZeroError: If budget is zero
    """
    if budget == 0:
        raise DivisionByZeroError("variance_percent", key)
    return variance / budget * 100.0


def _safe_ratio_percent(
    numerators: pd.Series,
    denominators: pd.Series,
    keys: Sequence[tuple],
    measure: str,
) -> pd.Series:
    """Row-wise percentage; zero denominators become NaN instead of failing."""
    values: list[float] = []
    for key, numerator, denominator in zip(keys, numerators, denominators):
        try:
            values.append(variance_percent(float(numerator), float(denominator), key))
        except DivisionByZeroError as exc:
            logger.warning(f"{exc}; reporting {measure} as undefined")
            values.append(np.nan)
    return pd.Series(values, index=numerators.index, dtype="float64")


class RollupEngine:
    """
    Computes named and ad hoc rollups over a read-only dataset.

    Rollups never modify the source frames, so any number of them may run
    concurrently against the same engine.
    """

    NAMED_ROLLUPS = (
        "revenue_by_product",
        "order_count_by_supplier",
        "top_products_by_revenue",
        "revenue_by_region",
        "revenue_by_month",
        "revenue_by_year",
        "expenses_by_department",
        "procurement_spend_by_year",
        "expenses_by_year",
        "revenue_vs_expenses_by_month",
        "expenses_vs_budget_by_department",
        "budget_variance",
        "supplier_delivery_performance",
        "inventory_below_reorder",
        "gross_margin_by_category",
    )

    def __init__(
        self,
        source: GeneratedDataset | Mapping[str, pd.DataFrame],
        period: tuple[date, date] | None = None,
    ):
        """
        Initialize the engine.

        Args:
            source: Generated dataset, or a mapping of table name to DataFrame
                with the same columns
            period: Period used for dense buckets; taken from the dataset when
                omitted, else from the data's own date range
        """
        if isinstance(source, GeneratedDataset):
            frames = source.to_frames()
            if period is None and source.period_start and source.period_end:
                period = (source.period_start, source.period_end)
        else:
            frames = {name: df.copy() for name, df in source.items()}
            for name, df in frames.items():
                for col in DATE_COLUMNS.get(name, []):
                    if col in df.columns:
                        df[col] = pd.to_datetime(df[col])

        self._frames = frames
        self.period = period

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def frame(self, table: str) -> pd.DataFrame:
        """Source frame for a table."""
        if table not in self._frames:
            raise UnknownRollupError(table, list(self._frames))
        return self._frames[table]

    @staticmethod
    def _bucket(df: pd.DataFrame, date_column: str, grain: TimeGrain) -> pd.DataFrame:
        """Add the grain's key columns; rows without a date fall in no bucket."""
        df = df[df[date_column].notna()]
        dates = df[date_column]
        if grain is TimeGrain.YEAR:
            return df.assign(year=dates.dt.year.astype("int64"))
        if grain is TimeGrain.MONTH:
            return df.assign(
                year=dates.dt.year.astype("int64"), month=dates.dt.month.astype("int64")
            )
        return df.assign(date=dates.dt.normalize())

    @staticmethod
    def _aggregate(
        df: pd.DataFrame, keys: list[str], measures: Sequence[Measure]
    ) -> pd.DataFrame:
        if not keys:
            row = {m.name: df[m.column].agg(m.agg.value) for m in measures}
            return pd.DataFrame([row])

        named = {
            m.name: pd.NamedAgg(column=m.column, aggfunc=m.agg.value) for m in measures
        }
        out = df.groupby(keys, sort=True, dropna=False).agg(**named).reset_index()
        for m in measures:
            if m.agg is Aggregation.COUNT:
                out[m.name] = out[m.name].astype("int64")
        return out[keys + [m.name for m in measures]]

    def _bucket_frame(self, grain: TimeGrain, dates: pd.Series) -> pd.DataFrame | None:
        """Every bucket of the period (or of the observed date range)."""
        if self.period is not None:
            start, end = self.period
        else:
            observed = dates.dropna()
            if observed.empty:
                return None
            start, end = observed.min(), observed.max()

        days = pd.Series(pd.date_range(pd.Timestamp(start), pd.Timestamp(end), freq="D"))
        buckets = self._bucket(pd.DataFrame({"_d": days}), "_d", grain)
        return buckets[grain.key_columns].drop_duplicates().reset_index(drop=True)

    def _densify(
        self,
        out: pd.DataFrame,
        spec: RollupSpec,
        keys: list[str],
        dates: pd.Series,
    ) -> pd.DataFrame:
        buckets = self._bucket_frame(spec.grain, dates)
        if buckets is None:
            return out

        if spec.group_by:
            combos = out[list(spec.group_by)].drop_duplicates()
            buckets = buckets.merge(combos, how="cross")

        # outer: aggregate rows outside the period keep their own buckets
        full = buckets.merge(out, on=keys, how="outer")
        full = full.sort_values(keys, kind="mergesort").reset_index(drop=True)
        for m in spec.measures:
            if m.agg.zero_fill:
                full[m.name] = full[m.name].fillna(0)
                if m.agg is Aggregation.COUNT:
                    full[m.name] = full[m.name].astype("int64")
        return full

    def rollup(self, spec: RollupSpec, frame: pd.DataFrame | None = None) -> RollupResult:
        """
        Run a rollup.

        Args:
            spec: Rollup description
            frame: Pre-joined input to use instead of ``spec.table``'s frame

        Returns:
            RollupResult ordered by keys, or by ``order_by`` when given
        """
        df = self.frame(spec.table) if frame is None else frame
        keys = list(spec.group_by)
        source_dates = None

        if spec.grain is not None:
            date_column = spec.date_column or DEFAULT_DATE_COLUMNS.get(spec.table)
            if date_column is None:
                raise UnknownRollupError(f"{spec.table}.<date column>")
            source_dates = df[date_column]
            df = self._bucket(df, date_column, spec.grain)
            keys = spec.grain.key_columns + keys

        out = self._aggregate(df, keys, spec.measures)

        if spec.dense and spec.grain is not None:
            out = self._densify(out, spec, keys, source_dates)

        if spec.order_by:
            sort_cols = list(spec.order_by)
            ascending = [not spec.descending] * len(sort_cols)
            if spec.tie_breaker:
                sort_cols.append(spec.tie_breaker)
                ascending.append(True)
            out = out.sort_values(sort_cols, ascending=ascending, kind="mergesort")

        if spec.top_n is not None:
            out = out.head(spec.top_n)

        return RollupResult(
            name=spec.name,
            keys=keys,
            measures=[m.name for m in spec.measures],
            frame=out.reset_index(drop=True),
        )

    def cross_grain_join(
        self,
        name: str,
        left: JoinSide,
        right: JoinSide,
        grain: TimeGrain = TimeGrain.MONTH,
        on: tuple[str, ...] = (),
        missing: str = "zero",
    ) -> RollupResult:
        """
        Join two tables' measures on a shared time bucket.

        Each side is aggregated on its own date column at the coarsest of the
        requested grain and both tables' native grains, then the two
        aggregates are outer-joined on the bucket key (plus ``on`` keys).

        Args:
            name: Result name
            left: Left table and measure
            right: Right table and measure
            grain: Requested grain
            on: Extra dimension keys present on both tables
            missing: ``"zero"`` fills a missing side with 0, ``"null"`` keeps it undefined

        Raises:
            ValueError: If ``missing`` is not "zero" or "null"
        """
        if missing not in ("zero", "null"):
            raise ValueError("missing must be 'zero' or 'null'")

        effective = coarser_grain(
            grain, NATIVE_GRAINS.get(left.table), NATIVE_GRAINS.get(right.table)
        )
        if effective is not grain:
            logger.debug(f"{name}: coarsened join grain from {grain.value} to {effective.value}")

        sides = []
        for side in (left, right):
            sides.append(
                self.rollup(
                    RollupSpec(
                        name=f"{name}:{side.table}",
                        table=side.table,
                        measures=(side.measure,),
                        group_by=on,
                        date_column=side.date_column,
                        grain=effective,
                    )
                )
            )

        keys = effective.key_columns + list(on)
        merged = sides[0].frame.merge(
            sides[1].frame, on=keys, how="outer", sort=True, validate="one_to_one"
        )
        return RollupResult(
            name=name,
            keys=keys,
            measures=[left.measure.name, right.measure.name],
            frame=self._fill_missing(merged, [left.measure, right.measure], missing),
        )

    def enrich(
        self,
        name: str,
        base: RollupResult,
        lookups: Sequence[RollupResult],
        on: tuple[str, ...],
        missing: str = "zero",
    ) -> RollupResult:
        """
        Attach coarser-grain measures to a finer-grain rollup.

        Each lookup must be unique on ``on``; its measures repeat on every
        matching base row and never change the base row count.
        """
        if missing not in ("zero", "null"):
            raise ValueError("missing must be 'zero' or 'null'")

        frame = base.frame
        measures = list(base.measures)
        for lookup in lookups:
            columns = list(on) + lookup.measures
            frame = frame.merge(
                lookup.frame[columns], on=list(on), how="left", validate="many_to_one"
            )
            measures.extend(lookup.measures)
            if missing == "zero":
                for m in lookup.measures:
                    frame[m] = frame[m].fillna(0)

        return RollupResult(name=name, keys=list(base.keys), measures=measures, frame=frame)

    @staticmethod
    def _fill_missing(
        frame: pd.DataFrame, measures: Sequence[Measure], missing: str
    ) -> pd.DataFrame:
        if missing == "null":
            return frame
        frame = frame.copy()
        for m in measures:
            frame[m.name] = frame[m.name].fillna(0)
            if m.agg is Aggregation.COUNT:
                frame[m.name] = frame[m.name].astype("int64")
        return frame

    def variance(
        self,
        name: str = "budget_variance",
        group_by: tuple[str, ...] = ("department",),
        grain: TimeGrain | None = TimeGrain.MONTH,
        table: str = "budget_actuals",
        budget_column: str = "budget_amount",
        actual_column: str = "actual_amount",
    ) -> RollupResult:
        """
        Budget vs. actual variance.

        ``variance = actual - budget`` and
        ``variance_percent = variance / budget * 100``. A zero budget leaves
        that row's ``variance_percent`` undefined and the rollup continues.
        """
        base = self.rollup(
            RollupSpec(
                name=name,
                table=table,
                measures=(Measure("budget", budget_column), Measure("actual", actual_column)),
                group_by=group_by,
                grain=grain,
            )
        )
        df = base.frame.copy()
        df["variance"] = df["actual"] - df["budget"]
        keys = [
            tuple(_to_python(v) for v in row)
            for row in df[base.keys].itertuples(index=False, name=None)
        ]
        df["variance_percent"] = _safe_ratio_percent(
            df["variance"], df["budget"], keys, "variance_percent"
        )
        return RollupResult(
            name=name,
            keys=base.keys,
            measures=["budget", "actual", "variance", "variance_percent"],
            frame=df,
        )

    # ------------------------------------------------------------------
    # Joined inputs
    # ------------------------------------------------------------------

    def sales_with_products(self) -> pd.DataFrame:
        """
        Sales with product category and unit cost; one row per sale.

        Sales whose product is missing keep their revenue under
        ``UNKNOWN_CATEGORY``; their cost of goods is undefined.
        """
        products = self.frame("products")[["id", "category", "unit_cost"]].rename(
            columns={"id": "product_id", "unit_cost": "product_unit_cost"}
        )
        joined = self.frame("sales").merge(
            products, on="product_id", how="left", validate="many_to_one", indicator=True
        )
        orphans = joined["_merge"] == "left_only"
        if orphans.any():
            missing = sorted(_to_python(v) for v in joined.loc[orphans, "product_id"].unique())
            logger.warning(
                f"{int(orphans.sum())} sales reference unknown products {missing}; "
                f"reporting them under category '{UNKNOWN_CATEGORY}'"
            )
            joined.loc[orphans, "category"] = UNKNOWN_CATEGORY
        return joined.drop(columns="_merge")

    # ------------------------------------------------------------------
    # Named rollups
    # ------------------------------------------------------------------

    def revenue_by_product(self) -> RollupResult:
        return self.rollup(
            RollupSpec(
                name="revenue_by_product",
                table="sales",
                group_by=("product_id",),
                measures=(
                    Measure("revenue", "revenue"),
                    Measure("units_sold", "quantity_sold"),
                    Measure("sale_count", "id", Aggregation.COUNT),
                ),
            )
        )

    def top_products_by_revenue(self, n: int = 10) -> RollupResult:
        """Top ``n`` products by revenue; ties go to the lower product id."""
        return self.rollup(
            RollupSpec(
                name="top_products_by_revenue",
                table="sales",
                group_by=("product_id",),
                measures=(
                    Measure("revenue", "revenue"),
                    Measure("units_sold", "quantity_sold"),
                ),
                order_by=("revenue",),
                tie_breaker="product_id",
                top_n=n,
            )
        )

    def order_count_by_supplier(self) -> RollupResult:
        return self.rollup(
            RollupSpec(
                name="order_count_by_supplier",
                table="purchase_orders",
                group_by=("supplier_id",),
                measures=(
                    Measure("order_count", "id", Aggregation.COUNT),
                    Measure("total_cost", "total_cost"),
                ),
            )
        )

    def revenue_by_region(self) -> RollupResult:
        return self.rollup(
            RollupSpec(
                name="revenue_by_region",
                table="sales",
                group_by=("region",),
                measures=(
                    Measure("revenue", "revenue"),
                    Measure("sale_count", "id", Aggregation.COUNT),
                ),
            )
        )

    def revenue_by_month(self, dense: bool = False) -> RollupResult:
        return self.rollup(
            RollupSpec(
                name="revenue_by_month",
                table="sales",
                grain=TimeGrain.MONTH,
                dense=dense,
                measures=(
                    Measure("revenue", "revenue"),
                    Measure("sale_count", "id", Aggregation.COUNT),
                ),
            )
        )

    def revenue_by_year(self) -> RollupResult:
        return self.rollup(
            RollupSpec(
                name="revenue_by_year",
                table="sales",
                grain=TimeGrain.YEAR,
                measures=(Measure("revenue", "revenue"),),
            )
        )

    def expenses_by_department(self) -> RollupResult:
        return self.rollup(
            RollupSpec(
                name="expenses_by_department",
                table="expenses",
                group_by=("department",),
                measures=(
                    Measure("expense_total", "amount"),
                    Measure("expense_count", "id", Aggregation.COUNT),
                    Measure("average_expense", "amount", Aggregation.MEAN),
                ),
            )
        )

    def procurement_spend_by_year(self) -> RollupResult:
        return self.rollup(
            RollupSpec(
                name="procurement_spend_by_year",
                table="purchase_orders",
                grain=TimeGrain.YEAR,
                measures=(Measure("procurement_spend", "total_cost"),),
            )
        )

    def expenses_by_year(self) -> RollupResult:
        return self.rollup(
            RollupSpec(
                name="expenses_by_year",
                table="expenses",
                grain=TimeGrain.YEAR,
                measures=(Measure("expense_total", "amount"),),
            )
        )

    def revenue_vs_expenses_by_month(self, missing: str = "zero") -> RollupResult:
        return self.cross_grain_join(
            "revenue_vs_expenses_by_month",
            JoinSide("sales", Measure("revenue", "revenue")),
            JoinSide("expenses", Measure("expenses", "amount")),
            grain=TimeGrain.MONTH,
            missing=missing,
        )

    def expenses_vs_budget_by_department(self, missing: str = "zero") -> RollupResult:
        """Booked expenses (day grain) against budgets (month grain) per department."""
        return self.cross_grain_join(
            "expenses_vs_budget_by_department",
            JoinSide("expenses", Measure("expenses", "amount")),
            JoinSide("budget_actuals", Measure("budget", "budget_amount")),
            grain=TimeGrain.DAY,
            on=("department",),
            missing=missing,
        )

    def budget_variance(self) -> RollupResult:
        return self.variance()

    def supplier_delivery_performance(self) -> RollupResult:
        """Delivered orders per supplier with average delay and on-time rate."""
        orders = self.frame("purchase_orders")
        delivered = orders[orders["delivery_delay_days"].notna()]
        delivered = delivered.assign(
            on_time=(delivered["delivery_delay_days"] <= 0).astype("float64"),
            delivery_delay_days=delivered["delivery_delay_days"].astype("float64"),
        )
        return self.rollup(
            RollupSpec(
                name="supplier_delivery_performance",
                table="purchase_orders",
                group_by=("supplier_id",),
                measures=(
                    Measure("delivered_orders", "id", Aggregation.COUNT),
                    Measure("average_delay_days", "delivery_delay_days", Aggregation.MEAN),
                    Measure("max_delay_days", "delivery_delay_days", Aggregation.MAX),
                    Measure("on_time_rate", "on_time", Aggregation.MEAN),
                ),
            ),
            frame=delivered,
        )

    def inventory_below_reorder(self) -> RollupResult:
        """Latest snapshot per product where stock is under the reorder level."""
        snapshots = self.frame("inventory_snapshots")
        latest = (
            snapshots.sort_values(["product_id", "snapshot_date", "id"], kind="mergesort")
            .groupby("product_id", sort=True)
            .tail(1)
        )
        low = latest[latest["stock_on_hand"] < latest["reorder_level"]]
        low = low.assign(shortfall=low["reorder_level"] - low["stock_on_hand"])
        frame = low[
            ["product_id", "snapshot_date", "stock_on_hand", "reorder_level", "shortfall"]
        ].sort_values("product_id", kind="mergesort")
        return RollupResult(
            name="inventory_below_reorder",
            keys=["product_id"],
            measures=["snapshot_date", "stock_on_hand", "reorder_level", "shortfall"],
            frame=frame.reset_index(drop=True),
        )

    def gross_margin_by_category(self) -> RollupResult:
        """Revenue, cost of goods and margin per product category."""
        sales = self.sales_with_products()
        sales = sales.assign(cogs=sales["quantity_sold"] * sales["product_unit_cost"])
        base = self.rollup(
            RollupSpec(
                name="gross_margin_by_category",
                table="sales",
                group_by=("category",),
                measures=(Measure("revenue", "revenue"), Measure("cogs", "cogs")),
            ),
            frame=sales,
        )
        df = base.frame.copy()
        df.loc[df["category"] == UNKNOWN_CATEGORY, "cogs"] = np.nan
        df["gross_margin"] = df["revenue"] - df["cogs"]
        keys = [(c,) for c in df["category"]]
        df["margin_percent"] = _safe_ratio_percent(
            df["gross_margin"], df["revenue"], keys, "margin_percent"
        )
        return RollupResult(
            name=base.name,
            keys=base.keys,
            measures=base.measures + ["gross_margin", "margin_percent"],
            frame=df,
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def run(self, name: str, **kwargs: Any) -> RollupResult:
        """Run a named rollup."""
        if name not in self.NAMED_ROLLUPS:
            raise UnknownRollupError(name, list(self.NAMED_ROLLUPS))
        return getattr(self, name)(**kwargs)

    def run_many(
        self, names: Sequence[str] | None = None, max_workers: int = 4
    ) -> dict[str, RollupResult]:
        """Run several named rollups concurrently against the same dataset."""
        names = list(names or self.NAMED_ROLLUPS)
        for name in names:
            if name not in self.NAMED_ROLLUPS:
                raise UnknownRollupError(name, list(self.NAMED_ROLLUPS))

        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
            futures = {name: executor.submit(self.run, name) for name in names}
            return {name: future.result() for name, future in futures.items()}
