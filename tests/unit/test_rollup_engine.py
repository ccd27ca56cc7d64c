"""
Unit tests for RollupEngine grouped, ranked and time-bucketed rollups.
"""

import logging
from dataclasses import replace
from datetime import date

import pandas as pd
import pytest

from ops_datagen.analytics import (
    Aggregation,
    Measure,
    RollupEngine,
    RollupSpec,
    TimeGrain,
)
from ops_datagen.analytics.rollup_engine import UNKNOWN_CATEGORY
from ops_datagen.shared.exceptions import UnknownRollupError


@pytest.fixture
def engine(tiny_dataset):
    return RollupEngine(tiny_dataset)


class TestGroupedRollups:
    """Single-entity grouped rollups."""

    def test_revenue_by_product(self, engine):
        records = engine.revenue_by_product().to_records()
        assert records == [
            {"product_id": 1, "revenue": 30.0, "units_sold": 3, "sale_count": 2},
            {"product_id": 2, "revenue": 20.0, "units_sold": 1, "sale_count": 1},
            {"product_id": 3, "revenue": 20.0, "units_sold": 5, "sale_count": 1},
        ]

    def test_revenue_by_region(self, engine):
        result = engine.revenue_by_region()
        assert result.keys == ["region"]
        assert {r["region"]: r["revenue"] for r in result} == {"North": 30.0, "South": 40.0}

    def test_order_count_by_supplier(self, engine):
        records = engine.order_count_by_supplier().to_records()
        assert [(r["supplier_id"], r["order_count"]) for r in records] == [(1, 2), (2, 1)]
        assert records[0]["total_cost"] == pytest.approx(70.0)
        assert records[1]["total_cost"] == pytest.approx(40.0)

    def test_expenses_by_department(self, engine):
        records = {r["department"]: r for r in engine.expenses_by_department()}
        assert records["IT"]["expense_total"] == pytest.approx(50.0)
        assert records["Sales"]["expense_count"] == 1
        assert records["Sales"]["average_expense"] == pytest.approx(100.0)

    def test_grand_total_without_keys(self, engine):
        result = engine.rollup(
            RollupSpec(
                name="total_revenue",
                table="sales",
                measures=(Measure("revenue", "revenue"), Measure("n", "id", Aggregation.COUNT)),
            )
        )
        assert result.to_records() == [{"revenue": 70.0, "n": 4}]


class TestTopN:
    """Ranking with deterministic tie breaks."""

    def test_ties_broken_by_product_id(self, engine):
        result = engine.top_products_by_revenue(n=2)
        assert [r["product_id"] for r in result] == [1, 2]

    def test_n_larger_than_population(self, engine):
        result = engine.top_products_by_revenue(n=10)
        assert [r["product_id"] for r in result] == [1, 2, 3]

    def test_ascending_order(self, engine):
        result = engine.rollup(
            RollupSpec(
                name="bottom_products",
                table="sales",
                group_by=("product_id",),
                measures=(Measure("revenue", "revenue"),),
                order_by=("revenue",),
                descending=False,
                tie_breaker="product_id",
                top_n=2,
            )
        )
        assert [r["product_id"] for r in result] == [2, 3]


class TestTimeBuckets:
    """Year and month buckets, sparse and dense."""

    def test_revenue_by_month_sparse(self, engine):
        result = engine.revenue_by_month()
        assert result.keys == ["year", "month"]
        assert result.key_tuples() == [(2023, 1), (2023, 3), (2024, 2)]
        assert [r["revenue"] for r in result] == [40.0, 10.0, 20.0]

    def test_revenue_by_month_dense(self, engine):
        result = engine.revenue_by_month(dense=True)
        assert len(result) == 24
        february = next(r for r in result if (r["year"], r["month"]) == (2023, 2))
        assert february["revenue"] == 0
        assert february["sale_count"] == 0
        assert result.total("revenue") == pytest.approx(70.0)

    def test_dense_mean_is_undefined(self, engine):
        result = engine.rollup(
            RollupSpec(
                name="avg_sale_by_month",
                table="sales",
                grain=TimeGrain.MONTH,
                dense=True,
                measures=(Measure("average", "revenue", Aggregation.MEAN),),
            )
        )
        february = next(r for r in result if (r["year"], r["month"]) == (2023, 2))
        assert february["average"] is None

    def test_dense_with_group_keys(self, engine):
        result = engine.rollup(
            RollupSpec(
                name="region_month",
                table="sales",
                group_by=("region",),
                grain=TimeGrain.MONTH,
                dense=True,
                measures=(Measure("revenue", "revenue"),),
            )
        )
        assert len(result) == 24 * 2
        assert result.total("revenue") == pytest.approx(70.0)

    def test_dense_keeps_rows_outside_period(self, engine):
        spec = RollupSpec(
            name="products_by_year",
            table="products",
            grain=TimeGrain.YEAR,
            measures=(Measure("n", "id", Aggregation.COUNT),),
        )
        sparse = engine.rollup(spec)
        assert sparse.key_tuples() == [(2022,)]

        dense = engine.rollup(replace(spec, dense=True))
        assert dense.key_tuples() == [(2022,), (2023,), (2024,)]
        assert [r["n"] for r in dense] == [3, 0, 0]

    def test_dense_with_group_keys_keeps_rows_outside_period(self, engine):
        result = engine.rollup(
            RollupSpec(
                name="products_by_category_year",
                table="products",
                group_by=("category",),
                grain=TimeGrain.YEAR,
                dense=True,
                measures=(Measure("n", "id", Aggregation.COUNT),),
            )
        )
        assert result.total("n") == 3
        assert len(result) == 3 * 2
        assert {r["category"]: r["n"] for r in result if r["year"] == 2022} == {"A": 2, "B": 1}

    def test_revenue_by_year(self, engine):
        assert engine.revenue_by_year().key_tuples() == [(2023,), (2024,)]
        assert [r["revenue"] for r in engine.revenue_by_year()] == [50.0, 20.0]

    def test_procurement_spend_by_year(self, engine):
        records = engine.procurement_spend_by_year().to_records()
        assert records == [
            {"year": 2023, "procurement_spend": pytest.approx(90.0)},
            {"year": 2024, "procurement_spend": pytest.approx(20.0)},
        ]

    def test_expenses_by_year(self, engine):
        records = engine.expenses_by_year().to_records()
        assert records == [{"year": 2023, "expense_total": pytest.approx(150.0)}]

    def test_day_grain(self, engine):
        result = engine.rollup(
            RollupSpec(
                name="revenue_by_day",
                table="sales",
                grain=TimeGrain.DAY,
                measures=(Measure("revenue", "revenue"),),
            )
        )
        assert result.keys == ["date"]
        assert result.to_records()[0]["date"] == date(2023, 1, 5)

    def test_undelivered_orders_fall_in_no_bucket(self, engine):
        result = engine.rollup(
            RollupSpec(
                name="deliveries_by_year",
                table="purchase_orders",
                date_column="actual_delivery_date",
                grain=TimeGrain.YEAR,
                measures=(Measure("orders", "id", Aggregation.COUNT),),
            )
        )
        assert result.to_records() == [{"year": 2023, "orders": 2}]


class TestOperationalRollups:
    """Supplier, inventory and margin rollups."""

    def test_supplier_delivery_performance(self, engine):
        records = {r["supplier_id"]: r for r in engine.supplier_delivery_performance()}
        assert records[1]["delivered_orders"] == 1
        assert records[1]["on_time_rate"] == pytest.approx(1.0)
        assert records[2]["average_delay_days"] == pytest.approx(5.0)
        assert records[2]["on_time_rate"] == pytest.approx(0.0)

    def test_inventory_below_reorder_uses_latest_snapshot(self, engine):
        records = engine.inventory_below_reorder().to_records()
        assert len(records) == 1
        assert records[0]["product_id"] == 2
        assert records[0]["shortfall"] == 17
        assert records[0]["snapshot_date"] == date(2023, 2, 28)

    def test_gross_margin_by_category(self, engine):
        records = {r["category"]: r for r in engine.gross_margin_by_category()}
        assert records["A"]["revenue"] == pytest.approx(50.0)
        assert records["A"]["cogs"] == pytest.approx(25.0)
        assert records["A"]["margin_percent"] == pytest.approx(50.0)
        assert records["B"]["gross_margin"] == pytest.approx(12.0)
        assert records["B"]["margin_percent"] == pytest.approx(60.0)


class TestDispatch:
    """Named dispatch and concurrent execution."""

    def test_run_by_name(self, engine):
        assert engine.run("revenue_by_region").name == "revenue_by_region"

    def test_run_with_arguments(self, engine):
        assert len(engine.run("top_products_by_revenue", n=1)) == 1

    def test_unknown_rollup(self, engine):
        with pytest.raises(UnknownRollupError, match="revenue_by_planet"):
            engine.run("revenue_by_planet")

    def test_unknown_table(self, engine):
        with pytest.raises(UnknownRollupError):
            engine.frame("customers")

    def test_run_many_matches_serial(self, engine):
        results = engine.run_many(max_workers=4)
        assert set(results) == set(RollupEngine.NAMED_ROLLUPS)
        for name, result in results.items():
            pd.testing.assert_frame_equal(result.frame, engine.run(name).frame)

    def test_run_many_rejects_unknown(self, engine):
        with pytest.raises(UnknownRollupError):
            engine.run_many(["revenue_by_region", "nope"])


class TestSources:
    """Engine inputs."""

    def test_source_frames_not_modified(self, engine):
        before = engine.frame("sales").copy()
        engine.run_many()
        pd.testing.assert_frame_equal(engine.frame("sales"), before)

    def test_mapping_of_frames(self, tiny_dataset):
        frames = tiny_dataset.to_frames()
        frames["sales"]["sale_date"] = frames["sales"]["sale_date"].dt.strftime("%Y-%m-%d")
        engine = RollupEngine(frames)
        assert engine.period is None
        assert engine.revenue_by_month().key_tuples() == [(2023, 1), (2023, 3), (2024, 2)]

    def test_dense_without_period_uses_observed_range(self, tiny_dataset):
        engine = RollupEngine(tiny_dataset.to_frames())
        result = engine.revenue_by_month(dense=True)
        assert result.key_tuples()[0] == (2023, 1)
        assert result.key_tuples()[-1] == (2024, 2)
        assert len(result) == 14

    def test_unknown_products_reported_under_unknown_category(self, tiny_dataset, caplog):
        frames = tiny_dataset.to_frames()
        frames["products"] = frames["products"][frames["products"]["id"] != 3]
        engine = RollupEngine(frames)
        with caplog.at_level(logging.WARNING, logger="ops_datagen.analytics.rollup_engine"):
            result = engine.gross_margin_by_category()

        records = {r["category"]: r for r in result.to_records()}
        assert result.total("revenue") == pytest.approx(70.0)
        assert records[UNKNOWN_CATEGORY]["revenue"] == pytest.approx(20.0)
        assert records[UNKNOWN_CATEGORY]["cogs"] is None
        assert records[UNKNOWN_CATEGORY]["margin_percent"] is None
        assert records["A"]["revenue"] == pytest.approx(30.0)
        assert "unknown products [3]" in caplog.text
