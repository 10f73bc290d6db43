"""Aggregates, KPIs, period comparison and inventory valuation."""
from datetime import date

import pytest

from moto_suite.analytics import (
    AGG_COLUMNS,
    aggregate,
    aggregate_inventory,
    compare_periods,
    cumulative_revenue,
    inventory_kpis,
    inventory_value,
    kpi_summary,
    model_matrix,
    model_offers,
    monthly_by_year,
    period_delta,
    search_records,
    top_share,
)
from moto_suite.config import MONTH_LABELS, WEEKDAY_LABELS
from moto_suite.data import flatten_records, records_frame


def test_single_dealer_aggregate(single_dealer_document):
    records = records_frame(flatten_records(single_dealer_document))
    rows = aggregate(records, "dealer")

    assert len(rows) == 1
    row = rows.iloc[0]
    assert row["name"] == "Dealer A"
    assert row["revenue"] == pytest.approx(200000)
    assert row["units"] == 2


def test_kpi_summary(sales_records):
    k = kpi_summary(sales_records)

    assert k.revenue == pytest.approx(2100000)
    assert k.cost == pytest.approx(1700000)
    assert k.margin == pytest.approx(400000)
    assert k.units == 6
    assert k.avg_ticket == pytest.approx(350000)
    assert k.margin_pct == pytest.approx(400000 / 2100000 * 100)
    assert (k.dealers, k.models) == (3, 3)


def test_kpi_summary_empty():
    k = kpi_summary(records_frame([]))
    assert k.revenue == 0 and k.units == 0 and k.avg_ticket == 0


def test_aggregate_dealer_ranking(sales_records):
    rows = aggregate(sales_records, "dealer")

    assert list(rows.columns) == ["name", "city"] + AGG_COLUMNS[1:]
    top = rows.iloc[0]
    assert top["name"] == "МОТОПАРК ООО (Тула)"
    assert top["city"] == "Тула"
    assert top["units"] == 3
    assert top["margin"] == pytest.approx(300000)
    assert rows["revenue"].is_monotonic_decreasing


def test_aggregate_shares_sum_to_hundred(sales_records):
    rows = aggregate(sales_records, "dealer")

    assert rows["share"].sum() == pytest.approx(100)
    assert rows.iloc[0]["share"] == pytest.approx(1300000 / 2100000 * 100)


def test_aggregate_zero_total_share_is_zero(inventory_records):
    rows = aggregate(inventory_records, "model")

    assert (rows["share"] == 0).all()
    assert (rows["avg_ticket"] == 0).all()


def test_aggregate_custom_sort(sales_records):
    rows = aggregate(sales_records, "dealer", sort_by="units", ascending=True)
    assert list(rows["units"]) == [1, 2, 3]


def test_aggregate_month_has_twelve_rows(sales_records):
    rows = aggregate(sales_records, "month")

    assert list(rows["name"]) == MONTH_LABELS
    assert rows.loc[0, "units"] == 2
    assert rows.loc[0, "revenue"] == pytest.approx(400000)
    assert rows.loc[2, "revenue"] == pytest.approx(800000)
    assert rows.loc[1, "units"] == 0
    assert rows["units"].sum() == 6


def test_aggregate_weekday_sunday_first(sales_records):
    rows = aggregate(sales_records, "weekday")

    assert list(rows["name"]) == WEEKDAY_LABELS
    assert rows["units"].sum() == 6
    # 07.01, 14.01 and 10.03.2024 were Sundays
    assert rows.loc[0, "units"] == 3


def test_aggregate_empty_records():
    empty = records_frame([])

    assert aggregate(empty, "model").empty
    month = aggregate(empty, "month")
    assert len(month) == 12
    assert month["revenue"].sum() == 0


def test_aggregate_rejects_unknown_key(sales_records):
    with pytest.raises(ValueError):
        aggregate(sales_records, "vin")


def test_top_share_uses_full_total(sales_records):
    top = top_share(sales_records, "dealer", top_n=1)

    assert len(top) == 1
    assert list(top.columns) == ["dealer", "revenue", "share"]
    assert top.iloc[0]["share"] == pytest.approx(1300000 / 2100000 * 100)


def test_top_share_by_units(sales_records):
    top = top_share(sales_records, "model", metric="units", top_n=2)

    assert top.iloc[0]["model"] == "VOGE 300DS"
    assert top.iloc[0]["units"] == 3
    assert top.iloc[0]["share"] == pytest.approx(50)


def test_monthly_by_year_long_format(sales_records):
    m = monthly_by_year(sales_records, [2023, 2024])

    assert len(m) == 24
    row = m[(m["year"] == 2023) & (m["month"] == 6)].iloc[0]
    assert row["revenue"] == pytest.approx(500000)


def test_cumulative_revenue_ends_at_total(sales_records):
    cum = cumulative_revenue(sales_records)
    assert cum["cumulative"].iloc[-1] == pytest.approx(2100000)


def test_model_matrix_columns(sales_records):
    mm = model_matrix(sales_records)

    assert list(mm.columns) == ["name", "avg_price", "margin_pct", "units"]
    row = mm[mm["name"] == "Loncin LX200"].iloc[0]
    assert row["avg_price"] == 200000
    assert row["margin_pct"] == 10


def test_model_offers_sorted_by_units(sales_records):
    offers = model_offers(sales_records, "VOGE 300DS")
    assert list(offers["name"]) == ["Base", "Premium"]


def test_period_delta_guards_zero_base():
    assert period_delta(0, 0).percent == 0
    assert period_delta(0, 5).percent == 100
    d = period_delta(200, 150)
    assert d.diff == -50
    assert d.percent == pytest.approx(-25)


def test_compare_periods(sales_records):
    cmp = compare_periods(
        sales_records,
        (date(2023, 1, 1), date(2023, 12, 31)),
        (date(2024, 1, 1), date(2024, 12, 31)),
    )

    assert cmp.first.revenue == pytest.approx(500000)
    assert cmp.second.revenue == pytest.approx(1600000)
    assert cmp.units.diff == 4
    assert cmp.units.percent == pytest.approx(400)
    assert cmp.profit.diff == pytest.approx(200000)
    assert len(cmp.monthly) == 12
    assert cmp.monthly.loc[0, "p2_revenue"] == pytest.approx(400000)
    assert cmp.monthly.loc[6, "p1_units"] == 1


def test_compare_periods_open_range_is_empty(sales_records):
    cmp = compare_periods(sales_records, (None, None), (date(2024, 12, 31), date(2024, 12, 31)))

    assert cmp.first.units == 0
    assert cmp.second.units == 1
    assert cmp.revenue.percent == 100


def test_search_records(sales_records):
    assert list(search_records(sales_records, "z1")["vin"]) == ["Z1"]
    assert len(search_records(sales_records, "авилон")) == 2
    assert len(search_records(sales_records, "300ds")) == 3
    assert len(search_records(sales_records, "  ", limit=4)) == 4


def test_inventory_value_prefers_sales_history(inventory_records, sales_records):
    valued = inventory_value(inventory_records, sales_records)
    by_model = valued.groupby("model")["stock_value"].first()

    assert by_model["VOGE 300DS"] == pytest.approx((400000 + 400000 + 500000) / 3)
    assert by_model["VOGE 650DS"] == pytest.approx(360000)


def test_aggregate_inventory_by_model(inventory_records, sales_records):
    rows = aggregate_inventory(inventory_records, sales_records, "model")

    assert list(rows["name"]) == ["VOGE 300DS", "VOGE 650DS"]
    assert rows.iloc[0]["units"] == 2
    assert rows.iloc[0]["avg_cost"] == pytest.approx(1300000 / 3)


def test_inventory_kpis(inventory_records, sales_records):
    k = inventory_kpis(inventory_records, sales_records)

    assert k["units"] == 3
    assert k["dealers"] == 1
    assert k["models"] == 2
    assert k["stock_value"] == pytest.approx(2 * 1300000 / 3 + 360000)


def test_inventory_without_sales_uses_buy_price(inventory_records):
    k = inventory_kpis(inventory_records, records_frame([]))
    assert k["stock_value"] == pytest.approx(1000000)


def test_inventory_value_ignores_zero_sales_average(inventory_records, sales_records):
    free = sales_records.copy()
    free.loc[free["model"] == "VOGE 300DS", "sold_price"] = 0.0

    valued = inventory_value(inventory_records, free)
    by_model = valued.groupby("model")["stock_value"].first()

    assert by_model["VOGE 300DS"] == pytest.approx(320000)
    assert inventory_kpis(inventory_records, free)["stock_value"] == pytest.approx(1000000)
