# -*- coding: utf-8 -*-
"""
MotoSuite | Analytics Module

Group-by aggregates, KPI summaries, period comparison and inventory
valuation over the flat record frame. Every function accepts an empty
frame and returns zeros or an empty result instead of raising.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, Optional, Tuple

import numpy as np
import pandas as pd
import streamlit as st

from moto_suite.config import MONTH_LABELS, WEEKDAY_LABELS
from moto_suite.filters import end_of_day

# ==============================================================================
# CONFIGURATION
# ==============================================================================

GROUP_KEYS = ("dealer", "city", "brand", "model", "offer", "month", "weekday")
CALENDAR_KEYS = {"month": MONTH_LABELS, "weekday": WEEKDAY_LABELS}

AGG_COLUMNS = ["name", "units", "revenue", "margin", "avg_ticket", "margin_pct", "share"]
INVENTORY_COLUMNS = ["name", "units", "stock_value", "avg_cost"]

Period = Tuple[Optional[date], Optional[date]]


# ==============================================================================
# DATA STRUCTURES
# ==============================================================================

@dataclass
class KpiSummary:
    revenue: float = 0.0
    cost: float = 0.0
    margin: float = 0.0
    units: int = 0
    avg_ticket: float = 0.0
    margin_pct: float = 0.0
    dealers: int = 0
    models: int = 0


@dataclass
class PeriodStats:
    start: Optional[date] = None
    end: Optional[date] = None
    revenue: float = 0.0
    units: int = 0
    profit: float = 0.0


@dataclass
class Delta:
    diff: float = 0.0
    percent: float = 0.0


@dataclass
class PeriodComparison:
    first: PeriodStats
    second: PeriodStats
    revenue: Delta
    units: Delta
    profit: Delta
    monthly: pd.DataFrame = field(default_factory=pd.DataFrame)


# ==============================================================================
# HELPERS
# ==============================================================================

def _safe_div(num, den, scale: float = 1.0):
    """Element-wise num/den*scale with 0 where den is 0."""
    num = np.asarray(num, dtype=float)
    den = np.asarray(den, dtype=float)
    out = np.zeros_like(num, dtype=float)
    np.divide(num, den, out=out, where=den != 0)
    return out * scale


def weekday_index(sale_date: pd.Series) -> pd.Series:
    """Day of week with Sunday as 0."""
    return (sale_date.dt.dayofweek + 1) % 7


def _group_series(records: pd.DataFrame, group_key: str) -> pd.Series:
    if group_key == "weekday":
        return weekday_index(records["sale_date"])
    return records[group_key]


# ==============================================================================
# KPIs
# ==============================================================================

def kpi_summary(records: pd.DataFrame) -> KpiSummary:
    if records is None or records.empty:
        return KpiSummary()

    revenue = float(records["sold_price"].sum())
    cost = float(records["buy_price"].sum())
    margin = float(records["margin"].sum())
    units = int(len(records))
    return KpiSummary(
        revenue=revenue,
        cost=cost,
        margin=margin,
        units=units,
        avg_ticket=revenue / units if units else 0.0,
        margin_pct=margin / revenue * 100 if revenue else 0.0,
        dealers=int(records["dealer"].nunique()),
        models=int(records["model"].nunique()),
    )


# ==============================================================================
# AGGREGATION
# ==============================================================================

def aggregate(
    records: pd.DataFrame,
    group_key: str,
    sort_by: Optional[str] = None,
    ascending: bool = False,
) -> pd.DataFrame:
    """Units, revenue, margin, average ticket, margin % and revenue share per group.

    ``month`` always returns 12 rows and ``weekday`` 7 rows (Sunday first) in
    calendar order unless ``sort_by`` is given. Other keys are ordered by
    revenue, descending, by default.
    """
    if group_key not in GROUP_KEYS:
        raise ValueError(f"Unknown group key {group_key!r}; expected one of {GROUP_KEYS}")

    if records is None or records.empty:
        g = pd.DataFrame(columns=["units", "revenue", "margin"], dtype=float)
    else:
        g = records.groupby(_group_series(records, group_key), sort=False).agg(
            units=("sold_price", "size"),
            revenue=("sold_price", "sum"),
            margin=("margin", "sum"),
        )

    if group_key in CALENDAR_KEYS:
        labels = CALENDAR_KEYS[group_key]
        g = g.reindex(range(len(labels)), fill_value=0)
        g["name"] = labels
    else:
        g["name"] = g.index.astype(str) if len(g) else pd.Series(dtype=str)

    g["units"] = g["units"].astype(int)
    g["revenue"] = g["revenue"].astype(float)
    g["margin"] = g["margin"].astype(float)
    g["avg_ticket"] = _safe_div(g["revenue"], g["units"])
    g["margin_pct"] = _safe_div(g["margin"], g["revenue"], 100)
    total = float(g["revenue"].sum())
    g["share"] = g["revenue"] / total * 100 if total else 0.0

    out = g.reset_index(drop=True)[AGG_COLUMNS].copy()

    if group_key == "dealer" and not out.empty:
        cities = records.groupby("dealer", sort=False)["city"].first()
        out.insert(1, "city", out["name"].map(cities).fillna(""))

    if sort_by is None and group_key not in CALENDAR_KEYS:
        sort_by = "revenue"
    if sort_by is not None:
        out = out.sort_values(sort_by, ascending=ascending, kind="stable").reset_index(drop=True)
    return out


@st.cache_data(show_spinner=False)
def top_share(records: pd.DataFrame, dim: str, metric: str = "revenue", top_n: int = 10) -> pd.DataFrame:
    """Top N of ``dim`` by revenue or units, with share of the whole filtered set."""
    if records is None or records.empty:
        return pd.DataFrame(columns=[dim, metric, "share"])

    if metric == "units":
        values = records.groupby(dim).size()
    else:
        values = records.groupby(dim)["sold_price"].sum()
    denom = float(values.sum())

    t = values.sort_values(ascending=False, kind="stable").head(top_n).rename(metric).reset_index()
    t["share"] = (t[metric] / denom * 100) if denom else 0.0
    return t


def monthly_by_year(records: pd.DataFrame, years: Iterable[int]) -> pd.DataFrame:
    """Long month x year frame (12 rows per year) for year-over-year lines."""
    frames = []
    for year in years:
        subset = records[records["year"] == int(year)] if records is not None and not records.empty else records
        m = aggregate(subset, "month")
        m.insert(0, "year", int(year))
        m.insert(1, "month", list(range(12)))
        frames.append(m[["year", "month", "name", "revenue", "margin", "units"]])
    if not frames:
        return pd.DataFrame(columns=["year", "month", "name", "revenue", "margin", "units"])
    return pd.concat(frames, ignore_index=True)


def monthly_timeline(records: pd.DataFrame) -> pd.DataFrame:
    """Chronological year-month totals."""
    cols = ["date", "revenue", "margin", "units"]
    if records is None or records.empty:
        return pd.DataFrame(columns=cols)
    m = records.groupby(["year", "month"]).agg(
        revenue=("sold_price", "sum"),
        margin=("margin", "sum"),
        units=("sold_price", "size"),
    ).reset_index()
    m["date"] = pd.to_datetime(
        m["year"].astype(str) + "-" + (m["month"] + 1).astype(str) + "-01",
        errors="coerce",
    )
    return m.dropna(subset=["date"]).sort_values("date")[cols].reset_index(drop=True)


def cumulative_revenue(records: pd.DataFrame) -> pd.DataFrame:
    """Running revenue across calendar months."""
    m = aggregate(records, "month")[["name", "revenue"]]
    m["cumulative"] = m["revenue"].cumsum()
    return m


def model_matrix(records: pd.DataFrame) -> pd.DataFrame:
    """Per-model average price vs margin %, sized by units."""
    cols = ["name", "avg_price", "margin_pct", "units"]
    if records is None or records.empty:
        return pd.DataFrame(columns=cols)
    g = aggregate(records, "model")
    g["avg_price"] = g["avg_ticket"].round()
    g["margin_pct"] = g["margin_pct"].round()
    return g[cols]


# ==============================================================================
# PERIOD COMPARISON
# ==============================================================================

def period_delta(base: float, value: float) -> Delta:
    """Change from ``base`` to ``value``; 100% when growing from zero."""
    diff = value - base
    if base == 0:
        percent = 0.0 if value == 0 else 100.0
    else:
        percent = diff / base * 100
    return Delta(diff=float(diff), percent=float(percent))


def _period_records(records: pd.DataFrame, period: Period) -> pd.DataFrame:
    start, end = period
    if records is None or records.empty or start is None or end is None:
        return records.iloc[0:0] if records is not None else pd.DataFrame()
    mask = (records["sale_date"] >= pd.Timestamp(start).normalize()) & (records["sale_date"] <= end_of_day(end))
    return records[mask]


def compare_periods(records: pd.DataFrame, first: Period, second: Period) -> PeriodComparison:
    """Revenue, units and profit of two inclusive date ranges.

    A period with a missing start or end counts as empty. Deltas are second
    relative to first.
    """
    r1 = _period_records(records, first)
    r2 = _period_records(records, second)

    def stats(subset: pd.DataFrame, period: Period) -> PeriodStats:
        k = kpi_summary(subset)
        return PeriodStats(start=period[0], end=period[1], revenue=k.revenue, units=k.units, profit=k.margin)

    s1, s2 = stats(r1, first), stats(r2, second)

    m1 = aggregate(r1, "month")
    m2 = aggregate(r2, "month")
    monthly = pd.DataFrame({
        "name": MONTH_LABELS,
        "p1_revenue": m1["revenue"],
        "p1_profit": m1["margin"],
        "p1_units": m1["units"],
        "p2_revenue": m2["revenue"],
        "p2_profit": m2["margin"],
        "p2_units": m2["units"],
    })

    return PeriodComparison(
        first=s1,
        second=s2,
        revenue=period_delta(s1.revenue, s2.revenue),
        units=period_delta(s1.units, s2.units),
        profit=period_delta(s1.profit, s2.profit),
        monthly=monthly,
    )


# ==============================================================================
# SEARCH
# ==============================================================================

def search_records(records: pd.DataFrame, query: str, limit: int = 50) -> pd.DataFrame:
    """Case-insensitive substring search over VIN, dealer and model."""
    if records is None or records.empty:
        return records.copy() if records is not None else pd.DataFrame()
    q = (query or "").strip()
    if not q:
        return records.head(limit).copy()
    mask = pd.Series(False, index=records.index)
    for col in ("vin", "dealer", "model"):
        mask |= records[col].astype(str).str.contains(q, case=False, regex=False)
    return records[mask].head(limit).copy()


# ==============================================================================
# INVENTORY
# ==============================================================================

def model_pricing(sales_records: pd.DataFrame) -> pd.Series:
    """Average sold price per model from sales history."""
    if sales_records is None or sales_records.empty:
        return pd.Series(dtype=float)
    return sales_records.groupby("model")["sold_price"].mean()


def inventory_value(inventory_records: pd.DataFrame, sales_records: pd.DataFrame) -> pd.DataFrame:
    """Add ``stock_value``: the model's average sold price, else the unit's buy price."""
    if inventory_records is None or inventory_records.empty:
        out = inventory_records.copy() if inventory_records is not None else pd.DataFrame()
        out["stock_value"] = pd.Series(dtype=float)
        return out
    pricing = model_pricing(sales_records)
    out = inventory_records.copy()
    out["stock_value"] = (
        out["model"].map(pricing).replace(0, np.nan).fillna(out["buy_price"]).fillna(0).astype(float)
    )
    return out


def aggregate_inventory(
    inventory_records: pd.DataFrame,
    sales_records: pd.DataFrame,
    group_key: str = "dealer",
    sort_by: str = "stock_value",
    ascending: bool = False,
) -> pd.DataFrame:
    """Units, stock value and average cost per dealer, model or offer."""
    valued = inventory_value(inventory_records, sales_records)
    if valued.empty:
        return pd.DataFrame(columns=INVENTORY_COLUMNS)

    g = valued.groupby(group_key).agg(
        units=("stock_value", "size"),
        stock_value=("stock_value", "sum"),
    ).reset_index().rename(columns={group_key: "name"})
    g["avg_cost"] = _safe_div(g["stock_value"], g["units"])
    return g[INVENTORY_COLUMNS].sort_values(sort_by, ascending=ascending, kind="stable").reset_index(drop=True)


def inventory_kpis(inventory_records: pd.DataFrame, sales_records: pd.DataFrame) -> Dict[str, float]:
    valued = inventory_value(inventory_records, sales_records)
    if valued.empty:
        return {"units": 0, "stock_value": 0.0, "dealers": 0, "models": 0}
    return {
        "units": int(len(valued)),
        "stock_value": float(valued["stock_value"].sum()),
        "dealers": int(valued["dealer"].nunique()),
        "models": int(valued["model"].nunique()),
    }


def model_offers(records: pd.DataFrame, model: str) -> pd.DataFrame:
    """Offer breakdown of one model, most units first."""
    subset = records[records["model"] == model] if records is not None and not records.empty else records
    return aggregate(subset, "offer", sort_by="units")
