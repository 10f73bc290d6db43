# -*- coding: utf-8 -*-
"""
MotoSuite | Filters

Criteria filtering over the flat record frame and the dependent option
lists shown in the sidebar.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Any, FrozenSet, Iterable, List, Optional, Union

import pandas as pd

from moto_suite.config import ALL


@dataclass(frozen=True)
class FilterCriteria:
    """Sidebar selection. ``"all"`` and empty sets mean no constraint."""

    year: Union[int, str] = ALL
    brand: str = ALL
    city: str = ALL
    dealer: str = ALL
    models: FrozenSet[str] = field(default_factory=frozenset)
    offers: FrozenSet[str] = field(default_factory=frozenset)
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def __post_init__(self):
        # Accept lists from multiselect widgets
        object.__setattr__(self, "models", frozenset(self.models or ()))
        object.__setattr__(self, "offers", frozenset(self.offers or ()))

    @property
    def is_empty(self) -> bool:
        return self == FilterCriteria()


@dataclass
class FilterOptions:
    years: List[int] = field(default_factory=list)
    brands: List[str] = field(default_factory=list)
    cities: List[str] = field(default_factory=list)
    dealers: List[str] = field(default_factory=list)
    models: List[str] = field(default_factory=list)
    offers: List[str] = field(default_factory=list)


def _is_all(value: Any) -> bool:
    return value is None or value == ALL


def _sorted_unique(values: Iterable) -> List:
    return sorted(set(values))


def filter_by_metadata(records: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    """Brand, city, dealer, model and offer constraints."""
    if records is None or records.empty:
        return records.copy() if records is not None else pd.DataFrame()

    mask = pd.Series(True, index=records.index)
    if not _is_all(criteria.brand):
        mask &= records["brand"] == criteria.brand
    if not _is_all(criteria.city):
        mask &= records["city"] == criteria.city
    if not _is_all(criteria.dealer):
        mask &= records["dealer"] == criteria.dealer
    if criteria.models:
        mask &= records["model"].isin(criteria.models)
    if criteria.offers:
        mask &= records["offer"].isin(criteria.offers)
    return records[mask].copy()


def end_of_day(value: date) -> pd.Timestamp:
    """Inclusive upper bound for an end date: 23:59:59.999 of that day."""
    return pd.Timestamp(value).normalize() + pd.Timedelta(days=1) - pd.Timedelta(milliseconds=1)


def filter_by_date(records: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    """Year plus optional inclusive date range."""
    if records is None or records.empty:
        return records.copy() if records is not None else pd.DataFrame()

    mask = pd.Series(True, index=records.index)
    if not _is_all(criteria.year):
        mask &= records["year"] == int(criteria.year)
    if criteria.start_date is not None:
        mask &= records["sale_date"] >= pd.Timestamp(criteria.start_date).normalize()
    if criteria.end_date is not None:
        mask &= records["sale_date"] <= end_of_day(criteria.end_date)
    return records[mask].copy()


def apply_filters(records: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    return filter_by_date(filter_by_metadata(records, criteria), criteria)


def available_options(records: pd.DataFrame, criteria: FilterCriteria) -> FilterOptions:
    """Option lists for the sidebar.

    Years, brands and cities come from the whole dataset; dealers narrow by
    city, models by brand and city, offers by brand, city and chosen models.
    """
    if records is None or records.empty:
        return FilterOptions()

    scoped = records
    if not _is_all(criteria.city):
        scoped = scoped[scoped["city"] == criteria.city]
    dealers = _sorted_unique(scoped["dealer"])

    if not _is_all(criteria.brand):
        scoped = scoped[scoped["brand"] == criteria.brand]
    models = _sorted_unique(scoped["model"])

    if criteria.models:
        scoped = scoped[scoped["model"].isin(criteria.models)]
    offers = _sorted_unique(scoped["offer"])

    return FilterOptions(
        years=[int(y) for y in _sorted_unique(records["year"])],
        brands=_sorted_unique(records["brand"]),
        cities=_sorted_unique(records["city"]),
        dealers=dealers,
        models=models,
        offers=offers,
    )
