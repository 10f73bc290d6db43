# -*- coding: utf-8 -*-
"""
MotoSuite | Report rows

Russian-labeled rows for the CSV exports of the dealer, model and
inventory tables. Money stays numeric so the files re-import cleanly.
"""

from __future__ import annotations
from typing import Any, Dict, List

import pandas as pd

from moto_suite.analytics import aggregate, aggregate_inventory


def dealers_report_rows(records: pd.DataFrame, sort_by: str = "revenue", ascending: bool = False) -> List[Dict[str, Any]]:
    table = aggregate(records, "dealer", sort_by=sort_by, ascending=ascending)
    return [
        {
            "Дилер": row.name,
            "Город": row.city,
            "Продажи (шт)": int(row.units),
            "Выручка (руб)": float(row.revenue),
            "Маржа (руб)": float(row.margin),
            "Рентабельность (%)": round(float(row.margin_pct), 2),
            "Средний чек (руб)": float(row.avg_ticket),
            "Доля рынка (%)": round(float(row.share), 2),
        }
        for row in table.itertuples(index=False)
    ]


def models_report_rows(records: pd.DataFrame) -> List[Dict[str, Any]]:
    table = aggregate(records, "model", sort_by="revenue")
    return [
        {
            "Модель": row.name,
            "Продажи (шт)": int(row.units),
            "Выручка (руб)": float(row.revenue),
            "Средняя цена (руб)": float(row.avg_ticket),
            "Доля выручки (%)": round(float(row.share), 2),
        }
        for row in table.itertuples(index=False)
    ]


def inventory_report_rows(
    inventory_records: pd.DataFrame,
    sales_records: pd.DataFrame,
    group_key: str = "dealer",
) -> List[Dict[str, Any]]:
    label = {"dealer": "Дилер", "model": "Модель", "offer": "Комплектация"}.get(group_key, group_key)
    table = aggregate_inventory(inventory_records, sales_records, group_key)
    return [
        {
            label: row.name,
            "Остаток (шт)": int(row.units),
            "Стоимость склада (руб)": float(row.stock_value),
            "Средняя стоимость (руб)": float(row.avg_cost),
        }
        for row in table.itertuples(index=False)
    ]
