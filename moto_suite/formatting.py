# -*- coding: utf-8 -*-
"""
MotoSuite | Formatting helpers

ru-RU style number and money formatting for KPI cards, tables and reports.
"""

from __future__ import annotations
import math

NBSP = "\u00a0"
CURRENCY_SIGN = "\u20bd"


def _group(text: str) -> str:
    # "1,234,567.5" -> "1 234 567,5"
    return text.replace(",", NBSP).replace(".", ",")


def format_currency(x: float) -> str:
    """Rubles without kopecks: 1234567 -> '1 234 567 ₽'."""
    try:
        if not math.isfinite(x):
            return str(x)
        return f"{_group(f'{x:,.0f}')}{NBSP}{CURRENCY_SIGN}"
    except (TypeError, ValueError):
        return str(x)


def format_number(x: float) -> str:
    """Grouped number with up to three fraction digits: 1234.5 -> '1 234,5'."""
    try:
        if not math.isfinite(x):
            return str(x)
        text = f"{x:,.3f}".rstrip("0").rstrip(".")
        if text in ("-0", ""):
            text = "0"
        return _group(text)
    except (TypeError, ValueError):
        return str(x)


def human_money(x: float) -> str:
    """Compact money for KPI cards: '1,25 млн ₽', '3,40 млрд ₽'."""
    try:
        if abs(x) >= 1e9:
            return f"{_group(f'{x / 1e9:,.2f}')}{NBSP}млрд{NBSP}{CURRENCY_SIGN}"
        if abs(x) >= 1e6:
            return f"{_group(f'{x / 1e6:,.2f}')}{NBSP}млн{NBSP}{CURRENCY_SIGN}"
        return format_currency(x)
    except (TypeError, ValueError):
        return str(x)


def format_percent(x: float, digits: int = 1) -> str:
    try:
        return f"{x:.{digits}f}%".replace(".", ",")
    except (TypeError, ValueError):
        return str(x)
