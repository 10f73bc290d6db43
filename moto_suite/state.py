# -*- coding: utf-8 -*-
"""
MotoSuite | State Management Module

Session state initialization, the last-error slot and the sidebar
filter selection.
"""

from __future__ import annotations
from datetime import date
from typing import Optional

import streamlit as st

from moto_suite.config import ALL
from moto_suite.filters import FilterCriteria

# ==============================================================================
# STATE CONSTANTS
# ==============================================================================

FILTER_KEYS = {
    "year": "flt_year",
    "brand": "flt_brand",
    "city": "flt_city",
    "dealer": "flt_dealer",
    "models": "flt_models",
    "offers": "flt_offers",
    "start_date": "flt_start",
    "end_date": "flt_end",
}

FILTER_DEFAULTS = {
    "year": ALL,
    "brand": ALL,
    "city": ALL,
    "dealer": ALL,
    "models": [],
    "offers": [],
    "start_date": None,
    "end_date": None,
}


# ==============================================================================
# SESSION STATE INITIALIZATION
# ==============================================================================

def init_session_state() -> None:
    """Initialize all required session state variables."""
    if "debug_mode" not in st.session_state:
        st.session_state["debug_mode"] = False

    if "last_error" not in st.session_state:
        st.session_state["last_error"] = ""

    for kind in ("sales", "inventory"):
        if f"uploaded_{kind}" not in st.session_state:
            st.session_state[f"uploaded_{kind}"] = None
        if f"{kind}_url" not in st.session_state:
            st.session_state[f"{kind}_url"] = ""

    for name, key in FILTER_KEYS.items():
        if key not in st.session_state:
            st.session_state[key] = FILTER_DEFAULTS[name]
        else:
            # Widget keys are dropped on page switch unless reassigned
            st.session_state[key] = st.session_state[key]


# ==============================================================================
# FILTERS
# ==============================================================================

def _as_date(value) -> Optional[date]:
    return value if isinstance(value, date) else None


def current_criteria() -> FilterCriteria:
    """Build criteria from the sidebar widgets' session keys."""
    s = st.session_state
    return FilterCriteria(
        year=s.get(FILTER_KEYS["year"], ALL),
        brand=s.get(FILTER_KEYS["brand"], ALL),
        city=s.get(FILTER_KEYS["city"], ALL),
        dealer=s.get(FILTER_KEYS["dealer"], ALL),
        models=s.get(FILTER_KEYS["models"]) or (),
        offers=s.get(FILTER_KEYS["offers"]) or (),
        start_date=_as_date(s.get(FILTER_KEYS["start_date"])),
        end_date=_as_date(s.get(FILTER_KEYS["end_date"])),
    )


def reset_filters() -> None:
    for name, key in FILTER_KEYS.items():
        st.session_state[key] = FILTER_DEFAULTS[name]


# ==============================================================================
# ERROR HANDLING
# ==============================================================================

def set_last_error(msg: str) -> None:
    """Set last error message in session state."""
    st.session_state["last_error"] = msg


def get_last_error() -> str:
    return st.session_state.get("last_error", "")


def clear_last_error() -> None:
    st.session_state["last_error"] = ""
