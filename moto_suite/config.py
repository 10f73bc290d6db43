# Configuration settings for MotoSuite

import os

import streamlit as st

APP_TITLE = "MotoSuite Dashboard"
APP_ICON = "🏍️"
APP_VERSION = "v1.4"

# Page configuration
PAGE_CONFIG = {
    "page_title": APP_TITLE,
    "page_icon": APP_ICON,
    "layout": "wide",
    "initial_sidebar_state": "expanded"
}

# Data sources
DATA_KIND_SALES = "sales"
DATA_KIND_INVENTORY = "inventory"

DEFAULT_SALES_PATH = "data/sales.json"
DEFAULT_INVENTORY_PATH = "data/inventory.json"

# Config keys (st.secrets or environment)
SOURCE_KEYS = {
    DATA_KIND_SALES: {"path": "SALES_DATA_PATH", "url": "SALES_DATA_URL"},
    DATA_KIND_INVENTORY: {"path": "INVENTORY_DATA_PATH", "url": "INVENTORY_DATA_URL"},
}

DEFAULT_PATHS = {
    DATA_KIND_SALES: DEFAULT_SALES_PATH,
    DATA_KIND_INVENTORY: DEFAULT_INVENTORY_PATH,
}

# Map defaults (Moscow)
DEFAULT_CENTER = (55.75, 37.62)
DEFAULT_ZOOM = 3

# Labels
ALL = "all"
UNKNOWN_CITY = "Не указан"
OTHER_BRAND = "Другое"
NO_VIN = "N/A"
DEFAULT_OFFER = "Base"

MONTH_LABELS = ["Янв", "Фев", "Мар", "Апр", "Май", "Июн", "Июл", "Авг", "Сен", "Окт", "Ноя", "Дек"]
WEEKDAY_LABELS = ["Вс", "Пн", "Вт", "Ср", "Чт", "Пт", "Сб"]

# Theme settings
THEME_PRIMARY = "#4f46e5"
THEME_SECONDARY = "#10b981"


def get_config_value(key: str, default: str = "") -> str:
    """Streamlit secrets first (cloud deploys), then environment variables."""
    try:
        value = st.secrets.get(key, "")
    except Exception:
        # No secrets.toml present
        value = ""
    return str(value) if value else os.getenv(key, default)
