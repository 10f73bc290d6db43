"""Common UI components and helpers for the MotoSuite Streamlit dashboard."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Sequence

import pandas as pd
import plotly.express as px
import streamlit as st

from moto_suite.analytics import KpiSummary
from moto_suite.config import (
    ALL,
    APP_TITLE,
    APP_VERSION,
    DATA_KIND_INVENTORY,
    DATA_KIND_SALES,
    DEFAULT_CENTER,
    DEFAULT_ZOOM,
)
from moto_suite.csv_io import CSVFormatError, export_csv, parse_csv
from moto_suite.data import DocumentFormatError, accept_document, accept_upload, load_records
from moto_suite.filters import FilterCriteria, apply_filters, available_options
from moto_suite.formatting import format_currency, format_number, format_percent, human_money
from moto_suite.geo import build_dealer_geo_points, geo_points_frame
from moto_suite.pdf_export import build_pdf_bytes
from moto_suite.state import (
    FILTER_KEYS,
    clear_last_error,
    current_criteria,
    get_last_error,
    init_session_state,
    reset_filters,
    set_last_error,
)

logger = logging.getLogger(__name__)

SOURCE_LABELS = {
    "UPLOAD": "Загружено пользователем",
    "LOCAL": "Локальный файл",
    "URL": "URL",
    "SAMPLE": "Демо-данные",
    "EMPTY": "Нет данных",
}


def inject_custom_css() -> None:
    st.markdown(
        """
        <style>
        .block-container { padding-top: 1.2rem; padding-bottom: 2rem; }
        div[data-testid="stMetricValue"] { font-size: 1.45rem; }
        .stDataFrame { border-radius: 8px; overflow: hidden; }
        section[data-testid="stSidebar"] { padding-top: 1rem; }
        .stButton>button, .stDownloadButton>button { border-radius: 10px; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_page_header(title: str, description: str = None, icon: str = "📊"):
    st.title(f"{icon} {title}")
    if description:
        st.markdown(f"*{description}*")
    st.divider()


# ==============================================================================
# SIDEBAR: DATA SOURCES
# ==============================================================================

def _handle_sales_upload(upload) -> None:
    payload = upload.getvalue()
    try:
        if upload.name.lower().endswith(".csv"):
            accept_document(DATA_KIND_SALES, parse_csv(payload))
        else:
            accept_upload(DATA_KIND_SALES, payload)
    except (CSVFormatError, DocumentFormatError) as e:
        logger.warning("Rejected sales upload %s: %s", upload.name, e)
        set_last_error(str(e))
        st.error(str(e))
        return
    st.success("Данные о продажах загружены.")


def _handle_inventory_upload(upload) -> None:
    try:
        accept_upload(DATA_KIND_INVENTORY, upload.getvalue())
    except DocumentFormatError as e:
        logger.warning("Rejected inventory upload %s: %s", upload.name, e)
        set_last_error(str(e))
        st.error(str(e))
        return
    st.success("Остатки загружены.")


def is_new_upload(state: MutableMapping, key: str, upload: Any) -> bool:
    """True once per uploaded file; re-uploading the same name still counts."""
    if upload is None:
        return False
    token = getattr(upload, "file_id", None) or upload.name
    if state.get(key) == token:
        return False
    state[key] = token
    return True


def sidebar_data_sources(sales_source: str, inventory_source: Optional[str] = None) -> None:
    """Uploaders, optional URLs and the active source of each document."""
    with st.sidebar:
        st.title(f"🏍️ {APP_TITLE}")
        st.caption(APP_VERSION)

        st.session_state["debug_mode"] = st.toggle("Режим отладки", value=st.session_state.get("debug_mode", False))

        with st.expander("📦 Данные", expanded=sales_source in ("SAMPLE", "EMPTY")):
            up = st.file_uploader("Продажи (JSON или CSV)", type=["json", "csv"], key="sales_uploader")
            if is_new_upload(st.session_state, "sales_upload_id", up):
                _handle_sales_upload(up)

            inv = st.file_uploader("Остатки (JSON)", type=["json"], key="inventory_uploader")
            if is_new_upload(st.session_state, "inventory_upload_id", inv):
                _handle_inventory_upload(inv)

            st.text_input("URL продаж (опционально)", key=f"{DATA_KIND_SALES}_url")
            st.text_input("URL остатков (опционально)", key=f"{DATA_KIND_INVENTORY}_url")

            st.caption(f"Продажи: {SOURCE_LABELS.get(sales_source, sales_source)}")
            if inventory_source is not None:
                st.caption(f"Остатки: {SOURCE_LABELS.get(inventory_source, inventory_source)}")


# ==============================================================================
# SIDEBAR: FILTERS
# ==============================================================================

def _all_label(noun: str):
    return lambda v: f"Все {noun}" if v == ALL else str(v)


def keep_valid_selection(state: MutableMapping, key: str, options: Sequence) -> None:
    # Drop selections that vanished after an upstream filter changed
    current = state.get(key)
    if isinstance(current, list):
        state[key] = [v for v in current if v in options]
    elif current != ALL and current not in options:
        state[key] = ALL


def filter_source(records: pd.DataFrame, inventory: Optional[pd.DataFrame] = None) -> pd.DataFrame:
    """Frame the sidebar options come from: inventory on stock pages, else sales."""
    return inventory if inventory is not None else records


def sidebar_filters(records: pd.DataFrame, show_dealer: bool = True) -> FilterCriteria:
    """Render filter widgets bound to session keys and return the criteria."""
    criteria = current_criteria()
    opts = available_options(records, criteria)

    with st.sidebar:
        st.divider()
        st.header("🔧 Фильтры")

        year_options = [ALL] + opts.years
        brand_options = [ALL] + opts.brands
        city_options = [ALL] + opts.cities
        dealer_options = [ALL] + opts.dealers
        for key, options in (
            (FILTER_KEYS["year"], year_options),
            (FILTER_KEYS["brand"], brand_options),
            (FILTER_KEYS["city"], city_options),
            (FILTER_KEYS["dealer"], dealer_options),
            (FILTER_KEYS["models"], opts.models),
            (FILTER_KEYS["offers"], opts.offers),
        ):
            keep_valid_selection(st.session_state, key, options)

        st.selectbox("Год", year_options, key=FILTER_KEYS["year"], format_func=_all_label("годы"))
        c1, c2 = st.columns(2)
        c1.date_input("С", key=FILTER_KEYS["start_date"], format="DD.MM.YYYY")
        c2.date_input("По", key=FILTER_KEYS["end_date"], format="DD.MM.YYYY")
        st.selectbox("Бренд", brand_options, key=FILTER_KEYS["brand"], format_func=_all_label("бренды"))
        st.selectbox("Город", city_options, key=FILTER_KEYS["city"], format_func=_all_label("города"))
        if show_dealer:
            st.selectbox("Дилер", dealer_options, key=FILTER_KEYS["dealer"], format_func=_all_label("дилеры"))
        st.multiselect("Модели", opts.models, key=FILTER_KEYS["models"], placeholder="Все модели")
        st.multiselect("Комплектации", opts.offers, key=FILTER_KEYS["offers"], placeholder="Все комплектации")

        st.button("Сбросить фильтры", on_click=reset_filters, use_container_width=True)

    return current_criteria()


# ==============================================================================
# KPIs / TABLES
# ==============================================================================

def render_kpi_row(k: KpiSummary) -> None:
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Выручка", human_money(k.revenue))
    c2.metric("Маржа", human_money(k.margin), delta=format_percent(k.margin_pct))
    c3.metric("Продажи (шт)", format_number(k.units))
    c4.metric("Средний чек", format_currency(k.avg_ticket))


def money_columns(df: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """Copy of ``df`` with the given columns rendered as rubles for display."""
    out = df.copy()
    for col in columns:
        if col in out.columns:
            out[col] = out[col].map(format_currency)
    return out


def csv_download_button(rows: Sequence[Mapping[str, Any]], filename: str, label: str = "⬇️ Экспорт CSV", key: str = None) -> None:
    payload = export_csv(rows, filename)
    if payload is None:
        st.caption("Нет данных для экспорта")
        return
    st.download_button(
        label,
        data=payload.data,
        file_name=payload.file_name,
        mime=payload.mime,
        key=key,
        use_container_width=True,
    )


def sidebar_exports(records: pd.DataFrame, title: str) -> None:
    with st.sidebar:
        st.divider()
        st.markdown("### 📤 Экспорт")
        try:
            pdf_bytes = build_pdf_bytes(records, title, subtitle=datetime.now().strftime("%d.%m.%Y"))
            st.download_button(
                "📄 PDF-отчет",
                data=pdf_bytes,
                file_name=f"Report_{title.replace(' ', '_')}.pdf",
                mime="application/pdf",
                use_container_width=True,
            )
        except Exception as e:
            logger.exception("PDF generation failed")
            st.warning(f"Ошибка формирования PDF: {e}")


def render_debug_panel(records: Optional[pd.DataFrame], source: str) -> None:
    with st.expander("🧪 Диагностика", expanded=False):
        st.write("Версия:", APP_VERSION)
        st.write("Источник:", source)
        if records is not None:
            st.write("Записей:", len(records))
            criteria = current_criteria()
            st.write("Фильтры:", "не заданы" if criteria.is_empty else criteria)
        last_error = get_last_error()
        if last_error:
            st.error(last_error)
            st.button("Скрыть ошибку", on_click=clear_last_error)
        if st.button("Очистить кэш (cache_data)"):
            st.cache_data.clear()
            st.rerun()


# ==============================================================================
# MAP
# ==============================================================================

def render_dealer_map(records: pd.DataFrame, value_column: str = "sold_price", value_label: str = "Выручка") -> None:
    """Dealer markers sized by units, colored by value."""
    points = build_dealer_geo_points(records, value_column=value_column)
    if not points:
        st.info("Нет дилеров для отображения на карте.")
        return

    df = geo_points_frame(points)
    df["value_label"] = df["value"].map(format_currency)
    fig = px.scatter_map(
        df,
        lat="lat",
        lon="lng",
        size="units",
        color="value",
        hover_name="name",
        hover_data={"city": True, "units": True, "value_label": True, "brands": True, "lat": False, "lng": False, "value": False},
        labels={"value": value_label, "value_label": value_label, "units": "Шт", "city": "Город", "brands": "Бренды"},
        color_continuous_scale="Viridis",
        size_max=28,
        zoom=DEFAULT_ZOOM,
        center={"lat": DEFAULT_CENTER[0], "lon": DEFAULT_CENTER[1]},
        height=560,
    )
    fig.update_layout(map_style="open-street-map", margin=dict(l=0, r=0, t=0, b=0))
    st.plotly_chart(fig, use_container_width=True)


def dealer_breakdown_rows(records: pd.DataFrame) -> List[Dict[str, Any]]:
    """Model/offer breakdown per dealer for the map's detail table."""
    rows = []
    for p in build_dealer_geo_points(records):
        for m in p.models:
            rows.append({
                "Дилер": p.name,
                "Город": p.city,
                "Модель": m.name,
                "Шт": m.count,
                "Комплектации": ", ".join(f"{name} ({n})" for name, n in m.offers),
            })
    return rows


# ==============================================================================
# PAGE BOOTSTRAP
# ==============================================================================

def bootstrap_page(show_dealer: bool = True, with_inventory: bool = False):
    """Shared page prologue: state, data sources, filters, debug panel.

    Returns ``(records, filtered, criteria)``; with ``with_inventory`` the
    inventory frame is appended.
    """
    init_session_state()
    inject_custom_css()

    records, source = load_records(DATA_KIND_SALES)
    inventory, inv_source = (None, None)
    if with_inventory:
        inventory, inv_source = load_records(DATA_KIND_INVENTORY)

    sidebar_data_sources(source, inv_source)
    criteria = sidebar_filters(filter_source(records, inventory), show_dealer=show_dealer)

    if st.session_state.get("debug_mode"):
        render_debug_panel(records, source)

    filtered = apply_filters(records, criteria)
    if with_inventory:
        return records, filtered, criteria, inventory
    return records, filtered, criteria
