# -*- coding: utf-8 -*-
"""
MotoSuite Dashboard | Streamlit App (overview page)

Deployment notes (Streamlit Cloud):
- Put data/sales.json (and optionally data/inventory.json) in the repo, or set
  SALES_DATA_URL / INVENTORY_DATA_URL in st.secrets or the environment.
- Users can also upload JSON or CSV exports from the sidebar; accepted
  uploads are saved to the local data paths.
- Without any source the bundled sample document is shown.

Run:
    streamlit run app.py
"""

from __future__ import annotations

import traceback

import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from moto_suite.analytics import aggregate, kpi_summary, monthly_by_year, top_share
from moto_suite.config import ALL, PAGE_CONFIG, THEME_PRIMARY, THEME_SECONDARY
from moto_suite.filters import filter_by_metadata
from moto_suite.log import configure_logging
from moto_suite.state import set_last_error
from moto_suite.ui import bootstrap_page, render_kpi_row, render_page_header, sidebar_exports


# ==============================================================================
# 0) PAGE CONFIG (must be first Streamlit command)
# ==============================================================================
st.set_page_config(**PAGE_CONFIG)
configure_logging()


# ==============================================================================
# 1) CHARTS
# ==============================================================================
def monthly_chart(records_by_metadata, filtered, criteria) -> go.Figure:
    """Year-over-year lines when no year is picked, otherwise one year's bars."""
    if criteria.year == ALL:
        years = sorted(records_by_metadata["year"].unique().tolist())
        m = monthly_by_year(records_by_metadata, years)
        m["year"] = m["year"].astype(str)
        fig = px.line(
            m, x="name", y="revenue", color="year", markers=True,
            labels={"name": "", "revenue": "Выручка, ₽", "year": "Год"},
        )
        return fig

    m = aggregate(filtered, "month")
    fig = go.Figure()
    fig.add_trace(go.Bar(x=m["name"], y=m["revenue"], name="Выручка", marker_color=THEME_PRIMARY))
    fig.add_trace(go.Bar(x=m["name"], y=m["margin"], name="Прибыль", marker_color=THEME_SECONDARY))
    fig.add_trace(go.Scatter(x=m["name"], y=m["units"], name="Продажи (шт)", yaxis="y2", mode="lines+markers"))
    fig.update_layout(
        barmode="group",
        yaxis=dict(title="₽"),
        yaxis2=dict(title="шт", overlaying="y", side="right"),
        legend=dict(orientation="h"),
    )
    return fig


# ==============================================================================
# 2) MAIN APP
# ==============================================================================
def main() -> None:
    records, filtered, criteria = bootstrap_page()
    render_page_header("Обзор продаж", "Ключевые показатели дилерской сети", icon="🏍️")

    if records.empty:
        st.error("Нет данных. Загрузите JSON или CSV в боковой панели или задайте SALES_DATA_URL / SALES_DATA_PATH.")
        st.stop()

    render_kpi_row(kpi_summary(filtered))

    if filtered.empty:
        st.warning("Нет продаж для выбранных фильтров.")
        st.stop()

    st.subheader("📅 Динамика по месяцам")
    by_metadata = filter_by_metadata(records, criteria)
    st.plotly_chart(monthly_chart(by_metadata, filtered, criteria), use_container_width=True)

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("🏆 Топ-10 дилеров")
        td = top_share(filtered, "dealer", metric="revenue", top_n=10)
        fig = px.bar(
            td.sort_values("revenue"), x="revenue", y="dealer", orientation="h",
            labels={"revenue": "Выручка, ₽", "dealer": ""},
            hover_data={"share": ":.1f"},
        )
        st.plotly_chart(fig, use_container_width=True)

    with c2:
        st.subheader("🏍️ Топ моделей")
        tm = top_share(filtered, "model", metric="units", top_n=10)
        tm["Доля"] = tm["share"].map(lambda v: f"{v:.1f}%")
        st.dataframe(
            tm.rename(columns={"model": "Модель", "units": "Продажи (шт)"})[["Модель", "Продажи (шт)", "Доля"]],
            use_container_width=True,
            hide_index=True,
        )

    st.subheader("🏷️ Бренды")
    brands = aggregate(filtered, "brand")
    st.plotly_chart(
        px.pie(brands, names="name", values="revenue", hole=0.45),
        use_container_width=True,
    )

    title = "Sales overview" if criteria.year == ALL else f"Sales overview {criteria.year}"
    sidebar_exports(filtered, title)


# Entrypoint (streamlit runs this file as __main__)
if __name__ == "__main__":
    try:
        main()
    except Exception as ex:
        set_last_error(str(ex))
        st.error("Непредвиденная ошибка. Включите «Режим отладки» для подробностей.")
        with st.expander("Технические детали", expanded=False):
            st.code(traceback.format_exc())
