"""Dealers - ranking table, dealer drill-down and map"""

import plotly.express as px
import streamlit as st

from moto_suite.analytics import aggregate, kpi_summary
from moto_suite.config import APP_ICON
from moto_suite.formatting import format_currency, format_percent
from moto_suite.log import configure_logging
from moto_suite.reports import dealers_report_rows
from moto_suite.ui import (
    bootstrap_page,
    csv_download_button,
    dealer_breakdown_rows,
    money_columns,
    render_dealer_map,
    render_kpi_row,
    render_page_header,
    sidebar_exports,
)

st.set_page_config(page_title="Дилеры", page_icon=APP_ICON, layout="wide")
configure_logging()

SORT_FIELDS = {
    "Выручка": "revenue",
    "Продажи (шт)": "units",
    "Маржа": "margin",
    "Рентабельность": "margin_pct",
    "Средний чек": "avg_ticket",
    "Доля рынка": "share",
    "Название": "name",
    "Город": "city",
}

records, filtered, criteria = bootstrap_page()

render_page_header("Дилеры", "Рейтинг дилеров, карточка дилера и карта сети", icon="🏪")

if filtered.empty:
    st.warning("Нет продаж для выбранных фильтров.")
    st.stop()

tab_table, tab_detail, tab_map = st.tabs(["📋 Рейтинг", "🔍 Карточка дилера", "🗺️ Карта"])

with tab_table:
    c1, c2, c3 = st.columns([2, 1, 1])
    sort_label = c1.selectbox("Сортировка", list(SORT_FIELDS), index=0)
    ascending = c2.toggle("По возрастанию", value=False)
    sort_by = SORT_FIELDS[sort_label]

    table = aggregate(filtered, "dealer", sort_by=sort_by, ascending=ascending)
    view = money_columns(table, ["revenue", "margin", "avg_ticket"])
    view["margin_pct"] = table["margin_pct"].map(format_percent)
    view["share"] = table["share"].map(format_percent)
    st.dataframe(
        view.rename(columns={
            "name": "Дилер",
            "city": "Город",
            "units": "Продажи (шт)",
            "revenue": "Выручка",
            "margin": "Маржа",
            "avg_ticket": "Средний чек",
            "margin_pct": "Рентабельность",
            "share": "Доля рынка",
        }),
        use_container_width=True,
        hide_index=True,
    )
    with c3:
        csv_download_button(
            dealers_report_rows(filtered, sort_by=sort_by, ascending=ascending),
            "dealers_report",
            key="dealers_csv",
        )

with tab_detail:
    dealers = sorted(filtered["dealer"].unique().tolist())
    dealer = st.selectbox("Дилер", dealers)
    subset = filtered[filtered["dealer"] == dealer]
    st.caption(f"Город: {subset['city'].iloc[0]}")
    render_kpi_row(kpi_summary(subset))

    d1, d2 = st.columns(2)
    with d1:
        st.subheader("Продажи по месяцам")
        m = aggregate(subset, "month")
        fig = px.bar(m, x="name", y="revenue", labels={"name": "", "revenue": "Выручка, ₽"})
        st.plotly_chart(fig, use_container_width=True)
    with d2:
        st.subheader("Модели")
        models = aggregate(subset, "model")
        st.dataframe(
            money_columns(models, ["revenue", "avg_ticket"])[["name", "units", "revenue", "avg_ticket"]].rename(
                columns={"name": "Модель", "units": "Шт", "revenue": "Выручка", "avg_ticket": "Средняя цена"}
            ),
            use_container_width=True,
            hide_index=True,
        )

    st.subheader("Продажи по комплектациям")
    offers = aggregate(subset, "offer", sort_by="units")
    st.dataframe(
        money_columns(offers, ["revenue", "avg_ticket"])[["name", "units", "revenue", "avg_ticket"]].rename(
            columns={"name": "Комплектация", "units": "Шт", "revenue": "Выручка", "avg_ticket": "Средняя цена"}
        ),
        use_container_width=True,
        hide_index=True,
    )
    st.caption(f"Выручка дилера: {format_currency(subset['sold_price'].sum())}")

with tab_map:
    render_dealer_map(filtered, value_column="sold_price", value_label="Выручка")
    with st.expander("Модели и комплектации по дилерам"):
        st.dataframe(dealer_breakdown_rows(filtered), use_container_width=True, hide_index=True)

sidebar_exports(filtered, "Dealers")
