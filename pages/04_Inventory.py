"""Inventory - stock by dealer and model, valued at historical sale prices"""

import streamlit as st

from moto_suite.analytics import aggregate_inventory, inventory_kpis, inventory_value
from moto_suite.config import APP_ICON
from moto_suite.filters import filter_by_metadata
from moto_suite.formatting import format_number, human_money
from moto_suite.log import configure_logging
from moto_suite.reports import inventory_report_rows
from moto_suite.ui import bootstrap_page, csv_download_button, money_columns, render_dealer_map, render_page_header

st.set_page_config(page_title="Склад", page_icon=APP_ICON, layout="wide")
configure_logging()

records, filtered, criteria, inventory = bootstrap_page(with_inventory=True)

render_page_header(
    "Склад",
    "Остатки оцениваются по средней исторической цене продажи модели, иначе по закупочной цене",
    icon="📦",
)

stock = filter_by_metadata(inventory, criteria)
if stock.empty:
    st.info("Нет данных об остатках. Загрузите JSON остатков в боковой панели.")
    st.stop()

k = inventory_kpis(stock, records)
c1, c2, c3, c4 = st.columns(4)
c1.metric("Остаток (шт)", format_number(k["units"]))
c2.metric("Стоимость склада", human_money(k["stock_value"]))
c3.metric("Дилеров", format_number(k["dealers"]))
c4.metric("Моделей", format_number(k["models"]))

GROUPS = {"По дилерам": "dealer", "По моделям": "model", "По комплектациям": "offer"}
LABELS = {"dealer": "Дилер", "model": "Модель", "offer": "Комплектация"}

tab_table, tab_map = st.tabs(["📋 Остатки", "🗺️ Карта"])

with tab_table:
    g1, g2 = st.columns([2, 1])
    group_key = GROUPS[g1.radio("Группировка", list(GROUPS), horizontal=True)]
    table = aggregate_inventory(stock, records, group_key)
    st.dataframe(
        money_columns(table, ["stock_value", "avg_cost"]).rename(columns={
            "name": LABELS[group_key],
            "units": "Остаток (шт)",
            "stock_value": "Стоимость склада",
            "avg_cost": "Средняя стоимость",
        }),
        use_container_width=True,
        hide_index=True,
    )
    with g2:
        csv_download_button(
            inventory_report_rows(stock, records, group_key),
            f"inventory_{group_key}_report",
            key="inventory_csv",
        )

    if group_key == "dealer":
        dealer = st.selectbox("Модели дилера", table["name"].tolist())
        by_model = aggregate_inventory(stock[stock["dealer"] == dealer], records, "model")
        st.dataframe(
            money_columns(by_model, ["stock_value", "avg_cost"]).rename(columns={
                "name": "Модель", "units": "Шт", "stock_value": "Стоимость", "avg_cost": "Средняя стоимость",
            }),
            use_container_width=True,
            hide_index=True,
        )

with tab_map:
    render_dealer_map(inventory_value(stock, records), value_column="stock_value", value_label="Стоимость склада")
