"""Sales - searchable list of individual vehicle sales"""

import streamlit as st

from moto_suite.analytics import search_records
from moto_suite.config import APP_ICON
from moto_suite.csv_io import records_to_import_rows
from moto_suite.log import configure_logging
from moto_suite.ui import bootstrap_page, csv_download_button, money_columns, render_page_header

st.set_page_config(page_title="Продажи", page_icon=APP_ICON, layout="wide")
configure_logging()

LIMIT = 50

records, filtered, criteria = bootstrap_page()

render_page_header("Продажи", "Поиск по VIN, дилеру или модели", icon="🔎")

query = st.text_input("Поиск", placeholder="VIN, дилер или модель")
found = search_records(filtered, query, limit=LIMIT)
st.caption(f"Найдено в выборке: показаны первые {min(len(found), LIMIT)} из {len(filtered)}")

view = money_columns(found, ["buy_price", "sold_price", "margin"])
view["sale_date"] = found["sale_date"].dt.strftime("%d.%m.%Y")
st.dataframe(
    view[["sale_date", "vin", "dealer", "city", "model", "offer", "sold_price", "margin"]].rename(columns={
        "sale_date": "Дата",
        "vin": "VIN",
        "dealer": "Дилер",
        "city": "Город",
        "model": "Модель",
        "offer": "Комплектация",
        "sold_price": "Цена продажи",
        "margin": "Маржа",
    }),
    use_container_width=True,
    hide_index=True,
)

st.markdown("**Выгрузка продаж (формат импорта CSV)**")
csv_download_button(records_to_import_rows(filtered), "sales_export", key="sales_csv")
