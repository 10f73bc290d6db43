"""Models - model ranking with offer and dealer drill-down"""

import plotly.express as px
import streamlit as st

from moto_suite.analytics import aggregate, model_offers
from moto_suite.config import APP_ICON
from moto_suite.formatting import format_currency, format_number, format_percent
from moto_suite.log import configure_logging
from moto_suite.reports import models_report_rows
from moto_suite.ui import bootstrap_page, csv_download_button, money_columns, render_page_header, sidebar_exports

st.set_page_config(page_title="Модели", page_icon=APP_ICON, layout="wide")
configure_logging()

records, filtered, criteria = bootstrap_page()

render_page_header("Модели", "Продажи по моделям, комплектациям и дилерам", icon="🏍️")

if filtered.empty:
    st.warning("Нет продаж для выбранных фильтров.")
    st.stop()

models = aggregate(filtered, "model")
top = models.iloc[0]

c1, c2, c3 = st.columns(3)
c1.metric("Моделей", format_number(len(models)))
c2.metric("Лидер по выручке", top["name"], delta=format_percent(top["share"]))
c3.metric("Выручка лидера", format_currency(top["revenue"]))

left, right = st.columns([3, 2])
with left:
    view = money_columns(models, ["revenue", "avg_ticket"])
    view["share"] = models["share"].map(format_percent)
    st.dataframe(
        view[["name", "units", "revenue", "avg_ticket", "share"]].rename(columns={
            "name": "Модель",
            "units": "Продажи (шт)",
            "revenue": "Выручка",
            "avg_ticket": "Средняя цена",
            "share": "Доля выручки",
        }),
        use_container_width=True,
        hide_index=True,
    )
    csv_download_button(models_report_rows(filtered), "models_sales_report", key="models_csv")

with right:
    fig = px.pie(models.head(10), names="name", values="revenue", hole=0.45, title="Топ-10 по выручке")
    st.plotly_chart(fig, use_container_width=True)

st.divider()
st.subheader("🔍 Детализация модели")
model = st.selectbox("Модель", models["name"].tolist())
offers = model_offers(filtered, model)

o1, o2 = st.columns([3, 2])
with o1:
    st.dataframe(
        money_columns(offers, ["revenue", "avg_ticket"])[["name", "units", "revenue", "avg_ticket"]].rename(
            columns={"name": "Комплектация", "units": "Шт", "revenue": "Выручка", "avg_ticket": "Средняя цена"}
        ),
        use_container_width=True,
        hide_index=True,
    )
with o2:
    offer = st.selectbox("Комплектация", offers["name"].tolist())

subset = filtered[(filtered["model"] == model) & (filtered["offer"] == offer)]
by_dealer = aggregate(subset, "dealer", sort_by="units")
st.markdown(f"**Дилеры: {model} / {offer}**")
st.dataframe(
    money_columns(by_dealer, ["revenue"])[["name", "city", "units", "revenue"]].rename(
        columns={"name": "Дилер", "city": "Город", "units": "Шт", "revenue": "Выручка"}
    ),
    use_container_width=True,
    hide_index=True,
)

sidebar_exports(filtered, "Models")
