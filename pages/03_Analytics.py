"""Analytics - trends, weekday distribution, model matrix, cumulative revenue"""

import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from moto_suite.analytics import aggregate, cumulative_revenue, model_matrix, monthly_timeline
from moto_suite.config import APP_ICON, THEME_PRIMARY, THEME_SECONDARY
from moto_suite.log import configure_logging
from moto_suite.ui import bootstrap_page, render_page_header, sidebar_exports

st.set_page_config(page_title="Аналитика", page_icon=APP_ICON, layout="wide")
configure_logging()

records, filtered, criteria = bootstrap_page()

render_page_header("Аналитика", "Сезонность, дни недели и эффективность моделей", icon="📈")

if filtered.empty:
    st.warning("Нет продаж для выбранных фильтров.")
    st.stop()

tab_a, tab_b = st.tabs(["📅 Динамика", "🧮 Модели"])

with tab_a:
    c1, c2 = st.columns(2)
    with c1:
        st.subheader("Выручка и маржа по месяцам")
        trend = aggregate(filtered, "month")
        fig = go.Figure()
        fig.add_trace(go.Bar(x=trend["name"], y=trend["revenue"], name="Выручка", marker_color=THEME_PRIMARY))
        fig.add_trace(go.Scatter(x=trend["name"], y=trend["margin"], name="Маржа", mode="lines+markers",
                                 line=dict(color=THEME_SECONDARY)))
        fig.update_layout(yaxis_title="₽", xaxis_title=None, legend=dict(orientation="h"))
        st.plotly_chart(fig, use_container_width=True)

    with c2:
        st.subheader("Продажи по дням недели")
        days = aggregate(filtered, "weekday")
        fig = px.bar(days, x="name", y="units", labels={"name": "", "units": "Продажи (шт)"})
        st.plotly_chart(fig, use_container_width=True)

    c3, c4 = st.columns(2)
    with c3:
        st.subheader("Накопленная выручка")
        cum = cumulative_revenue(filtered)
        fig = px.area(cum, x="name", y="cumulative", labels={"name": "", "cumulative": "₽"})
        st.plotly_chart(fig, use_container_width=True)

    with c4:
        st.subheader("Хронология (год-месяц)")
        tl = monthly_timeline(filtered)
        fig = px.line(tl, x="date", y="revenue", markers=True, labels={"date": "", "revenue": "Выручка, ₽"})
        st.plotly_chart(fig, use_container_width=True)

with tab_b:
    st.subheader("Цена vs рентабельность")
    mm = model_matrix(filtered)
    fig = px.scatter(
        mm, x="avg_price", y="margin_pct", size="units", hover_name="name",
        labels={"avg_price": "Средняя цена, ₽", "margin_pct": "Рентабельность, %", "units": "Шт"},
        size_max=40,
    )
    st.plotly_chart(fig, use_container_width=True)
    st.caption("Размер пузыря: количество проданных единиц.")

sidebar_exports(filtered, "Analytics")
