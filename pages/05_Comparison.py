"""Comparison - two date ranges side by side"""

from datetime import date, timedelta

import plotly.graph_objects as go
import streamlit as st

from moto_suite.analytics import compare_periods
from moto_suite.config import APP_ICON, THEME_PRIMARY, THEME_SECONDARY
from moto_suite.filters import filter_by_metadata
from moto_suite.formatting import format_currency, format_number, format_percent
from moto_suite.log import configure_logging
from moto_suite.ui import bootstrap_page, render_page_header

st.set_page_config(page_title="Сравнение периодов", page_icon=APP_ICON, layout="wide")
configure_logging()

records, filtered, criteria = bootstrap_page()

render_page_header("Сравнение периодов", "Выручка, продажи и прибыль двух диапазонов дат", icon="⚖️")

# Period ranges are independent of the sidebar year/date filters
scoped = filter_by_metadata(records, criteria)

today = date.today()
c1, c2 = st.columns(2)
with c1:
    st.markdown("**Период 1 (база)**")
    p1 = st.date_input("Период 1", value=(today - timedelta(days=730), today - timedelta(days=365)),
                       format="DD.MM.YYYY", key="cmp_p1", label_visibility="collapsed")
with c2:
    st.markdown("**Период 2**")
    p2 = st.date_input("Период 2", value=(today - timedelta(days=365), today),
                       format="DD.MM.YYYY", key="cmp_p2", label_visibility="collapsed")


def _as_period(value):
    # date_input returns a partial tuple while the user is picking a range
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return value[0], value[1]
    return None, None


cmp = compare_periods(scoped, _as_period(p1), _as_period(p2))


def _delta(d) -> str:
    return format_percent(d.percent)


m1, m2, m3 = st.columns(3)
m1.metric("Выручка", format_currency(cmp.second.revenue), delta=_delta(cmp.revenue))
m1.caption(f"База: {format_currency(cmp.first.revenue)} | Δ {format_currency(cmp.revenue.diff)}")
m2.metric("Продажи (шт)", format_number(cmp.second.units), delta=_delta(cmp.units))
m2.caption(f"База: {format_number(cmp.first.units)} | Δ {format_number(cmp.units.diff)}")
m3.metric("Прибыль", format_currency(cmp.second.profit), delta=_delta(cmp.profit))
m3.caption(f"База: {format_currency(cmp.first.profit)} | Δ {format_currency(cmp.profit.diff)}")

mode = st.radio("График", ["Деньги", "Штуки"], horizontal=True)
monthly = cmp.monthly
fig = go.Figure()
if mode == "Деньги":
    fig.add_trace(go.Bar(x=monthly["name"], y=monthly["p1_revenue"], name="Выручка П1", marker_color="#a5b4fc"))
    fig.add_trace(go.Bar(x=monthly["name"], y=monthly["p2_revenue"], name="Выручка П2", marker_color=THEME_PRIMARY))
    fig.add_trace(go.Scatter(x=monthly["name"], y=monthly["p1_profit"], name="Прибыль П1", mode="lines",
                             line=dict(dash="dot", color="#6ee7b7")))
    fig.add_trace(go.Scatter(x=monthly["name"], y=monthly["p2_profit"], name="Прибыль П2", mode="lines+markers",
                             line=dict(color=THEME_SECONDARY)))
    fig.update_layout(yaxis_title="₽")
else:
    fig.add_trace(go.Bar(x=monthly["name"], y=monthly["p1_units"], name="Продажи П1", marker_color="#a5b4fc"))
    fig.add_trace(go.Bar(x=monthly["name"], y=monthly["p2_units"], name="Продажи П2", marker_color=THEME_PRIMARY))
    fig.update_layout(yaxis_title="шт")
fig.update_layout(barmode="group", legend=dict(orientation="h"))
st.plotly_chart(fig, use_container_width=True)
