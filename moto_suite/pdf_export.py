# -*- coding: utf-8 -*-
"""
MotoSuite | PDF Export Module

One-page executive summary of the current filtered view.
"""

from __future__ import annotations
from datetime import datetime

import pandas as pd
import streamlit as st
from fpdf import FPDF
from fpdf.enums import XPos, YPos

from moto_suite.analytics import kpi_summary
from moto_suite.formatting import human_money

# ==============================================================================
# PDF UTILITIES
# ==============================================================================

# Core PDF fonts are latin-1 only
_TRANSLIT = {
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "e",
    "ж": "zh", "з": "z", "и": "i", "й": "y", "к": "k", "л": "l", "м": "m",
    "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t", "у": "u",
    "ф": "f", "х": "kh", "ц": "ts", "ч": "ch", "ш": "sh", "щ": "shch",
    "ъ": "", "ы": "y", "ь": "", "э": "e", "ю": "yu", "я": "ya",
    "\u20bd": "RUB", "\u00a0": " ", "\u2014": "-", "\u2013": "-", "\u00ab": "\"", "\u00bb": "\"",
}


def transliterate(text) -> str:
    out = []
    for ch in str(text):
        low = ch.lower()
        if low in _TRANSLIT:
            rep = _TRANSLIT[low]
            out.append(rep.capitalize() if ch != low and rep else rep)
        else:
            out.append(ch)
    return "".join(out)


def pdf_sanitize(text) -> str:
    """Transliterate, then drop whatever latin-1 still cannot encode."""
    return transliterate(text).encode("latin-1", "replace").decode("latin-1")


# ==============================================================================
# PDF CLASS
# ==============================================================================

class ExecutivePDF(FPDF):
    """A4 report with a branded header and a page/time footer."""

    def header(self):
        self.set_font("Helvetica", "B", 13)
        self.set_text_color(79, 70, 229)
        self.cell(0, 8, "MotoSuite - Dealer Sales Report", align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.ln(2)

    def footer(self):
        self.set_y(-14)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(120)
        generated = datetime.now().strftime("%Y-%m-%d %H:%M")
        self.cell(0, 10, f"Page {self.page_no()} | Generated {generated} | Confidential", align="C")


# ==============================================================================
# PDF BUILDER
# ==============================================================================

@st.cache_data(show_spinner=False)
def build_pdf_bytes(records: pd.DataFrame, title: str, subtitle: str = "") -> bytes:
    """KPI box, top 15 models by units and top 5 dealers by revenue."""
    pdf = ExecutivePDF(orientation="P", unit="mm", format="A4")
    pdf.add_page()

    # Title block
    pdf.set_font("Helvetica", "B", 16)
    pdf.set_text_color(0)
    pdf.cell(0, 10, pdf_sanitize(title), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    if subtitle:
        pdf.set_font("Helvetica", "I", 10)
        pdf.set_text_color(90)
        pdf.cell(0, 7, pdf_sanitize(subtitle), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(3)

    # KPI box
    k = kpi_summary(records)
    top_y = pdf.get_y()
    pdf.set_fill_color(245, 245, 245)
    pdf.set_draw_color(220, 220, 220)
    pdf.rect(10, top_y, 190, 20, "FD")
    pdf.set_y(top_y + 6)
    pdf.set_font("Helvetica", "B", 11)
    pdf.set_text_color(0)
    pdf.cell(63, 8, pdf_sanitize(f"Units: {k.units:,}"), align="C")
    pdf.cell(63, 8, pdf_sanitize(f"Revenue: {human_money(k.revenue)}"), align="C")
    pdf.cell(63, 8, pdf_sanitize(f"Margin: {human_money(k.margin)}"), align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(10)

    if records is None or records.empty:
        pdf.set_font("Helvetica", "", 10)
        pdf.multi_cell(0, 6, "No sales in the selected view.")
        return bytes(pdf.output())

    # Models ranking
    pdf.set_font("Helvetica", "B", 12)
    pdf.set_text_color(79, 70, 229)
    pdf.cell(0, 8, "Top 15 models by units", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(1)
    top = records.groupby("model").size().sort_values(ascending=False, kind="stable").head(15)

    pdf.set_font("Helvetica", "B", 9)
    pdf.set_text_color(255)
    pdf.set_fill_color(44, 62, 80)
    pdf.cell(140, 7, "Model", border=1, fill=True)
    pdf.cell(50, 7, "Units", border=1, align="R", fill=True, new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    pdf.set_font("Helvetica", "", 9)
    pdf.set_text_color(0)
    alt = False
    for name, val in top.items():
        pdf.set_fill_color(240, 240, 240) if alt else pdf.set_fill_color(255, 255, 255)
        pdf.cell(140, 7, pdf_sanitize(name)[:65], border=1, fill=alt)
        pdf.cell(50, 7, f"{val:,.0f}", border=1, align="R", fill=alt, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        alt = not alt

    # Dealers block
    pdf.ln(6)
    pdf.set_font("Helvetica", "B", 12)
    pdf.set_text_color(79, 70, 229)
    pdf.cell(0, 8, "Top 5 dealers by revenue", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    top_dealers = records.groupby("dealer")["sold_price"].sum().sort_values(ascending=False, kind="stable").head(5)
    pdf.set_font("Helvetica", "", 10)
    pdf.set_text_color(0)
    for name, val in top_dealers.items():
        pdf.cell(140, 6, pdf_sanitize(f"- {name}")[:80])
        pdf.cell(50, 6, pdf_sanitize(human_money(val)), align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    return bytes(pdf.output())
