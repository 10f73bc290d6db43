# -*- coding: utf-8 -*-
"""
MotoSuite | CSV Import/Export

Import: one row per sold/stocked unit -> nested document (same shape as
the JSON exports, so it goes through the regular flattening).
Export: labeled report rows -> comma separated CSV for download.

Recognized import headers (case-insensitive, substring match, each column is
claimed by the first field that matches it):

    vin     VIN
    date    Дата, Date
    buy     Закуп*, Buy, Cost, Себестоимость
    sold    *продаж*, Sold, Выручка, Price
    dealer  Дилер, Dealer, Partner           (required)
    city    Город, City, Region
    model   Модель, Model                    (required)
    offer   Комплектация, Offer, Variant, Modification
"""

from __future__ import annotations
import csv
import io
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import pandas as pd

from moto_suite.config import DEFAULT_OFFER

logger = logging.getLogger(__name__)

# ==============================================================================
# CONFIGURATION
# ==============================================================================

BOM = "\ufeff"
CSV_MIME = "text/csv"

# Claim order matters: "Дата продажи" must be taken by date before the
# sold-price keywords see it.
HEADER_KEYWORDS = [
    ("vin", ("vin",)),
    ("date", ("дата", "date")),
    ("buy", ("закуп", "buy", "cost", "себестоимость")),
    ("sold", ("продаж", "sold", "выручка", "price")),
    ("dealer", ("дилер", "dealer", "partner")),
    ("city", ("город", "city", "region")),
    ("model", ("модель", "model")),
    ("offer", ("комплектация", "offer", "variant", "modification")),
]

REQUIRED_FIELDS = {"dealer": "Дилер", "model": "Модель"}

# Column labels for flat records exported in the import schema
IMPORT_LABELS = {
    "dealer": "Дилер",
    "city": "Город",
    "model": "Модель",
    "offer": "Комплектация",
    "vin": "VIN",
    "sale_date": "Дата продажи",
    "buy_price": "Закупка (руб)",
    "sold_price": "Цена продажи (руб)",
}


class CSVFormatError(ValueError):
    """Raised when an uploaded CSV cannot be mapped to the import schema."""


@dataclass(frozen=True)
class CsvExport:
    """Download payload for ``st.download_button``."""

    file_name: str
    data: bytes
    mime: str = CSV_MIME


# ==============================================================================
# UTILITIES
# ==============================================================================

def clean_header(h: Any) -> str:
    return str(h).strip().lower().replace('"', "")


def detect_delimiter(header_line: str) -> str:
    # Separators inside quoted headers do not count
    semicolon = len(next(csv.reader([header_line], delimiter=";")))
    comma = len(next(csv.reader([header_line], delimiter=",")))
    if comma > semicolon:
        return ","
    return ";"


def match_columns(headers: Sequence[str]) -> Dict[str, int]:
    """Map import fields to column positions; unmatched fields are absent."""
    cleaned = [clean_header(h) for h in headers]
    claimed: set = set()
    mapping: Dict[str, int] = {}
    for field_name, keywords in HEADER_KEYWORDS:
        for idx, header in enumerate(cleaned):
            if idx in claimed:
                continue
            if any(k in header for k in keywords):
                mapping[field_name] = idx
                claimed.add(idx)
                break
    return mapping


def to_number_series(s: pd.Series) -> pd.Series:
    """Lenient numeric coercion: '1 250 000,50' -> 1250000.5, junk -> 0."""
    s2 = s.astype(str).str.replace(r"\s", "", regex=True)
    s2 = s2.str.replace(",", ".", regex=False)
    return pd.to_numeric(s2, errors="coerce").fillna(0).astype(float)


# ==============================================================================
# IMPORT
# ==============================================================================

def read_table(text: str) -> pd.DataFrame:
    """Read CSV text into a string frame with the header row intact."""
    if text.startswith(BOM):
        text = text[len(BOM):]

    lines = [ln for ln in text.splitlines() if ln.strip()]
    if len(lines) < 2:
        raise CSVFormatError("CSV файл пуст или не содержит заголовков")

    delimiter = detect_delimiter(lines[0])
    try:
        df = pd.read_csv(
            io.StringIO(text),
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise CSVFormatError(f"Не удалось разобрать CSV: {exc}") from exc

    return df.fillna("")


def parse_csv(text: Union[str, bytes]) -> Dict[str, Any]:
    """Convert a CSV export into a nested sales document.

    Rows without dealer or model are skipped. Raises CSVFormatError when the
    file is empty or a required column is missing; nothing is returned in
    that case, so the caller keeps whatever it had loaded before.
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8-sig")

    df = read_table(text)
    mapping = match_columns(df.columns)

    missing = [label for key, label in REQUIRED_FIELDS.items() if key not in mapping]
    if missing:
        raise CSVFormatError(
            "Не найдены обязательные столбцы: "
            + ", ".join(f"'{m}'" for m in missing)
            + ". Проверьте заголовки CSV."
        )

    def column(field_name: str) -> pd.Series:
        if field_name not in mapping:
            return pd.Series([""] * len(df), index=df.index, dtype=str)
        return df.iloc[:, mapping[field_name]].astype(str).str.strip()

    dealers = column("dealer")
    models = column("model")
    cities = column("city")
    offers = column("offer")
    vins = column("vin")
    dates = column("date")
    buy = to_number_series(column("buy"))
    sold = to_number_series(column("sold"))

    document: Dict[str, Any] = {
        "total": {"count_sold": 0, "total_sold_price": 0.0, "total_buy_price": 0.0},
        "items": {},
    }
    dealer_ids: Dict[str, str] = {}
    model_ids: Dict[tuple, str] = {}
    offer_ids: Dict[tuple, str] = {}
    vehicle_counter = 0
    skipped = 0

    for pos in range(len(df)):
        dealer_name = dealers.iat[pos]
        model_name = models.iat[pos]
        if not dealer_name or not model_name:
            skipped += 1
            continue

        city = cities.iat[pos]
        offer_name = offers.iat[pos] or DEFAULT_OFFER
        vin = vins.iat[pos] or f"UNKNOWN-{pos + 1}"
        sold_price = float(sold.iat[pos])
        buy_price = float(buy.iat[pos])

        # Dealer
        dealer_id = dealer_ids.get(dealer_name)
        if dealer_id is None:
            dealer_id = str(len(dealer_ids) + 1)
            dealer_ids[dealer_name] = dealer_id
            document["items"][dealer_id] = {
                "name": dealer_name,
                "count_sold": 0,
                "total_sold_price": 0.0,
                "total_buy_price": 0.0,
                "models": {},
            }
        dealer = document["items"][dealer_id]
        if city and not dealer.get("city"):
            dealer["city"] = city

        # Model
        model_key = (dealer_id, model_name)
        model_id = model_ids.get(model_key)
        if model_id is None:
            model_id = str(len(model_ids) + 1)
            model_ids[model_key] = model_id
            dealer["models"][model_id] = {"name": model_name, "offers": {}}
        model = dealer["models"][model_id]

        # Offer
        offer_key = (model_id, offer_name)
        offer_id = offer_ids.get(offer_key)
        if offer_id is None:
            offer_id = str(len(offer_ids) + 1)
            offer_ids[offer_key] = offer_id
            model["offers"][offer_id] = {
                "name": offer_name,
                "count_sold": 0,
                "total_sold_price": 0.0,
                "total_buy_price": 0.0,
                "vehicles": {},
            }
        offer = model["offers"][offer_id]

        # Vehicle
        vehicle_counter += 1
        offer["vehicles"][str(vehicle_counter)] = {"vin": vin, "sale_date": dates.iat[pos]}

        for node in (offer, dealer, document["total"]):
            node["count_sold"] += 1
            node["total_sold_price"] += sold_price
            node["total_buy_price"] += buy_price

    if skipped:
        logger.warning("CSV import skipped %d rows without dealer or model", skipped)
    logger.info(
        "CSV import: %d vehicles, %d dealers", vehicle_counter, len(dealer_ids)
    )
    return document


# ==============================================================================
# EXPORT
# ==============================================================================

def rows_to_csv(rows: Sequence[Mapping[str, Any]]) -> str:
    """Serialize labeled rows; header comes from the first row's keys."""
    if not rows:
        return ""
    columns = list(rows[0].keys())
    df = pd.DataFrame(list(rows), columns=columns)
    return df.to_csv(
        index=False,
        sep=",",
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\r\n",
    )


def export_csv(rows: Sequence[Mapping[str, Any]], filename: str) -> Optional[CsvExport]:
    """Build a download payload (UTF-8 with BOM) or None when there is nothing to export."""
    if not rows:
        logger.warning("Nothing to export for %s", filename)
        return None
    if not filename.lower().endswith(".csv"):
        filename = f"{filename}.csv"
    data = rows_to_csv(rows).encode("utf-8-sig")
    return CsvExport(file_name=filename, data=data)


def records_to_import_rows(records: pd.DataFrame) -> List[Dict[str, Any]]:
    """Flat records as rows in the import schema (one per vehicle)."""
    if records is None or records.empty:
        return []
    out = records[list(IMPORT_LABELS)].copy()
    out["sale_date"] = out["sale_date"].dt.strftime("%d.%m.%Y")
    return out.rename(columns=IMPORT_LABELS).to_dict(orient="records")
