# -*- coding: utf-8 -*-
"""
MotoSuite | Data Layer (ETL)

Loads dealer sales/inventory documents and flattens the nested
dealer -> model -> offer -> vehicle tree into one row per vehicle.
"""

from __future__ import annotations
import io
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.request import urlopen, Request

import pandas as pd
import streamlit as st

from moto_suite.cities import CITY_KEYWORDS
from moto_suite.config import (
    DATA_KIND_INVENTORY,
    DATA_KIND_SALES,
    DEFAULT_PATHS,
    NO_VIN,
    OTHER_BRAND,
    SOURCE_KEYS,
    UNKNOWN_CITY,
    get_config_value,
)
from moto_suite.state import set_last_error

logger = logging.getLogger(__name__)

# ==============================================================================
# CONFIGURATION
# ==============================================================================

EPOCH = pd.Timestamp(1970, 1, 1)

RECORD_COLUMNS = [
    "id",
    "dealer",
    "city",
    "brand",
    "model",
    "offer",
    "vin",
    "sale_date",
    "year",
    "month",
    "buy_price",
    "sold_price",
    "margin",
]

# First match wins
BRAND_KEYWORDS = [
    ("voge", "VOGE"),
    ("loncin", "Loncin"),
]

LEGAL_FORMS = {"ооо", "ип", "ao", "зао", "пао", "ltd", "gmbh"}


class DocumentFormatError(ValueError):
    """Raised when an uploaded JSON document does not have the expected shape."""


def empty_document() -> Dict[str, Any]:
    return {"total": {"count_sold": 0, "total_sold_price": 0, "total_buy_price": 0}, "items": {}}


# ==============================================================================
# UTILITIES
# ==============================================================================

def parse_sale_date(value: Optional[str]) -> pd.Timestamp:
    """Parse a ``DD.MM.YYYY`` string.

    Missing or malformed input returns the epoch instead of raising, so one
    bad leaf never blanks the whole dashboard. Day and month overflow roll
    forward the way a calendar constructor does (``32.01.2024`` is Feb 1).
    """
    if not value or not isinstance(value, str):
        return EPOCH

    parts = value.split(".")
    if len(parts) != 3:
        return EPOCH

    try:
        day, month, year = (int(p.strip()) for p in parts)
        return (
            pd.Timestamp(year, 1, 1)
            + pd.DateOffset(months=month - 1)
            + pd.Timedelta(days=day - 1)
        )
    except (ValueError, OverflowError, pd.errors.OutOfBoundsDatetime):
        logger.debug("Unparseable sale date %r, using epoch", value)
        return EPOCH


def determine_brand(model_name: Optional[str]) -> str:
    lower = (model_name or "").lower()
    for keyword, brand in BRAND_KEYWORDS:
        if keyword in lower:
            return brand
    return OTHER_BRAND


def determine_city(dealer_name: Optional[str]) -> str:
    """Infer a dealer's city from its name.

    Text in parentheses wins ("МОТОПАРК ООО (Тула)"), unless it is just a
    legal form; then the ordered keyword table is tried.
    """
    name = dealer_name or ""

    match = re.search(r"\((.*?)\)", name)
    if match and match.group(1):
        candidate = match.group(1).strip()
        if len(candidate) > 2 and candidate.lower() not in LEGAL_FORMS:
            return candidate

    lower = name.lower()
    for keywords, city in CITY_KEYWORDS:
        if any(k in lower for k in keywords):
            return city
    return UNKNOWN_CITY


def _children(node: Any, key: str) -> Dict[str, Any]:
    """Child collection of a tree node; absent or malformed means empty."""
    if not isinstance(node, dict):
        return {}
    children = node.get(key)
    return children if isinstance(children, dict) else {}


def _as_number(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if number == number else 0.0


def _offer_count(offer: Dict[str, Any]) -> float:
    # Sales exports carry count_sold, inventory exports count_free
    for key in ("count_sold", "count_free"):
        if offer.get(key) is not None:
            return _as_number(offer.get(key))
    return 0.0


def _vehicle_fields(vehicle: Any) -> Tuple[str, Optional[str]]:
    # Inventory exports list vehicles as bare VIN strings
    if isinstance(vehicle, str):
        return vehicle or NO_VIN, None
    if isinstance(vehicle, dict):
        return vehicle.get("vin") or NO_VIN, vehicle.get("sale_date")
    return NO_VIN, None


# ==============================================================================
# FLATTENING
# ==============================================================================

def flatten_records(document: Any) -> List[Dict[str, Any]]:
    """Walk the nested document and emit one flat row per vehicle.

    Offer totals are spread evenly over its vehicles: the source has no
    per-vehicle price, only offer-level sums divided by the declared count.
    """
    rows: List[Dict[str, Any]] = []

    for dealer_id, dealer in _children(document, "items").items():
        models = _children(dealer, "models")
        if not models:
            continue
        dealer_name = str(dealer.get("name") or "")
        city = dealer.get("city") or determine_city(dealer_name)

        for model_id, model in models.items():
            offers = _children(model, "offers")
            if not offers:
                continue
            model_name = str(model.get("name") or "")
            brand = determine_brand(model_name)

            for offer_id, offer in offers.items():
                vehicles = _children(offer, "vehicles")
                if not vehicles:
                    continue
                count = _offer_count(offer)
                total_buy = _as_number(offer.get("total_buy_price"))
                total_sold = _as_number(offer.get("total_sold_price"))
                avg_buy = total_buy / count if count > 0 else 0.0
                avg_sold = total_sold / count if count > 0 else 0.0

                for vehicle_id, vehicle in vehicles.items():
                    vin, sale_date_str = _vehicle_fields(vehicle)
                    sale_date = parse_sale_date(sale_date_str)
                    rows.append({
                        "id": f"{dealer_id}-{model_id}-{offer_id}-{vehicle_id}",
                        "dealer": dealer_name,
                        "city": city,
                        "brand": brand,
                        "model": model_name,
                        "offer": str(offer.get("name") or ""),
                        "vin": vin,
                        "sale_date": sale_date,
                        "year": sale_date.year,
                        "month": sale_date.month - 1,
                        "buy_price": avg_buy,
                        "sold_price": avg_sold,
                        "margin": avg_sold - avg_buy,
                    })

    return rows


def records_frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """Build the canonical record frame, newest sales first."""
    df = pd.DataFrame(rows, columns=RECORD_COLUMNS)
    df["sale_date"] = pd.to_datetime(df["sale_date"])
    for col in ("year", "month"):
        df[col] = df[col].astype(int)
    for col in ("buy_price", "sold_price", "margin"):
        df[col] = df[col].astype(float)
    df = df.sort_values("sale_date", ascending=False, kind="stable").reset_index(drop=True)
    return df


@st.cache_data(show_spinner=False)
def flatten_document(document: Any) -> pd.DataFrame:
    """Flatten a raw document into the record frame (cached on content)."""
    rows = flatten_records(document)
    logger.debug("Flattened %d vehicle records", len(rows))
    return records_frame(rows)


# ==============================================================================
# DOCUMENT LOADING
# ==============================================================================

def validate_document(document: Any) -> Dict[str, Any]:
    if not isinstance(document, dict) or "total" not in document or "items" not in document:
        raise DocumentFormatError(
            "Ошибка: Неверный формат файла. Файл должен содержать структуру MotoSuite (total, items)."
        )
    return document


def load_document(payload: Union[str, bytes]) -> Dict[str, Any]:
    """Parse and validate an uploaded JSON document."""
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8-sig")
    try:
        document = json.loads(payload)
    except ValueError as exc:
        raise DocumentFormatError(
            "Ошибка при чтении файла. Убедитесь, что это корректный JSON."
        ) from exc
    return validate_document(document)


def save_document(document: Dict[str, Any], path: Union[str, Path]) -> Path:
    """Persist an accepted document. Last write wins."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(document, ensure_ascii=False), encoding="utf-8")
    logger.info("Saved document to %s", target)
    return target


def _download_bytes(url: str, timeout: int = 30) -> bytes:
    """Download file from URL with basic UA."""
    req = Request(url, headers={"User-Agent": "Mozilla/5.0"})
    with urlopen(req, timeout=timeout) as resp:
        return resp.read()


@st.cache_data(show_spinner=False)
def load_document_from_url(url: str) -> Dict[str, Any]:
    return load_document(_download_bytes(url))


def load_document_from_local(path: str) -> Dict[str, Any]:
    with io.open(path, "rb") as fh:
        return load_document(fh.read())


def local_path_for(kind: str) -> str:
    return get_config_value(SOURCE_KEYS[kind]["path"], DEFAULT_PATHS[kind])


def _fallback_document(kind: str) -> Dict[str, Any]:
    if kind == DATA_KIND_SALES:
        from moto_suite.sample_data import SAMPLE_SALES
        return SAMPLE_SALES
    return empty_document()


def load_data_flow(kind: str = DATA_KIND_SALES) -> Tuple[Dict[str, Any], str]:
    """
    Unified data flow for one document kind (sales or inventory):
    1) If user uploaded this session: use it.
    2) Else if a local JSON file exists: use it.
    3) Else if a URL is configured: download and use it.
    4) Else the bundled sample (sales) or an empty document (inventory).

    A failing source is logged, recorded as the last error, and skipped.
    """
    # A) Uploaded document
    uploaded = st.session_state.get(f"uploaded_{kind}")
    if uploaded is not None:
        return uploaded, "UPLOAD"

    # B) Local file
    local_path = local_path_for(kind)
    if os.path.exists(local_path):
        try:
            return load_document_from_local(local_path), "LOCAL"
        except (OSError, DocumentFormatError) as e:
            logger.exception("Failed to read %s document from %s", kind, local_path)
            set_last_error(f"Ошибка чтения локального файла ({local_path}): {e}")

    # C) URL
    url = get_config_value(SOURCE_KEYS[kind]["url"], "") or st.session_state.get(f"{kind}_url", "")
    if url:
        try:
            return load_document_from_url(url), "URL"
        except Exception as e:
            logger.exception("Failed to download %s document from %s", kind, url)
            set_last_error(f"Ошибка загрузки по URL: {e}")

    # D) Fallback
    source = "SAMPLE" if kind == DATA_KIND_SALES else "EMPTY"
    return _fallback_document(kind), source


def load_records(kind: str = DATA_KIND_SALES) -> Tuple[pd.DataFrame, str]:
    """Resolve the document for ``kind`` and flatten it."""
    document, source = load_data_flow(kind)
    return flatten_document(document), source


def accept_upload(kind: str, payload: Union[str, bytes]) -> Dict[str, Any]:
    """Validate an upload, keep it in session and persist it locally.

    Raises DocumentFormatError; prior state is untouched in that case.
    """
    return accept_document(kind, load_document(payload))


def accept_document(kind: str, document: Dict[str, Any]) -> Dict[str, Any]:
    """Make an already parsed document the active one for ``kind``."""
    st.session_state[f"uploaded_{kind}"] = document
    try:
        save_document(document, local_path_for(kind))
    except OSError as e:
        logger.exception("Failed to persist %s document", kind)
        set_last_error(f"Файл загружен в память, но не сохранен: {e}")
    return document


__all__ = [
    "DATA_KIND_INVENTORY",
    "DATA_KIND_SALES",
    "DocumentFormatError",
    "EPOCH",
    "RECORD_COLUMNS",
    "accept_document",
    "accept_upload",
    "determine_brand",
    "determine_city",
    "empty_document",
    "flatten_document",
    "flatten_records",
    "load_data_flow",
    "load_document",
    "load_records",
    "parse_sale_date",
    "records_frame",
    "save_document",
    "validate_document",
]
