"""Date parsing, classification and flattening of nested dealer documents."""
import json

import pandas as pd
import pytest

from moto_suite.config import NO_VIN, OTHER_BRAND, UNKNOWN_CITY
from moto_suite.data import (
    EPOCH,
    RECORD_COLUMNS,
    DocumentFormatError,
    determine_brand,
    determine_city,
    flatten_records,
    load_document,
    parse_sale_date,
    records_frame,
    save_document,
    validate_document,
)


# ------------------------------------------------------------------------------
# Date parser
# ------------------------------------------------------------------------------

def test_parse_sale_date_day_month_year():
    assert parse_sale_date("15.06.2024") == pd.Timestamp(2024, 6, 15)
    assert parse_sale_date(" 01 . 01 . 2024") == pd.Timestamp(2024, 1, 1)


@pytest.mark.parametrize("value", [None, "", "not-a-date", "2024-13-40", "01.2024", "aa.bb.cccc", 20240101])
def test_parse_sale_date_falls_back_to_epoch(value):
    assert parse_sale_date(value) == EPOCH


def test_parse_sale_date_rolls_overflow_forward():
    assert parse_sale_date("32.01.2024") == pd.Timestamp(2024, 2, 1)
    assert parse_sale_date("01.13.2024") == pd.Timestamp(2025, 1, 1)


# ------------------------------------------------------------------------------
# Classifiers
# ------------------------------------------------------------------------------

def test_determine_brand_first_keyword_wins():
    assert determine_brand("VOGE 300DS") == "VOGE"
    assert determine_brand("loncin lx200") == "Loncin"
    assert determine_brand("VOGE by Loncin") == "VOGE"
    assert determine_brand("Zontes 350") == OTHER_BRAND
    assert determine_brand(None) == OTHER_BRAND


def test_determine_city_prefers_parentheses():
    assert determine_city("МОТОПАРК ООО (Тула)") == "Тула"
    assert determine_city("АВИЛОН АГ АО (Москва)") == "Москва"


def test_determine_city_ignores_legal_form_in_parentheses():
    assert determine_city("Мотоцентр (ООО) Казань") == "Казань"


def test_determine_city_keyword_order_and_unknown():
    assert determine_city("Мото Нижний Тагил") == "Нижний Тагил"
    assert determine_city("Мото Нижний") == "Нижний Новгород"
    assert determine_city("Безымянный дилер") == UNKNOWN_CITY
    assert determine_city(None) == UNKNOWN_CITY


# ------------------------------------------------------------------------------
# Flattening
# ------------------------------------------------------------------------------

def test_flatten_single_offer_spreads_totals(single_dealer_document):
    rows = flatten_records(single_dealer_document)

    assert len(rows) == 2
    for row in rows:
        assert row["dealer"] == "Dealer A"
        assert row["brand"] == "VOGE"
        assert row["sold_price"] == pytest.approx(100000)
        assert row["buy_price"] == pytest.approx(75000)
        assert row["margin"] == pytest.approx(25000)
    assert {r["id"] for r in rows} == {"1-10-100-1000", "1-10-100-1001"}


def test_flatten_counts_every_vehicle_entry(multi_dealer_document):
    rows = flatten_records(multi_dealer_document)

    expected = sum(
        len(offer["vehicles"])
        for dealer in multi_dealer_document["items"].values()
        for model in dealer["models"].values()
        for offer in model["offers"].values()
    )
    assert len(rows) == expected == 6


def test_flatten_offer_margin_sum_matches_totals(multi_dealer_document):
    rows = flatten_records(multi_dealer_document)
    premium = [r for r in rows if r["offer"] == "Premium"]
    base_300 = [r for r in rows if r["model"] == "VOGE 300DS" and r["offer"] == "Base"]

    assert sum(r["margin"] for r in premium) == pytest.approx(100000)
    assert sum(r["margin"] for r in base_300) == pytest.approx(200000)


def test_flatten_divides_by_declared_count(single_dealer_document):
    offer = single_dealer_document["items"]["1"]["models"]["10"]["offers"]["100"]
    offer["count_sold"] = 4

    rows = flatten_records(single_dealer_document)
    assert len(rows) == 2
    assert rows[0]["sold_price"] == pytest.approx(50000)


def test_flatten_zero_count_yields_zero_prices(single_dealer_document):
    offer = single_dealer_document["items"]["1"]["models"]["10"]["offers"]["100"]
    offer["count_sold"] = 0

    rows = flatten_records(single_dealer_document)
    assert len(rows) == 2
    for row in rows:
        assert row["buy_price"] == 0
        assert row["sold_price"] == 0
        assert row["margin"] == 0


def test_flatten_tolerates_missing_collections():
    document = {
        "total": {},
        "items": {
            "1": {"name": "No models"},
            "2": {"name": "Empty models", "models": {}},
            "3": {"name": "No offers", "models": {"1": {"name": "VOGE X"}}},
            "4": {"name": "Null offers", "models": {"1": {"name": "VOGE X", "offers": None}}},
            "5": {
                "name": "No vehicles",
                "models": {"1": {"name": "VOGE X", "offers": {"1": {"name": "Base", "count_sold": 1}}}},
            },
        },
    }
    assert flatten_records(document) == []
    assert flatten_records({}) == []
    assert flatten_records(None) == []


def test_flatten_placeholder_vin_and_epoch_date(single_dealer_document):
    vehicles = single_dealer_document["items"]["1"]["models"]["10"]["offers"]["100"]["vehicles"]
    vehicles["1000"] = {"sale_date": "bad"}

    rows = {r["id"]: r for r in flatten_records(single_dealer_document)}
    row = rows["1-10-100-1000"]
    assert row["vin"] == NO_VIN
    assert row["sale_date"] == EPOCH
    assert row["year"] == 1970
    assert row["month"] == 0


def test_flatten_uses_explicit_city(multi_dealer_document):
    rows = flatten_records(multi_dealer_document)
    cities = {r["dealer"]: r["city"] for r in rows}

    assert cities["Мото Драйв ООО"] == "Екатеринбург"
    assert cities["МОТОПАРК ООО (Тула)"] == "Тула"


def test_flatten_inventory_vin_strings(inventory_document):
    rows = flatten_records(inventory_document)

    assert sorted(r["vin"] for r in rows) == ["S1", "S2", "S3"]
    assert all(r["sale_date"] == EPOCH for r in rows)
    assert {r["buy_price"] for r in rows} == {320000, 360000}


def test_records_frame_sorted_newest_first(multi_dealer_document):
    vehicles = multi_dealer_document["items"]["2"]["models"]["2"]["offers"]["3"]["vehicles"]
    vehicles["5"]["sale_date"] = None

    df = records_frame(flatten_records(multi_dealer_document))

    assert list(df.columns) == RECORD_COLUMNS
    assert df["sale_date"].is_monotonic_decreasing
    assert df.iloc[0]["vin"] == "Z1"
    assert df.iloc[-1]["sale_date"] == EPOCH


def test_records_frame_empty_has_columns():
    df = records_frame([])
    assert df.empty
    assert list(df.columns) == RECORD_COLUMNS


# ------------------------------------------------------------------------------
# Documents
# ------------------------------------------------------------------------------

def test_load_document_accepts_bom_bytes(single_dealer_document):
    payload = ("\ufeff" + json.dumps(single_dealer_document)).encode("utf-8")
    assert load_document(payload) == single_dealer_document


def test_load_document_rejects_invalid_json():
    with pytest.raises(DocumentFormatError, match="JSON"):
        load_document("{not json")


@pytest.mark.parametrize("document", [[], {"items": {}}, {"total": {}}])
def test_validate_document_requires_total_and_items(document):
    with pytest.raises(DocumentFormatError, match="total, items"):
        validate_document(document)


def test_save_document_round_trip(tmp_path, sample_document):
    target = save_document(sample_document, tmp_path / "nested" / "sales.json")

    assert target.exists()
    assert load_document(target.read_bytes()) == sample_document


def test_sample_totals_match_offers(sample_document):
    rows = flatten_records(sample_document)
    total = sample_document["total"]

    assert len(rows) == total["count_sold"]
    assert sum(r["sold_price"] for r in rows) == pytest.approx(total["total_sold_price"])
    assert sum(r["buy_price"] for r in rows) == pytest.approx(total["total_buy_price"])
