"""Labeled export rows and the PDF summary."""
from moto_suite.csv_io import rows_to_csv
from moto_suite.data import records_frame
from moto_suite.pdf_export import build_pdf_bytes, pdf_sanitize, transliterate
from moto_suite.reports import dealers_report_rows, inventory_report_rows, models_report_rows


def test_dealers_report_rows(sales_records):
    rows = dealers_report_rows(sales_records)

    assert list(rows[0]) == [
        "Дилер",
        "Город",
        "Продажи (шт)",
        "Выручка (руб)",
        "Маржа (руб)",
        "Рентабельность (%)",
        "Средний чек (руб)",
        "Доля рынка (%)",
    ]
    assert rows[0]["Дилер"] == "МОТОПАРК ООО (Тула)"
    assert rows[0]["Выручка (руб)"] == 1300000
    assert round(sum(r["Доля рынка (%)"] for r in rows)) == 100


def test_dealers_report_custom_sort(sales_records):
    rows = dealers_report_rows(sales_records, sort_by="units", ascending=True)
    assert [r["Продажи (шт)"] for r in rows] == [1, 2, 3]


def test_models_report_rows_serialize_plain_numbers(sales_records):
    rows = models_report_rows(sales_records)
    text = rows_to_csv(rows)

    assert rows[0]["Модель"] == "VOGE 300DS"
    assert "VOGE 300DS,3,1300000.0," in text


def test_inventory_report_rows(inventory_records, sales_records):
    rows = inventory_report_rows(inventory_records, sales_records, "model")

    assert list(rows[0]) == ["Модель", "Остаток (шт)", "Стоимость склада (руб)", "Средняя стоимость (руб)"]
    assert [r["Остаток (шт)"] for r in rows] == [2, 1]


def test_report_rows_empty():
    empty = records_frame([])

    assert dealers_report_rows(empty) == []
    assert inventory_report_rows(empty, empty) == []


def test_transliterate_keeps_case():
    assert transliterate("Москва") == "Moskva"
    assert transliterate("ЩИТ") == "ShchIT"
    assert pdf_sanitize("Выручка 5 ₽") == "Vyruchka 5 RUB"


def test_build_pdf_bytes(sales_records):
    data = build_pdf_bytes(sales_records, "Обзор", subtitle="01.01.2025")

    assert isinstance(data, bytes)
    assert data.startswith(b"%PDF")


def test_build_pdf_bytes_empty_view():
    assert build_pdf_bytes(records_frame([]), "Empty").startswith(b"%PDF")
