"""Pytest configuration to make the local package importable without installation."""
import copy
import sys
from pathlib import Path

import pytest

# Ensure repository root is on sys.path for module resolution
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from moto_suite.data import flatten_records, records_frame
from moto_suite.sample_data import SAMPLE_SALES


def _offer(name, count, sold, buy, vehicles):
    return {
        "name": name,
        "count_sold": count,
        "total_sold_price": sold,
        "total_buy_price": buy,
        "vehicles": vehicles,
    }


@pytest.fixture
def single_dealer_document() -> dict:
    """One dealer, one model, one offer with two vehicles sold in 2024."""

    return {
        "total": {"count_sold": 2, "total_sold_price": 200000, "total_buy_price": 150000},
        "items": {
            "1": {
                "name": "Dealer A",
                "models": {
                    "10": {
                        "name": "VOGE X1",
                        "offers": {
                            "100": _offer("Red", 2, 200000, 150000, {
                                "1000": {"vin": "VIN-A", "sale_date": "01.01.2024"},
                                "1001": {"vin": "VIN-B", "sale_date": "15.06.2024"},
                            }),
                        },
                    },
                },
            },
        },
    }


@pytest.fixture
def multi_dealer_document() -> dict:
    """Three dealers in three cities, two brands, sales over 2023 and 2024."""

    return {
        "total": {"count_sold": 6, "total_sold_price": 2100000, "total_buy_price": 1700000},
        "items": {
            "1": {
                "name": "МОТОПАРК ООО (Тула)",
                "models": {
                    "1": {
                        "name": "VOGE 300DS",
                        "offers": {
                            "1": _offer("Base", 2, 800000, 600000, {
                                "1": {"vin": "V1", "sale_date": "10.03.2024"},
                                "2": {"vin": "V2", "sale_date": "20.03.2024"},
                            }),
                            "2": _offer("Premium", 1, 500000, 400000, {
                                "3": {"vin": "V3", "sale_date": "05.07.2023"},
                            }),
                        },
                    },
                },
            },
            "2": {
                "name": "АВИЛОН АГ АО (Москва)",
                "models": {
                    "2": {
                        "name": "Loncin LX200",
                        "offers": {
                            "3": _offer("Base", 2, 400000, 360000, {
                                "4": {"vin": "L1", "sale_date": "07.01.2024"},
                                "5": {"vin": "L2", "sale_date": "14.01.2024"},
                            }),
                        },
                    },
                },
            },
            "3": {
                "name": "Мото Драйв ООО",
                "city": "Екатеринбург",
                "models": {
                    "3": {
                        "name": "Zontes 350",
                        "offers": {
                            "4": _offer("Base", 1, 400000, 340000, {
                                "6": {"vin": "Z1", "sale_date": "31.12.2024"},
                            }),
                        },
                    },
                },
            },
        },
    }


@pytest.fixture
def inventory_document() -> dict:
    """Stock export: vehicles are bare VIN strings, counts in count_free."""

    return {
        "total": {"count_free": 3, "total_buy_price": 1000000},
        "items": {
            "1": {
                "name": "МОТОПАРК ООО (Тула)",
                "models": {
                    "1": {
                        "name": "VOGE 300DS",
                        "offers": {
                            "1": {
                                "name": "Base",
                                "count_free": 2,
                                "total_buy_price": 640000,
                                "vehicles": {"1": "S1", "2": "S2"},
                            },
                        },
                    },
                    "2": {
                        "name": "VOGE 650DS",
                        "offers": {
                            "2": {
                                "name": "Base",
                                "count_free": 1,
                                "total_buy_price": 360000,
                                "vehicles": {"3": "S3"},
                            },
                        },
                    },
                },
            },
        },
    }


@pytest.fixture
def sales_records(multi_dealer_document):
    return records_frame(flatten_records(multi_dealer_document))


@pytest.fixture
def inventory_records(inventory_document):
    return records_frame(flatten_records(inventory_document))


@pytest.fixture
def sample_document() -> dict:
    """A private copy of the bundled sample."""

    return copy.deepcopy(SAMPLE_SALES)
