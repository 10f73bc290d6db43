# -*- coding: utf-8 -*-
"""
MotoSuite | Geo Module

Approximate dealer placement for the map views. There is no geocoding
service: known cities come from a fixed table, dealers get a deterministic
offset derived from their name so the same dealer always lands on the same
spot.
"""

from __future__ import annotations
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from moto_suite.cities import CITY_COORDINATES
from moto_suite.config import DEFAULT_CENTER

Point = Tuple[float, float]

_CITY_PREFIX = re.compile(r"^(г\.|г|город)\s+")


# ==============================================================================
# DATA STRUCTURES
# ==============================================================================

@dataclass
class ModelBreakdown:
    name: str
    count: int
    offers_count: int
    offers: List[Tuple[str, int]] = field(default_factory=list)


@dataclass
class DealerGeoPoint:
    """A dealer marker with the stats shown in its popup."""

    name: str
    city: str
    lat: float
    lng: float
    units: int = 0
    value: float = 0.0
    margin: float = 0.0
    brands: List[str] = field(default_factory=list)
    models: List[ModelBreakdown] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "city": self.city,
            "lat": self.lat,
            "lng": self.lng,
            "units": self.units,
            "value": self.value,
            "margin": self.margin,
            "brands": ", ".join(self.brands),
            "models": len(self.models),
        }


# ==============================================================================
# GEOCODING
# ==============================================================================

def _normalize_city(name: str) -> str:
    return _CITY_PREFIX.sub("", name.lower()).strip()


def get_city_coordinates(city: Optional[str]) -> Optional[Point]:
    """Approximate coordinates of a known city, or None."""
    if not city:
        return None

    if city in CITY_COORDINATES:
        return CITY_COORDINATES[city]

    wanted = _normalize_city(city)
    if not wanted:
        return None
    for key, coords in CITY_COORDINATES.items():
        candidate = _normalize_city(key)
        if (
            candidate == wanted
            or candidate.startswith(wanted)
            or (len(wanted) > 4 and wanted in candidate)
        ):
            return coords
    return None


def name_hash(name: Optional[str]) -> int:
    """Sum of character codes; stable across runs, unlike hash()."""
    return sum(ord(ch) for ch in (name or "unknown"))


def dealer_coordinates(dealer_name: Optional[str], city: Optional[str]) -> Optional[Point]:
    """Map position for a dealer, or None when it cannot be placed.

    Dealers in a known city are offset by 2-7 km so they do not stack;
    dealers in an unknown city are scattered around the default center.
    """
    h = name_hash(dealer_name)
    angle = math.radians(h % 360)

    city_coords = get_city_coordinates(city)
    if city_coords is not None:
        base_lat, base_lng = city_coords
        dist = 0.02 + (h % 10) * 0.005
    else:
        base_lat, base_lng = DEFAULT_CENTER
        dist = 0.5 + (h % 50) * 0.05

    lat = base_lat + dist * math.cos(angle)
    lng = base_lng + dist * math.sin(angle)
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return None
    return lat, lng


# ==============================================================================
# DEALER MARKERS
# ==============================================================================

def build_dealer_geo_points(
    records: pd.DataFrame,
    value_column: str = "sold_price",
) -> List[DealerGeoPoint]:
    """Aggregate records per dealer and place each dealer on the map.

    ``value_column`` is summed into ``value``: revenue for sales, stock value
    for inventory. Dealers without a valid position are skipped.
    """
    if records is None or records.empty:
        return []

    points: List[DealerGeoPoint] = []
    for dealer, group in records.groupby("dealer", sort=False):
        city = group["city"].iloc[0] if "city" in group.columns else ""
        coords = dealer_coordinates(dealer, city)
        if coords is None:
            continue

        models = []
        for model, model_rows in group.groupby("model", sort=False):
            offer_counts = model_rows["offer"].value_counts()
            models.append(ModelBreakdown(
                name=model,
                count=len(model_rows),
                offers_count=int(model_rows["offer"].nunique()),
                offers=[(str(k), int(v)) for k, v in offer_counts.items()],
            ))
        models.sort(key=lambda m: m.count, reverse=True)

        margin = float(group["margin"].sum()) if "margin" in group.columns else 0.0
        points.append(DealerGeoPoint(
            name=dealer,
            city=city,
            lat=coords[0],
            lng=coords[1],
            units=len(group),
            value=float(group[value_column].sum()) if value_column in group.columns else 0.0,
            margin=margin,
            brands=sorted(group["brand"].unique().tolist()),
            models=models,
        ))
    return points


def geo_points_frame(points: List[DealerGeoPoint]) -> pd.DataFrame:
    """Flat frame for plotting markers."""
    return pd.DataFrame(
        [p.to_dict() for p in points],
        columns=["name", "city", "lat", "lng", "units", "value", "margin", "brands", "models"],
    )
