"""
Shared pytest fixtures.

`phone_a` / `phone_b` are two realistic smartphone records with overlapping
and distinct data, used wherever a test needs a full comparison input.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ── Make the project root importable without installing the package ────────────
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from records.base import RawProductRecord  # noqa: E402


PHONE_A = {
    "asin": "B0PHONEA01",
    "title": "Acme Galaxy X20 Pro",
    "brand": "Acme",
    "price": "$999.99",
    "rating": 4.6,
    "ratings_total": 1200,
    "description": (
        "The Galaxy X20 Pro has a 6.7 inch OLED display, a 108MP main camera "
        "and a 12MP ultra-wide lens, 5G connectivity and a 5000 mAh battery."
    ),
    "feature_bullets": [
        "Storage: 1TB",
        "RAM: 12",
        "Wireless charging at 15W",
        "Water resistance rated IP68",
    ],
    "specifications": [
        {"name": "Screen Resolution", "value": "QHD+"},
        {"name": "Weight", "value": "0.5 lbs"},
        {"name": "Warranty", "value": "2 year limited warranty"},
    ],
    "top_reviews": [
        {"id": "r1", "title": "Fast and smooth", "body": "Setup was easy.", "rating": 5},
        {"id": "r2", "title": "Battery died in a week", "body": "Stopped working, battery drains.", "rating": 1},
    ],
}

PHONE_B = {
    "asin": "B0PHONEB02",
    "title": "Zeta Nova 8",
    "brand": "Zeta",
    "price": 499.0,
    "rating": 4.1,
    "ratings_total": 300,
    "description": "A budget-friendly phone with a 50MP camera and a 4500 mAh battery for all-day use.",
    "feature_bullets": [
        "Storage: 256GB",
        "RAM: 8",
        "Headphone jack",
    ],
    "specifications": [
        {"name": "Screen Resolution", "value": "Full HD"},
        {"name": "Weight", "value": "0.4 lbs"},
    ],
    "top_reviews": [
        {"id": "r3", "title": "Great value", "body": "Simple and reliable.", "rating": 4},
    ],
}


@pytest.fixture
def phone_a() -> RawProductRecord:
    return RawProductRecord.from_dict(PHONE_A, 0)


@pytest.fixture
def phone_b() -> RawProductRecord:
    return RawProductRecord.from_dict(PHONE_B, 1)


@pytest.fixture
def phone_dicts() -> list[dict]:
    return [dict(PHONE_A), dict(PHONE_B)]
