"""
overview.py — comparative overview and specification parity.

The overview has one item per product, in input order. The parity table has
one block per spec category and one row per spec name. Every row has a cell
for every product; a product without the spec gets a missing cell.
"""
from __future__ import annotations

import re
from typing import Optional, Sequence

import config
from analysis.base import (
    ComparativeOverview,
    OverviewItem,
    SpecificationCategory,
    SpecificationItem,
    SpecificationParity,
    SpecValue,
)
from classifier import lookup
from extractor import SpecMap, top_specs
from normalizers import resolution_term
from records.base import RawProductRecord
from superiority import determine_superiority
from tables import DEFAULT_TABLES, EngineTables

_MODEL_PATTERNS = (
    re.compile(r"(\w+\s+\w+\d+(\s+\w+)?)", re.IGNORECASE),   # "iPhone 13 Pro"
    re.compile(r"(\w+\d+(\s+\w+)?)", re.IGNORECASE),         # "Galaxy S22"
    re.compile(r"(\w+-\w+\d+)", re.IGNORECASE),              # "ZenBook-UX425"
)


# ── Overview ──────────────────────────────────────────────────────────────────

def extract_model(name: str) -> str:
    for pattern in _MODEL_PATTERNS:
        match = pattern.search(name)
        if match:
            return match.group(1)
    return name


def quick_verdict(rating: Optional[float], price: Optional[float]) -> str:
    """Rating band when there is a rating of 3.0 or better, else a price tier."""
    if rating is not None:
        if rating >= 4.5:
            return "Excellent"
        if rating >= 4.0:
            return "Very Good"
        if rating >= 3.5:
            return "Good"
        if rating >= 3.0:
            return "Average"

    price = price or 0.0
    if price > 1000:
        return "Premium"
    if price > 500:
        return "Mid-range"
    if price > 200:
        return "Budget"
    return "Entry-level"


def key_features(record: RawProductRecord, count: int = config.KEY_FEATURE_COUNT) -> tuple[str, ...]:
    if record.features:
        return tuple(record.features[:count])
    first_sentence = record.description.split(".")[0].strip()
    return (first_sentence or "No description available",)


def build_overview(
    records: Sequence[RawProductRecord],
    spec_maps: dict[str, SpecMap],
    domain: str,
    tables: EngineTables = DEFAULT_TABLES,
    key_feature_count: int = config.KEY_FEATURE_COUNT,
    top_spec_count: int = config.TOP_SPEC_COUNT,
) -> ComparativeOverview:
    items = tuple(
        OverviewItem(
            product_id=record.id,
            product_name=record.name,
            model=record.model or extract_model(record.name),
            current_price=record.price,
            currency=record.currency,
            rating=record.rating,
            review_count=record.review_count if record.review_count is not None else len(record.top_reviews),
            key_features=key_features(record, key_feature_count),
            top_specs=top_specs(spec_maps.get(record.id, {}), domain, top_spec_count, tables),
            quick_verdict=quick_verdict(record.rating, record.price),
        )
        for record in records
    )
    return ComparativeOverview(items=items)


# ── Parity ────────────────────────────────────────────────────────────────────

def explain_spec(name: str, tables: EngineTables = DEFAULT_TABLES) -> str:
    return lookup(tables.spec_explanations, name, None) or tables.generic_explanation.format(name=name)


def build_parity(
    product_ids: Sequence[str],
    spec_maps: dict[str, SpecMap],
    tables: EngineTables = DEFAULT_TABLES,
    missing_value: str = config.MISSING_VALUE,
) -> SpecificationParity:
    categories: list[str] = []
    for pid in product_ids:
        for category in spec_maps.get(pid, {}):
            if category not in categories:
                categories.append(category)

    blocks = []
    for category in categories:
        names: list[str] = []
        for pid in product_ids:
            for name in spec_maps.get(pid, {}).get(category, {}):
                if name not in names:
                    names.append(name)

        rows = []
        for name in names:
            values = {pid: spec_maps.get(pid, {}).get(category, {}).get(name) for pid in product_ids}
            superior = determine_superiority(name, values, tables)
            cells = {}
            for pid, value in values.items():
                if value is None:
                    cells[pid] = SpecValue(value=missing_value, is_superior=False, is_missing=True)
                else:
                    cells[pid] = SpecValue(
                        value=value,
                        is_superior=superior[pid],
                        is_missing=False,
                        is_marketing=category == "display" and resolution_term(value) is not None,
                    )
            rows.append(SpecificationItem(name=name, explanation=explain_spec(name, tables), values=cells))

        blocks.append(SpecificationCategory(name=category, specifications=tuple(rows)))
    return SpecificationParity(categories=tuple(blocks))
