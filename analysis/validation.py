"""
validation.py — request validation and the data-quality check.

validate_request() rejects requests that cannot produce a comparison.
check_data_quality() never rejects on its own; it lists what is thin so the
caller can warn, or raise DataQualityError in strict mode.
"""
from __future__ import annotations

import logging
from typing import Sequence

import config
from errors import ValidationError
from extractor import SpecMap
from records.base import RawProductRecord

logger = logging.getLogger(__name__)

MIN_PRODUCTS = 2


def validate_request(
    records: Sequence[RawProductRecord],
    category: str,
    important_features: Sequence[str] = (),
    require_features: bool = False,
) -> None:
    if len(records) < MIN_PRODUCTS:
        raise ValidationError(
            f"At least {MIN_PRODUCTS} products are required for comparison (got {len(records)})"
        )
    if not (category or "").strip():
        raise ValidationError("A product category is required")
    if require_features and not [f for f in important_features if f and f.strip()]:
        raise ValidationError("Select at least one feature to compare")

    seen: set[str] = set()
    for record in records:
        if record.id in seen:
            raise ValidationError(f"Duplicate product id: {record.id}")
        seen.add(record.id)


def check_data_quality(
    records: Sequence[RawProductRecord],
    spec_maps: dict[str, SpecMap],
    min_description_chars: int = config.MIN_DESCRIPTION_CHARS,
    min_spec_count: int = config.MIN_SPEC_COUNT,
) -> list[str]:
    """One human-readable line per problem found, in product order."""
    issues: list[str] = []
    for record in records:
        label = record.name or record.id
        if not record.description:
            issues.append(f"{label}: missing description")
        elif len(record.description) < min_description_chars:
            issues.append(f"{label}: description is very short ({len(record.description)} characters)")

        if not record.features:
            issues.append(f"{label}: no feature bullets")

        spec_count = sum(
            len(entries)
            for category, entries in spec_maps.get(record.id, {}).items()
            if category != "general"
        )
        if spec_count < min_spec_count:
            issues.append(f"{label}: only {spec_count} technical specifications found")

    for issue in issues:
        logger.warning("Data quality: %s", issue)
    return issues
