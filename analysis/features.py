"""
features.py — the feature presence matrix.

Rows are the domain's common features, then features only one product
mentions, then any features the caller marked important. Each row says
whether each product has the feature, and when it does, how well the
product's own data backs that up.
"""
from __future__ import annotations

import logging
from typing import Sequence

from analysis.base import FeatureCell, FeatureMatrix, FeaturePresence
from classifier import lookup
from extractor import SpecMap, flatten_specs
from records.base import RawProductRecord
from tables import DEFAULT_TABLES, EngineTables

logger = logging.getLogger(__name__)


def common_features(domain: str, tables: EngineTables = DEFAULT_TABLES) -> tuple[str, ...]:
    return lookup(tables.common_features, domain, tables.default_common_features)


def extract_unique_features(records: Sequence[RawProductRecord]) -> list[str]:
    """
    Bullets that exactly one product mentions, compared case-insensitively.
    A product repeating a bullet still counts once. The first original
    casing seen is kept; order follows the input.
    """
    counts: dict[str, int] = {}
    originals: dict[str, str] = {}
    for record in records:
        seen: set[str] = set()
        for feature in record.features:
            key = feature.strip().lower()
            if not key or key in seen:
                continue
            seen.add(key)
            counts[key] = counts.get(key, 0) + 1
            originals.setdefault(key, feature.strip())

    unique = [originals[key] for key, count in counts.items() if count == 1]
    logger.debug("%d of %d distinct features are unique to one product", len(unique), len(counts))
    return unique


def is_premium_feature(feature: str, domain: str, tables: EngineTables = DEFAULT_TABLES) -> bool:
    """Domain premium keywords when the domain has a list, else the generic ones."""
    lower = feature.lower()
    keywords = lookup(tables.premium_features, domain, None)
    if keywords is None:
        keywords = tables.generic_premium_keywords
    return any(keyword in lower for keyword in keywords)


def _rich_paragraphs(record: RawProductRecord) -> list[str]:
    """Rich-description paragraphs that do not just repeat a bullet or the description."""
    bullets = {bullet.strip().lower() for bullet in record.features}
    description = record.description.lower()
    paragraphs = []
    for paragraph in record.rich_product_description:
        lower = paragraph.strip().lower()
        if lower and lower not in bullets and lower not in description:
            paragraphs.append(lower)
    return paragraphs


def _evidence_sources(record: RawProductRecord, spec_map: SpecMap, feature: str) -> int:
    """
    Independent places the feature is mentioned: bullets, description, rich
    description, spec values. The `features` spec category only holds copied
    bullets, so it is not a source of its own.
    """
    needle = feature.lower()
    spec_values = flatten_specs({c: e for c, e in spec_map.items() if c != "features"}).values()
    sources = (
        any(needle in bullet.lower() for bullet in record.features),
        needle in record.description.lower(),
        any(needle in paragraph for paragraph in _rich_paragraphs(record)),
        needle in " ".join(spec_values).lower(),
    )
    return sum(sources)


def feature_present(record: RawProductRecord, spec_map: SpecMap, feature: str) -> bool:
    return _evidence_sources(record, spec_map, feature) > 0


def rate_feature_quality(record: RawProductRecord, spec_map: SpecMap, feature: str) -> int:
    """1 + number of independent sources mentioning the feature, capped at 5."""
    return min(5, 1 + _evidence_sources(record, spec_map, feature))


def build_feature_matrix(
    records: Sequence[RawProductRecord],
    spec_maps: dict[str, SpecMap],
    domain: str,
    important_features: Sequence[str] = (),
    tables: EngineTables = DEFAULT_TABLES,
) -> FeatureMatrix:
    common = list(common_features(domain, tables))
    unique = extract_unique_features(records)

    names: list[str] = []
    seen: set[str] = set()
    for name in [*common, *unique, *important_features]:
        key = name.strip().lower()
        if key and key not in seen:
            seen.add(key)
            names.append(name.strip())

    common_keys = {c.lower() for c in common}
    unique_keys = {u.lower() for u in unique}

    rows = []
    for name in names:
        presence = {}
        for record in records:
            spec_map = spec_maps.get(record.id, {})
            present = feature_present(record, spec_map, name)
            presence[record.id] = FeatureCell(
                present=present,
                quality_rating=rate_feature_quality(record, spec_map, name) if present else None,
            )
        rows.append(FeaturePresence(
            feature_name=name,
            is_standard=name.lower() in common_keys,
            is_premium=is_premium_feature(name, domain, tables),
            is_unique=name.lower() in unique_keys,
            presence=presence,
        ))
    return FeatureMatrix(features=tuple(rows))
