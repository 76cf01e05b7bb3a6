"""
comparison.py — public entry point of the comparison engine.

  from comparison import compare_products

  result = compare_products(records, "Smartphones", important_features=["5G"])
  result.to_dict()      # camelCase document for renderers / storage

Pure and synchronous: no I/O, no shared state. Two calls with the same
inputs (and the same `now`) return equal results.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence, Union

import config
from analysis.base import ComparisonResult
from analysis.features import build_feature_matrix
from analysis.overview import build_overview, build_parity
from analysis.summaries import (
    build_category_winners,
    build_confidence,
    build_price_value,
    build_recommendations,
    build_scorecards,
    build_use_cases,
    build_user_experience,
    top_line_summary,
)
from analysis.validation import check_data_quality, validate_request
from classifier import determine_domain
from errors import DataQualityError
from extractor import extract_specs
from records.base import RawProductRecord, coerce_records
from tables import DEFAULT_TABLES, EngineTables

logger = logging.getLogger(__name__)


def compare_products(
    records: Iterable[Union[RawProductRecord, dict]],
    category: str,
    *,
    important_features: Sequence[str] = (),
    tables: EngineTables = DEFAULT_TABLES,
    require_features: bool = False,
    strict_quality: bool = config.STRICT_DATA_QUALITY,
    now: Optional[datetime] = None,
) -> ComparisonResult:
    """
    Compare two or more products.

    Raises ValidationError when the request cannot produce a comparison, and
    DataQualityError when `strict_quality` is set and any product's data is thin.
    """
    products = coerce_records(records)
    validate_request(products, category, important_features, require_features)

    domain = determine_domain(category, tables)
    product_ids = tuple(p.id for p in products)
    logger.info("Comparing %d products in %r (domain %s)", len(products), category, domain)

    spec_maps = {p.id: extract_specs(p, category, tables) for p in products}

    issues = check_data_quality(products, spec_maps)
    if issues and strict_quality:
        raise DataQualityError("Product data is too incomplete to compare.", issues)

    parity = build_parity(product_ids, spec_maps, tables)
    matrix = build_feature_matrix(products, spec_maps, domain, important_features, tables)
    cards = build_scorecards(products, parity, matrix)

    result = ComparisonResult(
        product_ids=product_ids,
        category=category.strip(),
        comparative_overview=build_overview(products, spec_maps, domain, tables),
        specification_parity=parity,
        feature_matrix=matrix,
        price_value_assessment=build_price_value(cards, spec_maps, domain, tables),
        user_experience_comparison=build_user_experience(products, tables),
        use_case_optimization=build_use_cases(cards, spec_maps, domain, tables),
        top_line_summary=top_line_summary(products, category),
        category_winners=build_category_winners(cards, domain, tables),
        personalized_recommendations=build_recommendations(cards, tables),
        confidence_assessment=build_confidence(
            products, cards, spec_maps, parity, domain, issues, tables,
        ),
        created_at=(now or datetime.now(timezone.utc)).isoformat(),
        spec_maps=spec_maps,
    )
    logger.info(
        "Comparison ready: %d spec categories, %d features",
        len(parity.categories), len(matrix.features),
    )
    return result
