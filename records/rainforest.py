"""
Adapter for Rainforest-style Amazon product-details payloads.

Input is what the product endpoint returns, {"product": {...}}, or the bare
product dict. Output is a RawProductRecord. Nothing here touches the network.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from records.base import RawProductRecord, parse_price

logger = logging.getLogger(__name__)

_PARAGRAPH_SPLIT_RE = re.compile(r"\n+|•")

_REVIEW_FIELDS = ("id", "title", "body", "rating", "date", "verified_purchase")


def from_rainforest(payload: dict, category: str = "", index: int = 0) -> RawProductRecord:
    """Convert one product-details payload into a RawProductRecord."""
    product = payload.get("product", payload) if isinstance(payload, dict) else None
    if not isinstance(product, dict):
        raise TypeError("Rainforest payload must be a mapping with a 'product' object")

    buybox = product.get("buybox_winner") or {}
    price = buybox.get("price") or {}

    record = RawProductRecord.from_dict({
        "id": product.get("asin"),
        "asin": product.get("asin"),
        "name": product.get("title"),
        "brand": product.get("brand"),
        "model": product.get("model_number"),
        "price": parse_price(price.get("value")),
        "currency": price.get("currency") or "USD",
        "category": category or None,
        "rating": product.get("rating"),
        "ratings_total": product.get("ratings_total"),
        "description": product.get("description") if isinstance(product.get("description"), str) else "",
        "features": product.get("feature_bullets") or product.get("features"),
        "rich_product_description": extract_rich_description(product),
        "specs": _basic_specs(product),
        "specifications": product.get("specifications"),
        "summarization_attributes": product.get("summarization_attributes"),
        "dimensions": product.get("dimensions"),
        "weight": product.get("weight"),
        "top_reviews": extract_top_reviews(product),
    }, index)

    logger.debug(
        "Rainforest product %s: %d bullets, %d rich paragraphs, %d reviews",
        record.id, len(record.features), len(record.rich_product_description), len(record.top_reviews),
    )
    return record


def extract_rich_description(product: dict) -> list[str]:
    """Feature bullets followed by the description split into paragraphs."""
    paragraphs: list[str] = []
    bullets = product.get("feature_bullets") or product.get("features")
    if isinstance(bullets, list):
        paragraphs.extend(b.strip() for b in bullets if isinstance(b, str) and b.strip())

    description = product.get("description")
    if isinstance(description, str):
        paragraphs.extend(p.strip() for p in _PARAGRAPH_SPLIT_RE.split(description) if p.strip())
    return paragraphs


def extract_top_reviews(product: dict) -> list[dict]:
    reviews = product.get("top_reviews")
    if not isinstance(reviews, list):
        return []
    return [
        {key: review.get(key) for key in _REVIEW_FIELDS}
        for review in reviews
        if isinstance(review, dict)
    ]


def _basic_specs(product: dict) -> dict[str, str]:
    buybox = product.get("buybox_winner") or {}
    specs: dict[str, str] = {}

    if (buybox.get("fulfillment") or {}).get("is_prime"):
        specs["Prime"] = "Yes"
    if (buybox.get("shipping") or {}).get("is_free"):
        specs["Free Shipping"] = "Yes"

    categories = product.get("categories")
    path = _category_path(categories) if isinstance(categories, list) else None
    if path:
        specs["Category Path"] = path
    return specs


def _category_path(categories: list) -> Optional[str]:
    names = [
        c.get("name") if isinstance(c, dict) else c
        for c in categories
    ]
    names = [str(n).strip() for n in names if n]
    return " > ".join(names) or None
