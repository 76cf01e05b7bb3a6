"""
RawProductRecord — the one input shape the engine reads.

Upstream product data is a duck-typed bag: the same concept can sit under
several keys, or only inside free text. from_dict() resolves that once,
here, so the rest of the engine reads plain attributes.

Alias precedence (first non-empty source wins):

  field                     sources, in order
  ────────────────────────  ─────────────────────────────────────────────────
  id                        id → asin → source_id → "product-<n>"
  name                      name → title → "Unknown Product"
  brand                     brand → manufacturer
  model                     model → model_number
  price                     price → buybox_winner.price.value → current_price
  currency                  currency → buybox_winner.price.currency → "USD"
  rating                    rating → stars
  review_count              review_count → ratings_total → total_reviews
  description               description → summary
  features                  features ∪ feature_bullets ∪ feature_bullets_flat
  rich_product_description  rich_product_description
  specs (flat map)          specs → specifications_flat
  specifications (groups)   specifications
  summarization_attributes  summarization_attributes → attributes
  dimensions                dimensions
  weight                    weight (either {"value", "unit"} or a string)
  top_reviews               top_reviews → reviews

`features` merges every bullet list in order and drops case-insensitive
duplicates, because upstream sources often repeat the same bullets.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional

logger = logging.getLogger(__name__)


@dataclass
class RawProductRecord:
    id: str
    name: str
    brand: Optional[str] = None
    model: Optional[str] = None
    asin: Optional[str] = None
    price: Optional[float] = None
    currency: str = "USD"
    category: Optional[str] = None
    rating: Optional[float] = None           # 0–5
    review_count: Optional[int] = None
    description: str = ""
    features: list[str] = field(default_factory=list)
    rich_product_description: list[str] = field(default_factory=list)
    specs: dict[str, str] = field(default_factory=dict)
    specifications: list[dict] = field(default_factory=list)
    summarization_attributes: list[dict] = field(default_factory=list)
    dimensions: dict[str, Any] = field(default_factory=dict)
    weight: Optional[dict] = None            # {"value": ..., "unit": ...}
    top_reviews: list[dict] = field(default_factory=list)

    # ── Convenience ───────────────────────────────────────────────────────────

    @property
    def free_text(self) -> str:
        """Description, rich description and bullets as one searchable blob."""
        return "\n".join([self.description, *self.rich_product_description, *self.features])

    @classmethod
    def from_dict(cls, data: dict, index: int = 0) -> "RawProductRecord":
        """Build a record from any upstream dict (see the precedence table above)."""
        if not isinstance(data, dict):
            raise TypeError(f"Product record must be a mapping, got {type(data).__name__}")

        buybox_price = ((data.get("buybox_winner") or {}).get("price") or {})

        return cls(
            id=str(_first(data, "id", "asin", "source_id") or f"product-{index + 1}"),
            name=str(_first(data, "name", "title") or "Unknown Product").strip(),
            brand=_text_or_none(_first(data, "brand", "manufacturer")),
            model=_text_or_none(_first(data, "model", "model_number")),
            asin=_text_or_none(data.get("asin")),
            price=parse_price(_first_value(data.get("price"), buybox_price.get("value"), data.get("current_price"))),
            currency=str(_first_value(data.get("currency"), buybox_price.get("currency")) or "USD"),
            category=_text_or_none(data.get("category")),
            rating=_to_float(_first(data, "rating", "stars")),
            review_count=_to_int(_first(data, "review_count", "ratings_total", "total_reviews")),
            description=_text(_first(data, "description", "summary")),
            features=_merge_bullets(
                data.get("features"), data.get("feature_bullets"), data.get("feature_bullets_flat"),
            ),
            rich_product_description=_string_list(data.get("rich_product_description")),
            specs=_flat_specs(_first(data, "specs", "specifications_flat")),
            specifications=_dict_list(data.get("specifications")),
            summarization_attributes=_dict_list(_first(data, "summarization_attributes", "attributes")),
            dimensions=data.get("dimensions") if isinstance(data.get("dimensions"), dict) else {},
            weight=_weight(data.get("weight")),
            top_reviews=_dict_list(_first(data, "top_reviews", "reviews")),
        )


def coerce_records(records) -> list[RawProductRecord]:
    """Accept RawProductRecord instances or plain dicts, in input order."""
    result: list[RawProductRecord] = []
    for index, record in enumerate(records or []):
        if isinstance(record, RawProductRecord):
            result.append(record)
        else:
            result.append(RawProductRecord.from_dict(record, index))
    return result


# ── Helpers ────────────────────────────────────────────────────────────────────

def parse_price(raw: Any) -> Optional[float]:
    """Extract numeric value from 29.99, '$29.99', '$1,299.00'; None otherwise."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    cleaned = re.sub(r"[^\d.]", "", str(raw).replace(",", ""))
    try:
        return float(cleaned) if cleaned else None
    except ValueError:
        return None


def _first_value(*values: Any) -> Any:
    for value in values:
        if value not in (None, "", [], {}):
            return value
    return None


def _first(data: dict, *keys: str) -> Any:
    return _first_value(*(data.get(key) for key in keys))


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _text_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _to_float(value: Any) -> Optional[float]:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(str(value).replace(",", "")) if value is not None else None
    except (TypeError, ValueError):
        return None


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _dict_list(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _merge_bullets(*lists: Any) -> list[str]:
    merged: list[str] = []
    seen: set[str] = set()
    for bullets in lists:
        for bullet in _string_list(bullets):
            key = bullet.lower()
            if key not in seen:
                seen.add(key)
                merged.append(bullet)
    return merged


def _flat_specs(value: Any) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {
        str(key).strip(): str(val).strip()
        for key, val in value.items()
        if str(key).strip() and val is not None and not isinstance(val, (dict, list)) and str(val).strip()
    }


def _weight(value: Any) -> Optional[dict]:
    if isinstance(value, dict) and value.get("value") not in (None, ""):
        return {"value": value.get("value"), "unit": value.get("unit") or ""}
    if isinstance(value, str) and value.strip():
        return {"value": value.strip(), "unit": ""}
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return {"value": value, "unit": ""}
    if value not in (None, ""):
        logger.warning("Ignoring unrecognised weight value: %r", value)
    return None
