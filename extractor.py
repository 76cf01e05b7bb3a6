"""
extractor.py — raw product record → canonical categorized spec map.

  extract_specs(record, "Smartphones")
  → {"general":  {"Product Name": "Pixel 8", "Brand": "Google", ...},
     "display":  {"Screen Resolution": "FHD+ (1920 x 1080)"},
     "storage":  {"Storage": "128 GB"}, ...}

Pipeline, in order:
  1. seed `general` from the known scalar fields
  2. dimensions / weight sub-objects → `physical`
  3. spec sources, highest precedence first; the first writer of a
     (category, name) pair wins:
       structured groups → flat spec map → feature bullets → summarization attributes
  4. domain enrichment from free text (fills gaps only)
  5. prune empty categories

Never raises on malformed data; bad fragments are skipped with a warning.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from classifier import classify_spec, determine_domain, lookup
from normalizers import format_number, normalize_spec_value, normalize_weight
from records.base import RawProductRecord
from tables import DEFAULT_TABLES, EngineTables

logger = logging.getLogger(__name__)

SpecMap = dict[str, dict[str, str]]

# ── Enrichment patterns ───────────────────────────────────────────────────────

_MEGAPIXEL_RE = re.compile(r"(\d+(?:\.\d+)?)\s*MP\b", re.IGNORECASE)
_MAH_RE = re.compile(r"(\d+)\s*mAh\b", re.IGNORECASE)
_5G_RE = re.compile(r"\b5G\b", re.IGNORECASE)
_GPU_RE = re.compile(
    r"\b(nvidia|amd|intel)\s*(geforce|radeon|iris|uhd)?\s*(rtx|gtx|rx)?\s*(\d+)?",
    re.IGNORECASE,
)
_HDR_RE = re.compile(r"\bHDR\d*\+?", re.IGNORECASE)
_HZ_RE = re.compile(r"(\d+)\s*Hz\b", re.IGNORECASE)


def extract_specs(
    record: RawProductRecord,
    category_label: str,
    tables: EngineTables = DEFAULT_TABLES,
) -> SpecMap:
    """Build the CanonicalSpecMap for one product."""
    specs: SpecMap = {}

    _seed_general(specs, record)
    _seed_physical(specs, record)

    for group in record.specifications:
        _add_spec_group(specs, group, tables)

    for name, value in record.specs.items():
        _add_classified(specs, name, value, tables)

    for index, bullet in enumerate(record.features):
        key, sep, value = bullet.partition(":")
        if sep and key.strip() and value.strip():
            _add_classified(specs, key, value, tables)
        else:
            _put(specs, "features", f"Feature {index + 1}", bullet)

    for attribute in record.summarization_attributes:
        name, value = attribute.get("name"), attribute.get("value")
        if name and value is not None:
            _add_classified(specs, str(name), str(value), tables)

    _enrich(specs, record, determine_domain(category_label, tables))

    pruned = {category: entries for category, entries in specs.items() if entries}
    logger.debug(
        "Extracted %d specs in %d categories for %s",
        sum(len(entries) for entries in pruned.values()), len(pruned), record.id,
    )
    return pruned


# ── Utilities over a spec map ─────────────────────────────────────────────────

def flatten_specs(spec_map: SpecMap) -> dict[str, str]:
    """{"display": {"Resolution": "4K"}} → {"Display: Resolution": "4K"}"""
    return {
        f"{category.capitalize()}: {name}": value
        for category, entries in spec_map.items()
        for name, value in entries.items()
    }


def top_specs(
    spec_map: SpecMap,
    domain: str,
    count: int,
    tables: EngineTables = DEFAULT_TABLES,
) -> dict[str, str]:
    """
    The `count` most telling specs for a product: domain priority categories
    first, in their listed order, then whatever categories remain.
    `general` is skipped; name/brand/price already head every overview item.
    """
    priorities = lookup(tables.spec_priorities, domain, tables.default_spec_priorities)
    ordered = [c for c in priorities if c in spec_map]
    ordered += [c for c in spec_map if c not in ordered and c != "general"]

    picked: dict[str, str] = {}
    for category in ordered:
        if category == "general":
            continue
        for name, value in spec_map[category].items():
            if len(picked) >= count:
                return picked
            picked.setdefault(name, value)
    return picked


# ── Steps 1 and 2 ─────────────────────────────────────────────────────────────

def _seed_general(specs: SpecMap, record: RawProductRecord) -> None:
    _put(specs, "general", "Product Name", record.name)
    _put(specs, "general", "Brand", record.brand)
    _put(specs, "general", "Model", record.model)
    if record.asin:
        _put(specs, "general", "ASIN", record.asin)
    else:
        _put(specs, "general", "ID", record.id)

    if record.price is not None:
        _put(specs, "general", "Current Price", f"{format_number(record.price)} {record.currency}")

    if record.rating is not None:
        reviews = record.review_count if record.review_count is not None else len(record.top_reviews)
        _put(specs, "general", "Rating", f"{format_number(record.rating)}/5 ({reviews} reviews)")


def _seed_physical(specs: SpecMap, record: RawProductRecord) -> None:
    if record.dimensions:
        parts = [f"{key}: {value}" for key, value in record.dimensions.items() if value not in (None, "")]
        _put(specs, "physical", "Dimensions", ", ".join(parts))

    if record.weight:
        raw = f"{record.weight.get('value')} {record.weight.get('unit') or ''}".strip()
        _put(specs, "physical", "Weight", normalize_weight(raw))


# ── Step 3 ────────────────────────────────────────────────────────────────────

def _add_spec_group(specs: SpecMap, group: dict, tables: EngineTables) -> None:
    name, value = group.get("name"), group.get("value")
    children = group.get("specifications")

    if name and value not in (None, ""):
        _add_classified(specs, str(name), str(value), tables)
        return

    if not isinstance(children, list):
        if name:
            logger.warning("Skipping spec group %r with no value or children", name)
        return

    prefix = str(name or "").strip()
    for child in children:
        if not isinstance(child, dict):
            continue
        child_name, child_value = child.get("name"), child.get("value")
        if not child_name or child_value in (None, ""):
            continue
        child_name = str(child_name).strip()
        if prefix and not child_name.lower().startswith(prefix.lower()):
            child_name = f"{prefix} {child_name}"
        _add_classified(specs, child_name, str(child_value), tables)


def _add_classified(specs: SpecMap, name: str, value: str, tables: EngineTables) -> None:
    name, value = name.strip(), value.strip()
    if not name or not value:
        return
    category = classify_spec(name, tables)
    _put(specs, category, name, normalize_spec_value(name, value, category))


def _put(specs: SpecMap, category: str, name: str, value: Optional[str]) -> bool:
    """Write one entry unless it is empty or already populated."""
    if value is None or not str(value).strip():
        return False
    entries = specs.setdefault(category, {})
    if name in entries:
        return False
    entries[name] = str(value).strip()
    return True


# ── Step 4 ────────────────────────────────────────────────────────────────────

def _enrich(specs: SpecMap, record: RawProductRecord, domain: str) -> None:
    text = record.free_text
    if not text.strip():
        return

    if domain == "smartphones":
        megapixels = _MEGAPIXEL_RE.findall(text)
        if megapixels:
            _put(specs, "camera", "Main Camera", f"{megapixels[0]} MP")
        if len(megapixels) > 1:
            _put(specs, "camera", "Secondary Camera", f"{megapixels[1]} MP")
        battery = _MAH_RE.search(text)
        if battery:
            _put(specs, "battery", "Battery Capacity", f"{battery.group(1)} mAh")
        if _5G_RE.search(text):
            _put(specs, "connectivity", "5G Support", "Yes")

    elif domain == "laptops":
        gpu = _GPU_RE.search(text)
        if gpu:
            _put(specs, "performance", "Graphics", " ".join(gpu.group(0).split()))
        lower = text.lower()
        if "ssd" in lower:
            _put(specs, "storage", "Storage Type", "SSD")
        elif "hdd" in lower or "hard drive" in lower:
            _put(specs, "storage", "Storage Type", "HDD")
        if "touch screen" in lower or "touchscreen" in lower:
            _put(specs, "display", "Touchscreen", "Yes")

    elif domain == "tvs":
        hdr = _HDR_RE.search(text)
        if hdr:
            _put(specs, "display", "HDR Support", hdr.group(0).upper())
        if "smart tv" in text.lower():
            _put(specs, "features", "Smart TV", "Yes")
        refresh = _HZ_RE.search(text)
        if refresh:
            _put(specs, "display", "Refresh Rate", f"{refresh.group(1)} Hz")
