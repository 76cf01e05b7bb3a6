"""
superiority.py — which product holds the objectively better value for a spec.

Direction comes from the spec name (first matching keyword wins):
  higher is better   storage, memory, resolution, battery, screen size
  lower is better    weight, thickness, response time

Numeric rule, pairwise against every other product: the candidate loses if
any other product's number ties or beats it AND that product's raw string
differs. Identical strings never disqualify each other, but "8GB" against
"8 GB" does, so neither is marked.

Resolution specs compare on pixel count when a "W x H" literal is present,
so "4K UHD (3840 x 2160)" beats "1920 x 1080" instead of reading as 4.

Boolean rule, for specs with no direction: "yes"/"true" is superior only if
no other product also holds "yes"/"true".
"""
from __future__ import annotations

from typing import Iterable, Optional

from classifier import first_match
from normalizers import extract_number, pixel_count
from tables import DEFAULT_TABLES, EngineTables

HIGHER = "higher"
LOWER = "lower"

_TRUTHY = ("yes", "true")


def spec_direction(name: str, tables: EngineTables = DEFAULT_TABLES) -> Optional[str]:
    return first_match(name, tables.direction_keywords)


def _magnitude(name: str, value: Optional[str]) -> Optional[float]:
    if "resolution" in name.lower():
        pixels = pixel_count(value)
        if pixels is not None:
            return float(pixels)
    return extract_number(value)


def is_superior(
    name: str,
    value: Optional[str],
    others: Iterable[Optional[str]],
    tables: EngineTables = DEFAULT_TABLES,
) -> bool:
    """
    True if `value` beats every value in `others` (the values the OTHER
    products hold for `name`; None where a product lacks the spec).
    """
    if value is None:
        return False
    others = list(others)
    direction = spec_direction(name, tables)

    if direction is None:
        if value.strip().lower() not in _TRUTHY:
            return False
        return not any(o is not None and o.strip().lower() in _TRUTHY for o in others)

    candidate = _magnitude(name, value)
    if candidate is None:
        return False

    for other in others:
        number = _magnitude(name, other)
        if number is None or other == value:
            continue
        if direction == HIGHER and number >= candidate:
            return False
        if direction == LOWER and number <= candidate:
            return False
    return True


def determine_superiority(
    name: str,
    values_by_product: dict[str, Optional[str]],
    tables: EngineTables = DEFAULT_TABLES,
) -> dict[str, bool]:
    """Superiority flag per product id for one spec row."""
    flags: dict[str, bool] = {}
    for product_id, value in values_by_product.items():
        others = [v for pid, v in values_by_product.items() if pid != product_id]
        flags[product_id] = is_superior(name, value, others, tables)
    return flags
