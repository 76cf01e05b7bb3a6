"""
classifier.py — first-match-wins keyword classification.

Two classifiers share one strategy: lowercase the input, walk an ordered
(keyword, result) table, return the result of the first keyword that is a
substring of the input.

  classify_spec("Screen Resolution")  → "display"
  determine_domain("Mobile Phones")   → "smartphones"

The tables come from an EngineTables instance passed in by the caller.
"""
from __future__ import annotations

from typing import Any, Optional

from tables import DEFAULT_TABLES, EngineTables

OTHER = "other"


def first_match(text: str, pairs: tuple) -> Optional[Any]:
    """Result of the first (keyword, result) pair whose keyword occurs in text."""
    lower = text.lower()
    for keyword, result in pairs:
        if keyword in lower:
            return result
    return None


def classify_spec(name: str, tables: EngineTables = DEFAULT_TABLES) -> str:
    """Canonical category for a spec name; `other` when no keyword matches."""
    return first_match(name, tables.spec_categories) or OTHER


def determine_domain(label: str, tables: EngineTables = DEFAULT_TABLES) -> str:
    """
    Canonical product domain for a free-text category label.
    Unknown labels come back lowercased so per-domain lookups fall through
    to their defaults.
    """
    label = (label or "").strip()
    return first_match(label, tables.domain_keywords) or label.lower()


def lookup(table: tuple, domain: str, default: Any) -> Any:
    """Entry for `domain` in a per-domain (domain, entry) table, else default."""
    for key, entry in table:
        if key == domain:
            return entry
    return default


def selectable_features(label: str, tables: EngineTables = DEFAULT_TABLES) -> list[str]:
    """Feature choices to offer for a category: domain-specific first, then the shared list."""
    domain = determine_domain(label, tables)
    specific = lookup(tables.selectable_features, domain, ())
    return [*specific, *tables.base_selectable_features]
