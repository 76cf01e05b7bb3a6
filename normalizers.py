"""
normalizers.py — unit-aware value normalizers.

One pure function per unit family. Each takes the raw value string and
returns a string; when no recognisable number + unit token is found the
original value comes back unchanged. Nothing here raises on bad input.

Every normalizer is idempotent: feeding it its own output returns that
output again ("1TB" → "1024 GB" → "1024 GB").
"""
from __future__ import annotations

import re
from typing import Optional

# ── Patterns ──────────────────────────────────────────────────────────────────

_NUMBER = r"(\d+(?:\.\d+)?)"

_STORAGE_RE = re.compile(_NUMBER + r"\s*(tb|mb|kb)\b", re.IGNORECASE)
_RAM_MB_RE  = re.compile(_NUMBER + r"\s*mb\b", re.IGNORECASE)
_BARE_RE    = re.compile(r"^\s*" + _NUMBER + r"\s*$")
_POUND_RE   = re.compile(_NUMBER + r"\s*(?:lbs?|pounds?)\b", re.IGNORECASE)
_OUNCE_RE   = re.compile(_NUMBER + r"\s*(?:oz|ounces?)\b", re.IGNORECASE)
_FIRST_NUMBER_RE = re.compile(r"(\d+(\.\d+)?)")
_PIXELS_RE = re.compile(r"(\d{3,5})\s*[x×]\s*(\d{3,5})", re.IGNORECASE)

GRAMS_PER_POUND = 453.592
GRAMS_PER_OUNCE = 28.35

# Longest term first: "hd" must never fire inside "full hd", "uhd" or "hdr".
RESOLUTION_TERMS: tuple[tuple[str, str], ...] = (
    ("full hd", "1920 x 1080"),
    ("fhd",     "1920 x 1080"),
    ("qhd",     "2560 x 1440"),
    ("uhd",     "3840 x 2160"),
    ("2k",      "2560 x 1440"),
    ("4k",      "3840 x 2160"),
    ("8k",      "7680 x 4320"),
    ("hd",      "1280 x 720"),
)
_RESOLUTION_RES = tuple(
    (re.compile(r"\b" + re.escape(term) + r"\b", re.IGNORECASE), resolution)
    for term, resolution in RESOLUTION_TERMS
)


def format_number(number: float) -> str:
    """Plain number: no trailing zeros, no exponent (1024.0 → '1024')."""
    return f"{number:.4f}".rstrip("0").rstrip(".")


def extract_number(value: Optional[str]) -> Optional[float]:
    """First numeric token in `value`, or None."""
    if not value:
        return None
    match = _FIRST_NUMBER_RE.search(str(value))
    return float(match.group(1)) if match else None


# ── Unit families ─────────────────────────────────────────────────────────────

def _storage_gb(match: re.Match) -> str:
    amount, unit = float(match.group(1)), match.group(2).lower()
    if unit == "tb":
        return f"{format_number(amount * 1024)} GB"
    if unit == "mb":
        return f"{amount / 1024:.2f} GB"
    return f"{amount / (1024 * 1024):.4f} GB"


def normalize_storage(value: str) -> str:
    """
    TB / MB / KB → GB. Each quantity is converted where it stands, so the
    rest of the text survives: "128GB, expandable to 1TB" keeps its 128GB.
    """
    return _STORAGE_RE.sub(_storage_gb, value)


def normalize_weight(value: str) -> str:
    """Pounds / ounces → 'original (grams)', e.g. '1.2 lb (544 g)'."""
    match = _POUND_RE.search(value)
    if match:
        pounds = float(match.group(1))
        return f"{format_number(pounds)} lb ({pounds * GRAMS_PER_POUND:.0f} g)"
    match = _OUNCE_RE.search(value)
    if match:
        ounces = float(match.group(1))
        return f"{format_number(ounces)} oz ({ounces * GRAMS_PER_OUNCE:.0f} g)"
    return value


def normalize_ram(value: str) -> str:
    """MB → GB; a bare number is taken as GB; GB values pass through."""
    match = _RAM_MB_RE.search(value)
    if match:
        return f"{float(match.group(1)) / 1024:.2f} GB"
    match = _BARE_RE.match(value)
    if match:
        return f"{format_number(float(match.group(1)))} GB"
    return value


def resolution_term(value: str) -> Optional[str]:
    """Literal resolution for the first marketing term found in `value`."""
    for pattern, resolution in _RESOLUTION_RES:
        if pattern.search(value):
            return resolution
    return None


def pixel_count(value: Optional[str]) -> Optional[int]:
    """Width × height of the first "W x H" literal in `value`, or None."""
    if not value:
        return None
    match = _PIXELS_RE.search(str(value))
    return int(match.group(1)) * int(match.group(2)) if match else None


def normalize_resolution(value: str) -> str:
    """Append the literal resolution to marketing terms: '4K' → '4K (3840 x 2160)'."""
    resolution = resolution_term(value)
    if resolution is None or resolution in value:
        return value
    return f"{value} ({resolution})"


# ── Dispatcher ────────────────────────────────────────────────────────────────

def normalize_spec_value(name: str, value: str, category: str) -> str:
    """
    Pick and apply the normalizers for one spec, based on its name and the
    category it was classified into.

    Normalizers chain in order; RAM runs last (a "Memory" spec with a bare
    "8" becomes "8 GB"). Dimension strings keep their embedded weight text.
    """
    lower = name.lower()
    normalized = value

    if category == "storage" or any(k in lower for k in ("storage", "memory", "ram", "disk", "drive")):
        normalized = normalize_storage(normalized)

    if category == "display" and ("resolution" in lower or "display" in lower):
        normalized = normalize_resolution(normalized)

    if "weight" in lower or (category == "physical" and "dimension" not in lower):
        normalized = normalize_weight(normalized)

    if "ram" in lower or "memory" in lower:
        normalized = normalize_ram(normalized)

    return normalized
