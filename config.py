"""
Central configuration — reads from .env file.

Only runtime knobs live here. Keyword and lookup tables are data, not
settings: they live in tables.py and are passed into the engine explicitly.

Every engine function that uses one of these takes it as a keyword default
(e.g. `key_feature_count: int = config.KEY_FEATURE_COUNT`), so a caller can
override any of them per comparison without touching the environment.
"""
import os
from dotenv import load_dotenv

load_dotenv()

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Parity table ──────────────────────────────────────────────────────────────
# Display value for a spec a product does not have
MISSING_VALUE: str = os.getenv("MISSING_VALUE", "—")

# ── Comparative overview ──────────────────────────────────────────────────────
KEY_FEATURE_COUNT: int = int(os.getenv("KEY_FEATURE_COUNT", "3"))
TOP_SPEC_COUNT: int    = int(os.getenv("TOP_SPEC_COUNT", "6"))

# ── Price-value assumptions ───────────────────────────────────────────────────
# Total cost of ownership = price + price × accessories + price × subscriptions
ACCESSORY_COST_RATIO: float    = float(os.getenv("ACCESSORY_COST_RATIO", "0.2"))
SUBSCRIPTION_COST_RATIO: float = float(os.getenv("SUBSCRIPTION_COST_RATIO", "0.1"))

# ── Data quality ──────────────────────────────────────────────────────────────
# true  → refuse to compare products with thin data (DataQualityError)
# false → log a warning and report the issues in the confidence assessment
STRICT_DATA_QUALITY: bool = os.getenv("STRICT_DATA_QUALITY", "false").lower() == "true"
MIN_DESCRIPTION_CHARS: int = int(os.getenv("MIN_DESCRIPTION_CHARS", "50"))
MIN_SPEC_COUNT: int        = int(os.getenv("MIN_SPEC_COUNT", "3"))
