"""
tables.py — keyword and lookup tables for the comparison engine.

Everything is immutable and ordered. Keyword tables are tuples of
(keyword, result) pairs scanned front to back; the first keyword found in
the input wins, so ORDER IS BEHAVIOUR — do not sort these.

Per-domain tables are tuples of (domain, entry) pairs; classifier.lookup()
resolves them and falls back to the matching DEFAULT_* entry.

Nothing in the engine reads these as globals: every classifier, builder and
generator takes an EngineTables argument. DEFAULT_TABLES is the stock set;
build a variant with dataclasses.replace(DEFAULT_TABLES, ...).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

Pairs = tuple  # tuple[tuple[str, X], ...]


class MetricRule(NamedTuple):
    """
    One price-value metric.

    source: "spec"     → first number of the first spec whose name contains a key
            "wins"     → superiority wins in the categories listed in keys (all if empty)
            "features" → number of matrix features the product has
            "rating"   → customer rating
    mode:   "per_100"  → quantity per $100 (higher is better)
            "per_unit" → price per unit of quantity (lower is better)
    """
    name: str
    source: str
    keys: tuple[str, ...] = ()
    mode: str = "per_100"


# ── Spec name → canonical category ────────────────────────────────────────────

SPEC_CATEGORIES: Pairs = (
    # display
    ("display", "display"), ("screen", "display"), ("resolution", "display"),
    ("refresh rate", "display"),
    # battery
    ("battery", "battery"), ("charging", "battery"), ("runtime", "battery"),
    # physical
    ("dimensions", "physical"), ("weight", "physical"), ("material", "physical"),
    ("color", "physical"),
    # performance
    ("processor", "performance"), ("cpu", "performance"), ("gpu", "performance"),
    ("ram", "performance"), ("memory", "performance"), ("benchmark", "performance"),
    # storage
    ("storage", "storage"), ("hard drive", "storage"), ("ssd", "storage"),
    ("capacity", "storage"),
    # camera
    ("camera", "camera"), ("lens", "camera"), ("megapixel", "camera"),
    ("photo", "camera"), ("video", "camera"),
    # connectivity
    ("wifi", "connectivity"), ("bluetooth", "connectivity"), ("usb", "connectivity"),
    ("port", "connectivity"), ("connection", "connectivity"),
    # audio
    ("audio", "audio"), ("sound", "audio"), ("speaker", "audio"),
    ("microphone", "audio"),
    # general
    ("model", "general"), ("brand", "general"), ("type", "general"),
    ("year", "general"),
    # warranty
    ("warranty", "warranty"), ("guarantee", "warranty"), ("support", "warranty"),
)

# ── Category label → product domain ───────────────────────────────────────────
# Headphone keywords sit before "phone": "Headphones" must not become smartphones.

DOMAIN_KEYWORDS: Pairs = (
    ("headphone", "headphones"), ("earphone", "headphones"), ("earbud", "headphones"),
    ("phone", "smartphones"), ("smartphone", "smartphones"), ("mobile", "smartphones"),
    ("laptop", "laptops"), ("notebook", "laptops"), ("computer", "laptops"),
    ("television", "tvs"), ("tv", "tvs"),
    ("camera", "cameras"), ("dslr", "cameras"), ("mirrorless", "cameras"),
)

# ── Spec name → which direction is better ─────────────────────────────────────

DIRECTION_KEYWORDS: Pairs = (
    ("storage", "higher"), ("memory", "higher"), ("resolution", "higher"),
    ("battery", "higher"), ("screen size", "higher"),
    ("weight", "lower"), ("thickness", "lower"), ("response time", "lower"),
)

# ── Feature matrix ────────────────────────────────────────────────────────────

COMMON_FEATURES: Pairs = (
    ("smartphones", ("Touchscreen", "Camera", "Bluetooth", "Wi-Fi", "GPS",
                     "USB Charging", "Accelerometer", "Fingerprint Scanner")),
    ("laptops",     ("Keyboard", "Trackpad", "USB Ports", "Webcam", "Wi-Fi",
                     "Bluetooth", "Headphone Jack", "Battery")),
    ("headphones",  ("Audio Playback", "Volume Control", "Ear Cups/Buds",
                     "Bluetooth", "Battery", "Microphone")),
    ("tvs",         ("Screen", "Speakers", "HDMI Ports", "Remote Control",
                     "Power Supply", "Wall Mounting Support")),
    ("cameras",     ("Image Sensor", "Lens", "Flash", "Memory Card Slot",
                     "Battery", "LCD Screen")),
)
DEFAULT_COMMON_FEATURES = ("Power Button", "Battery/Power Supply", "User Interface")

PREMIUM_FEATURES: Pairs = (
    ("smartphones", ("wireless charging", "water resistance", "5g", "oled",
                     "facial recognition", "quad camera", "telephoto", "lidar")),
    ("laptops",     ("thunderbolt", "discrete gpu", "oled", "4k",
                     "touch screen", "pen support", "facial recognition")),
    ("headphones",  ("active noise cancellation", "transparency mode", "spatial audio",
                     "wireless charging", "premium materials", "adaptive eq")),
    ("tvs",         ("oled", "qled", "mini-led", "8k", "dolby vision",
                     "dolby atmos", "120hz", "hdmi 2.1")),
)
GENERIC_PREMIUM_KEYWORDS = (
    "premium", "professional", "pro", "elite", "advanced",
    "high-end", "luxury", "exclusive", "flagship",
)

# ── Feature-importance choices offered per category label ─────────────────────

SELECTABLE_FEATURES: Pairs = (
    ("smartphones", ("Performance", "Battery Life", "Camera Quality", "Display",
                     "Software", "Storage", "5G Connectivity")),
    ("laptops",     ("Performance", "Battery Life", "Display Quality", "Keyboard",
                     "Portability", "Storage", "Connectivity")),
    ("headphones",  ("Sound Quality", "Noise Cancellation", "Battery Life", "Comfort",
                     "Connectivity", "Durability", "Portability")),
    ("tvs",         ("Picture Quality", "Sound Quality", "Smart Features", "Connectivity",
                     "Screen Size", "Refresh Rate", "HDR Support")),
    ("cameras",     ("Image Quality", "Video Quality", "Autofocus", "Low Light Performance",
                     "Battery Life", "Portability", "Durability")),
)
BASE_SELECTABLE_FEATURES = (
    "Price", "Value for Money", "Build Quality", "Design",
    "User Experience", "Customer Support", "Warranty",
)

# ── Top specs: category priority per domain ───────────────────────────────────

SPEC_PRIORITIES: Pairs = (
    ("smartphones", ("display", "performance", "camera", "battery", "storage", "connectivity")),
    ("laptops",     ("performance", "display", "storage", "physical", "battery", "connectivity")),
    ("tvs",         ("display", "features", "connectivity", "physical", "audio", "technical")),
)
DEFAULT_SPEC_PRIORITIES = ("performance", "general", "technical", "physical", "features", "connectivity")

# ── Parity glossary ───────────────────────────────────────────────────────────

SPEC_EXPLANATIONS: Pairs = (
    ("Resolution", "The number of pixels displayed on the screen. Higher numbers mean sharper images."),
    ("Refresh Rate", "How many times per second the screen updates. Higher rates mean smoother motion."),
    ("RAM", "Random Access Memory - temporary storage for running applications. "
            "More RAM allows more apps to run simultaneously."),
    ("Storage", "Space for storing files, apps, and the operating system. "
                "More storage means more content can be saved."),
    ("Battery Capacity", "Amount of electric charge a battery can deliver. "
                         "Higher capacity generally means longer battery life."),
    ("Processor", "The brain of the device that executes instructions. "
                  "Faster processors generally mean better performance."),
    ("Weight", "The physical weight of the device. Lower weight typically means better portability."),
)
GENERIC_EXPLANATION = "{name} - a technical specification that affects the product's performance."

# ── Price-value ───────────────────────────────────────────────────────────────

PRICE_VALUE_METRICS: Pairs = (
    ("smartphones", (
        MetricRule("Price to Performance Ratio", "wins", ("performance",)),
        MetricRule("Price per GB Storage", "spec", ("storage",), "per_unit"),
        MetricRule("Camera Quality per Dollar", "spec", ("camera", "megapixel")),
        MetricRule("Battery Life per Dollar", "spec", ("battery",)),
    )),
    ("laptops", (
        MetricRule("Price to Performance Ratio", "wins", ("performance",)),
        MetricRule("Price per GB RAM", "spec", ("ram", "memory"), "per_unit"),
        MetricRule("Price per GB Storage", "spec", ("storage",), "per_unit"),
        MetricRule("Display Quality per Dollar", "wins", ("display",)),
    )),
    ("headphones", (
        MetricRule("Sound Quality per Dollar", "wins", ("audio",)),
        MetricRule("Comfort per Dollar", "wins", ("physical",)),
        MetricRule("Battery Life per Dollar", "spec", ("battery",)),
        MetricRule("Feature Set per Dollar", "features"),
    )),
    ("tvs", (
        MetricRule("Price per Inch", "spec", ("screen size", "display size"), "per_unit"),
        MetricRule("Picture Quality per Dollar", "wins", ("display",)),
        MetricRule("Smart Features per Dollar", "features"),
        MetricRule("HDR Performance per Dollar", "wins", ("display",)),
    )),
)
DEFAULT_PRICE_VALUE_METRICS = (
    MetricRule("Value for Money", "wins"),
    MetricRule("Feature Set per Dollar", "features"),
    MetricRule("Quality per Dollar", "rating"),
)

COST_PER_UNIT: Pairs = (
    ("smartphones", (("GB Storage", ("storage",)), ("MP Camera", ("camera", "megapixel")))),
    ("laptops",     (("GB RAM", ("ram", "memory")), ("GB Storage", ("storage",)),
                     ("GHz Processor", ("processor", "cpu")))),
    ("tvs",         (("Inch Screen", ("screen size", "display size")),)),
)
# An empty key tuple means "price per feature present in the matrix"
DEFAULT_COST_PER_UNIT = (("Feature", ()),)

# ── Use cases and category winners ────────────────────────────────────────────
# Each entry maps a human label to the canonical spec categories whose
# superiority wins decide it. "value" scores wins + features per $100.

USE_CASES: Pairs = (
    ("smartphones", (
        ("Photography", ("camera",)), ("Gaming", ("performance", "display")),
        ("Business Use", ("performance", "battery", "connectivity")),
        ("Social Media", ("camera", "display")), ("Battery Life", ("battery",)),
        ("Durability", ("physical", "warranty")), ("Value for Money", ("value",)),
    )),
    ("laptops", (
        ("Professional Work", ("performance", "storage")), ("Creative Tasks", ("display", "performance")),
        ("Gaming", ("performance", "display")), ("Student Use", ("battery", "value")),
        ("Travel", ("physical", "battery")), ("Battery Life", ("battery",)),
        ("Value for Money", ("value",)),
    )),
    ("headphones", (
        ("Audio Quality", ("audio",)), ("Noise Cancellation", ("audio",)),
        ("Exercise Use", ("physical",)), ("Commuting", ("battery", "connectivity")),
        ("Professional Use", ("audio", "connectivity")), ("Comfort for Long Sessions", ("physical", "battery")),
    )),
    ("tvs", (
        ("Movie Watching", ("display", "audio")), ("Sports Viewing", ("display",)),
        ("Gaming", ("display", "connectivity")), ("Bright Room Use", ("display",)),
        ("Small Space", ("physical",)), ("Large Room", ("display", "audio")),
    )),
)
DEFAULT_USE_CASES = (
    ("Everyday Use", ()), ("Professional Use", ("performance",)),
    ("Value for Money", ("value",)), ("Premium Experience", ("display", "audio", "physical")),
)

IMPORTANT_CATEGORIES: Pairs = (
    ("smartphones", (
        ("Performance", ("performance",)), ("Camera Quality", ("camera",)),
        ("Battery Life", ("battery",)), ("Display Quality", ("display",)),
        ("Build Quality", ("physical",)), ("Software Experience", ("general",)),
    )),
    ("laptops", (
        ("Performance", ("performance",)), ("Battery Life", ("battery",)),
        ("Display Quality", ("display",)), ("Keyboard & Trackpad", ("connectivity",)),
        ("Portability", ("physical",)), ("Value for Money", ("value",)),
    )),
    ("headphones", (
        ("Sound Quality", ("audio",)), ("Comfort", ("physical",)),
        ("Noise Cancellation", ("audio",)), ("Battery Life", ("battery",)),
        ("Build Quality", ("physical",)), ("Connectivity", ("connectivity",)),
    )),
    ("tvs", (
        ("Picture Quality", ("display",)), ("Smart Features", ("features", "connectivity")),
        ("Gaming Performance", ("display", "connectivity")), ("Sound Quality", ("audio",)),
        ("Design", ("physical",)), ("Value for Money", ("value",)),
    )),
)
DEFAULT_IMPORTANT_CATEGORIES = (
    ("Performance", ("performance",)), ("Quality", ("physical", "warranty")),
    ("Features", ("features", "connectivity")), ("Design", ("physical",)),
    ("Value for Money", ("value",)),
)

# ── User experience ───────────────────────────────────────────────────────────

# Aspect → review keywords that speak to it
UX_ASPECTS: Pairs = (
    ("Ease of Use", ("easy", "setup", "set up", "intuitive", "simple", "confusing")),
    ("Build Quality", ("build", "sturdy", "solid", "flimsy", "cheap", "material")),
    ("Performance", ("fast", "slow", "performance", "lag", "speed", "smooth")),
    ("Reliability", ("reliable", "stopped working", "broke", "died", "defect", "months")),
)

RECOMMENDATION_TYPES = (
    "Best Overall", "Best Value", "Best Budget Option",
    "Best Premium Option", "Best for Beginners", "Best for Professionals",
)
# Spec categories that decide "Best for Professionals"
PROFESSIONAL_CATEGORIES = ("performance", "storage", "display", "camera", "audio")

# Strongest spec category → who the product suits
PERSONAS: Pairs = (
    ("performance", "Professionals who need reliability and performance"),
    ("camera", "Creative professionals who need specialized features"),
    ("display", "Technology enthusiasts who value the latest features"),
    ("audio", "Creative professionals who need specialized features"),
    ("battery", "Casual users who prioritize ease of use"),
    ("physical", "Casual users who prioritize ease of use"),
    ("storage", "Professionals who need reliability and performance"),
)
VALUE_PERSONA = "Budget-conscious consumers looking for value"
DEFAULT_PERSONA = "Casual users who prioritize ease of use"

# Review keywords
FAILURE_KEYWORDS = (
    "stopped working", "broke", "broken", "defect", "died", "failed",
    "failure", "crash", "overheat", "dead", "returned",
)
SERVICE_KEYWORDS = ("customer service", "support", "warranty", "replacement", "refund")
CLAIM_KEYWORDS = (
    "battery", "waterproof", "water resistant", "noise cancel", "fast charging",
    "durable", "quiet", "lightweight", "bright", "fast",
)


@dataclass(frozen=True)
class EngineTables:
    spec_categories: Pairs = SPEC_CATEGORIES
    domain_keywords: Pairs = DOMAIN_KEYWORDS
    direction_keywords: Pairs = DIRECTION_KEYWORDS

    common_features: Pairs = COMMON_FEATURES
    default_common_features: tuple[str, ...] = DEFAULT_COMMON_FEATURES
    premium_features: Pairs = PREMIUM_FEATURES
    generic_premium_keywords: tuple[str, ...] = GENERIC_PREMIUM_KEYWORDS
    selectable_features: Pairs = SELECTABLE_FEATURES
    base_selectable_features: tuple[str, ...] = BASE_SELECTABLE_FEATURES

    spec_priorities: Pairs = SPEC_PRIORITIES
    default_spec_priorities: tuple[str, ...] = DEFAULT_SPEC_PRIORITIES
    spec_explanations: Pairs = SPEC_EXPLANATIONS
    generic_explanation: str = GENERIC_EXPLANATION

    price_value_metrics: Pairs = PRICE_VALUE_METRICS
    default_price_value_metrics: tuple[MetricRule, ...] = DEFAULT_PRICE_VALUE_METRICS
    cost_per_unit: Pairs = COST_PER_UNIT
    default_cost_per_unit: Pairs = DEFAULT_COST_PER_UNIT

    use_cases: Pairs = USE_CASES
    default_use_cases: Pairs = DEFAULT_USE_CASES
    important_categories: Pairs = IMPORTANT_CATEGORIES
    default_important_categories: Pairs = DEFAULT_IMPORTANT_CATEGORIES

    ux_aspects: Pairs = UX_ASPECTS
    recommendation_types: tuple[str, ...] = RECOMMENDATION_TYPES
    professional_categories: tuple[str, ...] = PROFESSIONAL_CATEGORIES
    personas: Pairs = PERSONAS
    value_persona: str = VALUE_PERSONA
    default_persona: str = DEFAULT_PERSONA

    failure_keywords: tuple[str, ...] = FAILURE_KEYWORDS
    service_keywords: tuple[str, ...] = SERVICE_KEYWORDS
    claim_keywords: tuple[str, ...] = CLAIM_KEYWORDS


DEFAULT_TABLES = EngineTables()
