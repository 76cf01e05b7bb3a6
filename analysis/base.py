"""
Result types for a product comparison.

Every type is a frozen dataclass. to_dict() produces the wire shape
renderers and stores expect: camelCase field names, nested results
converted, tuples as lists. Keys of per-product mappings are product ids
and are never rewritten.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Optional


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _wire(value: Any) -> Any:
    if is_dataclass(value):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: _wire(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_wire(item) for item in value]
    return value


class WireMixin:
    def to_dict(self) -> dict:
        return {_camel(f.name): _wire(getattr(self, f.name)) for f in fields(self)}


# ── Overview ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class OverviewItem(WireMixin):
    product_id: str
    product_name: str
    model: str
    current_price: Optional[float]
    currency: str
    rating: Optional[float]
    review_count: int
    key_features: tuple[str, ...]
    top_specs: dict[str, str]
    quick_verdict: str


@dataclass(frozen=True)
class ComparativeOverview(WireMixin):
    items: tuple[OverviewItem, ...]


# ── Specification parity ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class SpecValue(WireMixin):
    value: str
    is_superior: bool
    is_missing: bool
    is_marketing: bool = False


@dataclass(frozen=True)
class SpecificationItem(WireMixin):
    name: str
    explanation: str
    values: dict[str, SpecValue]     # product id → cell


@dataclass(frozen=True)
class SpecificationCategory(WireMixin):
    name: str
    specifications: tuple[SpecificationItem, ...]


@dataclass(frozen=True)
class SpecificationParity(WireMixin):
    categories: tuple[SpecificationCategory, ...]


# ── Feature matrix ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FeatureCell(WireMixin):
    present: bool
    quality_rating: Optional[int] = None     # only set when present


@dataclass(frozen=True)
class FeaturePresence(WireMixin):
    feature_name: str
    is_standard: bool
    is_premium: bool
    is_unique: bool
    presence: dict[str, FeatureCell]


@dataclass(frozen=True)
class FeatureMatrix(WireMixin):
    features: tuple[FeaturePresence, ...]


# ── Price-value ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MetricValue(WireMixin):
    value: Optional[float]
    rating: Optional[int]


@dataclass(frozen=True)
class PriceValueMetric(WireMixin):
    name: str
    values: dict[str, MetricValue]


@dataclass(frozen=True)
class CostPerUnit(WireMixin):
    unit_name: str
    values: dict[str, Optional[float]]


@dataclass(frozen=True)
class OwnershipCost(WireMixin):
    base_price: Optional[float]
    accessories: Optional[float]
    subscriptions: Optional[float]
    total: Optional[float]


@dataclass(frozen=True)
class ValueLongevity(WireMixin):
    rating: int
    explanation: str


@dataclass(frozen=True)
class WarrantyInfo(WireMixin):
    coverage: str
    duration_months: Optional[int]
    quality: int


@dataclass(frozen=True)
class PriceValueAssessment(WireMixin):
    metrics: tuple[PriceValueMetric, ...]
    cost_per_unit: tuple[CostPerUnit, ...]
    total_ownership_cost: dict[str, OwnershipCost]
    value_longevity: dict[str, ValueLongevity]
    warranty: dict[str, WarrantyInfo]


# ── User experience ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AspectValue(WireMixin):
    satisfaction_level: Optional[int]
    common_complaints: tuple[str, ...]
    positive_highlights: tuple[str, ...]


@dataclass(frozen=True)
class UserExperienceAspect(WireMixin):
    name: str
    values: dict[str, AspectValue]


@dataclass(frozen=True)
class UserExperienceComparison(WireMixin):
    aspects: tuple[UserExperienceAspect, ...]
    reliability_issues: dict[str, tuple[str, ...]]
    customer_service_rating: dict[str, Optional[int]]


# ── Use cases ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class UseCase(WireMixin):
    name: str
    best_product_id: str
    second_best_product_id: Optional[str]
    reasoning: str


@dataclass(frozen=True)
class UseCaseOptimization(WireMixin):
    use_cases: tuple[UseCase, ...]
    ideal_personas: dict[str, str]
    deal_breakers: dict[str, tuple[str, ...]]


# ── Winners, recommendations, confidence ──────────────────────────────────────

@dataclass(frozen=True)
class CategoryWinner(WireMixin):
    category_name: str
    winner_id: str
    reasoning: str
    advantage_significance: int
    relevance_to_most_users: int


@dataclass(frozen=True)
class PersonalizedRecommendation(WireMixin):
    recommendation_type: str
    product_id: str
    reasoning: str


@dataclass(frozen=True)
class ClaimContradiction(WireMixin):
    product_id: str
    claim: str
    contradiction: str


@dataclass(frozen=True)
class ConfidenceAssessment(WireMixin):
    data_completeness_rating: int
    incomparable_specifications: tuple[str, ...]
    claim_contradictions: tuple[ClaimContradiction, ...]
    needs_hands_on_testing: tuple[str, ...]
    additional_research_recommended: tuple[str, ...]
    data_quality_warnings: tuple[str, ...] = ()


# ── The whole comparison ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class ComparisonResult(WireMixin):
    product_ids: tuple[str, ...]
    category: str
    comparative_overview: ComparativeOverview
    specification_parity: SpecificationParity
    feature_matrix: FeatureMatrix
    price_value_assessment: PriceValueAssessment
    user_experience_comparison: UserExperienceComparison
    use_case_optimization: UseCaseOptimization
    top_line_summary: str
    category_winners: tuple[CategoryWinner, ...]
    personalized_recommendations: tuple[PersonalizedRecommendation, ...]
    confidence_assessment: ConfidenceAssessment
    created_at: str
    spec_maps: dict[str, dict[str, dict[str, str]]] = field(default_factory=dict)


def quick_comparison(result: ComparisonResult, missing: str = "N/A") -> dict:
    """
    Compact side-by-side table for a result:
      {"titles": [...], "rows": [{"name": "Price", "values": [...]}, ...]}
    """
    items = result.comparative_overview.items
    rows = [
        {
            "name": "Price",
            "values": [
                f"${item.current_price:,.2f}" if item.current_price is not None else missing
                for item in items
            ],
        },
        {
            "name": "Rating",
            "values": [f"{item.rating:g}/5" if item.rating is not None else missing for item in items],
        },
        {"name": "Verdict", "values": [item.quick_verdict for item in items]},
    ]
    for i in range(3):
        rows.append({
            "name": f"Feature {i + 1}",
            "values": [item.key_features[i] if len(item.key_features) > i else missing for item in items],
        })
    return {"titles": [item.product_name for item in items], "rows": rows}
