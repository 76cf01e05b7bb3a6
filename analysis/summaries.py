"""
summaries.py — the judgment sections of a comparison.

Price-value, user experience, use cases, category winners, recommendations,
confidence and the top-line summary. All of them read one Scorecard per
product instead of the raw data:

  wins              superior parity cells per spec category
  features_present  feature-matrix rows the product has
  rating, price     straight from the record

Scoring rules
─────────────
  score(categories)  sum of wins in those categories; the token "value"
                     adds value_score; no categories → total wins + features
  value_score        (total wins + features present) per $100 of price
  ranking            score desc → rating desc → price asc → input order
  metric rating      linear rank among computable values: best 5, worst 1,
                     all equal 3; None when the value cannot be computed
  significance       clamp(2 + round(winner score − runner-up score), 1, 5)
  relevance          by position in the domain list: 5, 5, 4, 4, 3, 3 …
  warranty quality   ≥36 months 5, ≥24 4, ≥12 3, >0 2, unknown 1
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Optional, Sequence

import config
from analysis.base import (
    AspectValue,
    CategoryWinner,
    ClaimContradiction,
    ConfidenceAssessment,
    CostPerUnit,
    FeatureMatrix,
    MetricValue,
    OwnershipCost,
    PersonalizedRecommendation,
    PriceValueAssessment,
    PriceValueMetric,
    SpecificationParity,
    UseCase,
    UseCaseOptimization,
    UserExperienceAspect,
    UserExperienceComparison,
    ValueLongevity,
    WarrantyInfo,
)
from classifier import lookup
from extractor import SpecMap
from normalizers import extract_number
from records.base import RawProductRecord
from superiority import spec_direction
from tables import DEFAULT_TABLES, EngineTables, MetricRule

logger = logging.getLogger(__name__)

VALUE = "value"

_WARRANTY_RE = re.compile(r"(\d+(?:\.\d+)?)\s*[- ]?\s*(years?|yrs?|months?|mos?)\b", re.IGNORECASE)


# ── Scorecard ─────────────────────────────────────────────────────────────────

@dataclass
class Scorecard:
    product_id: str
    name: str
    index: int
    price: Optional[float]
    rating: Optional[float]
    wins: dict[str, int]
    features_present: int

    @property
    def total_wins(self) -> int:
        return sum(self.wins.values())

    @property
    def value_score(self) -> float:
        if not self.price:
            return 0.0
        return (self.total_wins + self.features_present) / self.price * 100

    def score(self, categories: Sequence[str]) -> float:
        if not categories:
            return float(self.total_wins + self.features_present)
        total = 0.0
        for category in categories:
            total += self.value_score if category == VALUE else self.wins.get(category, 0)
        return total


def build_scorecards(
    records: Sequence[RawProductRecord],
    parity: SpecificationParity,
    matrix: FeatureMatrix,
) -> list[Scorecard]:
    cards = []
    for index, record in enumerate(records):
        wins: dict[str, int] = {}
        for block in parity.categories:
            count = sum(1 for row in block.specifications if row.values[record.id].is_superior)
            if count:
                wins[block.name] = count
        present = sum(1 for row in matrix.features if row.presence[record.id].present)
        cards.append(Scorecard(
            product_id=record.id, name=record.name, index=index,
            price=record.price, rating=record.rating,
            wins=wins, features_present=present,
        ))
    return cards


def rank(cards: Sequence[Scorecard], categories: Sequence[str] = ()) -> list[Scorecard]:
    return sorted(
        cards,
        key=lambda c: (
            -c.score(categories),
            -(c.rating or 0.0),
            c.price if c.price is not None else math.inf,
            c.index,
        ),
    )


def _clamp(value: float, low: int = 1, high: int = 5) -> int:
    return int(max(low, min(high, round(value))))


def linear_ratings(values: dict[str, Optional[float]], lower_is_better: bool = False) -> dict[str, Optional[int]]:
    """Rate computable values 1–5 by where they fall between the worst and the best."""
    known = [v for v in values.values() if v is not None]
    if not known:
        return {pid: None for pid in values}
    low, high = min(known), max(known)
    ratings: dict[str, Optional[int]] = {}
    for pid, value in values.items():
        if value is None:
            ratings[pid] = None
        elif high == low:
            ratings[pid] = 3
        else:
            position = (value - low) / (high - low)
            if lower_is_better:
                position = 1 - position
            ratings[pid] = _clamp(1 + 4 * position)
    return ratings


def spec_quantity(spec_map: SpecMap, keys: Sequence[str]) -> Optional[float]:
    """First number in the first non-general spec whose name contains one of `keys`."""
    for category, entries in spec_map.items():
        if category == "general":
            continue
        for name, value in entries.items():
            if any(key in name.lower() for key in keys):
                number = extract_number(value)
                if number is not None:
                    return number
    return None


def _review_rating(review: dict) -> Optional[float]:
    try:
        return float(review.get("rating"))
    except (TypeError, ValueError):
        return None


def _review_text(review: dict) -> str:
    return f"{review.get('title') or ''} {review.get('body') or ''}".lower()


def _review_headline(review: dict) -> str:
    title = str(review.get("title") or "").strip()
    if title:
        return title
    return str(review.get("body") or "").split(".")[0].strip()


# ── Price-value ───────────────────────────────────────────────────────────────

def _metric_quantity(rule: MetricRule, card: Scorecard, spec_map: SpecMap) -> Optional[float]:
    if rule.source == "spec":
        return spec_quantity(spec_map, rule.keys)
    if rule.source == "wins":
        if not rule.keys:
            return float(card.total_wins)
        return float(sum(card.wins.get(k, 0) for k in rule.keys))
    if rule.source == "features":
        return float(card.features_present)
    if rule.source == "rating":
        return card.rating
    logger.warning("Unknown price-value metric source %r for %s", rule.source, rule.name)
    return None


def _metric_value(rule: MetricRule, quantity: Optional[float], price: Optional[float]) -> Optional[float]:
    if quantity is None or not price:
        return None
    if rule.mode == "per_unit":
        return round(price / quantity, 2) if quantity else None
    return round(quantity / price * 100, 2)


def parse_warranty(spec_map: SpecMap) -> WarrantyInfo:
    entries = spec_map.get("warranty", {})
    coverage = next(iter(entries.values()), None)
    months: Optional[int] = None
    for value in entries.values():
        match = _WARRANTY_RE.search(value)
        if match:
            amount, unit = float(match.group(1)), match.group(2).lower()
            months = int(round(amount * 12)) if unit.startswith("y") else int(round(amount))
            break

    if months is None:
        quality = 1
    elif months >= 36:
        quality = 5
    elif months >= 24:
        quality = 4
    elif months >= 12:
        quality = 3
    else:
        quality = 2 if months > 0 else 1
    return WarrantyInfo(
        coverage=coverage or "No warranty information listed",
        duration_months=months,
        quality=quality,
    )


def value_longevity(rating: Optional[float], warranty: WarrantyInfo) -> ValueLongevity:
    """Mean of the customer rating (3 when unknown) and the warranty quality."""
    customer = rating if rating is not None else 3.0
    score = _clamp((customer + warranty.quality) / 2)
    if score >= 4:
        explanation = "Strong value retention: well rated by customers and backed by a solid warranty."
    elif score <= 2:
        explanation = "Weak value retention: low customer ratings or little warranty cover."
    else:
        explanation = "Average value retention over time."
    return ValueLongevity(rating=score, explanation=explanation)


def build_price_value(
    cards: Sequence[Scorecard],
    spec_maps: dict[str, SpecMap],
    domain: str,
    tables: EngineTables = DEFAULT_TABLES,
    accessory_ratio: float = config.ACCESSORY_COST_RATIO,
    subscription_ratio: float = config.SUBSCRIPTION_COST_RATIO,
) -> PriceValueAssessment:
    metrics = []
    for rule in lookup(tables.price_value_metrics, domain, tables.default_price_value_metrics):
        values = {
            c.product_id: _metric_value(rule, _metric_quantity(rule, c, spec_maps.get(c.product_id, {})), c.price)
            for c in cards
        }
        ratings = linear_ratings(values, lower_is_better=rule.mode == "per_unit")
        metrics.append(PriceValueMetric(
            name=rule.name,
            values={pid: MetricValue(value=values[pid], rating=ratings[pid]) for pid in values},
        ))

    cost_per_unit = []
    for unit_name, keys in lookup(tables.cost_per_unit, domain, tables.default_cost_per_unit):
        per_unit: dict[str, Optional[float]] = {}
        for c in cards:
            quantity = spec_quantity(spec_maps.get(c.product_id, {}), keys) if keys else float(c.features_present)
            per_unit[c.product_id] = round(c.price / quantity, 2) if c.price and quantity else None
        cost_per_unit.append(CostPerUnit(unit_name=unit_name, values=per_unit))

    ownership: dict[str, OwnershipCost] = {}
    longevity: dict[str, ValueLongevity] = {}
    warranty: dict[str, WarrantyInfo] = {}
    for c in cards:
        if c.price is None:
            ownership[c.product_id] = OwnershipCost(None, None, None, None)
        else:
            accessories = round(c.price * accessory_ratio, 2)
            subscriptions = round(c.price * subscription_ratio, 2)
            ownership[c.product_id] = OwnershipCost(
                base_price=c.price,
                accessories=accessories,
                subscriptions=subscriptions,
                total=round(c.price + accessories + subscriptions, 2),
            )
        warranty[c.product_id] = parse_warranty(spec_maps.get(c.product_id, {}))
        longevity[c.product_id] = value_longevity(c.rating, warranty[c.product_id])

    return PriceValueAssessment(
        metrics=tuple(metrics),
        cost_per_unit=tuple(cost_per_unit),
        total_ownership_cost=ownership,
        value_longevity=longevity,
        warranty=warranty,
    )


# ── User experience ───────────────────────────────────────────────────────────

def _aspect_value(record: RawProductRecord, keywords: Sequence[str], limit: int = 3) -> AspectValue:
    mentions = [r for r in record.top_reviews if any(k in _review_text(r) for k in keywords)]
    rated = [rating for rating in (_review_rating(r) for r in mentions) if rating is not None]

    if rated:
        satisfaction: Optional[int] = _clamp(sum(rated) / len(rated))
    elif record.rating is not None:
        satisfaction = _clamp(record.rating)
    else:
        satisfaction = None

    complaints = [_review_headline(r) for r in mentions if (_review_rating(r) or 3) <= 2]
    highlights = [_review_headline(r) for r in mentions if (_review_rating(r) or 3) >= 4]
    return AspectValue(
        satisfaction_level=satisfaction,
        common_complaints=tuple(h for h in complaints if h)[:limit],
        positive_highlights=tuple(h for h in highlights if h)[:limit],
    )


def reliability_issues(record: RawProductRecord, tables: EngineTables = DEFAULT_TABLES, limit: int = 3) -> tuple[str, ...]:
    issues: list[str] = []
    for review in record.top_reviews:
        rating = _review_rating(review)
        if rating is None or rating > 2:
            continue
        if any(k in _review_text(review) for k in tables.failure_keywords):
            headline = _review_headline(review)
            if headline and headline not in issues:
                issues.append(headline)
    return tuple(issues[:limit])


def customer_service_rating(record: RawProductRecord, tables: EngineTables = DEFAULT_TABLES) -> Optional[int]:
    rated = [
        _review_rating(r) for r in record.top_reviews
        if any(k in _review_text(r) for k in tables.service_keywords)
    ]
    rated = [r for r in rated if r is not None]
    return _clamp(sum(rated) / len(rated)) if rated else None


def build_user_experience(
    records: Sequence[RawProductRecord],
    tables: EngineTables = DEFAULT_TABLES,
) -> UserExperienceComparison:
    aspects = tuple(
        UserExperienceAspect(
            name=name,
            values={record.id: _aspect_value(record, keywords) for record in records},
        )
        for name, keywords in tables.ux_aspects
    )
    return UserExperienceComparison(
        aspects=aspects,
        reliability_issues={r.id: reliability_issues(r, tables) for r in records},
        customer_service_rating={r.id: customer_service_rating(r, tables) for r in records},
    )


# ── Use cases ─────────────────────────────────────────────────────────────────

def _use_case_reasoning(best: Scorecard, label: str, categories: Sequence[str]) -> str:
    if best.score(categories) <= 0:
        return (
            f"{best.name} is the pick for {label} on customer rating and price; "
            "the listed specifications do not separate the products."
        )
    if list(categories) == [VALUE]:
        return f"{best.name} performs best for {label}, offering the most winning specs and features per $100."
    if not categories:
        return f"{best.name} performs best for {label}, with the most winning specs and listed features overall."
    leads = ", ".join(c for c in categories if c != VALUE)
    return f"{best.name} performs best for {label}, leading on {leads} specifications."


def ideal_persona(card: Scorecard, cards: Sequence[Scorecard], tables: EngineTables = DEFAULT_TABLES) -> str:
    best_value = max(cards, key=lambda c: c.value_score)
    if card is best_value and card.value_score > 0 and len({c.value_score for c in cards}) > 1:
        return tables.value_persona
    if card.wins:
        order = [category for category, _ in tables.personas]
        strongest = max(
            card.wins,
            key=lambda c: (card.wins[c], -order.index(c) if c in order else -len(order)),
        )
        return lookup(tables.personas, strongest, tables.default_persona)
    return tables.default_persona


def deal_breakers(
    card: Scorecard,
    cards: Sequence[Scorecard],
    spec_maps: dict[str, SpecMap],
    important: Sequence[tuple[str, tuple[str, ...]]],
    limit: int = 5,
) -> tuple[str, ...]:
    watched: list[str] = []
    for _, categories in important:
        for category in categories:
            if category != VALUE and category not in watched:
                watched.append(category)

    own = spec_maps.get(card.product_id, {})
    breakers: list[str] = []
    for category in watched:
        for other in cards:
            if other is card:
                continue
            for name in spec_maps.get(other.product_id, {}).get(category, {}):
                line = f"No {name} listed"
                if name not in own.get(category, {}) and line not in breakers:
                    breakers.append(line)
    breakers = breakers[:limit]

    prices = [c.price for c in cards if c.price is not None]
    if card.price is not None and len(set(prices)) > 1 and card.price == max(prices):
        breakers.append("Highest price among the compared products")
    if card.rating is None:
        breakers.append("No customer rating available")
    return tuple(breakers)


def build_use_cases(
    cards: Sequence[Scorecard],
    spec_maps: dict[str, SpecMap],
    domain: str,
    tables: EngineTables = DEFAULT_TABLES,
) -> UseCaseOptimization:
    use_cases = []
    for label, categories in lookup(tables.use_cases, domain, tables.default_use_cases):
        ranked = rank(cards, categories)
        best = ranked[0]
        use_cases.append(UseCase(
            name=label,
            best_product_id=best.product_id,
            second_best_product_id=ranked[1].product_id if len(ranked) > 1 else None,
            reasoning=_use_case_reasoning(best, label, categories),
        ))

    important = lookup(tables.important_categories, domain, tables.default_important_categories)
    return UseCaseOptimization(
        use_cases=tuple(use_cases),
        ideal_personas={c.product_id: ideal_persona(c, cards, tables) for c in cards},
        deal_breakers={c.product_id: deal_breakers(c, cards, spec_maps, important) for c in cards},
    )


# ── Category winners ──────────────────────────────────────────────────────────

def build_category_winners(
    cards: Sequence[Scorecard],
    domain: str,
    tables: EngineTables = DEFAULT_TABLES,
) -> tuple[CategoryWinner, ...]:
    winners = []
    for position, (label, categories) in enumerate(
        lookup(tables.important_categories, domain, tables.default_important_categories)
    ):
        ranked = rank(cards, categories)
        winner, runner_up = ranked[0], ranked[1] if len(ranked) > 1 else None
        margin = winner.score(categories) - (runner_up.score(categories) if runner_up else 0.0)

        if winner.score(categories) > 0:
            reasoning = f"{winner.name} excels in {label} due to its superior specifications and features."
        else:
            reasoning = (
                f"{winner.name} edges ahead in {label} on customer rating and price; "
                "no listed specification decides it."
            )
        winners.append(CategoryWinner(
            category_name=label,
            winner_id=winner.product_id,
            reasoning=reasoning,
            advantage_significance=_clamp(2 + margin),
            relevance_to_most_users=max(1, 5 - position // 2),
        ))
    return tuple(winners)


# ── Recommendations ───────────────────────────────────────────────────────────

def _by_rating(cards: Sequence[Scorecard]) -> list[Scorecard]:
    return sorted(
        cards,
        key=lambda c: (-(c.rating or 0.0), c.price if c.price is not None else math.inf, c.index),
    )


def _pick(kind: str, cards: Sequence[Scorecard], tables: EngineTables) -> tuple[Scorecard, str]:
    priced = [c for c in cards if c.price is not None]

    if kind == "Best Value":
        best = rank(cards, (VALUE,))[0]
        return best, "the most winning specs and listed features per dollar"
    if kind == "Best Budget Option" and priced:
        best = min(priced, key=lambda c: (c.price, -(c.rating or 0.0), c.index))
        return best, "the lowest price of the compared products"
    if kind == "Best Premium Option" and priced:
        best = max(priced, key=lambda c: (c.price, c.rating or 0.0, -c.index))
        return best, "the top-of-range price and feature set"
    if kind == "Best for Beginners":
        return _by_rating(cards)[0], "the strongest customer rating"
    if kind == "Best for Professionals":
        best = rank(cards, tables.professional_categories)[0]
        return best, "the most superior performance, display and media specifications"
    return rank(cards)[0], "its balance of features, performance, and price"


def build_recommendations(
    cards: Sequence[Scorecard],
    tables: EngineTables = DEFAULT_TABLES,
) -> tuple[PersonalizedRecommendation, ...]:
    recommendations = []
    for kind in tables.recommendation_types:
        best, why = _pick(kind, cards, tables)
        recommendations.append(PersonalizedRecommendation(
            recommendation_type=kind,
            product_id=best.product_id,
            reasoning=f"{best.name} is the {kind} because of {why}.",
        ))
    return tuple(recommendations)


# ── Confidence ────────────────────────────────────────────────────────────────

def data_completeness(
    records: Sequence[RawProductRecord],
    spec_maps: dict[str, SpecMap],
    min_spec_count: int = config.MIN_SPEC_COUNT,
) -> int:
    """1–5 from how many of six basic fields each product fills in."""
    if not records:
        return 1
    filled = 0
    for record in records:
        spec_count = sum(len(e) for c, e in spec_maps.get(record.id, {}).items() if c != "general")
        filled += sum((
            bool(record.description),
            bool(record.features),
            record.price is not None,
            record.rating is not None,
            bool(record.top_reviews),
            spec_count >= min_spec_count,
        ))
    return _clamp(1 + 4 * filled / (6 * len(records)))


def incomparable_specs(parity: SpecificationParity, tables: EngineTables = DEFAULT_TABLES) -> tuple[str, ...]:
    """Rows only one product lists, or numeric rows some holder gives no number for."""
    found = []
    for block in parity.categories:
        if block.name == "general":
            continue
        for row in block.specifications:
            held = [cell.value for cell in row.values.values() if not cell.is_missing]
            unparsed = spec_direction(row.name, tables) is not None and any(
                extract_number(v) is None for v in held
            )
            if len(held) == 1 or unparsed:
                found.append(row.name)
    return tuple(found)


def claim_contradictions(
    records: Sequence[RawProductRecord],
    tables: EngineTables = DEFAULT_TABLES,
) -> tuple[ClaimContradiction, ...]:
    found = []
    for record in records:
        negative = [r for r in record.top_reviews if (_review_rating(r) or 5) <= 2]
        for keyword in tables.claim_keywords:
            claim = next((b for b in record.features if keyword in b.lower()), None)
            review = next((r for r in negative if keyword in _review_text(r)), None)
            if claim and review:
                found.append(ClaimContradiction(
                    product_id=record.id,
                    claim=claim,
                    contradiction=_review_headline(review) or f"A low-rated review disputes the {keyword} claim",
                ))
    return tuple(found)


def build_confidence(
    records: Sequence[RawProductRecord],
    cards: Sequence[Scorecard],
    spec_maps: dict[str, SpecMap],
    parity: SpecificationParity,
    domain: str,
    data_quality_warnings: Sequence[str] = (),
    tables: EngineTables = DEFAULT_TABLES,
) -> ConfidenceAssessment:
    incomparable = incomparable_specs(parity, tables)

    hands_on = []
    for label, categories in lookup(tables.important_categories, domain, tables.default_important_categories):
        spec_categories = [c for c in categories if c != VALUE]
        if spec_categories and all(c.score(spec_categories) == 0 for c in cards):
            hands_on.append(label)

    research = []
    for record in records:
        if not record.top_reviews:
            research.append(f"Customer reviews for {record.name}")
        if "warranty" not in spec_maps.get(record.id, {}):
            research.append(f"Warranty terms for {record.name}")
    if incomparable:
        research.append("Side-by-side testing of specifications only some products list")
    if data_quality_warnings:
        research.append("Fuller product listings for the products flagged with thin data")

    return ConfidenceAssessment(
        data_completeness_rating=data_completeness(records, spec_maps),
        incomparable_specifications=incomparable,
        claim_contradictions=claim_contradictions(records, tables),
        needs_hands_on_testing=tuple(hands_on),
        additional_research_recommended=tuple(research),
        data_quality_warnings=tuple(data_quality_warnings),
    )


# ── Top-line summary ──────────────────────────────────────────────────────────

def top_line_summary(records: Sequence[RawProductRecord], category: str) -> str:
    label = category.strip()
    label = label[:1].upper() + label[1:]
    names = ", ".join(r.name for r in records)
    return (
        f"This comparison analyzes {len(records)} {label} products: {names}. "
        "Each product has distinct strengths in different areas, with varying price points "
        "and feature sets. The analysis covers specifications, features, price-value assessment, "
        "and user experience to help determine which product best fits specific use cases and requirements."
    )
