"""
Tests for analysis/summaries.py — scorecards and the judgment sections.

Covers:
  - Scorecard.score() / value_score and rank() tie-breaking
  - linear_ratings(): best 5, worst 1, all equal 3, None passthrough
  - parse_warranty(): years / months, quality bands, unknown
  - price-value: per-$100 and per-unit metrics, ownership cost
  - UX: aspect satisfaction, complaints / highlights, reliability, service rating,
    non-string review titles
  - use cases, personas, deal breakers
  - category winners: significance and relevance
  - recommendations: budget / premium / beginners
  - confidence: incomparable specs, claim contradictions, hands-on testing
  - top-line summary template
"""
from __future__ import annotations

from analysis.summaries import (
    Scorecard,
    build_category_winners,
    build_price_value,
    build_recommendations,
    build_use_cases,
    build_user_experience,
    claim_contradictions,
    customer_service_rating,
    data_completeness,
    deal_breakers,
    ideal_persona,
    incomparable_specs,
    linear_ratings,
    parse_warranty,
    rank,
    reliability_issues,
    top_line_summary,
)
from analysis.overview import build_parity
from records.base import RawProductRecord
from tables import DEFAULT_TABLES


def make_card(**kwargs) -> Scorecard:
    """Create a Scorecard with sensible defaults — override via kwargs."""
    defaults = dict(
        product_id="a", name="Alpha", index=0,
        price=100.0, rating=4.0, wins={}, features_present=0,
    )
    defaults.update(kwargs)
    return Scorecard(**defaults)


def make_record(**kwargs) -> RawProductRecord:
    """Create a RawProductRecord with sensible defaults — override via kwargs."""
    defaults = dict(id="a", name="Alpha")
    defaults.update(kwargs)
    return RawProductRecord(**defaults)


# ── Scorecard / ranking ───────────────────────────────────────────────────────

class TestScorecard:
    def test_score_sums_category_wins(self):
        card = make_card(wins={"display": 2, "camera": 1, "audio": 4})
        assert card.score(("display", "camera")) == 3

    def test_empty_categories_score_everything(self):
        card = make_card(wins={"display": 2}, features_present=5)
        assert card.score(()) == 7

    def test_value_score_per_100(self):
        card = make_card(price=200.0, wins={"display": 2}, features_present=2)
        assert card.value_score == 2.0
        assert card.score(("value",)) == 2.0

    def test_value_score_without_price(self):
        assert make_card(price=None, wins={"display": 3}).value_score == 0.0


class TestRank:
    def test_score_first(self):
        a = make_card(product_id="a", wins={"camera": 1})
        b = make_card(product_id="b", index=1, wins={"camera": 2})
        assert [c.product_id for c in rank([a, b], ("camera",))] == ["b", "a"]

    def test_ties_broken_by_rating_then_price_then_order(self):
        a = make_card(product_id="a", index=0, rating=4.0, price=300.0)
        b = make_card(product_id="b", index=1, rating=4.5, price=300.0)
        c = make_card(product_id="c", index=2, rating=4.5, price=200.0)
        d = make_card(product_id="d", index=3, rating=4.5, price=200.0)
        assert [x.product_id for x in rank([a, b, c, d], ("camera",))] == ["c", "d", "b", "a"]


class TestLinearRatings:
    def test_best_and_worst(self):
        assert linear_ratings({"a": 10.0, "b": 5.0, "c": 0.0}) == {"a": 5, "b": 3, "c": 1}

    def test_lower_is_better(self):
        assert linear_ratings({"a": 10.0, "b": 0.0}, lower_is_better=True) == {"a": 1, "b": 5}

    def test_all_equal(self):
        assert linear_ratings({"a": 1.0, "b": 1.0}) == {"a": 3, "b": 3}

    def test_none_kept(self):
        assert linear_ratings({"a": None, "b": 2.0}) == {"a": None, "b": 3}
        assert linear_ratings({"a": None}) == {"a": None}


# ── Price-value ───────────────────────────────────────────────────────────────

class TestWarranty:
    def test_years(self):
        info = parse_warranty({"warranty": {"Warranty": "2 year limited warranty"}})
        assert info.duration_months == 24
        assert info.quality == 4
        assert info.coverage == "2 year limited warranty"

    def test_months(self):
        info = parse_warranty({"warranty": {"Warranty": "90 days parts, 6 months labor"}})
        assert info.duration_months == 6
        assert info.quality == 2

    def test_long_warranty(self):
        assert parse_warranty({"warranty": {"Warranty": "3-year"}}).quality == 5

    def test_unknown(self):
        info = parse_warranty({})
        assert info.duration_months is None
        assert info.quality == 1
        assert info.coverage == "No warranty information listed"


class TestPriceValue:
    def _cards(self):
        return [
            make_card(product_id="a", price=1000.0, wins={"performance": 2}, features_present=4),
            make_card(product_id="b", index=1, price=500.0, wins={}, features_present=3),
        ]

    def _spec_maps(self):
        return {
            "a": {"storage": {"Storage": "1024 GB"}},
            "b": {"storage": {"Storage": "128 GB"}},
        }

    def test_domain_metrics(self):
        assessment = build_price_value(self._cards(), self._spec_maps(), "smartphones")
        names = [m.name for m in assessment.metrics]
        assert names[0] == "Price to Performance Ratio"
        perf = assessment.metrics[0].values
        assert perf["a"].value == 0.2
        assert perf["a"].rating == 5
        assert perf["b"].value == 0.0
        assert perf["b"].rating == 1

    def test_per_unit_metric_lower_is_better(self):
        assessment = build_price_value(self._cards(), self._spec_maps(), "smartphones")
        storage = next(m for m in assessment.metrics if m.name == "Price per GB Storage").values
        assert storage["a"].value == round(1000 / 1024, 2)
        assert storage["b"].value == round(500 / 128, 2)
        assert storage["a"].rating == 5

    def test_uncomputable_metric_is_none(self):
        assessment = build_price_value(self._cards(), self._spec_maps(), "smartphones")
        battery = next(m for m in assessment.metrics if m.name == "Battery Life per Dollar").values
        assert battery["a"].value is None and battery["a"].rating is None

    def test_default_cost_per_feature(self):
        assessment = build_price_value(self._cards(), self._spec_maps(), "blenders")
        assert assessment.cost_per_unit[0].unit_name == "Feature"
        assert assessment.cost_per_unit[0].values == {"a": 250.0, "b": round(500 / 3, 2)}

    def test_ownership_cost(self):
        assessment = build_price_value(self._cards(), self._spec_maps(), "smartphones",
                                       accessory_ratio=0.2, subscription_ratio=0.1)
        cost = assessment.total_ownership_cost["b"]
        assert (cost.base_price, cost.accessories, cost.subscriptions, cost.total) == (500.0, 100.0, 50.0, 650.0)

    def test_ownership_cost_without_price(self):
        cards = [make_card(price=None), make_card(product_id="b", index=1)]
        assessment = build_price_value(cards, {}, "smartphones")
        assert assessment.total_ownership_cost["a"].total is None


# ── User experience ───────────────────────────────────────────────────────────

REVIEWS = [
    {"title": "Fast and smooth", "body": "Setup was easy.", "rating": 5},
    {"title": "Stopped working", "body": "It died after a month.", "rating": 1},
    {"title": "Support was helpful", "body": "Customer service sent a replacement.", "rating": 4},
]


class TestUserExperience:
    def test_aspect_from_matching_reviews(self):
        record = make_record(rating=3.0, top_reviews=REVIEWS)
        ux = build_user_experience([record, make_record(id="b")])
        performance = next(a for a in ux.aspects if a.name == "Performance").values["a"]
        assert performance.satisfaction_level == 5
        assert performance.positive_highlights == ("Fast and smooth",)
        assert performance.common_complaints == ()

    def test_aspect_falls_back_to_rating(self):
        record = make_record(rating=3.6)
        ux = build_user_experience([record])
        assert ux.aspects[0].values["a"].satisfaction_level == 4

    def test_aspect_unknown_without_data(self):
        ux = build_user_experience([make_record()])
        assert ux.aspects[0].values["a"].satisfaction_level is None

    def test_reliability_issues(self):
        assert reliability_issues(make_record(top_reviews=REVIEWS)) == ("Stopped working",)

    def test_non_string_title(self):
        record = make_record(top_reviews=[{"title": 404, "body": "Broke fast", "rating": 1}])
        assert reliability_issues(record) == ("404",)

    def test_customer_service_rating(self):
        assert customer_service_rating(make_record(top_reviews=REVIEWS)) == 4
        assert customer_service_rating(make_record()) is None


# ── Use cases ─────────────────────────────────────────────────────────────────

class TestUseCases:
    def test_best_and_second_best(self):
        a = make_card(product_id="a", wins={"camera": 2})
        b = make_card(product_id="b", index=1, wins={"performance": 1})
        result = build_use_cases([a, b], {}, "smartphones")
        photography = next(u for u in result.use_cases if u.name == "Photography")
        assert photography.best_product_id == "a"
        assert photography.second_best_product_id == "b"
        assert "camera" in photography.reasoning

    def test_persona_from_strongest_category(self):
        a = make_card(product_id="a", price=None, wins={"camera": 3, "display": 1})
        b = make_card(product_id="b", index=1, price=None)
        assert ideal_persona(a, [a, b]) == "Creative professionals who need specialized features"
        assert ideal_persona(b, [a, b]) == DEFAULT_TABLES.default_persona

    def test_value_persona(self):
        a = make_card(product_id="a", price=100.0, features_present=5)
        b = make_card(product_id="b", index=1, price=900.0, features_present=5)
        assert ideal_persona(a, [a, b]) == DEFAULT_TABLES.value_persona

    def test_deal_breakers(self):
        a = make_card(product_id="a", price=900.0)
        b = make_card(product_id="b", index=1, price=300.0, rating=None)
        spec_maps = {"a": {"camera": {"Main Camera": "50 MP"}}, "b": {}}
        important = (("Camera Quality", ("camera",)),)
        assert deal_breakers(a, [a, b], spec_maps, important) == ("Highest price among the compared products",)
        assert deal_breakers(b, [a, b], spec_maps, important) == (
            "No Main Camera listed", "No customer rating available",
        )


# ── Winners / recommendations ─────────────────────────────────────────────────

class TestCategoryWinners:
    def test_winner_significance_relevance(self):
        a = make_card(product_id="a", wins={"performance": 2})
        b = make_card(product_id="b", index=1)
        winners = build_category_winners([a, b], "smartphones")
        assert winners[0].category_name == "Performance"
        assert winners[0].winner_id == "a"
        assert winners[0].advantage_significance == 4
        assert [w.relevance_to_most_users for w in winners] == [5, 5, 4, 4, 3, 3]

    def test_no_decisive_spec(self):
        a = make_card(product_id="a", rating=4.0)
        b = make_card(product_id="b", index=1, rating=4.8)
        winner = build_category_winners([a, b], "smartphones")[1]
        assert winner.winner_id == "b"
        assert winner.advantage_significance == 2
        assert "no listed specification" in winner.reasoning


class TestRecommendations:
    def test_types_and_picks(self):
        a = make_card(product_id="a", price=1200.0, rating=4.2)
        b = make_card(product_id="b", index=1, price=300.0, rating=4.7)
        recs = {r.recommendation_type: r for r in build_recommendations([a, b])}
        assert list(recs) == list(DEFAULT_TABLES.recommendation_types)
        assert recs["Best Budget Option"].product_id == "b"
        assert recs["Best Premium Option"].product_id == "a"
        assert recs["Best for Beginners"].product_id == "b"
        assert recs["Best Budget Option"].reasoning.startswith("Alpha is the Best Budget Option")


# ── Confidence ────────────────────────────────────────────────────────────────

class TestConfidence:
    def test_incomparable_specs(self):
        spec_maps = {
            "a": {"display": {"Screen Size": "Large", "Panel": "OLED"}},
            "b": {"display": {"Screen Size": "6.1 in"}},
        }
        parity = build_parity(["a", "b"], spec_maps)
        assert incomparable_specs(parity) == ("Screen Size", "Panel")

    def test_claim_contradiction(self):
        record = make_record(
            features=["All-day battery life"],
            top_reviews=[{"title": "Battery drains by noon", "rating": 2}],
        )
        found = claim_contradictions([record])
        assert len(found) == 1
        assert found[0].claim == "All-day battery life"
        assert found[0].contradiction == "Battery drains by noon"

    def test_completeness(self):
        full = make_record(
            description="d", features=["f"], price=1.0, rating=4.0, top_reviews=[{"rating": 4}],
        )
        spec_maps = {"a": {"display": {"x": "1", "y": "2", "z": "3"}}}
        assert data_completeness([full], spec_maps) == 5
        assert data_completeness([make_record()], {}) == 1


def test_top_line_summary():
    records = [make_record(), make_record(id="b", name="Beta")]
    summary = top_line_summary(records, "smartphones")
    assert summary.startswith("This comparison analyzes 2 Smartphones products: Alpha, Beta.")
