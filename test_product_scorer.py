"""
Tests for per-criterion product scoring and explanations.
"""
import pytest

from contracts.models import Preferences, Product, ProductSpecs, ScoreBreakdown
from services.product_scorer import (
    calculate_scores,
    generate_explanation,
    parse_waterproof_rating,
    score_delivery,
    score_preferences,
    score_price_fit,
    score_product,
    score_rating,
    score_specs,
)


def make_product(**overrides) -> Product:
    data = {
        "name": "Trail Shell Jacket",
        "price": 140.0,
        "delivery_days": 5,
        "category": "jacket",
        "color": "black",
    }
    data.update(overrides)
    return Product(**data)


# ---------------------------------------------------------------------------
# Price
# ---------------------------------------------------------------------------

def test_price_neutral_without_budget():
    assert score_price_fit(500, None) == 0.5
    assert score_price_fit(500, 0) == 0.5


def test_price_bands_under_budget():
    assert score_price_fit(20, 100) == 0.6    # suspiciously cheap
    assert score_price_fit(50, 100) == 0.9    # good value
    assert score_price_fit(140, 200) == 1.0   # 70% of budget
    assert score_price_fit(100, 100) == 1.0   # exactly on budget


def test_price_over_budget_penalty():
    assert score_price_fit(125, 100) == pytest.approx(0.5)
    assert score_price_fit(150, 100) == 0.0
    assert score_price_fit(400, 100) == 0.0


def test_price_near_budget_beats_very_cheap():
    near = score_price_fit(180, 200)
    cheap = score_price_fit(40, 200)
    assert near >= cheap


# ---------------------------------------------------------------------------
# Delivery
# ---------------------------------------------------------------------------

def test_delivery_neutral_without_deadline():
    assert score_delivery(30, None) == 0.5


def test_delivery_late_is_zero_regardless_of_overage():
    assert score_delivery(11, 10) == 0.0
    assert score_delivery(40, 10) == 0.0


def test_delivery_earlier_is_better_and_capped():
    assert score_delivery(10, 10) == pytest.approx(0.6)
    assert score_delivery(7, 10) == pytest.approx(0.9)
    assert score_delivery(2, 10) == 1.0
    assert score_delivery(0, 10) == 1.0


# ---------------------------------------------------------------------------
# Specs
# ---------------------------------------------------------------------------

def test_specs_neutral_without_specs():
    assert score_specs(make_product(), Preferences()) == 0.5


@pytest.mark.parametrize("rating,expected", [
    (25000, 0.70),
    ("20000mm", 0.70),
    (15000, 0.65),
    ("12000", 0.60),
    (500, 0.55),
])
def test_specs_waterproof_tiers(rating, expected):
    product = make_product(specs={"waterproof_rating": rating})
    assert score_specs(product, Preferences()) == pytest.approx(expected)


def test_specs_unparseable_or_zero_waterproof_gets_no_bonus():
    assert score_specs(make_product(specs={"waterproof_rating": "n/a"}), Preferences()) == 0.5
    assert score_specs(make_product(specs={"waterproof_rating": "0"}), Preferences()) == 0.5


def test_parse_waterproof_rating():
    assert parse_waterproof_rating("20000mm") == 20000
    assert parse_waterproof_rating(15000.0) == 15000
    assert parse_waterproof_rating("waterproof") is None
    assert parse_waterproof_rating(None) is None


def test_specs_warmth_bonuses_only_when_warmth_requested():
    specs = {"insulation": "synthetic", "temperature_range": "-20C to 0C"}
    product = make_product(specs=specs)

    assert score_specs(product, Preferences()) == 0.5
    assert score_specs(product, Preferences(warmth="very warm")) == pytest.approx(0.75)
    assert score_specs(product, Preferences(warmth="extra warm")) == pytest.approx(0.75)
    assert score_specs(product, Preferences(warmth="warm")) == 0.5


def test_specs_insulation_none_earns_nothing():
    product = make_product(specs={"insulation": "none"})
    assert score_specs(product, Preferences(warmth="very warm")) == 0.5


def test_specs_merino_bonus_only_for_base_layers():
    merino = {"material": "merino wool 200gsm"}
    assert score_specs(make_product(category="base_layer", specs=merino), Preferences()) == pytest.approx(0.6)
    assert score_specs(make_product(category="jacket", specs=merino), Preferences()) == 0.5


def test_specs_merino_match_is_case_sensitive():
    capitalised = {"material": "Merino wool"}
    assert score_specs(make_product(category="base_layer", specs=capitalised), Preferences()) == 0.5


def test_specs_capped_at_one():
    product = make_product(
        category="base_layer",
        specs={
            "waterproof_rating": 30000,
            "insulation": "down",
            "temperature_range": "-20C",
            "material": "merino",
        },
    )
    assert score_specs(product, Preferences(warmth="extra warm")) == 1.0


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------

def test_preferences_neutral_without_matches():
    assert score_preferences(make_product(), Preferences()) == 0.5
    assert score_preferences(make_product(), Preferences(colors=["red"], brands=["Burton"])) == 0.5


def test_preferences_substring_matches_stack():
    product = make_product(name="Patagonia Nano Puff", color="Black/Grey", retailer="REI")
    prefs = Preferences(colors=["black"], brands=["patagonia"], preferred_retailers=["REI"])
    assert score_preferences(product, prefs) == pytest.approx(1.0)


def test_preferences_color_match_is_case_insensitive_containment():
    product = make_product(color="Midnight NAVY")
    assert score_preferences(product, Preferences(colors=["navy"])) == pytest.approx(0.7)
    # product color must contain the preference, not the other way round
    assert score_preferences(make_product(color="navy"), Preferences(colors=["midnight navy"])) == 0.5


def test_preferences_retailer_must_be_listed():
    product = make_product(retailer="Evo")
    assert score_preferences(product, Preferences(preferred_retailers=["REI"])) == 0.5
    assert score_preferences(product, Preferences(preferred_retailers=["REI", "Evo"])) == pytest.approx(0.65)


# ---------------------------------------------------------------------------
# Rating
# ---------------------------------------------------------------------------

def test_rating():
    assert score_rating(None) == 0.5
    assert score_rating(0) == 0.5
    assert score_rating(4.5) == pytest.approx(0.9)
    assert score_rating(5) == 1.0


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------

def breakdown(price=0.5, delivery=0.5, specs=0.5, preference=0.5, rating=0.5) -> ScoreBreakdown:
    return ScoreBreakdown(
        price_score=price,
        delivery_score=delivery,
        specs_score=specs,
        preference_score=preference,
        rating_score=rating,
    )


def test_explanation_fallback():
    assert generate_explanation(breakdown(), make_product()) == "meets basic requirements"


def test_explanation_positive_phrases_in_order():
    text = generate_explanation(
        breakdown(price=1.0, delivery=1.0, specs=0.85, rating=0.9),
        make_product(delivery_days=2),
    )
    assert text == "excellent value for price, fast delivery (2 days), excellent technical specs, highly rated"


def test_explanation_mid_band_phrases():
    text = generate_explanation(breakdown(price=0.6, specs=0.6), make_product())
    assert text == "good price point, good quality specs"


def test_explanation_negative_phrases():
    text = generate_explanation(breakdown(price=0.0, delivery=0.0), make_product())
    assert text == "over budget, delivery too slow"


def test_explanation_no_price_phrase_between_bands():
    assert generate_explanation(breakdown(price=0.45), make_product()) == "meets basic requirements"


# ---------------------------------------------------------------------------
# Whole product
# ---------------------------------------------------------------------------

def test_score_product_reference_scenario():
    scored = score_product(make_product(price=140), Preferences(budget=200))

    assert scored.score_breakdown.price_score == 1.0
    assert scored.score_breakdown.delivery_score == 0.5
    assert scored.score_breakdown.specs_score == 0.5
    assert scored.score_breakdown.preference_score == 0.5
    assert scored.score_breakdown.rating_score == 0.5
    assert scored.score == pytest.approx(0.65)
    assert scored.explanation == "excellent value for price"


def test_score_product_missed_deadline():
    scored = score_product(make_product(delivery_days=11), Preferences(delivery_days=10))
    assert scored.score_breakdown.delivery_score == 0
    assert "delivery too slow" in scored.explanation


def test_score_product_keeps_extra_fields():
    product = Product(**{
        "id": "gear_0001",
        "url": "https://example.com/jacket",
        "name": "Shell",
        "price": 100,
        "delivery_days": 3,
        "category": "jacket",
    })
    scored = score_product(product, Preferences())
    assert scored.id == "gear_0001"
    assert scored.url == "https://example.com/jacket"


def test_rescoring_replaces_previous_annotations():
    first = score_product(make_product(price=140), Preferences(budget=200))
    again = score_product(first, Preferences(budget=90))  # >50% over budget
    assert again.score_breakdown.price_score == 0.0
    assert again.score < first.score


def test_breakdown_serialises_with_camel_case_names():
    dumped = calculate_scores(make_product(), Preferences()).model_dump(by_alias=True)
    assert set(dumped) == {"priceScore", "deliveryScore", "specsScore", "preferenceScore", "ratingScore"}
