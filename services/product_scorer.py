# services/product_scorer.py
"""
Per-criterion product scoring.

Scores a product against buyer preferences on five criteria, each in [0, 1]:
price fit, delivery, technical specs, style preferences and customer rating.
A criterion that can't be evaluated (no budget, no deadline, no specs, no
rating) gets the neutral score 0.5.
"""
import logging
import re
from typing import Optional, Union

from contracts.models import Preferences, Product, ScoreBreakdown, ScoredProduct, ScoringWeights
from services.weight_policy import resolve_weights, weighted_total

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 0.5
WARM_PREFERENCES = ("extra warm", "very warm")

# (minimum waterproof rating in mm, bonus), best tier first
WATERPROOF_TIERS = [(20000, 0.20), (15000, 0.15), (10000, 0.10)]
BASIC_WATERPROOF_BONUS = 0.05

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

SCORE_ANNOTATION_KEYS = ("score", "score_breakdown", "scoreBreakdown", "explanation")


def score_price_fit(price: float, budget: Optional[float]) -> float:
    """
    Score how well the price fits the budget.
    Best score: close to budget. Very cheap items score lower (possible low quality),
    over-budget items lose a point per 50% overspend.
    """
    if not budget:
        return NEUTRAL_SCORE

    if price > budget:
        over_percentage = (price - budget) / budget * 100
        return max(0.0, 1 - over_percentage / 50)  # 0 at 50%+ over budget

    percent_of_budget = price / budget * 100
    if percent_of_budget < 30:
        return 0.6
    elif percent_of_budget < 70:
        return 0.9
    return 1.0


def score_delivery(delivery_days: int, max_delivery_days: Optional[int]) -> float:
    """Score delivery time against the deadline. Missing the deadline scores 0."""
    if not max_delivery_days:
        return NEUTRAL_SCORE

    if delivery_days > max_delivery_days:
        return 0.0

    days_under_deadline = max_delivery_days - delivery_days
    return min(1.0, 0.6 + days_under_deadline * 0.1)


def parse_waterproof_rating(value: Union[int, float, str, None]) -> Optional[int]:
    """Leading integer of a waterproof rating ("20000mm" -> 20000), or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def score_specs(product: Product, preferences: Preferences) -> float:
    """Score technical specifications (waterproofing, warmth, base layer material)."""
    specs = product.specs
    if specs is None:
        return NEUTRAL_SCORE

    score = NEUTRAL_SCORE

    # Waterproof rating (jackets/pants), best matching tier only
    if specs.waterproof_rating:
        rating = parse_waterproof_rating(specs.waterproof_rating)
        if rating is None:
            logger.debug(f"Unparseable waterproof rating for {product.name}: {specs.waterproof_rating!r}")
        elif rating > 0:
            bonus = next((b for minimum, b in WATERPROOF_TIERS if rating >= minimum), BASIC_WATERPROOF_BONUS)
            score += bonus

    # Warmth/insulation
    if preferences.warmth in WARM_PREFERENCES:
        if specs.insulation and specs.insulation != "none":
            score += 0.15
        if specs.temperature_range and "-20" in specs.temperature_range:
            score += 0.10

    # Merino bonus for base layers
    if product.category == "base_layer" and specs.material:
        if "merino" in specs.material:
            score += 0.10

    return min(1.0, score)


def score_preferences(product: Product, preferences: Preferences) -> float:
    """
    Score color, brand and retailer preferences.
    Color and brand use case-insensitive substring matching.
    """
    score = NEUTRAL_SCORE

    if preferences.colors:
        product_color = product.color.lower()
        if any(color.lower() in product_color for color in preferences.colors):
            score += 0.2

    if preferences.brands:
        product_name = product.name.lower()
        if any(brand.lower() in product_name for brand in preferences.brands):
            score += 0.15

    if preferences.preferred_retailers and product.retailer in preferences.preferred_retailers:
        score += 0.15

    return min(1.0, score)


def score_rating(rating: Optional[float]) -> float:
    """Normalize a 5-star rating to 0-1."""
    if not rating:
        return NEUTRAL_SCORE
    return rating / 5


def calculate_scores(product: Product, preferences: Preferences) -> ScoreBreakdown:
    """Compute all five criterion scores for a product."""
    return ScoreBreakdown(
        price_score=score_price_fit(product.price, preferences.budget),
        delivery_score=score_delivery(product.delivery_days, preferences.delivery_days),
        specs_score=score_specs(product, preferences),
        preference_score=score_preferences(product, preferences),
        rating_score=score_rating(product.rating),
    )


def generate_explanation(scores: ScoreBreakdown, product: Product) -> str:
    """
    Build a short, human-readable reason list from the score breakdown.

    Returns:
        Comma-separated phrases, or "meets basic requirements" if none apply
    """
    reasons = []

    if scores.price_score >= 0.8:
        reasons.append("excellent value for price")
    elif scores.price_score >= 0.6:
        reasons.append("good price point")
    elif scores.price_score < 0.3:
        reasons.append("over budget")

    if scores.delivery_score == 1.0:
        reasons.append(f"fast delivery ({product.delivery_days} days)")
    elif scores.delivery_score == 0:
        reasons.append("delivery too slow")

    if scores.specs_score >= 0.8:
        reasons.append("excellent technical specs")
    elif scores.specs_score >= 0.6:
        reasons.append("good quality specs")

    if scores.rating_score >= 0.9:
        reasons.append("highly rated")

    return ", ".join(reasons) if reasons else "meets basic requirements"


def score_product(
    product: Product,
    preferences: Preferences,
    weights: Optional[ScoringWeights] = None
) -> ScoredProduct:
    """
    Score a single product: breakdown, weighted total and explanation.

    Args:
        product: Catalog product
        preferences: Buyer preferences
        weights: Weight set to apply (resolved from preferences.prioritize if omitted)

    Returns:
        ScoredProduct carrying every original product field
    """
    scores = calculate_scores(product, preferences)
    if weights is None:
        weights = resolve_weights(preferences.prioritize)

    # Previous annotations may arrive as fields or, from serialised records, as alias extras
    record = product.model_dump()
    for key in SCORE_ANNOTATION_KEYS:
        record.pop(key, None)

    return ScoredProduct.model_validate({
        **record,
        "score": weighted_total(scores, weights),
        "score_breakdown": scores,
        "explanation": generate_explanation(scores, product),
    })
