# services/weight_policy.py
"""
Weight policy for the ranking engine.

Maps the buyer's `prioritize` preference to a set of per-criterion weights.
Priority sets replace individual base weights wholesale (no blending), so the
"budget" and "delivery" sets sum to 1.05 and "quality" to 0.95. Those sums are
kept as-is unless renormalisation is switched on.
"""
from typing import Dict, Optional

from contracts.models import ScoreBreakdown, ScoringWeights
import config

CRITERIA = ("price_score", "delivery_score", "specs_score", "preference_score", "rating_score")

# Default weights (must sum to 1.0)
BASE_WEIGHTS: Dict[str, float] = {
    "price_score": 0.30,       # price fit to budget
    "delivery_score": 0.25,    # delivery feasibility
    "specs_score": 0.25,       # technical specs quality
    "preference_score": 0.10,  # color/brand/retailer preferences
    "rating_score": 0.10,      # customer rating
}

PRIORITY_OVERRIDES: Dict[str, Dict[str, float]] = {
    "budget": {"price_score": 0.50, "specs_score": 0.20},
    "delivery": {"delivery_score": 0.45, "price_score": 0.25},
    "quality": {"specs_score": 0.40, "rating_score": 0.20, "price_score": 0.20},
}


def resolve_weights(prioritize: Optional[str] = None, renormalize: Optional[bool] = None) -> ScoringWeights:
    """
    Build the weight set for a ranking call.

    Args:
        prioritize: "budget", "delivery", "quality"; anything else uses base weights
        renormalize: scale the set to sum to 1.0 (defaults to config)

    Returns:
        A new, frozen ScoringWeights
    """
    if renormalize is None:
        renormalize = config.RENORMALIZE_PRIORITY_WEIGHTS

    weights = dict(BASE_WEIGHTS)
    weights.update(PRIORITY_OVERRIDES.get(prioritize or "", {}))

    if renormalize:
        total = sum(weights.values())
        weights = {key: value / total for key, value in weights.items()}

    return ScoringWeights(**weights)


def weighted_total(scores: ScoreBreakdown, weights: ScoringWeights) -> float:
    """Weighted sum of the five criterion scores."""
    return sum(getattr(scores, key) * getattr(weights, key) for key in CRITERIA)
