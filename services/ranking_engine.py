# services/ranking_engine.py
"""
Product Ranking Engine.

Scores every candidate product against the buyer's preferences and sorts
them by weighted score. Equal scores keep their input order.
"""
from typing import Iterable, List, Mapping, Union

from contracts.models import Preferences, Product, ScoreBreakdown, ScoredProduct
from infra.logging import log_event
from services.product_scorer import score_product
from services.weight_policy import resolve_weights, weighted_total

ProductLike = Union[Product, Mapping]
PreferencesLike = Union[Preferences, Mapping, None]


def to_product(product: ProductLike) -> Product:
    """Accept a Product or a plain dict record."""
    if isinstance(product, Product):
        return product
    return Product.model_validate(product)


def to_preferences(preferences: PreferencesLike) -> Preferences:
    """Accept Preferences, a plain dict, or None (no preferences)."""
    if preferences is None:
        return Preferences()
    if isinstance(preferences, Preferences):
        return preferences
    return Preferences.model_validate(preferences)


class RankingEngine:
    """
    Multi-criterion product ranking engine.
    Holds no per-call state; weights are resolved fresh on every call.
    """

    def rank_products(
        self,
        products: Iterable[ProductLike],
        preferences: PreferencesLike = None
    ) -> List[ScoredProduct]:
        """
        Rank products using weighted multi-criterion scoring.

        Args:
            products: Products (or product dicts) to rank
            preferences: Budget, delivery deadline, warmth, colors, brands, priorities

        Returns:
            ScoredProducts sorted by score (descending), ties in input order
        """
        prefs = to_preferences(preferences)
        weights = resolve_weights(prefs.prioritize)

        scored_products = [
            score_product(to_product(product), prefs, weights)
            for product in products
        ]

        # Stable sort: equal scores keep input order
        scored_products.sort(key=lambda p: p.score, reverse=True)

        log_event(
            "products_ranked",
            product_count=len(scored_products),
            prioritize=prefs.prioritize,
            weight_total=round(weights.total(), 4),
            top_score=round(scored_products[0].score, 4) if scored_products else None,
        )
        return scored_products

    def calculate_total_score(self, scores: ScoreBreakdown, preferences: PreferencesLike = None) -> float:
        """Weighted total for a breakdown under the preferences' weight policy."""
        prefs = to_preferences(preferences)
        return weighted_total(scores, resolve_weights(prefs.prioritize))


# Global singleton
_ranking_engine = None


def get_ranking_engine() -> RankingEngine:
    """Get or create global ranking engine."""
    global _ranking_engine
    if _ranking_engine is None:
        _ranking_engine = RankingEngine()
    return _ranking_engine


# Convenience function
def rank_products(products: Iterable[ProductLike], preferences: PreferencesLike = None) -> List[ScoredProduct]:
    """Quick function to rank products."""
    engine = get_ranking_engine()
    return engine.rank_products(products, preferences)
