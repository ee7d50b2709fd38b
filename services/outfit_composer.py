# services/outfit_composer.py
"""
Outfit Selection for the gear ranking engine.

Assembles an outfit of at most one product per required category from a
ranked product list, without exceeding the buyer's total budget.

Selection is pluggable:
- greedy (default): one pass in category order, taking the best-ranked item that
  still fits the remaining budget. Fast, but an early expensive pick can leave a
  later category unfilled.
- backtracking: branch-and-bound over the top-k items of every category, keeping
  the outfit that fills the most categories, then has the highest summed score,
  then costs least. Falls back to greedy above OUTFIT_SEARCH_MAX_CATEGORIES.
"""
import math
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Mapping, Optional, Union

from contracts.models import OutfitResult, ScoredProduct
from infra.logging import log_event, log_error
from services.ranking_engine import PreferencesLike, to_preferences
import config

# ============================================================================
# Helpers
# ============================================================================

def group_by_category(
    ranked_products: Iterable[ScoredProduct],
    categories: List[str]
) -> Dict[str, List[ScoredProduct]]:
    """
    Partition ranked products by required category, keeping rank order.

    Args:
        ranked_products: Products sorted by score (descending)
        categories: Required categories

    Returns:
        Mapping of category -> products in that category
    """
    ranked_products = list(ranked_products)
    return {
        category: [p for p in ranked_products if p.category == category]
        for category in categories
    }


def _build_result(
    items: List[ScoredProduct],
    categories: List[str],
    budget: float,
    strategy: str
) -> OutfitResult:
    total_cost = sum(item.price for item in items)
    filled = [item.category for item in items]
    return OutfitResult(
        items=items,
        total_cost=total_cost,
        within_budget=total_cost <= budget,
        categories=filled,
        missing_categories=[c for c in categories if c not in filled],
        strategy=strategy,
    )


# ============================================================================
# Strategies
# ============================================================================

class OutfitStrategy(ABC):
    """Picks at most one item per category under a total budget."""

    name = "base"

    @abstractmethod
    def select(
        self,
        by_category: Dict[str, List[ScoredProduct]],
        categories: List[str],
        budget: float
    ) -> OutfitResult:
        """
        Args:
            by_category: Category -> products sorted by score (descending)
            categories: Required categories, in priority order
            budget: Total budget (math.inf when unbounded)
        """


class GreedyOutfitStrategy(OutfitStrategy):
    """Best affordable item per category, in category order. No backtracking."""

    name = "greedy"

    def select(self, by_category, categories, budget):
        outfit = []
        total_cost = 0.0

        for category in categories:
            items = by_category.get(category)
            if not items:
                continue

            remaining_budget = budget - total_cost
            affordable_items = [item for item in items if item.price <= remaining_budget]

            if affordable_items:
                best_item = affordable_items[0]  # Already sorted by score
                outfit.append(best_item)
                total_cost += best_item.price

        return _build_result(outfit, categories, budget, self.name)


class BacktrackingOutfitStrategy(OutfitStrategy):
    """
    Branch-and-bound search over the top-k items of each category (each category
    may also be skipped). Ranks outfits by categories filled, then total score,
    then lowest cost. Branches whose optimistic bound can't beat the best outfit
    found so far are cut. Requests with more than `max_categories` categories
    fall back to the greedy strategy.
    """

    name = "backtracking"

    def __init__(self, top_k: Optional[int] = None, max_categories: Optional[int] = None):
        self.top_k = top_k or config.OUTFIT_SEARCH_TOP_K
        self.max_categories = max_categories or config.OUTFIT_SEARCH_MAX_CATEGORIES

    def select(self, by_category, categories, budget):
        if len(categories) > self.max_categories:
            log_event(
                "outfit_search_fallback",
                categories=len(categories),
                max_categories=self.max_categories,
            )
            return GreedyOutfitStrategy().select(by_category, categories, budget)

        candidates = [by_category.get(category, [])[:self.top_k] for category in categories]
        best_items: List[ScoredProduct] = []
        best_key = (0, 0.0, 0.0)

        def bound(index: int, remaining: float, count: int, score_sum: float, cost_sum: float):
            # Best score and cheapest price per remaining category, ignoring their combined cost
            for items in candidates[index:]:
                affordable = [item for item in items if item.price <= remaining]
                if affordable:
                    count += 1
                    score_sum += max(item.score for item in affordable)
                    cost_sum += min(item.price for item in affordable)
            return (count, score_sum, -cost_sum)

        def search(index: int, remaining: float, chosen: List[ScoredProduct], score_sum: float, cost_sum: float):
            nonlocal best_items, best_key

            if bound(index, remaining, len(chosen), score_sum, cost_sum) <= best_key:
                return

            if index == len(candidates):
                best_key, best_items = (len(chosen), score_sum, -cost_sum), list(chosen)
                return

            for item in candidates[index]:
                if item.price <= remaining:
                    chosen.append(item)
                    search(index + 1, remaining - item.price, chosen, score_sum + item.score, cost_sum + item.price)
                    chosen.pop()

            # Leave this category unfilled
            search(index + 1, remaining, chosen, score_sum, cost_sum)

        search(0, budget, [], 0.0, 0.0)
        return _build_result(best_items, categories, budget, self.name)


STRATEGIES = {
    GreedyOutfitStrategy.name: GreedyOutfitStrategy,
    BacktrackingOutfitStrategy.name: BacktrackingOutfitStrategy,
}


def get_outfit_strategy(name: str) -> OutfitStrategy:
    """
    Look up a selection strategy by name ("greedy" or "backtracking").

    Raises:
        ValueError: if the name is not registered
    """
    strategy_cls = STRATEGIES.get(name.lower())
    if strategy_cls is None:
        log_error(f"Unknown outfit strategy '{name}'", available=sorted(STRATEGIES))
        raise ValueError(f"Unknown outfit strategy '{name}'. Available: {', '.join(sorted(STRATEGIES))}")
    return strategy_cls()


# ============================================================================
# Entry point
# ============================================================================

def find_best_outfit(
    ranked_products: Iterable[Union[ScoredProduct, Mapping]],
    preferences: PreferencesLike = None,
    strategy: Union[OutfitStrategy, str, None] = None
) -> OutfitResult:
    """
    Find the best complete outfit within budget.

    Args:
        ranked_products: Output of rank_products (sorted by score, descending)
        preferences: Uses items_needed (default from config) and budget (default unbounded)
        strategy: Strategy instance or name (default from config)

    Returns:
        OutfitResult with selected items, total cost and missing categories
    """
    prefs = to_preferences(preferences)

    items_needed = prefs.items_needed if prefs.items_needed is not None else config.DEFAULT_ITEMS_NEEDED
    categories = list(dict.fromkeys(items_needed))  # one slot per category
    budget = prefs.budget or math.inf

    if strategy is None:
        strategy = get_outfit_strategy(config.OUTFIT_STRATEGY)
    elif isinstance(strategy, str):
        strategy = get_outfit_strategy(strategy)

    ranked = [
        p if isinstance(p, ScoredProduct) else ScoredProduct.model_validate(p)
        for p in ranked_products
    ]
    result = strategy.select(group_by_category(ranked, categories), categories, budget)

    log_event(
        "outfit_selected",
        strategy=result.strategy,
        filled=result.categories,
        missing=result.missing_categories,
        total_cost=result.total_cost,
        within_budget=result.within_budget,
    )
    return result


def format_outfit_summary(result: OutfitResult) -> str:
    """
    Format an outfit as a readable summary.

    Args:
        result: OutfitResult from find_best_outfit

    Returns:
        Formatted string summary
    """
    lines = []
    for item in result.items:
        label = item.category.replace("_", " ").capitalize()
        lines.append(f"  {label}: {item.name} (${item.price:.2f}, score {item.score:.2f})")

    budget_note = "within budget" if result.within_budget else "OVER BUDGET"
    lines.append(f"  Total: ${result.total_cost:.2f} ({budget_note})")

    if result.missing_categories:
        lines.append(f"  Missing: {', '.join(result.missing_categories)}")

    return "\n".join(lines)
