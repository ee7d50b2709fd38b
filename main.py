# main.py
"""
Main orchestrator for the gear ranking engine.
Coordinates the two-step pipeline:
1. Rank products against buyer preferences
2. Assemble the best outfit within budget
"""
import json

from contracts.models import OutfitResult
from services.ranking_engine import rank_products, to_preferences
from services.outfit_composer import find_best_outfit, format_outfit_summary


def run_session(user_input: dict) -> dict:
    """
    Main entry point for a shopping session.

    Args:
        user_input: Raw session input containing:
            - products (list of product records)
            - preferences (budget, delivery_days, warmth, colors, brands,
              preferred_retailers, prioritize, items_needed)
            - strategy (optional outfit selection strategy name)

    Returns:
        JSON-ready dict with ranked products and the selected outfit
    """
    preferences = to_preferences(user_input.get("preferences"))

    ranked = rank_products(user_input.get("products", []), preferences)
    outfit = find_best_outfit(ranked, preferences, strategy=user_input.get("strategy"))

    return {
        "ranked": [p.model_dump(by_alias=True) for p in ranked],
        "outfit": outfit.model_dump(by_alias=True),
    }


if __name__ == "__main__":
    # Demo payload: ski trip shopping list
    user_input = {
        "preferences": {
            "budget": 300,
            "delivery_days": 7,
            "warmth": "very warm",
            "colors": ["black", "navy"],
            "brands": ["Patagonia"],
            "preferred_retailers": ["REI"],
            "items_needed": ["jacket", "pants", "base_layer"],
        },
        "products": [
            {
                "name": "Patagonia Insulated Powder Bowl Jacket",
                "price": 249.0,
                "delivery_days": 3,
                "category": "jacket",
                "color": "Black",
                "rating": 4.7,
                "retailer": "REI",
                "specs": {"waterproof_rating": "20000", "insulation": "synthetic", "temperature_range": "-20C to 0C"},
            },
            {
                "name": "Budget Shell Jacket",
                "price": 89.0,
                "delivery_days": 9,
                "category": "jacket",
                "color": "red",
                "rating": 3.9,
                "retailer": "Amazon",
                "specs": {"waterproof_rating": 5000, "insulation": "none"},
            },
            {
                "name": "Burton Covert Pants",
                "price": 120.0,
                "delivery_days": 5,
                "category": "pants",
                "color": "navy",
                "rating": 4.4,
                "retailer": "Evo",
                "specs": {"waterproof_rating": 10000, "insulation": "synthetic"},
            },
            {
                "name": "Smartwool Classic Thermal Crew",
                "price": 45.0,
                "delivery_days": 2,
                "category": "base_layer",
                "color": "charcoal",
                "rating": 4.8,
                "retailer": "REI",
                "specs": {"material": "merino wool"},
            },
        ],
    }

    print("=" * 60)
    print("GEAR RANKING ENGINE")
    print("=" * 60)
    print()

    result = run_session(user_input)

    for i, product in enumerate(result["ranked"], 1):
        print(f"{i}. {product['name']} - {product['score']:.3f} ({product['explanation']})")

    print()
    print("=" * 60)
    print("BEST OUTFIT")
    print("=" * 60)
    print()
    print(format_outfit_summary(OutfitResult.model_validate(result["outfit"])))
    print()
    print(json.dumps(result["outfit"], indent=2))
