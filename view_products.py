#!/usr/bin/env python3
"""
View a product catalog ranked against buyer preferences, in a formatted table.
Run: python view_products.py data/sample_products.json --budget 300 --delivery-days 7
"""
import argparse
import json
from typing import List

from tabulate import tabulate

from contracts.models import ScoredProduct
from services.ranking_engine import rank_products


def format_ranking_table(ranked: List[ScoredProduct], limit: int = 20) -> str:
    """Render ranked products as a grid table."""
    table_data = []
    for rank, product in enumerate(ranked[:limit], 1):
        name = product.name
        table_data.append([
            rank,
            name[:40] + "..." if len(name) > 40 else name,
            product.category,
            f"${product.price:.2f}",
            product.delivery_days,
            product.retailer or "",
            f"{product.score:.3f}",
            product.explanation,
        ])

    headers = ["#", "Name", "Category", "Price", "Days", "Retailer", "Score", "Why"]
    return tabulate(table_data, headers=headers, tablefmt="grid")


def view_products(catalog_path: str, preferences: dict, limit: int = 20):
    """Rank a JSON catalog file and print the table."""
    with open(catalog_path) as f:
        products = json.load(f)

    ranked = rank_products(products, preferences)
    print(format_ranking_table(ranked, limit))
    print(f"\nTotal products ranked: {len(ranked)}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Rank a product catalog")
    parser.add_argument("catalog", help="JSON file with a list of products")
    parser.add_argument("--budget", type=float)
    parser.add_argument("--delivery-days", type=int)
    parser.add_argument("--warmth")
    parser.add_argument("--prioritize", choices=["budget", "delivery", "quality"])
    parser.add_argument("--color", action="append", default=[])
    parser.add_argument("--brand", action="append", default=[])
    parser.add_argument("--limit", type=int, default=30)
    args = parser.parse_args()

    view_products(
        args.catalog,
        {
            "budget": args.budget,
            "delivery_days": args.delivery_days,
            "warmth": args.warmth,
            "prioritize": args.prioritize,
            "colors": args.color,
            "brands": args.brand,
        },
        limit=args.limit,
    )
