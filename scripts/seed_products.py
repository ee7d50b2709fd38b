# scripts/seed_products.py
"""
Generates a synthetic winter gear catalog for demos and manual testing.
Produces products across retailers, categories, price points and delivery times,
and writes them as a JSON list.

Run: python scripts/seed_products.py --count 80 --out data/sample_products.json
"""
import argparse
import json
import os
import random
import sys
from typing import Dict, List

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from contracts.models import Product

# Catalog data
RETAILERS = ["REI", "Backcountry", "Evo", "Moosejaw", "Amazon", "Patagonia"]

BRANDS = ["Patagonia", "Arc'teryx", "The North Face", "Burton", "Smartwool", "Oakley", "Helly Hansen"]

COLORS = ["black", "navy", "red", "forest green", "grey", "white", "orange", "sky blue"]

# category -> (subtypes, price range in USD)
CATEGORIES = {
    "jacket": (["shell jacket", "insulated jacket", "parka"], (90, 450)),
    "pants": (["bib pants", "shell pants", "insulated pants"], (60, 300)),
    "base_layer": (["crew top", "zip top", "leggings"], (25, 120)),
    "gloves": (["mittens", "gloves", "liner gloves"], (15, 90)),
    "goggles": (["goggles", "photochromic goggles"], (30, 220)),
}

WATERPROOF_RATINGS = [None, 5000, 10000, 15000, "20000mm", 28000]
INSULATIONS = ["none", "synthetic", "down", "primaloft"]
TEMPERATURE_RANGES = [None, "-10C to 5C", "-20C to 0C", "-30C to -5C"]
MATERIALS = ["polyester", "nylon", "merino wool", "merino blend", "fleece"]


def generate_product(rng: random.Random, index: int) -> Dict:
    """Generate one catalog record."""
    category = rng.choice(list(CATEGORIES))
    subtypes, (low, high) = CATEGORIES[category]
    brand = rng.choice(BRANDS)

    specs = {"material": rng.choice(MATERIALS)}
    if category in ("jacket", "pants", "gloves"):
        specs["waterproof_rating"] = rng.choice(WATERPROOF_RATINGS)
        specs["insulation"] = rng.choice(INSULATIONS)
        specs["temperature_range"] = rng.choice(TEMPERATURE_RANGES)

    return {
        "id": f"gear_{index:04d}",
        "name": f"{brand} {rng.choice(subtypes).title()}",
        "price": round(rng.uniform(low, high), 2),
        "delivery_days": rng.randint(1, 14),
        "category": category,
        "color": rng.choice(COLORS),
        "rating": round(rng.uniform(3.0, 5.0), 1) if rng.random() > 0.15 else None,
        "retailer": rng.choice(RETAILERS),
        "specs": {k: v for k, v in specs.items() if v is not None},
    }


def generate_catalog(count: int = 80, seed: int = 42) -> List[Dict]:
    """
    Generate a deterministic catalog.

    Args:
        count: Number of products
        seed: Random seed (same seed -> same catalog)

    Returns:
        List of product dicts, each valid against contracts.models.Product
    """
    rng = random.Random(seed)
    products = [generate_product(rng, i) for i in range(count)]

    # Validate against the product contract before handing it out
    for p in products:
        Product.model_validate(p)

    return products


def main():
    parser = argparse.ArgumentParser(description="Generate a synthetic gear catalog")
    parser.add_argument("--count", type=int, default=80)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--out", default="data/sample_products.json")
    args = parser.parse_args()

    products = generate_catalog(args.count, args.seed)

    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(args.out, "w") as f:
        json.dump(products, f, indent=2)

    print(f"✓ Wrote {len(products)} products to {args.out}")


if __name__ == "__main__":
    main()
