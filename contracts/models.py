# contracts/models.py
"""
Pydantic models for the gear ranking engine.
These models define the data contracts for catalog products, buyer preferences,
score breakdowns and assembled outfits. Score/outfit fields serialise under
camelCase names (model_dump(by_alias=True)) for API callers.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union


class ProductSpecs(BaseModel):
    """
    Technical specifications of a product (jackets, pants, base layers).
    All keys are optional; unknown keys are kept.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    waterproof_rating: Optional[Union[int, float, str]] = None  # mm, e.g. 20000 or "20000mm"
    insulation: Optional[str] = None  # e.g. "synthetic", "down", "none"
    temperature_range: Optional[str] = None  # e.g. "-20C to 0C"
    material: Optional[str] = None


class Product(BaseModel):
    """
    A candidate product from the catalog.
    Extra fields (id, url, image, ...) are carried through to ScoredProduct.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    name: str
    price: float
    delivery_days: int
    category: str
    color: str = ""
    rating: Optional[float] = None  # 0-5 stars, not validated here
    retailer: Optional[str] = None
    specs: Optional[ProductSpecs] = None


class Preferences(BaseModel):
    """
    Buyer preferences and constraints. Every field is optional;
    missing fields make the matching criterion neutral.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    budget: Optional[float] = None
    delivery_days: Optional[int] = None  # latest acceptable delivery
    warmth: Optional[str] = None  # "extra warm", "very warm", ...
    colors: List[str] = []
    brands: List[str] = []
    preferred_retailers: List[str] = []
    prioritize: Optional[str] = None  # "budget", "delivery", "quality"
    items_needed: Optional[List[str]] = None


class ScoreBreakdown(BaseModel):
    """
    Per-criterion scores for one product, each in [0, 1] for well-formed input.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    price_score: float = Field(alias="priceScore")
    delivery_score: float = Field(alias="deliveryScore")
    specs_score: float = Field(alias="specsScore")
    preference_score: float = Field(alias="preferenceScore")
    rating_score: float = Field(alias="ratingScore")


class ScoringWeights(BaseModel):
    """
    One weight per scoring criterion. Built fresh for every ranking call.
    """
    model_config = ConfigDict(frozen=True)

    price_score: float
    delivery_score: float
    specs_score: float
    preference_score: float
    rating_score: float

    def total(self) -> float:
        return sum(self.model_dump().values())


class ScoredProduct(Product):
    """
    A product annotated with its weighted score, breakdown and explanation.
    """
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    score: float
    score_breakdown: ScoreBreakdown = Field(alias="scoreBreakdown")
    explanation: str


class OutfitResult(BaseModel):
    """
    At most one product per required category, assembled under a budget.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    items: List[ScoredProduct] = []
    total_cost: float = Field(default=0.0, alias="totalCost")
    within_budget: bool = Field(default=True, alias="withinBudget")
    categories: List[str] = []
    missing_categories: List[str] = Field(default=[], alias="missingCategories")
    strategy: str = "greedy"
