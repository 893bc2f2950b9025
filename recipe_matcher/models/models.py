"""Data models and schemas for the recipe matcher.

Defines Pydantic models for the domain objects exchanged between recipe
sources, the scoring pipeline and the presentation layer.
All models use Pydantic v2 for strict validation.
"""

from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from recipe_matcher.utils.config import config
from recipe_matcher.utils.errors import IngredientValidationError


class Recipe(BaseModel):
    """Domain model for a recipe supplied by a recipe source.

    Read-only input to the scoring pipeline: never mutated or persisted by it.
    Ingredient strings keep their case and order; duplicates are allowed.
    """

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: Annotated[str, Field(min_length=1, description="Opaque identifier, unique within its source")]
    name: Annotated[str, Field(min_length=1, max_length=200, description="Display name (1-200 chars)")]
    ingredients: Annotated[List[str], Field(default_factory=list, description="Ordered ingredient names")]
    instructions: Annotated[List[str], Field(default_factory=list, description="Step-by-step instructions")]
    cook_time: Annotated[int, Field(ge=0, description="Total time in minutes")]
    servings: Annotated[int, Field(ge=1, description="Number of servings")]
    cuisine: Optional[str] = None
    difficulty: Optional[Literal["easy", "medium", "hard"]] = None
    image: Optional[str] = None
    source: Annotated[str, Field(description="Recipe source: local, spoonacular, themealdb")] = "local"

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        """Remote APIs use integer ids; keep them opaque strings."""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class RecipeScore(BaseModel):
    """Per-recipe, per-request scoring result.

    Created once per scoring pass and immutable thereafter. matched and missing
    ingredients partition recipe.ingredients.
    """

    model_config = ConfigDict(frozen=True)

    recipe: Recipe
    similarity_score: Annotated[float, Field(ge=0.0, le=1.0)]
    ingredient_match_rate: Annotated[float, Field(ge=0.0, le=1.0)]
    utilization_score: Annotated[float, Field(ge=0.0, le=1.0)]
    exact_matches: Annotated[int, Field(ge=0)]
    combined_score: Annotated[float, Field(ge=0.0)]
    matched_ingredients: List[str] = Field(default_factory=list)
    missing_ingredients: List[str] = Field(default_factory=list)

    @property
    def coverage_score(self) -> float:
        """Legacy name of utilization_score."""
        return self.utilization_score

    @model_validator(mode="after")
    def validate_partition(self) -> "RecipeScore":
        """exact_matches is bounded by the recipe and matched/missing partition it."""
        if self.exact_matches > len(self.recipe.ingredients):
            raise ValueError(
                f"exact_matches ({self.exact_matches}) exceeds ingredient count "
                f"({len(self.recipe.ingredients)})"
            )
        matched = set(self.matched_ingredients)
        missing = set(self.missing_ingredients)
        if matched & missing:
            raise ValueError(f"Ingredients both matched and missing: {matched & missing}")
        if matched | missing != set(self.recipe.ingredients):
            raise ValueError("matched_ingredients and missing_ingredients must cover recipe.ingredients")
        return self


class ScoringWeights(BaseModel):
    """Weights combining the four metrics into combined_score.

    Non-negative, summing to 1.0, with match_rate the highest (or tied) weight.
    """

    model_config = ConfigDict(frozen=True)

    match_rate: Annotated[float, Field(ge=0.0)] = 0.40
    similarity: Annotated[float, Field(ge=0.0)] = 0.25
    utilization: Annotated[float, Field(ge=0.0)] = 0.15
    exact: Annotated[float, Field(ge=0.0)] = 0.20

    @model_validator(mode="after")
    def validate_weights(self) -> "ScoringWeights":
        values = (self.match_rate, self.similarity, self.utilization, self.exact)
        total = sum(values)
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Scoring weights must sum to 1.0, got {total:.4f}")
        if self.match_rate < max(values):
            raise ValueError("match_rate must be the highest scoring weight")
        return self

    @classmethod
    def from_config(cls) -> "ScoringWeights":
        return cls(
            match_rate=config.WEIGHT_MATCH,
            similarity=config.WEIGHT_SIMILARITY,
            utilization=config.WEIGHT_UTILIZATION,
            exact=config.WEIGHT_EXACT,
        )


def clean_ingredient_list(ingredients: Any) -> list[str]:
    """Strip entries and drop blank ones.

    Raises:
        IngredientValidationError: If the collection is not a list/tuple or
            holds a non-string entry.
    """
    if ingredients is None:
        return []
    if not isinstance(ingredients, (list, tuple)):
        raise IngredientValidationError(
            f"Ingredients must be a list of strings, got {type(ingredients).__name__}"
        )
    cleaned = []
    for idx, item in enumerate(ingredients):
        if not isinstance(item, str):
            raise IngredientValidationError(
                f"Ingredient at position {idx} must be a string, got {type(item).__name__}"
            )
        if item.strip():
            cleaned.append(item.strip())
    return cleaned


class RecommendationRequest(BaseModel):
    """Caller-facing request for recipe recommendations.

    Blank entries are dropped; an all-blank list is valid and yields no results.
    """

    ingredients: List[str] = Field(default_factory=list, max_length=100)

    @field_validator("ingredients", mode="before")
    @classmethod
    def strip_ingredients(cls, value: Any) -> list[str]:
        # IngredientValidationError is a ValueError, reported as ValidationError
        return clean_ingredient_list(value)


class ShoppingListRequest(BaseModel):
    """Recipes the user wants to cook plus what they already have."""

    recipes: Annotated[List[Recipe], Field(min_length=1, description="Recipes to shop for")]
    user_ingredients: List[str] = Field(default_factory=list)

    @field_validator("user_ingredients", mode="before")
    @classmethod
    def strip_user_ingredients(cls, value: Any) -> list[str]:
        return clean_ingredient_list(value)
