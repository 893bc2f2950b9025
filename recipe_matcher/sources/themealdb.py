"""TheMealDB recipe source (free public API, no key required).

TheMealDB filters by one ingredient at a time and returns only id/name/image,
so a search fans out over the first few user ingredients and then looks up
each meal's details.
"""

import asyncio
from typing import Any, Optional

import aiohttp

from recipe_matcher.models.models import Recipe
from recipe_matcher.sources.spoonacular import validate_search_ingredients
from recipe_matcher.utils.config import config
from recipe_matcher.utils.errors import RecipeSourceError, safe_execute_async
from recipe_matcher.utils.logger import logger

THEMEALDB_BASE_URL = "https://www.themealdb.com/api/json/v1/1"

# TheMealDB has no timing data; used for every meal
DEFAULT_COOK_TIME_MINUTES = 30
DEFAULT_SERVINGS = 4

# Ingredients queried per search (one request each)
MAX_FILTER_INGREDIENTS = 3


def transform_meal(meal: dict[str, Any]) -> Recipe:
    """Build a Recipe from a TheMealDB lookup payload."""
    ingredients = []
    for i in range(1, 21):
        name = (meal.get(f"strIngredient{i}") or "").strip()
        if name:
            ingredients.append(name)

    raw_instructions = meal.get("strInstructions") or ""
    instructions = [line.strip() for line in raw_instructions.splitlines() if line.strip()]

    return Recipe(
        id=f"mealdb-{meal['idMeal']}",
        name=meal.get("strMeal") or f"Meal {meal['idMeal']}",
        ingredients=ingredients,
        instructions=instructions,
        cook_time=DEFAULT_COOK_TIME_MINUTES,
        servings=DEFAULT_SERVINGS,
        cuisine=meal.get("strArea") or None,
        image=meal.get("strMealThumb"),
        source="themealdb",
    )


class TheMealDBClient:
    """Async TheMealDB client."""

    def __init__(self, timeout_seconds: float = 10.0, base_url: str = THEMEALDB_BASE_URL) -> None:
        self.timeout_seconds = timeout_seconds
        self.base_url = base_url.rstrip("/")

    async def _get(self, endpoint: str, params: dict[str, str]) -> Optional[list[dict[str, Any]]]:
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(f"{self.base_url}/{endpoint}", params=params) as response:
                    if response.status >= 400:
                        raise RecipeSourceError(f"TheMealDB {endpoint} failed: HTTP {response.status}")
                    payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RecipeSourceError(f"TheMealDB {endpoint} failed: {e}") from e
        # "meals" is null when nothing matches
        return (payload or {}).get("meals")

    async def lookup_meal(self, meal_id: str) -> Optional[Recipe]:
        meals = await self._get("lookup.php", {"i": meal_id})
        return transform_meal(meals[0]) if meals else None

    async def search_recipes_by_ingredients(self, ingredients: list[str], number: int = 10) -> list[Recipe]:
        """Meals containing any of the first few ingredients, with details.

        Raises:
            IngredientValidationError: On an empty or blank ingredient list.
            RecipeSourceError: When the filter requests fail.
        """
        cleaned = validate_search_ingredients(ingredients)[:MAX_FILTER_INGREDIENTS]
        filtered = await asyncio.gather(
            *(self._get("filter.php", {"i": ingredient.replace(" ", "_")}) for ingredient in cleaned)
        )

        meal_ids: list[str] = []
        for meals in filtered:
            for meal in meals or []:
                if meal["idMeal"] not in meal_ids:
                    meal_ids.append(meal["idMeal"])
        meal_ids = meal_ids[:number]

        # A failed lookup only drops that meal
        details = await asyncio.gather(
            *(
                safe_execute_async(self.lookup_meal(meal_id), f"TheMealDB lookup {meal_id}", default_return=None)
                for meal_id in meal_ids
            )
        )
        recipes = [recipe for recipe in details if recipe is not None]
        logger.info(f"TheMealDB returned {len(recipes)} recipes for {len(cleaned)} ingredients")
        return recipes


def is_themealdb_available() -> bool:
    return config.USE_THEMEALDB


async def search_recipes_by_ingredients(ingredients: list[str], number: Optional[int] = None) -> list[Recipe]:
    client = TheMealDBClient(timeout_seconds=config.RECIPE_SOURCE_TIMEOUT_SECONDS)
    return await client.search_recipes_by_ingredients(ingredients, number or config.RECIPES_PER_SOURCE)
