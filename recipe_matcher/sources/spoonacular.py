"""Spoonacular recipe source with retry logic.

This module provides the SpoonacularClient class for searching recipes by
ingredients against the Spoonacular REST API (async, aiohttp), plus
module-level helpers bound to the configured API key.
"""

import asyncio
from typing import Any, Optional

import aiohttp

from recipe_matcher.models.models import Recipe
from recipe_matcher.utils.config import SPOONACULAR_PLACEHOLDER_KEY, config
from recipe_matcher.utils.errors import IngredientValidationError, RecipeSourceError
from recipe_matcher.utils.logger import logger

SPOONACULAR_BASE_URL = "https://api.spoonacular.com"

# HTTP statuses worth retrying
TRANSIENT_STATUSES = {429, 500, 502, 503, 504}


def difficulty_from_cook_time(minutes: int) -> str:
    if minutes <= 30:
        return "easy"
    if minutes <= 60:
        return "medium"
    return "hard"


def validate_search_ingredients(ingredients: list[str]) -> list[str]:
    """Stripped ingredient names for a search request.

    Raises:
        IngredientValidationError: If the list is empty or holds a blank or
            non-string entry.
    """
    if not ingredients:
        raise IngredientValidationError("Ingredients array must not be empty")
    if any(not isinstance(item, str) or not item.strip() for item in ingredients):
        raise IngredientValidationError("All ingredients must be non-empty strings")
    return [item.strip() for item in ingredients]


def transform_recipe(data: dict[str, Any]) -> Recipe:
    """Build a Recipe from a Spoonacular recipe information payload."""
    cook_time = int(data.get("readyInMinutes") or 0)

    ingredients = [item.get("name", "") for item in data.get("extendedIngredients") or []]
    if not ingredients:
        # findByIngredients payloads only carry used/missed ingredient lists
        ingredients = [
            item.get("name", "")
            for key in ("usedIngredients", "missedIngredients")
            for item in data.get(key) or []
        ]
    ingredients = [name for name in ingredients if name and name.strip()]

    instructions = [
        step.get("step", "")
        for block in data.get("analyzedInstructions") or []
        for step in block.get("steps") or []
        if step.get("step")
    ]
    cuisines = data.get("cuisines") or []

    return Recipe(
        id=data["id"],
        name=data.get("title") or f"Recipe {data['id']}",
        ingredients=ingredients,
        instructions=instructions,
        cook_time=cook_time,
        servings=max(1, int(data.get("servings") or 1)),
        cuisine=cuisines[0] if cuisines else None,
        difficulty=difficulty_from_cook_time(cook_time),
        image=data.get("image"),
        source="spoonacular",
    )


class SpoonacularClient:
    """Async Spoonacular API client.

    Retries transient failures (timeouts, connection errors, 429/5xx) with
    exponential backoff; other errors fail immediately.
    """

    def __init__(
        self,
        api_key: str,
        max_retries: int = 3,
        retry_delays: Optional[list[float]] = None,
        timeout_seconds: float = 10.0,
        base_url: str = SPOONACULAR_BASE_URL,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Spoonacular API key.
            max_retries: Maximum number of attempts per request (default: 3).
            retry_delays: Delay in seconds before each retry. Defaults to [1, 2, 4].
            timeout_seconds: Total timeout of one HTTP request.
            base_url: API root, overridable for tests.

        Raises:
            RecipeSourceError: If api_key is missing or the placeholder value.
        """
        if not api_key or api_key == SPOONACULAR_PLACEHOLDER_KEY:
            raise RecipeSourceError("Spoonacular API key is not configured")

        self.api_key = api_key
        self.max_retries = max_retries
        self.retry_delays = retry_delays or [1, 2, 4]
        self.timeout_seconds = timeout_seconds
        self.base_url = base_url.rstrip("/")

    async def _request(self, path: str, params: dict[str, Any]) -> Any:
        """GET ``path`` and return decoded JSON, retrying transient failures."""
        query = {**params, "apiKey": self.api_key}
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        last_exception: Optional[Exception] = None

        for attempt in range(self.max_retries):
            try:
                async with aiohttp.ClientSession(timeout=timeout) as session:
                    async with session.get(f"{self.base_url}{path}", params=query) as response:
                        if response.status in TRANSIENT_STATUSES:
                            raise aiohttp.ClientResponseError(
                                response.request_info,
                                response.history,
                                status=response.status,
                                message=f"Transient Spoonacular error {response.status}",
                            )
                        if response.status >= 400:
                            raise RecipeSourceError(f"Spoonacular request {path} failed: HTTP {response.status}")
                        return await response.json()
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                logger.debug(f"Spoonacular attempt {attempt + 1}/{self.max_retries} failed: {e}")
                if attempt < self.max_retries - 1:
                    delay = self.retry_delays[min(attempt, len(self.retry_delays) - 1)]
                    logger.warning(f"Spoonacular request failed, retrying in {delay}s...")
                    await asyncio.sleep(delay)

        raise RecipeSourceError(
            f"Spoonacular request {path} failed after {self.max_retries} attempts: {last_exception}"
        )

    async def search_recipes_by_ingredients(self, ingredients: list[str], number: int = 10) -> list[Recipe]:
        """Recipes using the given ingredients, with full details.

        Raises:
            IngredientValidationError: On an empty or blank ingredient list.
            RecipeSourceError: On HTTP failure.
        """
        cleaned = validate_search_ingredients(ingredients)
        matches = await self._request(
            "/recipes/findByIngredients",
            {"ingredients": ",".join(cleaned), "number": number, "ranking": 1, "ignorePantry": "true"},
        )
        if not matches:
            return []

        ids = ",".join(str(item["id"]) for item in matches)
        details = await self._request("/recipes/informationBulk", {"ids": ids})
        recipes = [transform_recipe(item) for item in details or []]
        logger.info(f"Spoonacular returned {len(recipes)} recipes for {len(cleaned)} ingredients")
        return recipes

    async def get_recipe_by_id(self, recipe_id: str) -> Recipe:
        """Full recipe details for one Spoonacular id."""
        data = await self._request(f"/recipes/{recipe_id}/information", {"includeNutrition": "false"})
        return transform_recipe(data)


def is_spoonacular_available() -> bool:
    """True when a real Spoonacular key is configured and the source is enabled."""
    key = config.SPOONACULAR_API_KEY.strip()
    return config.USE_SPOONACULAR and bool(key) and key != SPOONACULAR_PLACEHOLDER_KEY


def _client() -> SpoonacularClient:
    return SpoonacularClient(
        api_key=config.SPOONACULAR_API_KEY.strip(),
        timeout_seconds=config.RECIPE_SOURCE_TIMEOUT_SECONDS,
    )


async def search_recipes_by_ingredients(ingredients: list[str], number: Optional[int] = None) -> list[Recipe]:
    """Search Spoonacular with the configured key.

    Raises:
        RecipeSourceError: "Spoonacular API key is not configured" without a key.
        IngredientValidationError: On an empty or blank ingredient list.
    """
    client = _client()
    return await client.search_recipes_by_ingredients(ingredients, number or config.RECIPES_PER_SOURCE)


async def get_recipe_by_id(recipe_id: str) -> Recipe:
    """Fetch one recipe with the configured key."""
    return await _client().get_recipe_by_id(recipe_id)
