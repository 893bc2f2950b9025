"""Candidate recipe collection across all enabled sources."""

import asyncio

from recipe_matcher.models.models import Recipe
from recipe_matcher.sources import spoonacular, themealdb
from recipe_matcher.sources.local import get_local_recipes
from recipe_matcher.utils.errors import safe_execute_async
from recipe_matcher.utils.logger import logger


async def get_candidate_recipes(ingredients: list[str]) -> list[Recipe]:
    """Local catalog plus every enabled remote source, de-duplicated by id.

    Remote failures are logged and skipped; the local catalog is always
    included, so the result is never empty.
    """
    remote_searches = []
    if spoonacular.is_spoonacular_available():
        remote_searches.append(
            safe_execute_async(
                spoonacular.search_recipes_by_ingredients(ingredients),
                "Spoonacular search",
                default_return=[],
            )
        )
    if themealdb.is_themealdb_available():
        remote_searches.append(
            safe_execute_async(
                themealdb.search_recipes_by_ingredients(ingredients),
                "TheMealDB search",
                default_return=[],
            )
        )

    remote_results = await asyncio.gather(*remote_searches)

    candidates: list[Recipe] = []
    seen: set[str] = set()
    for recipe in [*get_local_recipes(), *(r for batch in remote_results for r in batch)]:
        if recipe.id in seen:
            continue
        seen.add(recipe.id)
        candidates.append(recipe)

    logger.debug(f"Collected {len(candidates)} candidate recipes from {1 + len(remote_searches)} source(s)")
    return candidates
