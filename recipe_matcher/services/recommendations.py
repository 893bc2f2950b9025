"""Caller-facing entry point: ingredients in, ranked RecipeScores out.

Pipeline:
1. Clean the user's ingredients (blank entries dropped; none left -> []).
2. Collect candidates (given explicitly, or from every enabled source).
3. Embed the user's ingredient list once.
4. Score all candidates concurrently; scoring tasks share nothing mutable
   except the embedding cache.
5. Filter zero-overlap recipes, sort by combined score, cut to the limit.
"""

import asyncio
import time
from typing import Optional, Sequence

from recipe_matcher.matching.embeddings import EmbeddingGenerator, get_embedding_generator
from recipe_matcher.matching.metrics import join_ingredients
from recipe_matcher.matching.scorer import score_recipe
from recipe_matcher.matching.sorting import filter_and_sort_recipe_scores
from recipe_matcher.models.models import Recipe, RecipeScore, ScoringWeights, clean_ingredient_list
from recipe_matcher.sources.index import get_candidate_recipes
from recipe_matcher.utils.config import config
from recipe_matcher.utils.logger import logger


async def generate_recipe_recommendations(
    user_ingredients: Sequence[str],
    recipes: Optional[Sequence[Recipe]] = None,
    weights: Optional[ScoringWeights] = None,
    generator: Optional[EmbeddingGenerator] = None,
    limit: Optional[int] = None,
) -> list[RecipeScore]:
    """Rank recipes for the given ingredients.

    Args:
        user_ingredients: Ingredient names supplied by the user.
        recipes: Candidate recipes. When None, candidates come from the local
            catalog and every enabled remote source.
        weights: Scoring weights (ScoringWeights.from_config() by default).
        generator: Embedding generator (process-wide one by default).
        limit: Maximum number of results (config.MAX_RECIPES by default).

    Returns:
        RecipeScores sharing at least one ingredient with the user, best
        first. Empty (never an error) when nothing matches or no usable
        ingredient was given.

    Raises:
        IngredientValidationError: If user_ingredients is not a list of strings.
    """
    ingredients = clean_ingredient_list(user_ingredients)
    if not ingredients:
        logger.info("No usable ingredients supplied, returning no recommendations")
        return []

    started = time.perf_counter()
    weights = weights or ScoringWeights.from_config()
    generator = generator or get_embedding_generator()
    limit = config.MAX_RECIPES if limit is None else limit

    candidates = list(recipes) if recipes is not None else await get_candidate_recipes(ingredients)
    if not candidates:
        return []

    user_embedding, user_source = await generator.embed_with_source(join_ingredients(ingredients))
    scores = await asyncio.gather(
        *(
            score_recipe(
                recipe,
                ingredients,
                user_embedding=user_embedding,
                weights=weights,
                generator=generator,
                user_source=user_source,
            )
            for recipe in candidates
        )
    )

    ranked = filter_and_sort_recipe_scores(list(scores))[:limit]
    elapsed_ms = int((time.perf_counter() - started) * 1000)
    logger.info(
        f"Ranked {len(ranked)} of {len(candidates)} candidate recipes for "
        f"{len(ingredients)} ingredients in {elapsed_ms}ms"
    )
    return ranked


def run_recommendations(user_ingredients: Sequence[str], **kwargs) -> list[RecipeScore]:
    """Synchronous wrapper around generate_recipe_recommendations."""
    return asyncio.run(generate_recipe_recommendations(user_ingredients, **kwargs))
