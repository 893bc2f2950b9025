"""Recipe scoring: four metrics combined into one weighted score.

combined_score = similarity  * W_sim
               + match_rate  * W_match
               + utilization * W_util
               + (exact_matches / max(1, ingredient_count)) * W_exact

Default weights (ScoringWeights): W_match 0.40, W_sim 0.25, W_util 0.15,
W_exact 0.20. Scoring is total: recipes without any overlap still get a
RecipeScore and are filtered later by the sorter.
"""

from typing import Optional

from recipe_matcher.matching.embeddings import EmbeddingGenerator, get_embedding_generator
from recipe_matcher.matching.matcher import find_matched_ingredients, find_missing_ingredients
from recipe_matcher.matching.metrics import (
    calculate_exact_matches,
    calculate_ingredient_match_rate,
    calculate_similarity_score,
    calculate_utilization_score,
)
from recipe_matcher.models.models import Recipe, RecipeScore, ScoringWeights
from recipe_matcher.utils.logger import logger


def combine_scores(
    similarity_score: float,
    match_rate: float,
    utilization_score: float,
    exact_matches: int,
    ingredient_count: int,
    weights: ScoringWeights,
) -> float:
    """Weighted sum of the metrics; non-decreasing in each of them."""
    exact_ratio = exact_matches / max(1, ingredient_count)
    return (
        similarity_score * weights.similarity
        + match_rate * weights.match_rate
        + utilization_score * weights.utilization
        + exact_ratio * weights.exact
    )


async def score_recipe(
    recipe: Recipe,
    user_ingredients: list[str],
    user_embedding: Optional[list[float]] = None,
    weights: Optional[ScoringWeights] = None,
    generator: Optional[EmbeddingGenerator] = None,
    user_source: Optional[str] = None,
) -> RecipeScore:
    """Score one recipe against the user's ingredients.

    Args:
        recipe: Candidate recipe (read-only).
        user_ingredients: Cleaned user ingredient names.
        user_embedding: Embedding of ", ".join(user_ingredients); computed
            here when omitted.
        weights: Scoring weights (ScoringWeights.from_config() by default).
        generator: Embedding generator (process-wide one by default).
        user_source: Provider that produced user_embedding (REMOTE or FALLBACK).

    Returns:
        Immutable RecipeScore with metrics and the matched/missing partition.
    """
    weights = weights or ScoringWeights.from_config()
    generator = generator or get_embedding_generator()
    ingredients = list(recipe.ingredients)

    similarity = await calculate_similarity_score(
        user_ingredients,
        ingredients,
        generator=generator,
        user_embedding=user_embedding,
        user_source=user_source,
    )
    match_rate = calculate_ingredient_match_rate(user_ingredients, ingredients)
    utilization = calculate_utilization_score(user_ingredients, ingredients)
    exact = calculate_exact_matches(user_ingredients, ingredients)

    combined = combine_scores(similarity, match_rate, utilization, exact, len(ingredients), weights)

    logger.debug(
        f"Scored '{recipe.name}': combined={combined:.3f} match={match_rate:.2f} "
        f"util={utilization:.2f} sim={similarity:.2f} exact={exact}",
        extra={"recipe_id": recipe.id},
    )

    return RecipeScore(
        recipe=recipe,
        similarity_score=similarity,
        ingredient_match_rate=match_rate,
        utilization_score=utilization,
        exact_matches=exact,
        combined_score=combined,
        matched_ingredients=find_matched_ingredients(user_ingredients, ingredients),
        missing_ingredients=find_missing_ingredients(user_ingredients, ingredients),
    )
