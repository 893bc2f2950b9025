#!/usr/bin/env python3
"""Ad hoc query runner for the recipe matcher.

Rank recipes for a set of ingredients without any web layer.

Usage:
    python -m recipe_matcher.query "chicken, rice, garlic"
    python -m recipe_matcher.query --json "carrot, celery, onion"   # Full JSON output
    python -m recipe_matcher.query --local "eggs, tomato"          # Built-in catalog only
    python -m recipe_matcher.query --shopping "chicken, rice"       # Add a shopping list
"""

import asyncio
import sys
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from recipe_matcher.models.models import RecipeScore, RecommendationRequest
from recipe_matcher.services.recommendations import generate_recipe_recommendations
from recipe_matcher.services.shopping_list import generate_shopping_list
from recipe_matcher.sources.local import get_local_recipes
from recipe_matcher.utils.logger import logger

console = Console()

USAGE = 'Usage: python -m recipe_matcher.query [--json] [--local] [--shopping] "ingredient, ingredient, ..."'


def parse_ingredients(text: str) -> list[str]:
    """Split a comma-separated ingredient string."""
    return [part.strip() for part in text.split(",") if part.strip()]


def render_table(results: list[RecipeScore]) -> Table:
    table = Table(title="Recipe Recommendations")
    table.add_column("#", justify="right")
    table.add_column("Recipe")
    table.add_column("Score", justify="right")
    table.add_column("Match", justify="right")
    table.add_column("Similarity", justify="right")
    table.add_column("Exact", justify="right")
    table.add_column("You'll need")

    for rank, result in enumerate(results, start=1):
        table.add_row(
            str(rank),
            result.recipe.name,
            f"{result.combined_score * 100:.0f}%",
            f"{result.ingredient_match_rate * 100:.0f}%",
            f"{result.similarity_score * 100:.1f}%",
            str(result.exact_matches),
            ", ".join(result.missing_ingredients) or "-",
        )
    return table


async def run_query(
    ingredients: list[str], as_json: bool = False, local_only: bool = False, shopping: bool = False
) -> None:
    """Rank recipes for ``ingredients`` and print them."""
    recipes: Optional[list] = get_local_recipes() if local_only else None
    results = await generate_recipe_recommendations(ingredients, recipes=recipes)

    if as_json:
        console.print_json(data=[result.model_dump() for result in results])
    elif results:
        console.print(render_table(results))
    else:
        console.print("[yellow]No recipes found for these ingredients.[/yellow]")

    if shopping and results:
        items = await generate_shopping_list([result.recipe for result in results[:3]], ingredients)
        console.print(f"[bold]Shopping list:[/bold] {', '.join(items) or 'nothing to buy'}")


def main(argv: list[str]) -> int:
    flags = {"--json": False, "--local": False, "--shopping": False}
    args = list(argv)
    while args and args[0].startswith("--"):
        flag = args.pop(0)
        if flag not in flags:
            print(f"Unknown flag: {flag}")
            print(USAGE)
            return 1
        flags[flag] = True

    try:
        request = RecommendationRequest(ingredients=parse_ingredients(" ".join(args)))
    except ValidationError as e:
        print(f"Error: Invalid ingredients: {e.errors()[0]['msg']}")
        print(USAGE)
        return 1

    ingredients = request.ingredients
    if not ingredients:
        print("Error: No ingredients provided")
        print(USAGE)
        return 1

    try:
        asyncio.run(
            run_query(ingredients, as_json=flags["--json"], local_only=flags["--local"], shopping=flags["--shopping"])
        )
    except KeyboardInterrupt:
        logger.info("Query interrupted by user.")
        return 0
    except Exception as e:
        logger.error(f"Query execution failed: {e}", exc_info=True)
        return 1
    return 0


def cli() -> None:
    sys.exit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
