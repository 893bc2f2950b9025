"""Unit tests for the command-line query runner."""

from unittest.mock import AsyncMock, patch

from recipe_matcher import query
from recipe_matcher.models.models import Recipe, RecipeScore


def _result():
    recipe = Recipe(id="r1", name="Garlic Rice", ingredients=["garlic", "rice"], cook_time=10, servings=2)
    return RecipeScore(
        recipe=recipe,
        similarity_score=0.5,
        ingredient_match_rate=1.0,
        utilization_score=0.5,
        exact_matches=1,
        combined_score=0.7,
        matched_ingredients=["garlic"],
        missing_ingredients=["rice"],
    )


class TestParseIngredients:
    def test_comma_separated(self):
        assert query.parse_ingredients(" chicken, rice ,, garlic ") == ["chicken", "rice", "garlic"]

    def test_empty(self):
        assert query.parse_ingredients("  ") == []


class TestMain:
    """Test argument handling."""

    def test_no_ingredients(self, capsys):
        assert query.main([]) == 1
        assert "No ingredients provided" in capsys.readouterr().out

    def test_too_many_ingredients(self, capsys):
        with patch.object(query, "run_query", new_callable=AsyncMock) as mock_run:
            assert query.main([",".join(f"item {i}" for i in range(101))]) == 1
        assert "Invalid ingredients" in capsys.readouterr().out
        mock_run.assert_not_awaited()

    def test_unknown_flag(self, capsys):
        assert query.main(["--verbose", "garlic"]) == 1
        assert "Unknown flag" in capsys.readouterr().out

    def test_runs_query_with_flags(self):
        with patch.object(query, "run_query", new_callable=AsyncMock) as mock_run:
            assert query.main(["--json", "--local", "garlic,", "rice"]) == 0
        mock_run.assert_awaited_once_with(["garlic", "rice"], as_json=True, local_only=True, shopping=False)

    def test_failure_returns_error_code(self):
        with patch.object(query, "run_query", new_callable=AsyncMock, side_effect=RuntimeError("boom")):
            assert query.main(["garlic"]) == 1


class TestRender:
    def test_table_rows(self):
        table = query.render_table([_result()])
        assert table.row_count == 1

    def test_local_query_prints(self, capsys):
        query.main(["--local", "carrot, celery, onion"])
        assert "Vegetable" in capsys.readouterr().out
