"""Configuration management for the recipe matcher.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()

# Every embedding (remote or fallback) has exactly this many dimensions
EMBEDDING_DIMENSIONS = 384

# Value shipped in .env.example; treated the same as a missing key
SPOONACULAR_PLACEHOLDER_KEY = "your_spoonacular_api_key_here"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Embedding service credential. Empty means "not configured": the
        # deterministic fallback embedding is used instead of the remote call.
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        self.EMBEDDING_MODEL: str = os.getenv("EMBEDDING_MODEL", "gemini-embedding-001")
        self.EMBEDDING_DIMENSIONS: int = int(os.getenv("EMBEDDING_DIMENSIONS", str(EMBEDDING_DIMENSIONS)))
        # Upper bound for a single remote embedding call before falling back
        self.EMBEDDING_TIMEOUT_SECONDS: float = float(os.getenv("EMBEDDING_TIMEOUT_SECONDS", "10"))
        # Read-through cache keyed by the exact ingredient-list text
        self.ENABLE_EMBEDDING_CACHE: bool = _env_bool("ENABLE_EMBEDDING_CACHE", "true")
        # Least recently used entries are evicted beyond this many vectors
        self.EMBEDDING_CACHE_SIZE: int = int(os.getenv("EMBEDDING_CACHE_SIZE", "2048"))
        # Model used to consolidate shopping lists (only when GEMINI_API_KEY is set)
        self.SHOPPING_LIST_MODEL: str = os.getenv("SHOPPING_LIST_MODEL", "gemini-2.5-flash-lite")

        # Recipe sources
        self.USE_SPOONACULAR: bool = _env_bool("USE_SPOONACULAR", "true")
        self.SPOONACULAR_API_KEY: str = os.getenv("SPOONACULAR_API_KEY", "")
        self.USE_THEMEALDB: bool = _env_bool("USE_THEMEALDB", "false")
        self.RECIPE_SOURCE_TIMEOUT_SECONDS: float = float(os.getenv("RECIPE_SOURCE_TIMEOUT_SECONDS", "10"))
        # Number of recipes requested from each remote source per search
        self.RECIPES_PER_SOURCE: int = int(os.getenv("RECIPES_PER_SOURCE", "10"))

        # Maximum number of recipe recommendations to return. Default: 10
        self.MAX_RECIPES: int = int(os.getenv("MAX_RECIPES", "10"))

        # Scoring weights. Match rate dominates: "can I cook this with what I picked?"
        self.WEIGHT_MATCH: float = float(os.getenv("WEIGHT_MATCH", "0.40"))
        self.WEIGHT_SIMILARITY: float = float(os.getenv("WEIGHT_SIMILARITY", "0.25"))
        self.WEIGHT_UTILIZATION: float = float(os.getenv("WEIGHT_UTILIZATION", "0.15"))
        self.WEIGHT_EXACT: float = float(os.getenv("WEIGHT_EXACT", "0.20"))

    @property
    def gemini_configured(self) -> bool:
        return bool(self.GEMINI_API_KEY.strip())

    def validate(self) -> None:
        """Validate configuration values.

        Credentials are optional: a missing GEMINI_API_KEY or SPOONACULAR_API_KEY
        only disables the matching collaborator.

        Raises:
            ValueError: If invalid values are provided.
        """
        if self.EMBEDDING_DIMENSIONS != EMBEDDING_DIMENSIONS:
            raise ValueError(
                f"EMBEDDING_DIMENSIONS must be {EMBEDDING_DIMENSIONS}, got: {self.EMBEDDING_DIMENSIONS}"
            )
        if self.EMBEDDING_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"EMBEDDING_TIMEOUT_SECONDS must be positive, got: {self.EMBEDDING_TIMEOUT_SECONDS}"
            )
        if self.RECIPE_SOURCE_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"RECIPE_SOURCE_TIMEOUT_SECONDS must be positive, got: {self.RECIPE_SOURCE_TIMEOUT_SECONDS}"
            )
        if self.EMBEDDING_CACHE_SIZE < 1:
            raise ValueError(f"EMBEDDING_CACHE_SIZE must be at least 1, got: {self.EMBEDDING_CACHE_SIZE}")
        if self.RECIPES_PER_SOURCE < 1:
            raise ValueError(f"RECIPES_PER_SOURCE must be at least 1, got: {self.RECIPES_PER_SOURCE}")
        if self.MAX_RECIPES < 1:
            raise ValueError(f"MAX_RECIPES must be at least 1, got: {self.MAX_RECIPES}")

        weights = {
            "WEIGHT_MATCH": self.WEIGHT_MATCH,
            "WEIGHT_SIMILARITY": self.WEIGHT_SIMILARITY,
            "WEIGHT_UTILIZATION": self.WEIGHT_UTILIZATION,
            "WEIGHT_EXACT": self.WEIGHT_EXACT,
        }
        for name, value in weights.items():
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got: {value}")
        total = sum(weights.values())
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Scoring weights must sum to 1.0, got: {total:.4f}")
        if self.WEIGHT_MATCH < max(weights.values()):
            raise ValueError(
                f"WEIGHT_MATCH must be the highest weight, got: {self.WEIGHT_MATCH} "
                f"(max is {max(weights.values())})"
            )


# Create module-level config instance and validate immediately
config = Config()
config.validate()
