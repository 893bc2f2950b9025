"""Ingredient-list embeddings and cosine similarity.

Two embedding providers share one interface:

1. GeminiEmbeddingProvider ("REMOTE"): Gemini embedding API via google-genai,
   384 dimensions requested through output_dimensionality. Only used when
   GEMINI_API_KEY is set.
2. HashEmbeddingProvider ("FALLBACK"): deterministic structural embedding.
   Best-effort stand-in for a semantic embedding; it separates different
   ingredient lists but carries no meaning beyond their spelling.

EmbeddingGenerator picks the provider at call time, falls back on any remote
failure (timeout, auth, malformed response) and never raises. Each call logs
EMBEDDING_SOURCE=REMOTE or EMBEDDING_SOURCE=FALLBACK and records the source
in ``last_source``; embed_with_source() also returns it, so callers can
avoid comparing vectors from different providers.
"""

import asyncio
import math
import re
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Optional, Sequence

import numpy as np
from google import genai
from google.genai import types

from recipe_matcher.utils.config import EMBEDDING_DIMENSIONS, config
from recipe_matcher.utils.errors import EmbeddingServiceError, InputError
from recipe_matcher.utils.logger import logger

REMOTE_SOURCE = "REMOTE"
FALLBACK_SOURCE = "FALLBACK"

# Below this magnitude the hashed vector is considered degenerate and reseeded
_NEAR_ZERO = 1e-10

# Dimensions receiving the coarse word-count / word-length signal
_STRUCTURAL_DIMS = 8


# ============================================================================
# Providers
# ============================================================================


class EmbeddingProvider(ABC):
    """Maps an ingredient-list string to a fixed-length vector."""

    source: str = ""

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """Return the embedding of ``text``."""


class GeminiEmbeddingProvider(EmbeddingProvider):
    """Remote semantic embeddings from the Gemini API.

    The google-genai client is created on first use so that constructing the
    provider (or importing this module) never touches the network or fails
    on a bad credential.
    """

    source = REMOTE_SOURCE

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-embedding-001",
        dimensions: int = EMBEDDING_DIMENSIONS,
        timeout_seconds: float = 10.0,
    ) -> None:
        if not api_key:
            raise ValueError("GEMINI_API_KEY is required for remote embeddings")

        self.api_key = api_key
        self.model = model
        self.dimensions = dimensions
        self.timeout_seconds = timeout_seconds
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def embed(self, text: str) -> list[float]:
        """Call the embedding API once (no retries).

        Raises:
            EmbeddingServiceError: On timeout, API error or a response that is
                not a finite vector of ``dimensions`` floats.
        """
        try:
            client = self._get_client()
            response = await asyncio.wait_for(
                asyncio.to_thread(
                    client.models.embed_content,
                    model=self.model,
                    contents=text,
                    config=types.EmbedContentConfig(output_dimensionality=self.dimensions),
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise EmbeddingServiceError(f"Embedding request timed out after {self.timeout_seconds}s") from e
        except Exception as e:
            raise EmbeddingServiceError(f"Embedding request failed: {e}") from e

        embeddings = getattr(response, "embeddings", None)
        if not embeddings or getattr(embeddings[0], "values", None) is None:
            raise EmbeddingServiceError("Embedding response contained no vector")

        values = [float(v) for v in embeddings[0].values]
        if len(values) != self.dimensions:
            raise EmbeddingServiceError(f"Expected {self.dimensions} dimensions, got {len(values)}")
        if not all(math.isfinite(v) for v in values):
            raise EmbeddingServiceError("Embedding response contained non-finite values")
        return values


class HashEmbeddingProvider(EmbeddingProvider):
    """Deterministic local embeddings (see fallback_embedding)."""

    source = FALLBACK_SOURCE

    def __init__(self, dimensions: int = EMBEDDING_DIMENSIONS) -> None:
        self.dimensions = dimensions

    async def embed(self, text: str) -> list[float]:
        return fallback_embedding(text, self.dimensions)


def _string_hash(text: str) -> int:
    """32-bit polynomial string hash (stable across processes, unlike hash())."""
    value = 0
    for ch in text:
        value = (value * 31 + ord(ch)) & 0xFFFFFFFF
    return value


def fallback_embedding(text: str, dimensions: int = EMBEDDING_DIMENSIONS) -> list[float]:
    """Deterministic structural embedding of an ingredient-list string.

    Every character of every lowercase word is spread over three dimensions
    chosen by independent multiply/XOR hashes of (character code, character
    position, word index); sine/cosine contributions are scaled by position
    so later and longer words stay distinguishable. Word count and average
    word length are mixed into the first few dimensions. A degenerate
    (near-zero) vector is regenerated from a hash of the whole text. The
    result is L2-normalized unless its magnitude is exactly zero.

    Same text always yields the same vector, in any process.
    """
    vector = np.zeros(dimensions, dtype=np.float64)
    words = re.findall(r"[^\W_]+", text.lower())

    for word_idx, word in enumerate(words):
        word_scale = 1.0 + 0.1 * word_idx
        for char_idx, ch in enumerate(word):
            code = ord(ch)
            pos = char_idx + 1
            scale = word_scale * (1.0 + pos / len(word))

            idx_a = ((code * 2654435761) ^ (pos * 40503) ^ (word_idx * 2246822519)) % dimensions
            idx_b = (((code + 7) * 16777619) ^ (pos * 73856093) ^ ((word_idx + 1) * 19349663)) % dimensions
            idx_c = (((code ^ (pos * 131)) * 83492791) ^ (len(word) * 2971215073) ^ word_idx) % dimensions

            vector[idx_a] += math.sin(code * pos * 0.1 + word_idx) * scale
            vector[idx_b] += math.cos(code * 0.05 + pos * 0.7 + word_idx * 0.3) * scale
            vector[idx_c] += math.sin(code * 0.013 * (word_idx + 1) + len(word)) * 0.5 * scale

    if words:
        word_count = len(words)
        avg_length = sum(len(word) for word in words) / word_count
        for k in range(min(_STRUCTURAL_DIMS, dimensions)):
            vector[k] += 0.1 * math.sin(word_count * (k + 1) * 0.5) + 0.1 * math.cos(avg_length * (k + 1) * 0.3)

    magnitude = float(np.linalg.norm(vector))
    if magnitude < _NEAR_ZERO:
        seed = _string_hash(text)
        vector = np.array(
            [math.sin(seed * 0.001 + (i + 1) * 0.618) for i in range(dimensions)], dtype=np.float64
        )
        magnitude = float(np.linalg.norm(vector))

    if magnitude == 0.0:
        return vector.tolist()
    return (vector / magnitude).tolist()


# ============================================================================
# Generator
# ============================================================================


class EmbeddingGenerator:
    """Embeds text with the remote provider when configured, else locally.

    Args:
        remote: Remote provider. When None, a GeminiEmbeddingProvider is built
            lazily from config on first use, if GEMINI_API_KEY is set.
        fallback: Local provider used when remote is absent or fails.
        use_cache: Keep a read-through cache keyed by (source, exact text).
            Defaults to config.ENABLE_EMBEDDING_CACHE.
        cache_size: Maximum number of cached vectors; the least recently used
            entry is evicted first. Defaults to config.EMBEDDING_CACHE_SIZE.
    """

    def __init__(
        self,
        remote: Optional[EmbeddingProvider] = None,
        fallback: Optional[EmbeddingProvider] = None,
        use_cache: Optional[bool] = None,
        cache_size: Optional[int] = None,
    ) -> None:
        self._remote = remote
        self._fallback = fallback or HashEmbeddingProvider()
        self.use_cache = config.ENABLE_EMBEDDING_CACHE if use_cache is None else use_cache
        self.cache_size = config.EMBEDDING_CACHE_SIZE if cache_size is None else cache_size
        self._cache: OrderedDict[tuple[str, str], list[float]] = OrderedDict()
        self.last_source: Optional[str] = None

    def _remote_provider(self) -> Optional[EmbeddingProvider]:
        if self._remote is not None:
            return self._remote
        if not config.gemini_configured:
            return None
        try:
            self._remote = GeminiEmbeddingProvider(
                api_key=config.GEMINI_API_KEY,
                model=config.EMBEDDING_MODEL,
                dimensions=config.EMBEDDING_DIMENSIONS,
                timeout_seconds=config.EMBEDDING_TIMEOUT_SECONDS,
            )
        except Exception as e:
            logger.warning(f"Remote embedding provider unavailable: {e}")
            return None
        return self._remote

    def _cached(self, source: str, text: str) -> Optional[list[float]]:
        if not self.use_cache:
            return None
        hit = self._cache.get((source, text))
        if hit is None:
            return None
        self._cache.move_to_end((source, text))
        return list(hit)

    def _store(self, source: str, text: str, vector: list[float]) -> None:
        if not self.use_cache or self.cache_size < 1:
            return
        self._cache[(source, text)] = list(vector)
        self._cache.move_to_end((source, text))
        while len(self._cache) > self.cache_size:
            self._cache.popitem(last=False)

    def _record(self, source: str) -> None:
        self.last_source = source
        logger.info(f"EMBEDDING_SOURCE={source}", extra={"embedding_source": source})

    async def embed_with_source(self, text: str) -> tuple[list[float], str]:
        """Embed ``text`` and report which provider produced the vector.

        Never raises: any remote failure yields the fallback vector.
        """
        remote = self._remote_provider()

        if remote is not None:
            vector = self._cached(remote.source, text)
            if vector is None:
                try:
                    vector = await remote.embed(text)
                    self._store(remote.source, text, vector)
                except Exception as e:
                    logger.warning(f"Remote embedding failed, using fallback: {e}")
                    vector = None
            if vector is not None:
                self._record(remote.source)
                return vector, remote.source

        return await self.embed_fallback(text), self._fallback.source

    async def embed(self, text: str) -> list[float]:
        """Embed ``text`` (an ingredient list joined with ", "). Never raises."""
        vector, _ = await self.embed_with_source(text)
        return vector

    async def embed_fallback(self, text: str) -> list[float]:
        """Embed ``text`` with the local provider only."""
        vector = self._cached(self._fallback.source, text)
        if vector is None:
            vector = await self._fallback.embed(text)
            self._store(self._fallback.source, text, vector)
        self._record(self._fallback.source)
        return vector

    def clear_cache(self) -> None:
        self._cache.clear()


_default_generator: Optional[EmbeddingGenerator] = None


def get_embedding_generator() -> EmbeddingGenerator:
    """Process-wide generator, created on first use."""
    global _default_generator
    if _default_generator is None:
        _default_generator = EmbeddingGenerator()
    return _default_generator


async def generate_embedding(text: str) -> list[float]:
    """Embed ``text`` with the process-wide generator."""
    return await get_embedding_generator().embed(text)


# ============================================================================
# Similarity
# ============================================================================


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two equal-length vectors.

    Returns 0.0 when either vector has zero magnitude.

    Raises:
        InputError: If the vectors differ in length.
    """
    if len(a) != len(b):
        raise InputError(f"Vectors must have the same length, got {len(a)} and {len(b)}")

    a_arr = np.asarray(a, dtype=np.float64)
    b_arr = np.asarray(b, dtype=np.float64)
    norm_a = np.linalg.norm(a_arr)
    norm_b = np.linalg.norm(b_arr)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(a_arr, b_arr) / (norm_a * norm_b))
