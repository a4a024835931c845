from typing import List
import hashlib
import numpy as np

from ..config import settings
from ..utils.logger import app_logger


class HashEmbeddingProvider:
    """Deterministic placeholder embeddings keyed by text content.

    The text bytes are hashed to a 64-bit seed, the seed drives a numpy
    random generator, and ``dim`` uniform draws mapped to [-1, 1] are
    L2-normalized. The same text always gives the same vector, in this
    process and in any other.
    """

    def __init__(self):
        self.logger = app_logger.bind(component="hash_embedding")

    @staticmethod
    def _seed_for(text: str) -> int:
        digest = hashlib.blake2b(text.encode("utf-8"), digest_size=8).digest()
        return int.from_bytes(digest, "little")

    def embed_text(self, text: str, dim: int) -> List[float]:
        """Generate embedding for a single text."""
        rng = np.random.default_rng(self._seed_for(text))
        vec = (rng.random(dim) * 2.0 - 1.0).astype(np.float32)

        norm = np.linalg.norm(vec)
        if norm > 0.0:
            vec = vec / norm

        return vec.astype(np.float32).tolist()

    def embed_texts(self, texts: List[str], dim: int) -> List[List[float]]:
        """Generate embeddings for multiple texts."""
        return [self.embed_text(text, dim) for text in texts]


class EmbeddingService:
    """Service for embedding generation."""

    def __init__(self, provider: str = None):
        self.logger = app_logger.bind(component="embedding_service")
        self.provider_name = provider or settings.embedding_provider
        self.provider = self._initialize_provider()

    def _initialize_provider(self):
        """Initialize the embedding provider based on configuration."""
        if self.provider_name == "hash":
            return HashEmbeddingProvider()
        else:
            raise ValueError(f"Unsupported embedding provider: {self.provider_name}")

    def embed_text(self, text: str, dim: int = None) -> List[float]:
        """Generate embedding for a single text."""
        return self.provider.embed_text(text, dim if dim is not None else settings.embedding_dim)

    def embed_texts(self, texts: List[str], dim: int = None) -> List[List[float]]:
        """Generate embeddings for multiple texts."""
        if not texts:
            return []

        dim = dim if dim is not None else settings.embedding_dim
        self.logger.debug(f"Embedding {len(texts)} texts with dimension {dim}")
        return self.provider.embed_texts(texts, dim)

    def embed_query(self, query: str, dim: int = None) -> List[float]:
        """Generate embedding for a search query."""
        return self.embed_text(query, dim)
