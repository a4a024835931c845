from typing import Dict, Any, Optional, Tuple
from dataclasses import dataclass

from .config import settings


@dataclass(frozen=True)
class SourceInfo:
    """Provenance of a text passage."""
    filename: str
    page_num: Optional[int] = None
    file_type: str = ""
    chunk_idx: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "filename": self.filename,
            "page_num": self.page_num,
            "file_type": self.file_type,
            "chunk_idx": self.chunk_idx,
        }


@dataclass(frozen=True)
class Document:
    """A text passage supplied by the caller to build the graph."""
    text: str
    source: SourceInfo


@dataclass(frozen=True)
class TextNode:
    """Represents a deduplicated text passage in the knowledge graph."""
    id: int
    text: str
    source: SourceInfo
    embedding: Tuple[float, ...]
    token_count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "text": self.text,
            "source": self.source.to_dict(),
            "embedding": list(self.embedding),
            "token_count": self.token_count,
        }


@dataclass(frozen=True)
class KeywordNode:
    """Represents a keyword node in the knowledge graph."""
    id: int
    text: str
    embedding: Tuple[float, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "text": self.text,
            "embedding": list(self.embedding),
        }


@dataclass(frozen=True)
class GraphConfig:
    """Build-time parameters.

    Only ``embedding_dim`` is read by the build pipeline. The remaining
    fields are reserved for relationship-building strategies and are kept
    so that callers can keep passing them.
    """
    embedding_dim: int = 768
    k_neighbors: int = 30
    trust_num: int = 5
    negative_multiplier: int = 7
    connect_threshold: float = 0.2

    def __post_init__(self):
        if self.embedding_dim < 0:
            raise ValueError(f"embedding_dim must be non-negative, got {self.embedding_dim}")

    @classmethod
    def from_settings(cls) -> "GraphConfig":
        """Create a config from the application settings."""
        return cls(
            embedding_dim=settings.embedding_dim,
            k_neighbors=settings.k_neighbors,
            trust_num=settings.trust_num,
            negative_multiplier=settings.negative_multiplier,
            connect_threshold=settings.connect_threshold,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "embedding_dim": self.embedding_dim,
            "k_neighbors": self.k_neighbors,
            "trust_num": self.trust_num,
            "negative_multiplier": self.negative_multiplier,
            "connect_threshold": self.connect_threshold,
        }
