import pytest
from pathlib import Path
from typing import Callable, Generator, List
import sys

# Add package root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from vectorized_kg.config import settings
from vectorized_kg.graph.graph_store import GraphStore
from vectorized_kg.types import Document, GraphConfig, SourceInfo


@pytest.fixture(scope="session")
def test_settings():
    """Override settings for testing."""
    original_settings = {}

    # Store original values
    original_settings['embedding_provider'] = settings.embedding_provider
    original_settings['embedding_dim'] = settings.embedding_dim

    settings.embedding_provider = "hash"
    settings.embedding_dim = 768

    yield settings

    # Restore original values
    for key, value in original_settings.items():
        setattr(settings, key, value)


@pytest.fixture
def graph_config(test_settings) -> GraphConfig:
    """Default build configuration."""
    return GraphConfig()


@pytest.fixture
def make_document() -> Callable[..., Document]:
    """Factory for documents with numbered provenance."""
    def _make(text: str, n: int = 1, file_type: str = "txt") -> Document:
        return Document(
            text=text,
            source=SourceInfo(
                filename=f"doc{n}.{file_type}",
                page_num=n,
                file_type=file_type,
                chunk_idx=n - 1,
            ),
        )
    return _make


@pytest.fixture
def sample_documents(make_document) -> List[Document]:
    """Small corpus with shared and distinct long words."""
    return [
        make_document("Graph stores keep text nodes and keyword nodes", 1),
        make_document("Keyword nodes carry their own embedding vectors", 2),
        make_document("Cosine distance ranks the nearest text nodes", 3),
    ]


@pytest.fixture
def built_store(graph_config, sample_documents) -> GraphStore:
    """Store built from the sample corpus."""
    store = GraphStore()
    store.build_kg(sample_documents, graph_config)
    return store


@pytest.fixture
def snapshot_path(tmp_path) -> Generator[Path, None, None]:
    """Path for a snapshot file inside a temporary directory."""
    yield tmp_path / "graph.json"
