from typing import List, Dict, Any, Optional, Sequence, Tuple, Union
import numpy as np

from ..types import Document, GraphConfig, KeywordNode, SourceInfo, TextNode
from ..embedding.embedding_service import EmbeddingService
from ..processor.deduplicator import remove_duplicates
from ..processor.keyword_extractor import extract_keywords
from ..search.similarity_search import search_similar
from ..utils.logger import app_logger
from . import snapshot


class GraphStore:
    """In-memory knowledge graph of text and keyword nodes.

    Holds the deduplicated text nodes, the keyword nodes extracted from
    them and a dense text-by-keyword relevance matrix (``u_mat``). The store
    is not synchronized; callers must not query it while ``build_kg`` runs.
    """

    def __init__(self, embedding_service: Optional[EmbeddingService] = None):
        self.logger = app_logger.bind(component="graph_store")
        self.embedding_service = embedding_service or EmbeddingService()

        self._texts: List[TextNode] = []
        self._keywords: List[KeywordNode] = []
        self._u_mat: Optional[np.ndarray] = None
        # Reserved for path-based relationship strategies, never built yet
        self._pred_mat: Optional[np.ndarray] = None

    @property
    def u_mat(self) -> Optional[np.ndarray]:
        """Text-by-keyword relevance matrix, or None when either side is empty."""
        return self._u_mat

    @property
    def pred_mat(self) -> Optional[np.ndarray]:
        return self._pred_mat

    def build_kg(self, documents: Sequence[Document], config: Optional[GraphConfig] = None):
        """Build the knowledge graph from documents, replacing any previous graph."""
        if config is None:
            config = GraphConfig.from_settings()

        self.logger.info(f"Building knowledge graph from {len(documents)} documents...")

        texts = [doc.text for doc in documents]
        sources = [doc.source for doc in documents]

        self.logger.info("Generating embeddings...")
        vectors = self.embedding_service.embed_texts(texts, config.embedding_dim)
        token_counts = [len(text.split()) for text in texts]

        self.logger.info("Removing duplicate texts...")
        texts, sources, vectors, token_counts = remove_duplicates(texts, sources, vectors, token_counts)
        self.logger.info(f"After deduplication: {len(texts)} texts")

        text_nodes = [
            TextNode(
                id=idx,
                text=text,
                source=source,
                embedding=tuple(vector),
                token_count=count,
            )
            for idx, (text, source, vector, count) in enumerate(zip(texts, sources, vectors, token_counts))
        ]

        self.logger.info("Extracting keywords...")
        keywords = extract_keywords(text_nodes)
        self.logger.info(f"Extracted {len(keywords)} unique keywords")

        keyvectors = self.embedding_service.embed_texts(keywords, config.embedding_dim)
        keyword_nodes = [
            KeywordNode(id=idx, text=keyword, embedding=tuple(vector))
            for idx, (keyword, vector) in enumerate(zip(keywords, keyvectors))
        ]

        self.logger.info("Building keyword relationships...")
        u_mat = self._build_keyword_relationships(len(text_nodes), len(keyword_nodes))

        self._texts = text_nodes
        self._keywords = keyword_nodes
        self._u_mat = u_mat
        self._pred_mat = None

    @staticmethod
    def _build_keyword_relationships(n_texts: int, n_keywords: int) -> Optional[np.ndarray]:
        """Dense relevance matrix; entry (i, j) is (i + j) / (n_texts + n_keywords)."""
        if n_texts == 0 or n_keywords == 0:
            return None

        rows = np.arange(n_texts, dtype=np.float32)[:, np.newaxis]
        cols = np.arange(n_keywords, dtype=np.float32)[np.newaxis, :]
        return ((rows + cols) / np.float32(n_texts + n_keywords)).astype(np.float32)

    def search_similar_texts(self, query_vec: Sequence[float], k: int) -> List[Tuple[int, float]]:
        """Find the k text nodes nearest to the query vector."""
        return search_similar(query_vec, k, [text.embedding for text in self._texts])

    def search_similar_keywords(self, query_vec: Sequence[float], k: int) -> List[Tuple[int, float]]:
        """Find the k keyword nodes nearest to the query vector."""
        return search_similar(query_vec, k, [kw.embedding for kw in self._keywords])

    def get_keyword_related_texts(self, keyword_idx: int, k: int) -> List[int]:
        """Text indices ranked by descending relevance to a keyword."""
        if self._u_mat is None or k <= 0:
            return []

        n_texts, n_keywords = self._u_mat.shape
        if keyword_idx < 0 or keyword_idx >= n_keywords:
            return []

        scores = self._u_mat[:, keyword_idx]
        # Stable sort on negated scores keeps equal scores in row order
        order = np.argsort(-scores, kind="stable")[:min(k, n_texts)]
        return [int(i) for i in order]

    def get_adjacent_keywords(self, keyword_idx: int, k: int) -> List[int]:
        """Keyword indices adjacent to a keyword.

        Placeholder adjacency: every other keyword, in index order.
        """
        if not self._keywords or k <= 0:
            return []

        adjacent = [i for i in range(len(self._keywords)) if i != keyword_idx]
        return adjacent[:min(k, len(adjacent))]

    def get_texts(self) -> List[TextNode]:
        """Get all text nodes."""
        return list(self._texts)

    def get_keywords(self) -> List[KeywordNode]:
        """Get all keyword nodes."""
        return list(self._keywords)

    def get_sources(self) -> List[SourceInfo]:
        """Get the source of each text node, in id order."""
        return [text.source for text in self._texts]

    def get_stats(self) -> Dict[str, Any]:
        """Get graph statistics."""
        if self._texts:
            embedding_dim = len(self._texts[0].embedding)
        elif self._keywords:
            embedding_dim = len(self._keywords[0].embedding)
        else:
            embedding_dim = None

        return {
            "texts": len(self._texts),
            "keywords": len(self._keywords),
            "tokens": sum(text.token_count for text in self._texts),
            "embedding_dim": embedding_dim,
            "u_mat_shape": tuple(self._u_mat.shape) if self._u_mat is not None else None,
            "has_pred_mat": self._pred_mat is not None,
        }

    def clear(self):
        """Drop all nodes and matrices."""
        self._texts = []
        self._keywords = []
        self._u_mat = None
        self._pred_mat = None
        self.logger.info("Cleared knowledge graph")

    def to_json(self) -> str:
        """Serialize text and keyword nodes to a snapshot string."""
        return snapshot.dumps(self._texts, self._keywords)

    @classmethod
    def from_json(cls, data: Union[str, bytes], embedding_service: Optional[EmbeddingService] = None) -> "GraphStore":
        """Create a store from a snapshot string or bytes. Matrices are left absent."""
        texts, keywords = snapshot.loads(data)
        return cls._from_nodes(texts, keywords, embedding_service)

    def save(self, path: str):
        """Write the snapshot to a file."""
        snapshot.save_snapshot(path, self._texts, self._keywords)

    @classmethod
    def load(cls, path: str, embedding_service: Optional[EmbeddingService] = None) -> "GraphStore":
        """Load a store from a snapshot file. Matrices are left absent."""
        texts, keywords = snapshot.load_snapshot(path)
        return cls._from_nodes(texts, keywords, embedding_service)

    @classmethod
    def _from_nodes(cls, texts: List[TextNode], keywords: List[KeywordNode],
                    embedding_service: Optional[EmbeddingService]) -> "GraphStore":
        store = cls(embedding_service)
        store._texts = texts
        store._keywords = keywords
        return store
