from typing import List, Sequence, Tuple
import numpy as np


# Distance used when a pair cannot be compared (zero norm or length mismatch)
MAX_DISTANCE = 1.0


def cosine_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine distance ``1 - cos(a, b)``, or 1.0 for zero-norm or mismatched vectors."""
    if len(a) != len(b):
        return MAX_DISTANCE

    a_np = np.asarray(a, dtype=np.float64)
    b_np = np.asarray(b, dtype=np.float64)

    norm_a = np.linalg.norm(a_np)
    norm_b = np.linalg.norm(b_np)
    if norm_a == 0.0 or norm_b == 0.0:
        return MAX_DISTANCE

    distance = 1.0 - float(np.dot(a_np, b_np)) / (norm_a * norm_b)
    return float(np.clip(distance, 0.0, 2.0))


def search_similar(query_vector: Sequence[float],
                   k: int,
                   corpus: Sequence[Sequence[float]]) -> List[Tuple[int, float]]:
    """
    Exhaustive nearest-neighbour scan.

    Args:
        query_vector: Query embedding
        k: Maximum number of results
        corpus: Stored embeddings, addressed by position

    Returns:
        Up to ``min(k, len(corpus))`` ``(index, distance)`` pairs, nearest
        first. Equal distances keep ascending index order.
    """
    if len(corpus) == 0 or k <= 0:
        return []

    distances = np.array([cosine_distance(query_vector, vec) for vec in corpus], dtype=np.float64)

    k = min(k, len(corpus))
    top_indices = np.argsort(distances, kind="stable")[:k]

    return [(int(idx), float(distances[idx])) for idx in top_indices]
