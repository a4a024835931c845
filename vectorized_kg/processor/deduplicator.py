from typing import List, Sequence, Tuple

from ..types import SourceInfo
from ..utils.logger import app_logger


logger = app_logger.bind(component="deduplicator")


def remove_duplicates(
    texts: Sequence[str],
    sources: Sequence[SourceInfo],
    vectors: Sequence[List[float]],
    token_counts: Sequence[int],
) -> Tuple[List[str], List[SourceInfo], List[List[float]], List[int]]:
    """
    Keep only the first occurrence of each distinct text.

    The four sequences are parallel. When a text repeats, the later record is
    dropped together with its source, vector and token count; sources are
    never merged. Relative order of the surviving records is preserved.

    Args:
        texts: Passage texts
        sources: Provenance for each text
        vectors: Embedding for each text
        token_counts: Whitespace token count for each text

    Returns:
        The four filtered lists, still parallel
    """
    if not (len(texts) == len(sources) == len(vectors) == len(token_counts)):
        raise ValueError(
            f"Parallel sequences differ in length: texts={len(texts)}, sources={len(sources)}, "
            f"vectors={len(vectors)}, token_counts={len(token_counts)}"
        )

    seen = set()
    kept_texts = []
    kept_sources = []
    kept_vectors = []
    kept_counts = []

    for text, source, vector, count in zip(texts, sources, vectors, token_counts):
        if text in seen:
            continue
        seen.add(text)
        kept_texts.append(text)
        kept_sources.append(source)
        kept_vectors.append(vector)
        kept_counts.append(count)

    dropped = len(texts) - len(kept_texts)
    if dropped:
        logger.debug(f"Dropped {dropped} duplicate texts")

    return kept_texts, kept_sources, kept_vectors, kept_counts
