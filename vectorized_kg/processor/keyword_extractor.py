from typing import Iterable, List

from ..types import TextNode


MIN_KEYWORD_LENGTH = 4


def _preprocess_text(text: str) -> List[str]:
    """Split on whitespace, drop short tokens and lowercase the rest."""
    return [token.lower() for token in text.split() if len(token) >= MIN_KEYWORD_LENGTH]


def extract_keywords(text_nodes: Iterable[TextNode]) -> List[str]:
    """
    Extract candidate keywords from text nodes.

    Every whitespace token longer than three characters is lowercased and
    kept once across the whole corpus. No scoring is done. The result is in
    first-seen order so that keyword ids assigned from it are reproducible.
    """
    keywords = {}
    for node in text_nodes:
        for token in _preprocess_text(node.text):
            keywords.setdefault(token, None)

    return list(keywords)
