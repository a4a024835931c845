"""
Snapshot persistence for the graph store.

A snapshot is a JSON object with two ordered arrays, ``texts`` and
``keywords``. The relevance matrix is derived state and is never written.
"""
from typing import List, Optional, Tuple, Union
import json
from pathlib import Path
from pydantic import BaseModel, ValidationError

from ..errors import SnapshotFormatError, SnapshotIOError
from ..types import KeywordNode, SourceInfo, TextNode
from ..utils.logger import app_logger


logger = app_logger.bind(component="snapshot")


class SourceRecord(BaseModel):
    """Serialized provenance."""
    filename: str
    page_num: Optional[int] = None
    file_type: str
    chunk_idx: Optional[int] = None


class TextRecord(BaseModel):
    """Serialized text node."""
    id: int
    text: str
    source: SourceRecord
    embedding: List[float]
    token_count: int


class KeywordRecord(BaseModel):
    """Serialized keyword node."""
    id: int
    text: str
    embedding: List[float]


class GraphSnapshot(BaseModel):
    """Top-level snapshot document."""
    texts: List[TextRecord]
    keywords: List[KeywordRecord]


def dumps(texts: List[TextNode], keywords: List[KeywordNode]) -> str:
    """Encode node sets as a snapshot string."""
    data = {
        "texts": [node.to_dict() for node in texts],
        "keywords": [node.to_dict() for node in keywords],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def loads(data: Union[str, bytes]) -> Tuple[List[TextNode], List[KeywordNode]]:
    """Decode a snapshot string or UTF-8 bytes into node sets."""
    try:
        raw = json.loads(data)
    except UnicodeDecodeError as e:
        raise SnapshotFormatError(f"Snapshot is not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotFormatError(f"Snapshot is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise SnapshotFormatError(f"Snapshot must be a JSON object, got {type(raw).__name__}")

    try:
        snapshot = GraphSnapshot.model_validate(raw)
    except ValidationError as e:
        raise SnapshotFormatError(f"Snapshot does not match the expected shape: {e}") from e

    texts = [
        TextNode(
            id=record.id,
            text=record.text,
            source=SourceInfo(**record.source.model_dump()),
            embedding=tuple(record.embedding),
            token_count=record.token_count,
        )
        for record in snapshot.texts
    ]
    keywords = [
        KeywordNode(id=record.id, text=record.text, embedding=tuple(record.embedding))
        for record in snapshot.keywords
    ]
    return texts, keywords


def save_snapshot(path: str, texts: List[TextNode], keywords: List[KeywordNode]):
    """Write a snapshot file, creating or overwriting it.

    The data goes to a sibling ``.tmp`` file first and is moved over the
    target only once fully written, so an existing snapshot is never left
    truncated.
    """
    storage_path = Path(path)
    tmp_path = storage_path.with_name(storage_path.name + ".tmp")
    data = dumps(texts, keywords)
    try:
        storage_path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, 'w', encoding='utf-8') as f:
            f.write(data)
        tmp_path.replace(storage_path)
    except OSError as e:
        logger.error(f"Error saving graph snapshot to {storage_path}: {e}")
        tmp_path.unlink(missing_ok=True)
        raise SnapshotIOError(f"Cannot write snapshot {storage_path}: {e}") from e

    logger.info(f"Saved graph snapshot to {storage_path} ({len(texts)} texts, {len(keywords)} keywords)")


def load_snapshot(path: str) -> Tuple[List[TextNode], List[KeywordNode]]:
    """Read a snapshot file."""
    storage_path = Path(path)
    try:
        with open(storage_path, 'r', encoding='utf-8') as f:
            data = f.read()
    except OSError as e:
        logger.error(f"Error loading graph snapshot from {storage_path}: {e}")
        raise SnapshotIOError(f"Cannot read snapshot {storage_path}: {e}") from e
    except UnicodeDecodeError as e:
        logger.error(f"Error decoding graph snapshot {storage_path}: {e}")
        raise SnapshotFormatError(f"Snapshot {storage_path} is not UTF-8 text: {e}") from e

    try:
        texts, keywords = loads(data)
    except SnapshotFormatError as e:
        logger.error(f"Error parsing graph snapshot {storage_path}: {e}")
        raise

    logger.info(f"Loaded graph snapshot from {storage_path} ({len(texts)} texts, {len(keywords)} keywords)")
    return texts, keywords
