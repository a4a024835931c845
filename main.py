#!/usr/bin/env python3
"""
vectorized-kg - Knowledge Graph Command Line Entry Point

Builds an in-memory knowledge graph of text passages and keywords, saves it
as a JSON snapshot and runs nearest-neighbour queries against saved graphs.
"""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

# Add package root to Python path
sys.path.insert(0, str(Path(__file__).parent))

from vectorized_kg.config import settings
from vectorized_kg.errors import PersistenceError
from vectorized_kg.graph.graph_store import GraphStore
from vectorized_kg.types import Document, GraphConfig, SourceInfo
from vectorized_kg.utils.logger import app_logger


def load_documents(input_path: str):
    """Read a JSON array of {"text": ..., "source": {...}} objects."""
    with open(input_path, 'r', encoding='utf-8') as f:
        raw = json.load(f)

    documents = []
    for item in raw:
        source = item.get("source") or {}
        documents.append(Document(
            text=item["text"],
            source=SourceInfo(
                filename=source.get("filename", input_path),
                page_num=source.get("page_num"),
                file_type=source.get("file_type", ""),
                chunk_idx=source.get("chunk_idx"),
            ),
        ))
    return documents


def demo_documents():
    """Single-document corpus used when no subcommand is given."""
    return [
        Document(
            text="Hello world from vectorized-kg",
            source=SourceInfo(filename="test.txt", page_num=1, file_type="txt", chunk_idx=0),
        )
    ]


def run_build(args) -> int:
    config = GraphConfig.from_settings()
    if args.embedding_dim is not None:
        try:
            config = replace(config, embedding_dim=args.embedding_dim)
        except ValueError as e:
            app_logger.error(f"Invalid build configuration: {e}")
            return 1

    try:
        documents = load_documents(args.input)
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
        app_logger.error(f"Cannot read documents from {args.input}: {e}")
        return 1

    store = GraphStore()
    store.build_kg(documents, config)
    store.save(args.output)

    stats = store.get_stats()
    app_logger.info(f"Built graph with {stats['texts']} texts and {stats['keywords']} keywords")
    return 0


def run_search(args) -> int:
    store = GraphStore.load(args.graph)
    stats = store.get_stats()
    dim = stats["embedding_dim"] or settings.embedding_dim

    query_vec = store.embedding_service.embed_query(args.query, dim)

    if args.keywords:
        nodes = store.get_keywords()
        results = store.search_similar_keywords(query_vec, args.k)
    else:
        nodes = store.get_texts()
        results = store.search_similar_texts(query_vec, args.k)

    for rank, (idx, distance) in enumerate(results, start=1):
        print(f"{rank:>3}. [{idx}] {distance:.4f}  {nodes[idx].text}")

    app_logger.info(f"Search returned {len(results)} results")
    return 0


def run_stats(args) -> int:
    store = GraphStore.load(args.graph)
    print(json.dumps(store.get_stats(), indent=2))
    return 0


def run_demo() -> int:
    store = GraphStore()
    store.build_kg(demo_documents(), GraphConfig.from_settings())

    app_logger.info(
        f"Built graph with {len(store.get_texts())} texts and {len(store.get_keywords())} keywords"
    )
    return 0


def main():
    """Main entry point for the knowledge graph CLI."""
    parser = argparse.ArgumentParser(description="vectorized-kg - knowledge graph builder")
    subparsers = parser.add_subparsers(dest="command")

    build_parser = subparsers.add_parser("build", help="Build a graph from a documents JSON file")
    build_parser.add_argument("--input", required=True, help="JSON array of documents")
    build_parser.add_argument("--output", default=settings.graph_storage_path, help="Snapshot path")
    build_parser.add_argument("--embedding-dim", type=int, default=None, help="Embedding dimension")

    search_parser = subparsers.add_parser("search", help="Search a saved graph")
    search_parser.add_argument("--graph", default=settings.graph_storage_path, help="Snapshot path")
    search_parser.add_argument("--query", required=True, help="Query text")
    search_parser.add_argument("-k", type=int, default=5, help="Number of results")
    search_parser.add_argument("--keywords", action="store_true", help="Search keyword nodes instead of texts")

    stats_parser = subparsers.add_parser("stats", help="Show statistics of a saved graph")
    stats_parser.add_argument("--graph", default=settings.graph_storage_path, help="Snapshot path")

    args = parser.parse_args()

    app_logger.info("Starting vectorized-kg")

    try:
        if args.command == "build":
            exit_code = run_build(args)
        elif args.command == "search":
            exit_code = run_search(args)
        elif args.command == "stats":
            exit_code = run_stats(args)
        else:
            exit_code = run_demo()
    except PersistenceError as e:
        app_logger.error(f"Snapshot error: {e}")
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
