#!/usr/bin/env python3
"""
Test runner script for the knowledge graph package.

This script runs the test suite including:
- Environment verification
- Embedding generator tests
- Deduplicator and keyword extractor tests
- Similarity search tests
- Graph store and snapshot tests

Usage:
    python vectorized_kg/tests/run_tests.py [options]

Options:
    --env-only       Only run environment tests
    --embedding-only Only run embedding tests
    --search-only    Only run similarity search tests
    --graph-only     Only run graph store and snapshot tests
    --verbose        Verbose output
"""

import sys
import argparse
from pathlib import Path

# Add package root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

TEST_DIR = "vectorized_kg/tests"


def run_tests(args):
    """Run tests based on arguments."""
    import pytest

    pytest_args = []

    # Determine which tests to run
    test_files = []

    if args.env_only:
        test_files.append(f"{TEST_DIR}/test_requirements.py")
    elif args.embedding_only:
        test_files.append(f"{TEST_DIR}/test_embedding_service.py")
    elif args.search_only:
        test_files.append(f"{TEST_DIR}/test_similarity_search.py")
    elif args.graph_only:
        test_files.extend([
            f"{TEST_DIR}/test_graph_store.py",
            f"{TEST_DIR}/test_snapshot.py",
        ])
    else:
        # Run all tests
        test_files = [
            f"{TEST_DIR}/test_requirements.py",
            f"{TEST_DIR}/test_config.py",
            f"{TEST_DIR}/test_embedding_service.py",
            f"{TEST_DIR}/test_processor.py",
            f"{TEST_DIR}/test_similarity_search.py",
            f"{TEST_DIR}/test_graph_store.py",
            f"{TEST_DIR}/test_snapshot.py",
            f"{TEST_DIR}/test_cli.py",
        ]

    pytest_args.extend(test_files)

    # Add verbose flag
    if args.verbose:
        pytest_args.append("-v")
        pytest_args.append("-s")

    pytest_args.extend([
        "--tb=short",  # Shorter traceback format
        "--durations=10",  # Show 10 slowest tests
    ])

    print("Running tests with arguments:", pytest_args)
    print("=" * 60)

    exit_code = pytest.main(pytest_args)

    print("=" * 60)
    if exit_code == 0:
        print("✓ All tests passed!")
    else:
        print(f"✗ Tests failed with exit code: {exit_code}")

    return exit_code


def check_environment():
    """Check if the environment is ready for testing."""
    print("Checking environment...")

    if not Path(TEST_DIR).exists():
        print(f"Error: {TEST_DIR} directory not found. Please run from project root.")
        return False

    critical_files = [
        "vectorized_kg/config.py",
        "vectorized_kg/types.py",
        "vectorized_kg/graph/graph_store.py",
        "vectorized_kg/graph/snapshot.py",
        "vectorized_kg/search/similarity_search.py",
    ]

    missing_files = [file_path for file_path in critical_files if not Path(file_path).exists()]

    if missing_files:
        print(f"Error: Missing critical files: {missing_files}")
        return False

    print("✓ Environment check passed")
    return True


def main():
    """Main function."""
    parser = argparse.ArgumentParser(
        description="Run tests for the knowledge graph package"
    )

    parser.add_argument("--env-only", action="store_true",
                        help="Only run environment verification tests")
    parser.add_argument("--embedding-only", action="store_true",
                        help="Only run embedding tests")
    parser.add_argument("--search-only", action="store_true",
                        help="Only run similarity search tests")
    parser.add_argument("--graph-only", action="store_true",
                        help="Only run graph store and snapshot tests")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Verbose output")

    args = parser.parse_args()

    if not check_environment():
        sys.exit(1)

    exit_code = run_tests(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
