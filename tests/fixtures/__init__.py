"""Test fixtures for deterministic testing."""

from tests.fixtures.determinism import content_hash, result_hash

__all__ = [
    "content_hash",
    "result_hash",
]
