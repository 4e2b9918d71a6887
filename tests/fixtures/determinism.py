"""Determinism utilities for reproducible testing."""

from __future__ import annotations

import hashlib
import json
from typing import Any


def content_hash(content: str | bytes) -> str:
    """Generate a deterministic hash for content."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()[:16]


def result_hash(result: Any) -> str:
    """Hash anything with a to_dict() via canonical JSON."""
    payload = json.dumps(result.to_dict(), sort_keys=True, separators=(",", ":"))
    return content_hash(payload)
