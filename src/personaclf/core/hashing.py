"""Deterministic hashing utilities for schema and model fingerprinting."""

from __future__ import annotations

import hashlib
import json
from typing import Any

_HASH_TRUNCATION = 12


def stable_hash(payload: str) -> str:
    """Deterministic SHA-256 of *payload*, truncated to 12 hex chars.

    Args:
        payload: Arbitrary string to hash.

    Returns:
        First 12 hexadecimal characters of the SHA-256 digest.
    """
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
    return digest[:_HASH_TRUNCATION]


def canonical_json_hash(data: Any) -> str:
    """Hash a JSON-serialisable structure independent of key order.

    Floats are serialised with ``repr`` precision by :mod:`json`, so two
    parameter sets hash equal only if they are bit-for-bit equal.

    Args:
        data: Dicts, lists, strings and numbers.

    Returns:
        A :func:`stable_hash` of the compact, key-sorted JSON encoding.
    """
    payload = json.dumps(data, sort_keys=True, separators=(",", ":"))
    return stable_hash(payload)
