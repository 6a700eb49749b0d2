"""Tests for deterministic hashing utilities."""

from __future__ import annotations

import re

from personaclf.core.hashing import _HASH_TRUNCATION, canonical_json_hash, stable_hash


class TestStableHash:
    def test_deterministic_same_input(self) -> None:
        assert stable_hash("hello") == stable_hash("hello")

    def test_different_inputs_yield_different_hashes(self) -> None:
        assert stable_hash("input-a") != stable_hash("input-b")

    def test_output_length_and_charset(self) -> None:
        result = stable_hash("anything")
        assert len(result) == _HASH_TRUNCATION
        assert re.fullmatch(r"[0-9a-f]+", result)


class TestCanonicalJsonHash:
    def test_key_order_does_not_matter(self) -> None:
        assert canonical_json_hash({"a": 1, "b": [1.5, 2]}) == canonical_json_hash(
            {"b": [1.5, 2], "a": 1}
        )

    def test_float_precision_matters(self) -> None:
        assert canonical_json_hash({"x": 0.1}) != canonical_json_hash({"x": 0.1000000001})
