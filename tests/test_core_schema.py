"""Tests for the canonical feature schema and feature descriptors.

Covers: TC-SCHEMA-001 (canonical order), TC-SCHEMA-002 (deterministic
hash), TC-SCHEMA-003 (category grouping), TC-SCHEMA-004 (FeatureSpec
validation).
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from personaclf.core.schema import (
    FEATURE_SPECS_V1,
    FeatureSchemaV1,
    build_schema_hash,
    check_unique_ids,
    features_by_category,
)
from personaclf.core.types import CATEGORY_TITLES, FeatureCategory, FeatureSpec


class TestCanonicalOrder:
    """TC-SCHEMA-001: 26 features in a fixed canonical order."""

    def test_twenty_six_unique_features(self) -> None:
        assert len(FEATURE_SPECS_V1) == 26
        assert len(set(FeatureSchemaV1.FEATURE_IDS)) == 26

    def test_endpoints(self) -> None:
        assert FEATURE_SPECS_V1[0].id == "social_energy"
        assert FEATURE_SPECS_V1[9].id == "deep_reflection"
        assert FEATURE_SPECS_V1[-1].id == "work_style_collaborative"

    def test_index_of(self) -> None:
        assert FeatureSchemaV1.index_of("empathy") == 7
        with pytest.raises(KeyError):
            FeatureSchemaV1.index_of("nonexistent")

    def test_check_unique_ids_rejects_duplicates(self) -> None:
        spec = FeatureSpec(id="dup", label="Dup", category=FeatureCategory.social)
        with pytest.raises(ValueError, match="dup"):
            check_unique_ids([spec, spec])


class TestSchemaHash:
    """TC-SCHEMA-002: the schema hash depends only on the ordered ids."""

    def test_deterministic(self) -> None:
        assert build_schema_hash(FEATURE_SPECS_V1) == FeatureSchemaV1.SCHEMA_HASH

    def test_depends_on_order(self) -> None:
        reordered = list(reversed(FEATURE_SPECS_V1))
        assert build_schema_hash(reordered) != FeatureSchemaV1.SCHEMA_HASH

    def test_ignores_labels(self) -> None:
        relabelled = [
            spec.model_copy(update={"label": spec.label.upper()}) for spec in FEATURE_SPECS_V1
        ]
        assert build_schema_hash(relabelled) == FeatureSchemaV1.SCHEMA_HASH


class TestCategories:
    """TC-SCHEMA-003: features grouped by category in canonical order."""

    def test_group_sizes(self) -> None:
        grouped = features_by_category()
        assert [c.value for c in grouped] == ["social", "cognitive", "behavioral", "lifestyle"]
        assert [len(v) for v in grouped.values()] == [9, 4, 5, 8]

    def test_groups_preserve_canonical_order(self) -> None:
        flattened = [spec for specs in features_by_category().values() for spec in specs]
        assert tuple(flattened) == FEATURE_SPECS_V1

    def test_empty_categories_omitted(self) -> None:
        specs = [FeatureSpec(id="x", label="X", category=FeatureCategory.lifestyle)]
        assert list(features_by_category(specs)) == [FeatureCategory.lifestyle]

    def test_every_category_has_a_title(self) -> None:
        assert set(CATEGORY_TITLES) == set(FeatureCategory)


class TestFeatureSpec:
    """TC-SCHEMA-004: FeatureSpec is a frozen, validated contract."""

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            FEATURE_SPECS_V1[0].id = "other"  # type: ignore[misc]

    @pytest.mark.parametrize("bad_id", ["", "Has Space", "9lives", "dash-ed"])
    def test_rejects_bad_ids(self, bad_id: str) -> None:
        with pytest.raises(ValidationError):
            FeatureSpec(id=bad_id, label="L", category=FeatureCategory.social)

    def test_rejects_unknown_category(self) -> None:
        with pytest.raises(ValidationError):
            FeatureSpec(id="ok", label="L", category="spiritual")  # type: ignore[arg-type]
