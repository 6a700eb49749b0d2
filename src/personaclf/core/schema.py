"""Feature schema versioning: canonical feature order and deterministic hashing."""

from __future__ import annotations

import json
from typing import Final, Sequence

from personaclf.core.hashing import stable_hash
from personaclf.core.types import FeatureCategory, FeatureSpec

_S = FeatureCategory.social
_C = FeatureCategory.cognitive
_B = FeatureCategory.behavioral
_L = FeatureCategory.lifestyle

# Canonical feature registry for schema v1.
# Order is significant: model arrays and input vectors are indexed by it,
# and the schema hash depends on it.
_FEATURES_V1: Final[tuple[FeatureSpec, ...]] = tuple(
    FeatureSpec(id=fid, label=label, category=cat)
    for fid, label, cat in (
        ("social_energy", "Social Energy", _S),
        ("alone_time_preference", "Isolation Bias", _S),
        ("talkativeness", "Verbal Flux", _S),
        ("group_comfort", "Collective Sync", _S),
        ("party_liking", "External Stimulation", _S),
        ("friendliness", "Social Affability", _S),
        ("listening_skill", "Input Receptivity", _S),
        ("empathy", "Emotional Resonance", _S),
        ("online_social_usage", "Digital Footprint", _S),
        ("deep_reflection", "Internal Processing", _C),
        ("curiosity", "Inquiry Quotient", _C),
        ("reading_habit", "Information Intake", _C),
        ("decision_speed", "Latency Period", _C),
        ("risk_taking", "Variance Tolerance", _B),
        ("excitement_seeking", "Dopamine Drive", _B),
        ("adventurousness", "Novelty Bias", _B),
        ("spontaneity", "Entropy Factor", _B),
        ("travel_desire", "Locality Drift", _B),
        ("organization", "System Logic", _L),
        ("planning", "Future Projection", _L),
        ("routine_preference", "Cycle Stability", _L),
        ("sports_interest", "Kinetic Drive", _L),
        ("gadget_usage", "Tech Integration", _L),
        ("leadership", "Hierarchy Position", _L),
        ("public_speaking_comfort", "Broadcast Confidence", _L),
        ("work_style_collaborative", "Peer Integration", _L),
    )
)


def build_schema_hash(features: Sequence[FeatureSpec]) -> str:
    """Hash the ordered feature ids.

    Labels and categories are presentation-only and are left out, so
    renaming a question does not invalidate stored models.
    """
    payload = json.dumps([f.id for f in features], separators=(",", ":"))
    return stable_hash(payload)


def check_unique_ids(features: Sequence[FeatureSpec]) -> None:
    """Raise ``ValueError`` if two specs share an ``id``."""
    seen: set[str] = set()
    dupes = [f.id for f in features if f.id in seen or seen.add(f.id)]  # type: ignore[func-returns-value]
    if dupes:
        raise ValueError(f"Duplicate feature ids: {dupes}")


class FeatureSchemaV1:
    """Schema contract for the questionnaire feature vector (v1).

    Holds the canonical feature list and a deterministic schema hash that
    model documents record so that a model fitted against a different
    feature order is rejected at load time.
    """

    VERSION: Final[str] = "v1"
    FEATURES: Final[tuple[FeatureSpec, ...]] = _FEATURES_V1
    FEATURE_IDS: Final[tuple[str, ...]] = tuple(f.id for f in _FEATURES_V1)
    SCHEMA_HASH: Final[str] = build_schema_hash(_FEATURES_V1)

    @classmethod
    def index_of(cls, feature_id: str) -> int:
        """Canonical position of *feature_id*.

        Raises:
            KeyError: If *feature_id* is not part of the schema.
        """
        try:
            return cls.FEATURE_IDS.index(feature_id)
        except ValueError:
            raise KeyError(feature_id) from None


FEATURE_SPECS_V1: Final[tuple[FeatureSpec, ...]] = FeatureSchemaV1.FEATURES

check_unique_ids(FEATURE_SPECS_V1)


def features_by_category(
    features: Sequence[FeatureSpec] = FEATURE_SPECS_V1,
) -> dict[FeatureCategory, list[FeatureSpec]]:
    """Group *features* by category, preserving canonical order inside each group.

    Categories come out in :class:`FeatureCategory` order; empty
    categories are omitted.
    """
    grouped: dict[FeatureCategory, list[FeatureSpec]] = {}
    for category in FeatureCategory:
        members = [f for f in features if f.category == category]
        if members:
            grouped[category] = members
    return grouped
