"""Shared fixtures for the personaclf test suite."""

from __future__ import annotations

from typing import Any

import pytest

from personaclf.core.defaults import SCORE_MIDPOINT
from personaclf.core.model import Model
from personaclf.core.reference import reference_model
from personaclf.core.schema import FEATURE_SPECS_V1
from personaclf.core.types import FeatureCategory, FeatureSpec


@pytest.fixture()
def model() -> Model:
    return reference_model()


@pytest.fixture()
def neutral_answers() -> dict[str, Any]:
    """Every feature at the slider midpoint."""
    return {f.id: SCORE_MIDPOINT for f in FEATURE_SPECS_V1}


@pytest.fixture()
def two_features() -> tuple[FeatureSpec, ...]:
    return (
        FeatureSpec(id="alpha", label="Alpha", category=FeatureCategory.social),
        FeatureSpec(id="beta", label="Beta", category=FeatureCategory.cognitive),
    )


@pytest.fixture()
def valid_params(two_features: tuple[FeatureSpec, ...]) -> dict[str, Any]:
    """Keyword arguments for a small, valid two-feature three-class model."""
    return {
        "classes": ["a", "b", "c"],
        "means": [1.0, 2.0],
        "scales": [0.5, 4.0],
        "weights": [[1.0, 0.0], [0.0, 1.0], [-1.0, -1.0]],
        "intercepts": [0.0, 0.5, -0.5],
        "features": two_features,
    }
