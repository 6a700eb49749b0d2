"""Reference archetype model shipped with the questionnaire.

Three archetypes over the 26 schema-v1 features.  Every feature is
centred on the slider midpoint (5) and scaled by 2.5, so a neutral
answer sheet reduces each class score to its intercept.
"""

from __future__ import annotations

from typing import Final

from personaclf.core.defaults import SCORE_MIDPOINT
from personaclf.core.model import Model, ModelParams
from personaclf.core.schema import FEATURE_SPECS_V1, FeatureSchemaV1

ANALYTICAL_INTROVERT: Final[str] = "Analytical Introvert"
ADAPTIVE_AMBIVERT: Final[str] = "Adaptive Ambivert"
DYNAMIC_EXTROVERT: Final[str] = "Dynamic Extrovert"

_N_FEATURES = len(FEATURE_SPECS_V1)

REFERENCE_PARAMS: Final[ModelParams] = ModelParams(
    classes=[ANALYTICAL_INTROVERT, ADAPTIVE_AMBIVERT, DYNAMIC_EXTROVERT],
    means=[SCORE_MIDPOINT] * _N_FEATURES,
    scales=[2.5] * _N_FEATURES,
    intercepts=[-2.5, 0.8, -1.2],
    weights=[
        [-0.6, 0.9, -0.7, 0.8, -0.5, -0.6, 0.5, 0.3, 0.4, -0.4, -0.3, 0.7, 0.5,
         0.6, 0.4, 0.2, 0.3, 0.2, -0.5, 0.6, -0.3, -0.4, -0.3, 0.2, -0.4, -0.2],
        [0.2, -0.2, 0.2, -0.2, 0.3, 0.2, 0.3, 0.4, 0.2, 0.2, 0.2, -0.2, 0.2,
         -0.2, 0.3, 0.3, 0.2, 0.3, 0.2, -0.2, 0.2, 0.3, 0.2, 0.2, 0.3, 0.3],
        [0.9, -0.8, 0.9, -0.7, 0.7, 0.8, -0.4, 0.2, -0.3, 0.6, 0.5, -0.5, -0.3,
         -0.4, -0.5, 0.4, -0.2, 0.5, 0.7, -0.5, 0.4, 0.7, 0.5, 0.2, 0.6, 0.4],
    ],
    schema_version=FeatureSchemaV1.VERSION,
    schema_hash=FeatureSchemaV1.SCHEMA_HASH,
)


def reference_model() -> Model:
    """Build the validated reference :class:`Model`."""
    return Model.from_params(REFERENCE_PARAMS)
