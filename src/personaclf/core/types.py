"""Core data contracts: feature descriptors and their grouping categories."""

from __future__ import annotations

from enum import StrEnum
from typing import Final

from pydantic import BaseModel, Field


class FeatureCategory(StrEnum):
    """Grouping tag for an input dimension.

    Categories only drive how questions and reports are grouped; they
    have no effect on the math.  Member ordering is the presentation
    order of the questionnaire.
    """

    social = "social"
    cognitive = "cognitive"
    behavioral = "behavioral"
    lifestyle = "lifestyle"


CATEGORY_TITLES: Final[dict[FeatureCategory, str]] = {
    FeatureCategory.social: "Social Signature",
    FeatureCategory.cognitive: "Neural Patterns",
    FeatureCategory.behavioral: "Impulse Vector",
    FeatureCategory.lifestyle: "Environmental",
}


class FeatureSpec(BaseModel, frozen=True):
    """Static descriptor of one input dimension.

    ``id`` is the key looked up in a raw answer mapping; ``label`` is
    the human-facing question label.
    """

    id: str = Field(min_length=1, pattern=r"^[a-z][a-z0-9_]*$")
    label: str = Field(min_length=1)
    category: FeatureCategory
