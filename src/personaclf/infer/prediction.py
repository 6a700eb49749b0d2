"""Structured prediction output for a single answer sheet."""

from __future__ import annotations

import math

from pydantic import BaseModel, Field, model_validator

from personaclf.core.defaults import PROBABILITY_TOLERANCE


class PredictionResult(BaseModel, frozen=True):
    """Classification of one answer sheet.

    ``probabilities`` and ``scores`` are aligned index-for-index with
    ``classes``.  Produced fresh on every call and never persisted by
    the predictor itself.
    """

    label: str
    probabilities: list[float] = Field(min_length=2)
    classes: list[str] = Field(min_length=2)
    scores: list[float] = Field(min_length=2)

    @model_validator(mode="after")
    def _check_alignment(self) -> PredictionResult:
        n = len(self.classes)
        if len(self.probabilities) != n or len(self.scores) != n:
            raise ValueError(
                f"probabilities ({len(self.probabilities)}) and scores "
                f"({len(self.scores)}) must align with {n} classes"
            )
        if self.label not in self.classes:
            raise ValueError(f"label {self.label!r} is not one of {self.classes}")
        if not all(math.isfinite(p) for p in self.probabilities):
            raise ValueError("probabilities must be finite")
        if any(p < 0.0 for p in self.probabilities):
            raise ValueError("probabilities must be non-negative")
        total = sum(self.probabilities)
        if abs(total - 1.0) > PROBABILITY_TOLERANCE:
            raise ValueError(f"probabilities must sum to 1.0, got {total:.12f}")
        return self

    @property
    def predicted_index(self) -> int:
        return self.classes.index(self.label)

    @property
    def confidence(self) -> float:
        """Probability assigned to the predicted label."""
        return self.probabilities[self.predicted_index]

    def as_dict(self) -> dict[str, float]:
        """Class label -> probability, in class order."""
        return dict(zip(self.classes, self.probabilities))
