"""Result rendering and export: percentage breakdown and JSON output."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Mapping

from personaclf.core.defaults import PERCENT_DECIMALS
from personaclf.core.model import Model
from personaclf.core.schema import FeatureSchemaV1
from personaclf.infer.prediction import PredictionResult


def format_percent(probability: float) -> str:
    """Render a probability as a percentage with one decimal, e.g. ``"62.3%"``."""
    return f"{probability * 100:.{PERCENT_DECIMALS}f}%"


def format_breakdown(result: PredictionResult) -> list[str]:
    """One line per class, in class order, with the predicted class marked.

    Example::

        * Adaptive Ambivert     86.1%
          Dynamic Extrovert     10.6%
    """
    width = max(len(c) for c in result.classes)
    lines = []
    for cls, p in zip(result.classes, result.probabilities):
        marker = "*" if cls == result.label else " "
        lines.append(f"{marker} {cls:<{width}}  {format_percent(p):>6}")
    return lines


def behavioral_note(result: PredictionResult) -> str:
    """Short narrative sentence about the predicted archetype."""
    return (
        f"Your profile shows a high correlation with {result.label.lower()} tendencies."
    )


def result_payload(
    result: PredictionResult,
    model: Model,
    raw_input: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the JSON-safe export record for *result*.

    Raw answers are only included when *raw_input* is passed, and then
    only for known feature ids.
    """
    data: dict[str, Any] = {
        "label": result.label,
        "confidence": result.confidence,
        "probabilities": result.as_dict(),
        "model_fingerprint": model.fingerprint,
        "schema_version": FeatureSchemaV1.VERSION,
        "created_at": datetime.now(UTC).isoformat(),
    }
    if raw_input is not None:
        data["answers"] = {
            f.id: raw_input[f.id] for f in model.features if f.id in raw_input
        }
    return data


def export_result_json(
    result: PredictionResult,
    model: Model,
    path: Path,
    raw_input: Mapping[str, Any] | None = None,
) -> Path:
    """Write *result* to a JSON file.

    Args:
        result: Prediction to export.
        model: Model that produced it (recorded by fingerprint).
        path: Destination JSON file path.
        raw_input: Optional answers to embed alongside the result.

    Returns:
        The *path* that was written.
    """
    data = result_payload(result, model, raw_input)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", "utf-8")
    return path
