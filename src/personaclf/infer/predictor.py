"""Closed-form archetype inference: standardize, score, select, normalize.

Typical flow::

    model = reference_model()
    result = predict({"social_energy": 8, "empathy": 6}, model)
    result.label, result.probabilities

The predictor is a pure function of the answer mapping and the model.
Missing or malformed answers take the raw default (0) *before*
standardization; unknown keys are ignored.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Sequence

import numpy as np

from personaclf.core.defaults import DEFAULT_RAW_VALUE
from personaclf.core.errors import DimensionMismatch
from personaclf.core.model import Model
from personaclf.core.types import FeatureSpec
from personaclf.infer.prediction import PredictionResult

logger = logging.getLogger(__name__)


def coerce_score(value: Any, default: float = DEFAULT_RAW_VALUE) -> float:
    """Coerce a raw answer to float, treating None/NaN/inf/garbage as *default*."""
    if value is None:
        return default
    try:
        f = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(f):
        return default
    return f


def vectorize(
    raw_input: Mapping[str, Any],
    features: Sequence[FeatureSpec],
    *,
    default: float = DEFAULT_RAW_VALUE,
) -> np.ndarray:
    """Lay out *raw_input* in canonical feature order.

    Args:
        raw_input: Feature id -> answer.  Read once; later mutation by
            the caller has no effect on the returned vector.
        features: Canonical feature order.
        default: Raw value for missing or malformed answers.

    Returns:
        Float array of shape ``(len(features),)``.
    """
    snapshot = dict(raw_input)
    known = {f.id for f in features}
    unknown = sorted(str(k) for k in snapshot if k not in known)
    if unknown:
        logger.debug("Ignoring %d unrecognized answer keys: %s", len(unknown), unknown)
    return np.array(
        [coerce_score(snapshot.get(f.id), default) for f in features],
        dtype=np.float64,
    )


def _check_dimensions(model: Model, n_features: int) -> None:
    sizes = {
        "means": model.means.shape[0],
        "scales": model.scales.shape[0],
        "weights": model.weights.shape[1] if model.weights.ndim == 2 else -1,
    }
    bad = {name: size for name, size in sizes.items() if size != n_features}
    if bad:
        raise DimensionMismatch(
            f"Model arrays do not match {n_features} features: {bad}"
        )
    if model.weights.shape[0] != model.n_classes or model.intercepts.shape[0] != model.n_classes:
        raise DimensionMismatch(
            f"Model has {model.n_classes} classes but weights has "
            f"{model.weights.shape[0]} rows and intercepts {model.intercepts.shape[0]} entries"
        )


def standardize(values: np.ndarray, model: Model) -> np.ndarray:
    """Centre and scale a raw feature vector: ``(value - mean) / scale``.

    Raises:
        DimensionMismatch: If *values* and the model arrays disagree in length.
    """
    _check_dimensions(model, values.shape[0])
    with np.errstate(over="ignore"):
        return (values - model.means) / model.scales


def linear_scores(x: np.ndarray, model: Model) -> np.ndarray:
    """Affine class scores ``intercepts[c] + x . weights[c]``, shape ``(n_classes,)``.

    Extreme answers can overflow a score to ``+inf`` or ``-inf``.  A score
    that overflows both ways (``inf - inf``) is undefined and becomes ``-inf``.
    """
    with np.errstate(over="ignore", invalid="ignore"):
        z = model.intercepts + model.weights @ x
    return np.where(np.isnan(z), -np.inf, z)


def first_argmax(scores: np.ndarray) -> int:
    """Index of the maximum score; ties resolve to the lowest index."""
    return int(np.argmax(scores))


def softmax(scores: np.ndarray) -> np.ndarray:
    """Numerically stable softmax (max-subtracted) over the last axis.

    Infinite scores are allowed.  When the maximum is ``+inf`` all mass goes
    to the entries tied at ``+inf``; ``-inf`` entries always get 0.
    """
    top = scores.max(axis=-1, keepdims=True)
    with np.errstate(over="ignore", invalid="ignore"):
        shifted = scores - top
    # entries equal to an infinite maximum give inf - inf
    shifted = np.where(scores == top, 0.0, shifted)
    exp_vals = np.exp(shifted)
    return exp_vals / exp_vals.sum(axis=-1, keepdims=True)


def predict(
    raw_input: Mapping[str, Any],
    model: Model,
    features: Sequence[FeatureSpec] | None = None,
) -> PredictionResult:
    """Classify one answer sheet.

    Args:
        raw_input: Feature id -> numeric answer.  Missing keys and
            malformed values count as raw 0; unknown keys are ignored.
        model: Validated model parameters.
        features: Canonical feature order.  Defaults to the order the
            model was validated against.

    Returns:
        A :class:`PredictionResult` whose ``label`` is the class with
        the highest linear score (lowest index on ties) and whose
        ``probabilities`` are the softmax of those scores.

    Raises:
        DimensionMismatch: If the model arrays disagree with *features*.
    """
    feats = model.features if features is None else tuple(features)
    values = vectorize(raw_input, feats)
    x = standardize(values, model)
    z = linear_scores(x, model)
    idx = first_argmax(z)
    probs = softmax(z)

    label = model.classes[idx]
    logger.debug("Predicted %r (p=%.4f) with model %s", label, probs[idx], model.fingerprint)

    return PredictionResult(
        label=label,
        probabilities=probs.tolist(),
        classes=list(model.classes),
        scores=z.tolist(),
    )
