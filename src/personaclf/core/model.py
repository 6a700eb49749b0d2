"""Immutable classifier parameters and their structured document form.

:class:`Model` is the validated, read-only bundle the predictor works
against.  :class:`ModelParams` is the plain record with the five named
fields (plus schema metadata) used when parameters are written to or
read from disk::

    params = ModelParams(classes=[...], means=[...], scales=[...],
                         weights=[[...], ...], intercepts=[...])
    model = Model.from_params(params)
    model.to_params() == params   # modulo schema metadata
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from pydantic import BaseModel, Field

from personaclf.core.errors import ConfigurationError
from personaclf.core.hashing import canonical_json_hash
from personaclf.core.schema import FEATURE_SPECS_V1, FeatureSchemaV1, build_schema_hash
from personaclf.core.types import FeatureSpec


class ModelParams(BaseModel, frozen=True):
    """Serializable form of a model's fitted parameters.

    Only field types are checked here; structural invariants (lengths,
    uniqueness, non-zero scales) are enforced by :class:`Model`.
    """

    classes: list[str] = Field(description="Ordered class labels.")
    means: list[float] = Field(description="Per-feature centering values.")
    scales: list[float] = Field(description="Per-feature scaling divisors.")
    weights: list[list[float]] = Field(description="One weight row per class.")
    intercepts: list[float] = Field(description="One bias per class.")
    schema_version: str | None = Field(
        default=None, description="Feature schema version the model was fitted against."
    )
    schema_hash: str | None = Field(
        default=None, description="Hash of the ordered feature ids."
    )


def _as_vector(name: str, values: Sequence[float]) -> np.ndarray:
    try:
        arr = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a sequence of numbers: {exc}") from exc
    if arr.ndim != 1:
        raise ConfigurationError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if not np.isfinite(arr).all():
        raise ConfigurationError(f"{name} contains non-finite values")
    return arr


def _freeze(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


class Model:
    """Validated, immutable logistic-regression parameters.

    Construction fails with :class:`ConfigurationError` (and no instance
    is created) when any structural invariant is violated:

    * at least two classes, with no duplicates;
    * ``means`` and ``scales`` have one entry per feature;
    * no ``scales`` entry is zero;
    * ``weights`` has one row per class, each with one entry per feature;
    * ``intercepts`` has one entry per class;
    * every parameter is finite.

    Arrays are exposed as read-only numpy views, so a ``Model`` can be
    shared between callers without copying or locking.

    Args:
        classes: Ordered class labels.
        means: Per-feature centering values.
        scales: Per-feature scaling divisors.
        weights: ``len(classes)`` rows of per-feature weights.
        intercepts: Per-class bias.
        features: Canonical feature order the parameters are aligned to.
    """

    __slots__ = (
        "_classes", "_means", "_scales", "_weights", "_intercepts",
        "_features", "_fingerprint",
    )

    def __init__(
        self,
        classes: Sequence[str],
        means: Sequence[float],
        scales: Sequence[float],
        weights: Sequence[Sequence[float]],
        intercepts: Sequence[float],
        *,
        features: Sequence[FeatureSpec] = FEATURE_SPECS_V1,
    ) -> None:
        n_features = len(features)
        class_tuple = tuple(str(c) for c in classes)
        n_classes = len(class_tuple)

        if n_classes < 2:
            raise ConfigurationError(f"At least 2 classes are required, got {n_classes}")
        if len(set(class_tuple)) != n_classes:
            seen: set[str] = set()
            dupes = [c for c in class_tuple if c in seen or seen.add(c)]  # type: ignore[func-returns-value]
            raise ConfigurationError(f"Duplicate class labels: {dupes}")

        means_arr = _as_vector("means", means)
        scales_arr = _as_vector("scales", scales)
        intercepts_arr = _as_vector("intercepts", intercepts)

        if len(means_arr) != n_features:
            raise ConfigurationError(
                f"means has {len(means_arr)} entries, expected {n_features} (one per feature)"
            )
        if len(scales_arr) != n_features:
            raise ConfigurationError(
                f"scales has {len(scales_arr)} entries, expected {n_features} (one per feature)"
            )
        zero_idx = np.flatnonzero(scales_arr == 0.0)
        if zero_idx.size:
            zero_ids = [features[i].id for i in zero_idx]
            raise ConfigurationError(f"scales must be non-zero; zero for {zero_ids}")
        if len(intercepts_arr) != n_classes:
            raise ConfigurationError(
                f"intercepts has {len(intercepts_arr)} entries, expected {n_classes} (one per class)"
            )

        weight_rows = list(weights)
        if len(weight_rows) != n_classes:
            raise ConfigurationError(
                f"weights has {len(weight_rows)} rows, expected {n_classes} (one per class)"
            )
        rows = []
        for label, row in zip(class_tuple, weight_rows):
            row_arr = _as_vector(f"weights[{label!r}]", row)
            if len(row_arr) != n_features:
                raise ConfigurationError(
                    f"weights row for {label!r} has {len(row_arr)} entries, "
                    f"expected {n_features}"
                )
            rows.append(row_arr)

        setattr_ = object.__setattr__
        setattr_(self, "_classes", class_tuple)
        setattr_(self, "_means", _freeze(means_arr))
        setattr_(self, "_scales", _freeze(scales_arr))
        setattr_(self, "_weights", _freeze(np.vstack(rows)))
        setattr_(self, "_intercepts", _freeze(intercepts_arr))
        setattr_(self, "_features", tuple(features))
        setattr_(self, "_fingerprint", canonical_json_hash(self._param_dict()))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return (
            f"Model(classes={list(self._classes)!r}, n_features={self.n_features}, "
            f"fingerprint={self._fingerprint!r})"
        )

    # -- read-only accessors ---------------------------------------------------

    @property
    def classes(self) -> tuple[str, ...]:
        return self._classes

    @property
    def means(self) -> np.ndarray:
        """Shape ``(n_features,)``, read-only."""
        return self._means

    @property
    def scales(self) -> np.ndarray:
        """Shape ``(n_features,)``, read-only."""
        return self._scales

    @property
    def weights(self) -> np.ndarray:
        """Shape ``(n_classes, n_features)``, read-only."""
        return self._weights

    @property
    def intercepts(self) -> np.ndarray:
        """Shape ``(n_classes,)``, read-only."""
        return self._intercepts

    @property
    def features(self) -> tuple[FeatureSpec, ...]:
        return self._features

    @property
    def n_features(self) -> int:
        return len(self._features)

    @property
    def n_classes(self) -> int:
        return len(self._classes)

    @property
    def fingerprint(self) -> str:
        """Stable 12-hex hash of the parameter values."""
        return self._fingerprint

    # -- document conversion ---------------------------------------------------

    def _param_dict(self) -> dict[str, Any]:
        return {
            "classes": list(self._classes),
            "means": self._means.tolist(),
            "scales": self._scales.tolist(),
            "weights": self._weights.tolist(),
            "intercepts": self._intercepts.tolist(),
        }

    def to_params(self) -> ModelParams:
        """Export parameters as a :class:`ModelParams` stamped with the feature schema."""
        return ModelParams(
            **self._param_dict(),
            schema_version=(
                FeatureSchemaV1.VERSION if self._features == FEATURE_SPECS_V1 else None
            ),
            schema_hash=build_schema_hash(self._features),
        )

    @classmethod
    def from_params(
        cls,
        params: ModelParams,
        *,
        features: Sequence[FeatureSpec] = FEATURE_SPECS_V1,
        validate_schema: bool = True,
    ) -> Model:
        """Build a validated ``Model`` from its document form.

        Args:
            params: Parameter record, e.g. from
                :func:`~personaclf.core.model_io.load_model`.
            features: Feature order the parameters must align with.
            validate_schema: When ``True`` (the default), reject
                *params* whose recorded ``schema_hash`` differs from the
                hash of *features*.  Documents without a hash are accepted.

        Raises:
            ConfigurationError: On a schema hash mismatch or any
                structural invariant violation.
        """
        if validate_schema and params.schema_hash is not None:
            expected = build_schema_hash(features)
            if params.schema_hash != expected:
                raise ConfigurationError(
                    f"Schema hash mismatch: model has {params.schema_hash!r}, "
                    f"current schema is {expected!r}"
                )
        return cls(
            classes=params.classes,
            means=params.means,
            scales=params.scales,
            weights=params.weights,
            intercepts=params.intercepts,
            features=features,
        )
