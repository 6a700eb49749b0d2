"""Error types raised by model construction and inference."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Model parameters violate a structural invariant.

    Raised at construction (or document load) time for mismatched
    lengths, duplicate class labels, zero scales, or non-finite values.
    The model cannot be used until the configuration is fixed.
    """


class DimensionMismatch(ValueError):
    """Model arrays disagree with the feature list used at prediction time."""
