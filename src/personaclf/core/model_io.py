"""Model document persistence: save and load parameters as JSON or YAML."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

import yaml
from pydantic import ValidationError

from personaclf.core.defaults import MODEL_SUFFIXES_JSON, MODEL_SUFFIXES_YAML
from personaclf.core.errors import ConfigurationError
from personaclf.core.model import Model, ModelParams
from personaclf.core.schema import FEATURE_SPECS_V1
from personaclf.core.types import FeatureSpec

logger = logging.getLogger(__name__)


def _document_format(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in MODEL_SUFFIXES_JSON:
        return "json"
    if suffix in MODEL_SUFFIXES_YAML:
        return "yaml"
    raise ConfigurationError(
        f"Unsupported model document {path.name!r}; expected one of "
        f"{list(MODEL_SUFFIXES_JSON + MODEL_SUFFIXES_YAML)}"
    )


def read_document(path: Path) -> Any:
    """Parse a JSON or YAML file, chosen by suffix.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ConfigurationError: If the suffix is unsupported or the content
            does not parse.
    """
    fmt = _document_format(path)
    text = path.read_text("utf-8")
    try:
        if fmt == "json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot parse {path}: {exc}") from exc


def load_model_params(path: Path) -> ModelParams:
    """Load and type-check a model document without structural validation.

    Args:
        path: ``.json``, ``.yaml`` or ``.yml`` file with the fields of
            :class:`~personaclf.core.model.ModelParams`.

    Returns:
        The parsed ``ModelParams``.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ConfigurationError: If the file does not parse or a field has
            the wrong type.
    """
    raw = read_document(path)
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Model document {path} must be a mapping")
    if "schema_version" in raw and raw["schema_version"] is not None:
        raw["schema_version"] = str(raw["schema_version"])
    try:
        return ModelParams.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid model document {path}: {exc}") from exc


def load_model(
    path: Path,
    *,
    features: Sequence[FeatureSpec] = FEATURE_SPECS_V1,
    validate_schema: bool = True,
) -> Model:
    """Load a model document and build a validated :class:`Model`.

    Args:
        path: Model document path.
        features: Feature order the parameters must align with.
        validate_schema: When ``True`` (the default), reject a document
            whose ``schema_hash`` does not match *features*.

    Returns:
        The validated model.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ConfigurationError: If the document is malformed or violates a
            model invariant.
    """
    params = load_model_params(path)
    model = Model.from_params(params, features=features, validate_schema=validate_schema)
    logger.info(
        "Loaded model %s from %s (%d classes, %d features)",
        model.fingerprint, path, model.n_classes, model.n_features,
    )
    return model


def save_model(model: Model, path: Path) -> Path:
    """Write *model* as a JSON or YAML document, chosen by suffix.

    Args:
        model: Model to serialize.
        path: Destination file path.

    Returns:
        The *path* that was written.
    """
    fmt = _document_format(path)
    data = model.to_params().model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "json":
        path.write_text(json.dumps(data, indent=2) + "\n", "utf-8")
    else:
        path.write_text(yaml.safe_dump(data, default_flow_style=None, sort_keys=False), "utf-8")
    logger.info("Saved model %s to %s", model.fingerprint, path)
    return path
