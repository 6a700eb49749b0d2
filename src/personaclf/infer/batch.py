"""Batch inference: classify every answer sheet in a table."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from personaclf.core.defaults import DEFAULT_RAW_VALUE, PROBA_COLUMN_PREFIX
from personaclf.core.model import Model
from personaclf.core.store import read_table, write_table
from personaclf.infer.predictor import first_argmax, linear_scores, softmax, standardize

logger = logging.getLogger(__name__)


def proba_column(label: str) -> str:
    """Column name holding the probability of *label*."""
    return f"{PROBA_COLUMN_PREFIX}{label}"


def frame_to_matrix(df: pd.DataFrame, model: Model) -> np.ndarray:
    """Extract the raw feature matrix in canonical order.

    Columns missing from *df* and non-numeric or empty cells take the
    raw default.  Columns that are not features are ignored.

    Returns:
        Float matrix of shape ``(len(df), model.n_features)``.
    """
    ids = [f.id for f in model.features]
    missing = [fid for fid in ids if fid not in df.columns]
    if missing:
        logger.info("Batch input lacks %d feature columns; defaulting them to %s",
                    len(missing), DEFAULT_RAW_VALUE)
    feat_df = df.reindex(columns=ids)
    feat_df = feat_df.apply(pd.to_numeric, errors="coerce")
    feat_df = feat_df.replace([np.inf, -np.inf], np.nan)
    return feat_df.fillna(DEFAULT_RAW_VALUE).to_numpy(dtype=np.float64)


def predict_frame(df: pd.DataFrame, model: Model) -> pd.DataFrame:
    """Classify every row of *df*.

    Applies the same standardize / score / argmax / softmax steps as
    :func:`~personaclf.infer.predictor.predict`, one row at a time.

    Args:
        df: One answer sheet per row, with feature ids as columns.
            Non-feature columns (e.g. a respondent id) are carried over.
        model: Validated model parameters.

    Returns:
        A copy of the non-feature columns of *df* followed by ``label``,
        ``confidence`` and one ``p_<class>`` column per class, in class
        order.
    """
    x = frame_to_matrix(df, model)
    labels: list[str] = []
    probs = np.empty((len(x), model.n_classes), dtype=np.float64)
    for i, row in enumerate(x):
        z = linear_scores(standardize(row, model), model)
        labels.append(model.classes[first_argmax(z)])
        probs[i] = softmax(z)

    feature_ids = {f.id for f in model.features}
    out = df[[c for c in df.columns if c not in feature_ids]].copy()
    out = out.reset_index(drop=True)
    out["label"] = labels
    out["confidence"] = probs.max(axis=1)
    for c, label in enumerate(model.classes):
        out[proba_column(label)] = probs[:, c]
    return out


def run_batch_file(input_path: Path, output_path: Path, model: Model) -> Path:
    """Read answers from *input_path*, classify them, and write *output_path*.

    Both paths may be ``.csv`` or ``.parquet``.

    Returns:
        The *output_path* that was written.
    """
    df = read_table(input_path)
    result = predict_frame(df, model)
    logger.info("Classified %d rows from %s with model %s", len(result), input_path, model.fingerprint)
    return write_table(result, output_path)
