"""Tabular I/O primitives for answer sheets and batch results (CSV / Parquet)."""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path

import pandas as pd

_SUPPORTED = (".csv", ".parquet")


def _check_suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in _SUPPORTED:
        raise ValueError(f"Unsupported table format {path.name!r}; expected one of {list(_SUPPORTED)}")
    return suffix


def write_table(df: pd.DataFrame, path: Path) -> Path:
    """Write *df* to a CSV or Parquet file at *path* atomically.

    Writes to a temporary file in the same directory first, then
    atomically replaces the target via :func:`os.replace`, so readers
    never see a partially-written file.

    Args:
        df: DataFrame to persist.
        path: Destination ``.csv`` or ``.parquet`` path.

    Returns:
        The *path* that was written, for convenient chaining.

    Raises:
        ValueError: If the suffix is not supported.
    """
    suffix = _check_suffix(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, suffix=f"{suffix}.tmp")
    try:
        os.close(fd)
        if suffix == ".parquet":
            df.to_parquet(tmp, engine="pyarrow", index=False)
        else:
            df.to_csv(tmp, index=False)
        os.replace(tmp, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp)
        raise
    return path


def read_table(path: Path) -> pd.DataFrame:
    """Read a CSV or Parquet file into a DataFrame.

    Raises:
        ValueError: If the suffix is not supported.
    """
    if _check_suffix(path) == ".parquet":
        return pd.read_parquet(path, engine="pyarrow")
    return pd.read_csv(path)
