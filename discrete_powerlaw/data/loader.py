"""Read integer samples from comma-separated text or CSV files."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional

import numpy as np
import pandas as pd

from discrete_powerlaw.exceptions import DataSourceError, InsufficientDataError, SampleParseError
from discrete_powerlaw.utils.logging import get_logger

log = get_logger(__name__, component="data")

NEST_OPEN = "(["
NEST_CLOSE = ")]"


def _to_int(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        pass
    try:
        value = float(token)
    except ValueError as exc:
        raise SampleParseError(f"Not an integer: {token!r}") from exc
    if not value.is_integer():
        raise SampleParseError(f"Not an integer: {token!r}")
    return int(value)


def split_csv_line(text: str, ignore_nested: bool = True) -> List[str]:
    """Split on commas; with ``ignore_nested=False`` commas inside () or [] are kept."""
    text = text.rstrip("\r\n")
    if not text.strip():
        return []
    tokens: List[str] = []
    depth = 0
    start = 0
    for i, char in enumerate(text):
        if not ignore_nested:
            if char in NEST_OPEN:
                depth += 1
            elif char in NEST_CLOSE:
                depth -= 1
        if depth == 0 and char == ",":
            tokens.append(text[start:i].strip())
            start = i + 1
    tokens.append(text[start:].strip())
    return tokens


def parse_csv_line(
    text: str,
    ignore_nested: bool = True,
    cast: Callable[[str], object] = _to_int,
) -> list:
    """Parse ``"1, 2, 3\\n"`` into ``[1, 2, 3]``.

    Raises:
        SampleParseError: when a token cannot be cast.
    """
    values = []
    for token in split_csv_line(text, ignore_nested=ignore_nested):
        if not token:
            raise SampleParseError(f"Empty value in {text.strip()!r}")
        try:
            values.append(cast(token))
        except (TypeError, ValueError) as exc:
            raise SampleParseError(f"Could not parse {token!r}") from exc
    return values


def _column_values(frame: pd.DataFrame, column: Optional[str]) -> pd.Series:
    if column is None:
        return frame.iloc[:, 0]
    if column not in frame.columns:
        raise DataSourceError(f"Column {column!r} not found; available: {list(frame.columns)}")
    return frame[column]


def load_sample(path: Path | str, column: Optional[str] = None) -> np.ndarray:
    """Integer sample from a CSV file.

    A file holding one comma-separated line is read as a flat list. Otherwise
    the file is read with pandas and the first column (or ``column``) is used;
    without ``column`` a non-numeric first row is taken as a header.
    Missing cells are dropped.
    """
    path = Path(path)
    if not path.exists():
        raise DataSourceError(f"Sample file not found: {path}")

    lines = [line for line in path.read_text().splitlines() if line.strip()]
    if column is None and len(lines) == 1 and "," in lines[0]:
        values = np.asarray(parse_csv_line(lines[0]), dtype=np.int64)
    else:
        try:
            frame = pd.read_csv(path, header=None if column is None else "infer", skip_blank_lines=True)
        except pd.errors.EmptyDataError as exc:
            raise InsufficientDataError(f"Sample file is empty: {path}") from exc
        raw = _column_values(frame, column)
        numeric = pd.to_numeric(raw, errors="coerce")
        bad = numeric.isna() & raw.notna()
        if column is None and bad.any() and bool(bad.iloc[0]) and int(bad.sum()) == 1:
            numeric = numeric.iloc[1:]
            bad = bad.iloc[1:]
        if bad.any():
            raise SampleParseError(f"Non-numeric values in {path}: {raw[bad].head(3).tolist()}")
        numeric = numeric.dropna()
        if ((numeric % 1) != 0).any():
            raise SampleParseError(f"Non-integer values in {path}")
        values = numeric.to_numpy(dtype=np.int64)

    if values.size == 0:
        raise InsufficientDataError(f"No sample values in {path}")
    log.debug("Loaded sample", extra={"n_samples": int(values.size)})
    return values


__all__ = ["load_sample", "parse_csv_line", "split_csv_line"]
