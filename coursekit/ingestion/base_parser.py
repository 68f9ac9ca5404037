"""Abstract base parser for loading externally scored sample sets."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd

from coursekit.models.classifier import SampleSet

# Flexible column/key lookup order for the predicted score.
SCORE_KEYS = ("score", "predicted", "probability", "prob")

# Flexible column/key lookup order for the true label.
LABEL_KEYS = ("label", "actual", "target", "y")

_TRUE_STRINGS = {"true", "1", "yes", "positive", "pos"}
_FALSE_STRINGS = {"false", "0", "no", "negative", "neg"}


class SampleParseError(ValueError):
    """Raised when a sample file cannot be turned into a SampleSet."""


def coerce_label(raw: object) -> bool:
    """Interpret booleans, 0/1 and common yes/no spellings as a label."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)) and raw in (0, 1):
        return bool(raw)
    text = str(raw).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise SampleParseError(f"Unrecognised label value: {raw!r}")


class BaseParser(ABC):
    """Extension point for sample-file formats (CSV, JSONL, ...).

    Subclasses read a file into a DataFrame with one row per sample,
    indexed by where the sample sits in the file (1-based, counted in
    :attr:`position_name` units). The shared :meth:`parse` then locates the
    score/label columns, validates them, and builds an immutable
    :class:`SampleSet`.
    """

    position_name = "row"

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Short identifier for the format, e.g. ``'csv'``."""
        ...

    @abstractmethod
    def read_frame(self, file_path: Path) -> pd.DataFrame:
        """Return the samples of *file_path* indexed by file position."""
        ...

    def parse(self, file_path: Path) -> SampleSet:
        """Parse *file_path* into a SampleSet.

        Raises:
            SampleParseError: Missing columns, non-numeric or out-of-range
                scores, or unrecognised labels.
        """
        frame = self.read_frame(file_path)
        score_col = _find_column(frame, SCORE_KEYS, "score", file_path)
        label_col = _find_column(frame, LABEL_KEYS, "label", file_path)

        scores = pd.to_numeric(frame[score_col], errors="coerce")
        bad = scores.isna() | (scores < 0.0) | (scores > 1.0)
        if bad.any():
            where = bad[bad].index[0]
            raise SampleParseError(
                f"{file_path.name}: {self.position_name} {where} has a score "
                "outside [0, 1] or not a number"
            )

        labels = []
        for where, raw in frame[label_col].items():
            try:
                labels.append(coerce_label(raw))
            except SampleParseError as e:
                raise SampleParseError(
                    f"{file_path.name}: {self.position_name} {where}: {e}"
                ) from e

        return SampleSet.from_arrays(scores.to_numpy(dtype=float), labels)


def _find_column(
    frame: pd.DataFrame, keys: tuple[str, ...], what: str, file_path: Path
) -> str:
    lowered = {str(c).strip().lower(): c for c in frame.columns}
    for key in keys:
        if key in lowered:
            return lowered[key]
    raise SampleParseError(
        f"{file_path.name}: no {what} column (expected one of {', '.join(keys)})"
    )
