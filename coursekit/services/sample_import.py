"""Loads externally scored sample sets from disk.

Picks a parser from the explicit format or the file suffix, confines
paths to the configured sample data directory, and returns an immutable
SampleSet.
"""

from __future__ import annotations

import logging
from pathlib import Path

from coursekit.ingestion.base_parser import BaseParser
from coursekit.ingestion.csv_parser import CSVSampleParser
from coursekit.ingestion.jsonl_parser import JSONLSampleParser
from coursekit.models.classifier import SampleSet

logger = logging.getLogger(__name__)

_PARSERS: dict[str, type[BaseParser]] = {
    "csv": CSVSampleParser,
    "jsonl": JSONLSampleParser,
}

_SUFFIX_FORMATS = {
    ".csv": "csv",
    ".jsonl": "jsonl",
    ".ndjson": "jsonl",
}


def detect_format(path: Path) -> str:
    """Map a file suffix to a parser format name.

    Raises:
        ValueError: If the suffix is not recognised.
    """
    fmt = _SUFFIX_FORMATS.get(path.suffix.lower())
    if fmt is None:
        raise ValueError(
            f"Cannot infer format from '{path.name}'. Use one of: {sorted(_SUFFIX_FORMATS)}"
        )
    return fmt


def get_parser(fmt: str) -> BaseParser:
    try:
        return _PARSERS[fmt]()
    except KeyError:
        raise ValueError(
            f"Unsupported format '{fmt}'. Must be one of: {sorted(_PARSERS)}"
        ) from None


def resolve_path(path: str | Path, base_dir: Path) -> Path:
    """Resolve *path* against *base_dir* and keep it inside that directory.

    Raises:
        ValueError: If the resolved path escapes *base_dir*.
    """
    root = base_dir.resolve()
    resolved = (root / Path(path)).resolve()
    if not resolved.is_relative_to(root):
        raise ValueError(f"Sample path '{path}' is outside the sample data directory")
    return resolved


def import_samples(
    path: str | Path,
    base_dir: Path,
    fmt: str | None = None,
) -> SampleSet:
    """Parse a CSV/JSONL sample file into a SampleSet.

    Raises:
        FileNotFoundError: If the resolved path does not exist.
        ValueError: Path outside *base_dir*, unknown format or unparseable
            content (``SampleParseError`` is a ``ValueError``).
    """
    file_path = resolve_path(path, base_dir)
    if not file_path.is_file():
        raise FileNotFoundError(f"Sample file not found: {file_path}")

    parser = get_parser(fmt or detect_format(file_path))
    sample_set = parser.parse(file_path)
    logger.info(
        "Imported %d samples from %s (%s): %d positive, %d negative",
        len(sample_set),
        file_path,
        parser.format_name,
        sample_set.positive_count,
        sample_set.negative_count,
    )
    return sample_set
