"""JSONL sample parser.

Each non-blank line is a JSON object with a score key and a label key,
using the same flexible names as the CSV parser::

    {"predicted": 0.91, "actual": 1}
    {"score": 0.12, "label": false}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pandas as pd

from coursekit.ingestion.base_parser import BaseParser, SampleParseError

logger = logging.getLogger(__name__)


class JSONLSampleParser(BaseParser):
    """Reads one JSON object per line; blank lines are skipped.

    Samples are indexed by their line number in the file.
    """

    position_name = "line"

    @property
    def format_name(self) -> str:
        return "jsonl"

    def read_frame(self, file_path: Path) -> pd.DataFrame:
        records: list[dict] = []
        line_numbers: list[int] = []
        with open(file_path, encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as e:
                    raise SampleParseError(
                        f"{file_path.name}: line {line_no} is not valid JSON"
                    ) from e
                if not isinstance(record, dict):
                    raise SampleParseError(
                        f"{file_path.name}: line {line_no} is not a JSON object"
                    )
                records.append(record)
                line_numbers.append(line_no)

        logger.debug("Read %d records from %s", len(records), file_path)
        if not records:
            raise SampleParseError(f"{file_path.name}: file is empty")
        return pd.DataFrame.from_records(records, index=line_numbers)
