"""CSV sample parser.

Expects a header row naming a score column and a label column, e.g.::

    score,label
    0.91,1
    0.12,0
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from coursekit.ingestion.base_parser import BaseParser, SampleParseError


class CSVSampleParser(BaseParser):
    """Reads a comma-separated file with a header row."""

    @property
    def format_name(self) -> str:
        return "csv"

    def read_frame(self, file_path: Path) -> pd.DataFrame:
        try:
            # Keep labels as text so "yes"/"no" and 0/1 coexist
            frame = pd.read_csv(file_path, dtype=str, skipinitialspace=True)
        except pd.errors.EmptyDataError as e:
            raise SampleParseError(f"{file_path.name}: file is empty") from e
        except pd.errors.ParserError as e:
            raise SampleParseError(f"{file_path.name}: {e}") from e
        # Data rows count from 1, below the header
        frame.index = frame.index + 1
        return frame
