"""Tests for the CSV/JSONL sample parsers and the import service."""

from __future__ import annotations

from pathlib import Path

import pytest

from coursekit.ingestion.base_parser import SampleParseError, coerce_label
from coursekit.ingestion.csv_parser import CSVSampleParser
from coursekit.ingestion.jsonl_parser import JSONLSampleParser
from coursekit.services.sample_import import (
    detect_format,
    get_parser,
    import_samples,
    resolve_path,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


# ------------------------------------------------------------------ #
# Label coercion
# ------------------------------------------------------------------ #


class TestCoerceLabel:
    @pytest.mark.parametrize("raw", [True, 1, 1.0, "1", "true", "Yes", " positive ", "pos"])
    def test_truthy(self, raw: object) -> None:
        assert coerce_label(raw) is True

    @pytest.mark.parametrize("raw", [False, 0, 0.0, "0", "FALSE", "no", "negative", "neg"])
    def test_falsy(self, raw: object) -> None:
        assert coerce_label(raw) is False

    @pytest.mark.parametrize("raw", [2, "maybe", None, ""])
    def test_rejects_unknown(self, raw: object) -> None:
        with pytest.raises(SampleParseError, match="Unrecognised label"):
            coerce_label(raw)


# ------------------------------------------------------------------ #
# CSV parser
# ------------------------------------------------------------------ #


class TestCSVSampleParser:
    def test_parse_basic(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "s.csv", "score,label\n0.9,1\n0.2,0\n0.6,yes\n")
        sample_set = CSVSampleParser().parse(path)

        assert len(sample_set) == 3
        assert sample_set.scores().tolist() == [0.9, 0.2, 0.6]
        assert sample_set.labels().tolist() == [True, False, True]

    def test_alternate_column_names(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "s.csv", "id, Predicted, Actual\na, 0.4, 0\nb, 0.7, 1\n")
        sample_set = CSVSampleParser().parse(path)
        assert sample_set.positive_count == 1
        assert sample_set.negative_count == 1

    def test_missing_label_column(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "s.csv", "score,other\n0.9,1\n")
        with pytest.raises(SampleParseError, match="no label column"):
            CSVSampleParser().parse(path)

    def test_out_of_range_score(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "s.csv", "score,label\n0.9,1\n1.5,0\n")
        with pytest.raises(SampleParseError, match="row 2"):
            CSVSampleParser().parse(path)

    def test_non_numeric_score(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "s.csv", "score,label\nhigh,1\n")
        with pytest.raises(SampleParseError, match="row 1"):
            CSVSampleParser().parse(path)

    def test_bad_label(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "s.csv", "score,label\n0.3,0\n0.9,maybe\n")
        with pytest.raises(SampleParseError, match="row 2"):
            CSVSampleParser().parse(path)

    def test_empty_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "s.csv", "")
        with pytest.raises(SampleParseError, match="empty"):
            CSVSampleParser().parse(path)


# ------------------------------------------------------------------ #
# JSONL parser
# ------------------------------------------------------------------ #


class TestJSONLSampleParser:
    def test_mixed_score_keys_rejected(self, tmp_path: Path) -> None:
        """The score key is chosen once per file, not per line."""
        path = _write(
            tmp_path / "s.jsonl",
            '{"score": 0.8, "label": true}\n{"probability": 0.1, "label": false}\n',
        )
        with pytest.raises(SampleParseError, match="line 2"):
            JSONLSampleParser().parse(path)

    def test_parse_skips_blank_lines(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / "s.jsonl",
            '{"predicted": 0.8, "actual": 1}\n\n{"predicted": 0.1, "actual": 0}\n',
        )
        sample_set = JSONLSampleParser().parse(path)
        assert sample_set.scores().tolist() == [0.8, 0.1]
        assert sample_set.labels().tolist() == [True, False]

    def test_errors_report_file_line_after_blank_lines(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / "s.jsonl",
            '\n{"score": 0.8, "label": 1}\n\n\n{"score": 1.4, "label": 0}\n',
        )
        with pytest.raises(SampleParseError, match="line 5 has a score"):
            JSONLSampleParser().parse(path)

    def test_bad_label_reports_file_line(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / "s.jsonl",
            '{"score": 0.8, "label": 1}\n\n{"score": 0.2, "label": "maybe"}\n',
        )
        with pytest.raises(SampleParseError, match="line 3: Unrecognised label"):
            JSONLSampleParser().parse(path)

    def test_invalid_json_reports_line(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "s.jsonl", '{"score": 0.8, "label": 1}\n{oops\n')
        with pytest.raises(SampleParseError, match="line 2"):
            JSONLSampleParser().parse(path)

    def test_non_object_line(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "s.jsonl", "[0.8, 1]\n")
        with pytest.raises(SampleParseError, match="not a JSON object"):
            JSONLSampleParser().parse(path)

    def test_blank_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "s.jsonl", "\n\n")
        with pytest.raises(SampleParseError, match="empty"):
            JSONLSampleParser().parse(path)


# ------------------------------------------------------------------ #
# Import service
# ------------------------------------------------------------------ #


class TestImportSamples:
    def test_detect_format(self) -> None:
        assert detect_format(Path("a.CSV")) == "csv"
        assert detect_format(Path("a.ndjson")) == "jsonl"
        with pytest.raises(ValueError, match="Cannot infer format"):
            detect_format(Path("a.parquet"))

    def test_get_parser(self) -> None:
        assert get_parser("csv").format_name == "csv"
        assert get_parser("jsonl").format_name == "jsonl"
        with pytest.raises(ValueError, match="Unsupported format"):
            get_parser("xml")

    def test_resolve_path(self, tmp_path: Path) -> None:
        base = tmp_path.resolve()
        assert resolve_path("x.csv", tmp_path) == base / "x.csv"
        assert resolve_path(base / "sub" / "y.csv", tmp_path) == base / "sub" / "y.csv"
        assert resolve_path("sub/../x.csv", tmp_path) == base / "x.csv"

    @pytest.mark.parametrize("escape", ["../secret.csv", "sub/../../secret.csv"])
    def test_resolve_path_rejects_parent_escape(self, tmp_path: Path, escape: str) -> None:
        with pytest.raises(ValueError, match="outside the sample data directory"):
            resolve_path(escape, tmp_path / "data")

    def test_resolve_path_rejects_absolute_outside(self, tmp_path: Path) -> None:
        outside = _write(tmp_path / "secret.csv", "score,label\n0.9,1\n")
        with pytest.raises(ValueError, match="outside the sample data directory"):
            import_samples(outside, tmp_path / "data")

    def test_import_relative_path(self, tmp_path: Path) -> None:
        _write(tmp_path / "scores.csv", "score,label\n0.9,1\n0.1,0\n")
        sample_set = import_samples("scores.csv", tmp_path)
        assert len(sample_set) == 2

    def test_explicit_format_overrides_suffix(self, tmp_path: Path) -> None:
        _write(tmp_path / "scores.txt", '{"score": 0.3, "label": "no"}\n')
        sample_set = import_samples("scores.txt", tmp_path, fmt="jsonl")
        assert sample_set.negative_count == 1

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            import_samples("missing.csv", tmp_path)
