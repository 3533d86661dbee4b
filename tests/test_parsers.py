"""
Tests for the CSV/JSON format parsers and their registry.
"""

import json

import pandas as pd
import pytest

from cdcmeasles.data.fetch.parsers import (
    ParserRegistry,
    parse_body,
    parse_csv,
    parse_json,
    register_parser,
)
from cdcmeasles.data.sources import SourceFormat
from cdcmeasles.errors import SourceParseError


class TestCsvParser:
    """Test cases for CSV parsing."""

    def test_parse_csv(self, sample_csv_content):
        df = parse_csv(sample_csv_content.encode("utf-8"))

        assert list(df.columns) == ["Date", "State", "Cases"]
        assert len(df) == 3

    def test_parse_csv_with_bom(self):
        df = parse_csv("\ufeffcases,state\n1,Ohio\n".encode("utf-8"))

        assert list(df.columns) == ["cases", "state"]

    def test_html_body_rejected(self):
        with pytest.raises(SourceParseError, match="HTML"):
            parse_csv(b"<!DOCTYPE html><html><body>Page moved</body></html>")

    def test_header_only_gives_empty_table(self):
        df = parse_body(b"date,cases\n", SourceFormat.CSV)

        assert df.empty
        assert list(df.columns) == ["date", "cases"]


class TestJsonParser:
    """Test cases for JSON parsing."""

    def test_list_of_records(self, sample_json_content):
        df = parse_json(sample_json_content.encode("utf-8"))

        assert list(df.columns) == ["week_start", "week_end", "cases"]
        assert len(df) == 2

    def test_records_under_object_key(self):
        body = json.dumps({"meta": {"view": "x"}, "data": [{"a": 1}, {"a": 2}]})
        df = parse_json(body.encode("utf-8"))

        assert df["a"].tolist() == [1, 2]

    def test_object_without_record_list_rejected(self):
        with pytest.raises(SourceParseError, match="no record list"):
            parse_json(b'{"message": "Not Found", "status": 404}')

    def test_nested_objects_flattened(self):
        df = parse_json(b'[{"state": {"name": "Texas"}, "cases": 1}]')

        assert "state.name" in df.columns

    def test_list_of_rows(self):
        df = parse_json(b"[[1, 2], [3, 4]]")

        assert df.shape == (2, 2)

    def test_empty_list_gives_empty_table(self):
        assert parse_json(b"[]").empty

    def test_scalar_payload_rejected(self):
        with pytest.raises(SourceParseError):
            parse_json(b"42")


class TestParseBody:
    """Test cases for dispatch and error wrapping."""

    def test_invalid_json_wrapped(self):
        with pytest.raises(SourceParseError, match="Invalid json body"):
            parse_body(b"{not json", SourceFormat.JSON)

    def test_deeply_nested_json_wrapped(self):
        with pytest.raises(SourceParseError, match="Invalid json body"):
            parse_body(b"[" * 200000, SourceFormat.JSON)

    def test_malformed_csv_wrapped(self):
        body = b'a,b\n1,"unterminated\n'
        with pytest.raises(SourceParseError):
            parse_body(body, "csv")

    def test_accepts_string_format(self, sample_csv_content):
        df = parse_body(sample_csv_content.encode("utf-8"), "csv")

        assert isinstance(df, pd.DataFrame)


class TestParserRegistry:
    """Test cases for ParserRegistry."""

    def test_default_formats_registered(self):
        assert set(ParserRegistry.get_available_formats()) >= {"csv", "json"}

    def test_register_parser_as_decorator(self):
        original = ParserRegistry.get(SourceFormat.CSV)
        try:

            @register_parser(SourceFormat.CSV)
            def fake_csv(body: bytes) -> pd.DataFrame:
                return pd.DataFrame({"fake": [1]})

            assert ParserRegistry.get("csv") is fake_csv
            assert parse_body(b"anything", "csv")["fake"].tolist() == [1]
        finally:
            register_parser(SourceFormat.CSV, original)

    def test_register_non_callable_fails(self):
        with pytest.raises(ValueError):
            ParserRegistry.register(SourceFormat.JSON, "not callable")

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            ParserRegistry.get("xml")
