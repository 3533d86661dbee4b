"""
Fixtures and test configuration for the cdcmeasles test suite.
"""

import json
import os
import tempfile
from pathlib import Path

import pandas as pd
import pytest
import yaml

# Plotting tests must never open a window
os.environ.setdefault("MPLBACKEND", "Agg")

from cdcmeasles.data.fetch.http_fetcher import HttpFetcher  # noqa: E402
from cdcmeasles.data.sources import (  # noqa: E402
    CandidateSource,
    DatasetType,
    SourceFormat,
)
from cdcmeasles.settings import Settings  # noqa: E402

CSV_URL = "https://example.com/measles/cases.csv"
JSON_URL = "https://example.com/measles/cases.json"
BACKUP_URL = "https://example.com/measles/backup.csv"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def test_settings(temp_dir):
    """Create test settings with temporary directories."""
    settings = Settings(
        root_dir=temp_dir,
        output_dir=temp_dir / "data",
        log_level="DEBUG",
        request_timeout=5,
        user_agent="cdcmeasles-tests",
    )
    settings.create_directories()
    return settings


@pytest.fixture
def sample_csv_content():
    """Three-row CSV as served by the legacy CDC endpoints."""
    return """Date,State,Cases
2025-01-04,Texas,12
2025-01-11,New Mexico,3
2025-01-18,Kansas,1
"""


@pytest.fixture
def sample_json_content():
    """Two weekly records in the shape of MeaslesCasesWeekly.json."""
    return json.dumps(
        [
            {"week_start": "2025-01-05", "week_end": "2025-01-11", "cases": "7"},
            {"week_start": "2025-01-12", "week_end": "2025-01-18", "cases": "15"},
        ]
    )


@pytest.fixture
def yearly_json_content():
    """Yearly records mixing two historical series via the `filter` column."""
    return json.dumps(
        [
            {"year": "2023", "cases": "59", "filter": "1985-Present*"},
            {"year": "2024", "cases": "285", "filter": "1985-Present*"},
            {"year": "1962", "cases": "481530", "filter": "1962-Present"},
        ]
    )


@pytest.fixture
def stub_candidates():
    """Two-candidate weekly list: a CSV endpoint followed by a JSON one."""
    return {
        DatasetType.WEEKLY: (
            CandidateSource(url=CSV_URL, format=SourceFormat.CSV),
            CandidateSource(url=JSON_URL, format=SourceFormat.JSON),
        ),
    }


@pytest.fixture
def fetcher():
    """HttpFetcher with a short timeout; requests-mock patches its session."""
    with HttpFetcher(timeout=5) as http:
        yield http


@pytest.fixture
def sources_file(temp_dir):
    """Write a small sources catalogue and return its path."""
    catalog = {
        "manual_download_url": "https://example.com/measles",
        "datasets": {
            "weekly": {
                "description": "Weekly test data",
                "candidates": [
                    {"url": CSV_URL, "format": "csv"},
                    {"url": JSON_URL, "format": "json"},
                ],
            },
            "yearly": {
                "candidates": [
                    {
                        "url": "https://example.com/measles/yearly.json",
                        "format": "json",
                        "row_filter": {"filter": "1985-Present*"},
                    }
                ]
            },
            "legacy": {"candidates": [{"url": BACKUP_URL, "format": "csv"}]},
        },
    }
    path = temp_dir / "sources.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(catalog, f)
    return path


@pytest.fixture
def catalog_settings(test_settings, sources_file):
    """Test settings pointing at the temporary sources catalogue."""
    test_settings.sources_file = sources_file
    return test_settings


@pytest.fixture
def sample_table():
    """Raw (un-normalized) table with mixed-case headers and text counts."""
    return pd.DataFrame(
        {
            "Date": ["2025-01-04", "2025-01-11", "not a date"],
            "State": ["Texas", "New Mexico", "Kansas"],
            "Cases": ["10", "20", "bad"],
            "Case_Count_Total": ["1,274", "5", ""],
        }
    )
