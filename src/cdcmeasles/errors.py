"""
Exception types raised by cdcmeasles.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:
    from .data.fetch.resolver import FetchAttempt

MANUAL_DOWNLOAD_URL = "https://www.cdc.gov/measles/data-research/index.html"


class CdcMeaslesError(Exception):
    """Base class for all cdcmeasles errors."""


class SourceParseError(CdcMeaslesError, ValueError):
    """A response body could not be parsed into a table."""


class DatasetUnavailableError(CdcMeaslesError):
    """
    Raised when every candidate source for a dataset failed.

    Carries the full attempt log so callers can see which URLs were tried
    and why each one was skipped.
    """

    def __init__(self, dataset: str, attempts: Sequence["FetchAttempt"]):
        self.dataset = dataset
        self.attempts: List["FetchAttempt"] = list(attempts)
        self.hint = (
            f"Please check the CDC website at {MANUAL_DOWNLOAD_URL} "
            "for the latest data structure or download the data manually."
        )
        tried = ", ".join(self.attempted_urls) or "none"
        super().__init__(
            f"Failed to download CDC measles data ({dataset}) from all known "
            f"sources. Tried: {tried}. {self.hint}"
        )

    @property
    def attempted_urls(self) -> List[str]:
        return [attempt.url for attempt in self.attempts]


class MissingColumnError(CdcMeaslesError, KeyError):
    """A column required by a plotting helper is not present in the table."""

    def __init__(self, column: str):
        self.column = column
        super().__init__(column)

    def __str__(self) -> str:
        return f"Column '{self.column}' not found in data."
