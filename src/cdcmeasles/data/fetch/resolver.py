"""
Multi-source fetch with fallback.

For a requested dataset type the resolver walks the ordered candidate list
and returns the first candidate that answers 200 with a non-blank body that
parses into a non-empty table. Every skipped candidate is recorded as a
``FetchAttempt``; if none succeeds a ``DatasetUnavailableError`` carrying
the whole attempt log is raised. An empty table is never returned as data.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd
import requests
from pydantic import BaseModel

from ...errors import DatasetUnavailableError, SourceParseError
from ..normalize import CoercionRule, normalize
from ..sources import CandidateSource, DatasetType, SourceFormat, get_candidates
from .http_fetcher import HttpFetcher
from .parsers import parse_body

logger = logging.getLogger(__name__)


class AttemptOutcome(str, Enum):
    TRANSPORT_ERROR = "transport_error"
    BAD_STATUS = "bad_status"
    EMPTY_BODY = "empty_body"
    PARSE_ERROR = "parse_error"
    EMPTY_TABLE = "empty_table"
    SUCCESS = "success"


class FetchAttempt(BaseModel):
    """
    Outcome of trying one candidate source.
    """

    url: str
    format: SourceFormat
    outcome: AttemptOutcome
    detail: Optional[str] = None
    rows_fetched: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.outcome is AttemptOutcome.SUCCESS


def apply_row_filter(table: pd.DataFrame, row_filter: Dict[str, str]) -> pd.DataFrame:
    """
    Keep rows whose columns equal the required values.

    Filters on columns the table does not have are ignored.
    """
    for column, value in row_filter.items():
        if column not in table.columns:
            logger.debug("Row filter column %r not in table; skipped", column)
            continue
        table = table[table[column].astype(str) == str(value)]
    return table.reset_index(drop=True)


class SourceResolver:
    """
    Resolves a dataset type to a table by trying candidates in order.
    """

    def __init__(
        self,
        fetcher: Optional[HttpFetcher] = None,
        candidates: Optional[Dict[DatasetType, Sequence[CandidateSource]]] = None,
        rules: Optional[Sequence[CoercionRule]] = None,
    ):
        self.fetcher = fetcher or HttpFetcher()
        self._candidates = candidates
        self.rules = rules
        self.attempts: List[FetchAttempt] = []
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    def candidates_for(self, dataset: DatasetType) -> Tuple[CandidateSource, ...]:
        if self._candidates is not None:
            return tuple(self._candidates.get(dataset, ()))
        return get_candidates(dataset)

    def resolve(
        self, dataset: Union[DatasetType, str], verbose: bool = False
    ) -> pd.DataFrame:
        """
        Fetch, parse and normalize the first working candidate.

        Args:
            dataset: Dataset type to resolve.
            verbose: Log per-candidate diagnostics at INFO instead of DEBUG.

        Returns:
            Normalized table with at least one row.

        Raises:
            DatasetUnavailableError: If every candidate failed.
        """
        dataset = DatasetType.coerce(dataset)
        log = self.logger.info if verbose else self.logger.debug
        self.attempts = []

        for candidate in self.candidates_for(dataset):
            log(f"Trying URL: {candidate.url}")
            attempt, table = self._try_candidate(candidate)
            self.attempts.append(attempt)

            if table is not None:
                log(f"Successfully downloaded CDC measles data from {candidate.url}")
                return normalize(table, self.rules)
            log(f"Skipping {candidate.url}: {attempt.outcome.value} ({attempt.detail})")

        self.logger.warning(
            f"All {len(self.attempts)} candidate URLs failed for dataset "
            f"'{dataset.value}'"
        )
        raise DatasetUnavailableError(dataset.value, self.attempts)

    def _try_candidate(
        self, candidate: CandidateSource
    ) -> Tuple[FetchAttempt, Optional[pd.DataFrame]]:
        def failed(outcome: AttemptOutcome, detail: str):
            return (
                FetchAttempt(
                    url=candidate.url,
                    format=candidate.format,
                    outcome=outcome,
                    detail=detail,
                ),
                None,
            )

        try:
            response = self.fetcher.get(candidate.url)
        except requests.RequestException as e:
            return failed(AttemptOutcome.TRANSPORT_ERROR, f"Error accessing: {e}")

        if not response.ok:
            return failed(
                AttemptOutcome.BAD_STATUS,
                f"URL returned status code: {response.status_code}",
            )
        if response.is_blank:
            return failed(AttemptOutcome.EMPTY_BODY, "URL returned empty content")

        try:
            table = parse_body(response.body, candidate.format)
        except SourceParseError as e:
            return failed(AttemptOutcome.PARSE_ERROR, str(e))

        table = apply_row_filter(table, candidate.row_filter)
        if table.empty:
            return failed(AttemptOutcome.EMPTY_TABLE, "URL returned empty data frame")

        attempt = FetchAttempt(
            url=candidate.url,
            format=candidate.format,
            outcome=AttemptOutcome.SUCCESS,
            rows_fetched=len(table),
        )
        return attempt, table


def save_table(table: pd.DataFrame, path: Union[str, Path]) -> Path:
    """
    Write a table as comma-separated CSV with a header and no index.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    table.to_csv(path, index=False)
    logger.info(f"Data saved to {path}")
    return path


def fetch_dataset(
    dataset: Union[DatasetType, str] = DatasetType.WEEKLY,
    verbose: bool = False,
    save_file: bool = False,
    file_name: Union[str, Path] = "cdc_measles_data.csv",
    session: Optional[requests.Session] = None,
) -> pd.DataFrame:
    """
    Download a CDC measles dataset, trying each known source in turn.

    Args:
        dataset: "weekly", "yearly" or "legacy".
        verbose: Log each attempt at INFO level. The library attaches no
            handler, so configure logging (e.g. ``logging.basicConfig``)
            to see messages.
        save_file: Also write the table to ``file_name`` as CSV.
        file_name: Destination path used when ``save_file`` is set.
        session: Optional ``requests.Session`` to send requests through.

    Returns:
        Normalized DataFrame with at least one row.

    Raises:
        DatasetUnavailableError: If no candidate source produced data.
        ValueError: If ``dataset`` is not a known dataset type.
    """
    dataset = DatasetType.coerce(dataset)
    with HttpFetcher(session=session) as fetcher:
        table = SourceResolver(fetcher).resolve(dataset, verbose=verbose)

    if save_file:
        save_table(table, file_name)
    logger.info(f"Fetched {len(table)} rows of {dataset.value} measles data")
    return table


# Name used by the original R package
get_measles_data = fetch_dataset
