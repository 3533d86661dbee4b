"""
Reachability check for the CDC measles endpoints.
"""

import logging
from typing import Iterable, Optional, Union

import requests

from .fetch.http_fetcher import HttpFetcher
from .sources import DatasetType, get_candidates

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TYPES = (DatasetType.WEEKLY, DatasetType.YEARLY)


def is_data_available(
    verbose: bool = False,
    dataset_types: Iterable[Union[DatasetType, str]] = DEFAULT_PROBE_TYPES,
    session: Optional[requests.Session] = None,
) -> bool:
    """
    Check whether at least one CDC measles source is reachable.

    A candidate counts as available when it answers 200 with a non-blank
    body; the body is not parsed. Network failures only mark that one
    candidate as unavailable.

    Args:
        verbose: Log each check at INFO level instead of DEBUG. No handler
            is attached here; configure logging to see messages.
        dataset_types: Dataset types whose candidates are probed, in order.
        session: Optional ``requests.Session`` to send requests through.

    Returns:
        True on the first available candidate, False once all were checked.
    """
    log = logger.info if verbose else logger.debug
    types = [DatasetType.coerce(t) for t in dataset_types]

    with HttpFetcher(session=session) as fetcher:
        for dataset in types:
            for candidate in get_candidates(dataset):
                try:
                    response = fetcher.get(candidate.url)
                except requests.RequestException as e:
                    log("Error checking %s: %s", candidate.url, e)
                    continue

                if response.ok and not response.is_blank:
                    log(
                        "CDC measles %s data source is available: %s",
                        dataset.value,
                        candidate.url,
                    )
                    return True
                log(
                    "%s unavailable (status %s, %d bytes)",
                    candidate.url,
                    response.status_code,
                    len(response.body),
                )

    log("CDC measles data is currently unavailable from known sources.")
    return False
