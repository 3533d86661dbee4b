"""
Fetching layer: HTTP transport, format parsers and the fallback resolver.
"""

from .http_fetcher import HttpFetcher, RawResponse
from .parsers import ParserRegistry, parse_body, register_parser
from .resolver import (
    AttemptOutcome,
    FetchAttempt,
    SourceResolver,
    fetch_dataset,
    get_measles_data,
    save_table,
)

__all__ = [
    # Transport
    "HttpFetcher",
    "RawResponse",
    # Parsers
    "ParserRegistry",
    "register_parser",
    "parse_body",
    # Resolution
    "AttemptOutcome",
    "FetchAttempt",
    "SourceResolver",
    "fetch_dataset",
    "get_measles_data",
    "save_table",
]
