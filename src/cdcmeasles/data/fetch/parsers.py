"""
Format parsers turning a response body into a pandas DataFrame.

Parsers are registered per ``SourceFormat`` so new formats can be added
without touching the resolver:

    @register_parser(SourceFormat.CSV)
    def parse_csv(body: bytes) -> pd.DataFrame: ...
"""

import io
import json
import logging
from typing import Callable, Dict, List, Optional, Union

import pandas as pd

from ...errors import SourceParseError
from ..sources import SourceFormat

logger = logging.getLogger(__name__)

Parser = Callable[[bytes], pd.DataFrame]


class ParserRegistry:
    """
    Registry mapping each source format to its parser function.
    """

    _parsers: Dict[SourceFormat, Parser] = {}

    @classmethod
    def register(cls, fmt: Union[SourceFormat, str], parser: Parser) -> None:
        """
        Register a parser for a format, replacing any previous one.
        """
        fmt = SourceFormat(fmt)
        if not callable(parser):
            raise ValueError(f"Parser must be callable: {parser!r}")
        cls._parsers[fmt] = parser
        logger.debug(f"Registered parser: {fmt.value} -> {parser.__name__}")

    @classmethod
    def get(cls, fmt: Union[SourceFormat, str]) -> Parser:
        fmt = SourceFormat(fmt)
        if fmt not in cls._parsers:
            raise KeyError(f"No parser registered for format '{fmt.value}'")
        return cls._parsers[fmt]

    @classmethod
    def get_available_formats(cls) -> List[str]:
        return [fmt.value for fmt in cls._parsers]


def register_parser(fmt: Union[SourceFormat, str], parser: Optional[Parser] = None):
    """
    Decorator and function for registering parsers.

    Can be used as:
    1. Function: register_parser("csv", parse_csv)
    2. Decorator: @register_parser("csv")
    """

    def decorator(func: Parser) -> Parser:
        ParserRegistry.register(fmt, func)
        return func

    if parser is not None:
        return decorator(parser)
    return decorator


def parse_body(body: bytes, fmt: Union[SourceFormat, str]) -> pd.DataFrame:
    """
    Parse a raw body with the parser registered for ``fmt``.

    Raises:
        SourceParseError: If the body is not valid for the declared format.
    """
    parser = ParserRegistry.get(fmt)
    try:
        return parser(body)
    except SourceParseError:
        raise
    except (ValueError, RecursionError) as e:
        # pandas ParserError/EmptyDataError, JSONDecodeError and
        # UnicodeDecodeError are all ValueError subclasses; RecursionError
        # comes from json.loads on pathologically nested input
        raise SourceParseError(f"Invalid {SourceFormat(fmt).value} body: {e}") from e


def _looks_like_html(body: bytes) -> bool:
    head = body.lstrip()[:256].lower()
    return head.startswith((b"<!doctype html", b"<html"))


@register_parser(SourceFormat.CSV)
def parse_csv(body: bytes) -> pd.DataFrame:
    """Parse a comma-separated body with a header row."""
    if _looks_like_html(body):
        raise SourceParseError("Expected CSV but received an HTML document")
    return pd.read_csv(io.BytesIO(body), encoding="utf-8-sig")


@register_parser(SourceFormat.JSON)
def parse_json(body: bytes) -> pd.DataFrame:
    """
    Parse a JSON body holding a list of records.

    Accepts a top-level list, or an object whose first list-valued member
    holds the records (e.g. ``{"data": [...]}``). An object without any list
    member, such as an API error document, is rejected. Nested objects are
    flattened with dotted column names.
    """
    if _looks_like_html(body):
        raise SourceParseError("Expected JSON but received an HTML document")
    payload = json.loads(body.decode("utf-8-sig"))

    if isinstance(payload, dict):
        records = next((v for v in payload.values() if isinstance(v, list)), None)
        if records is None:
            raise SourceParseError("JSON object holds no record list")
    elif isinstance(payload, list):
        records = payload
    else:
        raise SourceParseError(
            f"JSON payload is a {type(payload).__name__}, not a table"
        )

    if records and all(isinstance(r, dict) for r in records):
        return pd.json_normalize(records)
    if all(isinstance(r, list) for r in records):
        return pd.DataFrame(records)
    raise SourceParseError("JSON records are neither objects nor rows")
