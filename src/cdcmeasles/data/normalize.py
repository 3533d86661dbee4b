"""
Best-effort cleaning of CDC measles tables.

Column names are lowercased, then each column is matched against an ordered
list of ``CoercionRule`` objects; the first rule whose pattern matches the
column name (and whose ``applies`` check accepts the values) converts it.
Unparseable values become missing (NaN/NaT/<NA>) instead of raising.

Normalization never fails a fetch: on any internal error the input table is
returned untouched and a warning is logged. Every rule is idempotent, so
``normalize(normalize(df))`` equals ``normalize(df)``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


def is_text(series: pd.Series) -> bool:
    """True if the series holds Python strings (object or string dtype)."""
    return series.dtype == object or isinstance(series.dtype, pd.StringDtype)


def _always(series: pd.Series) -> bool:
    return True


@dataclass(frozen=True)
class CoercionRule:
    """
    Pattern -> coercion pair applied to matching column names.
    """

    name: str
    pattern: re.Pattern
    coerce: Callable[[pd.Series], pd.Series]
    applies: Callable[[pd.Series], bool] = _always

    def matches(self, column: str) -> bool:
        return bool(self.pattern.search(column))


def to_dates(series: pd.Series) -> pd.Series:
    """Parse values as dates; invalid entries become NaT."""
    if pd.api.types.is_datetime64_any_dtype(series):
        return series
    return pd.to_datetime(series, errors="coerce")


def to_numbers(series: pd.Series) -> pd.Series:
    """Parse values as numbers; invalid entries become NaN."""
    if is_text(series):
        # thousands separators, as in "1,274"
        series = series.map(
            lambda v: v.replace(",", "").strip() if isinstance(v, str) else v
        )
    return pd.to_numeric(series, errors="coerce")


def to_integers(series: pd.Series) -> pd.Series:
    """Parse values as nullable integers, keeping floats if any are fractional."""
    numbers = to_numbers(series)
    present = numbers.dropna()
    if present.empty or np.all(np.mod(present.to_numpy(dtype=float), 1) == 0):
        return numbers.astype("Int64")
    return numbers


DEFAULT_RULES: tuple[CoercionRule, ...] = (
    CoercionRule("date", re.compile(r"^date$"), to_dates),
    CoercionRule("week_bounds", re.compile(r"^week_(start|end)$"), to_dates),
    CoercionRule("year", re.compile(r"^year$"), to_integers, applies=is_text),
    CoercionRule(
        "counts",
        re.compile(r"cases|count|number", re.IGNORECASE),
        to_numbers,
        applies=is_text,
    ),
)


def normalize(
    table: pd.DataFrame, rules: Optional[Sequence[CoercionRule]] = None
) -> pd.DataFrame:
    """
    Lowercase column names and coerce column types by name.

    Args:
        table: Raw table as parsed from a CDC endpoint.
        rules: Ordered coercion rules; defaults to ``DEFAULT_RULES``.

    Returns:
        A new DataFrame with the same rows and columns, or ``table`` itself
        if cleaning failed.
    """
    rules = DEFAULT_RULES if rules is None else tuple(rules)
    try:
        cleaned = table.copy()
        columns = [str(c).lower() for c in cleaned.columns]
        if len(set(columns)) != len(columns):
            dupes = sorted({c for c in columns if columns.count(c) > 1})
            raise ValueError(f"duplicate columns after lowercasing: {dupes}")
        cleaned.columns = columns

        # Week/year tables are left as two columns; no date is derived here.
        for column in columns:
            series = cleaned[column]
            for rule in rules:
                if rule.matches(column) and rule.applies(series):
                    cleaned[column] = rule.coerce(series)
                    logger.debug("Column %r coerced by rule %r", column, rule.name)
                    break
        return cleaned
    except Exception as e:
        logger.warning("Error cleaning data: %s. Returning original data.", e)
        return table


# Name used by the original R package
clean_measles_data = normalize
