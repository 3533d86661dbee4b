"""
Plotting helpers for CDC measles tables.

matplotlib and geopandas are optional dependencies (``pip install
cdcmeasles[plot]``); they are imported when a helper is called. Every helper
checks its named columns first and raises ``MissingColumnError`` for the
first one missing. Figures are returned, never shown or saved.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import pandas as pd

from .errors import MissingColumnError
from .settings import settings

if TYPE_CHECKING:
    import geopandas as gpd
    from matplotlib.figure import Figure

logger = logging.getLogger(__name__)

CAPTION = "Source: CDC"


def _require_columns(table: pd.DataFrame, *columns: str) -> None:
    for column in columns:
        if column not in table.columns:
            raise MissingColumnError(column)


def _pyplot():
    try:
        import matplotlib.pyplot as plt
    except ImportError as e:
        raise ImportError(
            "Package 'matplotlib' is needed for plotting. "
            "Install it with: pip install cdcmeasles[plot]"
        ) from e
    return plt


def _geopandas():
    try:
        import geopandas as gpd
    except ImportError as e:
        raise ImportError(
            "Package 'geopandas' is needed for state maps. "
            "Install it with: pip install cdcmeasles[plot]"
        ) from e
    return gpd


def _add_caption(fig: "Figure") -> None:
    fig.text(0.99, 0.01, CAPTION, ha="right", va="bottom", fontsize=8, color="grey")


def plot_time_series(
    table: pd.DataFrame,
    date_col: str = "date",
    cases_col: str = "cases",
    title: str = "Measles Cases Over Time",
) -> "Figure":
    """
    Line chart of case counts over time.

    Raises:
        MissingColumnError: If ``date_col`` or ``cases_col`` is absent.
    """
    _require_columns(table, date_col, cases_col)
    plt = _pyplot()

    data = table.sort_values(date_col)
    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(data[date_col], data[cases_col], color="darkred")
    ax.set_title(title, fontweight="bold")
    ax.set_xlabel("Date")
    ax.set_ylabel("Number of Cases")
    ax.grid(True, color="0.85")
    fig.autofmt_xdate()
    _add_caption(fig)
    return fig


def plot_yearly_cases(
    table: pd.DataFrame,
    year_col: str = "year",
    cases_col: str = "cases",
    title: str = "Yearly Measles Cases",
) -> "Figure":
    """
    Bar chart of case counts per year.

    Raises:
        MissingColumnError: If ``year_col`` or ``cases_col`` is absent.
    """
    _require_columns(table, year_col, cases_col)
    plt = _pyplot()

    data = table.sort_values(year_col)
    fig, ax = plt.subplots(figsize=(12, 5))
    ax.bar(data[year_col].astype(str), data[cases_col], color="forestgreen")
    ax.set_title(title, fontweight="bold")
    ax.set_xlabel("Year")
    ax.set_ylabel("Number of Cases")
    ax.tick_params(axis="x", labelrotation=45)
    _add_caption(fig)
    return fig


def plot_state_map(
    table: pd.DataFrame,
    state_col: str = "state",
    cases_col: str = "cases",
    title: str = "Measles Cases by State",
    boundaries: Optional["gpd.GeoDataFrame"] = None,
    boundary_name_col: str = "name",
) -> "Figure":
    """
    Choropleth of case counts by US state.

    State identifiers are lowercased (and stripped) on both sides before the
    join, so "Texas", "TEXAS" and "texas" all match. Rows for the same state
    are summed. States without data are drawn blank.

    Args:
        table: Table with one or more rows per state.
        state_col: Column holding state names.
        cases_col: Numeric column to colour by.
        title: Plot title.
        boundaries: State polygons; read from ``settings.state_boundaries_url``
            when omitted.
        boundary_name_col: Column of ``boundaries`` holding state names.

    Raises:
        MissingColumnError: If a named column is absent from the table or
            from the boundaries.
    """
    _require_columns(table, state_col, cases_col)
    plt = _pyplot()
    gpd = _geopandas()

    if boundaries is None:
        logger.info("Loading state boundaries from %s", settings.state_boundaries_url)
        boundaries = gpd.read_file(settings.state_boundaries_url)
    _require_columns(boundaries, boundary_name_col)

    states = boundaries.assign(
        region=boundaries[boundary_name_col].astype(str).str.strip().str.lower()
    )
    cases = (
        table.assign(region=table[state_col].astype(str).str.strip().str.lower())
        .groupby("region", as_index=False)[cases_col]
        .sum()
    )
    merged = states.merge(cases, on="region", how="left")

    fig, ax = plt.subplots(figsize=(12, 7))
    merged.plot(
        column=cases_col,
        ax=ax,
        cmap="inferno",
        legend=True,
        legend_kwds={"label": "Cases"},
        edgecolor="0.7",
        linewidth=0.2,
        missing_kwds={"color": "white", "edgecolor": "0.7"},
    )
    ax.set_axis_off()
    ax.set_title(title, fontweight="bold")
    _add_caption(fig)
    return fig
