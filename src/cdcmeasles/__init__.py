"""
cdcmeasles: download, clean and plot CDC measles case data.

Subpackages
-----------
- data:      candidate sources, fetching with fallback, cleaning, metadata
- plotting:  matplotlib/geopandas chart helpers (optional extra)
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version(__name__)
except PackageNotFoundError:  # local editable install
    __version__ = "0.0.0-dev"

from .data import (  # noqa: E402
    DatasetType,
    clean_measles_data,
    fetch_dataset,
    get_measles_data,
    get_measles_metadata,
    is_data_available,
    normalize,
)
from .errors import (  # noqa: E402
    CdcMeaslesError,
    DatasetUnavailableError,
    MissingColumnError,
    SourceParseError,
)
from .plotting import plot_state_map, plot_time_series, plot_yearly_cases  # noqa: E402

__all__ = [
    "__version__",
    "DatasetType",
    "fetch_dataset",
    "get_measles_data",
    "normalize",
    "clean_measles_data",
    "is_data_available",
    "get_measles_metadata",
    "plot_time_series",
    "plot_yearly_cases",
    "plot_state_map",
    "CdcMeaslesError",
    "DatasetUnavailableError",
    "MissingColumnError",
    "SourceParseError",
]
