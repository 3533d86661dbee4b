"""
cdcmeasles data package: candidate sources, fetching, cleaning and metadata.
"""

from .availability import is_data_available  # noqa: F401
from ..errors import DatasetUnavailableError  # noqa: F401
from .fetch import (  # noqa: F401
    SourceResolver,
    fetch_dataset,
    get_measles_data,
    save_table,
)
from .metadata import MeaslesMetadata, get_measles_metadata  # noqa: F401
from .normalize import (  # noqa: F401
    DEFAULT_RULES,
    CoercionRule,
    clean_measles_data,
    normalize,
)
from .sources import (  # noqa: F401
    CandidateSource,
    DatasetType,
    SourceFormat,
    get_candidates,
    list_dataset_types,
)

__all__ = [
    "CandidateSource",
    "DatasetType",
    "SourceFormat",
    "get_candidates",
    "list_dataset_types",
    "SourceResolver",
    "DatasetUnavailableError",
    "fetch_dataset",
    "get_measles_data",
    "save_table",
    "CoercionRule",
    "DEFAULT_RULES",
    "normalize",
    "clean_measles_data",
    "is_data_available",
    "MeaslesMetadata",
    "get_measles_metadata",
]
