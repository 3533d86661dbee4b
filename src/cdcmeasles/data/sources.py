"""
Static catalogue of candidate sources for each CDC measles dataset.

The catalogue lives in ``config/sources.yaml`` and is read on demand; the
candidate lists are returned as tuples and never mutated at runtime.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, Field

from ..settings import settings

logger = logging.getLogger(__name__)


class DatasetType(str, Enum):
    """Logical dataset a caller can request."""

    WEEKLY = "weekly"
    YEARLY = "yearly"
    LEGACY = "legacy"

    @classmethod
    def coerce(cls, value: Union["DatasetType", str]) -> "DatasetType":
        """
        Accept either a member or its (case-insensitive) string value.

        Raises:
            ValueError: If the value does not name a known dataset type.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unknown dataset type '{value}'; valid options: {valid}"
            ) from None


class SourceFormat(str, Enum):
    """Body format a candidate endpoint is expected to return."""

    CSV = "csv"
    JSON = "json"


class CandidateSource(BaseModel):
    """
    One (URL, format) pair attempted during fallback resolution.
    """

    url: str = Field(..., description="Absolute URL of the endpoint")
    format: SourceFormat = Field(..., description="Expected body format")
    description: Optional[str] = Field(None, description="Free-form note")
    row_filter: Dict[str, str] = Field(
        default_factory=dict,
        description="Column -> value pairs rows must match after parsing",
    )

    model_config = {"frozen": True}


class SourceCatalog(BaseModel):
    """
    Parsed contents of the sources YAML file.
    """

    manual_download_url: str
    descriptions: Dict[DatasetType, str] = Field(default_factory=dict)
    candidates: Dict[DatasetType, Tuple[CandidateSource, ...]] = Field(
        default_factory=dict
    )

    model_config = {"frozen": True}


def load_catalog(path: Optional[Path] = None) -> SourceCatalog:
    """
    Load the candidate catalogue from YAML.

    Args:
        path: Catalogue file; defaults to ``settings.sources_file``.

    Returns:
        SourceCatalog with one ordered candidate tuple per dataset type.
    """
    path = Path(path or settings.sources_file)
    with path.open("r", encoding="utf-8") as fh:
        cfg = yaml.safe_load(fh) or {}

    descriptions: Dict[DatasetType, str] = {}
    candidates: Dict[DatasetType, Tuple[CandidateSource, ...]] = {}
    for name, entry in (cfg.get("datasets") or {}).items():
        dataset = DatasetType.coerce(name)
        entry = entry or {}
        if entry.get("description"):
            descriptions[dataset] = entry["description"]
        candidates[dataset] = tuple(
            CandidateSource(**item) for item in entry.get("candidates") or []
        )

    logger.debug(
        "Loaded %d candidate sources from %s",
        sum(len(c) for c in candidates.values()),
        path,
    )
    return SourceCatalog(
        manual_download_url=cfg.get("manual_download_url", ""),
        descriptions=descriptions,
        candidates=candidates,
    )


def get_candidates(
    dataset: Union[DatasetType, str], path: Optional[Path] = None
) -> Tuple[CandidateSource, ...]:
    """
    Get the ordered candidate list for a dataset type.

    Raises:
        ValueError: If the dataset type is unknown.
    """
    dataset = DatasetType.coerce(dataset)
    return load_catalog(path).candidates.get(dataset, ())


def list_dataset_types() -> List[str]:
    """List all dataset type names."""
    return [member.value for member in DatasetType]
