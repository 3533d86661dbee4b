"""
Descriptive metadata for the CDC measles dataset.
"""

from datetime import date

from pydantic import BaseModel, Field

from ..errors import MANUAL_DOWNLOAD_URL


class MeaslesMetadata(BaseModel):
    source: str
    url: str
    description: str
    update_frequency: str
    last_checked: date = Field(default_factory=date.today)


def get_measles_metadata() -> MeaslesMetadata:
    """Return the static source description, stamped with today's date."""
    return MeaslesMetadata(
        source="Centers for Disease Control and Prevention (CDC)",
        url=MANUAL_DOWNLOAD_URL,
        description="Measles case data reported to CDC",
        update_frequency="Varies, check CDC website for details",
    )
