"""
Configuration module for cdcmeasles paths, HTTP behaviour and environment overrides.
"""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_SOURCES_FILE = PACKAGE_DIR / "config" / "sources.yaml"


def _default_user_agent() -> str:
    try:
        pkg_version = version("cdcmeasles")
    except PackageNotFoundError:
        pkg_version = "0.0.0-dev"
    return f"cdcmeasles/{pkg_version}"


class Settings(BaseSettings):
    """
    Application settings using Pydantic for validation
    and environment variable support.
    """

    # Project root directory
    root_dir: Path = Field(default_factory=lambda: PACKAGE_DIR.parent.parent)

    # Default directory for files written by the CLI
    output_dir: Optional[Path] = Field(default=None, validate_default=True)

    # HTTP settings
    request_timeout: float = Field(
        default=30, gt=0, description="Per-request timeout in seconds"
    )

    user_agent: str = Field(
        default_factory=_default_user_agent,
        description="User-Agent header sent with every request",
    )

    # Candidate source catalogue
    sources_file: Path = Field(
        default=DEFAULT_SOURCES_FILE,
        description="YAML file listing candidate URLs per dataset type",
    )

    # Plotting
    state_boundaries_url: str = Field(
        default=(
            "https://raw.githubusercontent.com/PublicaMundi/MappingAPI/"
            "master/data/geojson/us-states.json"
        ),
        description="GeoJSON with US state boundaries for choropleth maps",
    )

    # General settings
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = {
        "env_prefix": "CDCMEASLES_",
        "case_sensitive": False,
    }

    @field_validator("output_dir")
    @classmethod
    def set_output_dir(cls, v, info):
        values = info.data if hasattr(info, "data") else {}
        return v or values.get("root_dir", PACKAGE_DIR.parent.parent) / "data"

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()

    def create_directories(self) -> None:
        """Create the output directory if it doesn't exist."""
        if not self.output_dir:
            self.output_dir = self.root_dir / "data"
        Path(self.output_dir).mkdir(parents=True, exist_ok=True)


settings = Settings()
