"""Configuration for report rendering."""

from importlib.metadata import version

from pydantic import BaseModel, Field

REPORT_VERSION = version("inspec-report")


class ReportConfig(BaseModel):
    """Configuration shared by the report formatters."""

    color: bool = True
    # Printed as "Target:" in profile headers when set
    target: str | None = None
    title_max_length: int = Field(default=60, gt=0)
    version: str = REPORT_VERSION
