"""Time & Health Schemas — wire shapes of GET /api/health and GET /api/time.

Invariants:
    - Field names on the wire match the original Node demo (numberExample, icuDataPath)
    - ErrorResponse always carries a non-empty message

Design Decisions:
    - Aliases + populate_by_name: Python code uses snake_case, JSON stays camelCase
"""

from pydantic import BaseModel, ConfigDict, Field

from dhi_workshop.core.locale_format import TimeReport


class HealthResponse(BaseModel):
    """Liveness payload."""
    status: str = "ok"
    timestamp: str


class TimeResponse(BaseModel):
    """Formatted date/time and currency for one locale + timezone."""
    model_config = ConfigDict(populate_by_name=True)

    locale: str
    tz: str
    formatted: str = Field(min_length=1)
    number_example: str = Field(alias="numberExample", min_length=1)
    timestamp: str
    icu_data_path: str = Field(alias="icuDataPath")

    @classmethod
    def from_report(cls, report: TimeReport) -> "TimeResponse":
        return cls(**report.to_dict())


class ErrorResponse(BaseModel):
    """Client-facing error envelope."""
    error: str
    message: str = Field(min_length=1)
    code: str
