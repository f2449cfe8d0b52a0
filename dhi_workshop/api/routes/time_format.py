"""Time Formatting Route — locale/timezone demo backed by CLDR data.

Invariants:
    - Missing or empty locale/tz fall back to the configured defaults (en-US / UTC)
    - Invalid identifiers raise InvalidLocaleError → 400 via the global handler
    - No state shared between requests

Design Decisions:
    - Thin route: parsing and formatting live in core.locale_format
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Query

from dhi_workshop.config import get_settings
from dhi_workshop.core.locale_format import format_time_report
from dhi_workshop.schemas.time import ErrorResponse, TimeResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["time"])


@router.get(
    "/time",
    response_model=TimeResponse,
    responses={400: {"model": ErrorResponse}},
)
async def format_current_time(
    locale: str | None = Query(None, description="BCP-47 locale tag"),
    tz: str | None = Query(None, description="IANA timezone id"),
):
    """Format the current instant for a locale and timezone."""
    settings = get_settings()
    report = format_time_report(
        locale or settings.default_locale,
        tz or settings.default_timezone,
        datetime.now(timezone.utc),
        icu_data_path=settings.icu_data_path,
        amount=settings.sample_amount,
    )
    logger.debug(
        f"Formatted time for {report.locale} in {report.tz}",
    )
    return TimeResponse.from_report(report)
