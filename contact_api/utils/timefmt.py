from __future__ import annotations
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from contact_api.config import DEFAULT_TIMEZONE


def format_submission_time(moment: datetime, tz_name: str = DEFAULT_TIMEZONE) -> str:
    """
    Render a moment the way the site shows submission times,
    e.g. "October 17, 2026 at 02:30 PM MDT".
    Naive datetimes are taken as UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    local = moment.astimezone(ZoneInfo(tz_name))
    return (
        f"{local:%B} {local.day}, {local:%Y} at "
        f"{local:%I:%M %p} {local.tzname()}"
    )
