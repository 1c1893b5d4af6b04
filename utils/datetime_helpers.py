"""Timezone-aware date/time helpers for year buckets and day matching."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from flask import current_app, has_app_context

DEFAULT_TIMEZONE = 'Europe/Warsaw'


def get_timezone() -> ZoneInfo:
    """Get the configured timezone (default outside an app context)."""
    tz_name = DEFAULT_TIMEZONE
    if has_app_context():
        tz_name = current_app.config.get('TIMEZONE', DEFAULT_TIMEZONE)
    return ZoneInfo(tz_name)


def get_now() -> datetime:
    """Get current datetime in the configured timezone."""
    return datetime.now(get_timezone())


def get_current_year() -> str:
    """Current calendar year as a 4-digit string."""
    return str(get_now().year)


def get_epoch_now() -> str:
    """Current time as an epoch-seconds string."""
    return str(int(get_now().timestamp()))


def from_epoch(timestamp) -> datetime:
    """
    Convert an epoch-seconds value (int or numeric string) to a local datetime.

    Raises:
        ValueError: If the value is not numeric
    """
    return datetime.fromtimestamp(float(timestamp), tz=get_timezone())


def year_of_timestamp(timestamp) -> str:
    """Calendar year of an epoch-seconds value as a 4-digit string."""
    return f'{from_epoch(timestamp).year:04d}'


def day_of_timestamp(timestamp) -> date:
    """Calendar day of an epoch-seconds value."""
    return from_epoch(timestamp).date()
