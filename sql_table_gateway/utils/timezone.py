"""Timezone and timestamp formatting utilities for the table gateway."""

import os
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"


class TimezoneManager:
    """Manages the timezone used for audit timestamps."""

    def __init__(self, default_timezone: Optional[str] = None):
        """Initialize timezone manager.

        Args:
            default_timezone: Default timezone string (e.g., 'UTC', 'Europe/Berlin')
                            If None, uses environment variable or UTC
        """
        self.default_timezone = self._resolve_timezone(default_timezone)

    def _resolve_timezone(self, tz_string: Optional[str]) -> str:
        """Resolve timezone string from parameter, environment, or default."""
        if tz_string:
            return tz_string

        env_tz = (
            os.getenv("SQL_GATEWAY_TIMEZONE") or
            os.getenv("TZ")
        )

        if env_tz:
            return env_tz

        return "UTC"

    def get_timezone(self) -> ZoneInfo:
        """ZoneInfo of the default timezone."""
        return ZoneInfo(self.default_timezone)

    def now(self) -> datetime:
        """Current datetime in the default timezone."""
        return datetime.now(self.get_timezone())

    def to_timezone(self, dt: datetime) -> datetime:
        """Convert datetime to the default timezone.

        Naive datetimes are assumed to already be in the default timezone.
        """
        if dt is None:
            return None

        if dt.tzinfo is None:
            return dt.replace(tzinfo=self.get_timezone())

        return dt.astimezone(self.get_timezone())

    def format_datetime(self, dt: datetime) -> str:
        """Format a datetime as ``YYYY-MM-DD HH:MM:SS`` in the default timezone.

        Args:
            dt: Datetime to format

        Returns:
            Formatted local datetime string, without offset
        """
        if dt is None:
            return None

        return self.to_timezone(dt).strftime(DATETIME_FORMAT)

    def format_date(self, value: date) -> str:
        """Format a date, or the date part of a datetime, as ``YYYY-MM-DD``."""
        if value is None:
            return None

        if isinstance(value, datetime):
            value = self.to_timezone(value)
        return value.strftime(DATE_FORMAT)
