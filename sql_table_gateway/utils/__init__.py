from .timezone import DATE_FORMAT, DATETIME_FORMAT, TimezoneManager

__all__ = [
    "DATE_FORMAT",
    "DATETIME_FORMAT",
    "TimezoneManager",
]
