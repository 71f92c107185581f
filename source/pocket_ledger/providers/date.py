"""This module provides centralized date-related utilities."""

from datetime import date, datetime, time


class DateProvider:
    """Provides centralized constants and methods for date handling.

    Ledger entries that arrive without a date or time are stamped with the
    server's local clock, so every default goes through this class.
    """

    DATE_FORMAT = "%Y-%m-%d"
    TIME_FORMAT = "%H:%M:%S"

    @staticmethod
    def now() -> datetime:
        """Returns the current local date and time, truncated to seconds.

        Returns:
            A naive datetime in the server's local time zone.
        """
        return datetime.now().replace(microsecond=0)

    @classmethod
    def today(cls) -> date:
        """Returns the current local date.

        Returns:
            Today's date.
        """
        return cls.now().date()

    @classmethod
    def current_time(cls) -> time:
        """Returns the current local time of day.

        Returns:
            The time of day with second precision.
        """
        return cls.now().time()
