"""
Calendar Service - Weekend logic for travel records.

Architecture Decision: Strategy Pattern
Day classification is kept in one place so the row highlighting and any
future working-day rules share the same definition of a weekend.
"""

import datetime

from korektor.i18n import tr
from korektor.services.datetime_codec import parse_datetime

# Any 7 consecutive calendar days contain a Saturday and a Sunday
_FULL_WEEK_DAYS = 7


class CalendarService:
    """
    Handles weekday and weekend logic.
    Separated from record logic for Separation of Concerns.
    """

    def is_weekend(self, date_obj: datetime.date) -> bool:
        """Check if date is a weekend (Saturday=5, Sunday=6)"""
        return date_obj.weekday() > 4

    def day_name(self, date_obj: datetime.date) -> str:
        """Localized name of the day of the week"""
        return tr(f"day.{date_obj.weekday()}")

    def overlaps_weekend(self, start: datetime.datetime, end: datetime.datetime) -> bool:
        """
        Check whether any calendar day from start to end touches a weekend.

        Days are local wall-clock dates, both ends inclusive, so a stay from
        Friday 22:00 to Saturday 01:00 overlaps the weekend.

        Args:
            start: Arrival
            end: Departure

        Returns:
            False for an empty or reversed range.
        """
        if start >= end:
            return False

        first_day = start.date()
        last_day = end.date()
        span_days = (last_day - first_day).days + 1

        if span_days >= _FULL_WEEK_DAYS:
            return True

        current = first_day
        while current <= last_day:
            if self.is_weekend(current):
                return True
            current += datetime.timedelta(days=1)

        return False

    def record_overlaps_weekend(self, arrival: str, departure: str) -> bool:
        """Text variant of overlaps_weekend(), False if either side does not parse"""
        start = parse_datetime(arrival)
        end = parse_datetime(departure)
        if start is None or end is None:
            return False
        return self.overlaps_weekend(start, end)

    def arrival_day_name(self, arrival: str) -> str:
        """Day name shown next to the arrival, "-" if it does not parse"""
        start = parse_datetime(arrival)
        if start is None:
            return "-"
        return self.day_name(start.date())
