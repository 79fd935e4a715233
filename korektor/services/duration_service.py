"""
Duration calculation between arrival and departure.

Two flavours exist: calculate_elapsed() falls back to "00:00:00" for any
invalid span and is used for non-interactive work (imports, recomputation),
calculate_elapsed_interactive() reports what is wrong with the span while a
row is being edited.
"""

from datetime import timedelta

from korektor.domain.models import ZERO_DURATION, ELAPSED_ORDER_ERROR, ELAPSED_INVALID_INPUT
from korektor.services.datetime_codec import parse_datetime


def format_duration(seconds: int) -> str:
    """Format seconds as HH:MM:SS, hours are not wrapped at 24"""
    seconds = max(0, int(seconds))
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _whole_seconds(delta: timedelta) -> int:
    # Millisecond resolution, floored to whole seconds
    return (delta // timedelta(milliseconds=1)) // 1000


def calculate_elapsed(arrival: str, departure: str) -> str:
    """
    Time spent between arrival and departure.

    Returns "00:00:00" when either side does not parse or departure
    is not after arrival.
    """
    arrival_dt = parse_datetime(arrival)
    departure_dt = parse_datetime(departure)

    if arrival_dt is None or departure_dt is None or arrival_dt >= departure_dt:
        return ZERO_DURATION

    return format_duration(_whole_seconds(departure_dt - arrival_dt))


def calculate_elapsed_interactive(arrival: str, departure: str) -> str:
    """Like calculate_elapsed(), but returns an error sentinel for bad input"""
    arrival_dt = parse_datetime(arrival)
    departure_dt = parse_datetime(departure)

    if arrival_dt is None or departure_dt is None:
        return ELAPSED_INVALID_INPUT
    if arrival_dt >= departure_dt:
        return ELAPSED_ORDER_ERROR

    return format_duration(_whole_seconds(departure_dt - arrival_dt))


def is_error_sentinel(elapsed: str) -> bool:
    """Check whether an elapsed value is one of the editing error markers"""
    return elapsed in (ELAPSED_ORDER_ERROR, ELAPSED_INVALID_INPUT)
