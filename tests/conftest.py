"""
Pytest configuration and fixtures.
"""

import sys
import datetime
from pathlib import Path
import pytest

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from korektor.domain.models import EditableRecord
from korektor.i18n import set_language
from korektor.services.duration_service import calculate_elapsed
from korektor.services.record_service import RecordService


@pytest.fixture(autouse=True)
def czech_language():
    """Every test starts with the default Czech labels"""
    set_language("cs")
    yield
    set_language("cs")


@pytest.fixture
def now():
    """A fixed 'now' (Friday 15 March 2024, 08:30)"""
    return datetime.datetime(2024, 3, 15, 8, 30)


@pytest.fixture
def record_service():
    return RecordService()


@pytest.fixture
def make_record():
    """Factory for committed records with a computed elapsed column"""
    def _make(arrival, departure, country="CZ", **kwargs):
        return EditableRecord(
            arrival=arrival,
            departure=departure,
            country=country,
            elapsed=calculate_elapsed(arrival, departure),
            **kwargs
        )
    return _make


@pytest.fixture
def three_records(make_record):
    """Three committed records in chronological order"""
    return [
        make_record("01.03.24 08:00", "01.03.24 18:00", "CZ"),
        make_record("02.03.24 08:00", "03.03.24 10:00", "DE"),
        make_record("05.03.24 06:00", "05.03.24 22:15", "AT"),
    ]
