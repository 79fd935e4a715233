"""
Record Service - Ordering and editing of travel records.

Architecture Decision: Reducer-style operations
Every method takes the current collection and returns a new list. The
service holds no record state, the caller owns the single current version
(see ReportSession).
"""

import datetime
import logging
from typing import List, Optional, Sequence, Tuple

from korektor.domain.errors import ExportEmptyError, RecordSpanError
from korektor.domain.models import EditableRecord, RowStatus, new_record_id
from korektor.services.calendar_service import CalendarService
from korektor.services.datetime_codec import format_datetime, parse_datetime
from korektor.services.duration_service import (
    calculate_elapsed,
    calculate_elapsed_interactive,
    is_error_sentinel,
)

logger = logging.getLogger(__name__)

Records = List[EditableRecord]


def _arrival_sort_key(record: EditableRecord):
    arrival = parse_datetime(record.arrival)
    # Unparseable arrivals go last and compare equal among themselves
    if arrival is None:
        return (1, datetime.datetime.min)
    return (0, arrival)


class RecordService:
    """
    Pure operations over the record collection.
    """

    def __init__(self, default_stay_minutes: int = 60, calendar_service: Optional[CalendarService] = None):
        """
        Args:
            default_stay_minutes: Span between arrival and departure of a new record
            calendar_service: Used for weekend highlighting
        """
        self.default_stay_minutes = default_stay_minutes
        self.calendar_service = calendar_service or CalendarService()

    # --- Ordering ---

    @staticmethod
    def sort_records(records: Sequence[EditableRecord]) -> Records:
        """Stable sort ascending by arrival, unparseable arrivals last"""
        return sorted(records, key=_arrival_sort_key)

    @staticmethod
    def _index_of(records: Sequence[EditableRecord], record_id: str) -> int:
        for index, record in enumerate(records):
            if record.id == record_id:
                return index
        return -1

    # --- Creation ---

    def create_empty_record(self, now: datetime.datetime) -> EditableRecord:
        """
        Template for a freshly added row: a default-length stay starting now,
        open for editing and not yet committed.
        """
        arrival = format_datetime(now)
        departure = format_datetime(now + datetime.timedelta(minutes=self.default_stay_minutes))
        return EditableRecord(
            id=new_record_id(),
            arrival=arrival,
            departure=departure,
            country="",
            elapsed=calculate_elapsed(arrival, departure),
            editing=True,
            is_new=True,
        )

    def add_at_top(self, records: Sequence[EditableRecord],
                   now: datetime.datetime) -> Tuple[Records, EditableRecord]:
        """Insert a new record at position 0, no sorting"""
        new_record = self.create_empty_record(now)
        return [new_record, *records], new_record

    def add_relative(self, records: Sequence[EditableRecord], reference_id: str, above: bool,
                     now: datetime.datetime) -> Tuple[Records, EditableRecord]:
        """
        Insert a new record right above or below another one.

        Falls back to add_at_top() when reference_id is not in the collection.
        """
        index = self._index_of(records, reference_id)
        if index == -1:
            logger.debug(f"Reference record {reference_id} not found, adding at top")
            return self.add_at_top(records, now)

        new_record = self.create_empty_record(now)
        position = index if above else index + 1
        updated = list(records)
        updated.insert(position, new_record)
        return updated, new_record

    # --- Mutation ---

    def update_record(self, records: Sequence[EditableRecord], updated: EditableRecord) -> Records:
        """
        Replace a record by id.

        The first save of a new record (it was is_new and the update is no
        longer editing) clears is_new and re-sorts the whole collection.
        Unknown ids leave the collection unchanged.
        """
        index = self._index_of(records, updated.id)
        if index == -1:
            return list(records)

        original = records[index]
        result = list(records)

        if original.is_new and not updated.editing:
            result[index] = updated.model_copy(update={"is_new": False})
            return self.sort_records(result)

        result[index] = updated
        return result

    @staticmethod
    def delete_record(records: Sequence[EditableRecord], record_id: str) -> Records:
        """Remove a record by id"""
        return [record for record in records if record.id != record_id]

    # --- Interactive editing ---

    def begin_edit(self, records: Sequence[EditableRecord], record_id: str) -> Records:
        """Open a record for modification"""
        index = self._index_of(records, record_id)
        if index == -1:
            return list(records)
        return self.update_record(records, records[index].model_copy(update={"editing": True}))

    def edit_fields(self, records: Sequence[EditableRecord], record_id: str,
                    arrival: Optional[str] = None, departure: Optional[str] = None,
                    country: Optional[str] = None) -> Records:
        """
        Apply field changes to a record being edited.

        The elapsed column is recomputed and shows "Chyba data" or
        "Neplatný vstup" while the span is not valid.
        """
        index = self._index_of(records, record_id)
        if index == -1:
            return list(records)

        record = records[index]
        changes = {"editing": True}
        if arrival is not None:
            changes["arrival"] = arrival
        if departure is not None:
            changes["departure"] = departure
        if country is not None:
            changes["country"] = country

        new_arrival = changes.get("arrival", record.arrival)
        new_departure = changes.get("departure", record.departure)
        changes["elapsed"] = calculate_elapsed_interactive(new_arrival, new_departure)

        return self.update_record(records, record.model_copy(update=changes))

    @staticmethod
    def validate_span(arrival: str, departure: str) -> None:
        """
        Raise RecordSpanError unless both dates parse and arrival is before departure.
        """
        arrival_dt = parse_datetime(arrival)
        departure_dt = parse_datetime(departure)
        if arrival_dt is None or departure_dt is None:
            raise RecordSpanError("invalid_format")
        if arrival_dt >= departure_dt:
            raise RecordSpanError("order")

    def save_edit(self, records: Sequence[EditableRecord], record_id: str) -> Records:
        """
        Commit the edit of a record.

        Raises:
            RecordSpanError: if the dates are invalid or out of order. The
                collection is left as it was, the record stays in edit mode.
        """
        index = self._index_of(records, record_id)
        if index == -1:
            return list(records)

        record = records[index]
        self.validate_span(record.arrival, record.departure)

        saved = record.model_copy(update={
            "elapsed": calculate_elapsed(record.arrival, record.departure),
            "editing": False,
        })
        return self.update_record(records, saved)

    def cancel_edit(self, records: Sequence[EditableRecord], record_id: str,
                    snapshot: Optional[EditableRecord] = None) -> Records:
        """
        Abandon the edit of a record.

        A record that was never saved is removed. Otherwise the snapshot
        taken when editing began is restored, or, without one, the record
        just leaves edit mode with its elapsed recomputed.
        """
        index = self._index_of(records, record_id)
        if index == -1:
            return list(records)

        record = records[index]
        if record.is_new:
            return self.delete_record(records, record_id)

        if snapshot is not None:
            restored = snapshot.model_copy(update={"editing": False})
        else:
            restored = record.model_copy(update={
                "elapsed": calculate_elapsed(record.arrival, record.departure),
                "editing": False,
            })
        return self.update_record(records, restored)

    # --- Presentation helpers ---

    def row_status(self, record: EditableRecord) -> RowStatus:
        """Highlight category of a row"""
        if record.is_new:
            return RowStatus.NEW
        if is_error_sentinel(record.elapsed):
            return RowStatus.ERROR
        if self.calendar_service.record_overlaps_weekend(record.arrival, record.departure):
            return RowStatus.WEEKEND
        return RowStatus.NORMAL

    # --- Export ---

    def export_records(self, records: Sequence[EditableRecord]) -> Records:
        """
        Committed records in chronological order.

        Raises:
            ExportEmptyError: if no record is eligible
        """
        committed = [record for record in records if not record.is_new]
        if not committed:
            raise ExportEmptyError()
        return self.sort_records(committed)
