"""
Report Session - Holds the current record collection.

The session is the only stateful piece: it applies one service operation at
a time and replaces its collection with the result. A version counter is
bumped on every change so callers sharing a session can detect that they
worked on an outdated copy.
"""

import datetime
import logging
from pathlib import Path
from typing import Dict, List, Optional

from korektor.domain.errors import StaleSessionError
from korektor.domain.models import EditableRecord, ImportResult, ReportPreferences, RowStatus
from korektor.services.calendar_service import CalendarService
from korektor.services.excel_report_service import ExcelReportService
from korektor.services.import_service import ImportService
from korektor.services.record_service import RecordService

logger = logging.getLogger(__name__)


class ReportSession:
    """
    The in-memory state of one editing session.
    """

    def __init__(self, preferences: Optional[ReportPreferences] = None):
        self.preferences = preferences or ReportPreferences()
        self.calendar_service = CalendarService()
        self.record_service = RecordService(
            default_stay_minutes=self.preferences.default_stay_minutes,
            calendar_service=self.calendar_service,
        )
        self.import_service = ImportService(self.record_service, date1904=self.preferences.date1904)
        self.report_service = ExcelReportService(
            self.record_service,
            sheet_name=self.preferences.sheet_name,
            default_identifier=self.preferences.default_identifier,
            default_file_stem=self.preferences.default_file_stem,
        )

        self.license_plate: str = self.preferences.license_plate
        self.driver_name: str = self.preferences.driver_name

        self._records: List[EditableRecord] = []
        self._snapshots: Dict[str, EditableRecord] = {}
        self.version: int = 0

    @property
    def records(self) -> List[EditableRecord]:
        """A copy of the current collection"""
        return list(self._records)

    def _check(self, expected_version: Optional[int]) -> None:
        if expected_version is not None and expected_version != self.version:
            raise StaleSessionError(expected_version, self.version)

    def _commit(self, records: List[EditableRecord], expected_version: Optional[int]) -> None:
        self._check(expected_version)
        self._records = records
        self.version += 1

    # --- Record operations ---

    def add_record(self, now: Optional[datetime.datetime] = None,
                   expected_version: Optional[int] = None) -> EditableRecord:
        """Add an empty record at the top"""
        self._check(expected_version)
        records, new_record = self.record_service.add_at_top(self._records, now or datetime.datetime.now())
        self._commit(records, expected_version)
        return new_record

    def add_record_relative(self, reference_id: str, above: bool,
                            now: Optional[datetime.datetime] = None,
                            expected_version: Optional[int] = None) -> EditableRecord:
        """Add an empty record above or below another one"""
        self._check(expected_version)
        records, new_record = self.record_service.add_relative(
            self._records, reference_id, above, now or datetime.datetime.now()
        )
        self._commit(records, expected_version)
        return new_record

    def update_record(self, record: EditableRecord, expected_version: Optional[int] = None) -> None:
        self._commit(self.record_service.update_record(self._records, record), expected_version)

    def delete_record(self, record_id: str, expected_version: Optional[int] = None) -> None:
        self._check(expected_version)
        self._snapshots.pop(record_id, None)
        self._commit(self.record_service.delete_record(self._records, record_id), expected_version)

    def begin_edit(self, record_id: str, expected_version: Optional[int] = None) -> None:
        """Open a record for editing, remembering its state for cancel"""
        self._check(expected_version)
        for record in self._records:
            # Only the last saved state is a valid snapshot
            if record.id == record_id and not record.is_new and not record.editing:
                self._snapshots.setdefault(record_id, record)
        self._commit(self.record_service.begin_edit(self._records, record_id), expected_version)

    def edit_fields(self, record_id: str, expected_version: Optional[int] = None, **changes) -> None:
        self._commit(self.record_service.edit_fields(self._records, record_id, **changes), expected_version)

    def save_edit(self, record_id: str, expected_version: Optional[int] = None) -> None:
        """
        Save a record being edited.

        Raises:
            RecordSpanError: if the dates are invalid, the session is unchanged
        """
        self._check(expected_version)
        records = self.record_service.save_edit(self._records, record_id)
        self._snapshots.pop(record_id, None)
        self._commit(records, expected_version)

    def cancel_edit(self, record_id: str, expected_version: Optional[int] = None) -> None:
        self._check(expected_version)
        snapshot = self._snapshots.pop(record_id, None)
        self._commit(self.record_service.cancel_edit(self._records, record_id, snapshot), expected_version)

    # --- Presentation helpers ---

    def row_status(self, record: EditableRecord) -> RowStatus:
        return self.record_service.row_status(record)

    def day_name(self, record: EditableRecord) -> str:
        return self.calendar_service.arrival_day_name(record.arrival)

    # --- File boundary ---

    def load_file(self, path, expected_version: Optional[int] = None) -> ImportResult:
        """
        Replace the collection with the records of a spreadsheet.

        Raises:
            ImportEmptyError, ImportSchemaError, ImportReadError: the collection
                is unchanged
        """
        self._check(expected_version)
        result = self.import_service.import_file(path)
        self._snapshots.clear()
        self._commit(list(result.records), expected_version)
        logger.info(f"Loaded {result.imported} records from {path} ({result.skipped} skipped)")
        return result

    def export_file(self, output_dir=None) -> Path:
        """
        Write the committed records to a spreadsheet.

        Raises:
            ExportEmptyError: if nothing can be exported
        """
        if output_dir is None:
            output_dir = self.preferences.export_directory or Path.cwd()
        return self.report_service.generate_report(
            self._records, output_dir,
            license_plate=self.license_plate,
            driver_name=self.driver_name,
        )
