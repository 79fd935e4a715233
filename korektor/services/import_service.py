"""
Import Service - Reads travel records from spreadsheets.

Architecture Decision: Why pandas?
pandas reads .xlsx, .xls, .ods and .csv behind one call and hands back cell
values typed by the source (text, number, datetime). Each value is classified
into a SheetCell variant and normalized to canonical text before any
validation happens.
"""

import logging
import math
import numbers
import zipfile
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd
from openpyxl.utils.datetime import MAC_EPOCH, WINDOWS_EPOCH, from_excel
from openpyxl.utils.exceptions import InvalidFileException
from xlrd import XLRDError

from korektor.domain.errors import (
    ImportEmptyError,
    ImportReadError,
    ImportSchemaError,
    UnsupportedFileError,
)
from korektor.domain.models import (
    DateCell,
    EditableRecord,
    ImportResult,
    SerialCell,
    SheetCell,
    TextCell,
    new_record_id,
)
from korektor.services.datetime_codec import format_datetime, parse_datetime
from korektor.services.duration_service import calculate_elapsed, format_duration
from korektor.services.record_service import RecordService

logger = logging.getLogger(__name__)

# Lower-case header fragments for each logical column
ARRIVAL_HEADERS = ("příjezd", "prijzed", "arrival")
DEPARTURE_HEADERS = ("odjezd", "departure")
COUNTRY_HEADERS = ("země", "zeme", "country")
# Elapsed is matched on the whole header, "cas" is too common a fragment
ELAPSED_HEADERS = ("čas", "cas", "elapsed")

SPREADSHEET_SUFFIXES = {".xlsx", ".xlsm", ".xls", ".ods"}

# Errors the readers raise for a file that is not the workbook its suffix claims
READER_ERRORS = (ValueError, OSError, zipfile.BadZipFile, InvalidFileException, XLRDError)


def classify_cell(value: Any) -> SheetCell:
    """Sort a raw reader value into one of the cell variants"""
    if value is None or value is pd.NaT:
        return TextCell(value="")
    if isinstance(value, pd.Timestamp):
        return DateCell(value=value.to_pydatetime())
    if isinstance(value, datetime):
        return DateCell(value=value)
    if isinstance(value, date):
        return DateCell(value=datetime(value.year, value.month, value.day))
    if isinstance(value, bool):
        return TextCell(value=str(value))
    if isinstance(value, numbers.Real):
        if math.isnan(value):
            return TextCell(value="")
        return SerialCell(value=float(value))
    return TextCell(value=str(value).strip())


def normalize_cell(cell: SheetCell, date1904: bool = False) -> str:
    """Canonical text for a cell, or the trimmed raw text if it is not a date"""
    if isinstance(cell, DateCell):
        return format_datetime(cell.value)
    if isinstance(cell, SerialCell):
        epoch = MAC_EPOCH if date1904 else WINDOWS_EPOCH
        try:
            converted = from_excel(cell.value, epoch=epoch)
        except (ValueError, OverflowError) as e:
            logger.debug(f"Could not read {cell.value!r} as a date serial: {e}")
            converted = None
        if isinstance(converted, datetime):
            return format_datetime(converted)
        # Small serials come back as time or timedelta values
        logger.debug(f"Numeric value {cell.value!r} is not a date serial")
        return _number_text(cell.value)
    return cell.value.strip()


def elapsed_text(value: Any, date1904: bool = False) -> str:
    """
    Text of a source elapsed cell.

    Duration cells come back as time, timedelta or a fraction of a day
    depending on the cell format. A duration of a day or more formatted
    without [h] comes back as a datetime just past the epoch. Text is
    trusted verbatim.
    """
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, datetime):
        return format_duration(int((value - _duration_base(value, date1904)).total_seconds()))
    if isinstance(value, time):
        return f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    if isinstance(value, timedelta):
        return format_duration(int(value.total_seconds()))
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        if math.isnan(value):
            return ""
        return format_duration(round(value * 86400))
    return str(value).strip()


def _duration_base(value: datetime, date1904: bool) -> datetime:
    # Serial 0 of each epoch; the 1900 system counts a phantom 29 Feb 1900
    if date1904:
        return datetime(1904, 1, 1)
    if value < datetime(1900, 3, 1):
        return datetime(1899, 12, 31)
    return datetime(1899, 12, 30)


def _number_text(value: float) -> str:
    return str(int(value)) if value.is_integer() else str(value)


def plain_text(value: Any) -> str:
    """Trimmed text of a free-text cell; numbers are never read as dates"""
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        if math.isnan(value):
            return ""
        return _number_text(float(value))
    return str(value).strip()


def _find_header(headers: Sequence[str], fragments: Iterable[str], exact: bool = False) -> Optional[str]:
    for header in headers:
        name = str(header).strip().lower()
        for fragment in fragments:
            if (name == fragment) if exact else (fragment in name):
                return header
    return None


class ImportService:
    """
    Turns spreadsheet rows into records.

    Rows are validated one by one; bad rows are skipped and counted,
    missing required columns reject the whole batch.
    """

    def __init__(self, record_service: Optional[RecordService] = None, date1904: bool = False):
        self.record_service = record_service or RecordService()
        self.date1904 = date1904

    # --- File reading ---

    def read_sheet(self, path) -> List[Dict[str, Any]]:
        """
        Read the first sheet of a spreadsheet (or a CSV file) as row dicts.

        Raises:
            ImportEmptyError: if the file has no sheet or no data rows
            UnsupportedFileError: for file types the importer does not read
            ImportReadError: if the reader fails on the file
        """
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix != ".csv" and suffix not in SPREADSHEET_SUFFIXES:
            raise UnsupportedFileError(suffix)

        try:
            if suffix == ".csv":
                frame = pd.read_csv(path, dtype=str, keep_default_na=False)
            else:
                sheets = pd.read_excel(path, sheet_name=None, dtype=object, keep_default_na=False)
                if not sheets:
                    raise ImportEmptyError()
                frame = next(iter(sheets.values()))
        except pd.errors.EmptyDataError as e:
            raise ImportEmptyError() from e
        except READER_ERRORS as e:
            logger.error(f"Failed to read {path}: {e}")
            raise ImportReadError(str(e), path=str(path)) from e

        if frame.empty:
            raise ImportEmptyError()

        return frame.to_dict(orient="records")

    # --- Row processing ---

    def locate_columns(self, headers: Sequence[str]) -> Dict[str, Optional[str]]:
        """
        Map logical columns to source headers.

        Raises:
            ImportSchemaError: if arrival, departure or country is missing
        """
        columns = {
            "arrival": _find_header(headers, ARRIVAL_HEADERS),
            "departure": _find_header(headers, DEPARTURE_HEADERS),
            "country": _find_header(headers, COUNTRY_HEADERS),
            "elapsed": _find_header(headers, ELAPSED_HEADERS, exact=True),
        }
        missing = [name for name in ("arrival", "departure", "country") if columns[name] is None]
        if missing:
            raise ImportSchemaError(missing)
        return columns

    def _cell_text(self, row: Mapping[str, Any], header: Optional[str]) -> str:
        if header is None:
            return ""
        return normalize_cell(classify_cell(row.get(header)), date1904=self.date1904)

    def import_rows(self, rows: Sequence[Mapping[str, Any]]) -> ImportResult:
        """
        Build records from source rows.

        A row is kept when both dates parse, arrival is before departure and
        the country is not blank. An elapsed value in the source is trusted
        as-is, otherwise it is computed.
        """
        if not rows:
            return ImportResult()

        columns = self.locate_columns(list(rows[0].keys()))

        records: List[EditableRecord] = []
        skipped = 0

        for line, row in enumerate(rows, start=2):
            arrival = self._cell_text(row, columns["arrival"])
            departure = self._cell_text(row, columns["departure"])
            country = plain_text(row.get(columns["country"]))

            arrival_dt = parse_datetime(arrival)
            departure_dt = parse_datetime(departure)

            if arrival_dt is None or departure_dt is None or not country:
                logger.debug(f"Skipping row {line}: arrival={arrival!r}, departure={departure!r}, country={country!r}")
                skipped += 1
                continue
            if arrival_dt >= departure_dt:
                logger.debug(f"Skipping row {line}: departure {departure!r} is not after arrival {arrival!r}")
                skipped += 1
                continue

            elapsed = elapsed_text(row.get(columns["elapsed"]), self.date1904) if columns["elapsed"] else ""
            if not elapsed:
                elapsed = calculate_elapsed(arrival, departure)

            records.append(EditableRecord(
                id=new_record_id(),
                arrival=arrival,
                departure=departure,
                country=country,
                elapsed=elapsed,
                editing=False,
                is_new=False,
            ))

        if skipped:
            logger.warning(f"{skipped} rows skipped during import")
        logger.info(f"Imported {len(records)} records")

        return ImportResult(records=self.record_service.sort_records(records), skipped=skipped)

    def import_file(self, path) -> ImportResult:
        """Read a file and import its rows"""
        return self.import_rows(self.read_sheet(path))
