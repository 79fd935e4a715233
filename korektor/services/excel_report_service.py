"""
Excel Report Service using XlsxWriter.
Writes the border crossing report as a single formatted sheet.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import xlsxwriter

from korektor.domain.models import EditableRecord
from korektor.i18n import tr
from korektor.services.datetime_codec import parse_datetime
from korektor.services.record_service import RecordService

logger = logging.getLogger(__name__)

# Whitespace and characters not allowed in file names
_UNSAFE_FILENAME_RE = re.compile(r'[\s/\\?%*:|"<>]+')

EXPORT_FIELDS = ("arrival", "departure", "country", "elapsed")


def sanitize_filename_part(text: str) -> str:
    """Trim and replace unsafe runs with a single underscore"""
    return _UNSAFE_FILENAME_RE.sub("_", text.strip())


class ExcelReportService:
    """
    Generates .xlsx reports with one row per committed record:
    arrival, departure, country, elapsed.
    """

    def __init__(self, record_service: Optional[RecordService] = None,
                 sheet_name: str = "PřekročeníHranic",
                 default_identifier: str = "Report",
                 default_file_stem: str = "PrekroceniHranicReport"):
        self.record_service = record_service or RecordService()
        self.sheet_name = sheet_name
        self.default_identifier = default_identifier
        self.default_file_stem = default_file_stem

    @staticmethod
    def headers() -> List[str]:
        """Localized column headers in export order"""
        return [tr(f"export.header.{field}") for field in EXPORT_FIELDS]

    def build_rows(self, records: Sequence[EditableRecord]) -> List[Dict[str, str]]:
        """
        Export rows keyed by localized header, session fields dropped.

        Raises:
            ExportEmptyError: if no committed record exists
        """
        exported = self.record_service.export_records(records)
        headers = self.headers()
        return [
            dict(zip(headers, (getattr(record, field) for field in EXPORT_FIELDS)))
            for record in exported
        ]

    def build_filename(self, records: Sequence[EditableRecord], license_plate: str = "",
                       driver_name: str = "", ext: str = "xlsx") -> str:
        """
        File name "{MM}_{YY}_{identifier}.{ext}" from the earliest exported arrival.

        Raises:
            ExportEmptyError: if no committed record exists
        """
        exported = self.record_service.export_records(records)
        first_arrival = parse_datetime(exported[0].arrival)
        if first_arrival is None:
            return f"{self.default_file_stem}.{ext}"

        parts = [sanitize_filename_part(part) for part in (license_plate or "", driver_name or "")]
        identifier = "_".join(part for part in parts if part) or self.default_identifier
        return f"{first_arrival.month:02d}_{first_arrival.year % 100:02d}_{identifier}.{ext}"

    def generate_report(self, records: Sequence[EditableRecord], output_dir,
                        license_plate: str = "", driver_name: str = "",
                        file_name: Optional[str] = None) -> Path:
        """
        Generate the Excel report into output_dir.
        Returns the path of the written file.

        Raises:
            ExportEmptyError: before anything is written, if there is nothing to export
        """
        rows = self.build_rows(records)
        if file_name is None:
            file_name = self.build_filename(records, license_plate, driver_name)

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / file_name

        headers = self.headers()

        workbook = xlsxwriter.Workbook(str(output_path))
        fmt_header = workbook.add_format({
            'bold': True, 'bg_color': '#334155', 'font_color': 'white', 'border': 1
        })
        fmt_cell = workbook.add_format({'border': 1})

        worksheet = workbook.add_worksheet(self.sheet_name)

        for col, header in enumerate(headers):
            worksheet.write_string(0, col, header, fmt_header)

        for row_idx, row in enumerate(rows, start=1):
            for col, header in enumerate(headers):
                worksheet.write_string(row_idx, col, row[header], fmt_cell)

        # Auto-fit: longest value plus padding
        for col, header in enumerate(headers):
            width = max([len(header)] + [len(row[header]) for row in rows])
            worksheet.set_column(col, col, width + 2)

        worksheet.freeze_panes(1, 0)
        workbook.close()

        logger.info(f"Report with {len(rows)} records written to {output_path}")
        return output_path
