"""
Tests for the Excel export.
"""

import pytest
from openpyxl import load_workbook

from korektor.domain.errors import ExportEmptyError
from korektor.i18n import set_language
from korektor.services.excel_report_service import ExcelReportService, sanitize_filename_part


@pytest.fixture
def service():
    return ExcelReportService()


class TestRows:

    def test_rows_use_czech_headers_and_drop_session_fields(self, service, three_records, record_service, now):
        records, _ = record_service.add_at_top(three_records, now)

        rows = service.build_rows(records)

        assert len(rows) == 3
        assert list(rows[0].keys()) == ["Příjezd", "Odjezd", "Země", "Čas"]
        assert rows[0] == {
            "Příjezd": "01.03.24 08:00",
            "Odjezd": "01.03.24 18:00",
            "Země": "CZ",
            "Čas": "10:00:00",
        }

    def test_english_headers(self, service, three_records):
        set_language("en")
        assert list(service.build_rows(three_records)[0].keys()) == ["Arrival", "Departure", "Country", "Elapsed"]

    def test_all_new_records_raise(self, service, record_service, now):
        records, _ = record_service.add_at_top([], now)
        with pytest.raises(ExportEmptyError):
            service.build_rows(records)


class TestFilename:

    @pytest.mark.parametrize("text, expected", [
        ("1AB 2345", "1AB_2345"),
        ("  Jan  Novák ", "Jan_Novák"),
        ('a/b\\c?d%e*f:g|h"i<j>k', "a_b_c_d_e_f_g_h_i_j_k"),
        ("x / y", "x_y"),
    ])
    def test_sanitize(self, text, expected):
        assert sanitize_filename_part(text) == expected

    def test_plate_and_driver(self, service, three_records):
        assert service.build_filename(three_records, "1AB 2345", "Jan Novák") == "03_24_1AB_2345_Jan_Novák.xlsx"

    def test_only_driver(self, service, three_records):
        assert service.build_filename(three_records, "", "Jan Novák") == "03_24_Jan_Novák.xlsx"

    def test_fallback_identifier(self, service, three_records):
        assert service.build_filename(three_records, "  ", "") == "03_24_Report.xlsx"

    def test_uses_earliest_arrival(self, service, make_record):
        records = [
            make_record("05.04.24 08:00", "05.04.24 10:00"),
            make_record("28.12.23 08:00", "28.12.23 10:00"),
        ]
        assert service.build_filename(records, "SPZ") == "12_23_SPZ.xlsx"

    def test_unreadable_first_arrival_uses_default_name(self, service, make_record):
        records = [make_record("bad", "05.04.24 10:00")]
        assert service.build_filename(records, "SPZ", "Jan") == "PrekroceniHranicReport.xlsx"


class TestGenerateReport:

    def test_writes_workbook(self, service, three_records, tmp_path):
        path = service.generate_report(three_records, tmp_path, license_plate="1AB 2345")

        assert path == tmp_path / "03_24_1AB_2345.xlsx"
        workbook = load_workbook(path)
        assert workbook.sheetnames == ["PřekročeníHranic"]
        rows = list(workbook.active.iter_rows(values_only=True))
        assert rows[0] == ("Příjezd", "Odjezd", "Země", "Čas")
        assert rows[1] == ("01.03.24 08:00", "01.03.24 18:00", "CZ", "10:00:00")
        assert len(rows) == 4

    def test_export_can_be_imported_again(self, service, three_records, tmp_path):
        from korektor.services.import_service import ImportService

        path = service.generate_report(three_records, tmp_path)
        result = ImportService().import_file(path)

        assert result.skipped == 0
        assert [(r.arrival, r.departure, r.country, r.elapsed) for r in result.records] == [
            (r.arrival, r.departure, r.country, r.elapsed) for r in three_records
        ]

    def test_empty_export_writes_nothing(self, service, record_service, now, tmp_path):
        records, _ = record_service.add_at_top([], now)
        with pytest.raises(ExportEmptyError):
            service.generate_report(records, tmp_path / "out")
        assert not (tmp_path / "out").exists()
