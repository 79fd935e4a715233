"""Services layer - Business logic"""

from .calendar_service import CalendarService
from .record_service import RecordService
from .import_service import ImportService
from .excel_report_service import ExcelReportService
from .report_session import ReportSession

__all__ = ["CalendarService", "RecordService", "ImportService", "ExcelReportService", "ReportSession"]
