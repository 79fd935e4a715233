"""Domain layer - Pure business entities and logic"""

from .models import (
    TravelRecord,
    EditableRecord,
    RowStatus,
    TextCell,
    SerialCell,
    DateCell,
    SheetCell,
    ImportResult,
    ReportPreferences,
    ZERO_DURATION,
    ELAPSED_ORDER_ERROR,
    ELAPSED_INVALID_INPUT,
)
from .errors import (
    KorektorError,
    ImportSchemaError,
    ImportEmptyError,
    ImportReadError,
    UnsupportedFileError,
    ExportEmptyError,
    RecordSpanError,
    StaleSessionError,
)

__all__ = [
    "TravelRecord", "EditableRecord", "RowStatus",
    "TextCell", "SerialCell", "DateCell", "SheetCell",
    "ImportResult", "ReportPreferences",
    "ZERO_DURATION", "ELAPSED_ORDER_ERROR", "ELAPSED_INVALID_INPUT",
    "KorektorError", "ImportSchemaError", "ImportEmptyError", "ImportReadError",
    "UnsupportedFileError", "ExportEmptyError",
    "RecordSpanError", "StaleSessionError",
]
