"""
Error taxonomy of the report core.

Parsing failures are never raised; parse_datetime returns None and callers
decide. The exceptions below cross the service boundary and each carries a
translation key so the caller can show a localized message.
"""

from typing import Optional


class KorektorError(Exception):
    """Base class for all recoverable report errors"""

    message_key = "error.generic"

    def __init__(self, message: Optional[str] = None, **details):
        self.details = details
        super().__init__(message or self.message_key)


class ImportSchemaError(KorektorError):
    """Required columns are missing, nothing was imported"""

    message_key = "import.missing_columns"

    def __init__(self, missing, message: Optional[str] = None):
        self.missing = list(missing)
        super().__init__(message or f"Missing columns: {', '.join(self.missing)}", missing=self.missing)


class ImportEmptyError(KorektorError):
    """The source has no sheet or no data rows"""

    message_key = "import.empty"


class ImportReadError(KorektorError):
    """The file exists but could not be read as a sheet"""

    message_key = "error.generic"


class UnsupportedFileError(ImportReadError):
    """The file type is not one the importer reads"""

    message_key = "import.unsupported"

    def __init__(self, suffix: str):
        self.suffix = suffix
        super().__init__(f"Unsupported file type: {suffix}", suffix=suffix)


class ExportEmptyError(KorektorError):
    """Nothing eligible to export"""

    message_key = "export.empty"


class RecordSpanError(KorektorError):
    """
    A record cannot be saved because its dates are invalid.

    reason is 'invalid_format' when a date does not parse and 'order'
    when departure is not after arrival.
    """

    def __init__(self, reason: str, message: Optional[str] = None):
        self.reason = reason
        self.message_key = f"save.{reason}"
        super().__init__(message or self.message_key, reason=reason)


class StaleSessionError(KorektorError):
    """The session changed since the caller last read it"""

    message_key = "session.stale"

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Session version is {actual}, expected {expected}",
                         expected=expected, actual=actual)
