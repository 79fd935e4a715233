"""
Domain Models using Pydantic for validation.

Architecture Decision: Why frozen models?
The record collection is treated as an immutable value. Every operation in
the services layer returns a new list, and records are changed through
model_copy(update=...) instead of attribute assignment.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Duration text for an empty or invalid span
ZERO_DURATION = "00:00:00"

# Sentinels shown in the elapsed column while a row is being edited
ELAPSED_ORDER_ERROR = "Chyba data"
ELAPSED_INVALID_INPUT = "Neplatný vstup"


def new_record_id() -> str:
    """Generate a fresh opaque record id"""
    return str(uuid.uuid4())


class TravelRecord(BaseModel):
    """
    A single stay in a country, as exported to the spreadsheet.

    Dates are kept as text in the canonical "DD.MM.YY HH:MM" format,
    elapsed is derived from them.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_record_id)
    arrival: str = ""
    departure: str = ""
    country: str = ""
    elapsed: str = ZERO_DURATION


class EditableRecord(TravelRecord):
    """
    A record as held by the session.

    is_new marks a row added in this session that was never saved:
    it is not exported and not sorted until its first save.
    """
    editing: bool = False
    is_new: bool = False


class RowStatus(str, Enum):
    """Highlight category for a table row"""
    NEW = "new"
    ERROR = "error"
    WEEKEND = "weekend"
    NORMAL = "normal"


# Spreadsheet cells. Readers hand back strings, floats or datetimes
# depending on the file type and cell formatting.

class TextCell(BaseModel):
    kind: Literal["text"] = "text"
    value: str = ""


class SerialCell(BaseModel):
    """Numeric date serial (days since the spreadsheet epoch)"""
    kind: Literal["serial"] = "serial"
    value: float


class DateCell(BaseModel):
    kind: Literal["date"] = "date"
    value: datetime


SheetCell = Annotated[Union[TextCell, SerialCell, DateCell], Field(discriminator="kind")]


class ImportResult(BaseModel):
    """Outcome of a bulk import"""
    records: List[EditableRecord] = Field(default_factory=list)
    skipped: int = 0

    @property
    def imported(self) -> int:
        return len(self.records)


class ReportPreferences(BaseModel):
    """
    User configuration and preferences.

    This allows users to customize behavior without touching code.
    """
    model_config = ConfigDict(from_attributes=True)

    language: str = Field(default="cs", description="UI language: 'cs', 'en', or 'auto' (detect from system)")

    # Report identification, used for the export file name
    license_plate: str = Field(default="", description="Vehicle license plate (SPZ)")
    driver_name: str = Field(default="", description="Driver name")

    # Export settings
    export_directory: Optional[str] = Field(default=None, description="Directory for exported reports")
    sheet_name: str = Field(default="PřekročeníHranic", max_length=31)
    default_identifier: str = Field(default="Report", description="Used when plate and driver are blank")
    default_file_stem: str = Field(default="PrekroceniHranicReport",
                                   description="File name when the first arrival cannot be read")

    # New records
    default_stay_minutes: int = Field(default=60, ge=1, description="Span of a freshly added record")

    # Import settings
    date1904: bool = Field(default=False, description="Numeric dates use the Mac 1904 epoch")
