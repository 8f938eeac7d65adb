#!/usr/bin/env python3
"""
Data models and enums for IGC to CSV converter
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import date, datetime
from typing import Dict, List, Optional, Union

from igc_constants import DEFAULT_NA_TEXT


class FileType(Enum):
    UNKNOWN = 0
    IGC = 1


class RecordType(Enum):
    """Routing tag assigned to a single IGC line by the classifier"""
    HEADER = "H"
    EXTENSION_DEF_B = "I"
    EXTENSION_DEF_K = "J"
    POSITION_FIX = "B"
    SENSOR_FIX = "K"
    IGNORED = ""


class ValueKind(Enum):
    ABSENT = 0
    INTEGER = 1
    REAL = 2
    LITERAL = 3


class NoDateFoundError(ValueError):
    """Raised when no header line carries a usable DTE date"""

    def __init__(self, message: str = "No HFDTE or HFDTEDATE record found in IGC file"):
        super().__init__(message)


@dataclass(frozen=True)
class ExtensionField:
    """A single extension declared by an I or J record (0-based inclusive offsets)"""
    code: str
    start: int
    end: int

    @property
    def width(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True)
class ExtensionValue:
    """Normalized extension or altitude field: absent, integer, real or literal text"""
    kind: ValueKind
    value: Union[int, float, str, None] = None

    @property
    def is_absent(self) -> bool:
        return self.kind is ValueKind.ABSENT

    @property
    def is_numeric(self) -> bool:
        return self.kind in (ValueKind.INTEGER, ValueKind.REAL)

    def render(self) -> str:
        """Canonical string form; absent values render as an empty string"""
        if self.kind is ValueKind.ABSENT:
            return ""
        if self.kind is ValueKind.INTEGER:
            return str(self.value)
        if self.kind is ValueKind.REAL:
            return repr(self.value)
        return self.value


ABSENT = ExtensionValue(ValueKind.ABSENT)


@dataclass(frozen=True)
class PositionFix:
    """A decoded B record"""
    timestamp: datetime
    latitude: float
    longitude: float
    pressure_altitude: Optional[int] = None
    gps_altitude: Optional[int] = None
    extensions: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SensorFix:
    """A decoded K record"""
    timestamp: datetime
    extensions: Dict[str, str] = field(default_factory=dict)


@dataclass
class FlightSummary:
    """Header metadata and record counts shown before a conversion is requested"""
    pilot: Optional[str] = None
    glider_type: Optional[str] = None
    glider_id: Optional[str] = None
    competition_id: Optional[str] = None
    competition_class: Optional[str] = None
    flight_date: Optional[date] = None
    first_fix_time: Optional[datetime] = None
    position_fix_count: int = 0
    sensor_fix_count: int = 0
    has_extensions: bool = False

    @property
    def display_time(self) -> Union[datetime, date, None]:
        """First fix time when known, otherwise the bare header date"""
        return self.first_fix_time or self.flight_date


@dataclass
class ConversionOutcome:
    """Result of a full conversion: record counts and UTF-8 CSV content"""
    position_fix_count: int
    sensor_fix_count: int
    position_csv: bytes
    sensor_csv: Optional[bytes] = None

    @property
    def has_sensor_csv(self) -> bool:
        return self.sensor_csv is not None


@dataclass
class HeaderScan:
    """Output of the first conversion pass: flight date and both extension layouts"""
    flight_date: Optional[date] = None
    position_layout: List[ExtensionField] = field(default_factory=list)
    sensor_layout: List[ExtensionField] = field(default_factory=list)

    def describe(self) -> str:
        date_text = self.flight_date.isoformat() if self.flight_date else DEFAULT_NA_TEXT
        b_codes = ",".join(f.code for f in self.position_layout) or "-"
        k_codes = ",".join(f.code for f in self.sensor_layout) or "-"
        return f"date={date_text} B extensions={b_codes} K extensions={k_codes}"
