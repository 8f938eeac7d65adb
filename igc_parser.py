#!/usr/bin/env python3
"""
IGC file parser module for IGC to CSV converter

This module handles line classification, header metadata extraction,
extension layout (I/J record) parsing, fixed-column decoding of B and K
records and the two-pass conversion that keeps timestamps monotonic
across a UTC midnight rollover.
"""

import re
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Dict, Iterable, List, Optional, Tuple, TypeVar, Union

from igc_model import (
    FileType,
    RecordType,
    ExtensionField,
    PositionFix,
    SensorFix,
    HeaderScan,
    ConversionOutcome,
    NoDateFoundError,
    ValueKind
)
from igc_utils import parseDigits, expandYear, normalizeValue
from igc_writer import CsvWriter
from igc_constants import (
    IGC_RECORD_HEADER,
    IGC_RECORD_EXTENSION_B,
    IGC_RECORD_EXTENSION_K,
    IGC_RECORD_POSITION,
    IGC_RECORD_SENSOR,
    IGC_RECORD_MANUFACTURER,
    IGC_MIN_EXTENSION_LENGTH,
    IGC_MIN_POSITION_LENGTH,
    IGC_MIN_SENSOR_LENGTH,
    IGC_HEADER_DATE,
    EXTENSION_COUNT_SLICE,
    EXTENSION_FIRST_GROUP,
    EXTENSION_GROUP_WIDTH,
    B_TIME,
    B_LATITUDE,
    B_LATITUDE_HEMISPHERE,
    B_LONGITUDE,
    B_LONGITUDE_HEMISPHERE,
    B_PRESSURE_ALTITUDE,
    B_GPS_ALTITUDE,
    HEMISPHERE_SOUTH,
    HEMISPHERE_WEST
)

# Configure logger
logger = logging.getLogger(__name__)

Fix = TypeVar('Fix', PositionFix, SensorFix)

_NEWLINE = re.compile(r'\r\n|\r|\n')


def splitLines(content: str) -> List[str]:
    """Split file content on CR, LF and CRLF alike; other control characters stay in the line"""
    lines = _NEWLINE.split(content)
    if lines and not lines[-1]:
        lines.pop()
    return lines


class IgcLineClassifier:
    """
    Routes a raw line to a record type from its first character and length.
    Lines are inspected as-is, nothing is stripped.
    """

    @staticmethod
    def classify(line: str) -> RecordType:
        if not line:
            return RecordType.IGNORED

        marker = line[0]
        length = len(line)

        if marker == IGC_RECORD_HEADER:
            return RecordType.HEADER
        if marker == IGC_RECORD_EXTENSION_B and length >= IGC_MIN_EXTENSION_LENGTH:
            return RecordType.EXTENSION_DEF_B
        if marker == IGC_RECORD_EXTENSION_K and length >= IGC_MIN_EXTENSION_LENGTH:
            return RecordType.EXTENSION_DEF_K
        if marker == IGC_RECORD_POSITION and length >= IGC_MIN_POSITION_LENGTH:
            return RecordType.POSITION_FIX
        if marker == IGC_RECORD_SENSOR and length >= IGC_MIN_SENSOR_LENGTH:
            return RecordType.SENSOR_FIX
        return RecordType.IGNORED


class IgcFileDetector:
    """
    Decides whether a sequence of lines looks like an IGC file.
    """

    @staticmethod
    def detect_filetype(lines: List[str]) -> FileType:
        """Determine the file type based on content"""
        content_lines = [line for line in lines if line.strip()]
        if not content_lines:
            return FileType.UNKNOWN

        # IGC files start with 'A' (manufacturer) followed by header records
        if (len(content_lines) > 1
                and content_lines[0].startswith(IGC_RECORD_MANUFACTURER)
                and content_lines[1].startswith(IGC_RECORD_HEADER)):
            return FileType.IGC

        # Some loggers drop the A record; accept any file carrying headers
        for line in content_lines:
            if IgcLineClassifier.classify(line) is RecordType.HEADER:
                return FileType.IGC

        return FileType.UNKNOWN


class IgcHeaderParser:
    """
    Parses header records (H lines): the DTE flight date and
    colon-separated free text fields identified by a three-letter code.
    """

    CODE_PATTERN = re.compile(IGC_HEADER_DATE, re.IGNORECASE)
    DATE_PATTERN = re.compile(r'(?<![0-9])([0-9]{2})([0-9]{2})([0-9]{2})(?![0-9])')

    @classmethod
    def parse_date(cls, line: str) -> Optional[date]:
        """
        Extract the DDMMYY date following 'DTE' (case-insensitive).
        Handles HFDTE010180, HFDTE:010180 and HFDTEDATE:010180,01.
        """
        code = cls.CODE_PATTERN.search(line)
        if not code:
            return None

        match = cls.DATE_PATTERN.search(line, code.end())
        if not match:
            return None

        day, month, year = (int(group) for group in match.groups())
        try:
            return date(expandYear(year), month, day)
        except ValueError:
            logger.warning(f"Invalid date in IGC header: {line}")
            return None

    @staticmethod
    def parse_text_field(line: str, code: str) -> Optional[str]:
        """
        Return the trimmed text after the first colon when the part of the
        line before the colon carries the given code. Empty text is None.
        """
        colon = line.find(':')
        if colon < 0:
            return None
        if code.upper() not in line[:colon].upper():
            return None

        value = line[colon + 1:].strip()
        return value or None

    def find_flight_date(self, lines: Iterable[str]) -> Optional[date]:
        """Scan every header line; the last valid date wins"""
        flight_date = None
        for line in lines:
            if IgcLineClassifier.classify(line) is not RecordType.HEADER:
                continue
            parsed = self.parse_date(line)
            if parsed:
                flight_date = parsed
        return flight_date


class ExtensionLayoutParser:
    """
    Parses I and J records into ordered extension layouts.
    Format: kind marker, 2-digit count NN, then NN groups of SSFFCCC
    (1-based start, 1-based finish, three-character code).
    """

    @staticmethod
    def parse_definition(line: str) -> List[ExtensionField]:
        if len(line) < IGC_MIN_EXTENSION_LENGTH:
            return []

        count = parseDigits(line[EXTENSION_COUNT_SLICE])
        if count is None:
            logger.debug(f"Unreadable extension count in: {line}")
            return []

        fields: Dict[str, ExtensionField] = {}
        for i in range(count):
            base = EXTENSION_FIRST_GROUP + i * EXTENSION_GROUP_WIDTH
            if len(line) < base + EXTENSION_GROUP_WIDTH:
                logger.debug(f"Extension definition truncated after {i} of {count} groups")
                break

            start = parseDigits(line[base:base + 2])
            end = parseDigits(line[base + 2:base + 4])
            if start is None or end is None:
                logger.debug(f"Skipping malformed extension group {line[base:base + 7]!r}")
                continue

            code = line[base + 4:base + 7]
            fields[code] = ExtensionField(code=code, start=start - 1, end=end - 1)

        return list(fields.values())


class IgcFixDecoder:
    """
    Decodes B (position) and K (sensor) records from their fixed columns.
    Every decode returns None on failure; bad lines are dropped, never raised.
    """

    @staticmethod
    def parse_time(line: str) -> Optional[Tuple[int, int, int]]:
        """Extract HHMMSS from columns 1-6"""
        if len(line) < IGC_MIN_SENSOR_LENGTH:
            return None
        digits = line[B_TIME]
        hour = parseDigits(digits[0:2])
        minute = parseDigits(digits[2:4])
        second = parseDigits(digits[4:6])
        if hour is None or minute is None or second is None:
            return None
        return hour, minute, second

    @staticmethod
    def build_timestamp(reference_date: date, time_of_day: Tuple[int, int, int]) -> Optional[datetime]:
        """Combine a calendar date with a time of day in UTC"""
        hour, minute, second = time_of_day
        try:
            return datetime(reference_date.year, reference_date.month, reference_date.day,
                            hour, minute, second, tzinfo=timezone.utc)
        except ValueError:
            return None

    @staticmethod
    def parse_latitude(line: str) -> Optional[float]:
        """DDMMmmm plus hemisphere; only an exact 'S' makes it negative"""
        text = line[B_LATITUDE]
        degrees = parseDigits(text[0:2])
        minutes = parseDigits(text[2:4])
        thousandths = parseDigits(text[4:7])
        if degrees is None or minutes is None or thousandths is None:
            return None

        latitude = degrees + (minutes + thousandths / 1000.0) / 60.0
        if line[B_LATITUDE_HEMISPHERE] == HEMISPHERE_SOUTH:
            latitude = -latitude
        return latitude

    @staticmethod
    def parse_longitude(line: str) -> Optional[float]:
        """DDDMMmmm plus hemisphere; only an exact 'W' makes it negative"""
        text = line[B_LONGITUDE]
        degrees = parseDigits(text[0:3])
        minutes = parseDigits(text[3:5])
        thousandths = parseDigits(text[5:8])
        if degrees is None or minutes is None or thousandths is None:
            return None

        longitude = degrees + (minutes + thousandths / 1000.0) / 60.0
        if line[B_LONGITUDE_HEMISPHERE] == HEMISPHERE_WEST:
            longitude = -longitude
        return longitude

    @staticmethod
    def parse_altitude(text: str) -> Optional[int]:
        value = normalizeValue(text)
        if value.kind is ValueKind.INTEGER:
            return value.value
        return None

    @staticmethod
    def parse_extensions(line: str, layout: List[ExtensionField]) -> Dict[str, str]:
        """Slice every declared extension that fits inside the line"""
        values: Dict[str, str] = {}
        for ext in layout:
            if ext.end >= len(line) or ext.start < 0:
                continue
            value = normalizeValue(line[ext.start:ext.end + 1])
            if not value.is_absent:
                values[ext.code] = value.render()
        return values

    def decode_position(self, line: str, reference_date: date,
                        layout: List[ExtensionField]) -> Optional[PositionFix]:
        if len(line) < IGC_MIN_POSITION_LENGTH:
            return None

        time_of_day = self.parse_time(line)
        latitude = self.parse_latitude(line)
        longitude = self.parse_longitude(line)
        if time_of_day is None or latitude is None or longitude is None:
            return None

        timestamp = self.build_timestamp(reference_date, time_of_day)
        if timestamp is None:
            return None

        # Column 24 is the fix validity flag (A = 3D, V = 2D), not surfaced
        return PositionFix(
            timestamp=timestamp,
            latitude=latitude,
            longitude=longitude,
            pressure_altitude=self.parse_altitude(line[B_PRESSURE_ALTITUDE]),
            gps_altitude=self.parse_altitude(line[B_GPS_ALTITUDE]),
            extensions=self.parse_extensions(line, layout)
        )

    def decode_sensor(self, line: str, reference_date: date,
                      layout: List[ExtensionField]) -> Optional[SensorFix]:
        time_of_day = self.parse_time(line)
        if time_of_day is None:
            return None

        timestamp = self.build_timestamp(reference_date, time_of_day)
        if timestamp is None:
            return None

        return SensorFix(timestamp=timestamp, extensions=self.parse_extensions(line, layout))


class TimestampSequencer:
    """
    Rolling state of one conversion: the reference date (starting at the
    flight date) and the last accepted timestamp. A fix earlier than its
    predecessor means UTC midnight was crossed, so the reference date moves
    forward one day and the line is decoded once more.

    Assumes no more than 24 hours between consecutive fixes.
    """

    def __init__(self, flight_date: date):
        self.reference_date = flight_date
        self.last_timestamp: Optional[datetime] = None
        self.rollovers = 0

    def sequence(self, decode: Callable[[date], Optional[Fix]]) -> Optional[Fix]:
        """Decode via the callable against the reference date, correcting rollover"""
        record = decode(self.reference_date)
        if record is None:
            return None

        if self.last_timestamp is not None and record.timestamp < self.last_timestamp:
            self.reference_date = self.reference_date + timedelta(days=1)
            self.rollovers += 1
            logger.info(f"Midnight rollover detected, reference date is now {self.reference_date.isoformat()}")
            record = decode(self.reference_date)
            if record is None:
                return None

        self.last_timestamp = record.timestamp
        return record


class IgcConverter:
    """
    Main converter class for IGC files. Orchestrates the two passes:
    header scan (date and layouts) and fix decoding, then CSV writing.
    """

    def __init__(self):
        self.header_parser = IgcHeaderParser()
        self.layout_parser = ExtensionLayoutParser()
        self.decoder = IgcFixDecoder()
        self.writer = CsvWriter()

    def scan_headers(self, lines: List[str]) -> HeaderScan:
        """First pass: flight date plus the last I and J layouts in the file"""
        scan = HeaderScan()
        for line in lines:
            record_type = IgcLineClassifier.classify(line)

            if record_type is RecordType.EXTENSION_DEF_B:
                scan.position_layout = self.layout_parser.parse_definition(line)
            elif record_type is RecordType.EXTENSION_DEF_K:
                scan.sensor_layout = self.layout_parser.parse_definition(line)
            elif record_type is RecordType.HEADER:
                flight_date = self.header_parser.parse_date(line)
                if flight_date:
                    scan.flight_date = flight_date

        logger.debug(f"Header scan: {scan.describe()}")
        return scan

    def decode_fixes(self, lines: List[str], scan: HeaderScan) -> Tuple[List[PositionFix], List[SensorFix]]:
        """Second pass: decode every B and K line in file order"""
        if scan.flight_date is None:
            raise NoDateFoundError()

        sequencer = TimestampSequencer(scan.flight_date)
        position_fixes: List[PositionFix] = []
        sensor_fixes: List[SensorFix] = []

        for line in lines:
            record_type = IgcLineClassifier.classify(line)

            if record_type is RecordType.POSITION_FIX:
                fix = sequencer.sequence(
                    lambda ref: self.decoder.decode_position(line, ref, scan.position_layout))
                if fix is not None:
                    position_fixes.append(fix)
                else:
                    logger.debug(f"Dropped B record: {line}")

            elif record_type is RecordType.SENSOR_FIX:
                fix = sequencer.sequence(
                    lambda ref: self.decoder.decode_sensor(line, ref, scan.sensor_layout))
                if fix is not None:
                    sensor_fixes.append(fix)
                else:
                    logger.debug(f"Dropped K record: {line}")

        if sequencer.rollovers:
            logger.info(f"Corrected {sequencer.rollovers} midnight rollover(s)")
        return position_fixes, sensor_fixes

    def convert(self, content: Union[str, List[str]]) -> ConversionOutcome:
        """
        Convert IGC content (raw text or pre-split lines) into CSV bytes.
        Raises NoDateFoundError before decoding when the header has no date.
        """
        lines = splitLines(content) if isinstance(content, str) else list(content)

        scan = self.scan_headers(lines)
        if scan.flight_date is None:
            raise NoDateFoundError()

        position_fixes, sensor_fixes = self.decode_fixes(lines, scan)
        logger.info(f"Decoded {len(position_fixes)} B records and {len(sensor_fixes)} K records")

        position_csv = self.writer.position_csv(position_fixes, scan.position_layout)
        sensor_csv = None
        if sensor_fixes:
            sensor_csv = self.writer.sensor_csv(sensor_fixes, scan.sensor_layout)

        return ConversionOutcome(
            position_fix_count=len(position_fixes),
            sensor_fix_count=len(sensor_fixes),
            position_csv=position_csv.encode('utf-8'),
            sensor_csv=sensor_csv.encode('utf-8') if sensor_csv is not None else None
        )


# Public functions

def classifyLine(line: str) -> RecordType:
    """Tag a single line with its record type"""
    return IgcLineClassifier.classify(line)

def getFiletype(lines: List[str]) -> FileType:
    """Determine the file type based on content"""
    return IgcFileDetector.detect_filetype(lines)

def parseExtensionDefinition(line: str) -> List[ExtensionField]:
    """Parse an I or J record into its extension layout"""
    return ExtensionLayoutParser.parse_definition(line)

def parseFlightDate(lines: Iterable[str]) -> Optional[date]:
    """Find the flight date in the header lines"""
    return IgcHeaderParser().find_flight_date(lines)

def decodePositionFix(line: str, reference_date: date,
                      layout: Optional[List[ExtensionField]] = None) -> Optional[PositionFix]:
    """Decode a B record, None if it is malformed"""
    return IgcFixDecoder().decode_position(line, reference_date, layout or [])

def decodeSensorFix(line: str, reference_date: date,
                    layout: Optional[List[ExtensionField]] = None) -> Optional[SensorFix]:
    """Decode a K record, None if it is malformed"""
    return IgcFixDecoder().decode_sensor(line, reference_date, layout or [])

def convertIgc(content: Union[str, List[str]]) -> ConversionOutcome:
    """
    Convert IGC content into CSV bytes.
    Main entry point for IGC conversion.
    """
    return IgcConverter().convert(content)
