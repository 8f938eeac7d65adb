#!/usr/bin/env python3
"""
Flight summary functions for IGC to CSV converter
"""

from typing import List, Optional, Tuple, Union

from igc_model import FlightSummary, RecordType
from igc_parser import IgcLineClassifier, IgcHeaderParser, IgcFixDecoder, splitLines
from igc_utils import toYMD, toHM
from igc_constants import (
    IGC_HEADER_PILOT,
    IGC_HEADER_GLIDER_TYPE,
    IGC_HEADER_GLIDER_ID,
    IGC_HEADER_COMPETITION_ID,
    IGC_HEADER_COMPETITION_CLASS,
    DEFAULT_UNKNOWN_TEXT,
    DEFAULT_NA_TEXT
)

# Header code -> FlightSummary attribute
HEADER_FIELDS = (
    (IGC_HEADER_PILOT, 'pilot'),
    (IGC_HEADER_GLIDER_TYPE, 'glider_type'),
    (IGC_HEADER_GLIDER_ID, 'glider_id'),
    (IGC_HEADER_COMPETITION_ID, 'competition_id'),
    (IGC_HEADER_COMPETITION_CLASS, 'competition_class'),
)


class FlightSummaryBuilder:
    """
    Single forward pass producing header metadata and record counts.
    Only the time of day of the first B record is decoded.
    """

    def __init__(self):
        self.header_parser = IgcHeaderParser()

    def build(self, content: Union[str, List[str]]) -> FlightSummary:
        lines = splitLines(content) if isinstance(content, str) else content
        summary = FlightSummary()
        first_fix: Optional[Tuple[int, int, int]] = None

        for line in lines:
            record_type = IgcLineClassifier.classify(line)

            if record_type is RecordType.POSITION_FIX:
                summary.position_fix_count += 1
                if first_fix is None:
                    first_fix = self._valid_time(line)
            elif record_type is RecordType.SENSOR_FIX:
                summary.sensor_fix_count += 1
            elif record_type is RecordType.EXTENSION_DEF_B:
                summary.has_extensions = True
            elif record_type is RecordType.HEADER:
                self._apply_header(line, summary)

        if summary.flight_date and first_fix:
            summary.first_fix_time = IgcFixDecoder.build_timestamp(summary.flight_date, first_fix)

        return summary

    @staticmethod
    def _valid_time(line: str) -> Optional[Tuple[int, int, int]]:
        """Time of day of a B line, None unless it forms a real clock time"""
        time_of_day = IgcFixDecoder.parse_time(line)
        if time_of_day is None:
            return None
        hour, minute, second = time_of_day
        if hour > 23 or minute > 59 or second > 59:
            return None
        return time_of_day

    def _apply_header(self, line: str, summary: FlightSummary) -> None:
        flight_date = self.header_parser.parse_date(line)
        if flight_date:
            summary.flight_date = flight_date

        # First non-empty value wins per field
        for code, attribute in HEADER_FIELDS:
            if getattr(summary, attribute) is not None:
                continue
            value = self.header_parser.parse_text_field(line, code)
            if value is not None:
                setattr(summary, attribute, value)


def buildFlightSummary(content: Union[str, List[str]]) -> FlightSummary:
    """Build the pre-conversion summary of an IGC file"""
    return FlightSummaryBuilder().build(content)


def flightSummary(summary: FlightSummary) -> str:
    """Generate a summary string for the flight"""
    pilot = f' by {summary.pilot}' if summary.pilot else ''
    date_str = toYMD(summary.display_time) if summary.display_time else "Unknown Date"
    heading = f"{summary.glider_id or DEFAULT_UNKNOWN_TEXT} - {date_str}{pilot}"
    underline = '\n' + ('-' * len(heading))

    first_fix = toHM(summary.first_fix_time) + "Z" if summary.first_fix_time else DEFAULT_NA_TEXT

    competition = DEFAULT_NA_TEXT
    if summary.competition_id or summary.competition_class:
        competition = ' / '.join(
            value for value in (summary.competition_id, summary.competition_class) if value
        )

    extensions = "yes" if summary.has_extensions else "no"

    return f'''{heading}{underline}
    Glider: {summary.glider_type or DEFAULT_UNKNOWN_TEXT}
Competition: {competition}
 First fix: {first_fix}
 B records: {summary.position_fix_count}
 K records: {summary.sensor_fix_count}
Extensions: {extensions}'''
