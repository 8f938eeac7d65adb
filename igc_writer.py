#!/usr/bin/env python3
"""
CSV writer module for IGC to CSV converter

This module serializes decoded B and K records into CSV tables: a fixed
header row followed by one column per declared extension, in the order
the I or J record declared them. Values are never quoted; the IGC
character set has no commas or newlines inside a field.
"""

from io import StringIO
from typing import Iterable, List, Optional, TextIO

from igc_model import ExtensionField, PositionFix, SensorFix
from igc_utils import toIsoZ
from igc_constants import (
    CSV_POSITION_COLUMNS,
    CSV_SENSOR_COLUMNS,
    CSV_SEPARATOR,
    CSV_LINE_TERMINATOR,
    CSV_COORDINATE_FORMAT
)


class CsvWriter:
    """
    Handles writing CSV tables for B (position) and K (sensor) records.
    """

    @staticmethod
    def format_row(fields: Iterable[str]) -> str:
        """Join fields into one CSV line"""
        return CSV_SEPARATOR.join(fields) + CSV_LINE_TERMINATOR

    @staticmethod
    def format_column_names(base_columns: List[str], layout: List[ExtensionField]) -> str:
        """Fixed columns followed by one column per extension code"""
        return CsvWriter.format_row(base_columns + [ext.code for ext in layout])

    @staticmethod
    def format_coordinate(value: float) -> str:
        return CSV_COORDINATE_FORMAT.format(value)

    @staticmethod
    def format_altitude(value: Optional[int]) -> str:
        return str(value) if value is not None else ""

    @staticmethod
    def format_extensions(record, layout: List[ExtensionField]) -> List[str]:
        return [record.extensions.get(ext.code, "") for ext in layout]

    def write_position_fixes(self, csv_file: TextIO, fixes: List[PositionFix],
                             layout: List[ExtensionField]) -> None:
        """Write the B record table"""
        csv_file.write(self.format_column_names(CSV_POSITION_COLUMNS, layout))

        for fix in fixes:
            fields = [
                toIsoZ(fix.timestamp),
                self.format_coordinate(fix.latitude),
                self.format_coordinate(fix.longitude),
                self.format_altitude(fix.gps_altitude),
                self.format_altitude(fix.pressure_altitude),
            ]
            fields.extend(self.format_extensions(fix, layout))
            csv_file.write(self.format_row(fields))

    def write_sensor_fixes(self, csv_file: TextIO, fixes: List[SensorFix],
                           layout: List[ExtensionField]) -> None:
        """Write the K record table"""
        csv_file.write(self.format_column_names(CSV_SENSOR_COLUMNS, layout))

        for fix in fixes:
            fields = [toIsoZ(fix.timestamp)]
            fields.extend(self.format_extensions(fix, layout))
            csv_file.write(self.format_row(fields))

    def position_csv(self, fixes: List[PositionFix], layout: List[ExtensionField]) -> str:
        output = StringIO()
        self.write_position_fixes(output, fixes, layout)
        return output.getvalue()

    def sensor_csv(self, fixes: List[SensorFix], layout: List[ExtensionField]) -> str:
        output = StringIO()
        self.write_sensor_fixes(output, fixes, layout)
        return output.getvalue()


# Public functions

def writePositionCsv(csv_file: TextIO, fixes: List[PositionFix], layout: List[ExtensionField]) -> None:
    """Write B records as CSV"""
    CsvWriter().write_position_fixes(csv_file, fixes, layout)

def writeSensorCsv(csv_file: TextIO, fixes: List[SensorFix], layout: List[ExtensionField]) -> None:
    """Write K records as CSV"""
    CsvWriter().write_sensor_fixes(csv_file, fixes, layout)
