"""
Tests for igc_writer.py CSV writing
"""
import pytest
from io import StringIO
from datetime import datetime, timezone
from igc_writer import CsvWriter, writePositionCsv, writeSensorCsv
from igc_model import ExtensionField, PositionFix, SensorFix


LAYOUT = [ExtensionField("FXA", 35, 37), ExtensionField("SIU", 38, 39)]


def make_position(**overrides):
    values = dict(
        timestamp=datetime(2025, 5, 23, 12, 30, 0, tzinfo=timezone.utc),
        latitude=45.678901,
        longitude=-8.123456,
        pressure_altitude=1500,
        gps_altitude=1520,
        extensions={"FXA": "12", "SIU": "7"},
    )
    values.update(overrides)
    return PositionFix(**values)


class TestCsvWriter:
    """Tests for CsvWriter formatting helpers"""

    def test_format_row(self):
        assert CsvWriter.format_row(["a", "", "c"]) == "a,,c\n"

    def test_format_column_names(self):
        header = CsvWriter.format_column_names(["date"], LAYOUT)
        assert header == "date,FXA,SIU\n"

    def test_format_coordinate(self):
        assert CsvWriter.format_coordinate(52.2187166667) == "52.218717"
        assert CsvWriter.format_coordinate(-0.3242666667) == "-0.324267"
        assert CsvWriter.format_coordinate(8.0) == "8.000000"

    def test_format_altitude(self):
        assert CsvWriter.format_altitude(0) == "0"
        assert CsvWriter.format_altitude(-12) == "-12"
        assert CsvWriter.format_altitude(None) == ""

    def test_coordinates_round_trip(self):
        for value in (52.218717, -0.324267, 179.999999, -89.5, 0.000001):
            assert float(CsvWriter.format_coordinate(value)) == pytest.approx(value, abs=5e-7)


class TestPositionCsv:
    """Tests for B record tables"""

    def test_header_and_row(self):
        output = StringIO()
        writePositionCsv(output, [make_position()], LAYOUT)
        assert output.getvalue() == (
            "date,Latitude,Longitude,GPS Altitude,Pressure Altitude,FXA,SIU\n"
            "2025-05-23T12:30:00Z,45.678901,-8.123456,1520,1500,12,7\n"
        )

    def test_missing_values_are_empty(self):
        fix = make_position(pressure_altitude=None, gps_altitude=None, extensions={"SIU": "3"})
        csv = CsvWriter().position_csv([fix], LAYOUT)
        assert csv.splitlines()[1] == "2025-05-23T12:30:00Z,45.678901,-8.123456,,,,3"

    def test_empty_layout(self):
        csv = CsvWriter().position_csv([make_position()], [])
        assert csv.splitlines() == [
            "date,Latitude,Longitude,GPS Altitude,Pressure Altitude",
            "2025-05-23T12:30:00Z,45.678901,-8.123456,1520,1500",
        ]

    def test_no_records(self):
        csv = CsvWriter().position_csv([], LAYOUT)
        assert csv == "date,Latitude,Longitude,GPS Altitude,Pressure Altitude,FXA,SIU\n"

    def test_single_trailing_newline(self):
        csv = CsvWriter().position_csv([make_position(), make_position()], LAYOUT)
        assert csv.endswith("\n")
        assert not csv.endswith("\n\n")
        assert len(csv.splitlines()) == 3

    def test_unknown_extension_codes_ignored(self):
        fix = make_position(extensions={"ENL": "999", "FXA": "1"})
        csv = CsvWriter().position_csv([fix], LAYOUT)
        assert csv.splitlines()[1].endswith(",1,")
        assert "999" not in csv


class TestSensorCsv:
    """Tests for K record tables"""

    def test_header_and_rows(self):
        fixes = [
            SensorFix(datetime(2025, 5, 23, 23, 59, 59, tzinfo=timezone.utc), {"HDT": "270"}),
            SensorFix(datetime(2025, 5, 24, 0, 0, 0, tzinfo=timezone.utc), {}),
        ]
        output = StringIO()
        writeSensorCsv(output, fixes, [ExtensionField("HDT", 7, 9)])
        assert output.getvalue() == (
            "date,HDT\n"
            "2025-05-23T23:59:59Z,270\n"
            "2025-05-24T00:00:00Z,\n"
        )

    def test_without_layout(self):
        fixes = [SensorFix(datetime(2025, 5, 23, 8, 0, 0, tzinfo=timezone.utc))]
        assert CsvWriter().sensor_csv(fixes, []) == "date\n2025-05-23T08:00:00Z\n"
