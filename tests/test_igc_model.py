"""
Tests for igc_model.py data models
"""
import pytest
from dataclasses import FrozenInstanceError
from datetime import date, datetime, timezone
from igc_model import (
    RecordType,
    ValueKind,
    ExtensionField,
    ExtensionValue,
    ABSENT,
    PositionFix,
    SensorFix,
    FlightSummary,
    ConversionOutcome,
    HeaderScan,
    NoDateFoundError
)


class TestExtensionField:
    """Tests for ExtensionField"""

    def test_width(self):
        assert ExtensionField("FXA", 35, 37).width == 3

    def test_immutable(self):
        field = ExtensionField("FXA", 35, 37)
        with pytest.raises(FrozenInstanceError):
            field.start = 0


class TestExtensionValue:
    """Tests for the tagged extension value"""

    def test_absent(self):
        assert ABSENT.is_absent
        assert not ABSENT.is_numeric
        assert ABSENT.render() == ""

    def test_integer(self):
        value = ExtensionValue(ValueKind.INTEGER, 42)
        assert value.is_numeric
        assert value.render() == "42"

    def test_real(self):
        value = ExtensionValue(ValueKind.REAL, 0.1)
        assert value.is_numeric
        assert float(value.render()) == 0.1

    def test_literal(self):
        value = ExtensionValue(ValueKind.LITERAL, "ab c")
        assert not value.is_numeric
        assert value.render() == "ab c"

    def test_equality(self):
        assert ExtensionValue(ValueKind.INTEGER, 1) == ExtensionValue(ValueKind.INTEGER, 1)
        assert ExtensionValue(ValueKind.INTEGER, 1) != ExtensionValue(ValueKind.LITERAL, "1")


class TestFixes:
    """Tests for PositionFix and SensorFix"""

    def test_position_defaults(self):
        fix = PositionFix(datetime(2025, 1, 1, tzinfo=timezone.utc), 1.0, 2.0)
        assert fix.pressure_altitude is None
        assert fix.gps_altitude is None
        assert fix.extensions == {}

    def test_sensor_defaults(self):
        fix = SensorFix(datetime(2025, 1, 1, tzinfo=timezone.utc))
        assert fix.extensions == {}

    def test_fixes_immutable(self):
        fix = SensorFix(datetime(2025, 1, 1, tzinfo=timezone.utc))
        with pytest.raises(FrozenInstanceError):
            fix.timestamp = None


class TestFlightSummary:
    """Tests for FlightSummary"""

    def test_defaults(self):
        summary = FlightSummary()
        assert summary.pilot is None
        assert summary.position_fix_count == 0
        assert summary.sensor_fix_count == 0
        assert not summary.has_extensions
        assert summary.display_time is None

    def test_display_time_prefers_first_fix(self):
        first_fix = datetime(2025, 5, 9, 10, 0, tzinfo=timezone.utc)
        summary = FlightSummary(flight_date=date(2025, 5, 9), first_fix_time=first_fix)
        assert summary.display_time == first_fix

    def test_display_time_falls_back_to_date(self):
        summary = FlightSummary(flight_date=date(2025, 5, 9))
        assert summary.display_time == date(2025, 5, 9)


class TestConversionOutcome:
    """Tests for ConversionOutcome"""

    def test_without_sensor_csv(self):
        outcome = ConversionOutcome(1, 0, b"date\n")
        assert not outcome.has_sensor_csv

    def test_with_sensor_csv(self):
        outcome = ConversionOutcome(1, 1, b"date\n", b"date\n")
        assert outcome.has_sensor_csv


class TestHeaderScan:
    """Tests for HeaderScan"""

    def test_describe(self):
        scan = HeaderScan(flight_date=date(1980, 1, 1),
                          position_layout=[ExtensionField("FXA", 35, 37)])
        assert scan.describe() == "date=1980-01-01 B extensions=FXA K extensions=-"

    def test_describe_without_date(self):
        assert "date=N/A" in HeaderScan().describe()


class TestEnums:
    """Tests for enums and errors"""

    def test_record_type_markers(self):
        assert RecordType.POSITION_FIX.value == "B"
        assert RecordType.SENSOR_FIX.value == "K"

    def test_no_date_error(self):
        error = NoDateFoundError()
        assert isinstance(error, ValueError)
        assert "HFDTE" in str(error)
