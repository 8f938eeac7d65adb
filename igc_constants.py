#!/usr/bin/env python3
"""
Constants for IGC to CSV converter
"""

# Default configuration values
DEFAULT_OUT_PATH = "."
DEFAULT_SENSOR_SUFFIX = "_k"
DEFAULT_ENCODING = "utf-8"
DEFAULT_OVERWRITE = True
DEFAULT_UNKNOWN_TEXT = "Unknown"
DEFAULT_NA_TEXT = "N/A"

# IGC record markers (first character of a line)
IGC_RECORD_HEADER = "H"
IGC_RECORD_EXTENSION_B = "I"
IGC_RECORD_EXTENSION_K = "J"
IGC_RECORD_POSITION = "B"
IGC_RECORD_SENSOR = "K"
IGC_RECORD_MANUFACTURER = "A"

# Minimum line lengths per record kind
IGC_MIN_EXTENSION_LENGTH = 3
IGC_MIN_POSITION_LENGTH = 35
IGC_MIN_SENSOR_LENGTH = 7

# Three-letter header codes
IGC_HEADER_DATE = "DTE"
IGC_HEADER_PILOT = "PLT"
IGC_HEADER_GLIDER_TYPE = "GTY"
IGC_HEADER_GLIDER_ID = "GID"
IGC_HEADER_COMPETITION_ID = "CID"
IGC_HEADER_COMPETITION_CLASS = "CCL"

# Extension definition layout: kind marker, 2-digit count, then 7-char groups
EXTENSION_COUNT_SLICE = slice(1, 3)
EXTENSION_FIRST_GROUP = 3
EXTENSION_GROUP_WIDTH = 7

# B record fixed columns (0-based, half-open)
B_TIME = slice(1, 7)
B_LATITUDE = slice(7, 14)
B_LATITUDE_HEMISPHERE = slice(14, 15)
B_LONGITUDE = slice(15, 23)
B_LONGITUDE_HEMISPHERE = slice(23, 24)
B_PRESSURE_ALTITUDE = slice(25, 30)
B_GPS_ALTITUDE = slice(30, 35)

# Hemisphere letters that make a coordinate negative
HEMISPHERE_SOUTH = "S"
HEMISPHERE_WEST = "W"

# Two-digit years below this pivot belong to the 2000s
YEAR_PIVOT = 80

# Extension values are bounded to a signed 64-bit integer
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# CSV output
CSV_POSITION_COLUMNS = ["date", "Latitude", "Longitude", "GPS Altitude", "Pressure Altitude"]
CSV_SENSOR_COLUMNS = ["date"]
CSV_SEPARATOR = ","
CSV_LINE_TERMINATOR = "\n"
CSV_COORDINATE_FORMAT = "{:.6f}"
CSV_EXTENSION = ".csv"

# Date and time formats
TIMESTAMP_FORMAT_ISO_Z = "%Y-%m-%dT%H:%M:%SZ"
DATE_FORMAT_YMD = "%Y/%m/%d"
TIME_FORMAT_HM = "%H:%M"

# Configuration sections
CONFIG_SECTION_DEFAULTS = "Defaults"
CONFIG_FILE_NAMES = ("igc2csv.conf", "igc2csv.ini")
