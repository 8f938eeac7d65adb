"""
Pytest configuration and shared fixtures for igc2csv tests
"""
import pytest


# B record building blocks: time, latitude, longitude, validity, pressure alt, GPS alt
B_LINE_1 = "B1200005213123N00019456WA0010000150"
B_LINE_2 = "B1200015213200N00019500WA0010500155"


@pytest.fixture
def minimal_igc_content():
    """Smallest file that converts: a date header and one B record"""
    return "HFDTE010180\n" + B_LINE_1 + "\n"


@pytest.fixture
def sample_igc_content():
    """Sample IGC file content with B and K extensions"""
    return "\n".join([
        "AXCS001",
        "HFDTE010180",
        "HFPLTPILOTINCHARGE:Jane Doe",
        "HFGTYGLIDERTYPE:ASG 29",
        "HFGIDGLIDERID:D-1234",
        "HFCIDCOMPETITIONID:XY",
        "HFCCLCOMPETITIONCLASS:18m",
        "I023638FXA3940SIU",
        "J010810HDT",
        B_LINE_1 + "012" + "07",
        "K120000123",
        B_LINE_2 + "015" + "08",
        "K12000112-",
        "LXCSsome comment",
        "GABCDEF0123456789",
    ]) + "\n"


@pytest.fixture
def rollover_igc_content():
    """Flight that crosses UTC midnight on new year's eve 1999"""
    return "\n".join([
        "AXCS001",
        "HFDTE311299",
        "B2359585213123N00019456WA0010000150",
        "B2359595213123N00019456WA0010000150",
        "B0000005213123N00019456WA0010000150",
        "B0000015213123N00019456WA0010000150",
    ]) + "\n"


@pytest.fixture
def sample_igc_file(tmp_path, sample_igc_content):
    """Create a temporary IGC file for testing"""
    igc_file = tmp_path / "test_flight.igc"
    igc_file.write_text(sample_igc_content)
    return igc_file


@pytest.fixture
def sample_config_content():
    """Sample configuration file content"""
    return """[Defaults]
OutPath = .
SensorSuffix = _k
Overwrite = yes
Encoding = utf-8
"""


@pytest.fixture
def sample_config_file(tmp_path, sample_config_content):
    """Create a temporary config file for testing"""
    config_file = tmp_path / "test_config.conf"
    config_file.write_text(sample_config_content)
    return config_file


@pytest.fixture
def temp_output_dir(tmp_path):
    """Create a temporary output directory"""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    return output_dir


@pytest.fixture
def mock_cli_args(sample_config_file, temp_output_dir):
    """Mock command-line arguments for testing"""
    class MockArgs:
        def __init__(self):
            self.config = str(sample_config_file)
            self.output = str(temp_output_dir)
            self.sensor_suffix = None
            self.summary = False
            self.verbose = False
            self.trackfile = []

    return MockArgs()
