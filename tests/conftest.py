"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from vatsim_status.data.grammar import ClientField  # noqa: E402


PILOT_FIELDS = {
    ClientField.CALLSIGN: "DLH123",
    ClientField.MEMBER_ID: "1234567",
    ClientField.REAL_NAME: "Jane Doe EDDF",
    ClientField.CLIENT_TYPE: "PILOT",
    ClientField.LATITUDE: "50.03",
    ClientField.LONGITUDE: "8.57",
    ClientField.ALTITUDE: "35000",
    ClientField.GROUND_SPEED: "450",
    ClientField.PLANNED_AIRCRAFT: "B738",
    ClientField.PLANNED_TAS_CRUISE: "460",
    ClientField.PLANNED_DEPARTURE_AIRPORT: "EDDF",
    ClientField.PLANNED_ALTITUDE: "FL350",
    ClientField.PLANNED_DESTINATION_AIRPORT: "LEMD",
    ClientField.SERVER: "GERMANY",
    ClientField.PROTOCOL_REVISION: "100",
    ClientField.RATING: "1",
    ClientField.TRANSPONDER: "2000",
    ClientField.PLANNED_REVISION: "1",
    ClientField.PLANNED_FLIGHT_TYPE: "I",
    ClientField.PLANNED_DEPARTURE_TIME: "1200",
    ClientField.PLANNED_ACTUAL_DEPARTURE_TIME: "1210",
    ClientField.PLANNED_HOURS_ENROUTE: "2",
    ClientField.PLANNED_MINUTES_ENROUTE: "15",
    ClientField.PLANNED_HOURS_FUEL: "4",
    ClientField.PLANNED_MINUTES_FUEL: "0",
    ClientField.PLANNED_ALTERNATE_AIRPORT: "LEBL",
    ClientField.PLANNED_REMARKS: "/v/",
    ClientField.PLANNED_ROUTE: "ANEKI Y163 NATOR",
    ClientField.TIME_LOGON: "20190101120000",
    ClientField.HEADING: "180",
    ClientField.QNH_INCH_MERCURY: "29.92",
    ClientField.QNH_HECTOPASCAL: "1013",
}

ATC_FIELDS = {
    ClientField.CALLSIGN: "EDDF_TWR",
    ClientField.MEMBER_ID: "7654321",
    ClientField.REAL_NAME: "John Smith",
    ClientField.CLIENT_TYPE: "ATC",
    ClientField.FREQUENCY: "119.900",
    ClientField.LATITUDE: "50.03",
    ClientField.LONGITUDE: "8.57",
    ClientField.ALTITUDE: "0",
    ClientField.GROUND_SPEED: "0",
    ClientField.SERVER: "GERMANY",
    ClientField.PROTOCOL_REVISION: "100",
    ClientField.RATING: "5",
    ClientField.FACILITY_TYPE: "4",
    ClientField.VISUAL_RANGE: "50",
    ClientField.ATIS_MESSAGE: "Frankfurt Tower^\xa7Welcome",
    ClientField.TIME_LAST_ATIS_RECEIVED: "20190101115500",
    ClientField.TIME_LOGON: "20190101100000",
}

PREFILE_FIELDS = {
    ClientField.CALLSIGN: "AAL100",
    ClientField.MEMBER_ID: "1111111",
    ClientField.REAL_NAME: "Prefiling Pilot",
    ClientField.PLANNED_AIRCRAFT: "B77W",
    ClientField.PLANNED_TAS_CRUISE: "490",
    ClientField.PLANNED_DEPARTURE_AIRPORT: "KJFK",
    ClientField.PLANNED_ALTITUDE: "FL330",
    ClientField.PLANNED_DESTINATION_AIRPORT: "EGLL",
    ClientField.PLANNED_REVISION: "0",
    ClientField.PLANNED_FLIGHT_TYPE: "I",
    ClientField.PLANNED_DEPARTURE_TIME: "2300",
    ClientField.PLANNED_ACTUAL_DEPARTURE_TIME: "0",
    ClientField.PLANNED_HOURS_ENROUTE: "6",
    ClientField.PLANNED_MINUTES_ENROUTE: "45",
    ClientField.PLANNED_HOURS_FUEL: "8",
    ClientField.PLANNED_MINUTES_FUEL: "30",
    ClientField.PLANNED_ALTERNATE_AIRPORT: "EGKK",
    ClientField.PLANNED_REMARKS: "/v/",
    ClientField.PLANNED_ROUTE: "DCT",
}


NETWORK_INFORMATION = "\n".join([
    "; IMPORTANT NOTE: this file is only used for testing",
    "; 123456:abcdef    - used by WhazzUp only",
    "; msg0         - message to be displayed at application startup",
    "; url0         - URLs where complete data files are available. Please choose one randomly",
    "; json3        - JSON Data Version 3",
    "; url1         - URLs where servers list data files are available. Please choose one randomly",
    "; moveto0      - URL where to retrieve a more updated status.txt file that overrides this one",
    ";",
    "120128:NOTCP",
    ";",
    "msg0=Welcome to the network",
    "url0=http://example.com/vatsim-data.txt",
    "url0=http://example.org/vatsim-data.txt",
    "json3=https://data.example.com/v3/vatsim-data.json",
    "json0=http://example.com/vatsim-data.json",
    "url1=http://example.com/vatsim-servers.txt",
    "servers.live=http://example.com/servers.live",
    "voice0=http://example.com/voice",
    "metar0=http://metar.example.com/metar.php",
    "atis0=http://example.com/atis",
    "user0=http://example.com/stats",
    "moveto0=http://example.com/status.txt",
    ";",
    "; END",
])


@pytest.fixture
def sample_network_information():
    """Provide a network information (status.txt) file."""
    return NETWORK_INFORMATION


def build_client_line(base, **overrides):
    """
    Build a 41-field client line.

    Args:
        base: Mapping of ClientField to value, missing fields are empty
        overrides: Field values by ClientField name, e.g. HEADING="90"
    """
    values = dict(base)
    for name, value in overrides.items():
        values[ClientField[name]] = value
    return "".join(values.get(field, "") + ":" for field in ClientField)


@pytest.fixture(scope="session")
def project_root_dir():
    """Provide the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def pilot_line():
    """Build a connected pilot line, optionally overriding fields."""
    return lambda **overrides: build_client_line(PILOT_FIELDS, **overrides)


@pytest.fixture
def atc_line():
    """Build a connected ATC line, optionally overriding fields."""
    return lambda **overrides: build_client_line(ATC_FIELDS, **overrides)


@pytest.fixture
def prefile_line():
    """Build a prefiled flight plan line, optionally overriding fields."""
    return lambda **overrides: build_client_line(PREFILE_FIELDS, **overrides)


@pytest.fixture
def sample_data_file(pilot_line, atc_line, prefile_line):
    """Provide a complete status file."""
    return "\n".join([
        "; Created at 01/01/2019 12:00:00 UTC by Data Server V4.0",
        ";",
        "!GENERAL:",
        "VERSION = 8",
        "RELOAD = 2",
        "UPDATE = 20190101120000",
        "ATIS ALLOW MIN = 5",
        "CONNECTED CLIENTS = 2",
        ";",
        "!VOICE SERVERS:",
        "voice.example.com:Frankfurt:Europe Voice:1:R:",
        ";",
        "!CLIENTS:",
        pilot_line(),
        atc_line(),
        ";",
        "!SERVERS:",
        "GERMANY:fsd.example.com:Frankfurt:Germany Server:1:",
        ";",
        "!PREFILE:",
        prefile_line(),
        ";",
        "; END",
        "",
    ])
