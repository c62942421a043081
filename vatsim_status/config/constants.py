"""
Constants for the VATSIM status file parser.
These are fixed values defined by the status file format.
"""

# Section names as used in "!NAME:" headers
SECTION_GENERAL = 'GENERAL'
SECTION_CLIENTS = 'CLIENTS'
SECTION_PREFILE = 'PREFILE'
SECTION_SERVERS = 'SERVERS'
SECTION_VOICE_SERVERS = 'VOICE SERVERS'

COMMENT_PREFIX = ';'

# Declared format versions this parser has been written against
LOWEST_SUPPORTED_FORMAT_VERSION = 8
HIGHEST_SUPPORTED_FORMAT_VERSION = 9

# Client record literals
CLIENT_TYPE_ATC = 'ATC'
CLIENT_TYPE_PILOT = 'PILOT'
CLIENT_RECORD_FIELD_COUNT = 41

# Frequencies at or above 199.000 MHz are placeholders (station not serving)
FREQUENCY_KILOHERTZ_PLACEHOLDER_MINIMUM = 199000

DEFAULT_ALTITUDE = 0
TIMESTAMP_FORMAT = '%Y%m%d%H%M%S'
DUMMY_TIMESTAMP = '00010101000000'

# Controller messages encode line breaks as bytes 0x5E 0xA7. Depending on how
# the file was decoded, that sequence shows up as one of these strings.
CONTROLLER_MESSAGE_LINEBREAK_BYTES = b'\x5e\xa7'
CONTROLLER_MESSAGE_LINEBREAKS = (
    CONTROLLER_MESSAGE_LINEBREAK_BYTES.decode('iso-8859-1'),  # ^§
    '^Â§',  # UTF-8 "§" read as ISO-8859-1
    '^\ufffd',  # decoded as UTF-8 with errors="replace"
)
LINEBREAK = '\n'

# Status files are published in a single-byte encoding
DEFAULT_ENCODING = 'iso-8859-1'

# Application information
APP_NAME = "VATSIM Status File Parser"
APP_VERSION = "0.1.0"
APP_AUTHOR = "VATSIM status parser contributors"
APP_LICENSE = "MIT License"
APP_DESCRIPTION = "Parse VATSIM legacy data.txt status files into typed records"

# CLI output
DEFAULT_TOP_AIRPORTS = 5
