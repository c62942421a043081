"""
Line grammar of CLIENTS and PREFILE records.

A record consists of 41 colon-separated fields, each followed by a colon.
Only the controller message (ATIS) field may contain colons itself.
"""

import re
from enum import IntEnum
from typing import Dict, Optional

TIMESTAMP = r"\d{14}"
FLOAT_UNSIGNED = r"\d+(?:\.\d+|)(?:[eE][\-+]?\d+|)"  # integers are valid as well
GEO_COORDINATE = r"\-?" + FLOAT_UNSIGNED


class ClientField(IntEnum):
    """Group index of each field in CLIENT_LINE_PATTERN"""
    CALLSIGN = 1
    MEMBER_ID = 2
    REAL_NAME = 3
    CLIENT_TYPE = 4
    FREQUENCY = 5
    LATITUDE = 6
    LONGITUDE = 7
    ALTITUDE = 8
    GROUND_SPEED = 9
    PLANNED_AIRCRAFT = 10
    PLANNED_TAS_CRUISE = 11
    PLANNED_DEPARTURE_AIRPORT = 12
    PLANNED_ALTITUDE = 13
    PLANNED_DESTINATION_AIRPORT = 14
    SERVER = 15
    PROTOCOL_REVISION = 16
    RATING = 17
    TRANSPONDER = 18
    FACILITY_TYPE = 19
    VISUAL_RANGE = 20
    PLANNED_REVISION = 21
    PLANNED_FLIGHT_TYPE = 22
    PLANNED_DEPARTURE_TIME = 23
    PLANNED_ACTUAL_DEPARTURE_TIME = 24
    PLANNED_HOURS_ENROUTE = 25
    PLANNED_MINUTES_ENROUTE = 26
    PLANNED_HOURS_FUEL = 27
    PLANNED_MINUTES_FUEL = 28
    PLANNED_ALTERNATE_AIRPORT = 29
    PLANNED_REMARKS = 30
    PLANNED_ROUTE = 31
    PLANNED_DEPARTURE_AIRPORT_LATITUDE = 32
    PLANNED_DEPARTURE_AIRPORT_LONGITUDE = 33
    PLANNED_DESTINATION_AIRPORT_LATITUDE = 34
    PLANNED_DESTINATION_AIRPORT_LONGITUDE = 35
    ATIS_MESSAGE = 36
    TIME_LAST_ATIS_RECEIVED = 37
    TIME_LOGON = 38
    HEADING = 39
    QNH_INCH_MERCURY = 40
    QNH_HECTOPASCAL = 41


# Group order must match ClientField.
CLIENT_LINE_PATTERN = re.compile(
    # 1       2       3       4
    r"([^:]+):(\d+|):([^:]*):(PILOT|ATC|):"
    # 5                          6                          7
    r"(" + FLOAT_UNSIGNED + r"|):(" + GEO_COORDINATE + r"|):(" + GEO_COORDINATE + r"|):"
    # 8       9      10      11     12      13      14      15      16     17
    r"(\-?\d+|):(\d+|):([^:]*):(\d+|):([^:]*):([^:]*):([^:]*):([^:]*):(\d+|):(\d+|):"
    # 18   19     20     21     22      23     24     25        26        27        28
    r"(\d*):(\d+|):(\d+|):(\d+|):([^:]*):(\d+|):(\d+|):(\-?\d+|):(\-?\d+|):(\-?\d+|):(\-?\d+|):"
    # 29      30      31      32                          33
    r"([^:]*):([^:]*):([^:]*):(" + GEO_COORDINATE + r"|):(" + GEO_COORDINATE + r"|):"
    # 34                          35
    r"(" + GEO_COORDINATE + r"|):(" + GEO_COORDINATE + r"|):"
    # 36  37                     38                     39
    r"(.*):(" + TIMESTAMP + r"|):(" + TIMESTAMP + r"|):(\d+|):"
    # 40                               41
    r"(\-?" + FLOAT_UNSIGNED + r"|):(\-?\d+|):"
)


class ClientFields:
    """Tokenized client record, fields accessible by ClientField"""

    __slots__ = ("line", "_match")

    def __init__(self, line: str, match: "re.Match"):
        self.line = line
        self._match = match

    def __getitem__(self, field: ClientField) -> str:
        return self._match.group(field)

    def is_zero_or_empty(self, field: ClientField) -> bool:
        """Is the field empty or holding a literal zero?"""
        return self[field] in ("", "0")

    def replace(self, replacements: Dict[ClientField, str]) -> str:
        """
        Rebuild the line with some field values replaced; all other characters
        are kept exactly as they were.

        Args:
            replacements: New values by field

        Returns:
            str: The rewritten line
        """
        parts = []
        position = 0
        for field in sorted(replacements):
            start, end = self._match.span(field)
            parts.append(self.line[position:start])
            parts.append(replacements[field])
            position = end
        parts.append(self.line[position:])
        return "".join(parts)


class LineGrammar:
    """
    Tokenizer for client records.

    The pattern is compiled once at import time and shared by all instances,
    which hold no other state.
    """

    pattern = CLIENT_LINE_PATTERN

    def match(self, line: str) -> Optional[ClientFields]:
        """
        Tokenize a line.

        Args:
            line: A single CLIENTS or PREFILE line without line terminator

        Returns:
            ClientFields if the line matches the grammar, None otherwise
        """
        match = self.pattern.fullmatch(line)
        if match is None:
            return None
        return ClientFields(line, match)


grammar = LineGrammar()
