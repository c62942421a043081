"""
Parsers for the SERVERS and VOICE SERVERS sections.
"""

import re

from .faults import MalformedLineError
from .models import FSDServer, VoiceServer
from ..config.constants import SECTION_SERVERS, SECTION_VOICE_SERVERS

# ident:hostname_or_IP:location:name:clients_connection_allowed:
FSD_SERVER_PATTERN = re.compile(r"([^:]+):([^:]+):([^:]+):([^:]+):([01]):")

# hostname_or_IP:location:name:clients_connection_allowed:type_of_voice_server:
VOICE_SERVER_PATTERN = re.compile(r"([^:]+):([^:]+):([^:]+):([01]):(?:([^:]*):)?")


def _is_connection_allowed(flag: str) -> bool:
    # TODO: confirm "1" is the only value granting connections on the live network
    return flag == "1"


class FSDServerParser:
    """Parses lines of the SERVERS section"""

    def parse(self, line: str) -> FSDServer:
        """
        Raises:
            MalformedLineError: if the line does not match the expected syntax
        """
        match = FSD_SERVER_PATTERN.fullmatch(line)
        if not match:
            raise MalformedLineError(line, SECTION_SERVERS)

        return FSDServer(
            server_id=match.group(1),
            address=match.group(2),
            location=match.group(3),
            name=match.group(4),
            client_connection_allowed=_is_connection_allowed(match.group(5)),
        )


class VoiceServerParser:
    """Parses lines of the VOICE SERVERS section; the server type is optional"""

    def parse(self, line: str) -> VoiceServer:
        """
        Raises:
            MalformedLineError: if the line does not match the expected syntax
        """
        match = VOICE_SERVER_PATTERN.fullmatch(line)
        if not match:
            raise MalformedLineError(line, SECTION_VOICE_SERVERS)

        return VoiceServer(
            address=match.group(1),
            location=match.group(2),
            name=match.group(3),
            client_connection_allowed=_is_connection_allowed(match.group(4)),
            raw_server_type=match.group(5),
        )


fsd_server_parser = FSDServerParser()
voice_server_parser = VoiceServerParser()
