"""
Network information (status.txt) parsing.

The network information file is the entry point to the VATSIM data feeds:
it lists where the status files and related services can be retrieved from.
Its comments describe the parameters; those descriptions are checked to
notice format changes early.
"""

import logging
import re
import threading
from typing import Dict, List, Optional
from urllib.parse import urlparse

from .sections import TextSource, iter_lines

logger = logging.getLogger("vatsim_status.network_info")

PARAMETER_KEY_MESSAGE_STARTUP = "msg0"
PARAMETER_KEY_URL_SERVERS_FILE = "url1"
PARAMETER_KEY_URL_MOVED = "moveto0"
PARAMETER_KEY_URL_METAR = "metar0"
PARAMETER_KEY_URL_ATIS = "atis0"
PARAMETER_KEY_URL_USER_STATISTICS = "user0"

PARAMETER_KEY_URL_DATA_FILE_LEGACY = "url0"
PARAMETER_KEY_URL_DATA_FILE_JSON_1 = "json0"
PARAMETER_KEY_URL_DATA_FILE_JSON_3 = "json3"

# Keys data file URLs are stored by, one per data file format
DATA_KEY_LEGACY = "_legacy"
DATA_KEY_JSON3 = "v3"

URL_PARAMETER_KEYS = (
    PARAMETER_KEY_URL_SERVERS_FILE,
    PARAMETER_KEY_URL_MOVED,
    PARAMETER_KEY_URL_METAR,
    PARAMETER_KEY_URL_ATIS,
    PARAMETER_KEY_URL_USER_STATISTICS,
)

IGNORED_KEYS = frozenset(("servers.live", "voice0"))

# Meaning of the WhazzUp string is unknown; it is recorded but not interpreted.
WHAZZUP_PATTERN = re.compile(r"\d+:[a-z0-9]+", re.IGNORECASE)
WHAZZUP_DEFINITION_PATTERN = re.compile(r"; (\S+)\s+- used by WhazzUp only.*")
DEFINITION_PATTERN = re.compile(r";\s*([^\s\-]+)\s+-\s+(.+)")
PARAMETER_PATTERN = re.compile(r"((?!;)[^=\s]+)=(.*)")
COMMENT_OR_SPACE_PATTERN = re.compile(r";.*|\s*")

EXPECTED_DEFINITIONS = {
    PARAMETER_KEY_MESSAGE_STARTUP: re.compile(r".*application startup.*"),
    PARAMETER_KEY_URL_DATA_FILE_LEGACY: re.compile(r".*complete data.*"),
    PARAMETER_KEY_URL_DATA_FILE_JSON_1: re.compile(r".*JSON data file.*"),
    PARAMETER_KEY_URL_DATA_FILE_JSON_3: re.compile(r".*JSON.* 3.*"),
    PARAMETER_KEY_URL_SERVERS_FILE: re.compile(r".*servers list.*"),
    PARAMETER_KEY_URL_MOVED: re.compile(r".*more updated status.*"),
    PARAMETER_KEY_URL_METAR: re.compile(r".*passing a parameter.*\?id=.*"),
    PARAMETER_KEY_URL_ATIS: re.compile(r".*no longer available.*"),
    PARAMETER_KEY_URL_USER_STATISTICS: re.compile(r".*statistics.*page.*"),
}


def is_valid_url(value: str) -> bool:
    """Does the value look like an absolute URL?"""
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and (bool(parsed.netloc) or parsed.scheme == "file")


class NetworkInformation:
    """
    Contents of a network information file: WhazzUp string, startup messages
    and URLs, grouped by parameter key or by data file format.
    """

    def __init__(self):
        self.whazzup_string: Optional[str] = None
        self._startup_messages: List[str] = []
        self._urls_by_parameter_key: Dict[str, List[str]] = {}
        self._urls_by_data_key: Dict[str, List[str]] = {}
        self._lock = threading.Lock()

    @property
    def startup_messages(self) -> List[str]:
        return list(self._startup_messages)

    def add_startup_message(self, message: str) -> None:
        with self._lock:
            self._startup_messages.append(message)

    def add_as_url(self, key: str, value: str) -> bool:
        """
        Add a URL for a parameter key.

        Returns:
            bool: False if the URL is malformed and has not been added
        """
        return self._add_url(self._urls_by_parameter_key, key, value)

    def add_as_data_url(self, data_key: str, value: str) -> bool:
        """
        Add a data file URL for a data file format key.

        Returns:
            bool: False if the URL is malformed and has not been added
        """
        return self._add_url(self._urls_by_data_key, data_key, value)

    def _add_url(self, target: Dict[str, List[str]], key: str, value: str) -> bool:
        if not is_valid_url(value):
            logger.warning(f"URL for \"{key}\" is malformed: \"{value}\"")
            return False

        with self._lock:
            target.setdefault(key, []).append(value)
        return True

    def get_parameter_urls(self, key: str) -> List[str]:
        return list(self._urls_by_parameter_key.get(key, []))

    def get_data_urls(self, data_key: str) -> List[str]:
        return list(self._urls_by_data_key.get(data_key, []))

    @property
    def all_urls_by_data_key(self) -> Dict[str, List[str]]:
        return {key: list(urls) for key, urls in self._urls_by_data_key.items()}

    @property
    def data_file_urls(self) -> List[str]:
        """URLs of legacy data.txt files"""
        return self.get_data_urls(DATA_KEY_LEGACY)

    @property
    def atis_urls(self) -> List[str]:
        return self.get_parameter_urls(PARAMETER_KEY_URL_ATIS)

    @property
    def metar_urls(self) -> List[str]:
        return self.get_parameter_urls(PARAMETER_KEY_URL_METAR)

    @property
    def moved_to_urls(self) -> List[str]:
        return self.get_parameter_urls(PARAMETER_KEY_URL_MOVED)

    @property
    def servers_file_urls(self) -> List[str]:
        return self.get_parameter_urls(PARAMETER_KEY_URL_SERVERS_FILE)

    @property
    def user_statistics_urls(self) -> List[str]:
        return self.get_parameter_urls(PARAMETER_KEY_URL_USER_STATISTICS)

    def add_all(self, other: "NetworkInformation") -> "NetworkInformation":
        """
        Merge another instance into this one. Entries already present are not
        duplicated; an existing WhazzUp string is kept.

        Returns:
            NetworkInformation: this instance
        """
        with self._lock:
            _merge_urls(self._urls_by_data_key, other._urls_by_data_key)
            _merge_urls(self._urls_by_parameter_key, other._urls_by_parameter_key)
            for message in other._startup_messages:
                if message not in self._startup_messages:
                    self._startup_messages.append(message)

            if self.whazzup_string is None:
                self.whazzup_string = other.whazzup_string

        return self

    def to_dict(self) -> Dict[str, object]:
        return {
            "whazzup_string": self.whazzup_string,
            "startup_messages": self.startup_messages,
            "urls": {key: list(urls) for key, urls in self._urls_by_parameter_key.items()},
            "data_urls": self.all_urls_by_data_key,
        }


def _merge_urls(target: Dict[str, List[str]], source: Dict[str, List[str]]) -> None:
    for key, urls in source.items():
        target_urls = target.setdefault(key, [])
        for url in urls:
            if url not in target_urls:
                target_urls.append(url)


class NetworkInformationParser:
    """Parser for network information files"""

    def parse(self, source: TextSource) -> NetworkInformation:
        """
        Parse a network information file. Never fails: anything which cannot be
        interpreted is logged and skipped.

        Args:
            source: Decoded file content or an iterable of lines

        Returns:
            NetworkInformation: Everything which could be interpreted
        """
        info = NetworkInformation()
        seen_content = False

        for line in iter_lines(source):
            if info.whazzup_string is None:
                match = WHAZZUP_DEFINITION_PATTERN.fullmatch(line)
                if match:
                    if not WHAZZUP_PATTERN.fullmatch(match.group(1)):
                        logger.warning(f"WhazzUp format may have changed, header definition: \"{match.group(1)}\"")
                    continue

            match = DEFINITION_PATTERN.fullmatch(line)
            if match:
                self._check_definition(match.group(1), match.group(2))
                continue

            if COMMENT_OR_SPACE_PATTERN.fullmatch(line):
                continue

            # only the first content line may hold the WhazzUp string
            is_first_content_line = not seen_content
            seen_content = True

            if is_first_content_line and info.whazzup_string is None and WHAZZUP_PATTERN.fullmatch(line):
                info.whazzup_string = line
                continue

            match = PARAMETER_PATTERN.fullmatch(line)
            if match:
                self._apply_parameter(info, match.group(1), match.group(2))
                continue

            logger.warning(f"Uninterpretable line in network file: \"{line}\"")

        return info

    @staticmethod
    def _check_definition(key: str, description: str) -> None:
        expected = EXPECTED_DEFINITIONS.get(key)
        if expected is None:
            logger.info(f"Definition comment found for unknown key \"{key}\": \"{description}\"")
        elif not expected.fullmatch(description):
            logger.warning(f"Mismatch in definition comment for key \"{key}\": \"{description}\"")

    @staticmethod
    def _apply_parameter(info: NetworkInformation, key: str, value: str) -> None:
        if key == PARAMETER_KEY_MESSAGE_STARTUP:
            info.add_startup_message(value)
        elif key in URL_PARAMETER_KEYS:
            info.add_as_url(key, value)
        elif key == PARAMETER_KEY_URL_DATA_FILE_LEGACY:
            info.add_as_data_url(DATA_KEY_LEGACY, value)
        elif key == PARAMETER_KEY_URL_DATA_FILE_JSON_1:
            # superseded by JSON v3
            pass
        elif key == PARAMETER_KEY_URL_DATA_FILE_JSON_3:
            info.add_as_data_url(DATA_KEY_JSON3, value)
        elif key not in IGNORED_KEYS:
            logger.warning(f"Unrecognized key \"{key}\", value \"{value}\"")


network_information_parser = NetworkInformationParser()
