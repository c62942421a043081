"""
Parser for the GENERAL section holding the meta data of a status file.
"""

import datetime
import logging
import re
from typing import Dict, Iterable, Optional

from .faults import FaultLog, MalformedLineError
from .models import DataFileMetaData
from ..config.constants import SECTION_GENERAL, TIMESTAMP_FORMAT

logger = logging.getLogger("vatsim_status.general")

KEY_VALUE_PATTERN = re.compile(r"([^=]+) = (.+)")

KEY_VERSION = "VERSION"
KEY_RELOAD = "RELOAD"
KEY_ATIS_ALLOW_MIN = "ATIS ALLOW MIN"
KEY_CONNECTED_CLIENTS = "CONNECTED CLIENTS"
KEY_UPDATE = "UPDATE"


def _minutes(value: str) -> datetime.timedelta:
    try:
        return datetime.timedelta(minutes=int(value))
    except OverflowError:
        raise ValueError(f"interval of {value} minutes is out of range") from None


def _timestamp(value: str) -> datetime.datetime:
    return datetime.datetime.strptime(value, TIMESTAMP_FORMAT).replace(tzinfo=datetime.timezone.utc)


# Meta data attribute and value conversion for each known key
CONVERSIONS = {
    KEY_VERSION: ("version_format", int),
    KEY_RELOAD: ("minimum_data_file_retrieval_interval", _minutes),
    KEY_ATIS_ALLOW_MIN: ("minimum_atis_retrieval_interval", _minutes),
    KEY_CONNECTED_CLIENTS: ("number_of_connected_clients", int),
    KEY_UPDATE: ("timestamp", _timestamp),
}


class GeneralSectionParser:
    """Reads "KEY = VALUE" lines into DataFileMetaData"""

    def parse(self,
              lines: Optional[Iterable[str]],
              fault_log: FaultLog,
              section_name: str = SECTION_GENERAL) -> DataFileMetaData:
        """
        Parse all lines of the GENERAL section.

        Lines which cannot be interpreted are recorded as fatal faults and
        leave the affected attribute at its default.

        Args:
            lines: Relevant lines of the section, None if the section is missing
            fault_log: Log to record faults in
            section_name: Section name to report faults for

        Returns:
            DataFileMetaData: Meta data, defaults for anything not found
        """
        lines = list(lines or [])
        if not lines:
            fault_log.add(section_name, None, True, "meta data is missing or empty")
            return DataFileMetaData()

        values: Dict[str, object] = {}
        for line in lines:
            match = KEY_VALUE_PATTERN.fullmatch(line)
            if not match:
                error = MalformedLineError(line, section_name)
                logger.debug(str(error))
                fault_log.add(section_name, line, True, str(error), error)
                continue

            key, value = match.group(1), match.group(2)
            conversion = CONVERSIONS.get(key)
            if conversion is None:
                logger.debug(f"Unknown key in {section_name}: {key}")
                fault_log.add(section_name, line, True, f"key {key} is unknown and could not be parsed")
                continue

            attribute, convert = conversion
            try:
                values[attribute] = convert(value)
            except (ValueError, OverflowError) as e:
                logger.debug(f"Invalid value for {key}: {value}")
                fault_log.add(section_name, line, True, f"value of key {key} could not be parsed: \"{value}\"", e)

        return DataFileMetaData(**values)


general_section_parser = GeneralSectionParser()
