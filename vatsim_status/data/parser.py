"""
Parser for complete VATSIM data.txt status files.
"""

import logging
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

from .client_parser import ClientRecordParser
from .faults import FaultLog
from .general import GeneralSectionParser
from .models import ClientRecord, DataFileMetaData, FSDServer, ParsedDocument, VoiceServer
from .sections import SectionSplitter, TextSource
from .servers import FSDServerParser, VoiceServerParser
from ..config.constants import (
    HIGHEST_SUPPORTED_FORMAT_VERSION,
    LOWEST_SUPPORTED_FORMAT_VERSION,
    SECTION_CLIENTS,
    SECTION_GENERAL,
    SECTION_PREFILE,
    SECTION_SERVERS,
    SECTION_VOICE_SERVERS,
)

# Configure logger
logger = logging.getLogger("vatsim_status.parser")

T = TypeVar("T")


class DataFileParser:
    """
    Parses a whole status file into a ParsedDocument.

    Every line is parsed on its own. A line which cannot be parsed is dropped
    and recorded as a fatal fault; it never stops the remaining lines or
    sections from being parsed.
    """

    def __init__(self, supported_versions: Tuple[int, int] = (LOWEST_SUPPORTED_FORMAT_VERSION,
                                                                HIGHEST_SUPPORTED_FORMAT_VERSION)):
        """
        Args:
            supported_versions: Closed range (lowest, highest) of format versions
                                which are parsed without an advisory fault
        """
        lowest, highest = supported_versions
        if lowest > highest:
            raise ValueError(f"invalid range of supported versions: {lowest} > {highest}")

        self.supported_versions = (lowest, highest)

        self._splitter = SectionSplitter()
        self._general_parser = GeneralSectionParser()
        self._online_client_parser = ClientRecordParser(is_prefile_section=False)
        self._prefile_client_parser = ClientRecordParser(is_prefile_section=True)
        self._fsd_server_parser = FSDServerParser()
        self._voice_server_parser = VoiceServerParser()

    def parse(self, source: TextSource) -> ParsedDocument:
        """
        Parse a status file.

        Args:
            source: Decoded file content or an iterable of lines (e.g. an open file)

        Returns:
            ParsedDocument: All successfully parsed records and all faults
        """
        fault_log = FaultLog()
        sections = self._splitter.split(source)

        general_lines = sections.lines(SECTION_GENERAL) if SECTION_GENERAL in sections else None
        metadata = self._general_parser.parse(general_lines, fault_log, SECTION_GENERAL)
        self._check_version(metadata, fault_log)

        client_records: List[ClientRecord] = []
        client_records.extend(self._parse_lines(
            SECTION_CLIENTS, sections.lines(SECTION_CLIENTS), self._online_client_parser.parse, fault_log
        ))
        client_records.extend(self._parse_lines(
            SECTION_PREFILE, sections.lines(SECTION_PREFILE), self._prefile_client_parser.parse, fault_log
        ))

        server_records: List[FSDServer] = self._parse_lines(
            SECTION_SERVERS, sections.lines(SECTION_SERVERS), self._fsd_server_parser.parse, fault_log
        )
        voice_server_records: List[VoiceServer] = self._parse_lines(
            SECTION_VOICE_SERVERS, sections.lines(SECTION_VOICE_SERVERS), self._voice_server_parser.parse, fault_log
        )

        document = ParsedDocument(
            metadata=metadata,
            client_records=tuple(client_records),
            server_records=tuple(server_records),
            voice_server_records=tuple(voice_server_records),
            faults=fault_log.snapshot(),
        )

        logger.info(f"Parsed {len(document.client_records)} clients, {len(document.server_records)} servers, "
                    f"{len(document.voice_server_records)} voice servers "
                    f"({len(document.fatal_faults)} fatal, {len(document.advisory_faults)} advisory faults)")

        return document

    def is_supported_version(self, version: int) -> bool:
        lowest, highest = self.supported_versions
        return lowest <= version <= highest

    def _check_version(self, metadata: DataFileMetaData, fault_log: FaultLog) -> None:
        if self.is_supported_version(metadata.version_format):
            return

        lowest, highest = self.supported_versions
        if metadata.version_format < 0:
            message = f"format version is missing, supported versions are {lowest} to {highest}"
        else:
            message = (f"unsupported format version {metadata.version_format}, "
                       f"supported versions are {lowest} to {highest}; parsing anyway")

        logger.warning(message)
        fault_log.add(SECTION_GENERAL, None, False, message)

    @staticmethod
    def _parse_lines(section_name: str,
                     lines: Iterable[str],
                     parse_line: Callable[[str], T],
                     fault_log: FaultLog) -> List[T]:
        """Parse each line on its own, recording failures as fatal faults"""
        records: List[T] = []

        for line in lines:
            try:
                records.append(parse_line(line))
            except (ValueError, OverflowError) as e:
                logger.debug(f"Dropping line in {section_name}: {e}")
                fault_log.add(section_name, line, True, str(e), e)

        return records


def parse(source: TextSource, supported_versions: Optional[Tuple[int, int]] = None) -> ParsedDocument:
    """Parse a status file with a default configured parser"""
    parser = data_file_parser if supported_versions is None else DataFileParser(supported_versions)
    return parser.parse(source)


# Create a singleton instance of the parser
data_file_parser = DataFileParser()
