"""
Privacy filter for status files.

Removes personal information from the CLIENTS and PREFILE sections so a file
can be archived or shared. Everything else of the file, including comments
and line terminators, is kept byte-for-byte.
"""

import dataclasses
import logging
import re
from typing import Dict, Iterable, Optional

from .grammar import ClientField, LineGrammar, grammar as default_grammar
from .models import ClientRecord, ParsedDocument
from .parser import DataFileParser
from .sections import SectionLineProcessor
from ..config.constants import SECTION_CLIENTS, SECTION_PREFILE

logger = logging.getLogger("vatsim_status.privacy_filter")

FILTERED_SECTIONS = (SECTION_CLIENTS, SECTION_PREFILE)

# Prefix marking flight plans filed through VFPS
VFPS_PREFIX = "+VFPS+"

# In order of precedence
COMMUNICATION_FLAGS = ("/V/", "/R/", "/T/")

OBSERVER_SUFFIX = "_OBS"
OBSERVER_REPLACEMENT = "XX_OBS"


class PrivacyFilter:
    """
    Rewrites client lines to drop personal information.

    Lines which do not match the client line grammar are left unchanged;
    they will be reported as faults when the file is parsed.
    """

    def __init__(self,
                 remove_real_name: bool = True,
                 remove_remarks: bool = False,
                 remarks_triggers: Optional[Iterable[str]] = None,
                 substitute_observer_callsign: bool = False,
                 grammar: Optional[LineGrammar] = None):
        """
        Args:
            remove_real_name: Blank the real name field (which also holds the home base)
            remove_remarks: Strip flight plan remarks down to the VFPS prefix and
                            the communication flag
            remarks_triggers: Only strip remarks containing one of these phrases
                              (case-insensitive); all non-empty remarks if not given
            substitute_observer_callsign: Replace observer callsigns by XX_OBS
            grammar: Tokenizer to use (default: shared module instance)

        Raises:
            ValueError: if a trigger is empty or white-space only
        """
        triggers = list(remarks_triggers or [])
        if any(not trigger.strip() for trigger in triggers):
            raise ValueError("remarks triggers must not be empty or white-space only")

        self.remove_real_name = remove_real_name
        self.remove_remarks = remove_remarks or bool(triggers)
        self.substitute_observer_callsign = substitute_observer_callsign
        self._grammar = grammar or default_grammar

        self._trigger_pattern = None
        if triggers:
            self._trigger_pattern = re.compile(
                "|".join(re.escape(trigger) for trigger in triggers),
                re.IGNORECASE
            )

    def is_remarks_filter_triggered(self, remarks: str) -> bool:
        if not self.remove_remarks:
            return False
        if self._trigger_pattern is None:
            return bool(remarks.strip())
        return self._trigger_pattern.search(remarks) is not None

    def filter_remarks(self, remarks: str) -> str:
        """Reduce remarks to what is needed to interpret the flight plan"""
        if not self.is_remarks_filter_triggered(remarks):
            return remarks

        prefix = VFPS_PREFIX if remarks.startswith(VFPS_PREFIX) else ""

        upper_remarks = remarks.upper()
        flag = next((flag for flag in COMMUNICATION_FLAGS if flag in upper_remarks), "")

        return prefix + flag

    def filter_callsign(self, callsign: str) -> str:
        if self.substitute_observer_callsign and callsign.endswith(OBSERVER_SUFFIX):
            return OBSERVER_REPLACEMENT
        return callsign

    def filter_line(self, line: str) -> str:
        """
        Filter a single CLIENTS or PREFILE line.

        Args:
            line: Line without line terminator

        Returns:
            str: The filtered line, or the original line if it cannot be tokenized
        """
        fields = self._grammar.match(line)
        if fields is None:
            logger.debug(f"Keeping unparseable line unfiltered: {line}")
            return line

        replacements: Dict[ClientField, str] = {}
        if self.remove_real_name:
            replacements[ClientField.REAL_NAME] = ""

        remarks = fields[ClientField.PLANNED_REMARKS]
        filtered_remarks = self.filter_remarks(remarks)
        if filtered_remarks != remarks:
            replacements[ClientField.PLANNED_REMARKS] = filtered_remarks

        callsign = fields[ClientField.CALLSIGN]
        filtered_callsign = self.filter_callsign(callsign)
        if filtered_callsign != callsign:
            replacements[ClientField.CALLSIGN] = filtered_callsign

        return fields.replace(replacements)

    def filter(self, text: str) -> str:
        """
        Filter a complete status file.

        Args:
            text: Decoded file content

        Returns:
            str: Filtered file content
        """
        processor = SectionLineProcessor(text)
        for section_name in FILTERED_SECTIONS:
            processor.apply(section_name, self.filter_line)
        return processor.result()

    def expected_record(self, record: ClientRecord) -> ClientRecord:
        """Get the record a filtered line is expected to parse to"""
        return dataclasses.replace(
            record,
            callsign=self.filter_callsign(record.callsign),
            real_name="" if self.remove_real_name else record.real_name,
            flight_plan_remarks=self.filter_remarks(record.flight_plan_remarks),
        )

    def verify(self, original: str, filtered: str, parser: Optional[DataFileParser] = None) -> bool:
        """
        Check that filtering changed nothing but the wanted fields.

        Both files are parsed; all meta data, servers and faults must be
        equal and every client record must match the original record with
        only the filtered fields changed.

        Args:
            original: Content before filtering
            filtered: Content after filtering
            parser: Parser to use (default: a parser with default configuration)

        Returns:
            bool: True if only wanted modifications were found
        """
        parser = parser or DataFileParser()
        original_document = parser.parse(original)
        filtered_document = parser.parse(filtered)

        return self._verify_documents(original_document, filtered_document)

    def _verify_documents(self, original: ParsedDocument, filtered: ParsedDocument) -> bool:
        if original.metadata != filtered.metadata:
            logger.warning("Meta data changed by filtering")
            return False

        if (original.server_records != filtered.server_records
                or original.voice_server_records != filtered.voice_server_records):
            logger.warning("Server lists changed by filtering")
            return False

        if [fault.is_fatal for fault in original.faults] != [fault.is_fatal for fault in filtered.faults]:
            logger.warning(f"Faults changed by filtering: {len(original.faults)} before, "
                           f"{len(filtered.faults)} after")
            return False

        if len(original.client_records) != len(filtered.client_records):
            logger.warning("Number of client records changed by filtering")
            return False

        for original_record, filtered_record in zip(original.client_records, filtered.client_records):
            if self.expected_record(original_record) != filtered_record:
                logger.warning(f"Unexpected modification of client {original_record.callsign}")
                return False

        return True
