"""
Data package for the VATSIM Status File Parser.
Contains data models, the line grammar and the parsers for all sections.
"""

from .faults import StatusFileError, MalformedLineError, FieldViolationError, ParseFault, FaultLog
from .models import (
    ClientRole,
    ControllerRating,
    FacilityType,
    RawSection,
    ClientRecord,
    FSDServer,
    VoiceServer,
    DataFileMetaData,
    ParsedDocument,
)
from .grammar import ClientField, LineGrammar
from .sections import SectionSplitter, SectionMap, SectionLineProcessor, splitter
from .client_parser import ClientRecordParser
from .general import GeneralSectionParser
from .servers import FSDServerParser, VoiceServerParser
from .parser import DataFileParser, data_file_parser, parse
from .network_info import NetworkInformation, NetworkInformationParser, network_information_parser
from .privacy_filter import PrivacyFilter

__all__ = [
    'StatusFileError',
    'MalformedLineError',
    'FieldViolationError',
    'ParseFault',
    'FaultLog',
    'ClientRole',
    'ControllerRating',
    'FacilityType',
    'RawSection',
    'ClientRecord',
    'FSDServer',
    'VoiceServer',
    'DataFileMetaData',
    'ParsedDocument',
    'ClientField',
    'LineGrammar',
    'SectionSplitter',
    'SectionMap',
    'SectionLineProcessor',
    'splitter',
    'ClientRecordParser',
    'GeneralSectionParser',
    'FSDServerParser',
    'VoiceServerParser',
    'DataFileParser',
    'data_file_parser',
    'parse',
    'NetworkInformation',
    'NetworkInformationParser',
    'network_information_parser',
    'PrivacyFilter',
]
