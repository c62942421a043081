"""
Data models for the VATSIM status file parser.
Contains classes representing the records found in a data.txt status file.
"""

from dataclasses import dataclass, fields
from typing import Optional, Tuple, Dict, Any
import datetime
import math
from enum import Enum

from ..config.constants import FREQUENCY_KILOHERTZ_PLACEHOLDER_MINIMUM
from .faults import ParseFault


class ClientRole(Enum):
    """Role of a client record, either as tagged in the file or as inferred"""
    ATC_CONNECTED = "ATC_CONNECTED"
    PILOT_CONNECTED = "PILOT_CONNECTED"
    PILOT_PREFILED = "PILOT_PREFILED"
    UNKNOWN = "UNKNOWN"

    @property
    def is_online(self) -> bool:
        """Is a client of this role connected to the network?"""
        return self in (ClientRole.ATC_CONNECTED, ClientRole.PILOT_CONNECTED)


class ControllerRating(Enum):
    """Controller ratings keyed by their status file ID"""
    OBS = 1
    S1 = 2
    S2 = 3
    S3 = 4
    C1 = 5
    C2 = 6
    C3 = 7
    I = 8  # noqa: E741
    I2 = 9
    I3 = 10
    SUP = 11
    ADM = 12

    @property
    def status_file_id(self) -> int:
        return self.value

    @classmethod
    def resolve_status_file_id(cls, status_file_id: int) -> "ControllerRating":
        """
        Resolve a rating from its status file ID.

        Raises:
            ValueError: if the ID is unknown
        """
        try:
            return cls(status_file_id)
        except ValueError:
            raise ValueError(f"unknown controller rating ID {status_file_id}") from None


class FacilityType(Enum):
    """ATC facility types keyed by their status file ID"""
    OBSERVER = (0, "OBS")
    FSS = (1, "FSS")
    DELIVERY = (2, "DEL")
    GROUND = (3, "GND")
    TOWER = (4, "TWR")
    APPROACH_DEPARTURE = (5, "APP")
    CENTER = (6, "CTR")

    def __init__(self, status_file_id: int, short_name: str):
        self.status_file_id = status_file_id
        self.short_name = short_name

    @classmethod
    def resolve_status_file_id(cls, status_file_id: int) -> "FacilityType":
        """
        Resolve a facility type from its status file ID.

        Raises:
            ValueError: if the ID is unknown
        """
        for facility_type in cls:
            if facility_type.status_file_id == status_file_id:
                return facility_type
        raise ValueError(f"unknown facility type ID {status_file_id}")

    @classmethod
    def resolve_short_name(cls, short_name: str) -> Optional["FacilityType"]:
        """Resolve a facility type from its callsign suffix (e.g. TWR); None if unknown"""
        for facility_type in cls:
            if facility_type.short_name == short_name:
                return facility_type
        return None


@dataclass(frozen=True)
class RawSection:
    """All relevant lines of one section, in file order"""
    name: str
    lines: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ClientRecord:
    """
    One line of the CLIENTS or PREFILE section.

    Online pilots, ATC stations and prefiled flight plans share the same
    record layout, so a single class carries all fields; which of them may be
    set depends on effective_role (facility_type and visual_range on
    raw_role). Absent values are represented by the sentinels listed in
    ABSENT_VALUES; use get() for a None-based view. A zero altitude or true
    air speed is reported as 0, never as None.
    """
    # identity
    callsign: str
    member_id: int = -1
    real_name: str = ""

    # roles
    raw_role: ClientRole = ClientRole.UNKNOWN
    effective_role: ClientRole = ClientRole.UNKNOWN

    # position (online only)
    latitude: float = math.nan
    longitude: float = math.nan
    altitude_feet: int = 0
    ground_speed: int = -1
    heading: int = -1

    # ATC only
    served_frequency_khz: int = -1
    facility_type: Optional[FacilityType] = None
    visual_range: int = -1
    controller_message: str = ""
    controller_message_last_updated: Optional[datetime.datetime] = None

    # session
    server_id: Optional[str] = None
    protocol_version: int = -1
    controller_rating: Optional[ControllerRating] = None
    transponder_code_decimal: int = -1
    logon_time: Optional[datetime.datetime] = None

    # flight plan
    aircraft_type: str = ""
    filed_true_air_speed: int = 0
    filed_departure_airport_code: str = ""
    filed_destination_airport_code: str = ""
    filed_alternate_airport_code: str = ""
    raw_filed_altitude: str = ""
    filed_route: str = ""
    flight_plan_remarks: str = ""
    flight_plan_revision: int = -1
    raw_flight_plan_type: str = ""
    raw_departure_time_planned: int = -1
    raw_departure_time_actual: int = -1
    filed_time_enroute: Optional[datetime.timedelta] = None
    filed_time_fuel: Optional[datetime.timedelta] = None
    departure_airport_latitude: float = math.nan
    departure_airport_longitude: float = math.nan
    destination_airport_latitude: float = math.nan
    destination_airport_longitude: float = math.nan

    # QNH (connected pilots only)
    qnh_inch_mercury: float = math.nan
    qnh_hectopascal: int = -1

    @property
    def is_role_reclassified(self) -> bool:
        """Did heuristics assign a role different from the one tagged in the file?"""
        return self.raw_role != self.effective_role

    @property
    def is_serving_frequency(self) -> bool:
        """Is an actual (non-placeholder) frequency being served?"""
        return 0 < self.served_frequency_khz < FREQUENCY_KILOHERTZ_PLACEHOLDER_MINIMUM

    def get(self, name: str) -> Any:
        """
        Get a field value, mapping the field's absence sentinel to None.

        Args:
            name: Field name

        Returns:
            The field value, or None if the field is absent
        """
        value = getattr(self, name)
        return None if _is_absent(name, value) else value

    def to_dict(self) -> Dict[str, Any]:
        """Convert the object to a dictionary, absent values become None"""
        result = {}
        for field in fields(self):
            value = self.get(field.name)
            if isinstance(value, Enum):
                value = value.name
            elif isinstance(value, datetime.datetime):
                value = value.isoformat()
            elif isinstance(value, datetime.timedelta):
                value = int(value.total_seconds() // 60)
            result[field.name] = value
        return result


def _is_absent(name: str, value: Any) -> bool:
    if value is None:
        return True
    sentinel = ABSENT_VALUES.get(name)
    if sentinel is None:
        return False
    if isinstance(sentinel, float) and math.isnan(sentinel):
        return isinstance(value, float) and math.isnan(value)
    return value == sentinel


# Sentinel representing "absent" for each non-Optional field. Fields which are
# Optional (None when absent), the callsign and the roles are not listed.
# altitude_feet and filed_true_air_speed default to 0, which is also a real
# value (sea level, no speed filed yet), so they are always reported as set.
ABSENT_VALUES: Dict[str, Any] = {
    "member_id": -1,
    "real_name": "",
    "latitude": math.nan,
    "longitude": math.nan,
    "ground_speed": -1,
    "heading": -1,
    "served_frequency_khz": -1,
    "visual_range": -1,
    "controller_message": "",
    "protocol_version": -1,
    "transponder_code_decimal": -1,
    "aircraft_type": "",
    "filed_departure_airport_code": "",
    "filed_destination_airport_code": "",
    "filed_alternate_airport_code": "",
    "raw_filed_altitude": "",
    "filed_route": "",
    "flight_plan_remarks": "",
    "flight_plan_revision": -1,
    "raw_flight_plan_type": "",
    "raw_departure_time_planned": -1,
    "raw_departure_time_actual": -1,
    "departure_airport_latitude": math.nan,
    "departure_airport_longitude": math.nan,
    "destination_airport_latitude": math.nan,
    "destination_airport_longitude": math.nan,
    "qnh_inch_mercury": math.nan,
    "qnh_hectopascal": -1,
}


@dataclass(frozen=True)
class FSDServer:
    """One line of the SERVERS section"""
    server_id: str
    address: str
    location: str
    name: str
    client_connection_allowed: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "server_id": self.server_id,
            "address": self.address,
            "location": self.location,
            "name": self.name,
            "client_connection_allowed": self.client_connection_allowed,
        }


@dataclass(frozen=True)
class VoiceServer:
    """One line of the VOICE SERVERS section"""
    address: str
    location: str
    name: str
    client_connection_allowed: bool
    raw_server_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "location": self.location,
            "name": self.name,
            "client_connection_allowed": self.client_connection_allowed,
            "raw_server_type": self.raw_server_type,
        }


@dataclass(frozen=True)
class DataFileMetaData:
    """Information from the GENERAL section"""
    version_format: int = -1
    timestamp: Optional[datetime.datetime] = None
    number_of_connected_clients: int = -1
    minimum_data_file_retrieval_interval: Optional[datetime.timedelta] = None
    minimum_atis_retrieval_interval: Optional[datetime.timedelta] = None

    def to_dict(self) -> Dict[str, Any]:
        def minutes(interval: Optional[datetime.timedelta]) -> Optional[int]:
            return None if interval is None else int(interval.total_seconds() // 60)

        return {
            "version_format": self.version_format if self.version_format >= 0 else None,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "number_of_connected_clients": (
                self.number_of_connected_clients if self.number_of_connected_clients >= 0 else None
            ),
            "minimum_data_file_retrieval_interval_minutes": minutes(self.minimum_data_file_retrieval_interval),
            "minimum_atis_retrieval_interval_minutes": minutes(self.minimum_atis_retrieval_interval),
        }


@dataclass(frozen=True)
class ParsedDocument:
    """Everything parsed from one status file"""
    metadata: DataFileMetaData
    client_records: Tuple[ClientRecord, ...] = ()
    server_records: Tuple[FSDServer, ...] = ()
    voice_server_records: Tuple[VoiceServer, ...] = ()
    faults: Tuple[ParseFault, ...] = ()

    @property
    def fatal_faults(self) -> Tuple[ParseFault, ...]:
        return tuple(fault for fault in self.faults if fault.is_fatal)

    @property
    def advisory_faults(self) -> Tuple[ParseFault, ...]:
        return tuple(fault for fault in self.faults if not fault.is_fatal)


