"""
Parser for CLIENTS and PREFILE records of VATSIM data.txt status files.

Both sections share the same 41-field record layout for online pilots, ATC
stations and prefiled flight plans. Which fields may be filled depends on the
role of the record, so every field is validated against that role. The role
tagged in the file is not always reliable and is corrected by a heuristic
before validation:

- some clients (presumably after simulator crashes) are listed in the online
  section without any client type
- clients logged in as ATC are sometimes actually flying (seen with OBS and
  SUP ratings), which the network apparently does not prevent
"""

import datetime
import logging
import math
from dataclasses import dataclass
from typing import Optional

from .faults import FieldViolationError, MalformedLineError
from .grammar import ClientField, ClientFields, LineGrammar, grammar as default_grammar
from .models import ClientRecord, ClientRole, ControllerRating, FacilityType
from ..config.constants import (
    CLIENT_TYPE_ATC,
    CLIENT_TYPE_PILOT,
    CONTROLLER_MESSAGE_LINEBREAKS,
    DEFAULT_ALTITUDE,
    DUMMY_TIMESTAMP,
    FREQUENCY_KILOHERTZ_PLACEHOLDER_MINIMUM,
    LINEBREAK,
    SECTION_CLIENTS,
    SECTION_PREFILE,
    TIMESTAMP_FORMAT,
)

logger = logging.getLogger("vatsim_status.client_parser")

# Fields only a connected pilot fills; any of them being set reveals a flying client.
PILOT_INDICATOR_FIELDS = (
    ClientField.HEADING,
    ClientField.GROUND_SPEED,
    ClientField.QNH_INCH_MERCURY,
    ClientField.QNH_HECTOPASCAL,
    ClientField.TRANSPONDER,
)


@dataclass(frozen=True)
class RoleContext:
    """Roles determined for a single line"""
    raw_role: ClientRole
    effective_role: ClientRole

    @property
    def is_online(self) -> bool:
        return self.effective_role.is_online

    @property
    def is_role_changed(self) -> bool:
        return self.raw_role != self.effective_role

    @property
    def changed_onlineness(self) -> bool:
        """Did the heuristic move the record between online and offline?"""
        return self.raw_role.is_online != self.effective_role.is_online

    @property
    def is_atc(self) -> bool:
        return self.effective_role == ClientRole.ATC_CONNECTED

    @property
    def is_connected_pilot(self) -> bool:
        return self.effective_role == ClientRole.PILOT_CONNECTED

    @property
    def is_prefiling(self) -> bool:
        return self.effective_role == ClientRole.PILOT_PREFILED


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def parse_int(field_name: str, s: str) -> int:
    try:
        return int(s)
    except ValueError:
        raise FieldViolationError(field_name, f"not an integer: \"{s}\"") from None


def parse_int_with_default(s: str, default: int) -> int:
    try:
        return int(s)
    except ValueError:
        return default


def parse_float(field_name: str, s: str) -> float:
    """Parse a floating number; empty strings yield NaN"""
    if not s:
        return math.nan
    try:
        return float(s)
    except ValueError:
        raise FieldViolationError(field_name, f"not a number: \"{s}\"") from None


def is_empty_or_dummy_timestamp(s: str) -> bool:
    return not s or s == DUMMY_TIMESTAMP


def parse_timestamp(field_name: str, s: str) -> datetime.datetime:
    try:
        parsed = datetime.datetime.strptime(s, TIMESTAMP_FORMAT)
    except ValueError:
        raise FieldViolationError(field_name, f"invalid timestamp \"{s}\"") from None
    return parsed.replace(tzinfo=datetime.timezone.utc)


def decode_controller_message(s: str) -> str:
    """Translate the status file's line break token to actual line breaks"""
    for token in CONTROLLER_MESSAGE_LINEBREAKS:
        s = s.replace(token, LINEBREAK)
    return s


class ClientRecordParser:
    """
    Parses single lines of the CLIENTS or PREFILE section to ClientRecords.

    The section is fixed at construction time; parsing both sections requires
    two instances. Instances hold no mutable state and may be shared between
    threads.
    """

    def __init__(self, is_prefile_section: bool = False, grammar: Optional[LineGrammar] = None):
        """
        Args:
            is_prefile_section: True to parse PREFILE lines, False for CLIENTS
            grammar: Tokenizer to use (default: shared module instance)
        """
        self._is_prefile_section = bool(is_prefile_section)
        self._grammar = grammar or default_grammar

    @property
    def is_prefile_section(self) -> bool:
        return self._is_prefile_section

    @property
    def section_name(self) -> str:
        return SECTION_PREFILE if self._is_prefile_section else SECTION_CLIENTS

    def parse(self, line: str) -> ClientRecord:
        """
        Parse a line to a ClientRecord.

        Args:
            line: A single line of the section; must not be empty or a comment

        Returns:
            ClientRecord: All fields of the line, validated against its role

        Raises:
            MalformedLineError: if the line does not match the record syntax
            FieldViolationError: on the first field breaking the rules for the role
        """
        fields = self._grammar.match(line)
        if fields is None:
            raise MalformedLineError(line, self.section_name)

        roles = self.determine_roles(fields)
        if roles.is_role_changed:
            logger.debug(f"{fields[ClientField.CALLSIGN]}: role changed from "
                         f"{roles.raw_role.name} to {roles.effective_role.name}")

        return ClientRecord(
            callsign=self._parse_callsign(fields),
            member_id=parse_int_with_default(fields[ClientField.MEMBER_ID], -1),
            real_name=fields[ClientField.REAL_NAME],
            raw_role=roles.raw_role,
            effective_role=roles.effective_role,
            served_frequency_khz=self._parse_served_frequency(fields[ClientField.FREQUENCY], roles),
            latitude=self._parse_online_coordinate("latitude", fields[ClientField.LATITUDE], roles),
            longitude=self._parse_online_coordinate("longitude", fields[ClientField.LONGITUDE], roles),
            altitude_feet=self._parse_online_altitude(fields[ClientField.ALTITUDE], roles),
            ground_speed=self._parse_ground_speed(fields[ClientField.GROUND_SPEED], roles),
            aircraft_type=fields[ClientField.PLANNED_AIRCRAFT],
            filed_true_air_speed=parse_int_with_default(fields[ClientField.PLANNED_TAS_CRUISE], 0),
            filed_departure_airport_code=fields[ClientField.PLANNED_DEPARTURE_AIRPORT],
            raw_filed_altitude=fields[ClientField.PLANNED_ALTITUDE],
            filed_destination_airport_code=fields[ClientField.PLANNED_DESTINATION_AIRPORT],
            server_id=self._filter_server_id(fields[ClientField.SERVER], roles),
            protocol_version=self._parse_protocol_version(fields[ClientField.PROTOCOL_REVISION], roles),
            controller_rating=self._parse_controller_rating(fields[ClientField.RATING], roles),
            transponder_code_decimal=self._parse_transponder_code(fields[ClientField.TRANSPONDER], roles),
            facility_type=self._parse_facility_type(fields[ClientField.FACILITY_TYPE], roles),
            visual_range=self._parse_visual_range(fields[ClientField.VISUAL_RANGE], roles),
            flight_plan_revision=self._parse_flight_plan_revision(fields[ClientField.PLANNED_REVISION], roles),
            raw_flight_plan_type=fields[ClientField.PLANNED_FLIGHT_TYPE],
            raw_departure_time_planned=parse_int_with_default(fields[ClientField.PLANNED_DEPARTURE_TIME], -1),
            raw_departure_time_actual=parse_int_with_default(
                fields[ClientField.PLANNED_ACTUAL_DEPARTURE_TIME], -1),
            filed_time_enroute=self._parse_duration(
                "time enroute",
                fields[ClientField.PLANNED_HOURS_ENROUTE],
                fields[ClientField.PLANNED_MINUTES_ENROUTE],
                is_mandatory=roles.is_prefiling,
            ),
            filed_time_fuel=self._parse_duration(
                "time fuel",
                fields[ClientField.PLANNED_HOURS_FUEL],
                fields[ClientField.PLANNED_MINUTES_FUEL],
                is_mandatory=roles.is_prefiling,
            ),
            filed_alternate_airport_code=fields[ClientField.PLANNED_ALTERNATE_AIRPORT],
            flight_plan_remarks=fields[ClientField.PLANNED_REMARKS],
            filed_route=fields[ClientField.PLANNED_ROUTE],
            departure_airport_latitude=parse_float(
                "departure airport latitude", fields[ClientField.PLANNED_DEPARTURE_AIRPORT_LATITUDE]),
            departure_airport_longitude=parse_float(
                "departure airport longitude", fields[ClientField.PLANNED_DEPARTURE_AIRPORT_LONGITUDE]),
            destination_airport_latitude=parse_float(
                "destination airport latitude", fields[ClientField.PLANNED_DESTINATION_AIRPORT_LATITUDE]),
            destination_airport_longitude=parse_float(
                "destination airport longitude", fields[ClientField.PLANNED_DESTINATION_AIRPORT_LONGITUDE]),
            controller_message=self._parse_controller_message(fields[ClientField.ATIS_MESSAGE], roles),
            controller_message_last_updated=self._parse_controller_message_last_updated(
                fields[ClientField.TIME_LAST_ATIS_RECEIVED], roles),
            logon_time=self._parse_logon_time(fields[ClientField.TIME_LOGON], roles),
            heading=self._parse_heading(fields[ClientField.HEADING], roles),
            qnh_inch_mercury=self._parse_qnh_inch_mercury(fields[ClientField.QNH_INCH_MERCURY], roles),
            qnh_hectopascal=self._parse_qnh_hectopascal(fields[ClientField.QNH_HECTOPASCAL], roles),
        )

    # roles

    def parse_raw_role(self, client_type: str) -> ClientRole:
        """Role as tagged by the literal client type field in this section"""
        if not self._is_prefile_section:
            if client_type == CLIENT_TYPE_PILOT:
                return ClientRole.PILOT_CONNECTED
            if client_type == CLIENT_TYPE_ATC:
                return ClientRole.ATC_CONNECTED
        elif client_type == "":
            return ClientRole.PILOT_PREFILED

        return ClientRole.UNKNOWN

    def determine_roles(self, fields: ClientFields) -> RoleContext:
        raw_role = self.parse_raw_role(fields[ClientField.CLIENT_TYPE])
        effective_role = raw_role

        if not self._is_prefile_section:
            has_pilot_data = not all(fields.is_zero_or_empty(field) for field in PILOT_INDICATOR_FIELDS)
            if has_pilot_data:
                effective_role = ClientRole.PILOT_CONNECTED

        return RoleContext(raw_role=raw_role, effective_role=effective_role)

    # identity

    def _parse_callsign(self, fields: ClientFields) -> str:
        callsign = fields[ClientField.CALLSIGN]
        if not callsign.strip():
            raise FieldViolationError("callsign", "callsign is mandatory")
        return callsign

    # position

    def _parse_online_coordinate(self, field_name: str, s: str, roles: RoleContext) -> float:
        if roles.is_online:
            return parse_float(field_name, s)

        if s in ("", "0"):
            return math.nan

        raise FieldViolationError(
            field_name,
            f"client is not online but still provides a geo coordinate \"{s}\""
        )

    def _parse_online_altitude(self, s: str, roles: RoleContext) -> int:
        altitude = parse_int_with_default(s, DEFAULT_ALTITUDE)

        if not roles.is_online and altitude != DEFAULT_ALTITUDE:
            raise FieldViolationError(
                "altitude",
                f"client is not online (prefiled flight plan?) but still defines altitude \"{s}\""
            )

        return altitude

    def _parse_ground_speed(self, s: str, roles: RoleContext) -> int:
        """Only connected pilots move; everyone else gets -1 and must not report more than 0"""
        ground_speed = parse_int_with_default(s, -1)

        if roles.is_connected_pilot:
            return ground_speed if ground_speed > 0 else -1

        if ground_speed > 0:
            raise FieldViolationError(
                "ground speed",
                f"{roles.effective_role.name} must not have a ground speed greater zero (was: \"{s}\")"
            )

        return -1

    def _parse_heading(self, s: str, roles: RoleContext) -> int:
        if not s:
            return -1

        # zero is a harmless default seen on all kinds of clients
        if not roles.is_connected_pilot and s != "0":
            raise FieldViolationError("heading", "heading is only allowed to be set by connected pilots")

        heading = parse_int("heading", s)
        if heading == 360:
            heading = 0
        elif heading > 359:
            raise FieldViolationError("heading", f"heading is out of range: \"{s}\"")

        return heading

    # ATC

    def _parse_served_frequency(self, s: str, roles: RoleContext) -> int:
        """
        Convert a frequency in MHz to kHz. Frequencies below the placeholder
        range count as being served, which only ATC stations may do.
        """
        if not s:
            return -1

        frequency_mhz = parse_float("frequency", s)
        if not math.isfinite(frequency_mhz):
            raise FieldViolationError("frequency", f"frequency is out of range: \"{s}\"")

        frequency_khz = round_half_up(frequency_mhz * 1000.0)
        if frequency_khz <= 0:
            raise FieldViolationError(
                "frequency",
                f"served frequency is given as \"{s}\" which does not make any sense"
            )

        # TODO: only ATC serving a frequency is an assumption, verify against recent files
        is_served = frequency_khz < FREQUENCY_KILOHERTZ_PLACEHOLDER_MINIMUM
        if is_served and not roles.is_atc:
            raise FieldViolationError(
                "frequency",
                f"serving a frequency is not allowed but still encountered \"{s}\" as being served by client"
            )

        return frequency_khz

    def _parse_facility_type(self, s: str, roles: RoleContext) -> Optional[FacilityType]:
        """Facility types are checked against the raw role; only stations logged in as ATC have one"""
        if roles.raw_role == ClientRole.ATC_CONNECTED:
            if not s:
                return None
            facility_id = parse_int("facility type", s)
            try:
                return FacilityType.resolve_status_file_id(facility_id)
            except ValueError as e:
                raise FieldViolationError("facility type", str(e)) from e

        if s in ("", "0"):
            return None

        raise FieldViolationError(
            "facility type",
            f"only ATC stations are allowed to list a facility type but type was: \"{s}\""
        )

    def _parse_visual_range(self, s: str, roles: RoleContext) -> int:
        """
        Visual ranges are checked against the raw role. Connected pilots may
        send one but it is meaningless for them and gets dropped.
        """
        if roles.raw_role == ClientRole.ATC_CONNECTED:
            return parse_int("visual range", s) if s else -1

        if roles.raw_role == ClientRole.PILOT_CONNECTED or s in ("", "0"):
            return -1

        raise FieldViolationError(
            "visual range",
            f"only ATC stations are allowed to indicate a visual range; found: \"{s}\""
        )

    def _parse_controller_message(self, s: str, roles: RoleContext) -> str:
        if s and not roles.is_atc:
            raise FieldViolationError("controller message", f"controller message is not allowed but was: \"{s}\"")

        return decode_controller_message(s)

    def _parse_controller_message_last_updated(self, s: str,
                                               roles: RoleContext) -> Optional[datetime.datetime]:
        if is_empty_or_dummy_timestamp(s):
            return None

        if roles.is_prefiling:
            raise FieldViolationError(
                "controller message last updated",
                f"timestamp is not allowed but was \"{s}\""
            )

        timestamp = parse_timestamp("controller message last updated", s)

        # ATC logins reclassified as pilots keep their ATIS timestamp; drop it
        return timestamp if roles.is_atc else None

    # session

    def _filter_server_id(self, s: str, roles: RoleContext) -> Optional[str]:
        """
        Online clients are expected to have a server ID, offline clients not.
        The expectation is not enforced if the role heuristic changed the
        online state of the record.
        """
        has_server_id = bool(s)

        if roles.is_online != has_server_id and not roles.changed_onlineness:
            raise FieldViolationError(
                "server id",
                f"client is {'' if roles.is_online else 'not '}online but has "
                f"{'a' if has_server_id else 'no'} server ID assigned: \"{s}\""
            )

        if not roles.is_online or not has_server_id:
            return None

        return s

    def _parse_protocol_version(self, s: str, roles: RoleContext) -> int:
        """Same expectation as for server IDs; offline clients may show 0 instead of nothing"""
        has_protocol_version = bool(s) if roles.is_online else s not in ("", "0")

        if roles.is_online != has_protocol_version and not roles.changed_onlineness:
            raise FieldViolationError(
                "protocol version",
                f"client is {'' if roles.is_online else 'not '}online but indicates "
                f"{'a' if has_protocol_version else 'no'} protocol revision: \"{s}\""
            )

        if not roles.is_online:
            return -1

        return parse_int_with_default(s, -1)

    def _parse_controller_rating(self, s: str, roles: RoleContext) -> Optional[ControllerRating]:
        """Only prefiled flight plans go without a rating; connected pilots are always observers"""
        if roles.is_prefiling:
            if s not in ("", "0"):
                raise FieldViolationError(
                    "controller rating",
                    f"prefiled flight plans are not expected to indicate any controller rating but rating is \"{s}\""
                )
            return None

        if not s:
            raise FieldViolationError("controller rating", "controller rating is missing")

        try:
            rating = ControllerRating.resolve_status_file_id(int(s))
        except ValueError as e:
            raise FieldViolationError("controller rating", str(e)) from e

        if roles.is_connected_pilot and rating != ControllerRating.OBS:
            raise FieldViolationError(
                "controller rating",
                "connected pilots are not expected to indicate any controller rating "
                f"except observer/pilot but actual rating is \"{s}\""
            )

        return rating

    def _parse_transponder_code(self, s: str, roles: RoleContext) -> int:
        if not s:
            return -1

        if not roles.is_connected_pilot and s != "0":
            raise FieldViolationError(
                "transponder code",
                f"only connected pilots are allowed to list a transponder code but code was: \"{s}\""
            )

        return parse_int("transponder code", s)

    def _parse_logon_time(self, s: str, roles: RoleContext) -> Optional[datetime.datetime]:
        if is_empty_or_dummy_timestamp(s):
            if roles.is_online:
                raise FieldViolationError("logon time", "logon time is mandatory for online clients")
            return None

        if not roles.is_online:
            raise FieldViolationError("logon time", f"timestamp is not allowed but was \"{s}\"")

        return parse_timestamp("logon time", s)

    # flight plan

    def _parse_flight_plan_revision(self, s: str, roles: RoleContext) -> int:
        if not s:
            if roles.is_prefiling:
                raise FieldViolationError("flight plan revision", "flight plan was prefiled but is missing revision")
            return -1

        return parse_int("flight plan revision", s)

    def _parse_duration(self, field_name: str, hours_string: str, minutes_string: str,
                        is_mandatory: bool) -> Optional[datetime.timedelta]:
        """
        Combine hours and minutes to a duration. Minutes above 59 are valid
        and simply add up.
        """
        empty_hours = not hours_string
        empty_minutes = not minutes_string

        if empty_hours != empty_minutes:
            raise FieldViolationError(
                field_name,
                f"either hours (\"{hours_string}\") or minutes (\"{minutes_string}\") was empty "
                "but not the other; such inconsistency is not allowed"
            )

        if empty_hours:
            if is_mandatory:
                raise FieldViolationError(field_name, "hours and minutes are mandatory but both were empty")
            return None

        hours = parse_int(field_name, hours_string)
        minutes = parse_int(field_name, minutes_string)

        # Negative values can be entered. Use the same sign for both parts so a
        # mix cannot add up to a small positive duration that looks plausible.
        if hours < 0 and minutes > 0:
            minutes = -minutes
        elif hours > 0 and minutes < 0:
            hours = -hours

        try:
            return datetime.timedelta(minutes=hours * 60 + minutes)
        except OverflowError:
            raise FieldViolationError(
                field_name,
                f"duration of {hours_string} hours and {minutes_string} minutes is out of range"
            ) from None

    # QNH

    def _parse_qnh_inch_mercury(self, s: str, roles: RoleContext) -> float:
        if roles.is_connected_pilot:
            return parse_float("QNH inch mercury", s)

        if s not in ("", "0"):
            value = parse_float("QNH inch mercury", s)
            if value != 0.0:
                raise FieldViolationError("QNH inch mercury", f"expected QNH inch mercury to be absent but was {s}")

        return math.nan

    def _parse_qnh_hectopascal(self, s: str, roles: RoleContext) -> int:
        qnh = parse_int_with_default(s, -1)

        if not roles.is_connected_pilot:
            if qnh > 0:
                raise FieldViolationError("QNH hectopascal", f"expected QNH hectopascal to be absent but was {s}")
            return -1

        return qnh


# Ready-to-use parsers for both sections
online_client_parser = ClientRecordParser(is_prefile_section=False)
prefile_client_parser = ClientRecordParser(is_prefile_section=True)
