"""
Parse faults and parser exceptions.

Record parsers raise the exceptions defined here; DataFileParser catches
them per line and records a ParseFault in a FaultLog instead, so a single
broken line never stops a file from being parsed.
"""

import threading
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple


class StatusFileError(ValueError):
    """Base class for all errors raised while parsing status file content"""


class MalformedLineError(StatusFileError):
    """A line does not match the syntax expected for its section"""

    def __init__(self, line: str, section: str = ""):
        self.line = line
        self.section = section
        where = f" in section {section}" if section else ""
        super().__init__(f"unparseable line{where}, does not match expected syntax: \"{line}\"")


class FieldViolationError(StatusFileError):
    """A single field of an otherwise well-formed line breaks the format's rules"""

    def __init__(self, field_name: str, reason: str):
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"{field_name}: {reason}")


@dataclass(frozen=True)
class ParseFault:
    """
    A problem encountered while parsing.

    Fatal faults mean the referenced line has been dropped. Advisory faults
    concern the whole file (raw_line is None) and did not cause any data to be
    discarded.
    """
    section: str
    raw_line: Optional[str]
    is_fatal: bool
    message: str
    cause: Optional[BaseException] = None

    def __str__(self) -> str:
        line = f"\"{self.raw_line}\"" if self.raw_line is not None else "none"
        cause = repr(self.cause) if self.cause is not None else "none"
        severity = "FATAL" if self.is_fatal else "ADVISORY"
        return f"[{severity}] {self.message} (section: {self.section}, cause: {cause}, line: {line})"


class FaultLog:
    """
    Append-only collection of ParseFaults, kept in the order they were added.
    """

    def __init__(self):
        self._faults: List[ParseFault] = []
        self._lock = threading.Lock()

    def append(self, fault: ParseFault) -> None:
        """Record a fault"""
        with self._lock:
            self._faults.append(fault)

    def add(self,
            section: str,
            raw_line: Optional[str],
            is_fatal: bool,
            message: str,
            cause: Optional[BaseException] = None) -> ParseFault:
        """
        Create and record a fault.

        Returns:
            ParseFault: The recorded fault
        """
        fault = ParseFault(section=section, raw_line=raw_line, is_fatal=is_fatal,
                           message=message, cause=cause)
        self.append(fault)
        return fault

    def fatal(self) -> Tuple[ParseFault, ...]:
        return tuple(fault for fault in self.snapshot() if fault.is_fatal)

    def advisory(self) -> Tuple[ParseFault, ...]:
        return tuple(fault for fault in self.snapshot() if not fault.is_fatal)

    def snapshot(self) -> Tuple[ParseFault, ...]:
        """Get all faults recorded so far"""
        with self._lock:
            return tuple(self._faults)

    def __iter__(self) -> Iterator[ParseFault]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._faults)
