"""
Splitting of status files into sections.

A status file is a sequence of "!NAME:" headers, each followed by the lines
belonging to that section. Comments (lines starting with ";") and blank
lines may appear anywhere and are skipped.
"""

import logging
import re
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .models import RawSection
from ..config.constants import COMMENT_PREFIX

logger = logging.getLogger("vatsim_status.sections")

SECTION_HEADER_PATTERN = re.compile(r"!([^:]+):")

# Stricter header syntax used when rewriting files: nothing but the header on the line.
SECTION_HEADER_LINE_PATTERN = re.compile(r"\s*!([^:]+):\s*")

# Only CR and LF end lines; str.splitlines() would also split on characters
# such as \x85 which occur in ISO-8859-1 decoded free text.
LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")

# Splits text into content and line terminator while keeping both
CONTENT_SPLIT_PATTERN = re.compile(r"([^\r\n]*)([\r\n]*)")

TextSource = Union[str, Iterable[str]]


def iter_lines(source: TextSource) -> Iterator[str]:
    """
    Iterate over the lines of a text or line source, without line terminators.

    Args:
        source: Complete text or any iterable of lines (e.g. an open file)
    """
    if isinstance(source, str):
        yield from LINE_BREAK_PATTERN.split(source)
        return

    for line in source:
        yield line.rstrip("\r\n")


def is_line_irrelevant(line: str) -> bool:
    """Lines holding only a comment or whitespace carry no data"""
    return line.startswith(COMMENT_PREFIX) or not line.strip()


class SectionMap(Mapping):
    """
    Read-only mapping of section names to RawSections.
    Lookups ignore case, iteration yields names as written in the file.
    """

    def __init__(self, sections: Iterable[RawSection] = ()):
        self._sections: Dict[str, RawSection] = {}
        for section in sections:
            self._sections[section.name.upper()] = section

    def __getitem__(self, name: str) -> RawSection:
        return self._sections[name.upper()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.upper() in self._sections

    def __iter__(self) -> Iterator[str]:
        return (section.name for section in self._sections.values())

    def __len__(self) -> int:
        return len(self._sections)

    def lines(self, name: str) -> Tuple[str, ...]:
        """Get the lines of a section; empty if the section does not exist"""
        section = self._sections.get(name.upper())
        return section.lines if section is not None else ()

    def __repr__(self) -> str:
        return f"SectionMap({list(self._sections.values())!r})"


class SectionSplitter:
    """
    Groups the relevant lines of a status file by section.
    """

    def split(self, source: TextSource) -> SectionMap:
        """
        Split a status file into its sections.

        A header line starts a new, empty section; repeating a section name
        (in any case) starts that section over. Lines before the first header
        are discarded. Malformed lines are kept, validation happens later.

        Args:
            source: Complete file content or an iterable of lines

        Returns:
            SectionMap: Lines of every section in file order
        """
        order: List[str] = []
        names: Dict[str, str] = {}
        lines_by_section: Dict[str, List[str]] = {}
        current: Optional[List[str]] = None
        discarded = 0

        for line in iter_lines(source):
            if is_line_irrelevant(line):
                continue

            match = SECTION_HEADER_PATTERN.match(line)
            if match:
                name = match.group(1)
                key = name.upper()
                if key in lines_by_section:
                    logger.debug(f"Section {name} restarted, dropping {len(lines_by_section[key])} earlier lines")
                    order.remove(key)
                order.append(key)
                names[key] = name
                current = []
                lines_by_section[key] = current
                continue

            if current is None:
                discarded += 1
                continue

            current.append(line)

        if discarded:
            logger.debug(f"Discarded {discarded} lines preceding the first section header")

        return SectionMap(RawSection(names[key], tuple(lines_by_section[key])) for key in order)


class SectionLineProcessor:
    """
    Rewrites lines of selected sections while keeping everything else of a
    file intact, including comments, blank lines and line terminators.
    """

    def __init__(self, text: str):
        """
        Args:
            text: Complete status file content
        """
        # [content, terminator] pairs; content lists are shared with _lines_by_section
        self._lines: List[List[str]] = []
        self._lines_by_section: Dict[str, List[List[str]]] = {}

        section_name = None
        for match in CONTENT_SPLIT_PATTERN.finditer(text):
            content, terminator = match.group(1), match.group(2)

            # the pattern also matches the empty string at the end of input
            if not content and not terminator:
                continue

            entry = [content, terminator]
            self._lines.append(entry)

            if is_line_irrelevant(content):
                continue

            header = SECTION_HEADER_LINE_PATTERN.fullmatch(content)
            if header:
                section_name = header.group(1).strip().upper()
                continue

            if section_name is None:
                continue

            self._lines_by_section.setdefault(section_name, []).append(entry)

    def apply(self, section_name: str, function: Callable[[str], str]) -> "SectionLineProcessor":
        """
        Replace every non-empty, non-comment line of a section by the result
        of the given function.

        Args:
            section_name: Section to rewrite (case-insensitive)
            function: Called with each line's content, returns the new content

        Returns:
            SectionLineProcessor: this instance for chaining

        Raises:
            ValueError: if the section name is empty or function is None
        """
        if not section_name:
            raise ValueError("section name must not be empty")
        if function is None:
            raise ValueError("function must not be None")

        for entry in self._lines_by_section.get(section_name.upper(), []):
            if entry[0]:
                entry[0] = function(entry[0])

        return self

    def result(self) -> str:
        """Get the processed content with all original line terminators"""
        return "".join(content + terminator for content, terminator in self._lines)


# Create a singleton instance of the splitter
splitter = SectionSplitter()
