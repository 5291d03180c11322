"""Line-level scanning of markdown documents with front-matter and boards.

Extraction and serialization both walk a document through scan_sections(),
so they always agree on where a board section starts and stops.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)

BOARD_RE = re.compile(r"^####\s+(.+)$")
COLUMN_RE = re.compile(r"^#####\s+(.+)$")
# Groups: (1) indent, (2) list marker, (3) checkbox char, (4) raw content
TASK_RE = re.compile(r"^(\s*)([-*+])\s+\[([ xX])\]\s+(.+)$")

_FENCE_RE = re.compile(r"^\s*(```|~~~)")
_STATUS = r"saving…|\(Saving\.\.\.\)|\(Saved\)|\(Error saving\)"
_STATUS_RE = re.compile(_STATUS)
_STATUS_SUFFIX_RE = re.compile(rf"(?:\s*(?:{_STATUS}|\+))+\s*$")


@dataclass
class Section:
    """A contiguous run of lines [start, end) with a single role."""

    kind: str  # "front_matter", "text", "code" or "board"
    start: int
    end: int


def split_lines(text: str) -> tuple[list[str], str]:
    """Split text into lines, returning (lines, newline).

    Documents using CRLF keep it so joining the lines gives back the input.
    """
    newline = "\r\n" if "\r\n" in text else "\n"
    return text.split(newline), newline


def front_matter_end(lines: list[str]) -> int:
    """Return the index of the first line after the front-matter block, or 0."""
    if not lines or lines[0].strip() != "---":
        return 0
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            return i + 1
    return 0


def parse_front_matter(lines: list[str]) -> dict:
    """Parse the YAML front-matter block of a document into a dict."""
    end = front_matter_end(lines)
    if not end:
        return {}
    try:
        meta = yaml.safe_load("\n".join(lines[1 : end - 1])) or {}
    except yaml.YAMLError as exc:
        logger.debug("ignoring invalid front-matter: %s", exc)
        return {}
    return meta if isinstance(meta, dict) else {}


def clean_header(text: str) -> str:
    """Strip save-status indicators and add-button residue from a heading."""
    return _STATUS_SUFFIX_RE.sub("", text).strip()


def strip_status(text: str) -> str:
    """Heading text as written, minus any trailing save-status indicators.

    A trailing "+" is only dropped along with a status indicator, so a
    heading such as "C++" is kept whole.
    """
    heading = text.strip()
    cleaned = clean_header(heading)
    if _STATUS_RE.search(heading[len(cleaned) :]):
        return cleaned
    return heading


def is_blank(line: str) -> bool:
    return not line.strip()


def board_section_end(lines: list[str], start: int) -> int:
    """Return the index just past the board section whose heading is at start.

    A board owns the blank lines, column headings and task lines that follow
    its heading. The next board heading or the first line of any other kind
    ends the section.
    """
    i = start + 1
    while i < len(lines):
        line = lines[i]
        if BOARD_RE.match(line):
            break
        if not (is_blank(line) or COLUMN_RE.match(line) or TASK_RE.match(line)):
            break
        i += 1
    return i


def scan_sections(lines: list[str]) -> list[Section]:
    """Partition lines into front-matter, text, fenced code and board sections."""
    sections: list[Section] = []

    def flush(kind: str, start: int, end: int) -> None:
        if end > start:
            sections.append(Section(kind, start, end))

    i = front_matter_end(lines)
    flush("front_matter", 0, i)

    text_start = i
    fence: str | None = None
    while i < len(lines):
        line = lines[i]
        fence_match = _FENCE_RE.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                flush("text", text_start, i)
                text_start = i
                fence = marker
            elif marker == fence:
                flush("code", text_start, i + 1)
                text_start = i + 1
                fence = None
            i += 1
            continue
        if fence is None and BOARD_RE.match(line):
            flush("text", text_start, i)
            end = board_section_end(lines, i)
            flush("board", i, end)
            i = text_start = end
            continue
        i += 1

    flush("code" if fence else "text", text_start, len(lines))
    return sections
