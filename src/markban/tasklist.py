"""Toggle plain task-list checkboxes outside of boards."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from markban.errors import StructuralMismatch
from markban.parser import scan_sections, split_lines

if TYPE_CHECKING:
    from markban.store import DocumentStore

logger = logging.getLogger(__name__)

CHECKBOX_RE = re.compile(r"^(\s*[-*+]\s+)\[(.| )\]\s+(.*)$")


def _checkbox_lines(lines: list[str]) -> list[int]:
    """Indexes of task-list lines in ordinary text, in document order."""
    found = []
    for section in scan_sections(lines):
        if section.kind != "text":
            continue
        for i in range(section.start, section.end):
            if CHECKBOX_RE.match(lines[i]):
                found.append(i)
    return found


def count_checkboxes(text: str) -> int:
    """Number of task-list items outside front-matter, code and boards."""
    lines, _ = split_lines(text)
    return len(_checkbox_lines(lines))


def toggle_checkbox(text: str, index: int, checked: bool | None = None) -> str:
    """Rewrite the index-th task-list item of text.

    With checked=None the current state is flipped. Every other line is
    left exactly as it was.
    """
    lines, newline = split_lines(text)
    found = _checkbox_lines(lines)
    if index < 0 or index >= len(found):
        raise StructuralMismatch(index, len(found))

    line_no = found[index]
    prefix, box, rest = CHECKBOX_RE.match(lines[line_no]).groups()
    if checked is None:
        checked = box.lower() != "x"
    lines[line_no] = f"{prefix}[{'x' if checked else ' '}] {rest}"
    return newline.join(lines)


class TaskListToggler:
    """Fetch a document, toggle one checkbox and save it straight back."""

    def __init__(self, store: DocumentStore, doc_path: str):
        self.store = store
        self.doc_path = doc_path

    async def toggle(self, index: int, checked: bool | None = None) -> str:
        text = await self.store.fetch_source(self.doc_path)
        updated = toggle_checkbox(text, index, checked)
        await self.store.save(self.doc_path, updated)
        logger.info("toggled checkbox %d in %s", index, self.doc_path)
        return updated
