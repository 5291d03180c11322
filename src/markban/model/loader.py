"""Extract boards from markdown text."""

from __future__ import annotations

import logging

from markban.ids import board_id_for, split_task_id
from markban.model.formatting import FormattingCache
from markban.models import Board, Column, Document, Task, TaskFormat
from markban.parser import (
    BOARD_RE,
    COLUMN_RE,
    TASK_RE,
    clean_header,
    parse_front_matter,
    scan_sections,
    split_lines,
    strip_status,
)

logger = logging.getLogger(__name__)


def parse_task(line: str) -> tuple[Task, TaskFormat] | None:
    """Parse a task line into a Task and its original formatting."""
    match = TASK_RE.match(line)
    if not match:
        return None
    indent, marker, box, content = match.groups()
    text, task_id = split_task_id(content)
    fmt = TaskFormat(marker=marker, content=text, indent=indent, task_id=task_id)
    task = Task(
        text=text,
        checked=box in "xX",
        indent=len(indent) // 2,
        id=task_id,
        formatting=fmt,
    )
    return task, fmt


def build_tree(tasks: list[Task]) -> list[Task]:
    """Nest a flat list of indented tasks, returning the roots.

    A task's parent is the nearest preceding task with a strictly smaller
    indent. Each task keeps its own indent value.
    """
    roots: list[Task] = []
    stack: list[Task] = []
    for task in tasks:
        while stack and stack[-1].indent >= task.indent:
            stack.pop()
        if stack:
            stack[-1].children.append(task)
        else:
            roots.append(task)
        stack.append(task)
    return roots


def _parse_board(lines: list[str], start: int, end: int, cache: FormattingCache, board_ids: set[str]) -> Board:
    raw = BOARD_RE.match(lines[start]).group(1)
    title = clean_header(raw)
    cache.add_board(title, strip_status(raw))
    board = Board(title=title, id=board_id_for(title, board_ids))

    column: Column | None = None
    column_heading = ""
    flat: list[Task] = []

    def close_column() -> None:
        if column is not None:
            column.tasks = build_tree(flat)

    for line in lines[start + 1 : end]:
        column_match = COLUMN_RE.match(line)
        if column_match:
            close_column()
            column = Column(title=clean_header(column_match.group(1)))
            column_heading = strip_status(column_match.group(1))
            board.columns.append(column)
            flat = []
            continue
        parsed = parse_task(line)
        if parsed is None:
            continue
        if column is None:
            logger.debug("ignoring task before the first column of %r: %s", board.title, line)
            continue
        task, fmt = parsed
        if not flat:
            cache.add_column(column.title, column_heading)
        flat.append(task)
        cache.add_task(task.text, fmt)
    close_column()

    logger.debug("extracted board %r with %d columns", board.title, len(board.columns))
    return board


def build_cache(text: str) -> FormattingCache:
    """Build a formatting cache from markdown without keeping the model."""
    _, cache = extract(text)
    return cache


def extract(text: str) -> tuple[Document, FormattingCache]:
    """Parse markdown into a Document and the formatting cache of its boards."""
    lines, newline = split_lines(text)
    doc = Document(meta=parse_front_matter(lines), newline=newline)
    cache = FormattingCache()
    board_ids: set[str] = set()
    for section in scan_sections(lines):
        if section.kind == "board":
            doc.boards.append(_parse_board(lines, section.start, section.end, cache, board_ids))
    return doc, cache
