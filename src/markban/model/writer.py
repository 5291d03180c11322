"""Write boards back into their markdown document."""

from __future__ import annotations

import logging

from markban.ids import TASK_ID_MARKER
from markban.model.formatting import FormattingCache
from markban.models import Board, Column, Task
from markban.parser import BOARD_RE, clean_header, scan_sections, split_lines

logger = logging.getLogger(__name__)


def task_line(task: Task, cache: FormattingCache) -> str:
    """Render one task as a markdown list line."""
    marker, content = "-", task.text
    if task.edited is not None:
        content = task.edited
    else:
        fmt = task.formatting
        if fmt is None or fmt.content != task.text:
            fmt = cache.task_format(task.text)
        if fmt is not None:
            marker, content = fmt.marker, fmt.content

    box = "x" if task.checked else " "
    line = f"{'  ' * task.indent}{marker} [{box}] {content}"
    if task.id and TASK_ID_MARKER not in line:
        line += f" <!-- task-id: {task.id} -->"
    return line


def column_heading(column: Column, occurrence: int, cache: FormattingCache) -> str:
    """Heading text for a column, numbering repeated titles from the second."""
    heading = column.title if occurrence == 1 else f"{column.title} ({occurrence})"
    if column.original_title is None:
        return cache.column_heading(heading) or heading
    return heading


def board_lines(board: Board, cache: FormattingCache) -> list[str]:
    """Render a board section as a list of lines."""
    lines: list[str] = []
    if board.title:
        lines += [f"#### {cache.board_heading(board.title) or board.title}", ""]

    seen: dict[str, int] = {}
    for column in board.columns:
        key = column.title.lower()
        seen[key] = seen.get(key, 0) + 1
        lines.append(f"##### {column_heading(column, seen[key], cache)}")
        lines.extend(task_line(task, cache) for task in column.iter_tasks())
        lines.append("")

    lines.append("")
    return lines


def _match_board(boards: list[Board], title: str, start: int, emitted: set[int]) -> int | None:
    """Index of the first unwritten board from start with exactly this title.

    An empty title picks the next untitled board.
    """
    for i in range(start, len(boards)):
        if id(boards[i]) not in emitted and boards[i].title == title:
            return i
    return None


def serialize(original: str, boards: list[Board], cache: FormattingCache) -> str:
    """Rewrite the board sections of original from the in-memory boards.

    Everything outside board sections is copied through untouched. Boards
    no longer in the model are dropped; boards not found in the text are
    appended at the end.
    """
    lines, newline = split_lines(original)
    out: list[str] = []
    emitted: set[int] = set()
    position = 0

    for section in scan_sections(lines):
        if section.kind != "board":
            out.extend(lines[section.start : section.end])
            continue
        title = clean_header(BOARD_RE.match(lines[section.start]).group(1).strip())
        index = _match_board(boards, title, position, emitted)
        if index is None:
            logger.warning("board %r no longer exists, dropping its section", title)
            continue
        logger.debug("board %r matched model board %d", title, index)
        board = boards[index]
        emitted.add(id(board))
        position = index + 1
        out.extend(board_lines(board, cache))

    if out == [""]:
        out = []
    for board in boards:
        if id(board) not in emitted:
            logger.debug("appending new board %r", board.title)
            emitted.add(id(board))
            if out and out[-1].strip():
                out.append("")
            out.extend(board_lines(board, cache))

    return newline.join(out)
