"""Data models for markdown-backed boards."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass
class TaskFormat:
    """Original formatting of a task line, captured before any edits."""

    marker: str = "-"
    content: str = ""
    indent: str = ""
    task_id: str | None = None


@dataclass(eq=False)
class Task:
    """A checkbox list item.

    Tasks form a tree through children. Each task keeps its own indent so
    the flat, indented markdown can be written back exactly.
    """

    text: str
    checked: bool = False
    indent: int = 0
    id: str | None = None
    children: list[Task] = field(default_factory=list)
    formatting: TaskFormat | None = None
    edited: str | None = None

    def walk(self) -> Iterator[Task]:
        """Yield this task and all its descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(eq=False)
class Column:
    """An H5 lane inside a board."""

    title: str
    tasks: list[Task] = field(default_factory=list)
    original_title: str | None = None
    duplicate: bool = False
    status: str | None = None

    def iter_tasks(self) -> Iterator[Task]:
        """Yield every task in the column in document order."""
        for task in self.tasks:
            yield from task.walk()


@dataclass(eq=False)
class Board:
    """An H4 section holding columns."""

    title: str = ""
    id: str = ""
    columns: list[Column] = field(default_factory=list)


@dataclass
class Document:
    """A parsed markdown document: front-matter plus its boards."""

    meta: dict[str, Any] = field(default_factory=dict)
    boards: list[Board] = field(default_factory=list)
    newline: str = "\n"

    @property
    def is_kanban(self) -> bool:
        """True when the front-matter asks for the kanban layout."""
        return self.meta.get("layout") == "kanban"

    def iter_columns(self) -> Iterator[tuple[Board, Column]]:
        for board in self.boards:
            for column in board.columns:
                yield board, column
