"""Original heading and task formatting, captured before edits."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from markdown_it import MarkdownIt

from markban.models import TaskFormat

_md = MarkdownIt("commonmark")
_WS_RE = re.compile(r"\s+")


def normalize_content(content: str) -> str:
    """Reduce inline markdown to its plain text.

    Emphasis, links and code spans are dropped so "**Ship** [it](x)" and
    "Ship it" share a key.
    """
    parts: list[str] = []
    for token in _md.parseInline(content):
        for child in token.children or []:
            if child.type in ("text", "code_inline"):
                parts.append(child.content)
            elif child.type in ("softbreak", "hardbreak"):
                parts.append(" ")
    return _WS_RE.sub(" ", "".join(parts)).strip()


@dataclass
class FormattingCache:
    """Headings and task lines as they appeared in the fetched markdown.

    Keys are lowercased clean titles for headings and normalized content
    for tasks. The cache is read-only while serializing.
    """

    board_headers: dict[str, str] = field(default_factory=dict)
    column_headers: dict[str, str] = field(default_factory=dict)
    tasks: dict[str, TaskFormat] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.board_headers or self.column_headers or self.tasks)

    def add_board(self, title: str, heading: str) -> None:
        if title:
            self.board_headers.setdefault(title.lower(), heading)

    def add_column(self, title: str, heading: str) -> None:
        self.column_headers.setdefault(title.lower(), heading)

    def add_task(self, text: str, fmt: TaskFormat) -> None:
        # Stored under the raw text and the normalized form, first one wins
        self.tasks.setdefault(text, fmt)
        self.tasks.setdefault(normalize_content(text), fmt)

    def board_heading(self, title: str) -> str | None:
        return self.board_headers.get(title.lower())

    def column_heading(self, title: str) -> str | None:
        return self.column_headers.get(title.lower())

    def task_format(self, text: str) -> TaskFormat | None:
        fmt = self.tasks.get(text)
        if fmt is None:
            fmt = self.tasks.get(normalize_content(text))
        return fmt
