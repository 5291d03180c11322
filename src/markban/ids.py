"""Task and board ID generation."""

import re
import secrets
import time

# Trailing "<!-- task-id: ID -->" marker on a task line
TASK_ID_RE = re.compile(r"\s*<!--\s*task-id:\s*([A-Za-z0-9_]+)\s*-->\s*$")
TASK_ID_MARKER = "<!-- task-id:"

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def _random_suffix(length: int = 9) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def _millis() -> int:
    return int(time.time() * 1000)


def new_task_id() -> str:
    """Generate a fresh task ID, e.g. "task_1718000000000_k3j9x0a1b"."""
    return f"task_{_millis()}_{_random_suffix()}"


def new_board_id() -> str:
    """Generate a fresh ID for an untitled board."""
    return f"board-{_millis()}-{_random_suffix()}"


def slugify(text: str) -> str:
    """Convert text to a URL-friendly slug."""
    slug = text.lower()
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    slug = slug.strip("-")
    return slug or "untitled"


def unique_id(desired: str, existing: set[str]) -> str:
    """Return desired if unused, otherwise append -2, -3, etc."""
    if desired not in existing:
        return desired
    n = 2
    while f"{desired}-{n}" in existing:
        n += 1
    return f"{desired}-{n}"


def board_id_for(title: str, existing: set[str]) -> str:
    """Derive a board ID from its title, unique among existing IDs.

    Untitled boards get a generated ID. The result is added to existing.
    """
    board_id = unique_id(slugify(title), existing) if title else new_board_id()
    existing.add(board_id)
    return board_id


def split_task_id(content: str) -> tuple[str, str | None]:
    """Split raw task content into (text, task_id).

    "Buy milk <!-- task-id: task_1 -->" -> ("Buy milk", "task_1")
    "Buy milk" -> ("Buy milk", None)
    """
    match = TASK_ID_RE.search(content)
    if not match:
        return content.strip(), None
    return content[: match.start()].strip(), match.group(1)
