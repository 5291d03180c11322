"""Shared helpers for CLI command handlers."""

import asyncio
import json
import sys
from contextlib import asynccontextmanager

from markban.config import read_config
from markban.errors import MarkbanError
from markban.model.task import find_task as lookup_task
from markban.models import Board, Column, Document, Task
from markban.session import BoardSession
from markban.store import DocumentStore


def make_store(args) -> DocumentStore:
    """Build a store from config, with --url taking precedence."""
    config = read_config(args.config)
    if args.url:
        config["base_url"] = args.url
    return DocumentStore.from_config(config)


@asynccontextmanager
async def open_store(args):
    store = make_store(args)
    try:
        yield store
    finally:
        await store.aclose()


@asynccontextmanager
async def open_session(args):
    """Yield a loaded BoardSession for args.path."""
    async with open_store(args) as store:
        session = BoardSession(store, args.path)
        await session.load()
        yield session


def run(coro, json_mode: bool) -> int:
    """Run a handler coroutine, turning failures into an error exit."""
    try:
        return asyncio.run(coro)
    except (MarkbanError, ValueError) as e:
        error(str(e), json_mode)


def _lookup(items: list, ref: str, title_of) -> object | None:
    # A title match wins; all-digit refs fall back to a position.
    for item in items:
        if title_of(item).lower() == ref.lower():
            return item
    if ref.isdigit():
        index = int(ref) - 1
        return items[index] if 0 <= index < len(items) else None
    return None


def find_board(document: Document, ref: str) -> Board:
    """Lookup board by title, then by 1-based index."""
    board = _lookup(document.boards, ref, lambda b: b.title)
    if board is not None:
        return board
    available = [f"  {i}  {b.title or '(untitled)'}" for i, b in enumerate(document.boards, 1)]
    raise ValueError(f"Board '{ref}' not found. Available:\n" + "\n".join(available))


def find_column(board: Board, ref: str) -> Column:
    """Lookup column by title (first match), then by 1-based index."""
    column = _lookup(board.columns, ref, lambda c: c.title)
    if column is not None:
        return column
    available = [f"  {i}  {c.title}" for i, c in enumerate(board.columns, 1)]
    raise ValueError(f"Column '{ref}' not found. Available:\n" + "\n".join(available))


def find_task(document: Document, task_id: str) -> Task:
    """Lookup task by ID."""
    task = lookup_task(document, task_id)
    if task is None:
        raise ValueError(f"Task '{task_id}' not found.")
    return task


def task_to_dict(task: Task) -> dict:
    return {
        "id": task.id,
        "text": task.text,
        "checked": task.checked,
        "children": [task_to_dict(child) for child in task.children],
    }


def column_to_dict(column: Column) -> dict:
    return {
        "title": column.title,
        "status": column.status,
        "tasks": [task_to_dict(task) for task in column.tasks],
    }


def format_task_lines(task: Task, depth: int = 0) -> list[str]:
    """Format a task subtree as indented text lines."""
    box = "x" if task.checked else " "
    lines = [f"{'  ' * (depth + 1)}[{box}] {task.text}  {task.id or ''}".rstrip()]
    for child in task.children:
        lines.extend(format_task_lines(child, depth + 1))
    return lines


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)
