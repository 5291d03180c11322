"""Document model: extraction, mutation and serialization of boards."""

from markban.model.column import add_board, add_column, delete_column, move_column, rename_column
from markban.model.formatting import FormattingCache
from markban.model.loader import build_cache, extract
from markban.model.task import (
    add_task,
    assign_missing_ids,
    delete_task,
    descendants,
    find_parent,
    find_task,
    find_task_column,
    iter_tasks,
    move_task,
    rename_task,
    toggle_task,
)
from markban.model.writer import serialize

__all__ = [
    "FormattingCache",
    "add_board",
    "add_column",
    "add_task",
    "assign_missing_ids",
    "build_cache",
    "delete_column",
    "delete_task",
    "descendants",
    "extract",
    "find_parent",
    "find_task",
    "find_task_column",
    "iter_tasks",
    "move_column",
    "move_task",
    "rename_column",
    "rename_task",
    "serialize",
    "toggle_task",
]
