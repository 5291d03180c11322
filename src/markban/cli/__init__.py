"""CLI argument parser and dispatch for markban."""

import argparse

from markban.cli.board import board_add, board_list, board_show
from markban.cli.column import column_add, column_delete, column_move, column_rename
from markban.cli.task import task_add, task_delete, task_move, task_rename, task_toggle
from markban.cli.tasklist import tasklist_toggle


def _add_checked_flags(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--checked", dest="checked", action="store_true", default=None, help="Set checked")
    group.add_argument("--unchecked", dest="checked", action="store_false", default=None, help="Set unchecked")


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--url", help="Wiki base URL (default: from config)")
    common.add_argument("--config", help="Path to config file (default: ~/.config/markban/config.yaml)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="count", default=0, help="More logging (repeat for debug)")

    parser = argparse.ArgumentParser(
        prog="markban",
        description="Markdown-backed kanban boards and task lists",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- board ---
    board_p = nouns.add_parser("board", help="Board operations", parents=[common])
    board_verbs = board_p.add_subparsers(dest="verb")

    board_list_p = board_verbs.add_parser("list", help="List boards", parents=[common])
    board_list_p.add_argument("path", help="Document path")
    board_list_p.set_defaults(func=board_list)

    board_show_p = board_verbs.add_parser("show", help="Show columns and tasks", parents=[common])
    board_show_p.add_argument("path", help="Document path")
    board_show_p.add_argument("board", nargs="?", help="Board title or number (default: all)")
    board_show_p.set_defaults(func=board_show)

    board_add_p = board_verbs.add_parser("add", help="Add a board", parents=[common])
    board_add_p.add_argument("path", help="Document path")
    board_add_p.add_argument("title", help="Board title")
    board_add_p.set_defaults(func=board_add)

    # --- column ---
    col_p = nouns.add_parser("column", help="Column operations", parents=[common])
    col_verbs = col_p.add_subparsers(dest="verb")

    col_add_p = col_verbs.add_parser("add", help="Add a column", parents=[common])
    col_add_p.add_argument("path", help="Document path")
    col_add_p.add_argument("board", help="Board title or number")
    col_add_p.add_argument("name", help="Column name")
    col_add_p.set_defaults(func=column_add)

    col_rename_p = col_verbs.add_parser("rename", help="Rename a column", parents=[common])
    col_rename_p.add_argument("path", help="Document path")
    col_rename_p.add_argument("board", help="Board title or number")
    col_rename_p.add_argument("column", help="Column title or number")
    col_rename_p.add_argument("new_name", help="New column name")
    col_rename_p.set_defaults(func=column_rename)

    col_delete_p = col_verbs.add_parser("delete", help="Delete a column and its tasks", parents=[common])
    col_delete_p.add_argument("path", help="Document path")
    col_delete_p.add_argument("board", help="Board title or number")
    col_delete_p.add_argument("column", help="Column title or number")
    col_delete_p.set_defaults(func=column_delete)

    col_move_p = col_verbs.add_parser("move", help="Move a column", parents=[common])
    col_move_p.add_argument("path", help="Document path")
    col_move_p.add_argument("board", help="Board title or number")
    col_move_p.add_argument("column", help="Column title or number")
    col_move_p.add_argument("--position", type=int, required=True, help="New position (1-indexed)")
    col_move_p.set_defaults(func=column_move)

    # --- task ---
    task_p = nouns.add_parser("task", help="Task operations", parents=[common])
    task_verbs = task_p.add_subparsers(dest="verb")

    task_add_p = task_verbs.add_parser("add", help="Add a task", parents=[common])
    task_add_p.add_argument("path", help="Document path")
    task_add_p.add_argument("board", help="Board title or number")
    task_add_p.add_argument("column", help="Column title or number")
    task_add_p.add_argument("text", help="Task text (markdown)")
    task_add_p.set_defaults(func=task_add)

    task_toggle_p = task_verbs.add_parser("toggle", help="Toggle a task", parents=[common])
    task_toggle_p.add_argument("path", help="Document path")
    task_toggle_p.add_argument("id", help="Task ID")
    _add_checked_flags(task_toggle_p)
    task_toggle_p.set_defaults(func=task_toggle)

    task_rename_p = task_verbs.add_parser("rename", help="Rename a task", parents=[common])
    task_rename_p.add_argument("path", help="Document path")
    task_rename_p.add_argument("id", help="Task ID")
    task_rename_p.add_argument("text", help="New task text (markdown)")
    task_rename_p.set_defaults(func=task_rename)

    task_delete_p = task_verbs.add_parser("delete", help="Delete a task and its subtasks", parents=[common])
    task_delete_p.add_argument("path", help="Document path")
    task_delete_p.add_argument("id", help="Task ID")
    task_delete_p.set_defaults(func=task_delete)

    task_move_p = task_verbs.add_parser("move", help="Move a task", parents=[common])
    task_move_p.add_argument("path", help="Document path")
    task_move_p.add_argument("id", help="Task ID")
    task_move_p.add_argument("--board", required=True, help="Target board title or number")
    task_move_p.add_argument("--column", required=True, help="Target column title or number")
    target = task_move_p.add_mutually_exclusive_group()
    target.add_argument("--onto", help="Make it a subtask of this task ID")
    target.add_argument("--before", help="Insert before this task ID")
    task_move_p.set_defaults(func=task_move)

    # --- tasklist ---
    tl_p = nouns.add_parser("tasklist", help="Plain task-list operations", parents=[common])
    tl_verbs = tl_p.add_subparsers(dest="verb")

    tl_toggle_p = tl_verbs.add_parser("toggle", help="Toggle a checkbox by index", parents=[common])
    tl_toggle_p.add_argument("path", help="Document path")
    tl_toggle_p.add_argument("index", type=int, help="Checkbox index (0-based)")
    _add_checked_flags(tl_toggle_p)
    tl_toggle_p.set_defaults(func=tasklist_toggle)

    return parser
