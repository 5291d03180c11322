"""Handlers for 'markban column' commands."""

from markban.cli._common import find_board, find_column, open_session, output_result, run
from markban.model.column import add_column, delete_column, move_column, rename_column


def column_add(args) -> int:
    """Append a column to a board."""
    return run(_column_add(args), args.json)


async def _column_add(args) -> int:
    async with open_session(args) as session:
        board = find_board(session.document, args.board)
        column = add_column(board, args.name)
        await session.save()

    note = " (duplicate name)" if column.duplicate else ""
    output_result(
        {"board": board.title, "column": column.title, "duplicate": column.duplicate, "status": session.status},
        f"Added column {column.title} to {board.title}{note}",
        args.json,
    )
    return 0


def column_rename(args) -> int:
    """Rename a column."""
    return run(_column_rename(args), args.json)


async def _column_rename(args) -> int:
    async with open_session(args) as session:
        board = find_board(session.document, args.board)
        column = find_column(board, args.column)
        old_title = column.title
        rename_column(board, column, args.new_name)
        await session.save()

    note = " (duplicate name)" if column.duplicate else ""
    output_result(
        {"board": board.title, "old": old_title, "column": column.title, "duplicate": column.duplicate},
        f"Renamed column {old_title} to {column.title}{note}",
        args.json,
    )
    return 0


def column_delete(args) -> int:
    """Delete a column and its tasks."""
    return run(_column_delete(args), args.json)


async def _column_delete(args) -> int:
    async with open_session(args) as session:
        board = find_board(session.document, args.board)
        column = find_column(board, args.column)
        removed = sum(1 for _ in column.iter_tasks())
        delete_column(board, column)
        await session.save()

    output_result(
        {"board": board.title, "column": column.title, "tasks_removed": removed},
        f"Deleted column {column.title} ({removed} tasks)",
        args.json,
    )
    return 0


def column_move(args) -> int:
    """Move a column to a new position."""
    return run(_column_move(args), args.json)


async def _column_move(args) -> int:
    async with open_session(args) as session:
        board = find_board(session.document, args.board)
        column = find_column(board, args.column)
        move_column(board, column, args.position - 1)
        await session.save()

    position = board.columns.index(column) + 1
    output_result(
        {"board": board.title, "column": column.title, "position": position},
        f"Moved column {column.title} to position {position}",
        args.json,
    )
    return 0
