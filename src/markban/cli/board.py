"""Handlers for 'markban board' commands."""

from markban.cli._common import (
    column_to_dict,
    find_board,
    format_task_lines,
    open_session,
    output_json,
    output_result,
    run,
)
from markban.model.column import add_board


def board_list(args) -> int:
    """List the boards in a document."""
    return run(_board_list(args), args.json)


async def _board_list(args) -> int:
    async with open_session(args) as session:
        doc = session.document

    items = [
        {
            "index": i,
            "id": board.id,
            "title": board.title,
            "columns": len(board.columns),
            "tasks": sum(1 for c in board.columns for _ in c.iter_tasks()),
        }
        for i, board in enumerate(doc.boards, 1)
    ]
    if args.json:
        output_json(items)
    else:
        for b in items:
            tasks = "task" if b["tasks"] == 1 else "tasks"
            print(f"{b['index']}  {b['title'] or '(untitled)':<20} {b['columns']} columns, {b['tasks']} {tasks}")
    return 0


def board_show(args) -> int:
    """Show columns and tasks of one board, or of every board."""
    return run(_board_show(args), args.json)


async def _board_show(args) -> int:
    async with open_session(args) as session:
        doc = session.document
        boards = [find_board(doc, args.board)] if args.board else doc.boards

    if args.json:
        output_json(
            [
                {"id": b.id, "title": b.title, "columns": [column_to_dict(c) for c in b.columns]}
                for b in boards
            ]
        )
        return 0

    for board in boards:
        print(f"#### {board.title or '(untitled)'}")
        for column in board.columns:
            print(f"  {column.title}")
            for task in column.tasks:
                for line in format_task_lines(task, depth=1):
                    print(line)
    return 0


def board_add(args) -> int:
    """Append a new board to a document."""
    return run(_board_add(args), args.json)


async def _board_add(args) -> int:
    async with open_session(args) as session:
        board = add_board(session.document, args.title)
        await session.save()

    output_result(
        {"id": board.id, "title": board.title, "status": session.status},
        f"Added board {board.title} ({session.status})",
        args.json,
    )
    return 0
