"""Handlers for 'markban task' commands."""

from markban.cli._common import find_board, find_column, find_task, open_session, output_result, run
from markban.model.task import add_task, delete_task, find_task_column, move_task, rename_task, toggle_task


def task_add(args) -> int:
    """Add a task to the top of a column."""
    return run(_task_add(args), args.json)


async def _task_add(args) -> int:
    async with open_session(args) as session:
        board = find_board(session.document, args.board)
        column = find_column(board, args.column)
        task = add_task(column, args.text)
        await session.save()

    output_result(
        {"id": task.id, "text": task.text, "column": column.title},
        f"Added task {task.id} to {column.title}",
        args.json,
    )
    return 0


def task_toggle(args) -> int:
    """Flip or set a task's checkbox."""
    return run(_task_toggle(args), args.json)


async def _task_toggle(args) -> int:
    async with open_session(args) as session:
        task = find_task(session.document, args.id)
        toggle_task(task, args.checked)
        await session.save()

    state = "done" if task.checked else "open"
    output_result({"id": task.id, "checked": task.checked}, f"Task {task.id} is {state}", args.json)
    return 0


def task_rename(args) -> int:
    """Replace a task's text."""
    return run(_task_rename(args), args.json)


async def _task_rename(args) -> int:
    async with open_session(args) as session:
        task = find_task(session.document, args.id)
        rename_task(task, args.text)
        await session.save()

    output_result({"id": task.id, "text": task.text}, f"Renamed task {task.id}", args.json)
    return 0


def task_delete(args) -> int:
    """Delete a task and its subtasks."""
    return run(_task_delete(args), args.json)


async def _task_delete(args) -> int:
    async with open_session(args) as session:
        task = find_task(session.document, args.id)
        removed = sum(1 for _ in task.walk())
        delete_task(find_task_column(session.document, task), task)
        await session.save()

    output_result({"id": task.id, "tasks_removed": removed}, f"Deleted task {task.id} ({removed} tasks)", args.json)
    return 0


def task_move(args) -> int:
    """Move a task, with its subtasks, to a column."""
    return run(_task_move(args), args.json)


async def _task_move(args) -> int:
    async with open_session(args) as session:
        doc = session.document
        task = find_task(doc, args.id)
        board = find_board(doc, args.board)
        column = find_column(board, args.column)
        before = find_task(doc, args.before) if args.before else None
        onto = find_task(doc, args.onto) if args.onto else None
        move_task(doc, task, column, before=before, onto=onto)
        await session.save()

    output_result(
        {"id": task.id, "board": board.title, "column": column.title, "indent": task.indent},
        f"Moved task {task.id} to {column.title}",
        args.json,
    )
    return 0
