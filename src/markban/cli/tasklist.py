"""Handlers for 'markban tasklist' commands."""

from markban.cli._common import open_store, output_result, run
from markban.tasklist import TaskListToggler


def tasklist_toggle(args) -> int:
    """Toggle a plain task-list checkbox by its 0-based index."""
    return run(_tasklist_toggle(args), args.json)


async def _tasklist_toggle(args) -> int:
    async with open_store(args) as store:
        await TaskListToggler(store, args.path).toggle(args.index, args.checked)

    output_result({"path": args.path, "index": args.index}, f"Toggled checkbox {args.index}", args.json)
    return 0
