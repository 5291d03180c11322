"""Task mutation operations for markdown boards."""

from __future__ import annotations

from collections.abc import Iterator

from markban.ids import new_task_id
from markban.models import Column, Document, Task


def iter_tasks(column: Column) -> Iterator[Task]:
    """Yield every task in a column in document order."""
    return column.iter_tasks()


def descendants(task: Task) -> list[Task]:
    """All tasks nested below task, in document order."""
    return [t for child in task.children for t in child.walk()]


def _containing_list(tasks: list[Task], task: Task) -> list[Task] | None:
    for t in tasks:
        if t is task:
            return tasks
        found = _containing_list(t.children, task)
        if found is not None:
            return found
    return None


def find_task(document: Document, task_id: str) -> Task | None:
    """Find a task anywhere in the document by ID."""
    for _, column in document.iter_columns():
        for task in column.iter_tasks():
            if task.id == task_id:
                return task
    return None


def find_task_column(document: Document, task: Task) -> Column | None:
    """Find the column holding a task."""
    for _, column in document.iter_columns():
        if _containing_list(column.tasks, task) is not None:
            return column
    return None


def find_parent(column: Column, task: Task) -> Task | None:
    """Return the parent of a task, or None for a root task."""
    for candidate in column.iter_tasks():
        if any(child is task for child in candidate.children):
            return candidate
    return None


def assign_missing_ids(document: Document) -> int:
    """Give every task without an ID a fresh one. Returns how many changed."""
    count = 0
    for _, column in document.iter_columns():
        for task in column.iter_tasks():
            if task.id is None:
                task.id = new_task_id()
                count += 1
    return count


def add_task(column: Column, text: str) -> Task:
    """Add a new unchecked root task at the top of a column."""
    text = text.strip()
    if not text:
        raise ValueError("task text cannot be empty")
    task = Task(text=text, id=new_task_id(), edited=text)
    column.tasks.insert(0, task)
    return task


def rename_task(task: Task, new_text: str) -> None:
    """Replace a task's content. The new text is written back verbatim."""
    new_text = new_text.strip()
    if not new_text:
        raise ValueError("task text cannot be empty")
    if new_text == task.text:
        return
    task.text = new_text
    task.edited = new_text


def toggle_task(task: Task, checked: bool | None = None) -> None:
    """Flip a task's checkbox, or set it when checked is given."""
    task.checked = not task.checked if checked is None else checked


def delete_task(column: Column, task: Task) -> None:
    """Remove a task and everything nested below it."""
    container = _containing_list(column.tasks, task)
    if container is None:
        raise ValueError(f"task {task.text!r} is not in column {column.title!r}")
    container.remove(task)


def move_task(
    document: Document,
    task: Task,
    destination: Column,
    before: Task | None = None,
    onto: Task | None = None,
) -> None:
    """Move a task and its subtree to destination.

    With onto, the task becomes the last child of that task. With before, it
    is inserted just ahead of that sibling at the sibling's depth. With
    neither it is appended to the destination's top level. Descendants keep
    their depth relative to the task, never shallower than 1.
    """
    if before is not None and onto is not None:
        raise ValueError("give either before or onto, not both")
    target = before if before is not None else onto
    if target is not None:
        if target is task or any(t is target for t in descendants(task)):
            raise ValueError("cannot move a task relative to itself or its own subtree")
        if _containing_list(destination.tasks, target) is None:
            raise ValueError(f"target task is not in column {destination.title!r}")

    source = find_task_column(document, task)
    if source is None:
        raise ValueError(f"task {task.text!r} is not in this document")
    _containing_list(source.tasks, task).remove(task)

    if onto is not None:
        new_indent = onto.indent + 1
        onto.children.append(task)
    elif before is not None:
        new_indent = before.indent
        siblings = _containing_list(destination.tasks, before)
        siblings.insert(siblings.index(before), task)
    else:
        new_indent = 0
        destination.tasks.append(task)

    delta = new_indent - task.indent
    task.indent = new_indent
    for child in descendants(task):
        child.indent = max(1, child.indent + delta)

    for moved in task.walk():
        if moved.id is None:
            moved.id = new_task_id()
