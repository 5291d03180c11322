"""Shared test helpers for model tests."""

from markban.models import Board, Column, Document, Task


def _make_task(text, checked=False, indent=0, id=None, children=None):
    """Helper to build a Task with children."""
    return Task(text=text, checked=checked, indent=indent, id=id, children=children or [])


def _make_column(title, tasks=None):
    """Helper to build a Column."""
    return Column(title=title, tasks=tasks or [])


def _make_board(title, columns=None, id=None):
    """Helper to build a Board."""
    return Board(title=title, id=id or title.lower(), columns=columns or [])


def _make_document(boards=None):
    return Document(boards=boards or [])


def _flat(column):
    """(indent, text) pairs for every task in a column, in document order."""
    return [(t.indent, t.text) for t in column.iter_tasks()]
