"""Board and column mutation operations."""

from markban.ids import board_id_for
from markban.models import Board, Column, Document


def has_duplicate(board: Board, column: Column) -> bool:
    """True if another column in the board shares this title, ignoring case."""
    key = column.title.lower()
    return any(c is not column and c.title.lower() == key for c in board.columns)


def add_board(document: Document, title: str = "") -> Board:
    """Append a new, empty board to the document.

    Returns the created Board.
    """
    title = title.strip()
    board = Board(title=title, id=board_id_for(title, {b.id for b in document.boards}))
    document.boards.append(board)
    return board


def add_column(board: Board, title: str) -> Column:
    """Append an empty column to a board.

    A title already used in the board is allowed; the column is flagged as
    a duplicate and numbered when written.
    """
    title = title.strip()
    if not title:
        raise ValueError("column title cannot be empty")
    column = Column(title=title)
    board.columns.append(column)
    column.duplicate = has_duplicate(board, column)
    return column


def rename_column(board: Board, column: Column, new_title: str) -> None:
    """Rename a column, remembering the title it was loaded with."""
    new_title = new_title.strip()
    if not new_title or new_title == column.title:
        return
    if column.original_title is None:
        column.original_title = column.title
    column.title = new_title
    column.duplicate = has_duplicate(board, column)


def delete_column(board: Board, column: Column) -> None:
    """Remove a column and all of its tasks."""
    board.columns.remove(column)


def move_column(board: Board, column: Column, new_index: int) -> None:
    """Move column to new_index in the board's column list."""
    columns = list(board.columns)
    columns.remove(column)
    columns.insert(max(0, min(new_index, len(columns))), column)
    board.columns[:] = columns
