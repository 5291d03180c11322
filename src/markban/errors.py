"""Exceptions raised by markban."""


class MarkbanError(Exception):
    """Base class for markban errors."""


class StoreError(MarkbanError):
    """A request to the content store failed."""

    def __init__(self, message: str, path: str, status: int | None = None):
        super().__init__(message)
        self.path = path
        self.status = status


class FetchFailure(StoreError):
    """The current markdown could not be read."""


class SaveFailure(StoreError):
    """The serialized markdown could not be written."""


class StructuralMismatch(MarkbanError):
    """A checkbox index does not exist in the current text."""

    def __init__(self, index: int, count: int):
        super().__init__(f"checkbox {index} not found ({count} task list items in document)")
        self.index = index
        self.count = count
