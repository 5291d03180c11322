"""Edit sessions and the single-flight save coordinator.

A save always fetches the latest markdown, rewrites its board sections from
the in-memory model and posts the result back. Only one save runs at a
time; calls made while it runs share its outcome instead of starting more
I/O.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from markban.model.formatting import FormattingCache
from markban.model.loader import build_cache, extract
from markban.model.task import assign_missing_ids
from markban.model.writer import serialize
from markban.models import Document
from markban.store import DocumentStore

logger = logging.getLogger(__name__)

SAVING = "saving"
SAVED = "saved"
ERROR = "error"

StatusCallback = Callable[[str, Exception | None], None]


class SaveCoordinator:
    """Serialize saves of one document: fetch, render, save.

    Status goes saving -> saved or error and is reported to watchers.
    """

    def __init__(self, store: DocumentStore, doc_path: str, render: Callable[[str], str]):
        self.store = store
        self.doc_path = doc_path
        self.render = render
        self.status: str | None = None
        self.error: Exception | None = None
        self._pending: asyncio.Future | None = None
        self._waiting = 0
        self._watchers: list[StatusCallback] = []

    @property
    def in_progress(self) -> bool:
        return self._pending is not None

    @property
    def queue_length(self) -> int:
        """Number of callers waiting on the save in progress."""
        return self._waiting

    def watch(self, callback: StatusCallback) -> Callable[[], None]:
        """Call callback(status, error) on every status change.

        Returns a function that removes the watcher.
        """
        self._watchers.append(callback)
        return lambda: self._watchers.remove(callback)

    def _set_status(self, status: str, error: Exception | None = None) -> None:
        self.status = status
        self.error = error
        for callback in list(self._watchers):
            callback(status, error)

    async def save_changes(self) -> str:
        """Save the document, or join the save already in progress.

        Returns the markdown that was written. A failure is raised to every
        caller sharing the save.
        """
        if self._pending is not None:
            self._waiting += 1
            try:
                return await asyncio.shield(self._pending)
            finally:
                self._waiting -= 1

        pending = self._pending = asyncio.get_running_loop().create_future()
        self._set_status(SAVING)
        try:
            original = await self.store.fetch_source(self.doc_path)
            text = self.render(original)
            await self.store.save(self.doc_path, text)
        except asyncio.CancelledError:
            pending.cancel()
            self._set_status(ERROR)
            raise
        except Exception as exc:
            pending.set_exception(exc)
            # Mark retrieved so an unwaited failure is not reported twice
            pending.exception()
            self._set_status(ERROR, exc)
            raise
        else:
            pending.set_result(text)
            self._set_status(SAVED)
            logger.info("saved %s", self.doc_path)
            return text
        finally:
            self._pending = None


class BoardSession:
    """One editing session over a document's boards.

    Mutations go through the functions in markban.model on
    session.document; save() writes them back.
    """

    def __init__(self, store: DocumentStore, doc_path: str):
        self.store = store
        self.doc_path = doc_path
        self.document: Document | None = None
        self.cache = FormattingCache()
        self.coordinator = SaveCoordinator(store, doc_path, self.render)
        self.coordinator.watch(self._mirror_status)

    @property
    def status(self) -> str | None:
        return self.coordinator.status

    async def load(self) -> Document:
        """Fetch the document and build the model and formatting cache."""
        text = await self.store.fetch_source(self.doc_path)
        self.document, self.cache = extract(text)
        assigned = assign_missing_ids(self.document)
        if assigned:
            logger.debug("assigned ids to %d tasks in %s", assigned, self.doc_path)
        logger.debug("loaded %s with %d boards", self.doc_path, len(self.document.boards))
        return self.document

    async def refresh_cache(self) -> None:
        """Rebuild the formatting cache from the current stored markdown."""
        text = await self.store.fetch_source(self.doc_path)
        self.cache = build_cache(text)

    def render(self, original: str) -> str:
        """Rewrite original with the session's boards."""
        if self.document is None:
            raise RuntimeError("session has not been loaded")
        if not self.cache:
            self.cache = build_cache(original)
        return serialize(original, self.document.boards, self.cache)

    async def save(self) -> str:
        return await self.coordinator.save_changes()

    def _mirror_status(self, status: str, error: Exception | None) -> None:
        if self.document is None:
            return
        for _, column in self.document.iter_columns():
            column.status = status
