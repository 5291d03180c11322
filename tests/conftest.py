"""Shared fixtures: an in-memory wiki served through httpx.MockTransport."""

import asyncio

import httpx
import pytest

from markban.store import DocumentStore

BASE_URL = "http://wiki.test"

SAMPLE_DOC = """---
title: Sprint
layout: kanban
---
# Sprint notes

Intro paragraph.

#### Work

##### Todo
- [ ] Write docs <!-- task-id: task_1 -->
  - [ ] Outline <!-- task-id: task_2 -->
- [ ] Ship it <!-- task-id: task_3 -->

##### Done
- [x] Plan <!-- task-id: task_4 -->

Footer text.
"""


class FakeWiki:
    """Documents held in a dict, with switches for failures and latency."""

    def __init__(self):
        self.docs: dict[str, str] = {}
        self.fetches: list[str] = []
        self.saves: list[tuple[str, str]] = []
        self.fetch_statuses: list[int] = []
        self.save_status = 200
        self.delay = 0.0

    async def handler(self, request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(self.delay)
        path = request.url.path
        if request.method == "GET" and path.startswith("/api/source/"):
            name = path[len("/api/source/") :]
            self.fetches.append(name)
            if self.fetch_statuses:
                return httpx.Response(self.fetch_statuses.pop(0), text="unavailable")
            if name not in self.docs:
                return httpx.Response(404, text="not found")
            return httpx.Response(200, text=self.docs[name])
        if request.method == "POST" and path.startswith("/api/save/"):
            name = path[len("/api/save/") :]
            if self.save_status != 200:
                return httpx.Response(self.save_status, text="nope")
            text = request.content.decode("utf-8")
            self.saves.append((name, text))
            self.docs[name] = text
            return httpx.Response(200, json={"success": True})
        return httpx.Response(404)

    def store(self, **kwargs) -> DocumentStore:
        kwargs.setdefault("retry_backoff", 0)
        return DocumentStore(BASE_URL, transport=httpx.MockTransport(self.handler), **kwargs)


@pytest.fixture
def wiki():
    wiki = FakeWiki()
    wiki.docs["sprint"] = SAMPLE_DOC
    return wiki


@pytest.fixture
def store(wiki):
    return wiki.store()
