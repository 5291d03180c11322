"""Shared fixtures for CLI tests."""

from argparse import Namespace

import pytest


@pytest.fixture
def cli_wiki(wiki, monkeypatch):
    """Route every CLI store through the in-memory wiki."""
    monkeypatch.setattr("markban.cli._common.make_store", lambda args: wiki.store())
    return wiki


def _args(**kwargs):
    """Namespace with the common options filled in."""
    kwargs.setdefault("path", "sprint")
    kwargs.setdefault("json", False)
    kwargs.setdefault("url", None)
    kwargs.setdefault("config", None)
    return Namespace(**kwargs)
