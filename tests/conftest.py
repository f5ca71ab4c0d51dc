"""Pytest configuration and fixtures."""

import pytest

from link_preview.config import Settings


@pytest.fixture
def settings():
    """Settings built from defaults only, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def make_page():
    """Wrap head markup in a minimal HTML document."""

    def _make(head: str = "", body: str = "<p>Hello</p>") -> str:
        return f"<!DOCTYPE html><html><head>{head}</head><body>{body}</body></html>"

    return _make
