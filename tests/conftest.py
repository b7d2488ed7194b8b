"""Pytest configuration for the Blog API test suite."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from blog_api.app.core.config import Settings
from blog_api.app.core.db import Store
from blog_api.app.main import create_app


@pytest.fixture
def store(tmp_path: Path) -> Store:
    """Provide a store backed by a fresh SQLite file with the schema applied."""
    store = Store(str(tmp_path / "blog.db"))
    store.init_db()
    return store


@pytest.fixture
def app(store: Store) -> FastAPI:
    """Build an application bound to the per-test store."""
    return create_app(Settings(database_url=store.path), store=store)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Yield a test client with the application lifespan running."""
    with TestClient(app) as client:
        yield client
