from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tasklist.main import create_app
from tasklist.settings import Settings, get_settings


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a fresh SQLite file per test."""
    return replace(get_settings(), database_url=f"sqlite:///{tmp_path / 'tasks.db'}")


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    app = create_app(settings)
    yield app
    app.state.repository.dispose()


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest_asyncio.fixture()
async def api(app: FastAPI) -> httpx.AsyncClient:
    """Async HTTP client bound to the API prefix of the in-process app."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver/api") as http:
        yield http
