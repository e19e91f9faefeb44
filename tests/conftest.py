"""
Shared fixtures for the image processor tests.

The MongoDB collection is replaced by an in-memory fake implementing the motor
calls the application makes; the upload directory is a per-test ``tmp_path``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple
from unittest.mock import AsyncMock, Mock

import pymongo
import pytest
from bson import ObjectId
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pymongo.results import InsertOneResult

from imageproc.app import create_app
from imageproc.config import Config
from imageproc.db.session import get_db, get_images_collection


class FakeCursor:
    def __init__(self, documents: Iterable[Dict[str, Any]]):
        self._documents = list(documents)

    def sort(self, keys: List[Tuple[str, int]]) -> "FakeCursor":
        # stable sorts applied from the least significant key
        for key, direction in reversed(keys):
            self._documents.sort(key=lambda d: d[key], reverse=direction == pymongo.DESCENDING)
        return self

    def __aiter__(self):
        self._iter = iter(self._documents)
        return self

    async def __anext__(self) -> Dict[str, Any]:
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration


class FakeCollection:
    """In-memory stand-in for ``AsyncIOMotorCollection``."""

    def __init__(self):
        self.documents: List[Dict[str, Any]] = []

    async def insert_one(self, document: Dict[str, Any]) -> InsertOneResult:
        document.setdefault("_id", ObjectId())
        self.documents.append(dict(document))
        return InsertOneResult(document["_id"], acknowledged=True)

    def find(self, _filter: Optional[Dict[str, Any]] = None) -> FakeCursor:
        return FakeCursor(dict(d) for d in self.documents)

    async def find_one_and_delete(self, filter_: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for idx, document in enumerate(self.documents):
            if document["_id"] == filter_["_id"]:
                return self.documents.pop(idx)
        return None


@pytest.fixture
def images_collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def mongo_db():
    db = Mock()
    db.command = AsyncMock(return_value={"ok": 1.0})
    return db


@pytest.fixture
def app(tmp_path, images_collection, mongo_db) -> FastAPI:
    app = create_app(Config(UPLOAD_DIR=tmp_path / "uploads"))
    app.dependency_overrides[get_images_collection] = lambda: images_collection
    app.dependency_overrides[get_db] = lambda: mongo_db
    return app


@pytest.fixture
def upload_dir(app):
    return app.state.config.UPLOAD_DIR


@pytest.fixture
def client(app) -> TestClient:
    # no context manager: the lifespan (and its Mongo connection) is not started
    return TestClient(app)


@pytest.fixture
def png_bytes() -> bytes:
    return b"\x89PNG\r\n\x1a\n" + bytes(range(256)) * 4


@pytest.fixture
def upload(client, png_bytes):
    def _upload(name: str = "cat.png", content: bytes = png_bytes):
        return client.post("/upload", files={"image": (name, content, "image/png")})

    return _upload
