from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from todo_api.app.memory import InMemoryTodoStorage
from todo_api.main import create_app
from todo_api.settings import Settings


@pytest.fixture
def storage() -> InMemoryTodoStorage:
    return InMemoryTodoStorage()


@pytest.fixture
def client(storage: InMemoryTodoStorage) -> Iterator[TestClient]:
    app = create_app(storage=storage, settings_override=Settings(storage_backend="memory"))
    with TestClient(app) as test_client:
        yield test_client
