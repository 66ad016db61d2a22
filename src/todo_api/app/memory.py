"""In-memory storage backend for tests and local demos."""

from __future__ import annotations

import threading
from uuid import uuid4

from .models import Todo, TodoChanges


class InMemoryTodoStorage:
    """Dict-backed implementation with the same contract as PostgresTodoStorage."""

    def __init__(self) -> None:
        # dicts keep insertion order, which doubles as creation order.
        self._todos: dict[str, Todo] = {}
        self._lock = threading.Lock()

    def migrate(self) -> None:
        return None

    def list_todos(self) -> list[Todo]:
        with self._lock:
            return [todo.model_copy() for todo in reversed(self._todos.values())]

    def create_todo(self, text: str) -> Todo:
        todo = Todo(id=uuid4().hex, text=text, completed=False)
        with self._lock:
            self._todos[todo.id] = todo
        return todo.model_copy()

    def update_todo(self, todo_id: str, changes: TodoChanges) -> Todo | None:
        with self._lock:
            current = self._todos.get(todo_id)
            if current is None:
                return None
            updated = current.model_copy(update=changes.as_document())
            self._todos[todo_id] = updated
        return updated.model_copy()

    def delete_todo(self, todo_id: str) -> bool:
        with self._lock:
            return self._todos.pop(todo_id, None) is not None
