from __future__ import annotations

from todo_api.app.memory import InMemoryTodoStorage
from todo_api.app.models import TodoChanges


def test_list_is_newest_first_and_detached() -> None:
    storage = InMemoryTodoStorage()
    first = storage.create_todo("A")
    second = storage.create_todo("B")

    listed = storage.list_todos()
    assert [todo.id for todo in listed] == [second.id, first.id]

    listed[0].text = "mutated outside"
    assert storage.list_todos()[0].text == "B"


def test_update_applies_only_supplied_fields() -> None:
    storage = InMemoryTodoStorage()
    todo = storage.create_todo("x")

    updated = storage.update_todo(todo.id, TodoChanges(completed=True))

    assert updated is not None
    assert (updated.text, updated.completed) == ("x", True)
    assert storage.update_todo("missing", TodoChanges(text="y")) is None


def test_delete_is_permanent() -> None:
    storage = InMemoryTodoStorage()
    todo = storage.create_todo("gone")

    assert storage.delete_todo(todo.id) is True
    assert storage.delete_todo(todo.id) is False
    assert storage.list_todos() == []
