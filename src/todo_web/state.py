"""View state held by the client.

Beginner terms used in this file:
- Union type: a value that is exactly one of several shapes (here, "not editing" or "editing").
- Frozen dataclass: an immutable record; changing state means building a new one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel

NotificationLevel = Literal["success", "info", "warning", "error"]


class TodoItem(BaseModel):
    """Client-side copy of one todo as returned by the API."""

    id: str
    text: str
    completed: bool = False


@dataclass(frozen=True)
class NotEditing:
    """No task is in edit mode."""


@dataclass(frozen=True)
class Editing:
    """Exactly one task is in edit mode, with its editable text buffer."""

    todo_id: str
    buffer: str


# At most one edit target exists because the state can only hold one Editing value.
EditState = NotEditing | Editing

NOT_EDITING = NotEditing()


@dataclass(frozen=True)
class Notification:
    """Transient, dismissible message for the user (a toast in the browser)."""

    level: NotificationLevel
    message: str


@dataclass
class BoardState:
    """Everything the client renders: the cached list plus local input state."""

    todos: list[TodoItem] = field(default_factory=list)
    draft: str = ""
    edit: EditState = NOT_EDITING
    notifications: list[Notification] = field(default_factory=list)

    def find(self, todo_id: str) -> TodoItem | None:
        for todo in self.todos:
            if todo.id == todo_id:
                return todo
        return None

    def replace(self, updated: TodoItem) -> None:
        self.todos = [updated if todo.id == updated.id else todo for todo in self.todos]

    def remove(self, todo_id: str) -> None:
        self.todos = [todo for todo in self.todos if todo.id != todo_id]
