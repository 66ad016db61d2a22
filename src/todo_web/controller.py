"""Client behavior: turns user actions into API calls and view-state changes.

Every action either succeeds and updates local state from the server's
response, or fails and leaves local state untouched with one error
notification. Nothing is applied optimistically and nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Protocol

from .api import TodoApiError
from .state import NOT_EDITING, BoardState, Editing, Notification, NotificationLevel, TodoItem

logger = logging.getLogger(__name__)


class TodoApi(Protocol):
    def list_todos(self) -> list[TodoItem]: ...

    def create_todo(self, text: str) -> TodoItem: ...

    def update_todo(
        self,
        todo_id: str,
        *,
        text: str | None = None,
        completed: bool | None = None,
    ) -> TodoItem: ...

    def delete_todo(self, todo_id: str) -> str: ...


class TodoBoard:
    """Single in-memory todo list mirrored from the last successful load."""

    def __init__(self, api: TodoApi, state: BoardState | None = None) -> None:
        self.api = api
        self.state = state or BoardState()

    @property
    def todos(self) -> list[TodoItem]:
        return self.state.todos

    @property
    def notifications(self) -> list[Notification]:
        return self.state.notifications

    def load(self) -> bool:
        try:
            self.state.todos = self.api.list_todos()
        except TodoApiError as exc:
            logger.error("todo_board event=load_failed error=%s", exc)
            self._notify("error", "Failed to load todos")
            return False
        return True

    def set_draft(self, text: str) -> None:
        self.state.draft = text

    def add(self) -> bool:
        if not self.state.draft.strip():
            self._notify("warning", "Please enter a task!")
            return False
        try:
            created = self.api.create_todo(self.state.draft)
        except TodoApiError as exc:
            logger.error("todo_board event=add_failed error=%s", exc)
            self._notify("error", "Failed to add todo")
            return False
        self.state.todos = [*self.state.todos, created]
        self.state.draft = ""
        self._notify("success", "Todo added successfully!")
        return True

    def toggle(self, todo_id: str) -> bool:
        current = self.state.find(todo_id)
        if current is None:
            return False
        try:
            updated = self.api.update_todo(todo_id, completed=not current.completed)
        except TodoApiError as exc:
            logger.error("todo_board event=toggle_failed todo_id=%s error=%s", todo_id, exc)
            self._notify("error", "Failed to update status")
            return False
        self.state.replace(updated)
        self._notify("info", "Todo status updated!")
        return True

    def start_edit(self, todo_id: str) -> bool:
        """Make `todo_id` the edit target; any other unsaved buffer is dropped."""
        current = self.state.find(todo_id)
        if current is None:
            return False
        self.state.edit = Editing(todo_id=todo_id, buffer=current.text)
        return True

    def set_edit_buffer(self, text: str) -> None:
        if isinstance(self.state.edit, Editing):
            self.state.edit = Editing(todo_id=self.state.edit.todo_id, buffer=text)

    def save_edit(self) -> bool:
        edit = self.state.edit
        if not isinstance(edit, Editing):
            return False
        if not edit.buffer.strip():
            self._notify("warning", "Please enter text before saving!")
            return False
        try:
            updated = self.api.update_todo(edit.todo_id, text=edit.buffer)
        except TodoApiError as exc:
            logger.error("todo_board event=edit_failed todo_id=%s error=%s", edit.todo_id, exc)
            self._notify("error", "Failed to update todo")
            return False
        self.state.replace(updated)
        self.state.edit = NOT_EDITING
        self._notify("success", "Todo updated successfully!")
        return True

    def cancel_edit(self) -> None:
        self.state.edit = NOT_EDITING

    def delete(self, todo_id: str) -> bool:
        try:
            self.api.delete_todo(todo_id)
        except TodoApiError as exc:
            logger.error("todo_board event=delete_failed todo_id=%s error=%s", todo_id, exc)
            self._notify("error", "Failed to delete todo")
            return False
        self.state.remove(todo_id)
        self._notify("success", "Todo deleted!")
        return True

    def dismiss(self, index: int) -> None:
        if 0 <= index < len(self.state.notifications):
            del self.state.notifications[index]

    def clear_notifications(self) -> None:
        self.state.notifications.clear()

    def _notify(self, level: NotificationLevel, message: str) -> None:
        self.state.notifications.append(Notification(level=level, message=message))
