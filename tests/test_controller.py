from __future__ import annotations

from todo_web.api import TodoApiError
from todo_web.controller import TodoBoard
from todo_web.state import NOT_EDITING, Editing, Notification, TodoItem


class FakeApi:
    """In-process stand-in for TodoApiClient; flip `fail` to simulate errors."""

    def __init__(self, todos: list[TodoItem] | None = None) -> None:
        self.todos = {todo.id: todo for todo in todos or []}
        self.calls: list[tuple[str, tuple, dict]] = []
        self.fail = False
        self._next_id = 100

    def _record(self, name: str, *args: object, **kwargs: object) -> None:
        self.calls.append((name, args, kwargs))
        if self.fail:
            raise TodoApiError("boom", status_code=500)

    def list_todos(self) -> list[TodoItem]:
        self._record("list")
        return list(self.todos.values())

    def create_todo(self, text: str) -> TodoItem:
        self._record("create", text)
        self._next_id += 1
        todo = TodoItem(id=str(self._next_id), text=text.strip())
        self.todos[todo.id] = todo
        return todo

    def update_todo(
        self,
        todo_id: str,
        *,
        text: str | None = None,
        completed: bool | None = None,
    ) -> TodoItem:
        self._record("update", todo_id, text=text, completed=completed)
        current = self.todos[todo_id]
        changes = {}
        if text is not None:
            changes["text"] = text
        if completed is not None:
            changes["completed"] = completed
        updated = current.model_copy(update=changes)
        self.todos[todo_id] = updated
        return updated

    def delete_todo(self, todo_id: str) -> str:
        self._record("delete", todo_id)
        del self.todos[todo_id]
        return "Todo deleted successfully"


def _loaded_board(*todos: TodoItem) -> tuple[TodoBoard, FakeApi]:
    api = FakeApi(list(todos))
    board = TodoBoard(api)
    assert board.load() is True
    return board, api


def test_load_failure_notifies_and_keeps_empty_list() -> None:
    api = FakeApi([TodoItem(id="1", text="a")])
    api.fail = True
    board = TodoBoard(api)

    assert board.load() is False
    assert board.todos == []
    assert board.notifications == [Notification("error", "Failed to load todos")]


def test_add_blank_draft_warns_without_request() -> None:
    board, api = _loaded_board()
    board.set_draft("   ")

    assert board.add() is False
    assert [name for name, _, _ in api.calls] == ["list"]
    assert board.notifications == [Notification("warning", "Please enter a task!")]


def test_add_appends_server_record_and_clears_draft() -> None:
    board, _ = _loaded_board(TodoItem(id="1", text="old"))
    board.set_draft("new task")

    assert board.add() is True
    assert [todo.text for todo in board.todos] == ["old", "new task"]
    assert board.state.draft == ""
    assert board.notifications[-1].level == "success"


def test_add_failure_keeps_list_and_draft() -> None:
    board, api = _loaded_board()
    api.fail = True
    board.set_draft("will fail")

    assert board.add() is False
    assert board.todos == []
    assert board.state.draft == "will fail"
    assert board.notifications == [Notification("error", "Failed to add todo")]


def test_toggle_replaces_record_from_server() -> None:
    board, api = _loaded_board(TodoItem(id="1", text="a"))

    assert board.toggle("1") is True
    assert board.todos[0].completed is True
    assert api.calls[-1] == ("update", ("1",), {"text": None, "completed": True})


def test_toggle_failure_does_not_flip_locally() -> None:
    board, api = _loaded_board(TodoItem(id="1", text="a"))
    api.fail = True

    assert board.toggle("1") is False
    assert board.todos[0].completed is False
    assert board.notifications == [Notification("error", "Failed to update status")]


def test_only_one_edit_target_at_a_time() -> None:
    board, api = _loaded_board(TodoItem(id="1", text="a"), TodoItem(id="2", text="b"))

    board.start_edit("1")
    board.set_edit_buffer("unsaved")
    board.start_edit("2")

    assert board.state.edit == Editing(todo_id="2", buffer="b")
    assert [name for name, _, _ in api.calls] == ["list"]


def test_save_edit_updates_and_clears_edit_state() -> None:
    board, _ = _loaded_board(TodoItem(id="1", text="a"))
    board.start_edit("1")
    board.set_edit_buffer("renamed")

    assert board.save_edit() is True
    assert board.todos[0].text == "renamed"
    assert board.state.edit == NOT_EDITING


def test_save_blank_edit_warns_without_request() -> None:
    board, api = _loaded_board(TodoItem(id="1", text="a"))
    board.start_edit("1")
    board.set_edit_buffer(" ")

    assert board.save_edit() is False
    assert [name for name, _, _ in api.calls] == ["list"]
    assert board.notifications == [Notification("warning", "Please enter text before saving!")]
    assert isinstance(board.state.edit, Editing)


def test_save_edit_failure_keeps_edit_state() -> None:
    board, api = _loaded_board(TodoItem(id="1", text="a"))
    board.start_edit("1")
    board.set_edit_buffer("renamed")
    api.fail = True

    assert board.save_edit() is False
    assert board.state.edit == Editing(todo_id="1", buffer="renamed")
    assert board.todos[0].text == "a"


def test_cancel_edit_makes_no_request() -> None:
    board, api = _loaded_board(TodoItem(id="1", text="a"))
    board.start_edit("1")
    board.cancel_edit()

    assert board.state.edit == NOT_EDITING
    assert [name for name, _, _ in api.calls] == ["list"]


def test_delete_removes_locally_only_on_success() -> None:
    board, api = _loaded_board(TodoItem(id="1", text="a"), TodoItem(id="2", text="b"))

    api.fail = True
    assert board.delete("1") is False
    assert [todo.id for todo in board.todos] == ["1", "2"]

    api.fail = False
    assert board.delete("1") is True
    assert [todo.id for todo in board.todos] == ["2"]


def test_notifications_are_dismissible() -> None:
    board, _ = _loaded_board()
    board.add()
    board.add()

    board.dismiss(0)
    assert len(board.notifications) == 1
    board.dismiss(5)
    assert len(board.notifications) == 1
    board.clear_notifications()
    assert board.notifications == []
