"""Interactive terminal front-end for the todo list.

Commands (numbers refer to the position shown by `list`):
  list | add <text> | toggle <n> | edit <n> | text <new text> | save | cancel | delete <n> | quit
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable
from typing import TextIO

from .api import TodoApiClient
from .controller import TodoBoard
from .settings import get_client_settings
from .state import Editing

HELP = (
    "commands: list | add <text> | toggle <n> | edit <n> | text <new text> | "
    "save | cancel | delete <n> | quit"
)


def render(board: TodoBoard, out: TextIO) -> None:
    if not board.todos:
        out.write("No tasks yet. Start by adding one!\n")
        return
    edit = board.state.edit
    for position, todo in enumerate(board.todos, start=1):
        if isinstance(edit, Editing) and edit.todo_id == todo.id:
            out.write(f"{position:>3}. [editing] {edit.buffer}\n")
            continue
        mark = "x" if todo.completed else " "
        out.write(f"{position:>3}. [{mark}] {todo.text}\n")


def flush_notifications(board: TodoBoard, out: TextIO) -> None:
    for notification in board.notifications:
        out.write(f"({notification.level}) {notification.message}\n")
    board.clear_notifications()


def run_console(board: TodoBoard, lines: Iterable[str], out: TextIO) -> None:
    """Drive the board from command lines until input ends or `quit`."""
    board.load()
    flush_notifications(board, out)
    render(board, out)
    for raw_line in lines:
        command, _, argument = raw_line.strip().partition(" ")
        if not command:
            continue
        if command == "quit":
            break
        if not _dispatch(board, command, argument, out):
            out.write(HELP + "\n")
            continue
        flush_notifications(board, out)
        render(board, out)


def _dispatch(board: TodoBoard, command: str, argument: str, out: TextIO) -> bool:
    if command == "list":
        return True
    if command == "add":
        board.set_draft(argument)
        board.add()
        return True
    if command == "text":
        board.set_edit_buffer(argument)
        return True
    if command == "save":
        board.save_edit()
        return True
    if command == "cancel":
        board.cancel_edit()
        return True
    if command in {"toggle", "edit", "delete"}:
        todo_id = _todo_id_at(board, argument)
        if todo_id is None:
            out.write(f"no task at position {argument!r}\n")
            return True
        if command == "toggle":
            board.toggle(todo_id)
        elif command == "edit":
            board.start_edit(todo_id)
        else:
            board.delete(todo_id)
        return True
    return False


def _todo_id_at(board: TodoBoard, argument: str) -> str | None:
    try:
        position = int(argument)
    except ValueError:
        return None
    if 1 <= position <= len(board.todos):
        return board.todos[position - 1].id
    return None


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage todos from the terminal.")
    parser.add_argument(
        "--server-url",
        default=None,
        help="Todo API base URL (defaults to TODO_SERVER_URL).",
    )
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    settings = get_client_settings()
    server_url = (args.server_url or "").rstrip("/") or settings.require_server_url()
    client = TodoApiClient(server_url, timeout_s=args.timeout or settings.request_timeout_s)
    sys.stdout.write(HELP + "\n")
    run_console(TodoBoard(client), sys.stdin, sys.stdout)


if __name__ == "__main__":
    main()
