"""PostgreSQL document storage backend for todos.

Beginner terms:
- Document: one JSON object (here `{"text": ..., "completed": ...}`) stored in a JSONB column.
- JSONB merge (`||`): overwrites only the keys present on the right-hand side.
- RETURNING: lets one statement both write a row and read it back.
- Row factory: returns query rows as dict-like objects instead of tuples.
"""

from __future__ import annotations

import json
import logging
import threading
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol

from .models import Todo, TodoChanges

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when the backing store is unreachable or a statement fails."""


class TodoStorage(Protocol):
    def migrate(self) -> None: ...

    def list_todos(self) -> list[Todo]: ...

    def create_todo(self, text: str) -> Todo: ...

    def update_todo(self, todo_id: str, changes: TodoChanges) -> Todo | None: ...

    def delete_todo(self, todo_id: str) -> bool: ...


class PostgresTodoStorage:
    """Thread-safe PostgreSQL-backed collection of todo documents."""

    def __init__(self, database_url: str) -> None:
        if not database_url:
            raise ValueError("database_url is required")
        self.database_url = database_url
        # Lock guards DB operations done through this storage instance.
        self._lock = threading.Lock()
        # Lazy import helper keeps error message clear if psycopg is missing.
        self._psycopg, self._dict_row, self._json_wrapper = self._load_psycopg()

    def migrate(self) -> None:
        """Create the collection table and ordering index if they do not already exist."""
        with self._guard("migrate") as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS todos (
                    id UUID PRIMARY KEY,
                    seq BIGSERIAL NOT NULL,
                    doc JSONB NOT NULL,
                    created_at TIMESTAMPTZ NOT NULL DEFAULT now()
                )
                """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_todos_seq
                ON todos(seq DESC)
                """)
            conn.commit()

    def list_todos(self) -> list[Todo]:
        """Return every todo, most recently created first."""
        with self._guard("list") as conn:
            rows = conn.execute("SELECT id, doc FROM todos ORDER BY seq DESC").fetchall()
        return [self._row_to_todo(row) for row in rows]

    def create_todo(self, text: str) -> Todo:
        """Insert a new document with a fresh UUID and `completed=false`."""
        todo_id = uuid.uuid4()
        document = {"text": text, "completed": False}
        with self._guard("create") as conn:
            row = conn.execute(
                "INSERT INTO todos (id, doc) VALUES (%s, %s) RETURNING id, doc",
                (todo_id, self._json_wrapper(document)),
            ).fetchone()
            conn.commit()
        return self._row_to_todo(row)

    def update_todo(self, todo_id: str, changes: TodoChanges) -> Todo | None:
        """Merge supplied fields into one document; None when the id matches nothing."""
        # Comparing as text means malformed ids just miss instead of raising a cast error.
        with self._guard("update") as conn:
            row = conn.execute(
                """
                UPDATE todos
                SET doc = doc || %s::jsonb
                WHERE id::text = %s
                RETURNING id, doc
                """,
                (self._json_wrapper(changes.as_document()), todo_id),
            ).fetchone()
            conn.commit()
        if row is None:
            return None
        return self._row_to_todo(row)

    def delete_todo(self, todo_id: str) -> bool:
        """Hard-delete one document; False when the id matches nothing."""
        with self._guard("delete") as conn:
            row = conn.execute(
                "DELETE FROM todos WHERE id::text = %s RETURNING id",
                (todo_id,),
            ).fetchone()
            conn.commit()
        return row is not None

    @contextmanager
    def _guard(self, operation: str) -> Iterator[Any]:
        """Hold the lock around one connection; driver errors become StorageError."""
        try:
            with self._lock, self._connect() as conn:
                yield conn
        except self._psycopg.Error as exc:
            logger.warning("todo_storage event=error operation=%s error=%s", operation, exc)
            raise StorageError(f"todo storage {operation} failed") from exc

    def _connect(self) -> Any:
        """Open a psycopg connection that yields dict-like rows."""
        return self._psycopg.connect(self.database_url, row_factory=self._dict_row)

    @staticmethod
    def _load_psycopg() -> tuple[Any, Any, Any]:
        """Import psycopg and helpers with a friendly install hint on failure."""
        try:
            import psycopg
            from psycopg.rows import dict_row
            from psycopg.types.json import Jsonb
        except ImportError as exc:  # pragma: no cover - exercised only without dependency
            raise RuntimeError(
                "PostgreSQL backend requires psycopg. Install with: "
                'python -m pip install "psycopg[binary]>=3.2,<4.0"'
            ) from exc
        return psycopg, dict_row, Jsonb

    @staticmethod
    def _parse_document(raw: Any) -> dict[str, Any]:
        """Parse JSON-like value into dict; fall back to empty dict."""
        if isinstance(raw, str):
            parsed = json.loads(raw)
        else:
            parsed = raw
        if isinstance(parsed, dict):
            return parsed
        return {}

    @classmethod
    def _row_to_todo(cls, row: Any) -> Todo:
        """Map one DB row to the canonical Todo model."""
        document = cls._parse_document(row["doc"])
        return Todo(
            id=str(row["id"]),
            text=document.get("text", ""),
            completed=bool(document.get("completed", False)),
        )
