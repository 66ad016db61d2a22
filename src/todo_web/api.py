"""HTTP client for the todo API service.

Beginner terms:
- Base URL: scheme + host + port of the API, for example http://localhost:5000.
- Non-2xx: any response whose status code is not in the 200-299 range.
"""

from __future__ import annotations

import http.client
import json
import logging
from typing import Any
from urllib import error, parse, request

from pydantic import ValidationError

from .state import TodoItem

logger = logging.getLogger(__name__)


class TodoApiError(RuntimeError):
    """Any failed call: a non-2xx response or a network failure."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TodoApiClient:
    """Thin wrapper over the four CRUD endpoints; no retries, no caching."""

    def __init__(self, base_url: str, *, timeout_s: float = 10.0) -> None:
        if not base_url:
            raise ValueError("base_url is required")
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s

    def list_todos(self) -> list[TodoItem]:
        data = self._call("GET", self.base_url)
        # Tolerate servers that wrap the list as {"todos": [...]}.
        if isinstance(data, dict):
            data = data.get("todos", [])
        items = data if isinstance(data, list) else []
        return [_parse_todo(item) for item in items]

    def create_todo(self, text: str) -> TodoItem:
        return _parse_todo(self._call("POST", self.base_url, payload={"text": text}))

    def update_todo(
        self,
        todo_id: str,
        *,
        text: str | None = None,
        completed: bool | None = None,
    ) -> TodoItem:
        payload: dict[str, Any] = {}
        if text is not None:
            payload["text"] = text
        if completed is not None:
            payload["completed"] = completed
        return _parse_todo(self._call("PUT", self._url_for(todo_id), payload=payload))

    def delete_todo(self, todo_id: str) -> str:
        data = self._call("DELETE", self._url_for(todo_id))
        return str(data.get("message", "")) if isinstance(data, dict) else ""

    def _url_for(self, todo_id: str) -> str:
        return f"{self.base_url}/{parse.quote(todo_id, safe='')}"

    def _call(self, method: str, url: str, *, payload: dict[str, Any] | None = None) -> Any:
        status_code, data = _request_json(
            method=method, url=url, payload=payload, timeout_s=self.timeout_s
        )
        if not 200 <= status_code < 300:
            detail = (data.get("detail") or data.get("error")) if isinstance(data, dict) else None
            logger.warning(
                "todo_client event=request_failed method=%s url=%s status=%s",
                method,
                url,
                status_code,
            )
            raise TodoApiError(str(detail or f"HTTP {status_code}"), status_code=status_code)
        return data


def _request_json(
    *,
    method: str,
    url: str,
    payload: dict[str, Any] | None = None,
    timeout_s: float = 10.0,
) -> tuple[int, Any]:
    raw_payload: bytes | None = None
    headers = {"Accept": "application/json"}
    if payload is not None:
        raw_payload = json.dumps(payload).encode("utf-8")
        headers["Content-Type"] = "application/json"

    req = request.Request(url=url, method=method, data=raw_payload, headers=headers)

    try:
        with request.urlopen(req, timeout=timeout_s) as response:
            body = response.read().decode("utf-8")
            return response.status, _decode_body(body)
    except error.HTTPError as exc:
        body = exc.read().decode("utf-8", errors="replace")
        return exc.code, _decode_body(body)
    except (error.URLError, http.client.HTTPException, OSError) as exc:
        # Covers refused connections, timeouts and peers that hang up mid-response.
        reason = getattr(exc, "reason", exc)
        logger.warning(
            "todo_client event=network_error method=%s url=%s reason=%s", method, url, reason
        )
        raise TodoApiError(f"request failed: {reason}") from exc


def _decode_body(body: str) -> Any:
    if not body:
        return {}
    try:
        return json.loads(body)
    except json.JSONDecodeError:
        return {"raw": body}


def _parse_todo(raw: Any) -> TodoItem:
    try:
        return TodoItem.model_validate(raw)
    except ValidationError as exc:
        raise TodoApiError("unexpected response shape from todo API") from exc
