"""FastAPI app that serves the single-page todo client."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from todo_api.logging_setup import setup_logging

from .settings import ClientSettings, get_client_settings
from .ui import render_homepage

logger = logging.getLogger(__name__)


def create_app(*, settings_override: ClientSettings | None = None) -> FastAPI:
    settings = settings_override or get_client_settings()
    # Fail fast: the page is useless without an API to call.
    server_url = settings.require_server_url()

    app = FastAPI(title=settings.app_name, version="0.1.0")
    app.state.settings = settings

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "service": settings.app_name}

    @app.get("/", response_class=HTMLResponse)
    def home() -> str:
        return render_homepage(server_url)

    logger.info("todo_web event=configured server_url=%s", server_url)
    return app


def run() -> None:
    """Console entry point: `todo-web`."""
    import uvicorn

    settings = get_client_settings()
    setup_logging(settings.log_level)
    uvicorn.run(
        create_app(settings_override=settings),
        host=settings.client_host,
        port=settings.client_port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
