from __future__ import annotations

import logging
import sys


def setup_logging(level: str | int = logging.INFO) -> None:
    """Attach one stream handler to the root logger.

    Call this once, very early, from the process entry point. Repeated calls
    only adjust the level.
    """
    root = logging.getLogger()
    root.setLevel(level)
    if any(getattr(handler, "_todo_handler", False) for handler in root.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    handler._todo_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
