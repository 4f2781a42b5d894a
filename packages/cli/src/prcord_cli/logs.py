"""Logging setup for CLI runs."""

from __future__ import annotations

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_ATTR = "_prcord_handler"


class GitHubActionsHandler(logging.Handler):
    """Re-emit warnings and errors as workflow command annotations."""

    def __init__(self, stream=None):
        super().__init__(level=logging.WARNING)
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            command = "error" if record.levelno >= logging.ERROR else "warning"
            message = self.format(record).replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
            stream = self.stream or sys.stdout
            stream.write(f"::{command}::{message}\n")
            stream.flush()
        except Exception:
            self.handleError(record)


def configure_logging(verbose: bool = False) -> None:
    """Install prcord's handlers on the root logger, replacing any from an earlier call."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            root.removeHandler(handler)

    handlers: list[logging.Handler] = [
        RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=False),
    ]
    if os.environ.get("GITHUB_ACTIONS") == "true":
        handlers.append(GitHubActionsHandler())

    for handler in handlers:
        setattr(handler, _HANDLER_ATTR, True)
        root.addHandler(handler)

    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not verbose:
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        logging.getLogger("github").setLevel(logging.WARNING)
