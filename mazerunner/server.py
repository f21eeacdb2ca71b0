"""
project: Maze Runner
module: server.py
License: MIT

Server bootstrap helpers.

Starts the Flask development server for the maze API and configures
logging to a rotating file in instance/ plus the console.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from mazerunner import app

_HANDLER_TAG = "_mazerunner_handler"


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Start the HTTP server serving the maze API."""
    _configure_logging()
    try:
        print(f"[INFO] Starting maze API server on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging():
    """Configure logging to both console and a rotating file in instance/.

    The file path will be instance/app.log. Handlers installed by a previous
    call are replaced, so calling this repeatedly does not duplicate output.
    """
    log_dir = app.instance_path
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, "app.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(formatter)

    for handler in (file_handler, console):
        setattr(handler, _HANDLER_TAG, True)
        root.addHandler(handler)
    return log_path
