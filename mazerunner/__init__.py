"""
project: Maze Runner
module: __init__.py
License: MIT

Flask application object and factory.

Configuration is sourced from environment variables (optionally from a
local .env file) with defaults suited to development. A local `instance/`
directory holds runtime files such as the rotating server log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so MAZE_* settings can be supplied without exporting
# shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # Read-only installs still serve the API; only file logging needs the folder
    logging.getLogger(__name__).warning("instance folder unavailable: %s", app.instance_path)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


app.config.update(
    JSON_SORT_KEYS=False,
    MAZE_DEFAULT_DIFFICULTY=os.getenv("MAZE_DEFAULT_DIFFICULTY", "medium"),
    MAZE_MAX_ATTEMPTS=int(os.getenv("MAZE_MAX_ATTEMPTS", "25")),
    MAZE_ENABLE_GENERATION_METRICS=_env_bool("MAZE_ENABLE_GENERATION_METRICS", "1"),
    MAZE_DISABLE_CACHE=_env_bool("MAZE_DISABLE_CACHE", "0"),
)

# Register HTTP blueprints (import after app is created)
from mazerunner.routes.maze_api import bp_maze  # noqa: E402

app.register_blueprint(bp_maze)


def create_app():
    """Return the Flask app instance."""
    return app


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal server error", "error_id": error_id}), 500
