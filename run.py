"""Maze Runner CLI entry point.

Provides subcommands for generating a maze in the terminal and for running
the maze API server. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Maze Runner

    Generate solvable mazes for the tile-based navigation game, or run the
    HTTP API that serves them. Configuration can be provided via CLI flags or
    environment variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                 Bind address for the web server (default: 0.0.0.0)
          PORT                 Port for the web server (default: 5000)
          MAZE_MAX_ATTEMPTS    Regeneration ceiling per maze (default: 25)
          MAZERUNNER_LOG_LEVEL debug|info|warn|error (default: info)

        Examples:
          # Print a medium maze with a random seed
          python run.py generate

          # Reproduce a specific hard maze as JSON
          python run.py generate --difficulty hard --seed 42 --json

          # Run the API server on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="mazerunner",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Maze Runner {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a maze and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one maze and print it as text or JSON",
    )
    gen_parser.add_argument(
        "--difficulty",
        default="medium",
        help="easy (11x11), medium (15x15), hard (21x21) or extreme (31x31)",
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible maze")
    gen_parser.add_argument(
        "--goal",
        dest="goal_strategy",
        choices=("sampled", "farthest"),
        default="sampled",
        help="Goal placement strategy (default: sampled)",
    )
    gen_parser.add_argument("--json", action="store_true", help="Print the maze as JSON")
    gen_parser.add_argument("--metrics", action="store_true", help="Also print generation metrics")
    gen_parser.set_defaults(command="generate")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the maze API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask maze API server",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    return parser.parse_args(argv)


def _colored(text: str, color: str) -> str:
    return f"{color}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def _generate(args: argparse.Namespace) -> int:
    from mazerunner.maze import GenerationError, Maze, MazeConfig, MazeConfigError

    try:
        config = MazeConfig.for_difficulty(args.difficulty, goal_strategy=args.goal_strategy)
        maze = Maze(config, seed=args.seed)
    except MazeConfigError as e:
        print(_colored(f"[ERROR] {e}", Fore.RED), file=sys.stderr)
        return 2
    except GenerationError as e:
        print(_colored(f"[ERROR] {e}", Fore.RED), file=sys.stderr)
        return 1

    if args.json:
        payload = maze.to_dict()
        if args.metrics:
            payload["metrics"] = maze.metrics
        print(json.dumps(payload, indent=2))
        return 0

    header = f"{maze.difficulty} {maze.rows}x{maze.cols}  seed={maze.seed}  goal={maze.goal_position}"
    print(_colored(header, Fore.CYAN + Style.BRIGHT))
    for line in str(maze).splitlines():
        line = line.replace("S", _colored("S", Fore.GREEN)).replace("G", _colored("G", Fore.YELLOW))
        print(line)
    if args.metrics:
        for key, val in maze.metrics.items():
            print(f"  {_colored(key + ':', Fore.YELLOW):28} {val}")
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "generate").lower()
    if mode == "generate":
        return _generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from mazerunner.logging_utils import log
    from mazerunner.server import start_server

    divider = _colored("=" * 40, Fore.MAGENTA)
    print("\n".join([divider, "  " + _colored("Maze Runner API", Fore.CYAN + Style.BRIGHT), divider]))
    print(f"  {_colored('Host:', Fore.YELLOW):12} {host}")
    print(f"  {_colored('Port:', Fore.YELLOW):12} {port}")
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


def _console_main() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
