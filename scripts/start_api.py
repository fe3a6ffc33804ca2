#!/usr/bin/env python3
"""Serve one vtrack repository over HTTP.

The API process owns the repository records for as long as it runs, so the
server always runs as a single uvicorn process. Use the CLI against the
same root only while the server is stopped.
"""

import argparse
import os
import sys
from pathlib import Path

# Allow running from a source checkout without installing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

try:
    import uvicorn
except ImportError:
    print("Error: uvicorn not installed. Run: pip install -e .")
    sys.exit(1)


def create_parser() -> argparse.ArgumentParser:
    """Create the launcher's argument parser."""
    parser = argparse.ArgumentParser(
        description="Serve a vtrack repository over HTTP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/start_api.py --root ~/notes
  python scripts/start_api.py --root . --storage-dir .vtrack --port 9000
        """,
    )
    parser.add_argument(
        "--root",
        help="Repository root to serve (default: VTRACK_ROOT or current directory)",
    )
    parser.add_argument(
        "--storage-dir",
        help="Record directory relative to the root (default: VTRACK_STORAGE_DIR or data/.vcs)",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Log level for uvicorn and vtrack (default: info)",
    )
    return parser


def export_settings(args: argparse.Namespace) -> None:
    """Pass repository options to the app through its environment settings."""
    if args.root:
        os.environ["VTRACK_ROOT"] = str(Path(args.root).expanduser().resolve())
    if args.storage_dir:
        os.environ["VTRACK_STORAGE_DIR"] = args.storage_dir
    os.environ["LOG_LEVEL"] = args.log_level.upper()


def main() -> None:
    """Start the API server for the selected repository."""
    args = create_parser().parse_args()
    export_settings(args)

    root = os.environ.get("VTRACK_ROOT", os.getcwd())
    print(f"Serving vtrack repository {root} at http://{args.host}:{args.port}")
    print(f"API docs: http://{args.host}:{args.port}/docs")

    options = {
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level,
        "workers": 1,
    }
    if args.reload:
        options["reload"] = True
        options["reload_dirs"] = [str(Path(__file__).parent.parent / "src")]

    uvicorn.run("vtrack.api.app:app", **options)


if __name__ == "__main__":
    main()
