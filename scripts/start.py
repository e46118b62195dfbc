#!/usr/bin/env python3
"""
Start the feedback board under gunicorn.

Port, worker count and timeout come from the app settings (PORT,
WEB_CONCURRENCY, WEB_TIMEOUT) and can be overridden on the command line.
By default the release step (migrations + seed) runs first; pass
--skip-release when a separate release phase already ran it.

Usage:
    python scripts/start.py [--skip-release] [--workers N] [--timeout S] [--port P]
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.feedboard.config import Settings, load_settings  # noqa: E402


def build_gunicorn_argv(
    settings: Settings,
    *,
    port: int | None = None,
    workers: int | None = None,
    timeout: int | None = None,
) -> list[str]:
    port = port if port is not None else settings.port
    workers = workers if workers is not None else settings.web_concurrency
    timeout = timeout if timeout is not None else settings.web_timeout
    if not 1 <= port <= 65535:
        raise ValueError(f"Invalid port {port}; must be 1-65535.")
    if workers < 1:
        raise ValueError(f"Invalid worker count {workers}; must be at least 1.")

    argv = [
        "gunicorn",
        "app.wsgi:app",
        "--bind", f"0.0.0.0:{port}",
        "--workers", str(workers),
        "--timeout", str(timeout),
        "--access-logfile", "-",
        "--error-logfile", "-",
        "--log-level", settings.log_level.lower(),
        "--preload",
    ]
    return argv


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run the feedback board under gunicorn")
    parser.add_argument("--skip-release", action="store_true", help="Do not run migrations + seed first")
    parser.add_argument("--port", type=int, help="Override PORT")
    parser.add_argument("--workers", type=int, help="Override WEB_CONCURRENCY")
    parser.add_argument("--timeout", type=int, help="Override WEB_TIMEOUT (seconds)")
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
        gunicorn_argv = build_gunicorn_argv(settings, port=args.port, workers=args.workers, timeout=args.timeout)
    except ValueError as e:
        print(f"ERROR: {e}", flush=True)
        sys.exit(1)

    if not args.skip_release:
        from scripts.release import run_release

        try:
            run_release()
        except Exception as e:
            print(f"Release failed: {e}", flush=True)
            sys.exit(1)

    print(f"Starting: {' '.join(gunicorn_argv)}", flush=True)
    # exec so gunicorn becomes PID 1 and receives signals directly
    os.execvp(gunicorn_argv[0], gunicorn_argv)


if __name__ == "__main__":
    main()
