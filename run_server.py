#!/usr/bin/env python
"""
Server Entry Point

Usage:
    Development:  python run_server.py --dev
    Production:   python run_server.py --workers 4
    Gunicorn:     python run_server.py --gunicorn
"""

import argparse
import os
import subprocess

import structlog
import uvicorn

from cinedash.config import get_settings
from cinedash.config.logging import configure_logging

logger = structlog.get_logger("run_server")

APP = "cinedash.main:app"


def run_dev_server(host: str, port: int) -> None:
    """Single process with auto-reload."""
    uvicorn.run(
        APP,
        host=host,
        port=port,
        reload=True,
        reload_dirs=["cinedash"],
        log_level="debug",
    )


def run_prod_server(host: str, port: int, workers: int) -> None:
    uvicorn.run(
        APP,
        host=host,
        port=port,
        workers=workers,
        log_level=get_settings().monitoring.log_level.lower(),
        proxy_headers=True,
        forwarded_allow_ips="*",
        server_header=False,
    )


def run_gunicorn(host: str, port: int, workers: int) -> int:
    env = {**os.environ, "BIND": f"{host}:{port}", "WORKERS": str(workers)}
    return subprocess.run(["gunicorn", APP, "-c", "gunicorn.conf.py"], env=env).returncode


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="CineDash Analytics API Server")
    parser.add_argument("--dev", action="store_true", help="Run in development mode with auto-reload")
    parser.add_argument("--gunicorn", action="store_true", help="Run under Gunicorn")
    parser.add_argument("--host", default=settings.api_host, help=f"Bind address (default: {settings.api_host})")
    parser.add_argument("--port", type=int, default=settings.api_port, help=f"Port (default: {settings.api_port})")
    parser.add_argument("--workers", type=int, default=settings.api_workers, help="Uvicorn worker processes")
    args = parser.parse_args()

    configure_logging()

    if args.dev:
        logger.info("Starting development server", port=args.port)
        run_dev_server(args.host, args.port)
    elif args.gunicorn:
        logger.info("Starting Gunicorn", port=args.port)
        raise SystemExit(run_gunicorn(args.host, args.port, args.workers))
    else:
        logger.info("Starting Uvicorn", port=args.port, workers=args.workers)
        run_prod_server(args.host, args.port, args.workers)


if __name__ == "__main__":
    main()
