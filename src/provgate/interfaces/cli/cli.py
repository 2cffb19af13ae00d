from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from provgate.infrastructure.config import load_config
from provgate.infrastructure.logging import configure_logging
from provgate.interfaces.app import DEFAULT_PORT, create_app

log = structlog.get_logger(__name__)


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="provgate",
        description="Serve provider modules from a build directory for local testing.",
    )

    # Server options
    parser.add_argument(
        "--host",
        default=None,
        help="Bind host (overrides HOST env).",
    )
    parser.add_argument(
        "--port",
        default=None,
        type=int,
        help=f"Bind port (overrides PORT env, default {DEFAULT_PORT}).",
    )

    # Config wiring flags (no business logic)
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file.",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    parser.add_argument(
        "--dist-dir",
        default=None,
        help="Override compiled provider directory.",
    )
    parser.add_argument(
        "--source-dir",
        default=None,
        help="Override provider source directory.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    return parser.parse_args(argv)


def start(argv: Iterable[str] | None = None) -> None:
    """
    Process entrypoint.

    Loads config exactly once here, then builds the FastAPI app with it.
    """
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)

    host = args.host or os.getenv("HOST", "0.0.0.0")
    port = int(args.port or os.getenv("PORT", str(DEFAULT_PORT)))

    config_path = Path(args.config) if args.config else None
    dotenv_path = Path(args.dotenv) if args.dotenv else None

    cli_overrides: dict[str, Any] = {}
    if args.dist_dir:
        cli_overrides["dist_dir"] = args.dist_dir
    if args.source_dir:
        cli_overrides["source_dir"] = args.source_dir
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    config = load_config(
        config_path=config_path,
        dotenv_path=dotenv_path,
        cli_overrides=cli_overrides,
    )

    log_config = configure_logging(config)

    if not config.dist_dir.is_dir():
        log.warning(
            "no_build_found",
            dist_dir=str(config.dist_dir),
            hint=f"run '{' '.join(config.build.command)}' or POST /build",
        )
    if config.execution_timeout_seconds is None:
        log.info("execution_deadline_disabled")

    log.info("server_starting", host=host, port=port)
    uvicorn.run(
        create_app(config, port=port),
        host=host,
        port=port,
        log_config=log_config,
    )


if __name__ == "__main__":
    raise SystemExit(start())
