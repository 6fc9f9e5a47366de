"""Command-line entry point: run one internship scan and print the result."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from internscan.config.environment import EnvironmentConfig
from internscan.config.exceptions import ConfigurationError
from internscan.config.loader import load_config
from internscan.config.models import AppConfig
from internscan.logging import get_logger
from internscan.logging.config import configure_logging
from internscan.persistence import PersistenceError, close_database, init_database, seed_directory
from internscan.pipeline import ScanPipeline, handle_scan_request

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and settle the effective log level.

    Log level priority: CLI > LOG_LEVEL environment variable > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    return app_config, env_config


def build_request_body(args: argparse.Namespace) -> Any:
    """Request body from --request, or from --company-id / --geography flags.

    Raises:
        ConfigurationError: If the request file cannot be read
    """
    if args.request:
        if args.request == "-":
            return sys.stdin.read()
        try:
            return Path(args.request).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read request file {args.request}: {e}",
                suggestions=["Pass a path to a JSON file, or '-' to read from stdin"],
            ) from e

    body: Dict[str, List[str]] = {}
    if args.company_ids:
        body["companyIds"] = args.company_ids
    if args.geographies:
        body["geographies"] = args.geographies
    return body


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="internscan",
        description="Scan company careers pages for internship postings and store new ones",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml or config/config.yaml if present)",
    )
    parser.add_argument(
        "--company-id",
        dest="company_ids",
        action="append",
        default=[],
        metavar="ID",
        help="Company to scan (repeatable; default: every company in the directory)",
    )
    parser.add_argument(
        "--geography",
        dest="geographies",
        action="append",
        default=[],
        metavar="NAME",
        help="Default location for postings that publish none (repeatable)",
    )
    parser.add_argument(
        "--request",
        default=None,
        metavar="FILE",
        help='JSON request body {"companyIds": [...], "geographies": [...]}; "-" reads stdin',
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one scan.

    Returns:
        0 when the scan response is ok, 1 otherwise
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        logger.info(
            "internscan starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config) if args.config else None,
                "log_level": env_config.log_level,
                "company_count": len(app_config.companies),
            },
        )

        body = build_request_body(args)

        init_database(env_config.database_url)
        try:
            if app_config.companies:
                seed_directory(app_config.companies)

            pipeline = ScanPipeline(app_config)
            try:
                response = handle_scan_request(body, pipeline)
            finally:
                pipeline.fetcher.close()
        finally:
            close_database()

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        response = {"ok": False, "error": str(e)}
    except PersistenceError as e:
        print(f"Database Error: {e}", file=sys.stderr)
        response = {"ok": False, "error": str(e)}

    print(json.dumps(response))

    logger.info(
        "internscan stopped",
        extra={
            "event": "service.stopping",
            "ok": response["ok"],
            "uptime_seconds": round(time.time() - start_time, 2),
        },
    )
    return 0 if response["ok"] else 1


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
