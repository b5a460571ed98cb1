"""Main entry point for the application tracker."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import asyncio
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from app.board import ApplicationBoard, build_board
from app.config.environment import EnvironmentConfig
from app.config.exceptions import ConfigurationError
from app.config.loader import load_config
from app.config.models import AppConfig
from app.domain.models import ActorContext, ActorRole, NormalizedApplication
from app.logging import get_logger
from app.logging.config import configure_logging
from app.utils.timestamps import format_timestamp
from app.views import ALL, SortKey

logger = get_logger(__name__, component="cli")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load and prepare runtime configuration.

    Args:
        config_path: Path to configuration file (None searches the defaults)
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with log_level resolved

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    # Log level priority: CLI > Environment > Config
    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml or config/config.yaml)",
    )
    common.add_argument(
        "--log-level",
        default=None,
        choices=LOG_LEVELS,
        help="Log level (overrides config and environment)",
    )
    common.add_argument(
        "--role",
        required=True,
        choices=[role.value for role in ActorRole],
        help="Role of the actor the collection is built for",
    )
    common.add_argument(
        "--identity",
        required=True,
        help="Actor identity, usually an email address",
    )

    parser = argparse.ArgumentParser(
        description="Application Tracker - aggregated view and status updates for job and internship applications"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    list_parser = commands.add_parser(
        "list", parents=[common], help="Aggregate and print the filtered application list"
    )
    list_parser.add_argument("--search", default="", help="Case-insensitive text over name, title, company")
    list_parser.add_argument("--status", default=ALL, help="Only this display status (default: all)")
    list_parser.add_argument(
        "--type",
        dest="position_type",
        default=ALL,
        choices=[ALL, "job", "internship"],
        help="Only this position type (default: all)",
    )
    list_parser.add_argument(
        "--sort",
        default=SortKey.LATEST.value,
        choices=[key.value for key in SortKey],
        help="Sort order (default: -created_date)",
    )

    status_parser = commands.add_parser(
        "set-status", parents=[common], help="Change the status of one or more applications"
    )
    status_parser.add_argument("--status", required=True, help="New display status")
    status_parser.add_argument("ids", nargs="+", help="Application ids to update")

    check_parser = commands.add_parser(
        "has-applied", parents=[common], help="Check whether the actor already applied to a posting"
    )
    posting = check_parser.add_mutually_exclusive_group(required=True)
    posting.add_argument("--job-id", help="Job posting id")
    posting.add_argument("--internship-id", help="Internship posting id")

    return parser


def format_row(application: NormalizedApplication) -> str:
    """One tab-separated output line per application."""
    return "\t".join([
        application.id,
        application.status,
        application.position_type.value,
        application.display_name or "-",
        application.position_title or "-",
        application.company_name or "-",
        format_timestamp(application.created_at) or "-",
    ])


async def run_list(board: ApplicationBoard, args: argparse.Namespace) -> int:
    await board.reload()
    board.set_filters(
        search_term=args.search,
        status_filter=args.status,
        type_filter=args.position_type,
        sort_key=args.sort,
    )

    visible = board.visible()
    for application in visible:
        print(format_row(application))

    logger.info(
        f"Listed {len(visible)} of {len(board.applications)} applications",
        extra={
            "event": "cli.list.completed",
            "visible": len(visible),
            "total": len(board.applications),
        },
    )
    return 0


async def run_set_status(board: ApplicationBoard, args: argparse.Namespace) -> int:
    await board.reload()

    known = {application.id for application in board.applications}
    unknown = [record_id for record_id in args.ids if record_id not in known]
    for record_id in unknown:
        print(f"{record_id}\tunknown id", file=sys.stderr)

    wanted = [record_id for record_id in args.ids if record_id in known]
    if not wanted:
        return 1

    if len(wanted) == 1:
        results = [await board.set_status(wanted[0], args.status)]
    else:
        for record_id in wanted:
            if record_id not in board.selection:
                board.toggle(record_id)
        results = (await board.set_status_bulk(args.status)).results

    for result in results:
        outcome = "ok" if result.succeeded else f"failed: {result.error}"
        print(f"{result.record_id}\t{result.status}\t{outcome}")

    failed = [result for result in results if not result.succeeded]
    return 1 if failed or unknown else 0


async def run_has_applied(board: ApplicationBoard, args: argparse.Namespace) -> int:
    applied = await board.has_applied(job_id=args.job_id, internship_id=args.internship_id)
    print("yes" if applied else "no")
    return 0


COMMANDS = {
    "list": run_list,
    "set-status": run_set_status,
    "has-applied": run_has_applied,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the application tracker.

    Returns:
        Exit code (0 for success, non-zero for failure).
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

        actor = ActorContext(role=args.role, identity=args.identity)

        logger.info(
            "Application tracker starting",
            extra={
                "event": "service.starting",
                "command": args.command,
                "config_path": str(args.config) if args.config else None,
                "log_level": env_config.log_level,
                "actor_role": actor.role.value,
            },
        )

        board = build_board(app_config, env_config, actor)
        try:
            exit_code = asyncio.run(COMMANDS[args.command](board, args))
        finally:
            board.close()

        logger.info(
            "Application tracker stopped",
            extra={
                "event": "service.stopping",
                "exit_code": exit_code,
                "uptime_seconds": round(time.time() - start_time, 2),
            },
        )
        return exit_code

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error",
            extra={
                "event": "service.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
