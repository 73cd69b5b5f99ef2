"""Command-line entrypoint for gorm2sql-mcp.

With one or more paths, analyzes them and prints `<path>:<line>: <SQL>` lines
followed by a per-file summary. Without paths it starts the FastMCP server
(equivalent to `fastmcp run`).
"""

from __future__ import annotations

import argparse
import sys
import traceback

import dotenv
from fastmcp.utilities.logging import get_logger

from gorm2sql_mcp.gorm_tools.resolver import ChainOrder
from gorm2sql_mcp.services import ConfigService, GormAnalysisService

# Configure a module-level logger for local CLI logs.
_logger = get_logger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gorm2sql-mcp",
        description="Infer SQL statements from GORM call chains in Go source files.",
    )
    parser.add_argument("paths", nargs="*", help="Go files or directories to analyze")
    parser.add_argument(
        "--desc", action="store_true", help="List statements by descending line number"
    )
    parser.add_argument(
        "--source-order",
        action="store_true",
        help="Accumulate repeated clauses in the order they are written",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Only report chains containing at least one recognized GORM method",
    )
    return parser


def run_analysis(args: argparse.Namespace) -> int:
    """Analyze the given paths and print results; returns the exit code."""
    settings = ConfigService.analyzer_settings().with_overrides(
        sort_order="desc" if args.desc else None,
        chain_order=ChainOrder.SOURCE if args.source_order else None,
        require_recognized=True if args.strict else None,
    )
    service = GormAnalysisService(settings=settings, logger=_logger)
    batch = service.analyze_paths(args.paths)
    for result in batch.results:
        if result.error is not None:
            print(f"{result.path}: {result.summary}", file=sys.stderr)
            continue
        for line in result.lines:
            print(line)
        print(f"{result.path}: {result.summary}")
    return 1 if batch.files_failed else 0


def main(argv: list[str] | None = None) -> None:
    """Analyze paths when given, otherwise start the MCP server."""
    dotenv.load_dotenv()
    args = build_arg_parser().parse_args(argv)
    if args.paths:
        raise SystemExit(run_analysis(args))

    from gorm2sql_mcp.server import mcp  # noqa: PLC0415 - server setup only when serving

    try:
        mcp.run()
    except KeyboardInterrupt:
        _logger.info("Interrupted by user. Exiting cleanly.")
    except Exception:  # noqa: BLE001
        traceback.print_exc(limit=1)


if __name__ == "__main__":
    # Delegate to main() so behavior is consistent across execution paths.
    main()
