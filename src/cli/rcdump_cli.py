# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command line interface for support dump analysis."""

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from rcdump.config import AnalysisConfig, ConfigError, load_config
from rcdump.engine import DumpAnalyzer
from rcdump.locator import DumpFileError, LocatorError, detect_sources
from rcdump.model import ReportModel, TIERS
from rcdump.renderers import render_csv, render_html, render_json, render_text

logger = logging.getLogger(__name__)

OUTPUT_FORMATS: tuple[str, ...] = ("text", "json", "csv", "html")


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="rcdump")
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser("analyze")
    analyze_parser.add_argument(
        "--path", required=True, help="Dump directory or single dump file."
    )
    analyze_parser.add_argument(
        "--format", choices=OUTPUT_FORMATS, default="text", help="Report format."
    )
    analyze_parser.add_argument(
        "--output", required=False, help="Optional report output file path."
    )
    analyze_parser.add_argument(
        "--severity",
        choices=tuple(reversed(TIERS)),
        default="warning",
        help="Lowest issue tier listed in the report.",
    )
    analyze_parser.add_argument(
        "--config", required=False, help="Optional analysis rules JSON file."
    )
    analyze_parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker threads used to run classifiers.",
    )
    analyze_parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging."
    )

    detect_parser = subparsers.add_parser("detect")
    detect_parser.add_argument(
        "--path", required=True, help="Dump directory or single dump file."
    )
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run CLI command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if args.command == "analyze":
        return _run_analyze(args=args, stdout=stdout, stderr=stderr)
    if args.command == "detect":
        return _run_detect(args=args, stdout=stdout, stderr=stderr)

    logger.warning(f"Unsupported command (command={args.command})")
    stderr.write(f"Unsupported command: {args.command}\n")
    return 2


def _run_analyze(args: argparse.Namespace, stdout: TextIO, stderr: TextIO) -> int:
    """Run analyze command.

    Args:
        args: Parsed CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    if args.workers <= 0:
        logger.warning(f"Invalid worker count (workers={args.workers})")
        stderr.write("--workers must be greater than zero\n")
        return 2

    config = AnalysisConfig()
    if args.config:
        try:
            config = load_config(Path(args.config))
        except ConfigError as exc:
            stderr.write(f"{exc}\n")
            return 2

    analyzer = DumpAnalyzer(config=config, max_workers=args.workers)
    try:
        report, errors = analyzer.analyze_path(Path(args.path))
    except LocatorError as exc:
        logger.warning(f"Dump path not found (path={args.path})")
        stderr.write(f"{exc}\n")
        return 2
    _write_errors(errors=errors, stderr=stderr)

    if args.output:
        output_path = Path(args.output)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with output_path.open("w", encoding="utf-8") as handle:
                _write_report(report, args.format, args.severity, handle)
        except OSError as exc:
            logger.warning(
                f"Failed to write report file (output_path={output_path} error={exc})"
            )
            stderr.write(f"Failed to write report file: {output_path}\n")
            return 2
        logger.info(f"Report written (output_path={output_path} format={args.format})")
    else:
        _write_report(report, args.format, args.severity, stdout)
    return 0


def _run_detect(args: argparse.Namespace, stdout: TextIO, stderr: TextIO) -> int:
    """Run detect command.

    Args:
        args: Parsed CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    try:
        detected = detect_sources(Path(args.path))
    except LocatorError as exc:
        logger.warning(f"Dump path not found (path={args.path})")
        stderr.write(f"{exc}\n")
        return 2

    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    table = Table(show_header=True)
    table.add_column("kind", no_wrap=True)
    table.add_column("sniffed", no_wrap=True)
    table.add_column("path", overflow="fold")
    for located, sniffed in detected:
        table.add_row(located.kind, sniffed, escape(str(located.path)))
    console.print(table)
    console.print(f"sources_found={len(detected)}")
    return 0


def _write_report(report: ReportModel, fmt: str, severity: str, stream: TextIO) -> None:
    if fmt == "json":
        stream.write(render_json(report, severity) + "\n")
    elif fmt == "csv":
        stream.write(render_csv(report, severity))
    elif fmt == "html":
        stream.write(render_html(report, severity))
    else:
        render_text(report, stream, severity)


def _write_errors(errors: list[DumpFileError], stderr: TextIO) -> None:
    """Write dump file errors to stderr.

    Args:
        errors: Recoverable dump file errors.
        stderr: Standard error stream.
    """
    for error in errors:
        stderr.write(f"dump_file_error: {error.file_path}: {error.message}\n")


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
