"""Command-line interface for js-complexity."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import SensorConfig
from .exceptions import ConfigError
from .file_source import FileSystemSource
from .sensor import ComplexitySensor, SensorReport
from .sinks import CollectingSink

# Configure logging - default to WARNING to reduce verbosity
logging.basicConfig(
    level=logging.WARNING, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="js-complexity",
        description="Measure cyclomatic complexity of JavaScript sources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Measure a project and report functions above complexity 10
  js-complexity src/ --max-complexity 10

  # Use the thresholds of a JSON quality profile, with 8 workers
  js-complexity . --profile profile.json --workers 8

  # Using environment variables
  export JS_COMPLEXITY_MAX=15
  js-complexity . --json
        """,
    )
    parser.add_argument("path", help="Directory to scan")
    parser.add_argument(
        "--max-complexity",
        "-m",
        type=int,
        default=None,
        help="Maximum allowed function complexity (default: rule inactive)",
    )
    parser.add_argument(
        "--profile",
        default=None,
        help="JSON quality profile providing the rule settings",
    )
    parser.add_argument(
        "--workers",
        "-w",
        type=int,
        default=None,
        help="Number of files measured concurrently (default: 1)",
    )
    parser.add_argument(
        "--suffixes",
        default=None,
        help="Comma-separated file suffixes to measure (default: .js)",
    )
    parser.add_argument(
        "--no-gitignore",
        action="store_true",
        help="Do not honour the .gitignore file of the scanned directory",
    )
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> SensorConfig:
    """Merge command-line arguments over environment configuration."""
    config = SensorConfig.from_env()
    if args.max_complexity is not None:
        config.max_allowed_complexity = args.max_complexity
        # An explicit threshold replaces a profile that came from the environment
        config.profile_path = None
    if args.profile:
        config.profile_path = Path(args.profile)
    if args.suffixes:
        config.file_suffixes = tuple(args.suffixes.split(","))
    if args.no_gitignore:
        config.use_gitignore = False
    if args.workers is not None:
        config.max_concurrent = args.workers
    # Re-run validation on the merged values
    return SensorConfig(
        max_allowed_complexity=config.max_allowed_complexity,
        max_concurrent=config.max_concurrent,
        file_suffixes=config.file_suffixes,
        use_gitignore=config.use_gitignore,
        profile_path=config.profile_path,
    )


def render_text(sink: CollectingSink, report: SensorReport) -> str:
    lines = []
    for path, result in sink.results.items():
        average = (
            f"{result.average_function_complexity:.2f}"
            if result.average_function_complexity is not None
            else "-"
        )
        lines.append(
            f"{path}: functions={result.function_count} "
            f"complexity={result.total_complexity} average={average}"
        )

    for path, violation in sink.violations():
        lines.append(f"{path}:{violation.line}: {violation.message}")

    for failure in report.failures:
        lines.append(f"{failure.path}: FAILED {failure.message}")

    summary = sink.summary()
    average = (
        f"{summary.average_function_complexity:.2f}"
        if summary.average_function_complexity is not None
        else "-"
    )
    lines.append("")
    lines.append(f"Files: {summary.file_count} analyzed, {len(report.failures)} failed")
    lines.append(f"Functions: {summary.function_count}")
    lines.append(f"Complexity: {summary.total_complexity} (average per function: {average})")
    lines.append(f"Function complexity distribution: {summary.function_distribution.to_data_string()}")
    lines.append(f"File complexity distribution: {summary.file_distribution.to_data_string()}")
    lines.append(f"Violations: {summary.violation_count}")
    return "\n".join(lines)


def render_json(sink: CollectingSink, report: SensorReport) -> str:
    document = {
        "files": {path: result.to_dict() for path, result in sink.results.items()},
        "failures": [{"path": f.path, "error": f.message} for f in report.failures],
        "summary": sink.summary().to_dict(),
    }
    return json.dumps(document, indent=2)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the complexity measurement.

    Returns:
        Exit code: 0 when clean, 1 when a file failed or a violation was found,
        2 on configuration errors
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)
        logging.getLogger("js_complexity").setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.WARNING)

    root = Path(args.path)
    if not root.exists():
        parser.error(f"Path does not exist: {args.path}")
    if not root.is_dir():
        parser.error(f"Path is not a directory: {args.path}")

    try:
        config = resolve_config(args)
        rule_source = config.rule_source()
        file_set = FileSystemSource(
            root, suffixes=config.file_suffixes, use_gitignore=config.use_gitignore
        )
        sensor = ComplexitySensor()
        sink = CollectingSink()

        if config.max_concurrent > 1:
            report = asyncio.run(
                sensor.run_concurrently(file_set, rule_source, sink, config.max_concurrent)
            )
        else:
            report = sensor.run(file_set, rule_source, sink)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    print(render_json(sink, report) if args.json else render_text(sink, report))

    if report.failures or sink.summary().violation_count:
        return EXIT_FINDINGS
    return EXIT_OK


def cli():
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
