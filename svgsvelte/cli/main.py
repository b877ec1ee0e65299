"""
svgsvelte CLI — Convert SVG files into Svelte components.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from svgsvelte import __version__
from svgsvelte.cli.naming import component_file_name
from svgsvelte.core.batch import OUTPUT_SUFFIXES, SVG_SUFFIX, BatchReport, convert_file, find_svg_files
from svgsvelte.ir.schema import ConvertOptions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svg-to-svelte",
        description="Convert SVG files into parametrized Svelte components",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"svg-to-svelte {__version__}",
    )
    parser.add_argument(
        "input",
        type=str,
        help="An .svg file or a directory of .svg files",
    )
    parser.add_argument(
        "output_dir",
        type=str,
        nargs="?",
        default=None,
        help="Where to write components (default: next to the input)",
    )
    parser.add_argument(
        "--include-class",
        action="store_true",
        help="Expose the root class attribute as a className prop",
    )
    parser.add_argument(
        "--format",
        choices=sorted(OUTPUT_SUFFIXES),
        default="component",
        help="Output format: component (default), or tree (parsed tree as JSON, for debugging)",
    )

    # Logging configuration
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["silent", "info", "verbose", "debug"],
        default=None,
        help="Log verbosity level (default: info, or SVGSVELTE_LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--log-channel",
        type=str,
        default=None,
        help="Comma-separated log channels to show (pipeline,normalize,parse,generate,batch,system). Default: all",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    # Configure logging first
    from svgsvelte.core.logging import configure_logging

    channels = None
    if args.log_channel:
        channels = [ch.strip() for ch in args.log_channel.split(",")]

    configure_logging(
        level=args.log_level,
        channels=channels,
        force=True,
    )

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input path does not exist: {args.input}", file=sys.stderr)
        return 1

    if args.output_dir:
        output_dir = Path(args.output_dir)
    else:
        output_dir = input_path if input_path.is_dir() else input_path.parent

    options = ConvertOptions(include_class=args.include_class)

    if input_path.is_dir():
        return run_directory(input_path, output_dir, options, args.format)
    return run_file(input_path, output_dir, options, args.format)


def _process(source: Path, output_dir: Path, options: ConvertOptions, output_format: str) -> Path:
    output = output_dir / component_file_name(source, suffix=OUTPUT_SUFFIXES[output_format])
    print(f"Processing: {source}")
    convert_file(source, output, options=options, output_format=output_format)
    print(f"  → {output}")
    return output


def _report_failure(name: str, error: Exception) -> None:
    print(f"Failed to process {name}:", file=sys.stderr)
    print(f"  {error}", file=sys.stderr)


def run_file(source: Path, output_dir: Path, options: ConvertOptions, output_format: str) -> int:
    """Convert a single file. Any failure stops with exit status 1."""
    if not source.name.endswith(SVG_SUFFIX):
        print(f"Error: Input file must be an SVG file ({SVG_SUFFIX})", file=sys.stderr)
        return 1

    try:
        _process(source, output_dir, options, output_format)
    except Exception as e:
        _report_failure(source.name, e)
        return 1
    return 0


def run_directory(directory: Path, output_dir: Path, options: ConvertOptions, output_format: str) -> int:
    """Convert every SVG file in a directory, continuing past failures."""
    files = find_svg_files(directory)
    if not files:
        print(f"Error: No {SVG_SUFFIX} files found in {directory}", file=sys.stderr)
        return 1

    print(f"Found {len(files)} SVG file(s)")

    report = BatchReport(input_dir=directory)
    for source in files:
        try:
            output = _process(source, output_dir, options, output_format)
        except Exception as e:
            report.record_failure(source, e)
            _report_failure(source.name, e)
        else:
            report.record_success(source, output)

    print(f"\nComplete: {report.succeeded_count} succeeded, {report.failed_count} failed")
    return 1 if report.failed_count else 0


if __name__ == "__main__":
    sys.exit(main())
