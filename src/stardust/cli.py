"""Command-line interface for Stardust."""

from __future__ import annotations

import argparse
import json
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from stardust.delimiters import DEFAULT_DELIMITERS, Delimiters
from stardust.errors import DelimiterError, ParseError
from stardust.segments import Segment

FORMATS = ("json", "text")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    output_format: str
    delimiters: Delimiters
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="stardust",
        description="Tokenize a Stardust template into literal, expression, and statement segments",
    )
    p.add_argument("input", help="Input template file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default="json",
        help="Output format (default: json)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover stardust.toml)",
    )
    p.add_argument("--debug", action="store_true", help="Dump segments to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "stardust.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Raises DelimiterError on a bad [delimiters] table.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    delimiters = DEFAULT_DELIMITERS
    cfg_delims = config.get("delimiters")
    if cfg_delims is not None:
        if not isinstance(cfg_delims, dict):
            raise DelimiterError("[delimiters] must be a table")
        delimiters = Delimiters.from_mapping(cfg_delims)

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        output_format=args.format,
        delimiters=delimiters,
        debug=args.debug,
    )


def segment_to_dict(seg: Segment) -> dict[str, Any]:
    start, end = seg.span.start, seg.span.end
    return {
        "type": seg.type.name.lower(),
        "value": seg.value,
        "start": {"line": start.line, "column": start.column, "offset": start.offset},
        "end": {"line": end.line, "column": end.column, "offset": end.offset},
    }


def format_segments(segments: list[Segment], output_format: str) -> str:
    if output_format == "json":
        return json.dumps([segment_to_dict(s) for s in segments], indent=2) + "\n"
    lines = [
        f"{s.span.start.line}:{s.span.start.column}\t{s.type.name}\t{s.value!r}"
        for s in segments
    ]
    return "".join(line + "\n" for line in lines)


def tokenize_file(options: CliOptions) -> str:
    """Read and tokenize a template file, returning the formatted segments."""
    from stardust.debug import dump_segments
    from stardust.lexer import tokenize

    source = options.input_file.read_text(encoding="utf-8")
    segments = tokenize(source, str(options.input_file), options.delimiters)

    if options.debug:
        dump_segments(segments)

    return format_segments(segments, options.output_format)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (DelimiterError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        output = tokenize_file(options)
        if options.output_file:
            options.output_file.write_text(output, encoding="utf-8")
        else:
            sys.stdout.write(output)
    except ParseError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 0
