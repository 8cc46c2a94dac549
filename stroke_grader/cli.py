#!/usr/bin/env python3
"""Command-line interface for grading drawn characters.

Thin wrapper around the grading engine for checking reference data and
replaying captured drawings outside the app.

Usage:
    stroke-grader grade --bundle bundles/n5.json --character 三 --drawing drawing.json
    stroke-grader grade --bundle bundles/ --character 三 --drawing drawing.json --json
    stroke-grader describe --bundle bundles/n5.json --character 三

Or run via the module:
    python -m stroke_grader.cli describe --bundle bundles/ --character 三

Drawing files hold a list of strokes, each a list of ``{"x", "y", "t"}``
objects or ``[x, y]`` pairs. An object ``{"strokes": [...], "canvasSize": N}``
is also accepted; ``--canvas-size`` overrides the stored size.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Tuple

from .api import ValidationService, format_feedback
from .config import GradingConfig
from .data import ReferenceStore
from .domain.geometry import coerce_stroke

logger = logging.getLogger(__name__)

DEFAULT_CANVAS_SIZE = 300


def configure_logging(level: str = 'WARNING', log_file: str | None = None) -> None:
    """Configure application-wide logging.

    Args:
        level: Log level string ('DEBUG', 'INFO', 'WARNING', 'ERROR').
        log_file: Optional path to log file. If None, logs to stderr only.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    formatter = logging.Formatter(
        fmt='%(asctime)s %(levelname)-8s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logger.info("Logging configured: level=%s, file=%s", level, log_file or 'stderr')


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog='stroke-grader',
        description='Grade hand-drawn characters against reference stroke data'
    )
    parser.add_argument('--log-level', type=str, default='WARNING',
                        help='Log level (default: WARNING)')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Also write logs to this file')
    parser.add_argument('--config', type=str, default=None,
                        help='JSON file with grading config overrides')
    sub = parser.add_subparsers(dest='command', required=True)

    grade = sub.add_parser('grade', help='Grade a drawing')
    grade.add_argument('--bundle', '-b', action='append', required=True,
                       help='Reference bundle file or directory (repeatable)')
    grade.add_argument('--character', '-c', type=str, required=True,
                       help='Character to grade against')
    grade.add_argument('--drawing', '-d', type=str, required=True,
                       help='Path to drawing JSON')
    grade.add_argument('--canvas-size', '-s', type=float, default=None,
                       help=f'Drawing canvas size in pixels (default: {DEFAULT_CANVAS_SIZE})')
    grade.add_argument('--json', action='store_true',
                       help='Print the full result as JSON')

    describe = sub.add_parser('describe', help='Show derived reference stroke metadata')
    describe.add_argument('--bundle', '-b', action='append', required=True,
                          help='Reference bundle file or directory (repeatable)')
    describe.add_argument('--character', '-c', type=str, required=True,
                          help='Character to describe')
    return parser


def load_drawing(path: str) -> Tuple[List[list], Optional[float]]:
    """Read a drawing file.

    Returns:
        Tuple of (strokes as lists of Points, stored canvas size or None).

    Raises:
        ValueError: If the file is not a drawing.
    """
    payload: Any = json.loads(Path(path).read_text(encoding='utf-8'))
    canvas_size = None
    if isinstance(payload, dict):
        canvas_size = payload.get('canvasSize')
        payload = payload.get('strokes')
    if not isinstance(payload, list):
        raise ValueError(f"Drawing {path} must contain a list of strokes")
    try:
        strokes = [coerce_stroke(stroke) for stroke in payload]
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError(f"Malformed point in drawing {path}: {e}") from e
    return strokes, float(canvas_size) if canvas_size else None


def _load_config(path: Optional[str]) -> GradingConfig:
    if not path:
        return GradingConfig()
    return GradingConfig.from_mapping(json.loads(Path(path).read_text(encoding='utf-8')))


def _grade_command(args, store: ReferenceStore, config: GradingConfig) -> int:
    character = store[args.character]
    strokes, stored_size = load_drawing(args.drawing)
    canvas_size = args.canvas_size or stored_size or DEFAULT_CANVAS_SIZE

    result = ValidationService(config).validate(strokes, character, canvas_size)
    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print('\n'.join(format_feedback(result)))
    return 0


def _describe_command(args, store: ReferenceStore) -> int:
    character = store[args.character]
    print(f"{character.character} ({character.meaning or '-'}): "
          f"{len(character)} strokes, viewBox {character.viewbox_size:g}")
    for i, stroke in enumerate(character.strokes, start=1):
        direction = stroke.direction.value
        if stroke.primary_direction is not None:
            direction += f" ({stroke.primary_direction.value})"
        print(f"  {i}. {stroke.id}: {direction}, "
              f"Q{stroke.start_quadrant} -> Q{stroke.end_quadrant}, length {stroke.length:g}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI.

    Returns:
        Process exit status: 0 on success, 1 for unreadable input, 2 when the
        character is not in the loaded bundles.
    """
    args = _create_argument_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    try:
        config = _load_config(args.config)
        store = ReferenceStore.from_paths(args.bundle, config)
        if args.character not in store:
            print(f"Character not found in bundles: {args.character}", file=sys.stderr)
            return 2
        if args.command == 'grade':
            return _grade_command(args, store, config)
        return _describe_command(args, store)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
