"""
Plan Tree - Entry Point

Reads EXPLAIN PLAN text from a file or stdin and prints the rebuilt plan tree.
"""

import sys
import argparse
from typing import Optional, Sequence


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plantree",
        description="Rebuild an execution plan tree from indented plan text",
    )
    parser.add_argument("path", nargs="?", help="Plan text file (default: stdin)")
    parser.add_argument("--indent-width", type=int, help="Indent characters per nesting level")
    parser.add_argument("--indent-char", help="Indent character (default: space)")
    parser.add_argument("--log-level", help="Logging level override")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main application entry point"""
    args = build_arg_parser().parse_args(argv)

    from plantree.core.config import get_settings
    from plantree.core.logger import setup_logging, get_logger
    from plantree.core.exceptions import PlanTreeError
    from plantree.analysis import LineDepthParser, build_plan_forest, format_plan_forest

    settings = get_settings()

    setup_logging(
        level=args.log_level or settings.logging.level,
        log_dir=settings.logs_dir,
        file_enabled=settings.logging.file_enabled,
        retention_days=settings.logging.retention_days,
        stream=sys.stderr,
    )
    logger = get_logger('main')

    parser_settings = settings.parser.model_copy(update={
        key: value for key, value in (
            ("indent_width", args.indent_width),
            ("indent_char", args.indent_char),
        ) if value is not None
    })

    try:
        line_parser = LineDepthParser(
            indent_char=parser_settings.indent_char,
            indent_width=parser_settings.indent_width,
            tab_size=parser_settings.tab_size,
            skip_patterns=parser_settings.skip_patterns,
        )
    except ValueError as e:
        logger.error(f"Invalid parser options: {e}")
        return 2

    try:
        if args.path:
            with open(args.path, "r", encoding="utf-8") as f:
                plan_text = f.read()
        else:
            plan_text = sys.stdin.read()
    except OSError as e:
        logger.error(f"Cannot read plan text: {e}")
        return 2

    try:
        roots = build_plan_forest(plan_text, line_parser)
    except PlanTreeError as e:
        logger.error(f"Cannot build plan tree: {e}")
        return 1

    sys.stdout.write(format_plan_forest(roots))
    return 0


if __name__ == "__main__":
    sys.exit(main())
