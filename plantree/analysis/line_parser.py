"""
Plan text line parser

Turns each line of raw EXPLAIN PLAN text into a depth/label record. Depth comes
from the run of leading indent characters; everything after it is the label.
Blank lines and ruler lines carry no plan step and are dropped.
"""

import re
from dataclasses import dataclass
from typing import Optional, Iterable, Iterator, Pattern, Tuple, Protocol, TYPE_CHECKING

from plantree.core.constants import (
    DEFAULT_INDENT_CHAR,
    DEFAULT_INDENT_WIDTH,
    DEFAULT_TAB_SIZE,
    DEFAULT_SKIP_PATTERNS,
)

if TYPE_CHECKING:
    from plantree.core.config import Settings

# Line terminators only; str.splitlines also breaks on form feeds and \u2028
LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class PlanLine:
    """One content line of plan text"""
    index: int  # 0-based position in the raw text
    depth: int
    label: str
    raw: str = ""


class PlanTextParser(Protocol):
    """Anything that can split raw plan text into PlanLine records"""

    def parse_text(self, text: str) -> Iterator[PlanLine]:
        ...


class LineDepthParser:
    """
    Line depth parser for indented plan text

    Usage:
        parser = LineDepthParser()
        for line in parser.parse_text(plan_text):
            print(line.depth, line.label)

        # Plans indented two spaces per level
        parser = LineDepthParser(indent_char=" ", indent_width=2)

    With a non-space indent_char (e.g. "." or "|"), spaces and tabs in front of
    the first marker are margin and do not count; depth comes from the marker
    run alone, so "  ..X" is depth 2 at indent_width 1.
    """

    def __init__(
        self,
        indent_char: str = DEFAULT_INDENT_CHAR,
        indent_width: int = DEFAULT_INDENT_WIDTH,
        tab_size: int = DEFAULT_TAB_SIZE,
        skip_patterns: Iterable[str] = DEFAULT_SKIP_PATTERNS,
    ):
        if len(indent_char) != 1:
            raise ValueError(f"indent_char must be a single character, got {indent_char!r}")
        if indent_width < 1:
            raise ValueError(f"indent_width must be positive, got {indent_width}")
        if tab_size < 1:
            raise ValueError(f"tab_size must be positive, got {tab_size}")

        self.indent_char = indent_char
        self.indent_width = indent_width
        self.tab_size = tab_size
        self._skip_patterns: Tuple[Pattern[str], ...] = tuple(re.compile(p) for p in skip_patterns)

    @classmethod
    def from_settings(cls, settings: Optional['Settings'] = None) -> 'LineDepthParser':
        """Build a parser from the application settings"""
        if settings is None:
            from plantree.core.config import get_settings
            settings = get_settings()

        parser_settings = settings.parser
        return cls(
            indent_char=parser_settings.indent_char,
            indent_width=parser_settings.indent_width,
            tab_size=parser_settings.tab_size,
            skip_patterns=parser_settings.skip_patterns,
        )

    def is_content_line(self, line: str) -> bool:
        stripped = line.strip()
        if not stripped:
            return False
        return not any(pattern.match(stripped) for pattern in self._skip_patterns)

    def split_indent(self, line: str) -> Tuple[int, str]:
        """Width of the leading indent run and the text after it"""
        if self.indent_char == " ":
            rest = line.lstrip(" \t")
            lead = line[:len(line) - len(rest)].expandtabs(self.tab_size)
        else:
            body = line.lstrip(" \t".replace(self.indent_char, ""))
            rest = body.lstrip(self.indent_char)
            lead = body[:len(body) - len(rest)]
        return len(lead), rest

    def measure_depth(self, line: str) -> int:
        """Depth implied by the leading indent of a line"""
        indent, _ = self.split_indent(line)
        return indent // self.indent_width

    def parse_line(self, line: str, index: int = 0) -> Optional[PlanLine]:
        """
        Parse one line of plan text

        Args:
            line: Raw line without its line terminator
            index: Position of the line in the raw text

        Returns:
            PlanLine, or None for blank and ruler lines
        """
        if not self.is_content_line(line):
            return None

        indent, rest = self.split_indent(line)
        if not rest.strip():
            # nothing but indent markers
            return None

        return PlanLine(
            index=index,
            depth=indent // self.indent_width,
            label=rest.strip(),
            raw=line,
        )

    def parse_text(self, text: str) -> Iterator[PlanLine]:
        """Yield the content lines of raw plan text in order"""
        if not text:
            return

        lines = LINE_BREAK.split(text)
        if lines[-1] == "":
            lines.pop()

        for index, line in enumerate(lines):
            parsed = self.parse_line(line, index)
            if parsed is not None:
                yield parsed
