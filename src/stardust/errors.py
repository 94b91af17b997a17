"""Error types with formatted source context."""

from __future__ import annotations

from stardust.segments import Position


class ParseError(Exception):
    """Fatal tokenization error, with position and source context.

    Raised, never returned: a fatal error aborts the whole tokenization and no
    recognizer backtracks over it. ``length`` is how many characters from
    ``position`` the error covers on its line.
    """

    def __init__(self, message: str, position: Position, source: str, length: int = 1) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.length = max(1, length)
        super().__init__(self.format())

    def source_line(self) -> str:
        """Return the line the error starts on, without its line ending."""
        lines = self.source.split("\n")
        idx = self.position.line - 1
        return lines[idx].rstrip("\r") if 0 <= idx < len(lines) else ""

    def format(self, filename: str = "input.html") -> str:
        line = self.source_line()
        col = self.position.column
        # Carets stay on the source line, but always show at least one
        width = max(1, min(self.length, len(line) - col + 1))

        number = str(self.position.line)
        gutter = " " * (len(number) + 1)
        return "\n".join(
            [
                f"error: {self.message}",
                f"{gutter}--> {filename}:{self.position.line}:{col}",
                f"{gutter}|",
                f"{number} | {line}",
                f"{gutter}| {' ' * (col - 1)}{'^' * width}",
            ]
        )


class UnterminatedBlockError(ParseError):
    """A block opener matched but input ended before its unescaped closer."""


class UnrecognizedContentError(ParseError):
    """No recognizer applied at a position, or one matched without progress."""


class UnexpectedEndError(ParseError):
    """A fixed-length consume ran past the end of input."""


class DelimiterError(ValueError):
    """Invalid delimiter configuration."""
