"""Backtracking parser combinators over a Cursor.

Every combinator here is a stateless value: build it once, run it against any
number of cursors. A combinator that reports no-match restores the cursor to
where it found it; a fatal error (a raised ParseError) may leave the cursor
anywhere, because tokenization stops there.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from stardust.cursor import Cursor, Fragment, Text
from stardust.errors import ParseError, UnterminatedBlockError
from stardust.outcome import Match, Outcome

T = TypeVar("T")
U = TypeVar("U")


class Parser(Generic[T]):
    """A recognizer: a function from Cursor to Outcome, plus combinator methods."""

    __slots__ = ("_fn", "name")

    def __init__(self, fn: Callable[[Cursor], Outcome[T]], name: str | None = None) -> None:
        self._fn = fn
        self.name = name or getattr(fn, "__name__", "parser")

    def parse(self, cursor: Cursor) -> Outcome[T]:
        return self._fn(cursor)

    __call__ = parse

    def __repr__(self) -> str:
        return f"<Parser {self.name}>"

    def then(self, other: Parser[U]) -> Parser[tuple[T, U]]:
        """Run self then other; atomic, so a failed second half rewinds both."""
        first, second = self, other

        def _then(cursor: Cursor) -> Outcome[tuple[T, U]]:
            start = cursor.position()
            try:
                a = first.parse(cursor)
            except ParseError:
                cursor.reset_to(start)
                raise
            if a is None:
                cursor.reset_to(start)
                return None
            # A fatal error in the second half propagates from where it happened
            b = second.parse(cursor)
            if b is None:
                cursor.reset_to(start)
                return None
            return Match((a.value, b.value))

        return Parser(_then, f"{first.name}.then({second.name})")

    def ignore_then(self, other: Parser[U]) -> Parser[U]:
        """Sequence, keeping only the second value."""
        return self.then(other).map(lambda pair: pair[1])

    def then_ignore(self, other: Parser[Any]) -> Parser[T]:
        """Sequence, keeping only the first value."""
        return self.then(other).map(lambda pair: pair[0])

    def optional(self) -> Parser[T | None]:
        inner = self

        def _optional(cursor: Cursor) -> Outcome[T | None]:
            result = inner.parse(cursor)
            if result is None:
                return Match(None)
            return result

        return Parser(_optional, f"{inner.name}.optional()")

    def map(self, fn: Callable[[T], U]) -> Parser[U]:
        inner = self

        def _map(cursor: Cursor) -> Outcome[U]:
            result = inner.parse(cursor)
            if result is None:
                return None
            return Match(fn(result.value))

        return Parser(_map, f"{inner.name}.map()")


def parser(fn: Callable[[Cursor], Outcome[T]]) -> Parser[T]:
    """Decorator: turn a plain recognizer function into a Parser."""
    return Parser(fn)


def select(*alternatives: Parser[Any]) -> Parser[Any]:
    """Ordered choice: the first alternative that matches wins.

    Each alternative starts from the same position. Fatal errors are not
    caught, so malformed delimited content is never reinterpreted as a
    different alternative.
    """
    if not alternatives:
        raise ValueError("select() needs at least one alternative")
    choices = tuple(alternatives)

    def _select(cursor: Cursor) -> Outcome[Any]:
        start = cursor.position()
        for choice in choices:
            result = choice.parse(cursor)
            if result is not None:
                return result
            cursor.reset_to(start)
        return None

    names = ", ".join(c.name for c in choices)
    return Parser(_select, f"select({names})")


def literal(text: str) -> Parser[Fragment]:
    """Match text exactly at the cursor."""
    if not text:
        raise ValueError("literal() needs a non-empty string")

    def _literal(cursor: Cursor) -> Outcome[Fragment]:
        if not cursor.startswith(text):
            return None
        return Match(cursor.consume_count(len(text)))

    return Parser(_literal, f"literal({text!r})")


def whitespace(required: bool = False) -> Parser[Fragment]:
    """Match a maximal whitespace run; empty runs match unless required."""

    def _whitespace(cursor: Cursor) -> Outcome[Fragment]:
        start = cursor.position()
        run = cursor.consume_while(str.isspace)
        if required and not run:
            cursor.reset_to(start)
            return None
        return Match(run)

    return Parser(_whitespace, "whitespace(required)" if required else "whitespace()")


def take_until(terminator: str, escaped_terminator: str) -> Parser[Text]:
    """Scan to the first unescaped terminator, which is left unconsumed.

    Each occurrence of escaped_terminator is folded to a single terminator and
    does not end the scan. Reaching end of input first is fatal.
    """
    if not terminator or not escaped_terminator:
        raise ValueError("take_until() needs non-empty markers")

    def _take_until(cursor: Cursor) -> Outcome[Text]:
        source = cursor.source
        start = cursor.position()
        pieces: list[Text] = []
        run_start = start
        idx = start
        while idx < len(source):
            if source.startswith(escaped_terminator, idx):
                pieces.append(Fragment(source, run_start, idx))
                pieces.append(terminator)
                idx += len(escaped_terminator)
                run_start = idx
            elif source.startswith(terminator, idx):
                cursor.reset_to(run_start)
                pieces.append(cursor.consume_count(idx - run_start))
                return Match(cursor.combine(pieces))
            else:
                idx += 1
        line_end = source.find("\n", start)
        if line_end == -1:
            line_end = len(source)
        # Underline the unterminated content up to the end of its first line
        raise UnterminatedBlockError(
            f"unterminated block: expected {terminator!r} before end of input",
            cursor.location(start),
            source,
            line_end - start,
        )

    return Parser(_take_until, f"take_until({terminator!r})")


def nothing() -> Parser[Any]:
    """A recognizer that never applies."""

    def _nothing(cursor: Cursor) -> Outcome[Any]:
        return None

    return Parser(_nothing, "nothing()")
