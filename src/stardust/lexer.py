"""Stardust tokenizer: splits template source into literal, expression, and statement segments."""

from __future__ import annotations

from functools import lru_cache

from stardust.combinators import Parser, literal, nothing, parser, select, take_until, whitespace
from stardust.cursor import Cursor, Fragment, Text
from stardust.delimiters import DEFAULT_DELIMITERS, Delimiters
from stardust.errors import UnrecognizedContentError
from stardust.outcome import Match, Outcome
from stardust.segments import Segment, SegmentType, Span

# What one grammar step yields; the lexer attaches raw text and span
Item = tuple[SegmentType, Text]


@lru_cache(maxsize=16)
def build_grammar(delimiters: Delimiters = DEFAULT_DELIMITERS) -> Parser[Item]:
    """Build the ordered-choice grammar for one delimiter configuration.

    Priority order is fixed: escapes, expression block, statement block,
    component (reserved), literal run.
    """
    d = delimiters

    escape = select(
        literal(d.expression_escape).map(lambda _: d.expression_open),
        literal(d.statement_escape).map(lambda _: d.statement_open),
    ).map(lambda text: (SegmentType.LITERAL, text))

    expression = (
        literal(d.expression_open)
        .ignore_then(take_until(d.expression_close, d.expression_close_escape))
        .then_ignore(literal(d.expression_close))
        .map(lambda text: (SegmentType.EXPRESSION, text))
    )

    statement = (
        literal(d.statement_open)
        .ignore_then(whitespace().optional())
        .ignore_then(take_until(d.statement_close, d.statement_close_escape))
        .then_ignore(literal(d.statement_close))
        .map(lambda text: (SegmentType.STATEMENT, text))
    )

    # Child-template inclusion is not implemented yet
    component = nothing()

    starters = d.starters

    @parser
    def literal_run(cursor: Cursor) -> Outcome[Item]:
        if cursor.is_at_end():
            return None
        # The lead character may itself be a starter that matched nothing above
        lead = cursor.consume_count(1)
        rest = cursor.consume_until_any(starters)
        if rest is None:
            rest = cursor.consume_all()
        return Match((SegmentType.LITERAL, cursor.combine([lead, rest])))

    return select(escape, expression, statement, component, literal_run)


class Lexer:
    """Tokenize template source into a list of Segment objects."""

    def __init__(
        self,
        source: str,
        filename: str = "input.html",
        delimiters: Delimiters | None = None,
    ) -> None:
        self._source = source
        self._filename = filename
        self._cursor = Cursor(source)
        self._grammar = build_grammar(delimiters if delimiters is not None else DEFAULT_DELIMITERS)

    def tokenize(self) -> list[Segment]:
        """Tokenize the full source; raises on the first fatal error."""
        cursor = self._cursor
        segments: list[Segment] = []
        while not cursor.is_at_end():
            start = cursor.position()
            result = self._grammar.parse(cursor)
            if result is None:
                raise self._error("unrecognized content", start)
            end = cursor.position()
            if end <= start:
                raise self._error("tokenizer made no progress", start)
            kind, text = result.value
            raw = Fragment(self._source, start, end)
            segments.append(
                Segment(kind, text, raw, Span(cursor.location(start), cursor.location(end)))
            )
        return segments

    def _error(self, message: str, offset: int) -> UnrecognizedContentError:
        return UnrecognizedContentError(message, self._cursor.location(offset), self._source)


def tokenize(
    source: str,
    filename: str = "input.html",
    delimiters: Delimiters | None = None,
) -> list[Segment]:
    """Convenience function: tokenize source text and return the segment list."""
    return Lexer(source, filename, delimiters).tokenize()
