"""Segment types, source positions, and rendering segments back to template text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stardust.cursor import Fragment, Text
    from stardust.delimiters import Delimiters


class SegmentType(Enum):
    LITERAL = auto()  # output text, escapes already decoded
    EXPRESSION = auto()  # { ... } evaluated and interpolated
    STATEMENT = auto()  # <# ... #> executed, result discarded
    COMPONENT = auto()  # child-template inclusion, reserved


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Segment:
    """One classified unit of template output.

    ``text`` is the decoded content: a view into the source when it could be
    sliced out unchanged, an owned string when escapes were folded or pieces
    joined. ``raw`` always views the full source text the segment came from,
    delimiters and escape markers included.
    """

    type: SegmentType
    text: Text
    raw: Fragment
    span: Span

    @property
    def value(self) -> str:
        return str(self.text)

    @property
    def borrowed(self) -> bool:
        """True if the text is a view into the source rather than an owned copy."""
        return not isinstance(self.text, str)


def unparse(segments: list[Segment], delimiters: Delimiters | None = None) -> str:
    """Render segments back into template text that tokenizes to the same content.

    Literal text has its openers re-escaped and block text has its closers
    re-escaped. Whitespace trimmed after a statement opener is not restored.
    """
    from stardust.delimiters import DEFAULT_DELIMITERS

    d = delimiters if delimiters is not None else DEFAULT_DELIMITERS
    out: list[str] = []
    for seg in segments:
        value = seg.value
        if seg.type == SegmentType.LITERAL:
            # Longer opener first so "<#" is not split by a shorter replacement
            openers = sorted(
                [
                    (d.expression_open, d.expression_escape),
                    (d.statement_open, d.statement_escape),
                ],
                key=lambda pair: len(pair[0]),
                reverse=True,
            )
            out.append(_escape_all(value, openers))
        elif seg.type == SegmentType.EXPRESSION:
            body = value.replace(d.expression_close, d.expression_close_escape)
            out.append(f"{d.expression_open}{body}{d.expression_close}")
        elif seg.type == SegmentType.STATEMENT:
            body = value.replace(d.statement_close, d.statement_close_escape)
            out.append(f"{d.statement_open}{body}{d.statement_close}")
        else:
            raise ValueError(f"cannot unparse {seg.type.name} segment")
    return "".join(out)


def _escape_all(text: str, replacements: list[tuple[str, str]]) -> str:
    """Replace each marker with its escape in a single left-to-right pass."""
    out: list[str] = []
    i = 0
    while i < len(text):
        for marker, escape in replacements:
            if text.startswith(marker, i):
                out.append(escape)
                i += len(marker)
                break
        else:
            out.append(text[i])
            i += 1
    return "".join(out)
