"""Stardust template tokenizer."""

from __future__ import annotations

from stardust.delimiters import DEFAULT_DELIMITERS, Delimiters
from stardust.errors import (
    DelimiterError,
    ParseError,
    UnexpectedEndError,
    UnrecognizedContentError,
    UnterminatedBlockError,
)
from stardust.lexer import tokenize
from stardust.segments import Position, Segment, SegmentType, Span, unparse

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_DELIMITERS",
    "DelimiterError",
    "Delimiters",
    "ParseError",
    "Position",
    "Segment",
    "SegmentType",
    "Span",
    "UnexpectedEndError",
    "UnrecognizedContentError",
    "UnterminatedBlockError",
    "tokenize",
    "unparse",
]
