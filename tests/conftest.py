"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from stardust.cursor import Cursor
from stardust.lexer import tokenize
from stardust.segments import Segment, SegmentType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns segments."""

    def _lex(source: str, **kwargs) -> list[Segment]:
        return tokenize(source, **kwargs)

    return _lex


@pytest.fixture
def cursor():
    """Return a factory for fresh cursors."""

    def _cursor(source: str, position: int = 0) -> Cursor:
        c = Cursor(source)
        c.reset_to(position)
        return c

    return _cursor


def pairs(segments: list[Segment]) -> list[tuple[SegmentType, str]]:
    """Reduce segments to (type, value) pairs for comparison."""
    return [(s.type, s.value) for s in segments]


def assert_types(segments: list[Segment], expected: list[SegmentType]) -> None:
    """Assert that the segment types match the expected list."""
    actual = [s.type for s in segments]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(segments: list[Segment], expected: list[str]) -> None:
    """Assert that the segment values match the expected list."""
    actual = [s.value for s in segments]
    assert actual == expected, f"Expected {expected}, got {actual}"


LIT = SegmentType.LITERAL
EXPR = SegmentType.EXPRESSION
STMT = SegmentType.STATEMENT
