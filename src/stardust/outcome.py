"""Recognizer results: a match, a no-match, or a fatal error.

A recognizer returns ``Match(value)`` when it applies and ``None`` when it
does not (leaving the cursor untouched). Fatal errors are raised as
``stardust.errors.ParseError`` and pass straight through ordered choice.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Match(Generic[T]):
    """A successful recognition; the cursor has moved past the matched input."""

    value: T


Outcome = Match[T] | None
