"""Delimiter markers for expression and statement blocks."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from stardust.errors import DelimiterError


@dataclass(frozen=True, slots=True)
class Delimiters:
    """Opening and closing markers; escape forms are derived from them.

    An opener is escaped by repeating its last character (``{{``, ``<##``),
    a closer by repeating its first character (``}}``, ``##>``).
    """

    expression_open: str = "{"
    expression_close: str = "}"
    statement_open: str = "<#"
    statement_close: str = "#>"

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str) or not value:
                raise DelimiterError(f"{f.name} must be a non-empty string")
        if self.expression_open == self.statement_open:
            raise DelimiterError("expression and statement openers must differ")
        if self.statement_open.startswith(self.expression_open):
            # Expression blocks are tried first and would always win
            raise DelimiterError("statement opener must not start with the expression opener")
        # Escapes are tried before either block
        for escape, opener in (
            (self.expression_escape, self.statement_open),
            (self.statement_escape, self.expression_open),
        ):
            if opener.startswith(escape) or escape.startswith(opener):
                raise DelimiterError(
                    f"escape marker {escape!r} overlaps block opener {opener!r}"
                )

    @property
    def expression_escape(self) -> str:
        return self.expression_open + self.expression_open[-1]

    @property
    def statement_escape(self) -> str:
        return self.statement_open + self.statement_open[-1]

    @property
    def expression_close_escape(self) -> str:
        return self.expression_close[0] + self.expression_close

    @property
    def statement_close_escape(self) -> str:
        return self.statement_close[0] + self.statement_close

    @property
    def starters(self) -> str:
        """Characters that may begin a structured segment; literal runs stop here."""
        chars = dict.fromkeys(self.statement_open[0] + self.expression_open[0])
        return "".join(chars)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Delimiters:
        """Build from a config table, falling back to defaults for missing keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise DelimiterError(f"unknown delimiter setting(s): {', '.join(unknown)}")
        return cls(**{str(k): v for k, v in data.items()})


DEFAULT_DELIMITERS = Delimiters()
