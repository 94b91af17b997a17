"""Cursor over template source with save/restore and primitive consumption."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from stardust.errors import UnexpectedEndError
from stardust.segments import Position


@dataclass(frozen=True, slots=True)
class Fragment:
    """A view into the source text, ``source[start:end]``, without copying it."""

    source: str
    start: int
    end: int

    def __str__(self) -> str:
        return self.source[self.start : self.end]

    def __len__(self) -> int:
        return self.end - self.start

    def __bool__(self) -> bool:
        return self.end > self.start

    def __repr__(self) -> str:
        return f"Fragment({str(self)!r}, {self.start}..{self.end})"


# Borrowed view or owned, assembled string
Text = Fragment | str


class Cursor:
    """Read position over an immutable source string.

    Offsets are indices into the ``str``, so they always fall on a character
    boundary. One cursor belongs to one tokenization call.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line_starts: list[int] | None = None

    @property
    def source(self) -> str:
        return self._source

    def position(self) -> int:
        return self._pos

    def reset_to(self, offset: int) -> None:
        if not 0 <= offset <= len(self._source):
            raise ValueError(f"offset {offset} outside source of length {len(self._source)}")
        self._pos = offset

    def is_at_end(self) -> bool:
        return self._pos >= len(self._source)

    def remaining(self) -> str:
        return self._source[self._pos :]

    def startswith(self, text: str) -> bool:
        return self._source.startswith(text, self._pos)

    # ------------------------------------------------------------------
    # Consumption
    # ------------------------------------------------------------------

    def _take(self, end: int) -> Fragment:
        frag = Fragment(self._source, self._pos, end)
        self._pos = end
        return frag

    def consume_count(self, n: int) -> Fragment:
        """Consume exactly n characters; fatal if fewer remain."""
        end = self._pos + n
        if end > len(self._source):
            raise UnexpectedEndError(
                f"unexpected end of input: expected {n} more character(s)",
                self.location(),
                self._source,
            )
        return self._take(end)

    def consume_until_any(self, charset: str) -> Fragment | None:
        """Consume up to the next character in charset.

        Returns None, without moving, when no such character remains; the
        caller then decides whether to take everything.
        """
        source = self._source
        for idx in range(self._pos, len(source)):
            if source[idx] in charset:
                return self._take(idx)
        return None

    def consume_while(self, predicate: Callable[[str], bool]) -> Fragment:
        """Consume the maximal run of characters satisfying predicate."""
        source = self._source
        end = self._pos
        while end < len(source) and predicate(source[end]):
            end += 1
        return self._take(end)

    def consume_all(self) -> Fragment:
        return self._take(len(self._source))

    def combine(self, fragments: Iterable[Text]) -> Text:
        """Concatenate fragments in order.

        Adjacent views of this source merge into one view; anything else
        (gaps, foreign views, owned strings) produces an owned string.
        """
        parts = list(fragments)
        if not parts:
            return Fragment(self._source, self._pos, self._pos)
        first = parts[0]
        if isinstance(first, Fragment) and first.source is self._source:
            end = first.end
            for part in parts[1:]:
                if not (isinstance(part, Fragment) and part.source is self._source):
                    break
                if part.start != end:
                    break
                end = part.end
            else:
                return Fragment(self._source, first.start, end)
        return "".join(str(p) for p in parts)

    # ------------------------------------------------------------------
    # Line/column lookup
    # ------------------------------------------------------------------

    def location(self, offset: int | None = None) -> Position:
        """Return the 1-based line/column for offset (default: current position)."""
        if offset is None:
            offset = self._pos
        if self._line_starts is None:
            starts = [0]
            for idx, ch in enumerate(self._source):
                if ch == "\n":
                    starts.append(idx + 1)
            self._line_starts = starts
        line_idx = bisect_right(self._line_starts, offset) - 1
        return Position(line_idx + 1, offset - self._line_starts[line_idx] + 1, offset)
