"""--debug segment dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from stardust.segments import Segment


def dump_segments(segments: list[Segment], *, file: TextIO | None = None) -> None:
    """Print one line per segment to *file* (default: stderr)."""
    if file is None:
        file = sys.stderr
    file.write(f"Segments ({len(segments)})\n")
    for seg in segments:
        start = seg.span.start
        origin = "view" if seg.borrowed else "owned"
        file.write(
            f"  {start.line}:{start.column} {seg.type.name} {seg.value!r} [{origin}]\n"
        )
