"""Test segment model and rendering segments back to template text."""

import pytest

from stardust.cursor import Fragment
from stardust.delimiters import Delimiters
from stardust.segments import Position, Segment, SegmentType, Span, unparse

from .conftest import pairs


def _literal_text(segments):
    return "".join(s.value for s in segments if s.type == SegmentType.LITERAL)


class TestSegment:
    def test_value_of_view(self):
        pos = Position(1, 1, 0)
        seg = Segment(SegmentType.LITERAL, Fragment("abc", 0, 2), Fragment("abc", 0, 2), Span(pos, pos))
        assert seg.value == "ab"
        assert seg.borrowed

    def test_value_of_owned(self):
        pos = Position(1, 1, 0)
        seg = Segment(SegmentType.LITERAL, "{", Fragment("{{", 0, 2), Span(pos, pos))
        assert seg.value == "{"
        assert not seg.borrowed


class TestUnparse:
    def test_plain(self, lex):
        source = "<div>{x}</div><# y #>"
        assert unparse(lex(source)) == "<div>{x}</div><#y #>"

    def test_reescapes_openers(self, lex):
        assert unparse(lex("{{<##")) == "{{<##"

    def test_reescapes_closers(self, lex):
        assert unparse(lex("{a}}b}<# c ##> #>")) == "{a}}b}<#c ##> #>"

    @pytest.mark.parametrize(
        "source",
        [
            "Hello, World!",
            "<p>{{literal}} and {expr}</p>",
            "<ul><# for x in xs { #><li>{x}</li><# } #></ul>",
            "a <## b ##> {c}}}",
            "<<{{<##<#x#>{y}<",
        ],
    )
    def test_input_equivalent(self, lex, source):
        first = lex(source)
        second = lex(unparse(first))
        blocks = [p for p in pairs(first) if p[0] != SegmentType.LITERAL]
        assert [p for p in pairs(second) if p[0] != SegmentType.LITERAL] == blocks
        assert _literal_text(second) == _literal_text(first)

    def test_alternate_delimiters(self, lex):
        d = Delimiters(expression_open="[[", expression_close="]]")
        segments = lex("[[[ [[x]]] ]]", delimiters=d)
        assert unparse(segments, d) == "[[[ [[x]]] ]]"

    def test_component_not_supported(self):
        pos = Position(1, 1, 0)
        seg = Segment(SegmentType.COMPONENT, "", Fragment("", 0, 0), Span(pos, pos))
        with pytest.raises(ValueError):
            unparse([seg])
