import pytest

from mdforge.flags import Flag, FlagSet
from mdforge.model import (
    Document,
    Line,
    Paragraph,
    ParaType,
    dump_tree,
    gfm_document,
)


def texts(doc):
    return [line.text for line in doc.content]


def test_gfm_lines_get_hard_breaks():
    doc = gfm_document("a\nb\n")
    assert texts(doc) == ["a  ", "b  "]


def test_gfm_last_line_without_newline_has_no_break():
    doc = gfm_document("a\nb")
    assert texts(doc) == ["a  ", "b"]


def test_gfm_pandoc_header():
    doc = gfm_document("% Title\n% Author\n% Date\nbody\n")
    assert doc.title() == "Title"
    assert doc.author() == "Author"
    assert doc.date() == "Date"
    assert len(doc.content) == 1
    assert doc.content[0].text.startswith("body")


def test_gfm_noheader_keeps_lines():
    doc = gfm_document("%T\n%A\n%D\nbody\n", FlagSet([Flag.NOHEADER]))
    assert doc.title() is None
    assert doc.author() is None
    assert len(doc.content) == 4
    assert doc.content[0].text == "%T"


def test_gfm_two_percent_lines_are_not_a_header():
    doc = gfm_document("%a\n%b\nc\n")
    assert doc.title() is None
    assert len(doc.content) == 3


def test_gfm_tabs_expand_and_dle():
    doc = gfm_document("\tx")
    line = doc.content[0]
    assert line.text == " " * doc.tabstop + "x"
    assert line.dle == doc.tabstop


def test_gfm_control_characters_dropped():
    doc = gfm_document("a\x01b")
    assert texts(doc) == ["ab"]


def test_gfm_does_not_change_given_flags():
    flags = FlagSet([Flag.STRICT])
    doc = gfm_document("x", flags)
    doc.flags.set(Flag.TOC)
    assert not flags.is_set(Flag.TOC)


def test_header_value_empty_is_none():
    doc = Document(title_line=Line(text="   ", dle=3))
    assert doc.title() is None
    doc.title_line = Line(text="  hi", dle=2)
    assert doc.title() == "hi"


def test_css_collects_nested_styles():
    style = Paragraph(ParaType.STYLE, lines=[Line("p {}"), Line("a {}")])
    doc = Document(code=[Paragraph(ParaType.QUOTE, children=[style])], compiled=True)
    assert doc.css() == "p {}\na {}\n"


def test_css_without_styles_is_empty():
    doc = Document(code=[Paragraph(ParaType.MARKUP, lines=[Line("x")])], compiled=True)
    assert doc.css() == ""


def test_css_requires_compiled():
    with pytest.raises(ValueError):
        Document().css()


def test_dump_requires_compiled():
    with pytest.raises(ValueError):
        dump_tree(Document(), "t")


def test_dump_single_paragraph():
    doc = Document(code=[Paragraph(ParaType.MARKUP, lines=[Line("x")])], compiled=True)
    assert dump_tree(doc, "doc") == "doc-----[markup, 1 line]\n"


def test_dump_two_paragraphs():
    doc = Document(
        code=[Paragraph(ParaType.MARKUP, lines=[Line("x")]), Paragraph(ParaType.HR)],
        compiled=True,
    )
    assert dump_tree(doc, "doc") == "doc--+--[markup, 1 line]\n     `--[hr]\n"


def test_dump_nested():
    inner = Paragraph(ParaType.MARKUP, lines=[Line("x")])
    doc = Document(code=[Paragraph(ParaType.QUOTE, children=[inner])], compiled=True)
    assert dump_tree(doc, "t") == "t-----[quote]-----[markup, 1 line]\n"


def test_dump_header_ident_flags_and_align():
    para = Paragraph(
        ParaType.HDR, hnumber=2, ident="x", para_flags=0x1F, align=2,
        lines=[Line("a"), Line("b")],
    )
    out = dump_tree(Document(code=[para], compiled=True), "t")
    assert out.startswith("t-----")
    assert "[h2 x 1f, <center>, 2 lines]" in out
    assert out.endswith("\n")
    assert out.startswith("t")
    assert "mystery" not in out


def test_dump_unknown_type_name():
    out = dump_tree(Document(code=[Paragraph(ParaType.AL)], compiled=True), "t")
    assert "[mystery node!]" in out