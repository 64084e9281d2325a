import pytest

from mdforge.flags import Flag, FlagSet
from mdforge.model import Callbacks, Document, Footnote, Line, Paragraph, ParaType
from mdforge.render import (
    GITHUB_CHECK,
    IS_CHECKED,
    basename_callbacks,
    h1_title,
    render_document,
)


def _doc(*paras, flags=None, **kwargs):
    return Document(code=list(paras), compiled=True,
                    flags=flags if flags is not None else FlagSet(), **kwargs)


def _para(text, align=1):
    return Paragraph(typ=ParaType.MARKUP, lines=[Line(text)], align=align)


def test_paragraph_with_emphasis():
    assert render_document(_doc(_para("hello *world*"))) == "<p>hello <em>world</em></p>"


def test_paragraphs_are_separated_by_blank_line():
    html = render_document(_doc(_para("a"), _para("b")))
    parts = html.split("\n\n")
    assert len(parts) == 2
    assert all(p.startswith("<p>") and p.endswith("</p>") for p in parts)


def test_hard_break():
    html = render_document(_doc(Paragraph(lines=[Line("one  "), Line("two")], align=1)))
    assert "<br/>" in html
    assert html.endswith("two</p>")


def test_hr():
    assert render_document(_doc(Paragraph(typ=ParaType.HR))) == "<hr />"


def test_header():
    html = render_document(_doc(Paragraph(typ=ParaType.HDR, lines=[Line("Title")], hnumber=2)))
    assert html.startswith("<h2>") and html.endswith("</h2>")
    assert "Title" in html


def test_header_toc_anchor():
    para = Paragraph(typ=ParaType.HDR, lines=[Line("Intro")], hnumber=1, label="Intro")
    doc = _doc(para, flags=FlagSet([Flag.TOC]), callbacks=Callbacks(anchor=str.upper))
    html = render_document(doc)
    assert html.startswith('<a name="INTRO"></a>\n<h1>')


def test_header_idanchor():
    para = Paragraph(typ=ParaType.HDR, lines=[Line("Intro")], hnumber=1, label="Intro")
    doc = _doc(para, flags=FlagSet([Flag.TOC, Flag.IDANCHOR]),
               callbacks=Callbacks(anchor=str.upper))
    assert render_document(doc).startswith('<h1 id="INTRO">')


def test_code_block_escapes_and_blanks():
    para = Paragraph(typ=ParaType.CODE, lines=[Line("a < b"), Line(""), Line("c & d")])
    assert render_document(_doc(para)) == "<pre><code>a &lt; b\n\nc &amp; d\n</code></pre>"


def test_code_block_language_class():
    para = Paragraph(typ=ParaType.CODE, lines=[Line("x")], lang="python")
    assert render_document(_doc(para)).startswith('<pre><code class="python">')


def test_code_formatter_callback():
    seen = []

    def fmt(text, lang):
        seen.append((text, lang))
        return "FORMATTED"

    para = Paragraph(typ=ParaType.CODE, lines=[Line("x = 1")], lang="py")
    html = render_document(_doc(para, callbacks=Callbacks(codefmt=fmt)))
    assert seen == [("x = 1\n", "py")]
    assert "FORMATTED" in html
    assert "x = 1" not in html


def test_code_formatter_returning_none_falls_back():
    para = Paragraph(typ=ParaType.CODE, lines=[Line("x = 1")])
    html = render_document(_doc(para, callbacks=Callbacks(codefmt=lambda t, l: None)))
    assert "x = 1\n" in html


def test_fenced_code_inside_paragraph():
    lines = [Line("```", is_fenced=True, fence_class="c"),
             Line("x<y", is_fenced=True), Line("```")]
    html = render_document(_doc(Paragraph(lines=lines, align=0)))
    assert html.startswith('<pre><code class="c">')
    assert "x&lt;y\n" in html
    assert html.endswith("</code></pre>\n")


def test_html_block_passthrough():
    para = Paragraph(typ=ParaType.HTML, lines=[Line("<div>"), Line(""), Line("x")])
    assert render_document(_doc(para)) == "<div>\n\nx\n"


def test_unordered_list():
    item = Paragraph(typ=ParaType.LISTITEM, children=[_para("one", align=0)])
    html = render_document(_doc(Paragraph(typ=ParaType.UL, children=[item])))
    assert html.startswith("<ul>\n<li>")
    assert "one</li>\n" in html
    assert html.endswith("</ul>\n")


def test_alpha_list():
    item = Paragraph(typ=ParaType.LISTITEM, children=[_para("one", align=0)])
    html = render_document(_doc(Paragraph(typ=ParaType.AL, children=[item])))
    assert html.startswith('<ol type="a">')
    assert html.endswith("</ol>\n")


def test_github_checkbox():
    item = Paragraph(typ=ParaType.LISTITEM, children=[_para("done", align=0)],
                     para_flags=GITHUB_CHECK | IS_CHECKED)
    html = render_document(_doc(Paragraph(typ=ParaType.UL, children=[item])))
    assert '<li class="github_checkbox">&#x2611;' in html


def test_blockquote_and_div():
    quote = Paragraph(typ=ParaType.QUOTE, children=[_para("q")])
    html = render_document(_doc(quote))
    assert html.startswith("<blockquote>") and html.endswith("</blockquote>")
    div = Paragraph(typ=ParaType.QUOTE, children=[_para("q")], ident='class="note"')
    assert render_document(_doc(div)).startswith('<div class="note">')


def test_definition_list():
    item = Paragraph(lines=[Line("term")], children=[_para("def", align=0)])
    html = render_document(_doc(Paragraph(typ=ParaType.DL, children=[item])))
    assert "<dt>term</dt>\n" in html
    assert "<dd>def</dd>" in html
    assert html.startswith("<dl>\n") and html.endswith("</dl>")


def test_table_alignment_and_cells():
    para = Paragraph(typ=ParaType.TABLE,
                     lines=[Line("a|b"), Line("-|:-:"), Line("1|2")])
    html = render_document(_doc(para))
    assert "<th>a</th>" in html
    assert '<td style="text-align:center;">2</td>' in html
    assert html.count("<tr>") == 2
    assert html.startswith("<table>\n<thead>\n")


def test_table_pads_short_rows():
    para = Paragraph(typ=ParaType.TABLE,
                     lines=[Line("a|b|c"), Line("-|-|-"), Line("1")])
    html = render_document(_doc(para))
    assert html.count("<td></td>") == 2


def test_extra_footnotes():
    note = Footnote(tag="^1", text=[_para("note", align=0)])
    doc = _doc(_para("see [^1]"), flags=FlagSet([Flag.EXTRA_FOOTNOTE]), footnotes=[note])
    html = render_document(doc)
    assert '<sup id="fnref:1"><a href="#fn:1" rel="footnote">1</a></sup>' in html
    assert '<li id="fn:1">' in html
    assert '<a href="#fnref:1" rev="footnote">&#8617;</a>' in html
    assert doc.footnote_count == 1


def test_extra_footnotes_prefix():
    note = Footnote(tag="^1", text=[_para("note", align=0)])
    doc = _doc(_para("see [^1]"), flags=FlagSet([Flag.EXTRA_FOOTNOTE]),
               footnotes=[note], ref_prefix="x")
    html = render_document(doc)
    assert '<li id="x:1">' in html
    assert "fn:1" not in html


def test_render_is_cached():
    doc = _doc(_para("a"))
    first = render_document(doc)
    assert render_document(doc) is first
    assert doc.html == first


def test_uncompiled_document_raises():
    with pytest.raises(ValueError):
        render_document(Document(code=[_para("a")]))


def test_basename_callback():
    cb = basename_callbacks("http://example.com")
    assert cb.url("/img.png") == "http://example.com/img.png"
    assert cb.url("relative") is None
    assert basename_callbacks(None).url("/x") is None


def test_basename_applied_to_links():
    doc = _doc(_para("[x](/a)", align=0), callbacks=basename_callbacks("http://example.com"))
    assert 'href="http://example.com/a"' in render_document(doc)


def test_h1_title_nested():
    header = Paragraph(typ=ParaType.HDR, lines=[Line("a > b")], hnumber=1)
    doc = _doc(_para("x"), Paragraph(typ=ParaType.QUOTE, children=[header]))
    flags = FlagSet()
    title = h1_title(doc, flags)
    assert "&gt;" in title
    assert title.startswith("a")
    assert not flags.is_set(Flag.TAGTEXT)


def test_h1_title_missing():
    h2 = Paragraph(typ=ParaType.HDR, lines=[Line("sub")], hnumber=2)
    assert h1_title(_doc(h2)) is None
    assert h1_title(None) is None