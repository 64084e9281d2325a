"""Block-level html generation for a compiled document."""

from __future__ import annotations

import enum
from collections.abc import Sequence

from .flags import Flag, FlagSet
from .inline import EOLN, InlineContext, reparse_to_string
from .model import Callbacks, Document, Line, Paragraph, ParaType

# Bits of Paragraph.para_flags used for list items.
GITHUB_CHECK = 0x01
IS_CHECKED = 0x02

_BLOCK_BEGIN = ("", "<p>", '<div style="text-align:center;">')
_BLOCK_END = ("", "</p>", "</div>")


class _Align(enum.IntEnum):
    NONE = 0
    CENTER = 1
    LEFT = 2
    RIGHT = 3


_ALIGN_STYLE = {
    _Align.NONE: "",
    _Align.CENTER: ' style="text-align:center;"',
    _Align.LEFT: ' style="text-align:left;"',
    _Align.RIGHT: ' style="text-align:right;"',
}


class _Renderer(InlineContext):
    """Inline context that also knows how to lay out blocks."""

    def __init__(self, document: Document) -> None:
        super().__init__(document.flags, document.callbacks,
                         document.ref_prefix, document.footnotes)

    def _emit(self, s: str) -> None:
        self._qstring(s)

    # -- anchors ----------------------------------------------------------
    def _anchor(self, label: str) -> str:
        if self.callbacks.anchor is not None:
            result = self.callbacks.anchor(label)
            if result is not None:
                return result
        return "-".join(label.split())

    # -- headers ----------------------------------------------------------
    def _header(self, para: Paragraph) -> None:
        flags = self.flags
        level = para.hnumber
        toc = bool(para.label) and flags.is_set(Flag.TOC) and not flags.is_set(Flag.STRICT)
        if flags.is_set(Flag.IDANCHOR):
            self._emit(f"<h{level}")
            if toc:
                self._emit(f' id="{self._anchor(para.label)}"')
            self._emit(">")
        else:
            if toc:
                self._emit(f'<a name="{self._anchor(para.label)}"></a>\n')
            self._emit(f"<h{level}>")
        self.push(para.lines[0].text if para.lines else "")
        self.process()
        self._emit(f"</h{level}>")

    # -- tables -----------------------------------------------------------
    def _splat(self, line: Line, dle: int, block: str, align: list[_Align], force: bool) -> int:
        text = line.text.rstrip()
        if text.endswith("|"):
            text = text[:-1]
        n = len(text)
        idx, colno = dle, 0
        self._emit("<tr>\n")
        while idx < n:
            first = idx
            if force and colno >= len(align) - 1:
                idx = n
            else:
                while idx < n and text[idx] != "|":
                    if text[idx] == "\\":
                        idx += 1
                    idx += 1
            style = _ALIGN_STYLE[align[colno]] if colno < len(align) else ""
            self._emit(f"<{block}{style}>")
            self.reparse(text[first:idx], None, "|")
            self._emit(f"</{block}>\n")
            idx += 1
            colno += 1
        if force:
            while colno < len(align):
                self._emit(f"<{block}></{block}>\n")
                colno += 1
        self._emit("</tr>\n")
        return colno

    @staticmethod
    def _alignments(dash: Line, dle: int) -> list[_Align]:
        text = dash.text
        n = len(text)
        align: list[_Align] = []
        start = dle
        while start < n:
            first = last = ""
            end = start
            while end < n and text[end] != "|":
                if text[end] == "\\":
                    end += 1
                elif not text[end].isspace():
                    first = first or text[end]
                    last = text[end]
                end += 1
            if first == ":":
                align.append(_Align.CENTER if last == ":" else _Align.LEFT)
            else:
                align.append(_Align.RIGHT if last == ":" else _Align.NONE)
            start = end + 1
        return align

    def _table(self, para: Paragraph) -> None:
        hdr, dash, *body = para.lines
        shift = 1 if hdr.text[hdr.dle:hdr.dle + 1] == "|" else 0
        align = self._alignments(dash, dash.dle + shift)

        self._emit("<table>\n<thead>\n")
        hcols = self._splat(hdr, hdr.dle + shift, "th", align, False)
        self._emit("</thead>\n")
        if hcols < len(align):
            del align[hcols:]
        else:
            align.extend([_Align.NONE] * (hcols - len(align)))

        self._emit("<tbody>\n")
        for line in body:
            self._splat(line, line.dle + shift, "td", align, True)
        self._emit("</tbody>\n</table>\n")

    # -- code -------------------------------------------------------------
    def _code_callback(self, lines: Sequence[Line], lang: str | None, fenced: bool) -> int | None:
        """Run the external code formatter; return how many lines it consumed."""
        formatter = self.callbacks.codefmt
        if formatter is None:
            return None
        chunk: list[str] = []
        end = len(lines)
        for idx, line in enumerate(lines):
            if fenced and not line.is_fenced:
                end = idx
                break
            chunk.append(line.text + "\n")
        formatted = formatter("".join(chunk), lang or None)
        if formatted is None:
            return None
        self._emit(formatted)
        return end

    def _fenced(self, lines: Sequence[Line], start: int) -> int:
        """Write a fenced block starting at ``start``; return the index that follows it."""
        opener = lines[start]
        self._emit("<pre><code")
        if opener.fence_class:
            self._emit(f' class="{opener.fence_class}"')
        self._emit(">")
        consumed = self._code_callback(lines[start:], opener.fence_class, True)
        if consumed is not None:
            after = start + consumed
        else:
            after = start + 1
            while after < len(lines) and lines[after].is_fenced:
                self._code(lines[after].text)
                self._emit("\n")
                after += 1
        self._emit("</code></pre>\n")
        return after

    def _codeblock(self, lines: Sequence[Line], lang: str | None) -> None:
        self._emit("<pre><code")
        if lang:
            self._emit(f' class="{lang}"')
        self._emit(">")
        if self._code_callback(lines, lang, False) is None:
            blanks = 0
            for line in lines:
                if len(line.text) > line.dle:
                    self._emit("\n" * blanks)
                    blanks = 0
                    self._code(line.text)
                    self._emit("\n")
                else:
                    blanks += 1
        self._emit("</code></pre>")

    # -- text blocks ------------------------------------------------------
    def _textblock(self, para: Paragraph) -> None:
        lines = para.lines
        self._emit(_BLOCK_BEGIN[para.align])
        i, n = 0, len(lines)
        while i < n:
            line = lines[i]
            if line.is_fenced:
                self.process()
                i = self._fenced(lines, i) + 1
                continue
            if line.text:
                has_next = i + 1 < n
                text = line.text
                if has_next and len(text) > 2 and text.endswith("  "):
                    self.push(text[:-2] + EOLN + "\n")
                else:
                    self.push(text.rstrip())
                    if has_next:
                        self.push("\n")
            i += 1
        self.process()
        self._emit(_BLOCK_END[para.align])

    def _html(self, lines: Sequence[Line]) -> None:
        blanks = 0
        for line in lines:
            if line.text:
                self._emit("\n" * blanks)
                blanks = 0
                self._emit(line.text + "\n")
            else:
                blanks += 1

    # -- containers -------------------------------------------------------
    def _paragraphs(self, paras: Sequence[Paragraph]) -> None:
        self.flush()
        for index, para in enumerate(paras):
            self._display(para)
            if index < len(paras) - 1:
                self.flush()
                self._emit("\n\n")

    def htmlify(self, paras: Sequence[Paragraph], block: str | None = None,
                arguments: str | None = None) -> None:
        self.flush()
        if block:
            self._emit(f"<{block} {arguments}>" if arguments else f"<{block}>")
        self._paragraphs(paras)
        if block:
            self._emit(f"</{block}>")
        self.flush()

    def _listitem(self, paras: Sequence[Paragraph], arguments: str | None, flags: int) -> None:
        self.flush()
        self._emit("<li")
        if arguments:
            self._emit(f" {arguments}")
        if flags & GITHUB_CHECK:
            self._emit(' class="github_checkbox"')
        self._emit(">")
        if flags & GITHUB_CHECK:
            self._emit("&#x2611;" if flags & IS_CHECKED else "&#x2610;")
        self._paragraphs(paras)
        self._emit("</li>")
        self.flush()

    def _deflist(self, items: Sequence[Paragraph]) -> None:
        if not items:
            return
        self._emit("<dl>\n")
        for item in items:
            for tag in item.lines:
                self._emit("<dt>")
                self.reparse(tag.text)
                self._emit("</dt>\n")
            self.htmlify(item.children, "dd", item.ident)
            self._emit("\n")
        self._emit("</dl>")

    def _list(self, typ: ParaType, items: Sequence[Paragraph]) -> None:
        if not items:
            return
        kind = "ul" if typ is ParaType.UL else "ol"
        self._emit(f"<{kind}")
        if typ is ParaType.AL:
            self._emit(' type="a"')
        self._emit(">\n")
        for item in items:
            self._listitem(item.children, item.ident, item.para_flags)
            self._emit("\n")
        self._emit(f"</{kind}>\n")

    def _display(self, para: Paragraph) -> None:
        typ = para.typ
        if typ in (ParaType.STYLE, ParaType.WHITESPACE):
            return
        if typ is ParaType.HTML:
            self._html(para.lines)
        elif typ is ParaType.CODE:
            self._codeblock(para.lines, para.lang)
        elif typ is ParaType.QUOTE:
            self.htmlify(para.children, "div" if para.ident else "blockquote", para.ident)
        elif typ in (ParaType.UL, ParaType.OL, ParaType.AL):
            self._list(typ, para.children)
        elif typ is ParaType.DL:
            self._deflist(para.children)
        elif typ is ParaType.HR:
            self._emit("<hr />")
        elif typ is ParaType.HDR:
            self._header(para)
        elif typ is ParaType.TABLE:
            self._table(para)
        elif typ is ParaType.SOURCE:
            self.htmlify(para.children)
        else:
            self._textblock(para)

    # -- footnotes --------------------------------------------------------
    def extra_footnotes(self) -> None:
        if self.reference == 0:
            return
        prefix = self.ref_prefix or "fn"
        self.out += '\n<div class="footnotes">\n<hr/>\n<ol>\n'
        number = 1
        while number <= self.reference:
            for note in self.footnotes:
                if note.refnumber == number and note.referenced:
                    self.out += f'<li id="{prefix}:{number}">\n'
                    self.htmlify(note.text)
                    self.out += (f'<a href="#{prefix}ref:{number}" rev="footnote">'
                                 "&#8617;</a></li>\n")
            number += 1
        self.out += "</ol>\n</div>\n"


def render_document(document: Document) -> str:
    """Generate the html for a compiled document; the result is cached on it."""
    if not document.compiled:
        raise ValueError("document is not compiled")
    if document.html is None:
        renderer = _Renderer(document)
        renderer.htmlify(document.code)
        flags = document.flags
        if flags.is_set(Flag.EXTRA_FOOTNOTE) and not flags.is_set(Flag.STRICT):
            renderer.extra_footnotes()
        document.html = renderer.out
        document.footnote_count = renderer.reference
    return document.html


def basename_callbacks(base: str | None) -> Callbacks:
    """Callbacks that put ``base`` in front of every absolute ('/'-rooted) link."""

    def url(link: str) -> str | None:
        if base and link.startswith("/"):
            return base + link
        return None

    return Callbacks(url=url)


def _find_h1(paras: Sequence[Paragraph]) -> Paragraph | None:
    for para in paras:
        if para.typ is ParaType.HDR and para.hnumber == 1:
            return para
        if para.children:
            found = _find_h1(para.children)
            if found is not None:
                return found
    return None


def h1_title(document: Document | None, flags: FlagSet | None = None) -> str | None:
    """The first level-one header of the document, rendered as tag text."""
    if document is None:
        return None
    header = _find_h1(document.code)
    if header is None or not header.lines:
        return None
    line_flags = flags.copy() if flags is not None else FlagSet()
    line_flags.set(Flag.TAGTEXT)
    return reparse_to_string(header.lines[0].text, line_flags) or None