"""Document model: lines, paragraphs, footnotes and the document that holds them."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from .flags import Flag, FlagSet

TABSTOP = 4


class ParaType(enum.Enum):
    WHITESPACE = "whitespace"
    CODE = "code"
    QUOTE = "quote"
    MARKUP = "markup"
    HTML = "html"
    STYLE = "style"
    DL = "dl"
    UL = "ul"
    OL = "ol"
    AL = "al"
    LISTITEM = "item"
    HDR = "header"
    HR = "hr"
    TABLE = "table"
    SOURCE = "source"


_TYPE_NAMES = {
    ParaType.WHITESPACE: "whitespace",
    ParaType.CODE: "code",
    ParaType.QUOTE: "quote",
    ParaType.MARKUP: "markup",
    ParaType.HTML: "html",
    ParaType.DL: "dl",
    ParaType.UL: "ul",
    ParaType.OL: "ol",
    ParaType.LISTITEM: "item",
    ParaType.HDR: "header",
    ParaType.HR: "hr",
    ParaType.TABLE: "table",
    ParaType.SOURCE: "source",
    ParaType.STYLE: "style",
}

_ALIGN_NAMES = {1: "P", 2: "center"}


@dataclass
class Line:
    """One input line; ``dle`` is the index of its first non-blank character."""

    text: str = ""
    dle: int = 0
    is_fenced: bool = False
    fence_class: str | None = None

    def value(self) -> str | None:
        """The text from the first non-blank character, or None if there is none."""
        if self.dle < 0 or self.dle >= len(self.text):
            return None
        return self.text[self.dle:] or None


def _first_nonblank(text: str) -> int:
    return len(text) - len(text.lstrip(" "))


def _make_line(raw: str, tabstop: int) -> Line:
    """Expand tabs to ``tabstop`` columns and drop other control characters."""
    out: list[str] = []
    column = 0
    for ch in raw:
        if ch == "\t":
            width = tabstop - (column % tabstop)
            out.append(" " * width)
            column += width
        elif ch >= " ":
            out.append(ch)
            column += 1
    text = "".join(out)
    return Line(text=text, dle=_first_nonblank(text))


def _trim_line(line: Line, clip: int) -> None:
    if clip >= len(line.text):
        line.text = ""
        line.dle = 0
    else:
        line.text = line.text[clip:]
        line.dle = _first_nonblank(line.text)


@dataclass
class Paragraph:
    """A block of the document, with its lines and any nested blocks."""

    typ: ParaType = ParaType.MARKUP
    lines: list[Line] = field(default_factory=list)
    children: list[Paragraph] = field(default_factory=list)
    ident: str | None = None
    lang: str | None = None
    label: str | None = None
    hnumber: int = 0
    align: int = 0
    para_flags: int = 0


@dataclass
class Footnote:
    """A reference-style link target or an extra-style footnote."""

    tag: str = ""
    link: str = ""
    title: str = ""
    height: int = 0
    width: int = 0
    refnumber: int = 0
    referenced: bool = False
    text: list[Paragraph] = field(default_factory=list)


@dataclass
class Callbacks:
    """Hooks that can rewrite link urls, add link attributes, name anchors or format code."""

    url: Callable[[str], str | None] | None = None
    flags: Callable[[str], str | None] | None = None
    anchor: Callable[[str], str | None] | None = None
    codefmt: Callable[[str, str | None], str | None] | None = None


@dataclass
class Document:
    """A markdown document: its input lines, header fields and compiled blocks."""

    content: list[Line] = field(default_factory=list)
    code: list[Paragraph] = field(default_factory=list)
    compiled: bool = False
    tabstop: int = TABSTOP
    flags: FlagSet = field(default_factory=FlagSet)
    callbacks: Callbacks = field(default_factory=Callbacks)
    ref_prefix: str | None = None
    footnotes: list[Footnote] = field(default_factory=list)
    footnote_count: int = 0
    html: str | None = None
    title_line: Line | None = None
    author_line: Line | None = None
    date_line: Line | None = None

    def title(self) -> str | None:
        return self.title_line.value() if self.title_line else None

    def author(self) -> str | None:
        return self.author_line.value() if self.author_line else None

    def date(self) -> str | None:
        return self.date_line.value() if self.date_line else None

    def css(self) -> str:
        """Every line of every style block, each followed by a newline."""
        if not self.compiled:
            raise ValueError("document is not compiled")
        return "".join(_stylesheets(self.code))


def _stylesheets(paragraphs: Iterable[Paragraph]) -> Iterable[str]:
    for para in paragraphs:
        if para.typ is ParaType.STYLE:
            for line in para.lines:
                yield line.text + "\n"
        if para.children:
            yield from _stylesheets(para.children)


class _PrefixStack:
    """Tree-drawing prefixes: each frame holds an indent and a connector character."""

    def __init__(self) -> None:
        self.frames: list[list] = []

    def push(self, indent: int, char: str) -> None:
        self.frames.append([indent, char])

    def pop(self) -> None:
        self.frames.pop()

    def change(self, char: str) -> None:
        if self.frames and self.frames[-1][1] in "+|":
            self.frames[-1][1] = char

    def render(self) -> str:
        if not self.frames:
            return ""
        top = self.frames[-1]
        parts: list[str] = []
        if top[1] in "+-":
            parts.append("--" + top[1])
            top[1] = " " if top[1] == "-" else "|"
        else:
            for i, frame in enumerate(self.frames):
                if i:
                    parts.append("  ")
                parts.append(" " * max(frame[0] + 2, 1) + frame[1])
                if frame[1] == "`":
                    frame[1] = " "
        parts.append("--")
        return "".join(parts)


def _dump(paragraphs: list[Paragraph], stack: _PrefixStack, out: list[str]) -> None:
    for index, para in enumerate(paragraphs):
        if index == len(paragraphs) - 1:
            stack.change("`")
        out.append(stack.render())

        if para.typ is ParaType.HDR:
            label = f"[h{para.hnumber}"
        else:
            label = f"[{_TYPE_NAMES.get(para.typ, 'mystery node!')}"
        if para.ident:
            label += f" {para.ident}"
        if para.para_flags:
            label += f" {para.para_flags:x}"
        if para.align > 1:
            label += f", <{_ALIGN_NAMES.get(para.align, '')}>"
        count = len(para.lines)
        if count:
            label += f", {count} line{'' if count == 1 else 's'}"
        label += "]"
        out.append(label)

        if para.children:
            stack.push(len(label), "+" if len(para.children) > 1 else "-")
            _dump(para.children, stack, out)
            stack.pop()
        else:
            out.append("\n")


def dump_tree(document: Document, title: str) -> str:
    """Draw the compiled block structure of ``document`` as a text tree."""
    if not document.compiled:
        raise ValueError("document is not compiled")
    stack = _PrefixStack()
    out = [title]
    stack.push(len(title), "+" if len(document.code) > 1 else "-")
    _dump(document.code, stack, out)
    return "".join(out)


def gfm_document(text: str, flags: FlagSet | None = None) -> Document:
    """Build a document where every line break is a hard break.

    Three leading lines that start with '%' become the title, author and
    date, unless the NOHEADER flag is set.
    """
    flags = flags.copy() if flags is not None else FlagSet()
    doc = Document(flags=flags, tabstop=TABSTOP)
    if flags.is_set(Flag.TABSTOP) or flags.is_set(Flag.STRICT):
        doc.tabstop = 4

    pandoc: int | None = 0
    current: list[str] = []
    for ch in text:
        if ch == "\n":
            if pandoc is not None and pandoc < 3:
                if current and current[0] == "%":
                    pandoc += 1
                else:
                    pandoc = None
            if pandoc is None:
                current.append("  ")
            doc.content.append(_make_line("".join(current), doc.tabstop))
            current = []
        elif ch.isprintable() or ch.isspace() or ord(ch) >= 0x80:
            current.append(ch)

    if current:
        doc.content.append(_make_line("".join(current), doc.tabstop))

    if pandoc == 3 and not flags.is_set(Flag.NOHEADER):
        doc.title_line, doc.author_line, doc.date_line = doc.content[:3]
        for line in doc.content[:3]:
            _trim_line(line, 1)
        doc.content = doc.content[3:]

    return doc