"""Inline markup: links, images, code spans, emphasis, smart punctuation and escapes."""

from __future__ import annotations

import random
import string
from dataclasses import dataclass, field

from .emphasis import BlockType, EmBlock, render_emphasis
from .flags import Flag, FlagSet
from .model import Callbacks, Footnote

EOLN = "\r"  # hard line break token

_PUNCT = frozenset(string.punctuation)
_SPACE = frozenset(" \t\n\r\v\f")


def _isalnum(c: str | None) -> bool:
    return c is not None and c.isascii() and c.isalnum()


def _isalpha(c: str | None) -> bool:
    return c is not None and c.isascii() and c.isalpha()


def _isdigit(c: str | None) -> bool:
    return c is not None and c in "0123456789"


def _ispunct(c: str | None) -> bool:
    return c is not None and c in _PUNCT


def _isspace(c: str | None) -> bool:
    return c is not None and c in _SPACE


_PROTOCOLS = ("https:", "http:", "news:", "ftp:")


def _isautoprefix(text: str) -> bool:
    lowered = text.lower()
    return any(lowered.startswith(p) for p in _PROTOCOLS)


@dataclass(frozen=True)
class _LinkyType:
    pat: str
    link_pfx: str | None
    link_sfx: str | None
    wxh: bool
    text_pfx: str | None
    text_sfx: str | None
    flags: FlagSet
    is_url: bool


_IMAGE = _LinkyType("", '<img src="', '"', True, ' alt="', '" />',
                    FlagSet([Flag.NOIMAGE, Flag.TAGTEXT, Flag.ALT_AS_TITLE]), True)
_LINK = _LinkyType("", '<a href="', '"', False, ">", "</a>", FlagSet([Flag.NOLINKS]), True)

_SPECIALS = (
    _LinkyType("id:", '<span id="', '"', False, ">", "</span>", FlagSet(), False),
    _LinkyType("raw:", None, None, False, None, None, FlagSet([Flag.NOHTML]), False),
    _LinkyType("lang:", '<span lang="', '"', False, ">", "</span>", FlagSet(), False),
    _LinkyType("abbr:", '<abbr title="', '"', False, ">", "</abbr>", FlagSet(), False),
    _LinkyType("class:", '<span class="', '"', False, ">", "</span>", FlagSet(), False),
)

_SMARTIES = (
    ("'", "'s|", "rsquo", 0),
    ("'", "'t|", "rsquo", 0),
    ("'", "'re|", "rsquo", 0),
    ("'", "'ll|", "rsquo", 0),
    ("'", "'ve|", "rsquo", 0),
    ("'", "'m|", "rsquo", 0),
    ("'", "'d|", "rsquo", 0),
    ("-", "---", "mdash", 2),
    ("-", "--", "ndash", 1),
    (".", "...", "hellip", 2),
    (".", ". . .", "hellip", 4),
    ("(", "(c)", "copy", 2),
    ("(", "(r)", "reg", 2),
    ("(", "(tm)", "trade", 3),
    ("3", "|3/4|", "frac34", 2),
    ("3", "|3/4ths|", "frac34", 2),
    ("1", "|1/2|", "frac12", 2),
    ("1", "|1/4|", "frac14", 2),
    ("1", "|1/4th|", "frac14", 2),
    ("&", "&#0;", None, 3),
)


def _pseudo(link: str) -> _LinkyType | None:
    lowered = link.lower()
    for tag in _SPECIALS:
        if len(link) > len(tag.pat) and lowered.startswith(tag.pat):
            return tag
    return None


def _safelink(link: str) -> bool:
    colon = link.find(":")
    if not link or colon < 0:
        return True
    if not _isalpha(link[0]):
        return True
    if any(not (_isalnum(ch) or ch in ".+-") for ch in link[1:colon]):
        return True
    return _isautoprefix(link)


def _maybe_address(text: str) -> bool:
    i, n = 0, len(text)
    while i < n and (_isalnum(text[i]) or text[i] in "._-+*"):
        i += 1
    if not (i < n and text[i] == "@"):
        return False
    i += 1
    if i < n and text[i] == ".":
        return False
    ok = False
    while i < n and (_isalnum(text[i]) or text[i] in "._-+"):
        if text[i] == "." and n - i > 1:
            ok = True
        i += 1
    return ok if i == n else False


def _tag_key(tag: str) -> str:
    return " ".join(tag.split()).lower()


@dataclass
class _Notes:
    notes: list[Footnote] = field(default_factory=list)
    reference: int = 0


class InlineContext:
    """Turns inline markdown into html; output goes through an emphasis queue into ``out``."""

    def __init__(self, flags: FlagSet | None = None, callbacks: Callbacks | None = None,
                 ref_prefix: str | None = None, footnotes: list[Footnote] | None = None) -> None:
        self.flags = flags.copy() if flags is not None else FlagSet()
        self.callbacks = callbacks if callbacks is not None else Callbacks()
        self.ref_prefix = ref_prefix
        self._notes = _Notes(footnotes if footnotes is not None else [])
        self.esc: tuple[str, ...] = ()
        self.out = ""
        self.last: str | None = None
        self._in = ""
        self._isp = 0
        self._q: list[EmBlock] = []
        self._quotes = 0

    # -- shared footnote state --------------------------------------------
    @property
    def footnotes(self) -> list[Footnote]:
        return self._notes.notes

    @property
    def reference(self) -> int:
        """How many extra-style footnotes have been referenced so far."""
        return self._notes.reference

    # -- input buffer -----------------------------------------------------
    def push(self, text: str) -> None:
        """Append text to the input waiting to be processed."""
        self._in += text

    def _peek(self, i: int) -> str | None:
        j = self._isp - 1 + i
        return self._in[j] if 0 <= j < len(self._in) else None

    def _pull(self) -> str | None:
        if self._isp < len(self._in):
            c = self._in[self._isp]
            self._isp += 1
            return c
        return None

    def _seek(self, pos: int) -> None:
        self._isp = pos
        self.last = None

    def _shift(self, i: int) -> None:
        if self._isp + i >= 0:
            self._isp += i

    def _isthisspace(self, i: int) -> bool:
        c = self._peek(i)
        if c is None:
            return True
        if ord(c) >= 0x80:
            return False
        return _isspace(c) or c < " "

    def _isthisalnum(self, i: int) -> bool:
        return _isalnum(self._peek(i))

    def _isthisnonword(self, i: int) -> bool:
        return self._isthisspace(i) or _ispunct(self._peek(i))

    # -- output queue -----------------------------------------------------
    def _qchar(self, c: str) -> None:
        if not self._q:
            self._q.append(EmBlock())
        self._q[-1].text += c

    def _qstring(self, s: str) -> None:
        if s:
            self._qchar(s)

    def _qem(self, c: str, count: int) -> None:
        kind = BlockType.STAR if c == "*" else BlockType.UNDER
        self._q.append(EmBlock(type=kind, count=count, char=c))
        self._q.append(EmBlock())

    def flush(self) -> str:
        """Resolve queued emphasis, append the result to ``out`` and return it."""
        chunk = render_emphasis(self._q) if self._q else ""
        self._q = []
        self.out += chunk
        return chunk

    def _cputc(self, c: str) -> None:
        self._qstring({"&": "&amp;", ">": "&gt;", "<": "&lt;"}.get(c, c))

    # -- recursion --------------------------------------------------------
    def reparse(self, text: str, flags: FlagSet | None = None, esc: str | None = None) -> None:
        """Render ``text`` in a child context and queue the result here."""
        sub = InlineContext(self.flags, self.callbacks, self.ref_prefix)
        sub._notes = self._notes
        if flags is not None:
            sub.flags.update(flags)
        sub.esc = (esc,) + self.esc if esc else self.esc
        sub.push(text)
        sub.process()
        sub.flush()
        self._qstring(sub.out)
        self.last = sub.last

    def _escaped(self, c: str | None) -> bool:
        return c is not None and any(c in e for e in self.esc)

    # -- urls -------------------------------------------------------------
    def _puturl(self, s: str, display: bool) -> None:
        if s and s[0] == "<" and s[-1] == ">":
            s = s[1:-1]
        i, n = 0, len(s)
        while i < n:
            c = s[i]
            i += 1
            if c == "\\" and i < n:
                c = s[i]
                i += 1
                if not (_ispunct(c) or _isspace(c)):
                    self._qchar("\\")
            if c == "&":
                self._qstring("&amp;")
            elif c == "<":
                self._qstring("&lt;")
            elif c == '"':
                self._qstring("%22")
            elif _isalnum(c) or _ispunct(c) or (display and _isspace(c)):
                self._qchar(c)
            elif c == EOLN:
                self._qstring("  ")
            else:
                self._qstring("".join(f"%{b:02X}" for b in c.encode("utf-8")))

    def _eatspace(self) -> str | None:
        while _isspace(c := self._peek(1)):
            self._pull()
        return c

    def _parenthetical(self, opener: str, closer: str) -> int | None:
        indent, size = 1, 0
        while indent:
            c = self._pull()
            if c is None:
                return None
            if c == "\\" and self._peek(1) in (opener, closer):
                size += 1
                self._pull()
            elif c == opener:
                indent += 1
            elif c == closer:
                indent -= 1
            size += 1
        return size - 1 if size else 0

    def _linkylabel(self) -> str | None:
        start = self._isp
        size = self._parenthetical("[", "]")
        return None if size is None else self._in[start:start + size]

    def _linkytitle(self, quote: str, ref: Footnote) -> bool:
        whence = title = self._isp
        while (c := self._pull()) is not None:
            end = self._isp
            if c == quote and self._eatspace() == ")":
                ref.title = self._in[title + 1:title + 1 + max(0, end - title - 2)]
                return True
        self._seek(whence)
        return False

    def _linkysize(self, ref: Footnote) -> bool:
        whence = self._isp
        if _isspace(self._peek(0)):
            self._pull()
            width = height = 0
            c = self._pull()
            while _isdigit(c):
                width = width * 10 + int(c)
                c = self._pull()
            if c == "x":
                c = self._pull()
                while _isdigit(c):
                    height = height * 10 + int(c)
                    c = self._pull()
                if _isspace(c):
                    c = self._eatspace()
                if c == ")" or (c in ("'", '"') and self._linkytitle(c, ref)):
                    ref.height, ref.width = height, width
                    return True
        self._seek(whence)
        return False

    def _linkybroket(self, image: bool, ref: Footnote) -> bool:
        start, size = self._isp, 0
        while (c := self._pull()) != ">":
            if c is None:
                return False
            if c == "\\" and _ispunct(self._peek(2)):
                size += 1
                self._pull()
            size += 1
        ref.link = self._in[start:start + size]
        c = self._eatspace()
        if c in ("'", '"') and self._linkytitle(c, ref):
            good = True
        elif image and c == "=" and self._linkysize(ref):
            good = True
        else:
            good = c == ")"
        if good:
            if self._peek(1) == ")":
                self._pull()
            ref.link = ref.link.rstrip()
        return good

    def _linkyurl(self, image: bool, ref: Footnote) -> bool:
        c = self._eatspace()
        if c is None:
            return False
        trim = False
        if c == "<":
            self._pull()
            if not self.flags.is_set(Flag.COMPAT_1):
                return self._linkybroket(image, ref)
            trim = True
        start, size = self._isp, 0
        while (c := self._peek(1)) != ")":
            if c is None:
                return False
            if c in ('"', "'") and self._linkytitle(c, ref):
                break
            if image and c == "=" and self._linkysize(ref):
                break
            if c == "\\" and _ispunct(self._peek(2)):
                size += 1
                self._pull()
            self._pull()
            size += 1
        if self._peek(1) == ")":
            self._pull()
        ref.link = self._in[start:start + size].rstrip()
        if trim and ref.link.endswith(">"):
            ref.link = ref.link[:-1]
        return True

    # -- links ------------------------------------------------------------
    def _printlinkyref(self, tag: _LinkyType, link: str) -> None:
        if self.flags.is_set(Flag.IS_LABEL):
            return
        self._qstring(tag.link_pfx or "")
        if tag.is_url:
            edit = self.callbacks.url(link) if self.callbacks.url else None
            self._puturl(edit if edit else link[len(tag.pat):], False)
        else:
            self.reparse(link[len(tag.pat):], FlagSet([Flag.TAGTEXT]))
        self._qstring(tag.link_sfx or "")
        if self.callbacks.flags and (edit := self.callbacks.flags(link)):
            self._qchar(" ")
            self._qstring(edit)

    def _prefix(self) -> str:
        return self.ref_prefix or "fn"

    def _extra_linky(self, text: str, ref: Footnote) -> bool:
        if ref.referenced:
            return False
        if self.flags.is_set(Flag.IS_LABEL):
            self.reparse(text, _LINK.flags)
        else:
            ref.referenced = True
            self._notes.reference += 1
            ref.refnumber = n = self._notes.reference
            p = self._prefix()
            self._qstring(f'<sup id="{p}ref:{n}"><a href="#{p}:{n}" rel="footnote">{n}</a></sup>')
        return True

    def _linkyformat(self, text: str, image: bool, ref: Footnote) -> bool:
        flags = self.flags
        if image:
            tag = _IMAGE
        elif (special := _pseudo(ref.link)) is not None:
            tag = special
            if flags.is_set(Flag.NO_EXT) or flags.is_set(Flag.STRICT) or flags.is_set(Flag.SAFELINK):
                return False
        elif (flags.is_set(Flag.SAFELINK) and not flags.is_set(Flag.STRICT)
              and not _safelink(ref.link)):
            return False
        else:
            tag = _LINK

        if flags.any_of(tag.flags):
            return False

        if flags.is_set(Flag.IS_LABEL):
            self.reparse(text, tag.flags)
        elif tag.link_pfx:
            self._printlinkyref(tag, ref.link)
            if tag.wxh:
                if ref.height:
                    self._qstring(f' height="{ref.height}"')
                if ref.width:
                    self._qstring(f' width="{ref.width}"')
            if ref.title or (flags.is_set(Flag.ALT_AS_TITLE) and tag.flags.is_set(Flag.ALT_AS_TITLE)):
                self._qstring(' title="')
                self.reparse(ref.title or text, FlagSet([Flag.TAGTEXT]))
                self._qchar('"')
            self._qstring(tag.text_pfx or "")
            self.reparse(text, tag.flags)
            self._qstring(tag.text_sfx or "")
        else:
            self._qstring(ref.link[len(tag.pat):])
        return True

    def _lookup(self, tag: str) -> Footnote | None:
        key = _tag_key(tag)
        return next((n for n in self._notes.notes if _tag_key(n.tag) == key), None)

    def _linkylinky(self, image: bool) -> bool:
        start = self._isp
        status = False
        name = self._linkylabel()
        if name is not None:
            if self._peek(1) == "(":
                self._pull()
                key = Footnote()
                if self._linkyurl(image, key):
                    status = self._linkyformat(name, image, key)
            else:
                mark = self._isp
                extra = False
                tag: str | None = ""
                if _isspace(self._peek(1)):
                    self._pull()
                if self._peek(1) == "[":
                    self._pull()
                    tag = self._linkylabel()
                    good = tag is not None
                else:
                    self._seek(mark)
                    good = not self.flags.is_set(Flag.COMPAT_1)
                    extra = (self.flags.is_set(Flag.EXTRA_FOOTNOTE)
                             and not self.flags.is_set(Flag.STRICT)
                             and not image and name.startswith("^"))
                if good:
                    ref = self._lookup(tag or name)
                    if ref is not None:
                        status = (self._extra_linky(name, ref) if extra
                                  else self._linkyformat(name, image, ref))
        if not status:
            self._seek(start)
        return status

    def _mangle(self, text: str) -> None:
        for ch in text:
            self._qstring("&#")
            fmt = "x{:02x};" if random.random() < 0.5 else "{:02d};"
            self._qstring(fmt.format(ord(ch)))

    def _process_possible_link(self, size: int) -> bool:
        text = self._in[self._isp:self._isp + size]
        if self.flags.is_set(Flag.NOLINKS):
            return False
        mailto = 0
        if size > 7 and text.lower().startswith("mailto:"):
            address, mailto = True, 7
        else:
            address = _maybe_address(text)
        if address:
            self._qstring('<a href="')
            if not mailto:
                self._mangle("mailto:")
            self._mangle(text)
            self._qstring('">')
            self._mangle(text[mailto:])
            self._qstring("</a>")
            return True
        if _isautoprefix(text):
            self._printlinkyref(_LINK, text)
            self._qchar(">")
            self._puturl(text, True)
            self._qstring("</a>")
            return True
        return False

    @staticmethod
    def _strict_tag_prefix(c: str | None) -> bool:
        return _isalpha(c) or c in ("/", "!", "$", "?")

    def _forbidden_tag(self) -> bool:
        c = (self._peek(1) or "").upper()
        if self.flags.is_set(Flag.NOHTML):
            return True
        if c == "A" and self.flags.is_set(Flag.NOLINKS) and not self._isthisalnum(2):
            return True
        return (c == "I" and self.flags.is_set(Flag.NOIMAGE)
                and self._in[self._isp + 1:self._isp + 3].upper() == "MG"
                and not self._isthisalnum(4))

    def _maybe_tag_or_link(self) -> bool:
        if self.flags.is_set(Flag.TAGTEXT):
            return False
        size = 0
        if self._strict_tag_prefix(self._peek(1)):
            size = 1
            while (c := self._peek(size + 1)) != ">":
                if c is None or c == "<":
                    return False
                if self.flags.is_set(Flag.STRICT) and c == "`":
                    return False
                size += 1
        if size <= 0:
            return False
        if self._process_possible_link(size):
            self._shift(size + 1)
            return True
        if self._forbidden_tag():
            return False
        for i in range(size + 2):
            c = self._peek(i) or ""
            self._qstring("&amp;" if c == "&" and i > 0 else c)
        self._shift(size + 1)
        return True

    def _maybe_autolink(self) -> bool:
        size = 0
        while (c := self._peek(size + 1)) is not None:
            if c == "\\":
                if self._peek(size + 2) is not None:
                    size += 1
            elif ord(c) >= 0x80:
                pass
            elif _isspace(c) or c in "'\"()[]{}<>`" or c == EOLN:
                break
            size += 1
        if size > 1 and self._process_possible_link(size):
            self._shift(size)
            return True
        return False

    # -- ticks and code ---------------------------------------------------
    def _nrticks(self, offset: int, ch: str) -> int:
        tick = 0
        while self._peek(offset + tick) == ch:
            tick += 1
        return tick

    def _matchticks(self, ch: str, ticks: int) -> tuple[int, int]:
        subsize = subtick = 0
        size = 0
        while (c := self._peek(size + ticks)) is not None:
            if c == ch and (count := self._nrticks(size + ticks, ch)):
                if count == ticks:
                    return size, ticks
                if subtick < count < ticks:
                    subsize, subtick = size, count
                size += count
            size += 1
        if subsize:
            return subsize, subtick
        return 0, ticks

    def _code(self, s: str) -> None:
        i, n = 0, len(s)
        while i < n:
            c = s[i]
            if c == EOLN:
                self._qstring("  ")
            elif c == "\\" and i < n - 1 and self._escaped(s[i + 1]):
                i += 1
                self._cputc(s[i])
            else:
                self._cputc(c)
            i += 1

    def _delspan(self, size: int) -> None:
        self._qstring("<del>")
        start = self._isp - 1
        self.reparse(self._in[start:start + size])
        self._qstring("</del>")

    def _codespan(self, size: int) -> None:
        i = 0
        if size > 1 and self._peek(size - 1) == " ":
            size -= 1
        if self._peek(0) == " ":
            i, size = 1, size - 1
        start = self._isp + i - 1
        self._qstring("<code>")
        self._code(self._in[start:start + size])
        self._qstring("</code>")

    def _tickhandler(self, ch: str, minticks: int, allow_space: bool, spanner) -> bool:
        tick = self._nrticks(0, ch)
        if not allow_space and _isspace(self._peek(tick)):
            return False
        if tick >= minticks:
            size, endticks = self._matchticks(ch, tick)
            if size:
                if endticks < tick:
                    size += tick - endticks
                    tick = endticks
                self._shift(tick)
                spanner(size)
                self._shift(size + tick - 1)
                return True
        return False

    def _mathhandler(self, e1: str, e2: str) -> bool:
        i = 1
        while self._peek(i) is not None:
            if self._peek(i) == e1 and self._peek(i + 1) == e2:
                self._cputc(self._peek(-1) or "")
                self._cputc(self._peek(0) or "")
                for _ in range(i + 1):
                    self._cputc(self._pull() or "")
                return True
            i += 1
        return False

    # -- smartypants ------------------------------------------------------
    def _islike(self, pat: str) -> bool:
        if pat.startswith("|"):
            if not self._isthisnonword(-1):
                return False
            pat = pat[1:]
        if not pat:
            return False
        length = len(pat)
        if pat.endswith("|"):
            if not self._isthisnonword(length - 1):
                return False
            length -= 1
        for i in range(1, length):
            c = self._peek(i)
            if c is None or c.lower() != pat[i]:
                return False
        return True

    def _smartyquote(self, kind: str) -> bool:
        bit = 0x01 if kind == "s" else 0x02
        if self._quotes & bit:
            if self._isthisnonword(1):
                self._qstring(f"&r{kind}quo;")
                self._quotes &= ~bit
                return True
        elif self._isthisnonword(-1) and self._peek(1) is not None:
            self._qstring(f"&l{kind}quo;")
            self._quotes |= bit
            return True
        return False

    def _smartypants(self, c: str) -> bool:
        if (self.flags.is_set(Flag.NOPANTS) or self.flags.is_set(Flag.TAGTEXT)
                or self.flags.is_set(Flag.IS_LABEL)):
            return False
        for c0, pat, entity, shift in _SMARTIES:
            if c == c0 and self._islike(pat):
                if entity:
                    self._qstring(f"&{entity};")
                self._shift(shift)
                return True
        if c == "'":
            return self._smartyquote("s")
        if c == '"':
            return self._smartyquote("d")
        if c == "`" and self._peek(1) == "`":
            j = 2
            while (d := self._peek(j)) is not None:
                if d == "\\":
                    j += 2
                elif d == "`":
                    break
                elif d == "'" and self._peek(j + 1) == "'":
                    self._qstring("&ldquo;")
                    start = self._isp + 1
                    self.reparse(self._in[start:start + j - 2])
                    self._qstring("&rdquo;")
                    self._shift(j + 1)
                    return True
                else:
                    j += 1
        return False

    # -- main loop --------------------------------------------------------
    def _superscript(self, c: str) -> None:
        last = self.last
        if (self.flags.is_set(Flag.NOSUPERSCRIPT) or self.flags.is_set(Flag.STRICT)
                or self.flags.is_set(Flag.TAGTEXT) or last is None
                or ((_ispunct(last) or _isspace(last)) and last != ")")
                or self._isthisspace(1)):
            self._qchar(c)
            return
        sup = self._isp
        if self._peek(1) == "(":
            here = self._isp
            self._pull()
            length = self._parenthetical("(", ")")
            if length is None or length <= 0:
                self._seek(here)
                self._qchar(c)
                return
            sup += 1
        else:
            length = 0
            while self._isthisalnum(1 + length):
                length += 1
            if not length:
                self._qchar(c)
                return
            self._shift(length)
        self._qstring("<sup>")
        self.reparse(self._in[sup:sup + length], None, "()")
        self._qstring("</sup>")

    def _backslash(self) -> None:
        flags = self.flags
        c = self._pull()
        if c == "&":
            self._qstring("&amp;")
        elif c == "<":
            nxt = self._peek(1)
            if nxt is None or _isspace(nxt):
                self._qstring("&lt;")
            else:
                self._qchar("\\")
                self._shift(-1)
        elif c == "^":
            if flags.is_set(Flag.NOSUPERSCRIPT):
                self._qchar("\\")
                self._shift(-1)
            else:
                self._qchar(c)
        elif c in (":", "|"):
            if flags.is_set(Flag.NOTABLES) or flags.is_set(Flag.STRICT):
                self._qchar("\\")
                self._shift(-1)
            else:
                self._qchar(c)
        elif c is None:
            self._qchar("\\")
        else:
            if (c in "[(" and flags.is_set(Flag.LATEX) and not flags.is_set(Flag.STRICT)
                    and self._mathhandler("\\", ")" if c == "(" else "]")):
                return
            if self._escaped(c) or c in ">#.-+{}]![*_\\()`":
                self._qchar(c)
            else:
                self._qchar("\\")
                self._shift(-1)

    def process(self) -> None:
        """Render everything pushed so far into the queue, then empty the input."""
        flags = self.flags
        self._quotes = 0
        while True:
            tagtext = flags.is_set(Flag.TAGTEXT)
            if (flags.is_set(Flag.AUTOLINK) and not flags.is_set(Flag.STRICT)
                    and _isalpha(self._peek(1)) and not tagtext):
                self._maybe_autolink()

            c = self._pull()
            if c is None:
                break
            if self._smartypants(c):
                continue

            if c == "\0":
                continue
            if c == EOLN:
                self._qstring("  " if tagtext else "<br/>")
            elif c == ">":
                self._qstring("&gt;" if tagtext else c)
            elif c == '"':
                self._qstring("&quot;" if tagtext else c)
            elif c == "!":
                if self._peek(1) == "[":
                    self._pull()
                    if tagtext or not self._linkylinky(True):
                        self._qstring("![")
                else:
                    self._qchar(c)
            elif c == "[":
                if tagtext or not self._linkylinky(False):
                    self._qchar(c)
            elif c == "^":
                self._superscript(c)
            elif c in "_*":
                if (c == "_" and not flags.is_set(Flag.STRICT)
                        and self._isthisalnum(-1) and self._isthisalnum(1)):
                    self._qchar(c)
                elif self._isthisspace(-1) and self._isthisspace(1):
                    self._qchar(c)
                elif tagtext:
                    self._qchar(c)
                else:
                    rep = 1
                    while self._peek(1) == c:
                        self._pull()
                        rep += 1
                    self._qem(c, rep)
            elif c == "~":
                if (flags.is_set(Flag.NOSTRIKETHROUGH) or flags.is_set(Flag.STRICT) or tagtext
                        or not self._tickhandler(c, 2, False, self._delspan)):
                    self._qchar(c)
            elif c == "`":
                if tagtext or not self._tickhandler(c, 1, True, self._codespan):
                    self._qchar(c)
            elif c == "\\":
                self._backslash()
            elif c == "<":
                if not self._maybe_tag_or_link():
                    if flags.is_set(Flag.STRICT) and self._strict_tag_prefix(self._peek(1)):
                        self._qchar(c)
                    else:
                        self._qstring("&lt;")
            elif c == "&":
                j = 2 if self._peek(1) == "#" else 1
                while self._isthisalnum(j):
                    j += 1
                self._qstring("&amp;" if self._peek(j) != ";" else c)
            else:
                if (c == "$" and flags.is_set(Flag.LATEX) and not flags.is_set(Flag.STRICT)
                        and self._peek(1) == "$"):
                    self._pull()
                    if self._mathhandler("$", "$"):
                        continue
                    self._qchar("$")
                self.last = c
                self._qchar(c)
        self._in = ""
        self._isp = 0


def reparse_to_string(text: str, flags: FlagSet | None = None) -> str:
    """Render a fragment of inline markdown to html."""
    ctx = InlineContext(flags)
    ctx.reparse(text)
    ctx.flush()
    return ctx.out