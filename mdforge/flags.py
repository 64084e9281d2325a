"""Rendering option flags and helpers to set, clear, combine and show them."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator


class Flag(enum.IntEnum):
    """Rendering options, numbered by bit position."""

    NOLINKS = 0
    NOIMAGE = 1
    NOPANTS = 2
    NOHTML = 3
    TAGTEXT = 4
    NO_EXT = 5
    CDATA = 6
    NOSUPERSCRIPT = 7
    STRICT = 8
    NOTABLES = 9
    NOSTRIKETHROUGH = 10
    TOC = 11
    COMPAT_1 = 12
    AUTOLINK = 13
    SAFELINK = 14
    NOHEADER = 15
    TABSTOP = 16
    NODIVQUOTE = 17
    NOALPHALIST = 18
    EXTRA_FOOTNOTE = 19
    NOSTYLE = 20
    DLDISCOUNT = 21
    DLEXTRA = 22
    FENCEDCODE = 23
    IDANCHOR = 24
    GITHUBTAGS = 25
    NORMAL_LISTITEM = 26
    URLENCODEDANCHOR = 27
    LATEX = 28
    EXPLICITLIST = 29
    ALT_AS_TITLE = 30
    IS_LABEL = 31


NR_FLAGS = len(Flag)

# Display names; a leading "!" marks a flag whose name describes the unset state.
FLAG_NAMES: tuple[tuple[Flag, str], ...] = (
    (Flag.NOLINKS, "!LINKS"),
    (Flag.NOIMAGE, "!IMAGE"),
    (Flag.NOPANTS, "!PANTS"),
    (Flag.NOHTML, "!HTML"),
    (Flag.TAGTEXT, "TAGTEXT"),
    (Flag.NO_EXT, "!EXT"),
    (Flag.CDATA, "CDATA"),
    (Flag.NOSUPERSCRIPT, "!SUPERSCRIPT"),
    (Flag.STRICT, "STRICT"),
    (Flag.NOTABLES, "!TABLES"),
    (Flag.NOSTRIKETHROUGH, "!STRIKETHROUGH"),
    (Flag.TOC, "TOC"),
    (Flag.COMPAT_1, "MKD_1_COMPAT"),
    (Flag.AUTOLINK, "AUTOLINK"),
    (Flag.SAFELINK, "SAFELINK"),
    (Flag.NOHEADER, "!HEADER"),
    (Flag.TABSTOP, "TABSTOP"),
    (Flag.NODIVQUOTE, "!DIVQUOTE"),
    (Flag.NOALPHALIST, "!ALPHALIST"),
    (Flag.EXTRA_FOOTNOTE, "FOOTNOTE"),
    (Flag.NOSTYLE, "!STYLE"),
    (Flag.DLDISCOUNT, "DLDISCOUNT"),
    (Flag.DLEXTRA, "DLEXTRA"),
    (Flag.FENCEDCODE, "FENCEDCODE"),
    (Flag.IDANCHOR, "IDANCHOR"),
    (Flag.GITHUBTAGS, "GITHUBTAGS"),
    (Flag.NORMAL_LISTITEM, "NORMAL_LISTITEM"),
    (Flag.URLENCODEDANCHOR, "URLENCODEDANCHOR"),
    (Flag.LATEX, "LATEX"),
    (Flag.EXPLICITLIST, "EXPLICITLIST"),
    (Flag.ALT_AS_TITLE, "ALT_AS_TITLE"),
)


def _flag_number(flag: int) -> int | None:
    number = int(flag)
    return number if 0 <= number < NR_FLAGS else None


class FlagSet:
    """A mutable set of rendering flags; out-of-range flag numbers are ignored."""

    __slots__ = ("_bits",)

    def __init__(self, flags: Iterable[int] = ()) -> None:
        self._bits: set[Flag] = set()
        for flag in flags:
            self.set(flag)

    def set(self, flag: int) -> None:
        number = _flag_number(flag)
        if number is not None:
            self._bits.add(Flag(number))

    def clear(self, flag: int) -> None:
        number = _flag_number(flag)
        if number is not None:
            self._bits.discard(Flag(number))

    def is_set(self, flag: int) -> bool:
        number = _flag_number(flag)
        return number is not None and Flag(number) in self._bits

    __contains__ = is_set

    def copy(self) -> FlagSet:
        return FlagSet(self._bits)

    def set_bitmap(self, bits: int) -> None:
        """Set every flag whose bit is on in ``bits`` (at most 64 bits are read)."""
        for number in range(min(64, NR_FLAGS)):
            if (bits >> number) & 1:
                self.set(number)

    def update(self, other: FlagSet) -> None:
        """Add every flag that is set in ``other``."""
        self._bits |= other._bits

    def any_of(self, other: FlagSet) -> bool:
        """True when any flag set in ``other`` is also set here."""
        return bool(self._bits & other._bits)

    def __iter__(self) -> Iterator[Flag]:
        return iter(sorted(self._bits))

    def __len__(self) -> int:
        return len(self._bits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FlagSet):
            return NotImplemented
        return self._bits == other._bits

    def __repr__(self) -> str:
        names = ", ".join(flag.name for flag in self)
        return f"FlagSet({{{names}}})"


def flags_are(flags: FlagSet | None, htmlplease: bool = False) -> str:
    """Describe which flags are on, as plain text or as an HTML table."""
    parts: list[str] = []
    if htmlplease:
        parts.append('<table class="mkd_flags_are">\n')
    even = True
    for flag, name in FLAG_NAMES:
        on = flags is not None and flags.is_set(flag)
        if name.startswith("!"):
            name = name[1:]
            on = not on

        if htmlplease:
            if even:
                parts.append(" <tr>")
            parts.append("<td>")
        else:
            parts.append(" ")

        if not on:
            parts.append("<s>" if htmlplease else "!")
        parts.append(name)

        if htmlplease:
            if not on:
                parts.append("</s>")
            parts.append("</td>")
            if not even:
                parts.append("</tr>\n")
        even = not even

    if htmlplease:
        if even:
            parts.append("</tr>\n")
        parts.append("</table>\n")
    return "".join(parts)