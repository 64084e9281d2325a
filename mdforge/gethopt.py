"""Option parsing with single-character and whole-word options, both introduced by '-'."""

from __future__ import annotations

import sys
from collections.abc import Iterator, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class HOpt:
    """One option: an optional word form, an optional character form, and its argument name."""

    option: int = 0
    optword: str | None = None
    optchar: str | None = None
    opthasarg: str | None = None
    optdesc: str | None = None


class HOptError(Exception):
    """Raised for an unknown option or a missing option argument."""

    def __init__(self, message: str, optopt: str | None = None) -> None:
        super().__init__(message)
        self.optopt = optopt


class OptionParser:
    """Walks ``argv`` (whose first item is the program name) returning options."""

    def __init__(self, argv: Sequence[str], opts: Sequence[HOpt], opterr: bool = False) -> None:
        self.argv = list(argv)
        self.opts = list(opts)
        self.opterr = opterr
        self.optind = 1
        self.optarg: str | None = None
        self.optopt: str | None = None
        self._optchar = 0
        self._optend = False

    def _fail(self, message: str) -> HOptError:
        full = f"{self.argv[0] if self.argv else ''}: {message}"
        if self.opterr:
            print(full, file=sys.stderr)
        return HOptError(full, self.optopt)

    def next_option(self) -> HOpt | None:
        """Return the next option, or None when the options are over.

        The option's argument, if any, is left in ``optarg``.
        """
        argv = self.argv
        while True:
            if self._optend or self.optind >= len(argv):
                return None

            self.optarg = None
            self.optopt = None

            if self._optchar == 0:
                arg = argv[self.optind]
                if not arg.startswith("-"):
                    self._optend = True
                    return None
                if arg in ("-", "--"):
                    self._optend = True
                    self.optind += 1
                    return None

                dashes = 2 if arg[1] == "-" else 1
                for opt in self.opts:
                    if opt.optword and opt.optword == arg[dashes:]:
                        if opt.opthasarg:
                            following = self.optind + 1
                            self.optarg = argv[following] if following < len(argv) else None
                            self.optind += 2
                        else:
                            self.optind += 1
                        return opt
                self._optchar = 1

            arg = argv[self.optind]
            if self._optchar >= len(arg):
                self.optind += 1
                self._optchar = 0
                continue

            self.optopt = arg[self._optchar]
            self._optchar += 1

            for opt in self.opts:
                if opt.optchar and opt.optchar == self.optopt:
                    if opt.opthasarg:
                        if self._optchar < len(arg):
                            self.optarg = arg[self._optchar:]
                            self.optind += 1
                        elif self.optind < len(argv) - 1:
                            self.optarg = argv[self.optind + 1]
                            self.optind += 2
                        else:
                            self.optarg = None
                            self.optind += 1
                            self._optchar = 0
                            raise self._fail(f"option requires an argument -- {opt.optchar}")
                        self._optchar = 0
                    elif self._optchar >= len(arg):
                        self.optind += 1
                        self._optchar = 0
                    return opt

            raise self._fail(f"illegal option -- {self.optopt}")

    def __iter__(self) -> Iterator[tuple[HOpt, str | None]]:
        """Yield ``(option, argument)`` pairs until the options are over."""
        while (opt := self.next_option()) is not None:
            yield opt, self.optarg

    def remaining(self) -> list[str]:
        """The arguments that follow the options."""
        return self.argv[self.optind:]


def describe(pgm: str, opts: Sequence[HOpt], arguments: str | None = None,
             verbose: bool = False) -> str:
    """Build a usage message: a one-line summary, or a table when ``verbose``."""
    out: list[str] = [f"usage: {pgm}"]

    if verbose:
        if opts:
            out.append(" [options]")
        if arguments:
            out.append(f" {arguments}")
        out.append("\n")
        if opts:
            out.append("options:\n")

        maxoptwidth = max((len(o.optword) for o in opts if o.optword), default=0)
        maxargwidth = max((len(o.opthasarg) for o in opts if o.opthasarg), default=0)
        hasoptchar = any(o.optchar for o in opts)

        for opt in opts:
            if opt.optword:
                out.append(f" -{opt.optword}")
                width = len(opt.optword)
            else:
                width = -2
            out.append(" " * (maxoptwidth - width))

            if opt.optchar:
                out.append(f" -{opt.optchar} ")
            elif hasoptchar:
                out.append("    ")

            if maxargwidth > 0:
                if opt.opthasarg:
                    out.append(f" [{opt.opthasarg}]")
                    width = len(opt.opthasarg)
                else:
                    out.append("   ")
                    width = 0
                out.append(" " * (maxargwidth - width))

            if opt.optdesc:
                out.append(f" {opt.optdesc}")
            out.append("\n")
    else:
        flags = "".join(o.optchar for o in opts if o.optchar and not o.opthasarg)
        if flags:
            out.append(f" [-{flags}]")
        out.extend(f" [-{o.optchar} {o.opthasarg}]" for o in opts if o.optchar and o.opthasarg)
        for opt in opts:
            if opt.optword:
                out.append(f" [-{opt.optword}")
                if opt.opthasarg:
                    out.append(f" {opt.opthasarg}")
                out.append("]")
        if arguments:
            out.append(f" {arguments}")

    out.append("\n")
    return "".join(out)


def usage(pgm: str, opts: Sequence[HOpt], arguments: str | None = None) -> str:
    """The one-line usage summary."""
    return describe(pgm, opts, arguments, False)