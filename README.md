# mdforge

mdforge renders Markdown to HTML. It covers inline markup (links,
images, code spans, emphasis, escapes, smart punctuation) and the HTML
layout of an already-parsed block tree (paragraphs, headers, lists,
block quotes, code blocks, tables, definition lists, footnotes).

Optional extensions, each switched on or off with a flag:

- SmartyPants typography: curly quotes, dashes, ellipses, (c), (r), (tm), fractions
- tables, fenced code blocks and definition lists
- Markdown Extra footnotes (`[^note]`)
- strikethrough (`~~text~~`), superscripts (`A^B`) and LaTeX passthrough
- pseudo-protocol links: `[text](id:name)`, `[text](class:name)`,
  `[text](lang:xx)`, `[text](abbr:Full Name)` and `[text](raw:...)`
- automatic links and obfuscated e-mail addresses
- a "safe links" mode that drops links with unknown protocols

It has no dependencies outside the standard library.

## Flags

`mdforge.flags` holds `Flag`, an enum of every option, and `FlagSet`,
a mutable set of them. Flag numbers outside the known range are ignored.

```python
from mdforge.flags import Flag, FlagSet, flags_are

flags = FlagSet([Flag.TOC])
flags.set(Flag.AUTOLINK)
flags.clear(Flag.TOC)
flags.is_set(Flag.AUTOLINK)      # True
flags.set_bitmap(0x2000)         # set flags from a numeric bitmap
other = flags.copy()             # independent copy
other.update(FlagSet([Flag.STRICT]))
flags.any_of(other)              # True when the sets share a flag

print(flags_are(flags, False))   # one-line summary of every flag
print(flags_are(flags, True))    # the same summary as an HTML table
```

`flags_are` returns a string; it does not print.

## Inline markup

```python
from mdforge.flags import FlagSet
from mdforge.inline import reparse_to_string

reparse_to_string("Some *emphasis* and `code`.", FlagSet())
# 'Some <em>emphasis</em> and <code>code</code>.'
```

`InlineContext` is the engine behind it: `push()` text, `process()` it,
then `flush()` to resolve emphasis and append the result to `out`.
`reparse()` renders a fragment in a child context with extra flags.
Reference-style links are looked up in the `footnotes` list given to the
context.

`mdforge.emphasis.render_emphasis` matches runs of `*` and `_`
(`EmBlock` items of a `BlockType`) into `<em>` and `<strong>`.

## Documents

`mdforge.model` defines the document tree: `Document`, `Paragraph`
(with a `ParaType`), `Line`, `Footnote` and `Callbacks`.

mdforge does **not** parse Markdown text into block structure. A
`Document` must be given its `code` (a list of `Paragraph`) and marked
`compiled=True` before it can be rendered; rendering or dumping an
uncompiled document raises `ValueError`.

```python
from mdforge.flags import FlagSet
from mdforge.model import Document, Line, Paragraph, ParaType, dump_tree
from mdforge.render import render_document, h1_title

doc = Document(
    code=[
        Paragraph(ParaType.HDR, [Line("Hello")], hnumber=1),
        Paragraph(ParaType.MARKUP, [Line("Some *text*")], align=1),
    ],
    compiled=True,
)
render_document(doc)        # '<h1>Hello</h1>\n\n<p>Some <em>text</em></p>'
h1_title(doc, FlagSet())    # 'Hello'
print(dump_tree(doc, "input"))
doc.css()                   # lines of any STYLE paragraphs
```

`gfm_document(text, flags)` reads text into a document's `content`
lines the GitHub-flavoured way (every line break becomes a hard break,
tabs are expanded). If the first three lines start with `%` they become
the title, author and date, read back with `doc.title()`,
`doc.author()` and `doc.date()`, unless `Flag.NOHEADER` is set. The
result is not compiled.

`basename_callbacks(base)` from `mdforge.render` builds `Callbacks`
that prefix every site-absolute link (one starting with `/`) with
`base`. Set them as `doc.callbacks` before rendering. `Callbacks` can
also rewrite header anchors and hand code blocks to a formatter
function.

## Option parsing

`mdforge.gethopt` is an option parser that accepts single-character
options (`-x`, `-ofile`, `-o file`) and whole-word options (`-toc`,
`--toc`) side by side:

```python
from mdforge.gethopt import HOpt, OptionParser, HOptError, describe, usage

opts = [HOpt(optword="toc", optchar="T"), HOpt(optchar="o", opthasarg="file")]
parser = OptionParser(["prog", "-T", "-o", "out.html", "in.md"], opts)
for opt, arg in parser:
    ...
parser.remaining()          # ['in.md']
```

An unknown option or a missing argument raises `HOptError`. `usage`
and `describe` return short and detailed usage messages as strings.

## What it does not do

mdforge has no command-line program and no Markdown block parser:
turning a text file into paragraphs, lists, headers and tables is left
to the caller, who builds the `Paragraph` tree.