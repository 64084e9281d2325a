"""Markdown HTML rendering: flags, inline markup, emphasis, block layout and option parsing."""

__version__ = "0.1.0"