"""Terminal rendering of the generated summary."""
from __future__ import annotations

from rich.console import Console
from rich.markdown import Markdown
from rich.text import Text
from rich.theme import Theme

from .console import console as default_console

BANNER = "AI-Generated PR Summary:"

# Distinct styles for the markdown elements a summary typically contains.
SUMMARY_THEME = Theme({
    "markdown.h1": "bold magenta",
    "markdown.h2": "bold cyan",
    "markdown.h3": "bold blue",
    "markdown.code": "yellow",
    "markdown.code_block": "yellow",
    "markdown.block_quote": "italic grey50",
    "markdown.item.bullet": "green",
    "markdown.item.number": "green",
    "markdown.table.header": "bold white",
    "markdown.table.border": "white",
    "markdown.link": "underline bright_blue",
})


def render_summary(markdown: str, console: Console | None = None) -> None:
    """Print `markdown` as styled terminal text under a title banner."""
    out = console or default_console
    out.print()
    out.print(Text(BANNER, style="bold underline"))
    out.print()
    with out.use_theme(SUMMARY_THEME):
        out.print(Markdown(markdown))
