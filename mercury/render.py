"""Turn parsed article markup into something readable in a terminal."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup
from markdownify import markdownify

if TYPE_CHECKING:
    from mercury.items import Article

_EXCESSIVE_BLANK_LINES_RE = re.compile(r"\n{3,}")
_TRAILING_WHITESPACE_RE = re.compile(r"[ \t]+$", re.MULTILINE)


def _tidy(text: str) -> str:
    text = _TRAILING_WHITESPACE_RE.sub("", text)
    text = _EXCESSIVE_BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()


def html_to_markdown(html: str) -> str:
    """Convert *html* to Markdown with ATX headings and ``-`` bullets.

    Scripts and styles are dropped; runs of blank lines are collapsed and
    trailing whitespace is stripped.
    """
    if not html or not html.strip():
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return _tidy(markdownify(str(soup), heading_style="ATX", bullets="-"))


def html_to_text(html: str) -> str:
    """Strip *html* down to plain text, one block per line."""
    if not html or not html.strip():
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return _tidy(soup.get_text(separator="\n"))


def format_article(article: Article) -> str:
    """Render *article* as a Markdown document with a short metadata header."""
    lines: list[str] = []

    lines.append(f"# {article.title or article.url}")
    lines.append("")

    meta_parts: list[str] = []
    if article.author:
        meta_parts.append(f"**Author:** {article.author}")
    if article.date_published:
        meta_parts.append(f"**Published:** {article.date_published.date().isoformat()}")
    if article.direction.is_rtl():
        meta_parts.append("**Direction:** right-to-left")

    if meta_parts:
        lines.append("  \n".join(meta_parts))
        lines.append("")

    summary = article.dek or article.excerpt
    if summary:
        lines.append(f"> {summary}")
        lines.append("")

    lines.append("---")
    lines.append("")
    lines.append(html_to_markdown(article.content))

    return "\n".join(lines).rstrip() + "\n"
