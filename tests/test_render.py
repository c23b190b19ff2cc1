"""Tests for mercury.render - terminal rendering helpers."""

from __future__ import annotations

from mercury.items import Article
from mercury.render import format_article, html_to_markdown, html_to_text

# ---------------------------------------------------------------------------
# HTML conversion
# ---------------------------------------------------------------------------

class TestHtmlToMarkdown:
    def test_heading_and_emphasis(self):
        md = html_to_markdown("<h2>Intro</h2><p>Hello <b>world</b></p>")
        assert "## Intro" in md
        assert "**world**" in md

    def test_list_bullets(self):
        md = html_to_markdown("<ul><li>one</li><li>two</li></ul>")
        assert "- one" in md
        assert "- two" in md

    def test_scripts_dropped(self):
        md = html_to_markdown("<p>Body</p><script>track()</script><style>p{}</style>")
        assert "track()" not in md
        assert "p{}" not in md
        assert "Body" in md

    def test_blank_lines_collapsed(self):
        md = html_to_markdown("<p>a</p><br><br><br><br><p>b</p>")
        assert "\n\n\n" not in md

    def test_empty_input(self):
        assert html_to_markdown("") == ""
        assert html_to_markdown("   ") == ""


class TestHtmlToText:
    def test_strips_tags(self):
        text = html_to_text("<div><p>First</p><p>Second <i>line</i></p></div>")
        assert "<" not in text
        assert "First" in text
        assert "Second" in text

    def test_no_trailing_whitespace(self):
        text = html_to_text("<p>Hello   </p><p>there</p>")
        assert all(line == line.rstrip() for line in text.splitlines())

    def test_empty_input(self):
        assert html_to_text("") == ""


# ---------------------------------------------------------------------------
# format_article()
# ---------------------------------------------------------------------------

class TestFormatArticle:
    def test_full_article(self, article_json):
        md = format_article(Article.model_validate_json(article_json))
        assert md.startswith("# Snow Crash Is Back\n")
        assert "**Author:** Jane Smith" in md
        assert "**Published:** 2016-09-16" in md
        assert "> A look back at a cyberpunk classic" in md
        assert "---" in md
        assert "Hiro Protagonist delivers pizza" in md

    def test_excerpt_used_without_dek(self):
        article = Article(url="https://example.com", title="T", excerpt="Short summary")
        assert "> Short summary" in format_article(article)

    def test_untitled_uses_url(self):
        article = Article(url="https://example.com/post")
        assert format_article(article).startswith("# https://example.com/post")

    def test_rtl_noted(self):
        article = Article(url="https://example.com", title="T", direction="rtl")
        assert "right-to-left" in format_article(article)
