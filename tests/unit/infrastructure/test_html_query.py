"""Tests for the CSS-selector HTML helpers providers receive."""

from __future__ import annotations

from provgate.infrastructure.context import (
    HtmlQuery,
    extract_attr,
    extract_text,
    parse_html,
    select_items,
)

_CARDS = """\
<html><body>
<div class="posts">
  <article class="post">
    <a class="title" href="/movie/dune-2021"><h2>Dune</h2></a>
    <img data-src="/poster/dune.jpg">
  </article>
  <article class="post">
    <a class="title" href="https://cdn.example.org/movie/arrival"><h2>Arrival</h2></a>
  </article>
</div>
</body></html>
"""


class TestSelectItems:
    def test_primary_selector(self) -> None:
        soup = parse_html(_CARDS)
        assert len(select_items(soup, "article.post")) == 2

    def test_fallback_selector(self) -> None:
        soup = parse_html(_CARDS)
        items = select_items(soup, "div.movie-card", "article.post")
        assert len(items) == 2

    def test_no_match(self) -> None:
        assert select_items(parse_html(_CARDS), "table", "ul > li") == []


class TestExtractors:
    def test_text_of_child(self) -> None:
        card = select_items(parse_html(_CARDS), "article.post")[0]
        assert extract_text(card, "h2") == "Dune"

    def test_text_default(self) -> None:
        card = select_items(parse_html(_CARDS), "article.post")[0]
        assert extract_text(card, "span.year", default="n/a") == "n/a"

    def test_attr_joined_onto_base_url(self) -> None:
        cards = select_items(parse_html(_CARDS), "article.post")
        assert (
            extract_attr(cards[0], "a.title", "href", base_url="https://site.example")
            == "https://site.example/movie/dune-2021"
        )
        # Absolute URLs survive the join.
        assert (
            extract_attr(cards[1], "a.title", "href", base_url="https://site.example")
            == "https://cdn.example.org/movie/arrival"
        )

    def test_attr_fallback(self) -> None:
        card = select_items(parse_html(_CARDS), "article.post")[0]
        assert extract_attr(card, "img[src]", "data-src", "img[data-src]") == "/poster/dune.jpg"

    def test_attr_missing_returns_default(self) -> None:
        card = select_items(parse_html(_CARDS), "article.post")[1]
        assert extract_attr(card, "img", "src") == ""


class TestHtmlQuery:
    def test_namespace_exposes_helpers(self) -> None:
        html = HtmlQuery()
        soup = html.load(_CARDS)
        items = html.select(soup, "article.post")
        assert html.text(items[1], "h2") == "Arrival"
        assert html.attr(items[1], "a", "href").endswith("/arrival")
