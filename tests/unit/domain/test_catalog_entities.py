"""Tests for catalog value objects."""

from __future__ import annotations

from provgate.domain.entities import (
    DEFAULT_CATALOG,
    CatalogEntry,
    GenreEntry,
    ProviderCatalog,
    StreamLink,
    guess_stream_type,
)


class TestProviderCatalog:
    def test_default_catalog(self) -> None:
        assert ProviderCatalog().to_dict() == {
            "catalog": [
                {"title": "Popular", "filter": ""},
                {"title": "Latest", "filter": "latest"},
            ],
            "genres": [],
        }

    def test_to_dict_keeps_order(self) -> None:
        catalog = ProviderCatalog(
            catalog=(CatalogEntry("B", "/b"), CatalogEntry("A", "/a")),
            genres=(GenreEntry("Drama", "/d"),),
        )
        data = catalog.to_dict()
        assert [e["title"] for e in data["catalog"]] == ["B", "A"]
        assert data["genres"] == [{"title": "Drama", "filter": "/d"}]

    def test_default_is_two_entries(self) -> None:
        assert len(DEFAULT_CATALOG) == 2


class TestStreamLink:
    def test_to_dict_omits_empty_optionals(self) -> None:
        link = StreamLink(server="gofile", link="https://x/y.mp4", type="mp4")
        assert link.to_dict() == {"server": "gofile", "link": "https://x/y.mp4", "type": "mp4"}

    def test_to_dict_includes_headers_and_quality(self) -> None:
        link = StreamLink(
            server="supervideo",
            link="https://x/master.m3u8",
            type="m3u8",
            quality="720",
            headers={"Referer": "https://supervideo.cc/e/abc"},
        )
        data = link.to_dict()
        assert data["quality"] == "720"
        assert data["headers"] == {"Referer": "https://supervideo.cc/e/abc"}

    def test_guess_stream_type(self) -> None:
        assert guess_stream_type("https://cdn/x/master.m3u8?token=1") == "m3u8"
        assert guess_stream_type("https://cdn/x/movie.MP4") == "mp4"
        assert guess_stream_type("https://cdn/x/movie.mkv") == "mkv"
        assert guess_stream_type("https://cdn/x/download") == "unknown"
