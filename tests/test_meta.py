"""Tests for alternate links."""

from lingostage.core.context import RoutingContext
from lingostage.core.meta import AlternateLink, alternate_links, html_attributes


class TestAlternateLinks:
    """Tests for alternate_links()."""

    def test__site_url__one_link_per_language_plus_default(self) -> None:
        context = RoutingContext.create(
            "/about", "es", ["en", "es"], "en", site_url="https://x.test"
        )

        links = alternate_links(context)

        assert links == [
            AlternateLink(lang="en", url="https://x.test/about"),
            AlternateLink(lang="es", url="https://x.test/es/about"),
            AlternateLink(lang="x-default", url="https://x.test/about"),
        ]

    def test__same_links_from_every_variant(self) -> None:
        english = RoutingContext.create(
            "/about", "en", ["en", "es"], "en", site_url="https://x.test"
        )

        assert alternate_links(english) == alternate_links(english.for_language("es"))

    def test__trailing_slash_in_site_url__no_double_slash(self) -> None:
        context = RoutingContext.create(
            "/", "en", ["en", "de"], "en", site_url="https://x.test/"
        )

        urls = [link.url for link in alternate_links(context)]

        assert urls == ["https://x.test/", "https://x.test/de/", "https://x.test/"]

    def test__routed_default__default_link_prefixed(self) -> None:
        context = RoutingContext.create(
            "/about",
            "en",
            ["en", "es"],
            "en",
            site_url="https://x.test",
            routed_default=True,
        )

        links = alternate_links(context)

        assert links[0].url == "https://x.test/en/about"
        assert links[-1].to_dict() == {"lang": "x-default", "url": "https://x.test/en/about"}

    def test__no_site_url__empty(self) -> None:
        context = RoutingContext.create("/about", "en", ["en", "es"], "en")

        assert alternate_links(context) == []


class TestHtmlAttributes:
    """Tests for html_attributes()."""

    def test__lang_from_context(self) -> None:
        context = RoutingContext.create("/about", "es", ["en", "es"], "en")

        assert html_attributes(context) == {"lang": "es"}
