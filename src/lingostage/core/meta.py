"""Alternate-language links for page heads."""

from dataclasses import dataclass
from typing import TypedDict

from lingostage.core.context import RoutingContext
from lingostage.core.paths import localize

X_DEFAULT = "x-default"


class AlternateLinkDict(TypedDict):
    """Dictionary representation of an alternate link."""

    lang: str
    url: str


@dataclass(frozen=True)
class AlternateLink:
    """One ``<link rel="alternate" hreflang=...>`` entry."""

    lang: str
    url: str

    def to_dict(self) -> AlternateLinkDict:
        """Convert to dictionary for JSON serialization."""
        return {"lang": self.lang, "url": self.url}


def alternate_links(context: RoutingContext) -> list[AlternateLink]:
    """Build alternate links for every language version of a page.

    Emits one entry per configured language in declaration order followed
    by an ``x-default`` entry for the default language.

    Args:
        context: Routing context of the rendered page

    Returns:
        Alternate links, empty when no site URL is configured
    """
    if not context.site_url:
        return []

    site_url = context.site_url.rstrip("/")

    def url_for(language: str) -> str:
        path = localize(
            context.original_path,
            language,
            context.default_language,
            routed_default=context.routed_default,
        )
        return f"{site_url}{path}"

    links = [AlternateLink(lang=lng, url=url_for(lng)) for lng in context.languages]
    links.append(AlternateLink(lang=X_DEFAULT, url=url_for(context.default_language)))
    return links


def html_attributes(context: RoutingContext) -> dict[str, str]:
    """Attributes for the page's ``<html>`` element."""
    return {"lang": context.language}
