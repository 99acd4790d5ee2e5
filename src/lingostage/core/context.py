"""Per-page language context.

A RoutingContext is attached to every planned page and shipped with it to
the runtime. It is never edited: switching language means moving to the
context of a sibling page.
"""

from dataclasses import dataclass
from typing import Any, Self, TypedDict

from lingostage.core.paths import localize, normalize_path
from lingostage.core.types import LanguageCode, URLPath


class RoutingContextDict(TypedDict):
    """Wire representation of a routing context."""

    language: str
    languages: list[str]
    defaultLanguage: str
    originalPath: str
    path: str
    routed: bool
    routedDefault: bool
    siteUrl: str | None


@dataclass(frozen=True)
class RoutingContext:
    """Language and path metadata for one rendered page."""

    language: LanguageCode
    languages: tuple[LanguageCode, ...]
    default_language: LanguageCode
    original_path: URLPath
    path: URLPath
    routed: bool
    site_url: str | None = None
    routed_default: bool = False

    @classmethod
    def create(
        cls,
        original_path: str,
        language: str,
        languages: tuple[str, ...] | list[str],
        default_language: str,
        *,
        site_url: str | None = None,
        routed_default: bool = False,
    ) -> Self:
        """Build the context of ``original_path`` in ``language``."""
        path = localize(
            original_path,
            language,
            default_language,
            routed_default=routed_default,
        )
        return cls(
            language=LanguageCode(language),
            languages=tuple(LanguageCode(lng) for lng in languages),
            default_language=LanguageCode(default_language),
            original_path=normalize_path(original_path),
            path=path,
            routed=language != default_language or routed_default,
            site_url=site_url,
            routed_default=routed_default,
        )

    def for_language(self, language: str, original_path: str | None = None) -> Self:
        """Return the context of the sibling page in another language.

        Unknown languages fall back to the default language.

        Args:
            language: Target language code
            original_path: Target page (default: this page)

        Returns:
            New RoutingContext; this one is left untouched
        """
        if language not in self.languages:
            language = self.default_language
        return self.create(
            original_path if original_path is not None else self.original_path,
            language,
            self.languages,
            self.default_language,
            site_url=self.site_url,
            routed_default=self.routed_default,
        )

    def to_dict(self) -> RoutingContextDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "language": self.language,
            "languages": list(self.languages),
            "defaultLanguage": self.default_language,
            "originalPath": self.original_path,
            "path": self.path,
            "routed": self.routed,
            "routedDefault": self.routed_default,
            "siteUrl": self.site_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Rebuild a context from its wire representation.

        Raises:
            KeyError: If a required field is missing
        """
        return cls(
            language=LanguageCode(data["language"]),
            languages=tuple(LanguageCode(lng) for lng in data["languages"]),
            default_language=LanguageCode(data["defaultLanguage"]),
            original_path=URLPath(data["originalPath"]),
            path=URLPath(data["path"]),
            routed=bool(data["routed"]),
            site_url=data.get("siteUrl"),
            routed_default=bool(data.get("routedDefault", False)),
        )
