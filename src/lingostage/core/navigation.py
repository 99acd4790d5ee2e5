"""Runtime link resolution, language switching and first-visit redirect.

Everything here takes the RoutingContext of the current page explicitly
and hands back the context of the page navigated to. Nothing is stored
globally; the only per-visitor state is the LanguageSession marker.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from lingostage.core.context import RoutingContext
from lingostage.core.negotiation import pick
from lingostage.core.paths import localize
from lingostage.core.resources import ResourceBundle, TranslationStore, Translations
from lingostage.core.types import LanguageCode, URLPath

logger = logging.getLogger(__name__)

SESSION_KEY = "lingostage-language"


class Navigator(Protocol):
    """Performs a client-side navigation."""

    async def navigate(self, path: str, *, replace: bool = False) -> None: ...


class LanguageSession(Protocol):
    """Language chosen in the current browsing session, if any."""

    def get_language(self) -> str | None: ...

    def set_language(self, language: str) -> None: ...


@dataclass
class MemorySession:
    """Session marker held in memory for the lifetime of one session."""

    language: str | None = None

    def get_language(self) -> str | None:
        return self.language

    def set_language(self, language: str) -> None:
        self.language = language


@dataclass
class RecordingNavigator:
    """Navigator that only records the requested paths.

    Used where navigation is answered by the caller, e.g. as an HTTP
    redirect.
    """

    history: list[str] = field(default_factory=list)

    @property
    def last(self) -> str | None:
        return self.history[-1] if self.history else None

    async def navigate(self, path: str, *, replace: bool = False) -> None:
        self.history.append(path)


@dataclass(frozen=True)
class LanguageChange:
    """Outcome of a language switch or redirect.

    ``context`` is the routing context of the page navigated to, or the
    unchanged current context when no navigation happened.
    """

    language: LanguageCode
    context: RoutingContext
    navigated: bool
    superseded: bool = False


def resolve_link(
    to: str,
    context: RoutingContext,
    language: str | None = None,
) -> URLPath:
    """Compute the localized target of an internal link.

    Args:
        to: Original path of the target page
        context: Routing context of the current page
        language: Target language (default: current page language).
                  Unknown languages fall back to the default language.

    Returns:
        Localized path of the target
    """
    if language is None:
        language = context.language
    elif language not in context.languages:
        logger.debug(f"Unknown link language '{language}', using {context.default_language}")
        language = context.default_language
    return localize(
        to,
        language,
        context.default_language,
        routed_default=context.routed_default,
    )


class NavigationResolver:
    """Language-aware navigation for one visitor.

    Holds the active translations and makes sure that of several
    overlapping language switches only the last one takes effect.
    """

    def __init__(
        self,
        navigator: Navigator,
        store: TranslationStore,
        session: LanguageSession,
        *,
        redirect: bool = True,
    ) -> None:
        """Initialize resolver.

        Args:
            navigator: Performs navigations
            store: Source of translation resources
            session: Session-scoped language marker
            redirect: Whether unrouted pages redirect on first visit
        """
        self._navigator = navigator
        self._store = store
        self._session = session
        self._redirect = redirect
        self._generation = 0
        self._resources: dict[str, ResourceBundle] = {}
        self.translations: Translations | None = None

    def resolve_link(
        self,
        to: str,
        context: RoutingContext,
        language: str | None = None,
    ) -> URLPath:
        return resolve_link(to, context, language)

    async def navigate(
        self,
        to: str,
        context: RoutingContext,
        *,
        replace: bool = False,
    ) -> RoutingContext:
        """Navigate to a page in the current language.

        Returns:
            Routing context of the target page
        """
        target = context.for_language(context.language, to)
        await self._navigator.navigate(target.path, replace=replace)
        return target

    async def change_language(
        self,
        language: str,
        context: RoutingContext,
        to: str | None = None,
    ) -> LanguageChange:
        """Switch the active language and move to the matching page.

        Loads the target language's resources, then navigates to ``to``
        (default: the current page) in that language. If another switch is
        started before the resources arrive, this one is dropped without
        navigating. If another switch starts while this one is navigating,
        the result is marked superseded.

        Args:
            language: Target language; unknown codes fall back to default
            context: Routing context of the current page
            to: Original path of the target page

        Returns:
            LanguageChange describing what happened
        """
        if language not in context.languages:
            logger.debug(f"Unknown language '{language}', using {context.default_language}")
            language = context.default_language

        self._generation += 1
        generation = self._generation

        resources = await self._load_resources(language)
        if generation != self._generation:
            logger.debug(f"Language switch to {language} superseded")
            return LanguageChange(
                language=LanguageCode(language),
                context=context,
                navigated=False,
                superseded=True,
            )

        self.translations = Translations(language, resources)
        self._session.set_language(language)

        target = context.for_language(language, to)
        await self._navigator.navigate(target.path)
        if generation != self._generation:
            logger.debug(f"Language switch to {language} superseded during navigation")
            return LanguageChange(
                language=target.language,
                context=target,
                navigated=True,
                superseded=True,
            )

        logger.info(f"Switched language to {language}: {target.path}")
        return LanguageChange(language=target.language, context=target, navigated=True)

    async def on_mount(
        self,
        context: RoutingContext,
        preferences: list[str],
        *,
        search: str = "",
    ) -> LanguageChange | None:
        """Run the first-visit redirect check for a mounted page.

        Only unrouted pages redirect, and only when no language has been
        chosen in this session yet. The detected language is stored in the
        session so the check runs at most once.

        Args:
            context: Routing context of the mounted page
            preferences: Visitor language codes, most preferred first
            search: Query string and fragment to carry over

        Returns:
            LanguageChange if a redirect was performed, None otherwise
        """
        if not self._redirect or context.routed:
            return None

        chosen = self._session.get_language()
        if chosen is not None:
            # Redirect-only pages forward to the chosen language.
            if not context.routed_default:
                return None
            language = chosen
        else:
            language = pick(preferences, context.languages, context.default_language)
            self._session.set_language(language)
            logger.debug(f"Negotiated {language} from preferences {preferences}")

        if language == context.default_language and not context.routed_default:
            return None

        target = context.for_language(language)
        await self._navigator.navigate(f"{target.path}{search}", replace=True)
        return LanguageChange(language=target.language, context=target, navigated=True)

    async def _load_resources(self, language: str) -> ResourceBundle:
        cached = self._resources.get(language)
        if cached is not None:
            return cached

        namespaces = self._store.namespaces_for(language)
        loaded = await asyncio.gather(*(self._store.load(language, ns) for ns in namespaces))
        resources: dict[str, dict[str, Any]] = {
            ns: data if data is not None else {}
            for ns, data in zip(namespaces, loaded, strict=True)
        }
        self._resources[language] = resources
        return resources
