"""Build-time expansion of pages into language variants.

One page definition becomes one page record per configured language, each
carrying its RoutingContext and the resource bundle of its language. The
full record set is indexed by localized path, which must be unique.
"""

import asyncio
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from lingostage.config import I18nConfig
from lingostage.core.context import RoutingContext
from lingostage.core.errors import PathCollisionError
from lingostage.core.paths import normalize_path
from lingostage.core.resources import ResourceBundle, TranslationStore
from lingostage.core.site import PageDefinition
from lingostage.core.types import LanguageCode, URLPath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageRecord:
    """One emitted page: a page definition in one language.

    ``redirect`` marks the unrouted instance that runs the language
    redirect check on mount. ``redirect_only`` marks a synthetic page
    that has no content of its own.
    """

    path: URLPath
    component: str
    context: dict[str, Any]
    routing: RoutingContext
    resources: ResourceBundle
    redirect: bool = False
    redirect_only: bool = False

    @property
    def original_path(self) -> URLPath:
        return self.routing.original_path

    @property
    def language(self) -> LanguageCode:
        return self.routing.language

    @property
    def routed(self) -> bool:
        return self.routing.routed

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "component": self.component,
            "context": {**self.context, "i18n": self.routing.to_dict()},
            "resources": {self.language: self.resources},
            "redirect": self.redirect,
            "redirectOnly": self.redirect_only,
        }


class PageSet:
    """Planned pages with O(1) lookup by localized path."""

    __slots__ = ("_path_index", "_records")

    def __init__(self, records: list[PageRecord]) -> None:
        self._records = records
        self._path_index = {record.path: i for i, record in enumerate(records)}

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PageRecord]:
        return iter(self._records)

    def get(self, path: str) -> PageRecord | None:
        """Get record by localized path (e.g., "es/about" or "/es/about").

        A path without trailing slash also finds a record planned with one,
        so "/es" finds the Spanish root "/es/".
        """
        normalized = normalize_path(path)
        idx = self._path_index.get(normalized)
        if idx is None and not normalized.endswith("/"):
            idx = self._path_index.get(f"{normalized}/")
        if idx is None:
            return None
        return self._records[idx]

    def variants(self, original_path: str) -> list[PageRecord]:
        """Get every record planned from one original path."""
        normalized = normalize_path(original_path)
        return [r for r in self._records if r.original_path == normalized]

    def to_manifest(self, i18next_options: dict[str, Any] | None = None) -> dict[str, Any]:
        """Convert to the manifest written by the build command.

        Args:
            i18next_options: Translation runtime options, passed through as is
        """
        return {
            "i18nextOptions": i18next_options or {},
            "pages": [record.to_dict() for record in self._records],
        }


class PageSetBuilder:
    """Builder for constructing PageSet instances."""

    def __init__(self) -> None:
        self._records: list[PageRecord] = []
        self._by_path: dict[str, PageRecord] = {}

    def add(self, record: PageRecord) -> None:
        """Add a record.

        Raises:
            PathCollisionError: If another record already uses the same path
        """
        existing = self._by_path.get(record.path)
        if existing is not None:
            raise PathCollisionError(
                record.path,
                existing.original_path,
                record.original_path,
            )
        self._by_path[record.path] = record
        self._records.append(record)

    def build(self) -> PageSet:
        return PageSet(list(self._records))


class PagePlanner:
    """Expands page definitions into localized page records.

    Resource bundles are loaded through the TranslationStore, at most once
    per (language, namespace) for the lifetime of the planner. Loads run
    concurrently; records are always emitted in language declaration order.
    """

    def __init__(self, options: I18nConfig, store: TranslationStore) -> None:
        """Initialize planner.

        Args:
            options: i18n configuration
            store: Source of translation resources

        Raises:
            PluginConfigError: If the configuration is invalid
        """
        options.validate()
        self._options = options
        self._store = store
        self._bundles: dict[tuple[str, str], asyncio.Task[dict[str, Any]]] = {}

    async def plan_site(self, definitions: Iterable[PageDefinition]) -> PageSet:
        """Plan every page of a site.

        Args:
            definitions: Language-neutral page definitions

        Returns:
            PageSet with all localized records

        Raises:
            PathCollisionError: If two records localize to the same path
        """
        definitions = list(definitions)
        planned = await asyncio.gather(*(self.plan_page(d) for d in definitions))

        builder = PageSetBuilder()
        for records in planned:
            for record in records:
                builder.add(record)
        page_set = builder.build()

        logger.info(
            f"Planned {len(page_set)} pages from {len(definitions)} definitions "
            f"in {len(self._options.languages)} languages",
        )
        return page_set

    async def plan_page(self, definition: PageDefinition) -> list[PageRecord]:
        """Plan the language variants of one page.

        Args:
            definition: Language-neutral page definition

        Returns:
            One record per language in declaration order, plus a synthetic
            redirect record when the default language is prefixed and
            redirect is enabled
        """
        options = self._options
        original_path = normalize_path(definition.path)

        bundles = await asyncio.gather(
            *(self.load_resources(lng) for lng in options.languages),
        )

        records: list[PageRecord] = []
        for language, resources in zip(options.languages, bundles, strict=True):
            routing = RoutingContext.create(
                original_path,
                language,
                options.languages,
                options.default_language,
                site_url=options.site_url,
                routed_default=options.routed_default,
            )
            records.append(
                PageRecord(
                    path=routing.path,
                    component=definition.component,
                    context=dict(definition.context),
                    routing=routing,
                    resources=resources,
                    redirect=options.redirect and not routing.routed,
                ),
            )
            logger.debug(f"Planned {routing.path} ({language}) from {original_path}")

        if options.routed_default and options.redirect:
            records.append(self._redirect_record(definition, original_path))

        return records

    def _redirect_record(
        self,
        definition: PageDefinition,
        original_path: URLPath,
    ) -> PageRecord:
        options = self._options
        routing = RoutingContext(
            language=LanguageCode(options.default_language),
            languages=tuple(LanguageCode(lng) for lng in options.languages),
            default_language=LanguageCode(options.default_language),
            original_path=original_path,
            path=original_path,
            routed=False,
            site_url=options.site_url,
            routed_default=True,
        )
        return PageRecord(
            path=original_path,
            component=definition.component,
            context=dict(definition.context),
            routing=routing,
            resources={},
            redirect=True,
            redirect_only=True,
        )

    async def load_resources(self, language: str) -> ResourceBundle:
        """Load every namespace of one language.

        Missing namespaces degrade to empty mappings.
        """
        namespaces = self._store.namespaces_for(language)
        loaded = await asyncio.gather(*(self._bundle(language, ns) for ns in namespaces))
        return dict(zip(namespaces, loaded, strict=True))

    def _bundle(self, language: str, namespace: str) -> asyncio.Task[dict[str, Any]]:
        key = (language, namespace)
        task = self._bundles.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load_bundle(language, namespace))
            self._bundles[key] = task
        return task

    async def _load_bundle(self, language: str, namespace: str) -> dict[str, Any]:
        data = await self._store.load(language, namespace)
        if data is None:
            logger.warning(
                f"No resources for {language}/{namespace}, using empty bundle",
            )
            return {}
        return data
