"""Translation resource bundles.

Resource files live at ``<path>/<language>/<namespace>.json`` and hold a
flat or nested mapping of keys to strings. Loading is delegated to a
TranslationStore so the routing code never touches the filesystem.
"""

import asyncio
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "translation"

# namespace -> key -> string (or nested mapping)
ResourceBundle = dict[str, dict[str, Any]]


class TranslationStore(Protocol):
    """Source of translation resources for one language and namespace."""

    def namespaces_for(self, language: str) -> list[str]: ...

    async def load(self, language: str, namespace: str) -> dict[str, Any] | None: ...


class FileTranslationStore:
    """Reads resource bundles from JSON files on disk."""

    def __init__(self, path: Path, namespaces: list[str] | None = None) -> None:
        """Initialize store.

        Args:
            path: Resource directory containing one subdirectory per language
            namespaces: Namespaces to load. If None, every ``*.json`` file
                        found for a language is a namespace.
        """
        self._path = path
        self._namespaces = namespaces

    @property
    def path(self) -> Path:
        """Resource directory."""
        return self._path

    def namespaces_for(self, language: str) -> list[str]:
        """List namespaces to load for a language."""
        if self._namespaces:
            return list(self._namespaces)

        language_dir = self._path / language
        if not language_dir.is_dir():
            return [DEFAULT_NAMESPACE]
        found = sorted(p.stem for p in language_dir.glob("*.json"))
        return found or [DEFAULT_NAMESPACE]

    async def load(self, language: str, namespace: str) -> dict[str, Any] | None:
        """Load one resource file.

        Returns:
            Parsed mapping, or None if the file is missing or unreadable
        """
        file_path = self._path / language / f"{namespace}.json"
        return await asyncio.to_thread(self._read, file_path)

    def _read(self, file_path: Path) -> dict[str, Any] | None:
        if not file_path.is_file():
            logger.warning(f"Resource file not found: {file_path}")
            return None

        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read resource file {file_path}: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Resource file {file_path} must contain a JSON object")
            return None

        logger.debug(f"Loaded {len(data)} keys from {file_path}")
        return data


class Translations:
    """Key lookup over the resource bundle of one language.

    Missing keys resolve to the key itself so pages with incomplete
    translations still render.
    """

    def __init__(self, language: str, resources: Mapping[str, Mapping[str, Any]]) -> None:
        self.language = language
        self._resources = resources

    @property
    def resources(self) -> Mapping[str, Mapping[str, Any]]:
        """Namespaces of this language."""
        return self._resources

    def t(self, key: str, namespace: str = DEFAULT_NAMESPACE) -> str:
        """Translate a key.

        Keys may address nested mappings with dots (e.g., "nav.home").
        An exact flat key wins over a nested lookup.

        Args:
            key: Translation key, optionally prefixed "namespace:"
            namespace: Namespace used when the key has no prefix

        Returns:
            Translated string, or ``key`` when there is no translation
        """
        lookup_key = key
        if ":" in key:
            namespace, lookup_key = key.split(":", 1)

        node: Any = self._resources.get(namespace, {})
        if isinstance(node, Mapping) and isinstance(node.get(lookup_key), str):
            return node[lookup_key]

        for part in lookup_key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return key
            node = node[part]
        return node if isinstance(node, str) else key
