"""Site build: plan every page and write the page manifest."""

import json
import logging
from pathlib import Path
from typing import Any

from lingostage.config import Config
from lingostage.core.planner import PagePlanner, PageSet
from lingostage.core.resources import FileTranslationStore
from lingostage.core.site import discover_pages

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "pages.json"


def create_store(config: Config) -> FileTranslationStore:
    return FileTranslationStore(config.i18n.path, config.i18n.namespaces)


async def build_page_set(config: Config) -> PageSet:
    """Plan all pages found in the documentation source directory.

    Raises:
        PluginConfigError: If the i18n configuration is invalid
        PathCollisionError: If two pages localize to the same path
    """
    planner = PagePlanner(config.i18n, create_store(config))
    definitions = discover_pages(config.docs.source_dir)
    logger.info(f"Found {len(definitions)} pages in {config.docs.source_dir}")
    return await planner.plan_site(definitions)


def write_manifest(
    page_set: PageSet,
    output_dir: Path,
    i18next_options: dict[str, Any] | None = None,
) -> Path:
    """Write the planned pages and translation runtime options as JSON.

    Returns:
        Path of the written manifest
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    manifest_path = output_dir / MANIFEST_FILENAME
    manifest_path.write_text(
        json.dumps(page_set.to_manifest(i18next_options), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    logger.info(f"Wrote {len(page_set)} pages to {manifest_path}")
    return manifest_path
