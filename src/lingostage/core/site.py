"""Page definitions discovered from a documentation source tree.

Each markdown file defines one logical page, written once and expanded
into language variants by the planner.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lingostage.core.paths import normalize_path
from lingostage.core.types import URLPath


@dataclass(frozen=True)
class PageDefinition:
    """Language-neutral page as declared by the site author."""

    path: URLPath
    component: str
    context: dict[str, Any] = field(default_factory=dict)


def discover_pages(source_dir: Path) -> list[PageDefinition]:
    """Build page definitions from markdown files.

    ``guide.md`` maps to ``/guide`` and ``guide/index.md`` to ``/guide``.
    The page title comes from the first H1 heading.

    Args:
        source_dir: Root directory containing markdown sources

    Returns:
        Page definitions sorted by source path
    """
    if not source_dir.is_dir():
        return []

    pages: list[PageDefinition] = []
    for source_path in sorted(source_dir.rglob("*.md")):
        relative = source_path.relative_to(source_dir)
        parts = list(relative.with_suffix("").parts)
        if parts and parts[-1] == "index":
            parts = parts[:-1]

        context: dict[str, Any] = {}
        title = _extract_title(source_path)
        if title is not None:
            context["title"] = title

        pages.append(
            PageDefinition(
                path=normalize_path("/".join(parts)),
                component=relative.as_posix(),
                context=context,
            ),
        )
    return pages


def _extract_title(source_path: Path) -> str | None:
    """Return text of the first H1 heading, if any."""
    with source_path.open(encoding="utf-8") as f:
        for line in f:
            if line.startswith("# "):
                return line[2:].strip() or None
    return None
