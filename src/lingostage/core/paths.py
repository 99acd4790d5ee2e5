"""Mapping between original and localized URL paths.

Every function here is pure and total: malformed input is normalized,
never rejected. Build-time page planning and request-time link resolution
both go through these functions, so they must agree exactly.
"""

import re
from collections.abc import Collection

from lingostage.core.types import LanguageCode, URLPath

_DUPLICATE_SLASHES = re.compile(r"/{2,}")
_LEADING_SEGMENT = re.compile(r"^/([^/?#]+)(.*)$", re.DOTALL)


def normalize_path(path: str) -> URLPath:
    """Normalize a path to have exactly one leading slash.

    Runs of slashes inside the path part are collapsed. Query string and
    fragment are kept verbatim, and so is a trailing slash.

    Args:
        path: Raw path (e.g., "about", "//about/", "/about?x=1")

    Returns:
        Normalized path, "/" for empty input
    """
    split_at = len(path)
    for marker in ("?", "#"):
        idx = path.find(marker)
        if idx != -1:
            split_at = min(split_at, idx)
    path_part, suffix = path[:split_at], path[split_at:]

    path_part = _DUPLICATE_SLASHES.sub("/", path_part)
    if not path_part.startswith("/"):
        path_part = f"/{path_part}"
    return URLPath(path_part + suffix)


def localize(
    original_path: str,
    language: str,
    default_language: str,
    *,
    routed_default: bool = False,
) -> URLPath:
    """Compute the path served for a page in the given language.

    Args:
        original_path: Language-neutral page path (e.g., "/about")
        language: Target language code
        default_language: Site default language code
        routed_default: Prefix the default language too

    Returns:
        Localized path, e.g. "/about" for the default language and
        "/es/about" for any other
    """
    path = normalize_path(original_path)
    if language == default_language and not routed_default:
        return path
    return URLPath(f"/{language}{path}")


def delocalize(
    localized_path: str,
    languages: Collection[str],
) -> tuple[URLPath, LanguageCode | None]:
    """Strip a language prefix from a localized path.

    The first segment is removed only when it exactly matches one of
    ``languages``. An unprefixed path yields ``None`` as the language,
    which callers read as the default language.

    Args:
        localized_path: Served path (e.g., "/es/about")
        languages: Configured language codes

    Returns:
        Tuple of original path and matched language (or None)
    """
    path = normalize_path(localized_path)
    match = _LEADING_SEGMENT.match(path)
    if match is None or match.group(1) not in languages:
        return path, None

    rest = match.group(2)
    if not rest.startswith("/"):
        rest = f"/{rest}"
    return URLPath(rest), LanguageCode(match.group(1))
