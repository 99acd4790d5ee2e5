"""Visitor language negotiation.

Matches a visitor's ranked language preferences against the languages a
site supports. Matching is exact on the language code.
"""

from collections.abc import Iterable, Sequence

from lingostage.core.types import LanguageCode


def pick(
    preferences: Iterable[str],
    supported: Sequence[str],
    fallback: str,
) -> LanguageCode:
    """Pick the best supported language for a visitor.

    Args:
        preferences: Language codes ordered by visitor preference
        supported: Languages the site is built in
        fallback: Language returned when nothing matches

    Returns:
        First preference present in ``supported``, else ``fallback``
    """
    available = set(supported)
    for language in preferences:
        if language in available:
            return LanguageCode(language)
    return LanguageCode(fallback)


def parse_accept_language(header: str | None) -> list[str]:
    """Parse an Accept-Language header into language codes by preference.

    Entries are ordered by descending q-value; entries with equal weight
    keep their header order. Wildcards and entries with q=0 are dropped.

    Args:
        header: Raw header value (e.g., "fr-CH, fr;q=0.9, en;q=0.8")

    Returns:
        Language codes, most preferred first
    """
    if not header:
        return []

    weighted: list[tuple[float, int, str]] = []
    for position, entry in enumerate(header.split(",")):
        parts = [part.strip() for part in entry.split(";")]
        code = parts[0]
        if not code or code == "*":
            continue

        quality = 1.0
        for param in parts[1:]:
            name, _, value = param.partition("=")
            if name.strip().lower() != "q":
                continue
            try:
                quality = float(value)
            except ValueError:
                quality = 0.0
        if quality <= 0:
            continue

        weighted.append((-quality, position, code))

    weighted.sort()
    return [code for _, _, code in weighted]
