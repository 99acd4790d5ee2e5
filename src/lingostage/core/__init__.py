"""Core path generation and routing resolution."""

from lingostage.core.context import RoutingContext
from lingostage.core.meta import AlternateLink, alternate_links
from lingostage.core.negotiation import parse_accept_language, pick
from lingostage.core.paths import delocalize, localize, normalize_path

__all__ = [
    "AlternateLink",
    "RoutingContext",
    "alternate_links",
    "delocalize",
    "localize",
    "normalize_path",
    "parse_accept_language",
    "pick",
]
