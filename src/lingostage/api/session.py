"""Cookie-backed language session.

The cookie carries no Max-Age or Expires, so browsers drop it when the
session ends.
"""

from aiohttp import web

from lingostage.core.navigation import SESSION_KEY


class CookieSession:
    """LanguageSession reading the request cookie and collecting updates."""

    def __init__(self, request: web.Request) -> None:
        self._language = request.cookies.get(SESSION_KEY) or None
        self._pending: str | None = None

    def get_language(self) -> str | None:
        return self._language

    def set_language(self, language: str) -> None:
        self._language = language
        self._pending = language

    def apply(self, response: web.StreamResponse) -> None:
        """Write a changed language to the response cookie."""
        if self._pending is not None:
            response.set_cookie(SESSION_KEY, self._pending, path="/", samesite="Lax")
