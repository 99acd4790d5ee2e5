"""Pages API and page route.

The page route runs the first-visit language redirect; the API endpoint
returns the page payload only.
"""

from typing import Any

from aiohttp import web

from lingostage.api.session import CookieSession
from lingostage.app_keys import i18n_key, page_set_key, store_key
from lingostage.core.meta import alternate_links, html_attributes
from lingostage.core.navigation import NavigationResolver, RecordingNavigator
from lingostage.core.negotiation import parse_accept_language
from lingostage.core.planner import PageRecord


def create_pages_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/pages/{path:.*}", get_page_data),
    ]


async def get_page_data(request: web.Request) -> web.Response:
    path = request.match_info["path"]
    record = request.app[page_set_key].get(path)
    if record is None:
        return _not_found(path)
    return web.json_response(
        page_payload(record, request.app[i18n_key].i18next_options),
    )


async def get_page(request: web.Request) -> web.Response:
    path = request.match_info["path"]
    record = request.app[page_set_key].get(path)
    if record is None:
        return _not_found(path)

    session = CookieSession(request)
    response: web.Response
    if record.redirect:
        navigator = RecordingNavigator()
        resolver = NavigationResolver(
            navigator,
            request.app[store_key],
            session,
            redirect=request.app[i18n_key].redirect,
        )
        search = f"?{request.query_string}" if request.query_string else ""
        change = await resolver.on_mount(
            record.routing,
            parse_accept_language(request.headers.get("Accept-Language")),
            search=search,
        )
        if change is not None and navigator.last is not None:
            response = web.Response(status=302, headers={"Location": navigator.last})
            session.apply(response)
            return response

    response = web.json_response(
        page_payload(record, request.app[i18n_key].i18next_options),
    )
    session.apply(response)
    return response


def page_payload(
    record: PageRecord,
    i18next_options: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Page data handed to the renderer.

    ``i18nextOptions`` is passed through untouched for the translation runtime.
    """
    return {
        **record.to_dict(),
        "i18nextOptions": i18next_options or {},
        "alternates": [link.to_dict() for link in alternate_links(record.routing)],
        "htmlAttributes": html_attributes(record.routing),
    }


def _not_found(path: str) -> web.Response:
    return web.json_response(
        {"error": "Page not found", "path": f"/{path.lstrip('/')}"},
        status=404,
    )
