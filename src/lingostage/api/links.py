"""Link resolution and language switch endpoints."""

from aiohttp import web

from lingostage.api.session import CookieSession
from lingostage.app_keys import i18n_key, page_set_key, store_key
from lingostage.core.navigation import NavigationResolver, RecordingNavigator, resolve_link


def create_links_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/links", get_link),
        web.post("/api/language", post_language),
    ]


async def get_link(request: web.Request) -> web.Response:
    to = request.query.get("to")
    current = request.query.get("from", "/")
    if not to:
        return web.json_response({"error": "Missing 'to' parameter"}, status=400)

    record = request.app[page_set_key].get(current)
    if record is None:
        return web.json_response(
            {"error": "Page not found", "path": current},
            status=404,
        )

    path = resolve_link(to, record.routing, request.query.get("lang"))
    return web.json_response({"path": path})


async def post_language(request: web.Request) -> web.Response:
    try:
        data = await request.json()
    except ValueError:
        return web.json_response({"error": "Invalid JSON body"}, status=400)

    if not isinstance(data, dict) or not isinstance(data.get("language"), str):
        return web.json_response({"error": "Missing 'language' field"}, status=400)

    current = data.get("from", "/")
    to = data.get("to")
    if not isinstance(current, str) or (to is not None and not isinstance(to, str)):
        return web.json_response({"error": "Paths must be strings"}, status=400)

    record = request.app[page_set_key].get(current)
    if record is None:
        return web.json_response(
            {"error": "Page not found", "path": current},
            status=404,
        )

    session = CookieSession(request)
    navigator = RecordingNavigator()
    resolver = NavigationResolver(
        navigator,
        request.app[store_key],
        session,
        redirect=request.app[i18n_key].redirect,
    )
    change = await resolver.change_language(data["language"], record.routing, to)

    response = web.json_response(
        {
            "language": change.language,
            "path": change.context.path,
            "context": change.context.to_dict(),
            "resources": (
                {resolver.translations.language: resolver.translations.resources}
                if resolver.translations is not None
                else {}
            ),
        },
    )
    session.apply(response)
    return response
