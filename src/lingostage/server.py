"""aiohttp server for Lingostage.

Application factory and route registration.
"""

from aiohttp import web

from lingostage.api.links import create_links_routes
from lingostage.api.pages import create_pages_routes, get_page
from lingostage.app_keys import i18n_key, page_set_key, store_key
from lingostage.build import create_store
from lingostage.config import Config
from lingostage.core.planner import PageSet


def create_app(config: Config, page_set: PageSet) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        page_set: Planned pages to serve

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    app[page_set_key] = page_set
    app[store_key] = create_store(config)
    app[i18n_key] = config.i18n

    # API routes (must be registered first to take precedence over page route)
    app.router.add_routes(create_pages_routes())
    app.router.add_routes(create_links_routes())

    app.router.add_get("/{path:.*}", get_page)

    return app


def run_server(config: Config, page_set: PageSet) -> None:
    """Run the server.

    Args:
        config: Application configuration
        page_set: Planned pages to serve
    """
    app = create_app(config, page_set)
    web.run_app(app, host=config.server.host, port=config.server.port)
