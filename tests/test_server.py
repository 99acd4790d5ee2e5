"""Tests for the HTTP surface."""

import dataclasses
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web

from lingostage.app_keys import i18n_key, page_set_key, store_key
from lingostage.config import Config
from lingostage.core.navigation import SESSION_KEY
from lingostage.core.planner import PagePlanner, PageSet
from lingostage.core.resources import FileTranslationStore
from lingostage.core.site import PageDefinition
from lingostage.server import create_app


async def _plan(config: Config) -> PageSet:
    planner = PagePlanner(config.i18n, FileTranslationStore(config.i18n.path))
    return await planner.plan_site(
        [
            PageDefinition(path="/", component="index.md", context={"title": "Home"}),
            PageDefinition(path="/about", component="about.md", context={"title": "About"}),
        ],
    )


@pytest_asyncio.fixture
async def app(test_config: Config) -> web.Application:
    return create_app(test_config, await _plan(test_config))


class TestCreateApp:
    """Tests for create_app()."""

    @pytest.mark.asyncio
    async def test__valid_config__returns_configured_app(
        self, test_config: Config
    ) -> None:
        page_set = await _plan(test_config)

        app = create_app(test_config, page_set)

        assert app[page_set_key] is page_set
        assert app[store_key].path == test_config.i18n.path
        assert app[i18n_key] is test_config.i18n


class TestPagesApi:
    """Tests for GET /api/pages/{path}."""

    @pytest.mark.asyncio
    async def test__localized_page__returns_payload(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/pages/es/about")

        assert response.status == 200
        data = await response.json()
        assert data["path"] == "/es/about"
        assert data["context"]["title"] == "About"
        assert data["context"]["i18n"]["language"] == "es"
        assert data["context"]["i18n"]["routed"] is True
        assert data["resources"]["es"]["translation"]["title"] == "Bienvenido"
        assert data["htmlAttributes"] == {"lang": "es"}
        assert data["alternates"] == [
            {"lang": "en", "url": "https://x.test/about"},
            {"lang": "es", "url": "https://x.test/es/about"},
            {"lang": "de", "url": "https://x.test/de/about"},
            {"lang": "x-default", "url": "https://x.test/about"},
        ]

    @pytest.mark.asyncio
    async def test__unknown_page__returns_404(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/pages/fr/about")

        assert response.status == 404
        data = await response.json()
        assert data == {"error": "Page not found", "path": "/fr/about"}

    @pytest.mark.asyncio
    async def test__translation_runtime_options__passed_through(
        self, aiohttp_client: Any, test_config: Config
    ) -> None:
        config = dataclasses.replace(
            test_config,
            i18n=dataclasses.replace(
                test_config.i18n,
                i18next_options={"debug": True, "interpolation": {"escapeValue": False}},
            ),
        )
        app = create_app(config, await _plan(config))

        client = await aiohttp_client(app)
        response = await client.get("/api/pages/es/")

        data = await response.json()
        assert data["i18nextOptions"] == {
            "debug": True,
            "interpolation": {"escapeValue": False},
        }


class TestPageRoute:
    """Tests for the page route with first-visit redirect."""

    @pytest.mark.asyncio
    async def test__language_root_without_slash__serves_page(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/es", allow_redirects=False)

        assert response.status == 200
        data = await response.json()
        assert data["path"] == "/es/"
        assert data["context"]["i18n"]["language"] == "es"

    @pytest.mark.asyncio
    async def test__preferred_language__redirects(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get(
            "/about?ref=mail",
            headers={"Accept-Language": "fr, es;q=0.9, en;q=0.8"},
            allow_redirects=False,
        )

        assert response.status == 302
        assert response.headers["Location"] == "/es/about?ref=mail"
        assert response.cookies[SESSION_KEY].value == "es"

    @pytest.mark.asyncio
    async def test__default_preferred__serves_page(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/", headers={"Accept-Language": "en"})

        assert response.status == 200
        data = await response.json()
        assert data["path"] == "/"
        assert response.cookies[SESSION_KEY].value == "en"

    @pytest.mark.asyncio
    async def test__language_chosen__no_redirect(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get(
            "/about",
            headers={"Accept-Language": "es", "Cookie": f"{SESSION_KEY}=en"},
            allow_redirects=False,
        )

        assert response.status == 200

    @pytest.mark.asyncio
    async def test__routed_page__never_redirects(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get(
            "/de/about",
            headers={"Accept-Language": "es"},
            allow_redirects=False,
        )

        assert response.status == 200
        data = await response.json()
        assert data["context"]["i18n"]["language"] == "de"

    @pytest.mark.asyncio
    async def test__routed_default__root_forwards_to_prefixed(
        self, aiohttp_client: Any, test_config: Config
    ) -> None:
        config = dataclasses.replace(
            test_config,
            i18n=dataclasses.replace(test_config.i18n, routed_default=True),
        )
        app = create_app(config, await _plan(config))

        client = await aiohttp_client(app)
        response = await client.get(
            "/about",
            headers={"Accept-Language": "fr"},
            allow_redirects=False,
        )

        assert response.status == 302
        assert response.headers["Location"] == "/en/about"


class TestLinksApi:
    """Tests for GET /api/links."""

    @pytest.mark.asyncio
    async def test__target_language__resolved(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get(
            "/api/links", params={"to": "/contact", "lang": "de", "from": "/about"}
        )

        assert response.status == 200
        assert await response.json() == {"path": "/de/contact"}

    @pytest.mark.asyncio
    async def test__no_language__uses_current_page(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get(
            "/api/links", params={"to": "/contact", "from": "/es/about"}
        )

        assert await response.json() == {"path": "/es/contact"}

    @pytest.mark.asyncio
    async def test__unknown_language__default(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get(
            "/api/links", params={"to": "/contact", "lang": "zz", "from": "/es/about"}
        )

        assert await response.json() == {"path": "/contact"}

    @pytest.mark.asyncio
    async def test__missing_to__returns_400(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/links", params={"from": "/about"})

        assert response.status == 400


class TestLanguageApi:
    """Tests for POST /api/language."""

    @pytest.mark.asyncio
    async def test__switch__returns_target_and_sets_cookie(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.post(
            "/api/language", json={"language": "es", "from": "/about"}
        )

        assert response.status == 200
        data = await response.json()
        assert data["language"] == "es"
        assert data["path"] == "/es/about"
        assert data["context"]["originalPath"] == "/about"
        assert response.cookies[SESSION_KEY].value == "es"

    @pytest.mark.asyncio
    async def test__switch__returns_target_bundle(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.post(
            "/api/language", json={"language": "es", "from": "/"}
        )

        data = await response.json()
        assert data["resources"] == {
            "es": {"translation": {"title": "Bienvenido", "nav": {"home": "Inicio"}}},
        }

    @pytest.mark.asyncio
    async def test__switch_to_language_without_files__empty_bundle(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.post(
            "/api/language", json={"language": "de", "from": "/"}
        )

        data = await response.json()
        assert data["path"] == "/de/"
        assert data["resources"] == {"de": {"translation": {}}}

    @pytest.mark.asyncio
    async def test__switch_back_to_default__stops_redirect(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        await client.post(
            "/api/language", json={"language": "en", "from": "/es/about"}
        )

        response = await client.get(
            "/about",
            headers={"Accept-Language": "es"},
            allow_redirects=False,
        )

        assert response.status == 200

    @pytest.mark.asyncio
    async def test__invalid_body__returns_400(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.post("/api/language", data="not json")

        assert response.status == 400

    @pytest.mark.asyncio
    async def test__unknown_page__returns_404(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.post(
            "/api/language", json={"language": "es", "from": "/nowhere"}
        )

        assert response.status == 404
