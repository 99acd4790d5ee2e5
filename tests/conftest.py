"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from lingostage.config import Config, DocsConfig, I18nConfig, ServerConfig
from lingostage.core.context import RoutingContext


@pytest.fixture
def locales_dir(tmp_path: Path) -> Path:
    """Create resource directory with English and Spanish bundles.

    German is declared in the test configs but has no resource files.
    """
    locales = tmp_path / "locales"
    (locales / "en").mkdir(parents=True)
    (locales / "es").mkdir(parents=True)
    (locales / "en" / "translation.json").write_text(
        json.dumps({"title": "Welcome", "nav": {"home": "Home"}}),
    )
    (locales / "es" / "translation.json").write_text(
        json.dumps({"title": "Bienvenido", "nav": {"home": "Inicio"}}),
    )
    return locales


@pytest.fixture
def i18n_config(locales_dir: Path) -> I18nConfig:
    return I18nConfig(
        path=locales_dir,
        languages=["en", "es", "de"],
        default_language="en",
        redirect=True,
        site_url="https://x.test",
    )


@pytest.fixture
def test_config(tmp_path: Path, i18n_config: I18nConfig) -> Config:
    """Create a test configuration with tmp_path directories.

    Use exist_ok=True to allow other fixtures to also create the docs dir.
    """
    source_dir = tmp_path / "docs"
    source_dir.mkdir(exist_ok=True)

    return Config(
        server=ServerConfig(),
        docs=DocsConfig(source_dir=source_dir, output_dir=tmp_path / "public"),
        i18n=i18n_config,
    )


@pytest.fixture
def about_context() -> RoutingContext:
    """Routing context of the unrouted English /about page."""
    return RoutingContext.create(
        "/about",
        "en",
        ["en", "es", "de"],
        "en",
        site_url="https://x.test",
    )
