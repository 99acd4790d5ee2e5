"""Configuration management for Lingostage.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Self

from lingostage.core.errors import PluginConfigError

CONFIG_FILENAME = "lingostage.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class DocsConfig:
    """Documentation configuration."""

    source_dir: Path = field(default_factory=lambda: Path("docs"))
    output_dir: Path = field(default_factory=lambda: Path("public"))


@dataclass
class I18nConfig:
    """Language routing configuration."""

    path: Path = field(default_factory=lambda: Path("locales"))
    languages: list[str] = field(default_factory=lambda: ["en"])
    default_language: str = "en"
    redirect: bool = True
    routed_default: bool = False
    site_url: str | None = None
    namespaces: list[str] | None = None
    i18next_options: dict[str, Any] = field(default_factory=dict)

    def validate(self) -> None:
        """Check semantic constraints between options.

        Raises:
            PluginConfigError: If the language set is empty or has duplicates,
                the default language is not a member, or the resource
                directory does not exist
        """
        if not self.languages:
            raise PluginConfigError("i18n.languages must not be empty")

        duplicates = sorted(
            {lng for lng in self.languages if self.languages.count(lng) > 1},
        )
        if duplicates:
            raise PluginConfigError(
                f"i18n.languages contains duplicates: {', '.join(duplicates)}",
            )

        if self.default_language not in self.languages:
            raise PluginConfigError(
                f"i18n.default_language '{self.default_language}' "
                f"is not one of {self.languages}",
            )

        if not self.path.is_dir():
            raise PluginConfigError(f"Resource directory not found: {self.path}")


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    docs: DocsConfig
    i18n: I18nConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for lingostage.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Self:
        return cls(server=ServerConfig(), docs=DocsConfig(), i18n=I18nConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> Self:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            docs=cls._parse_docs(data.get("docs"), config_dir),
            i18n=cls._parse_i18n(data.get("i18n"), config_dir),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_docs(cls, data: object, config_dir: Path) -> DocsConfig:
        """Parse docs configuration section.

        Args:
            data: Raw docs section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            DocsConfig instance
        """
        if data is None:
            return DocsConfig(
                source_dir=config_dir / "docs",
                output_dir=config_dir / "public",
            )

        if not isinstance(data, dict):
            raise ValueError("docs section must be a dictionary")

        source_dir = data.get("source_dir", "docs")
        if not isinstance(source_dir, str):
            raise ValueError("docs.source_dir must be a string")

        output_dir = data.get("output_dir", "public")
        if not isinstance(output_dir, str):
            raise ValueError("docs.output_dir must be a string")

        return DocsConfig(
            source_dir=config_dir / source_dir,
            output_dir=config_dir / output_dir,
        )

    @classmethod
    def _parse_i18n(cls, data: object, config_dir: Path) -> I18nConfig:
        """Parse i18n configuration section.

        Only value types are checked here. Relations between options
        (default language membership, resource directory) are checked by
        I18nConfig.validate() before any page is planned.

        Args:
            data: Raw i18n section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            I18nConfig instance
        """
        if data is None:
            return I18nConfig(path=config_dir / "locales")

        if not isinstance(data, dict):
            raise ValueError("i18n section must be a dictionary")

        path = data.get("path", "locales")
        if not isinstance(path, str):
            raise ValueError("i18n.path must be a string")

        languages = cls._parse_string_list(data.get("languages", ["en"]), "i18n.languages")

        default_language = data.get("default_language")
        if default_language is None:
            if "languages" in data:
                raise ValueError("i18n.default_language is required")
            default_language = "en"
        if not isinstance(default_language, str):
            raise ValueError("i18n.default_language must be a string")

        redirect = data.get("redirect", True)
        if not isinstance(redirect, bool):
            raise ValueError("i18n.redirect must be a boolean")

        routed_default = data.get("routed_default", False)
        if not isinstance(routed_default, bool):
            raise ValueError("i18n.routed_default must be a boolean")

        site_url = data.get("site_url")
        if site_url is not None and not isinstance(site_url, str):
            raise ValueError("i18n.site_url must be a string")

        namespaces_raw = data.get("namespaces")
        namespaces: list[str] | None = None
        if namespaces_raw is not None:
            namespaces = cls._parse_string_list(namespaces_raw, "i18n.namespaces")

        i18next_options = data.get("i18next_options", {})
        if not isinstance(i18next_options, dict):
            raise ValueError("i18n.i18next_options must be a dictionary")

        return I18nConfig(
            path=config_dir / path,
            languages=languages,
            default_language=default_language,
            redirect=redirect,
            routed_default=routed_default,
            site_url=site_url,
            namespaces=namespaces,
            i18next_options=i18next_options,
        )

    @staticmethod
    def _parse_string_list(value: object, name: str) -> list[str]:
        if not isinstance(value, list):
            raise ValueError(f"{name} must be a list")
        items: list[str] = []
        for item in value:
            if not isinstance(item, str):
                raise ValueError(f"{name} items must be strings")
            items.append(item)
        return items

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        source_dir: Path | None = None,
        output_dir: Path | None = None,
        site_url: str | None = None,
        redirect: bool | None = None,
    ) -> Self:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            source_dir: Override docs.source_dir
            output_dir: Override docs.output_dir
            site_url: Override i18n.site_url
            redirect: Override i18n.redirect

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        docs = self.docs
        if source_dir is not None or output_dir is not None:
            docs = replace(
                self.docs,
                source_dir=source_dir if source_dir is not None else self.docs.source_dir,
                output_dir=output_dir if output_dir is not None else self.docs.output_dir,
            )

        i18n = self.i18n
        if site_url is not None or redirect is not None:
            i18n = replace(
                self.i18n,
                site_url=site_url if site_url is not None else self.i18n.site_url,
                redirect=redirect if redirect is not None else self.i18n.redirect,
            )

        return replace(self, server=server, docs=docs, i18n=i18n)
