"""Build-time errors."""


class PluginConfigError(ValueError):
    """Invalid i18n configuration, reported before any page is planned."""


class PathCollisionError(Exception):
    """Two planned pages localize to the same path."""

    def __init__(self, path: str, first: str, second: str) -> None:
        self.path = path
        self.first = first
        self.second = second
        super().__init__(
            f"Path collision at {path}: pages {first} and {second} "
            "localize to the same path",
        )
