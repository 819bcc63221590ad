from __future__ import annotations


class MissingThemeField(KeyError):
    """A composer step asked the active theme for a key it does not define."""

    def __init__(self, group: str, key: str, theme_name: str | None = None):
        self.group = group
        self.key = key
        self.theme_name = theme_name
        owner = f' in theme {theme_name!r}' if theme_name else ''
        super().__init__(f'{group}.{key} is not defined{owner}')

    def __str__(self) -> str:
        return str(self.args[0])


class AssetUnavailable(RuntimeError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f'asset {path} unavailable: {reason}')
