"""Editor/app theme selection persisted through the key-value store."""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional


_log = logging.getLogger(__name__)

EDITOR_THEME_KEY = "editorTheme"
APP_THEME_KEY = "appTheme"
DEFAULT_ROUTE_KEY = "routerStart"

DEFAULT_EDITOR_THEME = "light"
DEFAULT_APP_THEME = "light"

THEMES: List[str] = [
    "dark", "light", "cupcake", "bumblebee", "emerald", "corporate",
    "synthwave", "retro", "cyberpunk", "valentine", "halloween", "garden",
    "forest", "aqua", "lofi", "pastel", "fantasy", "wireframe",
    "black", "luxury", "dracula", "cmyk", "autumn", "business",
    "acid", "lemonade", "night", "coffee", "winter", "dim", "nord", "sunset",
]


class ThemeManager:
    """
    Tracks the editor and app themes.

    `store` needs async `get(key)` / `set(key, value)`; `apply` is the UI hook
    that actually switches the theme on screen.
    """

    def __init__(self, store: Any, apply: Optional[Callable[[str], None]] = None):
        self._store = store
        self._apply = apply
        self.editor_theme = DEFAULT_EDITOR_THEME
        self.app_theme = DEFAULT_APP_THEME

    async def toggle_theme(self, key: str = EDITOR_THEME_KEY) -> None:
        """Flip the editor theme between light and dark."""
        if key != EDITOR_THEME_KEY:
            return
        self.editor_theme = "dark" if self.editor_theme == "light" else "light"
        await self._apply_and_save(self.editor_theme, key)

    async def set_theme(self, theme: str, key: str) -> None:
        if theme not in THEMES:
            _log.warning("Ignoring unknown theme %r for %s", theme, key)
            return
        if key == EDITOR_THEME_KEY:
            self.editor_theme = theme
        elif key == APP_THEME_KEY:
            self.app_theme = theme
        await self._apply_and_save(theme, key)

    async def init_theme(self, key: str) -> None:
        """Load a saved theme; store failures leave the defaults in place."""
        try:
            saved = await self._store.get(key)
        except Exception as exc:
            _log.warning("Failed to load theme %s: %s", key, exc)
            return
        if not saved:
            return
        if key == EDITOR_THEME_KEY:
            self.editor_theme = str(saved)
        elif key == APP_THEME_KEY:
            self.app_theme = str(saved)
        if self._apply is not None:
            self._apply(str(saved))

    async def _apply_and_save(self, theme: str, key: str) -> None:
        if self._apply is not None:
            self._apply(theme)
        await self._store.set(key, theme)
