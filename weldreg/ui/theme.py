"""Theme configuration state.

Holds preset / primary color / surface / dark mode / menu mode, persists every
change through a key/value storage and renders the configuration into CSS
custom properties plus the root element class set.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Callable, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from weldreg.core.config import settings
from weldreg.ui.palettes import (
    NOIR,
    PRESET_SURFACES,
    PRESETS,
    PRIMARY_COLORS,
    SHADES,
    SURFACE_PALETTES,
    Palette,
)
from weldreg.ui.storage import KeyValueStorage, default_storage

logger = logging.getLogger(__name__)

MenuMode = Literal["static", "overlay"]
MENU_MODES: tuple[str, ...] = ("static", "overlay")
DARK_MODE_CLASS = "app-dark"


class ThemeConfig(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    preset: str = "Aura"
    primary: str = "emerald"
    surface: Optional[str] = None
    dark_mode: bool = False
    menu_mode: MenuMode = "static"

    @field_validator("preset")
    @classmethod
    def known_preset(cls, value: str) -> str:
        if value not in PRESETS:
            raise ValueError(f"unknown preset {value!r}")
        return value

    @field_validator("primary")
    @classmethod
    def known_primary(cls, value: str) -> str:
        if value != NOIR and value not in PRIMARY_COLORS:
            raise ValueError(f"unknown primary color {value!r}")
        return value

    @field_validator("surface")
    @classmethod
    def known_surface(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in SURFACE_PALETTES:
            raise ValueError(f"unknown surface palette {value!r}")
        return value


DEFAULT_THEME_CONFIG = ThemeConfig()


@dataclass(frozen=True)
class ThemeRender:
    """Visual output of a configuration: CSS variables and root classes."""

    preset: str
    surface: str
    root_classes: frozenset[str]
    variables: Mapping[str, str]


def _primary_scheme(primary: Palette, surface: Palette, dark: bool) -> dict[str, str]:
    if dark:
        return {
            "--p-primary-color": primary[400],
            "--p-primary-contrast-color": surface[900],
            "--p-primary-hover-color": primary[300],
            "--p-primary-active-color": primary[200],
            "--p-highlight-background": f"color-mix(in srgb, {primary[400]}, transparent 84%)",
            "--p-highlight-focus-background": f"color-mix(in srgb, {primary[400]}, transparent 76%)",
            "--p-highlight-color": "rgba(255,255,255,.87)",
            "--p-highlight-focus-color": "rgba(255,255,255,.87)",
        }
    return {
        "--p-primary-color": primary[500],
        "--p-primary-contrast-color": "#ffffff",
        "--p-primary-hover-color": primary[600],
        "--p-primary-active-color": primary[700],
        "--p-highlight-background": primary[50],
        "--p-highlight-focus-background": primary[100],
        "--p-highlight-color": primary[700],
        "--p-highlight-focus-color": primary[800],
    }


def _noir_scheme(surface: Palette, dark: bool) -> dict[str, str]:
    if dark:
        return {
            "--p-primary-color": surface[50],
            "--p-primary-contrast-color": surface[950],
            "--p-primary-hover-color": surface[200],
            "--p-primary-active-color": surface[300],
            "--p-highlight-background": surface[50],
            "--p-highlight-focus-background": surface[300],
            "--p-highlight-color": surface[950],
            "--p-highlight-focus-color": surface[950],
        }
    return {
        "--p-primary-color": surface[950],
        "--p-primary-contrast-color": "#ffffff",
        "--p-primary-hover-color": surface[800],
        "--p-primary-active-color": surface[700],
        "--p-highlight-background": surface[950],
        "--p-highlight-focus-background": surface[700],
        "--p-highlight-color": "#ffffff",
        "--p-highlight-focus-color": "#ffffff",
    }


def render_theme(config: ThemeConfig) -> ThemeRender:
    """Derive CSS variables for ``config``.

    Named primaries map onto their fixed swatch; ``noir`` takes every primary
    shade from the surface palette instead.
    """

    surface_name = config.surface or PRESET_SURFACES[config.preset]
    surface = SURFACE_PALETTES[surface_name]
    if config.primary == NOIR:
        primary = surface
        scheme = _noir_scheme(surface, config.dark_mode)
    else:
        primary = PRIMARY_COLORS[config.primary]
        scheme = _primary_scheme(primary, surface, config.dark_mode)

    variables = {f"--p-surface-{shade}": color for shade, color in surface.items()}
    variables.update({f"--p-primary-{shade}": primary[shade] for shade in SHADES})
    variables.update(scheme)
    classes = frozenset({DARK_MODE_CLASS}) if config.dark_mode else frozenset()
    return ThemeRender(
        preset=config.preset,
        surface=surface_name,
        root_classes=classes,
        variables=variables,
    )


class ThemeState:
    """Mutable theme configuration with persistence and render notifications."""

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        storage_key: str | None = None,
        on_render: Callable[[ThemeRender], None] | None = None,
    ) -> None:
        self._storage = storage if storage is not None else default_storage()
        self._key = storage_key or settings.theme_storage_key
        self._listeners: list[Callable[[ThemeRender], None]] = []
        if on_render is not None:
            self._listeners.append(on_render)
        self._config = self._load()
        self.rendered = render_theme(self._config)
        self._notify()

    @property
    def config(self) -> ThemeConfig:
        return self._config

    @property
    def menu_mode(self) -> str:
        return self._config.menu_mode

    @property
    def is_overlay_menu(self) -> bool:
        return self._config.menu_mode == "overlay"

    def subscribe(self, listener: Callable[[ThemeRender], None]) -> None:
        self._listeners.append(listener)

    def _load(self) -> ThemeConfig:
        try:
            stored = self._storage.get_item(self._key)
            if stored and not isinstance(stored, str):
                logger.warning("Ignoring theme config stored as %s", type(stored).__name__)
                return DEFAULT_THEME_CONFIG
            if stored:
                parsed = json.loads(stored)
                if isinstance(parsed, dict):
                    # Shallow-merge over defaults so older or newer blobs still load
                    merged = {**DEFAULT_THEME_CONFIG.model_dump(by_alias=True), **parsed}
                    return ThemeConfig.model_validate(merged)
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load theme config from storage: %s", exc)
        return DEFAULT_THEME_CONFIG

    def _save(self) -> None:
        try:
            self._storage.set_item(self._key, self._config.model_dump_json(by_alias=True))
        except (OSError, ValueError) as exc:
            logger.warning("Failed to save theme config to storage: %s", exc)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self.rendered)

    def _commit(self, config: ThemeConfig) -> None:
        self._config = config
        self._save()
        self.rendered = render_theme(config)
        self._notify()

    def _update(self, **changes: object) -> None:
        config = ThemeConfig.model_validate({**self._config.model_dump(), **changes})
        if config != self._config:
            self._commit(config)

    def set_preset(self, preset: str) -> None:
        self._update(preset=preset)

    def set_primary(self, color: str) -> None:
        self._update(primary=color)

    def set_surface(self, surface: Optional[str]) -> None:
        self._update(surface=surface)

    def set_menu_mode(self, mode: MenuMode) -> None:
        self._update(menu_mode=mode)

    def set_dark_mode(self, enabled: bool) -> None:
        self._update(dark_mode=enabled)

    def toggle_dark_mode(self) -> None:
        self._update(dark_mode=not self._config.dark_mode)

    def reset_to_defaults(self) -> None:
        self._commit(DEFAULT_THEME_CONFIG)

    @staticmethod
    def presets() -> list[str]:
        return list(PRESETS)

    @staticmethod
    def primary_colors() -> list[str]:
        return [*PRIMARY_COLORS, NOIR]

    @staticmethod
    def surface_palettes() -> list[str]:
        return list(SURFACE_PALETTES)

    @staticmethod
    def menu_modes() -> list[str]:
        return list(MENU_MODES)


__all__ = [
    "DARK_MODE_CLASS",
    "DEFAULT_THEME_CONFIG",
    "MENU_MODES",
    "MenuMode",
    "ThemeConfig",
    "ThemeRender",
    "ThemeState",
    "render_theme",
]
