"""Layout state machine: sidebar modes, responsive behavior, config panel."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable

from weldreg.ui.theme import ThemeState

# Viewports at least this wide use desktop behavior
MOBILE_BREAKPOINT = 992


@dataclass(frozen=True)
class LayoutState:
    desktop_sidebar_hidden: bool = False
    overlay_active: bool = False
    mobile_sidebar_active: bool = False
    config_visible: bool = False
    menu_hover: bool = False


DEFAULT_LAYOUT_STATE = LayoutState()


def container_class(state: LayoutState, menu_mode: str) -> dict[str, bool]:
    """CSS classes for the layout wrapper."""

    return {
        "layout-overlay": menu_mode == "overlay",
        "layout-static": menu_mode == "static",
        "layout-static-inactive": state.desktop_sidebar_hidden and menu_mode == "static",
        "layout-overlay-active": state.overlay_active,
        "layout-mobile-active": state.mobile_sidebar_active,
    }


class LayoutController:
    """Owns the transient layout state; menu mode is read from the theme.

    ``viewport_width`` reports the current window width. Without one the
    layout behaves as desktop, which is what headless rendering wants.
    """

    def __init__(
        self,
        theme: ThemeState,
        viewport_width: Callable[[], int] | None = None,
    ) -> None:
        self.theme = theme
        self._viewport_width = viewport_width or (lambda: MOBILE_BREAKPOINT)
        self.state = DEFAULT_LAYOUT_STATE

    def _set(self, **changes: bool) -> None:
        self.state = replace(self.state, **changes)

    def is_desktop(self) -> bool:
        return self._viewport_width() >= MOBILE_BREAKPOINT

    @property
    def is_overlay(self) -> bool:
        return self.theme.menu_mode == "overlay"

    @property
    def is_static(self) -> bool:
        return self.theme.menu_mode == "static"

    @property
    def is_sidebar_active(self) -> bool:
        return self.state.overlay_active or self.state.mobile_sidebar_active

    @property
    def is_desktop_sidebar_inactive(self) -> bool:
        return self.state.desktop_sidebar_hidden

    @property
    def is_config_sidebar_visible(self) -> bool:
        return self.state.config_visible

    @property
    def container_class(self) -> dict[str, bool]:
        return container_class(self.state, self.theme.menu_mode)

    def toggle_menu(self) -> None:
        if self.is_desktop():
            if self.is_overlay:
                self._set(overlay_active=not self.state.overlay_active)
            else:
                self._set(desktop_sidebar_hidden=not self.state.desktop_sidebar_hidden)
        else:
            # Mobile always slides the sidebar over the content
            self._set(mobile_sidebar_active=not self.state.mobile_sidebar_active)

    def hide_overlay_menu(self) -> None:
        self._set(overlay_active=False, mobile_sidebar_active=False)

    def on_resize(self) -> None:
        if self.is_desktop() and self.is_sidebar_active:
            self.hide_overlay_menu()

    def on_menu_item_click(self) -> None:
        if not self.is_desktop():
            self.hide_overlay_menu()

    def show_config_sidebar(self) -> None:
        self._set(config_visible=True)

    def hide_config_sidebar(self) -> None:
        self._set(config_visible=False)

    def toggle_config_sidebar(self) -> None:
        self._set(config_visible=not self.state.config_visible)

    def set_menu_hover(self, active: bool) -> None:
        self._set(menu_hover=active)

    def reset_state(self) -> None:
        self.state = DEFAULT_LAYOUT_STATE


__all__ = [
    "DEFAULT_LAYOUT_STATE",
    "MOBILE_BREAKPOINT",
    "LayoutController",
    "LayoutState",
    "container_class",
]
