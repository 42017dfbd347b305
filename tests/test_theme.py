# tests/test_theme.py
import json

import pytest

from weldreg.ui.palettes import PRIMARY_COLORS, SHADES, SURFACE_PALETTES
from weldreg.ui.storage import JsonFileStorage, MemoryStorage
from weldreg.ui.theme import (
    DARK_MODE_CLASS,
    DEFAULT_THEME_CONFIG,
    ThemeConfig,
    ThemeState,
    render_theme,
)

KEY = "test-theme"


def _state(storage=None, renders=None):
    return ThemeState(
        storage=storage if storage is not None else MemoryStorage(),
        storage_key=KEY,
        on_render=renders.append if renders is not None else None,
    )


def test_defaults_without_stored_config():
    state = _state()
    assert state.config == DEFAULT_THEME_CONFIG
    assert state.config.preset == "Aura"
    assert state.config.primary == "emerald"
    assert state.config.surface is None
    assert state.menu_mode == "static"
    assert state.rendered.root_classes == frozenset()
    assert state.rendered.surface == "slate"


def test_render_uses_named_primary_swatch():
    rendered = render_theme(ThemeConfig(primary="blue", surface="zinc"))
    assert rendered.variables["--p-primary-500"] == PRIMARY_COLORS["blue"][500]
    assert rendered.variables["--p-primary-color"] == PRIMARY_COLORS["blue"][500]
    assert rendered.variables["--p-surface-0"] == "#ffffff"
    assert rendered.variables["--p-surface-900"] == SURFACE_PALETTES["zinc"][900]


def test_noir_takes_primary_from_surface():
    rendered = render_theme(ThemeConfig(primary="noir", surface="stone"))
    for shade in (50, 500, 950):
        assert rendered.variables[f"--p-primary-{shade}"] == SURFACE_PALETTES["stone"][shade]
    assert rendered.variables["--p-primary-color"] == SURFACE_PALETTES["stone"][950]


def test_noir_without_surface_uses_preset_surface():
    rendered = render_theme(ThemeConfig(preset="Nora", primary="noir"))
    assert rendered.surface == "zinc"
    assert rendered.variables["--p-primary-500"] == SURFACE_PALETTES["zinc"][500]


def test_dark_mode_toggles_root_class_and_persists():
    storage = MemoryStorage()
    state = _state(storage)
    state.toggle_dark_mode()
    assert DARK_MODE_CLASS in state.rendered.root_classes
    assert json.loads(storage.get_item(KEY))["darkMode"] is True

    restored = _state(storage)
    assert restored.config.dark_mode is True
    assert DARK_MODE_CLASS in restored.rendered.root_classes

    restored.toggle_dark_mode()
    assert restored.rendered.root_classes == frozenset()


def test_every_setter_persists():
    storage = MemoryStorage()
    state = _state(storage)
    state.set_preset("Lara")
    state.set_primary("noir")
    state.set_surface("gray")
    state.set_menu_mode("overlay")

    stored = json.loads(storage.get_item(KEY))
    assert stored["preset"] == "Lara"
    assert stored["primary"] == "noir"
    assert stored["surface"] == "gray"
    assert stored["menuMode"] == "overlay"
    assert state.is_overlay_menu


def test_unchanged_value_does_not_rerender():
    renders = []
    state = _state(renders=renders)
    assert len(renders) == 1
    state.set_primary("emerald")
    assert len(renders) == 1
    state.set_primary("rose")
    assert len(renders) == 2
    assert renders[-1].variables["--p-primary-500"] == PRIMARY_COLORS["rose"][500]


def test_unknown_values_are_rejected():
    state = _state()
    for setter, value in (
        (state.set_preset, "Material"),
        (state.set_primary, "chartreuse"),
        (state.set_surface, "ocean"),
        (state.set_menu_mode, "drawer"),
    ):
        with pytest.raises(ValueError):
            setter(value)
    assert state.config == DEFAULT_THEME_CONFIG


def test_partial_stored_config_is_merged_over_defaults():
    storage = MemoryStorage({KEY: json.dumps({"primary": "violet"})})
    state = _state(storage)
    assert state.config.primary == "violet"
    assert state.config.preset == "Aura"
    assert state.config.dark_mode is False


@pytest.mark.parametrize("stored", ["not json", json.dumps({"preset": "Unknown"}), json.dumps([1, 2])])
def test_unreadable_stored_config_falls_back_to_defaults(stored):
    state = _state(MemoryStorage({KEY: stored}))
    assert state.config == DEFAULT_THEME_CONFIG


def test_non_string_stored_config_falls_back_to_defaults(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({KEY: {"primary": "violet"}}), encoding="utf-8")
    state = _state(JsonFileStorage(path))
    assert state.config == DEFAULT_THEME_CONFIG

    state.set_primary("violet")
    assert _state(JsonFileStorage(path)).config.primary == "violet"


def test_noir_follows_selected_surface():
    state = _state()
    state.set_primary("noir")
    state.set_surface("slate")
    for shade in SHADES:
        assert state.rendered.variables[f"--p-primary-{shade}"] == SURFACE_PALETTES["slate"][shade]

    state.set_surface("stone")
    assert state.rendered.variables["--p-primary-500"] == SURFACE_PALETTES["stone"][500]


def test_subscribers_receive_each_render():
    state = _state()
    renders = []
    state.subscribe(renders.append)
    state.set_dark_mode(True)
    state.set_dark_mode(True)
    state.set_preset("Nora")
    assert len(renders) == 2
    assert DARK_MODE_CLASS in renders[0].root_classes
    assert renders[-1].preset == "Nora"


def test_reset_to_defaults():
    storage = MemoryStorage()
    state = _state(storage)
    state.set_dark_mode(True)
    state.set_surface("neutral")
    state.reset_to_defaults()
    assert state.config == DEFAULT_THEME_CONFIG
    assert json.loads(storage.get_item(KEY))["darkMode"] is False


def test_option_lists():
    assert ThemeState.presets() == ["Aura", "Lara", "Nora"]
    assert ThemeState.primary_colors()[-1] == "noir"
    assert "emerald" in ThemeState.primary_colors()
    assert ThemeState.surface_palettes() == ["slate", "gray", "zinc", "neutral", "stone"]
    assert ThemeState.menu_modes() == ["static", "overlay"]


def test_json_file_storage_survives_restart(tmp_path):
    path = tmp_path / "prefs" / "storage.json"
    state = _state(JsonFileStorage(path))
    state.set_primary("amber")

    assert path.exists()
    restored = _state(JsonFileStorage(path))
    assert restored.config.primary == "amber"


def test_json_file_storage_keeps_other_keys(tmp_path):
    storage = JsonFileStorage(tmp_path / "storage.json")
    storage.set_item("other", "value")
    storage.set_item(KEY, "{}")
    assert storage.get_item("other") == "value"
    assert storage.get_item("missing") is None


class BrokenStorage:
    def get_item(self, key):
        raise OSError("read-only profile")

    def set_item(self, key, value):
        raise OSError("disk full")


def test_storage_failures_do_not_raise():
    state = _state(BrokenStorage())
    assert state.config == DEFAULT_THEME_CONFIG
    state.set_dark_mode(True)
    assert state.config.dark_mode is True
    assert DARK_MODE_CLASS in state.rendered.root_classes


def test_default_storage_uses_configured_path(tmp_path, monkeypatch):
    from weldreg.core.config import settings

    monkeypatch.setattr(settings, "theme_storage_path", str(tmp_path / "theme.json"))
    state = ThemeState(storage_key=KEY)
    state.set_surface("stone")
    assert json.loads((tmp_path / "theme.json").read_text(encoding="utf-8"))[KEY]
