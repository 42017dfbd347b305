"""Per-weld dashboard: detail loading, swappable widget panels, parameter editor."""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import ValidationError

from weldreg.models import NdtMethod, WeldRead, WeldUpdate
from weldreg.services.welds_client import ApiError, WeldsApiClient
from weldreg.ui.notifications import Notifier

logger = logging.getLogger(__name__)

REPORT_METHODS: tuple[NdtMethod, ...] = (NdtMethod.VT, NdtMethod.UT, NdtMethod.RT)
NORM_METHODS: tuple[NdtMethod, ...] = tuple(NdtMethod)

NORM_DOCUMENTS: tuple[dict[str, str], ...] = (
    {"name": "СТО Газпром 15-1.3-004-2023", "value": "sto-15-1.3-004-2023"},
    {"name": "Р Газпром 2-2.2-606-2011", "value": "r-2-2.2-606-2011"},
    {"name": "СТО Газпром 2-2.4-083-2006", "value": "sto-2-2.4-083-2006"},
)


class MethodLauncher:
    """Row of per-method buttons; at most one method is open."""

    kind = "report"
    methods: tuple[NdtMethod, ...] = REPORT_METHODS

    def __init__(self) -> None:
        self.active_method: Optional[NdtMethod] = None

    def toggle(self, method: NdtMethod | str) -> Optional[NdtMethod]:
        method = NdtMethod(method)
        if method not in self.methods:
            raise ValueError(f"{method.value} has no {self.kind} widget")
        self.active_method = None if self.active_method == method else method
        return self.active_method

    def close(self) -> None:
        self.active_method = None


class NormsLauncher(MethodLauncher):
    kind = "norms"
    methods = NORM_METHODS

    def __init__(self) -> None:
        super().__init__()
        self.selected_norm = NORM_DOCUMENTS[0]["value"]

    def select_norm(self, value: str) -> None:
        if value not in {doc["value"] for doc in NORM_DOCUMENTS}:
            raise ValueError(f"unknown normative document {value!r}")
        self.selected_norm = value


def widget_key(method: NdtMethod, kind: str) -> str:
    return f"{method.value.lower()}-{kind}"


class WeldDashboard:
    """Detail page for one weld with a single active widget panel."""

    def __init__(self, api: WeldsApiClient, weld_id: str, notifier: Notifier | None = None) -> None:
        self.api = api
        self.weld_id = weld_id
        self.notifier = notifier or Notifier()
        self.weld: Optional[WeldRead] = None
        self.loading = False
        self.error: Optional[str] = None
        self.reports = MethodLauncher()
        self.norms = NormsLauncher()
        self.active_widget: Optional[str] = None
        self.params: Optional[WeldParamsEditor] = None

    def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            self.weld = self.api.get(self.weld_id)
        except ApiError as exc:
            logger.error("Failed to load weld %s: %s", self.weld_id, exc)
            self.error = "Failed to load weld data"
            return
        finally:
            self.loading = False
        self.params = WeldParamsEditor(self.api, self.weld, self.notifier, on_saved=self._params_saved)

    def _params_saved(self, weld: WeldRead) -> None:
        self.weld = weld

    def toggle_report(self, method: NdtMethod | str) -> Optional[str]:
        opened = self.reports.toggle(method)
        if opened is not None:
            self.norms.close()
            self.active_widget = widget_key(opened, "report")
        else:
            self.active_widget = None
        return self.active_widget

    def toggle_norms(self, method: NdtMethod | str) -> Optional[str]:
        opened = self.norms.toggle(method)
        if opened is not None:
            self.reports.close()
            self.active_widget = widget_key(opened, "norms")
        else:
            self.active_widget = None
        return self.active_widget

    def close_widget(self) -> None:
        current, self.active_widget = self.active_widget, None
        if current is None:
            return
        if current.endswith("-report"):
            self.reports.close()
        elif current.endswith("-norms"):
            self.norms.close()


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


_NUMERIC_FIELDS = ("diameter", "thickness1", "thickness2")


def _comparable(name: str, value: Any) -> Any:
    """Normalize an editor value so form input compares equal to the loaded record."""

    if isinstance(value, str):
        value = value.strip()
    if _is_empty(value):
        return None
    if isinstance(value, Enum):
        return value.value
    if name == "weld_date":
        if isinstance(value, date):
            return value.isoformat()[:10]
        return str(value).split("T", 1)[0]
    if name in _NUMERIC_FIELDS:
        try:
            return float(value)
        except (TypeError, ValueError):
            return value
    return value


class WeldParamsEditor:
    """Edits weld parameters in place and saves only what changed."""

    EDITABLE_FIELDS: tuple[str, ...] = (
        "weld_number",
        "diameter",
        "thickness1",
        "thickness2",
        "quality_level",
        "weld_date",
        "welding_process",
        "joint",
        "notes",
    )

    def __init__(
        self,
        api: WeldsApiClient,
        weld: WeldRead,
        notifier: Notifier | None = None,
        on_saved: Callable[[WeldRead], None] | None = None,
    ) -> None:
        self.api = api
        self.notifier = notifier or Notifier()
        self.on_saved = on_saved
        self.saving = False
        self._load(weld)

    def _load(self, weld: WeldRead) -> None:
        self.weld = weld
        self.original = {name: getattr(weld, name) for name in self.EDITABLE_FIELDS}
        self.values = dict(self.original)

    @property
    def changed_fields(self) -> set[str]:
        return {
            name
            for name in self.EDITABLE_FIELDS
            if _comparable(name, self.values[name]) != _comparable(name, self.original[name])
        }

    @property
    def has_unsaved_changes(self) -> bool:
        return bool(self.changed_fields)

    def set_field(self, name: str, value: Any) -> None:
        if name not in self.EDITABLE_FIELDS:
            raise KeyError(name)
        self.values[name] = value

    def reset(self) -> None:
        self.values = dict(self.original)

    def save(self) -> Optional[WeldRead]:
        changed = self.changed_fields
        if not changed or self.saving:
            return None
        # Cleared optional values go out as null so the server drops them
        try:
            payload = WeldUpdate.model_validate(
                {
                    name: (None if _comparable(name, self.values[name]) is None else self.values[name])
                    for name in changed
                }
            )
        except ValidationError as exc:
            messages = [error["msg"] for error in exc.errors()]
            self.notifier.warn(", ".join(messages))
            return None
        label = self.weld.weld_number or self.weld.id
        self.saving = True
        try:
            updated = self.api.update(self.weld.id, payload)
        except ApiError as exc:
            logger.error("Failed to update weld %s: %s", self.weld.id, exc)
            self.notifier.error(exc.detail or "Failed to save changes")
            return None
        finally:
            self.saving = False
        self._load(updated)
        if self.on_saved is not None:
            self.on_saved(updated)
        self.notifier.success(f'Weld "{label}" updated')
        return updated


__all__ = [
    "NORM_DOCUMENTS",
    "NORM_METHODS",
    "REPORT_METHODS",
    "MethodLauncher",
    "NormsLauncher",
    "WeldDashboard",
    "WeldParamsEditor",
    "widget_key",
]
