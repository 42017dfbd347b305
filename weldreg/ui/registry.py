"""Weld registry table: fetched rows, inline draft row, column toggles."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional, Union

from pydantic.alias_generators import to_camel

from weldreg.models import JointType, QualityLevel, WeldingProcess, WeldRead, WeldStatus
from weldreg.services.welds_client import ApiError, WeldsApiClient
from weldreg.ui.labels import (
    CONCLUSION_LABELS,
    JOINT_LABELS,
    NDT_METHOD_LABELS,
    QUALITY_LEVEL_LABELS,
    STATUS_LABELS,
    WELDING_PROCESS_LABELS,
    WELDING_PROCESS_NAMES,
    label,
    options,
)
from weldreg.ui.notifications import Notifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableColumn:
    field: str
    header: str


COLUMNS: tuple[TableColumn, ...] = (
    TableColumn("weldNumber", "Номер стыка"),
    TableColumn("diameter", "D, мм"),
    TableColumn("thickness1", "S1, мм"),
    TableColumn("thickness2", "S2, мм"),
    TableColumn("qualityLevel", "Уровень качества"),
    TableColumn("weldDate", "Дата сварки"),
    TableColumn("weldingProcess", "Способ сварки"),
    TableColumn("joint", "Тип соединения"),
    TableColumn("testMethods", "Методы НК"),
    TableColumn("conclusion", "Заключение"),
    TableColumn("weldStatus", "Статус"),
    TableColumn("notes", "Примечание"),
)

HIDDEN_BY_DEFAULT = frozenset({"weldDate", "weldingProcess", "joint", "weldStatus", "notes"})

# Wire field name -> WeldRead attribute
_ATTRIBUTES = {to_camel(name): name for name in WeldRead.model_fields}

_LABELED_FIELDS = {
    "weldingProcess": WELDING_PROCESS_LABELS,
    "joint": JOINT_LABELS,
    "conclusion": CONCLUSION_LABELS,
    "weldStatus": STATUS_LABELS,
}

# Select options for the editable enum columns, keyed by wire field
FIELD_OPTIONS: dict[str, list[dict[str, str]]] = {
    "qualityLevel": options(QUALITY_LEVEL_LABELS),
    "weldingProcess": options(WELDING_PROCESS_NAMES),
    "joint": options(JOINT_LABELS),
    "testMethods": options(NDT_METHOD_LABELS),
    "conclusion": options(CONCLUSION_LABELS),
    "weldStatus": options(STATUS_LABELS),
}


@dataclass(frozen=True)
class DraftRow:
    """Placeholder row rendered as the add form."""


DRAFT_ROW = DraftRow()

TableRow = Union[WeldRead, DraftRow]


@dataclass(frozen=True)
class ConstructionObject:
    object_name: str
    contractor: str = ""
    customer: str = ""


def extract_objects(welds: list[WeldRead]) -> list[ConstructionObject]:
    """Distinct construction objects in first-seen order, latest details win."""

    objects: dict[str, ConstructionObject] = {}
    for weld in welds:
        if weld.object_name:
            objects[weld.object_name] = ConstructionObject(
                object_name=weld.object_name,
                contractor=weld.contractor or "",
                customer=weld.customer or "",
            )
    return list(objects.values())


@dataclass
class DraftForm:
    """Values of the inline add form."""

    weld_number: str = ""
    diameter: Optional[float] = None
    thickness1: Optional[float] = None
    thickness2: Optional[float] = None
    quality_level: Optional[str] = QualityLevel.B.value
    weld_date: Optional[Union[date, str]] = None
    welding_process: Optional[str] = WeldingProcess.SMAW_GMAW.value
    joint: Optional[str] = JointType.BUTT.value
    test_methods: list[str] = field(default_factory=list)
    conclusion: Optional[str] = None
    weld_status: Optional[str] = WeldStatus.DRAFT.value
    notes: str = ""

    def invalid_fields(self) -> list[str]:
        invalid = []
        if not (self.weld_number or "").strip():
            invalid.append("weldNumber")
        if self.diameter is None or self.diameter < 1:
            invalid.append("diameter")
        if self.thickness1 is None or self.thickness1 < 0.1:
            invalid.append("thickness1")
        if not self.quality_level:
            invalid.append("qualityLevel")
        return invalid

    def to_payload(self, construction_object: ConstructionObject) -> dict[str, Any]:
        """Create-request body; optional fields are sent only when filled."""

        payload: dict[str, Any] = {
            "objectName": construction_object.object_name,
            "contractor": construction_object.contractor,
            "customer": construction_object.customer,
            "weldNumber": self.weld_number.strip(),
            "diameter": self.diameter,
            "thickness1": self.thickness1,
            "qualityLevel": self.quality_level,
        }
        if self.thickness2 is not None:
            payload["thickness2"] = self.thickness2
        if self.weld_date:
            payload["weldDate"] = (
                self.weld_date.isoformat() if isinstance(self.weld_date, date) else self.weld_date
            )
        if self.welding_process:
            payload["weldingProcess"] = self.welding_process
        if self.joint:
            payload["joint"] = self.joint
        if self.test_methods:
            payload["testMethods"] = list(self.test_methods)
        if self.conclusion:
            payload["conclusion"] = self.conclusion
        if self.weld_status:
            payload["weldStatus"] = self.weld_status
        if self.notes and self.notes.strip():
            payload["notes"] = self.notes.strip()
        return payload


def format_date(value: Optional[str]) -> str:
    if not value:
        return "-"
    try:
        return date.fromisoformat(value[:10]).strftime("%d.%m.%Y")
    except ValueError:
        return value


def format_cell(row: WeldRead, column: str) -> str:
    """Display text for one cell; empty values render as ``-``."""

    value = getattr(row, _ATTRIBUTES[column])
    if column == "weldDate":
        return format_date(value)
    if column in _LABELED_FIELDS:
        return label(_LABELED_FIELDS[column], value)
    if column == "testMethods":
        return ", ".join(label(NDT_METHOD_LABELS, method) for method in value) or "-"
    if value is None or value == "":
        return "-"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


class RegistryView:
    """View state of the weld registry page."""

    def __init__(self, api: WeldsApiClient, notifier: Notifier | None = None) -> None:
        self.api = api
        self.notifier = notifier or Notifier()
        self.welds: list[WeldRead] = []
        self.objects: list[ConstructionObject] = []
        self.selected_object: Optional[ConstructionObject] = None
        self.object_dialog_visible = False
        self.loading = False
        self.adding = False
        self.saving = False
        self.deleting_id: Optional[str] = None
        self.pending_delete: Optional[WeldRead] = None
        self.form = DraftForm()
        self.visible_fields: list[str] = [
            column.field for column in COLUMNS if column.field not in HIDDEN_BY_DEFAULT
        ]

    # --- Data ---

    def load(self) -> None:
        self.loading = True
        object_name = self.selected_object.object_name if self.selected_object else None
        try:
            welds = self.api.list(object_name=object_name)
        except ApiError as exc:
            logger.error("Failed to load welds: %s", exc)
            self.notifier.error("Failed to load data")
            return
        finally:
            self.loading = False
        self.welds = welds
        # Objects come from the first, unfiltered load only
        if not self.objects:
            self.objects = extract_objects(welds)

    def table_rows(self) -> list[TableRow]:
        if self.adding:
            return [DRAFT_ROW, *self.welds]
        return list(self.welds)

    # --- Construction objects ---

    def select_object(self, construction_object: Optional[ConstructionObject]) -> None:
        self.selected_object = construction_object
        self.cancel_adding()
        self.load()

    def show_object_dialog(self) -> None:
        self.object_dialog_visible = True

    def hide_object_dialog(self) -> None:
        self.object_dialog_visible = False

    def add_object(self, object_name: str, contractor: str, customer: str) -> Optional[ConstructionObject]:
        values = [(value or "").strip() for value in (object_name, contractor, customer)]
        if not all(values):
            self.notifier.warn("Fill in all required fields")
            return None
        created = ConstructionObject(*values)
        self.objects = [created, *self.objects]
        self.selected_object = created
        self.object_dialog_visible = False
        self.notifier.success(f'Object "{created.object_name}" added')
        self.load()
        return created

    # --- Draft row ---

    def start_adding(self) -> None:
        self.adding = True
        self.form = DraftForm()

    def cancel_adding(self) -> None:
        self.adding = False
        self.form = DraftForm()

    def save_draft(self) -> Optional[WeldRead]:
        """Submit the draft row; returns the created weld on success."""

        if self.saving:
            return None
        if self.form.invalid_fields():
            self.notifier.warn("Fill in the required fields: weld number, D, S1")
            return None
        if self.selected_object is None:
            self.notifier.warn("Select or create a construction object first")
            return None

        self.saving = True
        try:
            created = self.api.create(self.form.to_payload(self.selected_object))
        except ApiError as exc:
            logger.error("Failed to save weld: %s", exc)
            self.notifier.error(exc.detail or "Failed to save data")
            return None
        finally:
            self.saving = False

        self.welds = [created, *self.welds]
        self.adding = False
        self.form = DraftForm()
        self.notifier.success(f'Weld "{created.weld_number}" added')
        return created

    # --- Delete with confirmation ---

    def request_delete(self, row: TableRow) -> bool:
        if isinstance(row, DraftRow) or not row.id:
            self.notifier.error("Could not determine the weld id")
            return False
        self.pending_delete = row
        return True

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        row, self.pending_delete = self.pending_delete, None
        if row is None or self.deleting_id is not None:
            return False

        self.deleting_id = row.id
        try:
            self.api.remove(row.id)
        except ApiError as exc:
            logger.error("Failed to delete weld %s: %s", row.id, exc)
            self.notifier.error(exc.detail or "Failed to delete weld")
            return False
        finally:
            self.deleting_id = None

        self.welds = [weld for weld in self.welds if weld.id != row.id]
        self.notifier.success(f'Weld "{row.weld_number}" deleted')
        return True

    # --- Columns ---

    @property
    def visible_columns(self) -> list[TableColumn]:
        return [column for column in COLUMNS if column.field in self.visible_fields]

    def set_visible_columns(self, fields: list[str]) -> None:
        unknown = set(fields) - {column.field for column in COLUMNS}
        if unknown:
            raise ValueError(f"unknown columns: {', '.join(sorted(unknown))}")
        self.visible_fields = [column.field for column in COLUMNS if column.field in fields]

    def toggle_column(self, field_name: str) -> None:
        if field_name in self.visible_fields:
            self.set_visible_columns([f for f in self.visible_fields if f != field_name])
        else:
            self.set_visible_columns([*self.visible_fields, field_name])

    # --- Form options ---

    @staticmethod
    def field_options(field_name: str) -> list[dict[str, str]]:
        """Select options for an enum column; unknown or free-text fields have none."""

        return [dict(option) for option in FIELD_OPTIONS.get(field_name, ())]

    # --- Navigation ---

    @staticmethod
    def route_for(row: TableRow) -> Optional[str]:
        if isinstance(row, DraftRow) or not row.id:
            return None
        return f"/welds/{row.id}/dashboard"


__all__ = [
    "COLUMNS",
    "DRAFT_ROW",
    "HIDDEN_BY_DEFAULT",
    "ConstructionObject",
    "DraftForm",
    "DraftRow",
    "FIELD_OPTIONS",
    "RegistryView",
    "TableColumn",
    "extract_objects",
    "format_cell",
    "format_date",
]
