"""Display labels for weld enums.

Every map must cover all members of its enum; a missing label fails at
import time rather than rendering a raw code in the table.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, TypeVar

from weldreg.models import (
    JointType,
    NdtMethod,
    QualityLevel,
    WeldConclusion,
    WeldingProcess,
    WeldStatus,
)

E = TypeVar("E", bound=Enum)


def exhaustive(enum_cls: type[E], labels: dict[E, str]) -> Mapping[E, str]:
    """Freeze ``labels`` after checking it names every member of ``enum_cls``."""

    missing = [member.value for member in enum_cls if member not in labels]
    if missing:
        raise RuntimeError(f"{enum_cls.__name__} labels missing for: {', '.join(missing)}")
    return MappingProxyType(dict(labels))


QUALITY_LEVEL_LABELS = exhaustive(
    QualityLevel,
    {
        QualityLevel.A: "A — Высший",
        QualityLevel.B: "B — Средний",
        QualityLevel.C: "C — Базовый",
    },
)

# Short codes shown in table cells
WELDING_PROCESS_LABELS = exhaustive(
    WeldingProcess,
    {
        WeldingProcess.SMAW_GMAW: "РД/МП",
        WeldingProcess.GTAW: "А",
        WeldingProcess.SAW: "АФ",
    },
)

# Full names shown in selects
WELDING_PROCESS_NAMES = exhaustive(
    WeldingProcess,
    {
        WeldingProcess.SMAW_GMAW: "Ручная дуговая, полуавтоматическая",
        WeldingProcess.GTAW: "Автоматическая в защитных газах",
        WeldingProcess.SAW: "Автоматическая под флюсом",
    },
)

JOINT_LABELS = exhaustive(
    JointType,
    {
        JointType.BUTT: "Стыковое",
        JointType.FILLET_LAP: "Угловое/Нахл.",
    },
)

NDT_METHOD_LABELS = exhaustive(
    NdtMethod,
    {
        NdtMethod.VT: "ВИК",
        NdtMethod.UT: "УЗК",
        NdtMethod.RT: "РК",
        NdtMethod.MT: "МК",
        NdtMethod.PT: "ПВК",
    },
)

CONCLUSION_LABELS = exhaustive(
    WeldConclusion,
    {
        WeldConclusion.OK: "Годен",
        WeldConclusion.REPAIR: "Ремонт",
        WeldConclusion.CUT: "Вырезать",
    },
)

STATUS_LABELS = exhaustive(
    WeldStatus,
    {
        WeldStatus.DRAFT: "Черновик",
        WeldStatus.IN_PROGRESS: "В работе",
        WeldStatus.DONE: "Завершён",
    },
)


def label(labels: Mapping[E, str], value: Optional[E | str], empty: str = "-") -> str:
    """Look up a label by member or raw value; unknown codes are shown verbatim."""

    if value is None or value == "":
        return empty
    for member, text in labels.items():
        if value == member or value == member.value:
            return text
    return str(value)


def options(labels: Mapping[E, str]) -> list[dict[str, str]]:
    """Select options in declaration order."""

    return [{"label": text, "value": member.value} for member, text in labels.items()]


__all__ = [
    "CONCLUSION_LABELS",
    "JOINT_LABELS",
    "NDT_METHOD_LABELS",
    "QUALITY_LEVEL_LABELS",
    "STATUS_LABELS",
    "WELDING_PROCESS_LABELS",
    "WELDING_PROCESS_NAMES",
    "exhaustive",
    "label",
    "options",
]
