"""Weld joint persistence and API schemas."""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic import Field as PydanticField
from pydantic.alias_generators import to_camel
from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class QualityLevel(str, Enum):
    A = "A"
    B = "B"
    C = "C"


class WeldingProcess(str, Enum):
    """Welding process: manual arc / semi-automatic, gas-shielded automatic, submerged arc."""

    SMAW_GMAW = "SMAW_GMAW"
    GTAW = "GTAW"
    SAW = "SAW"


class JointType(str, Enum):
    BUTT = "BUTT"
    FILLET_LAP = "FILLET_LAP"


class NdtMethod(str, Enum):
    """Non-destructive testing methods."""

    VT = "VT"
    UT = "UT"
    RT = "RT"
    MT = "MT"
    PT = "PT"


class WeldConclusion(str, Enum):
    OK = "OK"
    REPAIR = "REPAIR"
    CUT = "CUT"


class WeldStatus(str, Enum):
    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    DONE = "done"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid4().hex


class Weld(SQLModel, table=True):
    """Inspected weld joint."""

    id: str = Field(default_factory=_new_id, primary_key=True, max_length=32)
    object_name: Optional[str] = Field(default=None, index=True)
    contractor: Optional[str] = None
    customer: Optional[str] = None
    weld_number: str = Field(index=True, description="Business identifier, not unique")
    diameter: float = Field(description="Outer diameter, mm")
    thickness1: float = Field(description="Wall thickness S1, mm")
    thickness2: Optional[float] = Field(default=None, description="Wall thickness S2, mm")
    quality_level: str = Field(max_length=1)
    weld_date: Optional[str] = Field(default=None, max_length=10)
    welding_process: str = Field(default=WeldingProcess.SMAW_GMAW.value, max_length=16)
    weld_status: Optional[str] = Field(default=None, max_length=16)
    test_methods: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    conclusion: Optional[str] = Field(default=None, max_length=16)
    joint: str = Field(default=JointType.BUTT.value, max_length=16)
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow, nullable=False, index=True)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)


def _clean_weld_number(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("weld number must not be empty")
    return value


def _date_part(value: Any) -> Any:
    # Accept full ISO timestamps ("2024-01-15T00:00:00.000Z") as dates
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


def _unique(value: Optional[list[NdtMethod]]) -> Optional[list[NdtMethod]]:
    return None if value is None else list(dict.fromkeys(value))


class WeldSchema(BaseModel):
    """Base for wire schemas: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class WeldCreate(WeldSchema):
    object_name: Optional[str] = None
    contractor: Optional[str] = None
    customer: Optional[str] = None
    weld_number: str = PydanticField(min_length=1)
    diameter: float = PydanticField(ge=1)
    thickness1: float = PydanticField(ge=0.1)
    thickness2: Optional[float] = PydanticField(default=None, ge=0.1)
    quality_level: QualityLevel
    weld_date: Optional[date] = None
    welding_process: WeldingProcess = WeldingProcess.SMAW_GMAW
    weld_status: Optional[WeldStatus] = None
    test_methods: list[NdtMethod] = PydanticField(default_factory=list)
    conclusion: Optional[WeldConclusion] = None
    joint: JointType = JointType.BUTT
    notes: Optional[str] = None

    check_weld_number = field_validator("weld_number")(_clean_weld_number)
    coerce_weld_date = field_validator("weld_date", mode="before")(_date_part)
    dedupe_test_methods = field_validator("test_methods")(_unique)


# Fields that may be omitted from a patch but never explicitly cleared
NON_NULLABLE_FIELDS = (
    "weld_number",
    "diameter",
    "thickness1",
    "quality_level",
    "welding_process",
    "test_methods",
    "joint",
)


class WeldUpdate(WeldSchema):
    """Partial update; only fields present in the payload are applied."""

    object_name: Optional[str] = None
    contractor: Optional[str] = None
    customer: Optional[str] = None
    weld_number: Optional[str] = PydanticField(default=None, min_length=1)
    diameter: Optional[float] = PydanticField(default=None, ge=1)
    thickness1: Optional[float] = PydanticField(default=None, ge=0.1)
    thickness2: Optional[float] = PydanticField(default=None, ge=0.1)
    quality_level: Optional[QualityLevel] = None
    weld_date: Optional[date] = None
    welding_process: Optional[WeldingProcess] = None
    weld_status: Optional[WeldStatus] = None
    test_methods: Optional[list[NdtMethod]] = None
    conclusion: Optional[WeldConclusion] = None
    joint: Optional[JointType] = None
    notes: Optional[str] = None

    check_weld_number = field_validator("weld_number")(_clean_weld_number)
    coerce_weld_date = field_validator("weld_date", mode="before")(_date_part)
    dedupe_test_methods = field_validator("test_methods")(_unique)

    @model_validator(mode="after")
    def reject_null_required(self) -> "WeldUpdate":
        cleared = [
            to_camel(name)
            for name in NON_NULLABLE_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if cleared:
            raise ValueError(f"{', '.join(cleared)} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Submitted fields as storable values, keyed by column name."""

        return self.model_dump(mode="json", exclude_unset=True)


class WeldRead(WeldSchema):
    model_config = ConfigDict(from_attributes=True)

    id: str
    object_name: Optional[str] = None
    contractor: Optional[str] = None
    customer: Optional[str] = None
    weld_number: str
    diameter: float
    thickness1: float
    thickness2: Optional[float] = None
    quality_level: QualityLevel
    weld_date: Optional[str] = None
    welding_process: WeldingProcess = WeldingProcess.SMAW_GMAW
    weld_status: Optional[WeldStatus] = None
    test_methods: list[NdtMethod] = PydanticField(default_factory=list)
    conclusion: Optional[WeldConclusion] = None
    joint: JointType = JointType.BUTT
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


__all__ = [
    "JointType",
    "NdtMethod",
    "NON_NULLABLE_FIELDS",
    "QualityLevel",
    "Weld",
    "WeldConclusion",
    "WeldCreate",
    "WeldRead",
    "WeldSchema",
    "WeldStatus",
    "WeldUpdate",
    "WeldingProcess",
]
