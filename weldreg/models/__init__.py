"""Database models and wire schemas."""

from .weld import (
    NON_NULLABLE_FIELDS,
    JointType,
    NdtMethod,
    QualityLevel,
    Weld,
    WeldConclusion,
    WeldCreate,
    WeldingProcess,
    WeldRead,
    WeldSchema,
    WeldStatus,
    WeldUpdate,
)

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
