# tests/test_labels.py
from enum import Enum

import pytest

from weldreg.models import NdtMethod, WeldConclusion, WeldingProcess
from weldreg.ui.labels import (
    CONCLUSION_LABELS,
    NDT_METHOD_LABELS,
    WELDING_PROCESS_NAMES,
    exhaustive,
    label,
    options,
)


class Color(str, Enum):
    RED = "RED"
    BLUE = "BLUE"


def test_missing_label_fails_fast():
    with pytest.raises(RuntimeError, match="BLUE"):
        exhaustive(Color, {Color.RED: "Красный"})


def test_label_maps_are_read_only():
    with pytest.raises(TypeError):
        NDT_METHOD_LABELS[NdtMethod.VT] = "VT"


def test_label_lookup():
    assert label(CONCLUSION_LABELS, WeldConclusion.OK) == "Годен"
    assert label(CONCLUSION_LABELS, "CUT") == "Вырезать"
    assert label(CONCLUSION_LABELS, None) == "-"
    assert label(CONCLUSION_LABELS, "") == "-"
    assert label(CONCLUSION_LABELS, "LEGACY") == "LEGACY"


def test_options_follow_enum_order():
    assert [o["value"] for o in options(WELDING_PROCESS_NAMES)] == [m.value for m in WeldingProcess]
    assert options(NDT_METHOD_LABELS)[0] == {"label": "ВИК", "value": "VT"}
