# tests/test_dashboard.py
from datetime import date

import pytest

from weldreg.services.welds_client import ApiError
from weldreg.ui.dashboard import NORM_DOCUMENTS, WeldDashboard, WeldParamsEditor
from weldreg.ui.notifications import Notifier, Severity


class FakeApi:
    def __init__(self, weld=None):
        self.weld = weld
        self.updates = []
        self.fail_update = False

    def get(self, weld_id):
        if self.weld is None or self.weld.id != weld_id:
            raise ApiError(404, [f'Weld with id "{weld_id}" not found'])
        return self.weld

    def update(self, weld_id, payload):
        if self.fail_update:
            raise ApiError(400, ["thickness1: Input should be greater than or equal to 0.1"])
        self.updates.append(payload)
        self.weld = self.weld.model_copy(update=payload.model_dump(mode="json", exclude_unset=True))
        return self.weld


@pytest.fixture
def weld(make_weld):
    return make_weld(id="w1", weld_number="K-7", weld_date="2024-01-15", notes="root pass")


@pytest.fixture
def dashboard(weld):
    board = WeldDashboard(FakeApi(weld), "w1", Notifier())
    board.load()
    return board


class TestDashboard:
    def test_load(self, dashboard, weld):
        assert dashboard.weld == weld
        assert dashboard.error is None
        assert not dashboard.loading
        assert isinstance(dashboard.params, WeldParamsEditor)

    def test_load_failure_sets_error(self):
        board = WeldDashboard(FakeApi(), "missing", Notifier())
        board.load()
        assert board.weld is None
        assert board.params is None
        assert board.error == "Failed to load weld data"

    def test_single_active_widget(self, dashboard):
        assert dashboard.toggle_report("VT") == "vt-report"
        assert dashboard.toggle_norms("UT") == "ut-norms"
        assert dashboard.reports.active_method is None
        assert dashboard.toggle_report("RT") == "rt-report"
        assert dashboard.norms.active_method is None

    def test_toggling_same_method_closes(self, dashboard):
        dashboard.toggle_norms("PT")
        assert dashboard.toggle_norms("PT") is None
        assert dashboard.active_widget is None

    def test_close_widget(self, dashboard):
        dashboard.toggle_report("UT")
        dashboard.close_widget()
        assert dashboard.active_widget is None
        assert dashboard.reports.active_method is None

    def test_reports_only_for_supported_methods(self, dashboard):
        with pytest.raises(ValueError):
            dashboard.toggle_report("MT")
        assert dashboard.active_widget is None

    def test_norm_selection(self, dashboard):
        assert dashboard.norms.selected_norm == NORM_DOCUMENTS[0]["value"]
        dashboard.norms.select_norm(NORM_DOCUMENTS[2]["value"])
        assert dashboard.norms.selected_norm == NORM_DOCUMENTS[2]["value"]
        with pytest.raises(ValueError):
            dashboard.norms.select_norm("iso-5817")


class TestParamsEditor:
    def test_no_changes_initially(self, dashboard):
        editor = dashboard.params
        assert not editor.has_unsaved_changes
        assert editor.save() is None
        assert dashboard.api.updates == []

    def test_saves_only_changed_fields(self, dashboard):
        editor = dashboard.params
        editor.set_field("diameter", 630)
        editor.set_field("thickness2", "")
        assert editor.changed_fields == {"diameter"}

        updated = editor.save()
        assert updated.diameter == 630
        sent = dashboard.api.updates[0]
        assert sent.model_dump(exclude_unset=True) == {"diameter": 630.0}
        assert not editor.has_unsaved_changes
        assert dashboard.notifier.last.detail == 'Weld "K-7" updated'

    def test_cleared_optional_field_is_sent_as_null(self, dashboard):
        editor = dashboard.params
        editor.set_field("notes", "")
        editor.save()
        sent = dashboard.api.updates[0]
        assert sent.model_dump(exclude_unset=True) == {"notes": None}
        assert editor.weld.notes is None

    def test_clearing_required_field_warns_without_request(self, dashboard):
        editor = dashboard.params
        editor.set_field("weld_number", "")
        assert editor.save() is None
        assert dashboard.api.updates == []
        assert dashboard.notifier.last.severity == Severity.WARN
        assert editor.has_unsaved_changes

    def test_failed_save_keeps_edits(self, dashboard):
        editor = dashboard.params
        dashboard.api.fail_update = True
        editor.set_field("thickness1", 12)
        assert editor.save() is None
        assert editor.values["thickness1"] == 12
        assert editor.has_unsaved_changes
        assert dashboard.notifier.last.severity == Severity.ERROR
        assert not editor.saving

    def test_reset_discards_edits(self, dashboard):
        editor = dashboard.params
        editor.set_field("notes", "changed")
        editor.reset()
        assert not editor.has_unsaved_changes

    def test_equivalent_input_is_not_a_change(self, dashboard):
        editor = dashboard.params
        editor.set_field("weld_date", date(2024, 1, 15))
        editor.set_field("diameter", "530")
        editor.set_field("weld_number", " K-7 ")
        editor.set_field("welding_process", "SMAW_GMAW")
        assert editor.changed_fields == set()
        assert editor.save() is None
        assert dashboard.api.updates == []

    def test_date_picker_value_is_sent_when_changed(self, dashboard):
        editor = dashboard.params
        editor.set_field("weld_date", date(2024, 2, 1))
        assert editor.changed_fields == {"weld_date"}
        editor.save()
        assert dashboard.api.updates[0].model_dump(mode="json", exclude_unset=True) == {"weld_date": "2024-02-01"}
        assert editor.weld.weld_date == "2024-02-01"

    def test_blank_notes_are_sent_as_null(self, dashboard):
        editor = dashboard.params
        editor.set_field("notes", "   ")
        editor.save()
        assert dashboard.api.updates[0].model_dump(exclude_unset=True) == {"notes": None}

    def test_dashboard_record_follows_saved_params(self, dashboard):
        dashboard.params.set_field("thickness1", 10)
        saved = dashboard.params.save()
        assert dashboard.weld == saved
        assert dashboard.weld.thickness1 == 10

    def test_only_editable_fields(self, dashboard):
        with pytest.raises(KeyError):
            dashboard.params.set_field("id", "other")
