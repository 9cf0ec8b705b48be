"""Form/session state handlers."""

import pytest

from brainqr.models import GeneratedFilename
from brainqr.session import (
    FormFields,
    SessionState,
    all_filenames_text,
    apply_generation,
    begin_generation,
    change_field,
    clear_filenames,
    expected_count,
    select_filename,
    validate_form,
)


def _item(section: int) -> GeneratedFilename:
    return GeneratedFilename(
        filename=f"B_BR001_P-SL_{section:03d}-ST_T1-SE_{section:03d}",
        section_number=section,
        slide_number=section,
        timestamp="20240115T103000",
    )


def _filled() -> SessionState:
    state = SessionState()
    for name, value in [
        ("brain_id", "BR001"),
        ("local_name", "Patient001"),
        ("series_type", "T1"),
    ]:
        state = change_field(state, name, value)
    return state


def test_defaults():
    form = SessionState().form
    assert form.slide_id == "1"
    assert (form.start_section, form.end_section, form.increment) == (1, 1, 1)


def test_start_section_syncs_slide_id():
    state = change_field(SessionState(), "start_section", "12")
    assert state.form.start_section == 12
    assert state.form.slide_id == "12"


def test_end_section_does_not_touch_slide_id():
    state = change_field(SessionState(), "end_section", "30")
    assert state.form.end_section == 30
    assert state.form.slide_id == "1"


@pytest.mark.parametrize("raw", ["", "abc", None, "0"])
def test_unparsable_numbers_fall_back_to_one(raw):
    assert change_field(SessionState(), "increment", raw).form.increment == 1


def test_unknown_field():
    with pytest.raises(KeyError):
        change_field(SessionState(), "colour", "red")


def test_handlers_do_not_mutate():
    before = SessionState()
    change_field(before, "brain_id", "BR9")
    assert before.form.brain_id == ""


def test_validate_form():
    assert validate_form(FormFields()) == "Please fill in all fields"
    form = _filled().form
    assert validate_form(form) is None
    inverted = change_field(change_field(_filled(), "start_section", 9), "end_section", 3)
    assert "cannot be greater" in validate_form(inverted.form)


def test_expected_count():
    state = change_field(_filled(), "end_section", 10)
    state = change_field(state, "increment", 3)
    assert expected_count(state.form) == 4


def test_apply_generation_advances_form():
    state = change_field(_filled(), "start_section", 5)
    state = change_field(state, "end_section", 7)
    state, seq = begin_generation(state)

    state = apply_generation(state, seq, [_item(5), _item(6), _item(7)])

    assert len(state.filenames) == 3
    assert state.form.start_section == 8
    assert state.form.end_section == 8
    assert state.form.slide_id == "8"


def test_stale_response_is_ignored():
    state = _filled()
    state, first = begin_generation(state)
    state, second = begin_generation(state)

    state = apply_generation(state, second, [_item(2)])
    stale = apply_generation(state, first, [_item(1)])

    assert stale is state
    assert [f.section_number for f in stale.filenames] == [2]


def test_select_and_clear():
    state, seq = begin_generation(_filled())
    state = apply_generation(state, seq, [_item(1), _item(2)])
    state = select_filename(state, state.filenames[1])
    assert state.selected.section_number == 2

    cleared = clear_filenames(state)
    assert cleared.filenames == ()
    assert cleared.selected is None


def test_all_filenames_text_joins_lines():
    state, seq = begin_generation(_filled())
    state = apply_generation(state, seq, [_item(1), _item(2)])
    assert all_filenames_text(state).splitlines() == [
        "B_BR001_P-SL_001-ST_T1-SE_001",
        "B_BR001_P-SL_002-ST_T1-SE_002",
    ]


def test_payload_uses_wire_names():
    payload = _filled().form.to_payload()
    assert payload["brainId"] == "BR001"
    assert payload["startSectionNumber"] == 1
    assert set(payload) == {
        "brainId", "localName", "slideId", "seriesType",
        "startSectionNumber", "endSectionNumber", "increment",
    }
