"""Form and result state for one UI session.

State is immutable; every handler takes the current ``SessionState`` and
returns a new one. Nothing here performs I/O.
"""

from dataclasses import dataclass, replace

from brainqr.models import GeneratedFilename
from brainqr.services.filenames import FilenameService

NUMERIC_FIELDS = ("start_section", "end_section", "increment")
TEXT_FIELDS = ("brain_id", "local_name", "slide_id", "series_type")


@dataclass(frozen=True)
class FormFields:
    brain_id: str = ""
    local_name: str = ""
    slide_id: str = "1"
    series_type: str = ""
    start_section: int = 1
    end_section: int = 1
    increment: int = 1

    def to_payload(self) -> dict:
        """Body for ``POST /api/generate-filename``."""
        return {
            "brainId": self.brain_id,
            "localName": self.local_name,
            "slideId": self.slide_id,
            "seriesType": self.series_type,
            "startSectionNumber": self.start_section,
            "endSectionNumber": self.end_section,
            "increment": self.increment,
        }


@dataclass(frozen=True)
class SessionState:
    form: FormFields = FormFields()
    filenames: tuple[GeneratedFilename, ...] = ()
    selected: GeneratedFilename | None = None
    # Sequence number of the newest generation request sent.
    request_seq: int = 0


def _parse_number(value) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 1
    return number or 1


def change_field(state: SessionState, name: str, value) -> SessionState:
    """Apply one input change.

    Numeric fields fall back to 1 on unparsable input. Changing the start
    section also copies it into the slide id; this sync is a form convenience
    and the generator never relies on it.
    """
    if name in NUMERIC_FIELDS:
        number = _parse_number(value)
        form = replace(state.form, **{name: number})
        if name == "start_section":
            form = replace(form, slide_id=str(number))
    elif name in TEXT_FIELDS:
        form = replace(state.form, **{name: str(value)})
    else:
        raise KeyError(f"Unknown form field: {name}")
    return replace(state, form=form)


def validate_form(form: FormFields) -> str | None:
    """Client-side check run before any request; returns a message or ``None``."""
    if not (form.brain_id and form.local_name and form.series_type):
        return "Please fill in all fields"
    if form.start_section > form.end_section:
        return "Start section number cannot be greater than end section number"
    return None


def expected_count(form: FormFields) -> int:
    return FilenameService.expected_count(
        form.start_section, form.end_section, form.increment or 1
    )


def begin_generation(state: SessionState) -> tuple[SessionState, int]:
    seq = state.request_seq + 1
    return replace(state, request_seq=seq), seq


def apply_generation(
    state: SessionState, seq: int, filenames: list[GeneratedFilename]
) -> SessionState:
    """Store a generation result and advance the form to the next range.

    Results for any request older than the newest one sent are dropped so a
    slow response cannot overwrite a newer list.
    """
    if seq != state.request_seq:
        return state
    next_section = state.form.end_section + state.form.increment
    form = replace(
        state.form,
        slide_id=str(next_section),
        start_section=next_section,
        end_section=next_section,
    )
    return replace(state, form=form, filenames=tuple(filenames))


def select_filename(state: SessionState, item: GeneratedFilename) -> SessionState:
    return replace(state, selected=item)


def clear_filenames(state: SessionState) -> SessionState:
    return replace(state, filenames=(), selected=None)


def all_filenames_text(state: SessionState) -> str:
    return "\n".join(item.filename for item in state.filenames)
