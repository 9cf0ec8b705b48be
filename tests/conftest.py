from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from brainqr.clipboard import BrowsingContext
from brainqr.main import app
from brainqr.models import FilenameRequest


class FakeField:
    def __init__(self, value: str = "") -> None:
        self.value = value
        self.readonly = False
        self.style: dict[str, str] = {}
        self.focused = False
        self.selection: tuple[int, int] | None = None

    def focus(self) -> None:
        self.focused = True

    def select(self) -> None:
        self.selection = (0, len(self.value))

    def set_selection_range(self, start: int, end: int) -> None:
        self.selection = (start, end)

    def set_style(self, **styles: str) -> None:
        self.style.update(styles)


class FakeDocument:
    """Records every interaction the clipboard utility has with the page."""

    def __init__(self, copy_result: bool = True, copy_supported: bool = True) -> None:
        self.copy_result = copy_result
        self.copy_supported = copy_supported
        self.elements: dict[str, FakeField] = {}
        self.attached: list[FakeField] = []
        self.created: list[FakeField] = []
        self.removed: list[FakeField] = []
        self.commands: list[tuple[str, str | None]] = []
        self.raise_on_copy: Exception | None = None

    def create_text_field(self) -> FakeField:
        field = FakeField()
        self.created.append(field)
        return field

    def append(self, field: FakeField) -> None:
        self.attached.append(field)

    def remove(self, field: FakeField) -> None:
        self.attached.remove(field)
        self.removed.append(field)

    def get_element_by_id(self, element_id: str) -> FakeField | None:
        return self.elements.get(element_id)

    def exec_command(self, command: str) -> bool:
        # Capture what was selected in the attached field at the moment of the copy.
        selected = None
        if self.attached:
            field = self.attached[-1]
            if field.selection is not None:
                selected = field.value[field.selection[0]:field.selection[1]]
        self.commands.append((command, selected))
        if self.raise_on_copy is not None:
            raise self.raise_on_copy
        return self.copy_result

    def query_command_supported(self, command: str) -> bool:
        return self.copy_supported and command == "copy"


class FakeClipboard:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.written: list[str] = []

    async def write_text(self, text: str) -> None:
        if self.error is not None:
            raise self.error
        self.written.append(text)


@pytest.fixture
def document():
    return FakeDocument()


@pytest.fixture
def secure_context(document):
    return BrowsingContext(
        document=document, clipboard=FakeClipboard(), is_secure_context=True
    )


@pytest.fixture
def legacy_context(document):
    return BrowsingContext(document=document, clipboard=None, is_secure_context=False)


@pytest.fixture
def fixed_now():
    return datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=timezone.utc)


@pytest.fixture
def make_request():
    def _make(**overrides) -> FilenameRequest:
        fields = {
            "brain_id": "BR001",
            "local_name": "Patient001",
            "slide_id": "SL001",
            "series_type": "T1",
            "start_section": 1,
            "end_section": 1,
            "increment": 1,
        }
        fields.update(overrides)
        return FilenameRequest(**fields)

    return _make


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
