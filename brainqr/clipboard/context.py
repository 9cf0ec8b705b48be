from dataclasses import dataclass
from typing import Protocol


class TextField(Protocol):
    """An input-like element: a value that can be focused and selected."""

    value: str

    def focus(self) -> None: ...

    def select(self) -> None: ...

    def set_selection_range(self, start: int, end: int) -> None: ...


class HiddenTextField(TextField, Protocol):
    """A scratch field the legacy copy path creates and throws away."""

    readonly: bool

    def set_style(self, **styles: str) -> None: ...


class Document(Protocol):
    def create_text_field(self) -> HiddenTextField: ...

    def append(self, field: HiddenTextField) -> None: ...

    def remove(self, field: HiddenTextField) -> None: ...

    def get_element_by_id(self, element_id: str) -> TextField | None: ...

    def exec_command(self, command: str) -> bool: ...

    def query_command_supported(self, command: str) -> bool: ...


class ClipboardWriter(Protocol):
    async def write_text(self, text: str) -> None: ...


@dataclass
class BrowsingContext:
    """Everything the clipboard utility may touch.

    ``clipboard`` is the modern write capability, ``None`` when the host does
    not expose one. It is only used when ``is_secure_context`` is true.
    """

    document: Document
    clipboard: ClipboardWriter | None = None
    is_secure_context: bool = False
