import asyncio

import pyperclip

from brainqr.clipboard.context import BrowsingContext


class ScratchField:
    def __init__(self) -> None:
        self.value = ""
        self.readonly = False
        self.style: dict[str, str] = {}
        self.selection: tuple[int, int] | None = None

    def focus(self) -> None:
        pass

    def select(self) -> None:
        self.selection = (0, len(self.value))

    def set_selection_range(self, start: int, end: int) -> None:
        self.selection = (start, end)

    def set_style(self, **styles: str) -> None:
        self.style.update(styles)


class TerminalDocument:
    """A document with no elements and no ``copy`` command.

    A terminal cannot select text on the user's behalf, so only the system
    clipboard (through pyperclip) can succeed.
    """

    def __init__(self) -> None:
        self.fields: list[ScratchField] = []

    def create_text_field(self) -> ScratchField:
        return ScratchField()

    def append(self, field: ScratchField) -> None:
        self.fields.append(field)

    def remove(self, field: ScratchField) -> None:
        self.fields.remove(field)

    def get_element_by_id(self, element_id: str) -> None:
        return None

    def exec_command(self, command: str) -> bool:
        return False

    def query_command_supported(self, command: str) -> bool:
        return False


class PyperclipWriter:
    """System clipboard writer. pyperclip blocks, so it runs in a worker thread.

    Raises ``pyperclip.PyperclipException`` when no clipboard mechanism
    (xclip, xsel, wl-copy, pbcopy, ...) is available.
    """

    async def write_text(self, text: str) -> None:
        await asyncio.to_thread(pyperclip.copy, text)


def terminal_context() -> BrowsingContext:
    return BrowsingContext(
        document=TerminalDocument(),
        clipboard=PyperclipWriter(),
        is_secure_context=True,
    )
