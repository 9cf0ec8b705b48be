from enum import Enum

from brainqr.clipboard.context import BrowsingContext


class ClipboardMethod(str, Enum):
    MODERN = "modern"
    LEGACY = "legacy"
    NONE = "none"


class LegacyCopyUnsupported(Exception):
    """The legacy copy command ran but reported failure."""


class ModernClipboard:
    method = ClipboardMethod.MODERN

    def __init__(self, context: BrowsingContext) -> None:
        self.context = context

    async def write(self, text: str) -> None:
        await self.context.clipboard.write_text(text)


class LegacyCommand:
    """Copy through an off-screen read-only text field and the ``copy`` command."""

    method = ClipboardMethod.LEGACY

    # Keeps the scratch field out of view without making it unfocusable.
    HIDDEN_STYLE = {
        "position": "fixed",
        "left": "-999999px",
        "top": "-999999px",
        "opacity": "0",
    }

    def __init__(self, context: BrowsingContext) -> None:
        self.context = context

    async def write(self, text: str) -> None:
        document = self.context.document
        field = document.create_text_field()
        field.value = text
        field.readonly = True
        field.set_style(**self.HIDDEN_STYLE)
        document.append(field)
        try:
            field.focus()
            field.select()
            field.set_selection_range(0, len(text))
            copied = document.exec_command("copy")
        finally:
            document.remove(field)
        if not copied:
            raise LegacyCopyUnsupported("execCommand copy was unsuccessful")


def has_modern_clipboard(context: BrowsingContext) -> bool:
    return context.clipboard is not None and context.is_secure_context


def choose_strategy(context: BrowsingContext) -> ModernClipboard | LegacyCommand:
    """Pick the copy strategy for one attempt.

    The legacy path is chosen whenever the modern capability is absent, even
    if the document does not advertise the copy command; the command's own
    result decides the outcome.
    """
    if has_modern_clipboard(context):
        return ModernClipboard(context)
    return LegacyCommand(context)


def detect_method(context: BrowsingContext | None) -> ClipboardMethod:
    if context is None:
        return ClipboardMethod.NONE
    if has_modern_clipboard(context):
        return ClipboardMethod.MODERN
    if context.document.query_command_supported("copy"):
        return ClipboardMethod.LEGACY
    return ClipboardMethod.NONE
