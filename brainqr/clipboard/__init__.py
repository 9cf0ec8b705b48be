from brainqr.clipboard.context import BrowsingContext
from brainqr.clipboard.service import ClipboardError, ClipboardOutcome, ClipboardService
from brainqr.clipboard.strategies import (
    ClipboardMethod,
    LegacyCommand,
    ModernClipboard,
    detect_method,
    choose_strategy,
)

__all__ = [
    "BrowsingContext",
    "ClipboardError",
    "ClipboardMethod",
    "ClipboardOutcome",
    "ClipboardService",
    "LegacyCommand",
    "ModernClipboard",
    "detect_method",
    "choose_strategy",
]
