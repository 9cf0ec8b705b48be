import logging
from dataclasses import dataclass
from enum import Enum

from brainqr.clipboard.context import BrowsingContext
from brainqr.clipboard.strategies import (
    ClipboardMethod,
    LegacyCopyUnsupported,
    detect_method,
    choose_strategy,
)

log = logging.getLogger(__name__)


class ClipboardError(str, Enum):
    EMPTY_INPUT = "EmptyInput"
    ENVIRONMENT_UNAVAILABLE = "EnvironmentUnavailable"
    COPY_FAILED = "CopyFailed"
    LEGACY_COPY_UNSUPPORTED = "LegacyCopyUnsupported"


@dataclass(frozen=True)
class ClipboardOutcome:
    success: bool
    text: str | None = None
    error: ClipboardError | None = None
    method: ClipboardMethod = ClipboardMethod.NONE
    cause: Exception | None = None


class ClipboardService:
    """Copy text through the best clipboard capability of a browsing context.

    Lifecycle of one ``copy()`` call::

        Idle -> Copying -> Succeeded | Failed

    ``is_copying`` tracks a single attempt; callers serialize copies (the UI
    disables its copy buttons while one is running). Failures are returned as
    a ``ClipboardOutcome`` and never raised, so the caller decides how to tell
    the user.
    """

    def __init__(self, context: BrowsingContext | None) -> None:
        self.context = context
        self._copying = False
        self._last_copied: str | None = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def is_copying(self) -> bool:
        return self._copying

    @property
    def last_copied_text(self) -> str | None:
        return self._last_copied

    @property
    def method(self) -> ClipboardMethod:
        return detect_method(self.context)

    @property
    def is_supported(self) -> bool:
        if self.context is None:
            return False
        return self.context.clipboard is not None or bool(
            self.context.document.query_command_supported("copy")
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def copy(self, text: str) -> ClipboardOutcome:
        if not text:
            return ClipboardOutcome(success=False, error=ClipboardError.EMPTY_INPUT)
        if self.context is None:
            return ClipboardOutcome(
                success=False, error=ClipboardError.ENVIRONMENT_UNAVAILABLE
            )

        strategy = choose_strategy(self.context)
        self._copying = True
        try:
            await strategy.write(text)
        except LegacyCopyUnsupported as exc:
            log.error("clipboard copy failed: %s", exc)
            return ClipboardOutcome(
                success=False,
                error=ClipboardError.LEGACY_COPY_UNSUPPORTED,
                method=strategy.method,
                cause=exc,
            )
        except Exception as exc:
            log.error("clipboard copy failed via %s: %s", strategy.method.value, exc)
            return ClipboardOutcome(
                success=False,
                error=ClipboardError.COPY_FAILED,
                method=strategy.method,
                cause=exc,
            )
        finally:
            self._copying = False

        self._last_copied = text
        return ClipboardOutcome(success=True, text=text, method=strategy.method)

    def select_text(self, element_id: str) -> bool:
        """Focus and fully select an input-like element so the user can copy by hand."""
        if self.context is None:
            return False
        try:
            element = self.context.document.get_element_by_id(element_id)
            if element is None:
                return False
            element.focus()
            element.select()
            element.set_selection_range(0, len(element.value))
            return True
        except Exception as exc:
            log.error("text selection failed for %r: %s", element_id, exc)
            return False
