import logging
import re
from datetime import datetime, timezone

from brainqr.models import FilenameRequest, GeneratedFilename

log = logging.getLogger(__name__)

_NON_UPPER_ALNUM = re.compile(r"[^A-Z0-9]")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")
_NON_DIGIT = re.compile(r"[^0-9]")


# ------------------------------------------------------------------
# Validation errors
# ------------------------------------------------------------------


class FilenameValidationError(ValueError):
    """Base class for rejected generation requests. ``str(exc)`` is user-facing."""


class MissingFieldsError(FilenameValidationError):
    def __init__(self) -> None:
        super().__init__("Missing required fields")


class RangeInvertedError(FilenameValidationError):
    def __init__(self) -> None:
        super().__init__(
            "Start section number cannot be greater than end section number"
        )


class NonPositiveNumericError(FilenameValidationError):
    def __init__(self) -> None:
        super().__init__("Section numbers and increment must be positive integers")


class RangeTooLargeError(FilenameValidationError):
    def __init__(self, limit: int) -> None:
        super().__init__(f"Maximum range allowed is {limit} filenames")
        self.limit = limit


# ------------------------------------------------------------------
# Service
# ------------------------------------------------------------------


class FilenameService:
    """Expand a section range into standardized imaging filenames.

    Filename format::

        B_<BRAINID>_<LocalName>-SL_<slide>-ST_<SERIESTYPE>-SE_<section>

    Slide and section numbers are zero-padded to at least three digits so the
    names sort lexically. The slide number starts at the numeric part of the
    request's slide id and advances by ``increment`` together with the section.
    """

    # Upper bound on filenames per request.
    MAX_FILENAMES = 100
    # Minimum width of the numeric components.
    PAD_WIDTH = 3

    @staticmethod
    def expected_count(start_section: int, end_section: int, increment: int) -> int:
        """Number of filenames a range expands to (0 for an inverted range)."""
        if increment < 1:
            return 0
        return max(0, (end_section - start_section) // increment + 1)

    @staticmethod
    def validate(request: FilenameRequest) -> int:
        """Check *request* and return the number of filenames it expands to.

        Checks run in a fixed order and the first failure is raised.
        """
        if not (
            request.brain_id
            and request.local_name
            and request.slide_id
            and request.series_type
        ):
            raise MissingFieldsError()

        start, end, increment = (
            request.start_section,
            request.end_section,
            request.increment,
        )
        if start > end:
            raise RangeInvertedError()
        if start < 1 or end < 1 or increment < 1:
            raise NonPositiveNumericError()

        count = FilenameService.expected_count(start, end, increment)
        if count > FilenameService.MAX_FILENAMES:
            raise RangeTooLargeError(FilenameService.MAX_FILENAMES)
        return count

    @staticmethod
    def generate(
        request: FilenameRequest, now: datetime | None = None
    ) -> list[GeneratedFilename]:
        """Validate *request* and return its filenames in ascending section order.

        *now* fixes the batch timestamp; it defaults to the current UTC time.
        """
        count = FilenameService.validate(request)
        timestamp = FilenameService.batch_timestamp(now)

        brain_id = FilenameService.sanitize_brain_id(request.brain_id)
        local_name = FilenameService.sanitize_local_name(request.local_name)
        series_type = FilenameService.sanitize_series_type(request.series_type)
        base_slide = FilenameService.parse_slide_id(request.slide_id)

        filenames: list[GeneratedFilename] = []
        for k, section in enumerate(
            range(request.start_section, request.end_section + 1, request.increment)
        ):
            slide = base_slide + k * request.increment
            filename = (
                f"B_{brain_id}_{local_name}"
                f"-SL_{FilenameService.pad(slide)}"
                f"-ST_{series_type}"
                f"-SE_{FilenameService.pad(section)}"
            )
            filenames.append(
                GeneratedFilename(
                    filename=filename,
                    section_number=section,
                    slide_number=slide,
                    timestamp=timestamp,
                )
            )

        log.debug(
            "generated %d filenames (expected %d) brain_id=%s series_type=%s",
            len(filenames), count, brain_id, series_type,
        )
        return filenames

    # ------------------------------------------------------------------
    # Formatting helpers
    # ------------------------------------------------------------------
    @staticmethod
    def batch_timestamp(now: datetime | None = None) -> str:
        """Compact sortable UTC timestamp, e.g. ``20240115T103000``."""
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        return now.strftime("%Y%m%dT%H%M%S")

    @staticmethod
    def pad(number: int) -> str:
        return str(number).zfill(FilenameService.PAD_WIDTH)

    @staticmethod
    def sanitize_brain_id(value: str) -> str:
        return _NON_UPPER_ALNUM.sub("", value.strip().upper())

    @staticmethod
    def sanitize_local_name(value: str) -> str:
        return _NON_ALNUM.sub("", value.strip())

    @staticmethod
    def sanitize_series_type(value: str) -> str:
        return _NON_UPPER_ALNUM.sub("", value.strip().upper())

    @staticmethod
    def parse_slide_id(value: str) -> int:
        """Digits of *value* as an int; 1 when there are none or they read as 0."""
        digits = _NON_DIGIT.sub("", value.strip())
        return int(digits) if digits and int(digits) else 1
