import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from brainqr.models import FilenameRequest
from brainqr.services.filenames import FilenameService, FilenameValidationError

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["filenames"])


# ------------------------------------------------------------------
# Request bodies
# ------------------------------------------------------------------


class FilenameGeneratorInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    brain_id: str | None = Field(default=None, alias="brainId")
    local_name: str | None = Field(default=None, alias="localName")
    slide_id: str | None = Field(default=None, alias="slideId")
    series_type: str | None = Field(default=None, alias="seriesType")
    start_section_number: int | None = Field(default=None, alias="startSectionNumber")
    end_section_number: int | None = Field(default=None, alias="endSectionNumber")
    increment: int | None = None

    def to_request(self) -> FilenameRequest:
        """Null strings count as missing; absent or null numerics default to 1."""
        return FilenameRequest(
            brain_id=self.brain_id or "",
            local_name=self.local_name or "",
            slide_id=self.slide_id or "",
            series_type=self.series_type or "",
            start_section=_or_one(self.start_section_number),
            end_section=_or_one(self.end_section_number),
            increment=_or_one(self.increment),
        )


def _or_one(value: int | None) -> int:
    return 1 if value is None else value


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------


@router.post("/generate-filename")
async def generate_filename(body: FilenameGeneratorInput):
    """Expand the section range into filenames sharing one batch timestamp."""
    try:
        filenames = FilenameService.generate(body.to_request())
    except FilenameValidationError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})
    except Exception:
        log.exception("error generating filename")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    log.info(
        "generated %d filenames for brain_id=%s sections %d-%d",
        len(filenames), body.brain_id, filenames[0].section_number,
        filenames[-1].section_number,
    )
    return {
        "filenames": [item.to_dict() for item in filenames],
        "totalCount": len(filenames),
    }
