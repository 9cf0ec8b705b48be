from fastapi import APIRouter, Depends

from brainqr.services.series_types import SeriesTypeService

router = APIRouter(prefix="/api", tags=["series-types"])


def get_series_type_service() -> SeriesTypeService:
    return SeriesTypeService()


@router.get("/series-types")
async def list_series_types(
    service: SeriesTypeService = Depends(get_series_type_service),
) -> dict:
    """Series types for the form's select box.

    Never fails: when the master config is unreachable the built-in list is
    returned with ``fallback`` set and a ``notice`` for the user.
    """
    try:
        lookup = await service.load()
    finally:
        await service.client.aclose()
    return lookup.to_dict()
