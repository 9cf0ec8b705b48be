import logging
from dataclasses import dataclass, field

import httpx

from brainqr.clients import SeriesTypeClient
from brainqr.models import SeriesType

log = logging.getLogger(__name__)

# Used whenever the master-config lookup is unreachable or returns junk.
FALLBACK_SERIES_TYPES = [
    SeriesType(id=1, name="T1 Weighted", mnemonic="T1"),
    SeriesType(id=2, name="T2 Weighted", mnemonic="T2"),
    SeriesType(id=3, name="FLAIR", mnemonic="FLAIR"),
    SeriesType(id=4, name="Diffusion Weighted Imaging", mnemonic="DWI"),
    SeriesType(id=5, name="Susceptibility Weighted Imaging", mnemonic="SWI"),
    SeriesType(id=6, name="Diffusion Tensor Imaging", mnemonic="DTI"),
]

FALLBACK_NOTICE = "Failed to load series types. Using default options."


@dataclass
class SeriesTypeLookup:
    series_types: list[SeriesType] = field(default_factory=list)
    fallback: bool = False
    notice: str | None = None

    def to_dict(self) -> dict:
        return {
            "seriesTypes": [s.to_dict() for s in self.series_types],
            "fallback": self.fallback,
            "notice": self.notice,
        }


class SeriesTypeService:
    """Load series types for the form, degrading to the built-in list on failure."""

    def __init__(self, client: SeriesTypeClient | None = None) -> None:
        self.client = client or SeriesTypeClient()

    async def load(self) -> SeriesTypeLookup:
        try:
            series_types = await self.client.list_series_types()
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            log.warning("series type lookup failed, using fallback list: %s", exc)
            return SeriesTypeLookup(
                series_types=list(FALLBACK_SERIES_TYPES),
                fallback=True,
                notice=FALLBACK_NOTICE,
            )
        log.info("loaded %d series types from %s", len(series_types), self.client.url)
        return SeriesTypeLookup(series_types=series_types)
