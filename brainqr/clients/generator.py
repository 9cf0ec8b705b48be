import httpx

from brainqr.config import settings
from brainqr.models import GeneratedFilename, SeriesType


class GeneratorError(Exception):
    """The generation endpoint answered with an error or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GeneratorClient:
    """Async client for this service's own ``/api`` endpoints.

    The terminal front end talks to the server through this class exactly like
    the browser page does. *http_client* may be any ``httpx.AsyncClient``; tests
    pass one bound to the app with ``httpx.ASGITransport``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url or settings.generator_url,
            timeout=settings.series_type_timeout,
        )

    async def generate(self, payload: dict) -> tuple[list[GeneratedFilename], int]:
        """POST *payload* (camelCase form fields). Returns ``(filenames, totalCount)``."""
        try:
            resp = await self._client.post("/api/generate-filename", json=payload)
        except httpx.HTTPError as exc:
            raise GeneratorError(f"Error generating filename: {exc}") from exc

        if resp.status_code != 200:
            raise GeneratorError(
                _error_message(resp, "Failed to generate filename"), resp.status_code
            )
        data = resp.json()
        filenames = [GeneratedFilename.from_dict(item) for item in data["filenames"]]
        return filenames, int(data["totalCount"])

    async def series_types(self) -> tuple[list[SeriesType], str | None]:
        """Return ``(series_types, notice)``; *notice* is set when the server fell back."""
        try:
            resp = await self._client.get("/api/series-types")
        except httpx.HTTPError as exc:
            raise GeneratorError(f"Error loading series types: {exc}") from exc
        if resp.status_code != 200:
            raise GeneratorError(
                _error_message(resp, "Failed to load series types"), resp.status_code
            )
        data = resp.json()
        series = [
            SeriesType(
                id=item["id"],
                name=item["name"],
                mnemonic=item["mnemonic"],
                description=item.get("description"),
            )
            for item in data["seriesTypes"]
        ]
        return series, data.get("notice")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _error_message(resp: httpx.Response, default: str) -> str:
    try:
        return resp.json().get("error") or default
    except ValueError:
        return default
