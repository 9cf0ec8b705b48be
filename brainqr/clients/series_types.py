import httpx

from brainqr.config import settings
from brainqr.models import SeriesType


class SeriesTypeClient:
    """Async client for the master-config series-type endpoint.

    Usage::

        client = SeriesTypeClient()                # URL and credentials from settings
        series = await client.list_series_types()  # [SeriesType, ...]

    Pass *http_client* to reuse an existing ``httpx.AsyncClient`` (tests hand
    in one built on ``httpx.MockTransport``). The client is only closed by
    ``aclose()`` when this wrapper created it.
    """

    def __init__(
        self,
        url: str | None = None,
        username: str | None = None,
        password: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url or settings.series_type_url
        self._auth = httpx.BasicAuth(
            username or settings.series_type_username,
            password or settings.series_type_password,
        )
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=settings.series_type_timeout
        )

    async def list_series_types(self) -> list[SeriesType]:
        """Fetch and decode the series-type list.

        Raises ``httpx.HTTPError`` on transport or status failures and
        ``ValueError`` / ``KeyError`` when the payload is not a list of
        ``{id, name, mnemonic}`` records.
        """
        resp = await self._client.get(
            self.url,
            auth=self._auth,
            headers={"Content-Type": "application/json"},
        )
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of series types, got {type(data).__name__}")
        return [
            SeriesType(
                id=int(item["id"]),
                name=str(item["name"]),
                mnemonic=str(item["mnemonic"]),
                description=item.get("description"),
            )
            for item in data
        ]

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
