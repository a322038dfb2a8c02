import logging
from typing import Any

import httpx

from prepper.errors import UpstreamUnavailable


logger = logging.getLogger(__name__)


BASE_URL = "https://www.themealdb.com/api/json/v1/1/"
TIMEOUT = 20


def mealdb_client_factory(
    base_url: str = BASE_URL, timeout: float = TIMEOUT
) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=base_url, timeout=timeout)


class MealDBClient:
    """Raw meal records from TheMealDB. An empty list means no match."""

    def __init__(self, http_client: httpx.AsyncClient | None = None) -> None:
        self.http_client = mealdb_client_factory() if http_client is None else http_client

    async def _meals(self, path: str, params: dict[str, str] | None = None) -> list[dict[str, Any]]:
        try:
            resp = await self.http_client.get(path, params=params)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamUnavailable("Recipe service unavailable") from e

        if not isinstance(data, dict):
            raise UpstreamUnavailable("Recipe service unavailable")
        meals = data.get("meals") or []
        logger.debug("%s %s -> %d meals", path, params, len(meals))
        return [m for m in meals if isinstance(m, dict)]

    async def search(self, query: str) -> list[dict[str, Any]]:
        return await self._meals("search.php", {"s": query})

    async def lookup(self, id: str) -> list[dict[str, Any]]:
        return await self._meals("lookup.php", {"i": id})

    async def random(self) -> list[dict[str, Any]]:
        return await self._meals("random.php")

    async def close(self) -> None:
        await self.http_client.aclose()
