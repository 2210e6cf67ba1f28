"""Asynchronous TheMealDB client with URL-keyed response caching.

This module provides :class:`AsyncClient`, a thin wrapper around
:class:`httpx.AsyncClient` that exposes:

- :meth:`AsyncClient.fetch_cached` -- the memoizing fetch every view
  handler goes through. A cache hit returns immediately without touching
  the network; a miss issues one GET, and only a successful decode is
  stored.
- One method per TheMealDB endpoint (:meth:`~AsyncClient.list_categories`,
  :meth:`~AsyncClient.search_meals`, :meth:`~AsyncClient.filter_by_category`,
  :meth:`~AsyncClient.lookup_meal`) returning parsed
  :mod:`~mealfinder.models` records.

There is no retry and no request coalescing: two concurrent fetches of the
same uncached URL both reach the network and both write the cache.

See Also:
    :class:`~mealfinder.cache.ResponseCache` for the storage side.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from mealfinder.cache import ResponseCache
from mealfinder.client.endpoints import (
    categories_url,
    filter_by_category_url,
    lookup_url,
    search_url,
)
from mealfinder.client.response import decode_json_body, extract_records
from mealfinder.exceptions import DecodeError, NetworkError, NotFoundError
from mealfinder.models import ApiConfig, Category, Meal, MealSummary
from mealfinder.output import get_output

_RecordT = TypeVar("_RecordT", bound=BaseModel)


class AsyncClient:
    """Asynchronous client for the TheMealDB v1 API.

    Must be used as an async context manager.

    Args:
        config: Connection settings (base URL, timeout, SSL verification).
        cache: Response cache to read and populate. A fresh, private cache
            is created when ``None``.
        transport: Optional :mod:`httpx` transport, e.g.
            :class:`httpx.MockTransport` in tests.

    Example::

        async with AsyncClient(ApiConfig(), cache=ResponseCache()) as client:
            categories = await client.list_categories()
    """

    def __init__(
        self,
        config: Optional[ApiConfig] = None,
        cache: Optional[ResponseCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config or ApiConfig()
        self._cache = cache if cache is not None else ResponseCache()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._network_requests = 0

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncClient:
        self._client = httpx.AsyncClient(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    @property
    def base_url(self) -> str:
        """The configured API base URL."""
        return self._config.base_url

    @property
    def cache(self) -> ResponseCache:
        """The response cache this client reads and populates."""
        return self._cache

    @property
    def network_requests(self) -> int:
        """Number of requests that actually reached the transport."""
        return self._network_requests

    # ------------------------------------------------------------------ #
    # Memoizing fetch
    # ------------------------------------------------------------------ #

    async def fetch_cached(self, url: str) -> dict[str, Any]:
        """Return the decoded JSON body for *url*, fetching it at most once per session.

        Args:
            url: The full request URL. Used verbatim as the cache key.

        Returns:
            The decoded JSON object.

        Raises:
            NetworkError: On transport failure or a non-2xx status. The
                cache is left untouched.
            DecodeError: If the body is not a JSON object. The cache is
                left untouched.
        """
        output = get_output()
        cached = self._cache.get(url)
        if cached is not None:
            output.debug(f"Cache hit: {url}")
            return cached

        output.debug(f"Cache miss: GET {url}")
        response = await self._send(url)
        body = decode_json_body(response, url)
        self._cache.set(url, body)
        return body

    async def _send(self, url: str) -> httpx.Response:
        """Issue one GET and map failures to :class:`NetworkError`."""
        assert self._client is not None, "Client not initialised -- use as async context manager"

        self._network_requests += 1
        try:
            response = await self._client.get(url)
        except httpx.TransportError as exc:
            raise NetworkError(f"Request to {url} failed: {exc}", url=url) from exc

        if not response.is_success:
            raise NetworkError(
                f"HTTP {response.status_code} from {url}",
                url=url,
                status_code=response.status_code,
            )
        return response

    # ------------------------------------------------------------------ #
    # Endpoints
    # ------------------------------------------------------------------ #

    async def list_categories(self) -> list[Category]:
        """List every meal category."""
        body = await self.fetch_cached(categories_url(self.base_url))
        return _parse_records(Category, extract_records(body, "categories"))

    async def search_meals(self, query: str) -> list[MealSummary]:
        """Search meals by (partial) name. No match yields an empty list."""
        body = await self.fetch_cached(search_url(self.base_url, query))
        return _parse_records(MealSummary, extract_records(body, "meals"))

    async def filter_by_category(self, category: str) -> list[MealSummary]:
        """List the meals of *category*. Unknown categories yield an empty list."""
        body = await self.fetch_cached(filter_by_category_url(self.base_url, category))
        return _parse_records(MealSummary, extract_records(body, "meals"))

    async def lookup_meal(self, meal_id: str) -> Meal:
        """Look up the full record of one meal.

        Raises:
            NotFoundError: If the response holds no meal for *meal_id*.
        """
        body = await self.fetch_cached(lookup_url(self.base_url, meal_id))
        records = extract_records(body, "meals")
        if not records:
            raise NotFoundError(f"Meal '{meal_id}' not found")
        return _parse_records(Meal, records[:1])[0]


def _parse_records(model: type[_RecordT], records: list[dict[str, Any]]) -> list[_RecordT]:
    """Validate raw records into *model* instances, mapping failures to :class:`DecodeError`."""
    try:
        return [model.model_validate(r) for r in records]
    except ValidationError as exc:
        raise DecodeError(f"Unexpected {model.__name__} record: {exc}") from exc
