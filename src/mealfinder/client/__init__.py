"""HTTP client module for mealfinder.

Provides :class:`AsyncClient`, a non-blocking TheMealDB client backed by
:class:`httpx.AsyncClient` with URL-keyed response caching, plus the URL
builders in :mod:`~mealfinder.client.endpoints` and the body decoding
helpers in :mod:`~mealfinder.client.response`.

Example::

    from mealfinder.client import AsyncClient

    async with AsyncClient(config) as client:
        meal = await client.lookup_meal("52772")
"""

from mealfinder.client.async_client import AsyncClient

__all__ = ["AsyncClient"]
