"""In-memory response caching keyed by exact request URL.

Stores decoded JSON bodies of successful GET requests for the lifetime of
the process. There is no eviction, no TTL, and no size bound: TheMealDB
resources are treated as immutable for the duration of a session, so a
populated key is never invalidated.

Keys are the full request URL *including* the query string, exactly as it
was requested. ``search.php?s=Arrabiata`` and ``search.php?s=arrabiata``
are different entries.

See Also:
    :meth:`~mealfinder.client.async_client.AsyncClient.fetch_cached` -- the
    only writer, which populates the cache after a successful decode.
"""

from __future__ import annotations

from typing import Any, Optional

from mealfinder.output import get_output


class ResponseCache:
    """Process-lifetime map from request URL to decoded JSON body.

    Instances are constructed explicitly and passed to the client, so each
    session (or test) owns an isolated cache.

    Example::

        from mealfinder.cache import ResponseCache

        cache = ResponseCache()
        cache.set("https://www.themealdb.com/api/json/v1/1/categories.php", {"categories": []})
        hit = cache.get("https://www.themealdb.com/api/json/v1/1/categories.php")
    """

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}
        self._hits = 0
        self._misses = 0

    def get(self, url: str) -> Optional[Any]:
        """Look up a cached body.

        Args:
            url: The full request URL, query string included.

        Returns:
            The decoded JSON body on a hit, or ``None`` on a miss.
        """
        if url in self._entries:
            self._hits += 1
            return self._entries[url]
        self._misses += 1
        return None

    def set(self, url: str, value: Any) -> None:
        """Store a decoded body under *url*.

        Two fetches for the same uncached URL may both complete and both
        call ``set``; the later one wins. Both bodies decode the same
        resource, so the overwrite is harmless.

        Args:
            url: The full request URL, query string included.
            value: The decoded JSON body.
        """
        if url in self._entries:
            get_output().debug(f"Cache overwrite (concurrent first fetch): {url}")
        self._entries[url] = value

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        Returns:
            A ``dict`` with ``size`` (number of entries), ``hits``, and
            ``misses``.
        """
        return {
            "size": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
        }

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def __len__(self) -> int:
        return len(self._entries)
