"""In-memory response caching for mealfinder.

This package provides :class:`ResponseCache`, a process-lifetime store of
decoded JSON bodies keyed by exact request URL. It is consumed by
:class:`~mealfinder.client.AsyncClient`, which populates it only after a
successful fetch and decode.
"""

from mealfinder.cache.cache import ResponseCache

__all__ = ["ResponseCache"]
