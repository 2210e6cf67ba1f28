"""URL builders for the four read-only TheMealDB endpoints.

Every builder returns the complete request URL as a string. That string is
also the response-cache key, so builders must be deterministic: the same
arguments always produce byte-identical URLs.

Query values are percent-encoded the way a browser's
``encodeURIComponent`` does it (letters, digits, and ``-_.!~*'()`` stay
literal). The lookup id is inserted verbatim.
"""

from __future__ import annotations

from urllib.parse import quote

COMPONENT_SAFE = "!~*'()"
"""Characters ``encodeURIComponent`` leaves unescaped beyond ``quote``'s defaults."""


def encode_component(value: str) -> str:
    """Percent-encode *value* for use inside a query value or path segment."""
    return quote(value, safe=COMPONENT_SAFE)


def _join(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path}"


def categories_url(base_url: str) -> str:
    """URL listing all meal categories (``categories.php``)."""
    return _join(base_url, "categories.php")


def search_url(base_url: str, query: str) -> str:
    """URL searching meals by name (``search.php?s=<query>``)."""
    return _join(base_url, f"search.php?s={encode_component(query)}")


def filter_by_category_url(base_url: str, category: str) -> str:
    """URL listing the meals of one category (``filter.php?c=<category>``)."""
    return _join(base_url, f"filter.php?c={encode_component(category)}")


def lookup_url(base_url: str, meal_id: str) -> str:
    """URL looking up one meal by id (``lookup.php?i=<id>``)."""
    return _join(base_url, f"lookup.php?i={meal_id}")
