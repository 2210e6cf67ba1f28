"""Route variants and fragment parsing.

A route is the parsed navigation intent of a URL fragment. There are four
variants; every fragment maps to exactly one of them and anything the
parser does not recognise falls back to :class:`Home`.

=========================  =======================
Fragment                   Route
=========================  =======================
*(empty)* or ``#home``     ``Home()``
``#categories``            ``Categories()``
``#category/<name>``       ``Category(name)``
``#meal/<id>``             ``Meal(id)``
anything else              ``Home()``
=========================  =======================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union
from urllib.parse import unquote

from mealfinder.client.endpoints import encode_component


@dataclass(frozen=True)
class Home:
    """Landing view: category grid plus sample meals."""

    def to_fragment(self) -> str:
        return "#home"


@dataclass(frozen=True)
class Categories:
    """Full category list."""

    def to_fragment(self) -> str:
        return "#categories"


@dataclass(frozen=True)
class Category:
    """Meals of one category. ``name`` is already percent-decoded."""

    name: str

    def to_fragment(self) -> str:
        return f"#category/{encode_component(self.name)}"


@dataclass(frozen=True)
class Meal:
    """Detail view of one meal. ``id`` is the raw fragment segment."""

    id: str

    def to_fragment(self) -> str:
        return f"#meal/{self.id}"


Route = Union[Home, Categories, Category, Meal]


def parse_route(fragment: str) -> Route:
    """Parse a URL fragment into a :data:`Route`.

    One leading ``#`` is ignored; the rest is split on ``/`` and empty
    segments are dropped. A ``category`` name is the percent-decoded join of
    every remaining segment, so ``#category/a/b`` names ``"a/b"``. A
    ``meal`` id is the second segment exactly as written.

    Never raises: unrecognised shapes map to :class:`Home`.

    Example::

        >>> parse_route("#category/Side%20Dish")
        Category(name='Side Dish')
        >>> parse_route("#nonsense")
        Home()
    """
    if fragment.startswith("#"):
        fragment = fragment[1:]
    parts = [p for p in fragment.split("/") if p]

    if not parts or parts[0] == "home":
        return Home()
    if parts[0] == "categories":
        return Categories()
    if parts[0] == "category" and len(parts) > 1:
        return Category(unquote("/".join(parts[1:])))
    if parts[0] == "meal" and len(parts) > 1:
        return Meal(parts[1])
    return Home()
