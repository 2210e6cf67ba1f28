"""Fragment routing for mealfinder.

* :mod:`~mealfinder.routing.route` -- the :data:`Route` variants and the
  total :func:`parse_route` function.
* :mod:`~mealfinder.routing.router` -- the :class:`Router`, which dispatches
  one handler per navigation and discards stale results by navigation
  token.
"""

from mealfinder.routing.route import Categories, Category, Home, Meal, Route, parse_route
from mealfinder.routing.router import Router, RouteHandlers, ViewRoot

__all__ = [
    "Categories",
    "Category",
    "Home",
    "Meal",
    "Route",
    "RouteHandlers",
    "Router",
    "ViewRoot",
    "parse_route",
]
