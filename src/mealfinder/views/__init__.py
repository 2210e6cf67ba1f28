"""View layer for mealfinder.

* :mod:`~mealfinder.views.models` -- frozen view-models, one per view.
* :mod:`~mealfinder.views.handlers` -- :class:`ViewHandlers`, which fetch
  through the client and build view-models.
* :mod:`~mealfinder.views.renderer` -- :class:`ConsoleRenderer`, the
  terminal implementation of the router's view root.
"""

from mealfinder.views.models import (
    CategoriesView,
    CategoryCard,
    CategoryView,
    ErrorView,
    HomeView,
    Link,
    LoadingView,
    MealCard,
    MealView,
    NavMenu,
    SearchResultsView,
    View,
)
from mealfinder.views.handlers import ViewHandlers
from mealfinder.views.renderer import ConsoleRenderer

__all__ = [
    "CategoriesView",
    "CategoryCard",
    "CategoryView",
    "ConsoleRenderer",
    "ErrorView",
    "HomeView",
    "Link",
    "LoadingView",
    "MealCard",
    "MealView",
    "NavMenu",
    "SearchResultsView",
    "View",
    "ViewHandlers",
]
