"""View-models: structured, presentation-free descriptions of each view.

View handlers produce these; renderers consume them. Every view carries a
``kind`` discriminator (so the JSON renderer emits self-describing
objects), a ``title``, and an optional ``back_link`` fragment. Cards carry
the fragment a click on them navigates to.

:meth:`links` lists the navigable cards of a view in display order; the
interactive browser numbers them from 1.
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

APP_TITLE = "Meal Finder"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Link(_Frozen):
    """A navigable target: visible label plus destination fragment."""

    label: str
    fragment: str


class CategoryCard(_Frozen):
    name: str
    thumb: Optional[str] = None
    blurb: str = ""
    link: str

    def to_link(self) -> Link:
        return Link(label=self.name, fragment=self.link)


class MealCard(_Frozen):
    id: str
    name: str
    thumb: Optional[str] = None
    meta: str = ""
    link: str

    def to_link(self) -> Link:
        return Link(label=self.name, fragment=self.link)


class _View(_Frozen):
    title: str = APP_TITLE
    back_link: Optional[str] = None

    def links(self) -> list[Link]:
        return []


class LoadingView(_View):
    """Placeholder shown between dispatch and fetch completion."""

    kind: Literal["loading"] = "loading"
    message: str = "Loading..."


class ErrorView(_View):
    """Terminal state of a failed navigation.

    ``exit_code`` is the :mod:`~mealfinder.exit_codes` value a one-shot CLI
    command exits with when this view is the final result.
    """

    kind: Literal["error"] = "error"
    message: str
    detail: Optional[str] = None
    exit_code: int = 1


class HomeView(_View):
    kind: Literal["home"] = "home"
    categories: list[CategoryCard] = Field(default_factory=list)
    sample_meals: list[MealCard] = Field(default_factory=list)
    notice: Optional[str] = None

    def links(self) -> list[Link]:
        return [c.to_link() for c in self.categories] + [m.to_link() for m in self.sample_meals]


class CategoriesView(_View):
    kind: Literal["categories"] = "categories"
    categories: list[CategoryCard] = Field(default_factory=list)

    def links(self) -> list[Link]:
        return [c.to_link() for c in self.categories]


class CategoryView(_View):
    kind: Literal["category"] = "category"
    name: str
    meals: list[MealCard] = Field(default_factory=list)
    notice: Optional[str] = None

    def links(self) -> list[Link]:
        return [m.to_link() for m in self.meals]


class MealView(_View):
    kind: Literal["meal"] = "meal"
    id: str
    name: str
    thumb: Optional[str] = None
    category: str = ""
    area: str = ""
    ingredients: list[str] = Field(default_factory=list)
    instructions: str = ""
    youtube: Optional[str] = None


class SearchResultsView(_View):
    kind: Literal["search"] = "search"
    query: str
    meals: list[MealCard] = Field(default_factory=list)
    notice: Optional[str] = None

    def links(self) -> list[Link]:
        return [m.to_link() for m in self.meals]


class NavMenu(_View):
    """Category quick-links, the terminal counterpart of a navbar dropdown."""

    kind: Literal["menu"] = "menu"
    items: list[Link] = Field(default_factory=list)
    notice: Optional[str] = None

    def links(self) -> list[Link]:
        return list(self.items)


View = Union[
    LoadingView,
    ErrorView,
    HomeView,
    CategoriesView,
    CategoryView,
    MealView,
    SearchResultsView,
    NavMenu,
]
