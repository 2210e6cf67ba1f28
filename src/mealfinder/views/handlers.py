"""View handlers -- one coroutine per route, each returning a view-model.

Each handler performs its cache-backed fetches through
:class:`~mealfinder.client.AsyncClient` and returns either a success
view-model or an :class:`~mealfinder.views.models.ErrorView`. Data errors
(:class:`~mealfinder.exceptions.NetworkError`,
:class:`~mealfinder.exceptions.DecodeError`,
:class:`~mealfinder.exceptions.NotFoundError`) are recovered here and never
reach the router.

Fetches inside a handler run in program order; the home view loads the
category list first and then the first category's meals.
"""

from __future__ import annotations

from typing import Optional

from mealfinder.client import AsyncClient
from mealfinder.exceptions import MealFinderError, NotFoundError
from mealfinder.models import Category, Meal, MealSummary
from mealfinder.output import get_output
from mealfinder.routing import route as routes
from mealfinder.views.models import (
    APP_TITLE,
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

BLURB_LENGTH = 80
NO_MEALS = "No meals found"


def category_card(category: Category) -> CategoryCard:
    """Build a card for *category*; the blurb is the description cut to 80 characters."""
    blurb = (category.description or "")[:BLURB_LENGTH] + "..."
    return CategoryCard(
        name=category.name,
        thumb=category.thumb,
        blurb=blurb,
        link=routes.Category(category.name).to_fragment(),
    )


def meal_card(meal: MealSummary) -> MealCard:
    """Build a card for *meal*; ``meta`` is ``"<area> · <category>"`` with blanks omitted."""
    meta = " · ".join(part for part in (meal.area, meal.category) if part)
    return MealCard(
        id=meal.id,
        name=meal.name,
        thumb=meal.thumb,
        meta=meta,
        link=routes.Meal(meal.id).to_fragment(),
    )


def ingredient_lines(meal: Meal) -> list[str]:
    """Format ingredient slots as ``"<ingredient> — <measure>"``.

    Blank ingredient slots are excluded; a blank measure leaves just the
    ingredient name.
    """
    return [
        f"{ingredient} — {measure}" if measure else ingredient
        for ingredient, measure in meal.ingredient_slots()
    ]


def loading_view(route: routes.Route) -> LoadingView:
    """Placeholder shown while the handler for *route* is in flight."""
    if isinstance(route, routes.Categories):
        return LoadingView(message="Loading categories...")
    if isinstance(route, routes.Category):
        return LoadingView(message=f'Loading "{route.name}"...')
    if isinstance(route, routes.Meal):
        return LoadingView(message="Loading meal details...")
    return LoadingView()


def _error_view(message: str, exc: MealFinderError, back_link: Optional[str] = None) -> ErrorView:
    get_output().debug(f"{type(exc).__name__}: {exc}")
    return ErrorView(
        title=f"Error — {APP_TITLE}",
        message=message,
        detail=str(exc),
        exit_code=exc.exit_code,
        back_link=back_link,
    )


class ViewHandlers:
    """Builds view-models for every route from cache-backed API calls.

    Args:
        client: An open :class:`~mealfinder.client.AsyncClient`.
    """

    def __init__(self, client: AsyncClient) -> None:
        self._client = client

    def loading(self, route: routes.Route) -> LoadingView:
        return loading_view(route)

    async def resolve(self, route: routes.Route) -> View:
        """Run the handler matching *route*'s variant."""
        if isinstance(route, routes.Categories):
            return await self.categories()
        if isinstance(route, routes.Category):
            return await self.category(route.name)
        if isinstance(route, routes.Meal):
            return await self.meal(route.id)
        return await self.home()

    async def home(self) -> View:
        title = f"Home — {APP_TITLE}"
        try:
            categories = await self._client.list_categories()
            cards = [category_card(c) for c in categories]
            if not categories:
                return HomeView(title=title, categories=cards, notice="No categories found.")
            sample = await self._client.filter_by_category(categories[0].name)
        except MealFinderError as exc:
            return _error_view("Unable to load home content.", exc)

        return HomeView(
            title=title,
            categories=cards,
            sample_meals=[meal_card(m) for m in sample],
            notice=None if sample else NO_MEALS,
        )

    async def categories(self) -> View:
        try:
            categories = await self._client.list_categories()
        except MealFinderError as exc:
            return _error_view("Unable to load categories.", exc, back_link="#home")
        return CategoriesView(
            title=f"Categories — {APP_TITLE}",
            back_link="#home",
            categories=[category_card(c) for c in categories],
        )

    async def category(self, name: str) -> View:
        try:
            meals = await self._client.filter_by_category(name)
        except MealFinderError as exc:
            return _error_view("Failed to load category meals.", exc, back_link="#categories")
        return CategoryView(
            title=f"Category: {name} — {APP_TITLE}",
            back_link="#categories",
            name=name,
            meals=[meal_card(m) for m in meals],
            notice=None if meals else "No meals found for this category.",
        )

    async def meal(self, meal_id: str) -> View:
        try:
            meal = await self._client.lookup_meal(meal_id)
        except NotFoundError as exc:
            return _error_view("Meal not found", exc, back_link="#home")
        except MealFinderError as exc:
            return _error_view("Failed to load meal details.", exc, back_link="#home")
        return MealView(
            title=f"Meal — {meal_id} | {APP_TITLE}",
            back_link="#home",
            id=meal.id,
            name=meal.name,
            thumb=meal.thumb,
            category=meal.category or "",
            area=meal.area or "",
            ingredients=ingredient_lines(meal),
            instructions=meal.instructions or "",
            youtube=meal.youtube or None,
        )

    async def search(self, query: str) -> Optional[View]:
        """Search meals by name. Returns ``None`` for a blank query."""
        query = query.strip()
        if not query:
            return None
        try:
            meals = await self._client.search_meals(query)
        except MealFinderError as exc:
            return _error_view("Failed to search meals.", exc, back_link="#home")
        return SearchResultsView(
            title=f'Search: {query} — {APP_TITLE}',
            back_link="#home",
            query=query,
            meals=[meal_card(m) for m in meals],
            notice=None if meals else f'{NO_MEALS} for "{query}".',
        )

    async def nav_menu(self) -> NavMenu:
        """Category quick-links. A failed load yields an empty menu with a notice."""
        try:
            categories = await self._client.list_categories()
        except MealFinderError as exc:
            get_output().debug(f"{type(exc).__name__}: {exc}")
            return NavMenu(notice="Unable to load categories")
        return NavMenu(
            title=f"Menu — {APP_TITLE}",
            items=[
                Link(label=c.name, fragment=routes.Category(c.name).to_fragment())
                for c in categories
            ],
        )
