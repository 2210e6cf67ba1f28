"""Terminal renderer: draws view-models through the output system.

:class:`ConsoleRenderer` is the shipped implementation of the router's
``ViewRoot``. It keeps the last displayed view and writes it in the active
:class:`~mealfinder.output.OutputFormat`:

* **rich** -- title rule, numbered card tables, and a meal panel.
* **plain** -- one line per card: ``[n] label<TAB>detail<TAB>fragment``.
* **json** -- the view-model itself, ``kind`` discriminator included.

Loading placeholders go to stderr as progress messages and error views as
error diagnostics, so stdout carries only the rendered data.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from mealfinder.output import OutputFormat, OutputManager, get_output
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

# (heading, rows of (label, detail, fragment), notice)
_Section = tuple[str, list[tuple[str, str, str]], Optional[str]]


def _category_rows(cards: list[CategoryCard]) -> list[tuple[str, str, str]]:
    return [(c.name, c.blurb, c.link) for c in cards]


def _meal_rows(cards: list[MealCard]) -> list[tuple[str, str, str]]:
    return [(m.name, m.meta, m.link) for m in cards]


def _link_rows(links: list[Link]) -> list[tuple[str, str, str]]:
    return [(link.label, "", link.fragment) for link in links]


def sections(view: View) -> list[_Section]:
    """Split a view into numbered card sections, in the same order as ``view.links()``."""
    if isinstance(view, HomeView):
        if not view.categories:
            return [("Explore categories", [], view.notice)]
        return [
            ("Explore categories", _category_rows(view.categories), None),
            ("Sample meals", _meal_rows(view.sample_meals), view.notice),
        ]
    if isinstance(view, CategoriesView):
        return [("Categories", _category_rows(view.categories), None)]
    if isinstance(view, CategoryView):
        return [(f"Category: {view.name}", _meal_rows(view.meals), view.notice)]
    if isinstance(view, SearchResultsView):
        return [(f'Search results for "{view.query}"', _meal_rows(view.meals), view.notice)]
    if isinstance(view, NavMenu):
        return [("Categories", _link_rows(view.items), view.notice)]
    return []


class ConsoleRenderer:
    """Renders view-models to the terminal and remembers the current one.

    Args:
        output: Output manager to write through. Defaults to the global
            instance at render time.
    """

    def __init__(self, output: Optional[OutputManager] = None) -> None:
        self._output = output
        self.current: Optional[View] = None

    @property
    def output(self) -> OutputManager:
        return self._output or get_output()

    def show(self, view: View) -> None:
        """Replace the displayed view with *view*."""
        if isinstance(view, LoadingView):
            self.output.progress(view.message)
            return

        self.current = view
        if isinstance(view, ErrorView):
            self._show_error(view)
            return

        fmt = self.output.format
        if fmt == OutputFormat.JSON:
            self.output.format_response(view.model_dump(mode="json"))
        elif fmt == OutputFormat.PLAIN:
            self._show_plain(view)
        else:
            self._show_rich(view)

    # ------------------------------------------------------------------ #
    # Formats
    # ------------------------------------------------------------------ #

    def _show_error(self, view: ErrorView) -> None:
        out = self.output
        out.error(view.message)
        if view.detail:
            out.debug(view.detail)
        if view.back_link:
            out.suggest(f"Go back: {view.back_link}")
        if out.format == OutputFormat.JSON:
            out.format_response(view.model_dump(mode="json"))

    def _show_plain(self, view: View) -> None:
        out = self.output
        out.print_data(view.title)
        if isinstance(view, MealView):
            for line in _meal_lines(view):
                out.print_data(line)
        number = 0
        for heading, rows, notice in sections(view):
            out.print_data(f"== {heading} ==")
            for label, detail, fragment in rows:
                number += 1
                out.print_data(f"[{number}] {label}\t{detail}\t{fragment}")
            if notice:
                out.print_data(notice)
        if view.back_link:
            out.print_data(f"Back: {view.back_link}")

    def _show_rich(self, view: View) -> None:
        out = self.output
        out.print_renderable(Rule(escape(view.title)))
        if isinstance(view, MealView):
            out.print_renderable(_meal_panel(view))
        number = 0
        for heading, rows, notice in sections(view):
            table = Table(title=escape(heading), show_header=True, header_style="bold cyan")
            table.add_column("#", justify="right", style="bold")
            table.add_column("Name")
            table.add_column("Details", style="dim")
            for label, detail, _ in rows:
                number += 1
                table.add_row(str(number), escape(label), escape(detail))
            if rows:
                out.print_renderable(table)
            if notice:
                out.print_renderable(Text(notice, style="dim"))
        if view.back_link:
            out.print_renderable(Text(f"← Back: {view.back_link}", style="dim"))


def _meal_lines(view: MealView) -> list[str]:
    lines = [view.name, f"Category: {view.category} • Area: {view.area}", "Ingredients:"]
    lines.extend(f"  - {item}" for item in view.ingredients)
    lines.append("Instructions:")
    lines.append(view.instructions)
    if view.youtube:
        lines.append(f"Watch on YouTube: {view.youtube}")
    return lines


def _meal_panel(view: MealView) -> Panel:
    ingredients = Table.grid(padding=(0, 1))
    for item in view.ingredients:
        ingredients.add_row("•", escape(item))

    parts = [
        Text.from_markup(
            f"[bold]Category:[/bold] {escape(view.category)}  •  [bold]Area:[/bold] {escape(view.area)}"
        ),
        Text("Ingredients", style="bold"),
        ingredients,
        Text("Instructions", style="bold"),
        Text(view.instructions),
    ]
    if view.youtube:
        parts.append(Text(f"Watch on YouTube: {view.youtube}", style="bold magenta"))
    return Panel(Group(*parts), title=escape(view.name), expand=True)
