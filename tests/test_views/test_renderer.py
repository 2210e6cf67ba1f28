"""Tests for the terminal renderer in plain, JSON, and rich formats."""

from __future__ import annotations

import json

import pytest

from mealfinder.output import OutputFormat, OutputManager
from mealfinder.views import (
    CategoryCard,
    CategoryView,
    ConsoleRenderer,
    ErrorView,
    HomeView,
    LoadingView,
    MealCard,
    MealView,
    NavMenu,
    Link,
)
from mealfinder.views.renderer import sections


SEAFOOD = CategoryCard(name="Seafood", blurb="Fish and shellfish...", link="#category/Seafood")
SALMON = MealCard(id="52959", name="Baked salmon", meta="", link="#meal/52959")
TACOS = MealCard(id="52819", name="Fish tacos", meta="Mexican · Seafood", link="#meal/52819")

TERIYAKI = MealView(
    title="Meal — 52772 | Meal Finder",
    back_link="#home",
    id="52772",
    name="Teriyaki Chicken Casserole",
    category="Chicken",
    area="Japanese",
    ingredients=["chicken — 1 kg", "soy sauce — 3/4 cup"],
    instructions="Preheat oven to 350° F.",
    youtube="https://www.youtube.com/watch?v=4aZr5hZXP_s",
)


@pytest.fixture
def non_tty(monkeypatch):
    monkeypatch.setattr("mealfinder.output._is_tty", lambda: False)


@pytest.fixture
def tty(monkeypatch):
    monkeypatch.setattr("mealfinder.output._is_tty", lambda: True)


class TestSections:
    def test_home_sections_follow_link_order(self) -> None:
        view = HomeView(categories=[SEAFOOD], sample_meals=[SALMON, TACOS])
        rows = [row for _, section_rows, _ in sections(view) for row in section_rows]
        assert [fragment for _, _, fragment in rows] == [link.fragment for link in view.links()]

    def test_home_without_categories_has_only_notice(self) -> None:
        view = HomeView(notice="No categories found.")
        assert sections(view) == [("Explore categories", [], "No categories found.")]

    def test_meal_view_has_no_sections(self) -> None:
        assert sections(TERIYAKI) == []


class TestPlain:
    def test_category_view(self, capsys, non_tty) -> None:
        renderer = ConsoleRenderer(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        view = CategoryView(
            title="Category: Seafood — Meal Finder",
            back_link="#categories",
            name="Seafood",
            meals=[SALMON, TACOS],
        )
        renderer.show(view)

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "Category: Seafood — Meal Finder",
            "== Category: Seafood ==",
            "[1] Baked salmon\t\t#meal/52959",
            "[2] Fish tacos\tMexican · Seafood\t#meal/52819",
            "Back: #categories",
        ]
        assert renderer.current is view

    def test_home_numbers_continue_across_sections(self, capsys) -> None:
        renderer = ConsoleRenderer(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        renderer.show(HomeView(categories=[SEAFOOD], sample_meals=[SALMON]))

        out = capsys.readouterr().out
        assert "[1] Seafood\tFish and shellfish...\t#category/Seafood" in out
        assert "[2] Baked salmon\t\t#meal/52959" in out

    def test_notice_is_printed(self, capsys) -> None:
        renderer = ConsoleRenderer(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        renderer.show(CategoryView(name="Beef", notice="No meals found for this category."))
        assert "No meals found for this category." in capsys.readouterr().out

    def test_meal_view(self, capsys) -> None:
        renderer = ConsoleRenderer(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        renderer.show(TERIYAKI)

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "Meal — 52772 | Meal Finder"
        assert "Category: Chicken • Area: Japanese" in lines
        assert "  - chicken — 1 kg" in lines
        assert "Watch on YouTube: https://www.youtube.com/watch?v=4aZr5hZXP_s" in lines
        assert lines[-1] == "Back: #home"

    def test_menu(self, capsys) -> None:
        renderer = ConsoleRenderer(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        renderer.show(NavMenu(items=[Link(label="Beef", fragment="#category/Beef")]))
        assert "[1] Beef\t\t#category/Beef" in capsys.readouterr().out


class TestJson:
    def test_view_model_is_emitted(self, capsys) -> None:
        renderer = ConsoleRenderer(OutputManager(format=OutputFormat.JSON, no_color=True))
        renderer.show(TERIYAKI)

        data = json.loads(capsys.readouterr().out)
        assert data["kind"] == "meal"
        assert data["ingredients"] == ["chicken — 1 kg", "soy sauce — 3/4 cup"]
        assert data["back_link"] == "#home"

    def test_error_view_goes_to_both_streams(self, capsys) -> None:
        renderer = ConsoleRenderer(OutputManager(format=OutputFormat.JSON, no_color=True))
        renderer.show(ErrorView(message="Meal not found", exit_code=4, back_link="#home"))

        captured = capsys.readouterr()
        assert json.loads(captured.out)["kind"] == "error"
        assert "Error: Meal not found" in captured.err


class TestDiagnostics:
    def test_error_view_writes_only_stderr_in_plain(self, capsys) -> None:
        renderer = ConsoleRenderer(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        renderer.show(ErrorView(message="Meal not found", detail="Meal '1' not found", back_link="#home"))

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: Meal not found" in captured.err
        assert "→ Go back: #home" in captured.err
        assert "[debug]" not in captured.err

    def test_error_detail_shown_in_verbose_mode(self, capsys) -> None:
        renderer = ConsoleRenderer(
            OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
        )
        renderer.show(ErrorView(message="Meal not found", detail="Meal '1' not found"))
        assert "[debug] Meal '1' not found" in capsys.readouterr().err

    def test_loading_is_silent_when_piped(self, capsys, non_tty) -> None:
        renderer = ConsoleRenderer(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        renderer.show(LoadingView(message="Loading categories..."))

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""
        assert renderer.current is None

    def test_loading_goes_to_stderr_on_a_terminal(self, capsys, tty) -> None:
        renderer = ConsoleRenderer(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        renderer.show(LoadingView(message="Loading categories..."))

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Loading categories..." in captured.err

    def test_only_the_current_view_is_kept(self, capsys) -> None:
        renderer = ConsoleRenderer(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        for _ in range(3):
            renderer.show(LoadingView(message="Loading..."))
            renderer.show(HomeView(notice="hi"))
        renderer.show(TERIYAKI)

        assert renderer.current == TERIYAKI
        assert set(vars(renderer)) == {"_output", "current"}


class TestRich:
    def test_meal_panel_and_tables(self, capsys) -> None:
        renderer = ConsoleRenderer(OutputManager(format=OutputFormat.RICH, no_color=True))
        renderer.show(TERIYAKI)
        renderer.show(CategoryView(name="Seafood", meals=[SALMON], back_link="#categories"))

        out = capsys.readouterr().out
        assert "Teriyaki Chicken Casserole" in out
        assert "chicken — 1 kg" in out
        assert "Baked salmon" in out
        assert "Back: #categories" in out
