"""Shared test fixtures for mealfinder.

Provides a scripted fake of the TheMealDB API (served through
:class:`httpx.MockTransport`), isolated config environments, output state
management, and a CLI runner. These fixtures are automatically discovered
by pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional, Union

import httpx
import pytest

from mealfinder.cache import ResponseCache
from mealfinder.client import AsyncClient
from mealfinder.models import ApiConfig
from mealfinder.output import OutputFormat, OutputManager, reset_output, set_output


API_BASE = "https://meals.test/api/json/v1/1"

SEAFOOD_DESCRIPTION = (
    "Seafood is any form of sea life regarded as food by humans, prominently "
    "including fish and shellfish."
)

CATEGORIES_BODY: dict[str, Any] = {
    "categories": [
        {
            "idCategory": "8",
            "strCategory": "Seafood",
            "strCategoryThumb": "https://www.themealdb.com/images/category/seafood.png",
            "strCategoryDescription": SEAFOOD_DESCRIPTION,
        },
        {
            "idCategory": "1",
            "strCategory": "Beef",
            "strCategoryThumb": "https://www.themealdb.com/images/category/beef.png",
            "strCategoryDescription": "Beef is the culinary name for meat from cattle.",
        },
    ]
}

SEAFOOD_MEALS_BODY: dict[str, Any] = {
    "meals": [
        {
            "strMeal": "Baked salmon with fennel & tomatoes",
            "strMealThumb": "https://www.themealdb.com/images/media/meals/1548772327.jpg",
            "idMeal": "52959",
        },
        {
            "strMeal": "Cajun spiced fish tacos",
            "strMealThumb": "https://www.themealdb.com/images/media/meals/uvuyxu1503067369.jpg",
            "idMeal": "52819",
        },
    ]
}

TERIYAKI_BODY: dict[str, Any] = {
    "meals": [
        {
            "idMeal": "52772",
            "strMeal": "Teriyaki Chicken Casserole",
            "strCategory": "Chicken",
            "strArea": "Japanese",
            "strInstructions": "Preheat oven to 350° F. Spray a 9x13-inch baking pan.",
            "strMealThumb": "https://www.themealdb.com/images/media/meals/wvpsxx1468256321.jpg",
            "strYoutube": "https://www.youtube.com/watch?v=4aZr5hZXP_s",
            "strIngredient1": "chicken",
            "strMeasure1": "1 kg",
            "strIngredient2": "",
            "strMeasure2": "",
            "strIngredient3": None,
            "strMeasure3": None,
        }
    ]
}

ARRABIATA_BODY: dict[str, Any] = {
    "meals": [
        {
            "idMeal": "52771",
            "strMeal": "Spicy Arrabiata Penne",
            "strCategory": "Vegetarian",
            "strArea": "Italian",
            "strMealThumb": "https://www.themealdb.com/images/media/meals/ustsqw1468250014.jpg",
        }
    ]
}

NO_MEALS_BODY: dict[str, Any] = {"meals": None}


# ---------------------------------------------------------------------------
# Fake TheMealDB
# ---------------------------------------------------------------------------


Reply = Union[tuple[int, Any], Exception]


def endpoint_key(url: httpx.URL) -> str:
    """``categories.php`` or ``filter.php?c=Seafood`` -- the last path segment plus query."""
    key = url.path.rsplit("/", 1)[-1]
    query = url.query.decode("ascii")
    return f"{key}?{query}" if query else key


class FakeMealDB:
    """Scripted TheMealDB stand-in.

    Replies are keyed by :func:`endpoint_key`. Unscripted endpoints answer
    404. A gate (an :class:`asyncio.Event`) holds an endpoint's reply until
    the test sets it, so tests can control the order in which concurrent
    fetches complete.
    """

    def __init__(self) -> None:
        self.requests: list[str] = []
        self._replies: dict[str, Reply] = {}
        self._gates: dict[str, asyncio.Event] = {}

    def reply(self, key: str, body: Any, status: int = 200) -> None:
        """Answer *key* with *body* (JSON-encoded unless ``bytes``)."""
        self._replies[key] = (status, body)

    def fail(self, key: str, exc: Exception) -> None:
        """Raise *exc* from the transport for *key*."""
        self._replies[key] = exc

    def gate(self, key: str) -> asyncio.Event:
        """Hold replies for *key* until the returned event is set."""
        event = asyncio.Event()
        self._gates[key] = event
        return event

    def count(self, key: str) -> int:
        return self.requests.count(key)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        key = endpoint_key(request.url)
        self.requests.append(key)

        gate = self._gates.get(key)
        if gate is not None:
            await gate.wait()

        reply = self._replies.get(key)
        if reply is None:
            return httpx.Response(404, text="Not Found")
        if isinstance(reply, Exception):
            raise reply
        status, body = reply
        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_api() -> FakeMealDB:
    """A fake TheMealDB seeded with two categories, Seafood meals, and meal 52772."""
    api = FakeMealDB()
    api.reply("categories.php", CATEGORIES_BODY)
    api.reply("filter.php?c=Seafood", SEAFOOD_MEALS_BODY)
    api.reply("filter.php?c=Beef", NO_MEALS_BODY)
    api.reply("lookup.php?i=52772", TERIYAKI_BODY)
    api.reply("lookup.php?i=99999999", NO_MEALS_BODY)
    api.reply("search.php?s=Arrabiata", ARRABIATA_BODY)
    api.reply("search.php?s=zzzz", NO_MEALS_BODY)
    return api


@pytest.fixture
def make_client(fake_api: FakeMealDB):
    """Factory for clients wired to ``fake_api``; use as an async context manager."""

    def _make(cache: Optional[ResponseCache] = None) -> AsyncClient:
        return AsyncClient(
            ApiConfig(base_url=API_BASE),
            cache=cache if cache is not None else ResponseCache(),
            transport=fake_api.transport(),
        )

    return _make


@pytest.fixture
def patched_cli_client(fake_api: FakeMealDB, monkeypatch: pytest.MonkeyPatch) -> FakeMealDB:
    """Route every CLI-created client through ``fake_api``."""

    def _create_client(config):
        return AsyncClient(config.api, cache=ResponseCache(), transport=fake_api.transport())

    monkeypatch.setattr("mealfinder.app._create_client", _create_client)
    return fake_api


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path
    so that tests never touch real user config. Clears all MEALFINDER_*
    environment variables and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("mealfinder.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["MEALFINDER_BASE_URL", "MEALFINDER_TIMEOUT"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a PLAIN-format, colourless OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format, colourless OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.JSON, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
