"""Typer application factory and CLI entry point for mealfinder.

This module wires the top-level Typer application: global output options,
the one-shot view commands (``open``, ``categories``, ``category``,
``meal``, ``search``), the interactive ``browse`` loop, and the ``config``
sub-group.

Every view command runs the same pipeline inside one event loop: build an
:class:`~mealfinder.client.AsyncClient` with a fresh
:class:`~mealfinder.cache.ResponseCache`, hand it to
:class:`~mealfinder.views.ViewHandlers`, and let a
:class:`~mealfinder.routing.Router` dispatch into a
:class:`~mealfinder.views.ConsoleRenderer`. One-shot commands exit with the
error view's exit code when the navigation fails.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import asyncio
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Callable, NoReturn, Optional

import typer

from mealfinder import __version__
from mealfinder.cache import ResponseCache
from mealfinder.client import AsyncClient
from mealfinder.commands.config import config_app
from mealfinder.exceptions import InvalidUsageError, MealFinderError
from mealfinder.exit_codes import EXIT_GENERIC_FAILURE
from mealfinder.models import GlobalConfig
from mealfinder.output import OutputFormat, OutputManager, error, info, set_output, suggest, warning
from mealfinder.routing import Category, Meal, Router
from mealfinder.views import ConsoleRenderer, ErrorView, LoadingView, View, ViewHandlers


app = typer.Typer(
    name="mealfinder",
    help="Browse, search, and inspect recipes from TheMealDB.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(config_app, name="config", help="Configuration management.")

BROWSE_HELP = """\
Commands:
  <n>        open the n-th numbered item
  #fragment  navigate to a fragment (#home, #categories, #category/<name>, #meal/<id>)
  /query     search meals by name
  b          follow the back link
  m          show the category menu
  r          reload the current fragment
  q          quit"""

# (router, handlers) -> None; starts exactly one navigation.
Navigation = Callable[[Router, ViewHandlers], Any]


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"mealfinder {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Override the TheMealDB API base URL."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~mealfinder.output.OutputManager` from
    CLI flags and stores shared options in ``ctx.obj``.
    """
    fmt: Optional[OutputFormat] = None
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    ctx.ensure_object(dict)
    ctx.obj["base_url"] = base_url
    ctx.obj["format"] = fmt
    ctx.obj["no_color"] = no_color
    ctx.obj["quiet"] = quiet
    ctx.obj["verbose"] = verbose

    set_output(
        OutputManager(
            format=fmt or OutputFormat.AUTO,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )


# ------------------------------------------------------------------ #
# Pipeline
# ------------------------------------------------------------------ #


def _fail(exc: MealFinderError) -> NoReturn:
    """Report *exc* on stderr and exit with its code."""
    error(str(exc))
    raise typer.Exit(code=exc.exit_code) from None


def _resolve(ctx: typer.Context) -> GlobalConfig:
    """Resolve the effective config and reinstall output if the config picks a format."""
    from mealfinder.config import resolve_config

    obj = ctx.obj or {}
    cli_format = obj.get("format")
    try:
        config = resolve_config(
            cli_base_url=obj.get("base_url"),
            cli_format=cli_format.value if cli_format is not None else None,
        )
    except MealFinderError as exc:
        _fail(exc)

    # a format flag already installed its output manager in the callback
    if cli_format is None and config.output.format != OutputFormat.AUTO.value:
        try:
            fmt = OutputFormat(config.output.format)
        except ValueError:
            warning(f"Ignoring unknown output.format '{config.output.format}'")
        else:
            set_output(
                OutputManager(
                    format=fmt,
                    no_color=obj.get("no_color", False),
                    quiet=obj.get("quiet", False),
                    verbose=obj.get("verbose", False),
                )
            )
    return config


def _create_client(config: GlobalConfig) -> AsyncClient:
    """Build the API client for one CLI invocation, with its own session cache."""
    return AsyncClient(config.api, cache=ResponseCache())


async def _render_once(config: GlobalConfig, navigation: Navigation) -> Optional[View]:
    renderer = ConsoleRenderer()
    async with _create_client(config) as client:
        handlers = ViewHandlers(client)
        router = Router(handlers, renderer)
        navigation(router, handlers)
        await router.wait()
    return renderer.current


def _run(ctx: typer.Context, navigation: Navigation) -> None:
    config = _resolve(ctx)
    view = asyncio.run(_render_once(config, navigation))
    if isinstance(view, ErrorView):
        raise typer.Exit(code=view.exit_code)


def _search(router: Router, handlers: ViewHandlers, query: str) -> None:
    router.submit(
        lambda: handlers.search(query),
        LoadingView(message=f'Searching for "{query}" ...'),
    )


# ------------------------------------------------------------------ #
# One-shot view commands
# ------------------------------------------------------------------ #


@app.command("open")
def open_command(
    ctx: typer.Context,
    fragment: str = typer.Argument(
        "", help="Fragment to open, e.g. '#category/Seafood'. Empty opens #home."
    ),
) -> None:
    """Render the view for a URL fragment.

    Unrecognised fragments fall back to the home view.

    Example::

        mealfinder open '#meal/52772'
    """
    _run(ctx, lambda router, _: router.start(fragment))


@app.command("categories")
def categories_command(ctx: typer.Context) -> None:
    """List all meal categories."""
    _run(ctx, lambda router, _: router.navigate("#categories"))


@app.command("category")
def category_command(
    ctx: typer.Context,
    name: str = typer.Argument(help="Category name, e.g. 'Seafood'."),
) -> None:
    """List the meals of one category."""
    _run(ctx, lambda router, _: router.navigate(Category(name).to_fragment()))


@app.command("meal")
def meal_command(
    ctx: typer.Context,
    meal_id: str = typer.Argument(help="TheMealDB meal id, e.g. 52772."),
) -> None:
    """Show the full recipe of one meal."""
    _run(ctx, lambda router, _: router.navigate(Meal(meal_id).to_fragment()))


@app.command("search")
def search_command(
    ctx: typer.Context,
    query: str = typer.Argument(help="Meal name or part of it, e.g. 'Arrabiata'."),
) -> None:
    """Search meals by name."""
    if not query.strip():
        _fail(InvalidUsageError("Search query must not be blank."))
    _run(ctx, lambda router, handlers: _search(router, handlers, query))


# ------------------------------------------------------------------ #
# Interactive browser
# ------------------------------------------------------------------ #


@app.command("browse")
def browse_command(
    ctx: typer.Context,
    fragment: str = typer.Argument("", help="Fragment to start at. Empty opens #home."),
) -> None:
    """Browse interactively: pick numbered items, type fragments, or search.

    Example::

        mealfinder browse '#categories'
    """
    config = _resolve(ctx)
    asyncio.run(_browse(config, fragment))


async def _browse(config: GlobalConfig, fragment: str) -> None:
    renderer = ConsoleRenderer()
    async with _create_client(config) as client:
        handlers = ViewHandlers(client)
        router = Router(handlers, renderer)
        router.start(fragment)
        await router.wait()
        suggest("Type a number to open an item, ? for help, q to quit.")

        # Each command resolves against renderer.current, so the previous
        # navigation must settle before the next prompt reads input.
        while True:
            try:
                command = typer.prompt("mealfinder", default="", show_default=False).strip()
            except typer.Abort:
                break
            if command in ("q", "quit", "exit"):
                break
            if not command:
                continue
            if not _browse_step(command, router, handlers, renderer):
                continue
            await router.wait()


def _browse_step(
    command: str, router: Router, handlers: ViewHandlers, renderer: ConsoleRenderer
) -> bool:
    """Start the navigation *command* asks for. Returns False when nothing was started."""
    current = renderer.current

    if command in ("?", "h", "help"):
        info(BROWSE_HELP)
        return False
    if command.isdigit():
        links = current.links() if current is not None else []
        index = int(command)
        if not 1 <= index <= len(links):
            warning(f"No item {index} on this view.")
            return False
        router.navigate(links[index - 1].fragment)
        return True
    if command.startswith("#"):
        router.navigate(command)
        return True
    if command.startswith("/"):
        query = command[1:].strip()
        if not query:
            warning("Type something to search for after '/'.")
            return False
        _search(router, handlers, query)
        return True
    if command == "b":
        if current is None or current.back_link is None:
            warning("This view has no back link.")
            return False
        router.navigate(current.back_link)
        return True
    if command == "m":
        router.submit(handlers.nav_menu, LoadingView(message="Loading categories..."))
        return True
    if command == "r":
        router.navigate(router.current_fragment or "#home")
        return True

    warning(f"Unknown command: {command}")
    suggest("Type ? for help.")
    return False


# ------------------------------------------------------------------ #
# Entry point
# ------------------------------------------------------------------ #


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from mealfinder.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``mealfinder`` console script.

    Unhandled :class:`~mealfinder.exceptions.MealFinderError` instances
    cause a clean exit with the error's ``exit_code``. All other exceptions
    produce a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        if isinstance(exc, MealFinderError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
