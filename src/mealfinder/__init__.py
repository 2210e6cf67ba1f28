"""mealfinder -- Browse, search, and inspect recipes from TheMealDB.

This package is a thin client over the read-only TheMealDB JSON API. A URL
*fragment* (``#home``, ``#categories``, ``#category/Seafood``,
``#meal/52772``) selects one of four views; the router parses the fragment,
dispatches to a view handler, and the handler builds a structured
view-model from cache-backed fetches. A swappable renderer draws the
view-model to the terminal.

Typical workflow::

    mealfinder open '#category/Seafood'   # render one view
    mealfinder browse                     # interactive navigation loop

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models for configuration and API records.
    config: XDG-aware configuration with precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    routing: Fragment parsing and the navigation-token router.
    views: View-models, view handlers, and the terminal renderer.
"""

__version__ = "0.1.0"
