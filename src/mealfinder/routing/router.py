"""Fragment router with navigation tokens.

The :class:`Router` turns fragment changes into exactly one handler
dispatch each. Dispatches are not serialised: a new navigation may start
while an earlier handler is still waiting on the network. To keep a slow,
superseded fetch from overwriting the view the user navigated to, every
dispatch captures a monotonically increasing *navigation token*; when the
handler finishes, its view-model is applied only if that token is still
the current one.

Nothing is cancelled. Stale handlers run to completion (their responses
still land in the cache) and their results are dropped.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, Protocol

from mealfinder.output import get_output
from mealfinder.routing.route import Route, parse_route
from mealfinder.views.models import ErrorView, LoadingView, View


class RouteHandlers(Protocol):
    """What the router needs from the view layer."""

    def loading(self, route: Route) -> LoadingView: ...

    async def resolve(self, route: Route) -> View: ...


class ViewRoot(Protocol):
    """The application root: whatever currently displays a view."""

    def show(self, view: View) -> None: ...


class Router:
    """Dispatches routes to view handlers and applies their results to a root.

    Args:
        handlers: Builds the loading placeholder and the final view-model for
            a route (normally :class:`~mealfinder.views.ViewHandlers`).
        root: Receives every view that should become visible.

    Example::

        router = Router(ViewHandlers(client), ConsoleRenderer())
        router.start("")            # shows #home
        router.navigate("#categories")
        await router.wait()
    """

    def __init__(self, handlers: RouteHandlers, root: ViewRoot) -> None:
        self._handlers = handlers
        self._root = root
        self._token = 0
        self._fragment = ""
        self._route: Optional[Route] = None
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def token(self) -> int:
        """The current navigation token (number of dispatches so far)."""
        return self._token

    @property
    def current_fragment(self) -> str:
        """The fragment of the most recent navigation."""
        return self._fragment

    @property
    def current_route(self) -> Optional[Route]:
        """The route of the most recent dispatch, ``None`` before the first."""
        return self._route

    def start(self, initial_fragment: str = "") -> asyncio.Task[None]:
        """Handle the initial location. An empty fragment becomes ``#home``."""
        return self.navigate(initial_fragment or "#home")

    def navigate(self, fragment: str) -> asyncio.Task[None]:
        """React to a fragment change: record it, parse it, and dispatch."""
        self._fragment = fragment
        return self.dispatch(parse_route(fragment))

    def dispatch(self, route: Route) -> asyncio.Task[None]:
        """Start the handler for *route* without awaiting it.

        Shows the route's loading placeholder immediately. Must be called
        from inside a running event loop.

        Returns:
            The task running the handler; awaiting it is optional.
        """
        self._route = route
        return self.submit(lambda: self._handlers.resolve(route), self._handlers.loading(route))

    def submit(
        self,
        produce: Callable[[], Awaitable[Optional[View]]],
        placeholder: Optional[LoadingView] = None,
    ) -> asyncio.Task[None]:
        """Run *produce* under a fresh navigation token.

        Used by :meth:`dispatch` and by navigations that have no fragment of
        their own, such as a search. A ``None`` result leaves the root as it
        is.
        """
        self._token += 1
        token = self._token
        if placeholder is not None:
            self._root.show(placeholder)

        task = asyncio.get_running_loop().create_task(self._apply(produce, token))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def wait(self) -> None:
        """Wait until every outstanding dispatch, stale or current, has finished."""
        while True:
            pending = [t for t in self._pending if not t.done()]
            if not pending:
                return
            await asyncio.gather(*pending)

    async def _apply(self, produce: Callable[[], Awaitable[Optional[View]]], token: int) -> None:
        output = get_output()
        try:
            view = await produce()
        except Exception as exc:
            output.debug(f"Handler for token {token} raised {type(exc).__name__}: {exc}")
            view = ErrorView(message="Something went wrong.", detail=str(exc))

        if token != self._token:
            output.debug(f"Discarding stale result of navigation {token} (current is {self._token})")
            return
        if view is not None:
            self._root.show(view)
