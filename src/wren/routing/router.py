"""Compiled router with exact-path matching.

The table is flat: a path maps to the routes registered for it, keyed by
method. There are no path parameters and no prefix matching, so
``/hello`` and ``/hello/`` are different paths.
"""

from wren.errors import ConfigurationError, MethodNotAllowed, NotFound
from wren.routing.route import Route, RouteMatch


class Router:
    """Exact-match route table.

    Usage::

        router = Router()
        router.add(Route("/", index, frozenset({"GET"})))
        router.add(Route("/form", form, frozenset({"GET", "POST"})))
        router.compile()
        match = router.match("POST", "/form")
    """

    __slots__ = ("_compiled", "_table")

    def __init__(self) -> None:
        self._table: dict[str, dict[str, Route]] = {}
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        if not route.path.startswith("/"):
            msg = f"Route path {route.path!r} must start with '/'."
            raise ConfigurationError(msg)

        if not route.methods:
            msg = f"Route {route.path!r} has no methods."
            raise ConfigurationError(msg)

        by_method = self._table.setdefault(route.path, {})
        for method in route.methods:
            if method in by_method:
                msg = f"Duplicate route: {method} {route.path!r} is already registered."
                raise ConfigurationError(msg)
            by_method[method] = route

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order, without duplicates."""
        seen: set[int] = set()
        result: list[Route] = []
        for by_method in self._table.values():
            for route in by_method.values():
                if id(route) not in seen:
                    seen.add(id(route))
                    result.append(route)
        return result

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def allowed_methods(self, path: str) -> frozenset[str]:
        """Methods registered for *path* (empty if the path is unknown)."""
        return frozenset(self._table.get(path, ()))

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method against the table.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route has exactly this path.
        Raises ``MethodNotAllowed`` if the path is known but the method isn't.
        """
        by_method = self._table.get(path)
        if by_method is None:
            raise NotFound(f"No route matches {method} {path!r}")

        route = by_method.get(method)
        if route is None:
            raise MethodNotAllowed(frozenset(by_method))

        return RouteMatch(route=route, method=method)
