"""Routing — flat, exact-match route table.

Routes are registered during setup and compiled into an immutable
lookup table when the app freezes.
"""

from wren.routing.route import Route, RouteMatch
from wren.routing.router import Router

__all__ = ["Route", "RouteMatch", "Router"]
