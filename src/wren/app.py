"""Wren application class.

Mutable during setup (route registration, middleware, template globals).
Frozen at runtime when app.load(), app.run() or __call__() is first invoked.
"""

import inspect
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.types import ErrorHandler, Handler
from wren.config import AppConfig
from wren.middleware.access_log import AccessLog
from wren.middleware.protocol import Middleware
from wren.middleware.static import StaticFiles
from wren.routing.route import Route
from wren.routing.router import Router
from wren.server.handler import handle_request
from wren.templating.store import TemplateStore

logger = logging.getLogger("wren.server")


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    path: str
    handler: Handler
    methods: list[str] | None
    name: str | None
    templates: tuple[str, ...] = ()


class App:
    """The wren application.

    Mutable during setup (route registration, middleware, template globals).
    Frozen at runtime when ``app.load()``, ``app.run()`` or ``__call__()``
    is first invoked.

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check to ensure exactly
        one thread compiles the app, even when several ASGI workers call
        ``__call__()`` concurrently on first request.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_pending_routes",
        # Compiled state (populated by _freeze)
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "_template_globals",
        "_templates",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[_PendingRoute] = []
        self._middleware_list: list[Middleware] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._template_globals: dict[str, Any] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state — set during _freeze()
        self._router: Router | None = None
        self._middleware: tuple[Callable[..., Any], ...] = ()
        self._templates: TemplateStore | None = None

    # -- Route registration --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
        templates: tuple[str, ...] = (),
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: Exact URL path (``"/form"``). No parameters or prefixes.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name, shown by ``wren check``.
            templates: Template names the handler renders. Each must be
                loaded by the template store or startup fails.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            self._pending_routes.append(_PendingRoute(path, func, methods, name, templates))
            return func

        return decorator

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator."""

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Middleware --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware to the pipeline."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Template integration --

    def template_global(
        self,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a kida template global."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            global_name = name or func.__name__
            self._template_globals[global_name] = func
            return func

        return decorator

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator.

        Hooks run in registration order during ASGI lifespan shutdown,
        after the server stops accepting new requests.
        """
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Compiled state --

    @property
    def routes(self) -> list[Route]:
        """Compiled routes in registration order. Freezes the app."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.routes

    @property
    def templates(self) -> TemplateStore | None:
        """The loaded template store, or None without a template directory."""
        self._ensure_frozen()
        return self._templates

    def load(self) -> "App":
        """Compile routes and load templates now instead of on first request.

        Raises:
            ConfigurationError: If the route table is invalid.
            TemplateLoadError: If templates fail to load or a route names
                a template that was not loaded.
        """
        self._ensure_frozen()
        return self

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Load the app and serve it with pounce until interrupted.

        Args:
            host: Override bind host.
            port: Override bind port.
        """
        self._ensure_frozen()

        from wren.server.serve import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to
        the request handler pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()

        assert self._router is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
            error_handlers=self._error_handlers,
            templates=self._templates,
            max_body_size=self.config.max_content_length,
            debug=self.config.debug,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before first HTTP request), then
        runs registered startup/shutdown hooks and signals completion
        back to the server. A failed freeze is reported as
        ``lifespan.startup.failed`` so the server refuses to serve.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    for hook in self._startup_hooks:
                        result = hook()
                        if inspect.isawaitable(result):
                            await result
                    await send({"type": "lifespan.startup.complete"})
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": str(exc),
                        }
                    )
                    return

            elif msg_type == "lifespan.shutdown":
                for hook in self._shutdown_hooks:
                    result = hook()
                    if inspect.isawaitable(result):
                        await result
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock. Nothing is
        committed unless every step succeeds.
        """
        # 1. Compile route table
        router = Router()
        for pending in self._pending_routes:
            methods = frozenset(m.upper() for m in (pending.methods or ["GET"]))
            router.add(
                Route(
                    path=pending.path,
                    handler=pending.handler,
                    methods=methods,
                    name=pending.name,
                    templates=pending.templates,
                )
            )
        router.compile()

        # 2. Load the template store and check every declared template
        templates: TemplateStore | None = None
        declared = {name for route in router.routes for name in route.templates}
        if self.config.template_dir is not None:
            template_globals = {"static": self._static_url, **self._template_globals}
            templates = TemplateStore.load(
                self.config.template_dir,
                self.config.template_pattern,
                autoescape=self.config.autoescape,
                trim_blocks=self.config.trim_blocks,
                lstrip_blocks=self.config.lstrip_blocks,
                globals_=template_globals,
            )
            templates.require(declared)
        elif declared:
            TemplateStore({}).require(declared)

        # 3. Capture middleware as immutable tuple. Access logging wraps
        #    everything; static files answer before the user's middleware.
        middleware_list: list[Callable[..., Any]] = []
        if self.config.access_log:
            middleware_list.append(AccessLog())
        if self.config.static_dir is not None:
            static_dir = Path(self.config.static_dir)
            if static_dir.is_dir():
                middleware_list.append(
                    StaticFiles(
                        static_dir,
                        self.config.static_url,
                        cache_control=self.config.static_cache_control,
                    )
                )
            else:
                logger.warning("Static directory %s does not exist; not serving it", static_dir)
        middleware_list.extend(self._middleware_list)

        self._router = router
        self._templates = templates
        self._middleware = tuple(middleware_list)
        self._frozen = True

        logger.debug(
            "App loaded: %d routes, %d templates",
            len(router.routes),
            len(templates) if templates is not None else 0,
        )

    def _static_url(self, path: str) -> str:
        """Template global: URL of a static asset (``static("style.css")``)."""
        return f"{self.config.static_url.rstrip('/')}/{path.lstrip('/')}"

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has been loaded. "
                "Register routes, middleware, and template globals before app.load()."
            )
            raise RuntimeError(msg)
