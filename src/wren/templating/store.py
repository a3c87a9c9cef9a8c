"""Template store — the fixed set of named kida templates.

Loaded once during ``App._freeze()`` and handed to the request pipeline.
Loading is all-or-nothing: any missing directory, empty glob, or parse
failure raises ``TemplateLoadError`` so the process never serves with a
partial template set. Rendering failures raise ``TemplateRenderError``,
which the pipeline turns into a 500 without touching the process.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

from kida import Environment, FileSystemLoader

from wren.errors import TemplateLoadError, TemplateNotFound, TemplateRenderError

logger = logging.getLogger("wren.templating")


class TemplateStore:
    """Immutable name -> compiled template mapping.

    Build with ``TemplateStore.load()`` in production. The constructor
    takes any mapping of objects with a ``render(context)`` method, so
    tests can substitute fakes.
    """

    __slots__ = ("_templates",)

    def __init__(self, templates: Mapping[str, Any]) -> None:
        self._templates: dict[str, Any] = dict(templates)

    @classmethod
    def load(
        cls,
        directory: str | Path,
        pattern: str = "*.html",
        *,
        autoescape: bool = True,
        trim_blocks: bool = True,
        lstrip_blocks: bool = True,
        globals_: Mapping[str, Any] | None = None,
    ) -> TemplateStore:
        """Compile every file under *directory* matching *pattern*.

        Template names are paths relative to *directory* with ``/``
        separators (``"form.html"``, ``"partials/nav.html"``).

        Raises:
            TemplateLoadError: If the directory is missing, the pattern
                matches nothing, or any template fails to compile.
        """
        root = Path(directory)
        if not root.is_dir():
            msg = f"template directory {str(root)!r} does not exist"
            raise TemplateLoadError(msg)

        paths = sorted(p for p in root.glob(pattern) if p.is_file())
        if not paths:
            msg = f"pattern {pattern!r} matches no templates in {str(root)!r}"
            raise TemplateLoadError(msg)

        env = Environment(
            loader=FileSystemLoader(str(root)),
            autoescape=autoescape,
            trim_blocks=trim_blocks,
            lstrip_blocks=lstrip_blocks,
        )
        for name, value in (globals_ or {}).items():
            env.add_global(name, value)

        templates: dict[str, Any] = {}
        for path in paths:
            name = path.relative_to(root).as_posix()
            try:
                templates[name] = env.get_template(name)
            except Exception as exc:
                msg = f"failed to load template {name!r}: {exc}"
                raise TemplateLoadError(msg) from exc

        logger.debug("Loaded %d templates from %s", len(templates), root)
        return cls(templates)

    # -- Lookup --

    @property
    def names(self) -> frozenset[str]:
        """Names of every loaded template."""
        return frozenset(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._templates))

    def __len__(self) -> int:
        return len(self._templates)

    def require(self, names: Iterable[str]) -> None:
        """Raise ``TemplateLoadError`` unless every name in *names* is loaded."""
        missing = sorted(set(names) - self._templates.keys())
        if missing:
            msg = f"templates not loaded: {', '.join(missing)}"
            raise TemplateLoadError(msg)

    # -- Rendering --

    def render(self, name: str, context: Mapping[str, Any] | None = None) -> str:
        """Render template *name* with *context*.

        Raises:
            TemplateNotFound: If *name* was never loaded.
            TemplateRenderError: If the engine fails while rendering.
        """
        template = self._templates.get(name)
        if template is None:
            raise TemplateNotFound(name)
        try:
            return template.render(dict(context or {}))
        except Exception as exc:
            raise TemplateRenderError(name, str(exc)) from exc
