"""Template return type.

Handlers return a ``Template`` instead of rendering themselves; the
content negotiation layer renders it through the app's template store.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Template:
    """Render a named template from the store.

    Usage::

        return Template("success.html", Name=name, DOB=dob)
    """

    name: str
    context: dict[str, Any] = field(default_factory=dict)

    def __init__(self, name: str, /, **context: Any) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "context", context)
