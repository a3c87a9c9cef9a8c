"""Validation rules for wren forms.

Each rule is a callable with the signature::

    def rule(value: str) -> str | None:
        '''Return error message, or None if valid.'''

Any callable matching ``(str) -> str | None`` works with ``validate()``.
"""

from collections.abc import Callable

# Type alias for a validator function
type Validator = Callable[[str], str | None]


def required(value: str) -> str | None:
    """Field must be present and not blank.

    Whitespace-only values count as blank. A checkbox such as ``terms``
    is accepted by any non-blank value.
    """
    if not value or not value.strip():
        return "This field is required"
    return None
