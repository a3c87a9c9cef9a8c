"""Validation result — immutable container for validated data or errors."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating a form submission.

    The result is falsy when any field failed, so handlers can write::

        result = validate(form, rules)
        if not result:
            raise BadRequest(...)

    ``data`` holds the submitted values of the fields that passed, copied
    verbatim. ``errors`` maps each failing field to its messages::

        {"terms": ["This field is required"]}
    """

    data: dict[str, str]
    errors: dict[str, list[str]]

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        return self.is_valid
