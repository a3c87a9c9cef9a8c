"""Form validation — rules applied per field, one result.

Usage::

    from wren.validation import required, validate

    async def submit(request: Request):
        form = await request.form()
        result = validate(form, {"name": [required], "terms": [required]})
        if not result:
            raise BadRequest("all fields are required")
"""

from collections.abc import Mapping

from wren.validation.result import ValidationResult
from wren.validation.rules import Validator, required

__all__ = [
    "ValidationResult",
    "Validator",
    "required",
    "validate",
]


def validate(
    data: Mapping[str, str],
    rules: dict[str, list[Validator]],
) -> ValidationResult:
    """Validate data against a set of rules.

    Args:
        data: Any mapping of field names to string values, such as
            ``FormData`` or a plain ``dict``. A missing field is
            validated as the empty string.
        rules: Field name to the validators run against it, in order.
            A failing ``required`` stops the remaining validators for
            that field.

    Returns:
        A ``ValidationResult``; every field in *rules* ends up in
        either ``.data`` or ``.errors``.
    """
    errors: dict[str, list[str]] = {}
    cleaned: dict[str, str] = {}

    for field_name, validators in rules.items():
        value = data.get(field_name) or ""

        field_errors: list[str] = []
        for validator in validators:
            error = validator(value)
            if error is not None:
                field_errors.append(error)
                if validator is required:
                    break

        if field_errors:
            errors[field_name] = field_errors
        else:
            cleaned[field_name] = value

    return ValidationResult(data=cleaned, errors=errors)
