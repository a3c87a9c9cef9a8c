"""Route handlers for the site.

Every handler takes the request (or nothing) and returns a ``Template``;
failures are raised as ``HTTPError`` subclasses and rendered by the
pipeline.
"""

import logging

from wren.errors import BadRequest, FormParseError
from wren.http.request import Request
from wren.templating.returns import Template
from wren.validation import required, validate

logger = logging.getLogger("wren.site")

REQUIRED_FIELDS_MESSAGE = "all fields are required and consent must be given"

FORM_RULES = {
    "name": [required],
    "dob": [required],
    "terms": [required],
}


def home() -> Template:
    return Template("home.html")


def hello() -> Template:
    return Template("hello.html")


async def form(request: Request) -> Template:
    """Show the empty form on GET; validate and confirm on POST."""
    if request.method != "POST":
        return Template("form.html")

    try:
        data = await request.form()
    except FormParseError as exc:
        logger.debug("Rejected submission: %s", exc)
        raise BadRequest(f"invalid form submission: {exc}") from exc

    result = validate(data, FORM_RULES)
    if not result:
        logger.debug("Rejected submission: missing %s", ", ".join(sorted(result.errors)))
        raise BadRequest(REQUIRED_FIELDS_MESSAGE)

    logger.debug("Accepted submission")
    return Template("success.html", Name=result.data["name"], DOB=result.data["dob"])
