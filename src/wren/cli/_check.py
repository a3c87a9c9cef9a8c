"""``wren check`` — startup validation without serving.

Runs the same config validation and template loading as ``wren run``
and prints the route table to stdout.
"""

import argparse

from wren.cli._config import load_site


def run_check(args: argparse.Namespace) -> None:
    """Load the site and print METHOD, PATH, HANDLER and TEMPLATES per route."""
    app = load_site(args)

    rows: list[tuple[str, str, str, str]] = []
    for route in app.routes:
        methods_str = ", ".join(sorted(route.methods))
        handler_name = getattr(route.handler, "__name__", str(route.handler))
        if route.name:
            handler_name = f"{handler_name} ({route.name})"
        rows.append((methods_str, route.path, handler_name, ", ".join(route.templates)))

    headers = ("METHOD", "PATH", "HANDLER", "TEMPLATES")
    widths = [max([len(h), *(len(r[i]) for r in rows)]) for i, h in enumerate(headers[:3])]

    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 6 + len(headers[3]), 80))
    for row in rows:
        print(fmt.format(*row))

    templates = app.templates
    count = len(templates) if templates is not None else 0
    print(f"\nOK: {len(rows)} routes, {count} templates loaded")
