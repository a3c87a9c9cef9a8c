"""``wren run`` — load the site and serve it with pounce."""

import argparse
import logging

from wren.cli._config import load_site

logger = logging.getLogger("wren.cli")


def run_site(args: argparse.Namespace) -> None:
    """Load the site, then block serving requests.

    Templates are loaded before the server binds, so a broken template
    directory never reaches the listening state.
    """
    app = load_site(args)
    logger.info("Loaded %d templates", len(app.templates or ()))
    app.run()
