"""Config assembly shared by ``wren run`` and ``wren check``."""

import argparse
import logging
from dataclasses import replace

from wren.app import App
from wren.site import create_app, site_config


def load_site(args: argparse.Namespace) -> App:
    """Build, validate, and load the site app from env vars and CLI flags.

    Applies the configured log level to the root logger before loading,
    so template loading is logged at the requested verbosity.

    Raises:
        ConfigurationError: If the configuration is invalid.
        TemplateLoadError: If the templates cannot be loaded.
    """
    config = site_config(
        host=getattr(args, "host", None),
        port=getattr(args, "port", None),
        template_dir=args.templates,
        static_dir=args.static,
        debug=args.debug,
        log_level=args.log_level,
    )
    if args.static is not None and args.static.lower() == "none":
        config = replace(config, static_dir=None)
    config.validate()

    logging.getLogger().setLevel(config.log_level.upper())
    return create_app(config).load()
