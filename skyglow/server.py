# File: skyglow/server.py

"""
Command-line entry point.

Loads the raster first and only then starts uvicorn, so a missing or
broken raster ends the process with exit status 1 before any port is
bound.
"""

import argparse
import logging
from typing import Optional, Sequence

import uvicorn

from skyglow.core.config import Settings, get_settings
from skyglow.core.exceptions import SkyglowError
from skyglow.core.logging import setup_logging
from skyglow.main import create_application
from skyglow.services.context import load_sky_context

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skyglow",
        description="Serve SQM / Bortle estimates from the World Atlas light pollution raster.",
    )
    parser.add_argument("--host", help="Interface to bind")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument("--raster", help="Path to the World Atlas GeoTIFF")
    parser.add_argument(
        "--preload",
        action="store_true",
        default=None,
        help="Read the whole raster band into memory at startup",
    )
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    return parser


def resolve_settings(args: argparse.Namespace) -> Settings:
    overrides = {
        "host": args.host,
        "port": args.port,
        "raster_path": args.raster,
        "raster_preload": args.preload,
        "log_level": args.log_level.upper() if args.log_level else None,
    }
    return get_settings().model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = resolve_settings(args)
    setup_logging(settings.log_level)

    try:
        context = load_sky_context(settings.raster_path, preload=settings.raster_preload)
    except SkyglowError as exc:
        logger.critical("Cannot start without a usable raster: %s", exc)
        return 1

    app = create_application(settings=settings, context=context)

    logger.info("Server running: http://%s:%d/", settings.host, settings.port)
    try:
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    finally:
        context.close()
    return 0
