"""Command line entry point for idhunt."""

from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path
from typing import List, Mapping, Optional

from idhunt import __version__
from idhunt.config import HuntConfig, LogConfig, setup_logging
from idhunt.errors import ConfigurationError, SessionInputError
from idhunt.loop import RequestLoop
from idhunt.net.dispatcher import HttpDispatcher
from idhunt.session import SessionStore

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_SESSION_INPUT = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="idhunt",
        description=(
            "Guess random file identifiers against URL_PATH using the SESSION_ID "
            "cookie and print the ones that exist."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--max-requests", type=int, default=None, help="Stop after this many requests")
    parser.add_argument("--timeout", type=float, default=None, help="Per-request timeout in seconds")
    parser.add_argument("--log-level", default=None, help="Logging level (default from IDHUNT_LOG_LEVEL or INFO)")
    parser.add_argument("--log-file", default=None, help="Also write diagnostics to this rotating log file")
    return parser


def _apply_overrides(config: HuntConfig, args: argparse.Namespace) -> HuntConfig:
    log = config.log
    if args.log_level:
        log = dataclasses.replace(log, level=args.log_level)
    if args.log_file:
        log = dataclasses.replace(log, file_path=Path(args.log_file))

    transport = config.transport
    if args.timeout is not None:
        transport = dataclasses.replace(transport, timeout=args.timeout)

    return dataclasses.replace(config, log=log, transport=transport)


def main(argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # Diagnostics must work before the environment has been validated.
    setup_logging(LogConfig())

    try:
        config = _apply_overrides(HuntConfig.from_env(environ), args)
        setup_logging(config.log)
    except ConfigurationError as exc:
        logger.error(exc.message)
        logger.debug("%s", exc.to_dict())
        return EXIT_CONFIG

    session = SessionStore(config.target.session_id)

    with HttpDispatcher(config.transport) as dispatcher:
        loop = RequestLoop(
            url_path=config.target.url_path,
            session=session,
            dispatcher=dispatcher,
            max_requests=args.max_requests,
        )
        try:
            stats = loop.run()
        except KeyboardInterrupt:
            loop.stop()
            logger.info("Interrupted: %s", loop.stats.summary())
            return EXIT_INTERRUPTED
        except SessionInputError as exc:
            logger.error(exc.message)
            logger.info("Stopped: %s", loop.stats.summary())
            return EXIT_SESSION_INPUT

    logger.info("Finished: %s", stats.summary())
    return EXIT_OK
