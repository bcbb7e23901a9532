"""
Command-line interface for the process connection exporter.

This module provides the main CLI entry point: it parses flags, loads the
configuration, wires the connection source, metric store and refresh
scheduler together, and serves the metrics endpoint until interrupted.
"""

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import List, Optional

from .. import BUILD_TIME, COMMIT_HASH, __version__
from ..collectors import create_connection_source
from ..config import get_config, set_config_path
from ..exposition import MetricsServer, create_app
from ..models.config import REFRESH_INTERVAL, SOURCE_NETSTAT
from ..monitoring import MetricStore, RefreshScheduler
from ..system.commands import check_command_installed
from ..validation import ConfigurationError, handle_cli_error

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export network connection counts of selected processes as Prometheus metrics."
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("config.toml"),
        help="Path to the config file (default: config.toml).",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit.",
    )
    parser.add_argument(
        "--debug",
        "-v2",
        dest="debug",
        action="store_true",
        help="Enable debug logging of matched connections and requests.",
    )
    return parser


def print_version() -> None:
    print(f"Version: {__version__}")
    print(f"Build Time: {BUILD_TIME}")
    print(f"Commit Hash: {COMMIT_HASH}")


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for the exporter.

    Raises:
        SystemExit: On configuration errors or when --version is given.
    """
    args = build_parser().parse_args(argv)

    if args.version:
        print_version()
        sys.exit(0)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug logging enabled")

    set_config_path(args.config)
    try:
        config = get_config()
    except ConfigurationError as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            logger=logger,
        )

    if config.source == SOURCE_NETSTAT and not check_command_installed(config.netstat_command[0]):
        logger.warning(
            f"'{config.netstat_command[0]}' was not found on PATH; "
            "refresh cycles will fail until it is installed."
        )

    source = create_connection_source(config)
    store = MetricStore()
    scheduler = RefreshScheduler(
        source=source,
        store=store,
        specs=config.processes,
        mode=config.refresh_mode,
        interval=config.refresh_interval,
        debug=args.debug,
    )
    server = MetricsServer(
        create_app(scheduler, debug=args.debug),
        host=config.exporter_addr,
        port=config.exporter_port,
    )

    # --- Graceful shutdown ---
    shutdown_requested = threading.Event()

    def signal_handler(signum, frame):
        logger.info(f"Signal {signal.strsignal(signum)} received. Shutting down...")
        shutdown_requested.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info(f"Starting server on {config.listen_address}...")
    try:
        server.start()
    except OSError as e:
        handle_cli_error(
            error=e,
            context=f"binding {config.listen_address}",
            exit_code=1,
            logger=logger,
        )

    if config.refresh_mode == REFRESH_INTERVAL:
        scheduler.start()

    try:
        shutdown_requested.wait()
    finally:
        scheduler.stop()
        server.stop()
    logger.info("Exporter stopped")


if __name__ == "__main__":
    main_cli()
