"""
QuSpin + GPS Emulator
=====================

Command-line entry point. Creates the virtual ports, starts the three
emulators and the control console, and cleans up on quit or signal.

    sudo quspin-gps-sim
    quspin-gps-sim --gps-port /tmp/ttyGPS --mag1-port /tmp/ttyMAG1 \\
        --mag2-port /tmp/ttyMAG2 --seed 1 --no-menu --duration 60
"""

import signal
import sys
import argparse
import logging
from dataclasses import replace
from datetime import date
from typing import List, Optional

from .config import ConfigError, load_config
from .control import ControlConsole
from .emulators.orchestrator import EmulatorOrchestrator, OrchestratorConfig

logger = logging.getLogger(__name__)


def build_config(args: argparse.Namespace) -> OrchestratorConfig:
    """Configuration file (if any) with command-line overrides applied."""
    config = load_config(args.config) if args.config else OrchestratorConfig()

    if args.gps_port:
        config.gps = replace(config.gps, port=args.gps_port)
    if args.mag1_port:
        config.mag1 = replace(config.mag1, port=args.mag1_port)
    if args.mag2_port:
        config.mag2 = replace(config.mag2, port=args.mag2_port)
    if args.identical:
        config.identical_mode = True
    if args.seed is not None:
        if args.seed < 0:
            raise ConfigError(f"--seed: must be non-negative, got {args.seed}")
        config.seed = args.seed
    if args.synthetic_date:
        try:
            start_date = date.fromisoformat(args.synthetic_date)
        except ValueError as e:
            raise ConfigError(f"--synthetic-date: {e}") from e
        config.gps_model = replace(config.gps_model, start_date=start_date)

    return config


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="QuSpin magnetometer + GPS serial emulator")
    parser.add_argument("--config", "-c",
                       help="JSON configuration file")
    parser.add_argument("--gps-port",
                       help="GPS device path (default /dev/ttyAMA0)")
    parser.add_argument("--mag1-port",
                       help="Magnetometer 1 device path (default /dev/ttyAMA2)")
    parser.add_argument("--mag2-port",
                       help="Magnetometer 2 device path (default /dev/ttyAMA4)")
    parser.add_argument("--identical", "-i", action="store_true",
                       help="Start with identical (Y-splitter) magnetometers")
    parser.add_argument("--seed", type=int,
                       help="Random seed for reproducible streams")
    parser.add_argument("--synthetic-date", metavar="YYYY-MM-DD",
                       help="Report this simulated date in $GNZDA instead of the system date")
    parser.add_argument("--duration", "-d", type=float,
                       help="Stop after this many seconds")
    parser.add_argument("--no-menu", action="store_true",
                       help="Do not read commands from stdin")
    parser.add_argument("--verbose", "-v", action="store_true",
                       help="Verbose logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = build_config(args)
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    orchestrator = EmulatorOrchestrator(config)

    def shutdown(signum, frame):
        logger.info(f"Received signal {signum}, shutting down...")
        orchestrator.request_stop()

    signal.signal(signal.SIGTERM, shutdown)
    signal.signal(signal.SIGINT, shutdown)

    if not orchestrator.start():
        logger.error("Failed to create virtual ports (creating links under /dev requires root)")
        return 1

    if not args.no_menu:
        ControlConsole(orchestrator).start()

    try:
        orchestrator.wait(args.duration)
    finally:
        orchestrator.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
