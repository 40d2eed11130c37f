"""Command line entry point: ``python -m kraken_trader``."""

import argparse
import signal
import sys
from pathlib import Path
from typing import Optional

import structlog

from .config.loader import ConfigLoader
from .engine import TradingEngine
from .errors import ConfigurationError
from .logging.config import configure_logging
from .scheduler import PeriodicDriver

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kraken_trader",
        description="Adaptive threshold trading agent for a single Kraken pair"
    )
    parser.add_argument("--config-dir", type=Path, default=None,
                        help="Directory containing trader.yaml")
    parser.add_argument("--pair", default=None, help="Override trading.pair")
    parser.add_argument("--once", action="store_true", help="Run a single cycle and exit")
    parser.add_argument("--validate-only", action="store_true",
                        help="Ask Kraken to validate orders without executing them")
    parser.add_argument("--log-level", default=None, help="Override logging.level")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    overrides: dict = {}
    if args.pair:
        overrides.setdefault("trading", {})["pair"] = args.pair
    if args.validate_only:
        overrides.setdefault("trading", {})["validate_only"] = True
    if args.log_level:
        overrides.setdefault("logging", {})["level"] = args.log_level
    if args.json_logs:
        overrides.setdefault("logging", {})["format_json"] = True

    try:
        config = ConfigLoader.create(args.config_dir).load(overrides)
        configure_logging(
            level=config.logging.level,
            format_json=config.logging.format_json,
            include_timestamp=config.logging.include_timestamp,
        )
        engine = TradingEngine(config)
    except ConfigurationError as e:
        configure_logging()
        logger.error("Configuration error, aborting", error=str(e), details=e.errors)
        return 2

    driver = PeriodicDriver(engine.run_cycle, config.scheduler.interval_seconds)
    signal.signal(signal.SIGINT, driver.stop)
    signal.signal(signal.SIGTERM, driver.stop)

    logger.info(
        "Starting trading loop",
        pair=config.trading.pair,
        interval_seconds=config.scheduler.interval_seconds,
        once=args.once
    )
    driver.run(max_ticks=1 if args.once else None)
    logger.info("Trading loop stopped", cycles=engine.cycle_count, position=engine.position.label)
    return 0


if __name__ == "__main__":
    sys.exit(main())
