"""Entry point: python -m lprewards"""

from __future__ import annotations

import asyncio
import logging
import sys

import structlog


def setup_logging(level: str = "INFO") -> None:
    """Configure structured logging."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


async def main() -> None:
    from lprewards.config import RewardsConfig
    from lprewards.runner import run

    config = RewardsConfig()
    setup_logging(config.log_level)

    log = structlog.get_logger()
    log.info(
        "Starting reward spread optimization",
        capital=config.capital_usd,
        max_markets=config.max_markets,
        horizon_days=config.time_horizon_days,
    )
    results = await run(config)
    log.info("Optimization complete", markets=len(results))


if __name__ == "__main__":
    asyncio.run(main())
