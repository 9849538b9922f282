"""Protean Engine runner for CafeHub.

Starts the Engine that processes events asynchronously when
event_processing is "async" (the production overlay):
- OutboxProcessor: polls the outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads Redis Streams and invokes event handlers,
  including the rating summary aggregator

Usage:
    PROTEAN_ENV=production python src/server.py
    PROTEAN_ENV=production python src/server.py --test-mode
"""

import argparse

from cafehub.domain import cafehub, logger
from protean.server.engine import Engine


def main():
    parser = argparse.ArgumentParser(description="CafeHub Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process pending messages once and exit",
    )
    args = parser.parse_args()

    cafehub.init()
    logger.info("Starting engine", domain=cafehub.name, test_mode=args.test_mode)

    engine = Engine(cafehub, test_mode=args.test_mode)
    engine.run()


if __name__ == "__main__":
    main()
