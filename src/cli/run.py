import argparse
import asyncio
import json
import logging
import sys
import time
from typing import List, Optional

from core.sources import CATEGORIES
from services.config import load_config
from services.container import build_services
from services.logging import setup_logging


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the current news feed as JSON")
    parser.add_argument("--category", default="India",
                        help=f"Feed category ({', '.join(CATEGORIES)})")
    parser.add_argument("--breaking", action="store_true",
                        help="Print the top breaking headlines instead of a category feed")
    parser.add_argument("--config", default=None,
                        help="Path to config.yml")
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> None:
    start_time = time.perf_counter()
    args = _parse_args(argv)

    setup_logging(logging.WARNING)
    logger = logging.getLogger(__name__)

    config = load_config(args.config)
    services = build_services(config)

    if args.breaking:
        items = await services.breaking.run()
        payload = {"items": [item.to_dict() for item in items]}
    else:
        category, items = await services.feed.run(args.category)
        payload = {"category": category, "items": [item.to_dict() for item in items]}

    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")

    logger.info(f"Total time: {time.perf_counter() - start_time:.2f}s")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
