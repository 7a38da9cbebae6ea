#!/usr/bin/env python3
"""
CLI checking that the device-control service is reachable and its
collections can be loaded with the configured client settings
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from hub_app.api_client import DashboardApiClient, ERROR
from hub_app.core.config import get_settings
from hub_app.core.structured_logger import request_scope, setup_logging


logger = logging.getLogger(__name__)

COLLECTIONS = ["rooms", "plugs", "buttons", "schedules", "temp_actions", "temp_sensors"]


async def check_collections(client: DashboardApiClient) -> Dict[str, Any]:
    """Load every collection leniently and report the counts"""
    results: Dict[str, Any] = {}
    for name in COLLECTIONS:
        documents = await getattr(client, name).list_or_error()
        results[name] = "ERROR" if documents == ERROR else len(documents)

    price = await client.get_current_price_or_error()
    results["current_price"] = "ERROR" if price == ERROR else f"{price.amount} {price.currency} ({price.level.value})"
    return results


async def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Check connectivity with the device-control service"
    )

    parser.add_argument(
        "--url",
        type=str,
        help="Service base URL, overrides DASHBOARD_API_URL"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only report failures"
    )

    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging("ERROR" if args.quiet else settings.LOG_LEVEL, log_dir=settings.LOG_DIR or None)

    config = settings.api_client_config()
    if args.url:
        config.base_url = args.url

    with request_scope():
        async with DashboardApiClient.from_config(config) as client:
            results = await check_collections(client)

    failed = [name for name, value in results.items() if value == "ERROR"]

    if args.json:
        print(json.dumps({"base_url": config.base_url, "results": results, "ok": not failed}, indent=2))
    else:
        if not args.quiet:
            print(f"Service: {config.base_url}")
            for name, value in results.items():
                print(f"  {name}: {value}")
        if failed:
            print(f"Failed to load: {', '.join(failed)}", file=sys.stderr)

    return 1 if failed else 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
