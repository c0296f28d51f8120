#!/usr/bin/env python3
"""
Cleanup script to remove catalog images via API endpoints.

Run:
    python seed/cleanup_images.py --api-url http://localhost:3000 --search sunset
"""

import argparse
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="cleanup")

DEFAULT_API_URL = "http://localhost:3000"
PAGE_SIZE = 100


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cleanup images via Image Catalog API")

    parser.add_argument(
        "--api-url",
        default=DEFAULT_API_URL,
        help="Base URL of the API (routes live under /api)",
    )
    parser.add_argument(
        "--search",
        default=None,
        help="Only delete images whose description contains this text",
    )

    return parser.parse_args()


def collect_ids(api_url: str, search: str | None) -> list[int]:
    """Collect ids from every page before deleting any of them."""
    ids: list[int] = []
    page = 1

    while True:
        params: dict[str, Any] = {"page": page, "limit": PAGE_SIZE}
        if search:
            params["search"] = search

        response = requests.get(f"{api_url}/api/images", params=params, timeout=30)
        response.raise_for_status()

        listing = cast(dict[str, Any], response.json())
        ids.extend(image["id"] for image in listing.get("images", []))

        if not listing.get("hasMore"):
            return ids
        page += 1


def cleanup_images() -> None:
    try:
        args = parse_args()
        api_url = args.api_url.rstrip("/")

        logger.info(
            "Starting cleanup process",
            extra={"api_base_url": api_url, "search": args.search},
        )

        ids = collect_ids(api_url, args.search)

        if not ids:
            logger.info("No images found for cleanup")
            return

        for image_id in ids:
            delete_resp = requests.delete(f"{api_url}/api/images/{image_id}", timeout=30)

            if delete_resp.ok:
                logger.info("Deleted image", extra={"image_id": image_id})
            else:
                logger.error(
                    "Failed to delete image",
                    extra={
                        "image_id": image_id,
                        "status": delete_resp.status_code,
                        "response": delete_resp.text,
                    },
                )

        logger.info("Cleanup completed successfully", extra={"deleted": len(ids)})

    except Exception as exc:
        logger.exception("Cleanup failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    cleanup_images()
