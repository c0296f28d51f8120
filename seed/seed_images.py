#!/usr/bin/env python3
"""
Seed script to populate the catalog via API endpoints.

Generates small solid-colour images with Pillow and uploads them as
multipart/form-data, then prints the first page of the listing.

Run:
    python seed/seed_images.py --api-url http://localhost:3000 --count 6
"""

import argparse
import io
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
from PIL import Image
import requests
from requests_toolbelt.multipart.encoder import MultipartEncoder

logger = Logger(service="seed")

DEFAULT_API_URL = "http://localhost:3000"

SAMPLES: list[tuple[str, str, str]] = [
    ("sunset.jpg", "orange", "Sunset over the harbour"),
    ("forest.png", "green", "Forest trail in spring"),
    ("ocean.jpg", "blue", "Ocean waves at dawn"),
    ("desert.png", "yellow", "Desert dunes at sunset"),
    ("night.jpg", "black", "City skyline at night"),
    ("snow.png", "white", "Fresh snow on the mountain"),
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed images via Image Catalog API")

    parser.add_argument(
        "--api-url",
        default=DEFAULT_API_URL,
        help="Base URL of the API (routes live under /api)",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=len(SAMPLES),
        help="Number of images to seed",
    )

    return parser.parse_args()


def render_image(name: str, color: str) -> tuple[bytes, str]:
    fmt, mime_type = ("PNG", "image/png") if name.endswith(".png") else ("JPEG", "image/jpeg")
    buffer = io.BytesIO()
    Image.new("RGB", (320, 200), color).save(buffer, format=fmt)
    return buffer.getvalue(), mime_type


def seed_images() -> None:
    try:
        args = parse_args()
        api_url = args.api_url.rstrip("/")

        logger.info("Starting seeding process", extra={"api_base_url": api_url})

        for name, color, description in SAMPLES[: args.count]:
            data, mime_type = render_image(name, color)
            encoder = MultipartEncoder(
                fields={"image": (name, data, mime_type), "description": description}
            )

            response = requests.post(
                f"{api_url}/api/upload",
                headers={"Content-Type": encoder.content_type},
                data=encoder,
                timeout=30,
            )

            response_json = cast(dict[str, Any], response.json())

            if response.status_code == 201:
                logger.info(
                    "Seeded image",
                    extra={"image": name, "image_id": response_json.get("id")},
                )
            else:
                logger.error(
                    "Failed to seed image",
                    extra={
                        "image": name,
                        "status": response.status_code,
                        "response": response_json,
                    },
                )

        logger.info("Seeding completed")

        list_response = requests.get(f"{api_url}/api/images", timeout=30)
        listing = cast(dict[str, Any], list_response.json())

        logger.info(
            "Catalog after seeding",
            extra={
                "total_count": listing.get("totalCount"),
                "ids": [image["id"] for image in listing.get("images", [])],
            },
        )

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    seed_images()
