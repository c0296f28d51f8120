"""
API Gateway proxy responses for the image catalog routes.

Success bodies are the route payload (records use camelCase keys). Error
bodies are always ``{"error": <code>, "message": ..., "timestamp": ...}``;
keys, ids and other internals stay in the logs. Every response carries the
CORS headers, with the allowed origin taken from ``CORS_ALLOWED_ORIGIN``.
"""

import json
import os
from http import HTTPStatus
from typing import Any

from image_catalog.core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    ENV_CORS_ALLOWED_ORIGIN,
    EXPOSE_HEADERS,
)
from image_catalog.core.utils.time import utc_now_iso

JsonDict = dict[str, Any]


def cors_headers(cors_origin: str | None = None) -> dict[str, str]:
    return {
        "Content-Type": DEFAULT_CONTENT_TYPE,
        "Access-Control-Allow-Origin": cors_origin or os.getenv(ENV_CORS_ALLOWED_ORIGIN) or CORS_ORIGIN,
        "Access-Control-Allow-Headers": CORS_HEADERS,
        "Access-Control-Allow-Methods": CORS_METHODS,
        "Access-Control-Expose-Headers": EXPOSE_HEADERS,
    }


class ResponseBuilder:
    """Builds the proxy-integration dicts returned by every handler."""

    @staticmethod
    def build(
        status: HTTPStatus,
        payload: JsonDict | None = None,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """Serialize ``payload`` (plus ``request_id`` when given); no payload means an empty body."""
        if payload is None:
            body = ""
        else:
            body = json.dumps({**payload, "request_id": request_id} if request_id else payload)

        return {
            "statusCode": status.value,
            "headers": cors_headers(cors_origin),
            "body": body,
        }

    @classmethod
    def ok(cls, body: JsonDict, *, request_id: str | None = None, cors_origin: str | None = None) -> JsonDict:
        return cls.build(HTTPStatus.OK, body, request_id=request_id, cors_origin=cors_origin)

    @classmethod
    def created(
        cls, body: JsonDict, *, request_id: str | None = None, cors_origin: str | None = None
    ) -> JsonDict:
        return cls.build(HTTPStatus.CREATED, body, request_id=request_id, cors_origin=cors_origin)

    @classmethod
    def no_content(cls, *, cors_origin: str | None = None) -> JsonDict:
        """CORS preflight answer."""
        return cls.build(HTTPStatus.NO_CONTENT, cors_origin=cors_origin)

    @classmethod
    def error(
        cls,
        *,
        status: HTTPStatus,
        message: str,
        error: str | None = None,
        details: JsonDict | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """Error body; ``error`` is the stable code and falls back to the status name."""
        payload: JsonDict = {
            "error": error or status.name,
            "message": message,
            "timestamp": utc_now_iso(),
        }
        if details:
            payload["details"] = details

        return cls.build(status, payload, request_id=request_id, cors_origin=cors_origin)

    @classmethod
    def bad_request(cls, message: str, **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.BAD_REQUEST, message=message, **kwargs)

    @classmethod
    def not_found(cls, message: str = "Resource not found", **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.NOT_FOUND, message=message, **kwargs)

    @classmethod
    def internal_error(cls, message: str = "Internal server error", **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.INTERNAL_SERVER_ERROR, message=message, **kwargs)
