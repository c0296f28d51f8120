"""
Lambda handler responsible for listing images with search and pagination.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from image_catalog.core.models.errors import CatalogReadError
from image_catalog.core.services.catalog_service import get_catalog_service
from image_catalog.core.utils.constants import METRICS_NAMESPACE
from image_catalog.core.utils.decorators import api_gateway_handler, request_log_context
from image_catalog.core.utils.response import ResponseBuilder
from image_catalog.core.utils.validators import sanitize_validation_errors, validate_request

from .models import ListImagesRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle requests to list images (``GET /api/images``).

    Supports:
    - ``page`` / ``limit`` offset pagination (clamped, never rejected)
    - ``search`` case-insensitive substring match on description

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info("Received image list request", extra=request_log_context(event, context))

    params = event.get("queryStringParameters") or {}

    try:
        request = validate_request(ListImagesRequest, params)
    except ValidationError as exc:
        logger.error("Request validation failed", extra={"errors": exc.errors()})
        return ResponseBuilder.bad_request(
            "Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    service = get_catalog_service()

    try:
        page = service.list_images(
            page=request.page,
            limit=request.limit,
            search=request.search,
        )
    except CatalogReadError as exc:
        logger.exception("Error listing images")
        return ResponseBuilder.internal_error("Failed to list images", error=exc.error_code)

    return ResponseBuilder.ok(page.to_api())
