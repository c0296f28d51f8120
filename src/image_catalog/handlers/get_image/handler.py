"""
Lambda handler returning a single image record.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from image_catalog.core.models.errors import CatalogReadError, NotFoundError
from image_catalog.core.services.catalog_service import get_catalog_service
from image_catalog.core.utils.constants import ERROR_CODE_IMAGE_NOT_FOUND, METRICS_NAMESPACE
from image_catalog.core.utils.decorators import api_gateway_handler, request_log_context
from image_catalog.core.utils.response import ResponseBuilder
from image_catalog.core.utils.validators import validate_request

from .models import ImagePathRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``GET /api/images/{id}``.

    An id that is not a positive integer cannot name a record and is
    answered with 404, the same as an unknown id.
    """
    logger.info("Received get image request", extra=request_log_context(event, context))

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(ImagePathRequest, {"image_id": path_params.get("id")})
    except ValidationError:
        logger.warning("Non-numeric image id", extra={"path_params": path_params})
        return ResponseBuilder.not_found("Image not found", error=ERROR_CODE_IMAGE_NOT_FOUND)

    service = get_catalog_service()

    try:
        record = service.get_image(request.id)

    except NotFoundError as exc:
        logger.info("Image not found", extra={"image_id": request.id})
        return ResponseBuilder.not_found(exc.message, error=exc.error_code)

    except CatalogReadError as exc:
        logger.exception("Image lookup failed", extra={"image_id": request.id})
        return ResponseBuilder.internal_error("Failed to fetch image", error=exc.error_code)

    return ResponseBuilder.ok(record.to_api())
