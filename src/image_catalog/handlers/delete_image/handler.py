"""
Lambda handler responsible for deleting an image and its record.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from image_catalog.core.models.errors import (
    CatalogReadError,
    CatalogWriteError,
    NotFoundError,
    StoreDeleteError,
)
from image_catalog.core.services.catalog_service import get_catalog_service
from image_catalog.core.utils.constants import ERROR_CODE_IMAGE_NOT_FOUND, METRICS_NAMESPACE
from image_catalog.core.utils.decorators import api_gateway_handler, request_log_context
from image_catalog.core.utils.response import ResponseBuilder
from image_catalog.core.utils.validators import validate_request

from .models import DeleteImageRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image deletion requests (``DELETE /api/images/{id}``).

    This function:
    - Extracts the image id from API Gateway path parameters
    - Delegates the object-then-record deletion to the service layer
    - Translates domain errors into HTTP responses

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        200 ``{"success": true}``, 404 for an unknown id, 500 when either
        store fails (the record is kept if the object delete failed)
    """
    logger.info("Received image delete request", extra=request_log_context(event, context))

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(DeleteImageRequest, {"image_id": path_params.get("id")})
    except ValidationError:
        logger.warning("Non-numeric image id", extra={"path_params": path_params})
        return ResponseBuilder.not_found("Image not found", error=ERROR_CODE_IMAGE_NOT_FOUND)

    service = get_catalog_service()

    try:
        service.delete_image(request.id)

    except NotFoundError as exc:
        logger.info("Image not found during delete", extra={"image_id": request.id})
        return ResponseBuilder.not_found(exc.message, error=exc.error_code)

    except (StoreDeleteError, CatalogWriteError, CatalogReadError) as exc:
        logger.exception(
            "Deletion failed",
            extra={"image_id": request.id, "details": exc.details},
        )
        return ResponseBuilder.internal_error("Failed to delete image", error=exc.error_code)

    metrics.add_metric(name="ImagesDeleted", unit=MetricUnit.Count, value=1)
    return ResponseBuilder.ok({"success": True})
