"""
Lambda handler responsible for replacing an image description.
"""

import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from image_catalog.core.models.errors import (
    CatalogReadError,
    CatalogWriteError,
    NotFoundError,
    ValidationError,
)
from image_catalog.core.services.catalog_service import get_catalog_service
from image_catalog.core.utils.constants import ERROR_CODE_IMAGE_NOT_FOUND, METRICS_NAMESPACE
from image_catalog.core.utils.decorators import api_gateway_handler, request_log_context
from image_catalog.core.utils.multipart import event_body_bytes
from image_catalog.core.utils.response import ResponseBuilder
from image_catalog.core.utils.validators import sanitize_validation_errors, validate_request
from image_catalog.handlers.get_image.models import ImagePathRequest

from .models import UpdateDescriptionRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle ``PUT /api/images/{id}/description`` with a JSON body ``{"description": ...}``.

    Only the catalog is touched.

    Returns:
        200 ``{"success": true, "image": {...}}``, 400 for a malformed body,
        404 for an unknown id, 500 when the catalog fails
    """
    logger.info("Received description update request", extra=request_log_context(event, context))

    path_params = event.get("pathParameters") or {}

    try:
        path = validate_request(ImagePathRequest, {"image_id": path_params.get("id")})
    except PydanticValidationError:
        logger.warning("Non-numeric image id", extra={"path_params": path_params})
        return ResponseBuilder.not_found("Image not found", error=ERROR_CODE_IMAGE_NOT_FOUND)

    try:
        payload = json.loads(event_body_bytes(event) or b"null")
    except (ValidationError, ValueError):
        logger.warning("Malformed JSON body", extra={"image_id": path.id})
        return ResponseBuilder.bad_request("Request body must be valid JSON")

    if not isinstance(payload, dict):
        return ResponseBuilder.bad_request("Request body must be a JSON object")

    try:
        request = validate_request(UpdateDescriptionRequest, payload)
    except PydanticValidationError as exc:
        logger.error("Request validation failed", extra={"errors": exc.errors()})
        return ResponseBuilder.bad_request(
            "Invalid request payload",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    service = get_catalog_service()

    try:
        record = service.update_description(path.id, request.description)

    except ValidationError as exc:
        return ResponseBuilder.bad_request(exc.message, error=exc.error_code)

    except NotFoundError as exc:
        logger.info("Image not found during update", extra={"image_id": path.id})
        return ResponseBuilder.not_found(exc.message, error=exc.error_code)

    except (CatalogWriteError, CatalogReadError) as exc:
        logger.exception("Description update failed", extra={"image_id": path.id})
        return ResponseBuilder.internal_error("Failed to update image", error=exc.error_code)

    return ResponseBuilder.ok({"success": True, "image": record.to_api()})
