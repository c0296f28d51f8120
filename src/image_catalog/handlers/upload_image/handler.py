"""
Lambda handler responsible for image upload and record creation.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from image_catalog.core.models.errors import (
    CatalogWriteError,
    StoreWriteError,
    ValidationError,
)
from image_catalog.core.services.catalog_service import get_catalog_service
from image_catalog.core.utils.constants import (
    ERROR_CODE_NO_FILE,
    METRICS_NAMESPACE,
    UPLOAD_DESCRIPTION_FIELD,
    UPLOAD_FILE_FIELDS,
)
from image_catalog.core.utils.decorators import api_gateway_handler, request_log_context
from image_catalog.core.utils.multipart import parse_form_data
from image_catalog.core.utils.response import ResponseBuilder
from image_catalog.core.utils.validators import sanitize_validation_errors, validate_request

from .models import ImageUploadRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image upload requests (``POST /api/upload``).

    The body is multipart/form-data with the binary in the ``image`` field
    (``file`` accepted as an alias) and an optional ``description`` field.

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        201 with the created record, 400 when no usable file was sent,
        500 when either store fails
    """
    logger.info("Received image upload request", extra=request_log_context(event, context))

    try:
        form = parse_form_data(event)
    except ValidationError as exc:
        logger.warning("Unreadable upload body", extra={"reason": exc.message})
        return ResponseBuilder.bad_request("No file provided", error=ERROR_CODE_NO_FILE)

    upload = next(
        (form.files[name] for name in UPLOAD_FILE_FIELDS if name in form.files),
        None,
    )
    if upload is None:
        logger.warning("Upload without file part", extra={"fields": sorted(form.fields)})
        return ResponseBuilder.bad_request("No file provided", error=ERROR_CODE_NO_FILE)

    try:
        request = validate_request(
            ImageUploadRequest,
            {
                "file_data": upload.content,
                "original_name": upload.filename or None,
                "content_type": upload.content_type,
                "description": form.fields.get(UPLOAD_DESCRIPTION_FIELD) or "",
            },
        )
    except PydanticValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": sanitize_validation_errors(exc.errors())},
        )
        return ResponseBuilder.bad_request(
            "Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
        )

    service = get_catalog_service()

    try:
        record = service.upload_image(
            file_data=request.file_data,
            content_type=request.content_type,
            original_name=request.original_name,
            description=request.description,
        )

    except ValidationError as exc:
        logger.warning("Upload rejected", extra={"reason": exc.message})
        return ResponseBuilder.bad_request(exc.message, error=exc.error_code)

    except CatalogWriteError as exc:
        logger.exception(
            "Image record not created; stored object needs reconciliation",
            extra={"orphaned_key": exc.details.get("orphaned_key")},
        )
        metrics.add_metric(name="UploadOrphans", unit=MetricUnit.Count, value=1)
        return ResponseBuilder.internal_error("Image upload failed", error=exc.error_code)

    except StoreWriteError as exc:
        logger.exception("Object store write failed during upload")
        return ResponseBuilder.internal_error("Image upload failed", error=exc.error_code)

    metrics.add_metric(name="ImagesUploaded", unit=MetricUnit.Count, value=1)
    return ResponseBuilder.created(record.to_api())
