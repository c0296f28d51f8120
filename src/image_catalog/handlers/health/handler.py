"""
Liveness probe; touches neither store.
"""

from typing import Any

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from image_catalog.core.utils.constants import HEALTH_STATUS_OK
from image_catalog.core.utils.decorators import api_gateway_handler
from image_catalog.core.utils.response import ResponseBuilder
from image_catalog.core.utils.time import utc_now_iso

logger = Logger(UTC=True)


@api_gateway_handler
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    logger.debug("Health check")
    return ResponseBuilder.ok({"status": HEALTH_STATUS_OK, "time": utc_now_iso()})
