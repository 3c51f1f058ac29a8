"""
Custom exception handlers for FastAPI.
Maps decoding, validation and server errors onto the API's error responses.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from receipt_points.core.observability import sentry_capture
from receipt_points.services.validation import Violation

logger = logging.getLogger(__name__)

INVALID_RECEIPT_MESSAGE = "The receipt is invalid."
RECEIPT_NOT_FOUND_MESSAGE = "No receipt found for that ID."


class InvalidReceiptError(Exception):
    """Raised when a decoded receipt breaks one or more field rules."""

    def __init__(self, violations: List[Violation]):
        super().__init__(INVALID_RECEIPT_MESSAGE)
        self.violations = violations


def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Malformed JSON and wrong shapes get the same 400 as field rule failures
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "detail": INVALID_RECEIPT_MESSAGE,
            "errors": jsonable_encoder(exc.errors()),
        },
    )


def invalid_receipt_handler(request: Request, exc: InvalidReceiptError):
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "detail": INVALID_RECEIPT_MESSAGE,
            "errors": [v.to_dict() for v in exc.violations],
        },
    )


def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    sentry_capture(exc)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )
