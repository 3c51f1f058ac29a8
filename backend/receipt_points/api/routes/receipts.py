"""API routes for receipt submission and points lookup."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from receipt_points.api.dependencies import get_receipt_store
from receipt_points.api.error_handlers import InvalidReceiptError, RECEIPT_NOT_FOUND_MESSAGE
from receipt_points.core.observability import sentry_breadcrumb, sentry_set_tags
from receipt_points.models.schemas import (
    ErrorResponse,
    Receipt,
    ReceiptPointsResponse,
    ReceiptProcessResponse,
)
from receipt_points.services.receipt_store import ReceiptStore
from receipt_points.services.scoring import score
from receipt_points.services.validation import find_violations

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.post(
    "/process",
    response_model=ReceiptProcessResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def process_receipt(
    receipt: Receipt,
    store: ReceiptStore = Depends(get_receipt_store),
) -> ReceiptProcessResponse:
    """Validate a receipt, store it and return its new id."""
    violations = find_violations(receipt)
    if violations:
        logger.info(
            "Rejected receipt from retailer=%r: %s",
            receipt.retailer,
            ", ".join(v.field for v in violations),
        )
        sentry_breadcrumb(
            category="receipts",
            message="process_receipt.rejected",
            data={"fields": [v.field for v in violations]},
        )
        raise InvalidReceiptError(violations)

    receipt_id = store.put(receipt)
    logger.info("Stored receipt id=%s items=%d", receipt_id, len(receipt.items))
    sentry_set_tags({"receipt_id": receipt_id})
    return ReceiptProcessResponse(id=receipt_id)


@router.get(
    "/{receipt_id}/points",
    response_model=ReceiptPointsResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_receipt_points(
    receipt_id: str,
    store: ReceiptStore = Depends(get_receipt_store),
) -> ReceiptPointsResponse:
    """Return the points awarded for a stored receipt."""
    receipt = store.get(receipt_id)
    if receipt is None:
        logger.info("Points lookup for unknown receipt id=%s", receipt_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=RECEIPT_NOT_FOUND_MESSAGE)
    points = score(receipt)
    logger.debug("Scored receipt id=%s points=%d", receipt_id, points)
    return ReceiptPointsResponse(points=points)
