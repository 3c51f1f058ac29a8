"""Common dependencies for FastAPI routes."""

from __future__ import annotations

from fastapi import Request

from receipt_points.services.receipt_store import ReceiptStore


def get_receipt_store(request: Request) -> ReceiptStore:
    """Return the receipt store owned by the running application.

    Tests can swap the store with ``app.dependency_overrides``.
    """
    return request.app.state.receipt_store
