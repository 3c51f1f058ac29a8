"""In-memory receipt storage.

Receipts live only for the lifetime of the process. The store is a
plain dictionary keyed by a random UUID4 string and guarded by a lock
so concurrent submissions and lookups never interleave. There is no
update, delete or eviction: the store only grows.

One store is created per application instance (see
:func:`receipt_points.api.main.create_app`) and handed to routes through
the ``get_receipt_store`` dependency.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Dict, Optional

from receipt_points.models.schemas import Receipt

logger = logging.getLogger(__name__)


class ReceiptStore:
    """Thread-safe mapping from receipt id to receipt."""

    def __init__(self) -> None:
        self._receipts: Dict[str, Receipt] = {}
        self._lock = threading.Lock()

    def put(self, receipt: Receipt) -> str:
        """Store ``receipt`` under a freshly generated id and return the id."""
        receipt_id = str(uuid.uuid4())
        with self._lock:
            self._receipts[receipt_id] = receipt
            size = len(self._receipts)
        logger.debug("Stored receipt id=%s (store size=%d)", receipt_id, size)
        return receipt_id

    def get(self, receipt_id: str) -> Optional[Receipt]:
        """Return the receipt stored under ``receipt_id`` or None."""
        with self._lock:
            return self._receipts.get(receipt_id)

    def __contains__(self, receipt_id: object) -> bool:
        with self._lock:
            return receipt_id in self._receipts

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)
