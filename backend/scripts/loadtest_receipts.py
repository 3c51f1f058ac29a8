"""Load test: concurrent receipt submission against a running server.

Submits a batch of receipts concurrently, then fetches the points for
every returned id. Reports rejected submissions, ids that could not be
found afterwards, duplicate ids and latency percentiles.

Safeguards:
  - Requires env var ALLOW_DEV_LOADTEST=1 to run.

Usage:
  ALLOW_DEV_LOADTEST=1 python scripts/loadtest_receipts.py [base_url] [receipts] [concurrency]

Example:
  ALLOW_DEV_LOADTEST=1 python scripts/loadtest_receipts.py http://localhost:8080 2000 50
"""
from __future__ import annotations

import asyncio
import os
import statistics
import sys
import time
from random import choice, randint
from typing import Any, Dict, List, Optional, Tuple

import httpx

RETAILERS = ["Target", "M&M Corner Market", "Walgreens", "7-Eleven", "Corner Shop"]
DESCRIPTIONS = ["Gatorade", "Mountain Dew 12PK", "Emils Cheese Pizza", "Pepsi - 12-oz", "Gum"]


def guard() -> None:
    if os.environ.get("ALLOW_DEV_LOADTEST") != "1":
        print("Refusing to run. Set ALLOW_DEV_LOADTEST=1 to proceed.", file=sys.stderr)
        sys.exit(2)


def synthetic_receipt() -> Dict[str, Any]:
    items = [
        {"shortDescription": choice(DESCRIPTIONS), "price": f"{randint(0, 5000) / 100:.2f}"}
        for _ in range(randint(0, 6))
    ]
    return {
        "retailer": choice(RETAILERS),
        "purchaseDate": f"2022-{randint(1, 12):02d}-{randint(1, 28):02d}",
        "purchaseTime": f"{randint(0, 23):02d}:{randint(0, 59):02d}",
        "total": f"{randint(0, 20000) / 100:.2f}",
        "items": items,
    }


async def _timed(coro) -> Tuple[httpx.Response, float]:
    started = time.perf_counter()
    resp = await coro
    return resp, (time.perf_counter() - started) * 1000


async def submit(client: httpx.AsyncClient, sem: asyncio.Semaphore) -> Tuple[Optional[str], float]:
    async with sem:
        resp, ms = await _timed(client.post("/receipts/process", json=synthetic_receipt()))
    if resp.status_code != 200:
        return None, ms
    return resp.json()["id"], ms


async def lookup(client: httpx.AsyncClient, sem: asyncio.Semaphore, receipt_id: str) -> Tuple[bool, float]:
    async with sem:
        resp, ms = await _timed(client.get(f"/receipts/{receipt_id}/points"))
    return resp.status_code == 200, ms


def _percentiles(samples: List[float]) -> str:
    if len(samples) < 2:
        return "n/a"
    cuts = statistics.quantiles(samples, n=100)
    return f"p50={cuts[49]:.1f}ms p95={cuts[94]:.1f}ms p99={cuts[98]:.1f}ms"


async def run(base_url: str, total: int, concurrency: int) -> int:
    sem = asyncio.Semaphore(concurrency)
    async with httpx.AsyncClient(base_url=base_url, timeout=30) as client:
        submitted = await asyncio.gather(*(submit(client, sem) for _ in range(total)))
        ids = [receipt_id for receipt_id, _ in submitted if receipt_id]
        looked_up = await asyncio.gather(*(lookup(client, sem, receipt_id) for receipt_id in ids))

    rejected = total - len(ids)
    missing = sum(1 for found, _ in looked_up if not found)
    duplicates = len(ids) - len(set(ids))
    print(f"Load test summary base_url={base_url} receipts={total} concurrency={concurrency}")
    print(f"submitted={len(ids)} rejected={rejected} duplicate_ids={duplicates} missing_after_submit={missing}")
    print(f"process  {_percentiles([ms for _, ms in submitted])}")
    print(f"points   {_percentiles([ms for _, ms in looked_up])}")
    return 1 if (missing or duplicates) else 0


def main() -> int:
    guard()
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8080"
    total = int(sys.argv[2]) if len(sys.argv) > 2 else 1000
    concurrency = int(sys.argv[3]) if len(sys.argv) > 3 else 25
    return asyncio.run(run(base_url, total, concurrency))


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
