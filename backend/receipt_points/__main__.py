"""Allow ``python -m receipt_points`` to start the API server."""

from receipt_points.api.main import run

run()
