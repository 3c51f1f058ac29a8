"""Top-level application package for the receipt points API.

This package contains everything required to run the FastAPI backend
that accepts purchase receipts and awards reward points for them. It
includes the Pydantic schemas for receipts, the field validator, the
points scoring engine, the in-memory receipt store and the API router.

To run the API locally you can execute:

```bash
uvicorn receipt_points.api.main:app --reload --port 8080
```

or use the ``receipt-points`` console script installed with the
project. Configuration values can be overridden using environment
variables or a ``.env`` file at the project root.
"""

__version__ = "1.0.0"

__all__: list[str] = ["__version__"]
