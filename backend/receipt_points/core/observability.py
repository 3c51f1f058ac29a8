"""Observability helpers (Sentry init & common scrubbing).

Centralises Sentry initialisation for the API so configuration does
not drift. Keeps initialisation a no-op if the DSN is missing. The
breadcrumb, tag and capture helpers only act once ``init_sentry`` has
initialised the SDK.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from receipt_points.core.config import Settings, settings as default_settings


def _before_send(event: Dict[str, Any], hint: Dict[str, Any] | None = None):
	"""Scrub obvious PII / secrets before sending to Sentry.

	- Drop Authorization & Cookie headers
	- Remove request data/body (keep method + URL)
	"""
	req = event.get("request") or {}
	headers = req.get("headers") or {}
	for k in list(headers.keys()):
		if k.lower() in ("authorization", "cookie", "set-cookie", "x-api-key"):
			headers.pop(k, None)
	# Receipts are customer purchase data; never ship raw bodies
	req.pop("data", None)
	event["request"] = req
	return event


def init_sentry(service: str, settings: Optional[Settings] = None) -> bool:
	"""Initialise Sentry once for a given process.

	Uses ``settings`` when given, otherwise the module-level settings.
	Returns True if Sentry was initialised; False otherwise.
	"""
	settings = settings or default_settings
	if not settings.SENTRY_DSN:
		return False
	if sentry_enabled():  # prevent duplicate init in same process
		return True
	sentry_sdk.init(
		dsn=settings.SENTRY_DSN,
		integrations=[StarletteIntegration(), FastApiIntegration()],
		traces_sample_rate=float(settings.SENTRY_TRACES_SAMPLE_RATE or 0),
		environment=settings.ENVIRONMENT,
		release=settings.SENTRY_RELEASE,
		send_default_pii=False,
		before_send=_before_send,
	)
	sentry_sdk.set_tag("service", service)
	init_sentry._done = True  # type: ignore[attr-defined]
	return True


def sentry_enabled() -> bool:
	return getattr(init_sentry, "_done", False)


def sentry_set_tags(tags: Dict[str, Any]) -> None:
	"""Set tags on the current Sentry scope (strings only)."""
	if not sentry_enabled():
		return
	for k, v in (tags or {}).items():
		# Coerce to short strings
		sentry_sdk.set_tag(str(k), str(v)[:128] if v is not None else "")


def sentry_breadcrumb(category: str, message: str, level: str = "info", data: Optional[Dict[str, Any]] = None) -> None:
	"""Add a breadcrumb for important lifecycle steps."""
	if not sentry_enabled():
		return
	sentry_sdk.add_breadcrumb(
		category=category,
		message=message,
		level=level,
		data=data or {},
	)


def sentry_capture(exc: BaseException) -> None:
	"""Report an unexpected exception when Sentry is configured."""
	if not sentry_enabled():
		return
	sentry_sdk.capture_exception(exc)


__all__ = ["init_sentry", "sentry_enabled", "sentry_set_tags", "sentry_breadcrumb", "sentry_capture"]
