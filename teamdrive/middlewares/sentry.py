import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.pymongo import PyMongoIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from teamdrive.core.exceptions import AppError

IGNORE_PATHS = {"/health"}

def init_sentry(
    dsn: str,
    environment: str = "development",
    release: str | None = None,
    traces_sample_rate: float = 0.2,
    send_default_pii: bool = False,
):
    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        send_default_pii=send_default_pii,
        integrations=[
            FastApiIntegration(),
            PyMongoIntegration(),
            LoggingIntegration(level=None, event_level="ERROR"),
        ],
        traces_sample_rate=traces_sample_rate,
        max_breadcrumbs=200,
        before_send=_before_send,
        before_send_transaction=_drop_health_transactions
    )

def _before_send(event, hint):
    # Not-found, bad-request and conflict errors are client mistakes
    exc_info = (hint or {}).get("exc_info")
    if exc_info and isinstance(exc_info[1], AppError) and exc_info[1].status_code < 500:
        return None
    return _strip_sensitive(event)

def _strip_sensitive(event):
    headers = event.get("request", {}).get("headers", {}) or {}
    for k in list(headers.keys()):
        if k.lower() in ("authorization", "cookie", "set-cookie"):
            headers[k] = "[Filtered]"
    return event

def _drop_health_transactions(event, hint=None):
    name = event.get("transaction")
    if name and any(p in str(name) for p in IGNORE_PATHS):
        return None
    return event
