"""
Structured JSON logging for the mail and calendar workflows.

Every record is a single JSON object on the ``event_connect`` logger tree.
Records never carry recipient addresses or tokens; subjects are logged
unless they name a secret outright.
"""
import os
import re
import time
import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Any, Iterator, Optional
from datetime import datetime, timezone

import sentry_sdk

logger = logging.getLogger(__name__)

SUBJECT_MAX_LENGTH = 100

# Whole words only: "Keynote" and "Authors' lunch" are ordinary titles
_SECRET_WORDS = re.compile(r"\b(passwords?|passcodes?|secrets?|tokens?|credentials?|api[ _-]?keys?)\b", re.IGNORECASE)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class Stopwatch:
    started: float
    elapsed_ms: Optional[float] = None


@contextmanager
def timing() -> Iterator[Stopwatch]:
    """Measure the wrapped block; `elapsed_ms` is set even when it raises."""
    watch = Stopwatch(started=time.perf_counter())
    try:
        yield watch
    finally:
        watch.elapsed_ms = (time.perf_counter() - watch.started) * 1000


def redact_subject(subject: str) -> str:
    """Mail or event subject as it may appear in logs."""
    if _SECRET_WORDS.search(subject):
        return "[REDACTED]"
    if len(subject) > SUBJECT_MAX_LENGTH:
        return subject[:SUBJECT_MAX_LENGTH - 3] + "..."
    return subject


def _emit(level: int, fields: Dict[str, Any]) -> None:
    record = {"timestamp": _utc_timestamp(), **fields}
    logger.log(level, json.dumps(record, separators=(',', ':'), default=str))


def log_event(
    action: str,
    workflow: str,
    subject: str,
    recipients_count: int,
    event_source: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> None:
    """
    Log the outcome of a workflow run.

    Args:
        action: What happened ('sent', 'created')
        workflow: 'send_mail' or 'create_event'
        subject: Mail or calendar event subject, redacted if it names a secret
        recipients_count: Number of recipients requested
        event_source: Where event data came from ('event_api' or 'default')
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional non-PII fields
    """
    fields: Dict[str, Any] = {
        "action": action,
        "workflow": workflow,
        "subject": redact_subject(subject),
        "recipients_count": recipients_count,
    }
    if event_source is not None:
        fields["event_source"] = event_source
    if duration_ms is not None:
        fields["duration_ms"] = round(duration_ms, 2)
    fields.update(kwargs)

    _emit(logging.INFO, fields)


def log_error(error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    _emit(logging.ERROR, {"level": "ERROR", "error": str(error), "error_type": type(error).__name__, **(context or {})})


def log_warning(message: str, context: Optional[Dict[str, Any]] = None) -> None:
    _emit(logging.WARNING, {"level": "WARNING", "message": message, **(context or {})})


def log_info(message: str, context: Optional[Dict[str, Any]] = None) -> None:
    _emit(logging.INFO, {"level": "INFO", "message": message, **(context or {})})


def sentry_enabled() -> bool:
    return os.getenv("OBS_ENABLED", "false").lower() == "true" and bool(os.getenv("SENTRY_DSN"))


def init_sentry() -> bool:
    """
    Initialize Sentry when OBS_ENABLED=true and SENTRY_DSN is set.

    Request bodies carry recipient addresses, so PII is never sent.
    """
    if not sentry_enabled():
        return False

    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration

    try:
        sentry_sdk.init(
            dsn=os.environ["SENTRY_DSN"],
            integrations=[
                FastApiIntegration(),
                LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
            ],
            traces_sample_rate=0.1,
            environment=os.getenv("ENVIRONMENT", "development"),
            send_default_pii=False,
        )
    except Exception as exc:
        logger.error("Failed to initialize Sentry: %s", exc)
        return False

    logger.info("Sentry initialized")
    return True
