# summarizer_api/services/webhook.py
from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..config import settings

logger = logging.getLogger("webhook")


class WebhookError(RuntimeError):
    """The summarization webhook could not produce a summary."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def summarize_via_webhook(
    transcript: str,
    url: Optional[str] = None,
    *,
    timeout: Optional[float] = None,
    client: Optional[httpx.Client] = None,
) -> str:
    """
    POST the raw transcript (text/plain) and return the response body as text.
    Any 2xx is success. No retries: a failure surfaces immediately.
    """
    target = url or settings.WEBHOOK_URL
    if not target:
        raise WebhookError("Summarization webhook is not configured")

    headers = {"Content-Type": "text/plain"}
    logger.info(f"[webhook] summarize chars={len(transcript)}")
    try:
        if client is not None:
            r = client.post(target, content=transcript.encode("utf-8"), headers=headers)
        else:
            with httpx.Client(timeout=timeout or settings.WEBHOOK_TIMEOUT_S) as c:
                r = c.post(target, content=transcript.encode("utf-8"), headers=headers)
    except httpx.HTTPError as e:
        logger.error(f"[webhook] transport error: {e}")
        raise WebhookError(f"Webhook request failed: {e}") from e

    if not r.is_success:
        logger.warning(f"[webhook] non-2xx status={r.status_code}")
        raise WebhookError(f"Webhook request failed with status: {r.status_code}", r.status_code)

    return r.text


def notify_summary_deleted(
    name: Optional[str],
    email: Optional[str],
    summary: str,
    transcript: str,
    url: Optional[str] = None,
    *,
    client: Optional[httpx.Client] = None,
) -> bool:
    """
    Best-effort notification that a summary is being deleted.
    Never raises; returns True only when the endpoint answered 2xx.
    """
    target = url or settings.DELETE_WEBHOOK_URL
    if not target:
        return False

    payload = {"name": name, "email": email, "summary": summary, "transcript": transcript}
    try:
        if client is not None:
            r = client.post(target, json=payload)
        else:
            with httpx.Client(timeout=settings.NOTIFY_TIMEOUT_S) as c:
                r = c.post(target, json=payload)
    except httpx.HTTPError as e:
        logger.warning(f"[webhook] delete notification failed: {e}")
        return False

    if not r.is_success:
        logger.warning(f"[webhook] delete notification status={r.status_code}")
        return False
    return True
