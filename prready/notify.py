# prready/notify.py
"""
Webhook delivery.

One POST, no retries. Any status below 300 counts as delivered; everything
else (HTTP status >= 300, connection failures, timeouts, a payload that
cannot be encoded) is raised as DeliveryError.

No external deps required (uses urllib).
"""

from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.request
from typing import Any, Dict, Optional, Union

from .logging import get_logger
from .payload import Message

CONTENT_TYPE = "application/json"


class DeliveryError(Exception):
    """Raised when the webhook did not accept the message."""


def _encode(payload: Union[Message, Dict[str, Any]]) -> bytes:
    try:
        if isinstance(payload, Message):
            return payload.to_json().encode("utf-8")
        return json.dumps(payload).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise DeliveryError(f"Cannot encode message: {e}") from e


def _status_line(code: int, reason: str) -> str:
    return f"{code} {reason}".strip()


def post_json(url: str, body: bytes, timeout: Optional[float] = None) -> str:
    """POST ``body`` to ``url`` and return the response status line.

    Raises:
        DeliveryError on HTTP status >= 300 or any transport failure,
        including a URL urllib cannot open and a malformed HTTP response.
    """
    kwargs: Dict[str, Any] = {}
    if timeout is not None:
        kwargs["timeout"] = timeout
    try:
        req = urllib.request.Request(
            url=url,
            data=body,
            headers={"Content-Type": CONTENT_TYPE},
            method="POST",
        )
        with urllib.request.urlopen(req, **kwargs) as resp:
            _ = resp.read()
            status = _status_line(resp.status, resp.reason)
            if resp.status >= 300:
                raise DeliveryError(f"Error on message: {status}")
            return status
    except urllib.error.HTTPError as e:
        raise DeliveryError(f"Error on message: {_status_line(e.code, str(e.reason))}") from e
    except urllib.error.URLError as e:
        raise DeliveryError(str(e.reason)) from e
    except (OSError, ValueError, http.client.HTTPException) as e:
        raise DeliveryError(f"{type(e).__name__}: {e}") from e


def send(
    endpoint: str,
    message: Union[Message, Dict[str, Any]],
    *,
    timeout: Optional[float] = None,
) -> str:
    """Serialize ``message`` and deliver it to ``endpoint``.

    Returns:
        The response status line, e.g. "204 No Content".

    Raises:
        DeliveryError if encoding or delivery fails.
    """
    log = get_logger(__name__)
    body = _encode(message)
    log.debug("POST %d bytes to webhook", len(body))
    status = post_json(endpoint, body, timeout=timeout)
    log.info("Webhook accepted message: %s", status)
    return status
