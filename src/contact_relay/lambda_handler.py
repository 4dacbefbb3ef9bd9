"""
AWS Lambda entrypoint (API Gateway proxy integration).

The function variant is bound to the contact route by the gateway, so there
is no path gating here: OPTIONS gets the preflight answer and every other
request is treated as the form POST.
"""

from __future__ import annotations

import asyncio
import base64
import json
from typing import Any

from contact_relay.contact.service import ContactSubmissionHandler
from contact_relay.shared.exceptions import ContactRelayError, InternalError
from contact_relay.shared.logging import correlation_id_context, get_logger, setup_logging
from contact_relay.shared.middleware import REQUEST_ID_HEADER, cors_headers

logger = get_logger(__name__)

_handler: ContactSubmissionHandler | None = None
_loop: asyncio.AbstractEventLoop | None = None


def get_handler() -> ContactSubmissionHandler:
    """Build once per container; a misconfigured provider fails the cold start."""
    global _handler
    if _handler is None:
        from contact_relay.contact.factory import build_contact_handler

        setup_logging()
        _handler = build_contact_handler()
    return _handler


def _run(coro: Any) -> Any:
    # One loop per container: pooled store connections are bound to it.
    global _loop
    if _loop is None or _loop.is_closed():
        _loop = asyncio.new_event_loop()
    return _loop.run_until_complete(coro)


def _json_response(status_code: int, body: dict[str, Any], request_id: str) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
            "Access-Control-Allow-Origin": "*",
            REQUEST_ID_HEADER: request_id,
        },
        "body": json.dumps(body),
    }


def _method(event: dict[str, Any]) -> str:
    # REST API (v1) and HTTP API (v2) payloads carry the method differently.
    method = event.get("httpMethod")
    if not method:
        method = event.get("requestContext", {}).get("http", {}).get("method", "POST")
    return method.upper()


def _decode_body(event: dict[str, Any]) -> Any:
    raw = event.get("body") or ""
    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw).decode("utf-8")
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        logger.warning("Malformed contact request body")
        raise InternalError() from e


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    request_id = getattr(context, "aws_request_id", None)
    with correlation_id_context(request_id) as cid:
        if _method(event) == "OPTIONS":
            return {"statusCode": 204, "headers": cors_headers(), "body": ""}

        try:
            payload = _decode_body(event)
            result = _run(get_handler().handle(payload))
        except ContactRelayError as e:
            return _json_response(e.status_code, e.to_dict(), cid)
        except Exception:
            logger.exception("Unexpected error in contact function")
            error = InternalError()
            return _json_response(error.status_code, error.to_dict(), cid)

        return _json_response(200, result.to_dict(), cid)
