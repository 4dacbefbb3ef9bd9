"""
FastAPI router for the contact-form endpoint.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from contact_relay.contact.service import ContactSubmissionHandler
from contact_relay.shared.exceptions import InternalError
from contact_relay.shared.logging import get_logger

logger = get_logger(__name__)


def get_contact_handler(request: Request) -> ContactSubmissionHandler:
    handler = getattr(request.app.state, "contact_handler", None)
    if handler is None:
        logger.error("Contact handler requested before application startup")
        raise InternalError()
    return handler


def parse_body(raw: bytes) -> Any:
    """Decode a JSON request body; malformed input is an internal error, not a validation error."""
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Malformed contact request body", extra={"body_bytes": len(raw)})
        raise InternalError() from e


def build_contact_router(path: str = "/api/contact") -> APIRouter:
    router = APIRouter(tags=["contact"])

    @router.post(path)
    async def submit_contact(
        request: Request,
        handler: ContactSubmissionHandler = Depends(get_contact_handler),
    ) -> JSONResponse:
        payload = parse_body(await request.body())
        result = await handler.handle(payload)
        return JSONResponse(status_code=200, content=result.to_dict())

    return router
