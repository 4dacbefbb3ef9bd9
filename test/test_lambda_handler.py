"""
Tests for the AWS Lambda entrypoint.
"""

from __future__ import annotations

import base64
import json
from types import SimpleNamespace

import pytest

from contact_relay import lambda_handler
from contact_relay.contact.service import ContactSubmissionHandler
from contact_relay.email.adapters.mock import MockEmailProvider


@pytest.fixture(autouse=True)
def installed_handler(monkeypatch, contact_handler):
    monkeypatch.setattr(lambda_handler, "_handler", contact_handler)
    return contact_handler


def _event(body, method: str = "POST", encode: bool = False) -> dict:
    raw = body if isinstance(body, str) else json.dumps(body)
    if encode:
        raw = base64.b64encode(raw.encode("utf-8")).decode("ascii")
    return {"httpMethod": method, "body": raw, "isBase64Encoded": encode}


CONTEXT = SimpleNamespace(aws_request_id="lambda-req-1")


def test_success(valid_payload, mock_provider) -> None:
    resp = lambda_handler.handler(_event(valid_payload), CONTEXT)

    assert resp["statusCode"] == 200
    assert json.loads(resp["body"]) == {"success": True, "message": "Form submitted successfully"}
    assert resp["headers"]["Content-Type"] == "application/json"
    assert resp["headers"]["Access-Control-Allow-Origin"] == "*"
    assert resp["headers"]["X-Request-ID"] == "lambda-req-1"
    assert len(mock_provider.sent) == 1


def test_base64_body(valid_payload) -> None:
    resp = lambda_handler.handler(_event(valid_payload, encode=True), CONTEXT)

    assert resp["statusCode"] == 200


def test_missing_field(valid_payload, mock_provider) -> None:
    del valid_payload["tier"]

    resp = lambda_handler.handler(_event(valid_payload), CONTEXT)

    assert resp["statusCode"] == 400
    assert json.loads(resp["body"])["error"] == "Missing required field: tier"
    assert mock_provider.sent == []


def test_malformed_body() -> None:
    resp = lambda_handler.handler(_event("{oops"), CONTEXT)

    assert resp["statusCode"] == 500
    assert json.loads(resp["body"])["code"] == "internal_error"


def test_provider_failure(monkeypatch, valid_payload) -> None:
    monkeypatch.setattr(lambda_handler, "_handler", ContactSubmissionHandler(MockEmailProvider(fail=True)))

    resp = lambda_handler.handler(_event(valid_payload), CONTEXT)

    assert resp["statusCode"] == 500
    assert json.loads(resp["body"]) == {"error": "Failed to send", "code": "provider_error"}


def test_preflight_http_api_event(mock_provider) -> None:
    event = {"requestContext": {"http": {"method": "OPTIONS"}}, "body": None}

    resp = lambda_handler.handler(event, CONTEXT)

    assert resp["statusCode"] == 204
    assert resp["body"] == ""
    assert resp["headers"]["Access-Control-Allow-Methods"] == "POST, OPTIONS"
    assert mock_provider.sent == []


def test_unconfigured_provider_on_cold_start(monkeypatch, valid_payload) -> None:
    monkeypatch.setattr(lambda_handler, "_handler", None)
    monkeypatch.setenv("EMAIL_PROVIDER", "sendgrid")
    monkeypatch.setenv("EMAIL_SENDGRID_API_KEY", "")
    monkeypatch.setenv("STORE_TYPE", "none")

    resp = lambda_handler.handler(_event(valid_payload), CONTEXT)

    assert resp["statusCode"] == 500
    assert json.loads(resp["body"]) == {
        "error": "Email provider is not configured",
        "code": "provider_unconfigured",
    }


def test_invalid_settings_on_cold_start(monkeypatch, valid_payload) -> None:
    monkeypatch.setattr(lambda_handler, "_handler", None)
    monkeypatch.setenv("EMAIL_PROVIDER", "mock")
    monkeypatch.setenv("EMAIL_TIMEOUT_SECONDS", "not-a-number")
    monkeypatch.setenv("STORE_TYPE", "none")

    resp = lambda_handler.handler(_event(valid_payload), CONTEXT)

    assert resp["statusCode"] == 500
    assert json.loads(resp["body"]) == {
        "error": "Failed to process form submission",
        "code": "internal_error",
    }
    assert resp["headers"]["X-Request-ID"] == "lambda-req-1"
