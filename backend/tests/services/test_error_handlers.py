"""Error handlers - domain, validation and unexpected errors share one envelope."""

import json

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.requests import Request

from campaign_hub.api.error_handlers import (
    error_body, handle_domain_error, handle_unexpected_error,
)
from campaign_hub.core.errors import (
    DatabaseError, DuplicatePhaseError, ErrorCategory, ErrorContext,
)
from campaign_hub.infrastructure.database import to_database_error


def _request(path="/api/v1/campaigns"):
    return Request({
        "type": "http", "method": "GET", "path": path,
        "headers": [], "query_string": b"",
    })


def test_error_body_omits_details_unless_given():
    body = error_body("X", "msg", ErrorCategory.CONFLICT)
    assert body == {"error": {
        "code": "X", "message": "msg", "category": "conflict", "severity": "error",
    }}
    assert error_body("X", "m", ErrorCategory.VALIDATION, details=[])["error"]["details"] == []


async def test_domain_error_keeps_status_and_context():
    exc = DuplicatePhaseError(2, ErrorContext(campaign_id="c-1"))
    res = await handle_domain_error(_request(), exc)
    assert res.status_code == 409
    error = json.loads(res.body)["error"]
    assert error["code"] == "DUPLICATE_PHASE"
    assert error["context"]["campaign_id"] == "c-1"


async def test_database_error_is_503():
    res = await handle_domain_error(_request(), DatabaseError("boom", "commit"))
    assert res.status_code == 503


async def test_unexpected_error_hides_internals():
    res = await handle_unexpected_error(_request(), RuntimeError("secret dsn"))
    assert res.status_code == 500
    payload = json.loads(res.body)
    assert payload["error"]["code"] == "INTERNAL_ERROR"
    assert "secret" not in res.body.decode()


def test_sqlalchemy_errors_map_to_database_error():
    integrity = IntegrityError("INSERT", {}, Exception("unique"))
    assert to_database_error(integrity).operation == "commit"
    assert to_database_error(SQLAlchemyError("x")).http_status == 503
