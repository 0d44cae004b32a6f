"""
Unit tests for server exception handlers.

Tests cover the error envelope for business errors, request validation,
HTTP errors and unhandled exceptions.
"""

import json
from unittest.mock import Mock, patch

import pytest
import pytest_asyncio
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from legal_aid.core.errors import Conflict, ExternalServiceError, NotFound, ValidationFailed
from legal_aid.server.exception_handlers import setup_exception_handlers
from legal_aid.server.exception_handlers.global_handler import global_exception_handler


class Payload(BaseModel):
    name: str
    age: int


def build_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/missing")
    async def missing():
        raise NotFound("Case not found")

    @app.get("/conflict")
    async def conflict():
        raise Conflict("Duplicate transaction reference")

    @app.post("/offices")
    async def duplicate_office():
        raise IntegrityError("INSERT INTO offices", {}, Exception("UNIQUE constraint failed: offices.name"))

    @app.get("/gateway")
    async def gateway():
        raise ExternalServiceError()

    @app.get("/invalid")
    async def invalid():
        raise ValidationFailed("Unknown permissions: X", details=["X"])

    @app.post("/payload")
    async def payload(body: Payload):
        return body

    @app.get("/teapot")
    async def teapot():
        raise HTTPException(status_code=418, detail="I'm a teapot")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    return app


@pytest_asyncio.fixture
async def http():
    transport = ASGITransport(app=build_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://localhost") as client:
        yield client


class TestErrorEnvelope:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("path", "status", "message"),
        [
            ("/missing", 404, "Case not found"),
            ("/conflict", 409, "Duplicate transaction reference"),
            ("/gateway", 502, "External service request failed"),
        ],
    )
    async def test_business_errors_keep_status_and_message(self, http, path, status, message):
        response = await http.get(path)

        assert response.status_code == status
        assert response.json() == {"success": False, "message": message}

    @pytest.mark.asyncio
    async def test_unique_violation_at_commit_is_409(self, http):
        response = await http.post("/offices")

        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "Resource already exists"}
        assert "UNIQUE" not in response.text

    @pytest.mark.asyncio
    async def test_error_details_are_exposed(self, http):
        response = await http.get("/invalid")

        assert response.status_code == 400
        assert response.json()["errors"] == ["X"]

    @pytest.mark.asyncio
    async def test_request_validation_is_400(self, http):
        response = await http.post("/payload", json={"name": "x", "age": "old"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert [error["field"] for error in body["errors"]] == ["age"]

    @pytest.mark.asyncio
    async def test_http_exception_detail_becomes_message(self, http):
        response = await http.get("/teapot")

        assert response.status_code == 418
        assert response.json() == {"success": False, "message": "I'm a teapot"}

    @pytest.mark.asyncio
    async def test_unknown_route_uses_envelope(self, http):
        response = await http.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_unhandled_error_is_500(self, http):
        with patch("legal_aid.server.exception_handlers.global_handler.logger"):
            response = await http.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "Internal server error"
        assert body["error_type"] == "RuntimeError"
        assert "kaboom" not in response.text


class TestGlobalExceptionHandler:
    @pytest.fixture
    def mock_request(self):
        request = Mock(spec=Request)
        request.method = "GET"
        request.url.path = "/api/v1/cases"
        request.query_params = {}
        request.client = Mock()
        request.client.host = "127.0.0.1"
        return request

    @pytest.mark.asyncio
    async def test_logs_error_with_context(self, mock_request):
        with patch("legal_aid.server.exception_handlers.global_handler.logger") as mock_logger:
            response = await global_exception_handler(mock_request, ValueError("bad value"))

        mock_logger.error.assert_called_once()
        call_args = mock_logger.error.call_args
        assert "Unhandled exception" in call_args[0][0]
        assert call_args[1]["extra"]["error_type"] == "ValueError"
        assert call_args[1]["extra"]["path"] == "/api/v1/cases"
        assert isinstance(response, JSONResponse)

    @pytest.mark.asyncio
    async def test_error_id_matches_log(self, mock_request):
        exc = RuntimeError("Test error")

        with patch("legal_aid.server.exception_handlers.global_handler.logger") as mock_logger:
            response = await global_exception_handler(mock_request, exc)

        body = json.loads(response.body.decode())
        assert body["error_id"] == mock_logger.error.call_args[1]["extra"]["error_id"]

    @pytest.mark.asyncio
    async def test_handles_request_without_client(self, mock_request):
        mock_request.client = None

        with patch("legal_aid.server.exception_handlers.global_handler.logger") as mock_logger:
            response = await global_exception_handler(mock_request, RuntimeError("x"))

        assert response.status_code == 500
        assert mock_logger.error.call_args[1]["extra"]["client"] == "unknown"
