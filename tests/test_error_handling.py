"""
Tests for error handling and the error envelope.
Tests custom exceptions, the request middleware, and error response formatting.
"""

import pytest
from datetime import timedelta
from unittest.mock import Mock, patch
from fastapi.exceptions import RequestValidationError
from sqlalchemy import exc as sa_exc, inspect
from starlette.exceptions import HTTPException as StarletteHTTPException

from landlord_api.config import settings
from landlord_api.services.error_handler import ErrorHandlerService
from landlord_api.services.property import PropertyService
from landlord_api.utils.auth import create_access_token
from landlord_api.utils.exceptions import (
    BadRequestError,
    ConflictError,
    DatabaseConnectionError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from tests.conftest import auth_headers


def make_request(request_id="abc12345", path="/api/things"):
    request = Mock()
    request.state.request_id = request_id
    request.url.path = path
    return request


class TestErrorHandlerService:

    def test_format_error_response(self):
        response = ErrorHandlerService.format_error_response(
            error_code="TEST_ERROR",
            message="Test message",
            details=[{"field": "name", "message": "required"}],
            request_id="req-1"
        )

        error = response["error"]
        assert error["code"] == "TEST_ERROR"
        assert error["message"] == "Test message"
        assert error["request_id"] == "req-1"
        assert error["details"] == [{"field": "name", "message": "required"}]
        assert error["timestamp"].endswith("Z")

    def test_details_omitted_when_empty(self):
        response = ErrorHandlerService.format_error_response("X", "y")
        assert "details" not in response["error"]

    @pytest.mark.parametrize("exception,status_code,code", [
        (ValidationError("bad"), 400, "VALIDATION_ERROR"),
        (ConflictError("taken"), 400, "CONFLICT"),
        (BadRequestError("nope"), 400, "BAD_REQUEST"),
        (UnauthorizedError(), 401, "UNAUTHORIZED"),
        (NotFoundError("Property", 3), 404, "NOT_FOUND"),
        (DatabaseConnectionError(), 500, "DATABASE_UNAVAILABLE"),
    ])
    def test_api_exception_status_mapping(self, exception, status_code, code):
        response = ErrorHandlerService.handle_api_exception(exception, make_request())

        assert response.status_code == status_code
        body = response.body.decode()
        assert f'"code":"{code}"' in body
        assert '"request_id":"abc12345"' in body

    def test_validation_error_carries_field_details(self):
        exception = ValidationError("Invalid range", field_errors=[{"field": "time_range", "message": "bad"}])
        response = ErrorHandlerService.handle_api_exception(exception, make_request())
        assert '"details":[{"field":"time_range","message":"bad"}]' in response.body.decode()

    def test_request_validation_error_is_400(self):
        exception = RequestValidationError([{
            "loc": ("body", "address"),
            "msg": "Field required",
            "type": "missing",
        }])
        response = ErrorHandlerService.handle_validation_error(exception, make_request())

        assert response.status_code == 400
        assert '"field":"body -> address"' in response.body.decode()

    def test_database_error_hides_detail(self):
        exception = sa_exc.OperationalError("SELECT secret FROM vault", {}, Exception("disk on fire"))
        response = ErrorHandlerService.handle_database_error(exception, make_request())

        body = response.body.decode()
        assert response.status_code == 500
        assert "DATABASE_ERROR" in body
        assert "vault" not in body
        assert "disk on fire" not in body

    def test_unexpected_error_hides_detail(self):
        response = ErrorHandlerService.handle_unexpected_error(RuntimeError("secret"), make_request())

        assert response.status_code == 500
        assert "INTERNAL_SERVER_ERROR" in response.body.decode()
        assert "secret" not in response.body.decode()

    def test_http_exception(self):
        response = ErrorHandlerService.handle_http_exception(
            StarletteHTTPException(status_code=405, detail="Method Not Allowed"), make_request()
        )
        assert response.status_code == 405
        assert '"code":"HTTP_405"' in response.body.decode()

    def test_request_id_generated_without_middleware(self):
        request = make_request(request_id=None)
        request_id = ErrorHandlerService._request_id(request)
        assert len(request_id) == 8


class TestDatabaseSession:

    @pytest.mark.asyncio
    async def test_connection_errors_become_unavailable(self, test_db):
        with pytest.raises(DatabaseConnectionError) as exc_info:
            async with test_db.session():
                raise sa_exc.TimeoutError("QueuePool limit reached")
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self, test_db):
        with pytest.raises(ValueError):
            async with test_db.session():
                raise ValueError("not a connection problem")

    @pytest.mark.asyncio
    async def test_drop_tables(self, test_db):
        await test_db.drop_tables()

        async with test_db.engine.connect() as conn:
            names = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        assert names == []


class TestErrorResponses:

    @pytest.mark.asyncio
    async def test_envelope_shape(self, async_client, test_user):
        response = await async_client.get("/api/properties/424242", headers=auth_headers(test_user))

        assert response.status_code == 404
        error = response.json()["error"]
        assert set(error) == {"code", "message", "timestamp", "request_id"}
        assert error["message"] == "Property not found with ID: 424242"
        assert error["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_body_validation_details(self, async_client, test_user):
        response = await async_client.post(
            "/api/properties", headers=auth_headers(test_user), json={"monthly_rent": "lots"}
        )

        assert response.status_code == 400
        fields = {detail["field"] for detail in response.json()["error"]["details"]}
        assert "body -> address" in fields
        assert "body -> monthly_rent" in fields

    @pytest.mark.asyncio
    async def test_malformed_json(self, async_client, test_user):
        headers = dict(auth_headers(test_user), **{"Content-Type": "application/json"})
        response = await async_client.post("/api/properties", headers=headers, content=b"{not json")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_route(self, async_client):
        response = await async_client.get("/api/nowhere")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "HTTP_404"

    @pytest.mark.asyncio
    async def test_store_failure_is_generic_500(self, async_client, test_user):
        failure = sa_exc.OperationalError("SELECT * FROM properties", {}, Exception("connection reset"))
        with patch.object(PropertyService, "list_properties", side_effect=failure):
            response = await async_client.get("/api/properties", headers=auth_headers(test_user))

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "DATABASE_ERROR"
        assert error["message"] == "Database operation failed"

    @pytest.mark.asyncio
    async def test_database_unavailable(self, async_client, test_user):
        with patch.object(PropertyService, "list_properties", side_effect=DatabaseConnectionError()):
            response = await async_client.get("/api/properties", headers=auth_headers(test_user))

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "DATABASE_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_unexpected_exception(self, async_client, test_user):
        with patch.object(PropertyService, "list_properties", side_effect=RuntimeError("kaboom")):
            response = await async_client.get("/api/properties", headers=auth_headers(test_user))

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_SERVER_ERROR"
        assert "kaboom" not in response.text

    @pytest.mark.asyncio
    async def test_oversized_request(self, async_client, test_user):
        response = await async_client.post(
            "/api/properties",
            headers=dict(auth_headers(test_user), **{"Content-Type": "application/json"}),
            content=b"x" * (settings.max_request_size + 1)
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"
        assert "X-Request-ID" in response.headers

    @pytest.mark.asyncio
    async def test_expired_token(self, async_client, test_user):
        token = create_access_token(user_id=test_user.id, role="user", expires_delta=timedelta(seconds=-5))
        response = await async_client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Token has expired"
