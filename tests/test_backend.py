"""Tests for smartcar_api.backend — RequestsBackend."""

import json
from typing import Any, Dict, Optional
from unittest.mock import patch

import pytest
import requests

from smartcar_api.backend import RequestsBackend, get_user_agent
from smartcar_api.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DecodeError,
    ErrorType,
    GatewayTimeoutError,
    MonthlyLimitExceededError,
    NotCapableError,
    RateLimitError,
    ResourceNotFoundError,
    ServerError,
    ValidationError,
    VehicleStateError,
)
from smartcar_api.models import UnitSystem

URL = "https://api.smartcar.com/v1.0/vehicles/abc/odometer"


def make_response(
    status_code: int,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
    text: Optional[str] = None,
) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = (text if text is not None else json.dumps(body)).encode()
    response.encoding = "utf-8"
    response.headers.update(headers or {})
    return response


@pytest.fixture
def mock_request():
    with patch("smartcar_api.backend.requests.request") as mocked:
        yield mocked


class TestSuccess:
    def test_body_and_headers_decoded(self, mock_request) -> None:
        mock_request.return_value = make_response(
            200,
            {"distance": 1234.5},
            headers={
                "Sc-Data-Age": "2024-01-01T00:00:00.000Z",
                "Sc-Request-Id": "req-1",
                "Sc-Unit-System": "imperial",
            },
        )

        result = RequestsBackend().call("GET", URL, "Bearer tok")

        assert result.body == {"distance": 1234.5}
        assert result.status_code == 200
        assert result.headers.data_age == "2024-01-01T00:00:00.000Z"
        assert result.headers.request_id == "req-1"
        assert result.headers.unit_system is UnitSystem.IMPERIAL

    def test_missing_headers_are_none(self, mock_request) -> None:
        mock_request.return_value = make_response(200, {"distance": 1})

        result = RequestsBackend().call("GET", URL, "Bearer tok")

        assert result.headers.data_age is None
        assert result.headers.request_id is None
        assert result.headers.unit_system is None

    def test_invalid_json_raises_decode_error(self, mock_request) -> None:
        mock_request.return_value = make_response(200, text="<html>")

        with pytest.raises(DecodeError) as exc_info:
            RequestsBackend().call("GET", URL, "Bearer tok")
        assert exc_info.value.error_type is ErrorType.DECODE


class TestRequestHeaders:
    def test_standard_headers(self, mock_request) -> None:
        mock_request.return_value = make_response(200, {})

        RequestsBackend().call("get", URL, "Bearer tok")

        kwargs = mock_request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == URL
        assert kwargs["headers"]["Authorization"] == "Bearer tok"
        assert kwargs["headers"]["User-Agent"] == get_user_agent()
        assert "Content-Type" not in kwargs["headers"]
        assert "SC-Unit-System" not in kwargs["headers"]
        assert kwargs["data"] is None

    def test_fixed_timeout(self, mock_request) -> None:
        mock_request.return_value = make_response(200, {})

        RequestsBackend().call("GET", URL, "Bearer tok")

        assert mock_request.call_args.kwargs["timeout"] == 300

    def test_unit_system_header(self, mock_request) -> None:
        mock_request.return_value = make_response(200, {})

        RequestsBackend().call("GET", URL, "Bearer tok", unit_system=UnitSystem.IMPERIAL)

        headers = mock_request.call_args.kwargs["headers"]
        assert headers["SC-Unit-System"] == "imperial"

    def test_json_body(self, mock_request) -> None:
        mock_request.return_value = make_response(200, {"status": "success"})

        RequestsBackend().call("POST", URL, "Bearer tok", json_data={"action": "LOCK"})

        kwargs = mock_request.call_args.kwargs
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert json.loads(kwargs["data"]) == {"action": "LOCK"}

    def test_form_body(self, mock_request) -> None:
        mock_request.return_value = make_response(200, {})

        RequestsBackend().call(
            "POST",
            "https://auth.smartcar.com/oauth/token",
            "Basic abc",
            form_data={"grant_type": "refresh_token", "refresh_token": "r"},
        )

        kwargs = mock_request.call_args.kwargs
        assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"
        assert kwargs["data"] == "grant_type=refresh_token&refresh_token=r"


class TestErrors:
    def test_rate_limited(self, mock_request) -> None:
        mock_request.return_value = make_response(
            429, {"error": "rate_limited", "message": "slow down"}
        )

        with pytest.raises(RateLimitError) as exc_info:
            RequestsBackend().call("GET", URL, "Bearer tok")

        error = exc_info.value
        assert error.error_type is ErrorType.RATE_LIMIT
        assert error.message == "slow down"
        assert error.name == "rate_limited"
        assert error.status_code == 429

    @pytest.mark.parametrize(
        "status_code, error_class",
        [
            (400, ValidationError),
            (401, AuthenticationError),
            (403, AuthorizationError),
            (404, ResourceNotFoundError),
            (409, VehicleStateError),
            (429, RateLimitError),
            (430, MonthlyLimitExceededError),
            (500, ServerError),
            (501, NotCapableError),
            (502, GatewayTimeoutError),
            (504, GatewayTimeoutError),
        ],
    )
    def test_status_classification(self, mock_request, status_code, error_class) -> None:
        mock_request.return_value = make_response(
            status_code, {"error": "some_error", "message": "failed", "code": "VS_001"}
        )

        with pytest.raises(error_class) as exc_info:
            RequestsBackend().call("GET", URL, "Bearer tok")
        assert exc_info.value.code == "VS_001"

    def test_undecodable_error_body(self, mock_request) -> None:
        mock_request.return_value = make_response(500, text="Internal Server Error")

        with pytest.raises(DecodeError) as exc_info:
            RequestsBackend().call("GET", URL, "Bearer tok")
        assert exc_info.value.status_code == 500

    def test_transport_error_propagates(self, mock_request) -> None:
        mock_request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(requests.exceptions.ConnectionError):
            RequestsBackend().call("GET", URL, "Bearer tok")
