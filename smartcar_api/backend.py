"""
Request execution for the Smartcar API

Every component sends its HTTP calls through a ``Backend``. The production
implementation, ``RequestsBackend``, uses ``requests``; tests inject their
own implementation of the same interface.
"""

import json
import logging
import platform
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union
from urllib.parse import urlencode

import requests

from .constants import REQUEST_TIMEOUT, UNIT_SYSTEM_HEADER, VERSION
from .exceptions import DecodeError, SmartcarAPIError, error_for_status
from .models import ResponseHeaders, UnitSystem


@dataclass
class ApiResponse:
    """Decoded body of a successful response with its metadata headers"""

    body: Any
    headers: ResponseHeaders
    status_code: int = 200


def get_user_agent() -> str:
    """Identify the library, platform and runtime to the API"""
    return (
        f"Smartcar/{VERSION} ({platform.system()}; {platform.machine()}) "
        f"Python {platform.python_version()}"
    )


class Backend(ABC):
    """Executes a single request against the Smartcar API"""

    @abstractmethod
    def call(
        self,
        method: str,
        url: str,
        authorization: str,
        unit_system: Optional[Union[UnitSystem, str]] = None,
        json_data: Optional[Any] = None,
        form_data: Optional[Dict[str, str]] = None,
    ) -> ApiResponse:
        """
        Execute one request

        Args:
            method: HTTP method (GET, POST, DELETE)
            url: Absolute request URL
            authorization: Value of the Authorization header
            unit_system: Optional unit system sent as ``SC-Unit-System``
            json_data: Body sent as JSON
            form_data: Body sent form-encoded

        Returns:
            Decoded body and response metadata

        Raises:
            SmartcarAPIError: Classified API error for any non-200 response
            DecodeError: If the success or error body is not valid JSON
            requests.exceptions.RequestException: On transport failure
        """


class RequestsBackend(Backend):
    """Backend built on ``requests``; one network call per invocation, no retries"""

    def __init__(self, timeout: float = REQUEST_TIMEOUT):
        """
        Initialize the backend

        Args:
            timeout: Request timeout in seconds
        """
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def _build_headers(
        self,
        authorization: str,
        unit_system: Optional[Union[UnitSystem, str]],
        content_type: Optional[str],
    ) -> Dict[str, str]:
        headers = {
            "Authorization": authorization,
            "User-Agent": get_user_agent(),
        }
        if content_type:
            headers["Content-Type"] = content_type
        if unit_system:
            headers[UNIT_SYSTEM_HEADER] = getattr(unit_system, "value", unit_system)
        return headers

    def call(
        self,
        method: str,
        url: str,
        authorization: str,
        unit_system: Optional[Union[UnitSystem, str]] = None,
        json_data: Optional[Any] = None,
        form_data: Optional[Dict[str, str]] = None,
    ) -> ApiResponse:
        content_type = None
        data = None
        if json_data is not None:
            content_type = "application/json"
            data = json.dumps(json_data)
        elif form_data is not None:
            content_type = "application/x-www-form-urlencoded"
            data = urlencode(form_data)

        headers = self._build_headers(authorization, unit_system, content_type)

        self.logger.debug("Requesting %s %s", method.upper(), url)
        response = requests.request(
            method=method.upper(),
            url=url,
            headers=headers,
            data=data,
            timeout=self.timeout,
        )
        self.logger.debug("Response status for %s: %s", url, response.status_code)

        if response.status_code != 200:
            raise self._error_from_response(response)

        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError(
                f"Could not decode response body from {url}",
                status_code=response.status_code,
            ) from e

        return ApiResponse(
            body=body,
            headers=ResponseHeaders.from_headers(response.headers),
            status_code=response.status_code,
        )

    def _error_from_response(self, response: requests.Response) -> SmartcarAPIError:
        """Classify a non-200 response using its vendor error body"""
        try:
            error_data = response.json()
        except ValueError:
            return DecodeError(
                f"Could not decode error response (status {response.status_code})",
                status_code=response.status_code,
            )

        if not isinstance(error_data, dict):
            return DecodeError(
                f"Unexpected error response (status {response.status_code})",
                status_code=response.status_code,
            )

        error = error_for_status(response.status_code, error_data)
        self.logger.debug("API request failed: %r", error)
        return error
