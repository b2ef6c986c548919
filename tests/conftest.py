"""Shared fixtures for the smartcar_api tests."""

from typing import Any, Dict, List, Optional

import pytest

from smartcar_api.backend import ApiResponse, Backend
from smartcar_api.models import ResponseHeaders


class FakeBackend(Backend):
    """Backend that records calls and replays queued responses."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self._queue: List[Any] = []

    def add_response(
        self, body: Any, headers: Optional[ResponseHeaders] = None
    ) -> None:
        self._queue.append(ApiResponse(body=body, headers=headers or ResponseHeaders()))

    def add_error(self, error: Exception) -> None:
        self._queue.append(error)

    def call(
        self,
        method,
        url,
        authorization,
        unit_system=None,
        json_data=None,
        form_data=None,
    ) -> ApiResponse:
        self.calls.append(
            {
                "method": method,
                "url": url,
                "authorization": authorization,
                "unit_system": unit_system,
                "json_data": json_data,
                "form_data": form_data,
            }
        )
        result = self._queue.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def last_call(self) -> Dict[str, Any]:
        return self.calls[-1]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()
