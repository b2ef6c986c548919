"""
Custom exceptions for Smartcar API client
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorType(str, Enum):
    """Kinds of failure reported by the Smartcar API"""

    VALIDATION = "VALIDATION"
    AUTHENTICATION = "AUTHENTICATION"
    PERMISSION = "PERMISSION"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    VEHICLE_STATE = "VEHICLE_STATE"
    RATE_LIMIT = "RATE_LIMIT"
    MONTHLY_LIMIT_EXCEEDED = "MONTHLY_LIMIT_EXCEEDED"
    SERVER = "SERVER"
    NOT_CAPABLE = "NOT_CAPABLE"
    GATEWAY_TIMEOUT = "GATEWAY_TIMEOUT"
    DECODE = "DECODE"
    UNKNOWN = "UNKNOWN"


class SmartcarAPIError(Exception):
    """Base exception for Smartcar API errors"""

    error_type = ErrorType.UNKNOWN

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response_data = response_data or {}
        # Vendor error body fields
        self.name = self.response_data.get("error")
        self.code = self.response_data.get("code")
        super().__init__(self.message)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(type={self.error_type.value}, "
            f"status_code={self.status_code}, name={self.name!r}, "
            f"message={self.message!r}, code={self.code!r})"
        )


class ValidationError(SmartcarAPIError):
    """Raised when request data validation fails, locally or by the API"""

    error_type = ErrorType.VALIDATION


class AuthenticationError(SmartcarAPIError):
    """Raised when authentication fails"""

    error_type = ErrorType.AUTHENTICATION


class AuthorizationError(SmartcarAPIError):
    """Raised when the token lacks the permission for a resource"""

    error_type = ErrorType.PERMISSION


class ResourceNotFoundError(SmartcarAPIError):
    """Raised when a vehicle or resource is not found"""

    error_type = ErrorType.RESOURCE_NOT_FOUND


class VehicleStateError(SmartcarAPIError):
    """Raised when the vehicle is in a state that prevents the request"""

    error_type = ErrorType.VEHICLE_STATE


class RateLimitError(SmartcarAPIError):
    """Raised when rate limit is exceeded"""

    error_type = ErrorType.RATE_LIMIT


class MonthlyLimitExceededError(SmartcarAPIError):
    """Raised when the monthly request allowance is used up"""

    error_type = ErrorType.MONTHLY_LIMIT_EXCEEDED


class ServerError(SmartcarAPIError):
    """Raised when the API reports an internal server error"""

    error_type = ErrorType.SERVER


class NotCapableError(SmartcarAPIError):
    """Raised when the vehicle does not support the requested resource"""

    error_type = ErrorType.NOT_CAPABLE


class GatewayTimeoutError(SmartcarAPIError):
    """Raised for any other failed status, usually an upstream timeout"""

    error_type = ErrorType.GATEWAY_TIMEOUT


class DecodeError(SmartcarAPIError):
    """Raised when a response body cannot be decoded"""

    error_type = ErrorType.DECODE


STATUS_ERRORS = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthorizationError,
    404: ResourceNotFoundError,
    409: VehicleStateError,
    429: RateLimitError,
    430: MonthlyLimitExceededError,
    500: ServerError,
    501: NotCapableError,
}


def error_for_status(status_code: int, error_data: Dict[str, Any]) -> SmartcarAPIError:
    """
    Build the classified exception for a non-200 response

    Args:
        status_code: HTTP status code of the response
        error_data: Decoded vendor error body ``{error, message, code}``

    Returns:
        Exception instance matching the status code
    """
    error_class = STATUS_ERRORS.get(status_code, GatewayTimeoutError)
    message = (
        error_data.get("message")
        or error_data.get("description")
        or error_data.get("error")
        or f"Request failed with status {status_code}"
    )
    return error_class(message, status_code=status_code, response_data=error_data)
