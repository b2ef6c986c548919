"""
Smartcar API Client Library

This library provides a Python interface for the Smartcar API,
implementing the OAuth2 Connect flow and the vehicle and account endpoints.
"""

from .auth import SmartcarAuth, is_token_expired
from .backend import ApiResponse, Backend, RequestsBackend
from .client import SmartcarClient
from .config import SmartcarConfig
from .constants import VERSION
from .exceptions import (
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
    SmartcarAPIError,
    ValidationError,
    VehicleStateError,
)
from .models import (
    AuthURLOptions,
    BatchData,
    MakeBypass,
    ResponseHeaders,
    SingleSelect,
    Tokens,
    UnitSystem,
)
from .vehicle import Vehicle

__version__ = VERSION

__all__ = [
    "SmartcarAuth",
    "SmartcarClient",
    "SmartcarConfig",
    "Vehicle",
    "Backend",
    "RequestsBackend",
    "ApiResponse",
    "is_token_expired",
    "AuthURLOptions",
    "MakeBypass",
    "SingleSelect",
    "Tokens",
    "UnitSystem",
    "ResponseHeaders",
    "BatchData",
    "ErrorType",
    "SmartcarAPIError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ResourceNotFoundError",
    "VehicleStateError",
    "RateLimitError",
    "MonthlyLimitExceededError",
    "ServerError",
    "NotCapableError",
    "GatewayTimeoutError",
    "DecodeError",
]
