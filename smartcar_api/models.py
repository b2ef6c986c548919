"""
Typed models for Smartcar API requests and responses
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Union

from .constants import (
    DATA_AGE_HEADER,
    REFRESH_TOKEN_LIFETIME_DAYS,
    REQUEST_ID_HEADER,
    RESPONSE_UNIT_SYSTEM_HEADER,
)
from .exceptions import DecodeError, SmartcarAPIError, ValidationError


class UnitSystem(str, Enum):
    """Unit system used to render numeric vehicle data"""

    METRIC = "metric"
    IMPERIAL = "imperial"

    @classmethod
    def parse(cls, value: Union["UnitSystem", str]) -> "UnitSystem":
        """
        Convert a value to a UnitSystem

        Raises:
            ValidationError: If the value is neither metric nor imperial
        """
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(
                f"Unit system must be {cls.METRIC.value} or {cls.IMPERIAL.value}, "
                f"got {value!r}"
            ) from None


@dataclass(frozen=True)
class ResponseHeaders:
    """Metadata Smartcar attaches to every successful response"""

    data_age: Optional[str] = None
    request_id: Optional[str] = None
    unit_system: Optional[UnitSystem] = None

    @classmethod
    def from_headers(cls, headers: Optional[Mapping[str, str]]) -> "ResponseHeaders":
        """
        Extract metadata from response headers

        Header names are matched case-insensitively, so this works both for
        HTTP responses and for the lowercase header objects of batch
        sub-responses.

        Raises:
            DecodeError: If headers is neither None nor a mapping
        """
        if headers is not None and not isinstance(headers, Mapping):
            raise DecodeError(
                f"Expected response headers as an object, got {type(headers).__name__}"
            )
        lowered = {str(k).lower(): v for k, v in headers.items()} if headers else {}
        unit_system = lowered.get(RESPONSE_UNIT_SYSTEM_HEADER.lower())
        try:
            unit_system = UnitSystem(unit_system) if unit_system else None
        except ValueError:
            unit_system = None
        return cls(
            data_age=lowered.get(DATA_AGE_HEADER.lower()) or None,
            request_id=lowered.get(REQUEST_ID_HEADER.lower()) or None,
            unit_system=unit_system,
        )


class _Resource:
    """Mixin for vehicle resources decoded from a JSON body plus headers"""

    # attribute name -> JSON key
    _KEYS: ClassVar[Dict[str, str]] = {}

    meta: ResponseHeaders

    @property
    def data_age(self) -> Optional[str]:
        return self.meta.data_age

    @property
    def request_id(self) -> Optional[str]:
        return self.meta.request_id

    @property
    def unit_system(self) -> Optional[UnitSystem]:
        return self.meta.unit_system

    @classmethod
    def from_response(cls, body: Any, meta: Optional[ResponseHeaders] = None):
        """
        Decode a resource from a response body

        Args:
            body: Decoded JSON body
            meta: Metadata extracted from the response headers

        Returns:
            Resource instance

        Raises:
            DecodeError: If the body is not a JSON object
        """
        if not isinstance(body, dict):
            raise DecodeError(
                f"Expected a JSON object for {cls.__name__}, "
                f"got {type(body).__name__}"
            )
        values = {attr: body.get(key) for attr, key in cls._KEYS.items()}
        return cls(**values, meta=meta or ResponseHeaders())


@dataclass
class Battery(_Resource):
    _KEYS: ClassVar[Dict[str, str]] = {
        "percent_remaining": "percentRemaining",
        "range": "range",
    }

    percent_remaining: Optional[float]
    range: Optional[float]
    meta: ResponseHeaders = field(default_factory=ResponseHeaders)


@dataclass
class Charge(_Resource):
    _KEYS: ClassVar[Dict[str, str]] = {
        "is_plugged_in": "isPluggedIn",
        "state": "state",
    }

    is_plugged_in: Optional[bool]
    state: Optional[str]
    meta: ResponseHeaders = field(default_factory=ResponseHeaders)


@dataclass
class Fuel(_Resource):
    _KEYS: ClassVar[Dict[str, str]] = {
        "amount_remaining": "amountRemaining",
        "percent_remaining": "percentRemaining",
        "range": "range",
    }

    amount_remaining: Optional[float]
    percent_remaining: Optional[float]
    range: Optional[float]
    meta: ResponseHeaders = field(default_factory=ResponseHeaders)


@dataclass
class Info(_Resource):
    _KEYS: ClassVar[Dict[str, str]] = {
        "id": "id",
        "make": "make",
        "model": "model",
        "year": "year",
    }

    id: Optional[str]
    make: Optional[str]
    model: Optional[str]
    year: Optional[int]
    meta: ResponseHeaders = field(default_factory=ResponseHeaders)


@dataclass
class Location(_Resource):
    _KEYS: ClassVar[Dict[str, str]] = {
        "latitude": "latitude",
        "longitude": "longitude",
    }

    latitude: Optional[float]
    longitude: Optional[float]
    meta: ResponseHeaders = field(default_factory=ResponseHeaders)


@dataclass
class Odometer(_Resource):
    _KEYS: ClassVar[Dict[str, str]] = {"distance": "distance"}

    distance: Optional[float]
    meta: ResponseHeaders = field(default_factory=ResponseHeaders)


@dataclass
class Oil(_Resource):
    _KEYS: ClassVar[Dict[str, str]] = {"life_remaining": "lifeRemaining"}

    life_remaining: Optional[float]
    meta: ResponseHeaders = field(default_factory=ResponseHeaders)


@dataclass
class Permissions(_Resource):
    _KEYS: ClassVar[Dict[str, str]] = {"permissions": "permissions"}

    permissions: List[str]
    meta: ResponseHeaders = field(default_factory=ResponseHeaders)

    def __post_init__(self):
        if self.permissions is None:
            self.permissions = []
        if not isinstance(self.permissions, list) or not all(
            isinstance(permission, str) for permission in self.permissions
        ):
            raise DecodeError("Permissions must be a list of strings")


@dataclass
class TirePressure(_Resource):
    _KEYS: ClassVar[Dict[str, str]] = {
        "front_left": "frontLeft",
        "front_right": "frontRight",
        "back_left": "backLeft",
        "back_right": "backRight",
    }

    front_left: Optional[float]
    front_right: Optional[float]
    back_left: Optional[float]
    back_right: Optional[float]
    meta: ResponseHeaders = field(default_factory=ResponseHeaders)


@dataclass
class VIN(_Resource):
    _KEYS: ClassVar[Dict[str, str]] = {"vin": "vin"}

    vin: Optional[str]
    meta: ResponseHeaders = field(default_factory=ResponseHeaders)


@dataclass
class Security(_Resource):
    """Result of a lock or unlock command"""

    _KEYS: ClassVar[Dict[str, str]] = {"status": "status"}

    status: Optional[str]
    meta: ResponseHeaders = field(default_factory=ResponseHeaders)


@dataclass
class Disconnect(_Resource):
    _KEYS: ClassVar[Dict[str, str]] = {"status": "status"}

    status: Optional[str]
    meta: ResponseHeaders = field(default_factory=ResponseHeaders)


@dataclass
class BatchData:
    """
    Aggregate result of a batch request

    Fields for resources that were not requested stay ``None``. Resources
    whose sub-response failed are left ``None`` and their exception is
    stored in ``errors`` under the requested path.
    """

    battery: Optional[Battery] = None
    charge: Optional[Charge] = None
    fuel: Optional[Fuel] = None
    info: Optional[Info] = None
    location: Optional[Location] = None
    odometer: Optional[Odometer] = None
    oil: Optional[Oil] = None
    permissions: Optional[Permissions] = None
    tire_pressure: Optional[TirePressure] = None
    vin: Optional[VIN] = None
    errors: Dict[str, SmartcarAPIError] = field(default_factory=dict)
    meta: ResponseHeaders = field(default_factory=ResponseHeaders)


@dataclass(frozen=True)
class Credentials:
    """Application credentials used by the auth component"""

    client_id: str
    client_secret: str
    redirect_uri: str
    scope: Tuple[str, ...] = ()
    test_mode: bool = False


@dataclass(frozen=True)
class MakeBypass:
    """Skip the Connect brand selector for a single make (Pro feature)"""

    make: str


@dataclass(frozen=True)
class SingleSelect:
    """Only authorize a single vehicle, optionally matching a VIN (Pro feature)"""

    vin: Optional[str] = None


@dataclass(frozen=True)
class AuthURLOptions:
    """Optional parameters of a Connect authorization URL"""

    force_approval: bool = False
    state: Optional[str] = None
    make_bypass: Optional[MakeBypass] = None
    single_select: Optional[SingleSelect] = None
    flags: Optional[List[str]] = None


@dataclass(frozen=True)
class Tokens:
    """Access and refresh tokens with their absolute expiry times"""

    access_token: str
    access_expiry: datetime
    refresh_token: Optional[str]
    refresh_expiry: datetime
    token_type: str = "Bearer"
    expires_in: int = 0

    @classmethod
    def from_response(cls, body: Any, issued_at: datetime) -> "Tokens":
        """
        Build tokens from a token endpoint response

        Args:
            body: Decoded JSON ``{access_token, refresh_token, token_type, expires_in}``
            issued_at: Time the response was received

        Returns:
            Tokens stamped with access and refresh expiry

        Raises:
            DecodeError: If the body lacks an access token or a positive lifetime
        """
        if not isinstance(body, dict) or not body.get("access_token"):
            raise DecodeError("Token response does not contain an access token")

        expires_in = body.get("expires_in")
        valid_lifetime = (
            isinstance(expires_in, int)
            and not isinstance(expires_in, bool)
            and expires_in > 0
        )
        if not valid_lifetime:
            raise DecodeError(
                f"Token response has an invalid expires_in: {expires_in!r}",
                response_data=body,
            )

        return cls(
            access_token=body["access_token"],
            access_expiry=issued_at + timedelta(seconds=expires_in),
            refresh_token=body.get("refresh_token"),
            refresh_expiry=issued_at + timedelta(days=REFRESH_TOKEN_LIFETIME_DAYS),
            token_type=body.get("token_type") or "Bearer",
            expires_in=expires_in,
        )
