"""
Smartcar API Client

This module provides the account-level endpoints of the Smartcar API and
creates the auth and vehicle components that share its settings.
"""

import logging
from datetime import datetime
from typing import List, Optional, Union

from .auth import SmartcarAuth, is_token_expired
from .backend import Backend, RequestsBackend
from .constants import (
    API_BASE_URL,
    AUTH_BASE_URL,
    CONNECT_BASE_URL,
    DEFAULT_API_VERSION,
    DEFAULT_COUNTRY,
)
from .exceptions import DecodeError
from .helpers import (
    build_basic_authorization,
    build_bearer_authorization,
    build_compatibility_url,
    build_user_url,
    build_vehicles_url,
)
from .models import UnitSystem
from .vehicle import Vehicle


class SmartcarClient:
    """
    Main client for interacting with Smartcar API
    """

    def __init__(
        self,
        backend: Optional[Backend] = None,
        api_version: str = DEFAULT_API_VERSION,
        api_base_url: str = API_BASE_URL,
        auth_base_url: str = AUTH_BASE_URL,
        connect_base_url: str = CONNECT_BASE_URL,
        default_country: Optional[str] = DEFAULT_COUNTRY,
    ):
        """
        Initialize Smartcar API client

        Args:
            backend: Request executor, ``RequestsBackend`` by default
            api_version: API version without the ``v`` prefix
            api_base_url: Override default API base URL
            auth_base_url: Override default token exchange host
            connect_base_url: Override default Connect host
            default_country: Country sent with VIN compatibility checks when
                none is given; ``None`` omits the parameter
        """
        self.backend = backend or RequestsBackend()
        self.api_version = api_version
        self.api_base_url = api_base_url
        self.auth_base_url = auth_base_url
        self.connect_base_url = connect_base_url
        self.default_country = default_country

        self.logger = logging.getLogger(__name__)

    def new_auth(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scope: Optional[List[str]] = None,
        test_mode: bool = False,
    ) -> SmartcarAuth:
        """Create an auth component sharing this client's backend and hosts"""
        return SmartcarAuth(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            scope=scope,
            test_mode=test_mode,
            backend=self.backend,
            connect_base_url=self.connect_base_url,
            auth_base_url=self.auth_base_url,
        )

    def new_vehicle(
        self,
        vehicle_id: str,
        access_token: str,
        unit_system: Union[UnitSystem, str] = UnitSystem.METRIC,
    ) -> Vehicle:
        """Create a vehicle sharing this client's backend and API version"""
        return Vehicle(
            vehicle_id,
            access_token,
            unit_system=unit_system,
            backend=self.backend,
            api_version=self.api_version,
            api_base_url=self.api_base_url,
        )

    def get_user_id(self, access_token: str) -> str:
        """
        Get the id of the user who granted the access token

        Args:
            access_token: Access token from a code exchange

        Returns:
            Smartcar user id
        """
        response = self.backend.call(
            "GET",
            build_user_url(self.api_version, self.api_base_url),
            build_bearer_authorization(access_token),
        )
        body = response.body
        if not isinstance(body, dict) or "id" not in body:
            raise DecodeError("User response does not contain an id")
        return body["id"]

    def get_vehicle_ids(self, access_token: str) -> List[str]:
        """
        Get ids of the vehicles the access token is authorized for

        Args:
            access_token: Access token from a code exchange

        Returns:
            List of vehicle ids
        """
        response = self.backend.call(
            "GET",
            build_vehicles_url(self.api_version, self.api_base_url),
            build_bearer_authorization(access_token),
        )
        body = response.body
        if not isinstance(body, dict) or not isinstance(body.get("vehicles"), list):
            raise DecodeError("Vehicles response does not contain a vehicles list")
        return body["vehicles"]

    def is_vin_compatible(
        self,
        vin: str,
        scope: List[str],
        client_id: str,
        client_secret: str,
        country: Optional[str] = None,
    ) -> bool:
        """
        Check whether a vehicle supports the given permissions

        Args:
            vin: Vehicle identification number
            scope: Permissions the application needs
            client_id: Your application's client ID
            client_secret: Your application's client secret
            country: Country code, ``default_country`` when omitted

        Returns:
            True if the vehicle is compatible, False if it is not

        Raises:
            SmartcarAPIError: If the check could not be performed
        """
        url = build_compatibility_url(
            vin,
            scope,
            country or self.default_country,
            self.api_version,
            self.api_base_url,
        )
        response = self.backend.call(
            "GET", url, build_basic_authorization(client_id, client_secret)
        )
        body = response.body
        if not isinstance(body, dict) or not isinstance(body.get("compatible"), bool):
            raise DecodeError("Compatibility response does not contain a result")
        return body["compatible"]

    @staticmethod
    def is_token_expired(expiry: datetime) -> bool:
        """Check a token expiry locally, without calling the API"""
        return is_token_expired(expiry)

    @staticmethod
    def has_permissions(vehicle: Vehicle, permissions: List[str]) -> bool:
        return vehicle.has_permissions(permissions)
