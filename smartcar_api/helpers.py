"""
URL and authorization header builders

Pure functions shared by the auth, vehicle and account components. The
API version and hosts are always passed in explicitly.
"""

import base64
from typing import Dict, List, Optional
from urllib.parse import urlencode

from .constants import (
    API_BASE_URL,
    AUTH_BASE_URL,
    CONNECT_BASE_URL,
    CONNECT_PATH,
    DEFAULT_API_VERSION,
    TOKEN_PATH,
)


def build_basic_authorization(client_id: str, client_secret: str) -> str:
    """Build a ``Basic`` header value from client credentials"""
    credentials = f"{client_id}:{client_secret}"
    return "Basic " + base64.b64encode(credentials.encode()).decode()


def build_bearer_authorization(access_token: str) -> str:
    """Build a ``Bearer`` header value from an access token"""
    return f"Bearer {access_token}"


def encode_query(params: Dict[str, str]) -> str:
    """Encode query parameters sorted by name"""
    return urlencode(sorted(params.items()))


def build_api_url(
    api_version: str = DEFAULT_API_VERSION, base_url: str = API_BASE_URL
) -> str:
    """Return the versioned API root, e.g. ``https://api.smartcar.com/v1.0``"""
    return f"{base_url.rstrip('/')}/v{api_version}"


def build_user_url(
    api_version: str = DEFAULT_API_VERSION, base_url: str = API_BASE_URL
) -> str:
    return f"{build_api_url(api_version, base_url)}/user"


def build_vehicles_url(
    api_version: str = DEFAULT_API_VERSION, base_url: str = API_BASE_URL
) -> str:
    return f"{build_api_url(api_version, base_url)}/vehicles"


def build_vehicle_url(
    vehicle_id: str,
    path: str = "/",
    api_version: str = DEFAULT_API_VERSION,
    base_url: str = API_BASE_URL,
) -> str:
    """
    Build the URL of a vehicle resource

    Args:
        vehicle_id: Smartcar vehicle id
        path: Resource path starting with ``/`` (``/`` is the vehicle itself)
        api_version: API version without the ``v`` prefix
        base_url: API host

    Returns:
        Absolute resource URL
    """
    if not path.startswith("/"):
        path = "/" + path
    return f"{build_vehicles_url(api_version, base_url)}/{vehicle_id}{path}"


def build_compatibility_url(
    vin: str,
    scope: List[str],
    country: Optional[str] = None,
    api_version: str = DEFAULT_API_VERSION,
    base_url: str = API_BASE_URL,
) -> str:
    """
    Build the VIN compatibility URL

    Args:
        vin: Vehicle identification number
        scope: Permissions to check, sent space-joined
        country: Optional country code; omitted from the query when empty
        api_version: API version without the ``v`` prefix
        base_url: API host

    Returns:
        Absolute URL including the query string
    """
    params = {"vin": vin, "scope": " ".join(scope)}
    if country:
        params["country"] = country
    return (
        f"{build_api_url(api_version, base_url)}/compatibility?{encode_query(params)}"
    )


def build_connect_url(
    params: Dict[str, str], base_url: str = CONNECT_BASE_URL
) -> str:
    """Build the Connect authorization URL for the given query parameters"""
    return f"{base_url.rstrip('/')}{CONNECT_PATH}?{encode_query(params)}"


def build_token_url(base_url: str = AUTH_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}{TOKEN_PATH}"
