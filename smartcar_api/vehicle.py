"""
Smartcar Vehicle

A ``Vehicle`` wraps one vehicle id and access token and exposes the
vehicle's resources. Every call is a single independent request.

The unit system is the only mutable state of a vehicle. Changing it while
another thread is reading from the same instance needs caller-side locking.
"""

import logging
from typing import Dict, List, Optional, Tuple, Type, Union

from .backend import ApiResponse, Backend, RequestsBackend
from .constants import API_BASE_URL, DEFAULT_API_VERSION
from .exceptions import DecodeError, ValidationError, error_for_status
from .helpers import build_bearer_authorization, build_vehicle_url
from .models import (
    VIN,
    BatchData,
    Battery,
    Charge,
    Disconnect,
    Fuel,
    Info,
    Location,
    Odometer,
    Oil,
    Permissions,
    ResponseHeaders,
    Security,
    TirePressure,
    UnitSystem,
)

BATTERY_PATH = "/battery"
CHARGE_PATH = "/charge"
FUEL_PATH = "/fuel"
INFO_PATH = "/"
LOCATION_PATH = "/location"
ODOMETER_PATH = "/odometer"
OIL_PATH = "/engine/oil"
PERMISSIONS_PATH = "/permissions"
TIRE_PRESSURE_PATH = "/tires/pressure"
VIN_PATH = "/vin"

# Not available through batch
SECURITY_PATH = "/security"
APPLICATION_PATH = "/application"
BATCH_PATH = "/batch"

# Batch path -> (BatchData field, model)
BATCH_RESOURCES: Dict[str, Tuple[str, Type]] = {
    BATTERY_PATH: ("battery", Battery),
    CHARGE_PATH: ("charge", Charge),
    FUEL_PATH: ("fuel", Fuel),
    INFO_PATH: ("info", Info),
    LOCATION_PATH: ("location", Location),
    ODOMETER_PATH: ("odometer", Odometer),
    OIL_PATH: ("oil", Oil),
    PERMISSIONS_PATH: ("permissions", Permissions),
    TIRE_PRESSURE_PATH: ("tire_pressure", TirePressure),
    VIN_PATH: ("vin", VIN),
}

_BATCH_NAMES = {name: path for path, (name, _) in BATCH_RESOURCES.items()}


def resolve_batch_path(value: str) -> str:
    """
    Resolve a resource name (``"odometer"``) or path (``"/odometer"``)

    Raises:
        ValidationError: If the value does not name a batchable resource
    """
    if value in BATCH_RESOURCES:
        return value
    if value in _BATCH_NAMES:
        return _BATCH_NAMES[value]
    if value and "/" + value in BATCH_RESOURCES:
        return "/" + value
    raise ValidationError(f"Unsupported batch path: {value!r}")


class Vehicle:
    """
    Client for a single vehicle's resources
    """

    def __init__(
        self,
        vehicle_id: str,
        access_token: str,
        unit_system: Union[UnitSystem, str] = UnitSystem.METRIC,
        backend: Optional[Backend] = None,
        api_version: str = DEFAULT_API_VERSION,
        api_base_url: str = API_BASE_URL,
    ):
        """
        Initialize a vehicle

        Args:
            vehicle_id: Smartcar vehicle id
            access_token: Access token authorized for this vehicle
            unit_system: Unit system requested for numeric data
            backend: Request executor, ``RequestsBackend`` by default
            api_version: API version without the ``v`` prefix
            api_base_url: Override default API base URL

        Raises:
            ValidationError: If the unit system is not metric or imperial
        """
        self.id = vehicle_id
        self.access_token = access_token
        self._unit_system = UnitSystem.parse(unit_system)
        self.backend = backend or RequestsBackend()
        self.api_version = api_version
        self.api_base_url = api_base_url

        self.logger = logging.getLogger(__name__)

    @property
    def unit_system(self) -> UnitSystem:
        return self._unit_system

    def set_unit_system(self, unit_system: Union[UnitSystem, str]) -> None:
        """
        Change the unit system of later requests

        No request is sent. An invalid value leaves the current unit
        system in place.

        Raises:
            ValidationError: If the value is not metric or imperial
        """
        self._unit_system = UnitSystem.parse(unit_system)

    def _request(
        self, method: str, path: str, json_data: Optional[dict] = None
    ) -> ApiResponse:
        url = build_vehicle_url(self.id, path, self.api_version, self.api_base_url)
        return self.backend.call(
            method,
            url,
            build_bearer_authorization(self.access_token),
            unit_system=self._unit_system,
            json_data=json_data,
        )

    def _get(self, path: str, model: Type):
        response = self._request("GET", path)
        return model.from_response(response.body, response.headers)

    def get_battery(self) -> Battery:
        return self._get(BATTERY_PATH, Battery)

    def get_charge(self) -> Charge:
        return self._get(CHARGE_PATH, Charge)

    def get_fuel(self) -> Fuel:
        return self._get(FUEL_PATH, Fuel)

    def get_info(self) -> Info:
        """Get make, model and year of the vehicle"""
        return self._get(INFO_PATH, Info)

    def get_location(self) -> Location:
        return self._get(LOCATION_PATH, Location)

    def get_odometer(self) -> Odometer:
        """
        Get odometer reading

        Returns:
            Odometer distance in the vehicle's unit system
        """
        return self._get(ODOMETER_PATH, Odometer)

    def get_oil(self) -> Oil:
        return self._get(OIL_PATH, Oil)

    def get_permissions(self) -> Permissions:
        """Get the permissions granted to the access token for this vehicle"""
        return self._get(PERMISSIONS_PATH, Permissions)

    def get_tire_pressure(self) -> TirePressure:
        return self._get(TIRE_PRESSURE_PATH, TirePressure)

    def get_vin(self) -> VIN:
        return self._get(VIN_PATH, VIN)

    # Command methods (require control_security)

    def lock(self) -> Security:
        """Lock the vehicle"""
        response = self._request("POST", SECURITY_PATH, json_data={"action": "LOCK"})
        return Security.from_response(response.body, response.headers)

    def unlock(self) -> Security:
        """Unlock the vehicle"""
        response = self._request(
            "POST", SECURITY_PATH, json_data={"action": "UNLOCK"}
        )
        return Security.from_response(response.body, response.headers)

    def disconnect(self) -> Disconnect:
        """Revoke this application's access to the vehicle"""
        response = self._request("DELETE", APPLICATION_PATH)
        return Disconnect.from_response(response.body, response.headers)

    def has_permissions(self, permissions: List[str]) -> bool:
        """
        Check that every given permission is granted

        A ``required:`` prefix on a permission is ignored.

        Args:
            permissions: Permission names to check

        Returns:
            True if all permissions are granted, False if any is missing

        Raises:
            SmartcarAPIError: If the permissions could not be fetched
        """
        granted = set(self.get_permissions().permissions)
        for permission in permissions:
            if permission.startswith("required:"):
                permission = permission[len("required:") :]
            if permission not in granted:
                self.logger.debug("Vehicle %s lacks permission %s", self.id, permission)
                return False
        return True

    def batch(self, *paths: str) -> BatchData:
        """
        Fetch several resources in one request

        Args:
            *paths: Resource names (``"odometer"``, ``"tire_pressure"``) or
                paths (``"/odometer"``, ``"/tires/pressure"``)

        Returns:
            BatchData with a field set for each successful sub-response

        Raises:
            ValidationError: If no path or an unsupported path is given
            DecodeError: If the batch response is malformed
        """
        if not paths:
            raise ValidationError("Batch requires at least one path")
        resolved = [resolve_batch_path(path) for path in paths]

        response = self._request(
            "POST",
            BATCH_PATH,
            json_data={"requests": [{"path": path} for path in resolved]},
        )
        body = response.body
        if not isinstance(body, dict) or not isinstance(body.get("responses"), list):
            raise DecodeError("Batch response does not contain a responses list")

        data = BatchData(meta=response.headers)
        for item in body["responses"]:
            if not isinstance(item, dict):
                raise DecodeError("Batch sub-response is not a JSON object")

            path = item.get("path")
            entry = BATCH_RESOURCES.get(path) if isinstance(path, str) else None
            if entry is None:
                self.logger.debug("Ignoring batch sub-response for %r", path)
                continue
            field_name, model = entry

            code = item.get("code", 200)
            item_body = item.get("body")
            if code != 200:
                if isinstance(item_body, dict):
                    data.errors[path] = error_for_status(code, item_body)
                else:
                    data.errors[path] = DecodeError(
                        f"Could not decode error response for {path} (status {code})",
                        status_code=code,
                    )
                continue

            try:
                meta = ResponseHeaders.from_headers(item.get("headers"))
                setattr(data, field_name, model.from_response(item_body, meta))
            except DecodeError as e:
                self.logger.debug("Could not decode batch sub-response %s: %s", path, e)
                data.errors[path] = e

        return data
