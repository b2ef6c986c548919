"""
Configuration management for Smartcar API client
"""

import os
from typing import Dict, List, Optional

from dotenv import load_dotenv

from .auth import SmartcarAuth
from .backend import Backend
from .client import SmartcarClient
from .constants import (
    API_BASE_URL,
    AUTH_BASE_URL,
    CONNECT_BASE_URL,
    DEFAULT_API_VERSION,
    DEFAULT_COUNTRY,
)
from .models import UnitSystem


class SmartcarConfig:
    """Configuration management for Smartcar API"""

    # Default permissions for read-only use
    DEFAULT_SCOPES = [
        "read_vehicle_info",
        "read_vin",
        "read_odometer",
        "read_location",
    ]

    ENERGY_SCOPES = [
        "read_vehicle_info",
        "read_battery",
        "read_charge",
        "read_fuel",
    ]

    CONTROL_SCOPES = ["read_vehicle_info", "control_security"]

    ALL_AVAILABLE_SCOPES = [
        "read_vehicle_info",
        "read_vin",
        "read_odometer",
        "read_location",
        "read_battery",
        "read_charge",
        "read_fuel",
        "read_engine_oil",
        "read_tires",
        "control_security",
    ]

    def __init__(self, env_file: str = ".env"):
        """
        Initialize configuration

        Args:
            env_file: Path to environment file
        """
        if os.path.exists(env_file):
            load_dotenv(env_file)

    @property
    def client_id(self) -> Optional[str]:
        """Get client ID from environment"""
        return os.getenv("SMARTCAR_CLIENT_ID")

    @property
    def client_secret(self) -> Optional[str]:
        """Get client secret from environment"""
        return os.getenv("SMARTCAR_CLIENT_SECRET")

    @property
    def redirect_uri(self) -> Optional[str]:
        """Get redirect URI from environment"""
        return os.getenv("SMARTCAR_REDIRECT_URI")

    @property
    def test_mode(self) -> bool:
        return os.getenv("SMARTCAR_TEST_MODE", "").lower() in ("1", "true", "yes")

    @property
    def api_version(self) -> str:
        return os.getenv("SMARTCAR_API_VERSION", DEFAULT_API_VERSION)

    @property
    def api_base_url(self) -> str:
        """Get API base URL from environment or default"""
        return os.getenv("SMARTCAR_API_BASE_URL", API_BASE_URL)

    @property
    def auth_base_url(self) -> str:
        """Get auth base URL from environment or default"""
        return os.getenv("SMARTCAR_AUTH_BASE_URL", AUTH_BASE_URL)

    @property
    def connect_base_url(self) -> str:
        return os.getenv("SMARTCAR_CONNECT_BASE_URL", CONNECT_BASE_URL)

    @property
    def unit_system(self) -> UnitSystem:
        """Get unit system from environment, metric by default"""
        return UnitSystem.parse(
            os.getenv("SMARTCAR_UNIT_SYSTEM", UnitSystem.METRIC.value).lower()
        )

    @property
    def default_country(self) -> Optional[str]:
        """Country for VIN compatibility checks; an empty value disables it"""
        return os.getenv("SMARTCAR_DEFAULT_COUNTRY", DEFAULT_COUNTRY) or None

    def validate(self) -> List[str]:
        """
        Validate configuration and return list of missing required fields

        Returns:
            List of missing required field names
        """
        missing = []

        if not self.client_id:
            missing.append("SMARTCAR_CLIENT_ID")
        if not self.client_secret:
            missing.append("SMARTCAR_CLIENT_SECRET")
        if not self.redirect_uri:
            missing.append("SMARTCAR_REDIRECT_URI")

        return missing

    def is_valid(self) -> bool:
        """Check if configuration is valid"""
        return len(self.validate()) == 0

    def get_scopes_by_category(self, category: str = "default") -> List[str]:
        """
        Get scopes by category

        Args:
            category: Scope category ("default", "energy", "control", "all")

        Returns:
            List of scopes for the category
        """
        category_map = {
            "default": self.DEFAULT_SCOPES,
            "energy": self.ENERGY_SCOPES,
            "control": self.CONTROL_SCOPES,
            "all": self.ALL_AVAILABLE_SCOPES,
        }

        return category_map.get(category.lower(), self.DEFAULT_SCOPES)

    def create_client(self, backend: Optional[Backend] = None) -> SmartcarClient:
        """Build a client from the configured hosts and API version"""
        return SmartcarClient(
            backend=backend,
            api_version=self.api_version,
            api_base_url=self.api_base_url,
            auth_base_url=self.auth_base_url,
            connect_base_url=self.connect_base_url,
            default_country=self.default_country,
        )

    def create_auth(
        self, scope: Optional[List[str]] = None, backend: Optional[Backend] = None
    ) -> SmartcarAuth:
        """
        Build an auth component from the configured credentials

        Args:
            scope: Requested permissions, ``DEFAULT_SCOPES`` when omitted
            backend: Request executor shared with other components
        """
        return self.create_client(backend).new_auth(
            client_id=self.client_id or "",
            client_secret=self.client_secret or "",
            redirect_uri=self.redirect_uri or "",
            scope=scope if scope is not None else self.DEFAULT_SCOPES,
            test_mode=self.test_mode,
        )

    def to_dict(self) -> Dict[str, Optional[str]]:
        """
        Convert configuration to dictionary

        Returns:
            Configuration as dictionary
        """
        return {
            "client_id": self.client_id,
            "client_secret": "***" if self.client_secret else None,  # Hide secret
            "redirect_uri": self.redirect_uri,
            "test_mode": str(self.test_mode).lower(),
            "api_version": self.api_version,
            "api_base_url": self.api_base_url,
            "auth_base_url": self.auth_base_url,
            "connect_base_url": self.connect_base_url,
        }
