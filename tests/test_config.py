"""Tests for smartcar_api.config — SmartcarConfig."""

import os
from unittest.mock import patch
from urllib.parse import parse_qs, urlparse

import pytest

from smartcar_api.config import SmartcarConfig
from smartcar_api.exceptions import ValidationError
from smartcar_api.models import UnitSystem


@pytest.fixture(autouse=True)
def clean_env():
    with patch.dict(os.environ):
        for key in list(os.environ):
            if key.startswith("SMARTCAR_"):
                del os.environ[key]
        yield


@pytest.fixture
def config(tmp_path) -> SmartcarConfig:
    return SmartcarConfig(env_file=str(tmp_path / "missing.env"))


class TestDefaults:
    def test_missing_required(self, config: SmartcarConfig) -> None:
        assert config.validate() == [
            "SMARTCAR_CLIENT_ID",
            "SMARTCAR_CLIENT_SECRET",
            "SMARTCAR_REDIRECT_URI",
        ]
        assert config.is_valid() is False

    def test_default_settings(self, config: SmartcarConfig) -> None:
        assert config.api_version == "1.0"
        assert config.api_base_url == "https://api.smartcar.com"
        assert config.unit_system is UnitSystem.METRIC
        assert config.default_country == "US"
        assert config.test_mode is False


class TestEnvironment:
    def test_values_from_environment(self, config: SmartcarConfig) -> None:
        os.environ.update(
            {
                "SMARTCAR_CLIENT_ID": "client-id",
                "SMARTCAR_CLIENT_SECRET": "client-secret",
                "SMARTCAR_REDIRECT_URI": "https://example.com/callback",
                "SMARTCAR_TEST_MODE": "true",
                "SMARTCAR_UNIT_SYSTEM": "IMPERIAL",
                "SMARTCAR_DEFAULT_COUNTRY": "",
            }
        )

        assert config.is_valid() is True
        assert config.test_mode is True
        assert config.unit_system is UnitSystem.IMPERIAL
        assert config.default_country is None

    def test_invalid_unit_system(self, config: SmartcarConfig) -> None:
        os.environ["SMARTCAR_UNIT_SYSTEM"] = "nautical"

        with pytest.raises(ValidationError):
            config.unit_system

    def test_env_file_loaded(self, tmp_path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("SMARTCAR_CLIENT_ID=from-file\n")

        config = SmartcarConfig(env_file=str(env_file))

        assert config.client_id == "from-file"

    def test_to_dict_hides_secret(self, config: SmartcarConfig) -> None:
        os.environ["SMARTCAR_CLIENT_SECRET"] = "super-secret"

        assert config.to_dict()["client_secret"] == "***"


class TestScopes:
    @pytest.mark.parametrize(
        "category, expected",
        [
            ("default", SmartcarConfig.DEFAULT_SCOPES),
            ("ENERGY", SmartcarConfig.ENERGY_SCOPES),
            ("control", SmartcarConfig.CONTROL_SCOPES),
            ("all", SmartcarConfig.ALL_AVAILABLE_SCOPES),
            ("unknown", SmartcarConfig.DEFAULT_SCOPES),
        ],
    )
    def test_categories(self, config: SmartcarConfig, category, expected) -> None:
        assert config.get_scopes_by_category(category) == expected


class TestFactories:
    def test_create_client(self, config: SmartcarConfig, backend) -> None:
        os.environ["SMARTCAR_API_VERSION"] = "2.0"
        os.environ["SMARTCAR_DEFAULT_COUNTRY"] = "CA"

        client = config.create_client(backend)

        assert client.api_version == "2.0"
        assert client.default_country == "CA"
        assert client.backend is backend

    def test_create_auth(self, config: SmartcarConfig, backend) -> None:
        os.environ.update(
            {
                "SMARTCAR_CLIENT_ID": "client-id",
                "SMARTCAR_CLIENT_SECRET": "client-secret",
                "SMARTCAR_REDIRECT_URI": "https://example.com/callback",
                "SMARTCAR_TEST_MODE": "1",
            }
        )

        auth = config.create_auth(backend=backend)
        query = parse_qs(urlparse(auth.get_authorization_url()).query)

        assert query["client_id"] == ["client-id"]
        assert query["mode"] == ["test"]
        assert query["scope"] == [" ".join(SmartcarConfig.DEFAULT_SCOPES)]

    def test_create_auth_without_credentials(self, config: SmartcarConfig, backend) -> None:
        auth = config.create_auth(backend=backend)

        with pytest.raises(ValidationError):
            auth.get_authorization_url()
