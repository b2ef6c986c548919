"""
OAuth2 Authentication for Smartcar API

This module handles the Connect authorization-code flow including:
- Authorization URL generation
- Token exchange
- Token refresh
- Token expiry checks

Tokens are returned to the caller and never stored or refreshed here.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

from .backend import Backend, RequestsBackend
from .constants import AUTH_BASE_URL, CONNECT_BASE_URL, TOKEN_EXPIRY_GRACE_SECONDS
from .exceptions import AuthenticationError, ValidationError
from .helpers import build_basic_authorization, build_connect_url, build_token_url
from .models import AuthURLOptions, Credentials, Tokens


def is_token_expired(expiry: datetime) -> bool:
    """
    Check whether a token expiry time has passed

    A token counts as expired once the current time reaches its expiry
    plus a short grace window. No request is made.

    Args:
        expiry: Absolute expiry time of the token

    Returns:
        True if the token is expired
    """
    now = datetime.now(expiry.tzinfo)
    return now >= expiry + timedelta(seconds=TOKEN_EXPIRY_GRACE_SECONDS)


class SmartcarAuth:
    """
    Handles OAuth2 authentication for Smartcar API
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scope: Optional[List[str]] = None,
        test_mode: bool = False,
        backend: Optional[Backend] = None,
        connect_base_url: str = CONNECT_BASE_URL,
        auth_base_url: str = AUTH_BASE_URL,
    ):
        """
        Initialize Smartcar authentication

        Args:
            client_id: Your application's client ID
            client_secret: Your application's client secret
            redirect_uri: Registered redirect URI for your application
            scope: List of requested permissions
            test_mode: Launch Connect in test mode
            backend: Request executor, ``RequestsBackend`` by default
            connect_base_url: Override the Connect host
            auth_base_url: Override the token exchange host
        """
        self.credentials = Credentials(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            scope=tuple(scope or ()),
            test_mode=test_mode,
        )
        self.backend = backend or RequestsBackend()
        self.connect_base_url = connect_base_url
        self.token_endpoint = build_token_url(auth_base_url)

        self.logger = logging.getLogger(__name__)

    def get_authorization_url(self, options: Optional[AuthURLOptions] = None) -> str:
        """
        Generate the Connect URL to send the user to

        Args:
            options: Optional approval, state and Pro feature parameters

        Returns:
            Authorization URL with query parameters in sorted order

        Raises:
            ValidationError: If client ID or redirect URI is missing
        """
        options = options or AuthURLOptions()
        credentials = self.credentials

        if not credentials.client_id:
            raise ValidationError("Auth client_id missing")
        if not credentials.redirect_uri:
            raise ValidationError("Auth redirect_uri missing")

        params = {
            "response_type": "code",
            "client_id": credentials.client_id,
            "redirect_uri": credentials.redirect_uri,
            "approval_prompt": "force" if options.force_approval else "auto",
        }

        if credentials.scope:
            params["scope"] = " ".join(credentials.scope)

        if credentials.test_mode:
            params["mode"] = "test"

        if options.state:
            params["state"] = options.state

        if options.make_bypass is not None and options.make_bypass.make:
            params["make"] = options.make_bypass.make

        if options.single_select is not None:
            params["single_select"] = "true"
            if options.single_select.vin:
                params["single_select_vin"] = options.single_select.vin

        if options.flags:
            params["flags"] = " ".join(options.flags)

        return build_connect_url(params, self.connect_base_url)

    def exchange_code(self, code: str) -> Tokens:
        """
        Exchange authorization code for access and refresh tokens

        Args:
            code: Code received from the Connect redirect

        Returns:
            Tokens with access and refresh expiry

        Raises:
            SmartcarAPIError: If the token endpoint rejects the exchange
        """
        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.credentials.redirect_uri,
        }
        tokens = self._request_tokens(data)
        self.logger.info(
            "✅ Authorization code exchanged, access token expires: %s",
            tokens.access_expiry.isoformat(),
        )
        return tokens

    def exchange_refresh_token(self, refresh_token: str) -> Tokens:
        """
        Obtain new tokens using a refresh token

        Both access and refresh expiry are recomputed from the time of the
        exchange.

        Args:
            refresh_token: Refresh token from a previous exchange

        Returns:
            New tokens

        Raises:
            SmartcarAPIError: If the token endpoint rejects the refresh
        """
        self.logger.info("🔄 Refreshing access token")
        data = {"grant_type": "refresh_token", "refresh_token": refresh_token}
        tokens = self._request_tokens(data)
        self.logger.info(
            "✅ Token refresh successful! New token expires: %s",
            tokens.access_expiry.isoformat(),
        )
        return tokens

    def _request_tokens(self, data: Dict[str, str]) -> Tokens:
        authorization = build_basic_authorization(
            self.credentials.client_id, self.credentials.client_secret
        )
        self.logger.debug("Making token request to %s", self.token_endpoint)
        response = self.backend.call(
            "POST", self.token_endpoint, authorization, form_data=data
        )
        return Tokens.from_response(response.body, datetime.now())

    @staticmethod
    def is_token_expired(expiry: datetime) -> bool:
        return is_token_expired(expiry)

    @staticmethod
    def extract_code_from_callback_url(callback_url: str) -> Tuple[str, Optional[str]]:
        """
        Extract authorization code and state from callback URL

        Args:
            callback_url: The full callback URL received after authorization

        Returns:
            Tuple of (authorization_code, state)

        Raises:
            AuthenticationError: If the user denied access or no code is present
        """
        params = parse_qs(urlparse(callback_url).query)

        if "error" in params:
            error_code = params["error"][0]
            error_description = params.get("error_description", ["Unknown error"])[0]
            raise AuthenticationError(
                f"Authorization failed: {error_code} - {error_description}",
                response_data={"error": error_code, "message": error_description},
            )

        code_list = params.get("code")
        if not code_list:
            raise AuthenticationError("No authorization code found in callback URL")

        state = params.get("state", [None])[0]
        return code_list[0], state
