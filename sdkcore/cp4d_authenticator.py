"""Bearer-token authentication against a Cloud Pak for Data token service."""

from __future__ import annotations

import base64
import binascii
import json
import logging
import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import requests

from sdkcore.detailed_response import DetailedResponse

AUTHTYPE_CP4D = "cp4d"

PROPNAME_AUTH_URL = "AUTH_URL"
PROPNAME_USERNAME = "USERNAME"
PROPNAME_PASSWORD = "password".upper()
_FIELD_FOR_API_ACCESS = "APIKEY"
PROPNAME_AUTH_DISABLE_SSL = "AUTH_DISABLE_SSL"

_TOKEN_PATH = "/v1/authorize"
_DEFAULT_TIMEOUT = 30
_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})

_logger = logging.getLogger(__name__)

_request_token_lock = threading.Lock()
_needs_refresh_lock = threading.Lock()


class AuthenticationError(Exception):
    """Raised when an access token cannot be obtained."""

    def __init__(self, message: str, response: DetailedResponse | None = None) -> None:
        super().__init__(message)
        self.response = response


def _current_time() -> int:
    return int(time.time())


def _decode_segment(segment: str) -> bytes:
    padded = segment + "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


def _parse_jwt_claims(token: str) -> tuple[int, int]:
    """Return the (expires_at, issued_at) claims of a JWT."""
    parts = token.split(".")
    if len(parts) != 3:
        raise ValueError("access token is not a valid JWT: expected 3 segments")
    try:
        claims = json.loads(_decode_segment(parts[1]))
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise ValueError(f"access token is not a valid JWT: {exc}") from exc
    if not isinstance(claims, dict):
        raise ValueError("access token is not a valid JWT: claims are not an object")
    try:
        return int(claims.get("exp", 0)), int(claims.get("iat", 0))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"access token has invalid time claims: {exc}") from exc


@dataclass
class _TokenData:
    access_token: str
    refresh_time: int
    expiration: int

    @classmethod
    def from_token(cls, token: str) -> _TokenData:
        expires_at, issued_at = _parse_jwt_claims(token)
        time_to_live = expires_at - issued_at
        refresh_time = expires_at - int(time_to_live * 0.2)
        return cls(access_token=token, refresh_time=refresh_time, expiration=expires_at)

    def is_valid(self) -> bool:
        return bool(self.access_token) and _current_time() < self.expiration

    def needs_refresh(self) -> bool:
        """Report whether a refresh is due, pushing the next refresh a minute ahead."""
        with _needs_refresh_lock:
            now = _current_time()
            if self.refresh_time >= 0 and now > self.refresh_time:
                self.refresh_time = now + 60
                return True
            return False


def _parse_bool(value: str | None) -> bool:
    return value in _TRUE_VALUES


class CloudPakForDataAuthenticator:
    """Obtains a bearer token with a username and either a password or an apikey.

    The token is added to requests as ``Authorization: Bearer <token>``.
    """

    def __init__(
        self,
        url: str,
        username: str,
        password: str | None = None,
        apikey: str | None = None,
        disable_ssl_verification: bool = False,
        headers: Mapping[str, str] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.username = username
        self.password = password or ""
        self.apikey = apikey or ""
        self.disable_ssl_verification = disable_ssl_verification
        self.headers = dict(headers) if headers else {}
        self.validate()

        if session is None:
            session = requests.Session()
            if disable_ssl_verification:
                session.verify = False
            self._timeout: int | None = _DEFAULT_TIMEOUT
        else:
            self._timeout = None
        self.session = session

        self._token_data: _TokenData | None = None
        self._token_data_lock = threading.Lock()

    @classmethod
    def from_properties(cls, properties: Mapping[str, str] | None) -> CloudPakForDataAuthenticator:
        """Construct an authenticator from a map of configuration properties."""
        if properties is None:
            raise ValueError("properties map cannot be None")
        return cls(
            url=properties.get(PROPNAME_AUTH_URL) or "",
            username=properties.get(PROPNAME_USERNAME) or "",
            password=properties.get(PROPNAME_PASSWORD),
            apikey=properties.get(_FIELD_FOR_API_ACCESS),
            disable_ssl_verification=_parse_bool(properties.get(PROPNAME_AUTH_DISABLE_SSL)),
        )

    def authentication_type(self) -> str:
        return AUTHTYPE_CP4D

    def validate(self) -> None:
        """Raise ValueError if the configuration is incomplete or inconsistent."""
        if not self.username:
            raise ValueError("The Username property is required but was not specified.")
        if bool(self.apikey) == bool(self.password):
            raise ValueError("Exactly one of APIKey or Password must be specified.")
        if not self.url:
            raise ValueError("The URL property is required but was not specified.")

    def authenticate(self, request: Any) -> None:
        """Add the bearer token to the request's Authorization header."""
        token = self.get_token()
        request.headers["Authorization"] = f"Bearer {token}"

    @property
    def _cached(self) -> _TokenData | None:
        with self._token_data_lock:
            return self._token_data

    def _store(self, token_data: _TokenData | None) -> None:
        with self._token_data_lock:
            self._token_data = token_data

    def get_token(self) -> str:
        """Return an access token, fetching a new one when none is valid.

        A token that is due for refresh is returned while a fresh one is
        fetched in the background.
        """
        cached = self._cached
        if cached is None or not cached.is_valid():
            self._synchronized_request_token()
        elif cached.needs_refresh():
            threading.Thread(target=self._refresh_in_background, daemon=True).start()

        cached = self._cached
        if cached is None or not cached.access_token:
            raise AuthenticationError("Error while trying to get access token")
        return cached.access_token

    def _synchronized_request_token(self) -> None:
        with _request_token_lock:
            cached = self._cached
            if cached is not None and cached.is_valid():
                return
            self._invoke_request_token_data()

    def _refresh_in_background(self) -> None:
        try:
            self._invoke_request_token_data()
        except Exception as exc:  # background refresh failures are only logged
            _logger.debug("Background token refresh failed: %s", exc)

    def _invoke_request_token_data(self) -> None:
        try:
            token = self._request_token()
            token_data = _TokenData.from_token(token)
        except Exception:
            self._store(None)
            raise
        self._store(token_data)

    def _request_token(self) -> str:
        body: dict[str, str] = {"username": self.username}
        if self.password:
            body["password"] = self.password
        if self.apikey:
            body["api_key"] = self.apikey

        request_headers = dict(self.headers)
        request_headers["Content-Type"] = "application/json"
        url = self.url.rstrip("/") + _TOKEN_PATH

        _logger.debug("Invoking CP4D token service operation: %s", url)
        response = self.session.post(
            url, data=json.dumps(body), headers=request_headers, timeout=self._timeout
        )
        _logger.debug(
            "Returned from CP4D token service operation, received status code %d",
            response.status_code,
        )

        if not 200 <= response.status_code < 300:
            detailed = DetailedResponse(
                status_code=response.status_code,
                headers=response.headers,
                raw_result=response.content,
            )
            raise AuthenticationError(response.text, detailed)

        try:
            payload = json.loads(response.content)
        except ValueError as exc:
            raise ValueError(f"error unmarshalling authentication response: {exc}") from exc
        if not isinstance(payload, dict):
            raise ValueError("error unmarshalling authentication response: not a JSON object")
        token = payload.get("token") or ""
        if not isinstance(token, str):
            raise ValueError("error unmarshalling authentication response: token is not a string")
        return token


def new_authenticator_using_password(
    url: str,
    username: str,
    password: str,
    disable_ssl_verification: bool = False,
    headers: Mapping[str, str] | None = None,
) -> CloudPakForDataAuthenticator:
    """Construct an authenticator from a username/password pair."""
    return CloudPakForDataAuthenticator(
        url,
        username,
        password=password,
        disable_ssl_verification=disable_ssl_verification,
        headers=headers,
    )


def new_authenticator_using_apikey(
    url: str,
    username: str,
    apikey: str,
    disable_ssl_verification: bool = False,
    headers: Mapping[str, str] | None = None,
) -> CloudPakForDataAuthenticator:
    """Construct an authenticator from a username/apikey pair."""
    return CloudPakForDataAuthenticator(
        url,
        username,
        apikey=apikey,
        disable_ssl_verification=disable_ssl_verification,
        headers=headers,
    )