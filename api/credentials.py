"""
Credential variants for the two login flows.

InteractiveCredentials log in through the username/password endpoint and
carry an application key. NonInteractiveCredentials log in through the
certificate endpoint; their application key is resolved after login.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from api.endpoints import CERT_LOGIN, REST_LOGIN
from api.errors import InvalidCredentialArity

LOGIN_SUCCESS = "SUCCESS"


@dataclass(frozen=True)
class UserCredentials(ABC):
    username: str
    password: str = field(repr=False)
    region: str

    @property
    @abstractmethod
    def login_endpoint(self) -> str:
        ...

    def login_form(self) -> dict[str, str]:
        """Form fields posted to the login endpoint."""
        return {"username": self.username, "password": self.password}

    @abstractmethod
    def request_credentials(self) -> "InteractiveCredentials":
        ...

    @abstractmethod
    def read_login_response(self, payload: dict[str, Any]) -> tuple[str, str | None]:
        """Return (token, failure reason); the reason is None on success."""


@dataclass(frozen=True)
class InteractiveCredentials(UserCredentials):
    application_key: str = ""

    @property
    def login_endpoint(self) -> str:
        return REST_LOGIN

    def read_login_response(self, payload: dict[str, Any]) -> tuple[str, str | None]:
        # {"token": ..., "product": ..., "status": "SUCCESS", "error": ""}
        status = payload.get("status")
        if status != LOGIN_SUCCESS:
            return "", payload.get("error") or status or "UNKNOWN"
        return payload.get("token") or "", None

    def request_credentials(self) -> "InteractiveCredentials":
        return InteractiveCredentials(
            username=self.username,
            password=self.password,
            region=self.region,
            application_key=self.application_key,
        )


@dataclass(frozen=True)
class NonInteractiveCredentials(UserCredentials):
    cert_file: str = ""
    key_file: str = ""

    @property
    def login_endpoint(self) -> str:
        return CERT_LOGIN

    def read_login_response(self, payload: dict[str, Any]) -> tuple[str, str | None]:
        # {"sessionToken": ..., "loginStatus": "SUCCESS"}
        status = payload.get("loginStatus")
        if status != LOGIN_SUCCESS:
            return "", status or "UNKNOWN"
        return payload.get("sessionToken") or "", None

    def request_credentials(self) -> InteractiveCredentials:
        return InteractiveCredentials(
            username=self.username,
            password=self.password,
            region=self.region,
            application_key="",
        )


def new_credentials(*params: str) -> UserCredentials:
    """
    Build credentials from positional values:
      new_credentials(username, password, region, app_key) -> InteractiveCredentials
      new_credentials(username, password, region, crt_file, key_file) -> NonInteractiveCredentials
    """
    if len(params) == 4:
        username, password, region, app_key = params
        return InteractiveCredentials(username, password, region, application_key=app_key)
    if len(params) == 5:
        username, password, region, crt_file, key_file = params
        return NonInteractiveCredentials(username, password, region, cert_file=crt_file, key_file=key_file)
    raise InvalidCredentialArity(len(params))
