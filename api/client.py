"""
Session: the authenticated handle every Betfair call goes through.

Owns the transport, the session token, the request credentials (always
interactive-shaped) and the cached developer applications. Login happens in
the constructor; a Session object only exists once login has succeeded.
"""
import logging
import threading
from dataclasses import replace

import requests

from api.account import AccountAPI
from api.betting import BettingAPI
from api.credentials import InteractiveCredentials, UserCredentials
from api.endpoints import DEFAULT_ENDPOINTS, EndpointRegistry
from api.errors import ApplicationNotFound, BetfairError, DecodeError, LoginFailed
from api.handle_requests import PACKAGE_NAME, RequestHandler, decode_json
from api.transport import build_transport
from data.models.account import DeveloperApplication
from data.models.runtime import SessionState


class Session:
    """Root handle that holds session state and the account/betting sub-APIs.

    Mutable state (token, application key, developer-app cache) is guarded by
    a re-entrant lock, so one Session can be shared between threads.
    """

    def __init__(
        self,
        credentials: UserCredentials,
        *,
        endpoints: EndpointRegistry = DEFAULT_ENDPOINTS,
        transport: requests.Session | None = None,
        verify_ssl: bool = True,
        timeout: float | None = None,
        cert_login_app_id: str = PACKAGE_NAME,
    ):
        if not isinstance(credentials, UserCredentials):
            raise TypeError(f"unsupported credentials type: {type(credentials).__name__}")

        self._credentials = credentials
        self._lock = threading.RLock()
        self._state = SessionState.UNAUTHENTICATED
        self._token = ""
        self._developer_apps: list[DeveloperApplication] | None = None

        if transport is None:
            transport = build_transport(credentials, verify_ssl=verify_ssl, timeout=timeout)
        self.http = RequestHandler(transport, endpoints, cert_login_app_id)
        self._request_credentials: InteractiveCredentials = credentials.request_credentials()

        self.account = AccountAPI(self)
        self.betting = BettingAPI(self)

        self._state = SessionState.LOGGING_IN
        try:
            self._login()
        except BetfairError:
            self._state = SessionState.FAILED
            self.close()
            raise

    # Read-only views
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def token(self) -> str:
        with self._lock:
            return self._token

    @property
    def credentials(self) -> UserCredentials:
        return self._credentials

    @property
    def request_credentials(self) -> InteractiveCredentials:
        with self._lock:
            return self._request_credentials

    @property
    def region(self) -> str:
        return self._credentials.region

    @property
    def application_key(self) -> str:
        with self._lock:
            return self._request_credentials.application_key

    @property
    def developer_apps(self) -> list[DeveloperApplication] | None:
        with self._lock:
            return list(self._developer_apps) if self._developer_apps is not None else None

    def _login(self) -> None:
        endpoint = self._credentials.login_endpoint
        raw = self.do_request(endpoint, "", self._credentials.login_form())

        payload = decode_json(raw, f"{endpoint} response")
        if not isinstance(payload, dict):
            raise DecodeError(f"unexpected {endpoint} response: {payload!r}")

        token, reason = self._credentials.read_login_response(payload)
        if reason is not None:
            logging.warning(f"Login failed for {self._credentials.username} via {endpoint}: {reason}")
            raise LoginFailed(reason)

        with self._lock:
            self._token = token
            self._state = SessionState.AUTHENTICATED
        logging.info(f"Logged in via {endpoint} (region {self.region})")

    def do_request(self, endpoint: str, method: str, body=None) -> bytes:
        """Dispatch one call with this session's current token and application key."""
        with self._lock:
            application_key = self._request_credentials.application_key
            token = self._token
        return self.http.dispatch(
            self.region,
            endpoint,
            method,
            body,
            application_key=application_key,
            token=token,
        )

    def set_used_application(self, name: str, delayed_data: bool) -> None:
        """
        Select the application key used by subsequent requests.

        Developer applications are fetched once and cached. Among versions of
        applications named `name` that are active and whose delay flag equals
        `delayed_data`, the last one listed wins.
        """
        with self._lock:
            if self._developer_apps is None:
                self._developer_apps = self.account.get_developer_apps()
                logging.info(f"Cached {len(self._developer_apps)} developer applications")

            matches = [
                version
                for app in self._developer_apps
                if app.appName == name
                for version in app.appVersions
                if version.delayData == delayed_data and version.active
            ]
            if not matches:
                raise ApplicationNotFound(name)
            if len(matches) > 1:
                logging.warning(
                    f"{len(matches)} active versions of {name} match delayed_data={delayed_data}; "
                    f"using the last one ({matches[-1].version})"
                )

            chosen = matches[-1]
            self._request_credentials = replace(self._request_credentials, application_key=chosen.applicationKey)
        logging.info(f"Using application {name} version {chosen.version}")

    def close(self) -> None:
        self.http.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
