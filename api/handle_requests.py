"""
Request dispatch for every Betfair call: URL resolution, header construction,
the POST round trip and status checking. One HTTP round trip per call; no
retries and no rate limiting.
"""
import json
import logging
from typing import Any

import requests

from api.endpoints import CERT_LOGIN, DEFAULT_ENDPOINTS, LOGIN_ENDPOINTS, EndpointRegistry
from api.errors import DecodeError, HTTPError, TransportError

PACKAGE_NAME = "betfair"

# Must succeed before any application key is known.
APP_KEYLESS_METHODS = frozenset({"getDeveloperAppKeys"})

JSON_CONTENT = "application/json"
FORM_CONTENT = "application/x-www-form-urlencoded"


def decode_json(raw: bytes | str, what: str = "response") -> Any:
    """Parse a response body, raising DecodeError on malformed JSON."""
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"malformed JSON in {what}: {exc}") from exc


class RequestHandler:
    def __init__(
        self,
        transport: requests.Session,
        endpoints: EndpointRegistry = DEFAULT_ENDPOINTS,
        cert_login_app_id: str = PACKAGE_NAME,
    ):
        self.transport = transport
        self.endpoints = endpoints
        self.cert_login_app_id = cert_login_app_id

    def build_headers(self, endpoint: str, method: str, *, application_key: str, token: str) -> dict[str, str]:
        """
        Headers for one call:
          - Accept/Content-Type JSON, form-encoded Content-Type for login endpoints
          - X-Application: current application key, the package id for certLogin,
            absent for getDeveloperAppKeys
          - X-Authentication: session token on everything but login endpoints
        """
        headers = {
            "X-Application": application_key,
            "Accept": JSON_CONTENT,
            "Content-Type": JSON_CONTENT,
        }
        if endpoint == CERT_LOGIN:
            headers["X-Application"] = self.cert_login_app_id
        if method in APP_KEYLESS_METHODS:
            del headers["X-Application"]

        if endpoint in LOGIN_ENDPOINTS:
            headers["Content-Type"] = FORM_CONTENT
        else:
            headers["X-Authentication"] = token
        return headers

    def post(self, url: str, headers: dict[str, str], data: Any) -> requests.Response:
        try:
            return self.transport.post(url, headers=headers, data=data)
        except requests.RequestException as exc:
            raise TransportError(f"request to {url} failed: {exc}", {"url": url}) from exc

    def dispatch(
        self,
        region: str,
        endpoint: str,
        method: str,
        body: Any = None,
        *,
        application_key: str = "",
        token: str = "",
    ) -> bytes:
        """
        POST `body` to endpoint/method for the region and return the raw
        response body. Login endpoints take a dict of form fields; every
        other endpoint takes a JSON string (or None for an empty body).
        """
        url = self.endpoints.resolve(region, endpoint, method)
        headers = self.build_headers(endpoint, method, application_key=application_key, token=token)

        resp = self.post(url, headers, body if body is not None else "")
        logging.debug(f"{resp.status_code} {url} [{endpoint}/{method or '-'}]")

        if resp.status_code != 200:
            raise HTTPError(resp.status_code, f"{resp.status_code} {resp.reason}", url)
        return resp.content
