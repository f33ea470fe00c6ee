"""Shared fixtures: a mocked HTTP transport and canned Betfair responses."""

import json
import shutil
import subprocess
from unittest.mock import Mock

import pytest
import requests

from api.credentials import InteractiveCredentials, NonInteractiveCredentials

REST_LOGIN_URL = "https://identitysso.betfair.com/api/login"
CERT_LOGIN_URL = "https://identitysso-api.betfair.com/api/certlogin"
UK_BETTING = "https://api.betfair.com/exchange/betting/rest/v1.0/"
UK_ACCOUNT = "https://api.betfair.com/exchange/account/rest/v1.0/"


def make_response(payload=None, status_code=200, reason="OK", raw=None):
    resp = Mock()
    resp.status_code = status_code
    resp.reason = reason
    resp.content = raw if raw is not None else json.dumps(payload).encode("utf-8")
    return resp


def rest_login_ok(token="T"):
    return make_response({"token": token, "product": "betfair", "status": "SUCCESS", "error": ""})


def cert_login_ok(token="S"):
    return make_response({"sessionToken": token, "loginStatus": "SUCCESS"})


def sent(transport, index=-1):
    """(url, headers, data) of one recorded transport.post call."""
    call = transport.post.call_args_list[index]
    return call.args[0], call.kwargs["headers"], call.kwargs["data"]


@pytest.fixture
def transport():
    t = Mock(spec=requests.Session)
    t.post.return_value = rest_login_ok()
    return t


@pytest.fixture
def interactive():
    return InteractiveCredentials("userName", "passWord", "UK", application_key="appKey")


@pytest.fixture
def non_interactive():
    return NonInteractiveCredentials("userName", "passWord", "UK", cert_file="client.crt", key_file="client.key")


@pytest.fixture
def developer_apps_payload():
    return [
        {
            "appName": "MyApp",
            "appId": 101,
            "appVersions": [
                {
                    "owner": "userName",
                    "versionId": 1,
                    "version": "1.0-DELAY",
                    "applicationKey": "K1",
                    "delayData": True,
                    "subscriptionRequired": False,
                    "ownerManaged": False,
                    "active": True,
                },
                {
                    "owner": "userName",
                    "versionId": 2,
                    "version": "1.0",
                    "applicationKey": "K2",
                    "delayData": False,
                    "subscriptionRequired": True,
                    "ownerManaged": False,
                    "active": True,
                },
            ],
        },
        {
            "appName": "OtherApp",
            "appId": 202,
            "appVersions": [
                {"version": "2.0", "applicationKey": "K3", "delayData": True, "active": True},
            ],
        },
    ]


@pytest.fixture
def cert_pair(tmp_path):
    """Throwaway self-signed certificate and key, generated with openssl."""
    if shutil.which("openssl") is None:
        pytest.skip("openssl binary not available")
    crt = tmp_path / "client-2048.crt"
    key = tmp_path / "client-2048.key"
    subprocess.run(
        [
            "openssl", "req", "-x509", "-newkey", "rsa:2048", "-nodes",
            "-keyout", str(key), "-out", str(crt), "-days", "1", "-subj", "/CN=betfair-test",
        ],
        check=True,
        capture_output=True,
    )
    return str(crt), str(key)
