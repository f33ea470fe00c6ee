"""Tests for the Session login state machine and session-bound dispatch."""

import threading
import time

import pytest
import requests

from api.client import Session
from api.credentials import InteractiveCredentials
from api.errors import DecodeError, HTTPError, LoginFailed, TransportError, UnknownEndpoint
from data.models.runtime import SessionState
from conftest import CERT_LOGIN_URL, REST_LOGIN_URL, UK_BETTING, cert_login_ok, make_response, rest_login_ok, sent


class TestInteractiveLogin:

    def test_success(self, interactive, transport):
        transport.post.return_value = rest_login_ok("T")

        session = Session(interactive, transport=transport)

        assert session.state == SessionState.AUTHENTICATED
        assert session.token == "T"
        assert session.application_key == "appKey"
        assert session.request_credentials == interactive
        assert transport.post.call_count == 1

    def test_login_request(self, interactive, transport):
        Session(interactive, transport=transport)

        url, headers, data = sent(transport)
        assert url == REST_LOGIN_URL
        assert data == {"username": "userName", "password": "passWord"}
        assert headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert headers["X-Application"] == "appKey"
        assert "X-Authentication" not in headers

    def test_failure_carries_error_field(self, interactive, transport):
        transport.post.return_value = make_response({"status": "FAIL", "error": "INVALID_CREDS"})

        with pytest.raises(LoginFailed) as exc:
            Session(interactive, transport=transport)

        assert exc.value.reason == "INVALID_CREDS"
        transport.close.assert_called_once()


class TestNonInteractiveLogin:

    def test_success(self, non_interactive, transport):
        transport.post.return_value = cert_login_ok("S")

        session = Session(non_interactive, transport=transport)

        assert session.state == SessionState.AUTHENTICATED
        assert session.token == "S"
        assert isinstance(session.request_credentials, InteractiveCredentials)
        assert session.application_key == ""

    def test_login_request(self, non_interactive, transport):
        transport.post.return_value = cert_login_ok()

        Session(non_interactive, transport=transport)

        url, headers, data = sent(transport)
        assert url == CERT_LOGIN_URL
        assert data == {"username": "userName", "password": "passWord"}
        assert headers["X-Application"] == "betfair"
        assert headers["Content-Type"] == "application/x-www-form-urlencoded"

    def test_failure_carries_login_status(self, non_interactive, transport):
        transport.post.return_value = make_response({"loginStatus": "INVALID_USERNAME_OR_PASSWORD"})

        with pytest.raises(LoginFailed) as exc:
            Session(non_interactive, transport=transport)

        assert exc.value.reason == "INVALID_USERNAME_OR_PASSWORD"

    def test_interactive_shaped_response_is_not_success(self, non_interactive, transport):
        transport.post.return_value = rest_login_ok()

        with pytest.raises(LoginFailed):
            Session(non_interactive, transport=transport)


class TestLoginTransportFailures:

    def test_http_status(self, interactive, transport):
        transport.post.return_value = make_response(raw=b"", status_code=503, reason="Service Unavailable")

        with pytest.raises(HTTPError) as exc:
            Session(interactive, transport=transport)

        assert exc.value.status_code == 503

    def test_malformed_json(self, interactive, transport):
        transport.post.return_value = make_response(raw=b"<html>maintenance</html>")

        with pytest.raises(DecodeError):
            Session(interactive, transport=transport)

    def test_non_object_json(self, interactive, transport):
        transport.post.return_value = make_response(["SUCCESS"])

        with pytest.raises(DecodeError):
            Session(interactive, transport=transport)

    def test_network_error(self, interactive, transport):
        transport.post.side_effect = requests.Timeout("read timed out")

        with pytest.raises(TransportError):
            Session(interactive, transport=transport)

    def test_unknown_region(self, transport):
        with pytest.raises(UnknownEndpoint):
            Session(InteractiveCredentials("u", "p", "ZZ", application_key="K"), transport=transport)

        transport.post.assert_not_called()

    def test_rejects_other_credential_types(self, transport):
        with pytest.raises(TypeError):
            Session(("u", "p", "UK", "K"), transport=transport)


class TestSessionDispatch:

    @pytest.fixture
    def session(self, interactive, transport):
        return Session(interactive, transport=transport)

    def test_authenticated_headers(self, session, transport):
        transport.post.return_value = make_response([])

        session.do_request("betting", "listEvents", "{}")

        url, headers, _ = sent(transport)
        assert url == UK_BETTING + "listEvents"
        assert headers["X-Application"] == "appKey"
        assert headers["X-Authentication"] == "T"
        assert headers["Content-Type"] == "application/json"
        assert headers["Accept"] == "application/json"

    def test_developer_app_keys_omits_application_header(self, session, transport):
        transport.post.return_value = make_response([])

        session.do_request("account", "getDeveloperAppKeys")

        _, headers, _ = sent(transport)
        assert "X-Application" not in headers
        assert headers["X-Authentication"] == "T"

    def test_context_manager_closes_transport(self, interactive, transport):
        with Session(interactive, transport=transport) as session:
            assert session.state == SessionState.AUTHENTICATED

        transport.close.assert_called_once()

    def test_concurrent_reads(self, session, transport):
        transport.post.return_value = make_response([])
        errors = []

        def worker():
            try:
                for _ in range(20):
                    session.do_request("betting", "listEvents", "{}")
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []


class TestSessionConcurrency:

    @pytest.fixture
    def session(self, interactive, transport):
        return Session(interactive, transport=transport)

    @staticmethod
    def run_threads(targets):
        errors = []

        def guard(target):
            try:
                target()
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=guard, args=(t,)) for t in targets]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        return errors

    @staticmethod
    def serve(transport, apps_payload, outgoing):
        def respond(url, headers=None, data=None):
            outgoing.append((url, dict(headers)))
            if url.endswith("getDeveloperAppKeys"):
                time.sleep(0.02)
                return make_response(apps_payload)
            return make_response([])

        transport.post.side_effect = respond

    def test_concurrent_resolution_fetches_apps_once(self, session, transport, developer_apps_payload):
        outgoing = []
        self.serve(transport, developer_apps_payload, outgoing)

        errors = self.run_threads([lambda: session.set_used_application("MyApp", True)] * 8)

        assert errors == []
        fetches = [url for url, _ in outgoing if url.endswith("getDeveloperAppKeys")]
        assert len(fetches) == 1
        assert session.application_key == "K1"

    def test_dispatch_sees_whole_application_keys(self, session, transport, developer_apps_payload):
        outgoing = []
        self.serve(transport, developer_apps_payload, outgoing)

        def resolve():
            for i in range(20):
                session.set_used_application("MyApp", i % 2 == 0)

        def dispatch():
            for _ in range(20):
                session.do_request("betting", "listEvents", "{}")

        errors = self.run_threads([resolve, resolve, dispatch, dispatch, dispatch])

        assert errors == []
        betting_headers = [headers for url, headers in outgoing if url.startswith(UK_BETTING)]
        assert len(betting_headers) == 60
        assert {h["X-Application"] for h in betting_headers} <= {"appKey", "K1", "K2"}
        assert all(h["X-Authentication"] == "T" for h in betting_headers)
