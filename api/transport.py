"""
HTTP transport construction.

Builds a requests.Session per credential kind. Certificate credentials get the
client certificate/key pair attached so every connection presents it.
"""
import logging
import os
import ssl

import requests
from requests.adapters import HTTPAdapter

from api.credentials import NonInteractiveCredentials, UserCredentials
from api.errors import CertificateLoadError, CertificateNotFound


class TimeoutHTTPAdapter(HTTPAdapter):
    """HTTPAdapter that applies a default timeout and never retries."""

    def __init__(self, timeout: float | None = None, **kwargs):
        self.timeout = timeout
        kwargs.setdefault("max_retries", 0)
        super().__init__(**kwargs)

    def send(self, request, **kwargs):
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def _check_identity(cert_file: str, key_file: str) -> None:
    for path in (cert_file, key_file):
        if not os.path.isfile(path):
            raise CertificateNotFound(path)

    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    try:
        context.load_cert_chain(certfile=cert_file, keyfile=key_file)
    except (ssl.SSLError, OSError) as exc:
        raise CertificateLoadError(
            f"cannot load client certificate: {exc}",
            {"cert_file": cert_file, "key_file": key_file},
        ) from exc


def build_transport(
    credentials: UserCredentials,
    *,
    verify_ssl: bool = True,
    timeout: float | None = None,
) -> requests.Session:
    """
    Return an HTTP session for the given credentials.

    verify_ssl controls server certificate verification for every call;
    timeout (seconds) becomes the default deadline of every request.
    """
    session = requests.Session()
    adapter = TimeoutHTTPAdapter(timeout=timeout)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.verify = verify_ssl
    if not verify_ssl:
        logging.warning("Server certificate verification is disabled for this transport")

    if isinstance(credentials, NonInteractiveCredentials):
        _check_identity(credentials.cert_file, credentials.key_file)
        session.cert = (credentials.cert_file, credentials.key_file)
        logging.debug(f"Client certificate attached: {credentials.cert_file}")

    return session
