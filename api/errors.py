"""
Exception hierarchy for the Betfair session layer.

Every error raised by this package derives from BetfairError, so callers can
catch the whole family with one except block.
"""


class BetfairError(Exception):
    """Base exception carrying a message and optional context details."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> dict:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(BetfairError):
    """Environment configuration is missing or malformed."""


class InvalidCredentialArity(BetfairError):
    """Credentials were built from neither 4 nor 5 values."""

    def __init__(self, count: int):
        super().__init__("invalid credential params", {"count": count})
        self.count = count


class UnknownEndpoint(BetfairError):
    """Region or logical endpoint is missing from the endpoint table."""

    def __init__(self, region: str, endpoint: str, method: str = ""):
        super().__init__(
            "invalid endpoint params",
            {"region": region, "endpoint": endpoint, "method": method},
        )
        self.region = region
        self.endpoint = endpoint


class CertificateNotFound(BetfairError):
    """Certificate or private key file does not exist."""

    def __init__(self, path: str):
        super().__init__("certificate file not found", {"path": path})
        self.path = path


class CertificateLoadError(BetfairError):
    """Certificate/key pair could not be loaded as a TLS client identity."""


class TransportError(BetfairError):
    """The HTTP round trip itself failed (connection, timeout, TLS...)."""


class LoginFailed(BetfairError):
    """Login endpoint answered with a non-success status."""

    def __init__(self, reason: str):
        super().__init__(f"login failed: {reason}", {"reason": reason})
        self.reason = reason


class HTTPError(BetfairError):
    """Any call answered with a status other than 200."""

    def __init__(self, status_code: int, status_line: str, url: str = ""):
        super().__init__(status_line, {"url": url} if url else None)
        self.status_code = status_code
        self.status_line = status_line


class DecodeError(BetfairError):
    """Response body is not the JSON document the caller expected."""


class ApplicationNotFound(BetfairError):
    """No active application version matched the requested name and delay flag."""

    def __init__(self, name: str):
        super().__init__(f"{name} application not found", {"name": name})
        self.name = name
