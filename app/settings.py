"""
Environment configuration. Values come from the process environment, with a
.env file loaded first when present.
"""
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from api.credentials import UserCredentials, new_credentials
from api.endpoints import DEFAULT_ENDPOINTS
from api.errors import ConfigurationError

ENV_PREFIX = "BETFAIR_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Settings:
    username: str
    password: str = field(repr=False)
    region: str = "UK"
    app_key: str = field(default="", repr=False)
    cert_file: str = ""
    key_file: str = ""
    app_name: str = ""
    delayed_data: bool = False
    verify_ssl: bool = True
    timeout: float | None = None
    log_level: str = "INFO"

    @property
    def uses_certificate(self) -> bool:
        return bool(self.cert_file and self.key_file)

    def credentials(self) -> UserCredentials:
        if self.uses_certificate:
            return new_credentials(self.username, self.password, self.region, self.cert_file, self.key_file)
        return new_credentials(self.username, self.password, self.region, self.app_key)


def _env(name: str, default: str = "") -> str:
    return os.getenv(ENV_PREFIX + name, default).strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name)
    if not raw:
        return default
    if raw.lower() in _TRUE:
        return True
    if raw.lower() in _FALSE:
        return False
    raise ConfigurationError(f"{ENV_PREFIX}{name} must be a boolean", {"value": raw})


def _env_float(name: str) -> float | None:
    raw = _env(name)
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be a number", {"value": raw}) from None
    if value <= 0:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be positive", {"value": raw})
    return value


def load_settings(dotenv: bool = True) -> Settings:
    """Read BETFAIR_* variables into Settings, raising ConfigurationError when they are unusable."""
    if dotenv:
        load_dotenv()

    username = _env("USERNAME")
    password = os.getenv(ENV_PREFIX + "PASSWORD", "")
    if not username or not password:
        raise ConfigurationError(f"{ENV_PREFIX}USERNAME and {ENV_PREFIX}PASSWORD are required")

    region = _env("REGION", "UK").upper()
    if region not in DEFAULT_ENDPOINTS.regions:
        raise ConfigurationError(
            f"{ENV_PREFIX}REGION must be one of {sorted(DEFAULT_ENDPOINTS.regions)}", {"value": region}
        )

    cert_file = _env("CERT_FILE")
    key_file = _env("KEY_FILE")
    if bool(cert_file) != bool(key_file):
        raise ConfigurationError(f"{ENV_PREFIX}CERT_FILE and {ENV_PREFIX}KEY_FILE must be set together")

    app_key = _env("APP_KEY")
    if not app_key and not cert_file:
        raise ConfigurationError(f"either {ENV_PREFIX}APP_KEY or a certificate/key pair is required")

    return Settings(
        username=username,
        password=password,
        region=region,
        app_key=app_key,
        cert_file=cert_file,
        key_file=key_file,
        app_name=_env("APP_NAME"),
        delayed_data=_env_bool("DELAYED_DATA", False),
        verify_ssl=_env_bool("VERIFY_SSL", True),
        timeout=_env_float("TIMEOUT"),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
