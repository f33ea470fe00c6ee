"""
Static region/service endpoint table and URL resolution.
"""
from collections.abc import Mapping
from types import MappingProxyType

from api.errors import UnknownEndpoint

CERT_LOGIN = "certLogin"
REST_LOGIN = "restLogin"
ACCOUNT = "account"
BETTING = "betting"

LOGIN_ENDPOINTS = frozenset({CERT_LOGIN, REST_LOGIN})


class EndpointRegistry:
    """Read-only (region, logical endpoint) -> base URL lookup."""

    def __init__(self, table: Mapping[str, Mapping[str, str]]):
        self._table = MappingProxyType(
            {region: MappingProxyType(dict(urls)) for region, urls in table.items()}
        )

    @property
    def regions(self) -> frozenset[str]:
        return frozenset(self._table)

    def resolve(self, region: str, endpoint: str, method: str = "") -> str:
        """
        Full URL for a call. Login endpoints ignore `method`; every other
        endpoint gets the method appended as a path segment.
        """
        try:
            url = self._table[region][endpoint]
        except KeyError:
            raise UnknownEndpoint(region, endpoint, method) from None
        if endpoint in LOGIN_ENDPOINTS:
            return url
        return f"{url}{method}"


DEFAULT_ENDPOINTS = EndpointRegistry(
    {
        "UK": {
            CERT_LOGIN: "https://identitysso-api.betfair.com/api/certlogin",
            REST_LOGIN: "https://identitysso.betfair.com/api/login",
            BETTING: "https://api.betfair.com/exchange/betting/rest/v1.0/",
            ACCOUNT: "https://api.betfair.com/exchange/account/rest/v1.0/",
        },
        "AU": {
            CERT_LOGIN: "https://identitysso-api.betfair.com/api/certlogin",
            REST_LOGIN: "https://identitysso.betfair.com/api/login",
            BETTING: "https://api-au.betfair.com/exchange/betting/rest/v1.0/",
            ACCOUNT: "https://api-au.betfair.com/exchange/account/rest/v1.0/",
        },
    }
)
