"""
Account API module: developer application keys, funds and account details.
"""
from typing import TYPE_CHECKING

from api.endpoints import ACCOUNT
from api.errors import DecodeError
from api.handle_requests import decode_json
from data.models.account import DeveloperApplication

if TYPE_CHECKING:
    from api.client import Session


class AccountAPI:
    """Account endpoints. Every call is an empty-body POST."""

    def __init__(self, client: "Session"):
        self.client = client

    def _call(self, method: str) -> str:
        return self.client.do_request(ACCOUNT, method).decode("utf-8")

    def get_developer_app_keys(self) -> str:
        """Raw developer applications document (POST account/getDeveloperAppKeys)."""
        return self._call("getDeveloperAppKeys")

    def get_developer_apps(self) -> list[DeveloperApplication]:
        payload = decode_json(self.get_developer_app_keys(), "getDeveloperAppKeys")
        if not isinstance(payload, list):
            raise DecodeError(f"getDeveloperAppKeys: expected a list, got {type(payload).__name__}")
        try:
            return [DeveloperApplication.from_dict(app) for app in payload if isinstance(app, dict)]
        except (TypeError, ValueError, AttributeError) as exc:
            raise DecodeError(f"getDeveloperAppKeys: unexpected application shape: {exc}") from exc

    def get_account_funds(self) -> str:
        """Raw account funds document (POST account/getAccountFunds)."""
        return self._call("getAccountFunds")

    def get_account_details(self) -> str:
        """Raw account details document (POST account/getAccountDetails)."""
        return self._call("getAccountDetails")
