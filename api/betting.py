"""
Betting API module: listing calls over the betting endpoint.

Each call serializes a Query, dispatches it, decodes the typed result list and
then runs the caller's visitor functions over it.
"""
import json
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from api.endpoints import BETTING
from api.errors import DecodeError
from api.handle_requests import decode_json
from data.models.betting import (
    CompetitionResult,
    CountryCodeResult,
    EventResult,
    EventTypeResult,
    MarketBook,
    MarketCatalogue,
    MarketProfitAndLoss,
    MarketTypeResult,
    Query,
    VenueResult,
)

if TYPE_CHECKING:
    from api.client import Session

T = TypeVar("T")

# visitor(session, query, results) runs after a successful call
VisitorFunc = Callable[["Session", Query, list[Any]], None]


class BettingAPI:
    """Betting endpoints."""

    def __init__(self, client: "Session"):
        self.client = client

    def _bet_request(self, method: str, query: Query, parse: Callable[[dict[str, Any]], T], visitors) -> list[T]:
        if query is None:
            raise ValueError("query parameter can not be None")

        body = json.dumps(query.to_dict())
        raw = self.client.do_request(BETTING, method, body)

        payload = decode_json(raw, method)
        if not isinstance(payload, list):
            raise DecodeError(f"{method}: expected a list, got {type(payload).__name__}")
        try:
            results = [parse(item) for item in payload if isinstance(item, dict)]
        except (TypeError, ValueError, AttributeError) as exc:
            raise DecodeError(f"{method}: unexpected result shape: {exc}") from exc
        logging.debug(f"{method}: {len(results)} results")

        for visit in visitors:
            visit(self.client, query, results)
        return results

    def list_event_types(self, query: Query, *visitors: VisitorFunc) -> list[EventTypeResult]:
        """Event types (i.e. Soccer, Horse Racing) with market counts."""
        return self._bet_request("listEventTypes", query, EventTypeResult.from_dict, visitors)

    def list_countries(self, query: Query, *visitors: VisitorFunc) -> list[CountryCodeResult]:
        return self._bet_request("listCountries", query, CountryCodeResult.from_dict, visitors)

    def list_events(self, query: Query, *visitors: VisitorFunc) -> list[EventResult]:
        return self._bet_request("listEvents", query, EventResult.from_dict, visitors)

    def list_competitions(self, query: Query, *visitors: VisitorFunc) -> list[CompetitionResult]:
        """Competitions (i.e. World Cup) with market counts."""
        return self._bet_request("listCompetitions", query, CompetitionResult.from_dict, visitors)

    def list_market_types(self, query: Query, *visitors: VisitorFunc) -> list[MarketTypeResult]:
        """Market types (i.e. MATCH_ODDS, NEXT_GOAL)."""
        return self._bet_request("listMarketTypes", query, MarketTypeResult.from_dict, visitors)

    def list_venues(self, query: Query, *visitors: VisitorFunc) -> list[VenueResult]:
        """Venues (i.e. Cheltenham, Ascot)."""
        return self._bet_request("listVenues", query, VenueResult.from_dict, visitors)

    def list_market_catalogue(self, query: Query, *visitors: VisitorFunc) -> list[MarketCatalogue]:
        """Static information about published (ACTIVE/SUSPENDED) markets."""
        return self._bet_request("listMarketCatalogue", query, MarketCatalogue.from_dict, visitors)

    def list_market_book(self, query: Query, *visitors: VisitorFunc) -> list[MarketBook]:
        """Dynamic data about markets: prices, status, orders."""
        return self._bet_request("listMarketBook", query, MarketBook.from_dict, visitors)

    def list_market_profit_and_loss(self, query: Query, *visitors: VisitorFunc) -> list[MarketProfitAndLoss]:
        return self._bet_request("listMarketProfitAndLoss", query, MarketProfitAndLoss.from_dict, visitors)
