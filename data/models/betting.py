"""
Betting API request and result containers.

Request side (Query and friends) serializes to the wire format with empty
fields omitted. Result side is built from decoded JSON via from_dict.
"""
from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any

from utils.time import format_iso_utc, parse_iso_utc


def _wire(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return format_iso_utc(value)
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_wire(v) for v in value]
    return value


def _omit_empty(obj: Any) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if not value:
            continue
        out[f.metadata.get("json", f.name)] = _wire(value)
    return out


def _obj(d: dict[str, Any], key: str) -> dict[str, Any]:
    value = d.get(key)
    return value if isinstance(value, dict) else {}


def _items(d: dict[str, Any], key: str) -> list[dict[str, Any]]:
    return [v for v in d.get(key) or [] if isinstance(v, dict)]


# Request side


@dataclass
class TimeRange:
    from_: datetime | None = field(default=None, metadata={"json": "from"})
    to: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return _omit_empty(self)


@dataclass
class ExBestOffersOverrides:
    bestPricesDepth: int = 0
    rollupModel: str = ""
    rollupLimit: int = 0
    rollupLiabilityThreshold: float = 0.0
    rollupLiabilityFactor: int = 0

    def to_dict(self) -> dict[str, Any]:
        return _omit_empty(self)


@dataclass
class PriceProjection:
    priceData: list[Any] = field(default_factory=list)
    exBestOffersOverrides: ExBestOffersOverrides | None = None
    virtualise: bool = False
    rolloverStakes: bool = False

    def to_dict(self) -> dict[str, Any]:
        return _omit_empty(self)


@dataclass
class MarketFilter:
    textQuery: str = ""
    exchangeIds: list[str] = field(default_factory=list)
    eventTypeIds: list[str] = field(default_factory=list)
    eventIds: list[str] = field(default_factory=list)
    competitionIds: list[str] = field(default_factory=list)
    marketIds: list[str] = field(default_factory=list)
    venues: list[str] = field(default_factory=list)
    bspOnly: bool = False
    turnInPlayEnabled: bool = False
    inPlayOnly: bool = False
    marketBettingTypes: list[str] = field(default_factory=list)
    marketCountries: list[str] = field(default_factory=list)
    marketTypeCodes: list[str] = field(default_factory=list)
    marketStartTime: TimeRange | None = None
    withOrders: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return _omit_empty(self)


@dataclass
class Query:
    filter: MarketFilter | None = None
    locale: str = ""
    marketProjection: list[Any] = field(default_factory=list)
    sort: Any = None
    maxResults: int = 0
    marketIds: list[str] = field(default_factory=list)
    orderProjection: Any = None
    matchProjection: Any = None
    includeSettledBets: bool = False
    includeBspBets: bool = False
    netOfCommission: bool = False
    priceProjection: PriceProjection | None = None
    currencyCode: str = ""

    def to_dict(self) -> dict[str, Any]:
        return _omit_empty(self)


# Result side


@dataclass
class EventType:
    id: str | None
    name: str | None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "EventType":
        return EventType(id=d.get("id"), name=d.get("name"))


@dataclass
class EventTypeResult:
    eventType: EventType
    marketCount: int = 0

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "EventTypeResult":
        return EventTypeResult(
            eventType=EventType.from_dict(_obj(d, "eventType")),
            marketCount=d.get("marketCount", 0),
        )


@dataclass
class CountryCodeResult:
    countryCode: str | None
    marketCount: int = 0

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "CountryCodeResult":
        return CountryCodeResult(countryCode=d.get("countryCode"), marketCount=d.get("marketCount", 0))


@dataclass
class Event:
    id: str | None
    name: str | None
    countryCode: str | None = None
    timezone: str | None = None
    venue: str | None = None
    openDate: datetime | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Event":
        return Event(
            id=d.get("id"),
            name=d.get("name"),
            countryCode=d.get("countryCode"),
            timezone=d.get("timezone"),
            venue=d.get("venue"),
            openDate=parse_iso_utc(d.get("openDate")),
        )


@dataclass
class EventResult:
    event: Event
    marketCount: int = 0

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "EventResult":
        return EventResult(event=Event.from_dict(_obj(d, "event")), marketCount=d.get("marketCount", 0))


@dataclass
class Competition:
    id: str | None
    name: str | None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Competition":
        return Competition(id=d.get("id"), name=d.get("name"))


@dataclass
class CompetitionResult:
    competition: Competition
    marketCount: int = 0
    competitionRegion: str | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "CompetitionResult":
        return CompetitionResult(
            competition=Competition.from_dict(_obj(d, "competition")),
            marketCount=d.get("marketCount", 0),
            competitionRegion=d.get("competitionRegion"),
        )


@dataclass
class MarketTypeResult:
    marketType: str | None
    marketCount: int = 0

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "MarketTypeResult":
        return MarketTypeResult(marketType=d.get("marketType"), marketCount=d.get("marketCount", 0))


@dataclass
class VenueResult:
    venue: str | None
    marketCount: int = 0

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "VenueResult":
        return VenueResult(venue=d.get("venue"), marketCount=d.get("marketCount", 0))


@dataclass
class RunnerProfitAndLoss:
    selectionId: int | None
    ifWin: float = 0.0
    ifLose: float = 0.0


@dataclass
class MarketProfitAndLoss:
    marketId: str | None
    commissionApplied: float = 0.0
    profitAndLosses: list[RunnerProfitAndLoss] = field(default_factory=list)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "MarketProfitAndLoss":
        return MarketProfitAndLoss(
            marketId=d.get("marketId"),
            commissionApplied=d.get("commissionApplied", 0.0),
            profitAndLosses=[
                RunnerProfitAndLoss(
                    selectionId=p.get("selectionId"),
                    ifWin=p.get("ifWin", 0.0),
                    ifLose=p.get("ifLose", 0.0),
                )
                for p in _items(d, "profitAndLosses")
            ],
        )


@dataclass
class PriceSize:
    price: float = 0.0
    size: float = 0.0

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "PriceSize":
        return PriceSize(price=d.get("price", 0.0), size=d.get("size", 0.0))


def _ladder(d: dict[str, Any], key: str) -> list[PriceSize]:
    return [PriceSize.from_dict(p) for p in _items(d, key)]


@dataclass
class StartingPrices:
    nearPrice: float = 0.0
    farPrice: float = 0.0
    backStakeTaken: list[PriceSize] = field(default_factory=list)
    layLiabilityTaken: list[PriceSize] = field(default_factory=list)
    actualSP: float = 0.0

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "StartingPrices":
        return StartingPrices(
            nearPrice=d.get("nearPrice", 0.0),
            farPrice=d.get("farPrice", 0.0),
            backStakeTaken=_ladder(d, "backStakeTaken"),
            layLiabilityTaken=_ladder(d, "layLiabilityTaken"),
            actualSP=d.get("actualSP", 0.0),
        )


@dataclass
class ExchangePrices:
    availableToBack: list[PriceSize] = field(default_factory=list)
    availableToLay: list[PriceSize] = field(default_factory=list)
    tradedVolume: list[PriceSize] = field(default_factory=list)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "ExchangePrices":
        return ExchangePrices(
            availableToBack=_ladder(d, "availableToBack"),
            availableToLay=_ladder(d, "availableToLay"),
            tradedVolume=_ladder(d, "tradedVolume"),
        )


@dataclass
class Order:
    betId: str | None
    orderType: str | None = None
    status: str | None = None
    persistenceType: str | None = None
    side: str | None = None
    price: float = 0.0
    size: float = 0.0
    bspLiability: float = 0.0
    placedDate: datetime | None = None
    avgPriceMatched: float = 0.0
    sizeMatched: float = 0.0
    sizeRemaining: float = 0.0
    sizeLapsed: float = 0.0
    sizeCancelled: float = 0.0
    sizeVoided: float = 0.0

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Order":
        return Order(
            betId=d.get("betId"),
            orderType=d.get("orderType"),
            status=d.get("status"),
            persistenceType=d.get("persistenceType"),
            side=d.get("side"),
            price=d.get("price", 0.0),
            size=d.get("size", 0.0),
            bspLiability=d.get("bspLiability", 0.0),
            placedDate=parse_iso_utc(d.get("placedDate")),
            avgPriceMatched=d.get("avgPriceMatched", 0.0),
            sizeMatched=d.get("sizeMatched", 0.0),
            sizeRemaining=d.get("sizeRemaining", 0.0),
            sizeLapsed=d.get("sizeLapsed", 0.0),
            sizeCancelled=d.get("sizeCancelled", 0.0),
            sizeVoided=d.get("sizeVoided", 0.0),
        )


@dataclass
class Match:
    betId: str | None
    matchId: str | None = None
    side: str | None = None
    price: float = 0.0
    size: float = 0.0
    matchDate: datetime | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Match":
        return Match(
            betId=d.get("betId"),
            matchId=d.get("matchId"),
            side=d.get("side"),
            price=d.get("price", 0.0),
            size=d.get("size", 0.0),
            matchDate=parse_iso_utc(d.get("matchDate")),
        )


@dataclass
class Runner:
    selectionId: int | None
    handicap: float = 0.0
    status: str | None = None
    adjustmentFactor: float = 0.0
    lastPriceTraded: float = 0.0
    totalMatched: float = 0.0
    removalDate: datetime | None = None
    sp: StartingPrices = field(default_factory=StartingPrices)
    ex: ExchangePrices = field(default_factory=ExchangePrices)
    orders: list[Order] = field(default_factory=list)
    matches: list[Match] = field(default_factory=list)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Runner":
        return Runner(
            selectionId=d.get("selectionId"),
            handicap=d.get("handicap", 0.0),
            status=d.get("status"),
            adjustmentFactor=d.get("adjustmentFactor", 0.0),
            lastPriceTraded=d.get("lastPriceTraded", 0.0),
            totalMatched=d.get("totalMatched", 0.0),
            removalDate=parse_iso_utc(d.get("removalDate")),
            sp=StartingPrices.from_dict(_obj(d, "sp")),
            ex=ExchangePrices.from_dict(_obj(d, "ex")),
            orders=[Order.from_dict(o) for o in _items(d, "orders")],
            matches=[Match.from_dict(m) for m in _items(d, "matches")],
        )


@dataclass
class MarketBook:
    marketId: str | None
    isMarketDataDelayed: bool = False
    status: str | None = None
    betDelay: int = 0
    bspReconciled: bool = False
    complete: bool = False
    inplay: bool = False
    numberOfWinners: int = 0
    numberOfRunners: int = 0
    numberOfActiveRunners: int = 0
    lastMatchTime: datetime | None = None
    totalMatched: float = 0.0
    totalAvailable: float = 0.0
    crossMatching: bool = False
    runnersVoidable: bool = False
    version: int = 0
    runners: list[Runner] = field(default_factory=list)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "MarketBook":
        return MarketBook(
            marketId=d.get("marketId"),
            isMarketDataDelayed=d.get("isMarketDataDelayed", False),
            status=d.get("status"),
            betDelay=d.get("betDelay", 0),
            bspReconciled=d.get("bspReconciled", False),
            complete=d.get("complete", False),
            inplay=d.get("inplay", False),
            numberOfWinners=d.get("numberOfWinners", 0),
            numberOfRunners=d.get("numberOfRunners", 0),
            numberOfActiveRunners=d.get("numberOfActiveRunners", 0),
            lastMatchTime=parse_iso_utc(d.get("lastMatchTime")),
            totalMatched=d.get("totalMatched", 0.0),
            totalAvailable=d.get("totalAvailable", 0.0),
            crossMatching=d.get("crossMatching", False),
            runnersVoidable=d.get("runnersVoidable", False),
            version=d.get("version", 0),
            runners=[Runner.from_dict(r) for r in _items(d, "runners")],
        )


@dataclass
class RunnerCatalog:
    selectionId: int | None
    runnerName: str | None = None
    handicap: float = 0.0
    sortPriority: int = 0
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class MarketCatalogue:
    marketId: str | None
    marketName: str | None = None
    marketStartTime: datetime | None = None
    description: dict[str, Any] = field(default_factory=dict)
    totalMatched: float = 0.0
    runners: list[RunnerCatalog] = field(default_factory=list)
    eventType: EventType | None = None
    competition: Competition | None = None
    event: Event | None = None

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "MarketCatalogue":
        return MarketCatalogue(
            marketId=d.get("marketId"),
            marketName=d.get("marketName"),
            marketStartTime=parse_iso_utc(d.get("marketStartTime")),
            description=_obj(d, "description"),
            totalMatched=d.get("totalMatched", 0.0),
            runners=[
                RunnerCatalog(
                    selectionId=r.get("selectionId"),
                    runnerName=r.get("runnerName"),
                    handicap=r.get("handicap", 0.0),
                    sortPriority=r.get("sortPriority", 0),
                    metadata=_obj(r, "metadata"),
                )
                for r in _items(d, "runners")
            ],
            eventType=EventType.from_dict(d["eventType"]) if isinstance(d.get("eventType"), dict) else None,
            competition=Competition.from_dict(d["competition"]) if isinstance(d.get("competition"), dict) else None,
            event=Event.from_dict(d["event"]) if isinstance(d.get("event"), dict) else None,
        )
