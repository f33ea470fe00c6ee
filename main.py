import logging
import sys

from api.errors import BetfairError
from app.bootstrap import build_session
from app.settings import load_settings
from data.enums import MarketProjection
from data.models.betting import MarketFilter, Query


def print_events(session, query, results):
    for item in results:
        event = item.event
        opens = event.openDate.isoformat() if event.openDate else "?"
        print(f"    {event.id}  {event.name}  [{event.countryCode or '-'}] opens {opens}  markets={item.marketCount}")


def main(argv: list[str]) -> int:
    try:
        settings = load_settings()
    except BetfairError as e:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
        logging.error(f"Configuration error: {e}")
        logging.error("Set BETFAIR_* variables in your .env file or environment.")
        return 1

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    text = argv[1] if len(argv) > 1 else "Football"
    query = Query(
        filter=MarketFilter(textQuery=text),
        marketProjection=[MarketProjection.EVENT],
        maxResults=100,
        locale="en",
    )

    try:
        with build_session(settings) as session:
            logging.info(f"Listing events matching {text!r}")
            events = session.betting.list_events(query, print_events)
            logging.info(f"{len(events)} events found")
    except BetfairError as e:
        logging.error(f"{type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
