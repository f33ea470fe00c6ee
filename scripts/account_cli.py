"""
Account CLI: print account information for the configured Betfair login.

Usage examples:
  python -m scripts.account_cli funds
  python -m scripts.account_cli details
  python -m scripts.account_cli apps --name MyApp
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from api.client import Session
from api.errors import BetfairError
from app.bootstrap import build_session
from app.settings import load_settings


def _pretty(raw: str) -> str:
    try:
        return json.dumps(json.loads(raw), indent=2, sort_keys=True)
    except ValueError:
        return raw


def print_apps(session: Session, name: str | None) -> None:
    for app in session.account.get_developer_apps():
        if name and app.appName != name:
            continue
        print(f"{app.appName} (id {app.appId})")
        for v in app.appVersions:
            flags = ",".join(
                label
                for label, on in (
                    ("active", v.active),
                    ("delayed", v.delayData),
                    ("subscription", v.subscriptionRequired),
                    ("owner-managed", v.ownerManaged),
                )
                if on
            )
            print(f"    {v.version} [{flags or '-'}] owner={v.owner} key={v.applicationKey}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Query Betfair account information")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("funds", help="Show available funds and exposure")
    sub.add_parser("details", help="Show account holder details")
    p_apps = sub.add_parser("apps", help="List developer applications and their keys")
    p_apps.add_argument("--name", help="Only show the application with this name")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s - %(levelname)s - %(message)s")

    try:
        settings = load_settings()
        with build_session(settings) as session:
            if args.cmd == "funds":
                print(_pretty(session.account.get_account_funds()))
            elif args.cmd == "details":
                print(_pretty(session.account.get_account_details()))
            elif args.cmd == "apps":
                print_apps(session, args.name)
    except BetfairError as e:
        print(json.dumps(e.to_dict(), default=str), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
