#!/usr/bin/env python3
"""
Command line access to a running LendTrack API.

    python scripts/lend.py list
    python scripts/lend.py checkout 1 "Arthur Dent"
    python scripts/lend.py return 1

Mutations authenticate with LENDTRACK_AUTH_TOKEN unless --token is given.
"""
import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from lendtrack.core.client import LendTrackClient


def print_items(snapshot):
    for item in snapshot["items"]:
        loan = item["currentLoan"]
        status = f"on loan to {loan['patronName']} since {loan['checkoutDate'][:10]}" if loan else "available"
        print(f"#{item['id']:<4} {item['title']} [{item['itemType']['name']}] {status}")


def main():
    parser = argparse.ArgumentParser(description="Check items in and out of LendTrack")
    parser.add_argument("--token", type=str, default=None, help="Bearer token for mutations")
    parser.add_argument("--url", type=str, default=None, help="API base URL, e.g. http://localhost:8080/v1/api")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List items and their loan status")

    checkout = sub.add_parser("checkout", help="Lend an item to a patron")
    checkout.add_argument("item_id", type=int)
    checkout.add_argument("patron_name", type=str)

    ret = sub.add_parser("return", help="Return an item")
    ret.add_argument("item_id", type=int)

    action = sub.add_parser("action", help="Run any action with a JSON payload")
    action.add_argument("name", type=str)
    action.add_argument("payload", type=str, help="JSON object")

    args = parser.parse_args()
    if args.url:
        LendTrackClient.API_URL = args.url

    if args.command == "list":
        result = LendTrackClient.snapshot()
    elif args.command == "checkout":
        result = LendTrackClient.checkout(args.item_id, args.patron_name, token=args.token)
    elif args.command == "return":
        result = LendTrackClient.return_item(args.item_id, token=args.token)
    else:
        try:
            payload = json.loads(args.payload)
        except ValueError:
            print(f"Error: payload is not valid JSON: {args.payload}")
            sys.exit(1)
        result = LendTrackClient.execute(args.name, payload, token=args.token)

    if not result.get("ok"):
        print(f"✗ {result.get('message', 'Request failed')}")
        sys.exit(1)
    print_items(result["snapshot"])


if __name__ == "__main__":
    main()
