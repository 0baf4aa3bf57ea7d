"""Lightweight REST client for the rankboard API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the rankboard REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("rankings", type=Path, nargs="?", help="Rankings text file")
    parser.add_argument("--strategy", choices=("team_aware", "basic"), default=None, help="Parse strategy override")
    parser.add_argument("--parse-only", action="store_true", help="Parse without storing the text on the board")
    parser.add_argument("--board", action="store_true", help="Print the grouped board and exit")
    parser.add_argument("--hide-unselected", action="store_true", help="Only show favorites and active team players")
    parser.add_argument("--list-teams", action="store_true", help="List saved teams and exit")
    args = parser.parse_args()

    if args.board or args.list_teams:
        with httpx.Client(base_url=args.base_url) as client:
            if args.board:
                resp = client.get("/board", params={"hide_unselected": args.hide_unselected})
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
            if args.list_teams:
                resp = client.get("/teams")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
        return

    if args.rankings is None:
        raise SystemExit("a rankings file is required unless using --board/--list-teams")

    text = args.rankings.read_text(encoding="utf-8")

    with httpx.Client(base_url=args.base_url) as client:
        resp = client.post("/rankings/parse", json={"text": text, "strategy": args.strategy})
        if resp.status_code == 400:
            raise SystemExit(resp.json().get("detail", "parse failed"))
        resp.raise_for_status()
        payload = resp.json()
        print(f"Parsed {payload['total_players']} players")

        if args.parse_only:
            print(json.dumps(payload["players"], indent=2))
            return

        resp = client.put("/rankings/text", json={"text": text})
        resp.raise_for_status()
        resp = client.get("/board")
        resp.raise_for_status()
        board = resp.json()
        for group in board["groups"]:
            print(f"{group['label']}: {len(group['players'])}")
        if board["skipped_lines"]:
            print(f"Skipped {len(board['skipped_lines'])} line(s)")


if __name__ == "__main__":
    main()
