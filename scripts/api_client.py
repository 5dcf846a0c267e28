"""Lightweight REST client for the pylineup API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_mapping(name: str) -> dict[str, str]:
    if not name:
        return {}
    try:
        return json.loads(name)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid mapping JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the pylineup REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("player_days", type=Path, nargs="?", help="Player-day CSV for a batch run")
    parser.add_argument("--roster", type=Path, help="JSON file with a single roster to optimize")
    parser.add_argument("--rules", default="GSHL", help="Lineup rules key")
    parser.add_argument("--mapping", default="", help="JSON mapping for player-day columns")
    parser.add_argument("--node-limit", type=int, default=None, help="Search node cap per roster")
    parser.add_argument("--list-rules", action="store_true", help="List configured lineup rules and exit")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_rules:
            resp = client.get("/rules")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.roster:
            payload = {
                "players": json.loads(args.roster.read_text(encoding="utf-8")),
                "rules": args.rules,
                "node_limit": args.node_limit,
            }
            resp = client.post("/lineups/optimize", json=payload)
            if resp.status_code == 404:
                raise SystemExit(f"lineup rules {args.rules} not found")
            resp.raise_for_status()
            result = resp.json()
            print("Stats:", json.dumps(result["stats"], indent=2))
            print(f"Best lineup status: {result['best']['status']}")
            for player in result["players"]:
                print(f"{player['player_id']}: full={player['full_pos']} best={player['best_pos']}")
            return

        if args.player_days is None:
            raise SystemExit("player_days CSV is required unless using --list-rules/--roster")

        mapping = build_mapping(args.mapping)
        files = {"player_days": (args.player_days.name, args.player_days.read_bytes(), "text/csv")}
        data = {"rules": args.rules}
        if mapping:
            data["mapping"] = json.dumps(mapping)
        if args.node_limit is not None:
            data["node_limit"] = str(args.node_limit)
        resp = client.post("/lineups/batch", files=files, data=data, timeout=None)
        resp.raise_for_status()
        payload = resp.json()
        print(
            f"Optimized {payload['team_days']} team-days "
            f"({payload['truncated']} truncated, {len(payload['failures'])} failed)"
        )
        if payload.get("message"):
            print(payload["message"])


if __name__ == "__main__":
    main()
