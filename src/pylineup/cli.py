"""Command-line interface for optimizing player-day lineups from a CSV."""

from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path

from pylineup.config import DEFAULT_RULES_KEY
from pylineup.config_loader import MappingProfile
from pylineup.ingest import load_player_day_csv, roster_add_flags, rows_to_player_days
from pylineup.optimizer import optimize_team_days

OUTPUT_COLUMNS = ("fullPos", "bestPos", "MS", "BS", "ADD")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute fullPos/bestPos for player-day rosters")
    parser.add_argument("player_days", type=Path, help="Path to player-day CSV")
    parser.add_argument("--output", type=Path, default=Path("lineups.csv"), help="Output CSV path")
    parser.add_argument("--rules", default=None, help=f"Lineup rules key (default {DEFAULT_RULES_KEY})")
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for player-day CSV columns (e.g., player_id=Id, name=First|Last)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)
    parser.add_argument("--workers", type=int, default=1, help="Worker processes for team-day fan-out")
    parser.add_argument(
        "--node-limit",
        type=int,
        default=None,
        help="Maximum search nodes per roster before returning the best lineup found",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional path to write run summary JSON",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _flag_cell(value: bool | None) -> str:
    return "1" if value else ""


def main() -> None:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    mapping = _parse_mapping(args.column)
    rules_key = args.rules
    if args.load_profile:
        profile = MappingProfile.load(args.load_profile)
        mapping = profile.columns | mapping
        rules_key = rules_key or profile.rules
    rules_key = rules_key or DEFAULT_RULES_KEY

    if args.save_profile:
        MappingProfile(mapping, rules_key).save(args.save_profile)
        print(f"Saved mapping profile to {args.save_profile}")

    rows = load_player_day_csv(args.player_days, mapping=mapping or None)
    records = rows_to_player_days(rows)
    output = optimize_team_days(
        records,
        rules=rules_key,
        workers=max(1, args.workers),
        node_limit=args.node_limit,
    )
    adds = roster_add_flags(records)

    source_columns: list[str] = []
    for row in rows:
        for column in row.source:
            if column not in source_columns and column not in OUTPUT_COLUMNS:
                source_columns.append(column)

    with args.output.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow([*source_columns, *OUTPUT_COLUMNS])
        for row, player, add in zip(rows, output.players, adds):
            writer.writerow([
                *(row.source.get(column, "") for column in source_columns),
                player.full_pos,
                player.best_pos,
                _flag_cell(player.missed_start),
                _flag_cell(player.bad_start),
                _flag_cell(add),
            ])

    print(
        f"Optimized {output.team_days} team-days ({len(records)} player-days) in {output.elapsed:.2f}s"
    )
    if output.skipped_records:
        print(f"Skipped {output.skipped_records} player-days without a team or date")
    if output.truncated:
        print(f"{output.truncated} team-days hit the search cap; their bestPos is not proven optimal")
    if output.failures:
        preview = ", ".join(output.failures[:5])
        more = len(output.failures) - 5
        suffix = f", +{more} more" if more > 0 else ""
        print(f"Failed team-days: {preview}{suffix}")

    if args.report:
        report_payload = {
            "rules": rules_key,
            "player_days": len(records),
            "team_days": output.team_days,
            "skipped_records": output.skipped_records,
            "truncated": output.truncated,
            "failures": output.failures,
            "missed_starts": sum(1 for player in output.players if player.missed_start),
            "bad_starts": sum(1 for player in output.players if player.bad_start),
            "roster_adds": sum(1 for add in adds if add),
            "elapsed_seconds": round(output.elapsed, 3),
        }
        args.report.write_text(json.dumps(report_payload, indent=2), encoding="utf-8")
        print(f"Wrote run report to {args.report}")


if __name__ == "__main__":
    main()
