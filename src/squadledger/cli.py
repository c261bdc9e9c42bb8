"""Command-line interface for serving and inspecting team ledgers."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from squadledger.api.pages import format_balance, format_money
from squadledger.config_loader import LOG_LEVELS, SeedError, SeedProfile, Settings, build_store
from squadledger.roster import export_roster_to_csv
from squadledger.store import TeamStore


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Track soccer teams, players and payments")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default from SQUADLEDGER_LOG_LEVEL)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the web app")
    serve.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    serve.add_argument("--port", type=int, default=8000, help="Port to listen on")
    serve.add_argument("--seed", type=Path, default=None, help="Seed JSON to load at startup")

    summary = subparsers.add_parser("summary", help="Print overall and per-team financials")
    summary.add_argument("--seed", type=Path, default=None, help="Seed JSON to summarize")

    export = subparsers.add_parser("export", help="Write a team roster as CSV")
    export.add_argument("team_id", help="Team identifier from the seed file")
    export.add_argument("--seed", type=Path, required=True, help="Seed JSON containing the team")
    export.add_argument("--output", type=Path, default=None, help="Output CSV path (default <team_id>.csv)")

    init_seed = subparsers.add_parser("init-seed", help="Write an empty seed file with default payment methods")
    init_seed.add_argument("path", type=Path, help="Destination JSON path")

    return parser.parse_args(argv)


def _load_store(settings: Settings) -> TeamStore:
    try:
        return build_store(settings)
    except FileNotFoundError as exc:
        raise SystemExit(f"Seed file not found: {exc.filename}") from exc
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid seed JSON: {exc}") from exc
    except (ValidationError, SeedError) as exc:
        raise SystemExit(f"Invalid seed data: {exc}") from exc


def _print_summary(store: TeamStore, currency: str) -> None:
    overall = store.get_all_teams_financials()
    print("Overall Financial Summary")
    print(f"  Collected: {format_money(overall.total_collected, currency)}")
    print(f"  Owed:      {format_money(overall.total_owed, currency)}")
    print(f"  Balance:   {format_balance(overall.balance, currency)}")
    print(f"  Players: {len(store.players)}  Teams: {len(store.teams)}")
    for team in store.teams:
        financials = store.get_team_financials(team.id)
        players = store.get_team_players(team.id)
        print(
            f"{team.name} ({team.id}) - {len(players)} players, {team.formation.value}: "
            f"collected {format_money(financials.total_collected, currency)}, "
            f"owed {format_money(financials.total_owed, currency)}, "
            f"{financials.status.lower()} {format_money(abs(financials.balance), currency)}"
        )


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    settings = Settings.from_env()
    if args.log_level:
        settings.log_level = args.log_level
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    if getattr(args, "seed", None) is not None:
        settings.seed_path = args.seed

    if args.command == "init-seed":
        SeedProfile().save(args.path)
        print(f"Wrote seed file to {args.path}")
        return

    if args.command == "serve":
        import uvicorn

        from squadledger.api import create_app

        app = create_app(store=_load_store(settings), settings=settings)
        uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())
        return

    store = _load_store(settings)
    if args.command == "summary":
        _print_summary(store, settings.currency)
        return

    team = store.get_team(args.team_id)
    if team is None:
        raise SystemExit(f"Team not found: {args.team_id}")
    output = args.output or Path(f"{team.id}.csv")
    output.write_text(export_roster_to_csv(store.get_team_players(team.id), team=team), encoding="utf-8")
    print(f"Wrote {len(store.get_team_players(team.id))} players to {output}")


if __name__ == "__main__":
    main()
