"""Lightweight REST client for the squadledger API."""

from __future__ import annotations

import argparse

import httpx


def _money(value: float) -> str:
    return f"${value:,.2f}"


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the squadledger REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--list-teams", action="store_true", help="List teams with their financials")
    parser.add_argument("--team", metavar="TEAM_ID", help="Print players and financials for one team")
    parser.add_argument("--add-method", metavar="NAME", help="Add a payment method")
    parser.add_argument("--delete-method", metavar="METHOD_ID", help="Delete a payment method")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.add_method:
            resp = client.post("/payment-methods", json={"name": args.add_method})
            if resp.status_code == 400:
                raise SystemExit(resp.json()["detail"])
            resp.raise_for_status()
            print(f"Added payment method {resp.json()['name']} ({resp.json()['id']})")

        if args.delete_method:
            resp = client.delete(f"/payment-methods/{args.delete_method}")
            if resp.status_code in {404, 409}:
                raise SystemExit(resp.json()["detail"])
            resp.raise_for_status()
            print(f"Deleted payment method {args.delete_method}")

        if args.team:
            resp = client.get(f"/teams/{args.team}")
            resp.raise_for_status()
            summary = resp.json()
            players = client.get(f"/teams/{args.team}/players")
            players.raise_for_status()
            print(f"{summary['team']['name']} ({summary['team']['formation']})")
            for player in players.json():
                print(f"  {player['name']:<24} {player['position']:<11} {player['eligibility']:<10} {_money(player['amount_paid'])}")
            financials = summary["financials"]
            print(f"  balance {_money(financials['balance'])}")
            return

        if args.list_teams or not (args.add_method or args.delete_method):
            resp = client.get("/teams")
            resp.raise_for_status()
            for item in resp.json():
                financials = item["financials"]
                print(
                    f"{item['team']['id']}  {item['team']['name']:<20} players={item['player_count']:<3} "
                    f"collected={_money(financials['total_collected'])} owed={_money(financials['total_owed'])} "
                    f"balance={_money(financials['balance'])}"
                )
            overall = client.get("/financials")
            overall.raise_for_status()
            print(f"Overall balance: {_money(overall.json()['balance'])}")


if __name__ == "__main__":
    main()
