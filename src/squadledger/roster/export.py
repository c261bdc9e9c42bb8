"""CSV export helpers for team rosters."""

from __future__ import annotations

import csv
from datetime import date
from io import StringIO
from typing import Sequence

from squadledger.models import Player, Team


ROSTER_HEADERS: tuple[str, ...] = (
    "player_id",
    "name",
    "position",
    "age",
    "eligibility",
    "available",
    "payment_method",
    "amount_paid",
)


def export_roster_to_csv(
    players: Sequence[Player],
    *,
    team: Team | None = None,
    today: date | None = None,
) -> str:
    """Convert a roster to CSV text, with a leading team row when given."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    if team is not None:
        writer.writerow(["team", team.name, team.formation.value, f"{team.total_owed:.2f}"])
    writer.writerow(ROSTER_HEADERS)
    for player in players:
        writer.writerow([
            player.id,
            player.name,
            player.position.value,
            player.age(today),
            player.eligibility.value,
            "yes" if player.is_available else "no",
            player.payment_method,
            f"{player.amount_paid:.2f}",
        ])
    return buffer.getvalue()


__all__ = ["ROSTER_HEADERS", "export_roster_to_csv"]
