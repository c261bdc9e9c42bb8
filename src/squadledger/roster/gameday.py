"""Roster grouping and game-day sheets built from a team's players."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from squadledger.config.formations import slots
from squadledger.models import EligibilityStatus, Formation, FormationPosition, Player, PlayerPosition


@dataclass(frozen=True)
class GamedaySheet:
    formation: Formation
    positions: tuple[FormationPosition, ...]
    bench: tuple[Player, ...]
    open_slots: Dict[PlayerPosition, int]

    @property
    def filled(self) -> int:
        return sum(1 for slot in self.positions if slot.player_id is not None)


def group_by_position(players: Iterable[Player]) -> Dict[PlayerPosition, List[Player]]:
    """Bucket players per position, keeping every position and roster order."""

    grouped: Dict[PlayerPosition, List[Player]] = {position: [] for position in PlayerPosition}
    for player in players:
        grouped[player.position].append(player)
    return grouped


def available_for_gameday(players: Iterable[Player]) -> List[Player]:
    return [
        player
        for player in players
        if player.is_available and player.eligibility == EligibilityStatus.ELIGIBLE
    ]


def build_gameday_sheet(players: Sequence[Player], formation: Formation | str) -> GamedaySheet:
    """Place available players into the formation's slots by position.

    Slots are filled in pitch order with the next unplaced player of the
    matching position; whoever is left over is on the bench.
    """

    formation = Formation(formation)
    waiting = group_by_position(available_for_gameday(players))
    placed: List[FormationPosition] = []
    open_slots: Dict[PlayerPosition, int] = {position: 0 for position in PlayerPosition}

    for slot in slots(formation):
        candidates = waiting[slot.position]
        if candidates:
            player = candidates.pop(0)
            placed.append(slot.model_copy(update={"player_id": player.id}))
        else:
            placed.append(slot)
            open_slots[slot.position] += 1

    bench = tuple(player for group in waiting.values() for player in group)
    return GamedaySheet(
        formation=formation,
        positions=tuple(placed),
        bench=bench,
        open_slots=open_slots,
    )
