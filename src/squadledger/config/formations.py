"""Pitch layouts for the supported team formations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Tuple, Union

from squadledger.models import Formation, FormationPosition, PlayerPosition


@dataclass(frozen=True)
class FormationLayout:
    formation: Formation
    # (position, players in the line, depth from the attacking end in percent)
    lines: Tuple[Tuple[PlayerPosition, int, float], ...]

    @property
    def size(self) -> int:
        return sum(count for _, count, _ in self.lines)


_GK = PlayerPosition.GOALKEEPER
_DEF = PlayerPosition.DEFENDER
_MID = PlayerPosition.MIDFIELDER
_FWD = PlayerPosition.FORWARD

_LAYOUTS: Dict[Formation, FormationLayout] = {
    Formation.F_4_4_2: FormationLayout(
        formation=Formation.F_4_4_2,
        lines=((_GK, 1, 90.0), (_DEF, 4, 70.0), (_MID, 4, 45.0), (_FWD, 2, 20.0)),
    ),
    Formation.F_4_3_3: FormationLayout(
        formation=Formation.F_4_3_3,
        lines=((_GK, 1, 90.0), (_DEF, 4, 70.0), (_MID, 3, 45.0), (_FWD, 3, 20.0)),
    ),
    Formation.F_3_5_2: FormationLayout(
        formation=Formation.F_3_5_2,
        lines=((_GK, 1, 90.0), (_DEF, 3, 70.0), (_MID, 5, 45.0), (_FWD, 2, 20.0)),
    ),
    Formation.F_4_2_3_1: FormationLayout(
        formation=Formation.F_4_2_3_1,
        lines=(
            (_GK, 1, 90.0),
            (_DEF, 4, 70.0),
            (_MID, 2, 55.0),
            (_MID, 3, 38.0),
            (_FWD, 1, 18.0),
        ),
    ),
    Formation.F_5_3_2: FormationLayout(
        formation=Formation.F_5_3_2,
        lines=((_GK, 1, 90.0), (_DEF, 5, 70.0), (_MID, 3, 45.0), (_FWD, 2, 20.0)),
    ),
}


def iter_layouts() -> Iterable[FormationLayout]:
    """Return an iterator of all configured layouts."""

    return _LAYOUTS.values()


def get_layout(formation: Union[Formation, str]) -> FormationLayout:
    """Fetch the layout for a formation, raising KeyError if missing."""

    try:
        key = Formation(formation)
    except ValueError:
        raise KeyError(f"No layout configured for formation={formation!r}") from None
    return _LAYOUTS[key]


def slot_counts(formation: Union[Formation, str]) -> Dict[PlayerPosition, int]:
    counts: Dict[PlayerPosition, int] = {position: 0 for position in PlayerPosition}
    for position, count, _ in get_layout(formation).lines:
        counts[position] += count
    return counts


def slots(formation: Union[Formation, str]) -> Iterator[FormationPosition]:
    """Yield empty pitch slots, goalkeeper first, each line spread evenly."""

    for position, count, depth in get_layout(formation).lines:
        for index in range(count):
            yield FormationPosition(
                x=round(100.0 * (index + 1) / (count + 1), 1),
                y=depth,
                position=position,
            )
