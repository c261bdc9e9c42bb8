"""Roster utilities (position grouping, game-day sheets, export)."""

from .export import ROSTER_HEADERS, export_roster_to_csv
from .gameday import GamedaySheet, available_for_gameday, build_gameday_sheet, group_by_position

__all__ = [
    "GamedaySheet",
    "ROSTER_HEADERS",
    "available_for_gameday",
    "build_gameday_sheet",
    "export_roster_to_csv",
    "group_by_position",
]
