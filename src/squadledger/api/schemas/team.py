from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from squadledger.models import FinancialSummary, Formation, FormationPosition, Player, PlayerPosition, Team


class TeamCreateRequest(BaseModel):
    name: str = ""
    total_owed: float = Field(default=0.0, allow_inf_nan=False)
    formation: Formation = Formation.F_4_4_2


class TeamDebtRequest(BaseModel):
    total_owed: float = Field(allow_inf_nan=False)


class TeamSummaryResponse(BaseModel):
    team: Team
    player_count: int
    financials: FinancialSummary


class GamedayResponse(BaseModel):
    team_id: str
    formation: Formation
    positions: List[FormationPosition]
    bench: List[Player]
    open_slots: dict[PlayerPosition, int]
