"""Team records plus the derived financial summary."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .player import PlayerPosition


class Formation(str, Enum):
    F_4_4_2 = "4-4-2"
    F_4_3_3 = "4-3-3"
    F_3_5_2 = "3-5-2"
    F_4_2_3_1 = "4-2-3-1"
    F_5_3_2 = "5-3-2"


class NewTeam(BaseModel):
    """Team payload before the store assigns an identifier and timestamp."""

    name: str
    # Carried for completeness; rosters are derived from ``Player.team_ids``.
    player_ids: List[str] = Field(default_factory=list)
    total_owed: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)
    formation: Formation = Formation.F_4_4_2

    model_config = ConfigDict(frozen=True)


class Team(NewTeam):
    id: str = Field(..., min_length=1)
    created_at: datetime

    def with_debt(self, total_owed: float) -> "Team":
        return self.model_copy(update={"total_owed": total_owed})


class FinancialSummary(BaseModel):
    """Collected/owed/balance triple computed on demand, never stored."""

    total_collected: float
    total_owed: float
    balance: float

    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(cls, total_collected: float, total_owed: float) -> "FinancialSummary":
        return cls(
            total_collected=total_collected,
            total_owed=total_owed,
            balance=total_collected - total_owed,
        )

    @property
    def status(self) -> str:
        return "Surplus" if self.balance >= 0 else "Deficit"


class FormationPosition(BaseModel):
    """A slot on the pitch, in percent of width (x) and depth (y)."""

    x: float
    y: float
    position: PlayerPosition
    player_id: str | None = None

    model_config = ConfigDict(frozen=True)
