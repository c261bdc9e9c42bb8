"""Player records shared by the store, roster helpers and screens."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PlayerPosition(str, Enum):
    GOALKEEPER = "Goalkeeper"
    DEFENDER = "Defender"
    MIDFIELDER = "Midfielder"
    FORWARD = "Forward"


class EligibilityStatus(str, Enum):
    ELIGIBLE = "Eligible"
    INELIGIBLE = "Ineligible"
    SUSPENDED = "Suspended"
    INJURED = "Injured"

    def next(self) -> "EligibilityStatus":
        """Return the following status, wrapping back to ``Eligible``."""

        members = list(EligibilityStatus)
        return members[(members.index(self) + 1) % len(members)]


class NewPlayer(BaseModel):
    """Player payload before the store assigns an identifier."""

    name: str
    date_of_birth: date
    position: PlayerPosition = PlayerPosition.FORWARD
    payment_method: str
    amount_paid: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)
    team_ids: List[str] = Field(default_factory=list)
    is_available: bool = True
    eligibility: EligibilityStatus = EligibilityStatus.ELIGIBLE

    model_config = ConfigDict(frozen=True)


class Player(NewPlayer):
    id: str = Field(..., min_length=1)

    def age(self, today: date | None = None) -> int:
        today = today or date.today()
        years = today.year - self.date_of_birth.year
        if (today.month, today.day) < (self.date_of_birth.month, self.date_of_birth.day):
            years -= 1
        return years

    def with_payment(self, amount: float, method: str) -> "Player":
        return self.model_copy(update={"amount_paid": amount, "payment_method": method})

    def with_payment_method(self, method: str) -> "Player":
        return self.model_copy(update={"payment_method": method})

    def with_amount(self, amount: float) -> "Player":
        return self.model_copy(update={"amount_paid": amount})

    def with_eligibility(self, status: EligibilityStatus) -> "Player":
        return self.model_copy(update={"eligibility": EligibilityStatus(status)})
