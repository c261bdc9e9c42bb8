from __future__ import annotations

from datetime import date
from typing import List

from pydantic import BaseModel, Field

from squadledger.models import EligibilityStatus, PlayerPosition


class PlayerCreateRequest(BaseModel):
    name: str = ""
    date_of_birth: date
    position: PlayerPosition = PlayerPosition.FORWARD
    payment_method: str = "Card"
    # Negatives are left to the handler so it can answer with its own message.
    amount_paid: float = Field(default=0.0, allow_inf_nan=False)
    team_ids: List[str] = Field(default_factory=list)
    is_available: bool = True
    eligibility: EligibilityStatus = EligibilityStatus.ELIGIBLE


class PlayerPaymentRequest(BaseModel):
    amount: float = Field(allow_inf_nan=False)
    method: str


class PlayerPaymentMethodRequest(BaseModel):
    method: str


class PlayerAmountRequest(BaseModel):
    amount: float = Field(allow_inf_nan=False)


class PlayerEligibilityRequest(BaseModel):
    status: EligibilityStatus


class EligibilityCycleResponse(BaseModel):
    player_id: str
    eligibility: EligibilityStatus
