"""Pydantic models for API I/O."""

from .payment import PaymentMethodDeleteResponse, PaymentMethodRequest
from .player import (
    EligibilityCycleResponse,
    PlayerAmountRequest,
    PlayerCreateRequest,
    PlayerEligibilityRequest,
    PlayerPaymentMethodRequest,
    PlayerPaymentRequest,
)
from .team import GamedayResponse, TeamCreateRequest, TeamDebtRequest, TeamSummaryResponse

__all__ = [
    "EligibilityCycleResponse",
    "GamedayResponse",
    "PaymentMethodDeleteResponse",
    "PaymentMethodRequest",
    "PlayerAmountRequest",
    "PlayerCreateRequest",
    "PlayerEligibilityRequest",
    "PlayerPaymentMethodRequest",
    "PlayerPaymentRequest",
    "TeamCreateRequest",
    "TeamDebtRequest",
    "TeamSummaryResponse",
]
