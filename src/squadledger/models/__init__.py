"""Canonical records for players, teams and payment methods."""

from .payment import PaymentMethodConfig
from .player import EligibilityStatus, NewPlayer, Player, PlayerPosition
from .team import FinancialSummary, Formation, FormationPosition, NewTeam, Team

__all__ = [
    "EligibilityStatus",
    "FinancialSummary",
    "Formation",
    "FormationPosition",
    "NewPlayer",
    "NewTeam",
    "PaymentMethodConfig",
    "Player",
    "PlayerPosition",
    "Team",
]
