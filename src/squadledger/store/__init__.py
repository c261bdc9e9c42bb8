"""In-memory store for players, teams and payment methods."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar
from uuid import uuid4

from squadledger.config import DEFAULT_PAYMENT_METHODS
from squadledger.models import (
    EligibilityStatus,
    FinancialSummary,
    NewPlayer,
    NewTeam,
    PaymentMethodConfig,
    Player,
    Team,
)


logger = logging.getLogger(__name__)

_T = TypeVar("_T", Player, Team, PaymentMethodConfig)


def _replace(items: List[_T], item_id: str, update: Callable[[_T], _T]) -> Tuple[List[_T], Optional[_T]]:
    """Return a new list with the matching entry rebuilt; others keep identity."""

    updated: Optional[_T] = None
    result: List[_T] = []
    for item in items:
        if item.id == item_id:
            updated = update(item)
            result.append(updated)
        else:
            result.append(item)
    return result, updated


class TeamStore:
    """Holds the session's collections and the only sanctioned mutations.

    The store trusts its callers: amounts and names are validated by the
    screens and API handlers before any mutation reaches it. Unknown ids turn
    into no-ops or empty results. The one guard enforced here is that default
    payment methods cannot be deleted.
    """

    def __init__(
        self,
        *,
        players: Iterable[Player] = (),
        teams: Iterable[Team] = (),
        payment_methods: Iterable[PaymentMethodConfig] | None = None,
    ):
        self._players: List[Player] = list(players)
        self._teams: List[Team] = list(teams)
        if payment_methods is None:
            payment_methods = DEFAULT_PAYMENT_METHODS
        self._payment_methods: List[PaymentMethodConfig] = list(payment_methods)

    @staticmethod
    def _new_id() -> str:
        return uuid4().hex

    @property
    def players(self) -> Tuple[Player, ...]:
        return tuple(self._players)

    @property
    def teams(self) -> Tuple[Team, ...]:
        return tuple(self._teams)

    @property
    def payment_methods(self) -> Tuple[PaymentMethodConfig, ...]:
        return tuple(self._payment_methods)

    # Lookups ---------------------------------------------------------------

    def get_player(self, player_id: str) -> Optional[Player]:
        return next((player for player in self._players if player.id == player_id), None)

    def get_team(self, team_id: str) -> Optional[Team]:
        return next((team for team in self._teams if team.id == team_id), None)

    def get_payment_method(self, method_id: str) -> Optional[PaymentMethodConfig]:
        return next((method for method in self._payment_methods if method.id == method_id), None)

    def has_payment_method_named(self, name: str, *, exclude_id: str | None = None) -> bool:
        return any(
            method.matches(name)
            for method in self._payment_methods
            if method.id != exclude_id
        )

    # Players and teams -----------------------------------------------------

    def add_player(self, new_player: NewPlayer) -> Player:
        player = Player(id=self._new_id(), **new_player.model_dump(exclude={"id"}))
        self._players = [*self._players, player]
        logger.info("Added new player %s (%s)", player.name, player.id)
        return player

    def add_team(self, new_team: NewTeam) -> Team:
        team = Team(
            id=self._new_id(),
            created_at=datetime.now(timezone.utc),
            **new_team.model_dump(exclude={"id", "created_at"}),
        )
        self._teams = [*self._teams, team]
        logger.info("Added new team %s (%s)", team.name, team.id)
        return team

    def get_team_players(self, team_id: str) -> List[Player]:
        if self.get_team(team_id) is None:
            return []
        return [player for player in self._players if team_id in player.team_ids]

    def get_team_financials(self, team_id: str) -> FinancialSummary:
        collected = sum(player.amount_paid for player in self.get_team_players(team_id))
        team = self.get_team(team_id)
        owed = team.total_owed if team is not None else 0.0
        return FinancialSummary.of(collected, owed)

    def get_all_teams_financials(self) -> FinancialSummary:
        collected = sum(player.amount_paid for player in self._players)
        owed = sum(team.total_owed for team in self._teams)
        return FinancialSummary.of(collected, owed)

    def _update_player(self, player_id: str, update: Callable[[Player], Player]) -> Optional[Player]:
        self._players, updated = _replace(self._players, player_id, update)
        return updated

    def update_player_payment(self, player_id: str, amount: float, method: str) -> Optional[Player]:
        updated = self._update_player(player_id, lambda player: player.with_payment(amount, method))
        logger.info("Updated player payment: %s %s %s", player_id, amount, method)
        return updated

    def update_player_payment_method(self, player_id: str, method: str) -> Optional[Player]:
        updated = self._update_player(player_id, lambda player: player.with_payment_method(method))
        logger.info("Updated player payment method: %s %s", player_id, method)
        return updated

    def update_player_amount(self, player_id: str, amount: float) -> Optional[Player]:
        updated = self._update_player(player_id, lambda player: player.with_amount(amount))
        logger.info("Updated player amount: %s %s", player_id, amount)
        return updated

    def update_player_eligibility(self, player_id: str, status: EligibilityStatus) -> Optional[Player]:
        updated = self._update_player(player_id, lambda player: player.with_eligibility(status))
        logger.info("Updated player eligibility: %s %s", player_id, EligibilityStatus(status).value)
        return updated

    def cycle_player_eligibility(self, player_id: str) -> Optional[EligibilityStatus]:
        updated = self._update_player(
            player_id,
            lambda player: player.with_eligibility(player.eligibility.next()),
        )
        if updated is None:
            return None
        logger.info("Cycled player eligibility: %s %s", player_id, updated.eligibility.value)
        return updated.eligibility

    def update_team_debt(self, team_id: str, total_owed: float) -> Optional[Team]:
        self._teams, updated = _replace(self._teams, team_id, lambda team: team.with_debt(total_owed))
        logger.info("Updated team debt: %s %s", team_id, total_owed)
        return updated

    # Payment methods -------------------------------------------------------

    def add_payment_method(self, name: str) -> PaymentMethodConfig:
        method = PaymentMethodConfig(id=self._new_id(), name=name, is_default=False)
        self._payment_methods = [*self._payment_methods, method]
        logger.info("Added payment method: %s", name)
        return method

    def update_payment_method(self, method_id: str, name: str) -> Optional[PaymentMethodConfig]:
        self._payment_methods, updated = _replace(
            self._payment_methods,
            method_id,
            lambda method: method.renamed(name),
        )
        logger.info("Updated payment method: %s %s", method_id, name)
        return updated

    def delete_payment_method(self, method_id: str) -> bool:
        method = self.get_payment_method(method_id)
        if method is not None and method.is_default:
            logger.info("Cannot delete default payment method %s", method.name)
            return False
        self._payment_methods = [item for item in self._payment_methods if item.id != method_id]
        logger.info("Deleted payment method: %s", method_id)
        return True


__all__ = ["TeamStore"]
