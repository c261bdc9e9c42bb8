"""Input checks performed by screens and API handlers before touching the store."""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Iterable

from squadledger.models import EligibilityStatus, Formation, NewPlayer, NewTeam, PlayerPosition
from squadledger.store import TeamStore


_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")


class InputRejected(ValueError):
    """A user input that must be refused with a blocking notification."""

    def __init__(self, message: str, *, title: str = "Error"):
        super().__init__(message)
        self.title = title
        self.message = message


def parse_amount(value: str | float | int | None) -> float:
    """Read a typed amount; blank or non-numeric text counts as zero."""

    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_NUMBER.match(value)
    if match is None:
        return 0.0
    return float(match.group(1))


def require_name(value: str | None, message: str) -> str:
    name = (value or "").strip()
    if not name:
        raise InputRejected(message)
    return name


def require_non_negative(amount: float, message: str) -> float:
    if not math.isfinite(amount):
        raise InputRejected("Please enter a valid amount")
    if amount < 0:
        raise InputRejected(message)
    return amount


def validate_player_amount(amount: str | float | None) -> float:
    return require_non_negative(parse_amount(amount), "Amount cannot be negative")


def validate_team_debt(amount: str | float | None) -> float:
    return require_non_negative(parse_amount(amount), "Debt amount cannot be negative")


def validate_payment_method_choice(store: TeamStore, method: str) -> str:
    if not store.has_payment_method_named(method):
        raise InputRejected(f'Unknown payment method "{method}"')
    return next(item.name for item in store.payment_methods if item.matches(method))


def validate_new_player(
    store: TeamStore,
    *,
    name: str | None,
    date_of_birth: date,
    position: PlayerPosition | str,
    payment_method: str,
    amount_paid: str | float | None,
    team_ids: Iterable[str] = (),
    is_available: bool = True,
    eligibility: EligibilityStatus | str = EligibilityStatus.ELIGIBLE,
) -> NewPlayer:
    clean_name = require_name(name, "Please enter a player name")
    try:
        position = PlayerPosition(position)
        eligibility = EligibilityStatus(eligibility)
    except ValueError as exc:
        raise InputRejected(str(exc)) from exc
    if date_of_birth > date.today():
        raise InputRejected("Date of birth cannot be in the future")
    return NewPlayer(
        name=clean_name,
        date_of_birth=date_of_birth,
        position=position,
        payment_method=validate_payment_method_choice(store, payment_method),
        amount_paid=validate_player_amount(amount_paid),
        team_ids=list(dict.fromkeys(team_ids)),
        is_available=is_available,
        eligibility=eligibility,
    )


def validate_new_team(
    *,
    name: str | None,
    total_owed: str | float | None,
    formation: Formation | str,
) -> NewTeam:
    clean_name = require_name(name, "Please enter a team name")
    try:
        formation = Formation(formation)
    except ValueError as exc:
        raise InputRejected(str(exc)) from exc
    return NewTeam(name=clean_name, total_owed=validate_team_debt(total_owed), formation=formation)


def validate_new_payment_method(store: TeamStore, name: str | None) -> str:
    clean_name = require_name(name, "Please enter a payment method name")
    if store.has_payment_method_named(clean_name):
        raise InputRejected(f'A payment method named "{clean_name}" already exists')
    return clean_name


def validate_payment_method_rename(store: TeamStore, method_id: str, name: str | None) -> str:
    clean_name = require_name(name, "Please enter a valid name")
    if store.has_payment_method_named(clean_name, exclude_id=method_id):
        raise InputRejected(f'A payment method named "{clean_name}" already exists')
    return clean_name


def ensure_deleted(deleted: bool) -> None:
    if not deleted:
        raise InputRejected("Cannot delete default payment methods")


__all__ = [
    "InputRejected",
    "ensure_deleted",
    "parse_amount",
    "require_name",
    "require_non_negative",
    "validate_new_payment_method",
    "validate_new_player",
    "validate_new_team",
    "validate_payment_method_choice",
    "validate_payment_method_rename",
    "validate_player_amount",
    "validate_team_debt",
]
