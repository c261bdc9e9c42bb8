from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from squadledger.models import (
    EligibilityStatus,
    FinancialSummary,
    PaymentMethodConfig,
    Player,
    PlayerPosition,
    Team,
)


def _player(**overrides) -> Player:
    data = {
        "id": "p1",
        "name": "Test Player",
        "date_of_birth": date(2000, 6, 15),
        "position": PlayerPosition.MIDFIELDER,
        "payment_method": "Cash",
        "amount_paid": 10.0,
        "team_ids": ["t1"],
    }
    data.update(overrides)
    return Player(**data)


def test_player_is_frozen():
    player = _player()

    with pytest.raises((TypeError, ValidationError)):
        player.name = "Other"  # type: ignore[misc]


def test_player_rejects_negative_amount():
    with pytest.raises(ValidationError):
        _player(amount_paid=-1)


def test_team_rejects_negative_debt():
    with pytest.raises(ValidationError):
        Team(id="t1", name="Team", total_owed=-5, created_at=datetime.now(timezone.utc))


def test_player_defaults():
    player = _player()
    assert player.is_available is True
    assert player.eligibility is EligibilityStatus.ELIGIBLE


def test_age_counts_birthday_not_yet_reached():
    player = _player(date_of_birth=date(2000, 6, 15))

    assert player.age(date(2024, 6, 14)) == 23
    assert player.age(date(2024, 6, 15)) == 24
    assert player.age(date(2024, 12, 1)) == 24


def test_builders_return_new_players():
    player = _player()

    paid = player.with_payment(25.0, "Card")
    assert (paid.amount_paid, paid.payment_method) == (25.0, "Card")
    assert (player.amount_paid, player.payment_method) == (10.0, "Cash")
    assert player.with_amount(3.5).amount_paid == 3.5
    assert player.with_payment_method("Venmo").payment_method == "Venmo"
    assert player.with_eligibility("Injured").eligibility is EligibilityStatus.INJURED


def test_eligibility_next_wraps():
    assert EligibilityStatus.ELIGIBLE.next() is EligibilityStatus.INELIGIBLE
    assert EligibilityStatus.INELIGIBLE.next() is EligibilityStatus.SUSPENDED
    assert EligibilityStatus.SUSPENDED.next() is EligibilityStatus.INJURED
    assert EligibilityStatus.INJURED.next() is EligibilityStatus.ELIGIBLE


def test_financial_summary_balance_and_status():
    surplus = FinancialSummary.of(50.0, 20.0)
    deficit = FinancialSummary.of(10.0, 40.0)

    assert surplus.balance == 30.0
    assert surplus.status == "Surplus"
    assert deficit.balance == -30.0
    assert deficit.status == "Deficit"
    assert FinancialSummary.of(0.0, 0.0).status == "Surplus"


def test_payment_method_matching_is_case_insensitive():
    method = PaymentMethodConfig(id="4", name="Venmo")

    assert method.matches("venmo")
    assert method.matches("  VENMO ")
    assert not method.matches("PayPal")
    assert method.renamed("PayPal").name == "PayPal"
    assert method.name == "Venmo"


@pytest.mark.parametrize("bad", [float("nan"), float("inf")])
def test_records_reject_non_finite_amounts(bad):
    with pytest.raises(ValidationError):
        _player(amount_paid=bad)
    with pytest.raises(ValidationError):
        Team(id="t1", name="Team", total_owed=bad, created_at=datetime.now(timezone.utc))
