"""Payment methods seeded into every new store."""

from __future__ import annotations

from typing import Tuple

from squadledger.models import PaymentMethodConfig


DEFAULT_PAYMENT_METHODS: Tuple[PaymentMethodConfig, ...] = (
    PaymentMethodConfig(id="1", name="Cash", is_default=True),
    PaymentMethodConfig(id="2", name="Card", is_default=True),
    PaymentMethodConfig(id="3", name="Transfer", is_default=True),
    PaymentMethodConfig(id="4", name="Venmo", is_default=False),
    PaymentMethodConfig(id="5", name="Check", is_default=False),
)

# Preselected in the add-player form.
DEFAULT_PAYMENT_METHOD = "Card"
