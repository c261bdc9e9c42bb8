"""Configuration helpers for formations and payment methods."""

from .formations import FormationLayout, get_layout, iter_layouts, slot_counts, slots
from .payment_methods import DEFAULT_PAYMENT_METHOD, DEFAULT_PAYMENT_METHODS

__all__ = [
    "DEFAULT_PAYMENT_METHOD",
    "DEFAULT_PAYMENT_METHODS",
    "FormationLayout",
    "get_layout",
    "iter_layouts",
    "slot_counts",
    "slots",
]
