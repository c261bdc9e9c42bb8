from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PaymentMethodConfig(BaseModel):
    """A configured way for players to pay; defaults cannot be removed."""

    id: str = Field(..., min_length=1)
    name: str
    is_default: bool = False

    model_config = ConfigDict(frozen=True)

    def matches(self, name: str) -> bool:
        return self.name.strip().casefold() == name.strip().casefold()

    def renamed(self, name: str) -> "PaymentMethodConfig":
        return self.model_copy(update={"name": name})
