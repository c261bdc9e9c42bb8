from __future__ import annotations

from pydantic import BaseModel


class PaymentMethodRequest(BaseModel):
    name: str = ""


class PaymentMethodDeleteResponse(BaseModel):
    id: str
    deleted: bool
