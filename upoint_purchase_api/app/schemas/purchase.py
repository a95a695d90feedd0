"""
Pydantic models for the purchase endpoint.

Request and response bodies use camelCase on the wire; the Python
attributes stay snake_case and are mapped through aliases.
"""

from pydantic import BaseModel, Field

from ..core.db import MAX_ROW_ID


class PurchaseRequest(BaseModel):
    item_id: int = Field(..., alias="itemId", ge=1, le=MAX_ROW_ID, examples=[1])

    model_config = {
        "populate_by_name": True,
    }


class PurchaseResponse(BaseModel):
    message: str = Field(..., examples=["Purchase successful"])
    item_purchased: str = Field(..., alias="itemPurchased", examples=["Coffee"])
    cashback_received: float = Field(..., alias="cashbackReceived", examples=[1.5])
    new_balance: float = Field(..., alias="newBalance", examples=[51.5])

    model_config = {
        "populate_by_name": True,
    }
