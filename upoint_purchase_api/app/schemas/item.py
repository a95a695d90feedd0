"""
Pydantic models for catalog items.
"""

from pydantic import BaseModel, Field


class ItemRead(BaseModel):
    """Schema for reading a catalog item."""

    id: int
    name: str = Field(..., examples=["Coffee"])
    price: float = Field(..., examples=[50.0])
    quantity: int = Field(..., examples=[10])

    model_config = {
        "from_attributes": True,
    }
