"""
Pydantic models for account data.

Defines schemas for signing up, logging in and reading an account.
The password hash never leaves the service layer, so no read schema
has a password field.  Card fields use the camelCase names clients
already rely on (``cardNumber``).
"""

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Username and password, used by both signup and login."""

    username: str = Field(..., min_length=1, examples=["bold"])
    password: str = Field(..., min_length=1, examples=["password"])


class CardRead(BaseModel):
    card_number: str = Field(..., alias="cardNumber", examples=["4000123412341234"])
    balance: float = Field(..., examples=[100.0])

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }


class AccountRead(BaseModel):
    """Schema for reading an account from the API."""

    id: int
    username: str
    card: CardRead

    model_config = {
        "from_attributes": True,
    }


class SignupResponse(BaseModel):
    message: str = Field(..., examples=["User created successfully"])
    id: int


class TokenResponse(BaseModel):
    token: str
