"""
Account endpoints: signup, login and the current account.

Signup and login are public.  ``/me`` requires a bearer token issued
by ``/login``; the token's account id selects the account returned.
"""

from fastapi import APIRouter, Depends, status

from upoint_purchase_api.app.core.config import Settings, get_settings
from upoint_purchase_api.app.core.db import Database, get_db
from upoint_purchase_api.app.core.security import get_current_account_id, issue_token
from upoint_purchase_api.app.schemas.account import AccountRead, Credentials, SignupResponse, TokenResponse
from upoint_purchase_api.app.services.account_service import AccountService


router = APIRouter()


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new account",
    responses={400: {"description": "Username already exists"}, 500: {"description": "Internal server error"}},
)
async def signup(
    credentials: Credentials,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> SignupResponse:
    """Register a user and issue them a card with the starting balance."""
    account_id = await AccountService.create_account(
        db,
        credentials.username,
        credentials.password,
        starting_balance=settings.starting_balance,
    )
    return SignupResponse(message="User created successfully", id=account_id)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log in an existing user",
    responses={401: {"description": "Invalid username or password"}},
)
async def login(
    credentials: Credentials,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    """Check the credentials and return a bearer token valid for one hour."""
    account_id = await AccountService.authenticate(db, credentials.username, credentials.password)
    token = issue_token(
        account_id,
        expires_delta=settings.access_token_expire_minutes * 60,
        secret_key=settings.secret_key,
    )
    return TokenResponse(token=token)


@router.get(
    "/me",
    response_model=AccountRead,
    summary="Get the current account",
    responses={
        401: {"description": "Missing or malformed token"},
        403: {"description": "Invalid or expired token"},
        404: {"description": "User not found"},
    },
)
async def read_me(
    account_id: int = Depends(get_current_account_id),
    db: Database = Depends(get_db),
) -> AccountRead:
    return await AccountService.get_account(db, account_id)
