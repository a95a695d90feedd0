"""
Purchase endpoint.

Buys one unit of an item with the authenticated account's card.  The
receipt reports the cashback credited and the resulting balance.
"""

from fastapi import APIRouter, Depends

from upoint_purchase_api.app.core.config import Settings, get_settings
from upoint_purchase_api.app.core.db import Database, get_db
from upoint_purchase_api.app.core.security import get_current_account_id
from upoint_purchase_api.app.schemas.purchase import PurchaseRequest, PurchaseResponse
from upoint_purchase_api.app.services.purchase_service import PurchaseService


router = APIRouter()


@router.post(
    "/purchase",
    response_model=PurchaseResponse,
    summary="Purchase an item",
    responses={
        400: {"description": "Item is out of stock or balance is insufficient"},
        404: {"description": "Item not found"},
        500: {"description": "Internal server error"},
    },
)
async def purchase_item(
    body: PurchaseRequest,
    account_id: int = Depends(get_current_account_id),
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> PurchaseResponse:
    """Buy one unit of ``itemId``.

    The price is deducted from the card balance and
    ``price * cashback_rate`` is credited back.  Stock and balance
    checks and both writes happen in one transaction.
    """
    receipt = await PurchaseService.purchase(
        db, account_id, body.item_id, cashback_rate=settings.cashback_rate
    )
    return PurchaseResponse(
        message="Purchase successful",
        item_purchased=receipt.item_name,
        cashback_received=float(receipt.cashback),
        new_balance=float(receipt.new_balance),
    )
