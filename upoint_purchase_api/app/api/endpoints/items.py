"""
Catalog endpoint.
"""

from typing import List

from fastapi import APIRouter, Depends

from upoint_purchase_api.app.core.db import Database, get_db
from upoint_purchase_api.app.core.security import get_current_account_id
from upoint_purchase_api.app.schemas.item import ItemRead
from upoint_purchase_api.app.services.catalog_service import CatalogService


router = APIRouter()


@router.get(
    "/items",
    response_model=List[ItemRead],
    summary="List catalog items",
    dependencies=[Depends(get_current_account_id)],
    responses={500: {"description": "Internal server error"}},
)
async def list_items(
    db: Database = Depends(get_db),
) -> List[ItemRead]:
    """Return every item with its price and remaining quantity."""
    return await CatalogService.list_items(db)
