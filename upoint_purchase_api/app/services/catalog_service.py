"""
Read access to the item catalog.

Items are created outside this service (seed or import tooling); the
API only lists them and the purchase service decrements quantities.
"""

from decimal import Decimal
from typing import List

from ..core.db import Database
from ..schemas.item import ItemRead


class CatalogService:
    """Service for reading catalog items."""

    @classmethod
    async def list_items(cls, db: Database) -> List[ItemRead]:
        """Return every item ordered by id."""
        with db.cursor() as cursor:
            rows = cursor.execute(
                "SELECT id, name, price, quantity FROM items ORDER BY id"
            ).fetchall()
        return [
            ItemRead(
                id=row["id"],
                name=row["name"],
                price=float(Decimal(row["price"])),
                quantity=row["quantity"],
            )
            for row in rows
        ]
