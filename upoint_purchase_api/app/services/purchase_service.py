"""
Business logic for purchases.

A purchase buys one unit of one item with the account's card balance
and credits a cashback share of the price back to the card.  The
account and item checks and both writes run inside a single
``BEGIN IMMEDIATE`` transaction: concurrent purchases are serialised,
so stock cannot be oversold and balance updates cannot be lost, and a
failure after the first write leaves neither record changed.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from ..core.db import Database
from ..core.errors import AccountNotFound, InsufficientBalance, ItemNotFound, OutOfStock


logger = logging.getLogger(__name__)

DEFAULT_CASHBACK_RATE = Decimal("0.03")


@dataclass
class PurchaseReceipt:
    item_name: str
    cashback: Decimal
    new_balance: Decimal


def settle(balance: Decimal, price: Decimal, cashback_rate: Decimal) -> tuple[Decimal, Decimal]:
    """Return ``(cashback, new_balance)`` for paying ``price`` out of ``balance``."""
    cashback = price * cashback_rate
    return cashback, balance - price + cashback


class PurchaseService:
    """Service executing single‑item purchases."""

    @classmethod
    async def purchase(
        cls,
        db: Database,
        account_id: int,
        item_id: int,
        cashback_rate: Decimal = DEFAULT_CASHBACK_RATE,
    ) -> PurchaseReceipt:
        """Buy one unit of ``item_id`` for ``account_id``.

        Raises ``AccountNotFound`` or ``ItemNotFound`` when either record
        is missing, ``OutOfStock`` when the item quantity is below one
        and ``InsufficientBalance`` when the card balance is below the
        price.  On any error nothing is written.
        """
        with db.transaction() as cursor:
            account = cursor.execute(
                "SELECT id, balance FROM accounts WHERE id = ?", (account_id,)
            ).fetchone()
            if not account:
                raise AccountNotFound()
            item = cursor.execute(
                "SELECT id, name, price, quantity FROM items WHERE id = ?", (item_id,)
            ).fetchone()
            if not item:
                raise ItemNotFound()

            if item["quantity"] < 1:
                logger.info("Account %s: item %s is out of stock", account_id, item_id)
                raise OutOfStock()
            balance = Decimal(account["balance"])
            price = Decimal(item["price"])
            if balance < price:
                logger.info(
                    "Account %s: balance %s is below price %s of item %s",
                    account_id, balance, price, item_id,
                )
                raise InsufficientBalance()

            cashback, new_balance = settle(balance, price, cashback_rate)
            cursor.execute(
                "UPDATE accounts SET balance = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                (str(new_balance), account_id),
            )
            cursor.execute(
                "UPDATE items SET quantity = quantity - 1, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                (item_id,),
            )

        logger.info(
            "Account %s bought item %s for %s, cashback %s, new balance %s",
            account_id, item_id, price, cashback, new_balance,
        )
        return PurchaseReceipt(item_name=item["name"], cashback=cashback, new_balance=new_balance)
