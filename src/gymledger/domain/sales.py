"""Point-of-sale transaction coordinator.

A cart is committed all-or-nothing: every line is validated before any write,
then each line's stock decrement and sale record are written inside a single
``Database.atomic()`` block. The decrement is a conditional update, so two
terminals selling from the same stale stock figure cannot both succeed.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Union

from gymledger.database.base import Database
from gymledger.domain.entities import CartLine, PaymentMethod, Product, SaleReceipt
from gymledger.domain.errors import (
    InsufficientStockError,
    NotFoundError,
    ValidationError,
    product_not_found,
)

logger = logging.getLogger(__name__)


def merge_cart(cart: Iterable[Union[CartLine, tuple[int, int]]]) -> list[CartLine]:
    """Validate quantities and merge lines for the same product.

    Raises:
        ValidationError: If the cart is empty or a quantity is not positive
    """
    merged: dict[int, int] = {}
    for line in cart:
        if not isinstance(line, CartLine):
            line = CartLine(*line)
        if line.quantity <= 0:
            raise ValidationError(
                f"Quantity must be positive for product {line.product_id}: {line.quantity}"
            )
        merged[line.product_id] = merged.get(line.product_id, 0) + line.quantity
    if not merged:
        raise ValidationError("Cart is empty")
    return [CartLine(product_id, quantity) for product_id, quantity in merged.items()]


class SaleService:
    """Service that commits point-of-sale carts."""

    def __init__(self, db: Database):
        """Initialize sale service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validate(self, lines: list[CartLine]) -> list[tuple[Product, int]]:
        validated = []
        for line in lines:
            product = self.db.get_product(line.product_id)
            if product is None:
                raise NotFoundError(product_not_found(line.product_id))
            if line.quantity > product.stock_quantity:
                raise InsufficientStockError(product.id, line.quantity, product.stock_quantity)
            validated.append((product, line.quantity))
        return validated

    def commit_sale(
        self,
        cart: Iterable[Union[CartLine, tuple[int, int]]],
        now: datetime,
        method: PaymentMethod = PaymentMethod.CASH,
    ) -> SaleReceipt:
        """Commit a multi-line sale.

        Args:
            cart: (product_id, quantity) lines; repeated products are merged
            now: Sale timestamp
            method: Payment method for every line

        Returns:
            SaleReceipt with one Sale per product and the cart total

        Raises:
            ValidationError: If the cart is empty or a quantity is not positive
            NotFoundError: If a product doesn't exist
            InsufficientStockError: If any line exceeds stock, including when
                another terminal drained it after validation. Nothing is written.
        """
        lines = merge_cart(cart)
        validated = self._validate(lines)

        sale_ids = []
        try:
            with self.db.atomic():
                for product, quantity in validated:
                    if not self.db.decrement_stock(product.id, quantity):
                        raise InsufficientStockError(product.id, quantity)
                    sale_ids.append(
                        self.db.create_sale(
                            product_id=product.id,
                            quantity=quantity,
                            total_price=product.price * quantity,
                            method=method,
                            sold_at=now,
                        )
                    )
        except InsufficientStockError as e:
            logger.warning("Sale rolled back: %s", e)
            raise

        committed = tuple(self.db.get_sale(sale_id) for sale_id in sale_ids)
        total = sum((s.total_price for s in committed), Decimal("0"))
        logger.info("Committed sale of %d line(s), total %s", len(committed), total)
        return SaleReceipt(sales=committed, total=total)
