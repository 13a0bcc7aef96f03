"""Product domain service."""

import logging
from typing import Optional
from datetime import date
from decimal import Decimal

from gymledger.database.base import Database
from gymledger.domain.entities import Product as ProductEntity, Sale as SaleEntity
from gymledger.domain.errors import NotFoundError, ValidationError, product_not_found

logger = logging.getLogger(__name__)


class ProductService:
    """Service for managing inventory products."""

    def __init__(self, db: Database):
        """Initialize product service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_product(
        self,
        name: str,
        price: Decimal,
        stock_quantity: int = 0,
        min_stock_level: int = 0,
        category: Optional[str] = None,
    ) -> int:
        """Create a product.

        Returns:
            Product ID

        Raises:
            ValidationError: If name is blank or a number is negative
        """
        if not name or not name.strip():
            raise ValidationError("Product name cannot be empty")
        if price < 0:
            raise ValidationError(f"Price cannot be negative: {price}")
        if stock_quantity < 0:
            raise ValidationError(f"Stock quantity cannot be negative: {stock_quantity}")
        if min_stock_level < 0:
            raise ValidationError(f"Minimum stock level cannot be negative: {min_stock_level}")

        product_id = self.db.create_product(
            name=name.strip(),
            price=price,
            stock_quantity=stock_quantity,
            min_stock_level=min_stock_level,
            category=category,
        )
        logger.info("Created product %s (%s) with stock %d", product_id, name, stock_quantity)
        return product_id

    def get_product(self, product_id: int) -> Optional[ProductEntity]:
        """Get product by ID."""
        return self.db.get_product(product_id)

    def list_products(self) -> list[ProductEntity]:
        """List all products."""
        return self.db.list_products()

    def low_stock_products(self) -> list[ProductEntity]:
        """List products at or below their minimum stock level."""
        return [p for p in self.db.list_products() if p.is_low_stock]

    def restock(self, product_id: int, quantity: int) -> ProductEntity:
        """Add units to a product.

        Raises:
            ValidationError: If quantity is not positive
            NotFoundError: If the product doesn't exist
        """
        if quantity <= 0:
            raise ValidationError(f"Restock quantity must be positive: {quantity}")
        if self.db.get_product(product_id) is None:
            raise NotFoundError(product_not_found(product_id))
        self.db.increment_stock(product_id, quantity)
        logger.info("Restocked product %s with %d unit(s)", product_id, quantity)
        return self.db.get_product(product_id)

    def list_sales(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        product_id: Optional[int] = None,
    ) -> list[SaleEntity]:
        """List committed sale lines."""
        return self.db.list_sales(start_date=start_date, end_date=end_date, product_id=product_id)
