# storefront/models/order.py
from decimal import Decimal
from typing import List, Optional
from pydantic import Field
from .base import CanonicalModel, EntityId
from .product import Product, ProductVariant


class OrderItem(CanonicalModel):
    """Individual item in an order"""
    id: EntityId = 0
    product: Product = Field(default_factory=Product)
    variant: Optional[ProductVariant] = None
    quantity: int = Field(default=0, ge=0)
    unit_price: str = "0.00"
    subtotal: str = "0.00"

    @property
    def total_price(self) -> Decimal:
        return Decimal(self.unit_price) * self.quantity

class Order(CanonicalModel):
    """Placed order, as listed in the order history"""
    id: EntityId = 0
    order_number: str = ""
    status: str = ""
    items: List[OrderItem] = []
    subtotal: str = "0.00"
    total: str = "0.00"
    created_at: str = ""

    @property
    def is_completed(self) -> bool:
        return self.status in ("delivered", "refunded")
