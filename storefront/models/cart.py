# storefront/models/cart.py
from typing import Optional, List
from pydantic import Field
from .base import CanonicalModel, EntityId
from .product import Product, ProductVariant


class CartItem(CanonicalModel):
    """One line of the shopping cart"""
    id: EntityId = 0
    product: Product = Field(default_factory=Product)
    variant: Optional[ProductVariant] = None
    quantity: int = Field(default=0, ge=0)
    unit_price: str = "0.00"
    subtotal: str = "0.00"

class Cart(CanonicalModel):
    """Shopping cart as shown to the user"""
    items: List[CartItem] = []
    items_count: int = 0
    subtotal: str = "0.00"
    total: str = "0.00"

    def get_item(self, item_id: EntityId) -> Optional[CartItem]:
        return next((item for item in self.items if item.id == item_id), None)

    @property
    def is_empty(self) -> bool:
        return not self.items

EMPTY_CART = Cart()
