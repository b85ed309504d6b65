# storefront/domain/cart.py
"""
Koszyk klienta jako czysty agregat domenowy (bez I/O).

Pozycje sa identyfikowane krotka (product_id, size, color). Cena pochodzi ze
snapshotu produktu zrobionego w chwili dodania, nie z katalogu.
"""
import uuid
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class ProductSnapshot(BaseModel):
    id: int
    name: str
    price: Decimal
    image: Optional[str] = None


class CartLineItem(BaseModel):
    id: str
    product_id: int
    product: ProductSnapshot
    quantity: int = Field(..., ge=1)
    size: Optional[str] = None
    color: Optional[str] = None

    def matches(self, product_id: int, size: Optional[str], color: Optional[str]) -> bool:
        return self.product_id == product_id and self.size == size and self.color == color


class CartState(BaseModel):
    """Forma zapisywana w store (JSON)."""

    items: List[CartLineItem] = Field(default_factory=list)
    is_open: bool = False


class Cart:
    def __init__(self, state: CartState | None = None):
        self.state = state or CartState()

    @property
    def items(self) -> List[CartLineItem]:
        return self.state.items

    @property
    def is_open(self) -> bool:
        return self.state.is_open

    def _find(self, product_id: int, size: Optional[str], color: Optional[str]) -> CartLineItem | None:
        for item in self.state.items:
            if item.matches(product_id, size, color):
                return item
        return None

    def add_item(
        self,
        product: ProductSnapshot,
        quantity: int = 1,
        size: Optional[str] = None,
        color: Optional[str] = None,
    ) -> CartLineItem | None:
        existing = self._find(product.id, size, color)
        # ilosc < 1 niczego nie zmienia
        if quantity < 1:
            return existing
        if existing:
            existing.quantity += quantity
            return existing

        item = CartLineItem(
            id=uuid.uuid4().hex,
            product_id=product.id,
            product=product,
            quantity=quantity,
            size=size,
            color=color,
        )
        self.state.items.append(item)
        return item

    def remove_item(self, product_id: int, size: Optional[str] = None, color: Optional[str] = None) -> None:
        self.state.items = [i for i in self.state.items if not i.matches(product_id, size, color)]

    def update_quantity(
        self,
        product_id: int,
        quantity: int,
        size: Optional[str] = None,
        color: Optional[str] = None,
    ) -> None:
        if quantity <= 0:
            self.remove_item(product_id, size, color)
            return

        item = self._find(product_id, size, color)
        if item:
            item.quantity = quantity

    def clear(self) -> None:
        self.state.items = []

    def toggle(self) -> bool:
        self.state.is_open = not self.state.is_open
        return self.state.is_open

    def total_items(self) -> int:
        return sum(i.quantity for i in self.state.items)

    def total_price(self) -> Decimal:
        return sum((i.product.price * i.quantity for i in self.state.items), Decimal("0.00"))

    # serializacja do store
    def to_json(self) -> str:
        return self.state.model_dump_json()

    @classmethod
    def from_json(cls, raw: str | bytes | None) -> "Cart":
        if not raw:
            return cls()
        return cls(CartState.model_validate_json(raw))
