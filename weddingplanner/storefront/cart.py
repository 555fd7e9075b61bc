"""Shopping cart held on the client until checkout"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class CartItem:
    id: int
    name: str
    price: float
    type: str = "service"
    vendor_name: str = ""
    description: Optional[str] = None

    @property
    def key(self) -> tuple:
        return (self.id, self.type)


class Cart:
    """Ordered cart; an item is identified by its (id, type) pair"""

    def __init__(self, items: Optional[list[CartItem]] = None):
        self._items: list[CartItem] = []
        for item in items or []:
            self.add_item(item)

    def add_item(self, item: CartItem) -> bool:
        """Add an item; returns False when the same (id, type) is already in the cart"""
        if any(existing.key == item.key for existing in self._items):
            return False
        self._items.append(item)
        return True

    def remove_item(self, item_id: int, item_type: str = "service") -> bool:
        before = len(self._items)
        self._items = [i for i in self._items if i.key != (item_id, item_type)]
        return len(self._items) != before

    def clear(self):
        self._items = []

    @property
    def items(self) -> list[CartItem]:
        return list(self._items)

    @property
    def total(self) -> float:
        return sum(item.price for item in self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)
