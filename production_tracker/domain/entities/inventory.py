"""
Inventory Entities - On-hand consumables and drawdown deltas.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class InventoryItem:
    """Current on-hand quantity of a consumable."""

    item: str
    on_hand: float
    uom: str = ""

    def to_dict(self) -> dict:
        return {'item': self.item, 'on_hand': self.on_hand, 'uom': self.uom}


@dataclass(frozen=True)
class MaterialDraw:
    """Quantity of one consumable to deduct from inventory."""

    item: str
    qty: float

    def to_dict(self) -> dict:
        return {'item': self.item, 'qty': self.qty}
