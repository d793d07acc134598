"""
Material Drawdown - Consumables drawn in proportion to installed quantity.

calc_material_drawdown produces a delta; apply_drawdown returns new
inventory with the delta subtracted (clamped at zero). Applying the
same delta twice deducts twice, so callers apply each event's delta
exactly once.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Sequence, Tuple

from production_tracker.domain.entities import Assembly, InventoryItem, MaterialDraw
from .policy import DRAWDOWN_DECIMALS


def _round_half_up(value: float, decimals: int) -> float:
    """Round halves away from zero (0.125 -> 0.13), not to even."""
    step = Decimal(1).scaleb(-decimals)
    return float(Decimal(str(value)).quantize(step, rounding=ROUND_HALF_UP))


def calc_material_drawdown(
    assembly: Assembly,
    units_installed: float,
    decimals: int = DRAWDOWN_DECIMALS,
) -> List[MaterialDraw]:
    """
    Material quantities consumed by installing units_installed.

    Returns:
        One MaterialDraw per requirement; [] when the assembly has no
        requirements or no budgeted quantity
    """
    if not assembly.materials or assembly.budgeted_qty == 0:
        return []

    ratio = units_installed / assembly.budgeted_qty
    return [
        MaterialDraw(item=m.item, qty=_round_half_up(m.qty_required * ratio, decimals))
        for m in assembly.materials
    ]


def apply_drawdown(
    inventory: Sequence[InventoryItem],
    draws: Iterable[MaterialDraw],
) -> Tuple[InventoryItem, ...]:
    """
    Subtract draws from inventory without mutating it.

    Items with no matching draw are returned unchanged. When a draw
    list names an item twice, the first entry is used.
    """
    by_item = {}
    for draw in draws:
        by_item.setdefault(draw.item, draw)

    result = []
    for inv in inventory:
        draw = by_item.get(inv.item)
        if draw is None:
            result.append(inv)
        else:
            result.append(InventoryItem(
                item=inv.item,
                on_hand=max(0.0, inv.on_hand - draw.qty),
                uom=inv.uom,
            ))
    return tuple(result)
