"""
Domain models and value objects.

Runtime representation of trading entities: Asset, market data, orders,
fills and positions, plus the timestamp conversion helpers.
"""

from tradewire.core.domain.asset import Asset
from tradewire.core.domain.market import BarInterval, MarketBar, MarketQuote, MarketSnapshot
from tradewire.core.domain.order import (
    LEGAL_EFFECTS,
    Effect,
    Fill,
    Order,
    OrderAction,
    OrderState,
    OrderStatus,
    OrderType,
    PartialOrder,
    Side,
    validate_order_action,
)
from tradewire.core.domain.position import (
    LongPosition,
    LongPositionLot,
    Position,
    ShortPosition,
    ShortPositionLot,
)
from tradewire.core.domain.timestamps import (
    MAX_EPOCH_MS,
    MIN_EPOCH_MS,
    UTC_EPOCH,
    datetime_to_ms,
    is_representable_ms,
    ms_to_datetime,
    now_utc,
    truncate_to_ms,
)

__all__ = [
    # Timestamps module
    "UTC_EPOCH",
    "MIN_EPOCH_MS",
    "MAX_EPOCH_MS",
    "is_representable_ms",
    "ms_to_datetime",
    "datetime_to_ms",
    "truncate_to_ms",
    "now_utc",
    # Asset model
    "Asset",
    # Market models
    "BarInterval",
    "MarketSnapshot",
    "MarketQuote",
    "MarketBar",
    # Order models
    "Side",
    "Effect",
    "OrderType",
    "OrderStatus",
    "LEGAL_EFFECTS",
    "validate_order_action",
    "OrderAction",
    "Order",
    "PartialOrder",
    "OrderState",
    "Fill",
    # Position models
    "LongPositionLot",
    "ShortPositionLot",
    "LongPosition",
    "ShortPosition",
    "Position",
]
