"""
Wire ↔ runtime conversion.

encode_*: runtime модель → JSON-совместимый dict (camelCase, epoch ms)
decode_*: валидный wire dict → runtime модель (aware datetime, dict maps)
"""

from .asset import decode_asset, encode_asset
from .codec import CODECS, WireCodec, get_codec
from .market import (
    decode_market_bar,
    decode_market_quote,
    decode_market_snapshot,
    encode_market_bar,
    encode_market_quote,
    encode_market_snapshot,
)
from .order import (
    decode_fill,
    decode_order,
    decode_order_action,
    decode_order_state,
    decode_partial_order,
    encode_fill,
    encode_order,
    encode_order_action,
    encode_order_state,
    encode_partial_order,
)
from .position import (
    decode_long_position,
    decode_position,
    decode_short_position,
    encode_long_position,
    encode_position,
    encode_short_position,
)

__all__ = [
    # Codec registry
    "WireCodec",
    "CODECS",
    "get_codec",
    # Asset
    "encode_asset",
    "decode_asset",
    # Market
    "encode_market_snapshot",
    "decode_market_snapshot",
    "encode_market_quote",
    "decode_market_quote",
    "encode_market_bar",
    "decode_market_bar",
    # Orders
    "encode_order_action",
    "decode_order_action",
    "encode_order",
    "decode_order",
    "encode_partial_order",
    "decode_partial_order",
    "encode_order_state",
    "decode_order_state",
    "encode_fill",
    "decode_fill",
    # Positions
    "encode_long_position",
    "decode_long_position",
    "encode_short_position",
    "decode_short_position",
    "encode_position",
    "decode_position",
]
