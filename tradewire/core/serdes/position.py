"""
LongPosition / ShortPosition / Position encode/decode.

Словари long/short перестраиваются поэлементно; вложенные позиции
кодируются теми же функциями, что и самостоятельные.
"""

from typing import Any, Mapping

from tradewire.core.domain.position import (
    LongPosition,
    LongPositionLot,
    Position,
    ShortPosition,
    ShortPositionLot,
)

from .fields import WireObject, datetime_to_ms, ms_to_datetime


# =============================================================================
# LONG POSITION
# =============================================================================


def encode_long_position(pos: LongPosition) -> WireObject:
    return {
        "quantity": pos.quantity,
        "totalCost": pos.total_cost,
        "realisedPnL": pos.realised_pnl,
        "lots": [
            {"quantity": lot.quantity, "price": lot.price, "totalCost": lot.total_cost}
            for lot in pos.lots
        ],
        "modified": datetime_to_ms(pos.modified),
    }


def decode_long_position(wire: Mapping[str, Any]) -> LongPosition:
    return LongPosition(
        quantity=wire["quantity"],
        total_cost=wire["totalCost"],
        realised_pnl=wire["realisedPnL"],
        lots=tuple(
            LongPositionLot(quantity=lot["quantity"], price=lot["price"], total_cost=lot["totalCost"])
            for lot in wire["lots"]
        ),
        modified=ms_to_datetime(wire["modified"]),
    )


# =============================================================================
# SHORT POSITION
# =============================================================================


def encode_short_position(pos: ShortPosition) -> WireObject:
    return {
        "quantity": pos.quantity,
        "totalProceeds": pos.total_proceeds,
        "realisedPnL": pos.realised_pnl,
        "lots": [
            {"quantity": lot.quantity, "price": lot.price, "totalProceeds": lot.total_proceeds}
            for lot in pos.lots
        ],
        "modified": datetime_to_ms(pos.modified),
    }


def decode_short_position(wire: Mapping[str, Any]) -> ShortPosition:
    return ShortPosition(
        quantity=wire["quantity"],
        total_proceeds=wire["totalProceeds"],
        realised_pnl=wire["realisedPnL"],
        lots=tuple(
            ShortPositionLot(
                quantity=lot["quantity"], price=lot["price"], total_proceeds=lot["totalProceeds"]
            )
            for lot in wire["lots"]
        ),
        modified=ms_to_datetime(wire["modified"]),
    )


# =============================================================================
# POSITION
# =============================================================================


def encode_position(pos: Position) -> WireObject:
    """
    Runtime Position → wire dict.

    long/short опускаются, если None; пустой словарь кодируется как {}.
    """
    wire: WireObject = {
        "cash": pos.cash,
        "totalCommission": pos.total_commission,
        "realisedPnL": pos.realised_pnl,
        "modified": datetime_to_ms(pos.modified),
    }
    if pos.long is not None:
        wire["long"] = {symbol: encode_long_position(p) for symbol, p in pos.long.items()}
    if pos.short is not None:
        wire["short"] = {symbol: encode_short_position(p) for symbol, p in pos.short.items()}
    return wire


def decode_position(wire: Mapping[str, Any]) -> Position:
    """Валидный wire dict → runtime Position (вложенные позиции декодируются рекурсивно)."""
    long = None
    if "long" in wire:
        long = {symbol: decode_long_position(p) for symbol, p in wire["long"].items()}
    short = None
    if "short" in wire:
        short = {symbol: decode_short_position(p) for symbol, p in wire["short"].items()}

    return Position(
        cash=wire["cash"],
        total_commission=wire["totalCommission"],
        realised_pnl=wire["realisedPnL"],
        modified=ms_to_datetime(wire["modified"]),
        long=long,
        short=short,
    )
