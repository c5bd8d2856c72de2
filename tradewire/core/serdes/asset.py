"""
Asset encode/decode.
"""

from typing import Any, Mapping

from tradewire.core.domain.asset import Asset

from .fields import WireObject, datetime_to_ms, optional_datetime, put_optional


def encode_asset(asset: Asset) -> WireObject:
    """Runtime Asset → wire dict (отсутствующие поля опускаются)."""
    wire: WireObject = {
        "symbol": asset.symbol,
        "currency": asset.currency,
    }
    put_optional(wire, "type", asset.type)
    put_optional(wire, "name", asset.name)
    put_optional(wire, "exchange", asset.exchange)
    put_optional(wire, "lotSize", asset.lot_size)
    put_optional(wire, "tickSize", asset.tick_size)
    put_optional(wire, "validFrom", asset.valid_from, datetime_to_ms)
    put_optional(wire, "validUntil", asset.valid_until, datetime_to_ms)
    return wire


def decode_asset(wire: Mapping[str, Any]) -> Asset:
    """Валидный wire dict → runtime Asset."""
    return Asset(
        symbol=wire["symbol"],
        currency=wire["currency"],
        type=wire.get("type"),
        name=wire.get("name"),
        exchange=wire.get("exchange"),
        lot_size=wire.get("lotSize"),
        tick_size=wire.get("tickSize"),
        valid_from=optional_datetime(wire, "validFrom"),
        valid_until=optional_datetime(wire, "validUntil"),
    )
