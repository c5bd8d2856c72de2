"""
MarketSnapshot / MarketQuote / MarketBar encode/decode.
"""

from typing import Any, Mapping

from tradewire.core.domain.market import BarInterval, MarketBar, MarketQuote, MarketSnapshot

from .fields import WireObject, datetime_to_ms, encode_enum, ms_to_datetime, put_optional


# =============================================================================
# MARKET SNAPSHOT
# =============================================================================


def encode_market_snapshot(snapshot: MarketSnapshot) -> WireObject:
    """Словарь цен переносится поэлементно в plain JSON объект."""
    return {
        "price": {symbol: price for symbol, price in snapshot.price.items()},
        "timestamp": datetime_to_ms(snapshot.timestamp),
    }


def decode_market_snapshot(wire: Mapping[str, Any]) -> MarketSnapshot:
    return MarketSnapshot(
        price={symbol: price for symbol, price in wire["price"].items()},
        timestamp=ms_to_datetime(wire["timestamp"]),
    )


# =============================================================================
# MARKET QUOTE
# =============================================================================


def encode_market_quote(quote: MarketQuote) -> WireObject:
    wire: WireObject = {
        "symbol": quote.symbol,
        "price": quote.price,
        "timestamp": datetime_to_ms(quote.timestamp),
    }
    put_optional(wire, "volume", quote.volume)
    put_optional(wire, "totalVolume", quote.total_volume)
    put_optional(wire, "bid", quote.bid)
    put_optional(wire, "bidVol", quote.bid_vol)
    put_optional(wire, "ask", quote.ask)
    put_optional(wire, "askVol", quote.ask_vol)
    put_optional(wire, "preClose", quote.pre_close)
    return wire


def decode_market_quote(wire: Mapping[str, Any]) -> MarketQuote:
    return MarketQuote(
        symbol=wire["symbol"],
        price=wire["price"],
        timestamp=ms_to_datetime(wire["timestamp"]),
        volume=wire.get("volume"),
        total_volume=wire.get("totalVolume"),
        bid=wire.get("bid"),
        bid_vol=wire.get("bidVol"),
        ask=wire.get("ask"),
        ask_vol=wire.get("askVol"),
        pre_close=wire.get("preClose"),
    )


# =============================================================================
# MARKET BAR
# =============================================================================


def encode_market_bar(bar: MarketBar) -> WireObject:
    return {
        "symbol": bar.symbol,
        "open": bar.open,
        "high": bar.high,
        "low": bar.low,
        "close": bar.close,
        "volume": bar.volume,
        "timestamp": datetime_to_ms(bar.timestamp),
        "interval": encode_enum(bar.interval),
    }


def decode_market_bar(wire: Mapping[str, Any]) -> MarketBar:
    return MarketBar(
        symbol=wire["symbol"],
        open=wire["open"],
        high=wire["high"],
        low=wire["low"],
        close=wire["close"],
        volume=wire["volume"],
        timestamp=ms_to_datetime(wire["timestamp"]),
        interval=BarInterval(wire["interval"]),
    )
