"""
Тесты encode/decode (wire ↔ runtime)

Проверяет:
1. Конверсию timestamps (epoch ms ↔ aware datetime)
2. Перестройку словарей (price, long, short)
3. Опускание отсутствующих опциональных полей (без null)
4. Round-trip: decode(encode(r)) == r и encode(decode(w)) == w
5. Кодирование пары side/effect как единого целого
6. WireCodec: parse / parse_json / dump_json / lost_fields
7. parse: timestamps вне диапазона datetime дают структурную ошибку
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from tradewire.core.contracts import StructuralValidationError
from tradewire.core.domain import (
    Asset,
    BarInterval,
    Effect,
    Fill,
    LongPosition,
    LongPositionLot,
    MarketBar,
    MarketQuote,
    MarketSnapshot,
    Order,
    OrderState,
    OrderStatus,
    OrderType,
    PartialOrder,
    Position,
    ShortPosition,
    ShortPositionLot,
    Side,
    truncate_to_ms,
)
from tradewire.core.serdes import (
    CODECS,
    decode_asset,
    decode_fill,
    decode_market_bar,
    decode_market_quote,
    decode_market_snapshot,
    decode_order,
    decode_order_action,
    decode_order_state,
    decode_partial_order,
    decode_position,
    encode_asset,
    encode_fill,
    encode_market_bar,
    encode_market_quote,
    encode_market_snapshot,
    encode_order,
    encode_order_state,
    encode_partial_order,
    encode_position,
    get_codec,
)

TS = datetime(2021, 1, 1, tzinfo=timezone.utc)
TS_MS = 1609459200000


# =============================================================================
# ASSET
# =============================================================================


class TestAssetSerdes:
    """Asset: даты и опциональные поля"""

    def test_encode_with_dates(self) -> None:
        later = TS + timedelta(days=1)
        wire = encode_asset(Asset(symbol="BTCUSDT", currency="USDT", valid_from=TS, valid_until=later))
        assert wire == {
            "symbol": "BTCUSDT",
            "currency": "USDT",
            "validFrom": TS_MS,
            "validUntil": TS_MS + 86400000,
        }

    def test_decode_with_dates(self) -> None:
        asset = decode_asset({"symbol": "BTCUSDT", "currency": "USDT", "validFrom": TS_MS})
        assert asset.valid_from == TS
        assert asset.valid_from.tzinfo is not None

    def test_missing_valid_until_stays_absent(self) -> None:
        """Отсутствующее поле не превращается в sentinel и не пишется как null"""
        asset = decode_asset({"symbol": "AAPL", "currency": "USD", "validFrom": TS_MS})
        assert asset.valid_until is None

        wire = encode_asset(asset)
        assert "validUntil" not in wire
        assert None not in wire.values()

    def test_full_round_trip(self) -> None:
        asset = Asset(
            symbol="AAPL",
            currency="USD",
            type="stock",
            name="Apple Inc.",
            exchange="NASDAQ",
            lot_size=100,
            tick_size=0.01,
            valid_from=TS,
            valid_until=TS + timedelta(days=365),
        )
        assert decode_asset(encode_asset(asset)) == asset


# =============================================================================
# MARKET DATA
# =============================================================================


class TestMarketSerdes:
    """MarketSnapshot / MarketQuote / MarketBar"""

    def test_snapshot_map_fidelity(self) -> None:
        snapshot = decode_market_snapshot({"price": {"BTCUSDT": 50000, "ETHUSDT": 3000}, "timestamp": TS_MS})
        assert isinstance(snapshot.price, dict)
        assert len(snapshot.price) == 2
        assert snapshot.price["BTCUSDT"] == 50000
        assert snapshot.get("ETHUSDT") == 3000

        wire = encode_market_snapshot(snapshot)
        assert set(wire["price"]) == {"BTCUSDT", "ETHUSDT"}
        assert wire["price"] == {"BTCUSDT": 50000, "ETHUSDT": 3000}
        assert wire["timestamp"] == TS_MS

    def test_snapshot_round_trip(self) -> None:
        snapshot = MarketSnapshot(price={"BTCUSDT": 50000.0, "ETHUSDT": 3000.0}, timestamp=TS)
        assert decode_market_snapshot(encode_market_snapshot(snapshot)) == snapshot

    def test_quote_round_trip(self) -> None:
        quote = MarketQuote(
            symbol="BTCUSDT",
            price=50000,
            volume=100,
            timestamp=TS,
            bid=49999,
            bid_vol=10,
            ask=50001,
            ask_vol=20,
        )
        wire = encode_market_quote(quote)
        assert wire["timestamp"] == TS_MS
        assert wire["bidVol"] == 10
        assert "preClose" not in wire
        assert "totalVolume" not in wire
        assert decode_market_quote(wire) == quote

    def test_bar_interval_token(self) -> None:
        bar = MarketBar(
            symbol="GOOGL",
            open=2800.0,
            high=2850.0,
            low=2795.0,
            close=2835.5,
            volume=150000,
            timestamp=TS,
            interval=BarInterval.MONTH_1,
        )
        wire = encode_market_bar(bar)
        assert wire["interval"] == "1M"
        assert isinstance(wire["interval"], str)
        assert decode_market_bar(wire) == bar


# =============================================================================
# ORDERS
# =============================================================================


@pytest.fixture
def order_wire():
    return {
        "id": "order-12345",
        "symbol": "TSLA",
        "side": "BUY",
        "effect": "OPEN_LONG",
        "type": "LIMIT",
        "quantity": 100,
        "price": 250.5,
        "created": TS_MS,
    }


class TestOrderSerdes:
    """Order / PartialOrder / OrderState / Fill"""

    def test_decode_order(self, order_wire) -> None:
        order = decode_order(order_wire)
        assert order.id == "order-12345"
        assert order.side is Side.BUY
        assert order.effect is Effect.OPEN_LONG
        assert order.type is OrderType.LIMIT
        assert order.created == TS
        assert order.stop_price is None

    def test_encode_decode_identity(self, order_wire) -> None:
        assert encode_order(decode_order(order_wire)) == order_wire

    def test_encoded_tokens_are_plain_strings(self, order_wire) -> None:
        wire = encode_order(decode_order(order_wire))
        assert type(wire["side"]) is str
        assert type(wire["effect"]) is str
        assert type(wire["type"]) is str
        json.dumps(wire)

    def test_encode_rejects_unvalidated_illegal_pair(self) -> None:
        """Модель, созданная в обход валидации, не попадает в wire"""
        order = Order.model_construct(
            id="order-1",
            symbol="TSLA",
            side=Side.BUY,
            effect=Effect.CLOSE_LONG,
            type=OrderType.MARKET,
            quantity=1.0,
            price=None,
            stop_price=None,
            created=None,
        )
        with pytest.raises(ValueError, match="not legal for side"):
            encode_order(order)

    def test_decode_order_action_rejects_illegal_pair(self) -> None:
        with pytest.raises(ValueError):
            decode_order_action({"side": "SELL", "effect": "CLOSE_SHORT"})

    def test_decode_order_action(self) -> None:
        assert decode_order_action({"side": "SELL", "effect": "OPEN_SHORT"}) == {
            "side": Side.SELL,
            "effect": Effect.OPEN_SHORT,
        }

    def test_partial_order_only_set_fields(self) -> None:
        patch = PartialOrder(id="order-1", quantity=150, side=Side.SELL)
        assert encode_partial_order(patch) == {"id": "order-1", "side": "SELL", "quantity": 150}

    def test_partial_order_round_trip(self) -> None:
        wire = {"id": "order-1", "type": "STOP_LIMIT", "stopPrice": 240.0, "created": TS_MS}
        patch = decode_partial_order(wire)
        assert patch.type is OrderType.STOP_LIMIT
        assert patch.side is None
        assert encode_partial_order(patch) == wire

    def test_order_state_round_trip(self) -> None:
        state = OrderState(
            id="order-1",
            symbol="TSLA",
            side=Side.SELL,
            effect=Effect.CLOSE_LONG,
            type=OrderType.STOP,
            quantity=100,
            stop_price=240.0,
            filled_quantity=100,
            remaining_quantity=0,
            status=OrderStatus.FILLED,
            modified=TS + timedelta(seconds=5),
        )
        wire = encode_order_state(state)
        assert wire["status"] == "FILLED"
        assert wire["modified"] == TS_MS + 5000
        assert "created" not in wire
        assert "price" not in wire
        assert decode_order_state(wire) == state

    def test_fill_round_trip(self) -> None:
        fill = Fill(
            id="fill-98765",
            order_id="order-12345",
            symbol="TSLA",
            side=Side.BUY,
            effect=Effect.CLOSE_SHORT,
            quantity=50,
            price=250.5,
            commission=2.5,
            created=TS,
        )
        wire = encode_fill(fill)
        assert wire["orderId"] == "order-12345"
        assert wire["created"] == TS_MS
        assert decode_fill(wire) == fill


# =============================================================================
# POSITIONS
# =============================================================================


@pytest.fixture
def position() -> Position:
    return Position(
        cash=10000.0,
        total_commission=15.0,
        realised_pnl=50.0,
        modified=TS,
        long={
            "AAPL": LongPosition(
                quantity=100,
                total_cost=15000.0,
                realised_pnl=100.0,
                lots=[
                    LongPositionLot(quantity=60, price=148.0, total_cost=8880.0),
                    LongPositionLot(quantity=40, price=153.0, total_cost=6120.0),
                ],
                modified=TS,
            )
        },
        short={
            "TSLA": ShortPosition(
                quantity=50,
                total_proceeds=12500.0,
                realised_pnl=-50.0,
                lots=[ShortPositionLot(quantity=50, price=250.0, total_proceeds=12500.0)],
                modified=TS,
            )
        },
    )


class TestPositionSerdes:
    """Position с вложенными long/short"""

    def test_camel_case_keys(self, position: Position) -> None:
        wire = encode_position(position)
        assert "totalCommission" in wire
        assert "realisedPnL" in wire
        assert "totalCost" in wire["long"]["AAPL"]
        assert "totalProceeds" in wire["short"]["TSLA"]
        assert "totalProceeds" in wire["short"]["TSLA"]["lots"][0]
        assert wire["modified"] == TS_MS

    def test_lots_keep_order(self, position: Position) -> None:
        wire = encode_position(position)
        assert [lot["price"] for lot in wire["long"]["AAPL"]["lots"]] == [148.0, 153.0]
        decoded = decode_position(wire)
        assert [lot.price for lot in decoded.long["AAPL"].lots] == [148.0, 153.0]

    def test_round_trip(self, position: Position) -> None:
        assert decode_position(encode_position(position)) == position

    def test_json_round_trip(self, position: Position) -> None:
        text = json.dumps(encode_position(position))
        assert decode_position(json.loads(text)) == position

    def test_absent_maps_omitted(self) -> None:
        pos = Position(cash=1.0, total_commission=0.0, realised_pnl=0.0, modified=TS)
        wire = encode_position(pos)
        assert "long" not in wire
        assert "short" not in wire
        assert decode_position(wire).long is None

    def test_empty_map_kept(self) -> None:
        """Пустой словарь и отсутствие поля различаются"""
        pos = Position(cash=1.0, total_commission=0.0, realised_pnl=0.0, modified=TS, long={})
        wire = encode_position(pos)
        assert wire["long"] == {}
        assert decode_position(wire).long == {}


# =============================================================================
# TIMESTAMP FIDELITY
# =============================================================================


def test_sub_millisecond_precision_truncated() -> None:
    """Субмиллисекундная часть не переживает wire"""
    precise = TS + timedelta(microseconds=123456)
    quote = MarketQuote(symbol="AAPL", price=1.0, timestamp=precise)
    decoded = decode_market_quote(encode_market_quote(quote))
    assert decoded.timestamp == truncate_to_ms(precise)
    assert decoded.timestamp != precise


def test_non_utc_instant_preserved() -> None:
    msk = timezone(timedelta(hours=3))
    quote = MarketQuote(symbol="AAPL", price=1.0, timestamp=datetime(2021, 1, 1, 3, tzinfo=msk))
    assert encode_market_quote(quote)["timestamp"] == TS_MS
    # aware datetimes сравниваются как моменты времени
    assert decode_market_quote(encode_market_quote(quote)) == quote


# =============================================================================
# WIRE CODEC
# =============================================================================


class TestWireCodec:
    """WireCodec и реестр CODECS"""

    def test_registry_covers_all_entities(self) -> None:
        assert set(CODECS) == {
            "asset",
            "market_snapshot",
            "market_quote",
            "market_bar",
            "order",
            "partial_order",
            "order_state",
            "fill",
            "long_position",
            "short_position",
            "position",
        }

    def test_get_codec_unknown(self) -> None:
        with pytest.raises(KeyError, match="Unknown entity"):
            get_codec("trade")

    def test_parse_validates(self, order_wire) -> None:
        order_wire["effect"] = "CLOSE_LONG"
        with pytest.raises(StructuralValidationError):
            get_codec("order").parse(order_wire)

    def test_parse_json(self, order_wire) -> None:
        order = get_codec("order").parse_json(json.dumps(order_wire))
        assert isinstance(order, Order)
        assert order.created == TS

    def test_dump_json(self, order_wire) -> None:
        codec = get_codec("order")
        text = codec.dump_json(codec.parse(order_wire))
        assert json.loads(text) == order_wire

    def test_dump_json_rejects_nan(self) -> None:
        quote = MarketQuote.model_construct(symbol="AAPL", price=float("nan"), timestamp=TS)
        with pytest.raises(ValueError):
            get_codec("market_quote").dump_json(quote)

    def test_lost_fields_ignores_unknown(self, order_wire) -> None:
        """Неизвестные схеме поля не обязаны переживать round-trip"""
        order_wire["clientTag"] = "abc"
        codec = get_codec("order")
        assert "clientTag" not in codec.roundtrip(order_wire)
        assert codec.lost_fields(order_wire) == []

    @pytest.mark.parametrize("timestamp", [10**15, 1e20, -(10**15)])
    def test_parse_timestamp_outside_datetime_range(self, timestamp) -> None:
        """Валидный wire timestamp вне диапазона datetime: структурная ошибка"""
        codec = get_codec("market_quote")
        data = {"symbol": "X", "price": 1, "timestamp": timestamp}

        codec.validate(data)
        with pytest.raises(StructuralValidationError) as exc_info:
            codec.parse(data)
        violation = exc_info.value.violations[0]
        assert violation.field == "timestamp"
        assert violation.constraint == "timestamp_range"
        assert violation.value == timestamp

    def test_parse_huge_integer_price(self) -> None:
        with pytest.raises(StructuralValidationError) as exc_info:
            get_codec("market_quote").parse({"symbol": "X", "price": 10**400, "timestamp": 0})
        assert exc_info.value.fields == ["price"]

    def test_parse_datetime_upper_bound(self) -> None:
        quote = get_codec("market_quote").parse(
            {"symbol": "X", "price": 1, "timestamp": 253402300799999}
        )
        assert quote.timestamp.year == 9999

    def test_lost_fields_ignores_nested_unknown(self, position: Position) -> None:
        codec = get_codec("position")
        data = codec.encode(position)
        data["long"]["AAPL"]["note"] = "x"
        data["long"]["AAPL"]["lots"][0]["lotId"] = 1
        data["short"]["TSLA"]["note"] = "y"
        assert codec.lost_fields(data) == []
