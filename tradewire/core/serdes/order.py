"""
Order / PartialOrder / OrderState / Fill encode/decode.

Пара side/effect кодируется как единое целое: допустимость effect
определяется по side до записи в wire объект и до создания модели.
"""

from typing import Any, Mapping

from tradewire.core.domain.order import (
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

from .fields import (
    WireObject,
    datetime_to_ms,
    encode_enum,
    ms_to_datetime,
    optional_datetime,
    put_optional,
)


# =============================================================================
# ORDER ACTION
# =============================================================================


def encode_order_action(action: OrderAction) -> WireObject:
    """
    Пара side/effect → wire поля.

    Raises:
        ValueError: Если effect недопустим для side (модель создана в обход валидации)
    """
    validate_order_action(action.side, action.effect)
    return {"side": encode_enum(action.side), "effect": encode_enum(action.effect)}


def decode_order_action(wire: Mapping[str, Any]) -> dict:
    """Wire поля → аргументы side/effect для модели."""
    side = Side(wire["side"])
    effect = Effect(wire["effect"])
    validate_order_action(side, effect)
    return {"side": side, "effect": effect}


# =============================================================================
# ORDER
# =============================================================================


def _encode_order_fields(order: Order) -> WireObject:
    wire: WireObject = {
        "id": order.id,
        "symbol": order.symbol,
        **encode_order_action(order),
        "type": encode_enum(order.type),
        "quantity": order.quantity,
    }
    put_optional(wire, "price", order.price)
    put_optional(wire, "stopPrice", order.stop_price)
    put_optional(wire, "created", order.created, datetime_to_ms)
    return wire


def _decode_order_fields(wire: Mapping[str, Any]) -> dict:
    return {
        "id": wire["id"],
        "symbol": wire["symbol"],
        **decode_order_action(wire),
        "type": OrderType(wire["type"]),
        "quantity": wire["quantity"],
        "price": wire.get("price"),
        "stop_price": wire.get("stopPrice"),
        "created": optional_datetime(wire, "created"),
    }


def encode_order(order: Order) -> WireObject:
    """Runtime Order → wire dict."""
    return _encode_order_fields(order)


def decode_order(wire: Mapping[str, Any]) -> Order:
    """Валидный wire dict → runtime Order."""
    return Order(**_decode_order_fields(wire))


# =============================================================================
# PARTIAL ORDER
# =============================================================================


def encode_partial_order(order: PartialOrder) -> WireObject:
    """Патч заявки → wire dict (только заданные поля)."""
    wire: WireObject = {"id": order.id}
    put_optional(wire, "side", order.side, encode_enum)
    put_optional(wire, "effect", order.effect, encode_enum)
    put_optional(wire, "symbol", order.symbol)
    put_optional(wire, "type", order.type, encode_enum)
    put_optional(wire, "quantity", order.quantity)
    put_optional(wire, "price", order.price)
    put_optional(wire, "stopPrice", order.stop_price)
    put_optional(wire, "created", order.created, datetime_to_ms)
    return wire


def decode_partial_order(wire: Mapping[str, Any]) -> PartialOrder:
    return PartialOrder(
        id=wire["id"],
        side=Side(wire["side"]) if "side" in wire else None,
        effect=Effect(wire["effect"]) if "effect" in wire else None,
        symbol=wire.get("symbol"),
        type=OrderType(wire["type"]) if "type" in wire else None,
        quantity=wire.get("quantity"),
        price=wire.get("price"),
        stop_price=wire.get("stopPrice"),
        created=optional_datetime(wire, "created"),
    )


# =============================================================================
# ORDER STATE
# =============================================================================


def encode_order_state(state: OrderState) -> WireObject:
    """Runtime OrderState → wire dict."""
    wire = _encode_order_fields(state)
    wire["filledQuantity"] = state.filled_quantity
    wire["remainingQuantity"] = state.remaining_quantity
    wire["status"] = encode_enum(state.status)
    wire["modified"] = datetime_to_ms(state.modified)
    return wire


def decode_order_state(wire: Mapping[str, Any]) -> OrderState:
    """Валидный wire dict → runtime OrderState."""
    return OrderState(
        **_decode_order_fields(wire),
        filled_quantity=wire["filledQuantity"],
        remaining_quantity=wire["remainingQuantity"],
        status=OrderStatus(wire["status"]),
        modified=ms_to_datetime(wire["modified"]),
    )


# =============================================================================
# FILL
# =============================================================================


def encode_fill(fill: Fill) -> WireObject:
    return {
        "id": fill.id,
        "orderId": fill.order_id,
        "symbol": fill.symbol,
        **encode_order_action(fill),
        "quantity": fill.quantity,
        "price": fill.price,
        "commission": fill.commission,
        "created": datetime_to_ms(fill.created),
    }


def decode_fill(wire: Mapping[str, Any]) -> Fill:
    return Fill(
        id=wire["id"],
        order_id=wire["orderId"],
        symbol=wire["symbol"],
        **decode_order_action(wire),
        quantity=wire["quantity"],
        price=wire["price"],
        commission=wire["commission"],
        created=ms_to_datetime(wire["created"]),
    )
