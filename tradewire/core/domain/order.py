"""
Order — Модели заявок и исполнений

Immutable Pydantic модели:
- OrderAction (связка side/effect — дискриминированная пара)
- Order (заявка)
- PartialOrder (патч для изменения заявки)
- OrderState (заявка + состояние исполнения)
- Fill (исполнение)

Связка side/effect замкнута:
    BUY  → {OPEN_LONG, CLOSE_SHORT}
    SELL → {CLOSE_LONG, OPEN_SHORT}
Любая другая комбинация отклоняется при создании модели.
"""

from enum import Enum
from typing import Final, Mapping

from pydantic import AwareDatetime, BaseModel, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class Side(str, Enum):
    """Сторона заявки (дискриминант OrderAction)"""

    BUY = "BUY"
    SELL = "SELL"


class Effect(str, Enum):
    """Эффект заявки на позицию"""

    OPEN_LONG = "OPEN_LONG"
    CLOSE_SHORT = "CLOSE_SHORT"
    CLOSE_LONG = "CLOSE_LONG"
    OPEN_SHORT = "OPEN_SHORT"


class OrderType(str, Enum):
    """Тип заявки"""

    MARKET = "MARKET"
    LIMIT = "LIMIT"
    STOP = "STOP"
    STOP_LIMIT = "STOP_LIMIT"


class OrderStatus(str, Enum):
    """Статус заявки"""

    PENDING = "PENDING"
    OPEN = "OPEN"
    PARTIAL = "PARTIAL"
    FILLED = "FILLED"
    CANCELLED = "CANCELLED"
    REJECT = "REJECT"


# =============================================================================
# SIDE / EFFECT PAIRING
# =============================================================================

LEGAL_EFFECTS: Final[Mapping[Side, frozenset[Effect]]] = {
    Side.BUY: frozenset({Effect.OPEN_LONG, Effect.CLOSE_SHORT}),
    Side.SELL: frozenset({Effect.CLOSE_LONG, Effect.OPEN_SHORT}),
}


def validate_order_action(side: Side, effect: Effect) -> None:
    """
    Проверка допустимости пары side/effect.

    Args:
        side: Сторона заявки
        effect: Эффект на позицию

    Raises:
        ValueError: Если effect недопустим для данной side
    """
    side = Side(side)
    effect = Effect(effect)
    if effect not in LEGAL_EFFECTS[side]:
        legal = sorted(e.value for e in LEGAL_EFFECTS[side])
        raise ValueError(
            f"effect {effect.value} is not legal for side {side.value} (expected one of {legal})"
        )


# =============================================================================
# ORDER MODELS
# =============================================================================


class OrderAction(BaseModel):
    """
    Дискриминированная пара side/effect.

    Базовый класс для Order, OrderState и Fill: пара валидируется
    как единое целое после разбора полей.
    """

    side: Side = Field(..., description="Сторона (BUY/SELL)")
    effect: Effect = Field(..., description="Эффект на позицию, допустимый для side")

    model_config = {"frozen": True, "allow_inf_nan": False}

    @model_validator(mode="after")
    def check_effect_for_side(self) -> "OrderAction":
        validate_order_action(self.side, self.effect)
        return self


class Order(OrderAction):
    """Заявка."""

    id: str = Field(..., description="Идентификатор заявки")
    symbol: str = Field(..., description="Тикер")
    type: OrderType = Field(..., description="Тип заявки")
    quantity: float = Field(..., description="Количество")
    price: float | None = Field(None, description="Лимитная цена")
    stop_price: float | None = Field(None, description="Стоп-цена")
    created: AwareDatetime | None = Field(None, description="Время создания (UTC)")


class OrderState(Order):
    """
    Заявка + состояние исполнения.

    filled_quantity + remaining_quantity == quantity и согласованность status
    с исполнением не проверяются: это ответственность источника состояния.
    """

    filled_quantity: float = Field(..., description="Исполненное количество")
    remaining_quantity: float = Field(..., description="Оставшееся количество")
    status: OrderStatus = Field(..., description="Статус заявки")
    modified: AwareDatetime = Field(..., description="Время последнего изменения (UTC)")

    def fill_ratio(self) -> float:
        """
        Доля исполнения.

        Returns:
            filled_quantity / quantity, 0.0 при нулевом quantity
        """
        if self.quantity == 0:
            return 0.0
        return self.filled_quantity / self.quantity


class Fill(OrderAction):
    """Исполнение заявки. order_id — ссылка на Order.id, без владения."""

    id: str = Field(..., description="Идентификатор исполнения")
    order_id: str = Field(..., description="Идентификатор заявки")
    symbol: str = Field(..., description="Тикер")
    quantity: float = Field(..., description="Исполненное количество")
    price: float = Field(..., description="Цена исполнения")
    commission: float = Field(..., description="Комиссия")
    created: AwareDatetime = Field(..., description="Время исполнения (UTC)")


# =============================================================================
# PARTIAL ORDER (AMENDMENT PATCH)
# =============================================================================


class PartialOrder(BaseModel):
    """
    Патч заявки: обязателен только id, отсутствующие поля = "без изменений".

    Пара side/effect проверяется, только если заданы оба поля.
    """

    id: str = Field(..., description="Идентификатор изменяемой заявки")
    side: Side | None = Field(None, description="Новая сторона")
    effect: Effect | None = Field(None, description="Новый эффект")
    symbol: str | None = Field(None, description="Новый тикер")
    type: OrderType | None = Field(None, description="Новый тип")
    quantity: float | None = Field(None, description="Новое количество")
    price: float | None = Field(None, description="Новая лимитная цена")
    stop_price: float | None = Field(None, description="Новая стоп-цена")
    created: AwareDatetime | None = Field(None, description="Новое время создания (UTC)")

    model_config = {"frozen": True, "allow_inf_nan": False}

    @model_validator(mode="after")
    def check_effect_for_side(self) -> "PartialOrder":
        if self.side is not None and self.effect is not None:
            validate_order_action(self.side, self.effect)
        return self

    def changes(self) -> dict:
        """Заданные поля патча (без id)."""
        return {name: value for name, value in self if name != "id" and value is not None}

    def apply_to(self, order: Order) -> Order:
        """
        Применение патча к заявке.

        Результат валидируется заново: патч, ломающий пару side/effect,
        приводит к ValidationError.

        Args:
            order: Исходная заявка (не изменяется)

        Returns:
            Новый экземпляр Order

        Raises:
            ValueError: Если id патча не совпадает с id заявки
        """
        if order.id != self.id:
            raise ValueError(f"patch id {self.id!r} does not match order id {order.id!r}")
        return Order.model_validate({**order.model_dump(), **self.changes()})
