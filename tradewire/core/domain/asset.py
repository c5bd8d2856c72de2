"""
Asset — Модель торгового инструмента

Immutable Pydantic модель, описывающая инструмент (тикер, валюта, биржа,
параметры лота и шага цены, окно действия).
Соответствует схеме contracts/schema/asset.json.
"""

from pydantic import AwareDatetime, BaseModel, Field


class Asset(BaseModel):
    """
    Модель инструмента.

    Окно действия (valid_from / valid_until) не проверяется на порядок:
    valid_from <= valid_until — ответственность вызывающей стороны.
    """

    # Идентификация
    symbol: str = Field(..., description="Тикер инструмента (например, 'AAPL')")
    currency: str = Field(..., description="Валюта котирования")
    type: str | None = Field(None, description="Класс инструмента (stock, crypto, ...)")
    name: str | None = Field(None, description="Полное название")
    exchange: str | None = Field(None, description="Биржа листинга")

    # Торговые параметры
    lot_size: float | None = Field(None, description="Размер лота")
    tick_size: float | None = Field(None, description="Минимальный шаг цены")

    # Окно действия
    valid_from: AwareDatetime | None = Field(None, description="Начало действия (UTC)")
    valid_until: AwareDatetime | None = Field(None, description="Окончание действия (UTC)")

    model_config = {"frozen": True, "allow_inf_nan": False}
