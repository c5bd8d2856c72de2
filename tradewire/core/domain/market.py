"""
Market — Модели рыночных данных

Immutable Pydantic модели:
- MarketSnapshot (последние цены по набору инструментов)
- MarketQuote (котировка одного инструмента, L1)
- MarketBar (OHLCV бар)

Соответствуют схемам contracts/schema/market_*.json.
"""

from enum import Enum

from pydantic import AwareDatetime, BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class BarInterval(str, Enum):
    """Интервал бара (токены совпадают с wire форматом, регистр значим)"""

    MIN_1 = "1m"
    MIN_5 = "5m"
    MIN_15 = "15m"
    MIN_30 = "30m"
    HOUR_1 = "1h"
    HOUR_2 = "2h"
    HOUR_4 = "4h"
    DAY_1 = "1d"
    WEEK_1 = "1w"
    MONTH_1 = "1M"  # не путать с "1m"


# =============================================================================
# MARKET MODELS
# =============================================================================


class MarketSnapshot(BaseModel):
    """
    Снапшот последних цен.

    price — словарь symbol → последняя цена; порядок ключей не значим.
    """

    price: dict[str, float] = Field(..., description="Последняя цена по инструментам")
    timestamp: AwareDatetime = Field(..., description="Время снапшота (UTC)")

    model_config = {"frozen": True, "allow_inf_nan": False}

    def get(self, symbol: str) -> float | None:
        """Последняя цена инструмента или None."""
        return self.price.get(symbol)


class MarketQuote(BaseModel):
    """Котировка инструмента (last + L1 стакан)."""

    symbol: str = Field(..., description="Тикер")
    price: float = Field(..., description="Последняя цена сделки")
    timestamp: AwareDatetime = Field(..., description="Время котировки (UTC)")

    volume: float | None = Field(None, description="Объём последней сделки")
    total_volume: float | None = Field(None, description="Накопленный объём за сессию")
    bid: float | None = Field(None, description="Лучшая цена покупки")
    bid_vol: float | None = Field(None, description="Объём на лучшем bid")
    ask: float | None = Field(None, description="Лучшая цена продажи")
    ask_vol: float | None = Field(None, description="Объём на лучшем ask")
    pre_close: float | None = Field(None, description="Цена закрытия предыдущей сессии")

    model_config = {"frozen": True, "allow_inf_nan": False}


class MarketBar(BaseModel):
    """OHLCV бар."""

    symbol: str = Field(..., description="Тикер")
    open: float = Field(..., description="Цена открытия")
    high: float = Field(..., description="Максимум")
    low: float = Field(..., description="Минимум")
    close: float = Field(..., description="Цена закрытия")
    volume: float = Field(..., description="Объём")
    timestamp: AwareDatetime = Field(..., description="Время открытия бара (UTC)")
    interval: BarInterval = Field(..., description="Интервал бара")

    model_config = {"frozen": True, "allow_inf_nan": False}
