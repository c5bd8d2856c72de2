"""
Position — Модели позиций

Immutable Pydantic модели:
- LongPositionLot / ShortPositionLot (лоты в порядке приобретения)
- LongPosition / ShortPosition (позиция по одному инструменту)
- Position (портфель: кэш + long/short позиции по символам)

realised_pnl хранится как есть, здесь не пересчитывается.
"""

from pydantic import AwareDatetime, BaseModel, Field


# =============================================================================
# LOTS
# =============================================================================


class LongPositionLot(BaseModel):
    """Лот длинной позиции"""

    quantity: float = Field(..., description="Количество в лоте")
    price: float = Field(..., description="Цена приобретения")
    total_cost: float = Field(..., description="Полная стоимость лота")

    model_config = {"frozen": True, "allow_inf_nan": False}


class ShortPositionLot(BaseModel):
    """Лот короткой позиции"""

    quantity: float = Field(..., description="Количество в лоте")
    price: float = Field(..., description="Цена продажи")
    total_proceeds: float = Field(..., description="Полная выручка лота")

    model_config = {"frozen": True, "allow_inf_nan": False}


# =============================================================================
# PER-SYMBOL POSITIONS
# =============================================================================


class LongPosition(BaseModel):
    """
    Длинная позиция по инструменту.

    Порядок lots значим (порядок приобретения для cost basis).
    """

    quantity: float = Field(..., description="Суммарное количество")
    total_cost: float = Field(..., description="Суммарная стоимость")
    realised_pnl: float = Field(..., description="Реализованный PnL")
    lots: tuple[LongPositionLot, ...] = Field(..., description="Лоты в порядке приобретения")
    modified: AwareDatetime = Field(..., description="Время последнего изменения (UTC)")

    model_config = {"frozen": True, "allow_inf_nan": False}


class ShortPosition(BaseModel):
    """Короткая позиция по инструменту (зеркало LongPosition с total_proceeds)."""

    quantity: float = Field(..., description="Суммарное количество")
    total_proceeds: float = Field(..., description="Суммарная выручка")
    realised_pnl: float = Field(..., description="Реализованный PnL")
    lots: tuple[ShortPositionLot, ...] = Field(..., description="Лоты в порядке открытия")
    modified: AwareDatetime = Field(..., description="Время последнего изменения (UTC)")

    model_config = {"frozen": True, "allow_inf_nan": False}


# =============================================================================
# PORTFOLIO POSITION
# =============================================================================


class Position(BaseModel):
    """
    Позиция портфеля.

    long / short — словари symbol → позиция; None означает отсутствие поля
    в wire форме (а не пустой словарь).
    """

    cash: float = Field(..., description="Свободные денежные средства")
    total_commission: float = Field(..., description="Накопленные комиссии")
    realised_pnl: float = Field(..., description="Реализованный PnL портфеля")
    modified: AwareDatetime = Field(..., description="Время последнего изменения (UTC)")
    long: dict[str, LongPosition] | None = Field(None, description="Длинные позиции по символам")
    short: dict[str, ShortPosition] | None = Field(None, description="Короткие позиции по символам")

    model_config = {"frozen": True, "allow_inf_nan": False}

    def symbols(self) -> set[str]:
        """Все символы, по которым есть long или short позиция."""
        return set(self.long or {}) | set(self.short or {})
