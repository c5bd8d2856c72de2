"""
WireCodec — связка validate / decode / encode для одной сущности.

CODECS — реестр кодеков по имени сущности (имена совпадают с именами схем
и с именами файлов fixtures).
"""

import json
import logging
from typing import Any, Callable, Dict, Generic, Mapping, TypeVar

from pydantic import BaseModel

from tradewire.core.contracts import ContractValidator, get_validator
from tradewire.core.domain import (
    Asset,
    Fill,
    LongPosition,
    MarketBar,
    MarketQuote,
    MarketSnapshot,
    Order,
    OrderState,
    PartialOrder,
    Position,
    ShortPosition,
)

from .asset import decode_asset, encode_asset
from .fields import WireObject
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
    decode_order_state,
    decode_partial_order,
    encode_fill,
    encode_order,
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

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class WireCodec(Generic[M]):
    """
    Кодек сущности: wire dict ↔ runtime модель.

    decode() ожидает уже валидный wire dict; parse() сначала валидирует.
    """

    def __init__(
        self,
        entity: str,
        model: type[M],
        decoder: Callable[[Mapping[str, Any]], M],
        encoder: Callable[[M], WireObject],
    ):
        self.entity = entity
        self.model = model
        self._decoder = decoder
        self._encoder = encoder

    def __repr__(self) -> str:
        return f"WireCodec({self.entity!r}, {self.model.__name__})"

    @property
    def validator(self) -> ContractValidator:
        return get_validator(self.entity)

    def validate(self, data: Any) -> None:
        """
        Raises:
            StructuralValidationError: Со списком всех нарушений
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        return self.validator.is_valid(data)

    def decode(self, wire: Mapping[str, Any]) -> M:
        return self._decoder(wire)

    def encode(self, value: M) -> WireObject:
        return self._encoder(value)

    def parse(self, data: Any) -> M:
        """
        Валидация + decode.

        Кроме контракта проверяется, что timestamps помещаются в datetime:
        decode не падает на данных, прошедших parse.

        Raises:
            StructuralValidationError: Если data не соответствует контракту
                или не представима в runtime модели (timestamp_range)
        """
        self.validator.validate(data, decodable=True)
        return self.decode(data)

    def parse_json(self, text: str | bytes) -> M:
        return self.parse(json.loads(text))

    def dump_json(self, value: M, **kwargs: Any) -> str:
        """Runtime модель → JSON строка (NaN/Infinity запрещены)."""
        return json.dumps(self.encode(value), allow_nan=False, **kwargs)

    def roundtrip(self, data: Any) -> WireObject:
        """parse + encode: wire форма после прохода через runtime модель."""
        return self.encode(self.parse(data))

    def lost_fields(self, data: Mapping[str, Any]) -> list[str]:
        """
        Поля, известные схеме, которые не пережили round-trip.

        Неизвестные схеме поля не учитываются на любой глубине (сравнение
        идёт с проекцией data на схему). Сравнение по значению: 100 и 100.0
        считаются равными.
        """
        roundtripped = self.roundtrip(data)
        known = self.validator.project(data)
        keys = set(known) | set(roundtripped)
        lost = sorted(key for key in keys if known.get(key) != roundtripped.get(key))
        if lost:
            logger.warning("roundtrip_mismatch", extra={"entity": self.entity, "fields": lost})
        return lost


CODECS: Dict[str, WireCodec] = {
    "asset": WireCodec("asset", Asset, decode_asset, encode_asset),
    "market_snapshot": WireCodec(
        "market_snapshot", MarketSnapshot, decode_market_snapshot, encode_market_snapshot
    ),
    "market_quote": WireCodec("market_quote", MarketQuote, decode_market_quote, encode_market_quote),
    "market_bar": WireCodec("market_bar", MarketBar, decode_market_bar, encode_market_bar),
    "order": WireCodec("order", Order, decode_order, encode_order),
    "partial_order": WireCodec(
        "partial_order", PartialOrder, decode_partial_order, encode_partial_order
    ),
    "order_state": WireCodec("order_state", OrderState, decode_order_state, encode_order_state),
    "fill": WireCodec("fill", Fill, decode_fill, encode_fill),
    "long_position": WireCodec(
        "long_position", LongPosition, decode_long_position, encode_long_position
    ),
    "short_position": WireCodec(
        "short_position", ShortPosition, decode_short_position, encode_short_position
    ),
    "position": WireCodec("position", Position, decode_position, encode_position),
}


def get_codec(entity: str) -> WireCodec:
    """
    Кодек по имени сущности.

    Raises:
        KeyError: Если сущность неизвестна
    """
    try:
        return CODECS[entity]
    except KeyError:
        raise KeyError(f"Unknown entity {entity!r}; known: {sorted(CODECS)}") from None
