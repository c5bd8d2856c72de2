"""
Field-level helpers shared by the encoders and decoders.

Wire convention: an absent optional field is omitted from the object, never
written as null. Runtime convention: an absent optional field is None.
"""

from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional

from tradewire.core.domain.timestamps import datetime_to_ms, ms_to_datetime

WireObject = Dict[str, Any]


def put_optional(
    wire: WireObject,
    key: str,
    value: Any,
    convert: Optional[Callable[[Any], Any]] = None,
) -> None:
    """Записать поле в wire объект, только если значение задано."""
    if value is not None:
        wire[key] = convert(value) if convert is not None else value


def optional_datetime(wire: Mapping[str, Any], key: str) -> Optional[datetime]:
    """Опциональный timestamp из wire объекта (отсутствует → None)."""
    value = wire.get(key)
    return ms_to_datetime(value) if value is not None else None


def encode_enum(value: Any) -> str:
    """Литеральный токен enum (для str-enum это .value)."""
    return getattr(value, "value", value)


__all__ = [
    "WireObject",
    "put_optional",
    "optional_datetime",
    "encode_enum",
    "datetime_to_ms",
    "ms_to_datetime",
]
