"""
Timestamps — Централизованный модуль конверсии времени

Единственный допустимый способ преобразований между:
- wire timestamp (int, миллисекунды с Unix epoch, UTC)
- runtime instant (timezone-aware datetime)

ЗАПРЕЩЕНО конвертировать время в обход этого модуля (секунды, ISO-строки,
naive datetime).
"""

from datetime import datetime, timedelta, timezone
from typing import Final


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

UTC_EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)

ONE_MILLISECOND: Final[timedelta] = timedelta(milliseconds=1)

# Границы диапазона datetime (0001-01-01 .. 9999-12-31 23:59:59.999 UTC)
MIN_EPOCH_MS: Final[int] = (datetime.min.replace(tzinfo=timezone.utc) - UTC_EPOCH) // ONE_MILLISECOND
MAX_EPOCH_MS: Final[int] = (datetime.max.replace(tzinfo=timezone.utc) - UTC_EPOCH) // ONE_MILLISECOND


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def ms_to_datetime(ms: int) -> datetime:
    """
    Конверсия: epoch миллисекунды → aware datetime (UTC)

    Сложение с timedelta вместо fromtimestamp(ms / 1000): без потерь на float
    делении и без ограничений платформенного time_t.

    Args:
        ms: Миллисекунды с Unix epoch (могут быть отрицательными)

    Returns:
        datetime с tzinfo=UTC

    Raises:
        ValueError: Если момент вне диапазона datetime (см. is_representable_ms)
    """
    if not is_representable_ms(ms):
        raise ValueError(
            f"timestamp {ms!r} ms is outside the datetime range [{MIN_EPOCH_MS}, {MAX_EPOCH_MS}]"
        )
    return UTC_EPOCH + timedelta(milliseconds=int(ms))


def datetime_to_ms(dt: datetime) -> int:
    """
    Конверсия: aware datetime → epoch миллисекунды

    Субмиллисекундная точность отбрасывается (floor к более раннему моменту).

    Args:
        dt: Timezone-aware datetime

    Returns:
        Миллисекунды с Unix epoch

    Raises:
        ValueError: Если datetime naive (без tzinfo)
    """
    validate_aware(dt)
    return (dt - UTC_EPOCH) // ONE_MILLISECOND


def truncate_to_ms(dt: datetime) -> datetime:
    """Момент времени, который переживёт round-trip через wire формат."""
    return ms_to_datetime(datetime_to_ms(dt)).astimezone(dt.tzinfo)


def now_utc() -> datetime:
    """Текущее время (UTC, aware)."""
    return datetime.now(timezone.utc)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_representable_ms(ms: int) -> bool:
    """
    Помещается ли wire timestamp в datetime.

    Wire формат диапазон не ограничивает, runtime модель ограничена
    годами 1..9999.
    """
    return MIN_EPOCH_MS <= ms <= MAX_EPOCH_MS


def validate_aware(dt: datetime) -> None:
    """
    Проверка, что datetime содержит timezone.

    Raises:
        ValueError: Если datetime naive
    """
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        raise ValueError(f"naive datetime {dt.isoformat()} has no timezone; use UTC-aware datetimes")
