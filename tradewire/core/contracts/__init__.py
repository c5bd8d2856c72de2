"""
Contract Validation Module

Валидация wire (JSON) контрактов торговых сущностей.
"""

from .errors import FieldViolation, StructuralValidationError, format_path
from .validators import (
    VALIDATOR_CLASSES,
    AssetValidator,
    ContractValidator,
    FillValidator,
    LongPositionValidator,
    MarketBarValidator,
    MarketQuoteValidator,
    MarketSnapshotValidator,
    OrderStateValidator,
    OrderValidator,
    PartialOrderValidator,
    PositionValidator,
    SchemaLoader,
    ShortPositionValidator,
    WireValidator,
    get_validator,
    validate_asset,
    validate_fill,
    validate_long_position,
    validate_market_bar,
    validate_market_quote,
    validate_market_snapshot,
    validate_order,
    validate_order_state,
    validate_partial_order,
    validate_position,
    validate_short_position,
)

__all__ = [
    # Errors
    "FieldViolation",
    "StructuralValidationError",
    "format_path",
    # Classes
    "SchemaLoader",
    "WireValidator",
    "ContractValidator",
    "AssetValidator",
    "MarketSnapshotValidator",
    "MarketQuoteValidator",
    "MarketBarValidator",
    "OrderValidator",
    "PartialOrderValidator",
    "OrderStateValidator",
    "FillValidator",
    "LongPositionValidator",
    "ShortPositionValidator",
    "PositionValidator",
    "VALIDATOR_CLASSES",
    # Functions
    "get_validator",
    "validate_asset",
    "validate_market_snapshot",
    "validate_market_quote",
    "validate_market_bar",
    "validate_order",
    "validate_partial_order",
    "validate_order_state",
    "validate_fill",
    "validate_long_position",
    "validate_short_position",
    "validate_position",
]
