"""
Structural validation errors for wire contracts.

A single StructuralValidationError carries every violation found in one
validation pass, so a caller can report all problems at once.
"""

from typing import Any, Sequence, Tuple, Union

from pydantic import BaseModel, Field

PathElement = Union[str, int]


def format_path(path: Sequence[PathElement]) -> str:
    """
    Human-readable field path.

    ("long", "AAPL", "lots", 0, "price") -> "long.AAPL.lots[0].price"
    An empty path (the document itself) is rendered as "$".
    """
    out = ""
    for element in path:
        if isinstance(element, int):
            out += f"[{element}]"
        elif out:
            out += f".{element}"
        else:
            out = str(element)
    return out or "$"


class FieldViolation(BaseModel):
    """One violated constraint at one field path."""

    path: Tuple[PathElement, ...] = Field(..., description="Keys/indices from the document root")
    field: str = Field(..., description="Display form of path")
    constraint: str = Field(..., description="Violated keyword (required, type, enum, effect_for_side, ...)")
    value: Any = Field(None, description="Offending value; None for missing fields")
    message: str = Field(..., description="Human-readable reason")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class StructuralValidationError(ValueError):
    """
    Wire input does not match an entity contract.

    Attributes:
        entity: Contract name (e.g. 'order')
        violations: Every violation found, in field path order
    """

    def __init__(self, entity: str, violations: Sequence[FieldViolation]):
        self.entity = entity
        self.violations = list(violations)
        details = "; ".join(str(v) for v in self.violations)
        super().__init__(f"{entity}: {len(self.violations)} violation(s): {details}")

    @property
    def fields(self) -> list[str]:
        """Display paths of all violated fields."""
        return [v.field for v in self.violations]
