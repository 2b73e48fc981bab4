
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ErrorReason(str, Enum):
    COLLISION = "collision"
    OUT_OF_BOUNDS = "bounds"
    INVALID_DIMENSIONS = "minSize"
    INVALID_IMPORT_FORMAT = "invalidCsv"
    NO_STOCK_REMAINING = "noStock"
    UNKNOWN_TEMPLATE = "unknownTemplate"
    UNKNOWN_PLACEMENT = "unknownPlacement"
    NO_BOARD_SELECTED = "noBoard"
    NOT_FOUND = "notFound"

    @property
    def silent(self) -> bool:
        """Lookups that miss are reported to the caller but never displayed."""
        return self in _SILENT


_SILENT = frozenset({
    ErrorReason.NO_STOCK_REMAINING,
    ErrorReason.UNKNOWN_TEMPLATE,
    ErrorReason.UNKNOWN_PLACEMENT,
    ErrorReason.NO_BOARD_SELECTED,
    ErrorReason.NOT_FOUND,
})


@dataclass(frozen=True)
class Board:
    id: str
    name: str
    width: int
    height: int

    def to_dict(self) -> Dict[str, Any]:
        return dict(id=self.id, name=self.name, width=self.width, height=self.height)


@dataclass(frozen=True)
class PieceRequest:
    name: str
    width: int
    height: int
    quantity: int

    def same_template(self, other) -> bool:
        return (
            self.name.lower() == other.name.lower()
            and self.width == other.width
            and self.height == other.height
        )


@dataclass(frozen=True)
class PieceTemplate:
    id: str
    name: str
    width: int
    height: int
    quantity: int
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return dict(
            id=self.id, name=self.name, width=self.width, height=self.height,
            quantity=self.quantity, color=self.color,
        )


@dataclass(frozen=True)
class PlacedPiece:
    id: str
    template_id: str
    name: str
    width: int
    height: int
    x: int
    y: int
    color: str

    @property
    def area(self) -> int:
        return self.width * self.height

    def to_dict(self) -> Dict[str, Any]:
        return dict(
            id=self.id, template_id=self.template_id, name=self.name,
            width=self.width, height=self.height, x=self.x, y=self.y,
            color=self.color,
        )


@dataclass(frozen=True)
class Outcome:
    """Result of a placement-engine call; on failure the inputs come back untouched."""

    ok: bool
    reason: Optional[ErrorReason] = None
    placed: Tuple[PlacedPiece, ...] = field(default_factory=tuple)
    templates: Tuple[PieceTemplate, ...] = field(default_factory=tuple)
    piece: Optional[PlacedPiece] = None
