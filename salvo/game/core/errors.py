"""Rule violation taxonomy shared by the board and the engine."""

from __future__ import annotations

from enum import StrEnum


class PlacementErrorKind(StrEnum):
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    OVERLAP = "OVERLAP"


class FireErrorKind(StrEnum):
    ALREADY_TARGETED = "ALREADY_TARGETED"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"


class IntentRejectedKind(StrEnum):
    WRONG_PHASE = "WRONG_PHASE"
    TURN_ALREADY_FIRED = "TURN_ALREADY_FIRED"
    TURN_NOT_YET_FIRED = "TURN_NOT_YET_FIRED"


RejectionKind = PlacementErrorKind | FireErrorKind | IntentRejectedKind


class PlacementError(ValueError):
    """Raised when a ship cannot be placed; the board is left untouched."""

    def __init__(self, kind: PlacementErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class FireError(ValueError):
    """Raised when a shot cannot be resolved; the board is left untouched."""

    def __init__(self, kind: FireErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class IntentRejected(Exception):
    """Raised by the turn controller for intents the current phase does not accept."""

    def __init__(self, kind: IntentRejectedKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class OffBoardError(ValueError):
    """Raised when a board is read at a coordinate outside its grid."""

    def __init__(self, row: int, col: int, size: int) -> None:
        super().__init__(f"({row}, {col}) is off the {size}x{size} board.")
        self.row = row
        self.col = col
