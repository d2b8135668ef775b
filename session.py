# session.py — slabnest ver1.0
#
# Interactive state holder: current slab, ordered piece list and the last
# calculation outcome. Every accepted change triggers a full recompute and
# notifies subscribers. Pieces have no identity beyond their list position.

import dataclasses
import logging
import math
from typing import Callable, List, Optional

from models import (
    CalculationResult, PieceSpec, ScreenRect, SlabSpec,
    default_piece_name, generate_color
)
from packing import compute
from projection import DEFAULT_TARGET_SIZE, compute_scale, project
from validation import ValidationError, check_positive

logger = logging.getLogger(__name__)

DEFAULT_SLAB = (1000.0, 2000.0)
FIRST_PIECE = (200.0, 300.0)
NEW_PIECE = (100.0, 100.0)
DEFAULT_SCALE = 0.2

EDITABLE_FIELDS = ("name", "width", "height")


class NestingSession:
    """
    Holds:
    - slab and pieces (owned here, read by the calculator)
    - result, scale and error from the last recompute
    - subscribers called with the session after every change or rejected edit
    """

    def __init__(self, slab: Optional[SlabSpec] = None,
                 pieces: Optional[List[PieceSpec]] = None,
                 target_size: float = DEFAULT_TARGET_SIZE):
        self.slab = slab or SlabSpec(*DEFAULT_SLAB)
        if pieces is None:
            pieces = [PieceSpec(default_piece_name(1), *FIRST_PIECE, color=generate_color())]
        self.pieces: List[PieceSpec] = list(pieces)
        if not (math.isfinite(target_size) and target_size > 0):
            raise ValueError(f"Target size must be a positive number, got {target_size}.")
        self.target_size = target_size

        self.result: Optional[CalculationResult] = None
        self.error: Optional[str] = None
        self.scale: float = DEFAULT_SCALE

        self._listeners: List[Callable[["NestingSession"], None]] = []
        self.recompute()

    # ---------------------------------------------------------
    # Observers
    # ---------------------------------------------------------

    def subscribe(self, callback: Callable[["NestingSession"], None]) -> None:
        self._listeners.append(callback)

    def unsubscribe(self, callback: Callable[["NestingSession"], None]) -> None:
        self._listeners.remove(callback)

    def _notify(self) -> None:
        for cb in list(self._listeners):
            cb(self)

    # ---------------------------------------------------------
    # Recompute
    # ---------------------------------------------------------

    def recompute(self) -> None:
        """
        Result and scale are replaced together on success;
        on failure the result is dropped and the error kept.
        """
        result, err = compute(self.slab, self.pieces)
        if err is not None:
            self.result = None
            self.error = str(err)
            logger.debug("recompute failed: %s", self.error)
        else:
            self.result = result
            self.error = None
            self.scale = compute_scale(self.slab, self.target_size)
            logger.debug("recompute ok, waste %.2f", result.waste_area)
        self._notify()

    def _reject(self, err: ValidationError) -> None:
        # previous result stays on display
        self.error = str(err)
        logger.warning("edit rejected: %s", self.error)
        self._notify()

    # ---------------------------------------------------------
    # Slab edits
    # ---------------------------------------------------------

    def set_slab_width(self, value: float) -> None:
        self.set_slab(value, self.slab.height, field_name="Slab width")

    def set_slab_height(self, value: float) -> None:
        self.set_slab(self.slab.width, value, field_name="Slab height")

    def set_slab(self, width: float, height: float, field_name: str = "Slab dimension") -> None:
        try:
            check_positive(width, field_name)
            check_positive(height, field_name)
        except ValidationError as ve:
            self._reject(ve)
            return
        self.slab = SlabSpec(width=width, height=height)
        self.recompute()

    # ---------------------------------------------------------
    # Piece list edits
    # ---------------------------------------------------------

    def add_piece(self) -> PieceSpec:
        piece = PieceSpec(
            name=default_piece_name(len(self.pieces) + 1),
            width=NEW_PIECE[0],
            height=NEW_PIECE[1],
            color=generate_color()
        )
        self.pieces = self.pieces + [piece]
        self.recompute()
        return piece

    def remove_piece(self, index: int) -> None:
        """Trailing pieces shift down one position."""
        if not 0 <= index < len(self.pieces):
            raise IndexError(f"No piece at position {index}.")
        self.pieces = [p for i, p in enumerate(self.pieces) if i != index]
        self.recompute()

    def update_piece(self, index: int, field: str, value) -> None:
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field '{field}' cannot be edited.")
        if not 0 <= index < len(self.pieces):
            raise IndexError(f"No piece at position {index}.")

        piece = self.pieces[index]
        if field != "name":
            try:
                check_positive(value, f'{field.capitalize()} of piece "{piece.name}"')
            except ValidationError as ve:
                self._reject(ve)
                return

        updated = dataclasses.replace(piece, **{field: value})
        self.pieces = [updated if i == index else p for i, p in enumerate(self.pieces)]
        self.recompute()

    # ---------------------------------------------------------
    # Display
    # ---------------------------------------------------------

    def rects(self) -> List[ScreenRect]:
        if self.result is None:
            return []
        return project(self.slab, self.result.placements, self.scale)
