# validation.py — slabnest ver1.0
#
# Checks slab and piece dimensions before tiling. Single checks return
# (ok, reason) tuples; validate_inputs raises the first failure found.

import math
from typing import List, Sequence, Tuple
from models import PieceSpec, SlabSpec


# ---------------------------------------
# Error taxonomy
# ---------------------------------------

class ValidationError(ValueError):
    """Base class for every rejected input."""


class InvalidSlabDimensions(ValidationError):
    def __init__(self, message: str = "Slab dimensions must be positive numbers."):
        super().__init__(message)


class InvalidPieceDimensions(ValidationError):
    def __init__(self, piece_name: str):
        self.piece_name = piece_name
        super().__init__(f'Dimensions of piece "{piece_name}" must be positive numbers.')


class PieceExceedsSlab(ValidationError):
    def __init__(self, piece_name: str):
        self.piece_name = piece_name
        super().__init__(f'Piece "{piece_name}" is larger than the slab.')


# ---------------------------------------
# Single checks
# ---------------------------------------

def _positive(value: float) -> bool:
    """Strictly positive and finite; rejects inf and nan."""
    return math.isfinite(value) and value > 0


def check_slab(slab: SlabSpec) -> Tuple[bool, str]:
    if _positive(slab.width) and _positive(slab.height):
        return True, ""
    return False, (
        f"slab must be positive in both directions, "
        f"has {slab.width}x{slab.height} mm"
    )


def check_piece_dimensions(piece: PieceSpec) -> Tuple[bool, str]:
    if _positive(piece.width) and _positive(piece.height):
        return True, ""
    return False, f"has {piece.width}x{piece.height} mm"


def check_piece_fits(piece: PieceSpec, slab: SlabSpec) -> Tuple[bool, str]:
    """
    No rotation is tried: width is compared with slab width and
    height with slab height only.
    """
    if piece.width <= slab.width and piece.height <= slab.height:
        return True, ""
    return False, (
        f"needs {piece.width}x{piece.height} mm, "
        f"slab is {slab.width}x{slab.height} mm"
    )


def check_positive(value: float, field_name: str) -> None:
    """Rejects a single non-positive field edit."""
    if not _positive(value):
        raise ValidationError(f"{field_name} must be a positive number.")


# ---------------------------------------
# Global validation before tiling
# ---------------------------------------

def validate_inputs(slab: SlabSpec, pieces: Sequence[PieceSpec]) -> None:
    """
    Raises the first failure in this order:
      slab dimensions, then for each piece in sequence order
      its own dimensions followed by its fit against the slab.
    Later pieces are not inspected once one fails.
    """
    ok, _ = check_slab(slab)
    if not ok:
        raise InvalidSlabDimensions()

    for piece in pieces:
        ok, _ = check_piece_dimensions(piece)
        if not ok:
            raise InvalidPieceDimensions(piece.name)
        ok, _ = check_piece_fits(piece, slab)
        if not ok:
            raise PieceExceedsSlab(piece.name)


def collect_problems(slab: SlabSpec, pieces: Sequence[PieceSpec]) -> List[str]:
    """
    Lists every problem instead of stopping at the first one.
    Used for CLI diagnostics only; calculation still reports a single error.
    """
    problems = []
    ok, reason = check_slab(slab)
    if not ok:
        problems.append(f"slab: {reason}")
        return problems

    for piece in pieces:
        ok, reason = check_piece_dimensions(piece)
        if not ok:
            problems.append(f"{piece.name}: {reason}")
            continue
        ok, reason = check_piece_fits(piece, slab)
        if not ok:
            problems.append(f"{piece.name}: {reason}")
    return problems
