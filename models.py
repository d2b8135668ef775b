# models.py — slabnest ver1.0
# Data structures for the slab, piece types, placements and screen rectangles.

import random
from dataclasses import dataclass
from typing import Tuple


# ------------------------------
# Basic Specs
# ------------------------------

@dataclass
class SlabSpec:
    width: float        # X (left→right), mm
    height: float       # Y (top→bottom), mm

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass
class PieceSpec:
    name: str           # display label, not unique
    width: float
    height: float
    color: str          # opaque display token, e.g. "#1f77b4"

    @property
    def area(self) -> float:
        return self.width * self.height


# ------------------------------
# Piece defaults
# ------------------------------

def generate_color() -> str:
    """Random '#rrggbb' token. Collisions are harmless."""
    return "#{:06x}".format(random.randint(0, 0xFFFFFF))


def default_piece_name(position: int) -> str:
    return f"Piece {position}"


# ------------------------------
# Derived results
# ------------------------------

@dataclass
class Placement:
    """
    Grid tiling of one piece type over the whole slab:
    `across` columns by `down` rows, starting at the slab origin.
    """
    spec: PieceSpec
    across: int
    down: int

    @property
    def count(self) -> int:
        return self.across * self.down

    @property
    def area(self) -> float:
        """Slab area accounted for by this piece type."""
        return self.count * self.spec.width * self.spec.height


@dataclass
class CalculationResult:
    placements: Tuple[Placement, ...]
    waste_area: float

    @property
    def used_area(self) -> float:
        return sum(p.area for p in self.placements)


# ------------------------------
# Display geometry
# ------------------------------

@dataclass
class ScreenRect:
    x: float
    y: float
    width: float
    height: float
    color: str
