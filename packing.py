# packing.py — slabnest ver1.0
#
# Grid tiling of each piece type over the full slab.
# Every piece type is evaluated as if it had the slab to itself: there is no
# rotation, no mixing of types and no reuse of leftover space.

import dataclasses
import logging
import math
from typing import Optional, Sequence, Tuple

from models import CalculationResult, PieceSpec, Placement, SlabSpec
from validation import ValidationError, validate_inputs

logger = logging.getLogger(__name__)


# -------------------------------------------------------------
# Single piece type
# -------------------------------------------------------------

def grid_fit(slab: SlabSpec, piece: PieceSpec) -> Placement:
    """
    Whole copies of `piece` in a plain grid starting at the slab origin.
    Assumes positive finite piece dimensions. The placement keeps its own
    copy of the piece, later edits to `piece` do not reach the result.
    """
    across = int(math.floor(slab.width / piece.width))
    down = int(math.floor(slab.height / piece.height))
    return Placement(spec=dataclasses.replace(piece), across=across, down=down)


# -------------------------------------------------------------
# All piece types
# -------------------------------------------------------------

def optimize_cutting(slab: SlabSpec, pieces: Sequence[PieceSpec]) -> CalculationResult:
    """
    Validates inputs, then tiles every piece type independently.

    waste_area = slab area - sum of the areas covered by each type's tiling.
    Each type is counted against the whole slab, so with several types the
    sum can exceed the slab area and the waste goes negative.

    Raises ValidationError (see validation.validate_inputs).
    """
    validate_inputs(slab, pieces)

    placements = []
    used_area = 0.0
    for piece in pieces:
        p = grid_fit(slab, piece)
        used_area += p.area
        placements.append(p)

    waste_area = slab.area - used_area
    logger.debug(
        "tiled %d piece types on %sx%s slab, waste %.2f",
        len(placements), slab.width, slab.height, waste_area
    )
    return CalculationResult(placements=tuple(placements), waste_area=waste_area)


def compute(
    slab: SlabSpec,
    pieces: Sequence[PieceSpec]
) -> Tuple[Optional[CalculationResult], Optional[ValidationError]]:
    """
    Non-raising form of optimize_cutting.
    Returns (result, None) on success or (None, error) on the first failure.
    """
    try:
        return optimize_cutting(slab, pieces), None
    except ValidationError as ve:
        logger.debug("calculation rejected: %s", ve)
        return None, ve
