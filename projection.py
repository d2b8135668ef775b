# projection.py — slabnest ver1.0
#
# Maps placements (mm) to display rectangles. Every piece type is laid out
# from the same origin, so the diagram is an overlay of each type's full-slab
# tiling rather than a single cutting plan.

import logging
from typing import List, Sequence

from models import Placement, ScreenRect, SlabSpec

logger = logging.getLogger(__name__)

DEFAULT_TARGET_SIZE = 300.0
SLAB_COLOR = "#f0f0f0"


def compute_scale(slab: SlabSpec, target_size: float = DEFAULT_TARGET_SIZE) -> float:
    """The longer slab side maps to `target_size` display units."""
    return target_size / max(slab.width, slab.height)


def slab_frame(slab: SlabSpec, scale: float, color: str = SLAB_COLOR) -> ScreenRect:
    return ScreenRect(
        x=0.0,
        y=0.0,
        width=slab.width * scale,
        height=slab.height * scale,
        color=color
    )


def project(slab: SlabSpec, placements: Sequence[Placement], scale: float) -> List[ScreenRect]:
    """
    For each placement in order, `down` rows of `across` columns (row-major),
    each rectangle at (col * w * scale, row * h * scale).
    The same scale applies to both axes.
    """
    if scale <= 0:
        raise ValueError(f"Scale must be positive, got {scale}.")

    rects: List[ScreenRect] = []
    for p in placements:
        w = p.spec.width * scale
        h = p.spec.height * scale
        for row in range(p.down):
            for col in range(p.across):
                rects.append(ScreenRect(
                    x=col * p.spec.width * scale,
                    y=row * p.spec.height * scale,
                    width=w,
                    height=h,
                    color=p.spec.color
                ))

    logger.debug(
        "projected %d rects for %sx%s slab at scale %.4f",
        len(rects), slab.width, slab.height, scale
    )
    return rects
