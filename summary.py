# summary.py — slabnest ver1.0
#
# Per-piece counts and slab area totals for the CLI report and the PDF summary.
# Formatting is done by the callers; only numbers are prepared here.

from dataclasses import dataclass, field
from typing import List
from models import CalculationResult, SlabSpec


# -------------------------------------------------------------
# Data structures
# -------------------------------------------------------------

@dataclass
class PieceUsageSummary:
    name: str
    width: float
    height: float
    across: int = 0
    down: int = 0
    count: int = 0
    area: float = 0.0       # count * width * height


@dataclass
class GlobalSummary:
    piece_usages: List[PieceUsageSummary] = field(default_factory=list)

    slab_width: float = 0.0
    slab_height: float = 0.0
    slab_area: float = 0.0

    used_area: float = 0.0
    waste_area: float = 0.0
    utilization: float = 0.0    # used_area / slab_area


# -------------------------------------------------------------
# Main summary computation
# -------------------------------------------------------------

def compute_summary(slab: SlabSpec, result: CalculationResult) -> GlobalSummary:
    summary = GlobalSummary(
        slab_width=slab.width,
        slab_height=slab.height,
        slab_area=slab.area,
    )

    for p in result.placements:
        summary.piece_usages.append(PieceUsageSummary(
            name=p.spec.name,
            width=p.spec.width,
            height=p.spec.height,
            across=p.across,
            down=p.down,
            count=p.count,
            area=p.area,
        ))
        summary.used_area += p.area

    summary.waste_area = result.waste_area
    if summary.slab_area > 0:
        summary.utilization = summary.used_area / summary.slab_area

    return summary


def format_report(summary: GlobalSummary, units: str = "mm") -> List[str]:
    """Plain text lines: one per piece, then the waste area."""
    lines = [f"{pu.name}: {pu.count} pcs" for pu in summary.piece_usages]
    lines.append(f"Waste area: {summary.waste_area:.2f} sq {units}")
    return lines
