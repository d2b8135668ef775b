# pdf_export.py — slabnest ver1.0
#
# This file handles all PDF output:
# - Summary page with a piece table and an area totals table
# - Diagram page: slab frame + projected piece rectangles + legend
# - DejaVu Sans when available (non-latin piece names), else Helvetica
#
# Geometry comes from projection.project(); this module only converts
# display units (top-left origin, y down) to PDF points (y up).

from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import A4, portrait, landscape
from reportlab.lib.colors import Color, black
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from dataclasses import dataclass
from typing import Dict, List

from models import CalculationResult, ScreenRect, SlabSpec
from projection import DEFAULT_TARGET_SIZE, compute_scale, project, slab_frame
from summary import GlobalSummary
from io_utils import parse_bool, parse_number

import logging
import os

logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# mm → pt
# ------------------------------------------------------------
def mm_to_pt(mm: float) -> float:
    return mm * 72.0 / 25.4


# ------------------------------------------------------------
# Parse hex RGB like "F00", "#FF0000"
# ------------------------------------------------------------
def parse_rgb(hex_str: str) -> Color:
    s = hex_str.strip().lstrip("#")
    if len(s) == 3:
        s = "".join(ch * 2 for ch in s)
    if len(s) != 6:
        return black
    try:
        r = int(s[0:2], 16) / 255
        g = int(s[2:4], 16) / 255
        b = int(s[4:6], 16) / 255
    except ValueError:
        return black
    return Color(r, g, b)


# ------------------------------------------------------------
# FONT LOADING
# ------------------------------------------------------------
# Piece names are free text, so a unicode TTF is preferred.
# Numeric columns use builtin Courier.

TEXT_FONT = "SlabnestSans"
MONO_FONT = "Courier"

_FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/Library/Fonts/DejaVuSans.ttf",
    "C:/Windows/Fonts/DejaVuSans.ttf",
    "C:/Windows/Fonts/arial.ttf",
]


def register_fonts():
    """
    Register the first TTF found in _FONT_PATHS under TEXT_FONT.
    Falls back to Helvetica when none is present or loadable.
    """
    global TEXT_FONT

    if TEXT_FONT in pdfmetrics.getRegisteredFontNames():
        return

    for p in _FONT_PATHS:
        if not os.path.isfile(p):
            continue
        try:
            pdfmetrics.registerFont(TTFont(TEXT_FONT, p))
            return
        except Exception as e:
            logger.warning("could not load font %s: %s", p, e)

    TEXT_FONT = "Helvetica"


# ------------------------------------------------------------
# PIECE RECTANGLES
# ------------------------------------------------------------

def draw_screen_rect(c: canvas.Canvas,
                     r: ScreenRect,
                     origin_x_pt: float, origin_y_pt: float,
                     stroke_color: Color):
    """
    Draw one display rectangle. (origin_x_pt, origin_y_pt) is the
    top-left corner of the slab on the page.
    """
    c.setFillColor(parse_rgb(r.color))
    c.setStrokeColor(stroke_color)
    c.rect(
        origin_x_pt + r.x,
        origin_y_pt - r.y - r.height,
        r.width,
        r.height,
        stroke=1,
        fill=1
    )


def draw_legend(c: canvas.Canvas,
                x_pt: float, y_top_pt: float,
                result: CalculationResult,
                stroke_color: Color,
                font_size: float = 9):
    swatch = font_size
    y = y_top_pt
    for p in result.placements:
        c.setFillColor(parse_rgb(p.spec.color))
        c.setStrokeColor(stroke_color)
        c.rect(x_pt, y - swatch, swatch, swatch, stroke=1, fill=1)

        c.setFillColor(black)
        c.setFont(TEXT_FONT, font_size)
        label = f"{p.spec.name} ({p.spec.width:g}x{p.spec.height:g}): {p.count} pcs"
        c.drawString(x_pt + swatch * 1.6, y - swatch * 0.85, label)
        y -= font_size * 1.8


def draw_diagram_page(c: canvas.Canvas,
                      page_width_pt: float, page_height_pt: float,
                      margin_mm: float,
                      slab: SlabSpec,
                      result: CalculationResult,
                      target_size: float,
                      slab_color: str,
                      stroke_color: Color,
                      units: str):
    """
    Draws:
      - Header
      - Slab frame
      - Every piece type's tiling from the same origin (overlay)
      - Legend below the slab
    """
    margin_pt = mm_to_pt(margin_mm)
    header_h_pt = mm_to_pt(HEADER_H_MM)

    usable_w_pt = page_width_pt - 2 * margin_pt
    usable_h_pt = page_height_pt - 2 * margin_pt - header_h_pt

    # longer slab side gets target_size points, capped by the page
    extent = min(target_size, usable_w_pt, usable_h_pt)
    scale = compute_scale(slab, extent)

    origin_x_pt = margin_pt
    origin_y_pt = page_height_pt - margin_pt - header_h_pt

    # HEADER
    c.setFont(TEXT_FONT, 14)
    c.setFillColor(black)
    c.drawString(
        margin_pt, page_height_pt - margin_pt - 12,
        f"Slab: {slab.width:g} x {slab.height:g} {units}"
    )
    c.setFont(TEXT_FONT, 9)
    c.drawString(
        margin_pt, page_height_pt - margin_pt - 28,
        "Each piece type is tiled over the full slab; types are overlaid."
    )

    # SLAB
    frame = slab_frame(slab, scale, color=slab_color)
    draw_screen_rect(c, frame, origin_x_pt, origin_y_pt, stroke_color)

    # PIECES
    for r in project(slab, result.placements, scale):
        draw_screen_rect(c, r, origin_x_pt, origin_y_pt, stroke_color)

    # LEGEND
    draw_legend(
        c,
        origin_x_pt,
        origin_y_pt - frame.height - mm_to_pt(8),
        result,
        stroke_color
    )


# ------------------------------------------------------------
# TABLE DRAWING ENGINE
# ------------------------------------------------------------

def draw_table(
    c: canvas.Canvas,
    x0_pt: float, y0_pt: float,
    col_widths: List[float],
    row_height_pt: float,
    data: List[List[str]],
    font_size: float = 10,
    numeric_cols: List[int] = None
):
    """
    Draws a table with a black grid; numeric columns are right aligned
    in the monospace font.

    x0_pt, y0_pt = top-left corner of table.
    data = list of rows, each row is list of cell strings.
    """
    if numeric_cols is None:
        numeric_cols = []

    for r, row in enumerate(data):
        y_top = y0_pt - r * row_height_pt

        for c_idx, w in enumerate(col_widths):
            x_left = x0_pt + sum(col_widths[:c_idx])

            c.setStrokeColor(black)
            c.setLineWidth(1)
            c.rect(x_left, y_top - row_height_pt, w, row_height_pt, stroke=1, fill=0)

            text = row[c_idx] if row[c_idx] is not None else ""
            font_name = MONO_FONT if c_idx in numeric_cols else TEXT_FONT
            c.setFont(font_name, font_size)
            c.setFillColor(black)

            ty = y_top - row_height_pt + (row_height_pt * 0.33)
            if c_idx in numeric_cols:
                tw = pdfmetrics.stringWidth(text, font_name, font_size)
                c.drawString(x_left + w - tw - 3, ty, text)
            else:
                c.drawString(x_left + 3, ty, text)


# ------------------------------------------------------------
# SUMMARY PAGE
# ------------------------------------------------------------

def summary_piece_rows(summary: GlobalSummary, units: str) -> List[List[str]]:
    rows = [["Piece", f"Size ({units})", "Across", "Down", "Count", f"Area (sq {units})"]]
    for pu in summary.piece_usages:
        rows.append([
            pu.name,
            f"{pu.width:g} x {pu.height:g}",
            f"{pu.across}",
            f"{pu.down}",
            f"{pu.count}",
            f"{pu.area:.2f}",
        ])
    return rows


def summary_total_rows(summary: GlobalSummary, units: str) -> List[List[str]]:
    return [
        ["Category", "Value"],
        ["Slab", f"{summary.slab_width:g} x {summary.slab_height:g} {units}"],
        ["Slab area", f"{summary.slab_area:.2f} sq {units}"],
        ["Used area", f"{summary.used_area:.2f} sq {units}"],
        ["Waste area", f"{summary.waste_area:.2f} sq {units}"],
        ["Utilization", f"{summary.utilization * 100:.1f} %"],
    ]


def draw_summary_page(
    c: canvas.Canvas,
    page_w_pt: float,
    page_h_pt: float,
    margin_mm: float,
    summary: GlobalSummary,
    units: str
):
    margin_pt = mm_to_pt(margin_mm)
    y = page_h_pt - margin_pt

    c.setFont(TEXT_FONT, 20)
    c.setFillColor(black)
    c.drawString(margin_pt, y - 14, "slabnest cutting summary")
    y -= mm_to_pt(15)

    table_width = page_w_pt - 2 * margin_pt
    row_h = mm_to_pt(7)

    # TABLE 1 — PIECES
    piece_data = summary_piece_rows(summary, units)
    piece_widths = [table_width * f for f in (0.28, 0.2, 0.1, 0.1, 0.1, 0.22)]
    draw_table(c, margin_pt, y, piece_widths, row_h, piece_data,
               font_size=9, numeric_cols=[2, 3, 4, 5])
    y -= row_h * len(piece_data) + mm_to_pt(10)

    # TABLE 2 — TOTALS
    total_data = summary_total_rows(summary, units)
    draw_table(c, margin_pt, y, [table_width * 0.4, table_width * 0.6], row_h,
               total_data, font_size=10, numeric_cols=[1])


# ------------------------------------------------------------
# PAGE SETTINGS
# ------------------------------------------------------------

HEADER_H_MM = 20.0


@dataclass
class PageSettings:
    pagesize: tuple
    margin_mm: float
    target_size: float     # pt, longer slab side
    generate_summary: bool
    slab_color: str
    stroke_color: Color
    units: str


def read_page_settings(cfg: Dict[str, str]) -> PageSettings:
    """
    Reads the diagram keys from config. Raises ValueError when the
    diagram could not be drawn: non-positive target-size, negative margin,
    or a margin leaving no room on the page.
    """
    margin_mm = parse_number(cfg.get("margin", "10"), "margin")
    target_size = parse_number(cfg.get("target-size", str(DEFAULT_TARGET_SIZE)), "target-size")

    if target_size <= 0:
        raise ValueError(f"target-size must be a positive number, got {target_size:g}.")
    if margin_mm < 0:
        raise ValueError(f"margin must not be negative, got {margin_mm:g}.")

    orientation = (cfg.get("orientation", "v") or "v").lower()
    pagesize = landscape(A4) if orientation == "h" else portrait(A4)
    page_w_pt, page_h_pt = pagesize

    margin_pt = mm_to_pt(margin_mm)
    usable_w_pt = page_w_pt - 2 * margin_pt
    usable_h_pt = page_h_pt - 2 * margin_pt - mm_to_pt(HEADER_H_MM)
    if usable_w_pt <= 0 or usable_h_pt <= 0:
        raise ValueError(f"margin {margin_mm:g} mm leaves no room on the page.")

    return PageSettings(
        pagesize=pagesize,
        margin_mm=margin_mm,
        target_size=target_size,
        generate_summary=parse_bool(cfg.get("generate-summary", "true")),
        slab_color="#" + cfg.get("slab-color", "F0F0F0").lstrip("#"),
        stroke_color=parse_rgb(cfg.get("stroke-color", "000")),
        units=cfg.get("units", "mm"),
    )


# ------------------------------------------------------------
# FINAL PDF GENERATOR
# ------------------------------------------------------------

def generate_pdf(
    output_path: str,
    slab: SlabSpec,
    result: CalculationResult,
    summary: GlobalSummary,
    cfg: Dict[str, str]
):
    """
    Generates the complete PDF:
      - optional summary page
      - diagram page
    """
    ps = read_page_settings(cfg)
    register_fonts()

    page_w_pt, page_h_pt = ps.pagesize
    c = canvas.Canvas(output_path, pagesize=ps.pagesize)

    if ps.generate_summary:
        draw_summary_page(c, page_w_pt, page_h_pt, ps.margin_mm, summary, ps.units)
        c.showPage()

    draw_diagram_page(
        c=c,
        page_width_pt=page_w_pt,
        page_height_pt=page_h_pt,
        margin_mm=ps.margin_mm,
        slab=slab,
        result=result,
        target_size=ps.target_size,
        slab_color=ps.slab_color,
        stroke_color=ps.stroke_color,
        units=ps.units
    )
    c.showPage()

    c.save()
    logger.debug("wrote %s", output_path)
