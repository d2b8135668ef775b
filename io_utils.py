# io_utils.py — slabnest ver1.0
# Reading the pieces CSV, parsing config, validating fields.

import csv
import math
from typing import Dict, List, Optional

from models import PieceSpec, SlabSpec, default_piece_name, generate_color


# ------------------------------
# Boolean parser
# ------------------------------

def parse_bool(val: str) -> bool:
    if val is None:
        return False
    v = val.strip().lower()
    return v in ("1", "true", "yes", "y", "on")


# ------------------------------
# Number parser
# ------------------------------

def parse_number(val: Optional[str], field_name: str) -> float:
    """
    Finite number. A comma is only accepted as the decimal separator:
    "12,5" and "1,000" read as 12.5 and 1.0. Values mixing both separators
    or holding several commas ("1,000.5", "1,000,000") are rejected.
    """
    if val is None or not val.strip():
        raise ValueError(f"{field_name} is missing.")
    s = val.strip()
    if "," in s and ("." in s or s.count(",") > 1):
        raise ValueError(f"{field_name} has an ambiguous separator: '{s}'.")
    try:
        number = float(s.replace(",", "."))
    except ValueError:
        raise ValueError(f"{field_name} is not a number: '{s}'.")
    if not math.isfinite(number):
        raise ValueError(f"{field_name} must be a finite number: '{s}'.")
    return number


# ------------------------------
# Config parser (strict one key per line)
# ------------------------------

def parse_properties(path: str) -> Dict[str, str]:
    """
    Conservative parser:
    - One key=value per line
    - Lines without '=' are ignored
    - '#' at start of line = comment
    """
    props: Dict[str, str] = {}
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, val = line.split("=", 1)
            props[key.strip()] = val.strip()
    return props


def parse_slab(cfg: Dict[str, str],
               width: Optional[float] = None,
               height: Optional[float] = None) -> SlabSpec:
    """
    Slab from `slab-width` / `slab-height`; explicit arguments win.
    Sign is not checked here, the calculator reports it.
    """
    if width is None:
        width = parse_number(cfg.get("slab-width"), "slab-width")
    if height is None:
        height = parse_number(cfg.get("slab-height"), "slab-height")
    return SlabSpec(width=width, height=height)


# ------------------------------
# Pieces CSV
# ------------------------------

def parse_pieces(path: str) -> List[PieceSpec]:
    pieces: List[PieceSpec] = []
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)

        required = {"name", "width", "height"}
        if not required.issubset(set(reader.fieldnames or [])):
            raise ValueError("pieces.csv missing required columns (name, width, height)")

        for line_no, row in enumerate(reader, start=2):
            w_raw = (row.get("width") or "").strip()
            h_raw = (row.get("height") or "").strip()
            name = (row.get("name") or "").strip()
            if not (name or w_raw or h_raw):
                continue

            if not name:
                name = default_piece_name(len(pieces) + 1)

            width = parse_number(w_raw, f"line {line_no}: width")
            height = parse_number(h_raw, f"line {line_no}: height")

            color = (row.get("color") or "").strip()
            if not color:
                color = generate_color()
            elif not color.startswith("#"):
                color = "#" + color

            pieces.append(PieceSpec(name=name, width=width, height=height, color=color))

    return pieces
