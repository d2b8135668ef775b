"""
Shared test fixtures — slabs, piece factory, sample input files.
"""

import pytest

from models import PieceSpec, SlabSpec


@pytest.fixture
def slab():
    """Default 1000 x 2000 mm slab."""
    return SlabSpec(width=1000, height=2000)


@pytest.fixture
def make_piece():
    """Piece factory with a fixed colour."""
    def _make(name="Piece 1", width=200, height=300, color="#123456"):
        return PieceSpec(name=name, width=width, height=height, color=color)
    return _make


@pytest.fixture
def pieces_csv(tmp_path):
    path = tmp_path / "pieces.csv"
    path.write_text(
        "name,width,height,color\n"
        "Piece 1,200,300,#1f77b4\n"
        "Shelf,450,120,\n"
        "Door,400,700,d62728\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.properties"
    path.write_text(
        "# slab\n"
        "slab-width=1000\n"
        "slab-height=2000\n"
        "target-size=300\n"
        "generate-summary=true\n",
        encoding="utf-8",
    )
    return path
