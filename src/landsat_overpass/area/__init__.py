"""Multi-pixel area analysis."""

from .grid import (
    DEFAULT_PIXEL_FOOTPRINT_DEG,
    GridCellResult,
    GridExpander,
    GridReport,
    expand_grid,
    reflectance_cell_handler,
    snapshot_cell_handler,
)
from .snapshot import ImagerySnapshotClient

__all__ = [
    "DEFAULT_PIXEL_FOOTPRINT_DEG",
    "expand_grid",
    "GridExpander",
    "GridCellResult",
    "GridReport",
    "reflectance_cell_handler",
    "snapshot_cell_handler",
    "ImagerySnapshotClient",
]
