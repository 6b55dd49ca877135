"""3x3 pixel neighborhood expansion for area analysis."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Any

import pandas as pd

from ..catalog.matcher import SceneMatcher
from ..catalog.models import DateWindow, SceneQuery
from ..catalog.resolver import BandResolver
from ..core.location import GroundPoint
from .snapshot import DEFAULT_DIM_DEG, ImagerySnapshotClient

logger = logging.getLogger(__name__)

# ~30 m Landsat ground sample distance in degrees
DEFAULT_PIXEL_FOOTPRINT_DEG = 0.00027

DEFAULT_MAX_WORKERS = 4
MAX_WORKERS_LIMIT = 9

CellHandler = Callable[[GroundPoint], Any]


def _clamp(value: float, limit: float) -> float:
    return max(-limit, min(limit, value))


def expand_grid(center: GroundPoint,
                footprint: float = DEFAULT_PIXEL_FOOTPRINT_DEG) -> list[GroundPoint]:
    """The 3x3 neighborhood of a center point, center included.

    Points are ordered row-major: north to south, then west to east.
    Coordinates pushed past the poles or the antimeridian are clamped.

    Args:
        center: Center of the neighborhood
        footprint: Angular size of one pixel in degrees

    Returns:
        Nine ground points
    """
    return [
        GroundPoint(
            latitude=_clamp(center.latitude + row * footprint, 90),
            longitude=_clamp(center.longitude + col * footprint, 180),
        )
        for row in (1, 0, -1)
        for col in (-1, 0, 1)
    ]


@dataclass(frozen=True)
class GridCellResult:
    """Outcome for one grid cell: a result or an error, never both.

    Attributes:
        point: Ground point of the cell
        result: Handler output when the cell succeeded
        error: Error message when the cell failed
    """
    point: GroundPoint
    result: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "point": {"latitude": self.point.latitude, "longitude": self.point.longitude},
        }
        if self.ok:
            data["result"] = self.result
        else:
            data["error"] = self.error
        return data


@dataclass
class GridReport:
    """Results for a whole grid, in row-major cell order."""
    center: GroundPoint
    footprint: float
    cells: list[GridCellResult]

    @property
    def failed(self) -> list[GridCellResult]:
        return [cell for cell in self.cells if not cell.ok]

    def to_dataframe(self) -> pd.DataFrame:
        """Get the cells as a DataFrame, one row per cell."""
        data = []
        for index, cell in enumerate(self.cells):
            data.append({
                "Cell": index,
                "Latitude": cell.point.latitude,
                "Longitude": cell.point.longitude,
                "Status": "ok" if cell.ok else "error",
                "Detail": cell.error if not cell.ok else _summarize(cell.result),
            })
        return pd.DataFrame(data)

    def to_dict(self) -> dict:
        return {
            "center": {"latitude": self.center.latitude, "longitude": self.center.longitude},
            "footprint_deg": self.footprint,
            "cells": [cell.to_dict() for cell in self.cells],
        }


def _summarize(result: Any) -> str:
    if isinstance(result, dict) and "reflectance" in result:
        if result.get("scene") is None:
            return "no scenes found"
        return f"{len(result['reflectance'])} bands"
    return str(result)


class GridExpander:
    """Fans a per-point handler out over a 3x3 neighborhood.

    Cells run on a bounded thread pool. Every cell's failure is captured on
    that cell; the batch never fails as a whole.
    """

    def __init__(self, cell_handler: CellHandler, max_workers: int = DEFAULT_MAX_WORKERS):
        """Initialize the expander.

        Args:
            cell_handler: Called once per grid point; its return value is
                the cell result
            max_workers: Concurrent handler calls, clamped to 1..9
        """
        self.cell_handler = cell_handler
        self.max_workers = max(1, min(MAX_WORKERS_LIMIT, max_workers))

    def _run_cell(self, point: GroundPoint) -> GridCellResult:
        try:
            return GridCellResult(point=point, result=self.cell_handler(point))
        except Exception as e:
            logger.error(f"Grid cell ({point.latitude}, {point.longitude}) failed: {e}")
            return GridCellResult(point=point, error=str(e) or type(e).__name__)

    def run(self, center: GroundPoint,
            footprint: float = DEFAULT_PIXEL_FOOTPRINT_DEG) -> GridReport:
        """Process every cell of the neighborhood around center.

        Returns:
            GridReport with cells in row-major order
        """
        points = expand_grid(center, footprint)
        logger.info(
            f"Processing {len(points)} grid cells around "
            f"({center.latitude}, {center.longitude}) with {self.max_workers} workers"
        )
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            cells = list(executor.map(self._run_cell, points))
        return GridReport(center=center, footprint=footprint, cells=cells)


def reflectance_cell_handler(matcher: SceneMatcher, resolver: BandResolver,
                             window: DateWindow, max_cloud_cover: float) -> CellHandler:
    """Cell handler that matches a scene and resolves its bands."""
    def handle(point: GroundPoint) -> dict:
        scene = matcher.find_scene(SceneQuery(point, window, max_cloud_cover))
        if scene is None:
            return {"scene": None, "reflectance": {}}
        return {"scene": scene.metadata(), "reflectance": resolver.resolve_bands(scene)}
    return handle


def snapshot_cell_handler(client: ImagerySnapshotClient, day: date,
                          dim: float = DEFAULT_DIM_DEG) -> CellHandler:
    """Cell handler that looks up an imagery snapshot URL."""
    def handle(point: GroundPoint) -> str:
        return client.fetch_snapshot(point, day, dim)
    return handle
