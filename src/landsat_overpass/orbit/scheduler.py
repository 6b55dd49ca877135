"""Overpass prediction across every tracked satellite."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from ..core.errors import PropagationError, SearchTimeout
from ..core.location import GroundPoint
from ..core.passes import OverpassResult
from ..core.satellites import OrbitalElements
from .model import OrbitModel
from .search import OverpassSearch, SubPointModel

logger = logging.getLogger(__name__)


class OverpassScheduler:
    """Runs one overpass search per tracked satellite and joins the results.

    Satellites are searched concurrently. A failure in one satellite's
    search is reported on that satellite's result and never affects the
    others.
    """

    def __init__(
        self,
        satellites: Sequence[OrbitalElements],
        search: OverpassSearch | None = None,
        model_factory: Callable[[OrbitalElements], SubPointModel] = OrbitModel,
        max_workers: int | None = None,
    ):
        """Initialize the scheduler.

        Args:
            satellites: Element sets in reporting order
            search: Search settings shared by every satellite
            model_factory: Builds an orbit model from an element set
            max_workers: Thread pool size. Defaults to one per satellite.
        """
        self.satellites = list(satellites)
        self.search = search or OverpassSearch()
        self.model_factory = model_factory
        self.max_workers = max_workers or max(len(self.satellites), 1)

    def _predict_one(
        self,
        elements: OrbitalElements,
        target: GroundPoint,
        start: datetime | None,
        cancel: threading.Event | None,
        refine: bool,
    ) -> OverpassResult:
        try:
            model = self.model_factory(elements)
            predicted = self.search.next_overpass(model, target, start=start, cancel=cancel)
            if predicted is not None and refine:
                predicted = self.search.refine(model, target, predicted)
        except PropagationError as e:
            logger.warning(f"Propagation failed for {elements.name}: {e}")
            return OverpassResult(elements.name, None, error=str(e))
        except SearchTimeout as e:
            logger.warning(str(e))
            return OverpassResult(elements.name, None, error=str(e))
        return OverpassResult(elements.name, predicted)

    def predict(
        self,
        target: GroundPoint,
        start: datetime | None = None,
        cancel: threading.Event | None = None,
        refine: bool = False,
    ) -> list[OverpassResult]:
        """Predict the next overpass of every tracked satellite.

        Args:
            target: Ground point to watch
            start: Scan origin shared by all satellites. Defaults to now.
            cancel: Event that aborts every running scan when set
            refine: Report the closest approach near each first match
                instead of the first matching step

        Returns:
            One OverpassResult per satellite, in configured order
        """
        if not self.satellites:
            return []

        start = start or self.search.clock()
        logger.info(
            f"Predicting overpasses of {len(self.satellites)} satellites over "
            f"({target.latitude}, {target.longitude})"
        )

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                executor.submit(self._predict_one, elements, target, start, cancel, refine)
                for elements in self.satellites
            ]
            return [future.result() for future in futures]
