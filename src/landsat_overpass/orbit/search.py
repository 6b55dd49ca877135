"""Fixed-step forward scan for the next overpass of a ground point."""

from __future__ import annotations

import logging
import math
import threading
import time
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Protocol

from ..core.errors import PropagationError, SearchTimeout
from ..core.location import GroundPoint

logger = logging.getLogger(__name__)

DEFAULT_STEP = timedelta(minutes=1)
DEFAULT_MAX_STEPS = 30000  # ~21 days at one-minute steps
DEFAULT_THRESHOLD_DEG = 1.0

GOLDEN_RATIO = (math.sqrt(5) - 1) / 2


class SubPointModel(Protocol):
    """Anything that can place a satellite over the ground at an instant."""

    name: str

    def sub_point_at(self, instant: datetime) -> GroundPoint:
        ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OverpassSearch:
    """Scan forward in fixed steps until a satellite is over a target.

    The reported instant is the first step whose sub-point lies within
    ``threshold_deg`` of the target in both latitude and longitude, not
    the instant of closest approach. Use :meth:`refine` for that.
    """

    def __init__(
        self,
        step: timedelta = DEFAULT_STEP,
        max_steps: int = DEFAULT_MAX_STEPS,
        threshold_deg: float = DEFAULT_THRESHOLD_DEG,
        timeout: float | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the search.

        Args:
            step: Time increment between checks
            max_steps: Number of steps before giving up (the horizon)
            threshold_deg: Proximity threshold in degrees, per axis
            timeout: Wall-clock budget in seconds for one scan, or None
            clock: Source of "now" for scans without an explicit start
        """
        if step <= timedelta(0):
            raise ValueError("step must be positive")
        if max_steps < 1:
            raise ValueError("max_steps must be at least 1")
        self.step = step
        self.max_steps = max_steps
        self.threshold_deg = threshold_deg
        self.timeout = timeout
        self.clock = clock

    @property
    def horizon(self) -> timedelta:
        return self.step * self.max_steps

    def is_within(self, point: GroundPoint, target: GroundPoint) -> bool:
        """Check if a sub-point is within threshold of the target."""
        return (
            abs(point.latitude - target.latitude) < self.threshold_deg and
            abs(point.longitude - target.longitude) < self.threshold_deg
        )

    def next_overpass(
        self,
        model: SubPointModel,
        target: GroundPoint,
        start: datetime | None = None,
        cancel: threading.Event | None = None,
    ) -> datetime | None:
        """Find the next instant the satellite passes over the target.

        Checks ``start + k * step`` for k = 1 .. max_steps. Steps where
        propagation fails are skipped.

        Args:
            model: Orbit model of the satellite
            target: Ground point to watch
            start: Scan origin. Defaults to the clock's current time.
            cancel: Event that aborts the scan when set

        Returns:
            Instant of the first matching step, or None if the horizon is
            exhausted

        Raises:
            SearchTimeout: If the wall-clock budget runs out or cancel is set
        """
        start = start or self.clock()
        deadline = (
            time.monotonic() + self.timeout if self.timeout is not None else None
        )
        skipped = 0

        for k in range(1, self.max_steps + 1):
            if cancel is not None and cancel.is_set():
                raise SearchTimeout(f"Overpass search for {model.name} was cancelled")
            if deadline is not None and time.monotonic() > deadline:
                raise SearchTimeout(
                    f"Overpass search for {model.name} exceeded {self.timeout}s"
                )

            instant = start + self.step * k
            try:
                point = model.sub_point_at(instant)
            except PropagationError as e:
                skipped += 1
                logger.debug(f"Skipping step {k} for {model.name}: {e}")
                continue

            if self.is_within(point, target):
                logger.debug(f"{model.name} within threshold at step {k} ({instant})")
                return instant

        if skipped:
            logger.warning(
                f"{model.name}: {skipped}/{self.max_steps} steps failed to propagate"
            )
        logger.info(f"No overpass of {model.name} found within {self.horizon}")
        return None

    def refine(
        self,
        model: SubPointModel,
        target: GroundPoint,
        matched: datetime,
        tolerance: timedelta = timedelta(seconds=1),
    ) -> datetime:
        """Narrow a matched step down to the instant of closest approach.

        Golden-section search over ``[matched - step, matched + step]``
        minimizing the lat/lon distance to the target. The first-match
        result of :meth:`next_overpass` is unaffected.

        Args:
            model: Orbit model used for the original scan
            target: Ground point of the original scan
            matched: Instant returned by next_overpass
            tolerance: Stop once the bracket is narrower than this

        Returns:
            Instant of closest approach within the bracket
        """
        def distance(offset: float) -> float:
            try:
                point = model.sub_point_at(matched + timedelta(seconds=offset))
            except PropagationError:
                return math.inf
            return math.hypot(
                point.latitude - target.latitude,
                point.longitude - target.longitude,
            )

        low = -self.step.total_seconds()
        high = self.step.total_seconds()
        tol = tolerance.total_seconds()

        x1 = high - GOLDEN_RATIO * (high - low)
        x2 = low + GOLDEN_RATIO * (high - low)
        f1, f2 = distance(x1), distance(x2)
        while high - low > tol:
            if f1 <= f2:
                high, x2, f2 = x2, x1, f1
                x1 = high - GOLDEN_RATIO * (high - low)
                f1 = distance(x1)
            else:
                low, x1, f1 = x1, x2, f2
                x2 = low + GOLDEN_RATIO * (high - low)
                f2 = distance(x2)

        return matched + timedelta(seconds=(low + high) / 2)
