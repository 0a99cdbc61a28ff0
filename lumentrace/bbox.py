"""Rays and axis-aligned bounding boxes of any dimension."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .common import EPSILON


def _format_point(p: np.ndarray) -> str:
    return "[" + ", ".join(f"{float(v):g}" for v in p) + "]"


@dataclass
class Ray:
    """Ray ``o + t * d`` restricted to the segment ``[mint, maxt]``."""

    o: np.ndarray
    d: np.ndarray
    mint: float = EPSILON
    maxt: float = math.inf

    def __post_init__(self) -> None:
        self.o = np.asarray(self.o, dtype=float)
        self.d = np.asarray(self.d, dtype=float)

    @property
    def d_rcp(self) -> np.ndarray:
        """Componentwise reciprocal of the direction."""
        with np.errstate(divide="ignore"):
            return 1.0 / self.d

    def at(self, t: float) -> np.ndarray:
        """Point at distance ``t`` along the ray."""
        return self.o + t * self.d


class BoundingBox:
    """Axis-aligned box holding a componentwise minimum and maximum point.

    With no points the box is invalid (``min = +inf``, ``max = -inf``); with a
    single point it collapses to that point.
    """

    __slots__ = ("min", "max")

    def __init__(self, min_point=None, max_point=None, dimension: int = 3) -> None:
        if min_point is None:
            self.min = np.full(dimension, math.inf)
            self.max = np.full(dimension, -math.inf)
            return
        self.min = np.array(min_point)
        self.max = np.array(min_point if max_point is None else max_point)

    @property
    def dimension(self) -> int:
        return len(self.min)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundingBox):
            return NotImplemented
        return bool(np.array_equal(self.min, other.min) and np.array_equal(self.max, other.max))

    def __repr__(self) -> str:
        return f"BoundingBox({self.min.tolist()}, {self.max.tolist()})"

    def __str__(self) -> str:
        if not self.is_valid():
            return "BoundingBox[invalid]"
        return f"BoundingBox[min={_format_point(self.min)}, max={_format_point(self.max)}]"

    def volume(self) -> float:
        """The n-dimensional volume."""
        return float(np.prod(self.max - self.min))

    def surface_area(self) -> float:
        """The (n-1)-dimensional volume of the boundary."""
        d = self.max - self.min
        return 2.0 * float(sum(np.prod(np.delete(d, i)) for i in range(len(d))))

    def center(self) -> np.ndarray:
        return (self.max + self.min) * 0.5

    def contains(self, other, strict: bool = False) -> bool:
        """Whether a point or a box lies inside (or on) this box."""
        if isinstance(other, BoundingBox):
            lo, hi = other.min, other.max
        else:
            lo = hi = np.asarray(other)
        if strict:
            return bool(np.all(lo > self.min) and np.all(hi < self.max))
        return bool(np.all(lo >= self.min) and np.all(hi <= self.max))

    def overlaps(self, other: BoundingBox, strict: bool = False) -> bool:
        """Whether two boxes overlap."""
        if strict:
            return bool(np.all(other.min < self.max) and np.all(other.max > self.min))
        return bool(np.all(other.min <= self.max) and np.all(other.max >= self.min))

    def squared_distance_to(self, other) -> float:
        """Smallest squared distance to a point or another box."""
        if isinstance(other, BoundingBox):
            lo, hi = other.min, other.max
        else:
            lo = hi = np.asarray(other)
        gap = np.where(hi < self.min, self.min - hi, np.where(lo > self.max, lo - self.max, 0))
        return float(np.sum(gap * gap))

    def distance_to(self, other) -> float:
        """Smallest distance to a point or another box."""
        return math.sqrt(self.squared_distance_to(other))

    def is_valid(self) -> bool:
        return bool(np.all(self.max >= self.min))

    def is_point(self) -> bool:
        return bool(np.all(self.max == self.min))

    def has_volume(self) -> bool:
        return bool(np.all(self.max > self.min))

    def major_axis(self) -> int:
        """Index of the longest side (first one on ties)."""
        return int(np.argmax(self.max - self.min))

    def minor_axis(self) -> int:
        """Index of the shortest side (first one on ties)."""
        return int(np.argmin(self.max - self.min))

    def extents(self) -> np.ndarray:
        return self.max - self.min

    def clip(self, other: BoundingBox) -> None:
        """Restrict this box to its intersection with ``other``."""
        self.min = np.maximum(self.min, other.min)
        self.max = np.minimum(self.max, other.max)

    def reset(self) -> None:
        """Mark the box as invalid."""
        dim = self.dimension
        self.min = np.full(dim, math.inf)
        self.max = np.full(dim, -math.inf)

    def expand_by(self, other) -> None:
        """Grow the box to contain a point or another box."""
        if isinstance(other, BoundingBox):
            self.min = np.minimum(self.min, other.min)
            self.max = np.maximum(self.max, other.max)
        else:
            p = np.asarray(other)
            self.min = np.minimum(self.min, p)
            self.max = np.maximum(self.max, p)

    @staticmethod
    def merge(first: BoundingBox, second: BoundingBox) -> BoundingBox:
        """Smallest box containing both boxes."""
        return BoundingBox(np.minimum(first.min, second.min), np.maximum(first.max, second.max))

    def largest_axis(self) -> int:
        """Index of the largest axis (first one on ties)."""
        return int(np.argmax(self.max - self.min))

    def corner(self, index: int) -> np.ndarray:
        """Corner whose i-th coordinate is the maximum when bit i of ``index`` is set."""
        bits = [(index >> i) & 1 for i in range(self.dimension)]
        return np.where(np.array(bits, dtype=bool), self.max, self.min)

    def _slab(self, ray: Ray) -> tuple[float, float] | None:
        near, far = -math.inf, math.inf
        rcp = ray.d_rcp
        for i in range(3):
            origin = float(ray.o[i])
            lo, hi = float(self.min[i]), float(self.max[i])
            if ray.d[i] == 0:
                if origin < lo or origin > hi:
                    return None
                continue
            t1 = (lo - origin) * float(rcp[i])
            t2 = (hi - origin) * float(rcp[i])
            if t1 > t2:
                t1, t2 = t2, t1
            near = max(t1, near)
            far = min(t2, far)
            if not near <= far:
                return None
        return near, far

    def ray_intersect(self, ray: Ray) -> bool:
        """Whether the ray segment ``[mint, maxt]`` touches the box."""
        span = self._slab(ray)
        if span is None:
            return False
        near, far = span
        return ray.mint <= far and near <= ray.maxt

    def ray_overlap(self, ray: Ray) -> tuple[float, float] | None:
        """Parameter range ``(near, far)`` of the unbounded ray inside the box, or None."""
        return self._slab(ray)