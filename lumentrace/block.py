"""Image blocks accumulating filtered radiance samples, and a spiral block generator."""

from __future__ import annotations

import logging
import math
import threading
from abc import abstractmethod
from enum import IntEnum

import numpy as np

from .bitmap import Bitmap
from .color import Color3
from .common import SceneError
from .objects import ClassType, SceneObject

logger = logging.getLogger(__name__)

FILTER_RESOLUTION = 32


class ReconstructionFilter(SceneObject):
    """Radially symmetric image reconstruction filter with a radius in pixels."""

    radius: float = 0.0

    @property
    def class_type(self) -> ClassType:
        return ClassType.RECONSTRUCTION_FILTER

    @abstractmethod
    def eval(self, x: float) -> float:
        """Filter value at distance ``x`` from the centre."""


def _format_pair(values) -> str:
    return "[" + ", ".join(str(v) for v in values) + "]"


class ImageBlock:
    """A rectangular part of the image with a border for the filter footprint.

    ``data`` holds ``(r, g, b, weight)`` per pixel, border included.
    """

    def __init__(self, size, reconstruction_filter: ReconstructionFilter | None = None) -> None:
        self._lock = threading.Lock()
        self.init(size, reconstruction_filter)

    def init(self, size, reconstruction_filter: ReconstructionFilter | None = None) -> None:
        """Reset the block to ``size = (width, height)`` and tabulate the filter."""
        self.offset: tuple[int, int] = (0, 0)
        self.size: tuple[int, int] = (int(size[0]), int(size[1]))
        self.border_size = 0
        self.filter_radius = 0.0
        self.block_id = 0
        self._lookup_factor = 0.0
        self._filter_table: np.ndarray | None = None

        if reconstruction_filter is not None:
            radius = float(reconstruction_filter.radius)
            self.filter_radius = radius
            self.border_size = int(math.ceil(radius - 0.5))
            table = [
                reconstruction_filter.eval(radius * i / FILTER_RESOLUTION)
                for i in range(FILTER_RESOLUTION)
            ]
            table.append(0.0)
            self._filter_table = np.array(table, dtype=float)
            self._lookup_factor = FILTER_RESOLUTION / radius

        border = 2 * self.border_size
        self.data = np.zeros((self.size[1] + border, self.size[0] + border, 4))

    @property
    def rows(self) -> int:
        return self.data.shape[0]

    @property
    def cols(self) -> int:
        return self.data.shape[1]

    def __str__(self) -> str:
        return f"ImageBlock[offset={_format_pair(self.offset)}, size={_format_pair(self.size)}]]"

    def to_bitmap(self) -> Bitmap:
        """Divide by the accumulated filter weights and drop the border."""
        b = self.border_size
        width, height = self.size
        region = self.data[b : b + height, b : b + width]
        weight = region[..., 3:4]
        rgb = np.divide(
            region[..., :3],
            weight,
            out=np.zeros_like(region[..., :3]),
            where=weight != 0,
        )
        return Bitmap(width, height, rgb)

    def from_bitmap(self, bitmap: Bitmap) -> None:
        """Fill the block with the bitmap's pixels at unit weight."""
        if bitmap.width != self.cols or bitmap.height != self.rows:
            raise SceneError("Invalid bitmap dimensions!")
        width, height = self.size
        self.data[:height, :width, :3] = bitmap.pixels[:height, :width]
        self.data[:height, :width, 3] = 1.0

    def put(self, pos, value: Color3) -> None:
        """Splat a radiance sample at image position ``pos = (x, y)``."""
        if self._filter_table is None:
            raise SceneError("ImageBlock.put() requires a reconstruction filter!")
        if not value.is_valid():
            logger.error("Integrator: computed an invalid radiance value: %r", value)
            return

        px = float(pos[0]) - 0.5 - (self.offset[0] - self.border_size)
        py = float(pos[1]) - 0.5 - (self.offset[1] - self.border_size)
        radius = self.filter_radius

        x0 = max(math.ceil(px - radius), 0)
        x1 = min(math.floor(px + radius), self.cols - 1)
        y0 = max(math.ceil(py - radius), 0)
        y1 = min(math.floor(py + radius), self.rows - 1)
        if x0 > x1 or y0 > y1:
            return

        def lookup(coords: np.ndarray, centre: float) -> np.ndarray:
            index = (np.abs(coords - centre) * self._lookup_factor).astype(int)
            return self._filter_table[np.minimum(index, FILTER_RESOLUTION)]

        weights_x = lookup(np.arange(x0, x1 + 1), px)
        weights_y = lookup(np.arange(y0, y1 + 1), py)
        weights = np.outer(weights_y, weights_x)
        sample = np.array([value.r, value.g, value.b, 1.0])
        self.data[y0 : y1 + 1, x0 : x1 + 1] += weights[..., None] * sample

    def put_block(self, other: ImageBlock) -> None:
        """Accumulate another block (border included) into this one."""
        ox = other.offset[0] - self.offset[0] + self.border_size - other.border_size
        oy = other.offset[1] - self.offset[1] + self.border_size - other.border_size
        sx = other.size[0] + 2 * other.border_size
        sy = other.size[1] + 2 * other.border_size
        with self._lock:
            self.data[oy : oy + sy, ox : ox + sx] += other.data[:sy, :sx]


class _Direction(IntEnum):
    RIGHT = 0
    DOWN = 1
    LEFT = 2
    UP = 3


class BlockGenerator:
    """Hands out image blocks in a spiral starting at the image centre."""

    def __init__(self, size, block_size: int) -> None:
        self.size = (int(size[0]), int(size[1]))
        self.block_size = int(block_size)
        self.num_blocks = (
            math.ceil(self.size[0] / self.block_size),
            math.ceil(self.size[1] / self.block_size),
        )
        self._lock = threading.Lock()
        self.reset()

    def reset(self) -> None:
        """Restart the spiral."""
        nx, ny = self.num_blocks
        self.blocks_left = nx * ny
        self._direction = _Direction.RIGHT
        self._block = [nx // 2, ny // 2]
        self._steps_left = 1
        self._num_steps = 1

    def next(self, block: ImageBlock) -> bool:
        """Configure ``block`` as the next tile; False once all tiles are done."""
        with self._lock:
            if self.blocks_left == 0:
                return False

            bx, by = self._block
            pos = (bx * self.block_size, by * self.block_size)
            block.offset = pos
            block.size = (
                min(self.size[0] - pos[0], self.block_size),
                min(self.size[1] - pos[1], self.block_size),
            )
            block.block_id = by * self.num_blocks[0] + bx

            self.blocks_left -= 1
            if self.blocks_left == 0:
                return True

            while True:
                if self._direction is _Direction.RIGHT:
                    self._block[0] += 1
                elif self._direction is _Direction.DOWN:
                    self._block[1] += 1
                elif self._direction is _Direction.LEFT:
                    self._block[0] -= 1
                else:
                    self._block[1] -= 1

                self._steps_left -= 1
                if self._steps_left == 0:
                    self._direction = _Direction((self._direction + 1) % 4)
                    if self._direction in (_Direction.LEFT, _Direction.RIGHT):
                        self._num_steps += 1
                    self._steps_left = self._num_steps

                x, y = self._block
                if 0 <= x < self.num_blocks[0] and 0 <= y < self.num_blocks[1]:
                    return True