"""Linear RGB colour values."""

from __future__ import annotations

import math
from numbers import Real
from typing import Iterator


def _components(other: object) -> tuple[float, float, float] | None:
    if isinstance(other, Color3):
        return other.r, other.g, other.b
    if isinstance(other, Real) and not isinstance(other, bool):
        value = float(other)
        return value, value, value
    return None


class Color3:
    """An RGB triple; ``Color3(v)`` gives a gray of value ``v``."""

    __slots__ = ("r", "g", "b")

    def __init__(self, r: float = 0.0, g: float | None = None, b: float | None = None) -> None:
        if g is None and b is None:
            g = b = r
        elif g is None or b is None:
            raise TypeError("Color3 takes either one or three components")
        self.r = float(r)
        self.g = float(g)
        self.b = float(b)

    def __iter__(self) -> Iterator[float]:
        return iter((self.r, self.g, self.b))

    def __getitem__(self, index: int) -> float:
        return (self.r, self.g, self.b)[index]

    def __len__(self) -> int:
        return 3

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color3):
            return NotImplemented
        return tuple(self) == tuple(other)

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"Color3({self.r!r}, {self.g!r}, {self.b!r})"

    def _combine(self, other: object, op) -> Color3:
        values = _components(other)
        if values is None:
            return NotImplemented
        return Color3(*(op(a, b) for a, b in zip(self, values)))

    def __add__(self, other: object) -> Color3:
        return self._combine(other, lambda a, b: a + b)

    __radd__ = __add__

    def __sub__(self, other: object) -> Color3:
        return self._combine(other, lambda a, b: a - b)

    def __rsub__(self, other: object) -> Color3:
        return self._combine(other, lambda a, b: b - a)

    def __mul__(self, other: object) -> Color3:
        return self._combine(other, lambda a, b: a * b)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Color3:
        return self._combine(other, lambda a, b: a / b)

    def __neg__(self) -> Color3:
        return Color3(-self.r, -self.g, -self.b)

    def to_srgb(self) -> Color3:
        """Apply the sRGB transfer curve."""

        def encode(value: float) -> float:
            if value <= 0.0031308:
                return 12.92 * value
            return (1.0 + 0.055) * value ** (1.0 / 2.4) - 0.055

        return Color3(*(encode(v) for v in self))

    def to_linear_rgb(self) -> Color3:
        """Invert the sRGB transfer curve."""

        def decode(value: float) -> float:
            if value <= 0.04045:
                return value * (1.0 / 12.92)
            return ((value + 0.055) * (1.0 / 1.055)) ** 2.4

        return Color3(*(decode(v) for v in self))

    def is_valid(self) -> bool:
        """True when every channel is finite and non-negative."""
        return all(math.isfinite(v) and v >= 0 for v in self)

    def luminance(self) -> float:
        return self.r * 0.212671 + self.g * 0.715160 + self.b * 0.072169