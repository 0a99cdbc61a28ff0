"""Constant and checkerboard textures over float or colour values."""

from __future__ import annotations

import math
from abc import abstractmethod
from typing import Any

import numpy as np

from .color import Color3
from .objects import ClassType, PropertyList, SceneObject, register_class


def _format_value(value: Any) -> str:
    if isinstance(value, Color3):
        return f"[{value.r:g}, {value.g:g}, {value.b:g}]"
    return f"{value:f}"


def _format_pair(values) -> str:
    return "[" + ", ".join(f"{float(v):g}" for v in values) + "]"


class Texture(SceneObject):
    """A value that varies over the UV parameterization of a surface."""

    @property
    def class_type(self) -> ClassType:
        return ClassType.TEXTURE

    @abstractmethod
    def eval(self, uv) -> Any:
        """Texture value at the coordinates ``uv``."""


class ConstantTexture(Texture):
    """Texture with the same value everywhere."""

    def __init__(self, value: Any) -> None:
        self.value = value

    def __str__(self) -> str:
        return f"ConstantTexture[ {_format_value(self.value)} ]"

    def eval(self, uv) -> Any:
        return self.value


class Checkerboard(Texture):
    """Alternates between two values on a grid of unit cells in scaled UV space."""

    def __init__(self, value1: Any, value2: Any, delta=(0.0, 0.0), scale=(1.0, 1.0)) -> None:
        self.value1 = value1
        self.value2 = value2
        self.delta = np.asarray(delta, dtype=float)
        self.scale = np.asarray(scale, dtype=float)

    def __str__(self) -> str:
        label = "tex" if isinstance(self.value1, Color3) else "value"
        return (
            "Checkerboard[\n"
            f"  delta = {_format_pair(self.delta)},\n"
            f"  scale = {_format_pair(self.scale)},\n"
            f"  {label}1 = {_format_value(self.value1)},\n"
            f"  {label}2 = {_format_value(self.value2)},\n"
            "]"
        )

    def eval(self, uv) -> Any:
        u = float(uv[0]) / self.scale[0] - self.delta[0]
        v = float(uv[1]) / self.scale[1] - self.delta[1]
        if (math.floor(u) + math.floor(v)) % 2 != 0:
            return self.value2
        return self.value1


def _constant_float(props: PropertyList) -> ConstantTexture:
    return ConstantTexture(props.get_float("value", 0.0))


def _constant_color(props: PropertyList) -> ConstantTexture:
    return ConstantTexture(props.get_color("value", Color3(0.0)))


def _checkerboard_float(props: PropertyList) -> Checkerboard:
    return Checkerboard(
        props.get_float("value1", 0.0),
        props.get_float("value2", 1.0),
        props.get_point2("delta", (0.0, 0.0)),
        props.get_vector2("scale", (1.0, 1.0)),
    )


def _checkerboard_color(props: PropertyList) -> Checkerboard:
    return Checkerboard(
        props.get_color("value1", Color3(0.0)),
        props.get_color("value2", Color3(1.0)),
        props.get_point2("delta", (0.0, 0.0)),
        props.get_vector2("scale", (1.0, 1.0)),
    )


register_class("constant_float", _constant_float)
register_class("constant_color", _constant_color)
register_class("checkerboard_float", _checkerboard_float)
register_class("checkerboard_color", _checkerboard_color)