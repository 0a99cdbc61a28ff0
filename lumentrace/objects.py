"""Scene object base class, property lists and the class registry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from enum import IntEnum
from numbers import Real
from typing import Any, Optional

import numpy as np

from .color import Color3
from .common import SceneError


class ClassType(IntEnum):
    SCENE = 0
    MESH = 1
    TEXTURE = 2
    BSDF = 3
    PHASE_FUNCTION = 4
    EMITTER = 5
    MEDIUM = 6
    CAMERA = 7
    INTEGRATOR = 8
    SAMPLER = 9
    TEST = 10
    RECONSTRUCTION_FILTER = 11


_CLASS_TYPE_NAMES = {
    ClassType.SCENE: "scene",
    ClassType.MESH: "shape",
    ClassType.TEXTURE: "texture",
    ClassType.BSDF: "bsdf",
    ClassType.EMITTER: "emitter",
    ClassType.CAMERA: "camera",
    ClassType.INTEGRATOR: "integrator",
    ClassType.SAMPLER: "sampler",
    ClassType.TEST: "test",
}


def class_type_name(kind: ClassType) -> str:
    """Human-readable name of a class type."""
    return _CLASS_TYPE_NAMES.get(kind, "<unknown>")


_MISSING: Any = object()


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_pair(value: object) -> bool:
    return (
        isinstance(value, (Sequence, np.ndarray))
        and not isinstance(value, str)
        and len(value) == 2
        and all(_is_number(v) for v in value)
    )


class PropertyList:
    """Named, typed parameters handed to scene object constructors."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = {}
        for name, value in (values or {}).items():
            self.set(name, value)

    def __repr__(self) -> str:
        return f"PropertyList({self._values!r})"

    def set(self, name: str, value: Any) -> None:
        if name in self._values:
            raise SceneError(f'Property "{name}" was specified multiple times!')
        self._values[name] = value

    def has(self, name: str) -> bool:
        return name in self._values

    def _get(self, name, default, kind, check, convert):
        if name not in self._values:
            if default is _MISSING:
                raise SceneError(f'Property "{name}" is missing!')
            return convert(default)
        value = self._values[name]
        if not check(value):
            raise SceneError(f'Property "{name}" has the wrong type! (expected <{kind}>)')
        return convert(value)

    def get_float(self, name: str, default: Any = _MISSING) -> float:
        return self._get(name, default, "float", _is_number, float)

    def get_integer(self, name: str, default: Any = _MISSING) -> int:
        return self._get(
            name, default, "integer", lambda v: isinstance(v, int) and not isinstance(v, bool), int
        )

    def get_string(self, name: str, default: Any = _MISSING) -> str:
        return self._get(name, default, "string", lambda v: isinstance(v, str), str)

    def get_color(self, name: str, default: Any = _MISSING) -> Color3:
        return self._get(name, default, "color", lambda v: isinstance(v, Color3), lambda v: v)

    def get_point2(self, name: str, default: Any = _MISSING) -> np.ndarray:
        return self._get(
            name, default, "point2", _is_pair, lambda v: np.asarray(v, dtype=float).copy()
        )

    def get_vector2(self, name: str, default: Any = _MISSING) -> np.ndarray:
        return self._get(
            name, default, "vector2", _is_pair, lambda v: np.asarray(v, dtype=float).copy()
        )


class SceneObject(ABC):
    """Base class of everything that can appear in a scene description."""

    id_name: str = ""
    parent: Optional["SceneObject"] = None
    activated: bool = False

    @property
    @abstractmethod
    def class_type(self) -> ClassType:
        """Kind of object this instance provides."""

    def add_child(self, child: SceneObject) -> None:
        """Attach a child object; unsupported unless a subclass overrides it."""
        raise SceneError(
            "SceneObject.add_child() is not implemented for objects of type "
            f"'{class_type_name(self.class_type)}'!"
        )

    def set_parent(self, parent: SceneObject) -> None:
        """Record that this object was added to ``parent``."""
        self.parent = parent

    def activate(self) -> None:
        """Finish initialization after all children have been added."""
        self.activated = True


Constructor = Callable[[PropertyList], SceneObject]

_constructors: dict[str, Constructor] = {}


def register_class(name: str, constructor: Constructor | None = None):
    """Register a constructor under ``name``; usable as a class decorator."""
    if constructor is None:

        def decorator(cls):
            _constructors[name] = cls
            return cls

        return decorator
    _constructors[name] = constructor
    return constructor


def create_instance(name: str, properties: PropertyList) -> SceneObject:
    """Construct the object registered under ``name``."""
    try:
        constructor = _constructors[name]
    except KeyError:
        raise SceneError(f'A constructor for class "{name}" could not be found!') from None
    return constructor(properties)


def registered_classes() -> list[str]:
    """Names of all registered classes in sorted order."""
    return sorted(_constructors)