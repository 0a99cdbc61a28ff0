"""BSDF query records, the BSDF base class, and the dielectric and null BSDFs."""

from __future__ import annotations

import math
from abc import abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np

from .color import Color3
from .common import SceneError, indent
from .geometry import Frame, fresnel
from .objects import ClassType, PropertyList, SceneObject, class_type_name, register_class
from .textures import ConstantTexture, Texture


class Measure(IntEnum):
    UNKNOWN = 0
    SOLID_ANGLE = 1
    DISCRETE = 2


@dataclass
class BSDFQueryRecord:
    """Directions in local shading coordinates plus sampling information."""

    wi: np.ndarray
    wo: np.ndarray = field(default_factory=lambda: np.zeros(3))
    measure: Measure = Measure.UNKNOWN
    uv: np.ndarray = field(default_factory=lambda: np.zeros(2))
    eta: float = 1.0

    def __post_init__(self) -> None:
        self.wi = np.asarray(self.wi, dtype=float)
        self.wo = np.asarray(self.wo, dtype=float)
        self.uv = np.asarray(self.uv, dtype=float)


class BSDF(SceneObject):
    """Superclass of all surface scattering models."""

    is_diffuse = False
    is_null = False

    @property
    def class_type(self) -> ClassType:
        return ClassType.BSDF

    @abstractmethod
    def eval(self, record: BSDFQueryRecord) -> Color3:
        """Value of the BSDF for ``record.wi`` and ``record.wo``."""

    @abstractmethod
    def pdf(self, record: BSDFQueryRecord) -> float:
        """Density of ``sample()`` for ``record.wo`` with respect to solid angles."""

    @abstractmethod
    def sample(self, record: BSDFQueryRecord, sample) -> Color3:
        """Fill ``record.wo`` and return the BSDF weight of the sample."""

    @abstractmethod
    def albedo(self, record: BSDFQueryRecord) -> Color3:
        """Surface reflectance used for auxiliary albedo output."""


class Dielectric(BSDF):
    """Ideal smooth dielectric interface."""

    def __init__(
        self,
        int_ior: float = 1.5046,
        ext_ior: float = 1.000277,
        color: Color3 | None = None,
    ) -> None:
        self.int_ior = float(int_ior)
        self.ext_ior = float(ext_ior)
        self.base_color = Color3(1.0) if color is None else color

    def __str__(self) -> str:
        return (
            "Dielectric[\n"
            f"  intIOR = {self.int_ior:f},\n"
            f"  extIOR = {self.ext_ior:f}\n"
            "]"
        )

    def eval(self, record: BSDFQueryRecord) -> Color3:
        return Color3(0.0)

    def pdf(self, record: BSDFQueryRecord) -> float:
        return 0.0

    def sample(self, record: BSDFQueryRecord, sample) -> Color3:
        wi = record.wi
        cos_theta = Frame.cos_theta(wi)
        n = np.array([0.0, 0.0, 1.0])
        if cos_theta < 0:
            n = -n
            record.eta = self.ext_ior / self.int_ior
        else:
            record.eta = self.int_ior / self.ext_ior
        record.measure = Measure.DISCRETE

        reflected = fresnel(cos_theta, self.ext_ior, self.int_ior)
        if float(sample[0]) < reflected:
            record.wo = np.array([-wi[0], -wi[1], wi[2]])
            return self.base_color

        eta = record.eta
        wi_dot_n = float(wi @ n)
        record.wo = -(wi - wi_dot_n * n) / eta - n * math.sqrt(
            1 - (1 - wi_dot_n * wi_dot_n) / (eta * eta)
        )
        return self.base_color / (eta * eta)

    def albedo(self, record: BSDFQueryRecord) -> Color3:
        return Color3(1.0)


_NULL_SLOTS = {
    "baseColor": "albedo_texture",
    "normalmap": "normal_map",
    "alphamap": "alpha_map",
    "emissionmap": "emission_map",
}


class NullBSDF(BSDF):
    """Pass-through surface, optionally blending an emissive colour by an alpha map."""

    is_null = True

    def __init__(self, base_color: Color3 | None = None, strength: float = 1.0) -> None:
        self.albedo_texture: Texture | None = (
            None if base_color is None else ConstantTexture(base_color)
        )
        self.normal_map: Texture | None = None
        self.alpha_map: Texture | None = None
        self.emission_map: Texture | None = None
        self.emission_strength = float(strength)

    def __str__(self) -> str:
        def show(texture: Texture | None) -> str:
            return "null" if texture is None else indent(str(texture))

        return (
            "Null[\n"
            f"  baseColor = {show(self.albedo_texture)}\n"
            f"  normalmap = {show(self.normal_map)}\n"
            f"  alpha_map = {show(self.alpha_map)}\n"
            f"  emission_map = {show(self.emission_map)}\n"
            f"  emissionStrength = {self.emission_strength:f}\n"
            "]"
        )

    def add_child(self, child: SceneObject) -> None:
        if child.class_type is not ClassType.TEXTURE:
            raise SceneError(
                f"NullBSDF.add_child(<{class_type_name(child.class_type)}>) is not supported!"
            )
        slot = _NULL_SLOTS.get(child.id_name)
        if slot is None:
            raise SceneError("The name of this texture does not match any field!")
        if getattr(self, slot) is not None:
            raise SceneError(f"There is already a {child.id_name} defined!")
        setattr(self, slot, child)

    def eval(self, record: BSDFQueryRecord) -> Color3:
        return Color3(0.0)

    def pdf(self, record: BSDFQueryRecord) -> float:
        return 0.0

    def sample(self, record: BSDFQueryRecord, sample) -> Color3:
        record.wo = -record.wi
        record.measure = Measure.DISCRETE
        alpha = self.alpha(record)
        emission = self.emission(record)
        if self.albedo_texture is None:
            return Color3(1.0)
        base = self.albedo_texture.eval(record.uv)
        return alpha * emission * self.emission_strength * base + (1 - alpha) * Color3(1.0)

    def albedo(self, record: BSDFQueryRecord) -> Color3:
        if self.albedo_texture is None:
            return Color3(1.0)
        return self.alpha(record) * self.albedo_texture.eval(record.uv)

    def alpha(self, record: BSDFQueryRecord) -> float:
        """Opacity at the record's UV coordinates (1 without an alpha map)."""
        if self.alpha_map is None:
            return 1.0
        return float(self.alpha_map.eval(record.uv))

    def emission(self, record: BSDFQueryRecord) -> float:
        """Emission factor at the record's UV coordinates (1 without a map)."""
        if self.emission_map is None:
            return 1.0
        return float(self.emission_map.eval(record.uv))


def _dielectric(props: PropertyList) -> Dielectric:
    return Dielectric(
        props.get_float("intIOR", 1.5046),
        props.get_float("extIOR", 1.000277),
        props.get_color("color", Color3(1.0)),
    )


def _null(props: PropertyList) -> NullBSDF:
    base = props.get_color("baseColor") if props.has("baseColor") else None
    return NullBSDF(base, props.get_float("strength", 1.0))


register_class("dielectric", _dielectric)
register_class("null", _null)