"""Lambertian BRDF and cosine-weighted hemisphere sampling."""

from __future__ import annotations

import math

import numpy as np

from .bsdf import BSDF, BSDFQueryRecord, Measure
from .color import Color3
from .common import INV_PI, SceneError, indent
from .geometry import Frame
from .objects import ClassType, PropertyList, SceneObject, class_type_name, register_class
from .textures import ConstantTexture, Texture


def square_to_cosine_hemisphere(sample) -> np.ndarray:
    """Warp a point of ``[0,1]^2`` to a cosine-weighted direction around ``+z``."""
    r = math.sqrt(float(sample[0]))
    phi = 2.0 * math.pi * float(sample[1])
    x, y = r * math.cos(phi), r * math.sin(phi)
    return np.array([x, y, math.sqrt(max(0.0, 1.0 - x * x - y * y))])


_SLOTS = {"albedo": "albedo_texture", "normalmap": "normal_map"}


class Diffuse(BSDF):
    """Ideal diffuse reflector whose albedo may come from a texture."""

    is_diffuse = True

    def __init__(self, albedo: Color3 | None = None) -> None:
        self.albedo_texture: Texture | None = (
            None if albedo is None else ConstantTexture(albedo)
        )
        self.normal_map: Texture | None = None

    def __str__(self) -> str:
        def show(texture: Texture | None) -> str:
            return "null" if texture is None else indent(str(texture))

        return (
            "Diffuse[\n"
            f"  albedo = {show(self.albedo_texture)}\n"
            f"  normalmap = {show(self.normal_map)}\n"
            "]"
        )

    def add_child(self, child: SceneObject) -> None:
        if child.class_type is not ClassType.TEXTURE:
            raise SceneError(
                f"Diffuse.add_child(<{class_type_name(child.class_type)}>) is not supported!"
            )
        slot = _SLOTS.get(child.id_name)
        if slot is None:
            raise SceneError("The name of this texture does not match any field!")
        if getattr(self, slot) is not None:
            raise SceneError(f"There is already a {child.id_name} defined!")
        setattr(self, slot, child)

    def activate(self) -> None:
        if self.albedo_texture is None:
            self.albedo_texture = ConstantTexture(Color3(0.5))
            self.albedo_texture.activate()

    def _albedo(self, record: BSDFQueryRecord) -> Color3:
        if self.albedo_texture is None:
            raise SceneError("Diffuse BSDF has no albedo; activate() it first!")
        return self.albedo_texture.eval(record.uv)

    @staticmethod
    def _is_front(record: BSDFQueryRecord) -> bool:
        return (
            record.measure is Measure.SOLID_ANGLE
            and Frame.cos_theta(record.wi) > 0
            and Frame.cos_theta(record.wo) > 0
        )

    def eval(self, record: BSDFQueryRecord) -> Color3:
        if not self._is_front(record):
            return Color3(0.0)
        return self._albedo(record) * INV_PI

    def pdf(self, record: BSDFQueryRecord) -> float:
        if not self._is_front(record):
            return 0.0
        return INV_PI * Frame.cos_theta(record.wo)

    def sample(self, record: BSDFQueryRecord, sample) -> Color3:
        if Frame.cos_theta(record.wi) <= 0:
            return Color3(0.0)
        record.measure = Measure.SOLID_ANGLE
        record.wo = square_to_cosine_hemisphere(sample)
        record.eta = 1.0
        return self._albedo(record)

    def albedo(self, record: BSDFQueryRecord) -> Color3:
        return self._albedo(record)


def _diffuse(props: PropertyList) -> Diffuse:
    return Diffuse(props.get_color("albedo") if props.has("albedo") else None)


register_class("diffuse", _diffuse)