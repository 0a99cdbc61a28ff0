import pytest

from lumentrace.color import Color3
from lumentrace.common import SceneError
from lumentrace.objects import ClassType, PropertyList, create_instance
from lumentrace.textures import Checkerboard, ConstantTexture


def test_constant_float_from_registry():
    texture = create_instance("constant_float", PropertyList({"value": 0.25}))
    assert texture.eval((0.0, 0.0)) == 0.25
    assert texture.eval((7.3, -2.1)) == 0.25


def test_constant_color_default_is_black():
    texture = create_instance("constant_color", PropertyList())
    assert texture.eval((0.5, 0.5)) == Color3(0.0)


def test_constant_wrong_property_type():
    with pytest.raises(SceneError):
        create_instance("constant_float", PropertyList({"value": "abc"}))


def test_constant_str():
    assert str(ConstantTexture(Color3(1.0))).startswith("ConstantTexture[ ")


def test_checkerboard_defaults():
    texture = create_instance("checkerboard_float", PropertyList())
    assert texture.eval((0.5, 0.5)) == 0.0
    assert texture.eval((1.5, 0.5)) == 1.0
    assert texture.eval((1.5, 1.5)) == 0.0
    assert texture.eval((-0.5, 0.5)) == 1.0


def test_checkerboard_scale():
    texture = Checkerboard(0.0, 1.0, scale=(2.0, 2.0))
    assert texture.eval((1.5, 0.5)) == 0.0
    assert texture.eval((2.5, 0.5)) == 1.0


def test_checkerboard_delta_shifts_pattern():
    texture = Checkerboard(0.0, 1.0, delta=(1.0, 0.0))
    assert texture.eval((0.5, 0.5)) == 1.0
    assert texture.eval((1.5, 0.5)) == 0.0


def test_checkerboard_is_periodic():
    texture = Checkerboard("a", "b")
    for u in (-1.7, -0.2, 0.3, 1.1, 2.9):
        for v in (-3.3, 0.4, 1.6):
            assert texture.eval((u, v)) == texture.eval((u + 2.0, v))
            assert texture.eval((u, v)) == texture.eval((u + 1.0, v + 1.0))
            assert texture.eval((u, v)) != texture.eval((u + 1.0, v))


def test_checkerboard_color_from_registry():
    red, blue = Color3(1.0, 0.0, 0.0), Color3(0.0, 0.0, 1.0)
    texture = create_instance(
        "checkerboard_color", PropertyList({"value1": red, "value2": blue})
    )
    assert texture.eval((0.2, 0.2)) == red
    assert texture.eval((1.2, 0.2)) == blue


def test_checkerboard_color_defaults():
    texture = create_instance("checkerboard_color", PropertyList())
    assert texture.eval((0.2, 0.2)) == Color3(0.0)
    assert texture.eval((0.2, 1.2)) == Color3(1.0)


def test_texture_class_type_and_str():
    texture = Checkerboard(Color3(0.0), Color3(1.0))
    assert texture.class_type is ClassType.TEXTURE
    text = str(texture)
    assert text.startswith("Checkerboard[")
    assert "tex1 = " in text