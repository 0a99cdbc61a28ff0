import numpy as np
import pytest

from lumentrace.color import Color3
from lumentrace.common import SceneError
from lumentrace.objects import (
    ClassType,
    PropertyList,
    SceneObject,
    class_type_name,
    create_instance,
    register_class,
    registered_classes,
)


class _Probe(SceneObject):
    class_type = ClassType.BSDF

    def __init__(self, properties):
        self.value = properties.get_float("value", 1.5)

    def __str__(self):
        return f"Probe[{self.value}]"


@pytest.mark.parametrize(
    "kind,name",
    [
        (ClassType.SCENE, "scene"),
        (ClassType.MESH, "shape"),
        (ClassType.TEXTURE, "texture"),
        (ClassType.BSDF, "bsdf"),
        (ClassType.EMITTER, "emitter"),
        (ClassType.CAMERA, "camera"),
        (ClassType.INTEGRATOR, "integrator"),
        (ClassType.SAMPLER, "sampler"),
        (ClassType.TEST, "test"),
        (ClassType.MEDIUM, "<unknown>"),
        (ClassType.RECONSTRUCTION_FILTER, "<unknown>"),
    ],
)
def test_class_type_name(kind, name):
    assert class_type_name(kind) == name


def test_property_list_values_and_defaults():
    props = PropertyList({"radius": 2, "count": 7, "label": "probe"})
    assert props.has("radius")
    assert not props.has("missing")
    assert props.get_float("radius") == 2.0
    assert props.get_integer("count") == 7
    assert props.get_string("label") == "probe"
    assert props.get_float("missing", 0.25) == 0.25
    assert props.get_integer("other", 5) == 5


def test_property_list_missing_raises():
    with pytest.raises(SceneError, match="missing"):
        PropertyList().get_float("value")


def test_property_list_wrong_type_raises():
    props = PropertyList({"value": "text"})
    with pytest.raises(SceneError, match="wrong type"):
        props.get_float("value")
    with pytest.raises(SceneError):
        PropertyList({"flag": True}).get_integer("flag")


def test_property_list_duplicate_raises():
    props = PropertyList()
    props.set("value", 1.0)
    with pytest.raises(SceneError, match="multiple times"):
        props.set("value", 2.0)


def test_property_list_color_and_pairs():
    props = PropertyList()
    props.set("albedo", Color3(0.5))
    props.set("delta", (1, 2))
    assert props.get_color("albedo") == Color3(0.5)
    assert props.get_color("other", Color3(1.0)) == Color3(1.0)
    assert np.array_equal(props.get_point2("delta"), [1.0, 2.0])
    assert np.array_equal(props.get_vector2("scale", (1, 1)), [1.0, 1.0])
    with pytest.raises(SceneError):
        PropertyList({"delta": (1, 2, 3)}).get_point2("delta")


def test_default_add_child_raises_with_type_name():
    probe = _Probe(PropertyList())
    with pytest.raises(SceneError, match="'bsdf'"):
        probe.add_child(_Probe(PropertyList()))


def test_id_name_and_hooks():
    probe = _Probe(PropertyList())
    assert probe.id_name == ""
    probe.id_name = "albedo"
    probe.activate()
    probe.set_parent(_Probe(PropertyList()))
    assert probe.id_name == "albedo"
    assert probe.value == 1.5


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        SceneObject()


def test_register_and_create_instance():
    register_class("probe_for_tests", _Probe)
    obj = create_instance("probe_for_tests", PropertyList({"value": 2.0}))
    assert isinstance(obj, _Probe)
    assert obj.value == 2.0
    assert "probe_for_tests" in registered_classes()


def test_register_as_decorator():
    @register_class("decorated_probe_for_tests")
    class _Decorated(_Probe):
        pass

    obj = create_instance("decorated_probe_for_tests", PropertyList({"value": 3.0}))
    assert type(obj).__name__ == "_Decorated"
    assert obj.value == 3.0
    assert str(obj) == "Probe[3.0]"
    assert "decorated_probe_for_tests" in registered_classes()


def test_registered_classes_sorted():
    register_class("zz_probe_for_tests", _Probe)
    register_class("aa_probe_for_tests", _Probe)
    names = registered_classes()
    assert names == sorted(names)
    assert names.index("aa_probe_for_tests") < names.index("zz_probe_for_tests")


def test_create_unknown_instance_raises():
    with pytest.raises(SceneError, match="could not be found"):
        create_instance("no_such_class_for_tests", PropertyList())