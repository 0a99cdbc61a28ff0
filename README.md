# lumentrace

Core pieces of a small, physically based ray tracer, written in plain Python
on top of numpy and Pillow.

## What is inside

- `lumentrace.common`: string parsing helpers (`to_bool`, `to_int`,
  `to_uint`, `to_float`, `to_vector2f`, `to_vector3f`, `tokenize`,
  `vector_size`, `indent`), human-readable `time_string` and `mem_string`,
  a millisecond `Timer`, and the `SceneError` exception.
- `lumentrace.color`: `Color3`, an RGB triple with arithmetic, sRGB
  conversion (`to_srgb`, `to_linear_rgb`), `is_valid` and `luminance`.
- `lumentrace.geometry`: `spherical_direction`, `spherical_coordinates`,
  `spherical_direction_in_frame`, `coordinate_system`, the dielectric
  `fresnel` term, `is_nan`, `is_normalized` and the shading `Frame`.
- `lumentrace.objects`: `PropertyList`, the `SceneObject` base class,
  `ClassType` with `class_type_name`, and a registry of named constructors
  (`register_class`, `create_instance`, `registered_classes`).
- `lumentrace.bbox`: `Ray` and the n-dimensional `BoundingBox` with
  containment, overlap, distance and ray slab tests.
- `lumentrace.bitmap`: `Bitmap` float RGB images; `save_png` writes a
  gamma-corrected 8-bit PNG, `save` writes both an uncompressed OpenEXR and a
  PNG file, and `load_png` reads an 8-bit image back into linear RGB.
- `lumentrace.block`: the `ReconstructionFilter` interface, `ImageBlock`
  with filtered sample splatting (`put`) and block merging (`put_block`),
  and the `BlockGenerator` that hands out tiles in a spiral from the centre.
- `lumentrace.textures`: `ConstantTexture` and `Checkerboard`, over float
  or `Color3` values.
- `lumentrace.bsdf`: `BSDFQueryRecord`, `Measure`, the `BSDF` base class,
  the ideal `Dielectric` and the pass-through `NullBSDF`.
- `lumentrace.diffuse`: the Lambertian `Diffuse` BRDF and
  `square_to_cosine_hemisphere`.

## Installing

```
pip install .
```

With the test requirements:

```
pip install ".[test]"
pytest
```

## A short example

```python
import lumentrace.textures  # registers the texture constructors
from lumentrace.color import Color3
from lumentrace.common import mem_string, time_string
from lumentrace.objects import PropertyList, create_instance

print(time_string(90_000, False))   # "1.5m"
print(mem_string(2048, False))      # "2.0 KiB"

props = PropertyList()
props.set("value", Color3(0.25, 0.5, 0.75))
texture = create_instance("constant_color", props)
print(texture.eval((0.3, 0.7)))     # Color3(0.25, 0.5, 0.75)
```

Objects can be created by their registered names once their module has been
imported: `"constant_float"`, `"constant_color"`, `"checkerboard_float"`
and `"checkerboard_color"` from `lumentrace.textures`, `"dielectric"` and
`"null"` from `lumentrace.bsdf`, and `"diffuse"` from `lumentrace.diffuse`.
`registered_classes()` lists every name registered so far.

## What this package does not do

lumentrace provides building blocks only. It has no geometry (no meshes,
shapes or ray–surface intersection), no light sources, no acceleration
structure, no cameras, samplers or integrators, no scene file reader and no
command-line program or viewer. Rendering an image takes code of your own
that combines these pieces with such components.