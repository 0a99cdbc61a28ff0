"""Building blocks for a physically based ray tracer: colours, frames, boxes, textures, BSDFs and images."""

__version__ = "0.1.0"