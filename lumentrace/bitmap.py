"""RGB float images with PNG and OpenEXR output."""

from __future__ import annotations

import logging
import struct
from pathlib import Path

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def _gamma_array(values: np.ndarray) -> np.ndarray:
    values = np.asarray(values, dtype=np.float64)
    curve = 1.055 * np.power(np.maximum(values, 0.0), 1.0 / 2.4) - 0.055
    return np.where(values <= 0.0031308, 12.92 * values, curve)


def gamma_correct(value):
    """Apply the sRGB transfer curve to a scalar or an array."""
    result = _gamma_array(value)
    return float(result) if result.ndim == 0 else result


def _linearize(values: np.ndarray) -> np.ndarray:
    values = np.asarray(values, dtype=np.float64)
    return np.where(
        values <= 0.04045, values / 12.92, np.power((values + 0.055) / 1.055, 2.4)
    )


def _exr_attribute(name: str, type_name: str, payload: bytes) -> bytes:
    return (
        name.encode() + b"\0" + type_name.encode() + b"\0"
        + struct.pack("<i", len(payload)) + payload
    )


class Bitmap:
    """A ``height x width`` image of linear RGB float values."""

    def __init__(self, width: int, height: int, pixels=None) -> None:
        if pixels is None:
            self.pixels = np.zeros((height, width, 3), dtype=np.float32)
        else:
            array = np.asarray(pixels, dtype=np.float32)
            if array.shape != (height, width, 3):
                raise ValueError(
                    f"Pixel array of shape {array.shape} does not match a "
                    f"{width}x{height} RGB image"
                )
            self.pixels = array.copy()

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def __repr__(self) -> str:
        return f"Bitmap({self.width}x{self.height})"

    def to_srgb8(self) -> np.ndarray:
        """Gamma-corrected 8-bit RGB array of shape ``(height, width, 3)``."""
        encoded = 255.0 * _gamma_array(self.pixels) + 0.5
        encoded = np.nan_to_num(encoded, nan=0.0)
        return np.clip(encoded, 0.0, 255.0).astype(np.uint8)

    def save_png(self, stem: str | Path) -> Path:
        """Write ``<stem>.png`` and return its path."""
        path = Path(f"{stem}.png")
        logger.info('Writing a %dx%d PNG file to "%s"', self.width, self.height, path)
        Image.fromarray(self.to_srgb8(), mode="RGB").save(path, format="PNG")
        return path

    def _save_exr(self, stem: str | Path) -> Path:
        path = Path(f"{stem}.exr")
        logger.info('Writing a %dx%d OpenEXR file to "%s"', self.width, self.height, path)
        width, height = self.width, self.height

        channels = b"".join(
            name + b"\0" + struct.pack("<iB3xii", 2, 0, 1, 1) for name in (b"B", b"G", b"R")
        ) + b"\0"
        window = struct.pack("<iiii", 0, 0, width - 1, height - 1)
        header = b"".join(
            (
                _exr_attribute("channels", "chlist", channels),
                _exr_attribute("comments", "string", b"Generated by lumentrace"),
                _exr_attribute("compression", "compression", b"\0"),
                _exr_attribute("dataWindow", "box2i", window),
                _exr_attribute("displayWindow", "box2i", window),
                _exr_attribute("lineOrder", "lineOrder", b"\0"),
                _exr_attribute("pixelAspectRatio", "float", struct.pack("<f", 1.0)),
                _exr_attribute("screenWindowCenter", "v2f", struct.pack("<ff", 0.0, 0.0)),
                _exr_attribute("screenWindowWidth", "float", struct.pack("<f", 1.0)),
            )
        ) + b"\0"
        prefix = b"\x76\x2f\x31\x01" + struct.pack("<I", 2) + header

        line_bytes = 3 * 4 * width
        block_size = 8 + line_bytes
        first_block = len(prefix) + 8 * height
        offsets = struct.pack(f"<{height}Q", *(first_block + y * block_size for y in range(height)))

        data = self.pixels.astype("<f4")
        with path.open("wb") as handle:
            handle.write(prefix)
            handle.write(offsets)
            for y, row in enumerate(data):
                handle.write(struct.pack("<ii", y, line_bytes))
                for channel in (2, 1, 0):
                    handle.write(np.ascontiguousarray(row[:, channel]).tobytes())
        return path

    def save(self, stem: str | Path) -> None:
        """Write both ``<stem>.exr`` and ``<stem>.png``."""
        logger.info("Saving %s", stem)
        self._save_exr(stem)
        self.save_png(stem)

    @staticmethod
    def load_png(path: str | Path) -> Bitmap:
        """Read an 8-bit image and convert it to linear RGB."""
        with Image.open(path) as image:
            rgb = np.asarray(image.convert("RGB"), dtype=np.float64) / 255.0
        height, width = rgb.shape[:2]
        logger.info('Reading a %dx%d PNG file from "%s"', width, height, path)
        return Bitmap(width, height, _linearize(rgb))