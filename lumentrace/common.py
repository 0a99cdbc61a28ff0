"""String parsing, formatting helpers and a millisecond timer."""

from __future__ import annotations

import math
import re
import time

EPSILON = 1e-4
INV_PI = 1.0 / math.pi
INV_TWOPI = 1.0 / (2.0 * math.pi)

_SPACE = "[ \t\n\v\f\r]*"
_INT_RE = re.compile(_SPACE + r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    _SPACE
    + r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


class SceneError(Exception):
    """Raised for malformed scene descriptions and invalid object usage."""


def indent(text: str, amount: int = 2) -> str:
    """Indent every line but the first by ``amount`` spaces."""
    if not text:
        return ""
    trailing = text.endswith("\n")
    body = text[:-1] if trailing else text
    result = ("\n" + " " * amount).join(body.split("\n"))
    return result + "\n" if trailing else result


def to_bool(text: str) -> bool:
    """Parse ``true``/``false`` in any letter case."""
    value = text.lower()
    if value == "false":
        return False
    if value == "true":
        return True
    raise SceneError(f'Could not parse boolean value "{text}"')


def _parse_integer(text: str) -> int:
    if text == "":
        return 0
    if not _INT_RE.fullmatch(text):
        raise SceneError(f'Could not parse integer value "{text}"')
    return int(text)


def to_int(text: str) -> int:
    """Parse a base-10 signed integer."""
    return _parse_integer(text)


def to_uint(text: str) -> int:
    """Parse a base-10 integer and wrap it into the unsigned 32-bit range."""
    return _parse_integer(text) & 0xFFFFFFFF


def to_float(text: str) -> float:
    """Parse a floating point value."""
    if text == "":
        return 0.0
    if not _FLOAT_RE.fullmatch(text):
        raise SceneError(f'Could not parse floating point value "{text}"')
    return float(text.strip())


def tokenize(text: str, delim: str = ", ", include_empty: bool = False) -> list[str]:
    """Split ``text`` at any character of ``delim``.

    Empty tokens between delimiters are dropped unless ``include_empty`` is
    set; the final token is always kept, even when empty.
    """
    if not delim:
        return [text]
    parts = re.split("[" + re.escape(delim) + "]", text)
    head = [part for part in parts[:-1] if part or include_empty]
    return head + [parts[-1]]


def vector_size(text: str) -> int:
    """Return the number of tokens in a vector string."""
    return len(tokenize(text))


def _to_vector(text: str, size: int) -> tuple[float, ...]:
    tokens = tokenize(text)
    if len(tokens) != size:
        raise SceneError(f"Expected {size} values")
    return tuple(to_float(token) for token in tokens)


def to_vector2f(text: str) -> tuple[float, float]:
    """Parse exactly two floating point values."""
    return _to_vector(text, 2)  # type: ignore[return-value]


def to_vector3f(text: str) -> tuple[float, float, float]:
    """Parse exactly three floating point values."""
    return _to_vector(text, 3)  # type: ignore[return-value]


def time_string(milliseconds: float, precise: bool = False) -> str:
    """Format a duration given in milliseconds in a human-readable way."""
    if math.isnan(milliseconds) or math.isinf(milliseconds):
        return "inf"
    value = float(milliseconds)
    suffix = "ms"
    if value > 1000:
        value /= 1000
        suffix = "s"
        if value > 60:
            value /= 60
            suffix = "m"
            if value > 60:
                value /= 60
                suffix = "h"
                if value > 12:
                    value /= 12
                    suffix = "d"
    return f"{value:.{4 if precise else 1}f}{suffix}"


_MEM_SUFFIXES = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")


def mem_string(size: int, precise: bool = False) -> str:
    """Format a byte count in a human-readable way."""
    value = float(size)
    suffix = 0
    while suffix < len(_MEM_SUFFIXES) - 1 and value > 1024.0:
        value /= 1024.0
        suffix += 1
    digits = 0 if suffix == 0 else (4 if precise else 1)
    return f"{value:.{digits}f} {_MEM_SUFFIXES[suffix]}"


class Timer:
    """Simple timer with millisecond precision."""

    def __init__(self) -> None:
        self._start = time.monotonic()

    def reset(self) -> None:
        """Restart the timer."""
        self._start = time.monotonic()

    def elapsed(self) -> float:
        """Whole milliseconds since the last reset."""
        return float(int((time.monotonic() - self._start) * 1000))

    def elapsed_string(self, precise: bool = False) -> str:
        return time_string(self.elapsed(), precise)

    def lap(self) -> float:
        """Return the elapsed milliseconds and restart the timer."""
        now = time.monotonic()
        duration = float(int((now - self._start) * 1000))
        self._start = now
        return duration

    def lap_string(self, precise: bool = False) -> str:
        return time_string(self.lap(), precise)