from __future__ import annotations

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from PIL import Image

RESPONSE_MODES = ("curve", "linear")
SAMPLING_MODES = ("point", "area")


class InvalidConfig(ValueError):
    """Raised before any drawing when render parameters are unusable."""


class RenderCancelled(RuntimeError):
    """Raised when a cooperative cancel check asks the render loop to stop."""


class PatternKind(str, Enum):
    DOT = "dot"
    SQUARE = "square"
    TRIANGLE = "triangle"
    LINE = "line"
    CROSS = "cross"

    @classmethod
    def parse(cls, value: str | PatternKind) -> PatternKind:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            known = ", ".join(kind.value for kind in cls)
            raise InvalidConfig(f"Unknown pattern: {value!r} (expected one of {known})") from None


@dataclass(frozen=True)
class RenderConfig:
    cell_size: int
    pattern: PatternKind = PatternKind.DOT
    response: str = "curve"  # "curve" (per-pattern power curve) or "linear"
    rotate: bool = True
    sampling: str = "point"  # "point" (cell origin pixel) or "area" (cell mean)

    def __post_init__(self):
        if isinstance(self.cell_size, bool) or not isinstance(self.cell_size, numbers.Integral):
            raise InvalidConfig(f"cell_size must be an integer, got {self.cell_size!r}")
        if self.cell_size < 1:
            raise InvalidConfig(f"cell_size must be >= 1, got {self.cell_size}")
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "cell_size", int(self.cell_size))
        object.__setattr__(self, "pattern", PatternKind.parse(self.pattern))
        if self.response not in RESPONSE_MODES:
            raise InvalidConfig(f"Unknown response mode: {self.response!r}")
        if self.sampling not in SAMPLING_MODES:
            raise InvalidConfig(f"Unknown sampling mode: {self.sampling!r}")


class Engine(Protocol):
    config: RenderConfig

    def render(self, image: Image.Image) -> Image.Image:
        """Convert an image into a halftone of the same size."""
        ...
