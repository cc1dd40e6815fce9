"""Data models for color filtering."""

from __future__ import annotations

import json
import numbers
from dataclasses import asdict, dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any, Iterable

import numpy as np

from .exceptions import (
    InvalidBoundsForModeError,
    InvalidBoundsShapeError,
    InvalidColorError,
    InvalidConfigError,
    InvalidModeError,
)

Color = tuple[int, int, int]

BLACK: Color = (0, 0, 0)


class PolicyMode(IntEnum):
    """Threshold policies for deciding whether a pixel is stopped."""

    RAW = 0  # Per-channel value range
    RATIO = 1  # R/G, G/B, B/R ratio range
    SUM = 2  # R+G+B range
    SPREAD = 3  # 2/3 * (max - min) range

    @property
    def bound_count(self) -> int:
        """Number of values the bound vector must hold for this mode."""
        return 6 if self in (PolicyMode.RAW, PolicyMode.RATIO) else 2

    @property
    def metric_names(self) -> tuple[str, ...]:
        """Names of the per-pixel metrics, in bound-pair order."""
        return _METRIC_NAMES[self]

    @property
    def domain(self) -> tuple[float, float]:
        """Range of bound values that covers every possible metric value."""
        return _DOMAINS[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def example(self) -> tuple[float, ...]:
        return _EXAMPLES[self]

    def full_range(self) -> ThresholdBounds:
        """Bounds under which no pixel is stopped."""
        lower, upper = self.domain
        return ThresholdBounds((lower, upper) * (self.bound_count // 2))


_METRIC_NAMES = {
    PolicyMode.RAW: ("red", "green", "blue"),
    PolicyMode.RATIO: ("red/green", "green/blue", "blue/red"),
    PolicyMode.SUM: ("sum",),
    PolicyMode.SPREAD: ("spread",),
}

_DOMAINS = {
    PolicyMode.RAW: (0.0, 256.0),
    PolicyMode.RATIO: (0.0, float("inf")),
    PolicyMode.SUM: (0.0, 766.0),
    PolicyMode.SPREAD: (0.0, 170.0),
}

_DESCRIPTIONS = {
    PolicyMode.RAW: "Lower and upper limits of the red, green and blue values.",
    PolicyMode.RATIO: "Lower and upper limits of the R-to-G, G-to-B and B-to-R ratios.",
    PolicyMode.SUM: (
        "Lower and upper limits of R+G+B. A low range favours darker pixels and "
        "extreme colour differences, a high range favours bright, near-white pixels."
    ),
    PolicyMode.SPREAD: (
        "Lower and upper limits of 2/3 * (max - min) of the channels. A low range "
        "favours near-grey pixels, a high range favours pixels whose colour stands out."
    ),
}

_EXAMPLES = {
    PolicyMode.RAW: (80, 256, 0, 112, 120, 200),
    PolicyMode.RATIO: (0.15, 2, 1.2, 3.1, 0.3, 1.1),
    PolicyMode.SUM: (0, 300),
    PolicyMode.SPREAD: (0, 30),
}


def parse_mode(value: object) -> PolicyMode:
    """Convert a mode selector to PolicyMode.

    Raises:
        InvalidModeError: If value is not an integer from 0 to 3
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidModeError(value)
    try:
        return PolicyMode(int(value))
    except ValueError:
        raise InvalidModeError(value) from None


def parse_color(value: object) -> Color:
    """Convert a replacement color to an (r, g, b) tuple.

    Raises:
        InvalidColorError: If value is not three integers from 0 to 255
    """
    try:
        parts = list(value)  # type: ignore[call-overload]
    except TypeError:
        raise InvalidColorError(value) from None

    if len(parts) != 3:
        raise InvalidColorError(value)
    for part in parts:
        if isinstance(part, bool) or not isinstance(part, numbers.Integral):
            raise InvalidColorError(value)
        if not (0 <= part <= 255):
            raise InvalidColorError(value)
    r, g, b = (int(p) for p in parts)
    return (r, g, b)


@dataclass(frozen=True)
class ThresholdBounds:
    """Lower/upper limits for each metric of a policy.

    Six values (lower1, upper1, lower2, upper2, lower3, upper3) for the
    per-channel and ratio policies, two values (lower, upper) for the sum and
    spread policies.
    """

    values: tuple[float, ...]

    @classmethod
    def parse(cls, values: Iterable[object] | ThresholdBounds) -> ThresholdBounds:
        """Create ThresholdBounds from a numeric sequence.

        Raises:
            InvalidBoundsShapeError: If values are not numeric or the count is not 2 or 6
        """
        if isinstance(values, ThresholdBounds):
            return values
        try:
            parts = list(values)
        except TypeError:
            raise InvalidBoundsShapeError(f"expected a sequence, got {values!r}") from None

        for part in parts:
            if isinstance(part, bool) or not isinstance(part, numbers.Real):
                raise InvalidBoundsShapeError(f"non-numeric value {part!r}")
        if len(parts) not in (2, 6):
            raise InvalidBoundsShapeError(f"expected 2 or 6 values, got {len(parts)}")

        return cls(tuple(float(p) for p in parts))

    @property
    def pairs(self) -> list[tuple[float, float]]:
        """Return bounds as [(lower, upper), ...] in metric order."""
        return [(self.values[i], self.values[i + 1]) for i in range(0, len(self.values), 2)]

    def check_mode(self, mode: PolicyMode) -> None:
        """Raise InvalidBoundsForModeError if the count does not suit mode."""
        if len(self.values) != mode.bound_count:
            raise InvalidBoundsForModeError(len(self.values), int(mode))

    def __len__(self) -> int:
        return len(self.values)


@dataclass
class FilterConfig:
    """Optional filter settings, defaulting to the full image, black and mode 0."""

    height: int | None = None
    width: int | None = None
    color: Color = BLACK
    mode: PolicyMode = PolicyMode.RAW

    def validate(self) -> None:
        """Validate mode and color, normalizing them in place."""
        self.mode = parse_mode(self.mode)
        self.color = parse_color(self.color)

    def resolve_region(self, shape: tuple[int, ...]) -> tuple[int, int]:
        """Return the concrete (height, width) for an image of the given shape."""
        from .region import resolve_extent

        return resolve_extent(shape, self.height, self.width)

    @property
    def blanks_to_black(self) -> bool:
        return tuple(self.color) == BLACK

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        data["color"] = list(self.color)
        data["mode"] = int(self.mode)
        return data

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FilterConfig:
        """Create FilterConfig from dictionary."""
        if not isinstance(data, dict):
            raise InvalidConfigError("expected a JSON object")
        unknown = set(data) - {"height", "width", "color", "mode"}
        if unknown:
            raise InvalidConfigError(f"unknown keys {sorted(unknown)}")

        config = cls()
        if "height" in data:
            config.height = data["height"]
        if "width" in data:
            config.width = data["width"]
        if "color" in data:
            config.color = data["color"]
        if "mode" in data:
            config.mode = data["mode"]

        config.validate()
        return config

    @classmethod
    def from_json(cls, json_str: str) -> FilterConfig:
        """Parse FilterConfig from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise InvalidConfigError(str(e)) from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> FilterConfig:
        """Load FilterConfig from JSON file."""
        with open(path) as f:
            return cls.from_json(f.read())

    @classmethod
    def default_json(cls) -> str:
        """Return default configuration as formatted JSON string."""
        return cls().to_json()


@dataclass
class FilterResult:
    """Mask and recolored output of one filter run."""

    mask: np.ndarray
    """Boolean (H, W) array, True where the pixel was stopped."""

    output: np.ndarray
    """uint8 (H, W, 3) filtered image."""

    mode: PolicyMode = PolicyMode.RAW
    bounds: ThresholdBounds | None = None
    color: Color = field(default=BLACK)

    @property
    def stopped_count(self) -> int:
        return int(np.count_nonzero(self.mask))

    @property
    def stopped_fraction(self) -> float:
        """Fraction of pixels stopped (0-1)."""
        if self.mask.size == 0:
            return 0.0
        return self.stopped_count / self.mask.size
