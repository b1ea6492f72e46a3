"""Minimal three-dimensional vector used for vertices, momenta and directions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence


@dataclass(frozen=True)
class Vector3:
    """An immutable Cartesian 3-vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Vector3":
        """Build a vector from the first three items of a sequence."""
        x, y, z = values[:3]
        return cls(float(x), float(y), float(z))

    def mag2(self) -> float:
        """Squared magnitude."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def mag(self) -> float:
        """Magnitude."""
        return math.sqrt(self.mag2())

    def perp(self) -> float:
        """Transverse magnitude in the x-y plane."""
        return math.hypot(self.x, self.y)

    def unit(self) -> "Vector3":
        """Unit vector along this one; the zero vector stays zero."""
        length = self.mag()
        if length == 0:
            return Vector3()
        return self / length

    def dot(self, other: "Vector3") -> float:
        """Scalar product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, factor: float) -> "Vector3":
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Vector3":
        return Vector3(self.x / divisor, self.y / divisor, self.z / divisor)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z