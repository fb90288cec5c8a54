"""
Units of Length
===============
Two incompatible scalar wrappers used by the whole engine.

Why is this file needed?
------------------------
Model-space lengths (``Distance``, informally "centimeters") and screen-space
lengths (``DevicePixel``) are both plain floats underneath. Keeping them in
separate types makes any accidental mix (e.g. adding a pixel pan offset to a
model coordinate) fail loudly with ``TypeError`` instead of silently producing
a wrong picture. The only bridge between the two spaces is the Viewport.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from numbers import Real
from typing import Union

Scalar = Union[int, float]


def _is_scalar(value: object) -> bool:
    # bool is a Real too, but treating True as 1.0 would hide bugs
    return isinstance(value, Real) and not isinstance(value, bool)


@total_ordering
@dataclass(frozen=True, slots=True)
class Distance:
    """A model-space length. Supports unrestricted arithmetic."""
    value: float = 0.0

    def __post_init__(self) -> None:
        if isinstance(self.value, (Distance, DevicePixel)):
            raise TypeError(f"Cannot wrap {type(self.value).__name__} into Distance.")
        object.__setattr__(self, "value", float(self.value))

    def __float__(self) -> float:
        return self.value

    def __add__(self, other: Distance) -> Distance:
        if isinstance(other, Distance):
            return Distance(self.value + other.value)
        return NotImplemented

    def __sub__(self, other: Distance) -> Distance:
        if isinstance(other, Distance):
            return Distance(self.value - other.value)
        return NotImplemented

    def __mul__(self, other: Union[Distance, Scalar]) -> Union[Distance, float]:
        # Distance * Distance is an area, which we keep as a bare float
        if isinstance(other, Distance):
            return self.value * other.value
        if _is_scalar(other):
            return Distance(self.value * other)
        return NotImplemented

    def __rmul__(self, other: Scalar) -> Distance:
        if _is_scalar(other):
            return Distance(other * self.value)
        return NotImplemented

    def __truediv__(self, other: Union[Distance, Scalar]) -> Union[Distance, float]:
        if isinstance(other, Distance):
            return self.value / other.value
        if _is_scalar(other):
            return Distance(self.value / other)
        return NotImplemented

    def __mod__(self, other: Union[Distance, Scalar]) -> Distance:
        if isinstance(other, Distance):
            return Distance(self.value % other.value)
        if _is_scalar(other):
            return Distance(self.value % other)
        return NotImplemented

    def __pow__(self, exponent: Scalar) -> float:
        return self.value ** exponent

    def __neg__(self) -> Distance:
        return Distance(-self.value)

    def __pos__(self) -> Distance:
        return self

    def __abs__(self) -> Distance:
        return Distance(abs(self.value))

    def __lt__(self, other: Distance) -> bool:
        if isinstance(other, Distance):
            return self.value < other.value
        return NotImplemented

    def __str__(self) -> str:
        return f"{self.value:g} cm"


@total_ordering
@dataclass(frozen=True, slots=True)
class DevicePixel:
    """A screen-space length. Supports only additive/linear operations."""
    value: float = 0.0

    def __post_init__(self) -> None:
        if isinstance(self.value, (Distance, DevicePixel)):
            raise TypeError(f"Cannot wrap {type(self.value).__name__} into DevicePixel.")
        object.__setattr__(self, "value", float(self.value))

    def __float__(self) -> float:
        return self.value

    def __add__(self, other: DevicePixel) -> DevicePixel:
        if isinstance(other, DevicePixel):
            return DevicePixel(self.value + other.value)
        return NotImplemented

    def __sub__(self, other: DevicePixel) -> DevicePixel:
        if isinstance(other, DevicePixel):
            return DevicePixel(self.value - other.value)
        return NotImplemented

    def __mul__(self, other: Scalar) -> DevicePixel:
        if _is_scalar(other):
            return DevicePixel(self.value * other)
        return NotImplemented

    def __rmul__(self, other: Scalar) -> DevicePixel:
        return self.__mul__(other)

    def __truediv__(self, other: Scalar) -> DevicePixel:
        if _is_scalar(other):
            return DevicePixel(self.value / other)
        return NotImplemented

    def __neg__(self) -> DevicePixel:
        return DevicePixel(-self.value)

    def __abs__(self) -> DevicePixel:
        return DevicePixel(abs(self.value))

    def __lt__(self, other: DevicePixel) -> bool:
        if isinstance(other, DevicePixel):
            return self.value < other.value
        return NotImplemented

    def __str__(self) -> str:
        return f"{self.value:g} px"
