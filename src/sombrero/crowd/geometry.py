"""Axis-aligned rectangles used for view boxes and agent extents."""
from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np

from sombrero.crowd.errors import InvalidInput, ShapeMismatch


@dataclass(frozen=True)
class Rectangle:
    """Rectangle given by its lower-left corner, width and height."""
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_value(cls, value: Any) -> 'Rectangle':
        """Build a rectangle from another ``Rectangle`` or an (x, y, w, h) sequence."""
        if isinstance(value, cls):
            return value
        try:
            x, y, w, h = (float(v) for v in value)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f'cannot read a rectangle from {value!r}', field='rectangle') from e
        return cls(x, y, w, h)

    @property
    def x_max(self) -> float:
        return self.x + self.width

    @property
    def y_max(self) -> float:
        return self.y + self.height

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


def disk_extents(centers: np.ndarray, radii: np.ndarray) -> Rectangle:
    """Return the tightest axis-aligned rectangle containing every disk.

    - centers: (N, 2) array of disk centers
    - radii: (N,) array of disk radii

    An empty set of disks yields the degenerate rectangle at the origin.
    """
    centers = np.asarray(centers, dtype=float)
    radii = np.asarray(radii, dtype=float)
    if centers.ndim != 2 or centers.shape[1] != 2:
        raise ShapeMismatch('centers must be shape (N,2)', field='centers')
    if radii.shape != (centers.shape[0],):
        raise ShapeMismatch(
            f'radii must have one entry per agent ({centers.shape[0]}), got shape {radii.shape}',
            field='radii')
    if centers.shape[0] == 0:
        return Rectangle(0.0, 0.0, 0.0, 0.0)

    r = radii[:, None]
    lower = np.min(centers - r, axis=0)
    upper = np.max(centers + r, axis=0)
    return Rectangle(float(lower[0]), float(lower[1]),
                     float(upper[0] - lower[0]), float(upper[1] - lower[1]))
