"""
Corneal point data model.

Points move through the pipeline column-wise:

    CylindricalPoints  (segment, radial_distance, depth)   <- line parser
    AngularPoints      (+ angle in radians)                <- set-level angle step
    CartesianPoints    (x, y, z)                           <- polar mapping / chirality fix
    PointCloud         (corrected points + run metadata)   <- pipeline result

The export labels its columns `y=` and `x=`, but they are the radial
distance and the depth, not cartesian axes. The field names here follow
what the values are.

Every stage builds a new value. Arrays are copied on construction and
flagged read-only.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import numpy as np
import pandas as pd
from numpy.typing import NDArray


def _frozen(values, dtype) -> NDArray:
    arr = np.array(values, dtype=dtype, copy=True).reshape(-1)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class CylindricalPoints:
    """Parsed segment records, in input line order."""

    segment: NDArray[np.int64]            # meridian index, zero-based
    radial_distance: NDArray[np.float64]  # `y=` column
    depth: NDArray[np.float64]            # `x=` column, unsigned magnitude as stored

    def __post_init__(self):
        object.__setattr__(self, "segment", _frozen(self.segment, np.int64))
        object.__setattr__(self, "radial_distance", _frozen(self.radial_distance, np.float64))
        object.__setattr__(self, "depth", _frozen(self.depth, np.float64))
        n = len(self.segment)
        if len(self.radial_distance) != n or len(self.depth) != n:
            raise ValueError("segment, radial_distance and depth must have the same length")

    def __len__(self) -> int:
        return len(self.segment)

    @classmethod
    def empty(cls) -> "CylindricalPoints":
        return cls(segment=[], radial_distance=[], depth=[])


@dataclass(frozen=True, eq=False)
class AngularPoints:
    """Cylindrical points with the polar angle resolved against the whole set."""

    segment: NDArray[np.int64]
    radial_distance: NDArray[np.float64]
    depth: NDArray[np.float64]
    angle: NDArray[np.float64]  # radians, [0, 2*pi)
    meridian_count: int         # max(segment) + 1

    def __post_init__(self):
        object.__setattr__(self, "segment", _frozen(self.segment, np.int64))
        object.__setattr__(self, "radial_distance", _frozen(self.radial_distance, np.float64))
        object.__setattr__(self, "depth", _frozen(self.depth, np.float64))
        object.__setattr__(self, "angle", _frozen(self.angle, np.float64))

    def __len__(self) -> int:
        return len(self.segment)


@dataclass(frozen=True, eq=False)
class CartesianPoints:
    """Cartesian surface points (x, y in the corneal plane, z along the axis)."""

    x: NDArray[np.float64]
    y: NDArray[np.float64]
    z: NDArray[np.float64]

    def __post_init__(self):
        object.__setattr__(self, "x", _frozen(self.x, np.float64))
        object.__setattr__(self, "y", _frozen(self.y, np.float64))
        object.__setattr__(self, "z", _frozen(self.z, np.float64))
        n = len(self.x)
        if len(self.y) != n or len(self.z) != n:
            raise ValueError("x, y and z must have the same length")

    def __len__(self) -> int:
        return len(self.x)

    def as_array(self) -> NDArray[np.float64]:
        """N x 3 array of (x, y, z)."""
        return np.column_stack([self.x, self.y, self.z])


@dataclass(frozen=True, eq=False)
class PointCloud:
    """
    Final, orientation-corrected point cloud for one export.

    Handed as-is to visualization / analysis consumers.
    """

    points: CartesianPoints
    meridian_count: int
    chirality_corrected: bool
    skipped_lines: int = 0
    source_name: Optional[str] = None

    def __len__(self) -> int:
        return len(self.points)

    @property
    def x(self) -> NDArray[np.float64]:
        return self.points.x

    @property
    def y(self) -> NDArray[np.float64]:
        return self.points.y

    @property
    def z(self) -> NDArray[np.float64]:
        return self.points.z

    def as_array(self) -> NDArray[np.float64]:
        return self.points.as_array()

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({"x": self.x, "y": self.y, "z": self.z})

    def get_bounding_box(self) -> tuple[float, float, float, float, float, float]:
        """(min_x, min_y, min_z, max_x, max_y, max_z)"""
        if len(self) == 0:
            return (0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
        return (
            float(np.min(self.x)),
            float(np.min(self.y)),
            float(np.min(self.z)),
            float(np.max(self.x)),
            float(np.max(self.y)),
            float(np.max(self.z)),
        )

    def save_xyz(self, filepath: Union[str, Path]) -> Path:
        """Write space separated `x y z` rows, no header."""
        filepath = Path(filepath)
        self.to_frame().to_csv(filepath, sep=" ", header=False, index=False, float_format="%.6f")
        return filepath
