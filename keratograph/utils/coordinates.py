"""
Coordinate transformation utilities.

Converts keratograph meridian samples (segment, radial distance, depth) to
cartesian surface points.

The conversion is two-phase: the angular step depends on the highest segment
index in the whole record set, so the set is scanned once before any point
is mapped.
"""

import logging

import numpy as np
from numpy.typing import NDArray

from keratograph.models.cornea import AngularPoints, CartesianPoints, CylindricalPoints
from keratograph.models.errors import EmptyInputError


logger = logging.getLogger(__name__)

TWO_PI = 2.0 * np.pi


def meridian_count(segment: NDArray[np.int64]) -> int:
    """
    Number of evenly spaced meridians implied by a set of segment indices.

    Segments are zero-based, so this is max(segment) + 1. Gaps in the
    indices are not checked.
    """
    if len(segment) == 0:
        raise EmptyInputError("Cannot derive meridian count from an empty record set")
    return int(np.max(segment)) + 1


def segment_angles(segment: NDArray[np.int64], n_meridians: int) -> NDArray[np.float64]:
    """Polar angle (radians) of each segment index for n_meridians meridians."""
    return np.asarray(segment, dtype=np.float64) / n_meridians * TWO_PI


def assign_angles(points: CylindricalPoints) -> AngularPoints:
    """
    Resolve the polar angle of every record against the full set.

    angle = segment / (max(segment) + 1) * 2*pi

    Raises:
        EmptyInputError: if there are no records.
    """
    n_meridians = meridian_count(points.segment)
    angle = segment_angles(points.segment, n_meridians)
    logger.debug(f"Assigned angles for {len(points)} points over {n_meridians} meridians")
    return AngularPoints(
        segment=points.segment,
        radial_distance=points.radial_distance,
        depth=points.depth,
        angle=angle,
        meridian_count=n_meridians,
    )


def cylindrical_to_cartesian(points: AngularPoints) -> CartesianPoints:
    """
    Map (radial_distance, angle, depth) to (x, y, z).

    z is the stored depth as-is; its sign is neither checked nor changed here.
    """
    return CartesianPoints(
        x=points.radial_distance * np.cos(points.angle),
        y=points.radial_distance * np.sin(points.angle),
        z=points.depth,
    )


def to_cartesian(points: CylindricalPoints) -> CartesianPoints:
    """assign_angles followed by cylindrical_to_cartesian."""
    return cylindrical_to_cartesian(assign_angles(points))


def cartesian_to_cylindrical(points: CartesianPoints, n_meridians: int) -> AngularPoints:
    """
    Inverse mapping back to meridian samples.

    Angles are wrapped into [0, 2*pi) and segments recovered by rounding to
    the nearest meridian. Points at the apex (radius 0) land on segment 0.

    Args:
        points: Cartesian points (z taken as depth unchanged)
        n_meridians: Meridian count of the original scan
    """
    if n_meridians <= 0:
        raise ValueError(f"n_meridians must be positive, got {n_meridians}")

    radial_distance = np.hypot(points.x, points.y)
    angle = np.mod(np.arctan2(points.y, points.x), TWO_PI)
    angle = np.where(angle >= TWO_PI, 0.0, angle)  # mod can round up to 2*pi
    segment = np.rint(angle / TWO_PI * n_meridians).astype(np.int64) % n_meridians

    return AngularPoints(
        segment=segment,
        radial_distance=radial_distance,
        depth=points.z,
        angle=angle,
        meridian_count=n_meridians,
    )
