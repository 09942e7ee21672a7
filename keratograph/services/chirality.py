"""
Chirality (handedness) correction.

CORNEA exports store depth as an unsigned magnitude. Read directly as z in a
right-handed frame with z toward the observer, the concave corneal surface
bulges toward the viewer and left/right orientation comes out mirrored.
Negating z restores the physical orientation.

Whether to correct is a caller decision (device/export convention). There
is no geometric detection here.
"""

import logging

from keratograph.models.cornea import CartesianPoints


logger = logging.getLogger(__name__)


def correct_chirality(points: CartesianPoints, needs_correction: bool) -> CartesianPoints:
    """
    Negate z when needs_correction is set; x and y are passed through.

    Applying the correction twice gives back the original z.
    """
    if not needs_correction:
        return CartesianPoints(x=points.x, y=points.y, z=points.z)

    logger.debug(f"Negating z for {len(points)} points")
    return CartesianPoints(x=points.x, y=points.y, z=-points.z)
