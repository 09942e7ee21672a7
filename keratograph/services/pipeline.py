"""
CORNEA export pipeline.

    lines -> parse_lines -> assign_angles -> cylindrical_to_cartesian
          -> correct_chirality -> PointCloud
"""

import logging
import os
from typing import Iterable, Optional, Union

from keratograph.models.cornea import PointCloud
from keratograph.models.errors import EmptyInputError
from keratograph.services.chirality import correct_chirality
from keratograph.services.line_parser import LinePolicy, parse_lines
from keratograph.utils.coordinates import assign_angles, cylindrical_to_cartesian


logger = logging.getLogger(__name__)


FALSE_VALUES = {"0", "false", "no", "off"}


def env_flag(name: str, default: str = "1") -> bool:
    """Read a boolean environment flag; anything outside FALSE_VALUES is true."""
    return os.getenv(name, default).strip().lower() not in FALSE_VALUES


CORRECT_CHIRALITY = env_flag("KERATOGRAPH_CORRECT_CHIRALITY")


def build_point_cloud(
    lines: Union[Iterable[str], str],
    needs_correction: Optional[bool] = None,
    policy: Union[LinePolicy, str, None] = None,
    source_name: Optional[str] = None,
) -> PointCloud:
    """
    Turn CORNEA export lines into an orientation-corrected point cloud.

    Args:
        lines: Export lines in file order
        needs_correction: Negate z (defaults to KERATOGRAPH_CORRECT_CHIRALITY)
        policy: Line policy for non-record lines (defaults to KERATOGRAPH_LINE_POLICY)
        source_name: Optional label carried on the result

    Raises:
        EmptyInputError: if no segment records were found.
        MalformedLineError / NonNumericFieldError: under the fail-fast policy.
    """
    if needs_correction is None:
        needs_correction = CORRECT_CHIRALITY

    parsed = parse_lines(lines, policy)
    if len(parsed.points) == 0:
        raise EmptyInputError(
            f"No segment records found in {parsed.total_lines} lines "
            f"({parsed.skipped_lines} skipped)"
        )

    angular = assign_angles(parsed.points)
    cartesian = cylindrical_to_cartesian(angular)
    corrected = correct_chirality(cartesian, needs_correction)

    label = f" from {source_name}" if source_name else ""
    logger.debug(
        f"Built point cloud{label}: {len(corrected)} points, "
        f"{angular.meridian_count} meridians, corrected={bool(needs_correction)}"
    )

    return PointCloud(
        points=corrected,
        meridian_count=angular.meridian_count,
        chirality_corrected=bool(needs_correction),
        skipped_lines=parsed.skipped_lines,
        source_name=source_name,
    )
