"""
CORNEA export file access.

Reads an export from disk and hands its lines to the pipeline. File names
follow the device convention `<name>.OD` / `<name>.OS` (right / left eye),
with `_F` at the end of the stem for extrapolated data. That metadata is
informational only; it does not change parsing.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from keratograph.models.cornea import PointCloud
from keratograph.models.errors import UnsupportedExportError
from keratograph.services.line_parser import LinePolicy
from keratograph.services.pipeline import build_point_cloud


logger = logging.getLogger(__name__)


EYE_SUFFIXES = {".od": "OD", ".os": "OS"}
EXTRAPOLATED_MARKER = "_F"


@dataclass(frozen=True)
class ExportInfo:
    """What the file name says about an export."""

    name: str
    eye: str            # "OD" (right) or "OS" (left)
    extrapolated: bool  # stem ends with _F


def can_parse(filepath: Union[str, Path]) -> bool:
    return Path(filepath).suffix.lower() in EYE_SUFFIXES


def describe_export(filepath: Union[str, Path]) -> ExportInfo:
    filepath = Path(filepath)
    eye = EYE_SUFFIXES.get(filepath.suffix.lower())
    if eye is None:
        raise UnsupportedExportError(f"Not a CORNEA export (.OD/.OS): {filepath.name}")
    stem = filepath.stem
    return ExportInfo(
        name=stem,
        eye=eye,
        extrapolated=stem.upper().endswith(EXTRAPOLATED_MARKER),
    )


def read_export_lines(filepath: Union[str, Path]) -> list[str]:
    """Read the whole export once and split it into lines."""
    with open(filepath, "r", encoding="utf-8-sig", errors="replace") as f:
        return f.read().splitlines()


def load_point_cloud(
    filepath: Union[str, Path],
    needs_correction: Optional[bool] = None,
    policy: Union[LinePolicy, str, None] = None,
) -> PointCloud:
    """
    Read a .OD/.OS export and build its corrected point cloud.
    """
    filepath = Path(filepath)
    info = describe_export(filepath)
    lines = read_export_lines(filepath)
    logger.info(
        f"Loading {filepath.name}: {len(lines)} lines, eye={info.eye}, "
        f"extrapolated={info.extrapolated}"
    )
    return build_point_cloud(
        lines,
        needs_correction=needs_correction,
        policy=policy,
        source_name=filepath.name,
    )
