"""
API schemas (Pydantic models) for request/response validation.
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field


# ============================================================================
# Point Cloud Schemas
# ============================================================================

class PointCloudRequest(BaseModel):
    """CORNEA export lines to convert."""
    lines: list[str] = Field(..., description="Export lines in file order")
    needs_correction: Optional[bool] = None  # server default when omitted
    line_policy: Optional[Literal["skip", "fail"]] = None
    source_name: Optional[str] = None


class PointCloudResponse(BaseModel):
    """Orientation-corrected point cloud."""
    source_name: Optional[str] = None
    point_count: int
    meridian_count: int
    skipped_lines: int
    chirality_corrected: bool
    bounding_box: tuple[float, float, float, float, float, float]  # (min_x, min_y, min_z, max_x, max_y, max_z)

    x: list[float]
    y: list[float]
    z: list[float]


# ============================================================================
# Error Schemas
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str
    code: Optional[str] = None
