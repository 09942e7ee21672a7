"""
API routes for point cloud conversion.
"""

from fastapi import APIRouter

from keratograph.api.schemas import ErrorResponse, PointCloudRequest, PointCloudResponse
from keratograph.models.cornea import PointCloud
from keratograph.services.pipeline import build_point_cloud


router = APIRouter(prefix="/points", tags=["points"])


def _build_point_cloud_response(cloud: PointCloud) -> PointCloudResponse:
    return PointCloudResponse(
        source_name=cloud.source_name,
        point_count=len(cloud),
        meridian_count=cloud.meridian_count,
        skipped_lines=cloud.skipped_lines,
        chirality_corrected=cloud.chirality_corrected,
        bounding_box=cloud.get_bounding_box(),
        x=cloud.x.tolist(),
        y=cloud.y.tolist(),
        z=cloud.z.tolist(),
    )


@router.post(
    "",
    response_model=PointCloudResponse,
    responses={422: {"model": ErrorResponse}},
)
async def convert_points(request: PointCloudRequest):
    """
    Convert CORNEA export lines into a corrected cartesian point cloud.

    Point order matches the order of the segment records in `lines`.
    """
    cloud = build_point_cloud(
        request.lines,
        needs_correction=request.needs_correction,
        policy=request.line_policy,
        source_name=request.source_name,
    )
    return _build_point_cloud_response(cloud)
