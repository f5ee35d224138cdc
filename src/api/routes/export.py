"""
Export Endpoints - animated GIF of the non-blank frames

Errors:
    409 NOTHING_TO_EXPORT  every frame is blank
    409 ALREADY_EXPORTING  another export is in flight
    500 EXPORT_FAILED      rasterization or encoding failed
"""

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_animation_service
from api.schemas.playback import ExportFileResponse
from engine.export_pipeline import GIF_MEDIA_TYPE
from services.animation_service import AnimationService

router = APIRouter(prefix="/export", tags=["Export"])


@router.post(
    "",
    summary="Export animated GIF",
    response_class=Response,
    responses={200: {"content": {GIF_MEDIA_TYPE: {}}}},
)
async def export_gif(service: AnimationService = Depends(get_animation_service)) -> Response:
    result = await service.export_animation()
    return Response(
        content=result.data,
        media_type=result.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "X-Frame-Count": str(result.frame_count),
        },
    )


@router.post(
    "/file",
    response_model=ExportFileResponse,
    summary="Export animated GIF to the configured output directory"
)
async def export_file(service: AnimationService = Depends(get_animation_service)) -> ExportFileResponse:
    path = await service.export_to_file()
    return ExportFileResponse(path=str(path), size_bytes=path.stat().st_size)
