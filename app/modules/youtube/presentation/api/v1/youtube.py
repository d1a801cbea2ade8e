# 📄 File: app/modules/youtube/presentation/api/v1/youtube.py
# 🧭 Purpose (Layman Explanation):
# Lets an instructor paste a YouTube link and get back the title, length and thumbnail of the
# video (or of every video in a playlist) to fill in a lesson.
#
# 🧪 Purpose (Technical Summary):
# FastAPI route over YoutubeService.fetch_youtube_data. Requires a token so the Data API
# quota is only spent on behalf of signed-in users.
#
# 🔗 Dependencies:
# - FastAPI router, app.shared.core.dependencies, youtube_schemas
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted under /api/v1/youtube)

from fastapi import APIRouter, Depends, Query

from app.modules.youtube.presentation.api.schemas.youtube_schemas import YoutubeMetadataResponse
from app.shared.core.container import ApplicationContainer
from app.shared.core.dependencies import CurrentUser, get_container, get_current_user, raise_for_result

youtube_router = APIRouter()


@youtube_router.get("/metadata", response_model=YoutubeMetadataResponse, summary="Resolve a YouTube URL")
async def get_youtube_metadata(
    url: str = Query(..., min_length=1, max_length=500, description="YouTube video or playlist URL"),
    max_playlist_videos: int = Query(50, ge=1, le=200),
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> YoutubeMetadataResponse:
    result = await container.youtube_service.fetch_youtube_data(url, max_playlist_videos=max_playlist_videos)
    return YoutubeMetadataResponse.from_dto(raise_for_result(result))
