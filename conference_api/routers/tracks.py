# conference_api/routers/tracks.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, status

from conference_api.auth import get_optional_principal
from conference_api.content import ContentService
from conference_api.dependencies import get_content_service
from conference_api.errors import NotFound
from conference_api.policy import Principal
from conference_api.schemas import ArticleIn, ArticleRead, Schedule, TrackDetail, TrackIn, TrackRead

router = APIRouter(prefix="/api/v1/conferences/{conference_id}/tracks", tags=["tracks"])


@router.get("", response_model=List[TrackRead])
async def list_tracks(
    conference_id: int = Path(gt=0),
    service: ContentService = Depends(get_content_service),
):
    return await service.list_tracks(conference_id)


@router.post("", response_model=TrackRead, status_code=status.HTTP_201_CREATED)
async def create_track(
    payload: TrackIn,
    conference_id: int = Path(gt=0),
    principal: Optional[Principal] = Depends(get_optional_principal),
    service: ContentService = Depends(get_content_service),
):
    return await service.create_track(principal, conference_id, payload)


@router.get("/{track_id}", response_model=TrackDetail)
async def get_track(
    conference_id: int = Path(gt=0),
    track_id: int = Path(gt=0),
    service: ContentService = Depends(get_content_service),
):
    track = await service.get_track(conference_id, track_id)
    if track is None:
        raise NotFound("Track not found")
    return track


@router.put("/{track_id}", response_model=TrackRead)
async def update_track(
    payload: TrackIn,
    conference_id: int = Path(gt=0),
    track_id: int = Path(gt=0),
    principal: Optional[Principal] = Depends(get_optional_principal),
    service: ContentService = Depends(get_content_service),
):
    track = await service.update_track(principal, conference_id, track_id, payload)
    if track is None:
        raise NotFound("Track not found")
    return track


@router.delete("/{track_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_track(
    conference_id: int = Path(gt=0),
    track_id: int = Path(gt=0),
    principal: Optional[Principal] = Depends(get_optional_principal),
    service: ContentService = Depends(get_content_service),
):
    if not await service.delete_track(principal, conference_id, track_id):
        raise NotFound("Track not found")


# get articles organized by date
@router.get("/{track_id}/schedule", response_model=Schedule)
async def get_schedule(
    conference_id: int = Path(gt=0),
    track_id: int = Path(gt=0),
    service: ContentService = Depends(get_content_service),
):
    schedule = await service.get_schedule(conference_id, track_id)
    if schedule is None:
        raise NotFound("Track not found")
    return schedule


@router.get("/{track_id}/articles", response_model=List[ArticleRead])
async def list_track_articles(
    conference_id: int = Path(gt=0),
    track_id: int = Path(gt=0),
    service: ContentService = Depends(get_content_service),
):
    return await service.list_track_articles(conference_id, track_id)


@router.post("/{track_id}/articles", response_model=ArticleRead, status_code=status.HTTP_201_CREATED)
async def create_article(
    payload: ArticleIn,
    conference_id: int = Path(gt=0),
    track_id: int = Path(gt=0),
    principal: Optional[Principal] = Depends(get_optional_principal),
    service: ContentService = Depends(get_content_service),
):
    return await service.create_article(principal, conference_id, track_id, payload)
