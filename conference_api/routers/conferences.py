# conference_api/routers/conferences.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, status

from conference_api.auth import get_optional_principal
from conference_api.content import ContentService
from conference_api.dependencies import get_content_service
from conference_api.errors import NotFound
from conference_api.pagination import PageParams, page_params
from conference_api.policy import Principal
from conference_api.schemas import (
    ConferenceDetail,
    ConferenceIn,
    ConferenceLocation,
    ConferenceRead,
    ConferenceWithTracks,
)

router = APIRouter(prefix="/api/v1/conferences", tags=["conferences"])


@router.get("", response_model=List[ConferenceWithTracks])
async def list_conferences(
    page: PageParams = Depends(page_params),
    service: ContentService = Depends(get_content_service),
):
    return await service.list_conferences(page)


@router.post("", response_model=ConferenceRead, status_code=status.HTTP_201_CREATED)
async def create_conference(
    payload: ConferenceIn,
    principal: Optional[Principal] = Depends(get_optional_principal),
    service: ContentService = Depends(get_content_service),
):
    return await service.create_conference(principal, payload)


@router.get("/{conference_id}", response_model=ConferenceDetail)
async def get_conference(
    conference_id: int = Path(gt=0),
    service: ContentService = Depends(get_content_service),
):
    conference = await service.get_conference(conference_id)
    if conference is None:
        raise NotFound("Conference not found")
    return conference


@router.get("/{conference_id}/location", response_model=ConferenceLocation)
async def get_conference_location(
    conference_id: int = Path(gt=0),
    service: ContentService = Depends(get_content_service),
):
    conference = await service.get_conference_location(conference_id)
    if conference is None:
        raise NotFound("Conference not found")
    return conference


@router.put("/{conference_id}", response_model=ConferenceRead)
async def update_conference(
    payload: ConferenceIn,
    conference_id: int = Path(gt=0),
    principal: Optional[Principal] = Depends(get_optional_principal),
    service: ContentService = Depends(get_content_service),
):
    conference = await service.update_conference(principal, conference_id, payload)
    if conference is None:
        raise NotFound("Conference not found")
    return conference


@router.delete("/{conference_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_conference(
    conference_id: int = Path(gt=0),
    principal: Optional[Principal] = Depends(get_optional_principal),
    service: ContentService = Depends(get_content_service),
):
    if not await service.delete_conference(principal, conference_id):
        raise NotFound("Conference not found")
