# conference_api/routers/requests.py

from typing import List

from fastapi import APIRouter, Depends, Path, status

from conference_api.auth import get_current_principal
from conference_api.dependencies import get_request_service
from conference_api.policy import Principal
from conference_api.questions import QuestionService
from conference_api.schemas import AnswerCreate, QuestionCreate, RequestDetail, RequestRead

router = APIRouter(prefix="/api/v1", tags=["requests"])


# admin gets every request of every conference
@router.get("/requests", response_model=List[RequestDetail])
async def list_all_requests(
    principal: Principal = Depends(get_current_principal),
    service: QuestionService = Depends(get_request_service),
):
    return await service.list_all(principal)


@router.get("/requests/{request_id}", response_model=RequestRead)
async def get_request(
    request_id: int = Path(gt=0),
    principal: Principal = Depends(get_current_principal),
    service: QuestionService = Depends(get_request_service),
):
    return await service.get(principal, request_id)


@router.patch("/requests/{request_id}", response_model=RequestRead)
async def answer_request(
    payload: AnswerCreate,
    request_id: int = Path(gt=0),
    principal: Principal = Depends(get_current_principal),
    service: QuestionService = Depends(get_request_service),
):
    return await service.answer(principal, request_id, payload.answer)


@router.delete("/requests/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_request(
    request_id: int = Path(gt=0),
    principal: Principal = Depends(get_current_principal),
    service: QuestionService = Depends(get_request_service),
):
    await service.delete(principal, request_id)


@router.post(
    "/conferences/{conference_id}/requests",
    response_model=RequestRead,
    status_code=status.HTTP_201_CREATED,
)
async def ask_request(
    payload: QuestionCreate,
    conference_id: int = Path(gt=0),
    principal: Principal = Depends(get_current_principal),
    service: QuestionService = Depends(get_request_service),
):
    return await service.ask(principal, conference_id, payload.question)


# admins see all requests of the conference, users only their own
@router.get("/conferences/{conference_id}/requests", response_model=List[RequestRead])
async def list_conference_requests(
    conference_id: int = Path(gt=0),
    principal: Principal = Depends(get_current_principal),
    service: QuestionService = Depends(get_request_service),
):
    return await service.list_for_target(principal, conference_id)


@router.get("/conferences/{conference_id}/requests/{request_id}", response_model=RequestRead)
async def get_conference_request(
    conference_id: int = Path(gt=0),
    request_id: int = Path(gt=0),
    principal: Principal = Depends(get_current_principal),
    service: QuestionService = Depends(get_request_service),
):
    return await service.get(principal, request_id, target_id=conference_id)
