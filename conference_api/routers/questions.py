# conference_api/routers/questions.py

from typing import List

from fastapi import APIRouter, Depends, Path, status

from conference_api.auth import get_current_principal
from conference_api.dependencies import get_article_question_service
from conference_api.policy import Principal
from conference_api.questions import QuestionService
from conference_api.schemas import (
    AnswerCreate,
    ArticleQuestionDetail,
    ArticleQuestionRead,
    QuestionCount,
    QuestionCreate,
)

router = APIRouter(prefix="/api/v1", tags=["questions"])


@router.post(
    "/articles/{article_id}/questions",
    response_model=ArticleQuestionRead,
    status_code=status.HTTP_201_CREATED,
)
async def ask_question(
    payload: QuestionCreate,
    article_id: int = Path(gt=0),
    principal: Principal = Depends(get_current_principal),
    service: QuestionService = Depends(get_article_question_service),
):
    return await service.ask(principal, article_id, payload.question)


# published Q&A, no login needed
@router.get("/articles/{article_id}/questions", response_model=List[ArticleQuestionRead])
async def list_answered_questions(
    article_id: int = Path(gt=0),
    service: QuestionService = Depends(get_article_question_service),
):
    return await service.list_answered(article_id)


@router.get("/articles/{article_id}/questions/count", response_model=QuestionCount)
async def count_answered_questions(
    article_id: int = Path(gt=0),
    service: QuestionService = Depends(get_article_question_service),
):
    count = await service.count_answered(article_id)
    return QuestionCount(article_id=article_id, count=count)


@router.get("/articles/{article_id}/questions/all", response_model=List[ArticleQuestionRead])
async def list_article_questions(
    article_id: int = Path(gt=0),
    principal: Principal = Depends(get_current_principal),
    service: QuestionService = Depends(get_article_question_service),
):
    return await service.list_for_target(principal, article_id)


@router.get("/questions", response_model=List[ArticleQuestionDetail])
async def list_all_questions(
    principal: Principal = Depends(get_current_principal),
    service: QuestionService = Depends(get_article_question_service),
):
    return await service.list_all(principal)


@router.get("/questions/{question_id}", response_model=ArticleQuestionRead)
async def get_question(
    question_id: int = Path(gt=0),
    principal: Principal = Depends(get_current_principal),
    service: QuestionService = Depends(get_article_question_service),
):
    return await service.get(principal, question_id)


@router.patch("/questions/{question_id}", response_model=ArticleQuestionRead)
async def answer_question(
    payload: AnswerCreate,
    question_id: int = Path(gt=0),
    principal: Principal = Depends(get_current_principal),
    service: QuestionService = Depends(get_article_question_service),
):
    return await service.answer(principal, question_id, payload.answer)


@router.delete("/questions/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: int = Path(gt=0),
    principal: Principal = Depends(get_current_principal),
    service: QuestionService = Depends(get_article_question_service),
):
    await service.delete(principal, question_id)
