# conference_api/dependencies.py

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from conference_api.content import ContentService
from conference_api.database import scoped_session_dependency
from conference_api.geocoding import get_geocoder
from conference_api.models import TargetKind
from conference_api.questions import QuestionService


def get_content_service(
    session: AsyncSession = Depends(scoped_session_dependency),
    geocoder=Depends(get_geocoder),
) -> ContentService:
    return ContentService(session, geocoder=geocoder)


def get_request_service(session: AsyncSession = Depends(scoped_session_dependency)) -> QuestionService:
    return QuestionService(session, TargetKind.CONFERENCE)


def get_article_question_service(session: AsyncSession = Depends(scoped_session_dependency)) -> QuestionService:
    return QuestionService(session, TargetKind.ARTICLE)
