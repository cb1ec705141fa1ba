# conference_api/routers/articles.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from conference_api.auth import get_optional_principal
from conference_api.content import ContentService
from conference_api.dependencies import get_content_service
from conference_api.errors import NotFound
from conference_api.pagination import PageParams, optional_page_params
from conference_api.policy import Principal
from conference_api.schemas import ArticleDetail, ArticleIn, ArticleRead

router = APIRouter(prefix="/api/v1/conferences/{conference_id}/articles", tags=["articles"])


# all conference articles, with optional pagination and search
@router.get("", response_model=List[ArticleRead])
async def list_articles(
    conference_id: int = Path(gt=0),
    search_term: Optional[str] = Query(None, alias="searchTerm", max_length=255),
    page: Optional[PageParams] = Depends(optional_page_params),
    service: ContentService = Depends(get_content_service),
):
    return await service.list_articles(conference_id, page=page, search_term=search_term)


@router.get("/{article_id}", response_model=ArticleDetail)
async def get_article(
    conference_id: int = Path(gt=0),
    article_id: int = Path(gt=0),
    service: ContentService = Depends(get_content_service),
):
    article = await service.get_article(conference_id, article_id)
    if article is None:
        raise NotFound("Article not found")
    return article


@router.put("/{article_id}", response_model=ArticleRead)
async def update_article(
    payload: ArticleIn,
    conference_id: int = Path(gt=0),
    article_id: int = Path(gt=0),
    principal: Optional[Principal] = Depends(get_optional_principal),
    service: ContentService = Depends(get_content_service),
):
    article = await service.update_article(principal, conference_id, article_id, payload)
    if article is None:
        raise NotFound("Article not found")
    return article


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    conference_id: int = Path(gt=0),
    article_id: int = Path(gt=0),
    principal: Optional[Principal] = Depends(get_optional_principal),
    service: ContentService = Depends(get_content_service),
):
    if not await service.delete_article(principal, conference_id, article_id):
        raise NotFound("Article not found")
