# conference_api/content.py

"""
Conference -> Track -> Article hierarchy.

Reads are public and return ``None`` (or an empty list) for ids that do not
exist or do not belong to the given parent. Writes are admin-only and go
through the access policy before touching the database. Deleting a
conference or a track removes everything structurally owned by it in one
transaction.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from conference_api.errors import NotFound
from conference_api.models import Article, Conference, ConferenceQuestion, Track
from conference_api.pagination import PageParams
from conference_api.policy import Action, Principal, Resource, ResourceKind, enforce
from conference_api.schemas import ArticleIn, ConferenceIn, TrackIn

logger = logging.getLogger(__name__)


def _like_pattern(term: str) -> str:
    escaped = term.lower().replace("/", "//").replace("%", "/%").replace("_", "/_")
    return f"%{escaped}%"


class ContentService:
    def __init__(self, session: AsyncSession, geocoder=None):
        self.session = session
        self.geocoder = geocoder

    async def _commit(self):
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def _resolve_city(self, latitude, longitude) -> Optional[str]:
        if self.geocoder is None or latitude is None or longitude is None:
            return None
        return await self.geocoder.city_for(latitude, longitude)

    # ------------------------------------------------------------------
    # Conferences
    # ------------------------------------------------------------------

    async def list_conferences(self, page: PageParams) -> List[Conference]:
        result = await self.session.execute(
            select(Conference)
            .options(selectinload(Conference.tracks))
            .execution_options(populate_existing=True)
            .order_by(Conference.id.asc())
            .limit(page.page_size)
            .offset(page.offset)
        )
        return list(result.scalars().all())

    async def get_conference(self, conference_id: int) -> Optional[Conference]:
        result = await self.session.execute(
            select(Conference)
            .where(Conference.id == conference_id)
            .options(selectinload(Conference.tracks).selectinload(Track.articles))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_conference_location(self, conference_id: int) -> Optional[Conference]:
        return await self.session.get(Conference, conference_id)

    async def create_conference(self, principal: Optional[Principal], fields: ConferenceIn) -> Conference:
        enforce(principal, Action.CREATE, Resource(ResourceKind.CONFERENCE))
        conference = Conference(**fields.model_dump())
        conference.city = await self._resolve_city(fields.latitude, fields.longitude)
        self.session.add(conference)
        await self._commit()
        await self.session.refresh(conference)
        logger.info("Created conference %s (city=%s)", conference.id, conference.city)
        return conference

    async def update_conference(
        self, principal: Optional[Principal], conference_id: int, fields: ConferenceIn
    ) -> Optional[Conference]:
        enforce(principal, Action.UPDATE, Resource(ResourceKind.CONFERENCE))
        conference = await self.session.get(Conference, conference_id)
        if conference is None:
            return None

        moved = (conference.latitude, conference.longitude) != (fields.latitude, fields.longitude)
        for key, value in fields.model_dump().items():
            setattr(conference, key, value)
        if moved:
            conference.city = await self._resolve_city(fields.latitude, fields.longitude)

        await self._commit()
        await self.session.refresh(conference)
        logger.info("Updated conference %s", conference_id)
        return conference

    async def delete_conference(self, principal: Optional[Principal], conference_id: int) -> bool:
        enforce(principal, Action.DELETE, Resource(ResourceKind.CONFERENCE))
        if await self.session.get(Conference, conference_id) is None:
            return False
        try:
            await self.session.execute(
                delete(ConferenceQuestion).where(ConferenceQuestion.conference_id == conference_id)
            )
            await self.session.execute(delete(Article).where(Article.conference_id == conference_id))
            await self.session.execute(delete(Track).where(Track.conference_id == conference_id))
            await self.session.execute(delete(Conference).where(Conference.id == conference_id))
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Deleted conference %s with its tracks, articles and requests", conference_id)
        return True

    # ------------------------------------------------------------------
    # Tracks
    # ------------------------------------------------------------------

    async def list_tracks(self, conference_id: int) -> List[Track]:
        result = await self.session.execute(
            select(Track).where(Track.conference_id == conference_id).order_by(Track.id)
        )
        return list(result.scalars().all())

    async def _track_in_conference(self, conference_id: int, track_id: int, *options) -> Optional[Track]:
        result = await self.session.execute(
            select(Track)
            .where(Track.id == track_id, Track.conference_id == conference_id)
            .options(*options)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_track(self, conference_id: int, track_id: int) -> Optional[Track]:
        return await self._track_in_conference(
            conference_id, track_id, selectinload(Track.articles)
        )

    async def create_track(self, principal: Optional[Principal], conference_id: int, fields: TrackIn) -> Track:
        enforce(principal, Action.CREATE, Resource(ResourceKind.TRACK))
        if await self.session.get(Conference, conference_id) is None:
            raise NotFound("Conference not found")
        track = Track(conference_id=conference_id, **fields.model_dump())
        self.session.add(track)
        await self._commit()
        await self.session.refresh(track)
        logger.info("Created track %s in conference %s", track.id, conference_id)
        return track

    async def update_track(
        self, principal: Optional[Principal], conference_id: int, track_id: int, fields: TrackIn
    ) -> Optional[Track]:
        enforce(principal, Action.UPDATE, Resource(ResourceKind.TRACK))
        track = await self._track_in_conference(conference_id, track_id)
        if track is None:
            return None
        for key, value in fields.model_dump().items():
            setattr(track, key, value)
        await self._commit()
        await self.session.refresh(track)
        logger.info("Updated track %s", track_id)
        return track

    async def delete_track(self, principal: Optional[Principal], conference_id: int, track_id: int) -> bool:
        enforce(principal, Action.DELETE, Resource(ResourceKind.TRACK))
        if await self._track_in_conference(conference_id, track_id) is None:
            return False
        try:
            await self.session.execute(delete(Article).where(Article.track_id == track_id))
            await self.session.execute(delete(Track).where(Track.id == track_id))
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Deleted track %s with its articles", track_id)
        return True

    async def list_track_articles(self, conference_id: int, track_id: int) -> List[Article]:
        result = await self.session.execute(
            select(Article)
            .where(Article.conference_id == conference_id, Article.track_id == track_id)
            .order_by(Article.start_date, Article.id)
        )
        return list(result.scalars().all())

    async def get_schedule(self, conference_id: int, track_id: int) -> Optional[Dict[str, List[Article]]]:
        """
        Group a track's articles by the calendar date of their start time.

        Keys are ISO dates in ascending order; articles within a day keep
        start-time order.
        """
        if await self._track_in_conference(conference_id, track_id) is None:
            return None
        schedule: Dict[str, List[Article]] = {}
        for article in await self.list_track_articles(conference_id, track_id):
            day = article.start_date.date().isoformat()
            schedule.setdefault(day, []).append(article)
        return {day: schedule[day] for day in sorted(schedule)}

    # ------------------------------------------------------------------
    # Articles
    # ------------------------------------------------------------------

    async def list_articles(
        self,
        conference_id: int,
        page: Optional[PageParams] = None,
        search_term: Optional[str] = None,
    ) -> List[Article]:
        stmt = select(Article).where(Article.conference_id == conference_id)
        if search_term:
            pattern = _like_pattern(search_term)
            stmt = stmt.where(
                or_(
                    func.lower(Article.title).like(pattern, escape="/"),
                    func.lower(Article.authors).like(pattern, escape="/"),
                )
            )
        stmt = stmt.order_by(Article.id.asc())
        if page is not None:
            stmt = stmt.limit(page.page_size).offset(page.offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_article(self, conference_id: int, article_id: int) -> Optional[Article]:
        result = await self.session.execute(
            select(Article)
            .where(Article.id == article_id, Article.conference_id == conference_id)
            .options(selectinload(Article.track))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_article(
        self, principal: Optional[Principal], conference_id: int, track_id: int, fields: ArticleIn
    ) -> Article:
        enforce(principal, Action.CREATE, Resource(ResourceKind.ARTICLE))
        if await self.session.get(Conference, conference_id) is None:
            raise NotFound("Conference not found")
        if await self._track_in_conference(conference_id, track_id) is None:
            raise NotFound("Track not found in conference")
        article = Article(conference_id=conference_id, track_id=track_id, **fields.model_dump())
        self.session.add(article)
        await self._commit()
        await self.session.refresh(article)
        logger.info("Created article %s in track %s", article.id, track_id)
        return article

    async def update_article(
        self, principal: Optional[Principal], conference_id: int, article_id: int, fields: ArticleIn
    ) -> Optional[Article]:
        enforce(principal, Action.UPDATE, Resource(ResourceKind.ARTICLE))
        article = await self._article_in_conference(conference_id, article_id)
        if article is None:
            return None
        for key, value in fields.model_dump().items():
            setattr(article, key, value)
        await self._commit()
        await self.session.refresh(article)
        logger.info("Updated article %s", article_id)
        return article

    async def delete_article(self, principal: Optional[Principal], conference_id: int, article_id: int) -> bool:
        enforce(principal, Action.DELETE, Resource(ResourceKind.ARTICLE))
        article = await self._article_in_conference(conference_id, article_id)
        if article is None:
            return False
        # questions on the article are left in place
        await self.session.delete(article)
        await self._commit()
        logger.info("Deleted article %s", article_id)
        return True

    async def _article_in_conference(self, conference_id: int, article_id: int) -> Optional[Article]:
        result = await self.session.execute(
            select(Article).where(Article.id == article_id, Article.conference_id == conference_id)
        )
        return result.scalar_one_or_none()
