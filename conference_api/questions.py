# conference_api/questions.py

"""
Questions asked by users about a conference ("requests") or an article.

Both kinds share one state machine::

    pending --answer (admin)--> answered

``answered`` is terminal; the only other mutation is deletion by an admin.
The kinds differ in who may read them: conference requests are visible to
their author and to admins only, while answered article questions are
public.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from conference_api.errors import InvalidTransition, NotFound, Unauthenticated
from conference_api.models import (
    Article,
    ArticleQuestion,
    Conference,
    ConferenceQuestion,
    QuestionStatus,
    TargetKind,
)
from conference_api.policy import (
    Action,
    Principal,
    Resource,
    ResourceKind,
    enforce,
    permit,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuestionTarget:
    kind: TargetKind
    model: type
    parent: type
    target_column: str
    resource_kind: ResourceKind
    label: str
    detail_relationships: Tuple[str, ...]


TARGETS = {
    TargetKind.CONFERENCE: QuestionTarget(
        kind=TargetKind.CONFERENCE,
        model=ConferenceQuestion,
        parent=Conference,
        target_column="conference_id",
        resource_kind=ResourceKind.CONFERENCE_QUESTION,
        label="Conference",
        detail_relationships=("user", "conference"),
    ),
    TargetKind.ARTICLE: QuestionTarget(
        kind=TargetKind.ARTICLE,
        model=ArticleQuestion,
        parent=Article,
        target_column="article_id",
        resource_kind=ResourceKind.ARTICLE_QUESTION,
        label="Article",
        detail_relationships=("user",),
    ),
}


class QuestionService:
    def __init__(self, session: AsyncSession, kind: TargetKind):
        self.session = session
        self.target = TARGETS[kind]

    @property
    def model(self):
        return self.target.model

    @property
    def target_column(self):
        return getattr(self.model, self.target.target_column)

    def _resource(self, owner_id: Optional[int] = None) -> Resource:
        return Resource(self.target.resource_kind, owner_id)

    def _select(self):
        return select(self.model).where(self.model.target_kind == self.target.kind)

    async def _load(self, question_id: int):
        result = await self.session.execute(
            self._select()
            .where(self.model.id == question_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _commit(self):
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def ask(self, principal: Optional[Principal], target_id: int, text: str):
        enforce(principal, Action.CREATE, self._resource())
        if await self.session.get(self.target.parent, target_id) is None:
            raise NotFound(f"{self.target.label} not found")

        question = self.model(
            question=text,
            status=QuestionStatus.PENDING,
            user_id=principal.id,
            **{self.target.target_column: target_id},
        )
        self.session.add(question)
        await self._commit()
        await self.session.refresh(question)
        logger.info(
            "User %s asked %s question %s on %s %s",
            principal.id, self.target.kind.value, question.id, self.target.label.lower(), target_id,
        )
        return question

    async def list_for_target(self, principal: Optional[Principal], target_id: int) -> List:
        """Admins see every question on the target; users only their own."""
        if principal is None:
            raise Unauthenticated()
        stmt = self._select().where(self.target_column == target_id)
        if not permit(principal, Action.READ_ALL, self._resource()):
            stmt = stmt.where(self.model.user_id == principal.id)
        result = await self.session.execute(stmt.order_by(self.model.id))
        return list(result.scalars().all())

    async def list_answered(self, target_id: int) -> List:
        enforce(None, Action.READ, self._resource())
        result = await self.session.execute(
            self._select()
            .where(self.target_column == target_id, self.model.status == QuestionStatus.ANSWERED)
            .order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def count_answered(self, target_id: int) -> int:
        enforce(None, Action.READ, self._resource())
        result = await self.session.execute(
            select(func.count(self.model.id)).where(
                self.model.target_kind == self.target.kind,
                self.target_column == target_id,
                self.model.status == QuestionStatus.ANSWERED,
            )
        )
        return result.scalar_one()

    async def list_all(self, principal: Optional[Principal]) -> List:
        enforce(principal, Action.READ_ALL, self._resource())
        options = [
            selectinload(getattr(self.model, name)) for name in self.target.detail_relationships
        ]
        result = await self.session.execute(
            self._select().options(*options).order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def get(self, principal: Optional[Principal], question_id: int, target_id: Optional[int] = None):
        """
        Fetch one question. When ``target_id`` is given the question must
        belong to that conference/article, otherwise it is NotFound.
        """
        if principal is None:
            raise Unauthenticated()
        question = await self._load(question_id)
        if question is None or (target_id is not None and question.target_id != target_id):
            raise NotFound("Question not found")
        if not permit(principal, Action.READ_ALL, self._resource()):
            enforce(principal, Action.READ_OWN, self._resource(owner_id=question.user_id))
        return question

    async def answer(self, principal: Optional[Principal], question_id: int, text: str):
        enforce(principal, Action.ANSWER, self._resource())
        question = await self._load(question_id)
        if question is None:
            raise NotFound("Question not found")

        result = await self.session.execute(
            update(self.model)
            .where(self.model.id == question_id, self.model.status == QuestionStatus.PENDING)
            .values(
                answer=text,
                status=QuestionStatus.ANSWERED,
                answered_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await self.session.rollback()
            raise InvalidTransition("Question is already answered")
        await self._commit()
        await self.session.refresh(question)
        logger.info("Admin %s answered %s question %s", principal.id, self.target.kind.value, question_id)
        return question

    async def delete(self, principal: Optional[Principal], question_id: int) -> None:
        enforce(principal, Action.DELETE, self._resource())
        question = await self._load(question_id)
        if question is None:
            raise NotFound("Question not found")
        await self.session.delete(question)
        await self._commit()
        logger.info("Admin %s deleted %s question %s", principal.id, self.target.kind.value, question_id)
