# conference_api/policy.py

"""
Access policy for conference content and questions.

A single pure decision function answers "may this principal perform this
action on this resource?". Routers and services never compare roles
themselves; they ask ``permit`` / ``enforce``.

Decision table (evaluated top to bottom):

    read       on conference/track/article     -> allow, no principal needed
    read       on article_question (answered)  -> allow, no principal needed
    read       on conference_question          -> forbidden
    anything else without a principal          -> unauthenticated
    create     on a question                   -> any authenticated principal
    update     on a question                   -> forbidden
    create/update/delete on content            -> admin
    answer/delete/read-all on a question       -> admin
    read-own   on a question                   -> principal.id == owner_id
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from conference_api.errors import Forbidden, Unauthenticated
from conference_api.models import Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class Action(str, enum.Enum):
    READ = "read"
    READ_OWN = "read-own"
    READ_ALL = "read-all"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    ANSWER = "answer"


class ResourceKind(str, enum.Enum):
    CONFERENCE = "conference"
    TRACK = "track"
    ARTICLE = "article"
    CONFERENCE_QUESTION = "conference_question"
    ARTICLE_QUESTION = "article_question"

    @property
    def is_content(self) -> bool:
        return self in CONTENT_KINDS


CONTENT_KINDS = frozenset(
    {ResourceKind.CONFERENCE, ResourceKind.TRACK, ResourceKind.ARTICLE}
)
ADMIN_CONTENT_ACTIONS = frozenset({Action.CREATE, Action.UPDATE, Action.DELETE})
ADMIN_QUESTION_ACTIONS = frozenset({Action.ANSWER, Action.DELETE, Action.READ_ALL})


@dataclass(frozen=True)
class Resource:
    kind: ResourceKind
    owner_id: Optional[int] = None


class Decision(str, enum.Enum):
    ALLOW = "allow"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


def decide(principal: Optional[Principal], action: Action, resource: Resource) -> Decision:
    if action == Action.READ:
        if resource.kind.is_content or resource.kind == ResourceKind.ARTICLE_QUESTION:
            return Decision.ALLOW
        return Decision.FORBIDDEN

    if principal is None:
        return Decision.UNAUTHENTICATED

    if resource.kind.is_content:
        if action in ADMIN_CONTENT_ACTIONS and principal.is_admin:
            return Decision.ALLOW
        return Decision.FORBIDDEN

    if action == Action.CREATE:
        return Decision.ALLOW
    if action in ADMIN_QUESTION_ACTIONS:
        return Decision.ALLOW if principal.is_admin else Decision.FORBIDDEN
    if action == Action.READ_OWN:
        if resource.owner_id is not None and principal.id == resource.owner_id:
            return Decision.ALLOW
        return Decision.FORBIDDEN
    return Decision.FORBIDDEN


def permit(principal: Optional[Principal], action: Action, resource: Resource) -> bool:
    return decide(principal, action, resource) is Decision.ALLOW


def enforce(principal: Optional[Principal], action: Action, resource: Resource) -> None:
    """Raise ``Unauthenticated`` or ``Forbidden`` unless the action is permitted."""
    decision = decide(principal, action, resource)
    if decision is Decision.ALLOW:
        return
    logger.debug(
        "Denied %s on %s for principal %s: %s",
        action.value,
        resource.kind.value,
        principal.id if principal else None,
        decision.value,
    )
    if decision is Decision.UNAUTHENTICATED:
        raise Unauthenticated()
    raise Forbidden()
