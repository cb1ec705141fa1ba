# tests/test_policy.py
import pytest

from conference_api.errors import Forbidden, Unauthenticated
from conference_api.models import Role
from conference_api.policy import (
    Action,
    Decision,
    Principal,
    Resource,
    ResourceKind,
    decide,
    enforce,
    permit,
)

ADMIN = Principal(id=1, role=Role.ADMIN)
USER = Principal(id=2, role=Role.USER)
OTHER = Principal(id=3, role=Role.USER)

CONTENT = [ResourceKind.CONFERENCE, ResourceKind.TRACK, ResourceKind.ARTICLE]
QUESTIONS = [ResourceKind.CONFERENCE_QUESTION, ResourceKind.ARTICLE_QUESTION]


@pytest.mark.parametrize("kind", CONTENT)
@pytest.mark.parametrize("principal", [None, USER, ADMIN])
def test_content_reads_are_public(kind, principal):
    assert permit(principal, Action.READ, Resource(kind))


@pytest.mark.parametrize("kind", CONTENT)
@pytest.mark.parametrize("action", [Action.CREATE, Action.UPDATE, Action.DELETE])
def test_content_writes_need_admin(kind, action):
    resource = Resource(kind)
    assert decide(None, action, resource) is Decision.UNAUTHENTICATED
    assert decide(USER, action, resource) is Decision.FORBIDDEN
    assert decide(ADMIN, action, resource) is Decision.ALLOW


@pytest.mark.parametrize("kind", QUESTIONS)
def test_any_authenticated_user_may_ask(kind):
    assert decide(None, Action.CREATE, Resource(kind)) is Decision.UNAUTHENTICATED
    assert permit(USER, Action.CREATE, Resource(kind))
    assert permit(ADMIN, Action.CREATE, Resource(kind))


@pytest.mark.parametrize("kind", QUESTIONS)
@pytest.mark.parametrize("action", [Action.ANSWER, Action.DELETE, Action.READ_ALL])
def test_question_administration_needs_admin(kind, action):
    resource = Resource(kind, owner_id=USER.id)
    assert decide(None, action, resource) is Decision.UNAUTHENTICATED
    assert decide(USER, action, resource) is Decision.FORBIDDEN
    assert decide(ADMIN, action, resource) is Decision.ALLOW


@pytest.mark.parametrize("kind", QUESTIONS)
def test_read_own_matches_owner(kind):
    resource = Resource(kind, owner_id=USER.id)
    assert permit(USER, Action.READ_OWN, resource)
    assert decide(OTHER, Action.READ_OWN, resource) is Decision.FORBIDDEN
    assert decide(None, Action.READ_OWN, resource) is Decision.UNAUTHENTICATED


def test_read_own_without_owner_is_denied():
    assert not permit(USER, Action.READ_OWN, Resource(ResourceKind.ARTICLE_QUESTION))


def test_published_article_questions_are_public_but_requests_are_not():
    assert permit(None, Action.READ, Resource(ResourceKind.ARTICLE_QUESTION))
    assert not permit(None, Action.READ, Resource(ResourceKind.CONFERENCE_QUESTION))
    assert not permit(ADMIN, Action.READ, Resource(ResourceKind.CONFERENCE_QUESTION))


@pytest.mark.parametrize("principal", [USER, ADMIN])
def test_questions_cannot_be_edited(principal):
    resource = Resource(ResourceKind.ARTICLE_QUESTION, owner_id=principal.id)
    assert not permit(principal, Action.UPDATE, resource)


def test_enforce_raises_matching_signal():
    resource = Resource(ResourceKind.CONFERENCE)
    with pytest.raises(Unauthenticated):
        enforce(None, Action.DELETE, resource)
    with pytest.raises(Forbidden):
        enforce(USER, Action.DELETE, resource)
    assert enforce(ADMIN, Action.DELETE, resource) is None
