# tests/test_manage.py
from conference_api.auth import authenticate_user
from conference_api.manage import create_admin
from conference_api.models import Role


async def test_create_admin(session):
    assert await create_admin("Ada", "Ada@Example.org", "secret1") == 0

    user = await authenticate_user(session, "ada@example.org", "secret1")
    assert user.role == Role.ADMIN


async def test_create_admin_refuses_existing_email(admin):
    assert await create_admin("Imposter", admin.email, "secret1") == 1
