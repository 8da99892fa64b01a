from __future__ import annotations

import pytest

from enterprise_directory.models.auth import Roles
from enterprise_directory.services.identity_store import IdentityStore


@pytest.mark.anyio
async def test_role_lookup_is_case_insensitive(identity):
    await identity.create_role(Roles.ADMIN)

    assert await identity.role_exists("admin")
    assert await identity.role_exists("ADMIN")
    assert not await identity.role_exists(Roles.READ_ONLY)


@pytest.mark.anyio
async def test_create_user_hashes_password(identity):
    user = await identity.create_user("Someone@Example.com", "s3cret", email_confirmed=True)

    stored = await identity.find_by_email("someone@example.com")
    assert stored is not None
    assert stored.id == user.id
    assert stored.password_hash != "s3cret"
    assert stored.email_confirmed is True


@pytest.mark.anyio
async def test_check_password(identity):
    await identity.create_user("someone@example.com", "s3cret")

    assert await identity.check_password("someone@example.com", "s3cret") is not None
    assert await identity.check_password("someone@example.com", "wrong") is None
    assert await identity.check_password("nobody@example.com", "s3cret") is None


@pytest.mark.anyio
async def test_role_membership_add_and_remove(identity):
    await identity.create_role(Roles.ADMIN)
    await identity.create_role(Roles.READ_ONLY)
    user = await identity.create_user("someone@example.com", "pw")

    await identity.add_to_role(user.id, Roles.ADMIN)
    await identity.add_to_role(user.id, Roles.READ_ONLY)
    assert await identity.is_in_role(user.id, Roles.ADMIN)
    assert await identity.get_roles(user.id) == [Roles.ADMIN, Roles.READ_ONLY]

    await identity.remove_from_role(user.id, Roles.ADMIN)
    assert not await identity.is_in_role(user.id, Roles.ADMIN)
    assert await identity.get_roles(user.id) == [Roles.READ_ONLY]


@pytest.mark.anyio
async def test_add_to_missing_role_raises(identity):
    user = await identity.create_user("someone@example.com", "pw")

    with pytest.raises(LookupError):
        await identity.add_to_role(user.id, "Ghost")


@pytest.mark.anyio
async def test_find_by_id_missing_returns_none(identity):
    assert await identity.find_by_id("does-not-exist") is None


@pytest.mark.anyio
async def test_store_not_initialized_raises():
    with pytest.raises(RuntimeError, match="not initialized"):
        await IdentityStore().list_users()
