"""User and role administration on top of the identity store."""

from __future__ import annotations

import logging

from enterprise_directory.core.config import DefaultUsersSettings
from enterprise_directory.core.exceptions import UnauthorizedError
from enterprise_directory.models.auth import AuthContext, Roles
from enterprise_directory.models.user import UserModel
from enterprise_directory.services.identity_store import IdentityStore

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self) -> None:
        self.identity: IdentityStore | None = None
        self.default_users: DefaultUsersSettings = DefaultUsersSettings()
        self.initialized: bool = False

    async def initialize(self, identity: IdentityStore, default_users: DefaultUsersSettings) -> None:
        if self.initialized:
            return
        self.identity = identity
        self.default_users = default_users
        self.initialized = True

    async def close(self) -> None:
        self.identity = None
        self.initialized = False

    def _store(self) -> IdentityStore:
        if not self.identity:
            raise RuntimeError("UserService not initialized")
        return self.identity

    async def ensure_roles(self) -> None:
        store = self._store()
        for role in Roles.ALL:
            if not await store.role_exists(role):
                await store.create_role(role)

    async def create_example_users(self) -> None:
        slots = [
            ("admin", self.default_users.ADMIN_EMAIL, self.default_users.ADMIN_PASSWORD, Roles.ADMIN),
            (
                "read-only",
                self.default_users.READ_ONLY_EMAIL,
                self.default_users.READ_ONLY_PASSWORD,
                Roles.READ_ONLY,
            ),
        ]
        for label, email, password, role in slots:
            await self._create_example_user(label, email, password, role)

    async def _create_example_user(self, label: str, email: str, password: str, role: str) -> None:
        if not email.strip() or not password.strip():
            logger.warning("Default %s email or password is not configured; skipping %s user creation", label, label)
            return

        store = self._store()
        if await store.find_by_email(email) is not None:
            return

        user = await store.create_user(email, password, email_confirmed=True)
        await store.add_to_role(user.id, role)
        logger.info("Default %s user created with email %s", label, email)

    async def get_all_users(self) -> list[UserModel]:
        store = self._store()
        users = await store.list_users()
        # One membership query per account.
        return [
            UserModel(id=user.id, email=user.email, is_admin=await store.is_in_role(user.id, Roles.ADMIN))
            for user in users
        ]

    async def set_is_admin(self, user_id: str, is_admin: bool, auth: AuthContext) -> None:
        if not auth.has_role(Roles.ADMIN):
            raise UnauthorizedError("Only administrators can change admin state.")

        store = self._store()
        user = await store.find_by_id(user_id)
        if user is None:
            logger.warning("User %s not found; admin state unchanged", user_id)
            return

        currently_admin = await store.is_in_role(user.id, Roles.ADMIN)
        if is_admin and not currently_admin:
            await store.add_to_role(user.id, Roles.ADMIN)
            logger.info("User %s added to %s role", user.email, Roles.ADMIN)
        elif not is_admin and currently_admin:
            await store.remove_from_role(user.id, Roles.ADMIN)
            logger.info("User %s removed from %s role", user.email, Roles.ADMIN)


user_service = UserService()
