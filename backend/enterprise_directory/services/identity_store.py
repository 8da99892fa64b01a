"""SQLAlchemy-backed identity store: accounts, roles and role membership."""

from __future__ import annotations

import logging

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from enterprise_directory.core.database import Database
from enterprise_directory.core.security import hash_password, verify_password
from enterprise_directory.entities.identity import Role, User, user_roles

logger = logging.getLogger(__name__)


def _normalize(value: str) -> str:
    return value.strip().upper()


class IdentityStore:
    def __init__(self) -> None:
        self.session_factory: async_sessionmaker[AsyncSession] | None = None
        self.initialized: bool = False

    async def initialize(self, database: Database) -> None:
        if self.initialized:
            return
        if not database.session_factory:
            raise RuntimeError("Database not initialized")
        self.session_factory = database.session_factory
        self.initialized = True

    async def close(self) -> None:
        self.session_factory = None
        self.initialized = False

    def _session(self) -> AsyncSession:
        if not self.session_factory:
            raise RuntimeError("IdentityStore not initialized")
        return self.session_factory()

    # --- Roles ---

    async def role_exists(self, name: str) -> bool:
        async with self._session() as session:
            result = await session.execute(select(Role.id).where(Role.normalized_name == _normalize(name)))
            return result.scalar_one_or_none() is not None

    async def create_role(self, name: str) -> Role:
        role = Role(name=name, normalized_name=_normalize(name))
        async with self._session() as session:
            session.add(role)
            await session.commit()
        logger.info("Role %s created", name)
        return role

    async def _find_role(self, session: AsyncSession, name: str) -> Role | None:
        result = await session.execute(select(Role).where(Role.normalized_name == _normalize(name)))
        return result.scalar_one_or_none()

    # --- Users ---

    async def find_by_id(self, user_id: str) -> User | None:
        async with self._session() as session:
            return await session.get(User, user_id)

    async def find_by_email(self, email: str) -> User | None:
        async with self._session() as session:
            result = await session.execute(select(User).where(User.normalized_email == _normalize(email)))
            return result.scalar_one_or_none()

    async def list_users(self) -> list[User]:
        async with self._session() as session:
            result = await session.execute(select(User).order_by(User.email))
            return list(result.scalars().all())

    async def create_user(self, email: str, password: str, *, email_confirmed: bool = False) -> User:
        user = User(
            email=email,
            normalized_email=_normalize(email),
            password_hash=hash_password(password),
            email_confirmed=email_confirmed,
        )
        async with self._session() as session:
            session.add(user)
            await session.commit()
        return user

    async def check_password(self, email: str, password: str) -> User | None:
        user = await self.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    # --- Membership ---

    async def get_roles(self, user_id: str) -> list[str]:
        async with self._session() as session:
            result = await session.execute(
                select(Role.name)
                .join(user_roles, user_roles.c.role_id == Role.id)
                .where(user_roles.c.user_id == user_id)
                .order_by(Role.name)
            )
            return list(result.scalars().all())

    async def is_in_role(self, user_id: str, role_name: str) -> bool:
        async with self._session() as session:
            result = await session.execute(
                select(user_roles.c.user_id)
                .join(Role, user_roles.c.role_id == Role.id)
                .where(user_roles.c.user_id == user_id, Role.normalized_name == _normalize(role_name))
            )
            return result.first() is not None

    async def add_to_role(self, user_id: str, role_name: str) -> None:
        async with self._session() as session:
            role = await self._find_role(session, role_name)
            if role is None:
                raise LookupError(f"Role '{role_name}' does not exist")
            await session.execute(insert(user_roles).values(user_id=user_id, role_id=role.id))
            await session.commit()

    async def remove_from_role(self, user_id: str, role_name: str) -> None:
        async with self._session() as session:
            role = await self._find_role(session, role_name)
            if role is None:
                raise LookupError(f"Role '{role_name}' does not exist")
            await session.execute(
                delete(user_roles).where(user_roles.c.user_id == user_id, user_roles.c.role_id == role.id)
            )
            await session.commit()


identity_store = IdentityStore()
