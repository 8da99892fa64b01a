"""Authorization context and token models."""

from __future__ import annotations

from pydantic import BaseModel


class Roles:
    ADMIN = "Admin"
    READ_ONLY = "ReadOnly"

    ALL = (ADMIN, READ_ONLY)


class AuthContext(BaseModel):
    """The caller of a request, with the role memberships resolved for that request."""

    id: str | None = None
    email: str | None = None
    roles: list[str] = []

    def has_role(self, role: str) -> bool:
        return role in self.roles


class TokenRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
