"""SQLAlchemy ORM models for the identity store: users, roles, claims, logins, tokens.

Column sizes here are the identity subsystem's generic defaults (450-char
keys, 256-char names). They exceed MySQL's utf8mb4 index limit and are
rewritten at startup by ``SchemaRegistrar`` before any DDL is emitted.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from crm.infrastructure.database.base import Base

IDENTITY_KEY_LENGTH = 450
IDENTITY_NAME_LENGTH = 256


def _generate_uuid() -> str:
    return str(uuid.uuid4())


class UserModel(Base):
    """Identity principal — maps to the 'users' table."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(IDENTITY_KEY_LENGTH), primary_key=True, default=_generate_uuid)
    user_name: Mapped[str | None] = mapped_column(String(IDENTITY_NAME_LENGTH), nullable=True)
    normalized_user_name: Mapped[str | None] = mapped_column(String(IDENTITY_NAME_LENGTH), nullable=True)
    email: Mapped[str | None] = mapped_column(String(IDENTITY_NAME_LENGTH), nullable=True)
    normalized_email: Mapped[str | None] = mapped_column(String(IDENTITY_NAME_LENGTH), nullable=True)
    email_confirmed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    password_hash: Mapped[str | None] = mapped_column(Text, nullable=True)
    security_stamp: Mapped[str | None] = mapped_column(Text, nullable=True)
    concurrency_stamp: Mapped[str | None] = mapped_column(Text, nullable=True, default=_generate_uuid)
    phone_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone_number_confirmed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    two_factor_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    lockout_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    lockout_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    access_failed_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("ix_users_normalized_user_name", "normalized_user_name", unique=True),
        Index("ix_users_normalized_email", "normalized_email"),
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, user_name='{self.user_name}')>"


class RoleModel(Base):
    """Identity role — maps to the 'roles' table."""

    __tablename__ = "roles"

    id: Mapped[str] = mapped_column(String(IDENTITY_KEY_LENGTH), primary_key=True, default=_generate_uuid)
    name: Mapped[str | None] = mapped_column(String(IDENTITY_NAME_LENGTH), nullable=True)
    normalized_name: Mapped[str | None] = mapped_column(String(IDENTITY_NAME_LENGTH), nullable=True)
    concurrency_stamp: Mapped[str | None] = mapped_column(Text, nullable=True, default=_generate_uuid)

    __table_args__ = (
        Index("ix_roles_normalized_name", "normalized_name", unique=True),
    )


class UserRoleModel(Base):
    """User ↔ role association (composite key)."""

    __tablename__ = "user_roles"

    user_id: Mapped[str] = mapped_column(
        String(IDENTITY_KEY_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    )
    role_id: Mapped[str] = mapped_column(
        String(IDENTITY_KEY_LENGTH), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True,
    )

    __table_args__ = (
        Index("ix_user_roles_role_id", "role_id"),
    )


class UserClaimModel(Base):
    """A claim held by a user."""

    __tablename__ = "user_claims"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(IDENTITY_KEY_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    claim_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    claim_value: Mapped[str | None] = mapped_column(Text, nullable=True)


class RoleClaimModel(Base):
    """A claim granted to every member of a role."""

    __tablename__ = "role_claims"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    role_id: Mapped[str] = mapped_column(
        String(IDENTITY_KEY_LENGTH), ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    claim_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    claim_value: Mapped[str | None] = mapped_column(Text, nullable=True)


class UserLoginModel(Base):
    """External login linked to a user (composite key: provider + provider key)."""

    __tablename__ = "user_logins"

    login_provider: Mapped[str] = mapped_column(String(IDENTITY_KEY_LENGTH), primary_key=True)
    provider_key: Mapped[str] = mapped_column(String(IDENTITY_KEY_LENGTH), primary_key=True)
    provider_display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[str] = mapped_column(
        String(IDENTITY_KEY_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )


class UserTokenModel(Base):
    """Authentication token stored for a user (composite key: user + provider + name)."""

    __tablename__ = "user_tokens"

    user_id: Mapped[str] = mapped_column(
        String(IDENTITY_KEY_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    )
    login_provider: Mapped[str] = mapped_column(String(IDENTITY_KEY_LENGTH), primary_key=True)
    name: Mapped[str] = mapped_column(String(IDENTITY_KEY_LENGTH), primary_key=True)
    # not indexed, left unbounded
    value: Mapped[str | None] = mapped_column(Text, nullable=True)
