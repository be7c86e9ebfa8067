"""SQLAlchemy ORM models for support cases and to-do tasks."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from crm.infrastructure.database.base import Base


class SupportCaseModel(Base):
    """ORM model — maps to the 'support_cases' table."""

    __tablename__ = "support_cases"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="Open", index=True)
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="Medium")
    opened_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    closed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class TodoTaskModel(Base):
    """ORM model — maps to the 'todo_tasks' table."""

    __tablename__ = "todo_tasks"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # copy of users.id, capped with the identity keys by the schema registrar
    assigned_user_id: Mapped[str | None] = mapped_column(
        String(450), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True,
    )
