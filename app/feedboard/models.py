from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def new_id() -> str:
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    pass


class UserBoard(Base):
    """Boards a user is allowed to manage."""

    __tablename__ = "user_boards"
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    board_id: Mapped[str] = mapped_column(String(64), primary_key=True)


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True, unique=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    has_access: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)  # paid subscription
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)

    board_links: Mapped[list[UserBoard]] = relationship(
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def boards(self) -> set[str]:
        return {link.board_id for link in self.board_links}

    def grant_board(self, board_id: str) -> None:
        if board_id not in self.boards:
            self.board_links.append(UserBoard(board_id=board_id))


class AuditEvent(Base):
    """
    Append-only audit trail event.
    Kept generic; entity_id is a string so it can hold any post/board id.
    """

    __tablename__ = "audit_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)
    request_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    actor_user_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    action: Mapped[str] = mapped_column(String(128), nullable=False)  # e.g. "post.delete"
    entity_type: Mapped[str | None] = mapped_column(String(128), nullable=True)  # e.g. "Post"
    entity_id: Mapped[str | None] = mapped_column(String(128), nullable=True)

    metadata_json: Mapped[str | None] = mapped_column(Text, nullable=True)  # small JSON string


# Ensure module models are imported so Base.metadata includes their tables.
# (Kept at bottom to avoid circular imports.)
from app.feedboard.modules.boards.models import Board  # noqa: E402,F401
from app.feedboard.modules.posts.models import Post  # noqa: E402,F401
