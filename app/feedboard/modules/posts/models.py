from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.feedboard.models import Base, new_id


class Post(Base):
    __tablename__ = "posts"
    __table_args__ = (
        Index("idx_posts_board_votes", "board_id", "votes_counter"),
        CheckConstraint("votes_counter >= 0", name="ck_posts_votes_counter_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # No FK: posts may outlive their board (orphans are tolerated).
    board_id: Mapped[str] = mapped_column(String(64), nullable=False)
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True)  # None = anonymous author

    votes_counter: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "title": self.title,
            "description": self.description,
            "boardId": self.board_id,
            "userId": self.user_id,
            "votesCounter": self.votes_counter,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
