from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select, update

from app.feedboard.audit import record_event
from app.feedboard.errors import NotFound, ValidationError

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.feedboard.auth import AuthSession

logger = logging.getLogger(__name__)


def _current_votes(s: "Session", post_id: str) -> int | None:
    from app.feedboard.modules.posts.models import Post

    return s.execute(select(Post.votes_counter).where(Post.id == post_id)).scalar_one_or_none()


def cast_vote(s: "Session", post_id: str | None, auth_session: "AuthSession | None" = None) -> int:
    """
    Add one vote to a post and return the new count.

    The increment runs as a single UPDATE so concurrent votes are not lost.
    """
    from app.feedboard.modules.posts.models import Post

    if not post_id:
        raise ValidationError("postId is required")

    result = s.execute(
        update(Post)
        .where(Post.id == post_id)
        .values(votes_counter=Post.votes_counter + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise NotFound("Post not found")

    record_event(
        s,
        actor_user_id=auth_session.user_id if auth_session else None,
        action="vote.cast",
        entity_type="Post",
        entity_id=post_id,
    )
    votes = _current_votes(s, post_id) or 0
    logger.info("Vote cast post_id=%s votes=%s", post_id, votes)
    return votes


def retract_vote(s: "Session", post_id: str | None, auth_session: "AuthSession | None" = None) -> int:
    """
    Remove one vote from a post and return the new count. Never goes below zero.
    """
    from app.feedboard.modules.posts.models import Post

    if not post_id:
        raise ValidationError("postId is required")

    result = s.execute(
        update(Post)
        .where(Post.id == post_id, Post.votes_counter > 0)
        .values(votes_counter=Post.votes_counter - 1)
        .execution_options(synchronize_session=False)
    )
    votes = _current_votes(s, post_id)
    if votes is None:
        raise NotFound("Post not found")

    if result.rowcount:
        record_event(
            s,
            actor_user_id=auth_session.user_id if auth_session else None,
            action="vote.retract",
            entity_type="Post",
            entity_id=post_id,
        )
    logger.info("Vote retracted post_id=%s votes=%s", post_id, votes)
    return votes
