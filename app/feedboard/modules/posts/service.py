from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from app.feedboard.audit import record_event
from app.feedboard.authz import user_has_access, user_manages_board
from app.feedboard.constants import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH
from app.feedboard.content_filter import clean, has_content
from app.feedboard.errors import Forbidden, NotFound, Unauthorized, ValidationError

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.feedboard.auth import AuthSession
    from app.feedboard.modules.posts.models import Post

logger = logging.getLogger(__name__)


def create_post(
    s: "Session",
    *,
    title: str | None,
    description: str | None,
    board_id: str | None,
    auth_session: "AuthSession | None" = None,
) -> "Post":
    """
    Create a post on a board. Anyone may post, signed in or not.

    Title and description are run through the content filter first; a title
    with nothing left after filtering is rejected. The board id is taken
    as given.
    """
    from app.feedboard.modules.posts.models import Post

    for field, value in (("title", title), ("description", description)):
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"{field.capitalize()} must be text")
    if not board_id:
        raise ValidationError("boardId is required")

    clean_title = clean(title).strip()
    clean_description = clean(description).strip()
    if not has_content(clean_title):
        raise ValidationError("Title is required")
    if len(clean_title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
    if len(clean_description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters")

    now = datetime.utcnow()
    post = Post(
        title=clean_title,
        description=clean_description,
        board_id=board_id,
        user_id=auth_session.user_id if auth_session else None,
        votes_counter=0,
        created_at=now,
        updated_at=now,
    )
    s.add(post)
    s.flush()

    record_event(
        s,
        actor_user_id=post.user_id,
        action="post.create",
        entity_type="Post",
        entity_id=post.id,
        metadata={"board_id": board_id},
    )
    logger.info("Post created id=%s board_id=%s anonymous=%s", post.id, board_id, post.user_id is None)
    return post


def delete_post(s: "Session", post_id: str | None, auth_session: "AuthSession | None") -> None:
    """
    Delete a post. The caller must be signed in, have a subscription, and
    manage the post's board (any post on that board, not only their own).
    """
    from app.feedboard.models import User
    from app.feedboard.modules.posts.models import Post

    if not post_id:
        raise ValidationError("postId is required")
    if auth_session is None:
        raise Unauthorized("You must be signed in to delete a post")

    user = s.get(User, auth_session.user_id)
    if user is None:
        raise Unauthorized("You must be signed in to delete a post")

    if not user_has_access(user):
        logger.warning("Delete denied (no subscription) user_id=%s post_id=%s", user.id, post_id)
        raise Forbidden("You need to subscribe to delete a post")

    post = s.get(Post, post_id)
    if post is None:
        raise NotFound("Post not found")

    if not user_manages_board(user, post.board_id):
        logger.warning("Delete denied (board not managed) user_id=%s post_id=%s board_id=%s", user.id, post_id, post.board_id)
        raise Unauthorized("You don't have access to delete this post")

    s.delete(post)
    record_event(
        s,
        actor_user_id=user.id,
        action="post.delete",
        entity_type="Post",
        entity_id=post_id,
        metadata={"board_id": post.board_id, "title": post.title},
    )
    logger.info("Post deleted id=%s board_id=%s by user_id=%s", post_id, post.board_id, user.id)
