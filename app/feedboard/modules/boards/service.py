from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.feedboard.errors import NotFound

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.feedboard.modules.boards.models import Board
    from app.feedboard.modules.posts.models import Post


@dataclass(frozen=True)
class BoardPage:
    board: "Board"
    posts: list["Post"]


def load_board_page(s: "Session", board_id: str | None) -> BoardPage:
    """Load a board and its posts, most-voted first (oldest first on ties)."""
    from app.feedboard.modules.boards.models import Board
    from app.feedboard.modules.posts.models import Post

    board = s.get(Board, board_id) if board_id else None
    if board is None:
        raise NotFound("Board not found")

    posts = (
        s.query(Post)
        .filter(Post.board_id == board.id)
        .order_by(Post.votes_counter.desc(), Post.created_at.asc())
        .all()
    )
    return BoardPage(board=board, posts=posts)
