from __future__ import annotations

from flask import Blueprint, redirect, render_template

from app.feedboard.db import db_session
from app.feedboard.errors import NotFound
from app.feedboard.modules.boards.service import load_board_page

bp = Blueprint("boards", __name__)


@bp.get("/b/<board_id>")
def board_public(board_id: str):
    s = db_session()
    try:
        page = load_board_page(s, board_id)
    except NotFound:
        return redirect("/")
    return render_template("boards/board.html", board=page.board, posts=page.posts)
